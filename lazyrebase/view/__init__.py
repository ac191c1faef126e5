"""View description types shared by modules and the renderer."""

from .render_context import RenderContext
from .scroll import ScrollPosition
from .view_data import DisplayColor, LineSegment, ViewData, ViewLine

__all__ = [
    "DisplayColor",
    "LineSegment",
    "RenderContext",
    "ScrollPosition",
    "ViewData",
    "ViewLine",
]
