"""Terminal dimensions handed to ``build_view_data``."""

from __future__ import annotations

from dataclasses import dataclass

MINIMUM_WINDOW_WIDTH = 20
MINIMUM_WINDOW_HEIGHT = 5
FULL_WIDTH_THRESHOLD = 50


@dataclass(frozen=True)
class RenderContext:
    width: int = 80
    height: int = 24

    def is_window_too_small(self) -> bool:
        return self.width < MINIMUM_WINDOW_WIDTH or self.height < MINIMUM_WINDOW_HEIGHT

    def is_full_width(self) -> bool:
        """Wide enough for the long-form labels; narrow terminals get compact ones."""
        return self.width >= FULL_WIDTH_THRESHOLD

    def resized(self, width: int, height: int) -> RenderContext:
        return RenderContext(width=width, height=height)


__all__ = [
    "FULL_WIDTH_THRESHOLD",
    "MINIMUM_WINDOW_HEIGHT",
    "MINIMUM_WINDOW_WIDTH",
    "RenderContext",
]
