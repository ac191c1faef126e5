"""Turn ``ViewData`` into one ANSI frame.

Layout top to bottom: title row, leading lines, the scrolling body, trailing
lines. Every row is clipped and padded to the terminal width so a frame
fully overwrites the previous one.
"""

from __future__ import annotations

import unicodedata

from ..view.highlight import sanitize_terminal_text
from ..view.render_context import RenderContext
from ..view.view_data import LineSegment, ViewData, ViewLine
from .theme import UITheme

TITLE_HELP_HINT = "Help: ?"


def char_display_width(ch: str) -> int:
    """Terminal columns for ``ch``: 0 for combining marks, 2 for wide glyphs."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def _clean(text: str) -> str:
    return sanitize_terminal_text(text.replace("\t", " "))


def slice_segments(
    segments: list[LineSegment], start_col: int, max_cols: int
) -> tuple[list[tuple[LineSegment, str]], int]:
    """Cut ``[start_col, start_col + max_cols)`` out of ``segments``.

    Returns the visible pieces and the number of columns they occupy. A wide
    character straddling either edge is dropped.
    """
    pieces: list[tuple[LineSegment, str]] = []
    col = 0
    used = 0
    end_col = start_col + max_cols
    for segment in segments:
        visible: list[str] = []
        for ch in _clean(segment.text):
            width = char_display_width(ch)
            if col >= start_col and col + width <= end_col:
                visible.append(ch)
                used += width
            col += width
            if col >= end_col:
                break
        if visible:
            pieces.append((segment, "".join(visible)))
        if col >= end_col:
            break
    return pieces, used


def _segment_style(segment: LineSegment, theme: UITheme) -> str:
    style = theme.color(segment.color)
    if segment.dim:
        style += theme.dim
    if segment.underline:
        style += theme.underline
    if segment.reverse:
        style += theme.reverse
    return style


def render_line(line: ViewLine, width: int, left: int, theme: UITheme) -> str:
    """One row: pinned segments, then the horizontally scrolled rest, then padding."""
    base = theme.selected if line.selected else ""
    pinned, pinned_cols = slice_segments(line.segments[: line.pinned], 0, width)
    rest, rest_cols = slice_segments(line.segments[line.pinned:], left, max(0, width - pinned_cols))

    out: list[str] = []
    for segment, text in [*pinned, *rest]:
        style = base + _segment_style(segment, theme)
        out.append(f"{style}{text}{theme.reset}" if style else text)

    remaining = width - pinned_cols - rest_cols
    if remaining > 0:
        if line.padding is not None and line.padding.text:
            fill = (line.padding.text * remaining)[:remaining]
            style = base + _segment_style(line.padding, theme)
        else:
            fill = " " * remaining
            style = base
        out.append(f"{style}{fill}{theme.reset}" if style else fill)
    return "".join(out)


def _title_row(title: str, width: int, theme: UITheme) -> str:
    if width > len(title) + len(TITLE_HELP_HINT) + 1:
        text = title + " " * (width - len(title) - len(TITLE_HELP_HINT)) + TITLE_HELP_HINT
    else:
        text = title[:width].ljust(width)
    return f"{theme.title}{theme.reverse}{text}{theme.reset}" if theme.reset else text


def render_rows(view_data: ViewData, context: RenderContext, theme: UITheme) -> list[str]:
    """Rows of the frame; clamps the view's scroll position as a side effect."""
    width = max(1, context.width)
    rows: list[str] = []
    if view_data.show_title and view_data.title:
        rows.append(_title_row(view_data.title, width, theme))
    rows.extend(render_line(line, width, 0, theme) for line in view_data.leading_lines)

    body_height = view_data.body_height(context.height)
    scroll = view_data.scroll
    if view_data.visible_line is not None:
        scroll.ensure_visible(view_data.visible_line, body_height)
    scroll.clamp(len(view_data.lines), body_height, view_data.max_line_width(), width)
    visible = view_data.lines[scroll.top: scroll.top + body_height]
    rows.extend(render_line(line, width, scroll.left, theme) for line in visible)
    rows.extend(" " * width for _ in range(body_height - len(visible)))

    rows.extend(render_line(line, width, 0, theme) for line in view_data.trailing_lines)
    return rows[: max(0, context.height)]


def render_frame(view_data: ViewData, context: RenderContext, theme: UITheme) -> str:
    return "\033[H" + "\r\n".join(render_rows(view_data, context, theme)) + "\033[J"


__all__ = [
    "char_display_width",
    "display_width",
    "render_frame",
    "render_line",
    "render_rows",
    "slice_segments",
]
