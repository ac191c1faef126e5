"""Backend-neutral description of one screen: colored segments in lines.

Modules fill a ``ViewData``; the renderer turns it into ANSI output. Only
the body ``lines`` scroll; leading and trailing lines stay pinned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .scroll import ScrollPosition


class DisplayColor(Enum):
    NORMAL = "normal"
    INDICATOR = "indicator"
    ACTION_PICK = "action_pick"
    ACTION_REWORD = "action_reword"
    ACTION_EDIT = "action_edit"
    ACTION_SQUASH = "action_squash"
    ACTION_FIXUP = "action_fixup"
    ACTION_DROP = "action_drop"
    ACTION_EXEC = "action_exec"
    ACTION_BREAK = "action_break"
    ACTION_LABEL = "action_label"
    ACTION_RESET = "action_reset"
    ACTION_MERGE = "action_merge"
    ACTION_UPDATE_REF = "action_update_ref"
    DIFF_ADD = "diff_add"
    DIFF_REMOVE = "diff_remove"
    DIFF_CHANGE = "diff_change"
    DIFF_CONTEXT = "diff_context"
    DIFF_WHITESPACE = "diff_whitespace"
    SYNTAX_KEYWORD = "syntax_keyword"
    SYNTAX_STRING = "syntax_string"
    SYNTAX_COMMENT = "syntax_comment"
    SYNTAX_NUMBER = "syntax_number"
    SYNTAX_NAME = "syntax_name"
    SYNTAX_OPERATOR = "syntax_operator"


@dataclass(frozen=True)
class LineSegment:
    text: str
    color: DisplayColor = DisplayColor.NORMAL
    dim: bool = False
    underline: bool = False
    reverse: bool = False


@dataclass
class ViewLine:
    """One row. The first ``pinned`` segments ignore horizontal scroll."""

    segments: list[LineSegment] = field(default_factory=list)
    selected: bool = False
    pinned: int = 0
    padding: LineSegment | None = None

    @classmethod
    def of(cls, *items: str | LineSegment, selected: bool = False, pinned: int = 0) -> ViewLine:
        segments = [item if isinstance(item, LineSegment) else LineSegment(item) for item in items]
        return cls(segments=segments, selected=selected, pinned=pinned)

    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)

    def width(self) -> int:
        return sum(len(segment.text) for segment in self.segments)


@dataclass
class ViewData:
    """Screen content plus scroll state that persists across rebuilds."""

    title: str | None = None
    show_title: bool = True
    leading_lines: list[ViewLine] = field(default_factory=list)
    lines: list[ViewLine] = field(default_factory=list)
    trailing_lines: list[ViewLine] = field(default_factory=list)
    scroll: ScrollPosition = field(default_factory=ScrollPosition)
    visible_line: int | None = None

    def clear(self) -> None:
        """Drop the content; scroll position is kept."""
        self.leading_lines = []
        self.lines = []
        self.trailing_lines = []
        self.visible_line = None

    def reset(self) -> None:
        self.clear()
        self.scroll = ScrollPosition()

    def push_leading_line(self, line: ViewLine | str) -> None:
        self.leading_lines.append(_as_line(line))

    def push_line(self, line: ViewLine | str) -> None:
        self.lines.append(_as_line(line))

    def push_trailing_line(self, line: ViewLine | str) -> None:
        self.trailing_lines.append(_as_line(line))

    def ensure_line_visible(self, index: int) -> None:
        self.visible_line = index

    def max_line_width(self) -> int:
        return max((line.width() for line in self.lines), default=0)

    def body_height(self, screen_height: int) -> int:
        title_rows = 1 if self.show_title else 0
        return max(0, screen_height - title_rows - len(self.leading_lines) - len(self.trailing_lines))

    def to_text(self) -> list[str]:
        """Plain text of every line, mostly for tests and logging."""
        rows = [line.text() for line in self.leading_lines]
        rows.extend(line.text() for line in self.lines)
        rows.extend(line.text() for line in self.trailing_lines)
        return rows


def _as_line(line: ViewLine | str) -> ViewLine:
    if isinstance(line, ViewLine):
        return line
    return ViewLine.of(line)


__all__ = ["DisplayColor", "LineSegment", "ViewData", "ViewLine"]
