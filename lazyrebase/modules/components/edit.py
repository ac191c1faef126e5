"""Single-line text input."""

from __future__ import annotations

from enum import Enum

from ...input.events import Event, KeyEvent
from ...view.view_data import DisplayColor, LineSegment, ViewLine


class EditStatus(Enum):
    EDITING = "Editing"
    FINISHED = "Finished"
    CANCELLED = "Cancelled"


class Edit:
    """Cursor-aware line editor driven by raw ``KeyEvent`` tokens."""

    def __init__(self, content: str = "", label: str = "") -> None:
        self.label = label
        self.content = content
        self.cursor = len(content)

    def set_content(self, content: str) -> None:
        self.content = content
        self.cursor = len(content)

    def clear(self) -> None:
        self.set_content("")

    def handle_event(self, event: Event) -> EditStatus:
        if not isinstance(event, KeyEvent):
            return EditStatus.EDITING
        key = event.key
        if key == "ENTER":
            return EditStatus.FINISHED
        if key == "ESC":
            return EditStatus.CANCELLED
        if key == "BACKSPACE":
            if self.cursor > 0:
                self.content = self.content[: self.cursor - 1] + self.content[self.cursor:]
                self.cursor -= 1
        elif key == "DELETE":
            self.content = self.content[: self.cursor] + self.content[self.cursor + 1:]
        elif key == "LEFT":
            self.cursor = max(0, self.cursor - 1)
        elif key == "RIGHT":
            self.cursor = min(len(self.content), self.cursor + 1)
        elif key == "HOME":
            self.cursor = 0
        elif key == "END":
            self.cursor = len(self.content)
        elif len(key) == 1 and key.isprintable():
            self.content = self.content[: self.cursor] + key + self.content[self.cursor:]
            self.cursor += 1
        return EditStatus.EDITING

    def view_line(self) -> ViewLine:
        """Label, content and a reverse-video cursor cell."""
        before = self.content[: self.cursor]
        at = self.content[self.cursor: self.cursor + 1] or " "
        after = self.content[self.cursor + 1:]
        segments = []
        if self.label:
            segments.append(LineSegment(self.label, DisplayColor.INDICATOR))
        segments += [LineSegment(before), LineSegment(at, reverse=True), LineSegment(after)]
        return ViewLine(segments=segments)


__all__ = ["Edit", "EditStatus"]
