"""In-memory rebase todo list with selection, edits and undo history."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from pathlib import Path

from ..errors import FileReadError, FileWriteError, ParseError
from .line import Action, Line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _HistoryEntry:
    lines: tuple[Line, ...]
    selected: int
    visual_anchor: int | None


class TodoFile:
    """Ordered todo lines plus cursor, visual range and bounded history.

    Every mutating operation records the previous lines so ``undo``/``redo``
    can restore them; history is capped at ``undo_limit`` entries.
    """

    def __init__(self, path: Path, comment_char: str = "#", undo_limit: int = 5000) -> None:
        self.path = path
        self.comment_char = comment_char
        self._lines: list[Line] = []
        self._selected = 0
        self._visual_anchor: int | None = None
        self._undo: deque[_HistoryEntry] = deque(maxlen=max(1, undo_limit))
        self._redo: list[_HistoryEntry] = []

    # --- file I/O -------------------------------------------------------

    def parse_lines(self, text: str) -> list[Line]:
        lines: list[Line] = []
        for number, raw_line in enumerate(text.splitlines(), start=1):
            stripped = raw_line.strip()
            if not stripped or stripped.startswith(self.comment_char):
                continue
            try:
                lines.append(Line.parse(stripped))
            except ParseError as exc:
                raise FileReadError(f"Error reading file: {self.path} (line {number})") from exc
        return lines

    def load_file(self) -> None:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise FileReadError(f"Error reading file: {self.path}") from exc
        self.set_lines(self.parse_lines(text))

    def write_file(self) -> None:
        body = "".join(f"{line.to_text()}\n" for line in self._lines)
        try:
            self.path.write_text(body, encoding="utf-8")
        except OSError as exc:
            logger.exception("failed writing %s", self.path)
            raise FileWriteError(f"Error writing file: {self.path}") from exc

    # --- queries --------------------------------------------------------

    @property
    def lines(self) -> tuple[Line, ...]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def is_noop(self) -> bool:
        return bool(self._lines) and all(line.action is Action.NOOP for line in self._lines)

    def get_line(self, index: int) -> Line | None:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    @property
    def selected_index(self) -> int:
        return self._selected

    def get_selected_line(self) -> Line | None:
        return self.get_line(self._selected)

    @property
    def visual_anchor(self) -> int | None:
        return self._visual_anchor

    def selected_range(self) -> tuple[int, int]:
        """Inclusive ``(start, end)`` of the cursor or visual range."""
        if self._visual_anchor is None:
            return self._selected, self._selected
        return min(self._visual_anchor, self._selected), max(self._visual_anchor, self._selected)

    # --- cursor ---------------------------------------------------------

    def set_selected(self, index: int) -> int:
        if not self._lines:
            self._selected = 0
        else:
            self._selected = max(0, min(index, len(self._lines) - 1))
        return self._selected

    def move_cursor(self, delta: int) -> int:
        return self.set_selected(self._selected + delta)

    def start_visual_mode(self) -> None:
        self._visual_anchor = self._selected

    def end_visual_mode(self) -> None:
        self._visual_anchor = None

    # --- mutations ------------------------------------------------------

    def _record(self) -> None:
        self._undo.append(_HistoryEntry(tuple(self._lines), self._selected, self._visual_anchor))
        self._redo.clear()

    def set_lines(self, lines: list[Line]) -> None:
        """Replace everything and forget history."""
        self._lines = list(lines)
        self._selected = 0
        self._visual_anchor = None
        self._undo.clear()
        self._redo.clear()

    def update_range(self, action: Action) -> bool:
        start, end = self.selected_range()
        updated = [line.with_action(action) for line in self._lines[start:end + 1]]
        if updated == self._lines[start:end + 1]:
            return False
        self._record()
        self._lines[start:end + 1] = updated
        return True

    def replace_line(self, index: int, line: Line) -> None:
        self._record()
        self._lines[index] = line

    def add_line(self, index: int, line: Line) -> None:
        """Insert ``line`` at ``index`` and select it."""
        self._record()
        index = max(0, min(index, len(self._lines)))
        self._lines.insert(index, line)
        self._selected = index

    def remove_range(self) -> bool:
        if not self._lines:
            return False
        start, end = self.selected_range()
        self._record()
        del self._lines[start:end + 1]
        self._visual_anchor = None
        self.set_selected(start)
        return True

    def swap_range_up(self) -> bool:
        start, end = self.selected_range()
        if start == 0 or not self._lines:
            return False
        self._record()
        moved = self._lines.pop(start - 1)
        self._lines.insert(end, moved)
        self._shift_selection(-1)
        return True

    def swap_range_down(self) -> bool:
        start, end = self.selected_range()
        if end >= len(self._lines) - 1:
            return False
        self._record()
        moved = self._lines.pop(end + 1)
        self._lines.insert(start, moved)
        self._shift_selection(1)
        return True

    def _shift_selection(self, delta: int) -> None:
        self._selected += delta
        if self._visual_anchor is not None:
            self._visual_anchor += delta

    def toggle_break(self) -> None:
        """Add a ``break`` after the cursor, or remove the one already there."""
        if not self._lines:
            return
        next_index = self._selected + 1
        following = self.get_line(next_index)
        self._record()
        if following is not None and following.action is Action.BREAK:
            del self._lines[next_index]
        else:
            self._lines.insert(next_index, Line(action=Action.BREAK))

    # --- history --------------------------------------------------------

    def undo(self) -> bool:
        if not self._undo:
            return False
        entry = self._undo.pop()
        self._redo.append(_HistoryEntry(tuple(self._lines), self._selected, self._visual_anchor))
        self._restore(entry)
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        entry = self._redo.pop()
        self._undo.append(_HistoryEntry(tuple(self._lines), self._selected, self._visual_anchor))
        self._restore(entry)
        return True

    def _restore(self, entry: _HistoryEntry) -> None:
        self._lines = list(entry.lines)
        self._visual_anchor = entry.visual_anchor
        self.set_selected(entry.selected)


__all__ = ["TodoFile"]
