"""Search over todo line hashes and descriptions."""

from __future__ import annotations

from ...search import SearchResult
from ...todo_file.shared import SharedTodoFile


class TodoSearch:
    """``Searchable`` for the list screen.

    ``search`` runs on the driver's side; the list screen reads
    ``take_jump`` when it next renders to move the cursor onto the match.
    """

    def __init__(self, todo_file: SharedTodoFile) -> None:
        self._todo_file = todo_file
        self.term: str | None = None
        self.matches: list[int] = []
        self.current: int | None = None
        self._jump: int | None = None

    def reset(self) -> None:
        self.term = None
        self.matches = []
        self.current = None
        self._jump = None

    def search(self, term: str) -> SearchResult:
        if not term:
            self.reset()
            return SearchResult.NONE
        needle = term.casefold()
        with self._todo_file.lock() as todo_file:
            cursor = todo_file.selected_index
            self.matches = [
                index
                for index, line in enumerate(todo_file.lines)
                if needle in line.hash.casefold() or needle in line.content.casefold()
            ]
        self.term = term
        if not self.matches:
            self.current = None
            return SearchResult.NONE
        following = [position for position, index in enumerate(self.matches) if index >= cursor]
        self.current = following[0] if following else 0
        self._jump = self.matches[self.current]
        return SearchResult.COMPLETE

    def is_match(self, index: int) -> bool:
        return index in self.matches

    def next(self) -> int | None:
        if not self.matches:
            return None
        self.current = 0 if self.current is None else (self.current + 1) % len(self.matches)
        return self.matches[self.current]

    def previous(self) -> int | None:
        if not self.matches:
            return None
        self.current = len(self.matches) - 1 if self.current is None else (self.current - 1) % len(self.matches)
        return self.matches[self.current]

    def take_jump(self) -> int | None:
        jump, self._jump = self._jump, None
        return jump


__all__ = ["TodoSearch"]
