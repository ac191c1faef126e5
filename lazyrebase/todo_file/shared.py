"""Lock-guarded handle to the single ``TodoFile`` instance."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from .todo_file import TodoFile


class SharedTodoFile:
    """Lends the todo file out one borrower at a time::

        with shared.lock() as todo_file:
            todo_file.move_cursor(1)
    """

    def __init__(self, todo_file: TodoFile) -> None:
        self._todo_file = todo_file
        self._lock = threading.Lock()

    @contextmanager
    def lock(self) -> Iterator[TodoFile]:
        with self._lock:
            yield self._todo_file


__all__ = ["SharedTodoFile"]
