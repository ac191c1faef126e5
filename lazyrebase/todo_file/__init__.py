"""Rebase todo file model."""

from .line import Action, Line
from .shared import SharedTodoFile
from .todo_file import TodoFile

__all__ = ["Action", "Line", "SharedTodoFile", "TodoFile"]
