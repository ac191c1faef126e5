"""Shared collaborators handed to every module constructor."""

from __future__ import annotations

from dataclasses import dataclass

from .config import Config
from .diff.state import DiffState
from .todo_file.shared import SharedTodoFile


@dataclass(frozen=True)
class AppData:
    config: Config
    todo_file: SharedTodoFile
    diff_state: DiffState


__all__ = ["AppData"]
