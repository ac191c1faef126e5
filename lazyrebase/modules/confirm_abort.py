"""Abort confirmation; a confirmed abort empties the todo list."""

from __future__ import annotations

from ..process.exit_status import ExitStatus
from .confirm_rebase import ConfirmRebase


class ConfirmAbort(ConfirmRebase):
    prompt = "Are you sure you want to abort"
    exit_status = ExitStatus.ABORT

    def on_confirmed(self) -> None:
        with self.todo_file.lock() as todo_file:
            todo_file.set_lines([])


__all__ = ["ConfirmAbort"]
