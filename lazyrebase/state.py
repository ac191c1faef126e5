"""Screen identities used as registry keys and transition targets."""

from __future__ import annotations

from enum import Enum


class State(Enum):
    """One value per screen/mode module."""

    CONFIRM_ABORT = "ConfirmAbort"
    CONFIRM_REBASE = "ConfirmRebase"
    ERROR = "Error"
    EXTERNAL_EDITOR = "ExternalEditor"
    INSERT = "Insert"
    LIST = "List"
    SHOW_COMMIT = "ShowCommit"
    WINDOW_SIZE_ERROR = "WindowSizeError"

    def __repr__(self) -> str:
        return self.value
