"""Process exit statuses."""

from __future__ import annotations

from enum import Enum


class ExitStatus(Enum):
    NONE = "None"
    GOOD = "Good"
    CONFIG_ERROR = "ConfigError"
    FILE_READ_ERROR = "FileReadError"
    FILE_WRITE_ERROR = "FileWriteError"
    STATE_ERROR = "StateError"
    ABORT = "Abort"
    KILL = "Kill"

    def to_code(self) -> int:
        """Return the numeric process exit code."""
        return _EXIT_CODES[self]

    def __repr__(self) -> str:
        return self.value


_EXIT_CODES = {
    ExitStatus.NONE: 0,
    ExitStatus.GOOD: 0,
    ExitStatus.CONFIG_ERROR: 1,
    ExitStatus.FILE_READ_ERROR: 2,
    ExitStatus.FILE_WRITE_ERROR: 3,
    ExitStatus.STATE_ERROR: 4,
    ExitStatus.ABORT: 5,
    ExitStatus.KILL: 6,
}
