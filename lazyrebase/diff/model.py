"""Immutable-ish diff domain model produced by the diff engine.

A ``CommitDiff`` owns ``FileStatus`` records, each owning ``Delta`` hunks,
each owning ``DiffLine`` rows. Objects are built once by the engine and only
read afterwards by the show-commit screen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path


class Status(Enum):
    """File change classification."""

    ADDED = "added"
    COPIED = "copied"
    DELETED = "deleted"
    MODIFIED = "modified"
    RENAMED = "renamed"
    TYPECHANGE = "typechange"
    OTHER = "other"


class FileMode(Enum):
    """Git tree entry mode."""

    NORMAL = "100644"
    EXECUTABLE = "100755"
    LINK = "120000"
    OTHER = "other"

    @classmethod
    def from_octal(cls, mode: str) -> FileMode:
        for member in cls:
            if member.value == mode:
                return member
        return cls.OTHER


class Origin(Enum):
    """Which side of the diff a line belongs to."""

    ADDITION = "+"
    CONTEXT = " "
    DELETION = "-"
    HEADER = "@"
    BINARY = "B"


@dataclass(frozen=True)
class User:
    name: str | None = None
    email: str | None = None

    def is_none(self) -> bool:
        return self.name is None and self.email is None

    def __str__(self) -> str:
        if self.name and self.email:
            return f"{self.name} <{self.email}>"
        if self.name:
            return self.name
        if self.email:
            return f"<{self.email}>"
        return ""


_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


@dataclass(frozen=True)
class Commit:
    """Commit metadata shown in the overview."""

    hash: str
    author: User = field(default_factory=User)
    committer: User | None = None
    authored_date: datetime | None = None
    committed_date: datetime = _EPOCH
    summary: str | None = None
    message: str | None = None

    @classmethod
    def new_with_hash(cls, hash: str) -> Commit:
        return cls(hash=hash)


@dataclass(frozen=True)
class DiffLine:
    """One line of a delta.

    ``end_of_file`` marks the synthetic "no newline at end of file" row.
    """

    origin: Origin
    content: str
    old_line_number: int | None = None
    new_line_number: int | None = None
    end_of_file: bool = False


@dataclass
class Delta:
    """A contiguous hunk of changed lines within one file."""

    context: str
    old_lines_start: int
    new_lines_start: int
    old_number_lines: int
    new_number_lines: int
    lines: list[DiffLine] = field(default_factory=list)

    def add_line(self, line: DiffLine) -> None:
        self.lines.append(line)


@dataclass
class FileStatus:
    """Per-file record of a commit's diff.

    ``last_old_line_number``/``last_new_line_number`` are running maxima of
    ``start + count`` over every delta added so far; they size the line-number
    gutter and are updated in ``add_delta`` only.
    """

    source_path: Path
    destination_path: Path
    status: Status
    source_mode: FileMode = FileMode.NORMAL
    destination_mode: FileMode = FileMode.NORMAL
    source_is_binary: bool = False
    destination_is_binary: bool = False
    deltas: list[Delta] = field(default_factory=list)
    last_old_line_number: int = 0
    last_new_line_number: int = 0

    def add_delta(self, delta: Delta) -> None:
        last_old_line_number = delta.old_lines_start + delta.old_number_lines
        if self.last_old_line_number < last_old_line_number:
            self.last_old_line_number = last_old_line_number
        last_new_line_number = delta.new_lines_start + delta.new_number_lines
        if self.last_new_line_number < last_new_line_number:
            self.last_new_line_number = last_new_line_number
        self.deltas.append(delta)


@dataclass
class CommitDiff:
    """Everything the show-commit screen needs for one commit."""

    commit: Commit
    parent: Commit | None = None
    file_statuses: list[FileStatus] = field(default_factory=list)
    number_files_changed: int = 0
    number_insertions: int = 0
    number_deletions: int = 0

    @classmethod
    def empty(cls, hash: str = "") -> CommitDiff:
        return cls(commit=Commit.new_with_hash(hash))


__all__ = [
    "Commit",
    "CommitDiff",
    "Delta",
    "DiffLine",
    "FileMode",
    "FileStatus",
    "Origin",
    "Status",
    "User",
]
