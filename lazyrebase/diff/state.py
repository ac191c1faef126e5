"""Shared single-slot diff cache and its progressive load status.

The UI thread and the diff worker only meet here. Every read or write takes
``DiffState``'s lock for the duration of a snapshot copy; no diff computation
ever happens while the lock is held.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .model import CommitDiff


class DiffErrorCode(Enum):
    NOT_FOUND = "not_found"
    GENERIC = "generic"


@dataclass(frozen=True)
class New:
    pass


@dataclass(frozen=True)
class QuickDiff:
    """Cheap line-count pass in progress."""

    done: int
    total: int


@dataclass(frozen=True)
class CompleteQuickDiff:
    pass


@dataclass(frozen=True)
class Diff:
    """Rename/copy detection and full delta computation in progress."""

    done: int
    total: int


@dataclass(frozen=True)
class DiffComplete:
    pass


@dataclass(frozen=True)
class LoadError:
    message: str
    code: DiffErrorCode = DiffErrorCode.GENERIC


LoadStatus = Union[New, QuickDiff, CompleteQuickDiff, Diff, DiffComplete, LoadError]

TERMINAL_STATUSES = (DiffComplete, LoadError)


@dataclass(frozen=True)
class DiffSnapshot:
    """Consistent copy of the cache slot taken under the lock."""

    hash: str | None
    status: LoadStatus
    diff: CommitDiff


class DiffState:
    """Lock-guarded cache slot holding the diff for exactly one commit hash."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hash: str | None = None
        self._status: LoadStatus = New()
        self._diff = CommitDiff.empty()

    def snapshot(self) -> DiffSnapshot:
        with self._lock:
            return DiffSnapshot(hash=self._hash, status=self._status, diff=self._diff)

    def is_current(self, hash: str) -> bool:
        with self._lock:
            return self._hash == hash

    def reset(self, hash: str) -> None:
        """Replace the slot wholesale with an empty, ``New`` entry for ``hash``."""
        with self._lock:
            self._hash = hash
            self._status = New()
            self._diff = CommitDiff.empty(hash)

    def publish(self, hash: str, status: LoadStatus, diff: CommitDiff | None = None) -> bool:
        """Store a worker snapshot unless a newer request replaced ``hash``.

        Returns ``False`` when the slot belongs to another commit, in which
        case nothing is written.
        """
        with self._lock:
            if self._hash != hash:
                return False
            self._status = status
            if diff is not None:
                self._diff = diff
            return True

    def cancel(self) -> None:
        """Orphan an unfinished load so its remaining snapshots are dropped.

        A completed or failed entry is kept so re-opening the same commit
        does not reload it.
        """
        with self._lock:
            if isinstance(self._status, TERMINAL_STATUSES):
                return
            self._hash = None
            self._status = New()
            self._diff = CommitDiff.empty()
