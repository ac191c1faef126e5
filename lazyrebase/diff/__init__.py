"""Commit diff model, git engine and background loading."""

from __future__ import annotations

from .engine import DiffLoadCancelled, DiffLoadError, DiffOptions, GitDiffEngine
from .loader import DiffLoader
from .model import Commit, CommitDiff, Delta, DiffLine, FileMode, FileStatus, Origin, Status, User
from .state import (
    CompleteQuickDiff,
    Diff,
    DiffComplete,
    DiffErrorCode,
    DiffSnapshot,
    DiffState,
    LoadError,
    LoadStatus,
    New,
    QuickDiff,
)

__all__ = [
    "Commit",
    "CommitDiff",
    "CompleteQuickDiff",
    "Delta",
    "Diff",
    "DiffComplete",
    "DiffErrorCode",
    "DiffLine",
    "DiffLoadCancelled",
    "DiffLoadError",
    "DiffLoader",
    "DiffOptions",
    "DiffSnapshot",
    "DiffState",
    "FileMode",
    "FileStatus",
    "GitDiffEngine",
    "LoadError",
    "LoadStatus",
    "New",
    "Origin",
    "QuickDiff",
    "Status",
    "User",
]
