"""Show-commit screen."""

from .show_commit import ShowCommit, ShowCommitMode

__all__ = ["ShowCommit", "ShowCommitMode"]
