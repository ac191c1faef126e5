"""Artifacts: the closed set of instructions a module hands to the driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from ..input.events import Event
from ..search import Searchable
from ..state import State
from .exit_status import ExitStatus


@dataclass(frozen=True)
class ChangeState:
    state: State

    def __repr__(self) -> str:
        return f"ChangeState({self.state!r})"


@dataclass(frozen=True)
class EnqueueResize:
    def __repr__(self) -> str:
        return "EnqueueResize"


@dataclass(frozen=True, eq=False)
class Error:
    """Report ``error`` on the Error screen, then return to ``return_state``.

    ``return_state`` of ``None`` means "the state that raised it".
    """

    error: BaseException
    return_state: State | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Error):
            return NotImplemented
        return (
            type(self.error) is type(other.error)
            and str(self.error) == str(other.error)
            and self.return_state is other.return_state
        )

    def __hash__(self) -> int:
        return hash((type(self.error), str(self.error), self.return_state))

    def __repr__(self) -> str:
        return f"Error({str(self.error)!r}, {self.return_state!r})"


@dataclass(frozen=True)
class EventArtifact:
    event: Event

    def __repr__(self) -> str:
        return f"Event({self.event!r})"


@dataclass(frozen=True)
class ExitStatusArtifact:
    status: ExitStatus

    def __repr__(self) -> str:
        return f"ExitStatus({self.status!r})"


@dataclass(frozen=True)
class ExternalCommand:
    program: str
    args: tuple[str, ...] = field(default_factory=tuple)

    def __repr__(self) -> str:
        return f"ExternalCommand({self.program!r}, {list(self.args)!r})"


@dataclass(frozen=True)
class SearchCancel:
    def __repr__(self) -> str:
        return "SearchCancel"


@dataclass(frozen=True)
class SearchTerm:
    term: str

    def __repr__(self) -> str:
        return f"SearchTerm({self.term!r})"


@dataclass(frozen=True, eq=False)
class SearchableArtifact:
    """Install ``searchable`` as the driver's active search target (identity equality)."""

    searchable: Searchable

    def __repr__(self) -> str:
        return "Searchable"


@dataclass(frozen=True)
class LoadDiff:
    hash: str

    def __repr__(self) -> str:
        return f"LoadDiff({self.hash!r})"


@dataclass(frozen=True)
class CancelDiff:
    def __repr__(self) -> str:
        return "CancelDiff"


Artifact = Union[
    ChangeState,
    EnqueueResize,
    Error,
    EventArtifact,
    ExitStatusArtifact,
    ExternalCommand,
    SearchCancel,
    SearchTerm,
    SearchableArtifact,
    LoadDiff,
    CancelDiff,
]

__all__ = [
    "Artifact",
    "CancelDiff",
    "ChangeState",
    "EnqueueResize",
    "Error",
    "EventArtifact",
    "ExitStatusArtifact",
    "ExternalCommand",
    "LoadDiff",
    "SearchCancel",
    "SearchTerm",
    "SearchableArtifact",
]
