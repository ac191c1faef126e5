"""Ordered artifact list returned from every module entry point."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..input.events import Event
from ..search import Searchable
from ..state import State
from . import artifact
from .exit_status import ExitStatus


class Results:
    """Builder for an ordered sequence of artifacts.

    Builder methods return ``self`` so modules can chain them::

        Results().event(event).state(State.LIST)
    """

    def __init__(self, artifacts: Iterable[artifact.Artifact] = ()) -> None:
        self.artifacts: list[artifact.Artifact] = list(artifacts)

    def _push(self, item: artifact.Artifact) -> Results:
        self.artifacts.append(item)
        return self

    def state(self, new_state: State) -> Results:
        return self._push(artifact.ChangeState(new_state))

    def error(self, error: BaseException) -> Results:
        return self._push(artifact.Error(error, None))

    def error_with_return(self, error: BaseException, return_state: State) -> Results:
        return self._push(artifact.Error(error, return_state))

    def event(self, event: Event) -> Results:
        return self._push(artifact.EventArtifact(event))

    def exit_status(self, status: ExitStatus) -> Results:
        return self._push(artifact.ExitStatusArtifact(status))

    def external_command(self, program: str, args: Iterable[str] = ()) -> Results:
        return self._push(artifact.ExternalCommand(program, tuple(args)))

    def search_cancel(self) -> Results:
        return self._push(artifact.SearchCancel())

    def search_term(self, term: str) -> Results:
        return self._push(artifact.SearchTerm(term))

    def searchable(self, searchable: Searchable) -> Results:
        return self._push(artifact.SearchableArtifact(searchable))

    def load_diff(self, hash: str) -> Results:
        return self._push(artifact.LoadDiff(hash))

    def cancel_diff(self) -> Results:
        return self._push(artifact.CancelDiff())

    def enqueue_resize(self) -> Results:
        return self._push(artifact.EnqueueResize())

    def extend(self, other: Iterable[artifact.Artifact]) -> Results:
        self.artifacts.extend(other)
        return self

    def __iter__(self) -> Iterator[artifact.Artifact]:
        return iter(self.artifacts)

    def __len__(self) -> int:
        return len(self.artifacts)

    def __getitem__(self, index: int) -> artifact.Artifact:
        return self.artifacts[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Results):
            return self.artifacts == other.artifacts
        if isinstance(other, list):
            return self.artifacts == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Results({self.artifacts!r})"


__all__ = ["Results"]
