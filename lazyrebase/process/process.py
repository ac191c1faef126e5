"""Driver loop: render, read input, dispatch, apply the returned artifacts.

The loop is wiring only. Screen behavior lives in the modules; terminal I/O,
external processes and the diff worker are reached through callbacks and
the injected ``DiffLoader`` so tests can drive it without a terminal.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..diff.loader import DiffLoader
from ..input.events import RawInput, ResizeEvent, StandardAction, StandardEvent
from ..modules.registry import Modules
from ..search import Searchable
from ..state import State
from ..view.render_context import RenderContext
from ..view.view_data import ViewData
from . import artifact
from .exit_status import ExitStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessCallbacks:
    """Injected I/O used by ``Process.run``.

    ``read_input`` returns a key token, or ``""`` when nothing arrived before
    its timeout so the loop can redraw progress screens.
    """

    read_input: Callable[[], str]
    render: Callable[[ViewData, RenderContext], None]
    run_external_command: Callable[[str, tuple[str, ...]], bool]
    terminal_size: Callable[[], tuple[int, int]]


class Process:
    def __init__(
        self,
        modules: Modules,
        callbacks: ProcessCallbacks,
        diff_loader: DiffLoader | None = None,
        initial_state: State = State.LIST,
    ) -> None:
        self.modules = modules
        self.callbacks = callbacks
        self.diff_loader = diff_loader
        self.state = initial_state
        width, height = callbacks.terminal_size()
        self.render_context = RenderContext(width, height)
        self.searchable: Searchable | None = None
        self.exit_status: ExitStatus | None = None
        self._observed_size = (width, height)
        self._injected: deque[RawInput] = deque()

    # --- loop -----------------------------------------------------------

    def run(self) -> ExitStatus:
        logger.debug("starting in %r", self.state)
        self.apply_results(self.modules.activate(self.state, self.state))
        self._check_window_size()
        while self.exit_status is None:
            self.render()
            raw = self._next_input()
            if raw is None:
                continue
            self.handle_input(raw)
        logger.debug("exiting with %r", self.exit_status)
        return self.exit_status

    def render(self) -> None:
        view_data = self.modules.build_view_data(self.state, self.render_context)
        self.callbacks.render(view_data, self.render_context)

    def inject(self, raw: RawInput) -> None:
        """Queue input that is consumed before the terminal is read again."""
        self._injected.append(raw)

    def handle_input(self, raw: RawInput) -> None:
        self.apply_results(self.modules.handle_event(self.state, raw))
        if self.exit_status is None:
            self._check_window_size()

    def _next_input(self) -> RawInput | None:
        if self._injected:
            return self._injected.popleft()
        size = self.callbacks.terminal_size()
        if size != self._observed_size:
            self._observed_size = size
            return ResizeEvent(*size)
        key = self.callbacks.read_input()
        return key or None

    def _check_window_size(self) -> None:
        if self.render_context.is_window_too_small() and self.state is not State.WINDOW_SIZE_ERROR:
            self.change_state(State.WINDOW_SIZE_ERROR)

    # --- artifacts ------------------------------------------------------

    def apply_results(self, results: Iterable[artifact.Artifact]) -> None:
        """Apply artifacts in order, stopping once an exit status is set."""
        for item in results:
            if self.exit_status is not None:
                return
            self._apply(item)

    def _apply(self, item: artifact.Artifact) -> None:
        if isinstance(item, artifact.ChangeState):
            self.change_state(item.state)
        elif isinstance(item, artifact.Error):
            self._show_error(item.error, item.return_state)
        elif isinstance(item, artifact.EventArtifact):
            if isinstance(item.event, ResizeEvent):
                self.render_context = self.render_context.resized(item.event.width, item.event.height)
        elif isinstance(item, artifact.ExitStatusArtifact):
            self.exit_status = item.status
        elif isinstance(item, artifact.ExternalCommand):
            self._run_external_command(item.program, item.args)
        elif isinstance(item, artifact.EnqueueResize):
            self._enqueue_resize()
        elif isinstance(item, artifact.SearchableArtifact):
            self.searchable = item.searchable
        elif isinstance(item, artifact.SearchTerm):
            if self.searchable is not None:
                self.searchable.search(item.term)
        elif isinstance(item, artifact.SearchCancel):
            if self.searchable is not None:
                self.searchable.reset()
        elif isinstance(item, artifact.LoadDiff):
            if self.diff_loader is not None:
                self.diff_loader.load(item.hash)
        elif isinstance(item, artifact.CancelDiff):
            if self.diff_loader is not None:
                self.diff_loader.cancel()

    def change_state(self, new_state: State, previous_state: State | None = None) -> None:
        """Deactivate the current module and activate the one for ``new_state``.

        ``previous_state`` is what the new module sees as the state it came
        from; it defaults to the state being left.
        """
        if new_state is self.state:
            return
        old_state = self.state
        logger.debug("state %r -> %r", old_state, new_state)
        if new_state is State.WINDOW_SIZE_ERROR or (
            old_state is State.WINDOW_SIZE_ERROR and previous_state is None
        ):
            # the size screen overlays the interrupted module without a lifecycle change
            self.state = new_state
            if new_state is State.WINDOW_SIZE_ERROR:
                self.apply_results(self.modules.activate(new_state, old_state))
            return
        self.apply_results(self.modules.deactivate(old_state))
        if self.exit_status is not None:
            return
        self.state = new_state
        self.apply_results(
            self.modules.activate(new_state, old_state if previous_state is None else previous_state)
        )

    def _show_error(self, error: BaseException, return_state: State | None) -> None:
        logger.debug("showing error from %r: %s", self.state, error)
        if self.state is not State.ERROR:
            self.change_state(State.ERROR, return_state or self.state)
        elif return_state is not None:
            # already on the error screen; only the return target moves
            self.apply_results(self.modules.activate(State.ERROR, return_state))
        if self.exit_status is None:
            self.apply_results(self.modules.error(State.ERROR, error))

    def _run_external_command(self, program: str, args: tuple[str, ...]) -> None:
        logger.debug("running external command %s %s", program, args)
        succeeded = self.callbacks.run_external_command(program, args)
        if succeeded:
            self.inject(StandardEvent(StandardAction.EXTERNAL_COMMAND_SUCCESS))
        else:
            logger.debug("external command %s failed", program)
            self.inject(StandardEvent(StandardAction.EXTERNAL_COMMAND_ERROR))
        self._enqueue_resize()

    def _enqueue_resize(self) -> None:
        size = self.callbacks.terminal_size()
        self._observed_size = size
        self.inject(ResizeEvent(*size))


__all__ = ["Process", "ProcessCallbacks"]
