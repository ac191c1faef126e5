"""State-keyed module registry.

The registry only forwards calls; deciding which state is current belongs
to the driver.
"""

from __future__ import annotations

import logging

from ..errors import InvalidModuleError
from ..input.events import RawInput, StandardAction, StandardEvent
from ..input.router import EventRouter
from ..process.exit_status import ExitStatus
from ..process.results import Results
from ..state import State
from ..view.render_context import RenderContext
from ..view.view_data import ViewData
from .module import Module

logger = logging.getLogger(__name__)


class Modules:
    def __init__(self, router: EventRouter | None = None) -> None:
        self.router = router if router is not None else EventRouter()
        self._modules: dict[State, Module] = {}

    def register_module(self, state: State, module: Module) -> None:
        self._modules[state] = module

    def get(self, state: State) -> Module:
        try:
            return self._modules[state]
        except KeyError:
            raise InvalidModuleError(f"Invalid module for provided state: {state!r}") from None

    def activate(self, state: State, previous_state: State) -> Results:
        return self.get(state).activate(previous_state)

    def deactivate(self, state: State) -> Results:
        return self.get(state).deactivate()

    def build_view_data(self, state: State, context: RenderContext) -> ViewData:
        return self.get(state).build_view_data(context)

    def handle_event(self, state: State, raw: RawInput) -> Results:
        """Route ``raw`` for the module bound to ``state`` and dispatch it."""
        module = self.get(state)
        event = self.router.route(raw, module.input_options(), module.read_event)
        if event is None:
            return Results()
        if isinstance(event, StandardEvent) and event.action is StandardAction.KILL:
            logger.debug("kill requested in %r", state)
            return Results().exit_status(ExitStatus.KILL)
        return module.handle_event(event)

    def error(self, state: State, error: BaseException) -> Results:
        return self.get(state).handle_error(error)


__all__ = ["Modules"]
