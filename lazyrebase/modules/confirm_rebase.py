"""Confirmation screens for finishing or abandoning the rebase."""

from __future__ import annotations

from ..app_data import AppData
from ..input.events import Event, InputOptions
from ..input.key_bindings import KeyBindings
from ..process.exit_status import ExitStatus
from ..process.results import Results
from ..state import State
from ..view.render_context import RenderContext
from ..view.view_data import ViewData
from .components.confirm import Confirm, Confirmed
from .module import Module


class ConfirmRebase(Module):
    prompt = "Are you sure you want to rebase"
    exit_status = ExitStatus.GOOD

    def __init__(self, app_data: AppData) -> None:
        self.key_bindings = app_data.config.key_bindings
        self.todo_file = app_data.todo_file
        self.dialog = Confirm(self.prompt)
        self.view_data = ViewData(title="Git Interactive Rebase Tool")

    def build_view_data(self, context: RenderContext) -> ViewData:
        self.dialog.fill_view_data(self.view_data, self.key_bindings)
        return self.view_data

    def input_options(self) -> InputOptions:
        return InputOptions.RESIZE

    def read_event(self, key: str, key_bindings: KeyBindings) -> Event | None:
        return self.dialog.read_event(key, key_bindings)

    def handle_event(self, event: Event) -> Results:
        results = Results().event(event)
        confirmed = self.dialog.handle_event(event)
        if confirmed is Confirmed.YES:
            self.on_confirmed()
            results.exit_status(self.exit_status)
        elif confirmed is Confirmed.NO:
            results.state(State.LIST)
        return results

    def on_confirmed(self) -> None:
        pass


__all__ = ["ConfirmRebase"]
