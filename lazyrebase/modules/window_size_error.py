"""Placeholder screen while the terminal is below the minimum size."""

from __future__ import annotations

from ..input.events import Event, InputOptions, ResizeEvent
from ..process.results import Results
from ..state import State
from ..view.render_context import RenderContext
from ..view.view_data import ViewData
from .module import Module


class WindowSizeError(Module):
    def __init__(self) -> None:
        self.return_state = State.LIST
        self.view_data = ViewData(show_title=False)

    def activate(self, previous_state: State) -> Results:
        self.return_state = previous_state
        return Results()

    def build_view_data(self, context: RenderContext) -> ViewData:
        message = "Window too small" if context.width >= 16 else "Size!"
        self.view_data.clear()
        self.view_data.push_line(message)
        return self.view_data

    def input_options(self) -> InputOptions:
        return InputOptions.RESIZE

    def handle_event(self, event: Event) -> Results:
        results = Results().event(event)
        if isinstance(event, ResizeEvent):
            if not RenderContext(event.width, event.height).is_window_too_small():
                results.state(self.return_state)
        return results


__all__ = ["WindowSizeError"]
