"""Error screen: shows an exception chain until a key is pressed."""

from __future__ import annotations

from ..errors import error_chain_lines
from ..input.events import Event, InputOptions, KeyEvent
from ..process.results import Results
from ..state import State
from ..view.render_context import RenderContext
from ..view.view_data import DisplayColor, LineSegment, ViewData, ViewLine
from .module import Module, handle_scroll


class ErrorModule(Module):
    def __init__(self) -> None:
        self.return_state = State.LIST
        self.view_data = ViewData(title="Error")

    def activate(self, previous_state: State) -> Results:
        self.return_state = previous_state
        return Results()

    def build_view_data(self, context: RenderContext) -> ViewData:
        return self.view_data

    def input_options(self) -> InputOptions:
        return InputOptions.RESIZE | InputOptions.MOVEMENT

    def handle_event(self, event: Event) -> Results:
        results = Results().event(event)
        if handle_scroll(event, self.view_data):
            return results
        if isinstance(event, KeyEvent):
            results.state(self.return_state)
        return results

    def handle_error(self, error: BaseException) -> Results:
        self.view_data.reset()
        for line in error_chain_lines(error):
            self.view_data.push_line(line)
        self.view_data.push_trailing_line(
            ViewLine.of(LineSegment("Press any key to continue", DisplayColor.INDICATOR))
        )
        return Results()


__all__ = ["ErrorModule"]
