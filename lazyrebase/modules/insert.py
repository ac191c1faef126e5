"""Insert a new todo line after the selection."""

from __future__ import annotations

from enum import Enum

from ..app_data import AppData
from ..errors import ParseError
from ..input.events import Event, InputOptions
from ..process.results import Results
from ..state import State
from ..todo_file.line import Action, Line
from ..view.render_context import RenderContext
from ..view.view_data import ViewData
from .components.choice import Choice
from .components.edit import Edit, EditStatus
from .module import Module


class InsertState(Enum):
    CHOOSING = "Choosing"
    EDITING = "Editing"


_CANCEL = None


class Insert(Module):
    def __init__(self, app_data: AppData) -> None:
        self.todo_file = app_data.todo_file
        self.state = InsertState.CHOOSING
        self.action = Action.EXEC
        self.edit = Edit()
        self.view_data = ViewData(title="Insert Line")
        self.choice: Choice[Action | None] = Choice(
            [
                ("e", "exec <command>", Action.EXEC),
                ("p", "pick <hash>", Action.PICK),
                ("l", "label <label>", Action.LABEL),
                ("r", "reset <label>", Action.RESET),
                ("m", "merge [-C <commit> | -c <commit>] <label> [# <oneline>]", Action.MERGE),
                ("u", "update-ref <reference>", Action.UPDATE_REF),
                ("q", "Cancel add line", _CANCEL),
            ]
        )
        self.choice.set_prompt(["Select the type of line to insert:"])

    def activate(self, previous_state: State) -> Results:
        self.state = InsertState.CHOOSING
        self.choice.invalid_selection = False
        self.edit.clear()
        return Results()

    def build_view_data(self, context: RenderContext) -> ViewData:
        if self.state is InsertState.CHOOSING:
            self.choice.fill_view_data(self.view_data)
        else:
            self.view_data.clear()
            self.view_data.push_line(self.edit.view_line())
            self.view_data.push_trailing_line("Enter to finish")
        return self.view_data

    def input_options(self) -> InputOptions:
        return InputOptions.RESIZE

    def handle_event(self, event: Event) -> Results:
        results = Results().event(event)
        if self.state is InsertState.CHOOSING:
            option = self.choice.handle_event(event)
            if option is None:
                return results
            if option.value is _CANCEL:
                return results.state(State.LIST)
            self.action = option.value
            self.edit.label = f"{self.action.value} "
            self.edit.clear()
            self.state = InsertState.EDITING
            return results

        status = self.edit.handle_event(event)
        if status is EditStatus.CANCELLED:
            return results.state(State.LIST)
        if status is EditStatus.FINISHED:
            content = self.edit.content.strip()
            if content:
                try:
                    line = Line.parse(f"{self.action.value} {content}")
                except ParseError as exc:
                    return results.error_with_return(exc, State.LIST)
                with self.todo_file.lock() as todo_file:
                    index = todo_file.selected_index + 1 if not todo_file.is_empty() else 0
                    todo_file.add_line(index, line)
            results.state(State.LIST)
        return results


__all__ = ["Insert", "InsertState"]
