"""Hand the todo file to the user's editor and recover from bad edits."""

from __future__ import annotations

import logging
import shlex
from enum import Enum

from ..app_data import AppData
from ..errors import LazyRebaseError, TodoFileError, error_chain_lines
from ..input.events import Event, InputOptions, StandardAction, StandardEvent
from ..process.exit_status import ExitStatus
from ..process.results import Results
from ..state import State
from ..todo_file.line import Line
from ..view.render_context import RenderContext
from ..view.view_data import ViewData
from .components.choice import Choice
from .module import Module

logger = logging.getLogger(__name__)


class EditorAction(Enum):
    ABORT_REBASE = "AbortRebase"
    EDIT_REBASE = "EditRebase"
    RESTORE_AND_ABORT_EDIT = "RestoreAndAbortEdit"
    UNDO_AND_EDIT = "UndoAndEdit"


class EditorState(Enum):
    ACTIVE = "Active"
    EMPTY = "Empty"
    ERROR = "Error"


def build_editor_command(editor: str, file_path: str) -> tuple[str, list[str]]:
    """Split ``editor`` and substitute ``%`` with ``file_path`` (appended if absent).

    Raises ``LazyRebaseError`` chained to a hint about ``core.editor``.
    """
    hint = LazyRebaseError('Please see the git "core.editor" configuration for details')
    try:
        parts = shlex.split(editor)
    except ValueError:
        raise LazyRebaseError(f'Invalid editor: "{editor}"') from hint
    if not parts:
        raise LazyRebaseError("No editor configured") from hint

    program, *arguments = parts
    found = False
    resolved: list[str] = []
    for argument in arguments:
        if argument == "%":
            found = True
            resolved.append(file_path)
        else:
            resolved.append(argument)
    if not found:
        resolved.append(file_path)
    return program, resolved


class ExternalEditor(Module):
    def __init__(self, app_data: AppData) -> None:
        self.editor = app_data.config.editor
        self.todo_file = app_data.todo_file
        self.state = EditorState.ACTIVE
        self.error: BaseException | None = None
        self.lines: list[Line] = []
        self.external_command: tuple[str, list[str]] = ("", [])
        self.view_data = ViewData(title="Git Interactive Rebase Tool")

        self.empty_choice: Choice[EditorAction] = Choice(
            [
                ("1", "Abort rebase", EditorAction.ABORT_REBASE),
                ("2", "Edit rebase file", EditorAction.EDIT_REBASE),
                ("3", "Undo modifications and edit rebase file", EditorAction.UNDO_AND_EDIT),
            ]
        )
        self.empty_choice.set_prompt(["The rebase file is empty."])
        self.error_choice: Choice[EditorAction] = Choice(
            [
                ("1", "Abort rebase", EditorAction.ABORT_REBASE),
                ("2", "Edit rebase file", EditorAction.EDIT_REBASE),
                ("3", "Restore rebase file and abort edit", EditorAction.RESTORE_AND_ABORT_EDIT),
                ("4", "Undo modifications and edit rebase file", EditorAction.UNDO_AND_EDIT),
            ]
        )

    def activate(self, previous_state: State) -> Results:
        results = Results()
        with self.todo_file.lock() as todo_file:
            try:
                todo_file.write_file()
            except TodoFileError as exc:
                return results.error_with_return(exc, State.LIST)
            if not self.lines:
                self.lines = list(todo_file.lines)
            file_path = str(todo_file.path)

        try:
            self.external_command = build_editor_command(self.editor, file_path)
        except LazyRebaseError as exc:
            return results.error_with_return(exc, State.LIST)
        self._set_state(results, EditorState.ACTIVE)
        return results

    def deactivate(self) -> Results:
        self.lines = []
        self.view_data.clear()
        return Results()

    def build_view_data(self, context: RenderContext) -> ViewData:
        if self.state is EditorState.EMPTY:
            self.empty_choice.fill_view_data(self.view_data)
        elif self.state is EditorState.ERROR:
            self.error_choice.set_prompt(error_chain_lines(self.error) if self.error is not None else [])
            self.error_choice.fill_view_data(self.view_data)
        else:
            self.view_data.clear()
            self.view_data.push_leading_line("Editing...")
        return self.view_data

    def input_options(self) -> InputOptions:
        return InputOptions.RESIZE

    def handle_event(self, event: Event) -> Results:
        results = Results().event(event)
        if self.state is EditorState.ACTIVE:
            self._handle_active(event, results)
        elif self.state is EditorState.EMPTY:
            option = self.empty_choice.handle_event(event)
            action = option.value if option is not None else None
            if action is EditorAction.ABORT_REBASE:
                results.exit_status(ExitStatus.GOOD)
            elif action is EditorAction.EDIT_REBASE:
                self._set_state(results, EditorState.ACTIVE)
            elif action is EditorAction.UNDO_AND_EDIT:
                self._undo_and_edit(results)
        else:
            option = self.error_choice.handle_event(event)
            action = option.value if option is not None else None
            if action is EditorAction.ABORT_REBASE:
                with self.todo_file.lock() as todo_file:
                    todo_file.set_lines([])
                results.exit_status(ExitStatus.GOOD)
            elif action is EditorAction.EDIT_REBASE:
                self._set_state(results, EditorState.ACTIVE)
            elif action is EditorAction.RESTORE_AND_ABORT_EDIT:
                with self.todo_file.lock() as todo_file:
                    todo_file.set_lines(self.lines)
                    results.state(State.LIST)
                    try:
                        todo_file.write_file()
                    except TodoFileError as exc:
                        results.error(exc)
            elif action is EditorAction.UNDO_AND_EDIT:
                self._undo_and_edit(results)
        return results

    def _handle_active(self, event: Event, results: Results) -> None:
        if not isinstance(event, StandardEvent):
            return
        if event.action is StandardAction.EXTERNAL_COMMAND_SUCCESS:
            with self.todo_file.lock() as todo_file:
                try:
                    todo_file.load_file()
                except TodoFileError as exc:
                    logger.info("edited todo file failed to load: %s", exc)
                    self._set_error(results, exc)
                    return
                empty = todo_file.is_empty() or todo_file.is_noop()
            if empty:
                self._set_state(results, EditorState.EMPTY)
            else:
                results.state(State.LIST)
        elif event.action is StandardAction.EXTERNAL_COMMAND_ERROR:
            self._set_error(results, LazyRebaseError("Editor returned a non-zero exit status"))

    def _set_error(self, results: Results, error: BaseException) -> None:
        self.error = error
        self.error_choice.invalid_selection = False
        self._set_state(results, EditorState.ERROR)

    def _set_state(self, results: Results, state: EditorState) -> None:
        self.state = state
        if state is EditorState.ACTIVE:
            program, arguments = self.external_command
            results.external_command(program, arguments)
        elif state is EditorState.EMPTY:
            self.empty_choice.invalid_selection = False

    def _undo_and_edit(self, results: Results) -> None:
        with self.todo_file.lock() as todo_file:
            todo_file.set_lines(self.lines)
            try:
                todo_file.write_file()
            except TodoFileError as exc:
                results.error_with_return(exc, State.LIST)
                return
        self._set_state(results, EditorState.ACTIVE)


__all__ = ["EditorAction", "EditorState", "ExternalEditor", "build_editor_command"]
