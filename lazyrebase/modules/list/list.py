"""Main screen: the editable list of rebase instructions."""

from __future__ import annotations

import logging
from enum import Enum

from ...app_data import AppData
from ...input.events import Event, InputOptions, ResizeEvent, StandardAction, StandardEvent
from ...input.key_bindings import KeyBindings
from ...process.exit_status import ExitStatus
from ...process.results import Results
from ...state import State
from ...todo_file.line import Action, Line
from ...todo_file.todo_file import TodoFile
from ...view.render_context import RenderContext
from ...view.view_data import DisplayColor, LineSegment, ViewData, ViewLine
from ..components.edit import Edit, EditStatus
from ..components.help import Help
from ..module import Module
from .search import TodoSearch

logger = logging.getLogger(__name__)

LIST_ACTIONS = (
    StandardAction.MOVE_CURSOR_UP,
    StandardAction.MOVE_CURSOR_DOWN,
    StandardAction.MOVE_CURSOR_LEFT,
    StandardAction.MOVE_CURSOR_RIGHT,
    StandardAction.MOVE_CURSOR_PAGE_UP,
    StandardAction.MOVE_CURSOR_PAGE_DOWN,
    StandardAction.MOVE_CURSOR_HOME,
    StandardAction.MOVE_CURSOR_END,
    StandardAction.ABORT,
    StandardAction.FORCE_ABORT,
    StandardAction.REBASE,
    StandardAction.FORCE_REBASE,
    StandardAction.ACTION_PICK,
    StandardAction.ACTION_REWORD,
    StandardAction.ACTION_EDIT,
    StandardAction.ACTION_SQUASH,
    StandardAction.ACTION_FIXUP,
    StandardAction.ACTION_DROP,
    StandardAction.ACTION_BREAK,
    StandardAction.SWAP_SELECTED_UP,
    StandardAction.SWAP_SELECTED_DOWN,
    StandardAction.REMOVE_LINE,
    StandardAction.TOGGLE_VISUAL_MODE,
    StandardAction.SHOW_COMMIT,
    StandardAction.OPEN_IN_EDITOR,
    StandardAction.INSERT_LINE,
    StandardAction.EDIT,
)

_ACTION_CHANGES = {
    StandardAction.ACTION_PICK: Action.PICK,
    StandardAction.ACTION_REWORD: Action.REWORD,
    StandardAction.ACTION_EDIT: Action.EDIT,
    StandardAction.ACTION_SQUASH: Action.SQUASH,
    StandardAction.ACTION_FIXUP: Action.FIXUP,
    StandardAction.ACTION_DROP: Action.DROP,
}

_STATE_CHANGES = {
    StandardAction.ABORT: State.CONFIRM_ABORT,
    StandardAction.REBASE: State.CONFIRM_REBASE,
    StandardAction.OPEN_IN_EDITOR: State.EXTERNAL_EDITOR,
    StandardAction.INSERT_LINE: State.INSERT,
}

_ACTION_COLORS = {
    Action.PICK: DisplayColor.ACTION_PICK,
    Action.REWORD: DisplayColor.ACTION_REWORD,
    Action.EDIT: DisplayColor.ACTION_EDIT,
    Action.SQUASH: DisplayColor.ACTION_SQUASH,
    Action.FIXUP: DisplayColor.ACTION_FIXUP,
    Action.DROP: DisplayColor.ACTION_DROP,
    Action.EXEC: DisplayColor.ACTION_EXEC,
    Action.BREAK: DisplayColor.ACTION_BREAK,
    Action.LABEL: DisplayColor.ACTION_LABEL,
    Action.RESET: DisplayColor.ACTION_RESET,
    Action.MERGE: DisplayColor.ACTION_MERGE,
    Action.NOOP: DisplayColor.NORMAL,
    Action.UPDATE_REF: DisplayColor.ACTION_UPDATE_REF,
}

HELP_ENTRIES = (
    (StandardAction.MOVE_CURSOR_UP, "Move selection up"),
    (StandardAction.MOVE_CURSOR_DOWN, "Move selection down"),
    (StandardAction.MOVE_CURSOR_PAGE_UP, "Move selection up a page"),
    (StandardAction.MOVE_CURSOR_PAGE_DOWN, "Move selection down a page"),
    (StandardAction.MOVE_CURSOR_HOME, "Move selection to top of the list"),
    (StandardAction.MOVE_CURSOR_END, "Move selection to end of the list"),
    (StandardAction.SWAP_SELECTED_UP, "Shift selected commits up"),
    (StandardAction.SWAP_SELECTED_DOWN, "Shift selected commits down"),
    (StandardAction.ACTION_PICK, "Set selected commits to be picked"),
    (StandardAction.ACTION_REWORD, "Set selected commits to be reworded"),
    (StandardAction.ACTION_EDIT, "Set selected commits to be edited"),
    (StandardAction.ACTION_SQUASH, "Set selected commits to be squashed"),
    (StandardAction.ACTION_FIXUP, "Set selected commits to be fixed-up"),
    (StandardAction.ACTION_DROP, "Set selected commits to be dropped"),
    (StandardAction.ACTION_BREAK, "Insert or remove a break"),
    (StandardAction.REMOVE_LINE, "Delete selected lines"),
    (StandardAction.TOGGLE_VISUAL_MODE, "Enter or exit visual mode"),
    (StandardAction.SHOW_COMMIT, "Show commit information"),
    (StandardAction.EDIT, "Edit an exec, label, reset or update-ref action's content"),
    (StandardAction.INSERT_LINE, "Insert a new line"),
    (StandardAction.OPEN_IN_EDITOR, "Open the todo file in the default editor"),
    (StandardAction.SEARCH_START, "Start a search"),
    (StandardAction.SEARCH_NEXT, "Next search match"),
    (StandardAction.SEARCH_PREVIOUS, "Previous search match"),
    (StandardAction.UNDO, "Undo the last change"),
    (StandardAction.REDO, "Redo the previous undone change"),
    (StandardAction.REBASE, "Write the todo file and start the rebase"),
    (StandardAction.FORCE_REBASE, "Immediately write the todo file and start the rebase"),
    (StandardAction.ABORT, "Abort the interactive rebase"),
    (StandardAction.FORCE_ABORT, "Immediately abort the interactive rebase"),
    (StandardAction.HELP, "Show help"),
)


class ListMode(Enum):
    NORMAL = "Normal"
    VISUAL = "Visual"
    SEARCH = "Search"
    EDIT = "Edit"


class List(Module):
    def __init__(self, app_data: AppData) -> None:
        self.config = app_data.config
        self.todo_file = app_data.todo_file
        self.mode = ListMode.NORMAL
        self.help = Help(HELP_ENTRIES, self.config.key_bindings)
        self.search = TodoSearch(self.todo_file)
        self.search_input = Edit(label="/")
        self.edit = Edit()
        self.view_data = ViewData(title="Git Interactive Rebase Tool")
        self._page = 10

    def activate(self, previous_state: State) -> Results:
        return Results().searchable(self.search)

    def input_options(self) -> InputOptions:
        if self.help.active:
            return self.help.input_options()
        if self.mode in (ListMode.SEARCH, ListMode.EDIT):
            return InputOptions.RESIZE
        return InputOptions.RESIZE | InputOptions.UNDO_REDO | InputOptions.HELP | InputOptions.SEARCH

    def read_event(self, key: str, key_bindings: KeyBindings) -> Event | None:
        if self.help.active or self.mode in (ListMode.SEARCH, ListMode.EDIT):
            return None
        action = key_bindings.first_match(key, LIST_ACTIONS)
        if action is None:
            return None
        return StandardEvent(action)

    # --- view -----------------------------------------------------------

    def build_view_data(self, context: RenderContext) -> ViewData:
        if self.help.active:
            return self.help.view_data

        self._page = max(1, (context.height - 2) // 2)
        full_width = context.is_full_width()
        view_data = self.view_data
        view_data.clear()
        with self.todo_file.lock() as todo_file:
            jump = self.search.take_jump()
            if jump is not None:
                todo_file.set_selected(jump)
            if todo_file.is_empty():
                view_data.push_line(ViewLine.of(LineSegment("Rebase todo file is empty", DisplayColor.INDICATOR)))
            else:
                self._push_lines(view_data, todo_file, full_width)
                view_data.ensure_line_visible(todo_file.selected_index)

        if self.mode is ListMode.SEARCH:
            view_data.push_trailing_line(self.search_input.view_line())
        elif self.mode is ListMode.EDIT:
            view_data.push_trailing_line(self.edit.view_line())
        elif self.mode is ListMode.VISUAL:
            view_data.push_trailing_line(ViewLine.of(LineSegment("-- VISUAL --", DisplayColor.INDICATOR)))
        elif self.search.term:
            matches = len(self.search.matches)
            position = self.search.current + 1 if self.search.current is not None else 0
            view_data.push_trailing_line(
                ViewLine.of(LineSegment(f"/{self.search.term} [{position}/{matches}]", DisplayColor.INDICATOR))
            )
        return view_data

    def _push_lines(self, view_data: ViewData, todo_file: TodoFile, full_width: bool) -> None:
        start, end = todo_file.selected_range()
        cursor = todo_file.selected_index
        visual = self.mode is ListMode.VISUAL
        for index, line in enumerate(todo_file.lines):
            selected = start <= index <= end
            dim = visual and selected and index != cursor
            view_data.push_line(
                self._line_view(line, selected, dim, self.search.is_match(index), full_width)
            )

    @staticmethod
    def _line_view(line: Line, selected: bool, dim: bool, matched: bool, full_width: bool) -> ViewLine:
        indicator = LineSegment("> " if selected else "  ", DisplayColor.INDICATOR, dim=dim)
        color = _ACTION_COLORS[line.action]
        action_text = f"{line.action.value:<6} " if full_width else f"{line.action.abbreviation} "
        segments = [indicator, LineSegment(action_text, color, dim=dim)]
        if line.action.is_commit_action():
            if line.option:
                segments.append(LineSegment(f"{line.option} ", color, dim=dim))
            hash_text = line.hash if full_width else line.hash[:8]
            segments.append(LineSegment(f"{hash_text} ", DisplayColor.NORMAL, dim=dim, underline=matched))
        if line.content:
            segments.append(LineSegment(line.content, DisplayColor.NORMAL, dim=dim, underline=matched))
        return ViewLine(segments=segments, selected=selected, pinned=2)

    # --- events ---------------------------------------------------------

    def handle_event(self, event: Event) -> Results:
        results = Results().event(event)
        if self.help.active:
            self.help.handle_event(event)
            return results
        if isinstance(event, ResizeEvent):
            return results
        if self.mode is ListMode.SEARCH:
            return self._handle_search_input(event, results)
        if self.mode is ListMode.EDIT:
            return self._handle_edit(event, results)
        if not isinstance(event, StandardEvent):
            return results

        action = event.action
        if action is StandardAction.HELP:
            self.help.set_active()
        elif action in _STATE_CHANGES:
            self._end_visual()
            results.state(_STATE_CHANGES[action])
        elif action is StandardAction.FORCE_ABORT:
            with self.todo_file.lock() as todo_file:
                todo_file.set_lines([])
            results.exit_status(ExitStatus.ABORT)
        elif action is StandardAction.FORCE_REBASE:
            results.exit_status(ExitStatus.GOOD)
        elif action is StandardAction.SHOW_COMMIT:
            with self.todo_file.lock() as todo_file:
                line = todo_file.get_selected_line()
            if line is not None and line.has_reference():
                results.state(State.SHOW_COMMIT)
        elif action is StandardAction.SEARCH_START:
            self.search_input.clear()
            self.mode = ListMode.SEARCH
        elif action in (StandardAction.SEARCH_NEXT, StandardAction.SEARCH_PREVIOUS):
            self._jump_to_match(action)
        elif action is StandardAction.EDIT:
            self._start_edit()
        else:
            self._edit_todo(action)
        return results

    def _edit_todo(self, action: StandardAction) -> None:
        with self.todo_file.lock() as todo_file:
            if action is StandardAction.MOVE_CURSOR_UP:
                todo_file.move_cursor(-1)
            elif action is StandardAction.MOVE_CURSOR_DOWN:
                todo_file.move_cursor(1)
            elif action is StandardAction.MOVE_CURSOR_PAGE_UP:
                todo_file.move_cursor(-self._page)
            elif action is StandardAction.MOVE_CURSOR_PAGE_DOWN:
                todo_file.move_cursor(self._page)
            elif action is StandardAction.MOVE_CURSOR_HOME:
                todo_file.set_selected(0)
            elif action is StandardAction.MOVE_CURSOR_END:
                todo_file.set_selected(len(todo_file) - 1)
            elif action is StandardAction.MOVE_CURSOR_LEFT:
                self.view_data.scroll.scroll_left()
            elif action is StandardAction.MOVE_CURSOR_RIGHT:
                self.view_data.scroll.scroll_right()
            elif action in _ACTION_CHANGES:
                todo_file.update_range(_ACTION_CHANGES[action])
                if self.config.auto_select_next and self.mode is ListMode.NORMAL:
                    todo_file.move_cursor(1)
            elif action is StandardAction.ACTION_BREAK:
                if self.mode is ListMode.NORMAL:
                    todo_file.toggle_break()
            elif action is StandardAction.SWAP_SELECTED_UP:
                todo_file.swap_range_up()
            elif action is StandardAction.SWAP_SELECTED_DOWN:
                todo_file.swap_range_down()
            elif action is StandardAction.REMOVE_LINE:
                todo_file.remove_range()
                self.mode = ListMode.NORMAL
            elif action is StandardAction.TOGGLE_VISUAL_MODE:
                if self.mode is ListMode.VISUAL:
                    self.mode = ListMode.NORMAL
                    todo_file.end_visual_mode()
                else:
                    self.mode = ListMode.VISUAL
                    todo_file.start_visual_mode()
            elif action is StandardAction.UNDO:
                todo_file.undo()
                self._sync_visual(todo_file)
            elif action is StandardAction.REDO:
                todo_file.redo()
                self._sync_visual(todo_file)

    def _sync_visual(self, todo_file: TodoFile) -> None:
        if todo_file.visual_anchor is None and self.mode is ListMode.VISUAL:
            self.mode = ListMode.NORMAL
        elif todo_file.visual_anchor is not None:
            self.mode = ListMode.VISUAL

    def _end_visual(self) -> None:
        if self.mode is ListMode.VISUAL:
            self.mode = ListMode.NORMAL
            with self.todo_file.lock() as todo_file:
                todo_file.end_visual_mode()

    def _jump_to_match(self, action: StandardAction) -> None:
        target = self.search.next() if action is StandardAction.SEARCH_NEXT else self.search.previous()
        if target is not None:
            with self.todo_file.lock() as todo_file:
                todo_file.set_selected(target)

    def _handle_search_input(self, event: Event, results: Results) -> Results:
        before = self.search_input.content
        status = self.search_input.handle_event(event)
        if status is EditStatus.CANCELLED:
            self.mode = ListMode.NORMAL
            self.search_input.clear()
            return results.search_cancel()
        if status is EditStatus.FINISHED:
            self.mode = ListMode.NORMAL
            if not self.search_input.content:
                return results.search_cancel()
            return results
        if self.search_input.content != before:
            if self.search_input.content:
                results.search_term(self.search_input.content)
            else:
                results.search_cancel()
        return results

    def _start_edit(self) -> None:
        with self.todo_file.lock() as todo_file:
            line = todo_file.get_selected_line()
        if line is None or not line.is_editable() or self.mode is not ListMode.NORMAL:
            return
        self.edit.label = f"{line.action.value} "
        self.edit.set_content(line.content)
        self.mode = ListMode.EDIT

    def _handle_edit(self, event: Event, results: Results) -> Results:
        status = self.edit.handle_event(event)
        if status is EditStatus.CANCELLED:
            self.mode = ListMode.NORMAL
        elif status is EditStatus.FINISHED:
            self.mode = ListMode.NORMAL
            content = self.edit.content.strip()
            if content:
                with self.todo_file.lock() as todo_file:
                    line = todo_file.get_selected_line()
                    if line is not None:
                        todo_file.replace_line(todo_file.selected_index, line.with_content(content))
        return results


__all__ = ["HELP_ENTRIES", "LIST_ACTIONS", "List", "ListMode"]
