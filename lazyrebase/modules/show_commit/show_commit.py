"""Show-commit screen: commit overview and full diff of the selected line."""

from __future__ import annotations

from enum import Enum

from ...app_data import AppData
from ...diff.state import (
    CompleteQuickDiff,
    Diff,
    DiffComplete,
    DiffErrorCode,
    DiffSnapshot,
    LoadError,
    New,
    QuickDiff,
)
from ...errors import LazyRebaseError
from ...input.events import Event, InputOptions, KeyEvent, ResizeEvent, StandardAction, StandardEvent
from ...input.key_bindings import KeyBindings
from ...process.results import Results
from ...state import State
from ...view.render_context import RenderContext
from ...view.view_data import DisplayColor, LineSegment, ViewData, ViewLine
from ..components.help import Help
from ..module import Module, handle_scroll
from .view_builder import WhitespaceStyle, build_diff, build_overview

SPINNER_FRAMES = "-\\|/"

HELP_ENTRIES = (
    (StandardAction.SCROLL_UP, "Scroll up"),
    (StandardAction.SCROLL_DOWN, "Scroll down"),
    (StandardAction.SCROLL_JUMP_UP, "Scroll up half a page"),
    (StandardAction.SCROLL_JUMP_DOWN, "Scroll down half a page"),
    (StandardAction.SCROLL_TOP, "Scroll to the top"),
    (StandardAction.SCROLL_BOTTOM, "Scroll to the bottom"),
    (StandardAction.SCROLL_RIGHT, "Scroll right"),
    (StandardAction.SCROLL_LEFT, "Scroll left"),
    (StandardAction.SHOW_DIFF, "Show full diff"),
    (StandardAction.HELP, "Show help"),
)


class ShowCommitMode(Enum):
    OVERVIEW = "Overview"
    DIFF = "Diff"


class ShowCommit(Module):
    def __init__(self, app_data: AppData) -> None:
        self.config = app_data.config
        self.todo_file = app_data.todo_file
        self.diff_state = app_data.diff_state
        self.style = WhitespaceStyle.from_config(self.config)
        self.help = Help(HELP_ENTRIES, self.config.key_bindings)
        self.mode = ShowCommitMode.OVERVIEW
        self.hash = ""
        self.view_data = ViewData(title="Commit")
        self.loading_view_data = ViewData(title="Commit")
        self._spinner = 0
        self._built_key: tuple[str, ShowCommitMode, bool] | None = None

    def activate(self, previous_state: State) -> Results:
        results = Results()
        with self.todo_file.lock() as todo_file:
            line = todo_file.get_selected_line()
        if line is None or not line.has_reference():
            return results.error_with_return(LazyRebaseError("No valid commit to show"), State.LIST)

        self.hash = line.hash
        self.mode = ShowCommitMode.OVERVIEW
        self.view_data.reset()
        self._built_key = None

        snapshot = self.diff_state.snapshot()
        if snapshot.hash != self.hash or isinstance(snapshot.status, (New, LoadError)):
            results.load_diff(self.hash)
        return results

    def deactivate(self) -> Results:
        self.view_data.reset()
        self._built_key = None
        return Results().cancel_diff()

    def input_options(self) -> InputOptions:
        if self.help.active:
            return self.help.input_options()
        return InputOptions.RESIZE | InputOptions.MOVEMENT | InputOptions.HELP

    def read_event(self, key: str, key_bindings: KeyBindings) -> Event | None:
        if not self.help.active and key_bindings.matches(key, StandardAction.SHOW_DIFF):
            return StandardEvent(StandardAction.SHOW_DIFF)
        return None

    def build_view_data(self, context: RenderContext) -> ViewData:
        if self.help.active:
            return self.help.view_data

        snapshot = self.diff_state.snapshot()
        if snapshot.hash != self.hash:
            return self._loading("Loading Diff")
        status = snapshot.status
        if isinstance(status, QuickDiff):
            return self._loading(f"Loading Diff ({self._next_spinner()}) [{status.done}/{status.total}]")
        if isinstance(status, CompleteQuickDiff):
            return self._loading("Detecting renames and copies")
        if isinstance(status, Diff):
            return self._loading(
                f"Detecting renames and copies ({self._next_spinner()}) [{status.done}/{status.total}]"
            )
        if isinstance(status, LoadError):
            return self._load_error(status)
        if isinstance(status, DiffComplete):
            return self._complete(snapshot, context)
        return self._loading("Loading Diff")

    def _next_spinner(self) -> str:
        frame = SPINNER_FRAMES[self._spinner % len(SPINNER_FRAMES)]
        self._spinner += 1
        return frame

    def _loading(self, message: str) -> ViewData:
        self.loading_view_data.clear()
        self.loading_view_data.push_line(ViewLine.of(LineSegment(message, DisplayColor.INDICATOR)))
        return self.loading_view_data

    def _load_error(self, status: LoadError) -> ViewData:
        view_data = self.loading_view_data
        view_data.clear()
        view_data.push_line(
            ViewLine.of(LineSegment("Error loading diff. Press any key to return.", DisplayColor.INDICATOR))
        )
        view_data.push_line("")
        view_data.push_line("Reason:")
        if status.code is DiffErrorCode.NOT_FOUND:
            view_data.push_line("Commit not found")
        else:
            for line in status.message.split("\n"):
                view_data.push_line(line)
        return view_data

    def _complete(self, snapshot: DiffSnapshot, context: RenderContext) -> ViewData:
        full_width = context.is_full_width()
        key = (self.hash, self.mode, full_width)
        if key != self._built_key:
            if self.mode is ShowCommitMode.OVERVIEW:
                build_overview(self.view_data, snapshot.diff, full_width)
            else:
                build_diff(self.view_data, snapshot.diff, full_width, self.style)
            self._built_key = key
        return self.view_data

    def _toggle_mode(self) -> None:
        if self.mode is ShowCommitMode.OVERVIEW:
            self.mode = ShowCommitMode.DIFF
        else:
            self.mode = ShowCommitMode.OVERVIEW
        self.view_data.reset()
        self._built_key = None

    def _leave(self, results: Results) -> Results:
        return results.cancel_diff().state(State.LIST)

    def handle_event(self, event: Event) -> Results:
        results = Results().event(event)
        if self.help.active:
            self.help.handle_event(event)
            return results
        if isinstance(event, ResizeEvent):
            return results
        if isinstance(event, StandardEvent) and event.action is StandardAction.HELP:
            self.help.set_active()
            return results

        if isinstance(event, StandardEvent) and event.action is StandardAction.SHOW_DIFF:
            self._toggle_mode()
            return results
        if handle_scroll(event, self.view_data):
            return results
        if isinstance(event, KeyEvent):
            if self.mode is ShowCommitMode.DIFF:
                self._toggle_mode()
                return results
            return self._leave(results)
        return results


__all__ = ["ShowCommit", "ShowCommitMode"]
