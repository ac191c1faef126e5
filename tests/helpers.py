"""Shared fixtures for module tests: a todo file on disk and a routed harness."""

from __future__ import annotations

from pathlib import Path

from lazyrebase.app_data import AppData
from lazyrebase.config import Config
from lazyrebase.diff.state import DiffState
from lazyrebase.input.events import RawInput
from lazyrebase.input.router import EventRouter
from lazyrebase.modules.module import Module
from lazyrebase.process.results import Results
from lazyrebase.state import State
from lazyrebase.todo_file.shared import SharedTodoFile
from lazyrebase.todo_file.todo_file import TodoFile
from lazyrebase.view.render_context import RenderContext

DEFAULT_TODO = "pick aaa111 first commit\npick bbb222 second commit\npick ccc333 third commit\n"


def write_todo(directory: Path, text: str = DEFAULT_TODO) -> Path:
    path = directory / "git-rebase-todo"
    path.write_text(text, encoding="utf-8")
    return path


def make_app_data(directory: Path, text: str = DEFAULT_TODO, config: Config | None = None) -> AppData:
    config = config if config is not None else Config()
    todo_file = TodoFile(write_todo(directory, text), comment_char=config.comment_char, undo_limit=config.undo_limit)
    todo_file.load_file()
    return AppData(config=config, todo_file=SharedTodoFile(todo_file), diff_state=DiffState())


def todo_lines(app_data: AppData) -> list[str]:
    with app_data.todo_file.lock() as todo_file:
        return [line.to_text() for line in todo_file.lines]


def selected_index(app_data: AppData) -> int:
    with app_data.todo_file.lock() as todo_file:
        return todo_file.selected_index


class ModuleHarness:
    """Drive one module the way the registry does, without the driver."""

    def __init__(self, module: Module, config: Config | None = None) -> None:
        self.module = module
        self.router = EventRouter((config if config is not None else Config()).key_bindings)

    def activate(self, previous_state: State = State.LIST) -> Results:
        return self.module.activate(previous_state)

    def handle(self, raw: RawInput) -> Results:
        event = self.router.route(raw, self.module.input_options(), self.module.read_event)
        if event is None:
            return Results()
        return self.module.handle_event(event)

    def handle_all(self, *raws: RawInput) -> list[Results]:
        return [self.handle(raw) for raw in raws]

    def render(self, width: int = 80, height: int = 24) -> list[str]:
        return self.module.build_view_data(RenderContext(width, height)).to_text()
