"""Runtime composition layer for lazyrebase.

Loads configuration and the todo file, wires modules, diff loading and the
terminal into a ``Process``, runs it, and writes the todo file for the exit
status the loop ended with.
"""

from __future__ import annotations

import logging
import os
import sys
from functools import partial
from pathlib import Path

from ..app_data import AppData
from ..config import Config, load_config
from ..diff.engine import GitDiffEngine
from ..diff.loader import DiffLoader
from ..diff.state import DiffState
from ..errors import ConfigError, FileReadError, FileWriteError
from ..input.reader import read_key
from ..input.router import EventRouter
from ..logging_setup import configure as configure_logging
from ..modules.confirm_abort import ConfirmAbort
from ..modules.confirm_rebase import ConfirmRebase
from ..modules.error import ErrorModule
from ..modules.external_editor import ExternalEditor
from ..modules.insert import Insert
from ..modules.list import List
from ..modules.registry import Modules
from ..modules.show_commit import ShowCommit
from ..modules.window_size_error import WindowSizeError
from ..process.exit_status import ExitStatus
from ..process.process import Process, ProcessCallbacks
from ..state import State
from ..todo_file.shared import SharedTodoFile
from ..todo_file.todo_file import TodoFile
from .editor import run_external_command
from .renderer import render_frame
from .terminal import TerminalController
from .theme import UITheme, resolve_theme

logger = logging.getLogger(__name__)

INPUT_POLL_MS = 100


def build_modules(app_data: AppData) -> Modules:
    """Registry with one module per ``State``."""
    modules = Modules(EventRouter(app_data.config.key_bindings))
    modules.register_module(State.CONFIRM_ABORT, ConfirmAbort(app_data))
    modules.register_module(State.CONFIRM_REBASE, ConfirmRebase(app_data))
    modules.register_module(State.ERROR, ErrorModule())
    modules.register_module(State.EXTERNAL_EDITOR, ExternalEditor(app_data))
    modules.register_module(State.INSERT, Insert(app_data))
    modules.register_module(State.LIST, List(app_data))
    modules.register_module(State.SHOW_COMMIT, ShowCommit(app_data))
    modules.register_module(State.WINDOW_SIZE_ERROR, WindowSizeError())
    return modules


def open_todo_file(path: Path, config: Config) -> TodoFile:
    todo_file = TodoFile(path, comment_char=config.comment_char, undo_limit=config.undo_limit)
    todo_file.load_file()
    return todo_file


def finish(status: ExitStatus, todo_file: SharedTodoFile) -> ExitStatus:
    """Persist the todo file for ``status``: written on Good, emptied on Abort."""
    if status not in (ExitStatus.GOOD, ExitStatus.ABORT):
        return status
    with todo_file.lock() as todo:
        try:
            if status is ExitStatus.ABORT:
                todo.set_lines([])
            todo.write_file()
        except FileWriteError:
            return ExitStatus.FILE_WRITE_ERROR
    return status


def _render(terminal: TerminalController, theme: UITheme, view_data, context) -> None:
    terminal.write(render_frame(view_data, context, theme))


def run_editor(todo_path: Path, *, log_level: str | None = None, no_color: bool = False) -> int:
    """Run the interactive editor on ``todo_path``; returns the process exit code."""
    configure_logging(log_level)
    path = todo_path.resolve()
    try:
        config = load_config(path.parent)
    except ConfigError as exc:
        logger.error("configuration error: %s", exc)
        print(exc, file=sys.stderr)
        return ExitStatus.CONFIG_ERROR.to_code()

    try:
        todo_file = open_todo_file(path, config)
    except FileReadError as exc:
        logger.error("cannot read todo file: %s", exc)
        print(exc, file=sys.stderr)
        if exc.__cause__ is not None:
            print(exc.__cause__, file=sys.stderr)
        return ExitStatus.FILE_READ_ERROR.to_code()

    if not os.isatty(sys.stdin.fileno()):
        print("lazyrebase needs an interactive terminal", file=sys.stderr)
        return ExitStatus.STATE_ERROR.to_code()

    shared = SharedTodoFile(todo_file)
    diff_state = DiffState()
    engine = GitDiffEngine(path.parent, config.diff_options())
    diff_loader = DiffLoader(diff_state, engine.load_commit_diff)
    app_data = AppData(config=config, todo_file=shared, diff_state=diff_state)
    modules = build_modules(app_data)

    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    theme = resolve_theme(no_color=no_color or "NO_COLOR" in os.environ)
    callbacks = ProcessCallbacks(
        read_input=partial(read_key, stdin_fd, INPUT_POLL_MS),
        render=partial(_render, terminal, theme),
        run_external_command=partial(
            run_external_command,
            disable_tui_mode=terminal.disable_tui_mode,
            enable_tui_mode=terminal.enable_tui_mode,
        ),
        terminal_size=terminal.size,
    )
    process = Process(modules, callbacks, diff_loader)

    with terminal.raw_mode():
        status = process.run()
    diff_loader.cancel()

    status = finish(status, shared)
    if status is ExitStatus.FILE_WRITE_ERROR:
        print(f"Error writing file: {path}", file=sys.stderr)
    return status.to_code()


__all__ = ["build_modules", "finish", "open_todo_file", "run_editor"]
