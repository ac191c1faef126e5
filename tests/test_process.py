"""Driver loop tests with scripted modules and a fake terminal.

The loop is exercised end to end through ``Process.run`` where possible so
the ordering of lifecycle calls, injected events and exits is observable.
"""

from __future__ import annotations

import unittest
from collections import deque

from lazyrebase.errors import LazyRebaseError
from lazyrebase.input.events import KeyEvent
from lazyrebase.modules.error import ErrorModule
from lazyrebase.modules.module import Module
from lazyrebase.modules.registry import Modules
from lazyrebase.modules.window_size_error import WindowSizeError
from lazyrebase.process import artifact
from lazyrebase.process.exit_status import ExitStatus
from lazyrebase.process.process import Process, ProcessCallbacks
from lazyrebase.process.results import Results
from lazyrebase.search import SearchResult
from lazyrebase.state import State
from lazyrebase.view.view_data import ViewData

QUIT = [artifact.ExitStatusArtifact(ExitStatus.GOOD)]


class _FakeTerminal:
    """Scripted input; a ``(width, height)`` entry resizes and times out."""

    def __init__(self, keys=(), size=(80, 24)) -> None:
        self.keys = deque(keys)
        self.size = size
        self.frames: list[list[str]] = []
        self.commands: list[tuple[str, tuple[str, ...]]] = []
        self.command_succeeds = True

    def read_input(self) -> str:
        if not self.keys:
            return "CTRL_C"
        item = self.keys.popleft()
        if isinstance(item, tuple):
            self.size = item
            return ""
        return item

    def render(self, view_data: ViewData, context) -> None:
        self.frames.append(view_data.to_text())

    def run_external_command(self, program: str, args: tuple[str, ...]) -> bool:
        self.commands.append((program, args))
        return self.command_succeeds

    def terminal_size(self) -> tuple[int, int]:
        return self.size

    def callbacks(self) -> ProcessCallbacks:
        return ProcessCallbacks(
            read_input=self.read_input,
            render=self.render,
            run_external_command=self.run_external_command,
            terminal_size=self.terminal_size,
        )


class _ScriptedModule(Module):
    def __init__(self, name: str, calls: list[str], responses=None, on_activate=()) -> None:
        self.name = name
        self.calls = calls
        self.responses = responses or {}
        self.on_activate = list(on_activate)

    def activate(self, previous_state: State) -> Results:
        self.calls.append(f"{self.name}.activate:{previous_state.value}")
        return Results(self.on_activate)

    def deactivate(self) -> Results:
        self.calls.append(f"{self.name}.deactivate")
        return Results()

    def build_view_data(self, context) -> ViewData:
        view_data = ViewData(title=self.name)
        view_data.push_line(self.name)
        return view_data

    def handle_event(self, event) -> Results:
        self.calls.append(f"{self.name}.event:{event!r}")
        results = Results().event(event)
        if isinstance(event, KeyEvent):
            results.extend(self.responses.get(event.key, ()))
        return results

    def handle_error(self, error: BaseException) -> Results:
        self.calls.append(f"{self.name}.error:{error}")
        return Results()


class _FakeLoader:
    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []

    def load(self, hash: str) -> None:
        self.calls.append(("load", hash))

    def cancel(self) -> None:
        self.calls.append(("cancel",))


class _FakeSearchable:
    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []

    def reset(self) -> None:
        self.calls.append(("reset",))

    def search(self, term: str) -> SearchResult:
        self.calls.append(("search", term))
        return SearchResult.COMPLETE


class ProcessTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.calls: list[str] = []
        self.modules = Modules()
        self.modules.register_module(State.ERROR, ErrorModule())
        self.modules.register_module(State.WINDOW_SIZE_ERROR, WindowSizeError())

    def register(self, state: State, responses=None, on_activate=()) -> None:
        self.modules.register_module(
            state, _ScriptedModule(state.value, self.calls, responses, on_activate)
        )

    def run_process(self, terminal: _FakeTerminal, **kwargs) -> tuple[Process, ExitStatus]:
        process = Process(self.modules, terminal.callbacks(), **kwargs)
        return process, process.run()


class ProcessLoopTests(ProcessTestCase):
    def test_run_activates_renders_and_exits(self) -> None:
        self.register(State.LIST, {"q": QUIT})
        terminal = _FakeTerminal(["x", "q"])
        _process, status = self.run_process(terminal)
        self.assertIs(status, ExitStatus.GOOD)
        self.assertEqual(
            self.calls,
            ["List.activate:List", "List.event:Key('x')", "List.event:Key('q')"],
        )
        self.assertEqual(terminal.frames, [["List"], ["List"]])

    def test_timeouts_only_redraw(self) -> None:
        self.register(State.LIST, {"q": QUIT})
        terminal = _FakeTerminal(["", "", "q"])
        self.run_process(terminal)
        self.assertEqual(len(terminal.frames), 3)
        self.assertEqual(self.calls[1:], ["List.event:Key('q')"])

    def test_kill(self) -> None:
        self.register(State.LIST)
        _process, status = self.run_process(_FakeTerminal(["CTRL_C"]))
        self.assertIs(status, ExitStatus.KILL)
        self.assertEqual(self.calls, ["List.activate:List"])

    def test_state_change_deactivates_before_activating(self) -> None:
        self.register(State.LIST, {"c": [artifact.ChangeState(State.SHOW_COMMIT)]})
        self.register(State.SHOW_COMMIT, {"q": QUIT})
        process, _status = self.run_process(_FakeTerminal(["c", "q"]))
        self.assertEqual(
            self.calls,
            [
                "List.activate:List",
                "List.event:Key('c')",
                "List.deactivate",
                "ShowCommit.activate:List",
                "ShowCommit.event:Key('q')",
            ],
        )
        self.assertIs(process.state, State.SHOW_COMMIT)

    def test_change_to_current_state_is_ignored(self) -> None:
        self.register(State.LIST, {"c": [artifact.ChangeState(State.LIST)], "q": QUIT})
        self.run_process(_FakeTerminal(["c", "q"]))
        self.assertNotIn("List.deactivate", self.calls)
        self.assertEqual(self.calls.count("List.activate:List"), 1)

    def test_exit_status_stops_later_artifacts(self) -> None:
        self.register(
            State.LIST,
            {"q": [artifact.ExitStatusArtifact(ExitStatus.ABORT), artifact.ChangeState(State.SHOW_COMMIT)]},
        )
        self.register(State.SHOW_COMMIT)
        _process, status = self.run_process(_FakeTerminal(["q"]))
        self.assertIs(status, ExitStatus.ABORT)
        self.assertNotIn("ShowCommit.activate:List", self.calls)

    def test_activation_artifacts_are_applied(self) -> None:
        self.register(State.LIST, on_activate=[artifact.ExitStatusArtifact(ExitStatus.GOOD)])
        terminal = _FakeTerminal()
        _process, status = self.run_process(terminal)
        self.assertIs(status, ExitStatus.GOOD)
        self.assertEqual(terminal.frames, [])


class ProcessErrorTests(ProcessTestCase):
    def test_error_screen_returns_to_raising_state(self) -> None:
        self.register(State.LIST, {"e": [artifact.Error(LazyRebaseError("bad thing"))], "q": QUIT})
        terminal = _FakeTerminal(["e", "x", "q"])
        process, status = self.run_process(terminal)
        self.assertIs(status, ExitStatus.GOOD)
        self.assertIn(["bad thing", "Press any key to continue"], terminal.frames)
        self.assertEqual(
            self.calls,
            [
                "List.activate:List",
                "List.event:Key('e')",
                "List.deactivate",
                "List.activate:Error",
                "List.event:Key('q')",
            ],
        )
        self.assertIs(process.state, State.LIST)

    def test_error_with_explicit_return_state(self) -> None:
        self.register(
            State.LIST,
            {"e": [artifact.Error(LazyRebaseError("bad"), State.CONFIRM_REBASE)]},
        )
        self.register(State.CONFIRM_REBASE, {"q": QUIT})
        process, _status = self.run_process(_FakeTerminal(["e", "x", "q"]))
        self.assertIn("ConfirmRebase.activate:Error", self.calls)
        self.assertIs(process.state, State.CONFIRM_REBASE)

    def test_error_while_on_error_screen_moves_return_target(self) -> None:
        self.register(State.LIST)
        self.register(State.INSERT)
        process = Process(self.modules, _FakeTerminal().callbacks())
        process.apply_results([artifact.Error(LazyRebaseError("first"))])
        process.apply_results([artifact.Error(LazyRebaseError("second"), State.INSERT)])
        self.assertIs(process.state, State.ERROR)
        process.handle_input("x")
        self.assertIs(process.state, State.INSERT)


class ProcessArtifactTests(ProcessTestCase):
    def test_external_command_injects_outcome_and_resize(self) -> None:
        self.register(State.LIST, {"e": [artifact.ExternalCommand("vim", ("todo",))], "q": QUIT})
        terminal = _FakeTerminal(["e", "q"])
        self.run_process(terminal)
        self.assertEqual(terminal.commands, [("vim", ("todo",))])
        self.assertEqual(
            self.calls[2:4],
            ["List.event:Standard(ExternalCommandSuccess)", "List.event:Resize(80, 24)"],
        )

    def test_failed_external_command(self) -> None:
        self.register(State.LIST, {"e": [artifact.ExternalCommand("vim")], "q": QUIT})
        terminal = _FakeTerminal(["e", "q"])
        terminal.command_succeeds = False
        self.run_process(terminal)
        self.assertIn("List.event:Standard(ExternalCommandError)", self.calls)

    def test_enqueue_resize(self) -> None:
        self.register(State.LIST, {"r": [artifact.EnqueueResize()], "q": QUIT})
        self.run_process(_FakeTerminal(["r", "q"]))
        self.assertEqual(self.calls[2], "List.event:Resize(80, 24)")

    def test_resize_updates_render_context(self) -> None:
        self.register(State.LIST, {"q": QUIT})
        process, _status = self.run_process(_FakeTerminal([(120, 40), "q"]))
        self.assertIn("List.event:Resize(120, 40)", self.calls)
        self.assertEqual((process.render_context.width, process.render_context.height), (120, 40))

    def test_diff_artifacts_reach_loader(self) -> None:
        self.register(State.LIST)
        loader = _FakeLoader()
        process = Process(self.modules, _FakeTerminal().callbacks(), loader)
        process.apply_results([artifact.LoadDiff("abc"), artifact.CancelDiff()])
        self.assertEqual(loader.calls, [("load", "abc"), ("cancel",)])

    def test_search_artifacts_reach_searchable(self) -> None:
        self.register(State.LIST)
        process = Process(self.modules, _FakeTerminal().callbacks())
        process.apply_results([artifact.SearchTerm("ignored")])
        searchable = _FakeSearchable()
        process.apply_results(
            [artifact.SearchableArtifact(searchable), artifact.SearchTerm("fix"), artifact.SearchCancel()]
        )
        self.assertEqual(searchable.calls, [("search", "fix"), ("reset",)])


class WindowSizeTests(ProcessTestCase):
    def test_small_terminal_overlays_without_lifecycle(self) -> None:
        self.register(State.LIST, {"q": QUIT})
        terminal = _FakeTerminal([(80, 24), "q"], size=(10, 3))
        process, status = self.run_process(terminal)
        self.assertIs(status, ExitStatus.GOOD)
        self.assertEqual(terminal.frames[0], ["Size!"])
        self.assertEqual(self.calls, ["List.activate:List", "List.event:Key('q')"])
        self.assertIs(process.state, State.LIST)

    def test_shrinking_mid_session(self) -> None:
        self.register(State.LIST, {"q": QUIT})
        terminal = _FakeTerminal([(30, 3), (30, 10), "q"])
        self.run_process(terminal)
        self.assertIn(["Window too small"], terminal.frames)
        self.assertNotIn("List.deactivate", self.calls)
        self.assertEqual(self.calls.count("List.activate:List"), 1)


if __name__ == "__main__":
    unittest.main()
