from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from helpers import ModuleHarness, make_app_data, selected_index, todo_lines

from lazyrebase.config import Config
from lazyrebase.input.events import KeyEvent, StandardAction, StandardEvent
from lazyrebase.modules.list import List, ListMode
from lazyrebase.process import artifact
from lazyrebase.process.exit_status import ExitStatus
from lazyrebase.state import State
from lazyrebase.view.render_context import RenderContext


def _echo(action: StandardAction) -> artifact.EventArtifact:
    return artifact.EventArtifact(StandardEvent(action))


class ListModuleTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.directory = Path(self._tmp.name)
        self._build()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _build(self, text: str | None = None, config: Config | None = None) -> None:
        if text is None:
            self.app_data = make_app_data(self.directory, config=config)
        else:
            self.app_data = make_app_data(self.directory, text, config=config)
        self.module = List(self.app_data)
        self.harness = ModuleHarness(self.module, self.app_data.config)

    def test_activate_publishes_searchable(self) -> None:
        results = self.harness.activate()
        self.assertEqual(len(results), 1)
        self.assertIsInstance(results[0], artifact.SearchableArtifact)
        self.assertIs(results[0].searchable, self.module.search)

    def test_renders_full_and_compact_lines(self) -> None:
        self.assertEqual(
            self.harness.render(),
            [
                "> pick   aaa111 first commit",
                "  pick   bbb222 second commit",
                "  pick   ccc333 third commit",
            ],
        )
        self.assertEqual(self.harness.render(width=40)[0], "> p aaa111 first commit")

    def test_empty_todo_renders_notice(self) -> None:
        self._build("# nothing\n")
        self.assertEqual(self.harness.render(), ["Rebase todo file is empty"])

    def test_cursor_movement(self) -> None:
        self.assertEqual(self.harness.handle("DOWN"), [_echo(StandardAction.MOVE_CURSOR_DOWN)])
        self.assertEqual(selected_index(self.app_data), 1)
        self.harness.handle("END")
        self.assertEqual(selected_index(self.app_data), 2)
        self.harness.handle("DOWN")
        self.assertEqual(selected_index(self.app_data), 2)
        self.harness.handle("HOME")
        self.assertEqual(selected_index(self.app_data), 0)
        self.harness.handle("UP")
        self.assertEqual(selected_index(self.app_data), 0)

    def test_action_changes_apply_to_selection(self) -> None:
        self.harness.handle("DOWN")
        self.assertEqual(self.harness.handle("s"), [_echo(StandardAction.ACTION_SQUASH)])
        self.harness.handle("HOME")
        self.harness.handle("r")
        self.assertEqual(
            todo_lines(self.app_data),
            ["reword aaa111 first commit", "squash bbb222 second commit", "pick ccc333 third commit"],
        )

    def test_auto_select_next_moves_cursor_after_action(self) -> None:
        self._build(config=Config(auto_select_next=True))
        self.harness.handle("f")
        self.assertEqual(selected_index(self.app_data), 1)
        self.assertEqual(todo_lines(self.app_data)[0], "fixup aaa111 first commit")

    def test_break_toggles_after_cursor(self) -> None:
        self.harness.handle("b")
        self.assertEqual(todo_lines(self.app_data)[1], "break")
        self.harness.handle("b")
        self.assertEqual(len(todo_lines(self.app_data)), 3)

    def test_swap_and_remove(self) -> None:
        self.harness.handle("j")
        self.assertEqual(todo_lines(self.app_data)[:2], ["pick bbb222 second commit", "pick aaa111 first commit"])
        self.assertEqual(selected_index(self.app_data), 1)
        self.harness.handle("k")
        self.assertEqual(todo_lines(self.app_data)[0], "pick aaa111 first commit")
        self.harness.handle("DELETE")
        self.assertEqual(todo_lines(self.app_data), ["pick bbb222 second commit", "pick ccc333 third commit"])

    def test_visual_mode_changes_range(self) -> None:
        self.harness.handle("v")
        self.assertIs(self.module.mode, ListMode.VISUAL)
        self.harness.handle("DOWN")
        self.harness.handle("d")
        self.assertEqual(
            todo_lines(self.app_data),
            ["drop aaa111 first commit", "drop bbb222 second commit", "pick ccc333 third commit"],
        )
        view = self.module.build_view_data(RenderContext(80, 24))
        first, second, third = view.lines
        self.assertTrue(first.selected and second.selected)
        self.assertFalse(third.selected)
        self.assertTrue(all(segment.dim for segment in first.segments))
        self.assertFalse(any(segment.dim for segment in second.segments))
        self.assertEqual(view.trailing_lines[0].text(), "-- VISUAL --")

        self.harness.handle("v")
        self.assertIs(self.module.mode, ListMode.NORMAL)

    def test_undo_and_redo(self) -> None:
        self.harness.handle("d")
        self.harness.handle("CTRL_Z")
        self.assertEqual(todo_lines(self.app_data)[0], "pick aaa111 first commit")
        self.harness.handle("CTRL_Y")
        self.assertEqual(todo_lines(self.app_data)[0], "drop aaa111 first commit")

    def test_state_changes(self) -> None:
        self.assertEqual(
            self.harness.handle("c"),
            [_echo(StandardAction.SHOW_COMMIT), artifact.ChangeState(State.SHOW_COMMIT)],
        )
        self.assertEqual(
            self.harness.handle("!"),
            [_echo(StandardAction.OPEN_IN_EDITOR), artifact.ChangeState(State.EXTERNAL_EDITOR)],
        )
        self.assertEqual(
            self.harness.handle("I"),
            [_echo(StandardAction.INSERT_LINE), artifact.ChangeState(State.INSERT)],
        )
        self.assertEqual(
            self.harness.handle("w"),
            [_echo(StandardAction.REBASE), artifact.ChangeState(State.CONFIRM_REBASE)],
        )
        self.assertEqual(
            self.harness.handle("q"),
            [_echo(StandardAction.ABORT), artifact.ChangeState(State.CONFIRM_ABORT)],
        )

    def test_show_commit_needs_a_hash(self) -> None:
        self._build("break\npick aaa111 first\n")
        self.assertEqual(self.harness.handle("c"), [_echo(StandardAction.SHOW_COMMIT)])

    def test_force_rebase_and_force_abort(self) -> None:
        self.assertEqual(
            self.harness.handle("W"),
            [_echo(StandardAction.FORCE_REBASE), artifact.ExitStatusArtifact(ExitStatus.GOOD)],
        )
        self.assertEqual(
            self.harness.handle("Q"),
            [_echo(StandardAction.FORCE_ABORT), artifact.ExitStatusArtifact(ExitStatus.ABORT)],
        )
        self.assertEqual(todo_lines(self.app_data), [])

    def test_search_typing_emits_terms(self) -> None:
        self.assertEqual(self.harness.handle("/"), [_echo(StandardAction.SEARCH_START)])
        self.assertIs(self.module.mode, ListMode.SEARCH)
        self.assertEqual(
            self.harness.handle("s"),
            [artifact.EventArtifact(KeyEvent("s")), artifact.SearchTerm("s")],
        )
        self.assertEqual(
            self.harness.handle("e"),
            [artifact.EventArtifact(KeyEvent("e")), artifact.SearchTerm("se")],
        )
        self.assertEqual(self.harness.render()[-1], "/se ")
        self.assertEqual(self.harness.handle("ESC"), [artifact.EventArtifact(KeyEvent("ESC")), artifact.SearchCancel()])
        self.assertIs(self.module.mode, ListMode.NORMAL)

    def test_search_moves_cursor_and_cycles(self) -> None:
        self.module.search.search("commit")
        self.harness.render()
        self.assertEqual(selected_index(self.app_data), 0)

        self.module.search.reset()
        self.harness.handle("DOWN")
        self.module.search.search("third")
        self.harness.render()
        self.assertEqual(selected_index(self.app_data), 2)

        self.module.search.search("commit")
        self.harness.handle("n")
        self.assertEqual(selected_index(self.app_data), 0)
        self.harness.handle("N")
        self.assertEqual(selected_index(self.app_data), 2)
        self.assertEqual(self.harness.render()[-1], "/commit [3/3]")

    def test_edit_exec_line(self) -> None:
        self._build("exec make test\npick aaa111 first\n")
        self.assertEqual(self.harness.handle("E"), [_echo(StandardAction.EDIT)])
        self.assertIs(self.module.mode, ListMode.EDIT)
        self.harness.handle("s")
        self.harness.handle("ENTER")
        self.assertIs(self.module.mode, ListMode.NORMAL)
        self.assertEqual(todo_lines(self.app_data)[0], "exec make tests")

    def test_edit_ignored_for_pick_lines(self) -> None:
        self.harness.handle("E")
        self.assertIs(self.module.mode, ListMode.NORMAL)

    def test_help_overlay(self) -> None:
        self.harness.handle("?")
        self.assertTrue(self.module.help.active)
        self.assertTrue(self.harness.render()[0].strip().startswith("Key"))
        self.harness.handle("x")
        self.assertFalse(self.module.help.active)


if __name__ == "__main__":
    unittest.main()
