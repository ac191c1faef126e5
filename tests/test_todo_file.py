"""Tests for todo line parsing and the editable todo list.

Covers the line grammar, cursor and visual range handling, edits and the
bounded undo history, plus reading and writing the file on disk.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from lazyrebase.errors import FileReadError, FileWriteError, ParseError
from lazyrebase.todo_file import Action, Line, TodoFile


class LineParsingTests(unittest.TestCase):
    def test_commit_actions_and_abbreviations(self) -> None:
        self.assertEqual(Line.parse("pick abc123 Add feature"), Line(Action.PICK, "abc123", "Add feature"))
        self.assertEqual(Line.parse("s abc123 squash me"), Line(Action.SQUASH, "abc123", "squash me"))
        self.assertEqual(Line.parse("  drop   abc123  "), Line(Action.DROP, "abc123", ""))

    def test_fixup_options(self) -> None:
        line = Line.parse("fixup -C abc123 Reword from fixup")
        self.assertEqual((line.option, line.hash, line.content), ("-C", "abc123", "Reword from fixup"))
        self.assertEqual(line.to_text(), "fixup -C abc123 Reword from fixup")
        self.assertIsNone(line.with_action(Action.PICK).option)

    def test_static_and_editable_lines(self) -> None:
        self.assertEqual(Line.parse("exec make test").to_text(), "exec make test")
        self.assertEqual(Line.parse("break").to_text(), "break")
        self.assertEqual(Line.parse("x echo hi"), Line(Action.EXEC, content="echo hi"))
        self.assertEqual(Line.parse("update-ref refs/heads/topic").content, "refs/heads/topic")
        self.assertTrue(Line.parse("label onto").is_editable())
        self.assertFalse(Line.parse("break").is_editable())

    def test_static_lines_keep_their_action(self) -> None:
        exec_line = Line.parse("exec make")
        self.assertIs(exec_line.with_action(Action.DROP), exec_line)
        pick = Line.parse("pick abc")
        self.assertIs(pick.with_action(Action.BREAK), pick)

    def test_has_reference(self) -> None:
        self.assertTrue(Line.parse("edit abc").has_reference())
        self.assertFalse(Line.parse("exec abc").has_reference())

    def test_invalid_lines(self) -> None:
        for text in ("bogus abc", "pick", "exec", ""):
            with self.assertRaises(ParseError, msg=text):
                Line.parse(text)


class TodoFileTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "git-rebase-todo"
        self.todo = TodoFile(self.path)
        self.todo.set_lines([Line(Action.PICK, hash) for hash in ("a", "b", "c", "d")])

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _hashes(self) -> list[str]:
        return [line.hash or line.action.value for line in self.todo.lines]

    def test_load_skips_comments_and_blank_lines(self) -> None:
        self.path.write_text("# header\n\npick a one\n  # indented\nexec ls\n", encoding="utf-8")
        self.todo.load_file()
        self.assertEqual([line.to_text() for line in self.todo.lines], ["pick a one", "exec ls"])
        self.assertEqual(self.todo.selected_index, 0)

    def test_custom_comment_char(self) -> None:
        self.path.write_text("; comment\npick a\n", encoding="utf-8")
        todo = TodoFile(self.path, comment_char=";")
        todo.load_file()
        self.assertEqual(len(todo), 1)

    def test_load_reports_line_number_with_cause(self) -> None:
        self.path.write_text("pick a\nwhat b\n", encoding="utf-8")
        with self.assertRaises(FileReadError) as ctx:
            self.todo.load_file()
        self.assertIn("(line 2)", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, ParseError)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileReadError):
            TodoFile(Path(self._tmp.name) / "missing").load_file()

    def test_write_file(self) -> None:
        self.todo.update_range(Action.FIXUP)
        self.todo.write_file()
        self.assertEqual(self.path.read_text(encoding="utf-8"), "fixup a\npick b\npick c\npick d\n")

    def test_write_failure(self) -> None:
        todo = TodoFile(Path(self._tmp.name))
        with self.assertRaises(FileWriteError):
            todo.write_file()

    def test_cursor_is_clamped(self) -> None:
        self.assertEqual(self.todo.move_cursor(10), 3)
        self.assertEqual(self.todo.move_cursor(-10), 0)
        self.todo.set_lines([])
        self.assertEqual(self.todo.set_selected(5), 0)
        self.assertIsNone(self.todo.get_selected_line())

    def test_visual_range_updates_every_line(self) -> None:
        self.todo.set_selected(2)
        self.todo.start_visual_mode()
        self.todo.move_cursor(-1)
        self.assertEqual(self.todo.selected_range(), (1, 2))
        self.todo.update_range(Action.DROP)
        self.assertEqual(
            [line.action for line in self.todo.lines],
            [Action.PICK, Action.DROP, Action.DROP, Action.PICK],
        )

    def test_unchanged_update_records_nothing(self) -> None:
        self.assertFalse(self.todo.update_range(Action.PICK))
        self.assertFalse(self.todo.undo())

    def test_swap_moves_range_with_cursor(self) -> None:
        self.todo.set_selected(1)
        self.todo.start_visual_mode()
        self.todo.move_cursor(1)
        self.assertTrue(self.todo.swap_range_down())
        self.assertEqual(self._hashes(), ["a", "d", "b", "c"])
        self.assertEqual(self.todo.selected_range(), (2, 3))
        self.assertFalse(self.todo.swap_range_down())
        self.assertTrue(self.todo.swap_range_up())
        self.assertEqual(self._hashes(), ["a", "b", "c", "d"])

    def test_swap_at_edges_is_noop(self) -> None:
        self.assertFalse(self.todo.swap_range_up())
        self.todo.set_selected(3)
        self.assertFalse(self.todo.swap_range_down())

    def test_remove_range_leaves_cursor_at_start(self) -> None:
        self.todo.set_selected(1)
        self.todo.start_visual_mode()
        self.todo.move_cursor(1)
        self.todo.remove_range()
        self.assertEqual(self._hashes(), ["a", "d"])
        self.assertEqual(self.todo.selected_index, 1)
        self.assertIsNone(self.todo.visual_anchor)

    def test_toggle_break(self) -> None:
        self.todo.set_selected(1)
        self.todo.toggle_break()
        self.assertEqual(self._hashes(), ["a", "b", "break", "c", "d"])
        self.todo.toggle_break()
        self.assertEqual(self._hashes(), ["a", "b", "c", "d"])

    def test_add_line_selects_it(self) -> None:
        self.todo.add_line(2, Line(Action.EXEC, content="make"))
        self.assertEqual(self.todo.selected_index, 2)
        self.assertEqual(self.todo.get_selected_line().to_text(), "exec make")

    def test_undo_and_redo_restore_selection(self) -> None:
        self.todo.set_selected(2)
        self.todo.remove_range()
        self.todo.set_selected(0)
        self.assertTrue(self.todo.undo())
        self.assertEqual(self._hashes(), ["a", "b", "c", "d"])
        self.assertEqual(self.todo.selected_index, 2)
        self.assertTrue(self.todo.redo())
        self.assertEqual(self._hashes(), ["a", "b", "d"])
        self.assertFalse(self.todo.redo())

    def test_new_edit_clears_redo(self) -> None:
        self.todo.update_range(Action.DROP)
        self.todo.undo()
        self.todo.update_range(Action.EDIT)
        self.assertFalse(self.todo.redo())

    def test_undo_limit_drops_oldest(self) -> None:
        todo = TodoFile(self.path, undo_limit=2)
        todo.set_lines([Line(Action.PICK, "a")])
        for action in (Action.DROP, Action.EDIT, Action.SQUASH):
            todo.update_range(action)
        self.assertTrue(todo.undo())
        self.assertTrue(todo.undo())
        self.assertFalse(todo.undo())
        self.assertIs(todo.lines[0].action, Action.DROP)

    def test_set_lines_forgets_history(self) -> None:
        self.todo.update_range(Action.DROP)
        self.todo.set_lines([Line(Action.PICK, "z")])
        self.assertFalse(self.todo.undo())

    def test_noop_detection(self) -> None:
        self.todo.set_lines([Line(Action.NOOP)])
        self.assertTrue(self.todo.is_noop())
        self.todo.set_lines([])
        self.assertFalse(self.todo.is_noop())
        self.assertTrue(self.todo.is_empty())


if __name__ == "__main__":
    unittest.main()
