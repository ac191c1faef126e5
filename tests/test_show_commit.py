from __future__ import annotations

import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from helpers import ModuleHarness, make_app_data

from lazyrebase.config import Config
from lazyrebase.diff.model import Commit, CommitDiff, Delta, DiffLine, FileStatus, Origin, Status, User
from lazyrebase.diff.state import (
    CompleteQuickDiff,
    Diff,
    DiffComplete,
    DiffErrorCode,
    LoadError,
    New,
    QuickDiff,
)
from lazyrebase.errors import LazyRebaseError
from lazyrebase.input.events import KeyEvent, ResizeEvent, StandardAction, StandardEvent
from lazyrebase.modules.show_commit import ShowCommit
from lazyrebase.modules.show_commit.show_commit import ShowCommitMode
from lazyrebase.modules.show_commit.view_builder import WhitespaceStyle, content_segments
from lazyrebase.process import artifact
from lazyrebase.state import State
from lazyrebase.view.view_data import DisplayColor


def _sample_diff(hash: str = "aaa111") -> CommitDiff:
    file = FileStatus(Path("src/app.py"), Path("src/app.py"), Status.MODIFIED)
    delta = Delta("def main():", old_lines_start=1, new_lines_start=1, old_number_lines=2, new_number_lines=3)
    delta.add_line(DiffLine(Origin.CONTEXT, "import os", 1, 1))
    delta.add_line(DiffLine(Origin.DELETION, "import sys", 2, None))
    delta.add_line(DiffLine(Origin.ADDITION, "import re", None, 2))
    delta.add_line(DiffLine(Origin.ADDITION, "import json", None, 3))
    file.add_delta(delta)
    commit = Commit(
        hash=hash,
        author=User("Ada", "ada@example.com"),
        committed_date=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        summary="first commit",
        message="longer body",
    )
    return CommitDiff(
        commit=commit,
        file_statuses=[file],
        number_files_changed=1,
        number_insertions=2,
        number_deletions=1,
    )


class ShowCommitActivationTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.app_data = make_app_data(Path(self._tmp.name))
        self.module = ShowCommit(self.app_data)
        self.harness = ModuleHarness(self.module)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_requests_load_when_cache_holds_other_commit(self) -> None:
        self.assertEqual(self.harness.activate(), [artifact.LoadDiff("aaa111")])
        self.assertEqual(self.module.hash, "aaa111")

    def test_reuses_completed_cache_entry(self) -> None:
        self.app_data.diff_state.reset("aaa111")
        self.app_data.diff_state.publish("aaa111", DiffComplete(), _sample_diff())
        self.assertEqual(self.harness.activate(), [])

    def test_reuses_in_progress_load(self) -> None:
        self.app_data.diff_state.reset("aaa111")
        self.app_data.diff_state.publish("aaa111", QuickDiff(1, 4))
        self.assertEqual(self.harness.activate(), [])

    def test_retries_after_error_or_cancel(self) -> None:
        self.app_data.diff_state.reset("aaa111")
        self.app_data.diff_state.publish("aaa111", LoadError("boom"))
        self.assertEqual(self.harness.activate(), [artifact.LoadDiff("aaa111")])

        self.app_data.diff_state.reset("aaa111")
        self.assertEqual(self.app_data.diff_state.snapshot().status, New())
        self.assertEqual(self.harness.activate(), [artifact.LoadDiff("aaa111")])

    def test_line_without_commit_reports_error(self) -> None:
        app_data = make_app_data(Path(self._tmp.name), "break\n")
        results = ModuleHarness(ShowCommit(app_data)).activate()
        self.assertEqual(
            results,
            [artifact.Error(LazyRebaseError("No valid commit to show"), State.LIST)],
        )


class ShowCommitRenderTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.app_data = make_app_data(Path(self._tmp.name))
        self.state = self.app_data.diff_state
        self.module = ShowCommit(self.app_data)
        self.harness = ModuleHarness(self.module)
        self.harness.activate()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_loading_messages_follow_status(self) -> None:
        self.assertEqual(self.harness.render(), ["Loading Diff"])

        self.state.reset("aaa111")
        self.state.publish("aaa111", QuickDiff(1, 3))
        self.assertEqual(self.harness.render(), ["Loading Diff (-) [1/3]"])
        self.assertEqual(self.harness.render(), ["Loading Diff (\\) [1/3]"])

        self.state.publish("aaa111", CompleteQuickDiff())
        self.assertEqual(self.harness.render(), ["Detecting renames and copies"])

        self.state.publish("aaa111", Diff(2, 3))
        self.assertEqual(self.harness.render(), ["Detecting renames and copies (|) [2/3]"])

    def test_stale_hash_renders_loading(self) -> None:
        self.state.reset("bbb222")
        self.state.publish("bbb222", DiffComplete(), _sample_diff("bbb222"))
        self.assertEqual(self.harness.render(), ["Loading Diff"])

    def test_not_found_error(self) -> None:
        self.state.reset("aaa111")
        self.state.publish("aaa111", LoadError("ignored", DiffErrorCode.NOT_FOUND))
        self.assertEqual(
            self.harness.render(),
            ["Error loading diff. Press any key to return.", "", "Reason:", "Commit not found"],
        )

    def test_generic_error_lists_message_lines(self) -> None:
        self.state.reset("aaa111")
        self.state.publish("aaa111", LoadError("first\nsecond"))
        self.assertEqual(self.harness.render()[-2:], ["first", "second"])

    def test_overview_of_complete_diff(self) -> None:
        self.state.reset("aaa111")
        self.state.publish("aaa111", DiffComplete(), _sample_diff())
        lines = self.harness.render()
        self.assertEqual(lines[0], "Commit: aaa111")
        self.assertTrue(lines[1].startswith("Date: "))
        self.assertIn("Author: Ada <ada@example.com>", lines)
        self.assertIn("first commit", lines)
        self.assertIn("longer body", lines)
        self.assertIn("1 file with 2 insertions and 1 deletion", lines)
        self.assertEqual(lines[-1], "modified: src/app.py")

    def test_compact_overview(self) -> None:
        self.state.reset("aaa111")
        self.state.publish("aaa111", DiffComplete(), _sample_diff())
        lines = self.harness.render(width=40)
        self.assertEqual(lines[0], "aaa111")
        self.assertIn("A: Ada <ada@example.com>", lines)
        self.assertIn("1 / 2 / 1", lines)
        self.assertEqual(lines[-1], "M src/app.py")

    def test_diff_view_has_gutters(self) -> None:
        self.state.reset("aaa111")
        self.state.publish("aaa111", DiffComplete(), _sample_diff())
        self.harness.handle("d")
        self.assertIs(self.module.mode, ShowCommitMode.DIFF)
        lines = self.harness.render()
        self.assertEqual(lines[:2], ["Commit: aaa111", "1 file with 2 insertions and 1 deletion"])
        self.assertIn("@@ -1,2 +1,3 @@ def main():", lines)
        self.assertIn("1 1| import os", lines)
        self.assertIn("2  | import sys", lines)
        self.assertIn("  2| import re", lines)
        self.assertIn("  3| import json", lines)


class ShowCommitEventTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.app_data = make_app_data(Path(self._tmp.name))
        self.app_data.diff_state.reset("aaa111")
        self.app_data.diff_state.publish("aaa111", DiffComplete(), _sample_diff())
        self.module = ShowCommit(self.app_data)
        self.harness = ModuleHarness(self.module)
        self.harness.activate()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_show_diff_toggles_mode(self) -> None:
        self.assertEqual(
            self.harness.handle("d"),
            [artifact.EventArtifact(StandardEvent(StandardAction.SHOW_DIFF))],
        )
        self.assertIs(self.module.mode, ShowCommitMode.DIFF)
        self.harness.handle("d")
        self.assertIs(self.module.mode, ShowCommitMode.OVERVIEW)

    def test_other_key_in_diff_returns_to_overview(self) -> None:
        self.harness.handle("d")
        self.assertEqual(self.harness.handle("x"), [artifact.EventArtifact(KeyEvent("x"))])
        self.assertIs(self.module.mode, ShowCommitMode.OVERVIEW)

    def test_other_key_in_overview_leaves(self) -> None:
        self.assertEqual(
            self.harness.handle("x"),
            [
                artifact.EventArtifact(KeyEvent("x")),
                artifact.CancelDiff(),
                artifact.ChangeState(State.LIST),
            ],
        )

    def test_deactivate_cancels_load(self) -> None:
        self.assertEqual(self.module.deactivate(), [artifact.CancelDiff()])

    def test_scroll_and_resize_stay(self) -> None:
        self.assertEqual(
            self.harness.handle("DOWN"),
            [artifact.EventArtifact(StandardEvent(StandardAction.SCROLL_DOWN))],
        )
        self.assertEqual(
            self.harness.handle(ResizeEvent(100, 40)),
            [artifact.EventArtifact(ResizeEvent(100, 40))],
        )

    def test_help_overlay_swallows_next_key(self) -> None:
        self.harness.handle("?")
        self.assertTrue(self.module.help.active)
        self.assertEqual(self.harness.handle("x"), [artifact.EventArtifact(KeyEvent("x"))])
        self.assertFalse(self.module.help.active)


class ContentSegmentTests(unittest.TestCase):
    def test_leading_and_trailing_whitespace_symbols(self) -> None:
        style = WhitespaceStyle.from_config(Config())
        segments = content_segments("a.txt", "  \tx  ", DisplayColor.DIFF_ADD, style)
        self.assertEqual([segment.text for segment in segments], ["··→", "x", "··"])
        self.assertIs(segments[0].color, DisplayColor.DIFF_WHITESPACE)

    def test_hidden_whitespace_expands_tabs(self) -> None:
        style = WhitespaceStyle.from_config(Config(diff_show_whitespace="none", diff_tab_width=2))
        segments = content_segments("a.txt", "\tx ", DisplayColor.DIFF_ADD, style)
        self.assertEqual([segment.text for segment in segments], ["  ", "x"])


if __name__ == "__main__":
    unittest.main()
