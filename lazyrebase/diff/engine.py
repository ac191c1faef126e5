"""Git-backed diff engine.

Builds a ``CommitDiff`` for one commit using two passes over ``git`` output:
a cheap ``--numstat`` pass that counts files and lines, then a full patch
pass with rename/copy detection that yields deltas. Both passes report
progress through a callback that may ask the engine to stop.
"""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .model import Commit, CommitDiff, Delta, DiffLine, FileMode, FileStatus, Origin, Status, User
from .state import CompleteQuickDiff, Diff, DiffErrorCode, LoadStatus, QuickDiff

logger = logging.getLogger(__name__)

_HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@ ?(.*)$")
_DIFF_HEADER_PREFIX = "diff --git "
_QUOTE_ESCAPES = {"a": 7, "b": 8, "t": 9, "n": 10, "v": 11, "f": 12, "r": 13, '"': 34, "\\": 92}
_COMMIT_FORMAT = "%H%x00%P%x00%an%x00%ae%x00%at%x00%cn%x00%ce%x00%ct%x00%s%x00%b"

ProgressCallback = Callable[[LoadStatus], bool]


class DiffLoadError(Exception):
    """Diff could not be produced; ``code`` tells not-found from other failures."""

    def __init__(self, message: str, code: DiffErrorCode = DiffErrorCode.GENERIC) -> None:
        super().__init__(message)
        self.code = code


class DiffLoadCancelled(Exception):
    """Raised when the progress callback reports the load was superseded."""


@dataclass(frozen=True)
class DiffOptions:
    """Knobs forwarded to ``git show``."""

    ignore_whitespace: str = "none"
    ignore_blank_lines: bool = False
    context_lines: int = 3
    rename_limit: int = 1000

    def git_args(self) -> list[str]:
        args = [f"-U{max(0, self.context_lines)}", f"-l{self.rename_limit}"]
        if self.ignore_whitespace == "all":
            args.append("--ignore-all-space")
        elif self.ignore_whitespace == "change":
            args.append("--ignore-space-change")
        if self.ignore_blank_lines:
            args.append("--ignore-blank-lines")
        return args


@dataclass(frozen=True)
class NumStat:
    path: str
    insertions: int
    deletions: int
    binary: bool


def _run_git(repo_dir: Path, args: list[str]) -> subprocess.CompletedProcess[str]:
    """Execute a git subcommand, raising ``DiffLoadError`` if it cannot start."""
    try:
        return subprocess.run(
            ["git", "-C", str(repo_dir), "-c", "core.quotePath=false", *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise DiffLoadError(f"Unable to run git: {exc}") from exc


def _git_stdout(repo_dir: Path, args: list[str]) -> str:
    proc = _run_git(repo_dir, args)
    if proc.returncode != 0:
        message = proc.stderr.strip() or f"git {args[0]} exited with status {proc.returncode}"
        raise DiffLoadError(message)
    return proc.stdout


def _parse_user(name: str, email: str) -> User:
    return User(name=name or None, email=email or None)


def _parse_timestamp(raw: str) -> datetime:
    try:
        return datetime.fromtimestamp(int(raw), tz=timezone.utc).astimezone()
    except ValueError:
        return datetime.fromtimestamp(0, tz=timezone.utc)


def parse_commit_record(record: str) -> tuple[Commit, list[str]]:
    """Parse one ``_COMMIT_FORMAT`` record into a commit and its parent hashes."""
    fields = record.rstrip("\n").split("\x00")
    fields += [""] * (10 - len(fields))
    hash, parents, an, ae, at, cn, ce, ct, summary, body = fields[:10]
    author = _parse_user(an, ae)
    committer = _parse_user(cn, ce)
    commit = Commit(
        hash=hash,
        author=author,
        committer=None if committer == author else committer,
        authored_date=_parse_timestamp(at),
        committed_date=_parse_timestamp(ct),
        summary=summary or None,
        message=body.strip("\n") or None,
    )
    return commit, parents.split()


def parse_numstat(text: str) -> list[NumStat]:
    """Parse ``--numstat`` output; binary files report ``-`` counts."""
    stats: list[NumStat] = []
    for raw_line in text.splitlines():
        parts = raw_line.split("\t", 2)
        if len(parts) != 3:
            continue
        added, removed, path = parts
        binary = added == "-" or removed == "-"
        stats.append(
            NumStat(
                path=path,
                insertions=0 if binary else int(added),
                deletions=0 if binary else int(removed),
                binary=binary,
            )
        )
    return stats


def unquote_path(text: str) -> str:
    """Undo git's C-style path quoting; unquoted text is returned unchanged."""
    if len(text) < 2 or text[0] != '"' or text[-1] != '"':
        return text
    body = text[1:-1]
    data = bytearray()
    index = 0
    while index < len(body):
        char = body[index]
        if char != "\\" or index + 1 == len(body):
            data.extend(char.encode("utf-8"))
            index += 1
            continue
        escape = body[index + 1]
        if escape in "01234567":
            end = index + 1
            while end < min(index + 4, len(body)) and body[end] in "01234567":
                end += 1
            data.append(int(body[index + 1:end], 8) & 0xFF)
            index = end
            continue
        if escape in _QUOTE_ESCAPES:
            data.append(_QUOTE_ESCAPES[escape])
        else:
            data.extend(escape.encode("utf-8"))
        index += 2
    return data.decode("utf-8", errors="replace")


def _closing_quote(text: str) -> int:
    index = 1
    while index < len(text):
        if text[index] == "\\":
            index += 2
            continue
        if text[index] == '"':
            return index
        index += 1
    return len(text) - 1


def _strip_prefix(path: str, prefix: str) -> str:
    return path[len(prefix):] if path.startswith(prefix) else path


def split_diff_header(rest: str) -> tuple[str, str]:
    """Best-effort source and destination from the arguments of ``diff --git``.

    The header is ambiguous for unquoted renames whose names contain ``" b/"``;
    the ``---``/``+++`` and ``rename``/``copy`` lines that follow win.
    """
    if rest.startswith('"'):
        end = _closing_quote(rest)
        source, destination = rest[: end + 1], rest[end + 2:]
    else:
        half = (len(rest) - 1) // 2
        if len(rest) % 2 == 1 and rest[half] == " " and rest[2:half] == rest[half + 3:]:
            source, destination = rest[:half], rest[half + 1:]
        elif rest.endswith('"') and ' "' in rest:
            split = rest.rindex(' "')
            source, destination = rest[:split], rest[split + 1:]
        elif " b/" in rest:
            split = rest.index(" b/")
            source, destination = rest[:split], rest[split + 1:]
        else:
            source = destination = rest
    return (
        _strip_prefix(unquote_path(source), "a/"),
        _strip_prefix(unquote_path(destination), "b/"),
    )


def _patch_path(text: str, prefix: str) -> str | None:
    """Path from a ``---``/``+++`` line; ``None`` for ``/dev/null``."""
    # git appends a tab after names that contain spaces
    if text.endswith("\t"):
        text = text[:-1]
    if text == "/dev/null":
        return None
    return _strip_prefix(unquote_path(text), prefix)


class _PatchParser:
    """Incremental unified-diff parser producing ``FileStatus`` records."""

    def __init__(self, on_file: Callable[[int], None]) -> None:
        self._on_file = on_file
        self.files: list[FileStatus] = []
        self.insertions = 0
        self.deletions = 0
        self._file: FileStatus | None = None
        self._delta: Delta | None = None
        self._old_line = 0
        self._new_line = 0
        self._last_origin = Origin.CONTEXT
        self._old_mode: str | None = None
        self._new_mode: str | None = None

    def _finish_delta(self) -> None:
        if self._file is not None and self._delta is not None:
            self._file.add_delta(self._delta)
        self._delta = None

    def _finish_file(self) -> None:
        self._finish_delta()
        if self._file is None:
            return
        if self._file.status is Status.MODIFIED and self._old_mode and self._new_mode:
            old_kind = self._old_mode[:2]
            new_kind = self._new_mode[:2]
            if old_kind != new_kind:
                self._file.status = Status.TYPECHANGE
        if self._old_mode:
            self._file.source_mode = FileMode.from_octal(self._old_mode)
        if self._new_mode:
            self._file.destination_mode = FileMode.from_octal(self._new_mode)
        self.files.append(self._file)
        self._file = None
        self._on_file(len(self.files))

    def _start_file(self, source: str, destination: str) -> None:
        self._finish_file()
        self._file = FileStatus(
            source_path=Path(source),
            destination_path=Path(destination),
            status=Status.MODIFIED,
        )
        self._old_mode = None
        self._new_mode = None

    def feed(self, raw_line: str) -> None:
        if raw_line.startswith(_DIFF_HEADER_PREFIX):
            self._start_file(*split_diff_header(raw_line[len(_DIFF_HEADER_PREFIX):]))
            return
        file = self._file
        if file is None:
            return

        if self._delta is None or raw_line.startswith("@@"):
            if self._feed_header(file, raw_line):
                return

        delta = self._delta
        if delta is None:
            return
        if raw_line.startswith("\\"):
            line_number = self._new_line if self._last_origin is Origin.ADDITION else self._old_line
            delta.add_line(
                DiffLine(
                    origin=self._last_origin,
                    content="",
                    old_line_number=line_number if self._last_origin is not Origin.ADDITION else None,
                    new_line_number=line_number if self._last_origin is not Origin.DELETION else None,
                    end_of_file=True,
                )
            )
            return
        marker, content = raw_line[:1], raw_line[1:]
        if marker == "+":
            delta.add_line(DiffLine(Origin.ADDITION, content, None, self._new_line))
            self._new_line += 1
            self.insertions += 1
            self._last_origin = Origin.ADDITION
        elif marker == "-":
            delta.add_line(DiffLine(Origin.DELETION, content, self._old_line, None))
            self._old_line += 1
            self.deletions += 1
            self._last_origin = Origin.DELETION
        else:
            delta.add_line(DiffLine(Origin.CONTEXT, content, self._old_line, self._new_line))
            self._old_line += 1
            self._new_line += 1
            self._last_origin = Origin.CONTEXT

    def _feed_header(self, file: FileStatus, raw_line: str) -> bool:
        """Consume extended header lines; return ``True`` when handled."""
        hunk = _HUNK_RE.match(raw_line)
        if hunk:
            self._finish_delta()
            old_start = int(hunk.group(1))
            new_start = int(hunk.group(3))
            self._delta = Delta(
                context=hunk.group(5),
                old_lines_start=old_start,
                new_lines_start=new_start,
                old_number_lines=int(hunk.group(2) if hunk.group(2) is not None else "1"),
                new_number_lines=int(hunk.group(4) if hunk.group(4) is not None else "1"),
            )
            self._old_line = old_start
            self._new_line = new_start
            return True
        if raw_line.startswith("new file mode "):
            file.status = Status.ADDED
            self._new_mode = raw_line.rsplit(" ", 1)[-1]
        elif raw_line.startswith("deleted file mode "):
            file.status = Status.DELETED
            self._old_mode = raw_line.rsplit(" ", 1)[-1]
        elif raw_line.startswith("old mode "):
            self._old_mode = raw_line.rsplit(" ", 1)[-1]
        elif raw_line.startswith("new mode "):
            self._new_mode = raw_line.rsplit(" ", 1)[-1]
        elif raw_line.startswith("rename from "):
            file.status = Status.RENAMED
            file.source_path = Path(unquote_path(raw_line[len("rename from "):]))
        elif raw_line.startswith("rename to "):
            file.destination_path = Path(unquote_path(raw_line[len("rename to "):]))
        elif raw_line.startswith("copy from "):
            file.status = Status.COPIED
            file.source_path = Path(unquote_path(raw_line[len("copy from "):]))
        elif raw_line.startswith("copy to "):
            file.destination_path = Path(unquote_path(raw_line[len("copy to "):]))
        elif raw_line.startswith("index "):
            modes = raw_line.split(" ")
            if len(modes) == 3 and self._old_mode is None and self._new_mode is None:
                self._old_mode = self._new_mode = modes[2]
        elif raw_line.startswith("Binary files "):
            file.source_is_binary = file.status is not Status.ADDED
            file.destination_is_binary = file.status is not Status.DELETED
        elif raw_line.startswith("--- "):
            source = _patch_path(raw_line[4:], "a/")
            if source is not None:
                file.source_path = Path(source)
        elif raw_line.startswith("+++ "):
            destination = _patch_path(raw_line[4:], "b/")
            if destination is not None:
                file.destination_path = Path(destination)
        else:
            return False
        return True

    def finish(self) -> list[FileStatus]:
        self._finish_file()
        return self.files


def parse_patch(text: str, on_file: Callable[[int], None] | None = None) -> _PatchParser:
    """Parse a full ``git show --patch`` body. Exposed for tests."""
    parser = _PatchParser(on_file if on_file is not None else (lambda _count: None))
    for raw_line in text.splitlines():
        parser.feed(raw_line)
    parser.finish()
    return parser


class GitDiffEngine:
    """Load ``CommitDiff`` objects from the repository containing ``repo_dir``."""

    def __init__(self, repo_dir: Path, options: DiffOptions | None = None) -> None:
        self.repo_dir = repo_dir
        self.options = options if options is not None else DiffOptions()

    def load_commit_diff(self, hash: str, progress: ProgressCallback) -> CommitDiff:
        """Build the diff for ``hash``, reporting through ``progress``.

        Raises ``DiffLoadCancelled`` as soon as ``progress`` returns ``False``.
        """

        def report(status: LoadStatus) -> None:
            if not progress(status):
                raise DiffLoadCancelled(hash)

        commit, parents = self._load_commit(hash)
        parent = self._load_commit(parents[0])[0] if parents else None

        numstat_text = _git_stdout(
            self.repo_dir,
            ["diff-tree", "-r", "--root", "-m", "--first-parent", "--no-commit-id", "--numstat", "--no-renames", hash],
        )
        stats = parse_numstat(numstat_text)
        total = len(stats)
        for index in range(total):
            report(QuickDiff(index + 1, total))
        report(CompleteQuickDiff())

        patch_text = _git_stdout(
            self.repo_dir,
            [
                "show",
                "--format=",
                "--patch",
                "--no-color",
                "--no-ext-diff",
                "--src-prefix=a/",
                "--dst-prefix=b/",
                "-m",
                "--first-parent",
                "-M",
                "-C",
                *self.options.git_args(),
                hash,
            ],
        )
        report(Diff(0, total))
        parsed = parse_patch(patch_text, lambda done: report(Diff(done, max(done, total))))
        logger.debug("parsed %d files for %s", len(parsed.files), hash)
        return CommitDiff(
            commit=commit,
            parent=parent,
            file_statuses=parsed.files,
            number_files_changed=len(parsed.files),
            number_insertions=parsed.insertions,
            number_deletions=parsed.deletions,
        )

    def _load_commit(self, hash: str) -> tuple[Commit, list[str]]:
        verify = _run_git(self.repo_dir, ["rev-parse", "--verify", "--quiet", f"{hash}^{{commit}}"])
        if verify.returncode != 0:
            raise DiffLoadError(f"Commit not found: {hash}", DiffErrorCode.NOT_FOUND)
        full_hash = verify.stdout.strip()
        record = _git_stdout(self.repo_dir, ["show", "-s", f"--format={_COMMIT_FORMAT}", full_hash])
        return parse_commit_record(record)
