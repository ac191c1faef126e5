"""Overview and diff layouts for a loaded ``CommitDiff``."""

from __future__ import annotations

from dataclasses import dataclass

from ...config import Config
from ...diff.model import CommitDiff, Delta, DiffLine, FileStatus, Origin, Status
from ...view.highlight import highlight_line, sanitize_terminal_text
from ...view.view_data import DisplayColor, LineSegment, ViewData, ViewLine

SEPARATOR = "―"

_STATUS_LABELS = {
    Status.RENAMED: (" renamed: ", "R ", DisplayColor.DIFF_CHANGE),
    Status.ADDED: ("   added: ", "A ", DisplayColor.DIFF_ADD),
    Status.DELETED: (" deleted: ", "D ", DisplayColor.DIFF_REMOVE),
    Status.COPIED: ("  copied: ", "C ", DisplayColor.DIFF_ADD),
    Status.MODIFIED: ("modified: ", "M ", DisplayColor.DIFF_CHANGE),
    Status.TYPECHANGE: (" changed: ", "T ", DisplayColor.DIFF_CHANGE),
    Status.OTHER: (" unknown: ", "X ", DisplayColor.NORMAL),
}

_ORIGIN_COLORS = {
    Origin.ADDITION: DisplayColor.DIFF_ADD,
    Origin.DELETION: DisplayColor.DIFF_REMOVE,
    Origin.CONTEXT: DisplayColor.DIFF_CONTEXT,
}


@dataclass(frozen=True)
class WhitespaceStyle:
    show_leading: bool
    show_trailing: bool
    space_symbol: str
    tab_symbol: str
    tab_width: int
    syntax_highlight: bool

    @classmethod
    def from_config(cls, config: Config) -> WhitespaceStyle:
        mode = config.diff_show_whitespace
        return cls(
            show_leading=mode in ("both", "leading"),
            show_trailing=mode in ("both", "trailing"),
            space_symbol=config.diff_space_symbol,
            tab_symbol=config.diff_tab_symbol,
            tab_width=config.diff_tab_width,
            syntax_highlight=config.diff_syntax_highlight,
        )

    def symbols(self, whitespace: str) -> str:
        return "".join(self.tab_symbol if ch == "\t" else self.space_symbol for ch in whitespace)

    def expand_tabs(self, text: str) -> str:
        return text.replace("\t", " " * self.tab_width)


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def stats_line(diff: CommitDiff, full_width: bool) -> ViewLine:
    files = diff.number_files_changed
    insertions = diff.number_insertions
    deletions = diff.number_deletions
    if not full_width:
        return ViewLine.of(
            LineSegment(str(files), DisplayColor.INDICATOR),
            " / ",
            LineSegment(str(insertions), DisplayColor.DIFF_ADD),
            " / ",
            LineSegment(str(deletions), DisplayColor.DIFF_REMOVE),
        )
    return ViewLine.of(
        LineSegment(str(files), DisplayColor.INDICATOR),
        f" {_plural(files, 'file', 'files')} with ",
        LineSegment(str(insertions), DisplayColor.DIFF_ADD),
        f" {_plural(insertions, 'insertion', 'insertions')} and ",
        LineSegment(str(deletions), DisplayColor.DIFF_REMOVE),
        f" {_plural(deletions, 'deletion', 'deletions')}",
    )


def file_status_line(file: FileStatus, full_width: bool) -> ViewLine:
    long_label, short_label, color = _STATUS_LABELS[file.status]
    label = long_label if full_width else short_label
    arrow = " → " if full_width else "→"
    source = str(file.source_path)
    destination = str(file.destination_path)
    if file.status is Status.RENAMED:
        return ViewLine.of(
            LineSegment(label, color),
            LineSegment(source, DisplayColor.DIFF_REMOVE),
            arrow,
            LineSegment(destination, DisplayColor.DIFF_ADD),
        )
    if file.status is Status.COPIED:
        return ViewLine.of(
            LineSegment(label, color),
            source,
            LineSegment(arrow, DisplayColor.NORMAL),
            LineSegment(destination, DisplayColor.DIFF_ADD),
        )
    return ViewLine.of(LineSegment(f"{label}{destination}", color))


def commit_leading_line(diff: CommitDiff, full_width: bool) -> ViewLine:
    hash = diff.commit.hash
    if full_width:
        return ViewLine.of(LineSegment("Commit: ", DisplayColor.INDICATOR), hash)
    return ViewLine.of(hash[:8])


def _labelled(label: str, short: str, value: str, full_width: bool) -> ViewLine:
    return ViewLine.of(LineSegment(label if full_width else short, DisplayColor.INDICATOR), value)


def build_overview(view_data: ViewData, diff: CommitDiff, full_width: bool) -> None:
    commit = diff.commit
    view_data.clear()
    view_data.push_leading_line(commit_leading_line(diff, full_width))

    date = commit.committed_date.strftime("%c %z")
    view_data.push_line(_labelled("Date: ", "D: ", date, full_width))
    if not commit.author.is_none():
        view_data.push_line(_labelled("Author: ", "A: ", str(commit.author), full_width))
    if commit.committer is not None and not commit.committer.is_none():
        view_data.push_line(_labelled("Committer: ", "C: ", str(commit.committer), full_width))

    if commit.summary:
        view_data.push_line(sanitize_terminal_text(commit.summary))
    if commit.message:
        if commit.summary:
            view_data.push_line("")
        for line in commit.message.split("\n"):
            view_data.push_line(sanitize_terminal_text(line))

    view_data.push_line("")
    view_data.push_line(stats_line(diff, full_width))
    for file in diff.file_statuses:
        view_data.push_line(file_status_line(file, full_width))


def _separator(dim: bool = False) -> ViewLine:
    return ViewLine(padding=LineSegment(SEPARATOR, DisplayColor.NORMAL, dim=dim))


def delta_header_line(delta: Delta) -> ViewLine:
    return ViewLine.of(
        LineSegment("@@", DisplayColor.NORMAL, dim=True),
        LineSegment(
            f" -{delta.old_lines_start},{delta.old_number_lines} +{delta.new_lines_start},{delta.new_number_lines} ",
            DisplayColor.DIFF_CONTEXT,
        ),
        LineSegment("@@", DisplayColor.NORMAL, dim=True),
        LineSegment(f" {delta.context}", DisplayColor.DIFF_CONTEXT),
    )


def _gutter(line: DiffLine, old_width: int, new_width: int) -> str:
    old = "" if line.old_line_number is None else str(line.old_line_number)
    new = "" if line.new_line_number is None else str(line.new_line_number)
    return f"{old:<{old_width}} {new:<{new_width}}| "


def content_segments(
    path: str,
    content: str,
    color: DisplayColor,
    style: WhitespaceStyle,
) -> list[LineSegment]:
    """Color the body of one diff line with optional whitespace symbols."""
    content = sanitize_terminal_text(content)
    body = content.lstrip(" \t")
    leading = content[: len(content) - len(body)]
    stripped = body.rstrip(" \t")
    trailing = body[len(stripped):]
    body = stripped

    segments: list[LineSegment] = []
    if leading:
        if style.show_leading:
            segments.append(LineSegment(style.symbols(leading), DisplayColor.DIFF_WHITESPACE))
        else:
            segments.append(LineSegment(style.expand_tabs(leading), color))
    if body:
        body = style.expand_tabs(body)
        if style.syntax_highlight:
            segments.extend(highlight_line(path, body, color))
        else:
            segments.append(LineSegment(body, color))
    if trailing and style.show_trailing:
        segments.append(LineSegment(style.symbols(trailing), DisplayColor.DIFF_WHITESPACE))
    return segments


def build_diff(view_data: ViewData, diff: CommitDiff, full_width: bool, style: WhitespaceStyle) -> None:
    view_data.clear()
    view_data.push_leading_line(commit_leading_line(diff, full_width))
    view_data.push_leading_line(stats_line(diff, full_width))

    for file in diff.file_statuses:
        view_data.push_line(_separator())
        view_data.push_line(file_status_line(file, full_width))

        if file.source_is_binary or file.destination_is_binary:
            view_data.push_line(ViewLine.of(LineSegment("Binary file", DisplayColor.DIFF_CONTEXT)))
            continue

        old_width = len(str(file.last_old_line_number))
        new_width = len(str(file.last_new_line_number))
        path = str(file.destination_path)
        for delta in file.deltas:
            view_data.push_line("")
            view_data.push_line(delta_header_line(delta))
            view_data.push_line(_separator(dim=True))
            for line in delta.lines:
                if line.end_of_file:
                    view_data.push_line(
                        ViewLine.of(
                            " " * (old_width + new_width + 3),
                            LineSegment("\\ No newline at end of file", DisplayColor.DIFF_CONTEXT),
                            pinned=1,
                        )
                    )
                    continue
                color = _ORIGIN_COLORS.get(line.origin, DisplayColor.NORMAL)
                segments = [LineSegment(_gutter(line, old_width, new_width))]
                segments.extend(content_segments(path, line.content, color, style))
                view_data.push_line(ViewLine(segments=segments, pinned=1))


__all__ = [
    "SEPARATOR",
    "WhitespaceStyle",
    "build_diff",
    "build_overview",
    "content_segments",
    "delta_header_line",
    "file_status_line",
    "stats_line",
]
