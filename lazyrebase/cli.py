"""Command-line front door for lazyrebase.

Meant to be set as git's sequence editor, which passes the todo file path::

    git config --global sequence.editor lazyrebase
"""

from __future__ import annotations

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from .logging_setup import LOG_LEVEL_ENV
from .runtime import run_editor


def _package_version() -> str:
    try:
        return version("lazyrebase")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyrebase",
        description="Full-screen terminal editor for git interactive rebase todo files.",
    )
    parser.add_argument("todo_file", help="Path to the rebase todo file (git-rebase-todo).")
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"Log level for the session log file (default: ${LOG_LEVEL_ENV} or WARNING).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run the editor and exit with its status code."""
    args = build_parser().parse_args(argv)
    path = Path(args.todo_file)
    if not path.is_file():
        print(f"Error reading file: {path}", file=sys.stderr)
        raise SystemExit(2)
    raise SystemExit(run_editor(path, log_level=args.log_level, no_color=args.no_color))


if __name__ == "__main__":
    main()
