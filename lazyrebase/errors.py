"""Exception hierarchy and cause-chain helpers.

Recoverable failures are chained with ``raise ... from ...`` so the Error
screen can show every layer of context before the root message.
"""

from __future__ import annotations


class LazyRebaseError(Exception):
    """Base class for all application errors."""


class ConfigError(LazyRebaseError):
    """Invalid or unreadable configuration; fatal before the main loop."""

    def __init__(self, key: str, value: str | None = None, reason: str = "") -> None:
        self.key = key
        self.value = value
        self.reason = reason
        if value is None:
            message = f"Unable to read configuration for {key}"
        else:
            message = f'Provided value "{value}" is invalid for {key}'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TodoFileError(LazyRebaseError):
    """Base class for rebase todo file I/O and parse failures."""


class FileReadError(TodoFileError):
    """Todo file could not be read or parsed."""


class FileWriteError(TodoFileError):
    """Todo file could not be written."""


class ParseError(TodoFileError):
    """A todo line could not be parsed."""


class InvalidModuleError(LazyRebaseError):
    """No module registered for a state. Programming error, never recovered."""


def error_chain(error: BaseException) -> list[BaseException]:
    """Return ``error`` followed by its causes, outermost first.

    Explicit ``__cause__`` links are preferred; implicit ``__context__`` is
    followed only when no cause was set and context was not suppressed.
    """
    chain: list[BaseException] = []
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        chain.append(current)
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None
    return chain


def error_chain_lines(error: BaseException) -> list[str]:
    """One entry per cause, with embedded line breaks split into extra lines."""
    lines: list[str] = []
    for cause in error_chain(error):
        lines.extend(str(cause).split("\n"))
    return lines
