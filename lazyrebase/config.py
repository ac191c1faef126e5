"""Application configuration read from ``git config``.

Values live under ``interactive-rebase-tool.*`` plus ``core.editor`` and
``core.commentChar``. Missing keys take defaults; malformed values raise
``ConfigError`` naming the key, which is fatal before the UI starts.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .diff.engine import DiffOptions
from .errors import ConfigError
from .input.events import StandardAction
from .input.key_bindings import CONFIG_NAMES, KeyBindings, is_valid_key_token

logger = logging.getLogger(__name__)

SECTION = "interactive-rebase-tool"

_TRUE_VALUES = frozenset({"true", "yes", "on", "1", ""})
_FALSE_VALUES = frozenset({"false", "no", "off", "0"})
_IGNORE_WHITESPACE_VALUES = ("all", "change", "none")
_SHOW_WHITESPACE_VALUES = ("both", "leading", "trailing", "none")


@dataclass(frozen=True)
class Config:
    """Immutable settings shared by modules, the router and the diff engine."""

    auto_select_next: bool = False
    diff_ignore_whitespace: str = "none"
    diff_ignore_blank_lines: bool = False
    diff_show_whitespace: str = "both"
    diff_space_symbol: str = "·"
    diff_tab_symbol: str = "→"
    diff_tab_width: int = 4
    diff_syntax_highlight: bool = False
    undo_limit: int = 5000
    editor: str = "vi"
    comment_char: str = "#"
    key_bindings: KeyBindings = field(default_factory=KeyBindings)

    def diff_options(self) -> DiffOptions:
        return DiffOptions(
            ignore_whitespace=self.diff_ignore_whitespace,
            ignore_blank_lines=self.diff_ignore_blank_lines,
        )

    @classmethod
    def from_git_values(cls, values: Mapping[str, str], environ: Mapping[str, str] | None = None) -> Config:
        """Build a config from lower-cased ``git config --list`` entries."""
        reader = _ValueReader(values)
        return cls(
            auto_select_next=reader.boolean("autoSelectNext", False),
            diff_ignore_whitespace=reader.choice("diffIgnoreWhitespace", _IGNORE_WHITESPACE_VALUES, "none"),
            diff_ignore_blank_lines=reader.boolean("diffIgnoreBlankLines", False),
            diff_show_whitespace=reader.choice("diffShowWhitespace", _SHOW_WHITESPACE_VALUES, "both"),
            diff_space_symbol=reader.string("diffSpaceSymbol", "·"),
            diff_tab_symbol=reader.string("diffTabSymbol", "→"),
            diff_tab_width=reader.integer("diffTabWidth", 4),
            diff_syntax_highlight=reader.boolean("diffSyntaxHighlight", False),
            undo_limit=reader.integer("undoLimit", 5000),
            editor=_resolve_editor(values, os.environ if environ is None else environ),
            comment_char=_resolve_comment_char(values),
            key_bindings=KeyBindings.with_overrides(reader.key_bindings()),
        )


class _ValueReader:
    def __init__(self, values: Mapping[str, str]) -> None:
        self._values = values

    def _get(self, name: str) -> tuple[str, str | None]:
        key = f"{SECTION}.{name}"
        return key, self._values.get(key.lower())

    def boolean(self, name: str, default: bool) -> bool:
        key, raw = self._get(name)
        if raw is None:
            return default
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigError(key, raw)

    def integer(self, name: str, default: int) -> int:
        key, raw = self._get(name)
        if raw is None:
            return default
        try:
            value = int(raw.strip())
        except ValueError as exc:
            raise ConfigError(key, raw) from exc
        if value < 0:
            raise ConfigError(key, raw, "must not be negative")
        return value

    def string(self, name: str, default: str) -> str:
        _key, raw = self._get(name)
        return default if raw is None else raw

    def choice(self, name: str, choices: tuple[str, ...], default: str) -> str:
        key, raw = self._get(name)
        if raw is None:
            return default
        lowered = raw.strip().lower()
        if lowered not in choices:
            raise ConfigError(key, raw, f"expected one of {', '.join(choices)}")
        return lowered

    def key_bindings(self) -> dict[StandardAction, tuple[str, ...]]:
        overrides: dict[StandardAction, tuple[str, ...]] = {}
        for action, name in CONFIG_NAMES.items():
            key, raw = self._get(name)
            if raw is None:
                continue
            tokens = tuple(raw.split())
            if not tokens or not all(is_valid_key_token(token) for token in tokens):
                raise ConfigError(key, raw)
            overrides[action] = tokens
        return overrides


def _resolve_editor(values: Mapping[str, str], environ: Mapping[str, str]) -> str:
    for candidate in (
        values.get("core.editor"),
        environ.get("GIT_EDITOR"),
        environ.get("VISUAL"),
        environ.get("EDITOR"),
    ):
        if candidate and candidate.strip():
            return candidate.strip()
    return "vi"


def _resolve_comment_char(values: Mapping[str, str]) -> str:
    raw = values.get("core.commentchar")
    if raw is None or raw == "auto":
        return "#"
    if len(raw) != 1:
        raise ConfigError("core.commentChar", raw, "must be a single character")
    return raw


def parse_config_list(output: str) -> dict[str, str]:
    """Parse ``git config --list --null`` output; later entries win."""
    values: dict[str, str] = {}
    for entry in output.split("\x00"):
        if not entry:
            continue
        key, _, value = entry.partition("\n")
        values[key.lower()] = value
    return values


def read_git_config(repo_dir: Path | None) -> dict[str, str]:
    """Return all visible git config entries, or ``{}`` when git is unavailable."""
    command = ["git"]
    if repo_dir is not None:
        command += ["-C", str(repo_dir)]
    command += ["config", "--list", "--null"]
    try:
        proc = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError:
        logger.warning("git unavailable; using default configuration")
        return {}
    if proc.returncode != 0:
        logger.info("git config exited with %d; using defaults", proc.returncode)
        return {}
    return parse_config_list(proc.stdout)


def load_config(repo_dir: Path | None = None, environ: Mapping[str, str] | None = None) -> Config:
    return Config.from_git_values(read_git_config(repo_dir), environ)


__all__ = ["Config", "SECTION", "load_config", "parse_config_list", "read_git_config"]
