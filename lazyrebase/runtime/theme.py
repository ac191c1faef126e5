"""ANSI palettes for the semantic display colors.

Modules only name a ``DisplayColor``; the theme decides the escape codes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..view.view_data import DisplayColor


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    colors: dict[DisplayColor, str] = field(default_factory=dict)
    title: str = ""
    selected: str = ""
    dim: str = ""
    underline: str = ""
    reverse: str = ""
    reset: str = ""

    def color(self, color: DisplayColor) -> str:
        return self.colors.get(color, "")


DEFAULT_THEME = UITheme(
    name="default",
    colors={
        DisplayColor.NORMAL: "",
        DisplayColor.INDICATOR: "\033[38;5;44m",
        DisplayColor.ACTION_PICK: "\033[32m",
        DisplayColor.ACTION_REWORD: "\033[35m",
        DisplayColor.ACTION_EDIT: "\033[34m",
        DisplayColor.ACTION_SQUASH: "\033[33m",
        DisplayColor.ACTION_FIXUP: "\033[38;5;214m",
        DisplayColor.ACTION_DROP: "\033[31m",
        DisplayColor.ACTION_EXEC: "\033[37m",
        DisplayColor.ACTION_BREAK: "\033[37m",
        DisplayColor.ACTION_LABEL: "\033[38;5;110m",
        DisplayColor.ACTION_RESET: "\033[38;5;110m",
        DisplayColor.ACTION_MERGE: "\033[38;5;110m",
        DisplayColor.ACTION_UPDATE_REF: "\033[38;5;229m",
        DisplayColor.DIFF_ADD: "\033[32m",
        DisplayColor.DIFF_REMOVE: "\033[31m",
        DisplayColor.DIFF_CHANGE: "\033[33m",
        DisplayColor.DIFF_CONTEXT: "\033[38;5;252m",
        DisplayColor.DIFF_WHITESPACE: "\033[2;38;5;240m",
        DisplayColor.SYNTAX_KEYWORD: "\033[38;5;81m",
        DisplayColor.SYNTAX_STRING: "\033[38;5;186m",
        DisplayColor.SYNTAX_COMMENT: "\033[38;5;244m",
        DisplayColor.SYNTAX_NUMBER: "\033[38;5;141m",
        DisplayColor.SYNTAX_NAME: "\033[38;5;148m",
        DisplayColor.SYNTAX_OPERATOR: "\033[38;5;203m",
    },
    title="\033[1;38;5;81m",
    selected="\033[48;5;237m",
    dim="\033[2m",
    underline="\033[4m",
    reverse="\033[7m",
    reset="\033[0m",
)

# Selection must stay visible without color, so plain keeps reverse video.
PLAIN_THEME = UITheme(name="plain", selected="\033[7m", reverse="\033[7m", reset="\033[0m")


def resolve_theme(*, no_color: bool = False) -> UITheme:
    """Return the palette for the requested color mode."""
    if no_color:
        return PLAIN_THEME
    return DEFAULT_THEME


__all__ = ["DEFAULT_THEME", "PLAIN_THEME", "UITheme", "resolve_theme"]
