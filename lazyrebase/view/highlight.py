"""Pygments-backed highlighting of diff line content.

Each diff line is lexed on its own with the lexer chosen from the file name,
so multi-line constructs can be miscolored; the diff background still shows
what changed.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pygments import lex
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_for_filename
from pygments.lexers.special import TextLexer
from pygments.token import Comment, Keyword, Name, Number, Operator, String
from pygments.util import ClassNotFound

from .view_data import DisplayColor, LineSegment

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")

_TOKEN_COLORS = (
    (Comment, DisplayColor.SYNTAX_COMMENT),
    (Keyword, DisplayColor.SYNTAX_KEYWORD),
    (String, DisplayColor.SYNTAX_STRING),
    (Number, DisplayColor.SYNTAX_NUMBER),
    (Name.Function, DisplayColor.SYNTAX_NAME),
    (Name.Class, DisplayColor.SYNTAX_NAME),
    (Name.Builtin, DisplayColor.SYNTAX_NAME),
    (Operator, DisplayColor.SYNTAX_OPERATOR),
)


def sanitize_terminal_text(text: str) -> str:
    """Escape terminal control bytes (tabs excepted)."""
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", text)


@lru_cache(maxsize=64)
def lexer_for_path(path: str) -> Lexer:
    try:
        return get_lexer_for_filename(path, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False, ensurenl=False)


def token_color(token_type: object, default: DisplayColor) -> DisplayColor:
    for parent, color in _TOKEN_COLORS:
        if token_type in parent:
            return color
    return default


def highlight_line(path: str, content: str, default: DisplayColor) -> list[LineSegment]:
    """Split ``content`` into colored segments; merges adjacent same-color runs."""
    segments: list[LineSegment] = []
    lexer = lexer_for_path(path)
    for token_type, value in lex(content, lexer):
        value = value.rstrip("\n")
        if not value:
            continue
        color = token_color(token_type, default)
        if segments and segments[-1].color is color:
            segments[-1] = LineSegment(segments[-1].text + value, color)
        else:
            segments.append(LineSegment(value, color))
    return segments


__all__ = ["highlight_line", "lexer_for_path", "sanitize_terminal_text", "token_color"]
