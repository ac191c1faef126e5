"""Key binding table: defaults plus ``git config`` overrides."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .events import StandardAction

DEFAULT_BINDINGS: dict[StandardAction, tuple[str, ...]] = {
    StandardAction.KILL: ("CTRL_C",),
    StandardAction.UNDO: ("CTRL_Z",),
    StandardAction.REDO: ("CTRL_Y",),
    StandardAction.HELP: ("?",),
    StandardAction.SCROLL_UP: ("UP",),
    StandardAction.SCROLL_DOWN: ("DOWN",),
    StandardAction.SCROLL_LEFT: ("LEFT",),
    StandardAction.SCROLL_RIGHT: ("RIGHT",),
    StandardAction.SCROLL_JUMP_UP: ("PAGE_UP",),
    StandardAction.SCROLL_JUMP_DOWN: ("PAGE_DOWN",),
    StandardAction.SCROLL_TOP: ("HOME",),
    StandardAction.SCROLL_BOTTOM: ("END",),
    StandardAction.SEARCH_START: ("/",),
    StandardAction.SEARCH_NEXT: ("n",),
    StandardAction.SEARCH_PREVIOUS: ("N",),
    StandardAction.ABORT: ("q",),
    StandardAction.FORCE_ABORT: ("Q",),
    StandardAction.REBASE: ("w",),
    StandardAction.FORCE_REBASE: ("W",),
    StandardAction.ACTION_PICK: ("p",),
    StandardAction.ACTION_REWORD: ("r",),
    StandardAction.ACTION_EDIT: ("e",),
    StandardAction.ACTION_SQUASH: ("s",),
    StandardAction.ACTION_FIXUP: ("f",),
    StandardAction.ACTION_DROP: ("d",),
    StandardAction.ACTION_BREAK: ("b",),
    StandardAction.MOVE_CURSOR_UP: ("UP",),
    StandardAction.MOVE_CURSOR_DOWN: ("DOWN",),
    StandardAction.MOVE_CURSOR_LEFT: ("LEFT",),
    StandardAction.MOVE_CURSOR_RIGHT: ("RIGHT",),
    StandardAction.MOVE_CURSOR_PAGE_UP: ("PAGE_UP",),
    StandardAction.MOVE_CURSOR_PAGE_DOWN: ("PAGE_DOWN",),
    StandardAction.MOVE_CURSOR_HOME: ("HOME",),
    StandardAction.MOVE_CURSOR_END: ("END",),
    StandardAction.SWAP_SELECTED_UP: ("k",),
    StandardAction.SWAP_SELECTED_DOWN: ("j",),
    StandardAction.REMOVE_LINE: ("DELETE",),
    StandardAction.TOGGLE_VISUAL_MODE: ("v",),
    StandardAction.SHOW_COMMIT: ("c",),
    StandardAction.OPEN_IN_EDITOR: ("!",),
    StandardAction.INSERT_LINE: ("I",),
    StandardAction.EDIT: ("E",),
    StandardAction.SHOW_DIFF: ("d",),
    StandardAction.CONFIRM_YES: ("y", "Y"),
    StandardAction.CONFIRM_NO: ("n", "N"),
}

# ``interactive-rebase-tool.input<Name>`` config key suffixes.
CONFIG_NAMES: dict[StandardAction, str] = {
    action: f"input{action.value}"
    for action in DEFAULT_BINDINGS
    if action is not StandardAction.KILL
}

SPECIAL_KEYS = frozenset(
    {
        "UP",
        "DOWN",
        "LEFT",
        "RIGHT",
        "HOME",
        "END",
        "PAGE_UP",
        "PAGE_DOWN",
        "DELETE",
        "INSERT",
        "BACKSPACE",
        "ENTER",
        "ESC",
        "TAB",
        "SHIFT_TAB",
    }
)


def is_valid_key_token(token: str) -> bool:
    """A single printable character, a named key, or a modifier combo."""
    if len(token) == 1:
        return token.isprintable()
    if token in SPECIAL_KEYS:
        return True
    for prefix in ("CTRL_", "ALT_", "SHIFT_"):
        if token.startswith(prefix):
            rest = token[len(prefix):]
            return (len(rest) == 1 and rest.isalpha()) or rest in SPECIAL_KEYS
    return False


@dataclass(frozen=True)
class KeyBindings:
    """Resolved action-to-keys table."""

    bindings: Mapping[StandardAction, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_BINDINGS)
    )

    @classmethod
    def with_overrides(cls, overrides: Mapping[StandardAction, tuple[str, ...]]) -> KeyBindings:
        merged = dict(DEFAULT_BINDINGS)
        merged.update(overrides)
        return cls(bindings=merged)

    def keys_for(self, action: StandardAction) -> tuple[str, ...]:
        return tuple(self.bindings.get(action, ()))

    def matches(self, key: str, action: StandardAction) -> bool:
        return key in self.bindings.get(action, ())

    def first_match(self, key: str, actions: tuple[StandardAction, ...]) -> StandardAction | None:
        for action in actions:
            if self.matches(key, action):
                return action
        return None

    def label(self, action: StandardAction) -> str:
        """Human readable key list for help screens."""
        return ", ".join(self.keys_for(action))


__all__ = [
    "CONFIG_NAMES",
    "DEFAULT_BINDINGS",
    "KeyBindings",
    "SPECIAL_KEYS",
    "is_valid_key_token",
]
