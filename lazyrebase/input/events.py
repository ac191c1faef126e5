"""Semantic input vocabulary shared by the router and the screen modules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Union


class InputOptions(Flag):
    """Capabilities a module opts into; the router filters bindings by them."""

    NONE = 0
    RESIZE = auto()
    MOVEMENT = auto()
    HELP = auto()
    UNDO_REDO = auto()
    SEARCH = auto()


class StandardAction(Enum):
    """Every bindable action plus synthetic driver signals."""

    KILL = "Kill"
    UNDO = "Undo"
    REDO = "Redo"
    HELP = "Help"

    SCROLL_UP = "ScrollUp"
    SCROLL_DOWN = "ScrollDown"
    SCROLL_LEFT = "ScrollLeft"
    SCROLL_RIGHT = "ScrollRight"
    SCROLL_JUMP_UP = "ScrollJumpUp"
    SCROLL_JUMP_DOWN = "ScrollJumpDown"
    SCROLL_TOP = "ScrollTop"
    SCROLL_BOTTOM = "ScrollBottom"

    SEARCH_START = "SearchStart"
    SEARCH_NEXT = "SearchNext"
    SEARCH_PREVIOUS = "SearchPrevious"

    ABORT = "Abort"
    FORCE_ABORT = "ForceAbort"
    REBASE = "Rebase"
    FORCE_REBASE = "ForceRebase"
    ACTION_PICK = "ActionPick"
    ACTION_REWORD = "ActionReword"
    ACTION_EDIT = "ActionEdit"
    ACTION_SQUASH = "ActionSquash"
    ACTION_FIXUP = "ActionFixup"
    ACTION_DROP = "ActionDrop"
    ACTION_BREAK = "ActionBreak"
    MOVE_CURSOR_UP = "MoveCursorUp"
    MOVE_CURSOR_DOWN = "MoveCursorDown"
    MOVE_CURSOR_LEFT = "MoveCursorLeft"
    MOVE_CURSOR_RIGHT = "MoveCursorRight"
    MOVE_CURSOR_PAGE_UP = "MoveCursorPageUp"
    MOVE_CURSOR_PAGE_DOWN = "MoveCursorPageDown"
    MOVE_CURSOR_HOME = "MoveCursorHome"
    MOVE_CURSOR_END = "MoveCursorEnd"
    SWAP_SELECTED_UP = "SwapSelectedUp"
    SWAP_SELECTED_DOWN = "SwapSelectedDown"
    REMOVE_LINE = "RemoveLine"
    TOGGLE_VISUAL_MODE = "ToggleVisualMode"
    SHOW_COMMIT = "ShowCommit"
    OPEN_IN_EDITOR = "OpenInEditor"
    INSERT_LINE = "InsertLine"
    EDIT = "Edit"
    SHOW_DIFF = "ShowDiff"
    CONFIRM_YES = "ConfirmYes"
    CONFIRM_NO = "ConfirmNo"

    EXTERNAL_COMMAND_SUCCESS = "ExternalCommandSuccess"
    EXTERNAL_COMMAND_ERROR = "ExternalCommandError"

    def __repr__(self) -> str:
        return self.value


@dataclass(frozen=True)
class KeyEvent:
    """Unbound key token passed through to the module."""

    key: str

    def __repr__(self) -> str:
        return f"Key({self.key!r})"


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int

    def __repr__(self) -> str:
        return f"Resize({self.width}, {self.height})"


@dataclass(frozen=True)
class StandardEvent:
    action: StandardAction

    def __repr__(self) -> str:
        return f"Standard({self.action!r})"


Event = Union[KeyEvent, ResizeEvent, StandardEvent]
RawInput = Union[str, ResizeEvent, StandardEvent]

SCROLL_ACTIONS = (
    StandardAction.SCROLL_UP,
    StandardAction.SCROLL_DOWN,
    StandardAction.SCROLL_LEFT,
    StandardAction.SCROLL_RIGHT,
    StandardAction.SCROLL_JUMP_UP,
    StandardAction.SCROLL_JUMP_DOWN,
    StandardAction.SCROLL_TOP,
    StandardAction.SCROLL_BOTTOM,
)
UNDO_REDO_ACTIONS = (StandardAction.UNDO, StandardAction.REDO)
SEARCH_ACTIONS = (
    StandardAction.SEARCH_START,
    StandardAction.SEARCH_NEXT,
    StandardAction.SEARCH_PREVIOUS,
)


def is_action(event: Event | None, action: StandardAction) -> bool:
    return isinstance(event, StandardEvent) and event.action is action


__all__ = [
    "Event",
    "InputOptions",
    "KeyEvent",
    "RawInput",
    "ResizeEvent",
    "SCROLL_ACTIONS",
    "SEARCH_ACTIONS",
    "StandardAction",
    "StandardEvent",
    "UNDO_REDO_ACTIONS",
    "is_action",
]
