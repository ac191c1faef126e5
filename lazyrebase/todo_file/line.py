"""Parsing and formatting of individual rebase todo lines."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ..errors import ParseError


class Action(Enum):
    PICK = "pick"
    REWORD = "reword"
    EDIT = "edit"
    SQUASH = "squash"
    FIXUP = "fixup"
    DROP = "drop"
    EXEC = "exec"
    BREAK = "break"
    LABEL = "label"
    RESET = "reset"
    MERGE = "merge"
    NOOP = "noop"
    UPDATE_REF = "update-ref"

    @property
    def abbreviation(self) -> str:
        return _ABBREVIATIONS.get(self, self.value)

    @classmethod
    def parse(cls, token: str) -> Action:
        action = _BY_NAME.get(token.lower())
        if action is None:
            raise ParseError(f'The action "{token}" is invalid')
        return action

    def is_commit_action(self) -> bool:
        """Actions that reference a commit hash."""
        return self in _COMMIT_ACTIONS

    def is_static(self) -> bool:
        """Actions whose type cannot be changed from the list."""
        return self in _STATIC_ACTIONS


_ABBREVIATIONS = {
    Action.PICK: "p",
    Action.REWORD: "r",
    Action.EDIT: "e",
    Action.SQUASH: "s",
    Action.FIXUP: "f",
    Action.DROP: "d",
    Action.EXEC: "x",
    Action.BREAK: "b",
    Action.LABEL: "l",
    Action.RESET: "t",
    Action.MERGE: "m",
    Action.UPDATE_REF: "u",
}

_BY_NAME: dict[str, Action] = {action.value: action for action in Action}
_BY_NAME.update({abbreviation: action for action, abbreviation in _ABBREVIATIONS.items()})

_COMMIT_ACTIONS = frozenset(
    {Action.PICK, Action.REWORD, Action.EDIT, Action.SQUASH, Action.FIXUP, Action.DROP}
)
_STATIC_ACTIONS = frozenset(
    {Action.EXEC, Action.BREAK, Action.LABEL, Action.RESET, Action.MERGE, Action.NOOP, Action.UPDATE_REF}
)
_EDITABLE_ACTIONS = frozenset({Action.EXEC, Action.LABEL, Action.RESET, Action.MERGE, Action.UPDATE_REF})


@dataclass(frozen=True)
class Line:
    """One rebase instruction.

    ``option`` holds the ``-c``/``-C`` flag of a fixup line.
    """

    action: Action
    hash: str = ""
    content: str = ""
    option: str | None = None

    @classmethod
    def parse(cls, text: str) -> Line:
        stripped = text.strip()
        if not stripped:
            raise ParseError("Empty line")
        head, _, rest = stripped.partition(" ")
        try:
            action = Action.parse(head)
        except ParseError as exc:
            raise ParseError(f'The line "{stripped}" is invalid') from exc
        rest = rest.strip()

        if action in (Action.BREAK, Action.NOOP):
            return cls(action=action)
        if not action.is_commit_action():
            if not rest:
                raise ParseError(f'The line "{stripped}" is invalid')
            return cls(action=action, content=rest)

        option = None
        if action is Action.FIXUP and rest[:2] in ("-c", "-C") and rest[2:3] in (" ", ""):
            option = rest[:2]
            rest = rest[2:].strip()
        hash, _, content = rest.partition(" ")
        if not hash:
            raise ParseError(f'The line "{stripped}" is invalid')
        return cls(action=action, hash=hash, content=content.strip(), option=option)

    def is_editable(self) -> bool:
        return self.action in _EDITABLE_ACTIONS

    def has_reference(self) -> bool:
        return self.action.is_commit_action() and bool(self.hash)

    def with_action(self, action: Action) -> Line:
        """Change between commit actions; static lines keep their action."""
        if self.action.is_static() or action.is_static() or action is self.action:
            return self
        option = self.option if action is Action.FIXUP else None
        return replace(self, action=action, option=option)

    def with_content(self, content: str) -> Line:
        if not self.is_editable():
            return self
        return replace(self, content=content)

    def to_text(self) -> str:
        if self.action in (Action.BREAK, Action.NOOP):
            return self.action.value
        if not self.action.is_commit_action():
            return f"{self.action.value} {self.content}"
        parts = [self.action.value]
        if self.option:
            parts.append(self.option)
        parts.append(self.hash)
        if self.content:
            parts.append(self.content)
        return " ".join(parts)


__all__ = ["Action", "Line"]
