"""Resolve raw input into module events, filtered by ``InputOptions``."""

from __future__ import annotations

from collections.abc import Callable

from .events import (
    SCROLL_ACTIONS,
    SEARCH_ACTIONS,
    UNDO_REDO_ACTIONS,
    Event,
    InputOptions,
    KeyEvent,
    RawInput,
    ResizeEvent,
    StandardAction,
    StandardEvent,
)
from .key_bindings import KeyBindings

CustomReader = Callable[[str, KeyBindings], "Event | None"]


class EventRouter:
    """Maps a raw key token to at most one ``Event`` for the active module."""

    def __init__(self, key_bindings: KeyBindings | None = None) -> None:
        self.key_bindings = key_bindings if key_bindings is not None else KeyBindings()

    def _standard(self, key: str, actions: tuple[StandardAction, ...]) -> Event | None:
        action = self.key_bindings.first_match(key, actions)
        if action is None:
            return None
        return StandardEvent(action)

    def route(
        self,
        raw: RawInput,
        options: InputOptions,
        read_event: CustomReader | None = None,
    ) -> Event | None:
        """Return the event for ``raw`` or ``None`` when it is dropped."""
        if isinstance(raw, StandardEvent):
            return raw
        if isinstance(raw, ResizeEvent):
            return raw if InputOptions.RESIZE in options else None
        if not raw:
            return None

        key = raw
        if self.key_bindings.matches(key, StandardAction.KILL):
            return StandardEvent(StandardAction.KILL)

        filtered: list[tuple[InputOptions, tuple[StandardAction, ...]]] = [
            (InputOptions.MOVEMENT, SCROLL_ACTIONS),
            (InputOptions.HELP, (StandardAction.HELP,)),
            (InputOptions.UNDO_REDO, UNDO_REDO_ACTIONS),
            (InputOptions.SEARCH, SEARCH_ACTIONS),
        ]
        for flag, actions in filtered:
            if flag in options:
                event = self._standard(key, actions)
                if event is not None:
                    return event

        if read_event is not None:
            event = read_event(key, self.key_bindings)
            if event is not None:
                return event
        return KeyEvent(key)


__all__ = ["CustomReader", "EventRouter"]
