"""Yes/no prompt."""

from __future__ import annotations

from enum import Enum

from ...input.events import Event, StandardAction, StandardEvent
from ...input.key_bindings import KeyBindings
from ...view.view_data import DisplayColor, LineSegment, ViewData, ViewLine


class Confirmed(Enum):
    YES = "Yes"
    NO = "No"
    OTHER = "Other"


class Confirm:
    def __init__(self, prompt: str) -> None:
        self.prompt = prompt

    @staticmethod
    def read_event(key: str, key_bindings: KeyBindings) -> Event | None:
        if key_bindings.matches(key, StandardAction.CONFIRM_YES):
            return StandardEvent(StandardAction.CONFIRM_YES)
        if key_bindings.matches(key, StandardAction.CONFIRM_NO):
            return StandardEvent(StandardAction.CONFIRM_NO)
        return None

    @staticmethod
    def handle_event(event: Event) -> Confirmed:
        if isinstance(event, StandardEvent):
            if event.action is StandardAction.CONFIRM_YES:
                return Confirmed.YES
            if event.action is StandardAction.CONFIRM_NO:
                return Confirmed.NO
        return Confirmed.OTHER

    def fill_view_data(self, view_data: ViewData, key_bindings: KeyBindings) -> None:
        yes = key_bindings.keys_for(StandardAction.CONFIRM_YES)
        no = key_bindings.keys_for(StandardAction.CONFIRM_NO)
        view_data.clear()
        view_data.push_line(
            ViewLine.of(
                LineSegment(f"{self.prompt} ({yes[0] if yes else 'y'}/{no[0] if no else 'n'})? ", DisplayColor.INDICATOR)
            )
        )


__all__ = ["Confirm", "Confirmed"]
