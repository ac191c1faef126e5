"""Numbered option picker used by the external editor recovery screens."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from ...input.events import Event, KeyEvent
from ...view.view_data import DisplayColor, LineSegment, ViewData, ViewLine

T = TypeVar("T")


@dataclass(frozen=True)
class ChoiceOption(Generic[T]):
    key: str
    label: str
    value: T


class Choice(Generic[T]):
    def __init__(self, options: Sequence[tuple[str, str, T]]) -> None:
        self.options = [ChoiceOption(key, label, value) for key, label, value in options]
        self.prompt: list[str] = []
        self.invalid_selection = False

    def set_prompt(self, lines: Sequence[str]) -> None:
        self.prompt = list(lines)

    def handle_event(self, event: Event) -> ChoiceOption[T] | None:
        """Return the option for a matching key, else flag the selection invalid."""
        if not isinstance(event, KeyEvent):
            return None
        for option in self.options:
            if option.key == event.key:
                self.invalid_selection = False
                return option
        self.invalid_selection = True
        return None

    def fill_view_data(self, view_data: ViewData) -> None:
        view_data.clear()
        for line in self.prompt:
            view_data.push_leading_line(line)
        if self.prompt:
            view_data.push_leading_line("")
        for option in self.options:
            view_data.push_line(
                ViewLine.of(LineSegment(f"{option.key}) ", DisplayColor.INDICATOR), option.label)
            )
        view_data.push_trailing_line("")
        if self.invalid_selection:
            view_data.push_trailing_line(
                ViewLine.of(LineSegment("Invalid option selected. Please choose an option.", DisplayColor.INDICATOR))
            )
        else:
            view_data.push_trailing_line(ViewLine.of(LineSegment("Please choose an option.", DisplayColor.INDICATOR)))


__all__ = ["Choice", "ChoiceOption"]
