"""Key help overlay shared by screens that declare ``InputOptions.HELP``."""

from __future__ import annotations

from collections.abc import Sequence

from ...input.events import Event, InputOptions, ResizeEvent, StandardAction
from ...input.key_bindings import KeyBindings
from ...view.view_data import DisplayColor, LineSegment, ViewData, ViewLine
from ..module import handle_scroll


class Help:
    """Toggleable list of ``(action, description)`` with the bound keys."""

    def __init__(self, entries: Sequence[tuple[StandardAction, str]], key_bindings: KeyBindings) -> None:
        self.active = False
        self.view_data = ViewData(title="Help")
        self._fill(entries, key_bindings)

    def _fill(self, entries: Sequence[tuple[StandardAction, str]], key_bindings: KeyBindings) -> None:
        rows = [(key_bindings.label(action), description) for action, description in entries]
        width = max((len(keys) for keys, _ in rows), default=0)
        self.view_data.push_leading_line(
            ViewLine.of(LineSegment(f" {'Key':<{width}} Action", DisplayColor.INDICATOR, underline=True))
        )
        for keys, description in rows:
            self.view_data.push_line(
                ViewLine.of(LineSegment(f" {keys:<{width}} ", DisplayColor.INDICATOR), description, pinned=1)
            )
        self.view_data.push_trailing_line(ViewLine.of(LineSegment("Press any key to close", DisplayColor.INDICATOR)))

    @staticmethod
    def input_options() -> InputOptions:
        return InputOptions.RESIZE | InputOptions.MOVEMENT

    def set_active(self) -> None:
        self.active = True

    def handle_event(self, event: Event) -> None:
        """Scroll on movement, stay open on resize, close on anything else."""
        if isinstance(event, ResizeEvent) or handle_scroll(event, self.view_data):
            return
        self.active = False


__all__ = ["Help"]
