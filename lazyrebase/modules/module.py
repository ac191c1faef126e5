"""Base class for screen modules."""

from __future__ import annotations

from ..input.events import Event, InputOptions, StandardAction, StandardEvent
from ..input.key_bindings import KeyBindings
from ..process.results import Results
from ..state import State
from ..view.render_context import RenderContext
from ..view.view_data import ViewData

SCROLL_PAGE = 10


class Module:
    """One screen. All calls arrive on the control thread.

    Subclasses override what they need; the defaults return empty
    ``Results`` and accept only resize events.
    """

    def activate(self, previous_state: State) -> Results:
        return Results()

    def deactivate(self) -> Results:
        return Results()

    def build_view_data(self, context: RenderContext) -> ViewData:
        raise NotImplementedError

    def input_options(self) -> InputOptions:
        return InputOptions.RESIZE

    def read_event(self, key: str, key_bindings: KeyBindings) -> Event | None:
        return None

    def handle_event(self, event: Event) -> Results:
        return Results()

    def handle_error(self, error: BaseException) -> Results:
        return Results()


def handle_scroll(event: Event, view_data: ViewData, page: int = SCROLL_PAGE) -> bool:
    """Apply a standard scroll event to ``view_data``; ``False`` if it is not one."""
    if not isinstance(event, StandardEvent):
        return False
    scroll = view_data.scroll
    action = event.action
    if action is StandardAction.SCROLL_UP:
        scroll.scroll_up()
    elif action is StandardAction.SCROLL_DOWN:
        scroll.scroll_down()
    elif action is StandardAction.SCROLL_LEFT:
        scroll.scroll_left()
    elif action is StandardAction.SCROLL_RIGHT:
        scroll.scroll_right()
    elif action is StandardAction.SCROLL_JUMP_UP:
        scroll.scroll_up(page)
    elif action is StandardAction.SCROLL_JUMP_DOWN:
        scroll.scroll_down(page)
    elif action is StandardAction.SCROLL_TOP:
        scroll.scroll_top()
    elif action is StandardAction.SCROLL_BOTTOM:
        scroll.scroll_bottom(len(view_data.lines))
    else:
        return False
    return True


__all__ = ["Module", "SCROLL_PAGE", "handle_scroll"]
