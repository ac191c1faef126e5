"""Input layer: terminal key decoding, event vocabulary and routing."""

from .events import Event, InputOptions, KeyEvent, RawInput, ResizeEvent, StandardAction, StandardEvent
from .key_bindings import KeyBindings
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key
from .router import EventRouter

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "Event",
    "EventRouter",
    "InputOptions",
    "KeyBindings",
    "KeyEvent",
    "RawInput",
    "ResizeEvent",
    "StandardAction",
    "StandardEvent",
    "read_key",
]
