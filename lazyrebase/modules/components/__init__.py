"""Reusable building blocks for screen modules."""

from .choice import Choice, ChoiceOption
from .confirm import Confirm, Confirmed
from .edit import Edit, EditStatus
from .help import Help

__all__ = ["Choice", "ChoiceOption", "Confirm", "Confirmed", "Edit", "EditStatus", "Help"]
