"""Screen modules and the state-keyed registry that dispatches to them."""

from .module import Module
from .registry import Modules

__all__ = ["Module", "Modules"]
