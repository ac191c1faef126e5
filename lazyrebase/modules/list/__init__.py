"""Todo list screen."""

from .list import List, ListMode
from .search import TodoSearch

__all__ = ["List", "ListMode", "TodoSearch"]
