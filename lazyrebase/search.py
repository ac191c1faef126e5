"""Searchable protocol driven by ``SearchTerm``/``SearchCancel`` artifacts."""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class SearchResult(Enum):
    NONE = "None"
    UPDATED = "Updated"
    COMPLETE = "Complete"


class Searchable(Protocol):
    """Something the driver can search on behalf of the active module."""

    def reset(self) -> None: ...

    def search(self, term: str) -> SearchResult: ...


__all__ = ["SearchResult", "Searchable"]
