"""Scroll offsets for a view body."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScrollPosition:
    """Top row and left column of the visible window, clamped at render time."""

    top: int = 0
    left: int = 0

    def scroll_up(self, amount: int = 1) -> None:
        self.top = max(0, self.top - amount)

    def scroll_down(self, amount: int = 1) -> None:
        self.top += amount

    def scroll_left(self, amount: int = 1) -> None:
        self.left = max(0, self.left - amount)

    def scroll_right(self, amount: int = 1) -> None:
        self.left += amount

    def scroll_top(self) -> None:
        self.top = 0

    def scroll_bottom(self, total_lines: int) -> None:
        self.top = max(0, total_lines)

    def ensure_visible(self, index: int, view_height: int) -> None:
        if view_height <= 0:
            return
        if index < self.top:
            self.top = index
        elif index >= self.top + view_height:
            self.top = index - view_height + 1

    def clamp(self, total_lines: int, view_height: int, max_width: int, view_width: int) -> None:
        self.top = max(0, min(self.top, total_lines - view_height))
        self.left = max(0, min(self.left, max_width - view_width))


__all__ = ["ScrollPosition"]
