"""Virtualized scrolling window over an ordered item sequence.

The viewport only tracks integers: how many items exist, which one is
selected and which slice ``[scroll_offset, scroll_offset + height)`` is on
screen. Every operation re-clamps in O(1) so redraw cost depends on the
height, never on the item count.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")


@dataclass
class Viewport:
    """Selection plus scroll window for ``item_count`` rows.

    Invariant (enforced by :meth:`clamp`): ``0 <= scroll_offset <=
    max(0, item_count - height)`` and, when there are items,
    ``scroll_offset <= selected_index < scroll_offset + height``. With no
    items both fields are ``0``.
    """

    item_count: int = 0
    height: int = 1
    width: int = 80
    selected_index: int = 0
    scroll_offset: int = 0

    def __post_init__(self) -> None:
        self.item_count = max(0, self.item_count)
        self.height = max(1, self.height)
        self.width = max(1, self.width)
        self.clamp()

    @property
    def max_scroll(self) -> int:
        return max(0, self.item_count - self.height)

    def clamp(self) -> None:
        """Restore the selection/scroll invariant after any mutation."""
        if self.item_count == 0:
            self.selected_index = 0
            self.scroll_offset = 0
            return
        self.selected_index = max(0, min(self.selected_index, self.item_count - 1))
        if self.selected_index < self.scroll_offset:
            self.scroll_offset = self.selected_index
        if self.selected_index >= self.scroll_offset + self.height:
            self.scroll_offset = self.selected_index - self.height + 1
        self.scroll_offset = max(0, min(self.scroll_offset, self.max_scroll))

    def move_by(self, delta: int) -> None:
        if self.item_count == 0:
            return
        self.selected_index += delta
        self.clamp()

    def move_to(self, index: int) -> None:
        if self.item_count == 0:
            return
        self.selected_index = index
        self.clamp()

    def page_up(self) -> None:
        self.move_by(-self.height)

    def page_down(self) -> None:
        self.move_by(self.height)

    def home(self) -> None:
        self.move_to(0)

    def end(self) -> None:
        self.move_to(self.item_count - 1)

    def anchor_top(self, index: int) -> None:
        """Select ``index`` and scroll so it sits on the top row when possible."""
        if self.item_count == 0:
            return
        self.selected_index = max(0, min(index, self.item_count - 1))
        self.scroll_offset = min(self.selected_index, self.max_scroll)
        self.clamp()

    def resize(self, height: int, width: int | None = None) -> None:
        self.height = max(1, height)
        if width is not None:
            self.width = max(1, width)
        self.clamp()

    def set_item_count(self, item_count: int) -> None:
        """Adopt a new item count, keeping the selection index when still valid."""
        self.item_count = max(0, item_count)
        self.clamp()

    def visible_range(self) -> range:
        """Return indices of rows currently on screen."""
        end = min(self.item_count, self.scroll_offset + self.height)
        return range(self.scroll_offset, end)

    def visible_slice(self, items: Sequence[T]) -> list[T]:
        rows = self.visible_range()
        return list(items[rows.start:rows.stop])
