"""Incremental substring search shared by every screen.

A :class:`SearchSession` knows nothing about screens. It talks to a
:class:`RowSource` (row count, plain text per row, current selection, and a
move-selection request) so flat lists, JSON trees and wrapped transcripts all
get identical ``/``, ``n`` and ``N`` behavior.
"""

from __future__ import annotations

import enum
from typing import Protocol

from .key_registry import KeyComboRegistry

ACTIVATE_KEYS: tuple[str, ...] = ("/",)
NEXT_KEYS: tuple[str, ...] = ("n",)
PREVIOUS_KEYS: tuple[str, ...] = ("N",)


class RowSource(Protocol):
    """What a screen exposes so a search can scan and select its rows."""

    def row_count(self) -> int: ...

    def row_text(self, index: int) -> str: ...

    def selected_index(self) -> int: ...

    def move_selection_to(self, index: int) -> None: ...


class SearchMode(enum.Enum):
    IDLE = "idle"
    COMPOSING = "composing"
    COMMITTED = "committed"


class SearchOutcome(enum.Enum):
    """Result of the last search step, used for the status line."""

    UNCHANGED = "unchanged"
    MOVED = "moved"
    NO_MATCH = "no_match"


def find_match(source: RowSource, query: str, start: int, direction: int) -> int | None:
    """Return the first row matching ``query`` scanning from ``start``.

    ``start`` itself is examined first; the scan wraps around and covers
    every row exactly once. Matching is case-insensitive containment.
    """
    total = source.row_count()
    if total <= 0 or not query:
        return None
    folded = query.lower()
    step = 1 if direction >= 0 else -1
    idx = start % total
    for _ in range(total):
        if folded in source.row_text(idx).lower():
            return idx
        idx = (idx + step) % total
    return None


class SearchSession:
    """State machine: idle -> composing -> committed (and back)."""

    def __init__(self, source: RowSource) -> None:
        self.source = source
        self.mode = SearchMode.IDLE
        self.buffer = ""
        self.last_query = ""
        self.outcome = SearchOutcome.UNCHANGED
        self._anchor = 0
        self._composing_keys = KeyComboRegistry()
        self._composing_keys.bind(("ESC",), self.cancel)
        self._composing_keys.bind(("ENTER",), self.accept)
        self._composing_keys.bind(("BACKSPACE",), self.backspace)
        self._idle_keys = KeyComboRegistry()
        self._idle_keys.bind(ACTIVATE_KEYS, self.begin)
        self._idle_keys.bind(NEXT_KEYS, lambda: self.repeat(1))
        self._idle_keys.bind(PREVIOUS_KEYS, lambda: self.repeat(-1))

    @property
    def composing(self) -> bool:
        return self.mode is SearchMode.COMPOSING

    @property
    def highlight_query(self) -> str:
        """Query renderers should highlight in visible rows."""
        return self.buffer if self.composing else self.last_query

    def handle_key(self, key: str) -> bool:
        """Offer ``key`` to the session; ``True`` means it was consumed.

        While composing every key is consumed so typing never triggers
        screen commands.
        """
        if self.composing:
            if self._composing_keys.dispatch(key) is None and len(key) == 1 and key.isprintable():
                self.append(key)
            return True
        return bool(self._idle_keys.dispatch(key))

    def begin(self) -> bool:
        self.mode = SearchMode.COMPOSING
        self.buffer = ""
        self.outcome = SearchOutcome.UNCHANGED
        self._anchor = self.source.selected_index()
        return True

    def append(self, text: str) -> bool:
        self.buffer += text
        self._live_search()
        return True

    def backspace(self) -> bool:
        self.buffer = self.buffer[:-1]
        self._live_search()
        return True

    def accept(self) -> bool:
        self.last_query = self.buffer
        self.buffer = ""
        self.mode = SearchMode.COMMITTED if self.last_query else SearchMode.IDLE
        return True

    def cancel(self) -> bool:
        self.buffer = ""
        self.outcome = SearchOutcome.UNCHANGED
        self.mode = SearchMode.COMMITTED if self.last_query else SearchMode.IDLE
        return True

    def repeat(self, direction: int) -> bool:
        """Re-run ``last_query`` after/before the current selection."""
        if not self.last_query:
            self.outcome = SearchOutcome.UNCHANGED
            return True
        step = 1 if direction >= 0 else -1
        start = self.source.selected_index() + step
        self._select(find_match(self.source, self.last_query, start, step))
        return True

    def _live_search(self) -> None:
        if not self.buffer:
            self.outcome = SearchOutcome.UNCHANGED
            return
        self._select(find_match(self.source, self.buffer, self._anchor + 1, 1))

    def _select(self, index: int | None) -> None:
        if index is None:
            self.outcome = SearchOutcome.NO_MATCH
            return
        self.source.move_selection_to(index)
        self.outcome = SearchOutcome.MOVED
