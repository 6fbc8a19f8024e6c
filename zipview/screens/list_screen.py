"""Flat label list: pick one row with Enter, cancel with ``q``."""

from __future__ import annotations

from ..render import styled_row
from ..ui_theme import UITheme
from ..viewport import Viewport
from .base import Screen

SUBMIT_KEYS: tuple[str, ...] = ("ENTER",)


class ListScreen(Screen):
    """Selectable list of plain labels.

    ``result`` is the submitted label, or ``None`` when the user quits
    without choosing.
    """

    hints = ("q=quit", "Enter=select", "/ find", "n/N next/prev")

    def __init__(self, labels: list[str], theme: UITheme, title: str | None = None) -> None:
        self.labels = list(labels)
        self.title = title
        viewport = Viewport(item_count=len(self.labels))
        super().__init__(theme, self, viewport)
        self.keys.bind(SUBMIT_KEYS, self.submit)

    @property
    def header_rows(self) -> int:
        return 1 if self.title else 0

    def submit(self) -> bool:
        if not self.labels:
            return True
        return self.close(self.labels[self.viewport.selected_index])

    def layout(self, columns: int, lines: int) -> None:
        self.viewport.resize(max(1, lines - 1 - self.header_rows), columns)

    def content_rows(self, columns: int, lines: int) -> list[str]:
        theme = self.theme
        query = self.search.highlight_query
        rows: list[str] = []
        if self.title:
            rows.append(styled_row(f"{self.title} ({len(self.labels)})", columns, theme, base=theme.header))
        if not self.labels:
            rows.append(styled_row("(empty)", columns, theme, base=theme.divider))
            return rows
        selected = self.viewport.selected_index
        for idx in self.viewport.visible_range():
            rows.append(styled_row(self.labels[idx], columns, theme, selected=idx == selected, query=query))
        return rows

    # RowSource capability for the search session.
    def row_count(self) -> int:
        return len(self.labels)

    def row_text(self, index: int) -> str:
        return self.labels[index]

    def selected_index(self) -> int:
        return self.viewport.selected_index

    def move_selection_to(self, index: int) -> None:
        self.viewport.move_to(index)
