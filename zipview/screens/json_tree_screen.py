"""Collapsible JSON tree screen."""

from __future__ import annotations

from typing import Any

from ..json_tree import DEFAULT_PREVIEW_CHARS, TreeNavigator, build_root, format_tree_row, node_path_label
from ..render import build_status_line, styled_segments
from ..ui_theme import UITheme
from ..viewport import Viewport
from .base import Screen

TOGGLE_KEYS: tuple[str, ...] = ("RIGHT", "l", "L", "ENTER", " ")
COLLAPSE_KEYS: tuple[str, ...] = ("LEFT", "h", "H")


class JsonTreeScreen(Screen):
    """Tree navigator over one parsed JSON value."""

    hints = ("q=quit", "Enter/→ toggle", "← parent", "/ find", "n/N next/prev")

    def __init__(self, value: Any, theme: UITheme, preview_chars: int = DEFAULT_PREVIEW_CHARS) -> None:
        self.navigator = TreeNavigator(build_root(value), Viewport(), preview_chars)
        super().__init__(theme, self.navigator, self.navigator.viewport)
        self.keys.bind(TOGGLE_KEYS, self.navigator.toggle_selected)
        self.keys.bind(COLLAPSE_KEYS, self.navigator.collapse_selected_or_parent)

    def content_rows(self, columns: int, lines: int) -> list[str]:
        nav = self.navigator
        query = self.search.highlight_query
        selected = self.viewport.selected_index
        rows: list[str] = []
        for idx in self.viewport.visible_range():
            segments = format_tree_row(nav.visible[idx], columns, nav.preview_chars, self.theme)
            rows.append(styled_segments(segments, columns, self.theme, selected=idx == selected, query=query))
        return rows

    def status_row(self, width: int) -> str:
        """Selected node path and kind in place of the key cheat-sheet."""
        node = self.navigator.selected_node
        if self.search.composing or self.status_message or node is None:
            return super().status_row(width)
        theme = self.theme
        text = build_status_line(f"{node_path_label(node.path)} ({node.kind})", width, self.position_text())
        return f"{theme.status}{text}{theme.reset}"
