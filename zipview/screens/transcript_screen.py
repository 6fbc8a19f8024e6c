"""Scrollable conversation transcript with record jumps and export."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ..render import styled_row
from ..text_panel import PanelLine, TextPanel
from ..transcript import Message, export_conversation_plain
from ..ui_theme import UITheme
from ..viewport import Viewport
from .base import Screen

NEXT_RECORD_KEYS: tuple[str, ...] = ("]",)
PREVIOUS_RECORD_KEYS: tuple[str, ...] = ("[",)
EXPORT_KEYS: tuple[str, ...] = ("e", "E")
# Right-hand margin kept free of wrapped text.
WRAP_MARGIN = 2


def line_style(line: PanelLine, theme: UITheme) -> str:
    if line.kind == "separator":
        return theme.separator
    if line.author == "user":
        return theme.author_user
    if line.author == "assistant":
        return theme.author_assistant
    return theme.author_other


class TranscriptScreen(Screen):
    """Text panel over one reduced conversation."""

    hints = (
        "q=back",
        "e=export",
        "/ find",
        "n/N next/prev match",
        "]/[ next/prev msg",
        "u/d page",
        "g/G top/bottom",
    )

    def __init__(
        self,
        title: str,
        messages: Sequence[Message],
        theme: UITheme,
        export_dir: str | Path = "exports",
    ) -> None:
        self.title = title
        self.messages = list(messages)
        self.export_dir = Path(export_dir)
        self.panel = TextPanel([(m.author, m.text) for m in self.messages], Viewport(width=80 - WRAP_MARGIN))
        super().__init__(theme, self.panel, self.panel.viewport)
        self.keys.bind(NEXT_RECORD_KEYS, self.panel.jump_to_next_record)
        self.keys.bind(PREVIOUS_RECORD_KEYS, self.panel.jump_to_previous_record)
        self.keys.bind(EXPORT_KEYS, self.export)

    def layout(self, columns: int, lines: int) -> None:
        self.viewport.resize(max(1, lines - 2))
        wrap_width = max(1, columns - WRAP_MARGIN)
        if wrap_width != self.viewport.width:
            self.panel.rewrap(wrap_width)

    def export(self) -> bool:
        path = self.attempt(
            lambda: export_conversation_plain(self.title, self.messages, self.export_dir),
            "Export failed",
        )
        if path is not None:
            self.flash(f"Exported {path}", "success")
        return True

    def content_rows(self, columns: int, lines: int) -> list[str]:
        theme = self.theme
        query = self.search.highlight_query
        selected = self.viewport.selected_index
        rows = [styled_row(self.title, columns, theme, base=theme.header)]
        if not self.panel.lines:
            rows.append(styled_row("(no messages)", columns, theme, base=theme.divider))
            return rows
        for idx in self.viewport.visible_range():
            line = self.panel.lines[idx]
            rows.append(
                styled_row(
                    line.text,
                    columns,
                    theme,
                    selected=idx == selected,
                    query=query,
                    base=line_style(line, theme),
                )
            )
        return rows
