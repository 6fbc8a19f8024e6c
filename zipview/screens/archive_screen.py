"""Archive browser: entry list on the left, entry metadata on the right.

``Enter`` previews a ``.json`` entry in a nested JSON tree viewer, ``o``
hands the extracted entry to the desktop's default application and ``v``
opens the conversation browser when the archive is a chat export.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ..ansi import pad_display
from ..archive import EntryMetadata, cleanup_temp, extract_to_temp
from ..launcher import open_with_default_handler, run_nested_viewer
from ..render import styled_row
from ..ui_theme import UITheme
from .list_screen import ListScreen

logger = logging.getLogger(__name__)

CONVERSATIONS_ENTRY = "conversations.json"
OPEN_KEYS: tuple[str, ...] = ("o", "O")
CONVERSATION_KEYS: tuple[str, ...] = ("v", "V")
DIVIDER = "│"
LABEL_WIDTH = 14
MIN_PANE_WIDTH = 10


def metadata_lines(meta: EntryMetadata | None) -> list[tuple[str, str]]:
    """Label/value pairs for the metadata panel."""
    if meta is None:
        return [("entry", "(none)")]
    return [
        ("name", meta.name),
        ("type", "directory" if meta.is_directory else "file"),
        ("method", meta.method),
        ("compressed", f"{meta.compressed_size} bytes"),
        ("uncompressed", f"{meta.uncompressed_size} bytes"),
        ("crc32", meta.crc32),
        ("modified", meta.last_modified or "-"),
    ]


def split_widths(columns: int, list_pane_percent: float) -> tuple[int, int]:
    """Return ``(left, right)`` pane widths around a one-column divider."""
    usable = max(2, columns - 1)
    left = int(usable * list_pane_percent / 100)
    left = max(min(MIN_PANE_WIDTH, usable - 1), min(left, usable - 1))
    return left, max(1, usable - left)


class ArchiveScreen(ListScreen):
    """Two-pane browser over one zip archive's entries."""

    def __init__(
        self,
        archive_path: str | Path,
        entries: list[EntryMetadata],
        theme: UITheme,
        list_pane_percent: float = 55.0,
        child_args: Sequence[str] = (),
    ) -> None:
        super().__init__([entry.name for entry in entries], theme)
        self.archive_path = Path(archive_path)
        self.entries = entries
        self.list_pane_percent = list_pane_percent
        self.child_args = tuple(child_args)
        self.has_conversations = any(entry.name == CONVERSATIONS_ENTRY for entry in entries)
        self.left_width, self.right_width = split_widths(80, list_pane_percent)
        hints = ["q=quit", "/ find", "n/N next/prev", "Enter=json", "o=open"]
        if self.has_conversations:
            hints.append("v=GPT")
        self.hints = tuple(hints)
        self.keys.bind(OPEN_KEYS, self.open_external)
        self.keys.bind(CONVERSATION_KEYS, self.open_conversations)

    @property
    def selected_entry(self) -> EntryMetadata | None:
        if not self.entries:
            return None
        return self.entries[self.viewport.selected_index]

    def layout(self, columns: int, lines: int) -> None:
        self.left_width, self.right_width = split_widths(columns, self.list_pane_percent)
        self.viewport.resize(max(1, lines - 1), self.left_width)

    def submit(self) -> bool:
        meta = self.selected_entry
        if meta is None:
            return True
        if meta.is_directory or not meta.name.lower().endswith(".json"):
            self.flash("Enter previews .json entries; o opens externally")
            return True
        self.attempt(lambda: self._preview_json(meta), "Preview failed")
        return True

    def _preview_json(self, meta: EntryMetadata) -> None:
        scratch, file_path = extract_to_temp(self.archive_path, meta.name, "zipview-inline")
        try:
            run_nested_viewer([*self.child_args, "json", str(file_path)], self.terminal)
        finally:
            cleanup_temp(scratch)

    def open_external(self) -> bool:
        meta = self.selected_entry
        if meta is None or meta.is_directory:
            return True
        extracted = self.attempt(lambda: extract_to_temp(self.archive_path, meta.name, "zipview-open"), "Open failed")
        if extracted is None:
            return True
        # scratch copy stays on disk for the external app
        _scratch, file_path = extracted
        open_with_default_handler(file_path)
        logger.info("opened %s externally from %s", meta.name, file_path)
        self.flash(f"Opened externally: {meta.name}", "success")
        return True

    def open_conversations(self) -> bool:
        if not self.has_conversations:
            self.flash(f"GPT view unavailable: {CONVERSATIONS_ENTRY} not found at root", "error")
            return True
        if self.attempt(self._run_conversation_browser, "GPT view failed"):
            self.flash("Returned from GPT archive view")
        return True

    def _run_conversation_browser(self) -> bool:
        run_nested_viewer([*self.child_args, "gpt", str(self.archive_path)], self.terminal)
        return True

    def _metadata_cell(self, row: int) -> str:
        pairs = metadata_lines(self.selected_entry)
        if row >= len(pairs):
            return ""
        label, value = pairs[row]
        theme = self.theme
        label_text = pad_display(f"{label}:", LABEL_WIDTH)
        value_width = max(0, self.right_width - 1 - LABEL_WIDTH)
        return (
            " "
            + styled_row(label_text, LABEL_WIDTH, theme, base=theme.meta_label)
            + styled_row(value, value_width, theme)
        )

    def content_rows(self, columns: int, lines: int) -> list[str]:
        theme = self.theme
        query = self.search.highlight_query
        selected = self.viewport.selected_index
        rows: list[str] = []
        visible = list(self.viewport.visible_range()) if self.labels else []
        divider = f"{theme.divider}{DIVIDER}{theme.reset}"
        for row in range(self.viewport.height):
            if row < len(visible):
                idx = visible[row]
                left = styled_row(
                    pad_display(self.labels[idx], self.left_width),
                    self.left_width,
                    theme,
                    selected=idx == selected,
                    query=query,
                )
            elif row == 0 and not self.labels:
                left = styled_row(pad_display("(empty archive)", self.left_width), self.left_width, theme, base=theme.divider)
            else:
                left = " " * self.left_width
            rows.append(f"{left}{divider}{self._metadata_cell(row)}")
        return rows
