"""Conversation list for chat export archives.

Titles come from ``conversations.json``; ``Enter`` opens the reduced
transcript of the selected conversation and ``e`` exports it as plain text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ..transcript import conversation_title, export_conversation_plain, messages_for_conversation
from ..ui_theme import UITheme
from .list_screen import ListScreen
from .transcript_screen import TranscriptScreen

logger = logging.getLogger(__name__)

EXPORT_KEYS: tuple[str, ...] = ("e", "E")


class ConversationListScreen(ListScreen):
    hints = ("q=quit", "Enter=open", "e=export", "/ find", "n/N next/prev")

    def __init__(self, conversations: list[Any], theme: UITheme, export_dir: str | Path = "exports") -> None:
        self.conversations = conversations
        self.export_dir = Path(export_dir)
        titles = [conversation_title(convo, idx) for idx, convo in enumerate(conversations)]
        super().__init__(titles, theme)
        self.keys.bind(EXPORT_KEYS, self.export_selected)

    def submit(self) -> bool:
        if not self.labels:
            return True
        idx = self.viewport.selected_index
        transcript = TranscriptScreen(
            self.labels[idx],
            messages_for_conversation(self.conversations[idx]),
            self.theme,
            self.export_dir,
        )
        logger.debug("opening conversation %d (%d messages)", idx, len(transcript.messages))
        if self.terminal is not None and self.key_fd is not None:
            transcript.loop(self.terminal, self.key_fd)
        return True

    def export_selected(self) -> bool:
        if not self.labels:
            return True
        idx = self.viewport.selected_index
        path = self.attempt(
            lambda: export_conversation_plain(
                self.labels[idx],
                messages_for_conversation(self.conversations[idx]),
                self.export_dir,
            ),
            "Export failed",
        )
        if path is not None:
            self.flash(f"Exported {path}", "success")
        return True
