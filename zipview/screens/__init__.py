"""Full-screen hosts built on the shared navigation core."""

from __future__ import annotations

from .archive_screen import ArchiveScreen
from .base import Screen, run_interactive
from .conversation_screen import ConversationListScreen
from .json_tree_screen import JsonTreeScreen
from .list_screen import ListScreen
from .transcript_screen import TranscriptScreen

__all__ = [
    "ArchiveScreen",
    "ConversationListScreen",
    "JsonTreeScreen",
    "ListScreen",
    "Screen",
    "TranscriptScreen",
    "run_interactive",
]
