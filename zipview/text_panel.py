"""Wrapped transcript panel with per-record jumps.

A transcript is flattened into display lines: for every record a ``[author]``
header, the word-wrapped body, and an empty separator. ``record_offsets``
holds each header's line index so ``]``/``[`` can jump between records.
"""

from __future__ import annotations

import bisect
import re
import textwrap
from collections.abc import Iterable
from dataclasses import dataclass, field

from .viewport import Viewport


@dataclass(frozen=True)
class PanelLine:
    """One display line; ``kind`` is ``header``, ``body`` or ``separator``."""

    text: str
    author: str
    kind: str = "body"
    record_index: int = 0


@dataclass(frozen=True)
class MessageRecord:
    author: str
    line_offset: int
    line_count: int


def wrap_lines(text: str, width: int) -> list[str]:
    """Word-wrap ``text`` at ``width`` keeping blank lines as ``""``."""
    w = max(1, width)
    out: list[str] = []
    for line in re.split(r"\r?\n", str(text or "")):
        wrapped = textwrap.wrap(
            line.expandtabs(),
            width=w,
            break_long_words=True,
            break_on_hyphens=False,
            drop_whitespace=True,
        )
        out.extend(wrapped or [""])
    return out


def build_panel_lines(
    messages: Iterable[tuple[str, str]],
    width: int,
) -> tuple[list[PanelLine], list[MessageRecord]]:
    """Flatten ``(author, text)`` pairs into lines plus a record index."""
    lines: list[PanelLine] = []
    records: list[MessageRecord] = []
    for record_index, (author, text) in enumerate(messages):
        who = author or "unknown"
        start = len(lines)
        lines.append(PanelLine(f"[{who}]", who, "header", record_index))
        for body in wrap_lines(text, width):
            lines.append(PanelLine(body, who, "body", record_index))
        lines.append(PanelLine("", who, "separator", record_index))
        records.append(MessageRecord(who, start, len(lines) - start))
    return lines, records


@dataclass
class TextPanel:
    """Scrollable wrapped transcript bound to a viewport."""

    messages: list[tuple[str, str]]
    viewport: Viewport = field(default_factory=Viewport)
    lines: list[PanelLine] = field(init=False, default_factory=list)
    records: list[MessageRecord] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self.rewrap(self.viewport.width)

    @property
    def record_offsets(self) -> list[int]:
        return [record.line_offset for record in self.records]

    def rewrap(self, width: int) -> None:
        """Re-flow lines for ``width``, keeping the selection on its record."""
        current_record = self.current_record_index()
        self.viewport.resize(self.viewport.height, width)
        self.lines, self.records = build_panel_lines(self.messages, self.viewport.width)
        self.viewport.set_item_count(len(self.lines))
        if current_record is not None and current_record < len(self.records):
            self.viewport.anchor_top(self.records[current_record].line_offset)

    def current_record_index(self) -> int | None:
        if not self.lines:
            return None
        return self.lines[self.viewport.selected_index].record_index

    def jump_to_next_record(self) -> bool:
        """Move to the first header strictly after the selection, else the end."""
        if not self.lines:
            return False
        offsets = self.record_offsets
        position = self.viewport.selected_index
        idx = bisect.bisect_right(offsets, position)
        if idx < len(offsets):
            self.viewport.anchor_top(offsets[idx])
        else:
            self.viewport.end()
        return True

    def jump_to_previous_record(self) -> bool:
        """Move to the last header strictly before the selection, else the top."""
        if not self.lines:
            return False
        offsets = self.record_offsets
        position = self.viewport.selected_index
        idx = bisect.bisect_left(offsets, position) - 1
        if idx >= 0:
            self.viewport.anchor_top(offsets[idx])
        else:
            self.viewport.home()
        return True

    # RowSource capability for the search session.
    def row_count(self) -> int:
        return len(self.lines)

    def row_text(self, index: int) -> str:
        return self.lines[index].text

    def selected_index(self) -> int:
        return self.viewport.selected_index

    def move_selection_to(self, index: int) -> None:
        self.viewport.move_to(index)
