"""Frame composition for full-screen views.

Screens produce one string per terminal row; this module clips, pads and
styles those rows and assembles the frame that is written in one go.
Nothing here mutates screen state.
"""

from __future__ import annotations

from collections.abc import Iterable

from .ansi import clip_ansi_line, display_width, highlight_substrings, pad_display, sanitize_terminal_text
from .ui_theme import UITheme

KEY_SEPARATOR = "  ·  "


def styled_row(
    text: str,
    width: int,
    theme: UITheme,
    *,
    selected: bool = False,
    query: str = "",
    base: str | None = None,
) -> str:
    """Clip plain ``text`` to ``width`` and style it, highlighting ``query``."""
    clipped = clip_ansi_line(sanitize_terminal_text(text), width)
    if selected:
        clipped = pad_display(clipped, width)
        return highlight_substrings(clipped, query, theme.selected, theme.search_hit, theme.reset)
    row_style = theme.row if base is None else base
    return highlight_substrings(clipped, query, row_style, theme.search_hit, theme.reset)


def styled_segments(
    segments: Iterable[tuple[str, str]],
    width: int,
    theme: UITheme,
    *,
    selected: bool = False,
    query: str = "",
) -> str:
    """Style pre-clipped ``(style, text)`` segments as one row."""
    out: list[str] = []
    used = 0
    for style, text in segments:
        segment_style = theme.selected if selected else style
        out.append(highlight_substrings(text, query, segment_style, theme.search_hit, theme.reset))
        used += display_width(text)
    if selected and used < width:
        out.append(f"{theme.selected}{' ' * (width - used)}{theme.reset}")
    return "".join(out)


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    """Left-aligned status text with optional right-aligned suffix."""
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - (1 if right_text else 0))
    left = clip_ansi_line(left_text, left_limit)
    gap = " " * max(0, usable - display_width(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def key_hints(parts: Iterable[str]) -> str:
    return "keys: " + KEY_SEPARATOR.join(parts)


def status_style(level: str, theme: UITheme) -> str:
    if level == "error":
        return theme.status_error
    if level == "success":
        return theme.status_success
    return theme.status


def compose_frame(rows: list[str], width: int, height: int) -> str:
    """Assemble exactly ``height`` rows, each clipped to ``width`` columns."""
    out: list[str] = ["\033[H"]
    for idx in range(height):
        row = rows[idx] if idx < len(rows) else ""
        out.append(clip_ansi_line(row, width))
        out.append("\033[0m\033[K")
        if idx < height - 1:
            out.append("\r\n")
    return "".join(out)
