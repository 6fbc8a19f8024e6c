"""ANSI-aware text measurement and line shaping utilities.

Provides display-width measurement, clipping that preserves escape
sequences, ellipsis truncation for plain labels, and search highlighting.
These helpers keep rows inside their panel instead of relying on terminal
wrapping.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")
TAB_STOP = 8
ELLIPSIS = "…"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return display columns of ``text`` ignoring ANSI escape sequences."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def sanitize_terminal_text(text: str) -> str:
    """Replace control bytes (other than tab) so rows cannot move the cursor."""
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub("�", text)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def truncate_display(text: str, max_cols: int) -> str:
    """Fit plain ``text`` into ``max_cols`` columns, ending in ``…`` if cut."""
    if max_cols <= 0:
        return ""
    if display_width(text) <= max_cols:
        return text
    return clip_ansi_line(text, max_cols - 1) + ELLIPSIS


def pad_display(text: str, width: int) -> str:
    """Right-pad a (possibly styled) line with spaces up to ``width`` columns."""
    missing = width - display_width(text)
    if missing <= 0:
        return text
    return text + " " * missing


def match_spans(text: str, query: str) -> list[tuple[int, int]]:
    """Return non-overlapping case-insensitive ``(start, end)`` spans of ``query``."""
    if not query:
        return []
    folded_text = text.lower()
    folded_query = query.lower()
    spans: list[tuple[int, int]] = []
    start = 0
    while True:
        idx = folded_text.find(folded_query, start)
        if idx < 0:
            return spans
        spans.append((idx, idx + len(folded_query)))
        start = idx + len(folded_query)


def highlight_substrings(text: str, query: str, base: str, highlight: str, reset: str) -> str:
    """Style plain ``text`` with ``base`` and every ``query`` match with ``highlight``."""
    spans = match_spans(text, query)
    if not spans:
        return f"{base}{text}{reset}" if base else text
    out: list[str] = []
    pos = 0
    for start, end in spans:
        if start > pos:
            out.append(f"{base}{text[pos:start]}{reset}")
        out.append(f"{highlight}{text[start:end]}{reset}")
        pos = end
    if pos < len(text):
        out.append(f"{base}{text[pos:]}{reset}")
    return "".join(out)
