"""Formatting helpers for JSON tree rows.

Rows are produced as ``(style, text)`` segments already cut to the panel
width, so the renderer never depends on terminal wrapping.
"""

from __future__ import annotations

import json
from typing import Any

from ..ansi import ELLIPSIS, display_width, sanitize_terminal_text, truncate_display
from ..ui_theme import DEFAULT_THEME, UITheme
from .types import (
    KIND_ARRAY,
    KIND_BOOLEAN,
    KIND_NULL,
    KIND_NUMBER,
    KIND_OBJECT,
    KIND_STRING,
    JsonNode,
    NodePath,
    kind_of,
)

DEFAULT_PREVIEW_CHARS = 60
NEWLINE_GLYPH = "⏎"
CARET_EXPANDED = "▾"
CARET_COLLAPSED = "▸"
INDENT = "  "

Segment = tuple[str, str]


def _one_line(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\n", NEWLINE_GLYPH).replace("\t", " ")
    return sanitize_terminal_text(text)


def key_label(node: JsonNode) -> str:
    if node.key is None:
        return "(root)"
    if isinstance(node.key, int):
        return f"[{node.key}]"
    return _one_line(str(node.key))


def preview_value(value: Any, max_chars: int = DEFAULT_PREVIEW_CHARS) -> str:
    """Short one-line rendering of ``value`` capped near ``max_chars``."""
    kind = kind_of(value)
    if kind == KIND_STRING:
        text = str(value)
        if len(text) > max_chars:
            text = text[: max(0, max_chars - 1)] + ELLIPSIS
        text = _one_line(text)
        return f'"{text}"'
    if kind == KIND_ARRAY:
        return f"[{len(value)}]"
    if kind == KIND_OBJECT:
        return f"{{{len(value)}}}"
    if kind == KIND_BOOLEAN:
        return "true" if value else "false"
    if kind == KIND_NULL:
        return "null"
    return truncate_display(json.dumps(value), max_chars)


def row_plain_text(node: JsonNode, max_chars: int = DEFAULT_PREVIEW_CHARS) -> str:
    """Undecorated ``key: preview`` text used for searching."""
    return f"{key_label(node)}: {preview_value(node.value, max_chars)}"


def node_path_label(path: NodePath) -> str:
    """Dotted path for the status line, ``(root)`` for the root itself."""
    if not path:
        return "(root)"
    return ".".join(f"[{part}]" if isinstance(part, int) else str(part) for part in path)


def value_style(kind: str, theme: UITheme) -> str:
    if kind == KIND_STRING:
        return theme.json_string
    if kind == KIND_NUMBER:
        return theme.json_number
    if kind == KIND_BOOLEAN:
        return theme.json_boolean
    if kind == KIND_NULL:
        return theme.json_null
    return theme.json_container


def format_tree_row(
    node: JsonNode,
    width: int,
    max_chars: int = DEFAULT_PREVIEW_CHARS,
    theme: UITheme | None = None,
) -> list[Segment]:
    """Build styled segments for one tree row clipped to ``width`` columns."""
    active_theme = theme or DEFAULT_THEME
    indent = INDENT * node.depth
    if node.has_children:
        caret = CARET_EXPANDED if node.expanded else CARET_COLLAPSED
    else:
        caret = " "
    segments: list[Segment] = [
        (active_theme.tree_marker, f"{indent}{caret} "),
        (active_theme.json_key, f"{key_label(node)}: "),
        (value_style(node.kind, active_theme), preview_value(node.value, max_chars)),
    ]
    full = "".join(text for _style, text in segments)
    if display_width(full) <= width:
        return segments

    remaining = truncate_display(full, max(0, width))
    clipped: list[Segment] = []
    for style, text in segments:
        if not remaining:
            break
        take = remaining[: len(text)]
        clipped.append((style, take))
        remaining = remaining[len(take):]
    return clipped
