"""JSON tree model, lazy materialization, navigation, and row formatting.

Defines ``JsonNode`` and the ``TreeNavigator`` that flattens the visible
part of the tree into viewport rows.
"""

from __future__ import annotations

from .navigation import TreeNavigator, find_index_by_path, flatten_visible
from .rendering import (
    DEFAULT_PREVIEW_CHARS,
    format_tree_row,
    key_label,
    node_path_label,
    preview_value,
    row_plain_text,
)
from .types import JsonNode, NodePath, build_root, kind_of

__all__ = [
    "JsonNode",
    "NodePath",
    "TreeNavigator",
    "build_root",
    "kind_of",
    "flatten_visible",
    "find_index_by_path",
    "DEFAULT_PREVIEW_CHARS",
    "format_tree_row",
    "key_label",
    "node_path_label",
    "preview_value",
    "row_plain_text",
]
