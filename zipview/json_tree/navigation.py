"""Tree navigator: expand/collapse, flattening, and path-based selection sync.

The navigator owns the visible row list derived from the tree and keeps a
:class:`~zipview.viewport.Viewport` in step with it. After every structural
change the previously selected node is looked up again by ``path`` so the
cursor follows the same logical value.
"""

from __future__ import annotations

from ..viewport import Viewport
from .rendering import DEFAULT_PREVIEW_CHARS, row_plain_text
from .types import JsonNode, NodePath


def flatten_visible(root: JsonNode) -> list[JsonNode]:
    """Depth-first pre-order list of nodes whose ancestors are all expanded."""
    out: list[JsonNode] = []
    stack: list[JsonNode] = [root]
    while stack:
        node = stack.pop()
        out.append(node)
        if node.has_children and node.expanded:
            stack.extend(reversed(node.materialize()))
    return out


def find_index_by_path(visible: list[JsonNode], path: NodePath) -> int | None:
    for idx, node in enumerate(visible):
        if node.path == path:
            return idx
    return None


class TreeNavigator:
    """Visible-row model for one JSON tree screen."""

    def __init__(
        self,
        root: JsonNode,
        viewport: Viewport | None = None,
        preview_chars: int = DEFAULT_PREVIEW_CHARS,
    ) -> None:
        self.root = root
        self.viewport = viewport if viewport is not None else Viewport()
        self.preview_chars = preview_chars
        self.visible: list[JsonNode] = []
        self.refresh()

    @property
    def selected_node(self) -> JsonNode | None:
        if not self.visible:
            return None
        return self.visible[self.viewport.selected_index]

    def refresh(self, preferred_path: NodePath | None = None) -> None:
        """Re-flatten the tree and re-select ``preferred_path`` (or index 0)."""
        self.visible = flatten_visible(self.root)
        self.viewport.set_item_count(len(self.visible))
        if preferred_path is None:
            return
        idx = find_index_by_path(self.visible, preferred_path)
        self.viewport.move_to(0 if idx is None else idx)

    def toggle(self, node: JsonNode) -> bool:
        """Expand or collapse ``node``; leaves are left alone."""
        if not node.has_children:
            return False
        if not node.expanded:
            node.materialize()
        node.expanded = not node.expanded
        self.refresh(self._selected_path_or(node.path))
        return True

    def collapse_or_go_to_parent(self, node: JsonNode) -> bool:
        """Collapse an expanded node, otherwise select its parent."""
        if node.has_children and node.expanded:
            node.expanded = False
            self.refresh(node.path)
            return True
        if node.parent is not None:
            self.refresh(node.parent.path)
            return True
        return False

    def toggle_selected(self) -> bool:
        node = self.selected_node
        return node is not None and self.toggle(node)

    def collapse_selected_or_parent(self) -> bool:
        node = self.selected_node
        return node is not None and self.collapse_or_go_to_parent(node)

    def _selected_path_or(self, fallback: NodePath) -> NodePath:
        node = self.selected_node
        return node.path if node is not None else fallback

    # RowSource capability for the search session.
    def row_count(self) -> int:
        return len(self.visible)

    def row_text(self, index: int) -> str:
        return row_plain_text(self.visible[index], self.preview_chars)

    def selected_index(self) -> int:
        return self.viewport.selected_index

    def move_selection_to(self, index: int) -> None:
        self.viewport.move_to(index)
