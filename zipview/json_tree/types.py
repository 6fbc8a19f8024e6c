"""JSON tree node datatype and lazy child materialization."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

PathKey = Union[str, int]
NodePath = tuple[PathKey, ...]

KIND_OBJECT = "object"
KIND_ARRAY = "array"
KIND_STRING = "string"
KIND_NUMBER = "number"
KIND_BOOLEAN = "boolean"
KIND_NULL = "null"


def kind_of(value: Any) -> str:
    """Classify a decoded JSON value."""
    if value is None:
        return KIND_NULL
    if isinstance(value, bool):
        return KIND_BOOLEAN
    if isinstance(value, (int, float)):
        return KIND_NUMBER
    if isinstance(value, str):
        return KIND_STRING
    if isinstance(value, dict):
        return KIND_OBJECT
    if isinstance(value, (list, tuple)):
        return KIND_ARRAY
    return KIND_STRING


@dataclass(eq=False)
class JsonNode:
    """One value in the JSON tree.

    ``path`` is the node's identity: nodes are rebuilt freely, paths are
    not. ``parent`` is a navigation link only.
    """

    key: PathKey | None
    value: Any
    depth: int = 0
    path: NodePath = ()
    parent: JsonNode | None = field(default=None, repr=False)
    expanded: bool = False
    children: list[JsonNode] | None = field(default=None, repr=False)

    @property
    def kind(self) -> str:
        return kind_of(self.value)

    @property
    def has_children(self) -> bool:
        return self.kind in {KIND_OBJECT, KIND_ARRAY} and len(self.value) > 0

    @property
    def children_materialized(self) -> bool:
        return self.children is not None

    def materialize(self) -> list[JsonNode]:
        """Build (once) and return this node's immediate children."""
        if self.children is not None:
            return self.children
        kind = self.kind
        if kind == KIND_OBJECT:
            items = list(self.value.items())
        elif kind == KIND_ARRAY:
            items = list(enumerate(self.value))
        else:
            items = []
        self.children = [
            JsonNode(
                key=child_key,
                value=child_value,
                depth=self.depth + 1,
                path=self.path + (child_key,),
                parent=self,
            )
            for child_key, child_value in items
        ]
        return self.children


def build_root(value: Any) -> JsonNode:
    """Return the expanded root node for a parsed JSON document."""
    root = JsonNode(key=None, value=value, depth=0, path=(), parent=None)
    root.expanded = root.has_children
    return root
