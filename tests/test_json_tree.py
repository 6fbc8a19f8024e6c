"""JSON tree model and navigator tests.

Covers lazy materialization, flattening order, path-based selection
re-sync and the one-line row format.
"""

from __future__ import annotations

import unittest

from zipview.json_tree import (
    TreeNavigator,
    build_root,
    flatten_visible,
    format_tree_row,
    node_path_label,
    preview_value,
    row_plain_text,
)
from zipview.ui_theme import PLAIN_THEME
from zipview.viewport import Viewport

SAMPLE = {"name": "zipview", "tags": ["a", "b"], "meta": {"size": 3, "empty": {}}, "flag": True}


def _row_text(segments) -> str:
    return "".join(text for _style, text in segments)


class JsonNodeTests(unittest.TestCase):
    def test_root_starts_expanded_and_children_are_lazy(self) -> None:
        root = build_root(SAMPLE)
        self.assertTrue(root.expanded)
        self.assertFalse(root.children_materialized)
        tags = root.materialize()[1]
        self.assertFalse(tags.children_materialized)
        self.assertEqual(tags.path, ("tags",))
        self.assertIs(tags.parent, root)

    def test_empty_containers_have_no_children(self) -> None:
        self.assertFalse(build_root({}).has_children)
        self.assertFalse(build_root({}).expanded)
        self.assertFalse(build_root([]).has_children)

    def test_flatten_with_only_root_expanded_lists_immediate_children_in_order(self) -> None:
        visible = flatten_visible(build_root(SAMPLE))
        self.assertEqual(visible[0].path, ())
        self.assertEqual([node.key for node in visible[1:]], ["name", "tags", "meta", "flag"])
        self.assertTrue(all(node.depth == 1 for node in visible[1:]))

    def test_flatten_array_uses_index_keys(self) -> None:
        visible = flatten_visible(build_root([10, 20, 30]))
        self.assertEqual([node.key for node in visible[1:]], [0, 1, 2])


class TreeNavigatorTests(unittest.TestCase):
    def test_toggle_twice_keeps_cache_and_restores_visible_rows(self) -> None:
        nav = TreeNavigator(build_root(SAMPLE), Viewport(height=10))
        before = [node.path for node in nav.visible]
        meta = nav.visible[3]
        nav.toggle(meta)
        self.assertEqual(len(nav.visible), len(before) + 2)
        nav.toggle(meta)
        self.assertTrue(meta.children_materialized)
        self.assertEqual([node.path for node in nav.visible], before)

    def test_toggle_on_leaf_is_noop(self) -> None:
        nav = TreeNavigator(build_root(SAMPLE))
        leaf = nav.visible[1]
        self.assertFalse(nav.toggle(leaf))
        self.assertEqual(len(nav.visible), 5)

    def test_selection_follows_path_after_collapse_above(self) -> None:
        nav = TreeNavigator(build_root(SAMPLE), Viewport(height=10))
        nav.toggle(nav.visible[2])  # tags
        nav.move_selection_to(5)  # meta
        self.assertEqual(nav.selected_node.path, ("meta",))
        nav.toggle(nav.visible[2])
        self.assertEqual(nav.selected_node.path, ("meta",))
        self.assertEqual(nav.viewport.selected_index, 3)

    def test_collapse_or_go_to_parent(self) -> None:
        nav = TreeNavigator(build_root(SAMPLE), Viewport(height=10))
        nav.move_selection_to(2)
        nav.toggle_selected()
        nav.move_selection_to(3)  # tags[0]
        self.assertEqual(nav.selected_node.path, ("tags", 0))
        nav.collapse_selected_or_parent()
        self.assertEqual(nav.selected_node.path, ("tags",))
        nav.collapse_selected_or_parent()
        self.assertFalse(nav.selected_node.expanded)
        self.assertEqual(nav.viewport.item_count, 5)

    def test_collapse_root_leaves_single_row(self) -> None:
        nav = TreeNavigator(build_root(SAMPLE))
        nav.collapse_selected_or_parent()
        self.assertEqual(nav.row_count(), 1)
        self.assertFalse(nav.collapse_selected_or_parent())


class TreeRowFormatTests(unittest.TestCase):
    def test_preview_value_shapes(self) -> None:
        self.assertEqual(preview_value("a\nb"), '"a⏎b"')
        self.assertEqual(preview_value([1, 2]), "[2]")
        self.assertEqual(preview_value({"k": 1}), "{1}")
        self.assertEqual(preview_value(None), "null")
        self.assertEqual(preview_value(False), "false")
        self.assertEqual(preview_value(2.5), "2.5")

    def test_long_string_preview_is_truncated_with_ellipsis(self) -> None:
        preview = preview_value("x" * 100, max_chars=10)
        self.assertEqual(preview, '"' + "x" * 9 + '…"')

    def test_row_text_has_caret_indent_and_key(self) -> None:
        root = build_root(SAMPLE)
        tags = root.materialize()[1]
        text = _row_text(format_tree_row(tags, 80, theme=PLAIN_THEME))
        self.assertEqual(text, "  ▸ tags: [2]")
        self.assertEqual(row_plain_text(tags), "tags: [2]")
        self.assertEqual(_row_text(format_tree_row(root, 80, theme=PLAIN_THEME)), "▾ (root): {4}")

    def test_row_is_truncated_to_width(self) -> None:
        root = build_root({"description": "a fairly long string value"})
        node = root.materialize()[0]
        text = _row_text(format_tree_row(node, 20, theme=PLAIN_THEME))
        self.assertEqual(len(text), 20)
        self.assertTrue(text.endswith("…"))

    def test_node_path_label(self) -> None:
        self.assertEqual(node_path_label(()), "(root)")
        self.assertEqual(node_path_label(("items", 3, "name")), "items.[3].name")


if __name__ == "__main__":
    unittest.main()
