"""Text panel wrapping and record-jump tests."""

from __future__ import annotations

import unittest

from zipview.text_panel import TextPanel, build_panel_lines, wrap_lines
from zipview.viewport import Viewport

MESSAGES = [("user", "hello"), ("assistant", "world wide web")]


def make_panel(width: int = 5, height: int = 3) -> TextPanel:
    return TextPanel(list(MESSAGES), Viewport(height=height, width=width))


class WrapLinesTests(unittest.TestCase):
    def test_blank_lines_are_preserved(self) -> None:
        self.assertEqual(wrap_lines("a\n\nb", 10), ["a", "", "b"])

    def test_only_newline_sequences_break_lines(self) -> None:
        self.assertEqual(wrap_lines("a\r\nb", 10), ["a", "b"])
        self.assertEqual(wrap_lines("a\x1cb c", 20), ["a\x1cb c"])

    def test_long_words_are_split(self) -> None:
        self.assertEqual(wrap_lines("abcdefgh", 3), ["abc", "def", "gh"])

    def test_empty_text_yields_one_empty_line(self) -> None:
        self.assertEqual(wrap_lines("", 10), [""])


class PanelLayoutTests(unittest.TestCase):
    def test_header_body_separator_layout(self) -> None:
        lines, records = build_panel_lines(MESSAGES, 5)
        self.assertEqual(
            [line.text for line in lines],
            ["[user]", "hello", "", "[assistant]", "world", "wide", "web", ""],
        )
        self.assertEqual([record.line_offset for record in records], [0, 3])
        self.assertEqual([record.line_count for record in records], [3, 5])
        self.assertEqual(lines[2].kind, "separator")
        self.assertEqual(lines[4].author, "assistant")


class RecordJumpTests(unittest.TestCase):
    def test_next_record_from_any_line_of_first_record_lands_on_second_header(self) -> None:
        for start in range(3):
            panel = make_panel()
            panel.move_selection_to(start)
            panel.jump_to_next_record()
            self.assertEqual(panel.selected_index(), 3, f"from line {start}")
            self.assertEqual(panel.viewport.scroll_offset, 3)

    def test_next_record_from_last_record_goes_to_end(self) -> None:
        panel = make_panel()
        panel.move_selection_to(4)
        panel.jump_to_next_record()
        self.assertEqual(panel.selected_index(), 7)

    def test_previous_record_walks_back_to_top(self) -> None:
        panel = make_panel()
        panel.move_selection_to(5)
        panel.jump_to_previous_record()
        self.assertEqual(panel.selected_index(), 3)
        panel.jump_to_previous_record()
        self.assertEqual(panel.selected_index(), 0)
        panel.jump_to_previous_record()
        self.assertEqual(panel.selected_index(), 0)

    def test_jumps_on_empty_panel_are_noops(self) -> None:
        panel = TextPanel([], Viewport(height=3, width=5))
        self.assertFalse(panel.jump_to_next_record())
        self.assertFalse(panel.jump_to_previous_record())
        self.assertIsNone(panel.current_record_index())

    def test_rewrap_keeps_selection_on_same_record(self) -> None:
        panel = make_panel()
        panel.move_selection_to(5)
        panel.rewrap(80)
        self.assertEqual(panel.row_text(panel.selected_index()), "[assistant]")
        self.assertEqual(panel.row_count(), 6)


if __name__ == "__main__":
    unittest.main()
