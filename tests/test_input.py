"""Regression tests for raw-key decoding.

Covers ESC timing, CSI/SS3 sequences, control-key token mapping and
multi-byte characters, reading from a real pipe.
"""

import os
import time
import unittest

from zipview import input as input_mod


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_all(b"\x1b", 1)
        elapsed = time.monotonic() - started
        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_arrow_and_paging_sequences(self) -> None:
        keys = self._read_all(b"\x1b[A\x1b[B\x1b[5~\x1b[6~\x1b[H\x1b[4~\x1bOC", 7)
        self.assertEqual(keys, ["UP", "DOWN", "PAGE_UP", "PAGE_DOWN", "HOME", "END", "RIGHT"])

    def test_modified_arrow_collapses_to_plain_arrow(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[1;5D", 1), ["LEFT"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1ba", 2), ["ESC", "a"])

    def test_control_keys(self) -> None:
        keys = self._read_all(b"\r\x7f\x03\x04\x15", 5)
        self.assertEqual(keys, ["ENTER", "BACKSPACE", "CTRL_C", "CTRL_D", "CTRL_U"])

    def test_multibyte_character_is_one_key(self) -> None:
        self.assertEqual(self._read_all("é/".encode("utf-8"), 2), ["é", "/"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(self._read_all(b"", 1), [""])


if __name__ == "__main__":
    unittest.main()
