"""Input resolution, JSON helpers and the structured error channel."""

from __future__ import annotations

import io
import json
import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from zipview import cli_io
from zipview.errors import ArchiveNotFound, InputMissing, JsonParseError, ShapeMismatch, describe, emit_error
from zipview.logs import configure_logging


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


class ResolvePathTests(unittest.TestCase):
    def test_argument_wins(self) -> None:
        self.assertEqual(cli_io.resolve_path_from_arg_or_stdin("a.zip", stream=_Tty()), "a.zip")

    def test_stdin_payload(self) -> None:
        stream = io.StringIO('{"zip_path": "b.zip"}')
        self.assertEqual(cli_io.resolve_path_from_arg_or_stdin(None, stream=stream), "b.zip")

    def test_missing_inputs(self) -> None:
        for stream in (_Tty(), io.StringIO(""), io.StringIO('{"zip_path": 3}'), io.StringIO("[1]")):
            with self.assertRaises(InputMissing):
                cli_io.resolve_path_from_arg_or_stdin(None, stream=stream)


class JsonHelperTests(unittest.TestCase):
    def test_parse_errors_are_typed(self) -> None:
        with self.assertRaises(JsonParseError):
            cli_io.parse_json_text("{", "doc.json")
        with self.assertRaises(ShapeMismatch):
            cli_io.parse_string_list('{"a": 1}')
        self.assertEqual(cli_io.parse_string_list(""), [])

    def test_write_json_plain_when_not_a_tty(self) -> None:
        out = io.StringIO()
        cli_io.write_json({"a": [1]}, out, indent=None)
        self.assertEqual(out.getvalue(), '{"a": [1]}\n')

    def test_write_json_highlights_for_tty(self) -> None:
        out = _Tty()
        cli_io.write_json({"a": 1}, out)
        self.assertIn("\x1b[", out.getvalue())
        plain = _Tty()
        cli_io.write_json({"a": 1}, plain, no_color=True)
        self.assertNotIn("\x1b[", plain.getvalue())


class ErrorChannelTests(unittest.TestCase):
    def test_emit_error_writes_one_json_line(self) -> None:
        err = io.StringIO()
        emit_error(ArchiveNotFound("zip file not found", "/x.zip"), err)
        self.assertEqual(
            json.loads(err.getvalue()),
            {"type": "ERR_ZIP_NOT_FOUND", "message": "zip file not found", "hint": "/x.zip"},
        )
        self.assertEqual(err.getvalue().count("\n"), 1)

    def test_describe(self) -> None:
        self.assertEqual(describe(InputMissing("missing path", "hint")), "missing path (hint)")
        self.assertEqual(describe(OSError()), "OSError")


class LoggingSetupTests(unittest.TestCase):
    def tearDown(self) -> None:
        configure_logging()

    def test_null_handler_without_log_file(self) -> None:
        with mock.patch.dict("os.environ", {}, clear=True):
            logger = configure_logging()
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0], logging.NullHandler)
        self.assertEqual(logger.level, logging.WARNING)

    def test_file_handler_and_level(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "zipview.log"
            logger = configure_logging(str(path), "debug")
            logging.getLogger("zipview.archive").debug("hello log")
            for handler in logger.handlers:
                handler.flush()
            self.assertIn("hello log", path.read_text(encoding="utf-8"))
            configure_logging()


if __name__ == "__main__":
    unittest.main()
