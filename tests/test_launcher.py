"""External opener and nested viewer launch tests."""

from __future__ import annotations

import subprocess
import sys
import unittest
from unittest import mock

from zipview import launcher
from zipview.errors import ChildProcessFailure


class OpenWithDefaultHandlerTests(unittest.TestCase):
    def test_macos_uses_open(self) -> None:
        with mock.patch("zipview.launcher.subprocess.Popen") as popen:
            launcher.open_with_default_handler("/tmp/x.txt", platform="darwin")
        self.assertEqual(popen.call_args.args[0], ["open", "/tmp/x.txt"])
        self.assertTrue(popen.call_args.kwargs["start_new_session"])

    def test_windows_uses_start_with_empty_title(self) -> None:
        with mock.patch("zipview.launcher.subprocess.Popen") as popen:
            launcher.open_with_default_handler("C:/x.txt", platform="win32")
        self.assertEqual(popen.call_args.args[0], ["cmd", "/c", "start", "", "C:/x.txt"])

    def test_unix_falls_through_missing_openers(self) -> None:
        with mock.patch(
            "zipview.launcher.subprocess.Popen",
            side_effect=[FileNotFoundError("xdg-open"), mock.Mock()],
        ) as popen:
            launcher.open_with_default_handler("/tmp/x.txt", platform="linux")
        self.assertEqual(popen.call_count, 2)
        self.assertEqual(popen.call_args.args[0], ["gio", "open", "/tmp/x.txt"])

    def test_never_raises_when_no_opener_exists(self) -> None:
        with mock.patch("zipview.launcher.subprocess.Popen", side_effect=OSError("none")) as popen:
            launcher.open_with_default_handler("/tmp/x.txt", platform="linux")
        self.assertEqual(popen.call_count, 5)


class NestedViewerTests(unittest.TestCase):
    def test_command_runs_package_module_with_current_interpreter(self) -> None:
        self.assertEqual(
            launcher.nested_viewer_command(["json", "a.json"]),
            [sys.executable, "-m", "zipview", "json", "a.json"],
        )

    def test_runs_child_with_terminal_suspended(self) -> None:
        terminal = mock.MagicMock()
        completed = subprocess.CompletedProcess(args=[], returncode=0)
        with mock.patch("zipview.launcher.subprocess.run", return_value=completed) as run_mock:
            launcher.run_nested_viewer(["gpt", "a.zip"], terminal)
        terminal.suspended.assert_called_once()
        run_mock.assert_called_once_with([sys.executable, "-m", "zipview", "gpt", "a.zip"], check=False)

    def test_nonzero_exit_raises(self) -> None:
        completed = subprocess.CompletedProcess(args=[], returncode=2)
        with mock.patch("zipview.launcher.subprocess.run", return_value=completed):
            with self.assertRaises(ChildProcessFailure) as ctx:
                launcher.run_nested_viewer(["json", "a.json"])
        self.assertEqual(ctx.exception.message, "viewer exit 2")

    def test_spawn_failure_raises(self) -> None:
        with mock.patch("zipview.launcher.subprocess.run", side_effect=OSError("no exec")):
            with self.assertRaises(ChildProcessFailure):
                launcher.run_nested_viewer(["json", "a.json"])


if __name__ == "__main__":
    unittest.main()
