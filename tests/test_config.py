from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from zipview import config


class ConfigBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "zipview" / "config.json"
        patcher = mock.patch("zipview.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def write_config(self, data: object) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(data), encoding="utf-8")

    def test_missing_file_gives_defaults(self) -> None:
        settings = config.load_settings()
        self.assertIsNone(settings.theme)
        self.assertEqual(settings.preview_chars, 60)
        self.assertEqual(settings.list_pane_percent, 55.0)
        self.assertEqual(settings.export_dir, Path("exports"))

    def test_malformed_file_gives_defaults(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("{not json", encoding="utf-8")
        self.assertEqual(config.load_config(), {})
        self.write_config([1, 2])
        self.assertEqual(config.load_config(), {})

    def test_unreadable_path_gives_defaults(self) -> None:
        self.config_path.mkdir(parents=True)
        self.assertEqual(config.load_config(), {})
        self.assertEqual(config.load_settings().preview_chars, 60)

    def test_invalid_values_fall_back_per_key(self) -> None:
        self.write_config({"preview_chars": True, "list_pane_percent": 100, "export_dir": "  ", "theme": 3})
        settings = config.load_settings()
        self.assertEqual(settings.preview_chars, 60)
        self.assertEqual(settings.list_pane_percent, 55.0)
        self.assertEqual(settings.export_dir, Path("exports"))
        self.assertIsNone(settings.theme)

    def test_file_values_apply_and_cli_overrides_theme(self) -> None:
        self.write_config(
            {"theme": " ocean ", "preview_chars": 30, "list_pane_percent": 40, "export_dir": "/tmp/out"}
        )
        settings = config.load_settings()
        self.assertEqual(settings.theme, "ocean")
        self.assertEqual(settings.preview_chars, 30)
        self.assertEqual(settings.list_pane_percent, 40.0)
        self.assertEqual(settings.export_dir, Path("/tmp/out"))
        self.assertEqual(config.load_settings(theme="default", no_color=True).theme, "default")


if __name__ == "__main__":
    unittest.main()
