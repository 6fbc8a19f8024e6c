"""JSON config file helpers.

Holds the UI theme, JSON preview budget, archive list width and export
directory. The file is only read: malformed or missing config falls back to
defaults key by key.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .json_tree import DEFAULT_PREVIEW_CHARS

logger = logging.getLogger(__name__)

APP_NAME = "zipview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_LIST_PANE_PERCENT = 55.0
DEFAULT_EXPORT_DIR = "exports"


@dataclass(frozen=True)
class ViewerSettings:
    """Resolved settings shared by all screens."""

    theme: str | None = None
    no_color: bool = False
    preview_chars: int = DEFAULT_PREVIEW_CHARS
    list_pane_percent: float = DEFAULT_LIST_PANE_PERCENT
    export_dir: Path = Path(DEFAULT_EXPORT_DIR)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_preview_chars() -> int:
    """Positive integer value budget for JSON previews."""
    value = load_config().get("preview_chars")
    if isinstance(value, bool) or not isinstance(value, int) or value < 4:
        return DEFAULT_PREVIEW_CHARS
    return value


def load_list_pane_percent() -> float:
    """Archive list width as a percentage in the open interval (0, 100)."""
    value = load_config().get("list_pane_percent")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_LIST_PANE_PERCENT
    if value <= 0 or value >= 100:
        return DEFAULT_LIST_PANE_PERCENT
    return float(value)


def load_export_dir() -> Path:
    value = load_config().get("export_dir")
    if isinstance(value, str) and value.strip():
        return Path(value.strip()).expanduser()
    return Path(DEFAULT_EXPORT_DIR)


def load_settings(theme: str | None = None, no_color: bool = False) -> ViewerSettings:
    """Merge CLI overrides onto persisted config."""
    return ViewerSettings(
        theme=theme if theme is not None else load_theme_name(),
        no_color=no_color,
        preview_chars=load_preview_chars(),
        list_pane_percent=load_list_pane_percent(),
        export_dir=load_export_dir(),
    )
