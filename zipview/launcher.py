"""External opener and nested full-screen viewer launching.

``open_with_default_handler`` is fire-and-forget and never raises.
``run_nested_viewer`` runs another zipview screen as a child process while
the parent TUI is suspended, and raises ``ChildProcessFailure`` when the
child cannot start or exits non-zero.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

from .errors import ChildProcessFailure
from .terminal import TerminalController

logger = logging.getLogger(__name__)

_UNIX_OPENERS: tuple[tuple[str, ...], ...] = (
    ("xdg-open",),
    ("gio", "open"),
    ("gnome-open",),
    ("kde-open",),
    ("wslview",),
)


def _spawn_detached(cmd: Sequence[str]) -> bool:
    try:
        subprocess.Popen(
            list(cmd),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        logger.debug("opener %s unavailable: %s", cmd[0], exc)
        return False
    return True


def open_with_default_handler(target: str | Path, platform: str | None = None) -> None:
    """Best-effort open of ``target`` with the desktop's default application."""
    path = str(target)
    plt = platform or sys.platform
    if plt == "darwin":
        _spawn_detached(("open", path))
        return
    if plt.startswith("win"):
        # ``start`` treats the first quoted argument as a window title.
        _spawn_detached(("cmd", "/c", "start", "", path))
        return
    for opener in _UNIX_OPENERS:
        if _spawn_detached((*opener, path)):
            return


def nested_viewer_command(args: Sequence[str]) -> list[str]:
    return [sys.executable, "-m", "zipview", *args]


def run_nested_viewer(args: Sequence[str], terminal: TerminalController | None = None) -> None:
    """Run ``zipview <args>`` in the foreground and wait for it."""
    cmd = nested_viewer_command(args)
    logger.debug("running nested viewer: %s", cmd)
    if terminal is not None:
        with terminal.suspended():
            returncode = _run_child(cmd)
    else:
        returncode = _run_child(cmd)
    if returncode != 0:
        raise ChildProcessFailure(f"viewer exit {returncode}", " ".join(args))


def _run_child(cmd: list[str]) -> int:
    try:
        return subprocess.run(cmd, check=False).returncode
    except OSError as exc:
        raise ChildProcessFailure("could not start viewer", str(exc)) from exc
