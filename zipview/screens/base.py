"""Shared full-screen loop and key handling for every zipview screen.

A screen owns one viewport and one search session. Each loop iteration
re-layouts on resize, expires the transient status message, redraws when
dirty and reads one key. Keys go to the search session first; whatever it
declines is dispatched through the screen's key registry.
"""

from __future__ import annotations

import logging
import os
import sys
import termios
import time
from collections.abc import Callable
from typing import Any

from ..errors import TerminalInitError, ViewerError, describe
from ..input import read_key
from ..key_registry import KeyComboRegistry
from ..render import build_status_line, compose_frame, key_hints, status_style
from ..search import RowSource, SearchOutcome, SearchSession
from ..terminal import TerminalController, open_input_fd, terminal_size
from ..ui_theme import UITheme
from ..viewport import Viewport

logger = logging.getLogger(__name__)

LOOP_TICK_MS = 120
STATUS_SECONDS = 3.0

QUIT_KEYS: tuple[str, ...] = ("q", "Q", "CTRL_C")
UP_KEYS: tuple[str, ...] = ("UP", "k", "K")
DOWN_KEYS: tuple[str, ...] = ("DOWN", "j", "J")
PAGE_UP_KEYS: tuple[str, ...] = ("PAGE_UP", "u", "CTRL_U")
PAGE_DOWN_KEYS: tuple[str, ...] = ("PAGE_DOWN", "d", "CTRL_D")
HOME_KEYS: tuple[str, ...] = ("HOME", "g")
END_KEYS: tuple[str, ...] = ("END", "G")


class Screen:
    """Base class for a single-viewport interactive screen.

    Subclasses provide ``content_rows`` and register their own keys on
    ``self.keys`` after calling ``super().__init__``.
    """

    hints: tuple[str, ...] = ("q=quit", "/ find", "n/N next/prev")

    def __init__(self, theme: UITheme, source: RowSource, viewport: Viewport) -> None:
        self.theme = theme
        self.viewport = viewport
        self.search = SearchSession(source)
        self.keys = KeyComboRegistry()
        self.running = True
        self.result: Any = None
        self.status_message = ""
        self.status_level = "info"
        self.status_message_until = 0.0
        self.dirty = True
        self.terminal: TerminalController | None = None
        self.key_fd: int | None = None
        self._register_common_keys()

    def _register_common_keys(self) -> None:
        vp = self.viewport
        self.keys.bind(QUIT_KEYS, self.close)
        self.keys.bind(UP_KEYS, lambda: self._navigate(vp.move_by, -1))
        self.keys.bind(DOWN_KEYS, lambda: self._navigate(vp.move_by, 1))
        self.keys.bind(PAGE_UP_KEYS, lambda: self._navigate(vp.page_up))
        self.keys.bind(PAGE_DOWN_KEYS, lambda: self._navigate(vp.page_down))
        self.keys.bind(HOME_KEYS, lambda: self._navigate(vp.home))
        self.keys.bind(END_KEYS, lambda: self._navigate(vp.end))

    @staticmethod
    def _navigate(action: Callable[..., None], *args: int) -> bool:
        action(*args)
        return True

    # -- state helpers -------------------------------------------------

    def close(self, result: Any = None) -> bool:
        self.result = result
        self.running = False
        return True

    def flash(self, message: str, level: str = "info", seconds: float = STATUS_SECONDS) -> None:
        """Show a transient status message styled by ``level``."""
        self.status_message = message
        self.status_level = level
        self.status_message_until = time.monotonic() + seconds
        self.dirty = True

    def attempt(self, action: Callable[[], Any], failure_prefix: str) -> Any:
        """Run a fallible operation, turning errors into an error status."""
        try:
            return action()
        except (ViewerError, OSError) as exc:
            logger.warning("%s: %s", failure_prefix, exc)
            self.flash(f"{failure_prefix}: {describe(exc)}", "error")
            return None

    def expire_status(self, now: float) -> None:
        if self.status_message and now >= self.status_message_until:
            self.status_message = ""
            self.status_message_until = 0.0
            self.dirty = True

    # -- key handling --------------------------------------------------

    def handle_key(self, key: str) -> bool:
        """Process one key token; returns ``False`` once the screen closes."""
        self.dirty = True
        if self.search.handle_key(key):
            if not self.search.composing and self.search.outcome is SearchOutcome.NO_MATCH:
                self.flash(f"No match: {self.search.last_query}", "error")
            return self.running
        self.keys.dispatch(key)
        return self.running

    # -- drawing -------------------------------------------------------

    def layout(self, columns: int, lines: int) -> None:
        """Size the viewport for a ``columns`` x ``lines`` terminal."""
        self.viewport.resize(max(1, lines - 1), columns)

    def content_rows(self, columns: int, lines: int) -> list[str]:
        raise NotImplementedError

    def position_text(self) -> str:
        total = self.viewport.item_count
        if total == 0:
            return "0/0"
        return f"{self.viewport.selected_index + 1}/{total}"

    def status_row(self, width: int) -> str:
        theme = self.theme
        if self.search.composing:
            left = f"Search: {self.search.buffer}"
            if self.search.outcome is SearchOutcome.NO_MATCH:
                return (
                    f"{theme.status}{left}{theme.reset}"
                    f"{theme.status_error}  (no matches, ESC to cancel){theme.reset}"
                )
            return f"{theme.status}{left}{theme.reset}"
        if self.status_message:
            text = build_status_line(self.status_message, width)
            return f"{status_style(self.status_level, theme)}{text}{theme.reset}"
        text = build_status_line(key_hints(self.hints), width, self.position_text())
        return f"{theme.status}{text}{theme.reset}"

    def compose(self, columns: int, lines: int) -> str:
        rows = self.content_rows(columns, lines)
        body_height = max(0, lines - 1)
        rows = rows[:body_height] + [""] * max(0, body_height - len(rows))
        rows.append(self.status_row(columns))
        return compose_frame(rows, columns, lines)

    # -- loop ----------------------------------------------------------

    def loop(self, terminal: TerminalController, key_fd: int) -> Any:
        """Drive the screen inside an already active terminal session."""
        self.terminal = terminal
        self.key_fd = key_fd
        self.running = True
        self.dirty = True
        last_size: tuple[int, int] | None = None
        while self.running:
            columns, lines = terminal_size()
            if (columns, lines) != last_size:
                self.layout(columns, lines)
                last_size = (columns, lines)
                self.dirty = True
            self.expire_status(time.monotonic())
            if self.dirty:
                terminal.write(self.compose(columns, lines))
                self.dirty = False
            key = read_key(key_fd, timeout_ms=LOOP_TICK_MS)
            if not key:
                continue
            self.handle_key(key)
        return self.result

    def run(self, terminal: TerminalController, key_fd: int) -> Any:
        with terminal.raw_mode():
            return self.loop(terminal, key_fd)


def run_interactive(screen: Screen) -> Any:
    """Run ``screen`` in a fresh terminal session bound to the controlling tty."""
    try:
        key_fd, owned = open_input_fd()
    except OSError as exc:
        raise TerminalInitError("cannot open terminal for keyboard input", str(exc)) from exc
    try:
        try:
            terminal = TerminalController(key_fd, sys.stdout.fileno())
        except (OSError, termios.error) as exc:
            raise TerminalInitError("cannot initialize terminal", str(exc)) from exc
        return screen.run(terminal, key_fd)
    finally:
        if owned:
            os.close(key_fd)
