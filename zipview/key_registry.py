"""Key-token dispatch tables shared by screens and the search session."""

from __future__ import annotations

from collections.abc import Callable

KeyHandler = Callable[[], bool | None]


class KeyComboRegistry:
    """Map decoded key tokens to zero-argument actions.

    Tokens arrive already decoded by ``read_key`` (``"ENTER"``, ``"CTRL_C"``,
    ``"j"``), so lookups are exact.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, KeyHandler] = {}

    def bind(self, combos: tuple[str, ...], handler: KeyHandler) -> KeyComboRegistry:
        """Bind every token in ``combos``; a later bind wins for the same token."""
        for combo in combos:
            self._handlers[combo] = handler
        return self

    def dispatch(self, key: str) -> bool | None:
        """Run the action bound to ``key``; ``None`` when nothing is bound."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()
