"""Error kinds for I/O-facing operations and the structured error channel.

The navigation core never raises these. Screens turn them into transient
status messages; the CLI reports them as ``{"type", "message", "hint"}``
JSON lines on stderr before exiting non-zero.
"""

from __future__ import annotations

import json
import sys
from typing import TextIO


class ViewerError(Exception):
    """Base class carrying a machine-readable ``type`` code and a hint."""

    type = "ERR_VIEWER"

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def to_payload(self) -> dict[str, str | None]:
        return {"type": self.type, "message": self.message, "hint": self.hint}


class InputMissing(ViewerError):
    type = "ERR_INPUT"


class ArchiveNotFound(ViewerError):
    type = "ERR_ZIP_NOT_FOUND"


class ArchiveReadError(ViewerError):
    type = "ERR_ZIP"


class EntryNotFound(ViewerError):
    type = "ERR_ENTRY_NOT_FOUND"


class JsonParseError(ViewerError):
    type = "ERR_JSON_PARSE"


class ShapeMismatch(ViewerError):
    type = "ERR_INPUT_INVALID"


class ChildProcessFailure(ViewerError):
    type = "ERR_CHILD_PROCESS"


class TerminalInitError(ViewerError):
    type = "ERR_TUI_INIT"


def emit_error(error: ViewerError, stream: TextIO | None = None) -> None:
    """Write ``error`` as one JSON object line on stderr."""
    target = stream if stream is not None else sys.stderr
    target.write(json.dumps(error.to_payload(), ensure_ascii=False) + "\n")
    target.flush()


def describe(exc: BaseException) -> str:
    """Short human-readable text for status messages."""
    if isinstance(exc, ViewerError):
        return exc.message if not exc.hint else f"{exc.message} ({exc.hint})"
    return str(exc) or exc.__class__.__name__
