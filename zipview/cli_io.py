"""Shared CLI input/output helpers.

Resolves input paths from argv or a ``{"zip_path": ...}`` JSON payload on
stdin, parses JSON with zipview error kinds, and writes JSON results
(highlighted with Pygments when stdout is a terminal).
"""

from __future__ import annotations

import json
import sys
from typing import Any, TextIO

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JsonLexer

from .errors import InputMissing, JsonParseError, ShapeMismatch

PATH_HINT = 'argv <file.zip> or stdin {"zip_path":"..."}'


def read_stdin(stream: TextIO | None = None) -> str:
    source = stream if stream is not None else sys.stdin
    return source.read()


def parse_json_text(text: str, source: str = "input") -> Any:
    try:
        return json.loads(text)
    except ValueError as exc:
        raise JsonParseError(f"invalid JSON in {source}", str(exc)) from exc


def resolve_path_from_arg_or_stdin(
    arg: str | None,
    key: str = "zip_path",
    stream: TextIO | None = None,
) -> str:
    """Return ``arg`` or ``payload[key]`` from a JSON object on stdin."""
    if arg:
        return arg
    source = stream if stream is not None else sys.stdin
    if source.isatty():
        raise InputMissing("missing path", PATH_HINT)
    raw = read_stdin(source).strip()
    try:
        payload = json.loads(raw or "{}")
    except ValueError as exc:
        raise InputMissing("stdin is not a JSON object", PATH_HINT) from exc
    value = payload.get(key) if isinstance(payload, dict) else None
    if not isinstance(value, str) or not value:
        raise InputMissing("missing path", PATH_HINT)
    return value


def parse_string_list(text: str) -> list[str]:
    """Decode a JSON array of strings (the ``pick`` subcommand input)."""
    try:
        parsed = json.loads(text or "[]")
    except ValueError as exc:
        raise ShapeMismatch("stdin must be JSON array of strings", 'e.g., ["a.json","b.json"]') from exc
    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        raise ShapeMismatch("stdin must be JSON array of strings", 'e.g., ["a.json","b.json"]')
    return parsed


def write_json(data: Any, stream: TextIO | None = None, *, indent: int | None = 2, no_color: bool = False) -> None:
    """Dump ``data`` as JSON, colorized for interactive terminals."""
    target = stream if stream is not None else sys.stdout
    text = json.dumps(data, indent=indent, ensure_ascii=False)
    isatty = getattr(target, "isatty", None)
    if not no_color and callable(isatty) and isatty():
        text = highlight(text, JsonLexer(), TerminalFormatter()).rstrip("\n")
    target.write(text + "\n")
    target.flush()
