"""Command-line front door for zipview.

Parses global options and one subcommand, resolves inputs, and either
prints JSON results or launches a full-screen screen. Failures are reported
as one JSON error object on stderr with exit status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from . import archive
from .cli_io import parse_json_text, parse_string_list, read_stdin, resolve_path_from_arg_or_stdin, write_json
from .config import ViewerSettings, load_settings
from .errors import InputMissing, ShapeMismatch, ViewerError, emit_error
from .logs import configure_logging
from .screens import (
    ArchiveScreen,
    ConversationListScreen,
    JsonTreeScreen,
    ListScreen,
    run_interactive,
)
from .transcript import reduce_to_messages
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130
CONVERSATIONS_ENTRY = "conversations.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zipview",
        description="Inspect zip archives, JSON documents and chat exports in the terminal.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--log-file", default=None, help="Write debug logs to this file.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: WARNING).")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    p_list = sub.add_parser("list", help="Browse entry names of a zip archive.")
    p_list.add_argument("zip", nargs="?", default=None, help='Zip path, or stdin {"zip_path": "..."}.')

    p_meta = sub.add_parser("meta", help="Print entry metadata of a zip archive as JSON.")
    p_meta.add_argument("zip", nargs="?", default=None, help='Zip path, or stdin {"zip_path": "..."}.')

    p_browse = sub.add_parser("browse", help="Two-pane archive browser.")
    p_browse.add_argument("zip", nargs="?", default=None, help='Zip path, or stdin {"zip_path": "..."}.')

    p_json = sub.add_parser("json", help="Collapsible JSON tree viewer.")
    p_json.add_argument("file", nargs="?", default=None, help="JSON file; '-' or omitted reads stdin.")

    p_gpt = sub.add_parser("gpt", help="Browse conversations of a chat export archive.")
    p_gpt.add_argument("zip", help="Export archive containing conversations.json.")

    sub.add_parser("pick", help="Pick one label from a JSON array of strings on stdin.")

    p_reduce = sub.add_parser("reduce", help="Print the reduced transcript of a conversation as JSON.")
    p_reduce.add_argument("file", help="conversations.json, one conversation, or a bare mapping.")
    p_reduce.add_argument(
        "selector",
        nargs="?",
        default=None,
        help="Conversation index for arrays, leaf node id for mappings.",
    )
    return parser


def child_args(settings: ViewerSettings) -> list[str]:
    """Global options forwarded to nested viewers."""
    out: list[str] = []
    if settings.theme:
        out.extend(["--theme", settings.theme])
    if settings.no_color:
        out.append("--no-color")
    return out


def _print_choice(choice: str | None) -> None:
    if choice is not None:
        sys.stdout.write(choice + "\n")
        sys.stdout.flush()


def cmd_list(args: argparse.Namespace, settings: ViewerSettings) -> int:
    zip_path = resolve_path_from_arg_or_stdin(args.zip)
    names = archive.list_entry_names(zip_path)
    theme = resolve_theme(settings.theme, no_color=settings.no_color)
    _print_choice(run_interactive(ListScreen(names, theme, title=Path(zip_path).name)))
    return EXIT_OK


def cmd_meta(args: argparse.Namespace, settings: ViewerSettings) -> int:
    zip_path = resolve_path_from_arg_or_stdin(args.zip)
    entries = archive.read_entry_metadata(zip_path)
    write_json([entry.to_dict() for entry in entries], no_color=settings.no_color)
    return EXIT_OK


def cmd_browse(args: argparse.Namespace, settings: ViewerSettings) -> int:
    zip_path = resolve_path_from_arg_or_stdin(args.zip)
    entries = archive.read_entry_metadata(zip_path)
    theme = resolve_theme(settings.theme, no_color=settings.no_color)
    screen = ArchiveScreen(
        zip_path,
        entries,
        theme,
        list_pane_percent=settings.list_pane_percent,
        child_args=child_args(settings),
    )
    run_interactive(screen)
    return EXIT_OK


def load_json_document(file_arg: str | None) -> Any:
    """Parse JSON from ``file_arg`` or, for ``None``/``-``, from stdin."""
    if file_arg and file_arg != "-":
        try:
            text = Path(file_arg).read_text(encoding="utf-8-sig")
        except OSError as exc:
            raise InputMissing("cannot read file", str(exc)) from exc
        return parse_json_text(text, file_arg)
    if sys.stdin.isatty():
        raise InputMissing("missing JSON input", "zipview json <file.json> or pipe JSON on stdin")
    return parse_json_text(read_stdin(), "stdin")


def cmd_json(args: argparse.Namespace, settings: ViewerSettings) -> int:
    value = load_json_document(args.file)
    theme = resolve_theme(settings.theme, no_color=settings.no_color)
    run_interactive(JsonTreeScreen(value, theme, settings.preview_chars))
    return EXIT_OK


def load_conversations(zip_path: str) -> list[Any]:
    text = archive.read_entry_text(zip_path, CONVERSATIONS_ENTRY)
    conversations = parse_json_text(text, CONVERSATIONS_ENTRY)
    if not isinstance(conversations, list):
        raise ShapeMismatch(f"{CONVERSATIONS_ENTRY} did not contain an array", zip_path)
    return conversations


def cmd_gpt(args: argparse.Namespace, settings: ViewerSettings) -> int:
    conversations = load_conversations(args.zip)
    theme = resolve_theme(settings.theme, no_color=settings.no_color)
    run_interactive(ConversationListScreen(conversations, theme, settings.export_dir))
    return EXIT_OK


def cmd_pick(args: argparse.Namespace, settings: ViewerSettings) -> int:
    if sys.stdin.isatty():
        raise InputMissing("missing list input", 'pipe a JSON array of strings, e.g. ["a.json","b.json"]')
    labels = parse_string_list(read_stdin())
    theme = resolve_theme(settings.theme, no_color=settings.no_color)
    _print_choice(run_interactive(ListScreen(labels, theme)))
    return EXIT_OK


def select_mapping(data: Any, selector: str | None) -> tuple[Any, str | None]:
    """Pick ``(mapping, current_node_id)`` out of any supported input shape.

    Arrays are export files (``selector`` is the conversation index, default
    0); objects with ``mapping`` are single conversations; any other object
    is a bare mapping (``selector`` is the leaf node id).
    """
    if isinstance(data, list):
        try:
            idx = int(selector) if selector is not None else 0
        except ValueError as exc:
            raise ShapeMismatch("invalid conversation index", str(selector)) from exc
        convo = data[idx] if 0 <= idx < len(data) else None
        if not isinstance(convo, dict):
            raise ShapeMismatch("invalid conversation index", str(idx))
        current = convo.get("current_node")
        return convo.get("mapping") or {}, current if isinstance(current, str) and current else None
    if isinstance(data, dict):
        if data.get("mapping"):
            current = data.get("current_node")
            return data["mapping"], current if isinstance(current, str) and current else selector
        return data, selector
    raise ShapeMismatch("unrecognized JSON shape", "expected conversations array, conversation or mapping")


def cmd_reduce(args: argparse.Namespace, settings: ViewerSettings) -> int:
    data = load_json_document(args.file)
    mapping, current = select_mapping(data, args.selector)
    messages = reduce_to_messages(mapping, current)
    write_json([message.to_dict() for message in messages], no_color=settings.no_color)
    return EXIT_OK


COMMANDS = {
    "list": cmd_list,
    "meta": cmd_meta,
    "browse": cmd_browse,
    "json": cmd_json,
    "gpt": cmd_gpt,
    "pick": cmd_pick,
    "reduce": cmd_reduce,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv`` (default ``sys.argv[1:]``), run one command, return exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_file, args.log_level)
    settings = load_settings(theme=args.theme, no_color=args.no_color)
    logger.debug("running %s with %s", args.command, settings)
    try:
        return COMMANDS[args.command](args, settings)
    except ViewerError as exc:
        logger.error("%s failed: %s (%s)", args.command, exc.message, exc.hint)
        emit_error(exc)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
