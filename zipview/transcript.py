"""Conversation-export reduction and plain-text transcripts.

ChatGPT-style exports store each conversation as a ``mapping`` of node ids to
``{"message", "parent", "children"}``. Reduction walks one branch of that tree
(from the current node, or an auto-detected leaf) back to the root and keeps
the readable ``user``/``assistant`` turns in order.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_ROLES: tuple[str, ...] = ("user", "assistant")
_HEADER_RE = re.compile(r"^\[(?P<author>[^\[\]]+)\]$")
_UNSAFE_FILENAME_RE = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


@dataclass(frozen=True)
class Message:
    author: str
    text: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def _part_to_text(part: Any) -> str:
    if part is None:
        return ""
    if isinstance(part, str):
        return part
    if isinstance(part, bool):
        return "true" if part else "false"
    if isinstance(part, (int, float)):
        return str(part)
    if isinstance(part, Mapping):
        if isinstance(part.get("text"), str):
            return part["text"]
        content = part.get("content")
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            return "\n".join(filter(None, (_part_to_text(p) for p in content)))
        if isinstance(part.get("parts"), list):
            return "\n".join(filter(None, (_part_to_text(p) for p in part["parts"])))
    return ""


def extract_text_from_content(content: Any) -> str:
    """Readable text of a ``message.content`` value, stripped."""
    if not content:
        return ""
    if isinstance(content, str):
        return content.strip()
    if not isinstance(content, Mapping):
        return ""
    parts = content.get("parts")
    if isinstance(parts, list):
        texts = [text for text in (_part_to_text(p) for p in parts) if text]
        return "\n".join(texts).strip()
    if isinstance(content.get("text"), str):
        return content["text"].strip()
    return ""


def extract_author(message: Mapping[str, Any] | None) -> str:
    author = message.get("author") if isinstance(message, Mapping) else None
    if not isinstance(author, Mapping):
        return "unknown"
    for field_name in ("role", "name"):
        value = author.get(field_name)
        if isinstance(value, str) and value:
            return value
    return "unknown"


def build_main_path_ids(mapping: Mapping[str, Any], current_node_id: str) -> list[str]:
    """Ids from the root down to ``current_node_id`` following ``parent`` links."""
    ids: list[str] = []
    seen: set[str] = set()
    node_id: str | None = current_node_id
    while node_id and node_id in mapping and node_id not in seen:
        seen.add(node_id)
        ids.append(node_id)
        node = mapping[node_id]
        parent = node.get("parent") if isinstance(node, Mapping) else None
        node_id = parent if isinstance(parent, str) else None
    ids.reverse()
    return ids


def auto_detect_leaf_id(mapping: Mapping[str, Any]) -> str | None:
    """Pick the leaf with the latest ``create_time``.

    Only childless nodes carrying a message qualify. A strictly greater
    timestamp wins, so ties keep the first leaf seen; a leaf without a
    timestamp is only taken while nothing has been picked yet.
    """
    best_id: str | None = None
    best_time = float("-inf")
    for node_id, node in mapping.items():
        if not isinstance(node, Mapping):
            continue
        children = node.get("children")
        if isinstance(children, list) and children:
            continue
        message = node.get("message")
        if message is None:
            continue
        created = message.get("create_time") if isinstance(message, Mapping) else None
        has_time = isinstance(created, (int, float)) and not isinstance(created, bool)
        if has_time and created > best_time:
            best_time = created
            best_id = node_id
        elif not has_time and best_id is None:
            best_id = node_id
    return best_id


def reduce_to_messages(
    mapping: Mapping[str, Any] | None,
    current_node_id: str | None = None,
    include_roles: Iterable[str] | None = DEFAULT_ROLES,
) -> list[Message]:
    """Flatten one branch of a conversation mapping into ordered messages."""
    if not isinstance(mapping, Mapping):
        return []
    end_id = current_node_id or auto_detect_leaf_id(mapping)
    if not end_id:
        return []
    roles = set(include_roles) if include_roles else None
    result: list[Message] = []
    for node_id in build_main_path_ids(mapping, end_id):
        node = mapping[node_id]
        message = node.get("message") if isinstance(node, Mapping) else None
        if not isinstance(message, Mapping):
            continue
        author = extract_author(message)
        if roles is not None and author not in roles:
            continue
        text = extract_text_from_content(message.get("content"))
        if not text:
            continue
        result.append(Message(author, text))
    return result


def conversation_title(conversation: Any, index: int) -> str:
    if isinstance(conversation, Mapping):
        title = conversation.get("title")
        if isinstance(title, str) and title.strip():
            return title
    return f"Conversation #{index + 1}"


def messages_for_conversation(conversation: Any) -> list[Message]:
    """Reduce one export conversation object using its ``current_node``."""
    if not isinstance(conversation, Mapping):
        return []
    mapping = conversation.get("mapping") or {}
    current = conversation.get("current_node")
    return reduce_to_messages(mapping, current if isinstance(current, str) else None)


def build_plain_text_transcript(messages: Iterable[Message]) -> str:
    """``[author]`` header, text, blank separator for each message."""
    out: list[str] = []
    for message in messages:
        out.append(f"[{message.author or 'unknown'}]")
        out.append(message.text or "")
        out.append("")
    return "\n".join(out)


def parse_plain_text_transcript(text: str) -> list[Message]:
    """Inverse of :func:`build_plain_text_transcript`.

    A header is a ``[author]`` line at the start or right after a blank
    line; the blank line before the next header (and the trailing one) is
    the separator, not part of the body.
    """
    messages: list[Message] = []
    author: str | None = None
    body: list[str] = []
    previous_blank = True

    def flush() -> None:
        if author is None:
            return
        lines = body[:]
        if lines and lines[-1] == "":
            lines.pop()
        messages.append(Message(author, "\n".join(lines)))

    for line in text.split("\n"):
        match = _HEADER_RE.match(line)
        if match and previous_blank:
            flush()
            author = match.group("author")
            body = []
            previous_blank = False
            continue
        body.append(line)
        previous_blank = line == ""
    flush()
    return messages


def safe_filename(title: str | None, max_length: int = 120) -> str:
    base = re.sub(r"\s+", " ", str(title or "conversation").strip())[:max_length]
    safe = _UNSAFE_FILENAME_RE.sub("_", base)
    if not safe or set(safe) == {"."}:
        return "conversation"
    return safe


def write_file_unique(directory: Path, base: str, suffix: str, content: str) -> Path:
    """Write ``content`` to ``base + suffix``, or ``base (n) + suffix`` if taken."""
    directory.mkdir(parents=True, exist_ok=True)
    candidate = directory / f"{base}{suffix}"
    counter = 1
    while candidate.exists():
        candidate = directory / f"{base} ({counter}){suffix}"
        counter += 1
    candidate.write_text(content, encoding="utf-8")
    return candidate


def export_conversation_plain(title: str, messages: Iterable[Message], directory: str | Path) -> Path:
    """Export a transcript under ``directory``; returns the absolute path."""
    target_dir = Path(directory).expanduser().resolve()
    path = write_file_unique(target_dir, safe_filename(title), ".txt", build_plain_text_transcript(messages))
    logger.info("exported transcript %r to %s", title, path)
    return path
