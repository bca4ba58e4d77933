"""
Reply shape detection for sampling replies.

The reply to ``sampling/createMessage`` depends on the connected client. Each
known shape is a (name, extractor) pair; extractors are cheap, never mutate
the reply, and return the text or None. Shapes are tried in priority order
and the first match wins. Only when every specific shape fails does the
generic depth-first scan run.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel

TEXT_FIELDS = ("text", "content", "message")
MAX_SCAN_DEPTH = 12


@dataclass(frozen=True)
class ReplyShape:
    name: str
    extract: Callable[[Any], str | None]


@dataclass(frozen=True)
class ReplyMatch:
    shape: str
    text: str


def _text(value: Any) -> str | None:
    """A usable text payload is a non-blank string; it is returned untouched."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _field(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key)
    return None


def _canonical(reply: Any) -> str | None:
    content = _field(reply, "content")
    if not isinstance(content, Mapping):
        return None
    kind = content.get("type", content.get("kind", "text"))
    if kind != "text":
        return None
    return _text(content.get("text"))


def _flattened(reply: Any) -> str | None:
    return _text(_field(reply, "text"))


def _double_wrapped(reply: Any) -> str | None:
    return _text(_field(_field(_field(reply, "result"), "content"), "text"))


def _content_string(reply: Any) -> str | None:
    return _text(_field(reply, "content"))


def _bare_string(reply: Any) -> str | None:
    return _text(reply)


REPLY_SHAPES: tuple[ReplyShape, ...] = (
    ReplyShape("canonical", _canonical),
    ReplyShape("flattened", _flattened),
    ReplyShape("double_wrapped", _double_wrapped),
    ReplyShape("content_string", _content_string),
    ReplyShape("bare_string", _bare_string),
)


def scan_for_text(node: Any, max_depth: int = MAX_SCAN_DEPTH, _depth: int = 0) -> str | None:
    """
    Depth-first search for the first text-bearing field.

    At each mapping the text fields are checked in TEXT_FIELDS order before
    descending into values in insertion order. The reply is assumed to be a
    tree; ``max_depth`` bounds the walk.
    """
    if _depth > max_depth:
        return None

    if isinstance(node, Mapping):
        for key in TEXT_FIELDS:
            found = _text(node.get(key))
            if found is not None:
                return found
        children = node.values()
    elif isinstance(node, Sequence) and not isinstance(node, (str, bytes, bytearray)):
        children = node
    else:
        return None

    for child in children:
        found = scan_for_text(child, max_depth, _depth + 1)
        if found is not None:
            return found
    return None


def as_plain(reply: Any) -> Any:
    """Typed protocol results are inspected through their dict form."""
    if isinstance(reply, BaseModel):
        return reply.model_dump(by_alias=True)
    return reply


def match_reply(reply: Any) -> ReplyMatch | None:
    plain = as_plain(reply)
    for shape in REPLY_SHAPES:
        text = shape.extract(plain)
        if text is not None:
            return ReplyMatch(shape=shape.name, text=text)

    text = scan_for_text(plain)
    if text is not None:
        return ReplyMatch(shape="nested_scan", text=text)
    return None
