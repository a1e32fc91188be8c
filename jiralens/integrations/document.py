"""Plain-text extraction from rich document trees.

Jira REST API v3 returns rich-text fields (such as an issue description) in
Atlassian Document Format: a JSON tree of typed nodes where leaves carry a
``text`` value and containers carry a ``content`` list. This module parses
such a value into an immutable DocumentNode tree and flattens it to text.

Flattening rules:
    - A bare string is returned unchanged.
    - An object whose ``content`` is a list is walked depth-first, in order.
      Every visited object with a string ``text`` contributes that text plus
      one space; objects with ``content`` are descended into. The result is
      stripped.
    - An object without a usable ``content`` list falls back to its compact
      JSON representation.

Adjacent text spans are always separated by a space, so ``"foo"`` followed by
``"bar"`` yields ``"foo bar"`` even when the source had no space between them.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TextNode:
    """A bare string value."""

    text: str


@dataclass(frozen=True)
class ObjectNode:
    """A JSON object node.

    Attributes:
        raw: The original decoded object
        text: Its ``text`` member when that is a string
        content: Its parsed ``content`` member, if present and not null
    """

    raw: Mapping[str, Any]
    text: str | None = None
    content: DocumentNode | None = None


@dataclass(frozen=True)
class ArrayNode:
    """A JSON array node."""

    items: tuple[DocumentNode, ...] = ()


@dataclass(frozen=True)
class OtherNode:
    """Any other JSON value (number, boolean, null)."""

    raw: Any = None


DocumentNode = TextNode | ObjectNode | ArrayNode | OtherNode


def parse_document(value: Any) -> DocumentNode:
    """Build a DocumentNode tree from a decoded JSON value."""
    if isinstance(value, str):
        return TextNode(value)
    if isinstance(value, Mapping):
        text = value.get("text")
        content = value.get("content")
        return ObjectNode(
            raw=value,
            text=text if isinstance(text, str) else None,
            content=parse_document(content) if content is not None else None,
        )
    if isinstance(value, list | tuple):
        return ArrayNode(tuple(parse_document(item) for item in value))
    return OtherNode(value)


def extract_text(node: DocumentNode) -> str:
    """Flatten a document tree into plain text. Never raises."""
    match node:
        case TextNode(text=text):
            return text
        case ObjectNode(content=ArrayNode() as content):
            return _walk(content)
        case ObjectNode(raw=raw):
            return _to_json(raw)
        case ArrayNode():
            return _walk(node)
        case OtherNode(raw=None):
            return ""
        case OtherNode(raw=raw):
            return _to_json(raw)
    return ""


def extract_description(value: Any) -> str | None:
    """Parse and flatten a raw rich-text field; None stays None."""
    if value is None:
        return None
    return extract_text(parse_document(value))


def _walk(root: DocumentNode) -> str:
    parts: list[str] = []
    _collect(root, parts)
    return "".join(parts).strip()


def _collect(node: DocumentNode, parts: list[str]) -> None:
    match node:
        case ArrayNode(items=items):
            for item in items:
                _collect(item, parts)
        case ObjectNode(text=text, content=content):
            if text is not None:
                parts.append(text)
                parts.append(" ")
            if content is not None:
                _collect(content, parts)


def _to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


__all__ = [
    "ArrayNode",
    "DocumentNode",
    "ObjectNode",
    "OtherNode",
    "TextNode",
    "extract_description",
    "extract_text",
    "parse_document",
]
