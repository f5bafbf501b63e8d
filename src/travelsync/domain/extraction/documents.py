"""Classify raw ingestion inputs into one tree representation.

Inputs arrive as already-decoded mappings, JSON text (str or bytes), or a
single-element list wrapping the document. Classification happens once, before
any extractor runs.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from .errors import UnsupportedDocumentError

if TYPE_CHECKING:
    from .raw import Node


@dataclass(frozen=True, slots=True)
class TreeDocument:
    tree: Node


@dataclass(frozen=True, slots=True)
class TextDocument:
    text: str


@dataclass(frozen=True, slots=True)
class ListDocument:
    items: tuple[object, ...]


type RawDocument = TreeDocument | TextDocument | ListDocument


def tag_document(value: object) -> RawDocument:
    """Tag a raw input by shape without interpreting it."""

    if isinstance(value, Mapping):
        return TreeDocument(cast("Node", value))
    if isinstance(value, bytes | bytearray):
        try:
            return TextDocument(bytes(value).decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise UnsupportedDocumentError("Document bytes are not valid UTF-8") from exc
    if isinstance(value, str):
        return TextDocument(value)
    if isinstance(value, list | tuple):
        return ListDocument(tuple(cast("list[object]", value)))
    raise UnsupportedDocumentError(f"Unsupported document type: {type(value).__name__}")


def classify_document(value: object) -> TreeDocument:
    """Reduce any accepted input shape to a :class:`TreeDocument`."""

    document = tag_document(value)
    match document:
        case TreeDocument():
            return document
        case TextDocument(text=text):
            try:
                decoded = json.loads(text)
            except json.JSONDecodeError as exc:
                raise UnsupportedDocumentError("Document text is not valid JSON") from exc
            if isinstance(decoded, str):
                raise UnsupportedDocumentError("Document text decodes to a bare string")
            return classify_document(decoded)
        case ListDocument(items=items):
            trees = [item for item in items if isinstance(item, Mapping)]
            if len(items) != 1 or len(trees) != 1:
                raise UnsupportedDocumentError(
                    f"Expected exactly one document in list, got {len(items)}"
                )
            return TreeDocument(cast("Node", trees[0]))
