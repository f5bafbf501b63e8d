"""Provider-agnostic toolkit for reading raw provider trees."""

from __future__ import annotations

from .documents import ListDocument, RawDocument, TextDocument, TreeDocument, classify_document
from .errors import ExtractionError, ReservationNotFoundError, UnsupportedDocumentError
from .guard import extract_family
from .identifiers import (
    ContactAssigner,
    ContactReferences,
    references_match,
    resolve_association,
)
from .raw import (
    FieldMap,
    Node,
    as_list,
    as_node,
    as_nodes,
    attribute,
    lookup,
    lookup_nodes,
    lookup_path,
    lookup_text,
    text_of,
    to_bool,
    to_decimal,
    to_int,
)

__all__ = [
    "ContactAssigner",
    "ContactReferences",
    "ExtractionError",
    "FieldMap",
    "ListDocument",
    "Node",
    "RawDocument",
    "ReservationNotFoundError",
    "TextDocument",
    "TreeDocument",
    "UnsupportedDocumentError",
    "as_list",
    "as_node",
    "as_nodes",
    "attribute",
    "classify_document",
    "extract_family",
    "lookup",
    "lookup_nodes",
    "lookup_path",
    "lookup_text",
    "references_match",
    "resolve_association",
    "text_of",
    "to_bool",
    "to_decimal",
    "to_int",
]
