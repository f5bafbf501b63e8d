from __future__ import annotations

import json

import pytest

from travelsync.domain.extraction import (
    ListDocument,
    TextDocument,
    TreeDocument,
    UnsupportedDocumentError,
    classify_document,
)
from travelsync.domain.extraction.documents import tag_document

TREE = {"Reservation": {"BookingDetails": {"RecordLocator": "ABC123"}}}


@pytest.mark.parametrize(
    "raw",
    [
        TREE,
        json.dumps(TREE),
        json.dumps(TREE).encode("utf-8"),
        [TREE],
        json.dumps([TREE]),
    ],
)
def test_every_accepted_shape_yields_the_same_tree(raw: object) -> None:
    assert classify_document(raw).tree == TREE


def test_tag_document_reports_shape_without_decoding() -> None:
    assert isinstance(tag_document(TREE), TreeDocument)
    assert isinstance(tag_document("{}"), TextDocument)
    assert isinstance(tag_document(b"{}"), TextDocument)
    assert isinstance(tag_document([TREE]), ListDocument)


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        b"\xff\xfe",
        '"just a string"',
        [],
        [TREE, TREE],
        ["text"],
        42,
    ],
)
def test_unreadable_inputs_are_rejected(raw: object) -> None:
    with pytest.raises(UnsupportedDocumentError):
        classify_document(raw)
