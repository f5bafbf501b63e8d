"""Reservation remarks and lookups over their free text."""

from __future__ import annotations

from typing import TYPE_CHECKING

from travelsync.domain.extraction import attribute
from travelsync.domain.model import Remark

from .fields import first_nodes, read, texts_at

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from travelsync.domain.extraction import Node

DEFAULT_REMARK_TYPE = "GENERAL"


def remark_text(node: Node) -> str | None:
    lines = texts_at(node, "RemarkLines", "RemarkLine")
    if lines:
        return " ".join(lines)
    return read(node, "Text")


def extract_remarks(root: Node) -> list[Remark]:
    remarks: list[Remark] = []
    for node in first_nodes(
        root, ("Remarks", "Remark"), ("PassengerReservation", "Remarks", "Remark")
    ):
        text = remark_text(node)
        if text is None:
            continue
        remarks.append(
            Remark(
                text=text,
                id=attribute(node, "id"),
                type=(attribute(node, "type", "Type") or DEFAULT_REMARK_TYPE).upper(),
                code=attribute(node, "code", "Code"),
                segment_number=attribute(node, "segmentNumber", "SegmentNumber"),
            )
        )
    return remarks


def remarks_containing(remarks: Sequence[Remark], marker: str) -> Iterator[Remark]:
    return (remark for remark in remarks if marker in remark.text)


def first_containing(remarks: Sequence[Remark], marker: str) -> str | None:
    for remark in remarks_containing(remarks, marker):
        return remark.text
    return None


def any_containing(remarks: Sequence[Remark], *markers: str) -> bool:
    return any(marker in remark.text for remark in remarks for marker in markers)
