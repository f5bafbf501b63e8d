"""Stamp field groups with the source run that produced them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from travelsync.domain.model import ProvenanceRecord
from travelsync.domain.model.provenance import FULL_CONFIDENCE

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from travelsync.domain.model import Provenance, Source


def build_provenance(
    fields: Iterable[str],
    *,
    source: Source,
    source_id: str,
    timestamp: datetime,
) -> Provenance:
    """Map every field-group name to one shared record for this run."""

    record = ProvenanceRecord(
        source=source,
        source_id=source_id,
        timestamp=timestamp,
        confidence=FULL_CONFIDENCE,
    )
    return dict.fromkeys(fields, record)


def provenance_to_json(provenance: Provenance) -> dict[str, dict[str, object]]:
    return {name: record.to_json() for name, record in provenance.items()}
