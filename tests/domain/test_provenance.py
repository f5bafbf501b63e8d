from __future__ import annotations

from datetime import UTC, datetime

from travelsync.domain.model import ProvenanceRecord, Source
from travelsync.domain.provenance import build_provenance, provenance_to_json

OBSERVED = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)


def test_every_field_group_shares_one_record() -> None:
    provenance = build_provenance(
        ("address", "type"), source=Source.SABRE, source_id="P100", timestamp=OBSERVED
    )

    assert set(provenance) == {"address", "type"}
    assert provenance["address"] is provenance["type"]
    assert provenance["address"].confidence == 1.0


def test_empty_field_list_gives_empty_provenance() -> None:
    assert build_provenance((), source=Source.SABRE, source_id="P100", timestamp=OBSERVED) == {}


def test_records_serialize_to_json_and_back() -> None:
    provenance = build_provenance(
        ("number",), source=Source.SABRE, source_id="P100", timestamp=OBSERVED
    )

    payload = provenance_to_json(provenance)

    assert payload == {
        "number": {
            "source": "sabre",
            "source_id": "P100",
            "timestamp": "2030-01-01T12:00:00+00:00",
            "confidence": 1.0,
        }
    }
    assert ProvenanceRecord.from_json(payload["number"]) == provenance["number"]
