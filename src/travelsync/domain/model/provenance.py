"""Per-field provenance records attached to persisted values."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from travelsync.domain.model.enums import Source

FULL_CONFIDENCE = 1.0


@dataclass(frozen=True, slots=True, kw_only=True)
class ProvenanceRecord:
    """Which source/run contributed a value and when."""

    source: Source
    source_id: str
    timestamp: datetime
    confidence: float = FULL_CONFIDENCE

    def to_json(self) -> dict[str, Any]:
        return {
            "source": self.source.value,
            "source_id": self.source_id,
            "timestamp": self.timestamp.isoformat(),
            "confidence": self.confidence,
        }

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> ProvenanceRecord:
        return cls(
            source=Source(payload["source"]),
            source_id=str(payload["source_id"]),
            timestamp=datetime.fromisoformat(payload["timestamp"]),
            confidence=float(payload.get("confidence", FULL_CONFIDENCE)),
        )


type Provenance = dict[str, ProvenanceRecord]
"""Field-group name -> record."""
