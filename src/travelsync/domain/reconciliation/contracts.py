"""Value types exchanged between the reconciliation engine and storage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from travelsync.domain.model import Source


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationScope:
    """The (profile, source, source id) triple one reconciliation pass may mutate."""

    profile_id: UUID
    source: Source
    source_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class FamilyRow:
    """One canonical entity projected onto its family table columns."""

    natural_key: str
    values: dict[str, object] = field(default_factory=dict[str, object])

    @property
    def field_groups(self) -> tuple[str, ...]:
        return tuple(self.values)


@dataclass(slots=True)
class UpsertOutcome:
    inserted: int = 0
    updated: int = 0
    restored: int = 0
    deferred: int = 0
