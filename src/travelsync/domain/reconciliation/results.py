"""Result summaries for profile and batch ingestion."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from travelsync.domain.model import EntityFamily


@dataclass(slots=True, kw_only=True)
class FamilyResult:
    """Outcome of one family's soft-delete + upsert pair."""

    family: EntityFamily
    deleted: int = 0
    inserted: int = 0
    updated: int = 0
    restored: int = 0
    deferred: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def rows_affected(self) -> int:
        return self.deleted + self.inserted + self.updated + self.restored


@dataclass(slots=True, kw_only=True)
class ProfileResult:
    source_id: str
    profile_id: UUID | None = None
    created: bool = False
    families: list[FamilyResult] = field(default_factory=list[FamilyResult])

    @property
    def errors(self) -> list[str]:
        return [f"{result.family}: {result.error}" for result in self.families if result.error]

    @property
    def rows_affected(self) -> dict[EntityFamily, int]:
        return {result.family: result.rows_affected for result in self.families if result.ok}

    @property
    def partial(self) -> bool:
        return any(not result.ok for result in self.families)


@dataclass(slots=True, kw_only=True)
class BatchSummary:
    created: int = 0
    updated: int = 0
    failed: int = 0
    total_processed: int = 0
    results: list[ProfileResult] = field(default_factory=list[ProfileResult])
    failures: dict[str, str] = field(default_factory=dict[str, str])
