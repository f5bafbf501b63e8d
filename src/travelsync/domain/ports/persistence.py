"""Ports for persisting profiles and their reconciled families."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from travelsync.domain.model import TravelerProfile

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from travelsync.domain.model import EntityFamily, ProvenanceRecord, Source
    from travelsync.domain.reconciliation.contracts import (
        FamilyRow,
        ReconciliationScope,
        UpsertOutcome,
    )


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class ProfileRepository(Repository[TravelerProfile], Protocol):
    """Persistence contract for traveler profile master rows."""

    def get_by_source(
        self, *, organization_id: str, source: Source, source_id: str
    ) -> TravelerProfile | None: ...


@runtime_checkable
class FamilyRepository(Protocol):
    """Scoped soft-delete/upsert primitives over one family table.

    Every method only touches rows whose (profile, source, source id) equals the
    given scope, and runs inside the caller's transaction.
    """

    @property
    def family(self) -> EntityFamily: ...

    def soft_delete_missing(
        self,
        scope: ReconciliationScope,
        keep_keys: Collection[str],
        *,
        stamp: ProvenanceRecord,
    ) -> int: ...

    def soft_delete_all(self, scope: ReconciliationScope, *, stamp: ProvenanceRecord) -> int: ...

    def upsert(
        self,
        scope: ReconciliationScope,
        rows: Sequence[FamilyRow],
        *,
        stamp: ProvenanceRecord,
    ) -> UpsertOutcome: ...
