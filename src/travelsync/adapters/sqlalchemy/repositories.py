"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, insert, select, update

from travelsync.adapters.sqlalchemy.mappings import FAMILY_TABLES, profile_table
from travelsync.domain.model import TravelerProfile
from travelsync.domain.provenance import build_provenance, provenance_to_json
from travelsync.domain.reconciliation.contracts import UpsertOutcome

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from sqlalchemy import ColumnElement, Row, Table
    from sqlalchemy.orm import Session

    from travelsync.domain.model import EntityFamily, ProvenanceRecord, Source
    from travelsync.domain.reconciliation.contracts import FamilyRow, ReconciliationScope

log = logging.getLogger(__name__)


class SqlAlchemyProfileRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: TravelerProfile) -> None:
        self.session.add(entity)

    def get_by_source(
        self, *, organization_id: str, source: Source, source_id: str
    ) -> TravelerProfile | None:
        stmt = (
            select(TravelerProfile)
            .where(profile_table.c.organization_id == organization_id)
            .where(profile_table.c.source == source)
            .where(profile_table.c.source_id == source_id)
        )
        return self.session.execute(stmt).scalar_one_or_none()


def _history(provenance: dict[str, Any]) -> list[dict[str, Any]]:
    history = provenance.get("history")
    return list(history) if isinstance(history, list) else []


class SqlAlchemyFamilyRepository:
    """Scoped soft-delete/upsert over one family table.

    Rows are plain table rows rather than mapped objects; every statement filters
    on the reconciliation scope so rows owned by other sources stay untouched.
    """

    def __init__(self, session: Session, family: EntityFamily) -> None:
        self.session = session
        self._family = family
        self.table: Table = FAMILY_TABLES[family]

    @property
    def family(self) -> EntityFamily:
        return self._family

    def _in_scope(self, scope: ReconciliationScope) -> ColumnElement[bool]:
        columns = self.table.c
        return and_(
            columns.profile_id == scope.profile_id,
            columns.source == scope.source,
            columns.source_id == scope.source_id,
        )

    # Phase 1 ---------------------------------------------------------------

    def soft_delete_missing(
        self,
        scope: ReconciliationScope,
        keep_keys: Collection[str],
        *,
        stamp: ProvenanceRecord,
    ) -> int:
        stmt = select(self.table.c.id, self.table.c.provenance).where(
            self._in_scope(scope),
            self.table.c.deleted_at.is_(None),
            self.table.c.natural_key.not_in(list(keep_keys)),
        )
        return self._soft_delete(self.session.execute(stmt).all(), stamp)

    def soft_delete_all(self, scope: ReconciliationScope, *, stamp: ProvenanceRecord) -> int:
        stmt = select(self.table.c.id, self.table.c.provenance).where(
            self._in_scope(scope),
            self.table.c.deleted_at.is_(None),
        )
        return self._soft_delete(self.session.execute(stmt).all(), stamp)

    def _soft_delete(self, rows: Sequence[Row[Any]], stamp: ProvenanceRecord) -> int:
        for row_id, provenance in rows:
            document = dict(provenance)
            document["history"] = [
                *_history(document),
                {"action": "deleted", **stamp.to_json()},
            ]
            self.session.execute(
                update(self.table)
                .where(self.table.c.id == row_id)
                .values(
                    deleted_at=stamp.timestamp,
                    updated_at=stamp.timestamp,
                    provenance=document,
                )
            )
        if rows:
            log.debug("Soft-deleted %d %s rows", len(rows), self._family)
        return len(rows)

    # Phase 2 ---------------------------------------------------------------

    def upsert(
        self,
        scope: ReconciliationScope,
        rows: Sequence[FamilyRow],
        *,
        stamp: ProvenanceRecord,
    ) -> UpsertOutcome:
        outcome = UpsertOutcome()
        for row in rows:
            fields = provenance_to_json(
                build_provenance(
                    row.field_groups,
                    source=stamp.source,
                    source_id=stamp.source_id,
                    timestamp=stamp.timestamp,
                )
            )
            existing = self._scope_row(scope, row.natural_key)
            if existing is not None and existing.deleted_at is None:
                self._update(existing, row, fields, stamp, restored=False)
                outcome.updated += 1
                continue

            if self._held_elsewhere(scope, row.natural_key):
                log.debug(
                    "Key %s of %s is active under another source; leaving it with its owner",
                    row.natural_key,
                    self._family,
                )
                outcome.deferred += 1
                continue

            if existing is not None:
                self._update(existing, row, fields, stamp, restored=True)
                outcome.restored += 1
            else:
                self._insert(scope, row, fields, stamp)
                outcome.inserted += 1
        return outcome

    def _scope_row(self, scope: ReconciliationScope, key: str) -> Row[Any] | None:
        columns = self.table.c
        stmt = (
            select(columns.id, columns.provenance, columns.deleted_at)
            .where(self._in_scope(scope), columns.natural_key == key)
            .order_by(columns.deleted_at.is_(None).desc(), columns.deleted_at.desc())
            .limit(1)
        )
        return self.session.execute(stmt).first()

    def _held_elsewhere(self, scope: ReconciliationScope, key: str) -> bool:
        columns = self.table.c
        stmt = (
            select(columns.id)
            .where(
                columns.profile_id == scope.profile_id,
                columns.natural_key == key,
                columns.deleted_at.is_(None),
            )
            .limit(1)
        )
        return self.session.execute(stmt).first() is not None

    def _update(
        self,
        existing: Row[Any],
        row: FamilyRow,
        fields: dict[str, dict[str, object]],
        stamp: ProvenanceRecord,
        *,
        restored: bool,
    ) -> None:
        history = _history(dict(existing.provenance))
        if restored:
            history.append({"action": "restored", **stamp.to_json()})
        self.session.execute(
            update(self.table)
            .where(self.table.c.id == existing.id)
            .values(
                **row.values,
                provenance={"fields": fields, "history": history},
                updated_at=stamp.timestamp,
                deleted_at=None,
            )
        )

    def _insert(
        self,
        scope: ReconciliationScope,
        row: FamilyRow,
        fields: dict[str, dict[str, object]],
        stamp: ProvenanceRecord,
    ) -> None:
        self.session.execute(
            insert(self.table).values(
                id=uuid.uuid4(),
                profile_id=scope.profile_id,
                natural_key=row.natural_key,
                source=scope.source,
                source_id=scope.source_id,
                **row.values,
                provenance={"fields": fields, "history": []},
                created_at=stamp.timestamp,
                updated_at=stamp.timestamp,
                deleted_at=None,
            )
        )

    def rows(self, scope: ReconciliationScope, *, include_deleted: bool = False) -> list[Row[Any]]:
        """Rows owned by ``scope`` ordered by natural key."""

        stmt = select(self.table).where(self._in_scope(scope)).order_by(self.table.c.natural_key)
        if not include_deleted:
            stmt = stmt.where(self.table.c.deleted_at.is_(None))
        return list(self.session.execute(stmt).all())
