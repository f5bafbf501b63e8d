"""Two-phase reconciliation of one entity family for one source scope.

Phase 1 soft-deletes the scope's rows whose natural key the source no longer
reports; phase 2 upserts every reported row. Both phases run on the same
transaction, and only rows owned by the scope are ever touched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from travelsync.domain.model import ProvenanceRecord

from .results import FamilyResult

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from travelsync.domain.model import EntityFamily
    from travelsync.domain.ports import FamilyRepository, ProfileUnitOfWorkFactory

    from .contracts import FamilyRow, ReconciliationScope

log = logging.getLogger(__name__)


class ReconciliationError(RuntimeError):
    """Raised when one family's soft-delete + upsert pair cannot be committed."""

    def __init__(self, family: EntityFamily, scope: ReconciliationScope, cause: Exception) -> None:
        super().__init__(f"{family} reconciliation failed for profile {scope.profile_id}: {cause}")
        self.family = family
        self.scope = scope
        self.cause = cause


@dataclass(slots=True)
class FamilyReconciler:
    """Apply one canonical family list to storage inside the caller's transaction."""

    repository: FamilyRepository

    def __call__(
        self,
        scope: ReconciliationScope,
        rows: Sequence[FamilyRow],
        *,
        observed_at: datetime,
    ) -> FamilyResult:
        stamp = ProvenanceRecord(
            source=scope.source,
            source_id=scope.source_id,
            timestamp=observed_at,
        )
        keep_keys = {row.natural_key for row in rows if row.natural_key}

        # an empty report means the source currently holds nothing for this scope
        if keep_keys:
            deleted = self.repository.soft_delete_missing(scope, keep_keys, stamp=stamp)
        else:
            deleted = self.repository.soft_delete_all(scope, stamp=stamp)

        keyed_rows = [row for row in rows if row.natural_key]
        outcome = self.repository.upsert(scope, keyed_rows, stamp=stamp)
        return FamilyResult(
            family=self.repository.family,
            deleted=deleted,
            inserted=outcome.inserted,
            updated=outcome.updated,
            restored=outcome.restored,
            deferred=outcome.deferred,
        )


def reconcile_family(
    unit_of_work_factory: ProfileUnitOfWorkFactory,
    scope: ReconciliationScope,
    family: EntityFamily,
    rows: Sequence[FamilyRow],
    *,
    observed_at: datetime,
) -> FamilyResult:
    """Reconcile one family in its own transaction.

    Failures roll back this family only and come back as a ``FamilyResult``
    carrying the error; they are never raised to sibling families.
    """

    try:
        with unit_of_work_factory() as uow:
            reconciler = FamilyReconciler(uow.repositories.families[family])
            result = reconciler(scope, rows, observed_at=observed_at)
            uow.commit()
    except Exception as exc:  # noqa: BLE001
        error = ReconciliationError(family, scope, exc)
        log.error("%s", error, exc_info=exc)
        return FamilyResult(family=family, error=str(error))

    log.debug(
        "Reconciled %s for profile %s: deleted=%s inserted=%s updated=%s restored=%s",
        family,
        scope.profile_id,
        result.deleted,
        result.inserted,
        result.updated,
        result.restored,
    )
    return result
