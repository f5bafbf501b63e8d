"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from travelsync.adapters.sabre import assemble_reservation, translate_profile
from travelsync.adapters.sqlalchemy.migrations import upgrade_head
from travelsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyProfileUnitOfWork,
    is_started,
    pool_monitor,
    startup,
)
from travelsync.config import get_database_config, get_import_context
from travelsync.domain.data_integration import import_profiles_sync
from travelsync.domain.validation import validate_seat_assignments

if TYPE_CHECKING:
    from travelsync.config import ImportContext
    from travelsync.domain.model import CanonicalReservation
    from travelsync.domain.ports import ProfileUnitOfWorkFactory, RawDocumentSource
    from travelsync.domain.reconciliation import BatchSummary, ProfileResult
    from travelsync.domain.validation import ValidationReport


log = getLogger(__name__)


@dataclass(slots=True)
class ReservationReport:
    reservation: CanonicalReservation
    validation: ValidationReport


def _log_held_connections(result: ProfileResult) -> None:
    monitor = pool_monitor()
    if monitor is None:
        return
    held = monitor.held_connections()
    if held:
        log.warning(
            "%d connection(s) still held after profile %s (longest %.1fs)",
            len(held),
            result.source_id,
            held[0],
        )


def import_profiles(
    documents: RawDocumentSource,
    *,
    context: ImportContext | None = None,
    unit_of_work_factory: ProfileUnitOfWorkFactory | None = None,
) -> BatchSummary:
    """Import raw Sabre profile documents into storage."""

    effective_context = context or get_import_context()
    if unit_of_work_factory is None and not is_started():
        startup()
    effective_uow = unit_of_work_factory or SqlAlchemyProfileUnitOfWork
    log.info(
        "Starting profile import: organization=%s, max_concurrency=%s, max_transactions=%s",
        effective_context.organization_id,
        effective_context.max_concurrent_profiles,
        effective_context.max_open_transactions,
    )

    summary = import_profiles_sync(
        documents,
        context=effective_context,
        unit_of_work_factory=effective_uow,
        translate=translate_profile,
        after_profile=_log_held_connections,
    )

    log.info(
        f"Finished profile import: created={summary.created}, updated={summary.updated}, "
        f"failed={summary.failed}, total={summary.total_processed}"
    )
    return summary


def parse_reservation(document: object) -> ReservationReport:
    """Assemble a canonical reservation and run the advisory seat checks."""

    reservation = assemble_reservation(document)
    report = validate_seat_assignments(reservation)
    for issue in report.issues:
        log.warning("Validation issue: %s", issue)
    for recommendation in report.recommendations:
        log.info("Recommendation: %s", recommendation)
    return ReservationReport(reservation=reservation, validation=report)


def migrate(*, database_uri: str | None = None) -> None:
    """Upgrade the configured database schema to the latest revision."""

    uri = database_uri or get_database_config().uri
    log.info("Upgrading database schema")
    upgrade_head(database_uri=uri)
    log.info("Database schema is up to date")
