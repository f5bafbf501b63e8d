"""Application services for ingesting traveler profiles.

One profile is imported by finding or creating its master row in a short
transaction, then reconciling every entity family in its own transaction. The
families touch disjoint tables, so they run concurrently; profiles in a batch run
concurrently too, bounded by the import context. Every transaction waits on one
shared gate sized to the connection pool, so the transactions in flight never
outnumber its connections.
"""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final

from travelsync.domain.model import TravelerProfile
from travelsync.domain.reconciliation import (
    BatchSummary,
    ProfileResult,
    ReconciliationScope,
    reconcile_family,
    rows_by_family,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from travelsync.config import ImportContext
    from travelsync.domain.model import CanonicalProfile
    from travelsync.domain.ports import ProfileUnitOfWorkFactory, RawDocumentSource

    type ProfileTranslator = Callable[[object], CanonicalProfile]
    type ProfileCallback = Callable[[ProfileResult], None]

log = logging.getLogger(__name__)

EMAIL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ProfileIdentityError(ValueError):
    """Raised when a canonical profile cannot be tied to a stored profile."""


def require_identity(profile: CanonicalProfile) -> str:
    """Return the profile's source id, or raise if it has no usable identity."""

    source_id = profile.metadata.source_id.strip()
    if not source_id:
        raise ProfileIdentityError("Profile has no unique id")
    email = profile.primary_email
    if email is None or not EMAIL_PATTERN.match(email):
        raise ProfileIdentityError(f"Profile {source_id} has no valid email address")
    return source_id


def _now() -> datetime:
    return datetime.now(UTC)


async def _in_transaction[T](
    gate: asyncio.Semaphore,
    func: Callable[..., T],
    /,
    *args: Any,
    **kwargs: Any,
) -> T:
    async with gate:
        return await asyncio.to_thread(func, *args, **kwargs)


def find_or_create_profile(
    unit_of_work_factory: ProfileUnitOfWorkFactory,
    profile: CanonicalProfile,
    *,
    organization_id: str,
    observed_at: datetime,
) -> tuple[TravelerProfile, bool]:
    """Upsert the master row for ``profile``; returns it and whether it was created."""

    source = profile.metadata.source_system
    source_id = require_identity(profile)
    with unit_of_work_factory() as uow:
        repository = uow.repositories.profiles
        stored = repository.get_by_source(
            organization_id=organization_id, source=source, source_id=source_id
        )
        created = stored is None
        if stored is None:
            stored = TravelerProfile(
                organization_id=organization_id,
                source=source,
                source_id=source_id,
                created_at=observed_at,
                updated_at=observed_at,
            )
            repository.add(stored)
        stored.profile_name = profile.profile_name
        stored.profile_type = profile.type
        stored.status = profile.status
        stored.first_name = profile.personal.first_name
        stored.last_name = profile.personal.last_name
        stored.primary_email = profile.primary_email
        stored.completeness_score = profile.metadata.completeness_score
        stored.updated_at = observed_at
        uow.commit()
    return stored, created


async def ingest_profile(
    profile: CanonicalProfile,
    *,
    context: ImportContext,
    unit_of_work_factory: ProfileUnitOfWorkFactory,
    observed_at: datetime | None = None,
    transactions: asyncio.Semaphore | None = None,
) -> ProfileResult:
    """Persist one canonical profile and reconcile its entity families.

    Family failures are reported on the result; only a failure to store the
    master row propagates. ``transactions`` is the batch-wide gate; without one
    the profile gets its own, sized by ``context.max_open_transactions``.
    """

    observed = observed_at or _now()
    gate = transactions or asyncio.Semaphore(context.max_open_transactions)
    stored, created = await _in_transaction(
        gate,
        find_or_create_profile,
        unit_of_work_factory,
        profile,
        organization_id=context.organization_id,
        observed_at=observed,
    )
    scope = ReconciliationScope(
        profile_id=stored.id,
        source=stored.source,
        source_id=stored.source_id,
    )
    families = await asyncio.gather(
        *(
            _in_transaction(
                gate,
                reconcile_family,
                unit_of_work_factory,
                scope,
                family,
                rows,
                observed_at=observed,
            )
            for family, rows in rows_by_family(profile).items()
        )
    )
    result = ProfileResult(
        source_id=stored.source_id,
        profile_id=stored.id,
        created=created,
        families=list(families),
    )
    if result.partial:
        log.warning("Profile %s imported with errors: %s", result.source_id, result.errors)
    return result


async def import_profile_batch(
    documents: RawDocumentSource,
    *,
    context: ImportContext,
    unit_of_work_factory: ProfileUnitOfWorkFactory,
    translate: ProfileTranslator,
    after_profile: ProfileCallback | None = None,
) -> BatchSummary:
    """Import raw profile documents with at most ``max_concurrent_profiles`` in flight.

    A profile whose import fails is counted as failed and the rest of the batch
    continues.
    """

    summary = BatchSummary()
    semaphore = asyncio.Semaphore(context.max_concurrent_profiles)
    transactions = asyncio.Semaphore(context.max_open_transactions)

    async def _run(index: int, document: object) -> None:
        label = f"document[{index}]"
        async with semaphore:
            try:
                profile = translate(document)
                label = profile.metadata.source_id or label
                result = await ingest_profile(
                    profile,
                    context=context,
                    unit_of_work_factory=unit_of_work_factory,
                    transactions=transactions,
                )
            except Exception as exc:  # noqa: BLE001
                log.error("Import of profile %s failed: %s", label, exc, exc_info=exc)
                summary.failed += 1
                summary.failures[label] = str(exc)
                return
            finally:
                summary.total_processed += 1

            summary.results.append(result)
            if result.created:
                summary.created += 1
            else:
                summary.updated += 1
            if after_profile is not None:
                after_profile(result)

    await asyncio.gather(*(_run(index, document) for index, document in enumerate(documents)))
    return summary


def import_profiles_sync(
    documents: RawDocumentSource,
    *,
    context: ImportContext,
    unit_of_work_factory: ProfileUnitOfWorkFactory,
    translate: ProfileTranslator,
    after_profile: ProfileCallback | None = None,
) -> BatchSummary:
    return asyncio.run(
        import_profile_batch(
            documents,
            context=context,
            unit_of_work_factory=unit_of_work_factory,
            translate=translate,
            after_profile=after_profile,
        )
    )
