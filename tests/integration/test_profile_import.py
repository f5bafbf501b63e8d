from __future__ import annotations

from typing import TYPE_CHECKING

from travelsync.adapters.sqlalchemy import SqlAlchemyFamilyRepository
from travelsync.app import import_profiles
from travelsync.config import ImportContext
from travelsync.domain.model import EntityFamily, Source
from travelsync.domain.reconciliation import ReconciliationScope
from tests.helpers.sabre import profile_document

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from travelsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyProfileUnitOfWork

CONTEXT = ImportContext(organization_id="org-1", max_concurrent_profiles=2)

type UnitOfWorkFactory = Callable[[], SqlAlchemyProfileUnitOfWork]


def stored_rows(
    unit_of_work_factory: UnitOfWorkFactory,
    source_id: str,
    family: EntityFamily,
    *,
    include_deleted: bool = False,
) -> list[Any]:
    with unit_of_work_factory() as uow:
        profile = uow.repositories.profiles.get_by_source(
            organization_id=CONTEXT.organization_id, source=Source.SABRE, source_id=source_id
        )
        assert profile is not None
        scope = ReconciliationScope(
            profile_id=profile.id, source=profile.source, source_id=profile.source_id
        )
        repository = SqlAlchemyFamilyRepository(uow.session, family)
        return repository.rows(scope, include_deleted=include_deleted)


def test_batch_import_persists_profiles_and_families(
    file_unit_of_work: UnitOfWorkFactory,
) -> None:
    documents = [profile_document(unique_id=f"P{number}") for number in range(1, 5)]

    summary = import_profiles(documents, context=CONTEXT, unit_of_work_factory=file_unit_of_work)

    assert (summary.created, summary.updated, summary.failed) == (4, 0, 0)
    assert all(not result.partial for result in summary.results)
    emails = stored_rows(file_unit_of_work, "P3", EntityFamily.EMAILS)
    assert [row.address for row in emails] == ["jane.doe@example.com", "jd@home.example"]
    (document,) = stored_rows(file_unit_of_work, "P3", EntityFamily.DOCUMENTS)
    assert document.number == "A1234567"
    (card,) = stored_rows(file_unit_of_work, "P3", EntityFamily.PAYMENT_METHODS)
    assert card.last_four == "1111"
    assert card.masked_number == "************1111"


def test_unusable_profile_fails_without_blocking_the_batch(
    file_unit_of_work: UnitOfWorkFactory,
) -> None:
    documents = [
        profile_document(unique_id="P1"),
        profile_document(unique_id="P2", email=None),
        profile_document(unique_id="P3"),
    ]

    summary = import_profiles(documents, context=CONTEXT, unit_of_work_factory=file_unit_of_work)

    assert (summary.created, summary.failed, summary.total_processed) == (2, 1, 3)
    assert set(summary.failures) == {"P2"}


def test_reimport_soft_deletes_facts_the_source_dropped(
    file_unit_of_work: UnitOfWorkFactory,
) -> None:
    import_profiles(
        [profile_document(unique_id="P1")],
        context=CONTEXT,
        unit_of_work_factory=file_unit_of_work,
    )

    summary = import_profiles(
        [profile_document(unique_id="P1", email="jane@new.example")],
        context=CONTEXT,
        unit_of_work_factory=file_unit_of_work,
    )

    (result,) = summary.results
    assert not result.created
    assert summary.updated == 1
    active = stored_rows(file_unit_of_work, "P1", EntityFamily.EMAILS)
    assert [row.address for row in active] == ["jane@new.example", "jd@home.example"]
    everything = stored_rows(
        file_unit_of_work, "P1", EntityFamily.EMAILS, include_deleted=True
    )
    (dropped,) = [row for row in everything if row.deleted_at is not None]
    assert dropped.address == "jane.doe@example.com"
    assert dropped.provenance["history"][0]["action"] == "deleted"
