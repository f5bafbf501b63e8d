from __future__ import annotations

import logging

import pytest

from travelsync.app import import_profiles, parse_reservation
from travelsync.config import ImportContext
from travelsync.domain.model import EntityFamily
from tests.helpers.profiles import FakeProfileStore, FakeProfileUnitOfWork
from tests.helpers.sabre import flight, passenger, profile_document, reservation_document

CONTEXT = ImportContext(organization_id="org-1", max_concurrent_profiles=2)


def test_parse_reservation_returns_reservation_and_report() -> None:
    report = parse_reservation(reservation_document())

    assert report.reservation.booking.record_locator == "ABC123"
    assert report.validation.issues == []


def test_parse_reservation_logs_validation_issues(caplog: pytest.LogCaptureFixture) -> None:
    document = reservation_document(
        passengers=[passenger(name_number="1", last="SMITH", first="JOHN MR")],
        segments=[
            flight(
                1,
                origin="NBO",
                destination="LHR",
                departs="2020-03-01T23:55:00",
                arrives="2020-03-02T06:10:00",
                is_past=True,
            )
        ],
    )

    with caplog.at_level(logging.WARNING, logger="travelsync.app"):
        report = parse_reservation(document)

    assert report.validation.issues
    assert "Validation issue" in caplog.text


def test_import_profiles_translates_and_stores() -> None:
    store = FakeProfileStore()

    summary = import_profiles(
        [profile_document(unique_id="P100"), profile_document(unique_id="P200")],
        context=CONTEXT,
        unit_of_work_factory=lambda: FakeProfileUnitOfWork(store),
    )

    assert (summary.created, summary.updated, summary.failed) == (2, 0, 0)
    assert {key[2] for key in store.profiles.items} == {"P100", "P200"}
    assert store.families[EntityFamily.EMAILS].active()


def test_import_profiles_reports_unusable_profiles() -> None:
    store = FakeProfileStore()

    summary = import_profiles(
        [profile_document(unique_id="P100", email=None)],
        context=CONTEXT,
        unit_of_work_factory=lambda: FakeProfileUnitOfWork(store),
    )

    assert summary.failed == 1
    assert summary.failures == {"P100": "Profile P100 has no valid email address"}
    assert store.profiles.items == {}
