from __future__ import annotations

import pytest

from travelsync.domain.model import (
    Address,
    DocumentType,
    EmailAddress,
    EmergencyContact,
    EntityFamily,
    LoyaltyProgram,
    PaymentMethod,
    PhoneNumber,
    TravelDocument,
)
from travelsync.domain.reconciliation import natural_key, project_rows, row_values, rows_by_family
from tests.helpers.profiles import make_canonical_profile


@pytest.mark.parametrize(
    ("entity", "expected"),
    [
        (EmailAddress(address="  Jane.Doe@Example.COM "), "jane.doe@example.com"),
        (PhoneNumber(number="+254 (20) 555-1234"), "254205551234"),
        (Address(lines=["  1  Riverside   RD", "Suite 4"]), "1 riverside rd"),
        (TravelDocument(type=DocumentType.PASSPORT, number=" a123 "), "passport|A123"),
        (LoyaltyProgram(provider_code="kq", member_number="kq998877"), "KQ|KQ998877"),
        (PaymentMethod(card_type="vi", masked_number="************1111"), "1111|VI"),
        (EmergencyContact(first_name="John", last_name="Doe", phone="+254 700"), "john doe|254700"),
    ],
)
def test_natural_keys_normalize_identity_fields(entity: object, expected: str) -> None:
    assert natural_key(entity) == expected


@pytest.mark.parametrize(
    "entity",
    [
        EmailAddress(address="   "),
        PhoneNumber(number="ext."),
        Address(lines=[]),
        TravelDocument(type=DocumentType.VISA, number="  "),
        PaymentMethod(card_type="VI"),
        PaymentMethod(masked_number="1111"),
        EmergencyContact(first_name="John"),
    ],
)
def test_incomplete_entities_have_no_key(entity: object) -> None:
    assert natural_key(entity) is None


def test_unknown_entities_are_rejected() -> None:
    with pytest.raises(TypeError):
        natural_key("not an entity")
    with pytest.raises(TypeError):
        row_values(42)


def test_row_values_project_table_columns() -> None:
    values = row_values(
        Address(lines=["1 Riverside Rd", " Suite 4 ", "Floor 2"], city="Nairobi", primary=True)
    )

    assert values["line1"] == "1 Riverside Rd"
    assert values["line2"] == "Suite 4, Floor 2"
    assert values["city"] == "Nairobi"
    assert values["is_primary"] is True
    assert row_values(PaymentMethod(card_type="VI", masked_number="**1111"))["last_four"] == "1111"


def test_project_rows_drops_keyless_and_duplicate_entities() -> None:
    rows = project_rows(
        EntityFamily.EMAILS,
        [
            EmailAddress(address="a@example.com", type="BUS"),
            EmailAddress(address=""),
            EmailAddress(address="A@EXAMPLE.COM", type="HOME"),
            EmailAddress(address="b@example.com"),
        ],
    )

    assert [row.natural_key for row in rows] == ["a@example.com", "b@example.com"]
    assert rows[0].values["type"] == "BUS"
    assert rows[0].field_groups == ("address", "type", "is_primary")


def test_rows_by_family_covers_every_family() -> None:
    rows = rows_by_family(make_canonical_profile())

    assert set(rows) == set(EntityFamily)
    assert [row.natural_key for row in rows[EntityFamily.EMAILS]] == ["jane.doe@example.com"]
    assert [row.natural_key for row in rows[EntityFamily.DOCUMENTS]] == ["passport|A1234567"]
    assert rows[EntityFamily.PAYMENT_METHODS] == []
