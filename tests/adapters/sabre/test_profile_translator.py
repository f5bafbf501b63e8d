from __future__ import annotations

import json
from datetime import date

import pytest

from travelsync.adapters.sabre import translate_profile
from travelsync.adapters.sabre.profile_translator import (
    locate_profile,
    mask_card_number,
    parse_expiry,
)
from travelsync.domain.model import (
    DocumentType,
    Gender,
    PreferenceLevel,
    ProfileStatus,
    ProfileType,
    Source,
)
from tests.helpers.sabre import profile_document, profile_element


def test_identity_and_personal_details() -> None:
    profile = translate_profile(profile_document())

    assert profile.metadata.source_system is Source.SABRE
    assert profile.metadata.source_id == "P100"
    assert profile.metadata.source_pcc == "X1Y2"
    assert profile.profile_name == "DOE/JANE MS"
    assert profile.type is ProfileType.PERSONAL
    assert profile.status is ProfileStatus.ACTIVE
    assert profile.client_code == "ACME"
    assert profile.personal.first_name == "Jane"
    assert profile.personal.last_name == "Doe"
    assert profile.personal.title == "MS"
    assert profile.personal.birth_date == date(1985, 4, 12)
    assert profile.personal.gender is Gender.FEMALE


def test_contact_details() -> None:
    profile = translate_profile(profile_document())

    assert [(email.address, email.type, email.primary) for email in profile.contact.emails] == [
        ("jane.doe@example.com", "BUS", True),
        ("jd@home.example", "WORK", False),
    ]
    assert profile.primary_email == "jane.doe@example.com"

    phone = profile.contact.phones[0]
    assert (phone.number, phone.type, phone.country_code, phone.primary) == (
        "254-20-5551234",
        "MOB",
        "254",
        True,
    )

    address = profile.contact.addresses[0]
    assert address.lines == ["1 Riverside Rd", "Suite 4"]
    assert (address.type, address.city, address.country) == ("WORK", "Nairobi", "KE")


def test_documents_loyalty_and_payments() -> None:
    profile = translate_profile(profile_document())

    document = profile.documents[0]
    assert document.type is DocumentType.PASSPORT
    assert document.number == "A1234567"
    assert document.expiration_date == date(2032, 5, 1)
    assert document.holder_name == "Jane Doe"

    program = profile.loyalty[0]
    assert (program.provider_code, program.member_number, program.tier) == (
        "KQ",
        "KQ998877",
        "GOLD",
    )

    card = profile.payment_methods[0]
    assert card.card_type == "VI"
    assert card.masked_number == "************1111"
    assert card.last_four == "1111"
    assert (card.expiration_month, card.expiration_year) == (12, 2031)


def test_employment_and_emergency_contacts() -> None:
    profile = translate_profile(profile_document())

    assert profile.employment is not None
    assert profile.employment.company == "Acme"
    assert profile.employment.department == "Sales"
    assert profile.employment.employee_id == "E42"

    contact = profile.emergency_contacts[0]
    assert contact.name == "John Doe"
    assert contact.relationship == "Spouse"
    assert contact.phone == "+254 700 000 000"


def test_completeness_score() -> None:
    assert translate_profile(profile_document()).metadata.completeness_score == 100

    sparse = translate_profile(
        {
            "TPA_Identity": {"$": {"UniqueID": "P2", "ProfileName": "ROE/RICHARD MR"}},
            "Traveler": {"Customer": {"Email": "rr@example.com"}},
        }
    )
    # first name, last name and email out of ten checks
    assert sparse.metadata.completeness_score == 30
    assert (sparse.personal.first_name, sparse.personal.last_name) == ("RICHARD", "ROE")


def test_every_wrapper_depth_and_input_shape_translates_the_same() -> None:
    expected = translate_profile(profile_document())

    assert translate_profile(profile_element()) == expected
    assert translate_profile(json.dumps(profile_document())) == expected
    assert translate_profile([profile_document()]) == expected


def test_locate_profile_stops_at_identity() -> None:
    element = profile_element()

    assert locate_profile(profile_document()) == element
    assert locate_profile(element) is element


def test_preferences_and_remarks() -> None:
    element = profile_element()
    element["Traveler"] = element.pop("sabre:Traveler")
    element["Traveler"]["PrefCollections"] = {
        "AirlinePref": [
            {
                "$": {"VendorCode": "KQ", "PreferenceLevel": "Preferred"},
                "SeatPref": {"$": {"SeatPosition": "W"}},
            },
            {"$": {"VendorCode": "XX", "PreferenceLevel": "Excluded"}},
        ],
        "HotelPref": {"$": {"ChainCode": "HI", "SmokingAllowed": "false"}},
        "VehicleRentalPref": {"$": {"VendorCode": "ZE", "TransmissionType": "A"}},
    }
    element["RemarkInfo"] = {
        "Remark": [
            {"$": {"Type": "Invoice"}, "Text": "BILL TO ACME"},
            {"$": {"Type": "Whatever"}, "Text": "Window seat please"},
        ],
        "FOP_Remark": {"Text": "CORPORATE CARD"},
    }

    profile = translate_profile(element)

    airlines = profile.preferences.airlines
    assert [(pref.vendor_code, pref.level) for pref in airlines] == [
        ("KQ", PreferenceLevel.PREFERRED),
        ("XX", PreferenceLevel.EXCLUDED),
    ]
    assert airlines[0].details == {"seat_position": "window"}
    assert profile.preferences.hotels[0].details == {"smoking": "non_smoking"}
    assert profile.preferences.cars[0].details == {"transmission": "automatic"}
    assert [(remark.type, remark.text) for remark in profile.remarks] == [
        ("INVOICE", "BILL TO ACME"),
        ("GENERAL", "Window seat please"),
        ("INVOICE", "CORPORATE CARD"),
    ]


def test_missing_identity_yields_empty_source_id() -> None:
    profile = translate_profile({"TPA_Identity": {}, "Traveler": {"Customer": {}}})

    assert profile.metadata.source_id == ""
    assert profile.primary_email is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1231", (12, 2031)),
        ("12/31", (12, 2031)),
        ("07-2029", (7, 2029)),
        ("2030-04", (4, 2030)),
        ("soon", (None, None)),
        (None, (None, None)),
    ],
)
def test_parse_expiry(raw: str | None, expected: tuple[int | None, int | None]) -> None:
    assert parse_expiry(raw) == expected


def test_mask_card_number() -> None:
    assert mask_card_number("4111 1111 1111 1111") == "************1111"
    assert mask_card_number("1111") == "1111"
    assert mask_card_number(None) is None
