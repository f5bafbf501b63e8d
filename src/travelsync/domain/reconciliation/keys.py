"""Natural keys and row projections for each reconciled profile family.

A natural key identifies an entity within one profile independent of generated
ids. Entities whose key normalizes to nothing are not persisted.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from functools import singledispatch
from typing import TYPE_CHECKING

from travelsync.domain.model import (
    Address,
    EmailAddress,
    EmergencyContact,
    EntityFamily,
    LoyaltyProgram,
    PaymentMethod,
    PhoneNumber,
    TravelDocument,
)

from .contracts import FamilyRow

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from travelsync.domain.model import CanonicalProfile

log = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D+")
KEY_SEPARATOR = "|"


def normalize_email(value: str | None) -> str | None:
    if value is None:
        return None
    text = value.strip().lower()
    return text or None


def normalize_digits(value: str | None) -> str | None:
    if value is None:
        return None
    digits = _NON_DIGITS.sub("", value)
    return digits or None


def normalize_text(value: str | None) -> str | None:
    if value is None:
        return None
    text = unicodedata.normalize("NFKC", value).casefold()
    text = " ".join(text.split())
    return text or None


def _compound(*parts: str | None) -> str | None:
    if any(part is None for part in parts):
        return None
    return KEY_SEPARATOR.join(part for part in parts if part is not None)


@singledispatch
def natural_key(entity: object) -> str | None:
    raise TypeError(f"No natural key defined for {type(entity).__name__}")


@natural_key.register
def _(email: EmailAddress) -> str | None:
    return normalize_email(email.address)


@natural_key.register
def _(phone: PhoneNumber) -> str | None:
    return normalize_digits(phone.number)


@natural_key.register
def _(address: Address) -> str | None:
    return normalize_text(address.first_line)


@natural_key.register
def _(document: TravelDocument) -> str | None:
    number = document.number.strip().upper() if document.number else None
    return _compound(document.type.value, number or None)


@natural_key.register
def _(program: LoyaltyProgram) -> str | None:
    provider = program.provider_code.strip().upper() if program.provider_code else None
    member = program.member_number.strip().upper() if program.member_number else None
    return _compound(provider or None, member or None)


@natural_key.register
def _(payment: PaymentMethod) -> str | None:
    card_type = payment.card_type.strip().upper() if payment.card_type else None
    return _compound(payment.last_four, card_type or None)


@natural_key.register
def _(contact: EmergencyContact) -> str | None:
    return _compound(normalize_text(contact.name), normalize_digits(contact.phone))


@singledispatch
def row_values(entity: object) -> dict[str, object]:
    raise TypeError(f"No row projection defined for {type(entity).__name__}")


@row_values.register
def _(email: EmailAddress) -> dict[str, object]:
    return {
        "address": normalize_email(email.address),
        "type": email.type,
        "is_primary": email.primary,
    }


@row_values.register
def _(phone: PhoneNumber) -> dict[str, object]:
    return {
        "number": phone.number.strip(),
        "type": phone.type,
        "country_code": phone.country_code,
        "extension": phone.extension,
        "is_primary": phone.primary,
    }


@row_values.register
def _(address: Address) -> dict[str, object]:
    lines = [line.strip() for line in address.lines if line.strip()]
    return {
        "type": address.type,
        "line1": lines[0] if lines else None,
        "line2": ", ".join(lines[1:]) or None,
        "city": address.city,
        "state": address.state,
        "postal_code": address.postal_code,
        "country": address.country,
        "is_primary": address.primary,
    }


@row_values.register
def _(document: TravelDocument) -> dict[str, object]:
    return {
        "type": document.type.value,
        "number": document.number.strip(),
        "issuing_country": document.issuing_country,
        "citizenship": document.citizenship,
        "issue_date": document.issue_date,
        "expiration_date": document.expiration_date,
        "holder_name": document.holder_name,
    }


@row_values.register
def _(program: LoyaltyProgram) -> dict[str, object]:
    return {
        "provider_code": program.provider_code.strip().upper(),
        "provider_type": program.provider_type.value,
        "program_name": program.program_name,
        "member_number": program.member_number.strip(),
        "tier": program.tier,
    }


@row_values.register
def _(payment: PaymentMethod) -> dict[str, object]:
    return {
        "card_type": payment.card_type,
        "masked_number": payment.masked_number,
        "last_four": payment.last_four,
        "expiration_month": payment.expiration_month,
        "expiration_year": payment.expiration_year,
        "holder_name": payment.holder_name,
        "is_corporate": payment.is_corporate,
    }


@row_values.register
def _(contact: EmergencyContact) -> dict[str, object]:
    return {
        "name": contact.name,
        "relationship": contact.relationship,
        "phone": contact.phone,
        "email": normalize_email(contact.email),
    }


def project_rows(family: EntityFamily, entities: Iterable[object]) -> list[FamilyRow]:
    """Project entities onto rows, dropping keyless entities and later duplicates."""

    rows: list[FamilyRow] = []
    seen: set[str] = set()
    for entity in entities:
        key = natural_key(entity)
        if key is None:
            log.debug("Skipping %s entity without natural key: %r", family, entity)
            continue
        if key in seen:
            log.debug("Skipping duplicate %s key %s", family, key)
            continue
        seen.add(key)
        rows.append(FamilyRow(natural_key=key, values=row_values(entity)))
    return rows


def family_entities(profile: CanonicalProfile) -> dict[EntityFamily, Sequence[object]]:
    return {
        EntityFamily.EMAILS: profile.contact.emails,
        EntityFamily.PHONES: profile.contact.phones,
        EntityFamily.ADDRESSES: profile.contact.addresses,
        EntityFamily.DOCUMENTS: profile.documents,
        EntityFamily.LOYALTY: profile.loyalty,
        EntityFamily.PAYMENT_METHODS: profile.payment_methods,
        EntityFamily.EMERGENCY_CONTACTS: profile.emergency_contacts,
    }


def rows_by_family(profile: CanonicalProfile) -> dict[EntityFamily, list[FamilyRow]]:
    return {
        family: project_rows(family, entities)
        for family, entities in family_entities(profile).items()
    }
