"""Contact facts attributed to passengers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from travelsync.domain.model.enums import AssociationBasis, ContactKind


@dataclass(slots=True, kw_only=True)
class ContactFact:
    """One email/phone/address observation and how it reached its passenger."""

    KIND: ClassVar[ContactKind]

    value: str
    type: str | None = None
    basis: AssociationBasis = AssociationBasis.DIRECT
    owner: str | None = None

    @property
    def kind(self) -> ContactKind:
        return self.KIND

    @property
    def dedup_key(self) -> str:
        return " ".join(self.value.split()).casefold()


@dataclass(slots=True, kw_only=True)
class EmailContact(ContactFact):
    KIND: ClassVar[ContactKind] = ContactKind.EMAIL


@dataclass(slots=True, kw_only=True)
class PhoneContact(ContactFact):
    KIND: ClassVar[ContactKind] = ContactKind.PHONE


@dataclass(slots=True, kw_only=True)
class AddressContact(ContactFact):
    """``value`` holds the first address line."""

    KIND: ClassVar[ContactKind] = ContactKind.ADDRESS

    lines: list[str] = field(default_factory=list[str])
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
