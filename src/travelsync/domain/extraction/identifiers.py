"""Attribute contact facts to passengers.

Providers tag reservation-level contact facts with any subset of four passenger
reference attributes. A fact is attributed to a passenger when one of its
references equals the passenger's identifier of the same scheme
(``nameRefNumber`` is compared against the passenger's primary identifier).
Facts carrying no reference at all are shared: they go to every passenger that
does not already hold a fact of the same declared type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from travelsync.domain.model import (
    AddressContact,
    AssociationBasis,
    ContactFact,
    ContactKind,
    EmailContact,
    PhoneContact,
)

from .raw import attribute

if TYPE_CHECKING:
    from collections.abc import Sequence

    from travelsync.domain.model import Passenger, PassengerIdentity

    from .raw import Node

log = logging.getLogger(__name__)

NAME_REF_NUMBER_KEYS = ("nameRefNumber", "NameRefNumber", "stl19:NameRefNumber")
NAME_NUMBER_KEYS = ("nameNumber", "NameNumber", "stl19:NameNumber")
NAME_ID_KEYS = ("nameId", "NameId", "stl19:NameId")
NAME_ASSOC_ID_KEYS = ("nameAssocId", "NameAssocId", "stl19:NameAssocId")


@dataclass(frozen=True, slots=True, kw_only=True)
class ContactReferences:
    """Passenger references carried by one contact fact."""

    name_ref_number: str | None = None
    name_number: str | None = None
    name_id: str | None = None
    name_assoc_id: str | None = None

    @classmethod
    def from_node(cls, node: Node) -> ContactReferences:
        return cls(
            name_ref_number=attribute(node, *NAME_REF_NUMBER_KEYS),
            name_number=attribute(node, *NAME_NUMBER_KEYS),
            name_id=attribute(node, *NAME_ID_KEYS),
            name_assoc_id=attribute(node, *NAME_ASSOC_ID_KEYS),
        )

    @property
    def is_anonymous(self) -> bool:
        return not (self.name_ref_number or self.name_number or self.name_id or self.name_assoc_id)


def _equal(left: str | None, right: str | None) -> bool:
    return bool(left) and left == right


def references_match(references: ContactReferences, identity: PassengerIdentity) -> bool:
    return (
        _equal(references.name_ref_number, identity.primary)
        or _equal(references.name_number, identity.name_number)
        or _equal(references.name_id, identity.name_id)
        or _equal(references.name_assoc_id, identity.name_assoc_id)
    )


def resolve_association(
    references: ContactReferences, identity: PassengerIdentity
) -> AssociationBasis | None:
    """Return how a fact relates to a passenger, or ``None`` when it belongs elsewhere."""

    if references.is_anonymous:
        return AssociationBasis.IMPLICIT_SHARED
    if references_match(references, identity):
        return AssociationBasis.EXPLICIT_MATCH
    return None


def _facts_of(passenger: Passenger, kind: ContactKind) -> list[ContactFact]:
    match kind:
        case ContactKind.EMAIL:
            return list(passenger.emails)
        case ContactKind.PHONE:
            return list(passenger.phones)
        case ContactKind.ADDRESS:
            return list(passenger.addresses)


def _append(passenger: Passenger, fact: ContactFact) -> None:
    if isinstance(fact, EmailContact):
        passenger.emails.append(fact)
    elif isinstance(fact, PhoneContact):
        passenger.phones.append(fact)
    elif isinstance(fact, AddressContact):
        passenger.addresses.append(fact)
    else:
        raise TypeError(f"Unsupported contact fact: {type(fact).__name__}")


def _holds_value(passenger: Passenger, fact: ContactFact) -> bool:
    key = fact.dedup_key
    return any(existing.dedup_key == key for existing in _facts_of(passenger, fact.kind))


def _holds_type(passenger: Passenger, fact: ContactFact) -> bool:
    if fact.type is None:
        return False
    return any(
        existing.type == fact.type and existing.basis is not AssociationBasis.IMPLICIT_SHARED
        for existing in _facts_of(passenger, fact.kind)
    )


@dataclass(slots=True)
class ContactAssigner:
    """Collects contact facts for a passenger list in document order.

    Direct and explicitly matched facts are attached immediately; shared facts are
    held back until :meth:`finish` so every passenger's own facts are known first.
    """

    passengers: Sequence[Passenger]
    _shared: list[ContactFact] = field(default_factory=list[ContactFact])

    def attach_direct(self, passenger: Passenger, fact: ContactFact) -> bool:
        return self._attach(passenger, fact, AssociationBasis.DIRECT)

    def attach(self, fact: ContactFact, references: ContactReferences) -> Passenger | None:
        """Attach a reservation-level fact; returns the owning passenger if matched."""

        if references.is_anonymous:
            self._shared.append(fact)
            return None
        for passenger in self.passengers:
            if references_match(references, passenger.identity):
                self._attach(passenger, fact, AssociationBasis.EXPLICIT_MATCH)
                return passenger
        log.debug("No passenger matches %s fact %r (%s)", fact.kind, fact.value, references)
        return None

    def finish(self) -> None:
        shared, self._shared = self._shared, []
        for fact in shared:
            for passenger in self.passengers:
                if _holds_type(passenger, fact):
                    continue
                self._attach(passenger, fact, AssociationBasis.IMPLICIT_SHARED)

    def _attach(self, passenger: Passenger, fact: ContactFact, basis: AssociationBasis) -> bool:
        if _holds_value(passenger, fact):
            return False
        _append(passenger, replace(fact, basis=basis, owner=passenger.primary_identifier))
        return True
