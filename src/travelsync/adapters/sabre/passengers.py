"""Passengers and the contact facts, documents, seats and tickets they own.

Contact facts come from four places: nested under the passenger (direct),
reservation-level contact lists and special service requests carrying passenger
references (explicit match or shared), and invoice remarks (shared).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from travelsync.domain.extraction import (
    ContactAssigner,
    ContactReferences,
    attribute,
    extract_family,
    text_of,
)
from travelsync.domain.extraction.identifiers import (
    NAME_ASSOC_ID_KEYS,
    NAME_ID_KEYS,
    NAME_NUMBER_KEYS,
)
from travelsync.domain.model import (
    AddressContact,
    AssociationBasis,
    EmailContact,
    Passenger,
    PassengerIdentity,
    PhoneContact,
    Passport,
    Seat,
    Ticket,
    Visa,
)

from .booking import profile_nodes, select_profile_id
from .dates import parse_date
from .fields import first_nodes, nodes, read, texts_at
from .markers import (
    CLIQ_USER_EMAIL_RE,
    CLIQ_USER_PREFIX,
    CONTACT_EMAIL_SSR,
    CONTACT_MOBILE_SSR,
    EMAIL_RE,
    INVOICE_EMAIL_RE,
    INVOICE_REMARK_TYPE,
    MOBILE_RE,
    PASSPORT_DOCUMENT_TYPE,
    VISA_RE,
    decode_email,
)
from .names import parse_name, split_given_name

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from travelsync.domain.extraction import Node
    from travelsync.domain.model import ContactFact, Remark

log = logging.getLogger(__name__)

type FactBuilder = Callable[[Node], ContactFact | None]

DEFAULT_CONTACT_TYPE = "O"
MOBILE_PHONE_TYPE = "C"
SSR_EMAIL_TYPE = "CTCE"


def passenger_nodes(root: Node) -> list[Node]:
    return first_nodes(
        root, ("PassengerReservation", "Passengers", "Passenger"), ("Passengers", "Passenger")
    )


def passenger_identity(node: Node) -> PassengerIdentity:
    return PassengerIdentity(
        id=attribute(node, "id"),
        name_id=attribute(node, *NAME_ID_KEYS),
        name_assoc_id=attribute(node, *NAME_ASSOC_ID_KEYS),
        name_number=attribute(node, *NAME_NUMBER_KEYS),
    )


def _names(node: Node) -> tuple[str | None, str | None, str | None]:
    last = read(node, "LastName")
    first, title = split_given_name(read(node, "FirstName"))
    if first is None and last and "/" in last:
        parsed = parse_name(last)
        return parsed.first, parsed.last, parsed.title
    return first, last, title


def email_fact(node: Node) -> EmailContact | None:
    address = read(node, "Address") or text_of(node)
    if not address:
        return None
    return EmailContact(value=decode_email(address).lower(), type=attribute(node, "type", "Type"))


def phone_fact(node: Node) -> PhoneContact | None:
    raw = read(node, "Number") or text_of(node)
    if not raw:
        return None
    parts = [part.strip() for part in raw.split("-")]
    kind = parts[-1] if len(parts) > 1 and parts[-1] else DEFAULT_CONTACT_TYPE
    return PhoneContact(value=parts[0], type=kind)


def address_fact(node: Node) -> AddressContact | None:
    lines = texts_at(node, "AddressLines", "AddressLine")
    if not lines:
        return None
    return AddressContact(
        value=lines[0],
        type=attribute(node, "type", "Type") or DEFAULT_CONTACT_TYPE,
        lines=lines,
        city=read(node, "CityName"),
        state=read(node, "StateCode"),
        postal_code=read(node, "PostalCode"),
        country=read(node, "CountryCode"),
    )


def ssr_fact(node: Node) -> ContactFact | None:
    """Contact fact from a ``CTCE``/``CTCM`` special service request, if it is one."""

    code = (read(node, "Code") or "").upper()
    text = read(node, "FreeText")
    if not text:
        return None
    if code == CONTACT_EMAIL_SSR:
        match = EMAIL_RE.search(decode_email(text))
        return EmailContact(value=match.group(1).lower(), type=SSR_EMAIL_TYPE) if match else None
    if code == CONTACT_MOBILE_SSR:
        match = MOBILE_RE.search(text)
        return PhoneContact(value=match.group(1), type=MOBILE_PHONE_TYPE) if match else None
    return None


def special_request_nodes(node: Node) -> list[Node]:
    return [
        *nodes(node, "SpecialRequests", "GenericSpecialRequest"),
        *nodes(node, "GenericSpecialRequests"),
    ]


def extract_passports(node: Node) -> list[Passport]:
    passports: list[Passport] = []
    for entry in nodes(node, "SpecialRequests", "APISRequest", "DOCSEntry"):
        if (read(entry, "DocumentType") or "").upper() != PASSPORT_DOCUMENT_TYPE:
            continue
        number = read(entry, "DocumentNumber")
        if not number:
            continue
        passports.append(
            Passport(
                number=number,
                issuing_country=read(entry, "CountryOfIssue"),
                nationality=read(entry, "DocumentNationalityCountry"),
                expiry_date=parse_date(read(entry, "DocumentExpirationDate")),
                birth_date=parse_date(read(entry, "DateOfBirth")),
                gender=read(entry, "Gender"),
                surname=read(entry, "Surname"),
                given_name=read(entry, "Forename"),
                middle_name=read(entry, "MiddleName"),
            )
        )
    return passports


def parse_visa(text: str | None) -> Visa | None:
    """Parse ``/V/<number>/<issuer>//<applicable>//<expiry>``; anything else is no visa."""

    if not text:
        return None
    match = VISA_RE.search(text)
    if match is None:
        return None
    number, issuer, applicable, expiry = match.groups()
    return Visa(number=number, issuing_country=issuer, applicable_country=applicable, expiry=expiry)


def extract_visas(node: Node) -> list[Visa]:
    entries = nodes(node, "SpecialRequests", "APISRequest", "DOCOEntry")
    return [visa for entry in entries if (visa := parse_visa(read(entry, "FreeText")))]


def seat_from(node: Node, *, passenger: str | None = None) -> Seat:
    number = read(node, "SeatNumber")
    return Seat(
        seat_number=number.strip() if number else None,
        status=read(node, "SeatStatusCode"),
        board_point=read(node, "BoardPoint"),
        off_point=read(node, "OffPoint"),
        passenger=passenger or attribute(node, *NAME_NUMBER_KEYS),
    )


def extract_tickets(node: Node) -> list[Ticket]:
    tickets: list[Ticket] = []
    for detail in nodes(node, "TicketingInfo", "TicketDetails"):
        number = read(detail, "TicketNumber")
        if not number:
            continue
        tickets.append(
            Ticket(
                number=number,
                passenger_name=read(detail, "PassengerName"),
                issued_at=read(detail, "Timestamp"),
                agent_sign=read(detail, "AgentSine"),
            )
        )
    return tickets


def build_passenger(node: Node, reservation_profiles: Sequence[Node]) -> Passenger:
    identity = passenger_identity(node)
    first, last, title = _names(node)
    passenger = Passenger(
        identity=identity,
        first_name=first,
        last_name=last,
        title=title,
        passenger_type=attribute(node, "passengerType", "PassengerType"),
        gds_profile_id=select_profile_id([*profile_nodes(node), *reservation_profiles]),
        passports=extract_passports(node),
        visas=extract_visas(node),
        tickets=extract_tickets(node),
    )
    seat_nodes = nodes(node, "Seats", "PreReservedSeats", "PreReservedSeat")
    passenger.seats = [seat_from(seat, passenger=identity.primary) for seat in seat_nodes]
    return passenger


_CONTACT_SOURCES: Final[tuple[tuple[tuple[str, ...], FactBuilder], ...]] = (
    (("EmailAddresses", "EmailAddress"), email_fact),
    (("PhoneNumbers", "PhoneNumber"), phone_fact),
    (("Addresses", "Address"), address_fact),
)


def contact_sources(holder: Node) -> Iterator[tuple[Node, ContactFact]]:
    """Every contact fact held directly by ``holder``, with the node it came from."""

    for path, build in _CONTACT_SOURCES:
        for node in nodes(holder, *path):
            fact = build(node)
            if fact is not None:
                yield node, fact
    for request in special_request_nodes(holder):
        fact = ssr_fact(request)
        if fact is not None:
            yield request, fact


def _attach_reservation_level(assigner: ContactAssigner, root: Node) -> None:
    for holder in (root, *nodes(root, "PassengerReservation")):
        for source, fact in contact_sources(holder):
            assigner.attach(fact, ContactReferences.from_node(source))


def invoice_emails(remarks: Sequence[Remark]) -> list[str]:
    """Emails from ``*50-`` invoice remarks, then ``CLIQUSER-`` remarks, in order.

    Both only count on invoice remarks; a ``CLIQUSER-`` address must open the text.
    """

    invoice: list[str] = []
    cliq: list[str] = []
    for remark in remarks:
        if remark.type != INVOICE_REMARK_TYPE:
            continue
        invoice.extend(decode_email(m).lower() for m in INVOICE_EMAIL_RE.findall(remark.text))
        if remark.text.startswith(CLIQ_USER_PREFIX):
            cliq.extend(decode_email(m).lower() for m in CLIQ_USER_EMAIL_RE.findall(remark.text))
    return list(dict.fromkeys([*invoice, *cliq]))


def _primary_email(passenger: Passenger, preferred: Sequence[str]) -> str | None:
    held = {email.dedup_key for email in passenger.emails}
    for candidate in preferred:
        if candidate in held:
            return candidate
    for basis in AssociationBasis:
        for email in passenger.emails:
            if email.basis is basis:
                return email.value
    return None


def attach_contacts(root: Node, passengers: Sequence[Passenger], remarks: Sequence[Remark]) -> None:
    assigner = ContactAssigner(passengers)
    for passenger, node in zip(passengers, passenger_nodes(root), strict=True):
        for _, fact in contact_sources(node):
            assigner.attach_direct(passenger, fact)
    _attach_reservation_level(assigner, root)
    preferred = invoice_emails(remarks)
    for address in preferred:
        assigner.attach(EmailContact(value=address, type=INVOICE_REMARK_TYPE), ContactReferences())
    assigner.finish()
    for passenger in passengers:
        passenger.primary_email = _primary_email(passenger, preferred)


def extract_passengers(root: Node, remarks: Sequence[Remark]) -> list[Passenger]:
    profiles = profile_nodes(root)
    passengers = [build_passenger(node, profiles) for node in passenger_nodes(root)]
    extract_family(
        "passenger contacts",
        lambda: attach_contacts(root, passengers, remarks),
        lambda: None,
    )
    log.debug("Extracted %d passengers", len(passengers))
    return passengers
