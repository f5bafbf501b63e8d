"""Declarative key-variant table for Sabre GetReservation trees.

Each logical field maps to the raw keys it may appear under, in lookup order:
namespaced first, then bare, then legacy spellings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from travelsync.domain.extraction import (
    as_list,
    as_node,
    attribute,
    lookup,
    lookup_nodes,
    lookup_text,
    text_of,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from travelsync.domain.extraction import FieldMap, Node

STL19: Final[str] = "stl19"
OR114: Final[str] = "or114"

_STL19_FIELDS: Final[tuple[str, ...]] = (
    "AccountingLine",
    "AccountingLines",
    "ActionCode",
    "AdditionalInformation",
    "Address",
    "AddressLine",
    "AddressLines",
    "Addresses",
    "AgentSine",
    "Air",
    "AirlineDesignator",
    "AlreadyTicketed",
    "AmountBeforeTax",
    "APISRequest",
    "ApproximateTotalChargeAmount",
    "ArrivalAirport",
    "ArrivalDateTime",
    "BaseFare",
    "BoardPoint",
    "BookingDetails",
    "ChainCode",
    "CityName",
    "Code",
    "CodeShare",
    "CommissionAmount",
    "ConfId",
    "ConfirmationNumber",
    "CountryCode",
    "CountryOfIssue",
    "CreationAgentID",
    "CreationTimestamp",
    "CurrencyCode",
    "DateOfBirth",
    "DepartureAirport",
    "DepartureDateTime",
    "DOCOEntry",
    "DOCSEntry",
    "DocumentExpirationDate",
    "DocumentNationalityCountry",
    "DocumentNumber",
    "DocumentType",
    "EmailAddress",
    "EmailAddresses",
    "EquipmentType",
    "ETicketNumber",
    "FareApplication",
    "FirstName",
    "FlightNumber",
    "Forename",
    "FormOfPaymentCode",
    "FreeText",
    "Gender",
    "GenericSpecialRequest",
    "GenericSpecialRequests",
    "GetReservationRS",
    "Group",
    "Hotel",
    "HotelCityCode",
    "HotelCode",
    "HotelName",
    "isPast",
    "LastName",
    "LineStatus",
    "LocationCode",
    "MarketingAirlineCode",
    "MarriageGrp",
    "MiddleName",
    "Number",
    "NumberOfConjunctedDocuments",
    "NumberOfUnits",
    "OffPoint",
    "OpenReservationElements",
    "OperatingAirlineCode",
    "Passenger",
    "PassengerName",
    "PassengerReservation",
    "Passengers",
    "PhoneNumber",
    "PhoneNumbers",
    "PickUpDateTime",
    "PickUpLocation",
    "POS",
    "PostalCode",
    "PreReservedSeat",
    "PreReservedSeats",
    "Profile",
    "ProfileID",
    "Profiles",
    "RecordLocator",
    "Remark",
    "RemarkLine",
    "RemarkLines",
    "Remarks",
    "RentalRate",
    "Reservation",
    "ReturnDateTime",
    "ReturnLocation",
    "RoomRates",
    "RoomType",
    "RoomTypeCode",
    "ScheduleChangeIndicator",
    "SeatNumber",
    "Seats",
    "SeatStatusCode",
    "Segment",
    "Segments",
    "Source",
    "SpecialRequests",
    "StateCode",
    "Surname",
    "TaxAmount",
    "Text",
    "TicketDetails",
    "TicketingInfo",
    "TicketNumber",
    "TimeSpanEnd",
    "TimeSpanStart",
    "Timestamp",
    "UpdateTimestamp",
    "VehicleCharges",
    "Vehicle",
    "VendorCode",
)

_OR114_FIELDS: Final[tuple[str, ...]] = (
    "CardCode",
    "CardNumber",
    "ExpiryMonth",
    "ExpiryYear",
    "FormOfPayment",
    "OpenReservationElement",
    "PaymentCard",
)

_ALIASES: Final[dict[str, tuple[str, ...]]] = {
    "FlightNumber": ("MarketingFlightNumber",),
    "ClassOfService": ("ResBookDesigCode",),
    "ProfileType": ("type",),
    # the provider misspells this element
    "TariffBasis": ("TarriffBasis",),
}


def _variants(namespace: str, name: str) -> tuple[str, ...]:
    return (f"{namespace}:{name}", name)


def _build_field_map() -> dict[str, tuple[str, ...]]:
    field_map: dict[str, tuple[str, ...]] = {}
    for name in _STL19_FIELDS:
        field_map[name] = _variants(STL19, name)
    for name in _OR114_FIELDS:
        field_map[name] = _variants(OR114, name)
    for name, legacy in _ALIASES.items():
        base = field_map.get(name, _variants(STL19, name))
        legacy_variants = tuple(
            variant for alias in legacy for variant in _variants(STL19, alias)
        )
        field_map[name] = base + legacy_variants
    return field_map


SABRE_FIELDS: Final[FieldMap] = _build_field_map()

RESERVATION_PATHS: Final[tuple[tuple[str, ...], ...]] = (
    ("GetReservationRS", "Reservation"),
    ("rawData", "Envelope", "Body", "GetReservationRS", "Reservation"),
    ("Envelope", "Body", "GetReservationRS", "Reservation"),
    ("Reservation",),
)

SEGMENTS_PATHS: Final[tuple[tuple[str, ...], ...]] = (
    ("PassengerReservation", "Segments", "Segment"),
    ("Segments", "Segment"),
)


def value(node: Node | None, field: str) -> object | None:
    return lookup(node, field, SABRE_FIELDS)


def read(node: Node | None, field: str) -> str | None:
    """Read ``field`` as element text, falling back to an attribute of that name."""

    if node is None:
        return None
    text = lookup_text(node, field, SABRE_FIELDS)
    if text is None:
        text = attribute(node, *SABRE_FIELDS.get(field, (field,)))
    return text


def nodes(node: Node | None, *path: str) -> list[Node]:
    return lookup_nodes(node, path, SABRE_FIELDS)


def first_nodes(node: Node | None, *paths: Sequence[str]) -> list[Node]:
    """Nodes at the first of ``paths`` that yields any."""

    for path in paths:
        found = lookup_nodes(node, path, SABRE_FIELDS)
        if found:
            return found
    return []


def texts_at(node: Node | None, *path: str, text_field: str = "Text") -> list[str]:
    """Text of every element at ``path``, whether bare, wrapped, or under ``text_field``."""

    *parents, leaf = path
    holders = lookup_nodes(node, parents, SABRE_FIELDS) if parents else ([node] if node else [])
    texts: list[str] = []
    for holder in holders:
        for item in as_list(lookup(holder, leaf, SABRE_FIELDS)):
            text = read(as_node(item), text_field) or text_of(item)
            if text:
                texts.append(text)
    return texts
