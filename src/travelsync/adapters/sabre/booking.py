"""Booking-level facts: locator, agency, ticketing, queues, profiles, status."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from travelsync.domain.extraction import as_list, as_node, attribute, text_of, to_int
from travelsync.domain.model import BookingInfo, BookingStatus, QueuePlacement

from .dates import parse_datetime
from .fields import first_nodes, nodes, read, value
from .markers import (
    CANCELLED_STATUS_CODES,
    INTERNATIONAL_REMARK,
    QUEUE_MARKERS,
    QUEUE_RE,
    TICKET_NUMBER_RE,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from travelsync.domain.extraction import Node
    from travelsync.domain.model import CarSegment, FlightSegment, HotelSegment, Remark

log = logging.getLogger(__name__)

TRAVELER_PROFILE: Final[str] = "TVL"
CORPORATE_PROFILE: Final[str] = "CRP"
AGENCY_PROFILE: Final[str] = "AGY"
PROFILE_PRIORITY: Final[tuple[str, ...]] = (TRAVELER_PROFILE, CORPORATE_PROFILE, AGENCY_PROFILE)


def _profile_type(node: Node) -> str | None:
    kind = read(node, "ProfileType")
    return kind.upper() if kind else None


def _profile_id(node: Node) -> str | None:
    return read(node, "ProfileID") or attribute(node, "id", "profileId")


def profile_nodes(node: Node) -> list[Node]:
    return nodes(node, "Profiles", "Profile")


def select_profile_id(profiles: Iterable[Node]) -> str | None:
    """Pick the GDS profile id: traveler, then corporate, then agency, then any."""

    candidates = [(_profile_type(node), _profile_id(node)) for node in profiles]
    candidates = [(kind, profile_id) for kind, profile_id in candidates if profile_id]
    for wanted in PROFILE_PRIORITY:
        for kind, profile_id in candidates:
            if kind == wanted:
                return profile_id
    return candidates[0][1] if candidates else None


def corporate_id(profiles: Iterable[Node]) -> str | None:
    for node in profiles:
        if _profile_type(node) == CORPORATE_PROFILE:
            return _profile_id(node)
    return None


def ticketing_nodes(root: Node) -> list[Node]:
    return first_nodes(root, ("PassengerReservation", "TicketingInfo"), ("TicketingInfo",))


def extract_ticket_numbers(root: Node) -> list[str]:
    numbers: list[str] = []
    for info in ticketing_nodes(root):
        for raw in as_list(value(info, "ETicketNumber")):
            text = text_of(raw)
            if text is None:
                continue
            for number in TICKET_NUMBER_RE.findall(text):
                if number not in numbers:
                    numbers.append(number)
    return numbers


def is_already_ticketed(root: Node) -> bool:
    return any(value(info, "AlreadyTicketed") is not None for info in ticketing_nodes(root))


def extract_queues(remarks: Sequence[Remark]) -> list[QueuePlacement]:
    queues: list[QueuePlacement] = []
    for remark in remarks:
        if not any(marker in remark.text for marker in QUEUE_MARKERS):
            continue
        match = QUEUE_RE.search(remark.text)
        if match is None:
            log.debug("Queue remark without queue reference: %r", remark.text)
            continue
        queues.append(QueuePlacement(pseudo_city_code=match.group(1), queue_number=match.group(2)))
    return queues


def extract_booking(root: Node, remarks: Sequence[Remark]) -> BookingInfo:
    details = as_node(value(root, "BookingDetails"))
    source = next(iter(nodes(root, "POS", "Source")), None)
    profiles = profile_nodes(root)
    ticket_numbers = extract_ticket_numbers(root)
    number_in_party = attribute(root, "numberInParty", "NumberInParty")

    return BookingInfo(
        record_locator=read(details, "RecordLocator") or read(root, "RecordLocator"),
        created_at=parse_datetime(read(details, "CreationTimestamp")),
        agent_sign=read(details, "CreationAgentID") or attribute(source, "AgentSine"),
        pseudo_city_code=attribute(source, "PseudoCityCode"),
        owning_pseudo_city_code=attribute(source, "HomePseudoCityCode"),
        number_in_party=to_int(number_in_party),
        gds_profile_id=select_profile_id(profiles),
        corporate_id=corporate_id(profiles),
        is_ticketed=is_already_ticketed(root) or bool(ticket_numbers),
        ticket_numbers=ticket_numbers,
        is_international=any(remark.text.strip() == INTERNATIONAL_REMARK for remark in remarks),
        queues=extract_queues(remarks),
    )


def derive_status(
    *,
    is_ticketed: bool,
    flights: Sequence[FlightSegment],
    hotels: Sequence[HotelSegment],
    cars: Sequence[CarSegment],
) -> BookingStatus:
    """Ticketed wins over past, past over cancelled; otherwise booked."""

    if is_ticketed:
        return BookingStatus.TICKETED
    segments: list[FlightSegment | HotelSegment | CarSegment] = [*flights, *hotels, *cars]
    if any(segment.is_past for segment in segments):
        return BookingStatus.COMPLETED
    if any(segment.status in CANCELLED_STATUS_CODES for segment in segments):
        return BookingStatus.CANCELLED
    return BookingStatus.BOOKED
