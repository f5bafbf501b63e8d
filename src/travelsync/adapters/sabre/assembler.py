"""Compose per-family extractor output into one canonical reservation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from travelsync.domain.extraction import (
    ReservationNotFoundError,
    as_node,
    classify_document,
    extract_family,
    lookup_path,
)
from travelsync.domain.model import (
    BookingInfo,
    CanonicalReservation,
    PricingSummary,
    TripSummary,
)

from .accounting import (
    extract_accounting_lines,
    extract_authorizations,
    extract_payment_cards,
    summarize_pricing,
)
from .booking import derive_status, extract_booking
from .fields import RESERVATION_PATHS, SABRE_FIELDS, value
from .passengers import extract_passengers
from .remarks import extract_remarks
from .segments import attach_passenger_seats, extract_cars, extract_flights, extract_hotels
from .trip import build_trip_summary

if TYPE_CHECKING:
    from travelsync.domain.extraction import Node

log = logging.getLogger(__name__)


def locate_reservation(tree: Node) -> Node:
    """Find the reservation element, or raise :class:`ReservationNotFoundError`."""

    for path in RESERVATION_PATHS:
        node = as_node(lookup_path(tree, path, SABRE_FIELDS))
        if node is not None:
            return node
    if value(tree, "BookingDetails") is not None:
        return tree
    raise ReservationNotFoundError("Document contains no recognizable reservation")


def completeness_score(reservation: CanonicalReservation) -> int:
    passengers = reservation.passengers
    checks = (
        reservation.booking.record_locator is not None,
        reservation.booking.created_at is not None,
        bool(passengers),
        any(passenger.emails for passenger in passengers),
        any(passenger.phones for passenger in passengers),
        bool(reservation.flights or reservation.hotels or reservation.cars),
        reservation.trip.origin is not None,
        reservation.trip.destination is not None,
    )
    return round(sum(checks) / len(checks) * 100)


def assemble_reservation(document: object) -> CanonicalReservation:
    """Build a :class:`CanonicalReservation` from any accepted raw input shape.

    Each family is extracted in isolation; a failing family leaves its slot empty
    and is logged. Only an unreadable input or a missing reservation root raises.
    """

    root = locate_reservation(classify_document(document).tree)

    remarks = extract_family("remarks", lambda: extract_remarks(root), list)
    booking = extract_family("booking", lambda: extract_booking(root, remarks), BookingInfo)
    passengers = extract_family("passengers", lambda: extract_passengers(root, remarks), list)
    flights = extract_family("flights", lambda: extract_flights(root), list)
    hotels = extract_family("hotels", lambda: extract_hotels(root), list)
    cars = extract_family("cars", lambda: extract_cars(root), list)
    accounting = extract_family("accounting", lambda: extract_accounting_lines(root), list)
    pricing = extract_family(
        "pricing", lambda: summarize_pricing(accounting, remarks), PricingSummary
    )
    payments = extract_family("payments", lambda: extract_payment_cards(root), list)
    authorizations = extract_family(
        "authorizations", lambda: extract_authorizations(remarks), list
    )

    attach_passenger_seats(flights, passengers)
    booking.status = derive_status(
        is_ticketed=booking.is_ticketed, flights=flights, hotels=hotels, cars=cars
    )
    trip = extract_family(
        "trip summary",
        lambda: build_trip_summary(
            booking=booking,
            passengers=passengers,
            flights=flights,
            hotels=hotels,
            cars=cars,
            remarks=remarks,
        ),
        TripSummary,
    )

    reservation = CanonicalReservation(
        booking=booking,
        passengers=passengers,
        flights=flights,
        hotels=hotels,
        cars=cars,
        accounting=accounting,
        pricing=pricing,
        payments=payments,
        authorizations=authorizations,
        remarks=remarks,
        trip=trip,
    )
    reservation.completeness_score = completeness_score(reservation)
    log.info(
        "Assembled reservation %s: %d passengers, %d flights, %d hotels, %d cars",
        booking.record_locator,
        len(passengers),
        len(flights),
        len(hotels),
        len(cars),
    )
    return reservation
