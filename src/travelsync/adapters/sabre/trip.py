"""Trip summary derived from segments and agency remarks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from travelsync.domain.model import Approval, CarSummary, HotelSummary, TripSummary

from .dates import ceil_days_between
from .markers import (
    APPROVAL_COMPLETE_MARKER,
    APPROVAL_DATE_RE,
    APPROVER_MARKER,
    CAR_PURPOSE_MARKER,
    HOTEL_PURPOSE_MARKER,
    NO_APPROVAL_MARKER,
    POLICY_VIOLATION_MARKERS,
    TRIP_NAME_PREFIX,
    TRIP_NUMBER_PREFIX,
)
from .remarks import any_containing, first_containing

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from travelsync.domain.model import (
        BookingInfo,
        CarSegment,
        FlightSegment,
        HotelSegment,
        Passenger,
        Remark,
    )

DEFAULT_TRIP_NAME = "Business Trip"


def _distinct(values: Iterable[str | None]) -> list[str]:
    return list(dict.fromkeys(value for value in values if value))


def _after_prefix(remarks: Sequence[Remark], prefix: str) -> str | None:
    text = first_containing(remarks, prefix)
    if text is None:
        return None
    return text.partition(prefix)[2].strip() or None


def _dash_field(text: str | None) -> str | None:
    """Second ``-``-separated field: ``"*35-LEISURE"`` -> ``"LEISURE"``."""

    if text is None:
        return None
    parts = text.split("-")
    if len(parts) < 2:
        return None
    return parts[1].strip() or None


def trip_name(remarks: Sequence[Remark], passengers: Sequence[Passenger]) -> str:
    named = _after_prefix(remarks, TRIP_NAME_PREFIX)
    if named:
        return named
    if passengers and passengers[0].full_name:
        return f"Trip for {passengers[0].full_name}"
    return DEFAULT_TRIP_NAME


def approval(remarks: Sequence[Remark]) -> Approval:
    approved = first_containing(remarks, APPROVAL_COMPLETE_MARKER)
    approved_on = APPROVAL_DATE_RE.search(approved) if approved else None
    return Approval(
        required=not any_containing(remarks, NO_APPROVAL_MARKER),
        approver=_dash_field(first_containing(remarks, APPROVER_MARKER)),
        approved_on=approved_on.group(0) if approved_on else None,
    )


def build_trip_summary(
    *,
    booking: BookingInfo,
    passengers: Sequence[Passenger],
    flights: Sequence[FlightSegment],
    hotels: Sequence[HotelSegment],
    cars: Sequence[CarSegment],
    remarks: Sequence[Remark],
) -> TripSummary:
    first = flights[0] if flights else None
    last = flights[-1] if flights else None
    departure = first.departure_at if first else None
    return_at = last.arrival_at if last else None
    flight_points = (
        point for flight in flights for point in (flight.departure_airport, flight.arrival_airport)
    )
    car_points = (point for car in cars for point in (car.pickup_location, car.return_location))
    cities = _distinct([*flight_points, *(hotel.city_code for hotel in hotels), *car_points])
    return TripSummary(
        trip_name=trip_name(remarks, passengers),
        trip_number=_after_prefix(remarks, TRIP_NUMBER_PREFIX),
        origin=first.departure_airport if first else None,
        destination=last.arrival_airport if last else None,
        departure_at=departure,
        return_at=return_at,
        duration_days=ceil_days_between(departure, return_at),
        cities=cities,
        countries=_distinct(hotel.country for hotel in hotels),
        is_round_trip=(
            first is not None
            and last is not None
            and len(flights) >= 2
            and first.departure_airport is not None
            and first.departure_airport == last.arrival_airport
        ),
        is_multi_city=len(cities) > 2,
        is_international=booking.is_international,
        hotels=HotelSummary(
            total_nights=sum(hotel.nights or 0 for hotel in hotels),
            count=len(hotels),
            cities=_distinct(hotel.city_code for hotel in hotels),
        ),
        cars=CarSummary(
            total_days=sum(car.rental_days or 0 for car in cars),
            count=len(cars),
            vendors=_distinct(car.vendor_code for car in cars),
        ),
        hotel_purpose=_dash_field(first_containing(remarks, HOTEL_PURPOSE_MARKER)),
        car_purpose=_dash_field(first_containing(remarks, CAR_PURPOSE_MARKER)),
        approval=approval(remarks),
        in_policy=not any_containing(remarks, *POLICY_VIOLATION_MARKERS),
    )
