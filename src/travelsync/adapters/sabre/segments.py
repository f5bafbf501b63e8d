"""Flight, hotel and car segments."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from travelsync.domain.extraction import as_node, attribute, text_of, to_bool, to_decimal, to_int
from travelsync.domain.model import CarSegment, FlightSegment, HotelSegment

from .dates import ceil_days_between, minutes_between, parse_datetime, rounded_days_between
from .fields import SEGMENTS_PATHS, first_nodes, nodes, read, texts_at, value
from .passengers import seat_from

if TYPE_CHECKING:
    from collections.abc import Sequence

    from travelsync.domain.extraction import Node
    from travelsync.domain.model import Passenger, Seat

log = logging.getLogger(__name__)

DEFAULT_STATUS: Final[str] = "HK"
DEFAULT_CURRENCY: Final[str] = "USD"

AIRLINE_NAMES: Final[dict[str, str]] = {
    "KQ": "Kenya Airways",
    "AA": "American Airlines",
    "UA": "United Airlines",
    "DL": "Delta Air Lines",
    "BA": "British Airways",
    "AF": "Air France",
    "LH": "Lufthansa",
    "EK": "Emirates",
    "QR": "Qatar Airways",
    "ET": "Ethiopian Airlines",
    "TK": "Turkish Airlines",
}

EQUIPMENT_NAMES: Final[dict[str, str]] = {
    "73H": "Boeing 737-800",
    "738": "Boeing 737-800",
    "77W": "Boeing 777-300ER",
    "789": "Boeing 787-9",
    "32A": "Airbus A320",
    "32B": "Airbus A321",
    "359": "Airbus A350-900",
    "388": "Airbus A380-800",
}


def segment_nodes(root: Node) -> list[Node]:
    return first_nodes(root, *SEGMENTS_PATHS)


def _sequence(segment: Node, detail: Node) -> str | None:
    return attribute(segment, "sequence", "id") or attribute(detail, "sequence", "id")


def _is_past(segment: Node, detail: Node) -> bool:
    return to_bool(read(detail, "isPast")) or to_bool(attribute(segment, "isPast"))


def build_flight(segment: Node, air: Node) -> FlightSegment:
    departure = parse_datetime(read(air, "DepartureDateTime"))
    arrival = parse_datetime(read(air, "ArrivalDateTime"))
    marketing = read(air, "MarketingAirlineCode")
    equipment = read(air, "EquipmentType")
    marriage = as_node(value(air, "MarriageGrp"))
    seats = nodes(air, "Seats", "PreReservedSeats", "PreReservedSeat")
    return FlightSegment(
        segment_number=_sequence(segment, air),
        marketing_airline=marketing,
        marketing_airline_name=AIRLINE_NAMES.get(marketing or ""),
        operating_airline=read(air, "OperatingAirlineCode"),
        flight_number=read(air, "FlightNumber"),
        departure_airport=read(air, "DepartureAirport"),
        arrival_airport=read(air, "ArrivalAirport"),
        departure_at=departure,
        arrival_at=arrival,
        duration_minutes=minutes_between(departure, arrival),
        class_of_service=read(air, "ClassOfService"),
        status=read(air, "ActionCode") or DEFAULT_STATUS,
        equipment=equipment,
        equipment_name=EQUIPMENT_NAMES.get(equipment or ""),
        marriage_group=read(marriage, "Group") if marriage else read(air, "MarriageGrp"),
        is_code_share=to_bool(read(air, "CodeShare")),
        is_past=_is_past(segment, air),
        schedule_changed=to_bool(read(air, "ScheduleChangeIndicator")),
        seats=[seat_from(seat) for seat in seats],
    )


def extract_flights(root: Node) -> list[FlightSegment]:
    flights: list[FlightSegment] = []
    for segment in segment_nodes(root):
        for air in nodes(segment, "Air"):
            flights.append(build_flight(segment, air))
    return flights


def _matches(seat: Seat, flight: FlightSegment) -> bool:
    return (
        seat.board_point is not None
        and seat.board_point == flight.departure_airport
        and seat.off_point == flight.arrival_airport
    )


def attach_passenger_seats(
    flights: Sequence[FlightSegment], passengers: Sequence[Passenger]
) -> None:
    """Give flights without their own seat list the passenger seats for their route."""

    for flight in flights:
        if flight.seats:
            continue
        flight.seats = [
            seat for passenger in passengers for seat in passenger.seats if _matches(seat, flight)
        ]
        if flight.seats:
            log.debug("Attached %d passenger seat(s) to flight %s", len(flight.seats), flight.label)


def build_hotel(segment: Node, hotel: Node) -> HotelSegment:
    reservation = as_node(value(hotel, "Reservation")) or hotel
    info = as_node(value(hotel, "AdditionalInformation")) or as_node(
        value(reservation, "AdditionalInformation")
    )
    address = as_node(value(info, "Address")) if info else None
    room_type = as_node(value(reservation, "RoomType"))
    rates = as_node(value(reservation, "RoomRates"))
    check_in = parse_datetime(read(reservation, "TimeSpanStart"))
    check_out = parse_datetime(read(reservation, "TimeSpanEnd"))
    return HotelSegment(
        segment_number=_sequence(segment, hotel),
        name=read(reservation, "HotelName"),
        chain_code=read(reservation, "ChainCode"),
        hotel_code=read(reservation, "HotelCode"),
        city_code=read(reservation, "HotelCityCode"),
        address=texts_at(info, "Address", "AddressLine") if info else [],
        country=read(address, "CountryCode") or read(info, "CountryCode"),
        confirmation_number=read(info, "ConfirmationNumber"),
        check_in=check_in,
        check_out=check_out,
        nights=rounded_days_between(check_in, check_out),
        room_type=read(room_type, "RoomTypeCode"),
        number_of_units=to_int(read(room_type, "NumberOfUnits")),
        rate=to_decimal(read(rates, "AmountBeforeTax")),
        currency=read(rates, "CurrencyCode") or DEFAULT_CURRENCY,
        status=read(reservation, "LineStatus") or read(hotel, "LineStatus") or DEFAULT_STATUS,
        is_past=_is_past(segment, hotel),
    )


def extract_hotels(root: Node) -> list[HotelSegment]:
    hotels: list[HotelSegment] = []
    for segment in segment_nodes(root):
        for hotel in nodes(segment, "Hotel"):
            hotels.append(build_hotel(segment, hotel))
    return hotels


def _location(vehicle: Node, field: str) -> str | None:
    raw = value(vehicle, field)
    node = as_node(raw)
    if node is not None:
        return read(node, "LocationCode") or text_of(node)
    return text_of(raw)


def build_car(segment: Node, vehicle: Node) -> CarSegment:
    pickup = parse_datetime(read(vehicle, "PickUpDateTime"))
    dropoff = parse_datetime(read(vehicle, "ReturnDateTime"))
    charges = nodes(vehicle, "RentalRate", "VehicleCharges")
    total = read(charges[0], "ApproximateTotalChargeAmount") if charges else None
    return CarSegment(
        segment_number=_sequence(segment, vehicle),
        vendor_code=read(vehicle, "VendorCode"),
        confirmation_number=read(vehicle, "ConfId"),
        pickup_location=_location(vehicle, "PickUpLocation"),
        return_location=_location(vehicle, "ReturnLocation"),
        pickup_at=pickup,
        return_at=dropoff,
        rental_days=ceil_days_between(pickup, dropoff),
        approximate_total=to_decimal(total),
        status=read(vehicle, "LineStatus") or DEFAULT_STATUS,
        is_past=_is_past(segment, vehicle),
    )


def extract_cars(root: Node) -> list[CarSegment]:
    cars: list[CarSegment] = []
    for segment in segment_nodes(root):
        for vehicle in nodes(segment, "Vehicle"):
            cars.append(build_car(segment, vehicle))
    return cars
