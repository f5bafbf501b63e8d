from __future__ import annotations

from datetime import datetime

from travelsync.domain.model import BookingInfo, CanonicalReservation, FlightSegment, Seat
from travelsync.domain.validation import seat_summary, validate_seat_assignments


def reservation(*flights: FlightSegment) -> CanonicalReservation:
    return CanonicalReservation(booking=BookingInfo(record_locator="ABC123"), flights=list(flights))


def past_flight(*seats: Seat) -> FlightSegment:
    return FlightSegment(
        marketing_airline="KQ",
        flight_number="100",
        departure_airport="NBO",
        arrival_airport="LHR",
        departure_at=datetime(2020, 3, 1, 23, 55),
        is_past=True,
        seats=list(seats),
    )


def upcoming_flight(*seats: Seat) -> FlightSegment:
    return FlightSegment(
        marketing_airline="KQ",
        flight_number="101",
        departure_airport="LHR",
        arrival_airport="NBO",
        departure_at=datetime(2030, 3, 5, 20, 0),
        seats=list(seats),
    )


def test_past_flight_without_seat_is_an_issue() -> None:
    report = validate_seat_assignments(reservation(past_flight()))

    assert report.valid is False
    assert report.issues == [
        "Flight KQ100 (NBO-LHR) departed on 2020-03-01 but has no confirmed seat assignment"
    ]
    assert report.recommendations == [
        "Retrieve the boarding pass or contact KQ for the actual seat on flight 100"
    ]


def test_unassigned_placeholder_seat_does_not_count() -> None:
    report = validate_seat_assignments(reservation(past_flight(Seat(seat_number="0"))))

    assert len(report.issues) == 1


def test_past_flight_with_only_unconfirmed_seat_is_an_issue() -> None:
    unconfirmed = Seat(seat_number="12A", status="UC")
    report = validate_seat_assignments(reservation(past_flight(unconfirmed)))

    assert len(report.issues) == 1
    assert "no confirmed seat" in report.issues[0]


def test_past_flight_mixing_confirmed_and_unconfirmed_seats() -> None:
    flight = past_flight(
        Seat(seat_number="12A", status="HK"),
        Seat(seat_number="12B", status="UC"),
    )

    report = validate_seat_assignments(reservation(flight))

    assert report.issues == ["Flight KQ100 has unconfirmed seat status despite being in the past"]
    assert report.recommendations == []


def test_upcoming_flight_without_seat_only_gets_a_recommendation() -> None:
    report = validate_seat_assignments(reservation(upcoming_flight()))

    assert report.valid is True
    assert report.recommendations == [
        "Upcoming flight KQ101 (2030-03-05): assign seats via the airline website or at check-in"
    ]


def test_fully_seated_reservation_is_clean() -> None:
    report = validate_seat_assignments(
        reservation(
            past_flight(Seat(seat_number="12A", status="HK")),
            upcoming_flight(Seat(seat_number="14C", status="UC")),
        )
    )

    assert report.valid is True
    assert report.recommendations == []


def test_validation_does_not_mutate_reservation() -> None:
    subject = reservation(past_flight(), upcoming_flight())
    before = repr(subject)

    validate_seat_assignments(subject)

    assert repr(subject) == before


def test_seat_summary_counts_per_flight() -> None:
    flight = past_flight(
        Seat(seat_number="12A", status="HK"),
        Seat(seat_number="12B", status="UC"),
        Seat(seat_number="0"),
    )

    (summary,) = seat_summary(reservation(flight))

    assert (summary.flight, summary.assigned, summary.unconfirmed, summary.unassigned) == (
        "KQ100",
        1,
        1,
        1,
    )
