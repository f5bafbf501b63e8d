"""Advisory data-quality checks over an assembled reservation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from travelsync.domain.model import CanonicalReservation, FlightSegment


@dataclass(slots=True, kw_only=True)
class ValidationReport:
    issues: list[str] = field(default_factory=list[str])
    recommendations: list[str] = field(default_factory=list[str])

    @property
    def valid(self) -> bool:
        return not self.issues


@dataclass(slots=True, kw_only=True)
class SeatSummary:
    flight: str
    assigned: int = 0
    unassigned: int = 0
    unconfirmed: int = 0


def _route(flight: FlightSegment) -> str:
    return f"{flight.departure_airport or '?'}-{flight.arrival_airport or '?'}"


def _departure(flight: FlightSegment) -> str:
    return flight.departure_at.date().isoformat() if flight.departure_at else "unknown date"


def validate_seat_assignments(reservation: CanonicalReservation) -> ValidationReport:
    """Check seat assignments without mutating ``reservation``.

    Past flights need at least one assigned, confirmed seat; otherwise an issue is
    reported. Upcoming flights without any assigned seat only get a recommendation.
    """

    report = ValidationReport()
    for flight in reservation.flights:
        if flight.is_past:
            confirmed = [
                seat for seat in flight.seats if seat.is_assigned and not seat.is_unconfirmed
            ]
            if not confirmed:
                report.issues.append(
                    f"Flight {flight.label} ({_route(flight)}) departed on {_departure(flight)} "
                    "but has no confirmed seat assignment"
                )
                airline = flight.marketing_airline or "the airline"
                report.recommendations.append(
                    f"Retrieve the boarding pass or contact {airline} "
                    f"for the actual seat on flight {flight.flight_number or '?'}"
                )
            elif any(seat.is_unconfirmed for seat in flight.seats):
                report.issues.append(
                    f"Flight {flight.label} has unconfirmed seat status despite being in the past"
                )
            continue

        if not any(seat.is_assigned for seat in flight.seats):
            report.recommendations.append(
                f"Upcoming flight {flight.label} ({_departure(flight)}): "
                "assign seats via the airline website or at check-in"
            )
    return report


def seat_summary(reservation: CanonicalReservation) -> list[SeatSummary]:
    summaries: list[SeatSummary] = []
    for flight in reservation.flights:
        summary = SeatSummary(flight=flight.label)
        for seat in flight.seats:
            if not seat.is_assigned:
                summary.unassigned += 1
            elif seat.is_unconfirmed:
                summary.unconfirmed += 1
            else:
                summary.assigned += 1
        summaries.append(summary)
    return summaries
