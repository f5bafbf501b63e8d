"""Canonical reservation documents.

These are ephemeral: built fresh on every ingestion call from a raw provider
tree and never persisted as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from travelsync.domain.model.contact import AddressContact, EmailContact, PhoneContact
from travelsync.domain.model.enums import BookingStatus

UNASSIGNED_SEAT = "0"
UNCONFIRMED_SEAT_STATUS = "UC"


@dataclass(slots=True, kw_only=True)
class QueuePlacement:
    queue_number: str
    pseudo_city_code: str


@dataclass(slots=True, kw_only=True)
class BookingInfo:
    record_locator: str | None = None
    created_at: datetime | None = None
    agent_sign: str | None = None
    pseudo_city_code: str | None = None
    owning_pseudo_city_code: str | None = None
    number_in_party: int | None = None
    gds_profile_id: str | None = None
    corporate_id: str | None = None
    status: BookingStatus = BookingStatus.BOOKED
    is_ticketed: bool = False
    ticket_numbers: list[str] = field(default_factory=list[str])
    is_international: bool = False
    queues: list[QueuePlacement] = field(default_factory=list[QueuePlacement])


@dataclass(frozen=True, slots=True, kw_only=True)
class PassengerIdentity:
    """The four competing identifier schemes a provider uses for one passenger."""

    id: str | None = None
    name_id: str | None = None
    name_assoc_id: str | None = None
    name_number: str | None = None

    @property
    def primary(self) -> str | None:
        for candidate in (self.name_number, self.name_assoc_id, self.name_id, self.id):
            if candidate:
                return candidate
        return None


@dataclass(slots=True, kw_only=True)
class Seat:
    seat_number: str | None = None
    status: str | None = None
    board_point: str | None = None
    off_point: str | None = None
    passenger: str | None = None

    @property
    def is_assigned(self) -> bool:
        return bool(self.seat_number) and self.seat_number != UNASSIGNED_SEAT

    @property
    def is_unconfirmed(self) -> bool:
        return self.status == UNCONFIRMED_SEAT_STATUS


@dataclass(slots=True, kw_only=True)
class Passport:
    number: str
    issuing_country: str | None = None
    nationality: str | None = None
    expiry_date: date | None = None
    birth_date: date | None = None
    gender: str | None = None
    surname: str | None = None
    given_name: str | None = None
    middle_name: str | None = None


@dataclass(slots=True, kw_only=True)
class Visa:
    number: str
    issuing_country: str
    applicable_country: str
    expiry: str


@dataclass(slots=True, kw_only=True)
class Ticket:
    number: str
    passenger_name: str | None = None
    issued_at: str | None = None
    agent_sign: str | None = None


@dataclass(slots=True, kw_only=True)
class Passenger:
    identity: PassengerIdentity
    first_name: str | None = None
    last_name: str | None = None
    title: str | None = None
    passenger_type: str | None = None
    gds_profile_id: str | None = None
    primary_email: str | None = None
    emails: list[EmailContact] = field(default_factory=list[EmailContact])
    phones: list[PhoneContact] = field(default_factory=list[PhoneContact])
    addresses: list[AddressContact] = field(default_factory=list[AddressContact])
    passports: list[Passport] = field(default_factory=list[Passport])
    visas: list[Visa] = field(default_factory=list[Visa])
    seats: list[Seat] = field(default_factory=list[Seat])
    tickets: list[Ticket] = field(default_factory=list[Ticket])

    @property
    def primary_identifier(self) -> str | None:
        return self.identity.primary

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


@dataclass(slots=True, kw_only=True)
class FlightSegment:
    segment_number: str | None = None
    marketing_airline: str | None = None
    marketing_airline_name: str | None = None
    operating_airline: str | None = None
    flight_number: str | None = None
    departure_airport: str | None = None
    arrival_airport: str | None = None
    departure_at: datetime | None = None
    arrival_at: datetime | None = None
    duration_minutes: int | None = None
    class_of_service: str | None = None
    status: str = "HK"
    equipment: str | None = None
    equipment_name: str | None = None
    marriage_group: str | None = None
    is_code_share: bool = False
    is_past: bool = False
    schedule_changed: bool = False
    seats: list[Seat] = field(default_factory=list[Seat])

    @property
    def label(self) -> str:
        return f"{self.marketing_airline or ''}{self.flight_number or ''}"


@dataclass(slots=True, kw_only=True)
class HotelSegment:
    segment_number: str | None = None
    name: str | None = None
    chain_code: str | None = None
    hotel_code: str | None = None
    city_code: str | None = None
    address: list[str] = field(default_factory=list[str])
    country: str | None = None
    confirmation_number: str | None = None
    check_in: datetime | None = None
    check_out: datetime | None = None
    nights: int | None = None
    room_type: str | None = None
    number_of_units: int | None = None
    rate: Decimal | None = None
    currency: str = "USD"
    status: str = "HK"
    is_past: bool = False


@dataclass(slots=True, kw_only=True)
class CarSegment:
    segment_number: str | None = None
    vendor_code: str | None = None
    confirmation_number: str | None = None
    pickup_location: str | None = None
    return_location: str | None = None
    pickup_at: datetime | None = None
    return_at: datetime | None = None
    rental_days: int | None = None
    approximate_total: Decimal | None = None
    status: str = "HK"
    is_past: bool = False


@dataclass(slots=True, kw_only=True)
class AccountingLine:
    base_fare: Decimal | None = None
    tax_amount: Decimal | None = None
    commission_amount: Decimal | None = None
    airline_designator: str | None = None
    document_number: str | None = None
    conjunction_count: int | None = None
    passenger_name: str | None = None
    form_of_payment: str | None = None
    fare_application: str | None = None
    tariff_basis: str | None = None


@dataclass(slots=True, kw_only=True)
class PricingSummary:
    total_base_fare: Decimal = Decimal(0)
    total_tax: Decimal = Decimal(0)
    is_refundable: bool = False

    @property
    def total(self) -> Decimal:
        return self.total_base_fare + self.total_tax


@dataclass(slots=True, kw_only=True)
class PaymentCard:
    card_code: str | None = None
    masked_number: str | None = None
    expiry_month: str | None = None
    expiry_year: str | None = None


@dataclass(slots=True, kw_only=True)
class Authorization:
    code: str
    card: str
    date: str
    amount: str


@dataclass(slots=True, kw_only=True)
class Remark:
    text: str
    id: str | None = None
    type: str = "GENERAL"
    code: str | None = None
    segment_number: str | None = None


@dataclass(slots=True, kw_only=True)
class HotelSummary:
    total_nights: int = 0
    count: int = 0
    cities: list[str] = field(default_factory=list[str])


@dataclass(slots=True, kw_only=True)
class CarSummary:
    total_days: int = 0
    count: int = 0
    vendors: list[str] = field(default_factory=list[str])


@dataclass(slots=True, kw_only=True)
class Approval:
    required: bool = True
    approver: str | None = None
    approved_on: str | None = None


@dataclass(slots=True, kw_only=True)
class TripSummary:
    trip_name: str = "Business Trip"
    trip_number: str | None = None
    origin: str | None = None
    destination: str | None = None
    departure_at: datetime | None = None
    return_at: datetime | None = None
    duration_days: int | None = None
    cities: list[str] = field(default_factory=list[str])
    countries: list[str] = field(default_factory=list[str])
    is_round_trip: bool = False
    is_multi_city: bool = False
    is_international: bool = False
    hotels: HotelSummary = field(default_factory=HotelSummary)
    cars: CarSummary = field(default_factory=CarSummary)
    hotel_purpose: str | None = None
    car_purpose: str | None = None
    approval: Approval = field(default_factory=Approval)
    in_policy: bool = True


@dataclass(slots=True, kw_only=True)
class CanonicalReservation:
    booking: BookingInfo
    passengers: list[Passenger] = field(default_factory=list[Passenger])
    flights: list[FlightSegment] = field(default_factory=list[FlightSegment])
    hotels: list[HotelSegment] = field(default_factory=list[HotelSegment])
    cars: list[CarSegment] = field(default_factory=list[CarSegment])
    accounting: list[AccountingLine] = field(default_factory=list[AccountingLine])
    pricing: PricingSummary = field(default_factory=PricingSummary)
    payments: list[PaymentCard] = field(default_factory=list[PaymentCard])
    authorizations: list[Authorization] = field(default_factory=list[Authorization])
    remarks: list[Remark] = field(default_factory=list[Remark])
    trip: TripSummary = field(default_factory=TripSummary)
    completeness_score: int = 0
