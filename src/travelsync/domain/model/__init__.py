"""Public domain model surface."""

from __future__ import annotations

from travelsync.domain.model.contact import (
    AddressContact,
    ContactFact,
    EmailContact,
    PhoneContact,
)
from travelsync.domain.model.enums import (
    AssociationBasis,
    BookingStatus,
    ContactKind,
    DocumentType,
    EntityFamily,
    Gender,
    LoyaltyProviderType,
    PreferenceLevel,
    ProfileStatus,
    ProfileType,
    Source,
)
from travelsync.domain.model.profile import (
    Address,
    CanonicalProfile,
    ContactInfo,
    EmailAddress,
    EmergencyContact,
    EmploymentInfo,
    LoyaltyProgram,
    PaymentMethod,
    PersonalInfo,
    PhoneNumber,
    ProfileMetadata,
    ProfileRemark,
    RelatedTraveler,
    TaxInfo,
    TravelDocument,
    TravelPolicy,
    TravelPreferences,
    VendorPreference,
)
from travelsync.domain.model.provenance import Provenance, ProvenanceRecord
from travelsync.domain.model.reservation import (
    AccountingLine,
    Approval,
    Authorization,
    BookingInfo,
    CanonicalReservation,
    CarSegment,
    CarSummary,
    FlightSegment,
    HotelSegment,
    HotelSummary,
    Passenger,
    PassengerIdentity,
    PaymentCard,
    Passport,
    PricingSummary,
    QueuePlacement,
    Remark,
    Seat,
    Ticket,
    TripSummary,
    Visa,
)
from travelsync.domain.model.traveler import TravelerProfile

__all__ = [  # noqa: RUF022
    # enums
    "AssociationBasis",
    "BookingStatus",
    "ContactKind",
    "DocumentType",
    "EntityFamily",
    "Gender",
    "LoyaltyProviderType",
    "PreferenceLevel",
    "ProfileStatus",
    "ProfileType",
    "Source",
    # provenance
    "Provenance",
    "ProvenanceRecord",
    # contact facts
    "AddressContact",
    "ContactFact",
    "EmailContact",
    "PhoneContact",
    # reservation
    "AccountingLine",
    "Approval",
    "Authorization",
    "BookingInfo",
    "CanonicalReservation",
    "CarSegment",
    "CarSummary",
    "FlightSegment",
    "HotelSegment",
    "HotelSummary",
    "Passenger",
    "PassengerIdentity",
    "PaymentCard",
    "Passport",
    "PricingSummary",
    "QueuePlacement",
    "Remark",
    "Seat",
    "Ticket",
    "TripSummary",
    "Visa",
    # profile
    "Address",
    "CanonicalProfile",
    "ContactInfo",
    "EmailAddress",
    "EmergencyContact",
    "EmploymentInfo",
    "LoyaltyProgram",
    "PaymentMethod",
    "PersonalInfo",
    "PhoneNumber",
    "ProfileMetadata",
    "ProfileRemark",
    "RelatedTraveler",
    "TaxInfo",
    "TravelDocument",
    "TravelPolicy",
    "TravelPreferences",
    "VendorPreference",
    # persisted
    "TravelerProfile",
]
