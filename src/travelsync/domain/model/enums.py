"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Source(StrEnum):
    """Systems that contribute facts to a traveler profile."""

    SABRE = "sabre"
    USER = "user"
    ADMIN = "admin"
    API = "api"
    SYSTEM = "system"


class AssociationBasis(StrEnum):
    """How a contact fact was attributed to a passenger."""

    DIRECT = "direct"
    EXPLICIT_MATCH = "explicit-match"
    IMPLICIT_SHARED = "implicit-shared"


class ContactKind(StrEnum):
    EMAIL = "email"
    PHONE = "phone"
    ADDRESS = "address"


class BookingStatus(StrEnum):
    BOOKED = "booked"
    TICKETED = "ticketed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class EntityFamily(StrEnum):
    """Profile entity families reconciled into their own tables."""

    EMAILS = "emails"
    PHONES = "phones"
    ADDRESSES = "addresses"
    DOCUMENTS = "documents"
    LOYALTY = "loyalty"
    PAYMENT_METHODS = "payment_methods"
    EMERGENCY_CONTACTS = "emergency_contacts"


class ProfileType(StrEnum):
    PERSONAL = "personal"
    BUSINESS = "business"


class ProfileStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"
    SUSPENDED = "suspended"


class DocumentType(StrEnum):
    PASSPORT = "passport"
    VISA = "visa"
    NATIONAL_ID = "national_id"
    DRIVER_LICENSE = "driver_license"
    KNOWN_TRAVELER = "known_traveler"
    REDRESS = "redress"
    OTHER = "other"


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"
    UNDISCLOSED = "undisclosed"


class PreferenceLevel(StrEnum):
    PREFERRED = "preferred"
    ACCEPTABLE = "acceptable"
    RESTRICTED = "restricted"
    EXCLUDED = "excluded"


class LoyaltyProviderType(StrEnum):
    AIRLINE = "airline"
    HOTEL = "hotel"
    CAR = "car"
    OTHER = "other"
