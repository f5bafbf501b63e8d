"""Canonical traveler profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from travelsync.domain.model.enums import (
    DocumentType,
    Gender,
    LoyaltyProviderType,
    PreferenceLevel,
    ProfileStatus,
    ProfileType,
    Source,
)


@dataclass(slots=True, kw_only=True)
class PersonalInfo:
    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    title: str | None = None
    suffix: str | None = None
    birth_date: date | None = None
    gender: Gender | None = None
    nationality: str | None = None


@dataclass(slots=True, kw_only=True)
class EmailAddress:
    address: str
    type: str = "WORK"
    primary: bool = False


@dataclass(slots=True, kw_only=True)
class PhoneNumber:
    number: str
    type: str = "MOBILE"
    country_code: str | None = None
    extension: str | None = None
    primary: bool = False


@dataclass(slots=True, kw_only=True)
class Address:
    lines: list[str] = field(default_factory=list[str])
    type: str = "HOME"
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    primary: bool = False

    @property
    def first_line(self) -> str | None:
        return self.lines[0] if self.lines else None


@dataclass(slots=True, kw_only=True)
class ContactInfo:
    emails: list[EmailAddress] = field(default_factory=list[EmailAddress])
    phones: list[PhoneNumber] = field(default_factory=list[PhoneNumber])
    addresses: list[Address] = field(default_factory=list[Address])


@dataclass(slots=True, kw_only=True)
class TravelDocument:
    type: DocumentType
    number: str
    issuing_country: str | None = None
    citizenship: str | None = None
    issue_date: date | None = None
    expiration_date: date | None = None
    holder_name: str | None = None


@dataclass(slots=True, kw_only=True)
class LoyaltyProgram:
    provider_code: str
    member_number: str
    provider_type: LoyaltyProviderType = LoyaltyProviderType.OTHER
    program_name: str | None = None
    tier: str | None = None


@dataclass(slots=True, kw_only=True)
class PaymentMethod:
    card_type: str | None = None
    masked_number: str | None = None
    expiration_month: int | None = None
    expiration_year: int | None = None
    holder_name: str | None = None
    is_corporate: bool = False

    @property
    def last_four(self) -> str | None:
        if not self.masked_number:
            return None
        digits = "".join(ch for ch in self.masked_number if ch.isdigit())
        return digits[-4:] or None


@dataclass(slots=True, kw_only=True)
class EmploymentInfo:
    company: str | None = None
    title: str | None = None
    department: str | None = None
    employee_id: str | None = None
    cost_center: str | None = None
    division: str | None = None
    business_unit: str | None = None
    project_id: str | None = None
    hire_date: date | None = None
    location: str | None = None
    region: str | None = None


@dataclass(slots=True, kw_only=True)
class EmergencyContact:
    first_name: str | None = None
    last_name: str | None = None
    relationship: str | None = None
    phone: str | None = None
    email: str | None = None

    @property
    def name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


@dataclass(slots=True, kw_only=True)
class RelatedTraveler:
    first_name: str | None = None
    last_name: str | None = None
    relation_type: str | None = None


@dataclass(slots=True, kw_only=True)
class TravelPolicy:
    name: str
    policy_id: str | None = None
    allowance: str | None = None


@dataclass(slots=True, kw_only=True)
class TaxInfo:
    tax_id: str
    type: str | None = None
    country: str | None = None


@dataclass(slots=True, kw_only=True)
class VendorPreference:
    vendor_code: str | None = None
    level: PreferenceLevel = PreferenceLevel.PREFERRED
    details: dict[str, str] = field(default_factory=dict[str, str])


@dataclass(slots=True, kw_only=True)
class TravelPreferences:
    airlines: list[VendorPreference] = field(default_factory=list[VendorPreference])
    hotels: list[VendorPreference] = field(default_factory=list[VendorPreference])
    cars: list[VendorPreference] = field(default_factory=list[VendorPreference])


@dataclass(slots=True, kw_only=True)
class ProfileRemark:
    text: str
    type: str = "GENERAL"
    category: str | None = None


@dataclass(slots=True, kw_only=True)
class ProfileMetadata:
    source_system: Source
    source_id: str
    source_pcc: str | None = None
    completeness_score: int = 0


@dataclass(slots=True, kw_only=True)
class CanonicalProfile:
    metadata: ProfileMetadata
    profile_name: str | None = None
    type: ProfileType = ProfileType.BUSINESS
    status: ProfileStatus = ProfileStatus.ACTIVE
    domain: str | None = None
    client_code: str | None = None
    personal: PersonalInfo = field(default_factory=PersonalInfo)
    contact: ContactInfo = field(default_factory=ContactInfo)
    documents: list[TravelDocument] = field(default_factory=list[TravelDocument])
    loyalty: list[LoyaltyProgram] = field(default_factory=list[LoyaltyProgram])
    payment_methods: list[PaymentMethod] = field(default_factory=list[PaymentMethod])
    employment: EmploymentInfo | None = None
    emergency_contacts: list[EmergencyContact] = field(default_factory=list[EmergencyContact])
    related_travelers: list[RelatedTraveler] = field(default_factory=list[RelatedTraveler])
    travel_policy: TravelPolicy | None = None
    tax_info: list[TaxInfo] = field(default_factory=list[TaxInfo])
    preferences: TravelPreferences = field(default_factory=TravelPreferences)
    remarks: list[ProfileRemark] = field(default_factory=list[ProfileRemark])

    @property
    def primary_email(self) -> str | None:
        for email in self.contact.emails:
            if email.primary:
                return email.address
        return self.contact.emails[0].address if self.contact.emails else None
