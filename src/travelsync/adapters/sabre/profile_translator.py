"""Translate Sabre profile payloads into canonical profiles."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

from travelsync.domain.extraction import as_node, classify_document
from travelsync.domain.model import (
    Address,
    CanonicalProfile,
    ContactInfo,
    DocumentType,
    EmailAddress,
    EmergencyContact,
    EmploymentInfo,
    Gender,
    LoyaltyProgram,
    LoyaltyProviderType,
    PaymentMethod,
    PersonalInfo,
    PhoneNumber,
    PreferenceLevel,
    ProfileMetadata,
    ProfileRemark,
    ProfileStatus,
    ProfileType,
    RelatedTraveler,
    Source,
    TaxInfo,
    TravelDocument,
    TravelPolicy,
    TravelPreferences,
    VendorPreference,
)

from .dates import parse_date
from .names import parse_name
from .schema import SabreProfilePayload, local_name

if TYPE_CHECKING:
    from collections.abc import Mapping

    from travelsync.domain.extraction import Node

    from .schema import (
        CustomerPayload,
        PrefCollectionsPayload,
        RemarkInfoPayload,
        TelephonePayload,
    )

log = logging.getLogger(__name__)

PROFILE_TYPES: Final[dict[str, ProfileType]] = {
    "TVL": ProfileType.PERSONAL,
    "AGT": ProfileType.BUSINESS,
    "CRP": ProfileType.BUSINESS,
    "GRP": ProfileType.BUSINESS,
}
PROFILE_STATUSES: Final[dict[str, ProfileStatus]] = {
    "AC": ProfileStatus.ACTIVE,
    "IN": ProfileStatus.INACTIVE,
    "DL": ProfileStatus.DELETED,
    "SU": ProfileStatus.SUSPENDED,
}
GENDERS: Final[dict[str, Gender]] = {
    "M": Gender.MALE,
    "MALE": Gender.MALE,
    "F": Gender.FEMALE,
    "FEMALE": Gender.FEMALE,
}
DOCUMENT_TYPES: Final[dict[str, DocumentType]] = {
    "P": DocumentType.PASSPORT,
    "V": DocumentType.VISA,
    "N": DocumentType.NATIONAL_ID,
    "D": DocumentType.DRIVER_LICENSE,
    "K": DocumentType.KNOWN_TRAVELER,
    "KTN": DocumentType.KNOWN_TRAVELER,
    "R": DocumentType.REDRESS,
    "REDRESS": DocumentType.REDRESS,
}
PREFERENCE_LEVELS: Final[dict[str, PreferenceLevel]] = {
    "PREFERRED": PreferenceLevel.PREFERRED,
    "ACCEPTABLE": PreferenceLevel.ACCEPTABLE,
    "RESTRICTED": PreferenceLevel.RESTRICTED,
    "EXCLUDED": PreferenceLevel.EXCLUDED,
}
SEAT_POSITIONS: Final[dict[str, str]] = {
    "W": "window",
    "WINDOW": "window",
    "A": "aisle",
    "AISLE": "aisle",
    "M": "middle",
    "MIDDLE": "middle",
}
SMOKING: Final[dict[str, str]] = {
    "TRUE": "smoking",
    "Y": "smoking",
    "FALSE": "non_smoking",
    "N": "non_smoking",
}
TRANSMISSIONS: Final[dict[str, str]] = {
    "A": "automatic",
    "AUTOMATIC": "automatic",
    "M": "manual",
    "MANUAL": "manual",
}
REMARK_TYPES: Final[frozenset[str]] = frozenset(
    {"GENERAL", "INVOICE", "ITINERARY", "HISTORICAL", "HIDDEN", "CORPORATE", "ACCOUNTING"}
)
INVOICE_REMARK: Final[str] = "INVOICE"
UNKNOWN_POLICY: Final[str] = "Unknown Policy"
IDENTITY_ELEMENT: Final[str] = "TPA_Identity"
PROFILE_WRAPPERS: Final[tuple[str, ...]] = (
    "Sabre_OTA_ProfileReadRS",
    "Profiles",
    "ProfileInfo",
    "Profile",
)

_EXPIRY_RE: Final = re.compile(r"^(?:(\d{4})-(\d{1,2})|(\d{1,2})[/-]?(\d{2}|\d{4}))$")
_TRUE: Final[str] = "true"


def _child(node: Node, name: str) -> object | None:
    for key, item in node.items():
        if local_name(key) == name:
            return item
    return None


def locate_profile(tree: Node) -> Node:
    """Descend through read-response wrappers to the element carrying the identity."""

    current = tree
    for wrapper in PROFILE_WRAPPERS:
        if _child(current, IDENTITY_ELEMENT) is not None:
            return current
        child = as_node(_child(current, wrapper))
        if child is not None:
            current = child
    return current


def _flag(value: str | None) -> bool:
    return value is not None and value.lower() == _TRUE


def _lookup[T](mapping: Mapping[str, T], code: str | None) -> T | None:
    return mapping.get(code.strip().upper()) if code else None


def mask_card_number(number: str | None) -> str | None:
    """Keep only the last four digits of a card number visible."""

    if not number:
        return None
    digits = "".join(ch for ch in number if ch.isdigit())
    if len(digits) <= 4:
        return number
    return "*" * (len(digits) - 4) + digits[-4:]


def parse_expiry(value: str | None) -> tuple[int | None, int | None]:
    """Card expiry as ``(month, year)`` from ``MMYY``, ``MM/YY``, ``MM/YYYY`` or ``YYYY-MM``."""

    if not value:
        return None, None
    match = _EXPIRY_RE.match(value.strip())
    if match is None:
        return None, None
    iso_year, iso_month, month, year = match.groups()
    if iso_year:
        return int(iso_month), int(iso_year)
    numeric_year = int(year)
    return int(month), numeric_year + 2000 if numeric_year < 100 else numeric_year


def _personal(payload: SabreProfilePayload) -> PersonalInfo:
    person = payload.person
    name = person.person_name if person else None
    personal = PersonalInfo(
        first_name=name.given_name if name else None,
        last_name=name.surname if name else None,
        middle_name=name.middle_name if name else None,
        title=name.prefix if name else None,
        suffix=name.suffix if name else None,
        birth_date=parse_date(person.birth_date) if person else None,
    )
    if person and person.gender:
        personal.gender = GENDERS.get(person.gender.upper(), Gender.UNDISCLOSED)
    if not (personal.first_name and personal.last_name) and payload.identity.profile_name:
        parsed = parse_name(payload.identity.profile_name)
        if parsed.first:
            personal.first_name = personal.first_name or parsed.first
            personal.last_name = personal.last_name or parsed.last
            personal.title = personal.title or parsed.title
    return personal


def _phone(telephone: TelephonePayload) -> PhoneNumber | None:
    number = telephone.number
    if not number:
        return None
    phone = PhoneNumber(
        number=number,
        country_code=telephone.country_access_code,
        extension=telephone.extension,
        primary=_flag(telephone.default),
    )
    if telephone.location_type:
        phone.type = telephone.location_type
    return phone


def _contact(person: CustomerPayload | None) -> ContactInfo:
    contact = ContactInfo()
    if person is None:
        return contact
    for email in person.emails:
        if not email.address:
            continue
        entry = EmailAddress(address=email.address.lower(), primary=_flag(email.default))
        if email.type_code:
            entry.type = email.type_code
        contact.emails.append(entry)
    contact.phones = [phone for phone in map(_phone, person.telephones) if phone]
    for address in person.addresses:
        lines = [line for line in address.lines if line]
        if not lines:
            continue
        entry = Address(
            lines=lines,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
            primary=_flag(address.default),
        )
        if address.location_type:
            entry.type = address.location_type
        contact.addresses.append(entry)
    return contact


def _documents(person: CustomerPayload) -> list[TravelDocument]:
    return [
        TravelDocument(
            type=_lookup(DOCUMENT_TYPES, document.type_code) or DocumentType.OTHER,
            number=document.doc_id,
            issuing_country=document.issue_country,
            citizenship=document.holder_nationality,
            issue_date=parse_date(document.effective_date),
            expiration_date=parse_date(document.expire_date),
            holder_name=document.holder_name,
        )
        for document in person.documents
        if document.doc_id
    ]


def _loyalty(person: CustomerPayload) -> list[LoyaltyProgram]:
    programs: list[LoyaltyProgram] = []
    for program in person.loyalty:
        provider = program.vendor_code or program.program_id
        if not (provider and program.membership_id):
            continue
        programs.append(
            LoyaltyProgram(
                provider_code=provider,
                member_number=program.membership_id,
                provider_type=LoyaltyProviderType.AIRLINE,
                program_name=program.program_id or program.vendor_code,
                tier=program.level,
            )
        )
    return programs


def _payments(person: CustomerPayload) -> list[PaymentMethod]:
    methods: list[PaymentMethod] = []
    for form in person.payment_forms:
        card = form.card
        if card is None:
            continue
        month, year = parse_expiry(card.expire_date)
        methods.append(
            PaymentMethod(
                card_type=card.card_type,
                masked_number=mask_card_number(card.card_number),
                expiration_month=month,
                expiration_year=year,
                holder_name=card.holder_name,
            )
        )
    return methods


def _employment(person: CustomerPayload, custom: Mapping[str, str]) -> EmploymentInfo | None:
    employee = person.employment.employee if person.employment else None
    info = EmploymentInfo(
        company=(employee.company if employee else None)
        or custom.get("companycode")
        or custom.get("company_code"),
        cost_center=(employee.cost_center if employee else None)
        or custom.get("cost_center")
        or custom.get("costcenter"),
    )
    if employee is not None:
        info.title = employee.title
        info.department = employee.department
        info.employee_id = employee.employee_id
        info.division = employee.division
        info.business_unit = employee.business_unit
        info.project_id = employee.project_id
        info.hire_date = parse_date(employee.hire_date)
        info.location = employee.location
        info.region = employee.region
    if person.employment is None and not (info.company or info.cost_center):
        return None
    return info


def _preferences(collections: PrefCollectionsPayload | None) -> TravelPreferences:
    preferences = TravelPreferences()
    if collections is None:
        return preferences
    for airline in collections.airlines:
        details: dict[str, str] = {}
        if airline.seat and airline.seat.position:
            details["seat_position"] = SEAT_POSITIONS.get(airline.seat.position.upper(), "any")
        if airline.meal and airline.meal.meal_type:
            details["meal"] = airline.meal.meal_type
        preferences.airlines.append(_vendor(airline.vendor_code, airline.level, details))
    for hotel in collections.hotels:
        details = {"smoking": _lookup(SMOKING, hotel.smoking_allowed) or "no_preference"}
        if hotel.room_type:
            details["room_type"] = hotel.room_type
        if hotel.bed_type:
            details["bed_type"] = hotel.bed_type
        preferences.hotels.append(_vendor(hotel.chain_code, hotel.level, details))
    for car in collections.cars:
        details = {"transmission": _lookup(TRANSMISSIONS, car.transmission) or "no_preference"}
        if car.vehicle_type:
            details["vehicle_type"] = car.vehicle_type
        preferences.cars.append(_vendor(car.vendor_code, car.level, details))
    return preferences


def _vendor(code: str | None, level: str | None, details: dict[str, str]) -> VendorPreference:
    return VendorPreference(
        vendor_code=code,
        level=_lookup(PREFERENCE_LEVELS, level) or PreferenceLevel.ACCEPTABLE,
        details=details,
    )


def _remarks(info: RemarkInfoPayload | None) -> list[ProfileRemark]:
    if info is None:
        return []
    remarks: list[ProfileRemark] = []
    for remark in info.remarks:
        if not remark.text:
            continue
        kind = (remark.type or "").upper()
        remarks.append(
            ProfileRemark(
                text=remark.text,
                type=kind if kind in REMARK_TYPES else "GENERAL",
                category=remark.category,
            )
        )
    remarks.extend(
        ProfileRemark(text=remark.text, type=INVOICE_REMARK)
        for remark in info.fop_remarks
        if remark.text
    )
    return remarks


def completeness_score(profile: CanonicalProfile) -> int:
    checks = (
        bool(profile.personal.first_name),
        bool(profile.personal.last_name),
        bool(profile.contact.emails),
        bool(profile.contact.phones),
        bool(profile.contact.addresses),
        bool(profile.documents),
        bool(profile.loyalty),
        bool(profile.payment_methods),
        bool(profile.employment and profile.employment.company),
        bool(profile.emergency_contacts),
    )
    return round(sum(checks) / len(checks) * 100)


def translate_payload(payload: SabreProfilePayload) -> CanonicalProfile:
    identity = payload.identity
    person = payload.person
    profile = CanonicalProfile(
        metadata=ProfileMetadata(
            source_system=Source.SABRE,
            source_id=identity.unique_id or "",
            source_pcc=identity.domain_id,
        ),
        profile_name=identity.profile_name,
        type=_lookup(PROFILE_TYPES, identity.profile_type_code) or ProfileType.PERSONAL,
        status=_lookup(PROFILE_STATUSES, identity.profile_status_code) or ProfileStatus.ACTIVE,
        domain=identity.domain_id,
        client_code=identity.client_code,
        personal=_personal(payload),
        contact=_contact(person),
        preferences=_preferences(payload.preferences),
        remarks=_remarks(payload.remark_info),
    )
    if person is not None:
        profile.documents = _documents(person)
        profile.loyalty = _loyalty(person)
        profile.payment_methods = _payments(person)
        profile.employment = _employment(person, payload.custom_fields)
        profile.emergency_contacts = [
            EmergencyContact(
                first_name=contact.given_name,
                last_name=contact.surname,
                relationship=contact.relation_type,
                phone=contact.phone,
                email=contact.email,
            )
            for contact in person.emergency_contacts
        ]
        profile.related_travelers = [
            RelatedTraveler(
                first_name=related.given_name,
                last_name=related.surname,
                relation_type=related.relation_type,
            )
            for related in person.related_individuals
        ]
        policy = person.travel_policy
        if policy is not None:
            profile.travel_policy = TravelPolicy(
                name=policy.name or UNKNOWN_POLICY,
                policy_id=policy.policy_id,
                allowance=policy.allowance,
            )
        profile.tax_info = [
            TaxInfo(tax_id=tax.tax_id, type=tax.type_code, country=tax.country)
            for tax in person.tax_info
            if tax.tax_id
        ]
    profile.metadata.completeness_score = completeness_score(profile)
    return profile


def translate_profile(document: object) -> CanonicalProfile:
    """Translate any accepted raw profile input into a :class:`CanonicalProfile`."""

    tree = locate_profile(classify_document(document).tree)
    payload = SabreProfilePayload.model_validate(dict(tree))
    profile = translate_payload(payload)
    log.debug(
        "Translated Sabre profile %s (completeness %d%%)",
        profile.metadata.source_id,
        profile.metadata.completeness_score,
    )
    return profile
