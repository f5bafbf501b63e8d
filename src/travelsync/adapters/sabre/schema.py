"""Pydantic models describing Sabre traveler profile payloads.

Payloads are XML converted to mappings: attributes sit under ``$``, text under
``_``, keys may carry a namespace prefix, and repeated elements collapse to a
single mapping at cardinality one. The base model lifts attributes and strips
prefixes so field aliases only name local keys.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, cast

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

ATTRIBUTES_KEY = "$"
TEXT_KEY = "_"


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _text_leaf(value: object) -> object:
    """Unwrap ``{"_": text}`` and single-element lists down to a stripped string."""

    if isinstance(value, list):
        items = [item for item in cast("list[object]", value) if item is not None]
        return _text_leaf(items[0]) if items else None
    if isinstance(value, Mapping):
        return _text_leaf(cast("Mapping[str, object]", value).get(TEXT_KEY))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return _blank_to_none(value)


def _as_list(value: object) -> object:
    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in cast("list[object]", value) if item is not None]
    return [value]


def local_name(key: str) -> str:
    return key.rpartition(":")[2]


Text = Annotated[str | None, BeforeValidator(_text_leaf)]


def _aliases(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class SabreModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _flatten_element(cls, value: object) -> object:
        if isinstance(value, str):
            return {TEXT_KEY: value}
        if not isinstance(value, Mapping):
            return value
        element = cast("Mapping[str, object]", value)
        data: dict[str, object] = {}
        for key, item in element.items():
            if key != ATTRIBUTES_KEY:
                data[local_name(key)] = item
        attributes = element.get(ATTRIBUTES_KEY)
        if isinstance(attributes, Mapping):
            for key, item in cast("Mapping[str, object]", attributes).items():
                data.setdefault(local_name(key), item)
        return data


class IdentityPayload(SabreModel):
    unique_id: Text = Field(default=None, validation_alias=_aliases("UniqueID", "UniqueId"))
    profile_name: Text = Field(default=None, validation_alias="ProfileName")
    profile_type_code: Text = Field(default=None, validation_alias="ProfileTypeCode")
    domain_id: Text = Field(default=None, validation_alias="DomainID")
    profile_status_code: Text = Field(default=None, validation_alias="ProfileStatusCode")
    client_code: Text = Field(default=None, validation_alias="ClientCode")


class PersonNamePayload(SabreModel):
    given_name: Text = Field(default=None, validation_alias=_aliases("GivenName", "FirstName"))
    surname: Text = Field(
        default=None, validation_alias=_aliases("SurName", "Surname", "LastName")
    )
    middle_name: Text = Field(default=None, validation_alias="MiddleName")
    prefix: Text = Field(default=None, validation_alias=_aliases("NamePrefix", "Title"))
    suffix: Text = Field(default=None, validation_alias="NameSuffix")


class EmailPayload(SabreModel):
    address: Text = Field(default=None, validation_alias=_aliases("EmailAddress", TEXT_KEY))
    type_code: Text = Field(default=None, validation_alias=_aliases("EmailTypeCode", "Type"))
    default: Text = Field(default=None, validation_alias=_aliases("DefaultInd", "Primary"))


class TelephonePayload(SabreModel):
    full_number: Text = Field(default=None, validation_alias="FullPhoneNumber")
    country_access_code: Text = Field(default=None, validation_alias="CountryAccessCode")
    area_city_code: Text = Field(default=None, validation_alias="AreaCityCode")
    phone_number: Text = Field(default=None, validation_alias="PhoneNumber")
    extension: Text = Field(default=None, validation_alias="Extension")
    location_type: Text = Field(
        default=None, validation_alias=_aliases("LocationTypeCode", "PhoneLocationType")
    )
    default: Text = Field(default=None, validation_alias="DefaultInd")

    @property
    def number(self) -> str | None:
        if self.full_number:
            return self.full_number
        if not self.phone_number:
            return None
        parts = (self.country_access_code, self.area_city_code, self.phone_number)
        return "-".join(part for part in parts if part)


class AddressPayload(SabreModel):
    lines: list[Text] = Field(default_factory=list, validation_alias="AddressLine")
    location_type: Text = Field(default=None, validation_alias=_aliases("LocationTypeCode", "Type"))
    city: Text = Field(default=None, validation_alias=_aliases("CityName", "City"))
    state: Text = Field(default=None, validation_alias=_aliases("StateCode", "StateProv", "State"))
    postal_code: Text = Field(
        default=None, validation_alias=_aliases("PostalCd", "PostalCode", "ZIP")
    )
    country: Text = Field(default=None, validation_alias=_aliases("CountryCode", "Country"))
    default: Text = Field(default=None, validation_alias="DefaultInd")

    _lists = field_validator("lines", mode="before")(_as_list)


class DocHolderPayload(SabreModel):
    given_name: Text = Field(default=None, validation_alias="GivenName")
    surname: Text = Field(default=None, validation_alias=_aliases("SurName", "Surname"))


class DocumentPayload(SabreModel):
    type_code: Text = Field(default=None, validation_alias="DocTypeCode")
    doc_id: Text = Field(default=None, validation_alias="DocID")
    issue_country: Text = Field(default=None, validation_alias="DocIssueCountryCode")
    holder_nationality: Text = Field(default=None, validation_alias="DocHolderNationality")
    effective_date: Text = Field(default=None, validation_alias="EffectiveDate")
    expire_date: Text = Field(default=None, validation_alias="ExpireDate")
    holder: DocHolderPayload | None = Field(default=None, validation_alias="DocHolder")
    holder_given_name: Text = Field(default=None, validation_alias="DocHolderGivenName")
    holder_surname: Text = Field(default=None, validation_alias="DocHolderSurName")

    @property
    def holder_name(self) -> str | None:
        given = (self.holder.given_name if self.holder else None) or self.holder_given_name
        surname = (self.holder.surname if self.holder else None) or self.holder_surname
        return " ".join(part for part in (given, surname) if part) or None


class LoyaltyPayload(SabreModel):
    program_id: Text = Field(default=None, validation_alias="ProgramID")
    vendor_code: Text = Field(default=None, validation_alias="VendorCode")
    membership_id: Text = Field(default=None, validation_alias="MembershipID")
    level: Text = Field(default=None, validation_alias=_aliases("LoyalLevel", "TierLevel"))


class PaymentCardPayload(SabreModel):
    card_type: Text = Field(default=None, validation_alias=_aliases("CardType", "CardCode"))
    card_number: Text = Field(default=None, validation_alias="CardNumber")
    expire_date: Text = Field(default=None, validation_alias="ExpireDate")
    holder_name: Text = Field(default=None, validation_alias="CardHolderName")


class PaymentFormPayload(SabreModel):
    card: PaymentCardPayload | None = Field(default=None, validation_alias="PaymentCard")


class EmployeeInfoPayload(SabreModel):
    company: Text = Field(default=None, validation_alias="Company")
    title: Text = Field(default=None, validation_alias="Title")
    department: Text = Field(default=None, validation_alias="Department")
    employee_id: Text = Field(default=None, validation_alias=_aliases("EmployeeId", "EmployeeID"))
    cost_center: Text = Field(default=None, validation_alias="CostCenter")
    division: Text = Field(default=None, validation_alias="Division")
    business_unit: Text = Field(default=None, validation_alias="BusinessUnit")
    project_id: Text = Field(default=None, validation_alias="ProjectID")
    hire_date: Text = Field(default=None, validation_alias="HireDate")
    location: Text = Field(default=None, validation_alias="LocationCd")
    region: Text = Field(default=None, validation_alias="RegionCd")


class EmploymentInfoPayload(SabreModel):
    employee: EmployeeInfoPayload | None = Field(default=None, validation_alias="EmployeeInfo")


class ContactPersonPayload(SabreModel):
    given_name: Text = Field(default=None, validation_alias="GivenName")
    surname: Text = Field(default=None, validation_alias=_aliases("SurName", "Surname"))
    relation_type: Text = Field(default=None, validation_alias="RelationType")
    telephones: list[TelephonePayload] = Field(default_factory=list, validation_alias="Telephone")
    emails: list[EmailPayload] = Field(default_factory=list, validation_alias="Email")

    _lists = field_validator("telephones", "emails", mode="before")(_as_list)

    @property
    def phone(self) -> str | None:
        return next((phone.number for phone in self.telephones if phone.number), None)

    @property
    def email(self) -> str | None:
        return next((email.address for email in self.emails if email.address), None)


class TravelPolicyPayload(SabreModel):
    name: Text = Field(default=None, validation_alias="CTPName")
    policy_id: Text = Field(default=None, validation_alias="PolicyID")
    allowance: Text = Field(default=None, validation_alias="Allowance")


class TaxInfoPayload(SabreModel):
    tax_id: Text = Field(default=None, validation_alias="TaxID")
    type_code: Text = Field(default=None, validation_alias="TaxTypeCode")
    country: Text = Field(default=None, validation_alias="CountryCode")


class CustomDataPayload(SabreModel):
    information_text: Text = Field(default=None, validation_alias="InformationText")
    field_code: Text = Field(default=None, validation_alias="CustomFieldCode")
    value: Text = Field(default=None, validation_alias="Value")

    @property
    def key(self) -> str | None:
        label = self.information_text or self.field_code
        return "_".join(label.split()).lower() if label else None


class ExtensionsPayload(SabreModel):
    custom_data: list[CustomDataPayload] = Field(
        default_factory=list, validation_alias="CustomDefinedData"
    )

    _lists = field_validator("custom_data", mode="before")(_as_list)


class CustomerPayload(SabreModel):
    birth_date: Text = Field(default=None, validation_alias="BirthDate")
    gender: Text = Field(default=None, validation_alias="Gender")
    person_name: PersonNamePayload | None = Field(
        default=None, validation_alias=_aliases("PersonName", "AgentName")
    )
    emails: list[EmailPayload] = Field(default_factory=list, validation_alias="Email")
    telephones: list[TelephonePayload] = Field(default_factory=list, validation_alias="Telephone")
    addresses: list[AddressPayload] = Field(default_factory=list, validation_alias="Address")
    documents: list[DocumentPayload] = Field(default_factory=list, validation_alias="Document")
    loyalty: list[LoyaltyPayload] = Field(default_factory=list, validation_alias="CustLoyalty")
    payment_forms: list[PaymentFormPayload] = Field(
        default_factory=list, validation_alias="PaymentForm"
    )
    employment: EmploymentInfoPayload | None = Field(
        default=None, validation_alias="EmploymentInfo"
    )
    emergency_contacts: list[ContactPersonPayload] = Field(
        default_factory=list, validation_alias="EmergencyContactPerson"
    )
    related_individuals: list[ContactPersonPayload] = Field(
        default_factory=list, validation_alias="RelatedIndividual"
    )
    travel_policy: TravelPolicyPayload | None = Field(
        default=None, validation_alias="TravelPolicy"
    )
    tax_info: list[TaxInfoPayload] = Field(default_factory=list, validation_alias="TaxInfo")

    _lists = field_validator(
        "emails",
        "telephones",
        "addresses",
        "documents",
        "loyalty",
        "payment_forms",
        "emergency_contacts",
        "related_individuals",
        "tax_info",
        mode="before",
    )(_as_list)


class SeatPrefPayload(SabreModel):
    position: Text = Field(default=None, validation_alias="SeatPosition")


class MealPrefPayload(SabreModel):
    meal_type: Text = Field(default=None, validation_alias="MealType")


class AirlinePrefPayload(SabreModel):
    vendor_code: Text = Field(default=None, validation_alias="VendorCode")
    level: Text = Field(default=None, validation_alias="PreferenceLevel")
    seat: SeatPrefPayload | None = Field(default=None, validation_alias="SeatPref")
    meal: MealPrefPayload | None = Field(default=None, validation_alias="MealPref")


class HotelPrefPayload(SabreModel):
    chain_code: Text = Field(default=None, validation_alias="ChainCode")
    level: Text = Field(default=None, validation_alias="PreferenceLevel")
    room_type: Text = Field(default=None, validation_alias="RoomType")
    smoking_allowed: Text = Field(default=None, validation_alias="SmokingAllowed")
    bed_type: Text = Field(default=None, validation_alias="BedType")


class VehiclePrefPayload(SabreModel):
    vendor_code: Text = Field(default=None, validation_alias="VendorCode")
    level: Text = Field(default=None, validation_alias="PreferenceLevel")
    vehicle_type: Text = Field(default=None, validation_alias=_aliases("VehicleType", "VehType"))
    transmission: Text = Field(default=None, validation_alias="TransmissionType")


class PrefCollectionsPayload(SabreModel):
    airlines: list[AirlinePrefPayload] = Field(default_factory=list, validation_alias="AirlinePref")
    hotels: list[HotelPrefPayload] = Field(default_factory=list, validation_alias="HotelPref")
    cars: list[VehiclePrefPayload] = Field(
        default_factory=list, validation_alias="VehicleRentalPref"
    )

    _lists = field_validator("airlines", "hotels", "cars", mode="before")(_as_list)


class TravelerPayload(CustomerPayload):
    """A traveler element; its fields may sit directly on it or under ``Customer``."""

    customer: CustomerPayload | None = Field(default=None, validation_alias="Customer")
    pref_collections: PrefCollectionsPayload | None = Field(
        default=None, validation_alias="PrefCollections"
    )
    extensions: ExtensionsPayload | None = Field(default=None, validation_alias="TPA_Extensions")

    @property
    def details(self) -> CustomerPayload:
        return self.customer or self


class RemarkPayload(SabreModel):
    type: Text = Field(default=None, validation_alias="Type")
    category: Text = Field(default=None, validation_alias="Category")
    text: Text = Field(default=None, validation_alias=_aliases("Text", TEXT_KEY))


class RemarkInfoPayload(SabreModel):
    remarks: list[RemarkPayload] = Field(default_factory=list, validation_alias="Remark")
    fop_remarks: list[RemarkPayload] = Field(default_factory=list, validation_alias="FOP_Remark")

    _lists = field_validator("remarks", "fop_remarks", mode="before")(_as_list)


class SabreProfilePayload(SabreModel):
    identity: IdentityPayload = Field(
        default_factory=IdentityPayload, validation_alias="TPA_Identity"
    )
    traveler: TravelerPayload | None = Field(default=None, validation_alias="Traveler")
    agent: TravelerPayload | None = Field(default=None, validation_alias="TravelAgent")
    pref_collections: PrefCollectionsPayload | None = Field(
        default=None, validation_alias="PrefCollections"
    )
    extensions: ExtensionsPayload | None = Field(default=None, validation_alias="TPA_Extensions")
    remark_info: RemarkInfoPayload | None = Field(default=None, validation_alias="RemarkInfo")
    created: Text = Field(default=None, validation_alias="CreateDateTime")
    updated: Text = Field(default=None, validation_alias="UpdateDateTime")

    @property
    def is_traveler(self) -> bool:
        traveler = self.traveler
        return traveler is not None and bool(
            traveler.customer or traveler.person_name or traveler.telephones
        )

    @property
    def person(self) -> CustomerPayload | None:
        source = self.traveler if self.is_traveler else self.agent
        return source.details if source else None

    @property
    def preferences(self) -> PrefCollectionsPayload | None:
        if self.traveler and self.traveler.pref_collections:
            return self.traveler.pref_collections
        return self.pref_collections

    @property
    def custom_fields(self) -> dict[str, str]:
        extensions = (self.traveler.extensions if self.traveler else None) or self.extensions
        if extensions is None:
            return {}
        return {
            data.key: data.value for data in extensions.custom_data if data.key and data.value
        }
