"""Builders for raw Sabre documents in their XML-to-JSON shape."""

from __future__ import annotations

import copy
from typing import Any

type Tree = dict[str, Any]


def stl(name: str) -> str:
    return f"stl19:{name}"


def passenger(
    *,
    name_number: str,
    last: str,
    first: str,
    name_id: str | None = None,
    emails: list[Tree] | None = None,
    seats: list[Tree] | None = None,
    special_requests: Tree | None = None,
) -> Tree:
    node: Tree = {
        "$": {
            "id": f"{name_number}0",
            "nameId": name_id or f"{name_number}.1",
            "nameNumber": name_number,
        },
        stl("LastName"): last,
        stl("FirstName"): first,
    }
    if emails:
        node[stl("EmailAddresses")] = {stl("EmailAddress"): emails}
    if seats:
        node[stl("Seats")] = {stl("PreReservedSeats"): {stl("PreReservedSeat"): seats}}
    if special_requests:
        node[stl("SpecialRequests")] = special_requests
    return node


def seat(number: str, *, board: str, off: str, status: str = "HK") -> Tree:
    return {
        stl("SeatNumber"): number,
        stl("SeatStatusCode"): status,
        stl("BoardPoint"): board,
        stl("OffPoint"): off,
    }


def flight(
    sequence: str,
    *,
    origin: str,
    destination: str,
    departs: str,
    arrives: str,
    number: str = "100",
    airline: str = "KQ",
    is_past: bool = False,
    status: str = "HK",
) -> Tree:
    return {
        "$": {"sequence": sequence},
        stl("Air"): {
            "$": {"isPast": "true" if is_past else "false"},
            stl("DepartureAirport"): origin,
            stl("ArrivalAirport"): destination,
            stl("DepartureDateTime"): departs,
            stl("ArrivalDateTime"): arrives,
            stl("MarketingAirlineCode"): airline,
            stl("MarketingFlightNumber"): number,
            stl("ResBookDesigCode"): "Y",
            stl("ActionCode"): status,
            stl("EquipmentType"): "789",
        },
    }


def hotel(sequence: str = "3") -> Tree:
    return {
        "$": {"sequence": sequence},
        stl("Hotel"): {
            stl("Reservation"): {
                stl("HotelName"): "Riverside Hotel",
                stl("ChainCode"): "HI",
                stl("HotelCode"): "12345",
                stl("HotelCityCode"): "LON",
                stl("TimeSpanStart"): "2030-03-02T15:00:00",
                stl("TimeSpanEnd"): "2030-03-05T11:00:00",
                stl("RoomType"): {stl("RoomTypeCode"): "A1K", stl("NumberOfUnits"): "1"},
                stl("RoomRates"): {stl("AmountBeforeTax"): "189.00", stl("CurrencyCode"): "GBP"},
                stl("LineStatus"): "HK",
            },
            stl("AdditionalInformation"): {
                stl("Address"): {
                    stl("AddressLine"): ["1 Embankment", "London"],
                    stl("CountryCode"): "GB",
                },
                stl("ConfirmationNumber"): "H778",
            },
        },
    }


def car(sequence: str = "4") -> Tree:
    return {
        "$": {"sequence": sequence},
        stl("Vehicle"): {
            stl("VendorCode"): "ZE",
            stl("ConfId"): "C990",
            stl("PickUpLocation"): {stl("LocationCode"): "LHR"},
            stl("ReturnLocation"): {stl("LocationCode"): "LHR"},
            stl("PickUpDateTime"): "2030-03-02T08:00:00",
            stl("ReturnDateTime"): "2030-03-04T09:00:00",
            stl("RentalRate"): {
                stl("VehicleCharges"): {stl("ApproximateTotalChargeAmount"): "120.50"}
            },
        },
    }


def remark(text: str, *, kind: str = "General", remark_id: str = "1") -> Tree:
    return {
        "$": {"type": kind, "id": remark_id},
        stl("RemarkLines"): {stl("RemarkLine"): {stl("Text"): text}},
    }


DEFAULT_REMARKS: tuple[tuple[str, str], ...] = (
    ("CB/TRP/LONDON SUMMIT", "General"),
    ("CB/TRIPLOC/778899", "General"),
    ("*35-MEETING", "General"),
    ("DESIGNATED APPROVER-ANNA OKELLO", "General"),
    ("FINISHING COMPLETE 12 1 2030", "General"),
    ("QUE TO X1Y2-45", "General"),
    ("AUTH-123456/VI1111/15JAN/1250", "General"),
    ("*7-I", "General"),
)


def reservation_tree(
    *,
    passengers: list[Tree] | None = None,
    segments: list[Tree] | Tree | None = None,
    remarks: list[Tree] | None = None,
    extra: Tree | None = None,
) -> Tree:
    """A reservation element with booking details, two travellers and a round trip."""

    if passengers is None:
        passengers = [
            passenger(
                name_number="1",
                last="SMITH",
                first="JOHN MR",
                emails=[{stl("Address"): "john.smith@acme.example", "$": {"type": "BUS"}}],
                seats=[seat("12A", board="NBO", off="LHR")],
                special_requests={
                    stl("APISRequest"): [
                        {
                            stl("DOCSEntry"): {
                                stl("DocumentType"): "P",
                                stl("DocumentNumber"): "A1234567",
                                stl("CountryOfIssue"): "KE",
                                stl("DocumentNationalityCountry"): "KE",
                                stl("DocumentExpirationDate"): "2032-05-01",
                                stl("DateOfBirth"): "1980-02-03",
                                stl("Gender"): "M",
                                stl("Surname"): "SMITH",
                                stl("Forename"): "JOHN",
                            }
                        },
                        {stl("DOCOEntry"): {stl("FreeText"): "/V/12345678/US//GB//15JUN2031"}},
                    ]
                },
            ),
            passenger(name_number="2", last="SMITH", first="JANE MRS"),
        ]
    if segments is None:
        segments = [
            flight(
                "1",
                origin="NBO",
                destination="LHR",
                departs="2030-03-01T23:55:00",
                arrives="2030-03-02T06:10:00",
            ),
            hotel(),
            car(),
            flight(
                "2",
                origin="LHR",
                destination="NBO",
                departs="2030-03-05T20:00:00",
                arrives="2030-03-06T05:30:00",
                number="101",
            ),
        ]
    if remarks is None:
        remarks = [
            remark(text, kind=kind, remark_id=str(index))
            for index, (text, kind) in enumerate(DEFAULT_REMARKS, start=1)
        ]
    tree: Tree = {
        "$": {"numberInParty": "2"},
        stl("BookingDetails"): {
            stl("RecordLocator"): "ABC123",
            stl("CreationTimestamp"): "2030-01-10T09:30:00",
            stl("CreationAgentID"): "AB",
        },
        stl("POS"): {
            stl("Source"): {
                "$": {"PseudoCityCode": "X1Y2", "HomePseudoCityCode": "Z9Z9", "AgentSine": "AB"}
            }
        },
        stl("Profiles"): {
            stl("Profile"): [
                {"$": {"type": "AGY"}, stl("ProfileID"): "AGY-1"},
                {"$": {"type": "CRP"}, stl("ProfileID"): "CRP-7"},
                {"$": {"type": "TVL"}, stl("ProfileID"): "TVL-42"},
            ]
        },
        stl("PassengerReservation"): {
            stl("Passengers"): {stl("Passenger"): passengers},
            stl("Segments"): {stl("Segment"): segments},
        },
        stl("Remarks"): {stl("Remark"): remarks},
        stl("AccountingLines"): {
            stl("AccountingLine"): [
                {
                    stl("BaseFare"): "500.00",
                    stl("TaxAmount"): "120.35",
                    stl("AirlineDesignator"): "KQ",
                    stl("DocumentNumber"): "1234567890",
                    stl("PassengerName"): "SMITH/JOHN MR",
                    stl("TarriffBasis"): "I",
                },
                {stl("BaseFare"): "250.00", stl("TaxAmount"): "60.10"},
            ]
        },
        stl("OpenReservationElements"): {
            "or114:OpenReservationElement": {
                "$": {"type": "FP"},
                "or114:FormOfPayment": {
                    "or114:PaymentCard": {
                        "or114:CardCode": "VI",
                        "or114:CardNumber": "XXXXXXXXXXXX1111",
                        "or114:ExpiryMonth": "12",
                        "or114:ExpiryYear": "2031",
                    }
                },
            }
        },
    }
    if extra:
        tree.update(extra)
    return tree


def reservation_document(**kwargs: Any) -> Tree:
    return {stl("GetReservationRS"): {stl("Reservation"): reservation_tree(**kwargs)}}


def profile_element(
    *,
    unique_id: str = "P100",
    email: str | None = "Jane.Doe@Example.com",
    given_name: str = "Jane",
) -> Tree:
    customer: Tree = {
        "$": {"BirthDate": "1985-04-12", "Gender": "F"},
        "sabre:PersonName": {"GivenName": given_name, "SurName": "Doe", "NamePrefix": "MS"},
        "Telephone": {
            "$": {
                "CountryAccessCode": "254",
                "AreaCityCode": "20",
                "PhoneNumber": "5551234",
                "LocationTypeCode": "MOB",
                "DefaultInd": "true",
            }
        },
        "Address": {
            "$": {"LocationTypeCode": "WORK"},
            "AddressLine": ["1 Riverside Rd", "Suite 4"],
            "CityName": "Nairobi",
            "CountryCode": "KE",
        },
        "Document": {
            "$": {
                "DocTypeCode": "P",
                "DocID": "A1234567",
                "DocIssueCountryCode": "KE",
                "DocHolderNationality": "KE",
                "ExpireDate": "2032-05-01",
            },
            "DocHolder": {"GivenName": given_name, "SurName": "Doe"},
        },
        "CustLoyalty": {
            "$": {"VendorCode": "KQ", "MembershipID": "KQ998877", "LoyalLevel": "GOLD"}
        },
        "PaymentForm": {
            "PaymentCard": {
                "$": {
                    "CardType": "VI",
                    "CardNumber": "4111111111111111",
                    "ExpireDate": "12/31",
                    "CardHolderName": "JANE DOE",
                }
            }
        },
        "EmploymentInfo": {
            "EmployeeInfo": {"Company": "Acme", "Department": "Sales", "EmployeeId": "E42"}
        },
        "EmergencyContactPerson": {
            "$": {"RelationType": "Spouse"},
            "GivenName": "John",
            "SurName": "Doe",
            "Telephone": {"$": {"FullPhoneNumber": "+254 700 000 000"}},
        },
    }
    if email is not None:
        customer["Email"] = [
            {"$": {"EmailTypeCode": "BUS", "DefaultInd": "true"}, "_": email},
            "jd@home.example",
        ]
    return {
        "sabre:TPA_Identity": {
            "$": {
                "UniqueID": unique_id,
                "ProfileName": "DOE/JANE MS",
                "ProfileTypeCode": "TVL",
                "DomainID": "X1Y2",
                "ProfileStatusCode": "AC",
                "ClientCode": "ACME",
            }
        },
        "sabre:Traveler": {"sabre:Customer": customer},
    }


def profile_document(**kwargs: Any) -> Tree:
    return {
        "Sabre_OTA_ProfileReadRS": {
            "Profiles": {"ProfileInfo": {"Profile": profile_element(**kwargs)}}
        }
    }


def without(tree: Tree, *path: str) -> Tree:
    """Deep copy of ``tree`` with the key at ``path`` removed."""

    result = copy.deepcopy(tree)
    node = result
    for key in path[:-1]:
        node = node[key]
    node.pop(path[-1], None)
    return result
