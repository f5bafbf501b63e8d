"""Free-text remark conventions used by the agency's Sabre workflows.

These are literal provider conventions without a documented grammar; they are
matched as-is.
"""

from __future__ import annotations

import re
from typing import Final

INTERNATIONAL_REMARK: Final[str] = "*7-I"
NON_REFUNDABLE_MARKER: Final[str] = "*45-R"
TRIP_NAME_PREFIX: Final[str] = "CB/TRP/"
TRIP_NUMBER_PREFIX: Final[str] = "CB/TRIPLOC/"
HOTEL_PURPOSE_MARKER: Final[str] = "*35-"
CAR_PURPOSE_MARKER: Final[str] = "*53-"
NO_APPROVAL_MARKER: Final[str] = "NO NN"
APPROVER_MARKER: Final[str] = "DESIGNATED APPROVER-"
APPROVAL_COMPLETE_MARKER: Final[str] = "FINISHING COMPLETE"
POLICY_VIOLATION_MARKERS: Final[tuple[str, ...]] = ("OUT OF POLICY", "POLICY VIOLATION")
QUEUE_MARKERS: Final[tuple[str, ...]] = ("QUE TO", "QUE FOR")
AUTHORIZATION_PREFIX: Final[str] = "AUTH-"
INVOICE_REMARK_TYPE: Final[str] = "INVOICE"
INVOICE_EMAIL_MARKER: Final[str] = "*50-"
CLIQ_USER_PREFIX: Final[str] = "CLIQUSER-"
CONTACT_EMAIL_SSR: Final[str] = "CTCE"
CONTACT_MOBILE_SSR: Final[str] = "CTCM"
PASSPORT_DOCUMENT_TYPE: Final[str] = "P"
CANCELLED_STATUS_CODES: Final[frozenset[str]] = frozenset({"XX", "HX", "NO", "XL"})

# the provider writes "@" as "¤" in some free-text fields
ENCODED_AT: Final[str] = "¤"

TICKET_NUMBER_RE: Final = re.compile(r"\d{13,14}")
QUEUE_RE: Final = re.compile(r"(\w+)-(\d+)")
VISA_RE: Final = re.compile(r"/V/(\d+)/(\w+)//(\w+)//(\d+\w+\d+)")
_ENCODED_EMAIL: Final[str] = r"([a-zA-Z0-9._%+-]+[¤@][a-zA-Z0-9.-]+\.[a-zA-Z]{2,})"
INVOICE_EMAIL_RE: Final = re.compile(re.escape(INVOICE_EMAIL_MARKER) + _ENCODED_EMAIL)
CLIQ_USER_EMAIL_RE: Final = re.compile(re.escape(CLIQ_USER_PREFIX) + _ENCODED_EMAIL)
EMAIL_RE: Final = re.compile(r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})")
MOBILE_RE: Final = re.compile(r"/(\d+)")
AUTHORIZATION_RE: Final = re.compile(r"AUTH-(.+?)/(.+?)/(\d+[A-Z]{3})/(\d+)")
APPROVAL_DATE_RE: Final = re.compile(r"\d{1,2}\s\d{1,2}\s\d{4}")


def decode_email(value: str) -> str:
    return value.replace(ENCODED_AT, "@")
