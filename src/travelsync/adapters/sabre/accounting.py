"""Accounting lines, pricing totals and forms of payment."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Final

from travelsync.domain.extraction import attribute, to_decimal, to_int
from travelsync.domain.model import AccountingLine, Authorization, PaymentCard, PricingSummary

from .fields import first_nodes, nodes, read
from .markers import AUTHORIZATION_PREFIX, AUTHORIZATION_RE, NON_REFUNDABLE_MARKER
from .remarks import any_containing

if TYPE_CHECKING:
    from collections.abc import Sequence

    from travelsync.domain.extraction import Node
    from travelsync.domain.model import Remark

FORM_OF_PAYMENT: Final[str] = "FP"


def extract_accounting_lines(root: Node) -> list[AccountingLine]:
    return [
        AccountingLine(
            base_fare=to_decimal(read(node, "BaseFare")),
            tax_amount=to_decimal(read(node, "TaxAmount")),
            commission_amount=to_decimal(read(node, "CommissionAmount")),
            airline_designator=read(node, "AirlineDesignator"),
            document_number=read(node, "DocumentNumber"),
            conjunction_count=to_int(read(node, "NumberOfConjunctedDocuments")),
            passenger_name=read(node, "PassengerName"),
            form_of_payment=read(node, "FormOfPaymentCode"),
            fare_application=read(node, "FareApplication"),
            tariff_basis=read(node, "TariffBasis"),
        )
        for node in first_nodes(
            root,
            ("PassengerReservation", "AccountingLines", "AccountingLine"),
            ("AccountingLines", "AccountingLine"),
        )
    ]


def summarize_pricing(
    lines: Sequence[AccountingLine], remarks: Sequence[Remark]
) -> PricingSummary:
    return PricingSummary(
        total_base_fare=sum((line.base_fare or Decimal(0) for line in lines), Decimal(0)),
        total_tax=sum((line.tax_amount or Decimal(0) for line in lines), Decimal(0)),
        is_refundable=not any_containing(remarks, NON_REFUNDABLE_MARKER),
    )


def extract_payment_cards(root: Node) -> list[PaymentCard]:
    cards: list[PaymentCard] = []
    elements = first_nodes(
        root,
        ("OpenReservationElements", "OpenReservationElement"),
        ("PassengerReservation", "OpenReservationElements", "OpenReservationElement"),
    )
    for element in elements:
        if (attribute(element, "type", "Type") or "").upper() != FORM_OF_PAYMENT:
            continue
        for card in nodes(element, "FormOfPayment", "PaymentCard"):
            cards.append(
                PaymentCard(
                    card_code=read(card, "CardCode"),
                    masked_number=read(card, "CardNumber"),
                    expiry_month=read(card, "ExpiryMonth"),
                    expiry_year=read(card, "ExpiryYear"),
                )
            )
    return cards


def extract_authorizations(remarks: Sequence[Remark]) -> list[Authorization]:
    authorizations: list[Authorization] = []
    for remark in remarks:
        if AUTHORIZATION_PREFIX not in remark.text:
            continue
        match = AUTHORIZATION_RE.search(remark.text)
        if match is None:
            continue
        code, card, day, amount = match.groups()
        authorizations.append(Authorization(code=code, card=card, date=day, amount=amount))
    return authorizations
