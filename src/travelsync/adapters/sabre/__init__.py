"""Sabre adapter: GetReservation trees and traveler profile payloads."""

from __future__ import annotations

from .assembler import assemble_reservation, completeness_score, locate_reservation
from .fields import SABRE_FIELDS
from .profile_translator import translate_payload, translate_profile
from .schema import SabreProfilePayload

__all__ = [
    "SABRE_FIELDS",
    "SabreProfilePayload",
    "assemble_reservation",
    "completeness_score",
    "locate_reservation",
    "translate_payload",
    "translate_profile",
]
