"""Extraction error taxonomy."""

from __future__ import annotations


class ExtractionError(ValueError):
    """Raised when a raw provider tree cannot be read as expected."""


class ReservationNotFoundError(ExtractionError):
    """Raised when no reservation root can be located in a raw document."""


class UnsupportedDocumentError(ExtractionError):
    """Raised when a raw input cannot be classified into a document tree."""
