"""Persisted traveler profile identity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

from travelsync.domain.model.enums import ProfileStatus, ProfileType, Source


def new_id() -> UUID:
    return uuid4()


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(eq=False, kw_only=True)
class TravelerProfile:
    """Master row one source profile maps to within an organization.

    Facts (emails, documents, ...) hang off ``id`` in per-family tables and are
    reconciled separately.
    """

    id: UUID = field(default_factory=new_id)
    organization_id: str
    source: Source
    source_id: str
    profile_name: str | None = None
    profile_type: ProfileType = ProfileType.BUSINESS
    status: ProfileStatus = ProfileStatus.ACTIVE
    first_name: str | None = None
    last_name: str | None = None
    primary_email: str | None = None
    completeness_score: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
