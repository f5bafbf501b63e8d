"""SQLAlchemy table metadata for traveler profiles and their reconciled families."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Any, Final, cast

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
    text,
)

from travelsync.domain.model import (
    EntityFamily,
    ProfileStatus,
    ProfileType,
    Source,
    TravelerProfile,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]
ACTIVE_ROW: Final[str] = "deleted_at IS NULL"


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class JSONDocument(TypeDecorator[dict[str, Any]]):
    """A JSON object stored as text."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: dict[str, Any] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(value, sort_keys=True, default=str)

    def process_result_value(self, value: str | None, dialect: Dialect) -> dict[str, Any]:
        _ = dialect
        if value is None:
            return {}
        loaded = json.loads(value)
        if not isinstance(loaded, dict):
            return {}
        return cast(dict[str, Any], loaded)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Profiles --------------------------------------------------------------------

profile_table = Table(
    "profile",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("organization_id", String, nullable=False),
    Column("source", Enum(Source, native_enum=False), nullable=False),
    Column("source_id", String, nullable=False),
    Column("profile_name", String, nullable=True),
    Column("profile_type", Enum(ProfileType, native_enum=False), nullable=False),
    Column("status", Enum(ProfileStatus, native_enum=False), nullable=False),
    Column("first_name", String, nullable=True),
    Column("last_name", String, nullable=True),
    Column("primary_email", String, nullable=True),
    Column("completeness_score", Integer, nullable=False, default=0),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    UniqueConstraint("organization_id", "source", "source_id"),
)

# Reconciled families -----------------------------------------------------------


def _family_table(name: str, *value_columns: Column[Any]) -> Table:
    """A family table: scope columns, value columns, provenance and soft-delete marker.

    Natural keys are unique among a profile's active rows only, so a key can be
    soft-deleted under one source and live under another.
    """

    return Table(
        name,
        mapper_registry.metadata,
        Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
        Column(
            "profile_id",
            UUIDColumnType,
            ForeignKey("profile.id", ondelete="CASCADE"),
            nullable=False,
        ),
        Column("natural_key", String, nullable=False),
        Column("source", Enum(Source, native_enum=False), nullable=False),
        Column("source_id", String, nullable=False),
        *value_columns,
        Column("provenance", JSONDocument(), nullable=False),
        Column("created_at", UTCDateTime(), nullable=False),
        Column("updated_at", UTCDateTime(), nullable=False),
        Column("deleted_at", UTCDateTime(), nullable=True),
        Index(
            f"uq_{name}_active_natural_key",
            "profile_id",
            "natural_key",
            unique=True,
            sqlite_where=text(ACTIVE_ROW),
            postgresql_where=text(ACTIVE_ROW),
        ),
        Index(f"ix_{name}_scope", "profile_id", "source", "source_id"),
    )


profile_email_table = _family_table(
    "profile_email",
    Column("address", String, nullable=False),
    Column("type", String, nullable=True),
    Column("is_primary", Boolean, nullable=False, default=False),
)

profile_phone_table = _family_table(
    "profile_phone",
    Column("number", String, nullable=False),
    Column("type", String, nullable=True),
    Column("country_code", String, nullable=True),
    Column("extension", String, nullable=True),
    Column("is_primary", Boolean, nullable=False, default=False),
)

profile_address_table = _family_table(
    "profile_address",
    Column("type", String, nullable=True),
    Column("line1", String, nullable=True),
    Column("line2", String, nullable=True),
    Column("city", String, nullable=True),
    Column("state", String, nullable=True),
    Column("postal_code", String, nullable=True),
    Column("country", String, nullable=True),
    Column("is_primary", Boolean, nullable=False, default=False),
)

profile_travel_document_table = _family_table(
    "profile_travel_document",
    Column("type", String, nullable=False),
    Column("number", String, nullable=False),
    Column("issuing_country", String, nullable=True),
    Column("citizenship", String, nullable=True),
    Column("issue_date", Date, nullable=True),
    Column("expiration_date", Date, nullable=True),
    Column("holder_name", String, nullable=True),
)

profile_loyalty_program_table = _family_table(
    "profile_loyalty_program",
    Column("provider_code", String, nullable=False),
    Column("provider_type", String, nullable=True),
    Column("program_name", String, nullable=True),
    Column("member_number", String, nullable=False),
    Column("tier", String, nullable=True),
)

profile_payment_method_table = _family_table(
    "profile_payment_method",
    Column("card_type", String, nullable=True),
    Column("masked_number", String, nullable=True),
    Column("last_four", String(4), nullable=True),
    Column("expiration_month", Integer, nullable=True),
    Column("expiration_year", Integer, nullable=True),
    Column("holder_name", String, nullable=True),
    Column("is_corporate", Boolean, nullable=False, default=False),
)

profile_emergency_contact_table = _family_table(
    "profile_emergency_contact",
    Column("name", String, nullable=True),
    Column("relationship", String, nullable=True),
    Column("phone", String, nullable=True),
    Column("email", String, nullable=True),
)

FAMILY_TABLES: Final[dict[EntityFamily, Table]] = {
    EntityFamily.EMAILS: profile_email_table,
    EntityFamily.PHONES: profile_phone_table,
    EntityFamily.ADDRESSES: profile_address_table,
    EntityFamily.DOCUMENTS: profile_travel_document_table,
    EntityFamily.LOYALTY: profile_loyalty_program_table,
    EntityFamily.PAYMENT_METHODS: profile_payment_method_table,
    EntityFamily.EMERGENCY_CONTACTS: profile_emergency_contact_table,
}


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")
    mapper_registry.map_imperatively(TravelerProfile, profile_table)
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
