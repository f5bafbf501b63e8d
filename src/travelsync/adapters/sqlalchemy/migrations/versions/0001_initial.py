"""Profile master table and reconciled family tables.

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 00:00:00
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import sqlalchemy as sa
from alembic import op

from travelsync.adapters.sqlalchemy.mappings import ACTIVE_ROW, JSONDocument, UTCDateTime
from travelsync.domain.model import ProfileStatus, ProfileType, Source

if TYPE_CHECKING:
    from collections.abc import Sequence

revision: str = "0001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _family_columns() -> dict[str, list[sa.Column[Any]]]:
    """Fresh value columns per family table; Column objects bind to one table only."""

    return {
        "profile_email": [
            sa.Column("address", sa.String(), nullable=False),
            sa.Column("type", sa.String(), nullable=True),
            sa.Column("is_primary", sa.Boolean(), nullable=False),
        ],
        "profile_phone": [
            sa.Column("number", sa.String(), nullable=False),
            sa.Column("type", sa.String(), nullable=True),
            sa.Column("country_code", sa.String(), nullable=True),
            sa.Column("extension", sa.String(), nullable=True),
            sa.Column("is_primary", sa.Boolean(), nullable=False),
        ],
        "profile_address": [
            sa.Column("type", sa.String(), nullable=True),
            sa.Column("line1", sa.String(), nullable=True),
            sa.Column("line2", sa.String(), nullable=True),
            sa.Column("city", sa.String(), nullable=True),
            sa.Column("state", sa.String(), nullable=True),
            sa.Column("postal_code", sa.String(), nullable=True),
            sa.Column("country", sa.String(), nullable=True),
            sa.Column("is_primary", sa.Boolean(), nullable=False),
        ],
        "profile_travel_document": [
            sa.Column("type", sa.String(), nullable=False),
            sa.Column("number", sa.String(), nullable=False),
            sa.Column("issuing_country", sa.String(), nullable=True),
            sa.Column("citizenship", sa.String(), nullable=True),
            sa.Column("issue_date", sa.Date(), nullable=True),
            sa.Column("expiration_date", sa.Date(), nullable=True),
            sa.Column("holder_name", sa.String(), nullable=True),
        ],
        "profile_loyalty_program": [
            sa.Column("provider_code", sa.String(), nullable=False),
            sa.Column("provider_type", sa.String(), nullable=True),
            sa.Column("program_name", sa.String(), nullable=True),
            sa.Column("member_number", sa.String(), nullable=False),
            sa.Column("tier", sa.String(), nullable=True),
        ],
        "profile_payment_method": [
            sa.Column("card_type", sa.String(), nullable=True),
            sa.Column("masked_number", sa.String(), nullable=True),
            sa.Column("last_four", sa.String(length=4), nullable=True),
            sa.Column("expiration_month", sa.Integer(), nullable=True),
            sa.Column("expiration_year", sa.Integer(), nullable=True),
            sa.Column("holder_name", sa.String(), nullable=True),
            sa.Column("is_corporate", sa.Boolean(), nullable=False),
        ],
        "profile_emergency_contact": [
            sa.Column("name", sa.String(), nullable=True),
            sa.Column("relationship", sa.String(), nullable=True),
            sa.Column("phone", sa.String(), nullable=True),
            sa.Column("email", sa.String(), nullable=True),
        ],
    }


def upgrade() -> None:
    op.create_table(
        "profile",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("organization_id", sa.String(), nullable=False),
        sa.Column("source", sa.Enum(Source, native_enum=False), nullable=False),
        sa.Column("source_id", sa.String(), nullable=False),
        sa.Column("profile_name", sa.String(), nullable=True),
        sa.Column("profile_type", sa.Enum(ProfileType, native_enum=False), nullable=False),
        sa.Column("status", sa.Enum(ProfileStatus, native_enum=False), nullable=False),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("primary_email", sa.String(), nullable=True),
        sa.Column("completeness_score", sa.Integer(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_profile"),
        sa.UniqueConstraint(
            "organization_id",
            "source",
            "source_id",
            name="uq_profile_profile_organization_id",
        ),
    )

    for table_name, value_columns in _family_columns().items():
        op.create_table(
            table_name,
            sa.Column("id", sa.Uuid(), nullable=False),
            sa.Column("profile_id", sa.Uuid(), nullable=False),
            sa.Column("natural_key", sa.String(), nullable=False),
            sa.Column("source", sa.Enum(Source, native_enum=False), nullable=False),
            sa.Column("source_id", sa.String(), nullable=False),
            *value_columns,
            sa.Column("provenance", JSONDocument(), nullable=False),
            sa.Column("created_at", UTCDateTime(), nullable=False),
            sa.Column("updated_at", UTCDateTime(), nullable=False),
            sa.Column("deleted_at", UTCDateTime(), nullable=True),
            sa.ForeignKeyConstraint(
                ["profile_id"],
                ["profile.id"],
                name=f"fk_{table_name}_{table_name}_profile_id_profile",
                ondelete="CASCADE",
            ),
            sa.PrimaryKeyConstraint("id", name=f"pk_{table_name}"),
        )
        op.create_index(
            f"uq_{table_name}_active_natural_key",
            table_name,
            ["profile_id", "natural_key"],
            unique=True,
            sqlite_where=sa.text(ACTIVE_ROW),
            postgresql_where=sa.text(ACTIVE_ROW),
        )
        op.create_index(
            f"ix_{table_name}_scope",
            table_name,
            ["profile_id", "source", "source_id"],
        )


def downgrade() -> None:
    for table_name in reversed(list(_family_columns())):
        op.drop_index(f"ix_{table_name}_scope", table_name=table_name)
        op.drop_index(f"uq_{table_name}_active_natural_key", table_name=table_name)
        op.drop_table(table_name)
    op.drop_table("profile")
