"""Synchronization defaults for profile ingestion."""

from __future__ import annotations

from dataclasses import dataclass

from travelsync.domain.model.enums import Source

from .env import env_int, require_env_vars
from .storage import DEFAULT_MAX_CONNECTIONS, DatabaseConfig, get_database_config

DEFAULT_MAX_CONCURRENT_PROFILES = 5
DEFAULT_ORGANIZATION_ENV = "TRAVELSYNC_DEFAULT_ORGANIZATION_ID"


@dataclass(frozen=True, slots=True)
class SyncConfig:
    max_concurrent_profiles: int = DEFAULT_MAX_CONCURRENT_PROFILES
    source: Source = Source.SABRE


@dataclass(frozen=True, slots=True)
class ImportContext:
    """Values resolved once at startup and passed to every ingestion call.

    ``max_open_transactions`` caps the transactions a batch holds at once across
    all profiles and families; it matches the database pool size so family
    fan-out never waits on the pool.
    """

    organization_id: str
    source: Source = Source.SABRE
    max_concurrent_profiles: int = DEFAULT_MAX_CONCURRENT_PROFILES
    max_open_transactions: int = DEFAULT_MAX_CONNECTIONS


def get_sync_config() -> SyncConfig:
    limit = env_int(
        "TRAVELSYNC_MAX_CONCURRENT_PROFILES",
        DEFAULT_MAX_CONCURRENT_PROFILES,
        minimum=1,
    )
    return SyncConfig(max_concurrent_profiles=limit)


def get_import_context(
    *,
    organization_id: str | None = None,
    sync: SyncConfig | None = None,
    database: DatabaseConfig | None = None,
) -> ImportContext:
    sync_config = sync or get_sync_config()
    database_config = database or get_database_config()
    if organization_id is None:
        organization_id = require_env_vars((DEFAULT_ORGANIZATION_ENV,))[DEFAULT_ORGANIZATION_ENV]
    return ImportContext(
        organization_id=organization_id,
        source=sync_config.source,
        max_concurrent_profiles=sync_config.max_concurrent_profiles,
        max_open_transactions=database_config.max_connections,
    )
