"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging, get_log_level
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import ImportContext, SyncConfig, get_import_context, get_sync_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "ImportContext",
    "MissingConfigurationError",
    "StorageConfig",
    "SyncConfig",
    "configure_logging",
    "get_log_level",
    "get_database_config",
    "get_import_context",
    "get_storage_config",
    "get_sync_config",
    "require_env_vars",
]
