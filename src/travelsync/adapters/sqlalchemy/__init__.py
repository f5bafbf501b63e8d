"""SQLAlchemy adapter package for travelsync."""

from __future__ import annotations

from .mappings import FAMILY_TABLES, create_all_tables, mapper_registry, start_mappers
from .monitoring import PoolMonitor
from .repositories import SqlAlchemyFamilyRepository, SqlAlchemyProfileRepository
from .unit_of_work import (
    SqlAlchemyProfileUnitOfWork,
    StartupError,
    pool_monitor,
    shutdown,
    startup,
)

__all__ = [
    "FAMILY_TABLES",
    "PoolMonitor",
    "SqlAlchemyFamilyRepository",
    "SqlAlchemyProfileRepository",
    "SqlAlchemyProfileUnitOfWork",
    "StartupError",
    "create_all_tables",
    "mapper_registry",
    "pool_monitor",
    "shutdown",
    "startup",
]
