"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import RawDocumentSource
from .persistence import FamilyRepository, ProfileRepository, Repository
from .unit_of_work import (
    ProfileRepositories,
    ProfileUnitOfWork,
    ProfileUnitOfWorkFactory,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "FamilyRepository",
    "ProfileRepositories",
    "ProfileRepository",
    "ProfileUnitOfWork",
    "ProfileUnitOfWorkFactory",
    "RawDocumentSource",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
]
