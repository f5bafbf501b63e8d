from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from travelsync.adapters.sqlalchemy.mappings import start_mappers
from travelsync.adapters.sqlalchemy.migrations import upgrade_head
from travelsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyProfileUnitOfWork,
    shutdown,
    startup,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("TRAVELSYNC_DEFAULT_ORGANIZATION_ID", "org-test")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyProfileUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyProfileUnitOfWork:
        return SqlAlchemyProfileUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def file_engine(tmp_path: Path) -> Iterator[Engine]:
    """A file database; in-memory sqlite gives every thread its own database."""

    engine = create_engine(
        f"sqlite+pysqlite:///{tmp_path / 'travelsync.db'}",
        connect_args={"timeout": 30, "check_same_thread": False},
        future=True,
    )
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def file_unit_of_work(
    file_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyProfileUnitOfWork]]:
    startup(engine=file_engine, force=True)

    def factory() -> SqlAlchemyProfileUnitOfWork:
        return SqlAlchemyProfileUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
