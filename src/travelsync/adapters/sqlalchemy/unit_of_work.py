"""SQLAlchemy-backed units of work for profile ingestion."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from travelsync.adapters.sqlalchemy.mappings import start_mappers
from travelsync.adapters.sqlalchemy.migrations import upgrade_head
from travelsync.adapters.sqlalchemy.monitoring import PoolMonitor
from travelsync.adapters.sqlalchemy.repositories import (
    SqlAlchemyFamilyRepository,
    SqlAlchemyProfileRepository,
)
from travelsync.config import get_database_config
from travelsync.domain.model import EntityFamily
from travelsync.domain.ports.unit_of_work import ProfileRepositories, RepositoryCollection

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

    from travelsync.config import DatabaseConfig

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None
    monitor: PoolMonitor | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call travelsync.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def create_configured_engine(config: DatabaseConfig) -> Engine:
    """Create an engine whose pool is bounded by ``config``."""

    options: dict[str, Any] = {"future": True}
    # sqlite uses a singleton or NullPool depending on the URI; neither takes sizing
    if make_url(config.uri).get_backend_name() != "sqlite":
        options["pool_size"] = config.pool_size
        options["max_overflow"] = config.max_overflow
    return create_engine(config.uri, **options)


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine, schema, pool monitor and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )
    if _STATE.monitor is not None:
        _STATE.monitor.uninstall()

    config = get_database_config()
    if engine is None:
        if database_uri is not None:
            config = replace(config, uri=database_uri)
        engine = create_configured_engine(config)

    start_mappers()
    upgrade_head(engine=engine)

    monitor = PoolMonitor(config.leak_threshold_seconds)
    monitor.install(engine)
    _STATE.monitor = monitor
    _STATE.engine = engine
    log.info("SQLAlchemy adapter started on %s", engine.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def pool_monitor() -> PoolMonitor | None:
    return _STATE.monitor


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.monitor is not None:
        _STATE.monitor.uninstall()
        _STATE.monitor = None
    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """Generic SQLAlchemy unit of work with pluggable repository collections."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.session_factory
        self._session: Session | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        self.session = self.session_factory()
        self._repositories = self._build_repositories(self.session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        self.session.close()
        self.session = None
        return False

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> TRepositories:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


class SqlAlchemyProfileUnitOfWork(BaseSqlAlchemyUnitOfWork[ProfileRepositories]):
    """Unit of work over the profile table and every family table."""

    def _build_repositories(self, session: Session) -> ProfileRepositories:
        return ProfileRepositories(
            profiles=SqlAlchemyProfileRepository(session),
            families={
                family: SqlAlchemyFamilyRepository(session, family) for family in EntityFamily
            },
        )


if TYPE_CHECKING:
    from travelsync.domain.ports.unit_of_work import ProfileUnitOfWork

    _uow_check: ProfileUnitOfWork = SqlAlchemyProfileUnitOfWork()
