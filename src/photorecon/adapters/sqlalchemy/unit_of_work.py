"""SQLAlchemy-backed unit of work for reconciliation passes."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from photorecon.adapters.sqlalchemy.mappings import create_all_tables
from photorecon.adapters.sqlalchemy.repositories import (
    SqlAlchemyAlbumRepository,
    SqlAlchemyKeywordRepository,
    SqlAlchemyLabelRepository,
    SqlAlchemyLocationResolver,
    SqlAlchemyPhotoRepository,
)
from photorecon.config import get_database_config
from photorecon.domain.ports import ReconcileRepositories, RepositoryCollection

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

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
                "SQLAlchemy adapter not initialised. Call photorecon.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine, tables, and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or create_engine(
        database_uri or get_database_config().uri, future=True
    )
    create_all_tables(resolved_engine)
    log.debug("SQLAlchemy adapter started on %s", resolved_engine.url)

    _STATE.engine = resolved_engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """One session per reconciliation pass, exposing the repositories bound to it.

    Nothing is committed implicitly: the pass calls ``commit`` once the photo row
    and its isolated association steps are written. Leaving the context on an
    exception rolls the whole session back.
    """

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


class SqlAlchemyReconcileUnitOfWork(BaseSqlAlchemyUnitOfWork[ReconcileRepositories]):
    """Unit of work for reconciliation passes and lifecycle transitions."""

    def _build_repositories(self, session: Session) -> ReconcileRepositories:
        return ReconcileRepositories(
            photos=SqlAlchemyPhotoRepository(session),
            labels=SqlAlchemyLabelRepository(session),
            keywords=SqlAlchemyKeywordRepository(session),
            albums=SqlAlchemyAlbumRepository(session),
            locations=SqlAlchemyLocationResolver(session),
            savepoint=session.begin_nested,
        )


if TYPE_CHECKING:
    from photorecon.domain.ports import ReconcileUnitOfWork

    _uow_check: ReconcileUnitOfWork = SqlAlchemyReconcileUnitOfWork()
