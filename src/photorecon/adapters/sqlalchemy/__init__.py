"""SQLAlchemy adapter package for photorecon."""

from __future__ import annotations

from .mappings import create_all_tables, metadata
from .repositories import (
    SqlAlchemyAlbumRepository,
    SqlAlchemyKeywordRepository,
    SqlAlchemyLabelRepository,
    SqlAlchemyLocationResolver,
    SqlAlchemyPhotoRepository,
)
from .unit_of_work import (
    SqlAlchemyReconcileUnitOfWork,
    StartupError,
    configured_engine,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyAlbumRepository",
    "SqlAlchemyKeywordRepository",
    "SqlAlchemyLabelRepository",
    "SqlAlchemyLocationResolver",
    "SqlAlchemyPhotoRepository",
    "SqlAlchemyReconcileUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "metadata",
    "shutdown",
    "startup",
]
