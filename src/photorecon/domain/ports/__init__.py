"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import AlbumRepository, KeywordRepository, LabelRepository, PhotoRepository
from .services import (
    EventSink,
    KeywordTokenizer,
    LabelCatalog,
    LocationResolver,
    QualityScorer,
)
from .unit_of_work import (
    ReconcileRepositories,
    ReconcileUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AlbumRepository",
    "EventSink",
    "KeywordRepository",
    "KeywordTokenizer",
    "LabelCatalog",
    "LabelRepository",
    "LocationResolver",
    "PhotoRepository",
    "QualityScorer",
    "ReconcileRepositories",
    "ReconcileUnitOfWork",
    "RepositoryCollection",
    "UnitOfWork",
]
