"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable
    from contextlib import AbstractContextManager
    from types import TracebackType

    from photorecon.domain.ports.persistence import (
        AlbumRepository,
        KeywordRepository,
        LabelRepository,
        PhotoRepository,
    )
    from photorecon.domain.ports.services import LocationResolver


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class ReconcileRepositories(RepositoryCollection):
    """Repositories a reconciliation pass reads from and writes to.

    ``savepoint`` opens a nested transaction around one isolated write step, so
    a failed step is rolled back alone and the rest of the pass still commits.
    """

    photos: PhotoRepository
    labels: LabelRepository
    keywords: KeywordRepository
    albums: AlbumRepository
    locations: LocationResolver
    savepoint: Callable[[], AbstractContextManager[object]] = nullcontext


type ReconcileUnitOfWork = UnitOfWork[ReconcileRepositories]
