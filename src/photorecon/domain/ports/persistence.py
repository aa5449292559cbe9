"""Ports for persisting photos and their derived associations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from photorecon.domain.ports.services import LabelCatalog

if TYPE_CHECKING:
    from collections.abc import Collection
    from uuid import UUID

    from photorecon.domain.model import Keyword, Label, LabelSource, Photo


@runtime_checkable
class PhotoRepository(Protocol):
    def get(self, photo_id: UUID) -> Photo | None: ...

    def add(self, photo: Photo) -> None: ...

    def save(self, photo: Photo) -> None: ...

    def delete(self, photo: Photo) -> None: ...


@runtime_checkable
class LabelRepository(LabelCatalog, Protocol):
    def find_or_create(self, name: str, *, priority: int = 0) -> Label: ...

    def attach(
        self, photo_id: UUID, label_id: int, *, uncertainty: int, source: LabelSource
    ) -> None: ...

    def detach_not_in(
        self, photo_id: UUID, keep_ids: Collection[int], *, source: LabelSource
    ) -> int: ...

    def remove_all(self, photo_id: UUID) -> None: ...


@runtime_checkable
class KeywordRepository(Protocol):
    def find_or_create(self, word: str) -> Keyword: ...

    def attach(self, photo_id: UUID, keyword_id: int) -> None: ...

    def detach_not_in(self, photo_id: UUID, keep_ids: Collection[int]) -> int: ...

    def remove_all(self, photo_id: UUID) -> None: ...


@runtime_checkable
class AlbumRepository(Protocol):
    def add_photo(self, album_uid: str, photo_id: UUID) -> None: ...

    def hide_photo(self, photo_id: UUID) -> int: ...

    def remove_photo(self, photo_id: UUID) -> int: ...
