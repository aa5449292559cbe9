"""Collaborators the reconciliation engine calls but does not implement."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from photorecon.domain.model import CellRef, Label, Photo, PlaceRef


@runtime_checkable
class LocationResolver(Protocol):
    """Look up resolved locations by identifier."""

    def cell(self, cell_id: str) -> CellRef: ...

    def place(self, place_id: str) -> PlaceRef: ...


@runtime_checkable
class KeywordTokenizer(Protocol):
    """Turns free text into index words."""

    def keywords(self, text: str) -> list[str]: ...

    def unique_words(self, words: Iterable[str]) -> list[str]: ...


@runtime_checkable
class LabelCatalog(Protocol):
    """Read-only label lookup by (normalized) name."""

    def find(self, name: str) -> Label | None: ...


@runtime_checkable
class EventSink(Protocol):
    """Fire-and-forget notifications (counter deltas)."""

    def publish(self, name: str, data: Mapping[str, object]) -> None: ...


QualityScorer = Callable[["Photo"], int]
