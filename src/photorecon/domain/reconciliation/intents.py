"""Side effects a reconciliation pass asks its caller to carry out."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from photorecon.domain.model import LabelSource

if TYPE_CHECKING:
    from photorecon.domain.errors import CollaboratorError, TitleLockedError
    from photorecon.domain.model import Photo


COUNT_FAVORITES = "count.favorites"
COUNT_REVIEW = "count.review"


@dataclass(frozen=True, slots=True)
class LabelIntent:
    """Associate a label with the photo.

    ``label_id`` is set when the label already exists in the catalog;
    otherwise it is created by name.
    """

    name: str
    uncertainty: int
    source: LabelSource
    priority: int = 0
    label_id: int | None = None


@dataclass(frozen=True, slots=True)
class StaleLabels:
    """Drop associations from ``source`` whose label is not in ``keep_ids``."""

    source: LabelSource
    keep_ids: frozenset[int] = frozenset()


@dataclass(frozen=True, slots=True)
class CounterIntent:
    name: str
    delta: int

    def as_event(self) -> dict[str, object]:
        return {"count": self.delta}


class AlbumAction(StrEnum):
    HIDE = "hide"
    REMOVE = "remove"


@dataclass(slots=True)
class ReconcileResult:
    """The updated photo plus everything the caller still has to persist.

    ``keywords`` is the full keyword index of the photo; associations to other
    keywords are stale. ``None`` means the index was not rebuilt in this pass.
    """

    photo: Photo
    labels: list[LabelIntent] = field(default_factory=list)
    stale_labels: list[StaleLabels] = field(default_factory=list)
    keywords: list[str] | None = None
    counters: list[CounterIntent] = field(default_factory=list)
    album_action: AlbumAction | None = None
    purge: bool = False
    errors: list[CollaboratorError] = field(default_factory=list)
    title_error: TitleLockedError | None = None
    changed: bool = False
    needs_geocode: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors

    def count(self, name: str, delta: int) -> None:
        self.counters.append(CounterIntent(name, delta))
