"""Input signals for a reconciliation pass.

A pass receives at most one of each kind. Everything is optional: ``None``
means "not part of this signal", so a form edit can touch just the title.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from photorecon.domain.model import Labels, Provenance

if TYPE_CHECKING:
    from datetime import datetime

    from photorecon.domain.model import CameraRef, CellRef, LensRef, PlaceRef


@dataclass(slots=True, kw_only=True)
class DetailsEdit:
    keywords: str | None = None
    subject: str | None = None
    artist: str | None = None
    copyright: str | None = None
    notes: str | None = None


@dataclass(slots=True, kw_only=True)
class PhotoEdit:
    """A user-submitted form edit. Values are merged with manual provenance.

    An empty ``title`` or ``description`` clears the field so it can be
    synthesised again; ``None`` leaves it untouched.
    """

    title: str | None = None
    description: str | None = None

    taken_at: datetime | None = None
    taken_at_local: datetime | None = None
    time_zone: str | None = None
    year: int | None = None
    month: int | None = None
    day: int | None = None

    latitude: float | None = None
    longitude: float | None = None
    altitude: int | None = None

    camera: CameraRef | None = None
    lens: LensRef | None = None
    focal_length: int | None = None
    f_number: float | None = None
    iso: int | None = None
    exposure: str | None = None

    favorite: bool | None = None
    private: bool | None = None

    details: DetailsEdit | None = None

    def moves_location(self) -> bool:
        return self.latitude is not None or self.longitude is not None


@dataclass(slots=True, kw_only=True)
class ExtractedMetadata:
    """Embedded file metadata or file-name heuristics."""

    source: Provenance = Provenance.META

    title: str = ""
    description: str = ""

    taken_at: datetime | None = None
    taken_at_local: datetime | None = None
    time_zone: str = ""

    latitude: float = 0.0
    longitude: float = 0.0
    altitude: int = 0

    camera: CameraRef | None = None
    lens: LensRef | None = None
    camera_serial: str = ""
    focal_length: int = 0
    f_number: float = 0.0
    iso: int = 0
    exposure: str = ""

    keywords: str = ""
    subject: str = ""
    artist: str = ""
    copyright: str = ""

    resolution: int = 0


@dataclass(slots=True, kw_only=True)
class ClassificationResult:
    labels: Labels = field(default_factory=Labels)


@dataclass(slots=True, kw_only=True)
class GeocodeResult:
    """A reverse-geocode answer.

    Either the resolved ``cell``/``place`` objects are given directly, or only
    their ids, which are looked up through the location resolver.
    """

    cell: CellRef | None = None
    place: PlaceRef | None = None
    cell_id: str = ""
    place_id: str = ""
    cell_accuracy: int = 0
    time_zone: str = ""
    keywords: tuple[str, ...] = ()
    labels: Labels = field(default_factory=Labels)


@dataclass(slots=True, kw_only=True)
class Signals:
    """One batch of new information for a single photo."""

    edit: PhotoEdit | None = None
    metadata: tuple[ExtractedMetadata, ...] = ()
    geocode: GeocodeResult | None = None
    classification: ClassificationResult | None = None

    def is_empty(self) -> bool:
        return (
            self.edit is None
            and not self.metadata
            and self.geocode is None
            and self.classification is None
        )
