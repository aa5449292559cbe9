"""The photo record: the subset of fields that take part in reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from photorecon.domain.errors import IdentityAlreadyAssignedError
from photorecon.domain.model.enums import Provenance
from photorecon.domain.model.equipment import (
    UNKNOWN_CAMERA,
    UNKNOWN_LENS,
    is_known_camera,
    is_known_lens,
)
from photorecon.domain.model.labels import Labels
from photorecon.domain.model.places import (
    UNKNOWN_CELL,
    UNKNOWN_PLACE,
    is_known_cell,
    is_known_place,
)
from photorecon.domain.model.sentinels import (
    COUNTRY_UNKNOWN,
    DAY_UNKNOWN,
    MONTH_UNKNOWN,
    TITLE_UNKNOWN,
    YEAR_UNKNOWN,
)

if TYPE_CHECKING:
    from photorecon.domain.model.equipment import CameraRef, LensRef
    from photorecon.domain.model.places import CellRef, PlaceRef


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(eq=False, kw_only=True)
class Details:
    """Free-text descriptive fields stored beside the photo."""

    keywords: str = ""
    subject: str = ""
    artist: str = ""
    copyright: str = ""
    notes: str = ""


@dataclass(eq=False, kw_only=True)
class Photo:
    """A single media asset and its reconciled metadata.

    ``taken_at`` is timezone-aware UTC; ``taken_at_local`` is the naive wall-clock
    time in ``time_zone`` (or equal to UTC when no zone is known).
    """

    id: UUID | None = None

    name: str = ""
    path: str = ""
    original_name: str = ""

    title: str = TITLE_UNKNOWN
    title_source: Provenance = Provenance.ESTIMATE
    description: str = ""
    description_source: Provenance = Provenance.ESTIMATE

    taken_at: datetime | None = None
    taken_at_local: datetime | None = None
    time_zone: str = ""
    taken_source: Provenance = Provenance.ESTIMATE
    year: int = YEAR_UNKNOWN
    month: int = MONTH_UNKNOWN
    day: int = DAY_UNKNOWN

    latitude: float = 0.0
    longitude: float = 0.0
    altitude: int = 0
    location_source: Provenance = Provenance.ESTIMATE
    cell: CellRef = UNKNOWN_CELL
    place: PlaceRef = UNKNOWN_PLACE
    cell_accuracy: int = 0
    country: str = COUNTRY_UNKNOWN

    camera: CameraRef = UNKNOWN_CAMERA
    lens: LensRef = UNKNOWN_LENS
    camera_source: Provenance = Provenance.ESTIMATE
    camera_serial: str = ""
    focal_length: int = 0
    f_number: float = 0.0
    iso: int = 0
    exposure: str = ""

    favorite: bool = False
    private: bool = False
    resolution: int = 0
    quality: int = 0

    details: Details = field(default_factory=Details)
    labels: Labels = field(default_factory=Labels)

    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None
    edited_at: datetime | None = None
    checked_at: datetime | None = None
    deleted_at: datetime | None = None
    purged_at: datetime | None = None

    def __str__(self) -> str:
        if self.id is not None:
            return f"uid {self.id}"
        if self.name:
            return repr(self.name)
        if self.original_name:
            return repr(self.original_name)
        return "(unknown)"

    def assign_id(self, photo_id: UUID | None = None) -> UUID:
        """Give the photo its identity; ids never change once set."""

        if self.id is not None:
            raise IdentityAlreadyAssignedError(f"photo already has id {self.id}")
        self.id = photo_id or uuid4()
        return self.id

    def has_id(self) -> bool:
        return self.id is not None

    def has_title(self) -> bool:
        return self.title != ""

    def has_description(self) -> bool:
        return self.description != ""

    def has_taken_at(self) -> bool:
        return self.taken_at is not None

    def has_lat_lng(self) -> bool:
        return self.latitude != 0.0 or self.longitude != 0.0

    def has_camera(self) -> bool:
        return is_known_camera(self.camera)

    def has_lens(self) -> bool:
        return is_known_lens(self.lens)

    def unknown_location(self) -> bool:
        return not is_known_cell(self.cell)

    def unknown_place(self) -> bool:
        return not is_known_place(self.place)

    def location_loaded(self) -> bool:
        """A known cell is attached (its place may still be unknown)."""
        return is_known_cell(self.cell)

    def place_loaded(self) -> bool:
        return is_known_place(self.place)

    def is_archived(self) -> bool:
        return self.deleted_at is not None

    def map_key(self) -> str:
        """Key combining capture time and cell, used to group nearby shots."""

        seconds = int(self.taken_at.timestamp()) if self.taken_at is not None else 0
        return f"{_base36(seconds)}/{self.cell.id}"


def _base36(value: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    out: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        out.append(digits[rem])
    return sign + "".join(reversed(out))


def new_photo(
    *,
    name: str = "",
    path: str = "",
    original_name: str = "",
    created_at: datetime | None = None,
) -> Photo:
    """Create a photo with safe defaults: unknown equipment and location, sentinel title."""

    photo = Photo(name=name, path=path, original_name=original_name)
    if created_at is not None:
        photo.created_at = created_at
    return photo
