"""Public domain model surface."""

from __future__ import annotations

from photorecon.domain.model.enums import (
    SOURCE_PRIORITY,
    LabelSource,
    Provenance,
    ReviewStatus,
    at_least,
    outranks,
    priority,
)
from photorecon.domain.model.equipment import (
    UNKNOWN_CAMERA,
    UNKNOWN_LENS,
    Camera,
    CameraRef,
    Lens,
    LensRef,
    UnknownCamera,
    UnknownLens,
    is_known_camera,
    is_known_lens,
)
from photorecon.domain.model.labels import CERTAIN, UNCERTAIN, ClassifiedLabel, Keyword, Label, Labels
from photorecon.domain.model.photo import Details, Photo, new_photo
from photorecon.domain.model.places import (
    UNKNOWN_CELL,
    UNKNOWN_PLACE,
    Cell,
    CellRef,
    Place,
    PlaceRef,
    UnknownCell,
    UnknownPlace,
    is_known_cell,
    is_known_place,
)
from photorecon.domain.model.sentinels import (
    CELL_UNKNOWN_ID,
    COUNTRY_UNKNOWN,
    DAY_UNKNOWN,
    MONTH_UNKNOWN,
    PLACE_UNKNOWN_ID,
    TITLE_UNKNOWN,
    YEAR_UNKNOWN,
)

__all__ = [  # noqa: RUF022
    # provenance
    "Provenance",
    "SOURCE_PRIORITY",
    "priority",
    "outranks",
    "at_least",
    "LabelSource",
    "ReviewStatus",
    # photo
    "Photo",
    "Details",
    "new_photo",
    # labels
    "ClassifiedLabel",
    "Labels",
    "Label",
    "Keyword",
    "CERTAIN",
    "UNCERTAIN",
    # equipment
    "Camera",
    "Lens",
    "CameraRef",
    "LensRef",
    "UnknownCamera",
    "UnknownLens",
    "UNKNOWN_CAMERA",
    "UNKNOWN_LENS",
    "is_known_camera",
    "is_known_lens",
    # places
    "Cell",
    "Place",
    "CellRef",
    "PlaceRef",
    "UnknownCell",
    "UnknownPlace",
    "UNKNOWN_CELL",
    "UNKNOWN_PLACE",
    "is_known_cell",
    "is_known_place",
    # sentinels
    "YEAR_UNKNOWN",
    "MONTH_UNKNOWN",
    "DAY_UNKNOWN",
    "TITLE_UNKNOWN",
    "COUNTRY_UNKNOWN",
    "CELL_UNKNOWN_ID",
    "PLACE_UNKNOWN_ID",
]
