"""Per-field merge rules.

Each setter takes a candidate value plus its provenance and returns whether the
photo changed. Empty candidates are dropped, weaker sources never replace a
value from a stronger one, and an empty field accepts anything. Value and
source are always written together.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from photorecon.domain.model import (
    COUNTRY_UNKNOWN,
    UNKNOWN_CELL,
    UNKNOWN_PLACE,
    Provenance,
    is_known_camera,
    is_known_lens,
    priority,
)
from photorecon.domain.text import CLIP_DESCRIPTION, CLIP_TITLE, CLIP_VARCHAR, clip

if TYPE_CHECKING:
    from photorecon.domain.model import CameraRef, LensRef, Photo

log = logging.getLogger(__name__)


def _weaker(source: Provenance, current: Provenance) -> bool:
    return priority(source) < priority(current)


def set_title(photo: Photo, title: str, source: Provenance, *, size: int = CLIP_TITLE) -> bool:
    """Change the title if the candidate is not empty and the source is strong enough."""

    new_title = clip(title, size)
    if not new_title:
        return False

    if _weaker(source, photo.title_source) and photo.has_title():
        log.debug("merge: keeping %s title of %s, %s is weaker", photo.title_source, photo, source)
        return False

    changed = photo.title != new_title or photo.title_source != source
    photo.title = new_title
    photo.title_source = source
    return changed


def clear_title(photo: Photo) -> None:
    """Forget the title and its source so the next merge starts from scratch."""

    photo.title = ""
    photo.title_source = Provenance.ESTIMATE


def set_description(
    photo: Photo, description: str, source: Provenance, *, size: int = CLIP_DESCRIPTION
) -> bool:
    new_description = clip(description, size)
    if not new_description:
        return False

    if _weaker(source, photo.description_source) and photo.has_description():
        log.debug("merge: keeping %s description of %s", photo.description_source, photo)
        return False

    changed = photo.description != new_description or photo.description_source != source
    photo.description = new_description
    photo.description_source = source
    return changed


def clear_description(photo: Photo) -> None:
    photo.description = ""
    photo.description_source = Provenance.ESTIMATE


def set_coordinates(
    photo: Photo, latitude: float, longitude: float, altitude: int, source: Provenance
) -> bool:
    """Merge latitude, longitude and altitude as one unit; (0, 0) means "no position"."""

    if latitude == 0.0 and longitude == 0.0:
        log.debug("merge: ignoring zero coordinates from %s for %s", source, photo)
        return False

    if _weaker(source, photo.location_source) and photo.has_lat_lng():
        log.debug("merge: keeping %s coordinates of %s", photo.location_source, photo)
        return False

    changed = (
        photo.latitude != latitude
        or photo.longitude != longitude
        or photo.altitude != altitude
        or photo.location_source != source
    )
    photo.latitude = latitude
    photo.longitude = longitude
    photo.altitude = altitude
    photo.location_source = source
    return changed


def clear_location(photo: Photo) -> None:
    """Drop coordinates and resolved location so a new position can be merged."""

    photo.latitude = 0.0
    photo.longitude = 0.0
    photo.altitude = 0
    photo.location_source = Provenance.ESTIMATE
    photo.cell = UNKNOWN_CELL
    photo.place = UNKNOWN_PLACE
    photo.country = COUNTRY_UNKNOWN


def set_camera(photo: Photo, camera: CameraRef | None, source: Provenance) -> bool:
    if camera is None:
        log.warning("merge: failed updating camera from source %s", source)
        return False

    if not is_known_camera(camera):
        return False

    if _weaker(source, photo.camera_source) and photo.has_camera():
        return False

    if photo.camera == camera and photo.camera_source == source:
        return False
    photo.camera = camera
    photo.camera_source = source
    return True


def set_lens(photo: Photo, lens: LensRef | None, source: Provenance) -> bool:
    """Lenses share the camera provenance; accepting a lens leaves that provenance as is."""

    if lens is None:
        log.warning("merge: failed updating lens from source %s", source)
        return False

    if not is_known_lens(lens):
        return False

    if _weaker(source, photo.camera_source) and photo.has_lens():
        return False

    if photo.lens == lens:
        return False
    photo.lens = lens
    return True


def set_exposure(  # noqa: PLR0913
    photo: Photo,
    *,
    focal_length: int = 0,
    f_number: float = 0.0,
    iso: int = 0,
    exposure: str = "",
    source: Provenance,
) -> bool:
    """Fill exposure values one by one.

    Equal priority is enough here, and a missing value is always filled, so a
    repeated extraction pass can complete what an earlier one left out.
    """

    has_priority = priority(source) >= priority(photo.camera_source)
    changed = False

    if focal_length > 0 and (has_priority or photo.focal_length <= 0):
        changed |= photo.focal_length != focal_length
        photo.focal_length = focal_length

    if f_number > 0 and (has_priority or photo.f_number <= 0):
        changed |= photo.f_number != f_number
        photo.f_number = f_number

    if iso > 0 and (has_priority or photo.iso <= 0):
        changed |= photo.iso != iso
        photo.iso = iso

    exposure = exposure.strip()
    if exposure and (has_priority or photo.exposure == ""):
        changed |= photo.exposure != exposure
        photo.exposure = exposure

    return changed


def set_camera_serial(photo: Photo, serial: str, *, size: int = CLIP_VARCHAR) -> bool:
    """First write wins."""

    value = clip(serial, size)
    if photo.camera_serial or not value:
        return False
    photo.camera_serial = value
    return True

