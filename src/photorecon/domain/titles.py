"""Title synthesis from location, classification labels and file names."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from photorecon.domain.errors import TitleLockedError
from photorecon.domain.merge import set_title
from photorecon.domain.model import TITLE_UNKNOWN, Cell, Labels, Place, Provenance
from photorecon.domain.text import CLIP_TITLE, FILE_TITLE_SHORT, photo_file_title, title_case

if TYPE_CHECKING:
    from collections.abc import Sequence

    from photorecon.domain.model import ClassifiedLabel, Photo

log = logging.getLogger(__name__)

LONG_LOCALITY: Final[int] = 45
SHORT_LOCALITY: Final[int] = 20
LONG_CITY: Final[int] = 16
SHORT_CITY: Final[int] = 20
FALLBACK_MIN_PRIORITY: Final[int] = -1
FALLBACK_MAX_UNCERTAINTY: Final[int] = 85
_REPLACEABLE_SOURCES: Final = frozenset({Provenance.ESTIMATE, Provenance.AUTO})


def _join(*parts: str) -> str:
    return " / ".join(part for part in parts if part)


def _taken_year(photo: Photo) -> str:
    taken = photo.taken_at or photo.created_at
    return str(taken.year)


def _local_year(photo: Photo) -> str:
    local = photo.taken_at_local or photo.taken_at or photo.created_at
    return str(local.year)


def _cell_title(photo: Photo, cell: Cell, labels: Labels) -> str:
    year = _taken_year(photo)

    if label := labels.title(cell.name):
        log.debug("title: using label %r to create title for %s", label, photo)
        if cell.no_city() or cell.long_city() or cell.city_contains(label):
            return _join(title_case(label), cell.country_name, year)
        return _join(title_case(label), cell.city, year)

    if cell.name and cell.city:
        if len(cell.name) > LONG_LOCALITY:
            return title_case(cell.name)
        if (
            len(cell.name) > SHORT_LOCALITY
            or len(cell.city) > LONG_CITY
            or cell.city in cell.name
        ):
            return _join(cell.name, year)
        return _join(cell.name, cell.city, year)

    if cell.city and cell.country_name:
        if len(cell.city) > SHORT_CITY:
            return _join(cell.city, year)
        return _join(cell.city, cell.country_name, year)

    return ""


def _place_title(photo: Photo, place: Place, labels: Labels, file_title: str) -> str:
    year = _taken_year(photo)

    if label := labels.title(file_title):
        log.debug("title: using label %r to create title for %s", label, photo)
        if place.no_city() or place.long_city() or place.city_contains(label):
            return _join(title_case(label), place.country_name, year)
        return _join(title_case(label), place.city, year)

    if place.city and place.country_name:
        if len(place.city) > SHORT_CITY:
            return _join(place.city, year)
        return _join(place.city, place.country_name, year)

    return ""


def _fallback_title(photo: Photo, labels: Sequence[ClassifiedLabel], file_title: str) -> str:
    auto_time = photo.taken_source is Provenance.AUTO

    if not file_title and labels:
        best = labels[0]
        if (
            best.priority >= FALLBACK_MIN_PRIORITY
            and best.uncertainty <= FALLBACK_MAX_UNCERTAINTY
            and best.name
        ):
            if auto_time:
                return title_case(best.name)
            return _join(title_case(best.name), _taken_year(photo))

    if (
        file_title
        and len(file_title) <= FILE_TITLE_SHORT
        and photo.taken_at_local is not None
        and not auto_time
    ):
        return _join(file_title, _local_year(photo))

    if file_title:
        return file_title

    if auto_time:
        return TITLE_UNKNOWN
    return _join(TITLE_UNKNOWN, _taken_year(photo))


def title_locked(photo: Photo) -> bool:
    """Only placeholder and synthesised titles may be replaced."""
    return photo.has_title() and photo.title_source not in _REPLACEABLE_SOURCES


def update_title(
    photo: Photo,
    labels: Labels | Sequence[ClassifiedLabel],
    *,
    size: int = CLIP_TITLE,
) -> bool:
    """Derive a title for ``photo`` and merge it with automatic provenance.

    Raises ``TitleLockedError`` when the current title came from a stronger
    source. Returns whether the title changed.
    """

    if title_locked(photo):
        raise TitleLockedError(photo, photo.title_source)

    ranked = labels if isinstance(labels, Labels) else Labels.of(labels)
    old_title = photo.title
    file_title = photo_file_title(photo.name, photo.original_name, photo.path)

    title = ""
    if isinstance(photo.cell, Cell):
        title = _cell_title(photo, photo.cell, ranked)
    elif isinstance(photo.place, Place):
        title = _place_title(photo, photo.place, ranked, file_title)

    if not title:
        title = _fallback_title(photo, ranked, file_title)

    set_title(photo, title, Provenance.AUTO, size=size)

    if photo.title != old_title:
        log.debug("title: changed title of %s to %r", photo, photo.title)
        return True
    return False
