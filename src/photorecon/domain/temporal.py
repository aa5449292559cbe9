"""Capture time normalisation.

Keeps ``taken_at`` (aware UTC), ``taken_at_local`` (naive wall clock) and
``time_zone`` consistent, and derives the year/month/day partition fields.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from photorecon.domain.model import (
    DAY_UNKNOWN,
    MONTH_UNKNOWN,
    YEAR_UNKNOWN,
    Provenance,
    priority,
)

if TYPE_CHECKING:
    from photorecon.domain.model import Photo

log = logging.getLogger(__name__)

ZONE_UTC: Final[str] = "UTC"
YEAR_MIN: Final[int] = 1000
UNKNOWN_DATE_WINDOW: Final[timedelta] = timedelta(hours=24)
DEFAULT_YEAR_MAX: Final[int] = 2200


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _wall_clock(value: datetime) -> datetime:
    return value.replace(tzinfo=None)


def round_to_second(value: datetime) -> datetime:
    if value.microsecond >= 500_000:
        value += timedelta(seconds=1)
    return value.replace(microsecond=0)


def _valid(value: datetime | None, *, year_max: int = DEFAULT_YEAR_MAX) -> bool:
    return value is not None and YEAR_MIN <= value.year <= year_max


def _load_zone(name: str) -> ZoneInfo | None:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        log.debug("temporal: unknown time zone %r", name)
        return None


def local_from_utc(photo: Photo) -> datetime | None:
    """Wall-clock time of ``taken_at`` in the stored zone (unchanged if the zone is invalid)."""

    if photo.taken_at is None:
        return photo.taken_at_local
    zone = _load_zone(photo.time_zone) if photo.time_zone else None
    if zone is None:
        return photo.taken_at_local
    return _wall_clock(photo.taken_at.astimezone(zone))


def utc_from_local(photo: Photo) -> datetime | None:
    """Interpret ``taken_at_local`` in the stored zone (unchanged if the zone is invalid)."""

    if photo.taken_at_local is None:
        return photo.taken_at
    zone = _load_zone(photo.time_zone) if photo.time_zone else None
    if zone is None:
        return photo.taken_at
    return photo.taken_at_local.replace(tzinfo=zone).astimezone(UTC)


def set_taken_at(  # noqa: PLR0913
    photo: Photo,
    taken: datetime | None,
    local: datetime | None,
    zone: str,
    source: Provenance,
    *,
    year_max: int = DEFAULT_YEAR_MAX,
) -> bool:
    """Merge a capture time candidate. Returns whether the photo was updated."""

    if taken is None or not _valid(taken, year_max=year_max):
        log.debug("temporal: ignoring invalid capture time %s for %s", taken, photo)
        return False

    if priority(source) < priority(photo.taken_source) and photo.taken_at is not None:
        return False

    # File names carry no reliable zone.
    if source is Provenance.NAME:
        zone = ""

    taken = round_to_second(_as_utc(taken))

    local_supplied = local is not None and local.year >= YEAR_MIN
    if local is not None and local_supplied:
        local = round_to_second(_wall_clock(local))
    else:
        local = _wall_clock(taken)

    # Low trust sources may move a date earlier, never later.
    if (
        priority(source) <= priority(Provenance.AUTO)
        and photo.taken_at is not None
        and taken > photo.taken_at
    ):
        log.debug("temporal: keeping earlier capture time of %s", photo)
        return False

    before = (photo.taken_at, photo.taken_at_local, photo.time_zone, photo.taken_source)

    photo.taken_at = taken
    photo.taken_at_local = local
    photo.taken_source = source

    if zone == ZONE_UTC and photo.time_zone:
        photo.taken_at_local = local_from_utc(photo)
    elif zone:
        photo.time_zone = zone
        if local_supplied:
            photo.taken_at = utc_from_local(photo)
        else:
            photo.taken_at_local = local_from_utc(photo)
    elif photo.time_zone == ZONE_UTC:
        photo.time_zone = ""
        photo.taken_at_local = _wall_clock(taken)
    elif photo.time_zone:
        photo.taken_at_local = local_from_utc(photo)

    # Hand-entered partial dates only follow a new manual wall clock.
    if source is Provenance.MANUAL and (
        before[3] is not Provenance.MANUAL or photo.taken_at_local != before[1]
    ):
        _set_date_fields(photo)
    update_date_fields(photo)

    return before != (photo.taken_at, photo.taken_at_local, photo.time_zone, photo.taken_source)


def update_time_zone(photo: Photo, zone: str) -> bool:
    """Apply a zone learned later, unless a manual capture time already has one."""

    if not zone or zone == ZONE_UTC:
        return False

    if priority(photo.taken_source) >= priority(Provenance.MANUAL) and photo.time_zone:
        return False

    before = (photo.taken_at, photo.taken_at_local, photo.time_zone)

    if photo.time_zone == ZONE_UTC:
        photo.time_zone = zone
        photo.taken_at_local = local_from_utc(photo)
    else:
        photo.time_zone = zone
        photo.taken_at = utc_from_local(photo)

    update_date_fields(photo)
    return before != (photo.taken_at, photo.taken_at_local, photo.time_zone)


def clear_taken_at(photo: Photo) -> None:
    photo.taken_at = None
    photo.taken_at_local = None
    photo.time_zone = ""
    photo.taken_source = Provenance.ESTIMATE
    photo.year = YEAR_UNKNOWN
    photo.month = MONTH_UNKNOWN
    photo.day = DAY_UNKNOWN


def _set_date_fields(photo: Photo) -> None:
    local = photo.taken_at_local if _valid(photo.taken_at_local) else photo.taken_at
    if local is None:
        return
    photo.year = local.year
    photo.month = local.month
    photo.day = local.day


def update_date_fields(photo: Photo) -> None:
    """Recompute year, month and day from the local capture time.

    An estimated time close to (or after) the moment the photo was indexed is
    most likely the indexing time itself, so the date is marked unknown. Manual
    dates keep their partition fields.
    """

    if photo.taken_at is None or photo.taken_at.year < YEAR_MIN:
        return

    if not _valid(photo.taken_at_local):
        photo.taken_at_local = _wall_clock(photo.taken_at)

    if photo.taken_source is Provenance.ESTIMATE and photo.taken_at > _as_utc(
        photo.created_at
    ) - UNKNOWN_DATE_WINDOW:
        photo.year = YEAR_UNKNOWN
        photo.month = MONTH_UNKNOWN
        photo.day = DAY_UNKNOWN
    elif photo.taken_source is not Provenance.MANUAL:
        _set_date_fields(photo)


def set_manual_date_fields(
    photo: Photo, *, year: int | None = None, month: int | None = None, day: int | None = None
) -> None:
    """Partial dates entered by hand; only allowed on a manual capture time."""

    if photo.taken_source is not Provenance.MANUAL:
        return
    if year is not None:
        photo.year = year
    if month is not None:
        photo.month = month
    if day is not None:
        photo.day = day
