from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from photorecon.domain.model import DAY_UNKNOWN, MONTH_UNKNOWN, YEAR_UNKNOWN, Provenance
from photorecon.domain.temporal import (
    clear_taken_at,
    round_to_second,
    set_manual_date_fields,
    set_taken_at,
    update_date_fields,
    update_time_zone,
)
from tests.helpers.photos import CREATED_AT, make_photo

NOON = datetime(2021, 6, 1, 12, 0, tzinfo=UTC)


def test_set_taken_at_without_zone_keeps_local_equal_to_utc() -> None:
    photo = make_photo()

    assert set_taken_at(photo, NOON, None, "", Provenance.META)

    assert photo.taken_at == NOON
    assert photo.taken_at_local == datetime(2021, 6, 1, 12, 0)
    assert photo.time_zone == ""
    assert (photo.year, photo.month, photo.day) == (2021, 6, 1)


def test_set_taken_at_with_zone_derives_local_time() -> None:
    photo = make_photo()

    set_taken_at(photo, NOON, None, "Europe/Berlin", Provenance.META)

    assert photo.time_zone == "Europe/Berlin"
    assert photo.taken_at_local == datetime(2021, 6, 1, 14, 0)
    assert photo.taken_at == NOON


def test_set_taken_at_with_zone_and_local_time_recomputes_utc() -> None:
    photo = make_photo()
    local = datetime(2021, 6, 1, 9, 30)

    set_taken_at(photo, NOON, local, "America/New_York", Provenance.META)

    assert photo.taken_at_local == local
    assert photo.taken_at == datetime(2021, 6, 1, 13, 30, tzinfo=UTC)


@pytest.mark.parametrize("zone", ["Europe/Berlin", "Asia/Tokyo", "America/Los_Angeles"])
def test_time_zone_round_trip_matches_direct_conversion(zone: str) -> None:
    photo = make_photo()

    set_taken_at(photo, NOON, None, zone, Provenance.META)
    update_time_zone(photo, zone)

    expected = NOON.astimezone(ZoneInfo(zone)).replace(tzinfo=None)
    assert photo.taken_at_local == expected
    assert photo.taken_at == NOON


def test_zone_learned_later_converts_from_utc_zone() -> None:
    photo = make_photo()
    set_taken_at(photo, NOON, None, "UTC", Provenance.META)

    assert update_time_zone(photo, "Asia/Tokyo")

    assert photo.time_zone == "Asia/Tokyo"
    assert photo.taken_at == NOON
    assert photo.taken_at_local == datetime(2021, 6, 1, 21, 0)


def test_zone_learned_later_reinterprets_wall_clock_without_zone() -> None:
    photo = make_photo()
    set_taken_at(photo, NOON, None, "", Provenance.META)

    update_time_zone(photo, "Europe/Berlin")

    assert photo.taken_at_local == datetime(2021, 6, 1, 12, 0)
    assert photo.taken_at == datetime(2021, 6, 1, 10, 0, tzinfo=UTC)


def test_manual_zone_is_not_overridden() -> None:
    photo = make_photo()
    set_taken_at(photo, NOON, None, "Europe/Berlin", Provenance.MANUAL)

    assert not update_time_zone(photo, "Asia/Tokyo")
    assert photo.time_zone == "Europe/Berlin"


def test_file_name_dates_carry_no_zone() -> None:
    photo = make_photo()

    set_taken_at(photo, NOON, None, "Europe/Berlin", Provenance.NAME)

    assert photo.time_zone == ""
    assert photo.taken_at_local == datetime(2021, 6, 1, 12, 0)


def test_weaker_source_cannot_replace_capture_time() -> None:
    photo = make_photo()
    set_taken_at(photo, NOON, None, "", Provenance.META)

    assert not set_taken_at(photo, NOON - timedelta(days=30), None, "", Provenance.NAME)
    assert photo.taken_at == NOON


def test_regression_guard_rejects_later_automatic_date_over_manual() -> None:
    photo = make_photo()
    manual = datetime(2020, 6, 1, tzinfo=UTC)
    set_taken_at(photo, manual, None, "", Provenance.MANUAL)

    assert not set_taken_at(photo, datetime(2021, 1, 1, tzinfo=UTC), None, "", Provenance.AUTO)

    assert photo.taken_at == manual
    assert photo.taken_source is Provenance.MANUAL


def test_regression_guard_only_bounds_later_candidates() -> None:
    photo = make_photo()
    set_taken_at(photo, datetime(2020, 6, 1, tzinfo=UTC), None, "", Provenance.META)

    assert not set_taken_at(photo, datetime(2021, 1, 1, tzinfo=UTC), None, "", Provenance.AUTO)
    assert set_taken_at(photo, datetime(2019, 1, 1, tzinfo=UTC), None, "", Provenance.AUTO)

    assert photo.taken_at == datetime(2019, 1, 1, tzinfo=UTC)
    assert photo.taken_source is Provenance.AUTO


def test_manual_time_may_move_later() -> None:
    photo = make_photo()
    set_taken_at(photo, datetime(2020, 6, 1, tzinfo=UTC), None, "", Provenance.META)

    assert set_taken_at(photo, datetime(2021, 1, 1, tzinfo=UTC), None, "", Provenance.MANUAL)
    assert photo.year == 2021


@pytest.mark.parametrize(
    "taken",
    [datetime(999, 1, 1, tzinfo=UTC), datetime(2300, 1, 1, tzinfo=UTC), None],
)
def test_invalid_capture_times_are_ignored(taken: datetime | None) -> None:
    photo = make_photo()

    assert not set_taken_at(photo, taken, None, "", Provenance.MANUAL)
    assert photo.taken_at is None


def test_year_max_is_configurable() -> None:
    photo = make_photo()

    assert not set_taken_at(photo, NOON, None, "", Provenance.META, year_max=2020)


def test_estimated_time_near_creation_marks_date_unknown() -> None:
    photo = make_photo(year=2024, month=3, day=1)

    set_taken_at(photo, CREATED_AT + timedelta(hours=1), None, "", Provenance.ESTIMATE)

    assert (photo.year, photo.month, photo.day) == (YEAR_UNKNOWN, MONTH_UNKNOWN, DAY_UNKNOWN)
    assert photo.taken_at is not None


def test_estimated_time_well_before_creation_keeps_date() -> None:
    photo = make_photo()

    set_taken_at(photo, CREATED_AT - timedelta(days=3), None, "", Provenance.ESTIMATE)

    assert (photo.year, photo.month, photo.day) == (2024, 2, 27)


def test_capture_time_is_rounded_to_seconds() -> None:
    assert round_to_second(datetime(2021, 1, 1, 0, 0, 0, 600_000)) == datetime(2021, 1, 1, 0, 0, 1)
    assert round_to_second(datetime(2021, 1, 1, 0, 0, 0, 400_000)) == datetime(2021, 1, 1)


def test_manual_partial_dates_survive_recomputation() -> None:
    photo = make_photo()
    set_taken_at(photo, NOON, None, "", Provenance.MANUAL)

    set_manual_date_fields(photo, month=MONTH_UNKNOWN, day=DAY_UNKNOWN)
    update_date_fields(photo)

    assert (photo.year, photo.month, photo.day) == (2021, MONTH_UNKNOWN, DAY_UNKNOWN)


def test_manual_partial_dates_survive_a_manual_zone_change() -> None:
    photo = make_photo()
    set_taken_at(photo, NOON, None, "", Provenance.MANUAL)
    set_manual_date_fields(photo, day=DAY_UNKNOWN)

    set_taken_at(photo, photo.taken_at, photo.taken_at_local, "Europe/Berlin", Provenance.MANUAL)

    assert photo.time_zone == "Europe/Berlin"
    assert (photo.year, photo.month, photo.day) == (2021, 6, DAY_UNKNOWN)


def test_new_manual_wall_clock_rederives_partial_dates() -> None:
    photo = make_photo()
    set_taken_at(photo, NOON, None, "", Provenance.MANUAL)
    set_manual_date_fields(photo, day=DAY_UNKNOWN)

    set_taken_at(photo, datetime(2022, 3, 4, 9, 0, tzinfo=UTC), None, "", Provenance.MANUAL)

    assert (photo.year, photo.month, photo.day) == (2022, 3, 4)


def test_partial_dates_need_manual_capture_time() -> None:
    photo = make_photo()
    set_taken_at(photo, NOON, None, "", Provenance.META)

    set_manual_date_fields(photo, year=1999)

    assert photo.year == 2021


def test_clear_taken_at_resets_everything() -> None:
    photo = make_photo()
    set_taken_at(photo, NOON, None, "Europe/Berlin", Provenance.MANUAL)

    clear_taken_at(photo)

    assert photo.taken_at is None
    assert photo.time_zone == ""
    assert photo.taken_source is Provenance.ESTIMATE
    assert photo.year == YEAR_UNKNOWN
