from __future__ import annotations

from datetime import UTC, datetime

from photorecon.domain.model import UNKNOWN_CELL, Cell
from tests.helpers.photos import make_photo


def test_map_key_encodes_capture_time_in_base36() -> None:
    photo = make_photo(taken_at=datetime(1970, 1, 2, tzinfo=UTC), cell=Cell(id="s2:4799"))

    assert photo.map_key() == "1uo0/s2:4799"


def test_map_key_without_capture_time_uses_zero() -> None:
    photo = make_photo(taken_at=None)

    assert photo.map_key() == f"0/{UNKNOWN_CELL.id}"


def test_map_key_before_epoch_is_signed() -> None:
    photo = make_photo(taken_at=datetime(1969, 12, 31, 23, 59, 24, tzinfo=UTC))

    assert photo.map_key() == f"-10/{UNKNOWN_CELL.id}"
