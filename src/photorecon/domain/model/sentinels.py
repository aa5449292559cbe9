"""Placeholder values that stand for "no known value"."""

from __future__ import annotations

from typing import Final

YEAR_UNKNOWN: Final[int] = -1
MONTH_UNKNOWN: Final[int] = -1
DAY_UNKNOWN: Final[int] = -1

TITLE_UNKNOWN: Final[str] = "Unknown"
COUNTRY_UNKNOWN: Final[str] = "zz"
CELL_UNKNOWN_ID: Final[str] = "zz"
PLACE_UNKNOWN_ID: Final[str] = "zz"
