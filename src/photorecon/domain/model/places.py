"""Resolved locations: fine-grained cells and coarse places."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from photorecon.domain.model.sentinels import (
    CELL_UNKNOWN_ID,
    COUNTRY_UNKNOWN,
    PLACE_UNKNOWN_ID,
)

LONG_CITY_LENGTH: Final[int] = 16


@dataclass(frozen=True, slots=True)
class Place:
    """City/country level location."""

    id: str
    city: str = ""
    country: str = COUNTRY_UNKNOWN
    country_name: str = ""
    state: str = ""
    keywords: str = ""

    def no_city(self) -> bool:
        return self.city == ""

    def long_city(self) -> bool:
        return len(self.city) > LONG_CITY_LENGTH

    def city_contains(self, text: str) -> bool:
        """Whether ``text`` already mentions the city."""
        return self.city != "" and self.city in text


@dataclass(frozen=True, slots=True)
class UnknownPlace:
    id: str = PLACE_UNKNOWN_ID
    country: str = COUNTRY_UNKNOWN


@dataclass(frozen=True, slots=True)
class Cell:
    """Neighbourhood level location, linked to its coarse place."""

    id: str
    name: str = ""
    category: str = ""
    place: PlaceRef = field(default_factory=lambda: UNKNOWN_PLACE)

    @property
    def city(self) -> str:
        return self.place.city if isinstance(self.place, Place) else ""

    @property
    def country_name(self) -> str:
        return self.place.country_name if isinstance(self.place, Place) else ""

    @property
    def country(self) -> str:
        return self.place.country

    def no_city(self) -> bool:
        return self.city == ""

    def long_city(self) -> bool:
        return len(self.city) > LONG_CITY_LENGTH

    def city_contains(self, text: str) -> bool:
        return self.city != "" and self.city in text


@dataclass(frozen=True, slots=True)
class UnknownCell:
    id: str = CELL_UNKNOWN_ID
    place: UnknownPlace = field(default_factory=UnknownPlace)


type PlaceRef = Place | UnknownPlace
type CellRef = Cell | UnknownCell

UNKNOWN_PLACE: Final = UnknownPlace()
UNKNOWN_CELL: Final = UnknownCell()


def is_known_place(place: PlaceRef | None) -> bool:
    return isinstance(place, Place)


def is_known_cell(cell: CellRef | None) -> bool:
    return isinstance(cell, Cell)
