"""Domain enums and the source priority table (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Final


class Provenance(StrEnum):
    """Which source produced a field value, ordered by trust."""

    ESTIMATE = "estimate"
    NAME = "name"
    META = "meta"
    AUTO = "auto"
    MANUAL = "manual"

    @property
    def priority(self) -> int:
        return SOURCE_PRIORITY[self]

    @classmethod
    def parse(cls, value: str | None) -> Provenance:
        """Return the matching tag, falling back to the lowest tier."""

        if value is None:
            return cls.ESTIMATE
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.ESTIMATE


SOURCE_PRIORITY: Final = MappingProxyType(
    {
        Provenance.ESTIMATE: 1,
        Provenance.NAME: 2,
        Provenance.META: 16,
        Provenance.AUTO: 32,
        Provenance.MANUAL: 64,
    }
)


def priority(source: Provenance) -> int:
    return SOURCE_PRIORITY[source]


def outranks(candidate: Provenance, current: Provenance) -> bool:
    """Strictly higher priority."""
    return priority(candidate) > priority(current)


def at_least(candidate: Provenance, current: Provenance) -> bool:
    return priority(candidate) >= priority(current)


class LabelSource(StrEnum):
    """Where a label association on a photo came from."""

    IMAGE = "image"
    KEYWORD = "keyword"
    LOCATION = "location"
    MANUAL = "manual"


class ReviewStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    ARCHIVED = "archived"
    PURGED = "purged"
