"""Classification labels as delivered by the image classifier or keyword sync."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Final, overload

from photorecon.domain.model.enums import LabelSource

CERTAIN: Final[int] = 0
UNCERTAIN: Final[int] = 100

_TITLE_CONTEXT_MIN: Final[int] = 2
_TITLE_CONTEXT_MAX: Final[int] = 25
_DIGIT = re.compile(r"\d")


@dataclass(frozen=True, slots=True, kw_only=True)
class ClassifiedLabel:
    """One ranked label. ``uncertainty`` is a percentage, 0 = certain."""

    name: str
    priority: int = 0
    uncertainty: int = 0
    source: LabelSource = LabelSource.IMAGE
    categories: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not 0 <= self.uncertainty <= UNCERTAIN:
            raise ValueError(f"uncertainty must be within 0..100, got {self.uncertainty}")

    @property
    def certain(self) -> bool:
        return self.uncertainty < UNCERTAIN


def _sort_key(label: ClassifiedLabel) -> tuple[bool, int, int]:
    return (label.uncertainty >= UNCERTAIN, -label.priority, label.uncertainty)


@dataclass(frozen=True, slots=True)
class Labels(Sequence[ClassifiedLabel]):
    """Immutable ranked label sequence."""

    items: tuple[ClassifiedLabel, ...] = field(default=())

    @classmethod
    def of(cls, labels: Iterable[ClassifiedLabel]) -> Labels:
        return cls(tuple(labels))

    @overload
    def __getitem__(self, index: int) -> ClassifiedLabel: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[ClassifiedLabel]: ...

    def __getitem__(self, index: int | slice) -> ClassifiedLabel | Sequence[ClassifiedLabel]:
        return self.items[index]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[ClassifiedLabel]:
        return iter(self.items)

    def sorted(self) -> Labels:
        """Highest priority first, then lowest uncertainty; fully uncertain labels last."""
        return Labels(tuple(sorted(self.items, key=_sort_key)))

    def title(self, fallback: str) -> str:
        """Pick the label best suited as a title, or ``fallback`` when labels are weak.

        The fallback is only considered when it looks like a short place or file name
        (2 to 25 characters, no digits).
        """

        if not _TITLE_CONTEXT_MIN <= len(fallback) <= _TITLE_CONTEXT_MAX or _DIGIT.search(
            fallback
        ):
            fallback = ""

        if not self.items:
            return fallback

        ranked = self.sorted()
        label = ranked[0]

        if len(ranked) > 1 and ranked[0].uncertainty > 60 and ranked[1].uncertainty <= 60:
            label = ranked[1]

        if fallback and label.priority < 0:
            return fallback
        if fallback and label.priority == 0 and label.uncertainty > 50:
            return fallback
        if label.priority >= -1 and label.uncertainty <= 60:
            return label.name
        return fallback

    def keywords(self, tokenize: Callable[[str], Iterable[str]]) -> list[str]:
        """Words from label names and categories, skipping fully uncertain labels."""

        result: list[str] = []
        for label in self.items:
            if not label.certain:
                continue
            result.extend(tokenize(label.name))
            for category in label.categories:
                result.extend(tokenize(category))
        return result


@dataclass(frozen=True, slots=True, kw_only=True)
class Label:
    """A catalog label that photos can be associated with."""

    id: int
    name: str
    slug: str
    priority: int = 0
    deleted: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class Keyword:
    id: int
    word: str
    skip: bool = False
