"""Default quality score used to sort photos into review and approved."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from photorecon.domain.model import Provenance

if TYPE_CHECKING:
    from photorecon.domain.model import Photo

APPROVED_QUALITY: Final[int] = 3
HIDDEN_QUALITY: Final[int] = -1
MIN_RESOLUTION: Final[int] = 2
QUALITY_BLOCKLIST: Final[frozenset[str]] = frozenset({"screenshot", "screenshots", "info"})

_SPLIT = re.compile(r"[\s,;]+")


def quality_score(photo: Photo) -> int:
    score = 0

    if photo.favorite:
        score += 3
    if photo.taken_source is not Provenance.ESTIMATE:
        score += 1
    if photo.has_lat_lng():
        score += 1
    if photo.resolution >= MIN_RESOLUTION:
        score += 1

    words = {word.casefold() for word in _SPLIT.split(photo.details.keywords) if word}
    if words.isdisjoint(QUALITY_BLOCKLIST):
        score += 1

    # Edited photos never wait for review.
    if score < APPROVED_QUALITY and photo.edited_at is not None:
        score = APPROVED_QUALITY

    return score
