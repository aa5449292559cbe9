"""Review status transitions: pending, approved, archived, purged.

Each transition mutates the photo and returns a ``ReconcileResult`` carrying
the counter deltas and album/purge intents for the caller to apply.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from photorecon.domain.errors import InvalidTransitionError
from photorecon.domain.model import ReviewStatus
from photorecon.domain.quality import APPROVED_QUALITY, HIDDEN_QUALITY, quality_score
from photorecon.domain.reconciliation.intents import (
    COUNT_FAVORITES,
    COUNT_REVIEW,
    AlbumAction,
    ReconcileResult,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from photorecon.domain.model import Photo
    from photorecon.domain.ports import QualityScorer

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def review_status(photo: Photo) -> ReviewStatus:
    if photo.purged_at is not None:
        return ReviewStatus.PURGED
    if photo.deleted_at is not None:
        return ReviewStatus.ARCHIVED
    if photo.quality >= APPROVED_QUALITY:
        return ReviewStatus.APPROVED
    return ReviewStatus.PENDING


def ensure_not_purged(photo: Photo, operation: str) -> None:
    if photo.purged_at is not None:
        raise InvalidTransitionError(photo, operation, ReviewStatus.PURGED)


def count_review_change(result: ReconcileResult, before: ReviewStatus) -> None:
    """Adjust the pending-review counter when a photo enters or leaves review."""

    after = review_status(result.photo)
    if before is ReviewStatus.PENDING and after is not ReviewStatus.PENDING:
        result.count(COUNT_REVIEW, -1)
    elif before is not ReviewStatus.PENDING and after is ReviewStatus.PENDING:
        result.count(COUNT_REVIEW, 1)


def _counts_as_favorite(photo: Photo) -> bool:
    return photo.favorite and not photo.private and photo.deleted_at is None


def rescore(photo: Photo, score: QualityScorer = quality_score) -> None:
    """Recompute quality; archived photos stay hidden."""

    if photo.deleted_at is not None:
        photo.quality = HIDDEN_QUALITY
    else:
        photo.quality = score(photo)


def set_favorite(
    photo: Photo, favorite: bool, *, score: QualityScorer = quality_score  # noqa: FBT001
) -> ReconcileResult:
    ensure_not_purged(photo, "favorite")
    result = ReconcileResult(photo=photo)
    before = review_status(photo)
    old_quality = photo.quality

    changed = photo.favorite != favorite
    photo.favorite = favorite
    rescore(photo, score)

    if changed and not photo.private and photo.deleted_at is None:
        result.count(COUNT_FAVORITES, 1 if favorite else -1)

    count_review_change(result, before)
    result.changed = changed or photo.quality != old_quality
    return result


def approve(
    photo: Photo,
    *,
    score: QualityScorer = quality_score,
    clock: Callable[[], datetime] = _utcnow,
) -> ReconcileResult:
    """Move a photo out of review. Already approved photos are left alone."""

    ensure_not_purged(photo, "approve")
    if photo.deleted_at is not None:
        raise InvalidTransitionError(photo, "approve", ReviewStatus.ARCHIVED)

    result = ReconcileResult(photo=photo)
    if photo.quality >= APPROVED_QUALITY:
        return result

    before = review_status(photo)
    photo.edited_at = clock()
    rescore(photo, score)
    count_review_change(result, before)
    result.changed = True
    return result


def archive(
    photo: Photo,
    *,
    clock: Callable[[], datetime] = _utcnow,
) -> ReconcileResult:
    """Soft delete: hide the photo and its album memberships."""

    ensure_not_purged(photo, "archive")
    result = ReconcileResult(photo=photo)
    if photo.deleted_at is not None:
        return result

    before = review_status(photo)
    was_favorite = _counts_as_favorite(photo)

    photo.deleted_at = clock()
    photo.quality = HIDDEN_QUALITY
    result.album_action = AlbumAction.HIDE

    if was_favorite:
        result.count(COUNT_FAVORITES, -1)
    count_review_change(result, before)
    result.changed = True
    log.info("photo: archived %s", photo)
    return result


def restore(photo: Photo, *, score: QualityScorer = quality_score) -> ReconcileResult:
    """Undo ``archive``. Album memberships stay hidden until re-added."""

    ensure_not_purged(photo, "restore")
    result = ReconcileResult(photo=photo)
    if photo.deleted_at is None:
        return result

    before = review_status(photo)
    photo.deleted_at = None
    rescore(photo, score)

    if _counts_as_favorite(photo):
        result.count(COUNT_FAVORITES, 1)
    count_review_change(result, before)
    result.changed = True
    log.info("photo: restored %s", photo)
    return result


def purge(photo: Photo, *, clock: Callable[[], datetime] = _utcnow) -> ReconcileResult:
    """Hard delete. The caller removes the row and every derived association."""

    ensure_not_purged(photo, "purge")
    result = ReconcileResult(photo=photo, purge=True, album_action=AlbumAction.REMOVE)

    before = review_status(photo)
    if _counts_as_favorite(photo):
        result.count(COUNT_FAVORITES, -1)
    if before is ReviewStatus.PENDING:
        result.count(COUNT_REVIEW, -1)

    now = clock()
    photo.deleted_at = photo.deleted_at or now
    photo.purged_at = now
    photo.quality = HIDDEN_QUALITY
    result.changed = True
    log.info("photo: purged %s", photo)
    return result
