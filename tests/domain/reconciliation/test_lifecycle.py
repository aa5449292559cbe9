from __future__ import annotations

import pytest

from photorecon.domain.errors import InvalidTransitionError
from photorecon.domain.model import ReviewStatus
from photorecon.domain.quality import HIDDEN_QUALITY
from photorecon.domain.reconciliation import (
    COUNT_FAVORITES,
    COUNT_REVIEW,
    AlbumAction,
    CounterIntent,
    approve,
    archive,
    purge,
    restore,
    review_status,
    set_favorite,
)
from tests.helpers.photos import FIXED_NOW, fixed_clock, make_photo


def test_favorite_counts_and_leaves_review() -> None:
    photo = make_photo(quality=1)

    result = set_favorite(photo, True)  # noqa: FBT003

    assert photo.favorite
    assert review_status(photo) is ReviewStatus.APPROVED
    assert result.counters == [CounterIntent(COUNT_FAVORITES, 1), CounterIntent(COUNT_REVIEW, -1)]
    assert result.changed


def test_unfavorite_private_photo_emits_no_favorite_counter() -> None:
    photo = make_photo(favorite=True, private=True, quality=4)

    result = set_favorite(photo, False)  # noqa: FBT003

    assert not photo.favorite
    assert CounterIntent(COUNT_FAVORITES, -1) not in result.counters
    assert CounterIntent(COUNT_REVIEW, 1) in result.counters


def test_repeating_favorite_changes_nothing() -> None:
    photo = make_photo(favorite=True)
    set_favorite(photo, True)  # noqa: FBT003

    result = set_favorite(photo, True)  # noqa: FBT003

    assert result.counters == []
    assert not result.changed


def test_approve_marks_photo_as_edited() -> None:
    photo = make_photo(quality=1)

    result = approve(photo, clock=fixed_clock)

    assert photo.edited_at == FIXED_NOW
    assert review_status(photo) is ReviewStatus.APPROVED
    assert result.counters == [CounterIntent(COUNT_REVIEW, -1)]


def test_approve_is_a_no_op_for_approved_photos() -> None:
    photo = make_photo(quality=5)

    result = approve(photo, clock=fixed_clock)

    assert not result.changed
    assert photo.edited_at is None


def test_archive_hides_photo_and_adjusts_counters() -> None:
    photo = make_photo(favorite=True, quality=4)

    result = archive(photo, clock=fixed_clock)

    assert photo.deleted_at == FIXED_NOW
    assert photo.quality == HIDDEN_QUALITY
    assert review_status(photo) is ReviewStatus.ARCHIVED
    assert result.album_action is AlbumAction.HIDE
    assert result.counters == [CounterIntent(COUNT_FAVORITES, -1)]


def test_archive_pending_photo_leaves_review() -> None:
    photo = make_photo(quality=1)

    result = archive(photo, clock=fixed_clock)

    assert result.counters == [CounterIntent(COUNT_REVIEW, -1)]


def test_archive_twice_is_a_no_op() -> None:
    photo = make_photo(quality=1)
    archive(photo, clock=fixed_clock)

    result = archive(photo, clock=fixed_clock)

    assert not result.changed
    assert result.album_action is None


def test_approve_archived_photo_is_rejected() -> None:
    photo = make_photo()
    archive(photo, clock=fixed_clock)

    with pytest.raises(InvalidTransitionError, match="archived"):
        approve(photo)


def test_restore_rescores_photo() -> None:
    photo = make_photo(favorite=True, quality=4)
    archive(photo, clock=fixed_clock)

    result = restore(photo)

    assert photo.deleted_at is None
    assert photo.quality >= 3
    assert result.counters == [CounterIntent(COUNT_FAVORITES, 1)]


def test_purge_is_terminal() -> None:
    photo = make_photo(quality=1)

    result = purge(photo, clock=fixed_clock)

    assert result.purge
    assert result.album_action is AlbumAction.REMOVE
    assert result.counters == [CounterIntent(COUNT_REVIEW, -1)]
    assert review_status(photo) is ReviewStatus.PURGED

    for operation in (restore, archive, approve):
        with pytest.raises(InvalidTransitionError, match="purged"):
            operation(photo)
    with pytest.raises(InvalidTransitionError):
        set_favorite(photo, True)  # noqa: FBT003


def test_counter_intent_event_payload() -> None:
    assert CounterIntent(COUNT_REVIEW, -1).as_event() == {"count": -1}
