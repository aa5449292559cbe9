"""Carry out the intents of a reconciliation pass against repositories.

Runs inside the caller's unit of work and never commits. Saving the photo row
is the one step that must succeed; association updates are isolated, each in its
own savepoint, and their failures collected on the result.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from photorecon.domain.errors import MissingIdentityError
from photorecon.domain.reconciliation.intents import AlbumAction
from photorecon.domain.reconciliation.steps import isolated

if TYPE_CHECKING:
    from uuid import UUID

    from photorecon.domain.ports import ReconcileRepositories
    from photorecon.domain.reconciliation.intents import LabelIntent, ReconcileResult

log = logging.getLogger(__name__)


def apply_intents(result: ReconcileResult, repositories: ReconcileRepositories) -> ReconcileResult:
    photo = result.photo
    if photo.id is None:
        raise MissingIdentityError("save to database")
    photo_id = photo.id

    if result.purge:
        _purge(photo_id, repositories)
        repositories.photos.delete(photo)
        return result

    repositories.photos.save(photo)

    for intent in result.labels:
        with (
            isolated(f"attach label {intent.name!r}", result.errors, photo),
            repositories.savepoint(),
        ):
            _attach_label(photo_id, intent, repositories)

    for stale in result.stale_labels:
        with (
            isolated(f"detach {stale.source} labels", result.errors, photo),
            repositories.savepoint(),
        ):
            removed = repositories.labels.detach_not_in(
                photo_id, stale.keep_ids, source=stale.source
            )
            if removed:
                log.debug("apply: removed %d stale %s labels from %s", removed, stale.source, photo)

    if result.keywords is not None:
        with isolated("index keywords", result.errors, photo), repositories.savepoint():
            _index_keywords(photo_id, result.keywords, repositories)

    if result.album_action is AlbumAction.HIDE:
        with isolated("hide album entries", result.errors, photo), repositories.savepoint():
            repositories.albums.hide_photo(photo_id)

    return result


def _attach_label(photo_id: UUID, intent: LabelIntent, repositories: ReconcileRepositories) -> None:
    label_id = intent.label_id
    if label_id is None:
        label = repositories.labels.find_or_create(intent.name, priority=intent.priority)
        if label.deleted:
            log.debug("apply: skipping deleted label %r", label.name)
            return
        label_id = label.id

    repositories.labels.attach(
        photo_id, label_id, uncertainty=intent.uncertainty, source=intent.source
    )


def _index_keywords(
    photo_id: UUID, words: list[str], repositories: ReconcileRepositories
) -> None:
    keep: list[int] = []
    for word in words:
        keyword = repositories.keywords.find_or_create(word)
        if keyword.skip:
            continue
        keep.append(keyword.id)
        repositories.keywords.attach(photo_id, keyword.id)
    repositories.keywords.detach_not_in(photo_id, keep)


def _purge(photo_id: UUID, repositories: ReconcileRepositories) -> None:
    repositories.labels.remove_all(photo_id)
    repositories.keywords.remove_all(photo_id)
    repositories.albums.remove_photo(photo_id)
