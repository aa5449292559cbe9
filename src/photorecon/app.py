"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from photorecon.adapters.events import LoggingEventSink, publish_counters
from photorecon.adapters.keywords import SimpleKeywordTokenizer
from photorecon.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyReconcileUnitOfWork,
    is_started,
    startup,
)
from photorecon.config import ReconcileConfig, get_reconcile_config
from photorecon.domain.errors import PhotoNotFoundError
from photorecon.domain.model import Photo, new_photo
from photorecon.domain.ports import ReconcileUnitOfWork
from photorecon.domain.reconciliation import (
    KeyedLock,
    ReconcileResult,
    Reconciler,
    Signals,
    apply_intents,
    approve,
    archive,
    purge,
    restore,
    set_favorite,
)

if TYPE_CHECKING:
    from uuid import UUID

    from photorecon.domain.ports import EventSink, ReconcileRepositories

UnitOfWorkFactory = Callable[[], ReconcileUnitOfWork]
Transition = Callable[[Photo], ReconcileResult]

log = getLogger(__name__)

_PHOTO_LOCKS: KeyedLock[UUID] = KeyedLock()


def _ensure_started(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
    return SqlAlchemyReconcileUnitOfWork


def build_reconciler(
    repositories: ReconcileRepositories, *, config: ReconcileConfig | None = None
) -> Reconciler:
    """Wire the reconciliation engine to the repositories of one unit of work."""

    effective_config = config or get_reconcile_config()
    return Reconciler(
        tokenizer=SimpleKeywordTokenizer(),
        labels=repositories.labels,
        locations=repositories.locations,
        year_max=effective_config.year_max,
        title_max=effective_config.title_max,
    )


def _report(result: ReconcileResult) -> None:
    for error in result.errors:
        log.error("photo %s: %s", result.photo, error)
    if result.title_error is not None:
        log.info("%s", result.title_error)


def create_photo(
    *,
    name: str = "",
    path: str = "",
    original_name: str = "",
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: ReconcileConfig | None = None,
) -> Photo:
    """Store a new photo record with a title derived from its file name."""

    effective_uow = _ensure_started(unit_of_work_factory)
    photo = new_photo(name=name, path=path, original_name=original_name)
    photo.assign_id()

    with effective_uow() as uow:
        repositories = uow.repositories
        repositories.photos.add(photo)
        result = build_reconciler(repositories, config=config).reconcile(photo, Signals())
        apply_intents(result, repositories)
        uow.commit()

    _report(result)
    log.info("Created photo %s titled %r", photo.id, photo.title)
    return photo


def get_photo(photo_id: UUID, *, unit_of_work_factory: UnitOfWorkFactory | None = None) -> Photo:
    effective_uow = _ensure_started(unit_of_work_factory)
    with effective_uow() as uow:
        photo = uow.repositories.photos.get(photo_id)
    if photo is None:
        raise PhotoNotFoundError(photo_id)
    return photo


def reconcile_photo(
    photo_id: UUID,
    signals: Signals,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    events: EventSink | None = None,
    config: ReconcileConfig | None = None,
) -> ReconcileResult:
    """Load a photo, merge ``signals`` into it and persist the outcome in one transaction.

    Passes for the same photo id are serialised. Counter events are published
    only after the commit succeeded.
    """

    effective_uow = _ensure_started(unit_of_work_factory)
    log.info("Reconciling photo %s", photo_id)

    with _PHOTO_LOCKS.hold(photo_id), effective_uow() as uow:
        repositories = uow.repositories
        photo = repositories.photos.get(photo_id)
        if photo is None:
            raise PhotoNotFoundError(photo_id)

        result = build_reconciler(repositories, config=config).reconcile(photo, signals)
        apply_intents(result, repositories)
        uow.commit()

    publish_counters(events or LoggingEventSink(), result.counters)
    _report(result)
    log.info(
        "Finished reconciling photo %s: changed=%s, title=%r, errors=%s",
        photo_id,
        result.changed,
        result.photo.title,
        len(result.errors),
    )
    return result


def _transition(
    photo_id: UUID,
    transition: Transition,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None,
    events: EventSink | None,
) -> ReconcileResult:
    effective_uow = _ensure_started(unit_of_work_factory)

    with _PHOTO_LOCKS.hold(photo_id), effective_uow() as uow:
        repositories = uow.repositories
        photo = repositories.photos.get(photo_id)
        if photo is None:
            raise PhotoNotFoundError(photo_id)

        result = transition(photo)
        if result.changed:
            apply_intents(result, repositories)
            uow.commit()

    publish_counters(events or LoggingEventSink(), result.counters)
    _report(result)
    return result


def archive_photo(
    photo_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    events: EventSink | None = None,
) -> ReconcileResult:
    return _transition(
        photo_id, archive, unit_of_work_factory=unit_of_work_factory, events=events
    )


def restore_photo(
    photo_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    events: EventSink | None = None,
) -> ReconcileResult:
    return _transition(
        photo_id, restore, unit_of_work_factory=unit_of_work_factory, events=events
    )


def purge_photo(
    photo_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    events: EventSink | None = None,
) -> ReconcileResult:
    return _transition(photo_id, purge, unit_of_work_factory=unit_of_work_factory, events=events)


def approve_photo(
    photo_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    events: EventSink | None = None,
) -> ReconcileResult:
    return _transition(
        photo_id, approve, unit_of_work_factory=unit_of_work_factory, events=events
    )


def favorite_photo(
    photo_id: UUID,
    *,
    favorite: bool = True,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    events: EventSink | None = None,
) -> ReconcileResult:
    return _transition(
        photo_id,
        lambda photo: set_favorite(photo, favorite),
        unit_of_work_factory=unit_of_work_factory,
        events=events,
    )
