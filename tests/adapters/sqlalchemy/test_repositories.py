"""Exercise the SQLAlchemy repositories against an in-memory SQLite database."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from sqlalchemy.orm import Session  # noqa: TC002

from photorecon.adapters.sqlalchemy import (
    SqlAlchemyAlbumRepository,
    SqlAlchemyKeywordRepository,
    SqlAlchemyLabelRepository,
    SqlAlchemyLocationResolver,
    SqlAlchemyPhotoRepository,
)
from photorecon.domain.errors import MissingIdentityError
from photorecon.domain.merge import set_title
from photorecon.domain.model import (
    UNKNOWN_CELL,
    UNKNOWN_LENS,
    Camera,
    LabelSource,
    Provenance,
)
from photorecon.domain.temporal import set_taken_at
from tests.helpers.photos import CENTRAL_PARK, NEW_YORK, make_photo


def test_photo_round_trip(sqlite_session: Session) -> None:
    repository = SqlAlchemyPhotoRepository(sqlite_session)
    photo = make_photo(
        "Wedding.jpg",
        cell=CENTRAL_PARK,
        place=NEW_YORK,
        country="us",
        latitude=40.78,
        longitude=-73.97,
        altitude=12,
        location_source=Provenance.META,
        camera=Camera(make="Canon", model="EOS 5D"),
        camera_source=Provenance.META,
        camera_serial="SN123",
    )
    set_title(photo, "Bridge / New York / 2019", Provenance.AUTO)
    set_taken_at(
        photo, datetime(2019, 8, 20, 20, 45, tzinfo=UTC), None, "America/New_York", Provenance.META
    )
    photo.details.keywords = "bridge, skyline"
    assert photo.id is not None

    repository.add(photo)
    sqlite_session.commit()

    loaded = repository.get(photo.id)

    assert loaded is not None
    assert loaded.title == "Bridge / New York / 2019"
    assert loaded.title_source is Provenance.AUTO
    assert loaded.taken_at == datetime(2019, 8, 20, 20, 45, tzinfo=UTC)
    assert loaded.taken_at_local == datetime(2019, 8, 20, 16, 45)
    assert loaded.time_zone == "America/New_York"
    assert (loaded.year, loaded.month, loaded.day) == (2019, 8, 20)
    assert loaded.cell == CENTRAL_PARK
    assert loaded.place == NEW_YORK
    assert isinstance(loaded.camera, Camera)
    assert loaded.camera.name == "Canon EOS 5D"
    assert loaded.lens is UNKNOWN_LENS
    assert loaded.camera_serial == "SN123"
    assert loaded.details.keywords == "bridge, skyline"
    assert loaded.created_at == photo.created_at


def test_save_updates_existing_row_and_reuses_equipment(sqlite_session: Session) -> None:
    repository = SqlAlchemyPhotoRepository(sqlite_session)
    photo = make_photo(camera=Camera(make="Canon", model="EOS 5D"))
    other = make_photo(camera=Camera(make="Canon", model="EOS 5D"))
    assert photo.id is not None
    assert other.id is not None
    repository.add(photo)
    repository.add(other)

    photo.favorite = True
    photo.cell = UNKNOWN_CELL
    repository.save(photo)
    sqlite_session.commit()

    loaded = repository.get(photo.id)
    assert loaded is not None
    assert loaded.favorite
    assert loaded.updated_at is not None
    other_loaded = repository.get(other.id)
    assert other_loaded is not None
    assert loaded.camera == other_loaded.camera


def test_save_inserts_unknown_photo_and_requires_identity(sqlite_session: Session) -> None:
    repository = SqlAlchemyPhotoRepository(sqlite_session)
    photo = make_photo()
    assert photo.id is not None

    repository.save(photo)

    assert repository.get(photo.id) is not None
    with pytest.raises(MissingIdentityError):
        repository.save(make_photo(with_id=False))


def test_delete_removes_row(sqlite_session: Session) -> None:
    repository = SqlAlchemyPhotoRepository(sqlite_session)
    photo = make_photo()
    assert photo.id is not None
    repository.add(photo)

    repository.delete(photo)

    assert repository.get(photo.id) is None


def test_labels_attach_keeps_the_more_certain_link(sqlite_session: Session) -> None:
    photos = SqlAlchemyPhotoRepository(sqlite_session)
    labels = SqlAlchemyLabelRepository(sqlite_session)
    photo = make_photo()
    assert photo.id is not None
    photos.add(photo)
    bridge = labels.find_or_create("Bridge", priority=1)

    labels.attach(photo.id, bridge.id, uncertainty=40, source=LabelSource.IMAGE)
    labels.attach(photo.id, bridge.id, uncertainty=60, source=LabelSource.IMAGE)
    labels.attach(photo.id, bridge.id, uncertainty=20, source=LabelSource.KEYWORD)

    loaded = photos.get(photo.id)
    assert loaded is not None
    (label,) = loaded.labels
    assert (label.name, label.priority, label.uncertainty) == ("Bridge", 1, 20)
    assert label.source is LabelSource.KEYWORD


def test_labels_are_found_by_slug(sqlite_session: Session) -> None:
    labels = SqlAlchemyLabelRepository(sqlite_session)
    created = labels.find_or_create("Golden Gate")

    assert labels.find("golden gate") == created
    assert labels.find_or_create("GOLDEN-GATE").id == created.id
    assert labels.find("Bay Bridge") is None

    labels.delete("Golden Gate")
    found = labels.find("Golden Gate")
    assert found is not None
    assert found.deleted


def test_detach_not_in_only_touches_one_source(sqlite_session: Session) -> None:
    photos = SqlAlchemyPhotoRepository(sqlite_session)
    labels = SqlAlchemyLabelRepository(sqlite_session)
    photo = make_photo()
    assert photo.id is not None
    photos.add(photo)
    beach = labels.find_or_create("Beach")
    sand = labels.find_or_create("Sand")
    tree = labels.find_or_create("Tree")
    labels.attach(photo.id, beach.id, uncertainty=25, source=LabelSource.KEYWORD)
    labels.attach(photo.id, sand.id, uncertainty=25, source=LabelSource.KEYWORD)
    labels.attach(photo.id, tree.id, uncertainty=10, source=LabelSource.IMAGE)

    removed = labels.detach_not_in(photo.id, {beach.id}, source=LabelSource.KEYWORD)

    assert removed == 1
    loaded = photos.get(photo.id)
    assert loaded is not None
    assert sorted(label.name for label in loaded.labels) == ["Beach", "Tree"]


def test_keyword_index(sqlite_session: Session) -> None:
    photos = SqlAlchemyPhotoRepository(sqlite_session)
    keywords = SqlAlchemyKeywordRepository(sqlite_session)
    photo = make_photo()
    assert photo.id is not None
    photos.add(photo)

    bridge = keywords.find_or_create("Bridge")
    york = keywords.find_or_create("york")
    keywords.attach(photo.id, bridge.id)
    keywords.attach(photo.id, bridge.id)
    keywords.attach(photo.id, york.id)
    assert keywords.find_or_create(" BRIDGE ").id == bridge.id
    assert keywords.words_for(photo.id) == ["bridge", "york"]

    assert keywords.detach_not_in(photo.id, [york.id]) == 1
    assert keywords.words_for(photo.id) == ["york"]

    keywords.remove_all(photo.id)
    assert keywords.words_for(photo.id) == []


def test_album_memberships_hide_and_remove(sqlite_session: Session) -> None:
    photos = SqlAlchemyPhotoRepository(sqlite_session)
    albums = SqlAlchemyAlbumRepository(sqlite_session)
    photo = make_photo()
    assert photo.id is not None
    photos.add(photo)
    albums.add_photo("album-1", photo.id)
    albums.add_photo("album-2", photo.id)

    assert albums.hide_photo(photo.id) == 2
    assert albums.memberships(photo.id) == {"album-1": True, "album-2": True}

    albums.add_photo("album-1", photo.id)
    assert albums.memberships(photo.id)["album-1"] is False

    assert albums.remove_photo(photo.id) == 2
    assert albums.memberships(photo.id) == {}


def test_location_resolver_stores_and_resolves(sqlite_session: Session) -> None:
    resolver = SqlAlchemyLocationResolver(sqlite_session)

    assert resolver.cell(CENTRAL_PARK.id) is UNKNOWN_CELL

    resolver.store(CENTRAL_PARK, NEW_YORK)
    resolver.store(CENTRAL_PARK, NEW_YORK)

    assert resolver.cell(CENTRAL_PARK.id) == CENTRAL_PARK
    assert resolver.place(NEW_YORK.id) == NEW_YORK
