"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, insert, select, update

from photorecon.adapters.sqlalchemy.mappings import (
    camera_table,
    cell_table,
    details_table,
    keyword_table,
    label_table,
    lens_table,
    photo_album_table,
    photo_keyword_table,
    photo_label_table,
    photo_table,
    place_table,
)
from photorecon.domain.errors import MissingIdentityError
from photorecon.domain.model import (
    UNCERTAIN,
    UNKNOWN_CAMERA,
    UNKNOWN_CELL,
    UNKNOWN_LENS,
    UNKNOWN_PLACE,
    Camera,
    Cell,
    ClassifiedLabel,
    Details,
    Keyword,
    Label,
    Labels,
    Lens,
    Photo,
    Place,
)
from photorecon.domain.text import slug

if TYPE_CHECKING:
    from collections.abc import Collection
    from uuid import UUID

    from sqlalchemy import Row, Table
    from sqlalchemy.orm import Session

    from photorecon.domain.model import CameraRef, CellRef, LabelSource, LensRef, PlaceRef

_PHOTO_COLUMNS = (
    "name",
    "path",
    "original_name",
    "title",
    "title_source",
    "description",
    "description_source",
    "taken_at",
    "taken_at_local",
    "time_zone",
    "taken_source",
    "year",
    "month",
    "day",
    "latitude",
    "longitude",
    "altitude",
    "location_source",
    "cell_accuracy",
    "country",
    "camera_source",
    "camera_serial",
    "focal_length",
    "f_number",
    "iso",
    "exposure",
    "favorite",
    "private",
    "resolution",
    "quality",
    "created_at",
    "updated_at",
    "edited_at",
    "checked_at",
    "deleted_at",
)
_DETAILS_COLUMNS = ("keywords", "subject", "artist", "copyright", "notes")


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class SqlAlchemyLocationResolver:
    """Resolve cells and places stored by earlier geocode passes."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def place(self, place_id: str) -> PlaceRef:
        row = self.session.execute(
            select(place_table).where(place_table.c.id == place_id)
        ).one_or_none()
        if row is None:
            return UNKNOWN_PLACE
        return Place(
            id=row.id,
            city=row.city,
            country=row.country,
            country_name=row.country_name,
            state=row.state,
            keywords=row.keywords,
        )

    def cell(self, cell_id: str) -> CellRef:
        row = self.session.execute(
            select(cell_table).where(cell_table.c.id == cell_id)
        ).one_or_none()
        if row is None:
            return UNKNOWN_CELL
        return Cell(id=row.id, name=row.name, category=row.category, place=self.place(row.place_id))

    def store(self, cell: CellRef, place: PlaceRef) -> None:
        """Remember resolved locations so later lookups by id succeed."""

        for known_place in (place, cell.place):
            if isinstance(known_place, Place):
                _upsert(
                    self.session,
                    place_table,
                    known_place.id,
                    {
                        "city": known_place.city,
                        "country": known_place.country,
                        "country_name": known_place.country_name,
                        "state": known_place.state,
                        "keywords": known_place.keywords,
                    },
                )
        if isinstance(cell, Cell):
            _upsert(
                self.session,
                cell_table,
                cell.id,
                {"name": cell.name, "category": cell.category, "place_id": cell.place.id},
            )


def _upsert(session: Session, table: Table, row_id: object, values: dict[str, Any]) -> None:
    result = session.execute(update(table).where(table.c.id == row_id).values(**values))
    if cast("Any", result).rowcount == 0:
        session.execute(insert(table).values(id=row_id, **values))


class SqlAlchemyPhotoRepository:
    def __init__(self, session: Session) -> None:
        self.session = session
        self._locations = SqlAlchemyLocationResolver(session)

    def get(self, photo_id: UUID) -> Photo | None:
        row = self.session.execute(
            select(photo_table).where(photo_table.c.id == photo_id)
        ).one_or_none()
        if row is None:
            return None

        values = {name: getattr(row, name) for name in _PHOTO_COLUMNS}
        return Photo(
            id=row.id,
            cell=self._locations.cell(row.cell_id),
            place=self._locations.place(row.place_id),
            camera=self._camera(row.camera_id),
            lens=self._lens(row.lens_id),
            details=self._details(photo_id),
            labels=self._labels(photo_id),
            **values,
        )

    def add(self, photo: Photo) -> None:
        if photo.id is None:
            photo.assign_id()
        self.session.execute(insert(photo_table).values(id=photo.id, **self._row(photo)))
        self.session.execute(
            insert(details_table).values(photo_id=photo.id, **self._details_row(photo))
        )

    def save(self, photo: Photo) -> None:
        """Update an existing row, or insert it when the photo is not stored yet."""

        if photo.id is None:
            raise MissingIdentityError("save to database")

        photo.updated_at = _utcnow()
        result = self.session.execute(
            update(photo_table).where(photo_table.c.id == photo.id).values(**self._row(photo))
        )
        if cast("Any", result).rowcount == 0:
            self.session.execute(insert(photo_table).values(id=photo.id, **self._row(photo)))

        _upsert_details(self.session, photo.id, self._details_row(photo))

    def delete(self, photo: Photo) -> None:
        if photo.id is None:
            raise MissingIdentityError("delete")
        self.session.execute(delete(details_table).where(details_table.c.photo_id == photo.id))
        self.session.execute(delete(photo_table).where(photo_table.c.id == photo.id))

    def _row(self, photo: Photo) -> dict[str, Any]:
        self._locations.store(photo.cell, photo.place)
        values = {name: getattr(photo, name) for name in _PHOTO_COLUMNS}
        values["cell_id"] = photo.cell.id
        values["place_id"] = photo.place.id
        values["camera_id"] = self._equipment_id(camera_table, photo.camera)
        values["lens_id"] = self._equipment_id(lens_table, photo.lens)
        return values

    @staticmethod
    def _details_row(photo: Photo) -> dict[str, Any]:
        return {name: getattr(photo.details, name) for name in _DETAILS_COLUMNS}

    def _equipment_id(self, table: Table, equipment: CameraRef | LensRef) -> int | None:
        if not isinstance(equipment, Camera | Lens):
            return None
        existing = self.session.execute(
            select(table.c.id)
            .where(table.c.make == equipment.make)
            .where(table.c.model == equipment.model)
        ).scalar_one_or_none()
        if existing is not None:
            return existing
        result = self.session.execute(
            insert(table).values(make=equipment.make, model=equipment.model)
        )
        return cast("int", result.inserted_primary_key[0])

    def _camera(self, camera_id: int | None) -> CameraRef:
        row = self._equipment_row(camera_table, camera_id)
        if row is None:
            return UNKNOWN_CAMERA
        return Camera(id=row.id, make=row.make, model=row.model)

    def _lens(self, lens_id: int | None) -> LensRef:
        row = self._equipment_row(lens_table, lens_id)
        if row is None:
            return UNKNOWN_LENS
        return Lens(id=row.id, make=row.make, model=row.model)

    def _equipment_row(self, table: Table, row_id: int | None) -> Row[Any] | None:
        if row_id is None:
            return None
        return self.session.execute(select(table).where(table.c.id == row_id)).one_or_none()

    def _details(self, photo_id: UUID) -> Details:
        row = self.session.execute(
            select(details_table).where(details_table.c.photo_id == photo_id)
        ).one_or_none()
        if row is None:
            return Details()
        return Details(**{name: getattr(row, name) for name in _DETAILS_COLUMNS})

    def _labels(self, photo_id: UUID) -> Labels:
        stmt = (
            select(
                label_table.c.name,
                label_table.c.priority,
                photo_label_table.c.uncertainty,
                photo_label_table.c.source,
            )
            .join(label_table, label_table.c.id == photo_label_table.c.label_id)
            .where(photo_label_table.c.photo_id == photo_id)
            .order_by(photo_label_table.c.uncertainty.asc(), photo_label_table.c.label_id.desc())
        )
        return Labels.of(
            ClassifiedLabel(
                name=row.name,
                priority=row.priority,
                uncertainty=row.uncertainty,
                source=row.source,
            )
            for row in self.session.execute(stmt)
        )


def _upsert_details(session: Session, photo_id: UUID, values: dict[str, Any]) -> None:
    result = session.execute(
        update(details_table).where(details_table.c.photo_id == photo_id).values(**values)
    )
    if cast("Any", result).rowcount == 0:
        session.execute(insert(details_table).values(photo_id=photo_id, **values))


class SqlAlchemyLabelRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find(self, name: str) -> Label | None:
        row = self.session.execute(
            select(label_table).where(label_table.c.slug == slug(name))
        ).one_or_none()
        if row is None:
            return None
        return _label(row)

    def find_or_create(self, name: str, *, priority: int = 0) -> Label:
        if (label := self.find(name)) is not None:
            return label
        name = name.strip()
        result = self.session.execute(
            insert(label_table).values(slug=slug(name), name=name, priority=priority)
        )
        return Label(
            id=cast("int", result.inserted_primary_key[0]),
            name=name,
            slug=slug(name),
            priority=priority,
        )

    def attach(
        self, photo_id: UUID, label_id: int, *, uncertainty: int, source: LabelSource
    ) -> None:
        """Link a label; an existing link only changes when the new one is more certain."""

        current = self.session.execute(
            select(photo_label_table.c.uncertainty)
            .where(photo_label_table.c.photo_id == photo_id)
            .where(photo_label_table.c.label_id == label_id)
        ).scalar_one_or_none()

        if current is None:
            self.session.execute(
                insert(photo_label_table).values(
                    photo_id=photo_id, label_id=label_id, uncertainty=uncertainty, source=source
                )
            )
        elif uncertainty < current < UNCERTAIN:
            self.session.execute(
                update(photo_label_table)
                .where(photo_label_table.c.photo_id == photo_id)
                .where(photo_label_table.c.label_id == label_id)
                .values(uncertainty=uncertainty, source=source)
            )

    def detach_not_in(
        self, photo_id: UUID, keep_ids: Collection[int], *, source: LabelSource
    ) -> int:
        stmt = (
            delete(photo_label_table)
            .where(photo_label_table.c.photo_id == photo_id)
            .where(photo_label_table.c.source == source)
        )
        if keep_ids:
            stmt = stmt.where(photo_label_table.c.label_id.not_in(list(keep_ids)))
        return cast("Any", self.session.execute(stmt)).rowcount

    def remove_all(self, photo_id: UUID) -> None:
        self.session.execute(
            delete(photo_label_table).where(photo_label_table.c.photo_id == photo_id)
        )

    def delete(self, name: str) -> None:
        """Flag a label as deleted; it stays in the catalog but is no longer attached."""

        self.session.execute(
            update(label_table).where(label_table.c.slug == slug(name)).values(deleted_at=_utcnow())
        )


def _label(row: Row[Any]) -> Label:
    return Label(
        id=row.id,
        name=row.name,
        slug=row.slug,
        priority=row.priority,
        deleted=row.deleted_at is not None,
    )


class SqlAlchemyKeywordRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_or_create(self, word: str) -> Keyword:
        word = word.strip().casefold()
        row = self.session.execute(
            select(keyword_table).where(keyword_table.c.word == word)
        ).one_or_none()
        if row is not None:
            return Keyword(id=row.id, word=row.word, skip=row.skip)
        result = self.session.execute(insert(keyword_table).values(word=word, skip=False))
        return Keyword(id=cast("int", result.inserted_primary_key[0]), word=word)

    def attach(self, photo_id: UUID, keyword_id: int) -> None:
        exists = self.session.execute(
            select(photo_keyword_table.c.keyword_id)
            .where(photo_keyword_table.c.photo_id == photo_id)
            .where(photo_keyword_table.c.keyword_id == keyword_id)
        ).scalar_one_or_none()
        if exists is None:
            self.session.execute(
                insert(photo_keyword_table).values(photo_id=photo_id, keyword_id=keyword_id)
            )

    def detach_not_in(self, photo_id: UUID, keep_ids: Collection[int]) -> int:
        stmt = delete(photo_keyword_table).where(photo_keyword_table.c.photo_id == photo_id)
        if keep_ids:
            stmt = stmt.where(photo_keyword_table.c.keyword_id.not_in(list(keep_ids)))
        return cast("Any", self.session.execute(stmt)).rowcount

    def remove_all(self, photo_id: UUID) -> None:
        self.session.execute(
            delete(photo_keyword_table).where(photo_keyword_table.c.photo_id == photo_id)
        )

    def words_for(self, photo_id: UUID) -> list[str]:
        stmt = (
            select(keyword_table.c.word)
            .join(photo_keyword_table, photo_keyword_table.c.keyword_id == keyword_table.c.id)
            .where(photo_keyword_table.c.photo_id == photo_id)
            .order_by(keyword_table.c.word)
        )
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyAlbumRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add_photo(self, album_uid: str, photo_id: UUID) -> None:
        result = self.session.execute(
            update(photo_album_table)
            .where(photo_album_table.c.album_uid == album_uid)
            .where(photo_album_table.c.photo_id == photo_id)
            .values(hidden=False)
        )
        if cast("Any", result).rowcount == 0:
            self.session.execute(
                insert(photo_album_table).values(
                    album_uid=album_uid, photo_id=photo_id, hidden=False, created_at=_utcnow()
                )
            )

    def hide_photo(self, photo_id: UUID) -> int:
        result = self.session.execute(
            update(photo_album_table)
            .where(photo_album_table.c.photo_id == photo_id)
            .values(hidden=True)
        )
        return cast("Any", result).rowcount

    def remove_photo(self, photo_id: UUID) -> int:
        result = self.session.execute(
            delete(photo_album_table).where(photo_album_table.c.photo_id == photo_id)
        )
        return cast("Any", result).rowcount

    def memberships(self, photo_id: UUID) -> dict[str, bool]:
        """Album uid to hidden flag."""

        rows = self.session.execute(
            select(photo_album_table.c.album_uid, photo_album_table.c.hidden).where(
                photo_album_table.c.photo_id == photo_id
            )
        )
        return {row.album_uid: row.hidden for row in rows}


if TYPE_CHECKING:
    from photorecon.domain.ports import (
        AlbumRepository,
        KeywordRepository,
        LabelRepository,
        LocationResolver,
        PhotoRepository,
    )

    _session_stub = cast("Session", object())
    _photo_repo: PhotoRepository = SqlAlchemyPhotoRepository(_session_stub)
    _label_repo: LabelRepository = SqlAlchemyLabelRepository(_session_stub)
    _keyword_repo: KeywordRepository = SqlAlchemyKeywordRepository(_session_stub)
    _album_repo: AlbumRepository = SqlAlchemyAlbumRepository(_session_stub)
    _resolver: LocationResolver = SqlAlchemyLocationResolver(_session_stub)
