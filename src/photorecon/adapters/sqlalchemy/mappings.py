"""SQLAlchemy table metadata for photo records and their associations."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
)

from photorecon.domain.model import (
    CELL_UNKNOWN_ID,
    COUNTRY_UNKNOWN,
    PLACE_UNKNOWN_ID,
    TITLE_UNKNOWN,
    LabelSource,
    Provenance,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class WallClockDateTime(TypeDecorator[datetime]):
    """Naive local time; any zone info is stripped before storing."""

    impl = DateTime(timezone=False)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value.replace(tzinfo=None)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)


def _provenance_column(name: str) -> Column[Provenance]:
    return Column(
        name,
        Enum(Provenance, native_enum=False),
        nullable=False,
        default=Provenance.ESTIMATE,
    )


# Lookup tables ----------------------------------------------------------------

camera_table = Table(
    "camera",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("make", String(255), nullable=False, default=""),
    Column("model", String(255), nullable=False, default=""),
    UniqueConstraint("make", "model"),
)

lens_table = Table(
    "lens",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("make", String(255), nullable=False, default=""),
    Column("model", String(255), nullable=False, default=""),
    UniqueConstraint("make", "model"),
)

place_table = Table(
    "place",
    metadata,
    Column("id", String(42), primary_key=True),
    Column("city", String(255), nullable=False, default=""),
    Column("country", String(2), nullable=False, default=COUNTRY_UNKNOWN),
    Column("country_name", String(255), nullable=False, default=""),
    Column("state", String(255), nullable=False, default=""),
    Column("keywords", Text, nullable=False, default=""),
)

cell_table = Table(
    "cell",
    metadata,
    Column("id", String(42), primary_key=True),
    Column("name", String(255), nullable=False, default=""),
    Column("category", String(64), nullable=False, default=""),
    Column("place_id", String(42), nullable=False, default=PLACE_UNKNOWN_ID),
)

label_table = Table(
    "label",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("slug", String(160), nullable=False, unique=True),
    Column("name", String(160), nullable=False),
    Column("priority", Integer, nullable=False, default=0),
    Column("deleted_at", UTCDateTime(), nullable=True),
)

keyword_table = Table(
    "keyword",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("word", String(64), nullable=False, unique=True),
    Column("skip", Boolean, nullable=False, default=False),
)

# Photo ------------------------------------------------------------------------

photo_table = Table(
    "photo",
    metadata,
    Column("id", UUIDColumnType, primary_key=True),
    Column("name", String(255), nullable=False, default=""),
    Column("path", String(1024), nullable=False, default=""),
    Column("original_name", String(1024), nullable=False, default=""),
    Column("title", String(255), nullable=False, default=TITLE_UNKNOWN),
    _provenance_column("title_source"),
    Column("description", Text, nullable=False, default=""),
    _provenance_column("description_source"),
    Column("taken_at", UTCDateTime(), nullable=True, index=True),
    Column("taken_at_local", WallClockDateTime(), nullable=True),
    Column("time_zone", String(64), nullable=False, default=""),
    _provenance_column("taken_source"),
    Column("year", Integer, nullable=False, index=True),
    Column("month", Integer, nullable=False),
    Column("day", Integer, nullable=False),
    Column("latitude", Float, nullable=False, default=0.0),
    Column("longitude", Float, nullable=False, default=0.0),
    Column("altitude", Integer, nullable=False, default=0),
    _provenance_column("location_source"),
    Column("cell_id", String(42), nullable=False, default=CELL_UNKNOWN_ID, index=True),
    Column("place_id", String(42), nullable=False, default=PLACE_UNKNOWN_ID, index=True),
    Column("cell_accuracy", Integer, nullable=False, default=0),
    Column("country", String(2), nullable=False, default=COUNTRY_UNKNOWN),
    Column("camera_id", Integer, ForeignKey("camera.id"), nullable=True),
    Column("lens_id", Integer, ForeignKey("lens.id"), nullable=True),
    _provenance_column("camera_source"),
    Column("camera_serial", String(255), nullable=False, default=""),
    Column("focal_length", Integer, nullable=False, default=0),
    Column("f_number", Float, nullable=False, default=0.0),
    Column("iso", Integer, nullable=False, default=0),
    Column("exposure", String(64), nullable=False, default=""),
    Column("favorite", Boolean, nullable=False, default=False),
    Column("private", Boolean, nullable=False, default=False),
    Column("resolution", Integer, nullable=False, default=0),
    Column("quality", Integer, nullable=False, default=0),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=True),
    Column("edited_at", UTCDateTime(), nullable=True),
    Column("checked_at", UTCDateTime(), nullable=True),
    Column("deleted_at", UTCDateTime(), nullable=True, index=True),
)

details_table = Table(
    "details",
    metadata,
    Column(
        "photo_id", UUIDColumnType, ForeignKey("photo.id", ondelete="CASCADE"), primary_key=True
    ),
    Column("keywords", Text, nullable=False, default=""),
    Column("subject", String(255), nullable=False, default=""),
    Column("artist", String(255), nullable=False, default=""),
    Column("copyright", String(255), nullable=False, default=""),
    Column("notes", Text, nullable=False, default=""),
)

# Associations -----------------------------------------------------------------

photo_label_table = Table(
    "photo_label",
    metadata,
    Column(
        "photo_id", UUIDColumnType, ForeignKey("photo.id", ondelete="CASCADE"), primary_key=True
    ),
    Column("label_id", Integer, ForeignKey("label.id", ondelete="CASCADE"), primary_key=True),
    Column("uncertainty", Integer, nullable=False, default=0),
    Column("source", Enum(LabelSource, native_enum=False), nullable=False),
)

photo_keyword_table = Table(
    "photo_keyword",
    metadata,
    Column(
        "photo_id", UUIDColumnType, ForeignKey("photo.id", ondelete="CASCADE"), primary_key=True
    ),
    Column(
        "keyword_id", Integer, ForeignKey("keyword.id", ondelete="CASCADE"), primary_key=True
    ),
)

photo_album_table = Table(
    "photo_album",
    metadata,
    Column("album_uid", String(42), primary_key=True),
    Column(
        "photo_id", UUIDColumnType, ForeignKey("photo.id", ondelete="CASCADE"), primary_key=True
    ),
    Column("hidden", Boolean, nullable=False, default=False),
    Column("created_at", UTCDateTime(), nullable=False, default=lambda: datetime.now(tz=UTC)),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the photo metadata."""

    log.info("Creating all tables")
    metadata.create_all(engine)
