"""Pydantic models describing JSON signal batches."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime  # noqa: TC003
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from photorecon.domain.model import COUNTRY_UNKNOWN, LabelSource, Provenance

Uncertainty = Annotated[int, Field(ge=0, le=100)]


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class SignalBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EquipmentPayload(SignalBaseModel):
    make: str = ""
    model: str = ""


class PlacePayload(SignalBaseModel):
    id: str
    city: str = ""
    country: str = COUNTRY_UNKNOWN
    country_name: str = Field(default="", alias="countryName")
    state: str = ""
    keywords: str = ""


class CellPayload(SignalBaseModel):
    id: str
    name: str = ""
    category: str = ""
    place: PlacePayload | None = None


class LabelPayload(SignalBaseModel):
    name: str
    priority: int = 0
    uncertainty: Uncertainty = 0
    source: LabelSource = LabelSource.IMAGE
    categories: list[str] = Field(default_factory=list)


class DetailsPayload(SignalBaseModel):
    keywords: str | None = None
    subject: str | None = None
    artist: str | None = None
    copyright: str | None = None
    notes: str | None = None


class EditPayload(SignalBaseModel):
    title: str | None = None
    description: str | None = None
    taken_at: datetime | None = None
    taken_at_local: datetime | None = None
    time_zone: str | None = None
    year: int | None = None
    month: int | None = None
    day: int | None = None
    latitude: float | None = None
    longitude: float | None = None
    altitude: int | None = None
    camera: EquipmentPayload | None = None
    lens: EquipmentPayload | None = None
    focal_length: int | None = None
    f_number: float | None = None
    iso: int | None = None
    exposure: str | None = None
    favorite: bool | None = None
    private: bool | None = None
    details: DetailsPayload | None = None

    _normalize_time = field_validator("taken_at", "taken_at_local", mode="before")(_blank_to_none)


class MetadataPayload(SignalBaseModel):
    source: Provenance = Provenance.META
    title: str = ""
    description: str = ""
    taken_at: datetime | None = None
    taken_at_local: datetime | None = None
    time_zone: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    altitude: int = 0
    camera: EquipmentPayload | None = None
    lens: EquipmentPayload | None = None
    camera_serial: str = ""
    focal_length: int = 0
    f_number: float = 0.0
    iso: int = 0
    exposure: str = ""
    keywords: str = ""
    subject: str = ""
    artist: str = ""
    copyright: str = ""
    resolution: int = 0

    _normalize_time = field_validator("taken_at", "taken_at_local", mode="before")(_blank_to_none)

    @field_validator("source", mode="before")
    @classmethod
    def _parse_source(cls, value: object) -> object:
        if isinstance(value, str):
            return Provenance.parse(value)
        return value


class GeocodePayload(SignalBaseModel):
    cell: CellPayload | None = None
    place: PlacePayload | None = None
    cell_id: str = ""
    place_id: str = ""
    cell_accuracy: int = 0
    time_zone: str = ""
    keywords: list[str] = Field(default_factory=list)
    labels: list[LabelPayload] = Field(default_factory=list)


class ClassificationPayload(SignalBaseModel):
    labels: list[LabelPayload] = Field(default_factory=list)


class SignalBatch(SignalBaseModel):
    edit: EditPayload | None = None
    metadata: list[MetadataPayload] = Field(default_factory=list)
    geocode: GeocodePayload | None = None
    classification: ClassificationPayload | None = None


SignalBatchInput = SignalBatch | Mapping[str, object] | str | bytes
