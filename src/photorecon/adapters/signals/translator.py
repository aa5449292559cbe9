"""Translate JSON signal batches into domain signals."""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING

from photorecon.domain.model import (
    UNKNOWN_CAMERA,
    UNKNOWN_LENS,
    UNKNOWN_PLACE,
    Camera,
    Cell,
    ClassifiedLabel,
    Labels,
    Lens,
    Place,
)
from photorecon.domain.reconciliation import (
    ClassificationResult,
    DetailsEdit,
    ExtractedMetadata,
    GeocodeResult,
    PhotoEdit,
    Signals,
)

from .schema import SignalBatch, SignalBatchInput

if TYPE_CHECKING:
    from photorecon.domain.model import CameraRef, LensRef, PlaceRef

    from .schema import (
        CellPayload,
        ClassificationPayload,
        EditPayload,
        EquipmentPayload,
        GeocodePayload,
        LabelPayload,
        MetadataPayload,
        PlacePayload,
    )

log = getLogger(__name__)


def _ensure_batch(raw: SignalBatchInput) -> SignalBatch:
    if isinstance(raw, SignalBatch):
        return raw
    if isinstance(raw, Mapping):
        return SignalBatch.model_validate(raw)
    return SignalBatch.model_validate_json(raw)


def parse_signals(raw: SignalBatchInput) -> Signals:
    """Validate ``raw`` and return the domain signals it describes.

    Raises ``pydantic.ValidationError`` for malformed payloads.
    """

    batch = _ensure_batch(raw)
    signals = Signals(
        edit=_edit(batch.edit) if batch.edit is not None else None,
        metadata=tuple(_metadata(item) for item in batch.metadata),
        geocode=_geocode(batch.geocode) if batch.geocode is not None else None,
        classification=(
            _classification(batch.classification) if batch.classification is not None else None
        ),
    )
    if signals.is_empty():
        log.warning("Signal batch contains no signals")
    return signals


def _camera(payload: EquipmentPayload | None) -> CameraRef | None:
    if payload is None:
        return None
    if not (payload.make or payload.model):
        return UNKNOWN_CAMERA
    return Camera(make=payload.make.strip(), model=payload.model.strip())


def _lens(payload: EquipmentPayload | None) -> LensRef | None:
    if payload is None:
        return None
    if not (payload.make or payload.model):
        return UNKNOWN_LENS
    return Lens(make=payload.make.strip(), model=payload.model.strip())


def _edit(payload: EditPayload) -> PhotoEdit:
    details = payload.details
    return PhotoEdit(
        title=payload.title,
        description=payload.description,
        taken_at=payload.taken_at,
        taken_at_local=payload.taken_at_local,
        time_zone=payload.time_zone,
        year=payload.year,
        month=payload.month,
        day=payload.day,
        latitude=payload.latitude,
        longitude=payload.longitude,
        altitude=payload.altitude,
        camera=_camera(payload.camera),
        lens=_lens(payload.lens),
        focal_length=payload.focal_length,
        f_number=payload.f_number,
        iso=payload.iso,
        exposure=payload.exposure,
        favorite=payload.favorite,
        private=payload.private,
        details=(
            DetailsEdit(
                keywords=details.keywords,
                subject=details.subject,
                artist=details.artist,
                copyright=details.copyright,
                notes=details.notes,
            )
            if details is not None
            else None
        ),
    )


def _metadata(payload: MetadataPayload) -> ExtractedMetadata:
    return ExtractedMetadata(
        source=payload.source,
        title=payload.title,
        description=payload.description,
        taken_at=payload.taken_at,
        taken_at_local=payload.taken_at_local,
        time_zone=payload.time_zone.strip(),
        latitude=payload.latitude,
        longitude=payload.longitude,
        altitude=payload.altitude,
        camera=_camera(payload.camera),
        lens=_lens(payload.lens),
        camera_serial=payload.camera_serial,
        focal_length=payload.focal_length,
        f_number=payload.f_number,
        iso=payload.iso,
        exposure=payload.exposure,
        keywords=payload.keywords,
        subject=payload.subject,
        artist=payload.artist,
        copyright=payload.copyright,
        resolution=payload.resolution,
    )


def _labels(payloads: list[LabelPayload]) -> Labels:
    return Labels.of(
        ClassifiedLabel(
            name=label.name.strip(),
            priority=label.priority,
            uncertainty=label.uncertainty,
            source=label.source,
            categories=tuple(label.categories),
        )
        for label in payloads
        if label.name.strip()
    )


def _place(payload: PlacePayload | None) -> PlaceRef:
    if payload is None:
        return UNKNOWN_PLACE
    return Place(
        id=payload.id,
        city=payload.city,
        country=payload.country,
        country_name=payload.country_name,
        state=payload.state,
        keywords=payload.keywords,
    )


def _cell(payload: CellPayload) -> Cell:
    return Cell(
        id=payload.id,
        name=payload.name,
        category=payload.category,
        place=_place(payload.place),
    )


def _geocode(payload: GeocodePayload) -> GeocodeResult:
    return GeocodeResult(
        cell=_cell(payload.cell) if payload.cell is not None else None,
        place=_place(payload.place) if payload.place is not None else None,
        cell_id=payload.cell_id,
        place_id=payload.place_id,
        cell_accuracy=payload.cell_accuracy,
        time_zone=payload.time_zone.strip(),
        keywords=tuple(payload.keywords),
        labels=_labels(payload.labels),
    )


def _classification(payload: ClassificationPayload) -> ClassificationResult:
    return ClassificationResult(labels=_labels(payload.labels))
