"""Apply one batch of signals to a photo.

Signals are merged in a fixed order (edit, metadata, geocode, classification)
and followed by the derivation tail: date fields, keyword labels, title,
keyword index, quality score and review counters. Storage is never touched
here; label and keyword associations come back as intents.
"""

from __future__ import annotations

import logging
from dataclasses import astuple, dataclass, field, fields
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final

from photorecon.domain.errors import MissingIdentityError, TitleLockedError
from photorecon.domain.merge import (
    clear_description,
    clear_location,
    clear_title,
    set_camera,
    set_camera_serial,
    set_coordinates,
    set_description,
    set_exposure,
    set_lens,
    set_title,
)
from photorecon.domain.model import (
    COUNTRY_UNKNOWN,
    UNKNOWN_CELL,
    UNKNOWN_PLACE,
    Cell,
    ClassifiedLabel,
    LabelSource,
    Labels,
    Place,
    Provenance,
    is_known_place,
)
from photorecon.domain.quality import quality_score
from photorecon.domain.reconciliation.intents import (
    COUNT_REVIEW,
    LabelIntent,
    ReconcileResult,
    StaleLabels,
)
from photorecon.domain.reconciliation.lifecycle import (
    count_review_change,
    ensure_not_purged,
    rescore,
    review_status,
    set_favorite,
)
from photorecon.domain.reconciliation.signals import (
    ClassificationResult,
    ExtractedMetadata,
    GeocodeResult,
    PhotoEdit,
    Signals,
)
from photorecon.domain.reconciliation.steps import isolated
from photorecon.domain.temporal import (
    DEFAULT_YEAR_MAX,
    set_manual_date_fields,
    set_taken_at,
    update_date_fields,
    update_time_zone,
)
from photorecon.domain.text import CLIP_TITLE
from photorecon.domain.titles import update_title

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from photorecon.domain.model import CellRef, Photo, PlaceRef
    from photorecon.domain.ports import (
        KeywordTokenizer,
        LabelCatalog,
        LocationResolver,
        QualityScorer,
    )
    from photorecon.domain.reconciliation.signals import DetailsEdit

log = logging.getLogger(__name__)

KEYWORD_LABEL_UNCERTAINTY: Final[int] = 25
_UNTRACKED: Final[frozenset[str]] = frozenset({"updated_at", "checked_at", "details"})


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


def _snapshot(photo: Photo) -> tuple[object, ...]:
    values = tuple(
        getattr(photo, item.name) for item in fields(photo) if item.name not in _UNTRACKED
    )
    return (*values, astuple(photo.details))


def _by_confidence(labels: Labels) -> Labels:
    return Labels.of(sorted(labels, key=lambda label: label.uncertainty))


def _merge_labels(current: Labels, incoming: Iterable[ClassifiedLabel]) -> Labels:
    """Union by name; the less uncertain entry wins."""

    merged = {label.name.casefold(): label for label in current}
    for label in incoming:
        key = label.name.casefold()
        existing = merged.get(key)
        if existing is None or label.uncertainty < existing.uncertainty:
            merged[key] = label
    return Labels.of(merged.values())


def _forget_resolved_location(photo: Photo) -> None:
    photo.cell = UNKNOWN_CELL
    photo.place = UNKNOWN_PLACE
    photo.country = COUNTRY_UNKNOWN
    photo.cell_accuracy = 0


@dataclass(slots=True)
class Reconciler:
    """Run reconciliation passes against single photos."""

    tokenizer: KeywordTokenizer
    labels: LabelCatalog
    locations: LocationResolver | None = None
    score: QualityScorer = quality_score
    year_max: int = DEFAULT_YEAR_MAX
    title_max: int = CLIP_TITLE
    clock: Callable[[], datetime] = field(default=_utcnow)

    def reconcile(self, photo: Photo, signals: Signals) -> ReconcileResult:
        """Merge ``signals`` into ``photo`` and derive everything that depends on them."""

        ensure_not_purged(photo, "reconcile")
        if signals.edit is not None and not photo.has_id():
            raise MissingIdentityError("save form")

        result = ReconcileResult(photo=photo)
        before = _snapshot(photo)
        status = review_status(photo)

        if signals.edit is not None:
            self._apply_edit(photo, signals.edit, result)
        for metadata in signals.metadata:
            self._apply_metadata(photo, metadata, result)
        if signals.geocode is not None:
            self._apply_geocode(photo, signals.geocode, result)
        if signals.classification is not None:
            self._apply_classification(photo, signals.classification, result)

        self._derive(photo, result, edited=signals.edit is not None)

        count_review_change(result, status)
        result.changed = _snapshot(photo) != before
        log.debug(
            "reconcile: %s %s, %d label intents, %d errors",
            photo,
            "changed" if result.changed else "unchanged",
            len(result.labels),
            len(result.errors),
        )
        return result

    def apply_edit(
        self, photo: Photo, edit: PhotoEdit, geocode: GeocodeResult | None = None
    ) -> ReconcileResult:
        return self.reconcile(photo, Signals(edit=edit, geocode=geocode))

    def apply_metadata(self, photo: Photo, *metadata: ExtractedMetadata) -> ReconcileResult:
        return self.reconcile(photo, Signals(metadata=metadata))

    def apply_geocode(self, photo: Photo, geocode: GeocodeResult) -> ReconcileResult:
        return self.reconcile(photo, Signals(geocode=geocode))

    def apply_classification(
        self, photo: Photo, classification: ClassificationResult
    ) -> ReconcileResult:
        return self.reconcile(photo, Signals(classification=classification))

    # Signals

    def _apply_edit(self, photo: Photo, edit: PhotoEdit, result: ReconcileResult) -> None:
        if edit.title is not None:
            if edit.title.strip():
                set_title(photo, edit.title, Provenance.MANUAL, size=self.title_max)
            else:
                clear_title(photo)

        if edit.description is not None:
            if edit.description.strip():
                set_description(photo, edit.description, Provenance.MANUAL)
            else:
                clear_description(photo)

        self._edit_time(photo, edit)

        if edit.moves_location():
            self._edit_location(photo, edit, result)

        if edit.camera is not None:
            set_camera(photo, edit.camera, Provenance.MANUAL)
        if edit.lens is not None:
            set_lens(photo, edit.lens, Provenance.MANUAL)
        set_exposure(
            photo,
            focal_length=edit.focal_length or 0,
            f_number=edit.f_number or 0.0,
            iso=edit.iso or 0,
            exposure=edit.exposure or "",
            source=Provenance.MANUAL,
        )

        if edit.private is not None:
            photo.private = edit.private
        if edit.favorite is not None:
            favorite = set_favorite(photo, edit.favorite, score=self.score)
            result.counters.extend(c for c in favorite.counters if c.name != COUNT_REVIEW)

        if edit.details is not None:
            self._edit_details(photo, edit.details)

    def _edit_time(self, photo: Photo, edit: PhotoEdit) -> None:
        if edit.taken_at is not None:
            set_taken_at(
                photo,
                edit.taken_at,
                edit.taken_at_local,
                edit.time_zone or "",
                Provenance.MANUAL,
                year_max=self.year_max,
            )
        elif edit.time_zone is not None and photo.taken_at is not None:
            # Keep the wall clock, move the instant.
            set_taken_at(
                photo,
                photo.taken_at,
                photo.taken_at_local,
                edit.time_zone,
                Provenance.MANUAL,
                year_max=self.year_max,
            )

        set_manual_date_fields(photo, year=edit.year, month=edit.month, day=edit.day)

    def _edit_location(self, photo: Photo, edit: PhotoEdit, result: ReconcileResult) -> None:
        latitude = photo.latitude if edit.latitude is None else edit.latitude
        longitude = photo.longitude if edit.longitude is None else edit.longitude
        altitude = photo.altitude if edit.altitude is None else edit.altitude

        if latitude == 0.0 and longitude == 0.0:
            if photo.has_lat_lng():
                clear_location(photo)
            return

        if set_coordinates(photo, latitude, longitude, altitude, Provenance.MANUAL):
            _forget_resolved_location(photo)
            result.needs_geocode = True

    def _edit_details(self, photo: Photo, edit: DetailsEdit) -> None:
        details = photo.details
        if edit.keywords is not None:
            details.keywords = self._join_keywords(self.tokenizer.keywords(edit.keywords))
        if edit.subject is not None:
            details.subject = edit.subject.strip()
        if edit.artist is not None:
            details.artist = edit.artist.strip()
        if edit.copyright is not None:
            details.copyright = edit.copyright.strip()
        if edit.notes is not None:
            details.notes = edit.notes.strip()

    def _apply_metadata(
        self, photo: Photo, metadata: ExtractedMetadata, result: ReconcileResult
    ) -> None:
        source = metadata.source

        set_title(photo, metadata.title, source, size=self.title_max)
        set_description(photo, metadata.description, source)

        if metadata.taken_at is not None:
            set_taken_at(
                photo,
                metadata.taken_at,
                metadata.taken_at_local,
                metadata.time_zone,
                source,
                year_max=self.year_max,
            )
        elif metadata.time_zone:
            update_time_zone(photo, metadata.time_zone)

        if (metadata.latitude != 0.0 or metadata.longitude != 0.0) and set_coordinates(
            photo, metadata.latitude, metadata.longitude, metadata.altitude, source
        ):
            _forget_resolved_location(photo)
            result.needs_geocode = True

        if metadata.camera is not None:
            set_camera(photo, metadata.camera, source)
        if metadata.lens is not None:
            set_lens(photo, metadata.lens, source)
        set_camera_serial(photo, metadata.camera_serial)
        set_exposure(
            photo,
            focal_length=metadata.focal_length,
            f_number=metadata.f_number,
            iso=metadata.iso,
            exposure=metadata.exposure,
            source=source,
        )

        details = photo.details
        if metadata.keywords:
            details.keywords = self._merge_keywords(
                details.keywords, self.tokenizer.keywords(metadata.keywords)
            )
        details.subject = details.subject or metadata.subject.strip()
        details.artist = details.artist or metadata.artist.strip()
        details.copyright = details.copyright or metadata.copyright.strip()

        if metadata.resolution > 0:
            photo.resolution = metadata.resolution

    def _apply_geocode(self, photo: Photo, geocode: GeocodeResult, result: ReconcileResult) -> None:
        if not photo.has_lat_lng():
            log.debug("reconcile: ignoring geocode result for %s without coordinates", photo)
            return

        with isolated("resolve location", result.errors, photo):
            cell, place = self._resolve(geocode)
            photo.cell = cell
            photo.place = place
            photo.country = place.country
            photo.cell_accuracy = geocode.cell_accuracy
            result.needs_geocode = False

        update_time_zone(photo, geocode.time_zone)

        words: list[str] = []
        for keyword in geocode.keywords:
            words.extend(self.tokenizer.keywords(keyword))
        if isinstance(photo.place, Place) and photo.place.keywords:
            words.extend(self.tokenizer.keywords(photo.place.keywords))
        if words:
            photo.details.keywords = self._merge_keywords(photo.details.keywords, words)

        location_labels = [
            ClassifiedLabel(
                name=label.name,
                priority=label.priority,
                uncertainty=label.uncertainty,
                source=LabelSource.LOCATION,
                categories=label.categories,
            )
            for label in geocode.labels
        ]
        self._add_labels(photo, location_labels, result)

    def _resolve(self, geocode: GeocodeResult) -> tuple[CellRef, PlaceRef]:
        cell = geocode.cell
        if cell is None and geocode.cell_id and self.locations is not None:
            cell = self.locations.cell(geocode.cell_id)
        place = geocode.place
        if place is None and geocode.place_id and self.locations is not None:
            place = self.locations.place(geocode.place_id)

        if cell is None:
            cell = UNKNOWN_CELL
        if place is None or not is_known_place(place):
            place = cell.place if isinstance(cell, Cell) else UNKNOWN_PLACE
        return cell, place

    def _apply_classification(
        self, photo: Photo, classification: ClassificationResult, result: ReconcileResult
    ) -> None:
        self._add_labels(photo, classification.labels, result)

        words = classification.labels.keywords(self.tokenizer.keywords)
        if words:
            photo.details.keywords = self._merge_keywords(photo.details.keywords, words)

    def _add_labels(
        self, photo: Photo, labels: Iterable[ClassifiedLabel], result: ReconcileResult
    ) -> None:
        accepted = [label for label in labels if label.name.strip()]
        result.labels.extend(
            LabelIntent(
                name=label.name,
                uncertainty=label.uncertainty,
                source=label.source,
                priority=label.priority,
            )
            for label in accepted
        )
        photo.labels = _merge_labels(photo.labels, accepted)

    # Derivation tail

    def _derive(self, photo: Photo, result: ReconcileResult, *, edited: bool) -> None:
        update_date_fields(photo)

        with isolated("sync keyword labels", result.errors, photo):
            self._sync_keyword_labels(photo, result)

        try:
            update_title(photo, _by_confidence(photo.labels), size=self.title_max)
        except TitleLockedError as exc:
            log.info("%s", exc)
            result.title_error = exc

        with isolated("index keywords", result.errors, photo):
            result.keywords = self._index_keywords(photo)

        if edited:
            photo.edited_at = self.clock()

        with isolated("quality score", result.errors, photo):
            rescore(photo, self.score)

    def _sync_keyword_labels(self, photo: Photo, result: ReconcileResult) -> None:
        """Link existing labels that match a detail keyword, and unlink the rest."""

        keep: dict[int, ClassifiedLabel] = {}
        for word in self.tokenizer.unique_words(self.tokenizer.keywords(photo.details.keywords)):
            label = self.labels.find(word)
            if label is None or label.deleted:
                continue
            keep[label.id] = ClassifiedLabel(
                name=label.name,
                priority=label.priority,
                uncertainty=KEYWORD_LABEL_UNCERTAINTY,
                source=LabelSource.KEYWORD,
            )
            result.labels.append(
                LabelIntent(
                    name=label.name,
                    uncertainty=KEYWORD_LABEL_UNCERTAINTY,
                    source=LabelSource.KEYWORD,
                    priority=label.priority,
                    label_id=label.id,
                )
            )

        result.stale_labels.append(StaleLabels(LabelSource.KEYWORD, frozenset(keep)))
        others = [label for label in photo.labels if label.source is not LabelSource.KEYWORD]
        photo.labels = _merge_labels(Labels.of(others), keep.values())

    def _index_keywords(self, photo: Photo) -> list[str]:
        details = photo.details
        words: list[str] = []
        for text in (
            photo.title,
            photo.description,
            details.keywords,
            details.subject,
            details.artist,
        ):
            words.extend(self.tokenizer.keywords(text))
        return self.tokenizer.unique_words(words)

    def _merge_keywords(self, current: str, extra: Iterable[str]) -> str:
        return self._join_keywords([*self.tokenizer.keywords(current), *extra])

    def _join_keywords(self, words: Iterable[str]) -> str:
        return ", ".join(self.tokenizer.unique_words(words))
