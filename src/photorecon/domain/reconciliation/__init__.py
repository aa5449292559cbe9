"""Reconciliation orchestrator: signals in, updated photo and intents out."""

from __future__ import annotations

from .apply import apply_intents
from .intents import (
    COUNT_FAVORITES,
    COUNT_REVIEW,
    AlbumAction,
    CounterIntent,
    LabelIntent,
    ReconcileResult,
    StaleLabels,
)
from .lifecycle import approve, archive, purge, restore, review_status, set_favorite
from .locks import KeyedLock
from .orchestrator import Reconciler
from .signals import (
    ClassificationResult,
    DetailsEdit,
    ExtractedMetadata,
    GeocodeResult,
    PhotoEdit,
    Signals,
)

__all__ = [
    "COUNT_FAVORITES",
    "COUNT_REVIEW",
    "AlbumAction",
    "ClassificationResult",
    "CounterIntent",
    "DetailsEdit",
    "ExtractedMetadata",
    "GeocodeResult",
    "KeyedLock",
    "LabelIntent",
    "PhotoEdit",
    "ReconcileResult",
    "Reconciler",
    "Signals",
    "StaleLabels",
    "apply_intents",
    "approve",
    "archive",
    "purge",
    "restore",
    "review_status",
    "set_favorite",
]
