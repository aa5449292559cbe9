"""Defaults for the reconciliation engine."""

from __future__ import annotations

from dataclasses import dataclass

from photorecon.domain.temporal import DEFAULT_YEAR_MAX, YEAR_MIN
from photorecon.domain.text import CLIP_TITLE

from .env import optional_int_env
from .errors import ConfigurationError

DEFAULT_TITLE_MAX = CLIP_TITLE


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    year_max: int = DEFAULT_YEAR_MAX
    title_max: int = DEFAULT_TITLE_MAX

    def __post_init__(self) -> None:
        if self.year_max < YEAR_MIN:
            raise ConfigurationError(f"PHOTORECON_YEAR_MAX must be at least {YEAR_MIN}")
        if self.title_max <= 0:
            raise ConfigurationError("PHOTORECON_TITLE_MAX must be positive")


def get_reconcile_config() -> ReconcileConfig:
    return ReconcileConfig(
        year_max=optional_int_env("PHOTORECON_YEAR_MAX", DEFAULT_YEAR_MAX),
        title_max=optional_int_env("PHOTORECON_TITLE_MAX", DEFAULT_TITLE_MAX),
    )
