"""Shared logging helpers for photorecon."""

from __future__ import annotations

import logging
import os


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    defaults to ``PHOTORECON_LOG_LEVEL`` (or INFO) and the format is terse enough for
    CLI output. Pass ``force=True`` to reconfigure during tests.
    """

    if level is None:
        level_name = os.getenv("PHOTORECON_LOG_LEVEL", "INFO").strip().upper()
        level = logging.getLevelNamesMapping().get(level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
