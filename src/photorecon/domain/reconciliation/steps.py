"""Failure isolation for collaborator sub-steps."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from photorecon.domain.errors import CollaboratorError

if TYPE_CHECKING:
    from collections.abc import Iterator

log = logging.getLogger(__name__)


@contextmanager
def isolated(step: str, errors: list[CollaboratorError], subject: object) -> Iterator[None]:
    """Record a failing sub-step in ``errors`` and let the pass continue."""

    try:
        yield
    except Exception as exc:  # noqa: BLE001
        log.error("reconcile: %s failed for %s: %s", step, subject, exc)
        errors.append(CollaboratorError.from_exception(step, exc))
