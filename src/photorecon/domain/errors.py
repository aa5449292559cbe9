"""Domain error types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID


class ReconciliationError(RuntimeError):
    """Base class for reconciliation failures."""


class MissingIdentityError(ReconciliationError):
    """Raised when an operation needs a persisted photo id and none is assigned."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"photo: can't {operation}, id is empty")


class IdentityAlreadyAssignedError(ReconciliationError):
    """Raised when a photo id would be replaced."""


class TitleLockedError(ReconciliationError):
    """The title came from a stronger source and is left alone."""

    def __init__(self, photo: object, source: str) -> None:
        self.source = source
        super().__init__(f"photo: won't update title of {photo}, set by {source} source")


class PhotoNotFoundError(LookupError):
    def __init__(self, photo_id: UUID) -> None:
        self.photo_id = photo_id
        super().__init__(f"photo {photo_id} not found")


@dataclass(frozen=True, slots=True)
class CollaboratorError:
    """A failed sub-step; the pass carried on without it."""

    step: str
    message: str
    exception: BaseException | None = None

    @classmethod
    def from_exception(cls, step: str, exc: BaseException) -> CollaboratorError:
        return cls(step=step, message=str(exc) or type(exc).__name__, exception=exc)

    def __str__(self) -> str:
        return f"{self.step}: {self.message}"


class InvalidTransitionError(ReconciliationError):
    """The photo's review status does not allow the requested operation."""

    def __init__(self, photo: object, operation: str, status: str) -> None:
        self.operation = operation
        self.status = status
        super().__init__(f"photo: can't {operation} {photo}, status is {status}")
