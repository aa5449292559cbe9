"""Camera and lens references.

Unknown equipment is its own type, so callers check ``isinstance`` (or
``is_known``) instead of comparing ids against a magic value. The storage id
takes no part in equality: an extracted reference matches its stored row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final


@dataclass(frozen=True, slots=True)
class Camera:
    id: int = field(default=0, compare=False)
    make: str = ""
    model: str = ""

    @property
    def name(self) -> str:
        return " ".join(part for part in (self.make, self.model) if part)


@dataclass(frozen=True, slots=True)
class UnknownCamera:
    name: str = "Unknown"


@dataclass(frozen=True, slots=True)
class Lens:
    id: int = field(default=0, compare=False)
    make: str = ""
    model: str = ""

    @property
    def name(self) -> str:
        return " ".join(part for part in (self.make, self.model) if part)


@dataclass(frozen=True, slots=True)
class UnknownLens:
    name: str = "Unknown"


type CameraRef = Camera | UnknownCamera
type LensRef = Lens | UnknownLens

UNKNOWN_CAMERA: Final = UnknownCamera()
UNKNOWN_LENS: Final = UnknownLens()


def is_known_camera(camera: CameraRef | None) -> bool:
    return isinstance(camera, Camera)


def is_known_lens(lens: LensRef | None) -> bool:
    return isinstance(lens, Lens)
