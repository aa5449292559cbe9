"""Text helpers shared by the merge engine and the title synthesizer."""

from __future__ import annotations

import re
import unicodedata
from pathlib import PurePosixPath
from typing import Final

CLIP_TITLE: Final[int] = 160
CLIP_DESCRIPTION: Final[int] = 16000
CLIP_VARCHAR: Final[int] = 255
FILE_TITLE_SHORT: Final[int] = 20

_WORD = re.compile(r"[^\W\d_]{2,}")
_DIGIT = re.compile(r"\d")
_NON_SLUG = re.compile(r"[^a-z0-9]+")
_HEX_HASH = re.compile(r"^[0-9a-f]{16,}$", re.IGNORECASE)
_UUID = re.compile(
    r"^[0-9a-f]{8}-?[0-9a-f]{4}-?[0-9a-f]{4}-?[0-9a-f]{4}-?[0-9a-f]{12}$", re.IGNORECASE
)
_CAMERA_COUNTER = re.compile(
    r"^(img|dsc|dscn|dscf|pxl|mvimg|vid|mov|gopr|dji|sam|_mg|p)[_\- ]?\d+", re.IGNORECASE
)
_DATE_STAMP = re.compile(r"^\D{0,8}[12]\d{3}[01]\d[0-3]\d[_\-T ]?\d{0,6}")

_FILE_TITLE_STOP_WORDS: Final[frozenset[str]] = frozenset(
    {
        "img",
        "dsc",
        "dscn",
        "dscf",
        "pxl",
        "mvimg",
        "vid",
        "jpg",
        "jpeg",
        "png",
        "heic",
        "raw",
        "dng",
        "copy",
        "edit",
        "edited",
        "export",
        "final",
        "photo",
        "photos",
        "image",
        "images",
        "picture",
        "pictures",
        "originals",
        "import",
        "scan",
        "screenshot",
    }
)


def clip(value: str, size: int) -> str:
    """Trim whitespace and cut ``value`` to at most ``size`` characters."""

    value = value.strip()
    if len(value) > size:
        value = value[:size].rstrip()
    return value


def contains_number(value: str) -> bool:
    return _DIGIT.search(value) is not None


def slug(value: str) -> str:
    """Lower-case ASCII identifier used to match label names."""

    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode()
    return _NON_SLUG.sub("-", normalized.casefold()).strip("-")


def title_case(value: str) -> str:
    """Upper-case the first letter of every word, leaving the rest untouched."""

    words = value.split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def _stem(value: str) -> str:
    name = PurePosixPath(value.replace("\\", "/")).name
    while "." in name:
        head, _, ext = name.rpartition(".")
        if not head or not 1 <= len(ext) <= 5 or contains_number(ext[:1]):
            break
        name = head
    return name


def is_generated(file_name: str) -> bool:
    """Whether a file name looks machine made (counters, hashes, ids, timestamps)."""

    stem = _stem(file_name)
    if not stem:
        return False
    if stem.isdigit():
        return True
    if _HEX_HASH.match(stem) or _UUID.match(stem):
        return True
    if _CAMERA_COUNTER.match(stem):
        return True
    return _DATE_STAMP.match(stem) is not None and not _WORD.search(stem[8:])


def file_title(value: str) -> str:
    """Turn a file or folder name into a readable title, or "" if nothing useful remains."""

    if not value:
        return ""

    text = unicodedata.normalize("NFC", value.replace("\\", "/"))
    parts = [part for part in text.split("/") if part]
    if not parts:
        return ""
    text = _stem(parts[-1]) if len(parts) == 1 else " ".join([*parts[:-1], _stem(parts[-1])])

    words: list[str] = []
    for word in _WORD.findall(text):
        lowered = word.casefold()
        if len(lowered) < 3 or lowered in _FILE_TITLE_STOP_WORDS:
            continue
        words.append(lowered)

    title = " ".join(words)
    if len(title) < 3:
        return ""
    return title_case(title)


def photo_file_title(name: str, original_name: str, path: str) -> str:
    """File-derived title: photo name, then original name (or its folder), then path."""

    if name and not is_generated(name):
        title = file_title(name)
        if title:
            return title

    if original_name:
        title = file_title(_stem(original_name))
        if title and not is_generated(original_name):
            return title
        folder = str(PurePosixPath(original_name.replace("\\", "/")).parent)
        title = file_title(folder) if folder not in {"", "."} else ""
        if title:
            return title

    if path and not is_generated(path):
        return file_title(path)

    return ""
