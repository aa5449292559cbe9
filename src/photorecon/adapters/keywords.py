"""Default keyword tokenizer."""

from __future__ import annotations

import re
import unicodedata
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

MIN_WORD_LENGTH: Final[int] = 3

_WORD = re.compile(r"[^\W_](?:[^\W_]|['-](?=[^\W_]))*")

STOP_WORDS: Final[frozenset[str]] = frozenset(
    {
        "and",
        "are",
        "but",
        "for",
        "from",
        "has",
        "have",
        "her",
        "his",
        "into",
        "its",
        "not",
        "our",
        "the",
        "their",
        "this",
        "that",
        "was",
        "were",
        "with",
        "you",
        "your",
        "der",
        "die",
        "das",
        "und",
        "les",
        "des",
        "img",
        "jpg",
        "jpeg",
        "png",
        "heic",
        "unknown",
    }
)


def words(text: str) -> list[str]:
    """All word-like tokens, normalised and case-folded, in order of appearance."""

    normalized = unicodedata.normalize("NFKC", text).casefold()
    return _WORD.findall(normalized)


class SimpleKeywordTokenizer:
    """Splits text into lower-case index words, dropping short words, numbers and stop words."""

    def __init__(self, *, stop_words: Iterable[str] = STOP_WORDS) -> None:
        self.stop_words = frozenset(stop_words)

    def keywords(self, text: str) -> list[str]:
        if not text:
            return []
        return [
            word
            for word in words(text)
            if len(word) >= MIN_WORD_LENGTH
            and not word.isdigit()
            and word not in self.stop_words
        ]

    def unique_words(self, words: Iterable[str]) -> list[str]:
        return sorted({word.strip().casefold() for word in words if word.strip()})


if TYPE_CHECKING:
    from photorecon.domain.ports import KeywordTokenizer

    _tokenizer_check: KeywordTokenizer = SimpleKeywordTokenizer()
