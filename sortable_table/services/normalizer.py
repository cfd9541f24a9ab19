from __future__ import annotations

import math
import re
from typing import Union

from ..models.config_models import NormalizerConfig

"""Sort key normalization.

A cell's displayed content (or an explicit literal sort value) becomes a Key:
a float when the content reads as a number, otherwise a folded, lower-cased
string with one leading French elision article removed and every non-word
character stripped. The function is total and idempotent.

Ordering rule shared by sorting and range filtering: numbers order before
strings, numbers compare numerically, strings compare lexically. Mixed columns
are never coerced to a common type.
"""

__all__ = [
    "Key",
    "KeyNormalizer",
    "coerce_text",
    "sort_token",
    "trim",
]

Key = Union[float, str]

# Leading float literal, like a browser's parseFloat() ("2005 (reed.)" -> 2005)
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_NON_WORD = re.compile(r"\W+")
_APOSTROPHE = "’"


def trim(text: str) -> str:
    """Strip leading and trailing codepoints below 33 (spaces and controls)."""
    start = 0
    end = len(text)
    while start < end and ord(text[start]) < 33:
        start += 1
    while end > start and ord(text[end - 1]) < 33:
        end -= 1
    return text[start:end]


def coerce_text(key: Key) -> str:
    """Render a key as text for substring matching (2005.0 -> "2005")."""
    if isinstance(key, float):
        if key.is_integer() and abs(key) < 1e16:
            return str(int(key))
        return repr(key)
    return key


def sort_token(key: Key) -> tuple[int, float | str]:
    """Totally ordered token for a key: numbers first, then strings."""
    if isinstance(key, float):
        return (0, key)
    return (1, key)


class KeyNormalizer:
    """Turns raw cell content into a Key using injected locale tables."""

    def __init__(self, config: NormalizerConfig | None = None) -> None:
        self.config = config or NormalizerConfig()
        self._articles = tuple(sorted(self.config.articles, key=len, reverse=True))
        self._folding = str.maketrans(self.config.folding)
        self._noise = str.maketrans("", "", self.config.numeric_noise)

    def __call__(self, raw: str | int | float | None) -> Key:
        return self.normalize(raw)

    def normalize(self, raw: str | int | float | None) -> Key:
        if raw is None:
            return ""
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            try:
                value = float(raw)
            except OverflowError:
                raw = str(raw)
            else:
                return value if math.isfinite(value) else ""
        text = trim(str(raw))
        if not text:
            return ""
        number = self.parse_number(text)
        if number is not None:
            return number
        key = self.fold_text(text)
        # "Le 14 juillet" folds to "14juillet", which must stay stable on re-normalization
        number = self.parse_number(key)
        return key if number is None else number

    def parse_number(self, text: str) -> float | None:
        cleaned = text.replace(",", ".").translate(self._noise)
        match = _NUMBER_PREFIX.match(cleaned)
        if match is None:
            return None
        value = float(match.group())
        if not math.isfinite(value):
            return None
        return value

    def fold_text(self, text: str) -> str:
        text = text.lower().replace(_APOSTROPHE, "'")
        for article in self._articles:
            if text.startswith(article):
                text = text[len(article):]
                break
        text = text.translate(self._folding)
        return _NON_WORD.sub("", text)
