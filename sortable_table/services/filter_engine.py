from __future__ import annotations

import logging
from dataclasses import dataclass

from ..models.dataset import Dataset
from .key_index import KeyIndex
from .normalizer import Key, KeyNormalizer, coerce_text, sort_token

"""Row visibility from key predicates.

At most one substring filter and one range filter are active per table. A row
is visible iff it satisfies both active filters. Filters read cached keys only,
so a value that sorts between two bounds also filters between them. Neither
predicate touches display order or rank.

An absent bound (None) and an empty-string bound both mean "unbounded".
Range comparison is numeric when bound and key are both numbers, otherwise
it follows the sort ordering (numbers before text). Two cases never pass an
active bound: an empty key, and a text key against a numeric bound.
"""

__all__ = [
    "FilterEngine",
    "RangeFilter",
    "SubstringFilter",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubstringFilter:
    column: int
    needle: str  # normalized, coerced to text

    def accepts(self, key: Key) -> bool:
        return self.needle in coerce_text(key)


@dataclass(frozen=True)
class RangeFilter:
    column: int
    low: Key | None
    high: Key | None

    def accepts(self, key: Key) -> bool:
        if key == "":
            return False
        token = sort_token(key)
        if self.low is not None:
            if not _comparable(key, self.low) or token < sort_token(self.low):
                return False
        if self.high is not None:
            if not _comparable(key, self.high) or token > sort_token(self.high):
                return False
        return True


def _comparable(key: Key, bound: Key) -> bool:
    # a numeric bound only admits numeric keys
    return not isinstance(bound, float) or isinstance(key, float)


class FilterEngine:
    def __init__(self, index: KeyIndex, normalizer: KeyNormalizer) -> None:
        self.index = index
        self.normalizer = normalizer
        self.substring: SubstringFilter | None = None
        self.range: RangeFilter | None = None

    def filter_substring(self, dataset: Dataset, column: int, needle: str | None) -> None:
        """Set (or clear) the substring filter and recompute visibility.

        Args:
            dataset: Dataset whose rows get their visible flag updated
            column: Indexed column the needle is searched in
            needle: Raw search text, normalized like a cell; None or "" clears
                the substring filter and reveals the rows it hid
        """
        if needle is None or needle == "":
            self.substring = None
        elif not self.index.is_eligible(column):
            logger.warning("substring filter ignored: column %d is not indexed", column)
            return
        else:
            self.substring = SubstringFilter(column, coerce_text(self.normalizer.normalize(needle)))
        self.apply(dataset)

    def filter_range(
        self,
        dataset: Dataset,
        column: int,
        low: str | int | float | None,
        high: str | int | float | None,
    ) -> None:
        """Set (or clear) the inclusive range filter and recompute visibility.

        Args:
            dataset: Dataset whose rows get their visible flag updated
            column: Indexed column compared against the bounds
            low: Lower bound, raw; None or blank means unbounded
            high: Upper bound, raw; None or blank means unbounded

        Both bounds unbounded clears the range filter.
        """
        low_key = self._bound(low)
        high_key = self._bound(high)
        if low_key is None and high_key is None:
            self.range = None
        elif not self.index.is_eligible(column):
            logger.warning("range filter ignored: column %d is not indexed", column)
            return
        else:
            self.range = RangeFilter(column, low_key, high_key)
        self.apply(dataset)

    def clear(self, dataset: Dataset) -> None:
        """Drop both filters; every row becomes visible again."""
        self.substring = None
        self.range = None
        self.apply(dataset)

    def apply(self, dataset: Dataset) -> int:
        """Recompute every row's visible flag; returns the visible count."""
        visible = 0
        for row in dataset.rows:
            row.visible = self._accepts(row.id)
            visible += row.visible
        logger.debug(
            "filters applied substring=%s range=%s visible=%d/%d",
            self.substring, self.range, visible, len(dataset.rows),
        )
        return visible

    def _accepts(self, row_id: int) -> bool:
        if self.substring is not None:
            if not self.substring.accepts(self.index.key(row_id, self.substring.column)):
                return False
        if self.range is not None:
            if not self.range.accepts(self.index.key(row_id, self.range.column)):
                return False
        return True

    def _bound(self, value: str | int | float | None) -> Key | None:
        if value is None:
            return None
        if isinstance(value, str) and value.strip() == "":
            return None
        return self.normalizer.normalize(value)
