from __future__ import annotations

import logging

from ..models.dataset import Dataset
from .normalizer import Key, KeyNormalizer

"""Per-table key cache.

Built once per dataset by walking every row and every eligible column exactly
once. A column is ineligible when the presentation layer marked it excluded or
when its header label normalizes to the empty key. The index never watches the
dataset: callers rebuild it explicitly after changing cell content.
"""

__all__ = [
    "KeyIndex",
]

logger = logging.getLogger(__name__)


class KeyIndex:
    def __init__(self, keys: list[list[Key | None]], eligible_columns: list[int]) -> None:
        self._keys = keys
        self.eligible_columns = eligible_columns

    @classmethod
    def build(cls, dataset: Dataset, normalizer: KeyNormalizer) -> KeyIndex:
        """Normalize every cell of every eligible column once.

        Also records the outcome on the dataset: ``Column.sortable`` is set
        for eligible columns and cleared for the others.

        Args:
            dataset: Rows and header columns to index
            normalizer: Normalizer turning cell content into keys

        Returns:
            KeyIndex holding one key per (row id, eligible column)
        """
        eligible = [
            c.index
            for c in dataset.columns
            if not c.excluded and normalizer.normalize(c.label) != ""
        ]
        width = len(dataset.columns)
        keys: list[list[Key | None]] = []
        for row in dataset.rows:
            row_keys: list[Key | None] = [None] * width
            for col in eligible:
                row_keys[col] = normalizer.normalize(row.cell(col).sort_source)
            keys.append(row_keys)
        for column in dataset.columns:
            column.sortable = column.index in eligible
        logger.debug(
            "key index built rows=%d columns=%d eligible=%s", len(keys), width, eligible
        )
        return cls(keys, eligible)

    def is_eligible(self, column: int) -> bool:
        """True when the column was indexed (sortable and filterable)."""
        return column in self.eligible_columns

    def key(self, row_id: int, column: int) -> Key:
        """Cached key of a cell; "" for cells outside the indexed columns."""
        value = self._keys[row_id][column] if 0 <= column < len(self._keys[row_id]) else None
        return "" if value is None else value

    def column_keys(self, column: int) -> list[Key]:
        return [self.key(row_id, column) for row_id in range(len(self._keys))]

    def __len__(self) -> int:
        return len(self._keys)
