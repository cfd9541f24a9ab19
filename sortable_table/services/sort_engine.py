from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.dataset import Dataset
from .key_index import KeyIndex
from .normalizer import sort_token

"""Row ordering by cached column keys.

Sorting starts from the current display order and relies on list.sort being
stable, so rows with equal keys keep their relative order (the original order
on the first sort). Descending order uses sort(reverse=True), which keeps tie
members in their previous relative order as well. Ranks are reassigned over
every row, hidden rows included; visibility is never touched here.
"""

__all__ = [
    "SortEngine",
]

logger = logging.getLogger(__name__)


class SortEngine:
    def __init__(self, index: KeyIndex) -> None:
        self.index = index

    def sort(self, dataset: Dataset, column: int, descending: bool = False) -> list[int]:
        """Reorder the dataset by one column.

        Args:
            dataset: Dataset to reorder; ranks are reassigned over all rows
            column: Indexed column to sort on
            descending: Sort direction

        Returns:
            New display order as a list of row ids (unchanged order when the
            dataset has fewer than 2 rows or the column is not indexed)
        """
        if len(dataset) < 2:
            return list(dataset.order)
        if not self.index.is_eligible(column):
            logger.warning("sort ignored: column %d is not sortable", column)
            return list(dataset.order)
        order = list(dataset.order)
        order.sort(key=lambda row_id: sort_token(self.index.key(row_id, column)), reverse=descending)
        dataset.reorder(order)
        dataset.sorted_by = (column, descending)
        logger.debug("sorted column=%d descending=%s rows=%d", column, descending, len(order))
        return order

    def sort_many(self, dataset: Dataset, keys: Sequence[tuple[int, bool]]) -> list[int]:
        """Multi-column sort; the first (column, descending) pair has highest precedence.

        Applies single-column stable sorts from lowest precedence to highest.
        """
        usable = [(c, d) for c, d in keys if self.index.is_eligible(c)]
        if len(dataset) < 2 or not usable:
            return list(dataset.order)
        order = list(dataset.order)
        for column, descending in reversed(usable):
            order.sort(
                key=lambda row_id, col=column: sort_token(self.index.key(row_id, col)),
                reverse=descending,
            )
        dataset.reorder(order)
        dataset.sorted_by = usable[0]
        return order
