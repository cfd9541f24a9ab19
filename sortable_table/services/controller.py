from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Protocol

from ..models.config_models import EngineConfig
from ..models.dataset import Dataset, Row
from .filter_engine import FilterEngine
from .key_index import KeyIndex
from .normalizer import KeyNormalizer
from .row_painter import RowPainter
from .sort_engine import SortEngine

"""Table controller: the single entry point of the presentation layer.

State transitions: UNINDEXED -> INDEXED (build) -> INDEXED (every sort, filter
and paint). Operations issued before build are no-ops; a second build is a
guarded no-op too.
"""

__all__ = [
    "TableController",
    "TableSource",
    "TableState",
]

logger = logging.getLogger(__name__)


class TableState(Enum):
    """Lifecycle of one table.

    - UNINDEXED: created, nothing cached yet
    - INDEXED: dataset captured and key index built; sort/filter/paint allowed
    """
    UNINDEXED = "unindexed"
    INDEXED = "indexed"


class TableSource(Protocol):
    """Presentation boundary consumed once at build time."""

    def read_dataset(self) -> Dataset: ...

    def row_count(self) -> int:
        """Rows of the table element, header row included."""
        ...

    def mark_sortable(self, columns: list[int]) -> None: ...


class TableController:
    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        self.normalizer = KeyNormalizer(self.config.normalizer)
        self.painter = RowPainter(self.config.painter)
        self.state = TableState.UNINDEXED
        self.dataset: Dataset | None = None
        self.index: KeyIndex | None = None
        self._sorter: SortEngine | None = None
        self._filters: FilterEngine | None = None

    @property
    def indexed(self) -> bool:
        return self.state is TableState.INDEXED

    def build(self, source: TableSource | Dataset) -> bool:
        """Capture the dataset and index it.

        The table must hold at least 2 rows, header row included: a header
        with a single data row is indexed, a header alone is not.

        Args:
            source: Presentation source, or a Dataset whose columns stand for
                the header row

        Returns:
            True when the table was indexed by this call; False when it was
            already indexed or has fewer than 2 rows
        """
        if self.indexed:
            logger.debug("build skipped: table already indexed")
            return False
        if isinstance(source, Dataset):
            dataset = source
            rows = len(dataset) + (1 if dataset.columns else 0)
        else:
            dataset = source.read_dataset()
            rows = source.row_count()
        if rows < 2:
            logger.debug("build skipped: %d row(s), nothing to sort", rows)
            return False
        self.dataset = dataset
        self.index = KeyIndex.build(dataset, self.normalizer)
        self._sorter = SortEngine(self.index)
        self._filters = FilterEngine(self.index, self.normalizer)
        self.painter.paint(dataset)
        if not isinstance(source, Dataset):
            source.mark_sortable(list(self.index.eligible_columns))
        self.state = TableState.INDEXED
        logger.info(
            "table indexed rows=%d columns=%d sortable=%d",
            len(dataset), len(dataset.columns), len(self.index.eligible_columns),
        )
        return True

    def rebuild(self) -> None:
        """Recompute every key after the caller replaced cell content."""
        if not self._ready("rebuild"):
            return
        assert self.dataset is not None and self._filters is not None
        self.index = KeyIndex.build(self.dataset, self.normalizer)
        self._sorter = SortEngine(self.index)
        self._filters.index = self.index
        self._filters.apply(self.dataset)
        self.painter.paint(self.dataset)

    def sort(self, column: int, descending: bool = False) -> None:
        if not self._ready("sort"):
            return
        assert self._sorter is not None and self.dataset is not None
        self._sorter.sort(self.dataset, column, descending)

    def sort_many(self, keys: Sequence[tuple[int, bool]]) -> None:
        if not self._ready("sort_many"):
            return
        assert self._sorter is not None and self.dataset is not None
        self._sorter.sort_many(self.dataset, keys)

    def toggle(self, column: int) -> bool | None:
        """Header activation: sort with the column's next direction, then flip it.

        Returns the direction used (True = descending), or None when the column
        is not sortable or the table is not indexed. Repaints.
        """
        if not self._ready("toggle"):
            return None
        assert self.dataset is not None
        if not 0 <= column < len(self.dataset.columns) or not self.dataset.columns[column].sortable:
            return None
        record = self.dataset.columns[column]
        descending = record.descending_next
        self.sort(column, descending)
        record.descending_next = not descending
        self.paint()
        return descending

    def filter_substring(self, column: int, needle: str | None) -> None:
        if not self._ready("filter_substring"):
            return
        assert self._filters is not None and self.dataset is not None
        self._filters.filter_substring(self.dataset, column, needle)

    def filter_range(
        self,
        column: int,
        low: str | int | float | None,
        high: str | int | float | None,
    ) -> None:
        if not self._ready("filter_range"):
            return
        assert self._filters is not None and self.dataset is not None
        self._filters.filter_range(self.dataset, column, low, high)

    def show_all(self) -> None:
        if not self._ready("show_all"):
            return
        assert self._filters is not None and self.dataset is not None
        self._filters.clear(self.dataset)

    def paint(self) -> None:
        if not self._ready("paint"):
            return
        assert self.dataset is not None
        self.painter.paint(self.dataset)

    def visible_rows(self) -> list[Row]:
        if self.dataset is None:
            return []
        return self.dataset.visible_rows()

    def _ready(self, operation: str) -> bool:
        if not self.indexed:
            logger.debug("%s ignored: table not indexed", operation)
            return False
        return True
