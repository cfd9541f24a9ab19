from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

"""Dataset, Row, Cell and Column records for the table engine.

The Dataset is an arena: ``rows[i].id == i`` always holds and the list is never
reordered. Display order is kept separately in ``order`` (a list of row ids),
and each row caches its position in that list as ``rank``.
"""

__all__ = [
    "Cell",
    "Column",
    "Dataset",
    "Row",
]


@dataclass(frozen=True)
class Cell:
    """Raw cell content.

    ``literal`` is an explicit sort value supplied by the presentation layer
    (a ``sort`` / ``data-sort`` attribute); when set it wins over ``text``.
    """
    text: str = ""
    literal: str | int | float | None = None

    @property
    def sort_source(self) -> str | int | float | None:
        return self.literal if self.literal is not None else self.text


@dataclass
class Column:
    index: int
    label: str = ""
    excluded: bool = False  # presentation marker "do not index"
    sortable: bool = False  # decided by KeyIndex build
    descending_next: bool = False  # header toggle record


@dataclass
class Row:
    id: int
    cells: tuple[Cell, ...]
    visible: bool = True
    rank: int = 0
    bands: tuple[str, ...] = ()

    def cell(self, column: int) -> Cell:
        if column < len(self.cells):
            return self.cells[column]
        return Cell()


@dataclass
class Dataset:
    columns: list[Column]
    rows: list[Row]
    order: list[int] = field(default_factory=list)
    sorted_by: tuple[int, bool] | None = None  # (column, descending) of the last sort

    def __post_init__(self) -> None:
        for position, row in enumerate(self.rows):
            if row.id != position:
                raise ValueError(f"row id {row.id} at position {position}: row ids must equal their position")
        if not self.order:
            self.order = [r.id for r in self.rows]
        self.reassign_ranks()

    @classmethod
    def from_records(
        cls,
        header: Sequence[Any],
        records: Iterable[Sequence[Any]],
        *,
        excluded: Iterable[int] = (),
    ) -> Dataset:
        """Build a dataset from a header and plain row sequences.

        Values that are not strings are kept as literal sort values, so a
        numeric cell sorts numerically without a text round-trip.
        """
        skip = set(excluded)
        columns = [
            Column(index=i, label="" if h is None else str(h), excluded=i in skip)
            for i, h in enumerate(header)
        ]
        rows = []
        for i, record in enumerate(records):
            cells = tuple(_to_cell(v) for v in record)
            rows.append(Row(id=i, cells=cells))
        return cls(columns=columns, rows=rows)

    def __len__(self) -> int:
        return len(self.rows)

    def ordered_rows(self) -> list[Row]:
        return [self.rows[i] for i in self.order]

    def visible_rows(self) -> list[Row]:
        return [r for r in self.ordered_rows() if r.visible]

    def reorder(self, order: list[int]) -> None:
        if sorted(order) != list(range(len(self.rows))):
            raise ValueError("order must be a permutation of row ids")
        self.order = list(order)
        self.reassign_ranks()

    def reassign_ranks(self) -> None:
        for rank, row_id in enumerate(self.order):
            self.rows[row_id].rank = rank


def _to_cell(value: Any) -> Cell:
    if value is None:
        return Cell()
    if isinstance(value, Cell):
        return value
    if isinstance(value, str):
        return Cell(text=value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Cell(text=str(value), literal=value)
    return Cell(text=str(value))
