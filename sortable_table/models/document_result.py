from __future__ import annotations

from dataclasses import dataclass, field

"""Result models for processing the tables of one document."""

__all__ = [
    "DocumentResult",
    "TableStat",
]


@dataclass(frozen=True)
class TableStat:
    """Per-table outcome."""
    position: int  # index of the table in document order
    indexed: bool
    rows: int
    visible_rows: int
    sortable_columns: int = 0


@dataclass(frozen=True)
class DocumentResult:
    """Aggregated outcome used for the SUMMARY line."""
    tables: list[TableStat] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def total_tables(self) -> int:
        return len(self.tables)

    @property
    def indexed_tables(self) -> int:
        return sum(1 for t in self.tables if t.indexed)

    @property
    def total_rows(self) -> int:
        return sum(t.rows for t in self.tables)

    @property
    def visible_rows(self) -> int:
        return sum(t.visible_rows for t in self.tables)
