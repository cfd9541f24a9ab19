from __future__ import annotations

import logging
from typing import Any

from bs4 import BeautifulSoup, Tag

from ..models.config_models import EngineConfig
from ..models.dataset import Cell, Column, Dataset

"""HTML presentation adapter for one ``<table>`` element.

Reading the dataset never mutates the markup. Structural normalization (a
missing ``<thead>`` is created from the first row, a missing ``<tbody>``
receives the remaining rows) happens in mark_sortable, which the controller
calls only when the table was actually indexed.

apply() writes engine state back: row order inside the tbody, ``display: none``
on hidden rows, band classes, and the asc/desc class on the sorted header.
"""

__all__ = [
    "HtmlTable",
    "TableStructureError",
    "class_list",
]

logger = logging.getLogger(__name__)

_SECTIONS = ("thead", "tbody", "tfoot")


class TableStructureError(Exception):
    """Raised when a table element cannot be read as header + rows."""


def _direct_rows(tag: Tag) -> list[Tag]:
    rows: list[Tag] = []
    for child in tag.find_all(True, recursive=False):
        if child.name == "tr":
            rows.append(child)
        elif child.name in _SECTIONS:
            rows.extend(child.find_all("tr", recursive=False))
    return rows


def _cells(row: Tag) -> list[Tag]:
    return row.find_all(["td", "th"], recursive=False)


def _document(tag: Tag) -> BeautifulSoup:
    node: Any = tag
    while node.parent is not None:
        node = node.parent
    if not isinstance(node, BeautifulSoup):
        raise TableStructureError("table element is not attached to a document")
    return node


class HtmlTable:
    """TableSource backed by a BeautifulSoup table element."""

    def __init__(self, table: Tag, config: EngineConfig | None = None) -> None:
        self.table = table
        self.config = config or EngineConfig()
        self._header: Tag | None = None
        self._body_rows: list[Tag] = []

    # -- reading -----------------------------------------------------------

    def header_row(self) -> Tag | None:
        thead = self.table.find("thead", recursive=False)
        if thead is not None:
            rows = thead.find_all("tr", recursive=False)
            if not rows:
                raise TableStructureError("<thead> without a row")
            return rows[0]
        rows = _direct_rows(self.table)
        return rows[0] if rows else None

    def body_rows(self, header: Tag | None) -> list[Tag]:
        tbody = self.table.find("tbody", recursive=False)
        if tbody is not None:
            rows = tbody.find_all("tr", recursive=False)
        else:
            rows = [r for r in _direct_rows(self.table) if r.parent.name not in ("thead", "tfoot")]
        return [r for r in rows if r is not header]

    def read_dataset(self) -> Dataset:
        header = self.header_row()
        body = self.body_rows(header)
        self._header = header
        self._body_rows = body

        markup = self.config.markup
        columns: list[Column] = []
        if header is not None:
            for i, cell in enumerate(_cells(header)):
                classes = class_list(cell)
                columns.append(
                    Column(
                        index=i,
                        label=cell.get_text(),
                        excluded=any(c in markup.exclusion_classes for c in classes),
                    )
                )
        records = [tuple(self._read_cell(c) for c in _cells(tr)) for tr in body]
        width = max([len(columns)] + [len(r) for r in records])
        columns.extend(Column(index=i) for i in range(len(columns), width))
        return Dataset.from_records(
            [c.label for c in columns],
            records,
            excluded=[c.index for c in columns if c.excluded],
        )

    def row_count(self) -> int:
        """Every row of the table (head, body and foot sections), like ``table.rows``."""
        return len(_direct_rows(self.table))

    def _read_cell(self, cell: Tag) -> Cell:
        for attr in self.config.markup.literal_attributes:
            if cell.has_attr(attr):
                return Cell(text=cell.get_text(), literal=cell[attr])
        return Cell(text=cell.get_text())

    # -- writing -----------------------------------------------------------

    def mark_sortable(self, columns: list[int]) -> None:
        self._ensure_structure()
        if self._header is None:
            return
        cells = _cells(self._header)
        for col in columns:
            if col < len(cells):
                _add_class(cells[col], self.config.markup.sortable_class)

    def apply(self, dataset: Dataset) -> None:
        """Write order, visibility, bands and header direction into the markup."""
        tbody = self._ensure_structure()
        band_classes = self.config.painter.band_classes
        for row in dataset.ordered_rows():
            tr = self._body_rows[row.id]
            tbody.append(tr)
            _set_hidden(tr, not row.visible)
            kept = [c for c in class_list(tr) if c not in band_classes]
            _set_classes(tr, kept + list(row.bands))
        self._apply_header_state(dataset)

    def _apply_header_state(self, dataset: Dataset) -> None:
        if self._header is None:
            return
        markup = self.config.markup
        for i, cell in enumerate(_cells(self._header)):
            classes = [c for c in class_list(cell) if c not in (markup.asc_class, markup.desc_class)]
            if dataset.sorted_by is not None and dataset.sorted_by[0] == i:
                classes.append(markup.desc_class if dataset.sorted_by[1] else markup.asc_class)
            _set_classes(cell, classes)

    def _ensure_structure(self) -> Tag:
        if self._header is None and not self._body_rows:
            self.read_dataset()
        soup = _document(self.table)
        if self._header is not None and self.table.find("thead", recursive=False) is None:
            thead = soup.new_tag("thead")
            self.table.insert(0, thead)
            thead.append(self._header.extract())
        tbody = self.table.find("tbody", recursive=False)
        if tbody is None:
            tbody = soup.new_tag("tbody")
            tfoot = self.table.find("tfoot", recursive=False)
            if tfoot is not None:
                tfoot.insert_before(tbody)
            else:
                self.table.append(tbody)
            for tr in self._body_rows:
                tbody.append(tr.extract())
            logger.debug("created <tbody> for %d row(s)", len(self._body_rows))
        return tbody


def class_list(tag: Tag) -> list[str]:
    value = tag.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def _add_class(tag: Tag, css_class: str) -> None:
    classes = class_list(tag)
    if css_class not in classes:
        classes.append(css_class)
    _set_classes(tag, classes)


def _set_classes(tag: Tag, classes: list[str]) -> None:
    if classes:
        tag["class"] = classes
    elif tag.has_attr("class"):
        del tag["class"]


def _set_hidden(tag: Tag, hidden: bool) -> None:
    declarations = [
        d.strip()
        for d in str(tag.get("style", "")).split(";")
        if d.strip() and not d.strip().lower().startswith("display")
    ]
    if hidden:
        declarations.append("display: none")
    if declarations:
        tag["style"] = "; ".join(declarations)
    elif tag.has_attr("style"):
        del tag["style"]
