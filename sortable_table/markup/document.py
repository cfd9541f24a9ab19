from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import pandas as pd
from bs4 import BeautifulSoup, Tag

from ..models.config_models import EngineConfig
from ..models.document_result import DocumentResult, TableStat
from ..services.controller import TableController
from ..services.progress import ProgressTracker
from .html_table import HtmlTable, class_list

"""Document-level helpers: find sortable tables, index them, render frames.

load_document() is the batch counterpart of making every ``table.sortable``
of a page interactive: one HtmlTable adapter and one TableController per
table, each built once.
"""

__all__ = [
    "SortableTable",
    "dataframe_to_table",
    "find_sortable_tables",
    "load_document",
    "parse_html",
    "summarize",
]

logger = logging.getLogger(__name__)


@dataclass
class SortableTable:
    position: int
    adapter: HtmlTable
    controller: TableController
    indexed: bool

    def render(self) -> None:
        """Push the controller state back into the markup."""
        if self.indexed and self.controller.dataset is not None:
            self.adapter.apply(self.controller.dataset)


def parse_html(text: str) -> BeautifulSoup:
    return BeautifulSoup(text, "html.parser")


def find_sortable_tables(soup: BeautifulSoup, config: EngineConfig | None = None) -> list[Tag]:
    wanted = (config or EngineConfig()).markup.table_class.lower()
    tables = []
    for table in soup.find_all("table"):
        classes = [c.lower() for c in class_list(table)]
        if wanted in classes:
            tables.append(table)
    return tables


def load_document(soup: BeautifulSoup, config: EngineConfig | None = None) -> list[SortableTable]:
    """Index every sortable table of the document, in document order."""
    config = config or EngineConfig()
    tables = find_sortable_tables(soup, config)
    loaded: list[SortableTable] = []
    with ProgressTracker(len(tables)) as progress:
        for position, element in enumerate(tables):
            progress.start_table(f"#{position}")
            adapter = HtmlTable(element, config)
            controller = TableController(config)
            indexed = controller.build(adapter)
            if not indexed:
                logger.info(f"table #{position} not indexed (fewer than 2 rows)")
            loaded.append(SortableTable(position, adapter, controller, indexed))
            progress.finish_table(len(controller.dataset) if controller.dataset else 0)
    return loaded


def summarize(tables: list[SortableTable], started: float) -> DocumentResult:
    stats = []
    for t in tables:
        dataset = t.controller.dataset
        rows = len(dataset) if dataset is not None else 0
        visible = len(dataset.visible_rows()) if dataset is not None else 0
        sortable = len(t.controller.index.eligible_columns) if t.controller.index is not None else 0
        stats.append(TableStat(t.position, t.indexed, rows, visible, sortable))
    return DocumentResult(tables=stats, elapsed_seconds=round(time.perf_counter() - started, 3))


def dataframe_to_table(frame: pd.DataFrame, soup: BeautifulSoup, config: EngineConfig | None = None) -> Tag:
    """Render a DataFrame as ``<table class="sortable">`` with thead and tbody.

    Missing values become empty cells.
    """
    config = config or EngineConfig()
    table = soup.new_tag("table", attrs={"class": [config.markup.table_class]})
    thead = soup.new_tag("thead")
    header = soup.new_tag("tr")
    for name in frame.columns:
        th = soup.new_tag("th")
        th.string = str(name)
        header.append(th)
    thead.append(header)
    table.append(thead)
    tbody = soup.new_tag("tbody")
    for values in frame.itertuples(index=False, name=None):
        tr = soup.new_tag("tr")
        for value in values:
            td = soup.new_tag("td")
            td.string = "" if pd.isna(value) else str(value)
            tr.append(td)
        tbody.append(tr)
    table.append(tbody)
    return table
