from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from sortable_table.config.loader import ConfigError, load_config, resolve_config_path
from sortable_table.logging.init import log_summary, set_debug, setup_logging
from sortable_table.markup.document import (
    SortableTable,
    dataframe_to_table,
    load_document,
    parse_html,
    summarize,
)
from sortable_table.markup.stylesheet import inject_stylesheet
from sortable_table.models.config_models import EngineConfig
from sortable_table.services.summary import render_summary_line
from sortable_table.tabular.reader import TabularReadError, read_tabular_file

"""CLI entrypoint.

Flow:
- Load .env, then the engine config (--config, $SORTABLE_TABLE_CONFIG,
  config/sortable.yml, or built-in defaults)
- Read the input: an HTML document, or a CSV/TSV/Excel file rendered as a
  sortable table
- Index every sortable table, apply the requested filter/range/sort to the
  selected table(s), repaint, write the HTML out
- Print a SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_NOTHING_INDEXED = 2

HTML_SUFFIXES = {".html", ".htm", ".xhtml"}


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env via python-dotenv so $SORTABLE_TABLE_CONFIG can live there."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="sortable-table", description="Sort, filter and paint HTML tables")
    p.add_argument("input", help="HTML document, or .csv/.tsv/.xlsx file to render as a sortable table")
    p.add_argument("-o", "--output", help="Output HTML file (default: <input stem>.sortable.html)")
    p.add_argument("--config", help="YAML engine configuration")
    p.add_argument("--table", type=int, help="Only act on the N-th sortable table (0-based)")
    p.add_argument(
        "--sort", action="append", metavar="COL",
        help="Sort by column index or header label; repeat for a multi-column sort",
    )
    p.add_argument("--desc", action="store_true", help="Sort descending")
    p.add_argument("--filter", nargs=2, metavar=("COL", "TEXT"), help="Keep rows whose COL contains TEXT")
    p.add_argument(
        "--range", nargs=3, metavar=("COL", "MIN", "MAX"),
        help="Keep rows with MIN <= COL <= MAX (empty bound = unbounded)",
    )
    p.add_argument("--sheet", help="Excel sheet name (first sheet by default)")
    p.add_argument("--css", action="store_true", help="Inject the default table stylesheet")
    p.add_argument("--inspect", action="store_true", help="Print table columns and keys, then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _load_engine_config(explicit: str | None) -> EngineConfig:
    path = resolve_config_path(Path(explicit) if explicit else None)
    if path is None:
        return EngineConfig()
    return load_config(path)


def _read_input(path: Path, cfg: EngineConfig, sheet: str | None):
    if path.suffix.lower() in HTML_SUFFIXES:
        return parse_html(path.read_text(encoding="utf-8"))
    frame = read_tabular_file(path, sheet=sheet)
    soup = parse_html(f"<!DOCTYPE html>\n<html><head><title>{path.stem}</title></head><body></body></html>")
    soup.body.append(dataframe_to_table(frame, soup, cfg))
    return soup


def _resolve_column(table: SortableTable, ref: str) -> int | None:
    """Column by 0-based index, or by header label (compared as sort keys)."""
    dataset = table.controller.dataset
    if dataset is None:
        return None
    if ref.isdecimal():
        return int(ref)
    wanted = table.controller.normalizer.normalize(ref)
    for column in dataset.columns:
        if table.controller.normalizer.normalize(column.label) == wanted:
            return column.index
    return None


def _apply_actions(table: SortableTable, args: argparse.Namespace, logger) -> None:
    controller = table.controller
    if args.filter:
        col = _resolve_column(table, args.filter[0])
        if col is None:
            logger.warning(f"table #{table.position}: unknown filter column {args.filter[0]!r}")
        else:
            controller.filter_substring(col, args.filter[1])
    if args.range:
        col = _resolve_column(table, args.range[0])
        if col is None:
            logger.warning(f"table #{table.position}: unknown range column {args.range[0]!r}")
        else:
            controller.filter_range(col, args.range[1], args.range[2])
    if args.sort:
        keys = []
        for ref in args.sort:
            col = _resolve_column(table, ref)
            if col is None:
                logger.warning(f"table #{table.position}: unknown sort column {ref!r}")
                continue
            keys.append((col, args.desc))
        if len(keys) == 1:
            controller.sort(*keys[0])
        elif keys:
            controller.sort_many(keys)
    controller.paint()


def _inspect(tables: list[SortableTable]) -> int:
    for t in tables:
        dataset = t.controller.dataset
        if not t.indexed or dataset is None or t.controller.index is None:
            print(f"TABLE #{t.position}: not indexed")
            continue
        labels = [f"{c.index}:{c.label.strip()}{'' if c.sortable else ' (unsortable)'}" for c in dataset.columns]
        print(f"TABLE #{t.position}: rows={len(dataset)} columns={labels}")
        for row in dataset.ordered_rows()[:3]:
            keys = [t.controller.index.key(row.id, c) for c in t.controller.index.eligible_columns]
            print(f"    keys={keys}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when no list is given: cli_main([]) must not pick up pytest's args
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = _load_engine_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    input_path = Path(args.input)
    if not input_path.exists():
        logger.error(f"input not found: {input_path}")
        return EXIT_FATAL

    started = time.perf_counter()
    try:
        soup = _read_input(input_path, cfg, args.sheet)
    except (TabularReadError, UnicodeDecodeError) as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL

    tables = load_document(soup, cfg)
    logger.info(f"found {len(tables)} sortable table(s) in {input_path.name}")

    if args.inspect:
        return _inspect(tables)

    selected = tables
    if args.table is not None:
        selected = [t for t in tables if t.position == args.table]
        if not selected:
            logger.error(f"no sortable table #{args.table}")
            return EXIT_FATAL

    for t in selected:
        if t.indexed:
            _apply_actions(t, args, logger)
    for t in tables:
        t.render()

    if args.css:
        inject_stylesheet(soup)

    output = Path(args.output) if args.output else input_path.with_name(f"{input_path.stem}.sortable.html")
    output.write_text(str(soup), encoding="utf-8")
    logger.info(f"written: {output}")

    result = summarize(tables, started)
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.indexed_tables == 0:
        return EXIT_NOTHING_INDEXED
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
