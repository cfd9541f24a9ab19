from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from ..models.dataset import Dataset

"""Tabular file reader.

Turns delimited text (CSV, TSV) and Excel workbooks into DataFrames whose
first row is the header, so they can be rendered as sortable HTML tables or
handed to the engine directly as a Dataset.

Delimited text is read as strings: locale formatting such as "1 234,5" must
reach the key normalizer untouched.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "TabularReadError",
    "frame_to_dataset",
    "read_tabular_file",
]

SUPPORTED_SUFFIXES = {".csv", ".tsv", ".tab", ".txt", ".xlsx"}


class TabularReadError(Exception):
    """Raised when a tabular file cannot be read."""


def read_tabular_file(path: Path, sheet: str | int | None = None) -> pd.DataFrame:
    """Read a tabular file into a DataFrame (first row = header).

    Parameters
    ----------
    path: CSV / TSV / Excel file
    sheet: Excel sheet name or position (first sheet when None)
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise TabularReadError(f"unsupported file type: {path.name}")
    if not path.exists():
        raise TabularReadError(f"file not found: {path}")
    try:
        if suffix == ".xlsx":
            return pd.read_excel(path, sheet_name=0 if sheet is None else sheet, dtype=object)
        if suffix == ".csv":
            return pd.read_csv(path, sep=",", dtype=str, keep_default_na=False)
        return pd.read_csv(path, sep="\t", dtype=str, keep_default_na=False, quotechar='"')
    except (ValueError, OSError) as e:
        raise TabularReadError(f"cannot read {path.name}: {e}") from e


def _cell_value(value: Any) -> Any:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):  # pragma: no cover - array-like cell
        pass
    if hasattr(value, "item"):
        # numpy scalar -> python scalar, so numbers stay literal sort values
        return value.item()
    return value


def frame_to_dataset(frame: pd.DataFrame, excluded: list[int] | None = None) -> Dataset:
    """Build an engine Dataset from a DataFrame; missing values become empty cells."""
    records = (
        tuple(_cell_value(v) for v in values)
        for values in frame.itertuples(index=False, name=None)
    )
    return Dataset.from_records([str(c) for c in frame.columns], records, excluded=excluded or ())
