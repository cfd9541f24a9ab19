"""Table engine services: key normalization, indexing, sorting, filtering, painting."""

from .controller import TableController, TableSource, TableState
from .filter_engine import FilterEngine
from .key_index import KeyIndex
from .normalizer import Key, KeyNormalizer, coerce_text, sort_token
from .row_painter import RowPainter
from .sort_engine import SortEngine

__all__ = [
    "FilterEngine",
    "Key",
    "KeyIndex",
    "KeyNormalizer",
    "RowPainter",
    "SortEngine",
    "TableController",
    "TableSource",
    "TableState",
    "coerce_text",
    "sort_token",
]
