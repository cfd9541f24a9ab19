"""Domain models for the sortable table engine.

Configuration objects injected into the engine components, and the Dataset
records (rows, cells, columns) the engine sorts, filters and paints.
"""

from .config_models import BandRule, EngineConfig, MarkupConfig, NormalizerConfig, PainterConfig
from .dataset import Cell, Column, Dataset, Row

__all__ = [
    # Configuration models
    "BandRule",
    "EngineConfig",
    "MarkupConfig",
    "NormalizerConfig",
    "PainterConfig",
    # Table records
    "Cell",
    "Column",
    "Dataset",
    "Row",
]
