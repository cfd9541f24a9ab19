from __future__ import annotations

from ..models.config_models import PainterConfig
from ..models.dataset import Dataset

"""Periodic row classes over the visible rows."""

__all__ = [
    "RowPainter",
]


class RowPainter:
    def __init__(self, config: PainterConfig | None = None) -> None:
        self.config = config or PainterConfig()

    def bands_for(self, counter: int) -> tuple[str, ...]:
        return tuple(b.css_class for b in self.config.bands if b.matches(counter))

    def paint(self, dataset: Dataset) -> int:
        """Assign bands to visible rows in rank order, counting from 1.

        Hidden rows are cleared and do not advance the counter, so bands run
        without a seam across filtered-out rows. Returns the visible count.
        """
        counter = 0
        for row in dataset.ordered_rows():
            if not row.visible:
                row.bands = ()
                continue
            counter += 1
            row.bands = self.bands_for(counter)
        return counter
