"""Facility-location coverage state."""

from __future__ import annotations

import numpy as np


class CoverageTracker:
    """Best similarity of every item to the selected set so far.

    ``coverage[j]`` only ever grows, so the marginal gain of any fixed
    candidate can only shrink as selections are made. The lazy queue
    relies on exactly that.
    """

    def __init__(self, n: int) -> None:
        self.coverage = np.zeros(n, dtype=np.float64)

    def __len__(self) -> int:
        return self.coverage.shape[0]

    def gain(self, row: np.ndarray) -> float:
        """Marginal gain of adding the item whose similarity row is ``row``."""
        return float((np.maximum(self.coverage, row) - self.coverage).sum())

    def update(self, row: np.ndarray) -> None:
        """Fold a newly selected item's similarity row into coverage."""
        np.maximum(self.coverage, row, out=self.coverage)

    def objective_value(self) -> float:
        """Mean coverage over all items, in [0, 1]."""
        if self.coverage.shape[0] == 0:
            return 0.0
        return float(self.coverage.mean())
