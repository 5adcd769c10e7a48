"""Stopping policies for the greedy loop."""

from __future__ import annotations

import math
import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass

DEFAULT_THRESHOLD = 1e-2


class StoppingPolicy(ABC):
    """Decides how many greedy steps to take and how many to keep."""

    name: str = ""

    @abstractmethod
    def max_steps(self, n: int) -> int:
        """Upper bound on greedy iterations for n items."""

    @abstractmethod
    def should_stop(self, trajectory: list[float]) -> bool:
        """Called after every acceptance with the objective values so far."""

    def result_size(self, trajectory: list[float]) -> int:
        """Length of the selection prefix to return."""
        return len(trajectory)


@dataclass(frozen=True)
class FixedCount(StoppingPolicy):
    """Select exactly ``k`` items (or all of them when k >= n)."""

    k: int
    name = "fixed"

    def max_steps(self, n: int) -> int:
        return min(self.k, n)

    def should_stop(self, trajectory: list[float]) -> bool:
        return len(trajectory) >= self.k


@dataclass(frozen=True)
class SaturationThreshold(StoppingPolicy):
    """Stop once one more item improves the objective by less than epsilon.

    With values v[0], v[1], ... (v[t] is the objective after t + 1 picks),
    the first t >= 1 with v[t] - v[t-1] < epsilon ends the run and the
    selection is the t items chosen before that pick.
    """

    epsilon: float = DEFAULT_THRESHOLD
    name = "saturation"

    def max_steps(self, n: int) -> int:
        return n

    def should_stop(self, trajectory: list[float]) -> bool:
        if len(trajectory) < 2:
            return False
        return trajectory[-1] - trajectory[-2] < self.epsilon

    def result_size(self, trajectory: list[float]) -> int:
        if self.should_stop(trajectory):
            return len(trajectory) - 1
        return len(trajectory)

    @staticmethod
    def is_valid_threshold(value: float) -> bool:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            return False
        return math.isfinite(value) and value >= 0
