"""Lazy-greedy diversity selection.

Formulation:
  Given embeddings e_1..e_n and clamped cosine similarities
  s(i, j) = max(0, cos(e_i, e_j)), select an ordered subset X maximizing the
  facility-location objective

      F(X) = (1/n) * Σ_j max_{i ∈ X} s(i, j)

  F is monotone and submodular, so the marginal gain of any candidate only
  shrinks as X grows.

Algorithm:
  1. Build the n x n similarity matrix (swappable builder)
  2. Queue every item with its gain against empty coverage, epoch 0
  3. Each iteration pops until the top entry was evaluated this epoch;
     stale entries are re-evaluated and pushed back (lazy evaluation)
  4. Accept the fresh top entry, fold its row into coverage
  5. Ask the stopping policy whether to continue

Approximation guarantee:
  Greedy selection of k items reaches at least (1 - 1/e) ≈ 0.632 of the
  optimal F over all size-k subsets (Nemhauser et al., 1978). Lazy
  evaluation returns the same selection as plain greedy.
"""

from __future__ import annotations

import logging
import time

import numpy as np

from divsel.exceptions import (
    EmptyInputError,
    InvalidCardinalityError,
    InvalidThresholdError,
)
from divsel.selection.coverage import CoverageTracker
from divsel.selection.models import SelectionResult
from divsel.selection.queue import LazyQueue
from divsel.selection.similarity import DenseCosineBuilder, Embeddings, SimilarityBuilder
from divsel.selection.stopping import (
    DEFAULT_THRESHOLD,
    FixedCount,
    SaturationThreshold,
    StoppingPolicy,
)

logger = logging.getLogger("divsel.selection")


def lazy_greedy(matrix: np.ndarray, policy: StoppingPolicy) -> SelectionResult:
    """Run the lazy-greedy loop over a precomputed similarity matrix.

    All state (coverage, queue, selection) lives in this call.
    """
    start = time.time()
    n = matrix.shape[0]
    tracker = CoverageTracker(n)
    if isinstance(policy, FixedCount) and policy.k >= n:
        # Everything is selected; keep index order and just fold the rows in.
        values = []
        for i in range(n):
            tracker.update(matrix[i])
            values.append(tracker.objective_value())
        return SelectionResult(
            selected_indices=list(range(n)),
            objective_trajectory=values,
            policy=policy.name,
            candidates=n,
            selection_time_ms=round((time.time() - start) * 1000, 3),
        )

    queue = LazyQueue()

    for i in range(n):
        queue.push(tracker.gain(matrix[i]), i, epoch=0)

    def gain_of(index: int) -> float:
        return tracker.gain(matrix[index])

    selected: list[int] = []
    chosen: set[int] = set()
    trajectory: list[float] = []

    for epoch in range(policy.max_steps(n)):
        entry = queue.pop_best(epoch, gain_of, chosen)
        if entry is None:
            break

        selected.append(entry.index)
        chosen.add(entry.index)
        tracker.update(matrix[entry.index])
        trajectory.append(tracker.objective_value())
        logger.debug(
            "epoch %d: picked %d (gain %.4f, objective %.4f)",
            epoch, entry.index, entry.gain, trajectory[-1],
        )

        if policy.should_stop(trajectory):
            break

    keep = policy.result_size(trajectory)
    saturated = keep < len(trajectory)
    elapsed_ms = (time.time() - start) * 1000
    logger.debug(
        "%s policy kept %d of %d picks over %d candidates (%d re-evaluations)",
        policy.name, keep, len(selected), n, queue.reevaluations,
    )

    return SelectionResult(
        selected_indices=selected[:keep],
        objective_trajectory=trajectory,
        policy=policy.name,
        saturated=saturated,
        candidates=n,
        reevaluations=queue.reevaluations,
        selection_time_ms=round(elapsed_ms, 3),
    )


class DiversitySelector:
    """Facility-location diversity selection over caller-supplied embeddings.

    Usage:
        selector = DiversitySelector()
        indices = selector.select_fixed_k(embeddings, k=5)
        result = selector.select_by_saturation(embeddings)
        print(result.summary())
    """

    def __init__(
        self,
        builder: SimilarityBuilder | None = None,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        self.builder = builder or DenseCosineBuilder()
        self.threshold = threshold

    def select_fixed_k(self, embeddings: Embeddings, k: int) -> list[int]:
        """Select exactly k indices, in selection order."""
        return self.run_fixed_k(embeddings, k).selected_indices

    def run_fixed_k(self, embeddings: Embeddings, k: int) -> SelectionResult:
        """Like ``select_fixed_k`` but returns the full result record."""
        n = _validate_embeddings(embeddings)
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
            raise InvalidCardinalityError(k, n)
        if k <= 0 or k > n:
            raise InvalidCardinalityError(k, n)

        matrix = self.builder.build(embeddings)
        return lazy_greedy(matrix, FixedCount(int(k)))

    def select_by_saturation(
        self, embeddings: Embeddings, threshold: float | None = None
    ) -> SelectionResult:
        """Select until one more item adds less than ``threshold`` coverage."""
        n = _validate_embeddings(embeddings)
        epsilon = self.threshold if threshold is None else threshold
        if not SaturationThreshold.is_valid_threshold(epsilon):
            raise InvalidThresholdError(epsilon)

        matrix = self.builder.build(embeddings)
        result = lazy_greedy(matrix, SaturationThreshold(float(epsilon)))
        logger.info(
            "Saturation selection kept %d of %d items (threshold %g)",
            result.optimal_k, n, epsilon,
        )
        return result


def select_fixed_k(
    embeddings: Embeddings, k: int, *, builder: SimilarityBuilder | None = None
) -> list[int]:
    """Select the k most coverage-increasing embeddings, in selection order."""
    return DiversitySelector(builder).select_fixed_k(embeddings, k)


def select_by_saturation(
    embeddings: Embeddings,
    threshold: float = DEFAULT_THRESHOLD,
    *,
    builder: SimilarityBuilder | None = None,
) -> SelectionResult:
    """Select embeddings until coverage saturates; see ``SaturationThreshold``."""
    return DiversitySelector(builder, threshold).select_by_saturation(embeddings)


def _validate_embeddings(embeddings: Embeddings) -> int:
    if embeddings is None or len(embeddings) == 0:
        raise EmptyInputError()
    return len(embeddings)
