"""Lazy max-gain priority queue.

Entries carry the gain they were last evaluated with and the iteration
(epoch) of that evaluation. An entry popped with an older epoch is stale:
its real gain can only be lower, so it is re-evaluated and pushed back.
An entry popped with the current epoch beats every other candidate.

Ties on gain go to the smallest item index.
"""

from __future__ import annotations

import heapq
from collections.abc import Callable, Container
from dataclasses import dataclass, field


@dataclass(order=True, frozen=True)
class QueueEntry:
    """One candidate in the heap, ordered by (neg_gain, index)."""

    neg_gain: float
    index: int
    epoch: int = field(compare=False)

    @property
    def gain(self) -> float:
        return -self.neg_gain


class LazyQueue:
    """Binary min-heap keyed on negated marginal gain."""

    def __init__(self) -> None:
        self._heap: list[QueueEntry] = []
        self.reevaluations = 0

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, gain: float, index: int, epoch: int) -> None:
        heapq.heappush(self._heap, QueueEntry(-gain, index, epoch))

    def pop(self) -> QueueEntry:
        return heapq.heappop(self._heap)

    def pop_best(
        self,
        epoch: int,
        gain_of: Callable[[int], float],
        selected: Container[int] = (),
    ) -> QueueEntry | None:
        """Pop the candidate with the largest up-to-date gain at ``epoch``.

        Stale entries are re-evaluated with ``gain_of`` and re-queued until
        the top of the heap is fresh. Indices in ``selected`` are dropped.
        Returns None once the queue is exhausted.
        """
        while self._heap:
            entry = heapq.heappop(self._heap)
            if entry.index in selected:
                continue
            if entry.epoch == epoch:
                return entry
            self.reevaluations += 1
            self.push(gain_of(entry.index), entry.index, epoch)
        return None
