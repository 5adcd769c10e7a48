"""Result records for diversity selection."""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


class SelectionResult(BaseModel):
    """Outcome of one greedy selection run.

    ``selected_indices`` is in selection order, not index order.
    ``objective_trajectory`` holds the mean coverage after each acceptance,
    including the pick that triggered a saturation stop (which is itself
    not part of ``selected_indices``).
    """

    selected_indices: list[int] = Field(default_factory=list)
    objective_trajectory: list[float] = Field(default_factory=list)
    policy: str = ""
    saturated: bool = False  # Stopped on the saturation threshold
    candidates: int = 0
    reevaluations: int = 0  # Stale queue entries recomputed
    selection_time_ms: float = 0.0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def optimal_k(self) -> int:
        return len(self.selected_indices)

    @property
    def final_objective(self) -> float:
        """Objective value of the returned selection."""
        if not self.selected_indices or not self.objective_trajectory:
            return 0.0
        return self.objective_trajectory[self.optimal_k - 1]

    def summary(self) -> str:
        """Human-readable summary of the run."""
        lines = [
            f"Policy: {self.policy}",
            f"Selected: {self.optimal_k} of {self.candidates} candidates",
            f"Objective: {self.final_objective:.4f}",
            f"Saturated: {'yes' if self.saturated else 'no'}",
            f"Re-evaluations: {self.reevaluations}",
            f"Selection time: {self.selection_time_ms:.1f}ms",
        ]
        if self.selected_indices:
            lines.append(f"Order: {', '.join(str(i) for i in self.selected_indices)}")
        return "\n".join(lines)


class SelectedItem(BaseModel):
    """An input item kept by deduplication, with its original position."""

    index: int
    item: str


class DedupResult(BaseModel):
    """Deduplicated items plus the selection run that produced them."""

    items: list[SelectedItem] = Field(default_factory=list)
    selection: SelectionResult = Field(default_factory=SelectionResult)

    @property
    def texts(self) -> list[str]:
        return [s.item for s in self.items]
