"""Submodular diversity selection.

Picks the subset of an embedding set that best covers the whole set, either
for a fixed size or automatically at the point of diminishing returns.

Usage:
    from divsel.selection import select_fixed_k, select_by_saturation

    indices = select_fixed_k(embeddings, k=5)
    result = select_by_saturation(embeddings, threshold=0.01)
    print(result.optimal_k, result.objective_trajectory)
"""

from divsel.selection.engine import (
    DiversitySelector,
    lazy_greedy,
    select_by_saturation,
    select_fixed_k,
)
from divsel.selection.models import SelectionResult
from divsel.selection.similarity import DenseCosineBuilder, SimilarityBuilder
from divsel.selection.stopping import FixedCount, SaturationThreshold, StoppingPolicy

__all__ = [
    "DiversitySelector",
    "DenseCosineBuilder",
    "SimilarityBuilder",
    "SelectionResult",
    "StoppingPolicy",
    "FixedCount",
    "SaturationThreshold",
    "lazy_greedy",
    "select_fixed_k",
    "select_by_saturation",
]
