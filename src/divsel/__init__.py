"""divsel - submodular diversity selection over embedding vectors."""

__version__ = "0.1.0"

from divsel.dedup import deduplicate
from divsel.selection import (
    DiversitySelector,
    SelectionResult,
    select_by_saturation,
    select_fixed_k,
)

__all__ = [
    "__version__",
    "DiversitySelector",
    "SelectionResult",
    "deduplicate",
    "select_by_saturation",
    "select_fixed_k",
]
