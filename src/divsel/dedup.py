"""Deduplicate items (strings, image references) by their embeddings.

Embeddings are produced elsewhere; this module only lines them up with the
items, validates the request and maps the selected indices back.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from divsel.exceptions import (
    EmptyInputError,
    InvalidCardinalityError,
    ItemCountMismatchError,
)
from divsel.selection.engine import DiversitySelector
from divsel.selection.models import DedupResult, SelectedItem
from divsel.selection.similarity import Embeddings
from divsel.selection.stopping import DEFAULT_THRESHOLD

logger = logging.getLogger("divsel.dedup")


def deduplicate(
    items: Sequence[str],
    embeddings: Embeddings,
    k: int | None = None,
    threshold: float = DEFAULT_THRESHOLD,
    selector: DiversitySelector | None = None,
) -> DedupResult:
    """Keep the most semantically distinct items.

    With ``k`` exactly k items are kept; otherwise the count is chosen at the
    saturation point of the coverage objective, using ``threshold``. A
    ``selector`` supplies the similarity builder; its own default threshold
    is not consulted.
    """
    if len(items) == 0:
        raise EmptyInputError("items")
    if len(items) != len(embeddings):
        raise ItemCountMismatchError(len(items), len(embeddings))
    if k is not None and (k <= 0 or k > len(items)):
        raise InvalidCardinalityError(k, len(items))

    selector = selector or DiversitySelector()
    if k is not None:
        selection = selector.run_fixed_k(embeddings, k)
    else:
        selection = selector.select_by_saturation(embeddings, threshold=threshold)

    kept = [SelectedItem(index=i, item=items[i]) for i in selection.selected_indices]
    logger.info("Kept %d of %d items", len(kept), len(items))
    return DedupResult(items=kept, selection=selection)
