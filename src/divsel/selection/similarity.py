"""Pairwise cosine similarity for embedding sets.

Similarities are clamped to [0, 1] so that the facility-location objective
built on top of them stays monotone and submodular. Two degenerate cases are
defined rather than raised:

  - vectors of different length have similarity 0
  - a zero vector has similarity 0 to everything, itself included

Matrix construction sits behind the ``SimilarityBuilder`` protocol so the
greedy core never depends on how (or how approximately) the matrix is made.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol, Union

import numpy as np

from divsel.exceptions import DimensionMismatchError

logger = logging.getLogger("divsel.similarity")

Vector = Union[Sequence[float], np.ndarray]
Embeddings = Union[Sequence[Vector], np.ndarray]


def cosine_similarity(a: Vector, b: Vector) -> float:
    """Cosine similarity of two vectors (unclamped).

    Returns 0.0 when the lengths differ or either vector has zero norm.
    """
    a_arr = np.asarray(a, dtype=np.float64).ravel()
    b_arr = np.asarray(b, dtype=np.float64).ravel()
    if a_arr.shape != b_arr.shape:
        return 0.0

    norm_a = float(np.sqrt(np.dot(a_arr, a_arr)))
    norm_b = float(np.sqrt(np.dot(b_arr, b_arr)))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.dot(a_arr, b_arr)) / (norm_a * norm_b)


def clamped_similarity(a: Vector, b: Vector) -> float:
    """Cosine similarity clamped to [0, 1], as stored in the matrix."""
    return min(1.0, max(0.0, cosine_similarity(a, b)))


class SimilarityBuilder(Protocol):
    """Anything that turns n embeddings into an n x n similarity matrix."""

    def build(self, embeddings: Embeddings) -> np.ndarray: ...


class DenseCosineBuilder:
    """Exact O(n^2 * d) clamped cosine similarity matrix.

    Vectors are grouped by dimensionality and each group is compared with a
    single matrix product; pairs from different groups stay at 0. With
    ``strict=True`` a dimension mismatch raises instead.
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

    def build(self, embeddings: Embeddings) -> np.ndarray:
        vectors = [np.asarray(v, dtype=np.float64).ravel() for v in embeddings]
        n = len(vectors)
        matrix = np.zeros((n, n), dtype=np.float64)

        groups: dict[int, list[int]] = {}
        for i, vec in enumerate(vectors):
            groups.setdefault(vec.shape[0], []).append(i)

        if len(groups) > 1:
            dims = sorted(groups)
            if self.strict:
                raise DimensionMismatchError(dims)
            logger.warning(
                "Embeddings have %d distinct dimensions %s; "
                "cross-dimension pairs get similarity 0",
                len(dims), dims,
            )

        for members in groups.values():
            block = _cosine_block(np.vstack([vectors[i] for i in members]))
            matrix[np.ix_(members, members)] = block

        logger.debug("Built %dx%d similarity matrix", n, n)
        return matrix


def _cosine_block(stack: np.ndarray) -> np.ndarray:
    """Clamped cosine similarities within a stack of equal-length vectors."""
    norms = np.linalg.norm(stack, axis=1)
    nonzero = norms > 0.0

    zero_count = int((~nonzero).sum())
    if zero_count:
        logger.warning("%d zero-norm embedding(s) get similarity 0", zero_count)

    unit = np.zeros_like(stack)
    unit[nonzero] = stack[nonzero] / norms[nonzero, None]
    sims = unit @ unit.T

    # Mirror the upper triangle so (i, j) and (j, i) are bit-identical.
    sims = np.triu(sims) + np.triu(sims, 1).T
    np.clip(sims, 0.0, 1.0, out=sims)
    diag = np.flatnonzero(nonzero)
    sims[diag, diag] = 1.0
    return sims
