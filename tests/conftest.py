"""Shared test fixtures for divsel."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest


@pytest.fixture
def two_pairs() -> list[list[float]]:
    """Two clusters of exact duplicates."""
    return [[1.0, 0.0], [1.0, 0.0], [0.0, 1.0], [0.0, 1.0]]


@pytest.fixture
def identical() -> list[list[float]]:
    return [[1.0, 0.0], [1.0, 0.0], [1.0, 0.0]]


@pytest.fixture
def clustered() -> np.ndarray:
    """Fifteen vectors in three tight, mutually orthogonal clusters.

    Rows 0-4 belong to cluster 0, rows 5-9 to cluster 1, rows 10-14 to
    cluster 2.
    """
    rng = np.random.default_rng(42)
    centers = np.eye(3, 16)
    return np.vstack([
        center + 0.01 * rng.standard_normal((5, 16)) for center in centers
    ])


@pytest.fixture
def random_embeddings() -> np.ndarray:
    rng = np.random.default_rng(1234)
    return rng.standard_normal((40, 12))


@pytest.fixture
def embeddings_file(tmp_path: Path, two_pairs: list[list[float]]) -> Path:
    path = tmp_path / "embeddings.json"
    path.write_text(json.dumps(two_pairs))
    return path


@pytest.fixture
def items_file(tmp_path: Path) -> Path:
    path = tmp_path / "items.json"
    path.write_text(json.dumps(["apple", "apples", "river", "rivers"]))
    return path
