"""Tests for cosine similarity and matrix construction."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from divsel.exceptions import DimensionMismatchError
from divsel.selection.similarity import (
    DenseCosineBuilder,
    clamped_similarity,
    cosine_similarity,
)


class TestCosineSimilarity:
    def test_identical_direction(self):
        assert cosine_similarity([1.0, 2.0, 3.0], [2.0, 4.0, 6.0]) == pytest.approx(1.0)

    def test_orthogonal(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == 0.0

    def test_opposite_is_negative_before_clamping(self):
        assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)
        assert clamped_similarity([1.0, 0.0], [-1.0, 0.0]) == 0.0

    def test_symmetric(self, random_embeddings: np.ndarray):
        for a, b in zip(random_embeddings[:-1], random_embeddings[1:]):
            assert cosine_similarity(a, b) == cosine_similarity(b, a)

    def test_self_similarity(self, random_embeddings: np.ndarray):
        for v in random_embeddings:
            assert clamped_similarity(v, v) == pytest.approx(1.0)

    def test_zero_vector(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0
        assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0

    def test_dimension_mismatch(self):
        assert cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0]) == 0.0


class TestDenseCosineBuilder:
    def test_shape_and_range(self, random_embeddings: np.ndarray):
        matrix = DenseCosineBuilder().build(random_embeddings)
        assert matrix.shape == (40, 40)
        assert matrix.min() >= 0.0
        assert matrix.max() <= 1.0

    def test_symmetric(self, random_embeddings: np.ndarray):
        matrix = DenseCosineBuilder().build(random_embeddings)
        assert np.array_equal(matrix, matrix.T)

    def test_diagonal_is_one(self, random_embeddings: np.ndarray):
        matrix = DenseCosineBuilder().build(random_embeddings)
        assert np.all(np.diag(matrix) == 1.0)

    def test_matches_pairwise(self, random_embeddings: np.ndarray):
        matrix = DenseCosineBuilder().build(random_embeddings)
        for i in (0, 7, 21):
            for j in (3, 7, 39):
                expected = clamped_similarity(random_embeddings[i], random_embeddings[j])
                assert matrix[i, j] == pytest.approx(expected)

    def test_negative_clamped(self):
        matrix = DenseCosineBuilder().build([[1.0, 0.0], [-1.0, 0.0]])
        assert matrix.tolist() == [[1.0, 0.0], [0.0, 1.0]]

    def test_zero_vector_row(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="divsel.similarity"):
            matrix = DenseCosineBuilder().build([[0.0, 0.0], [1.0, 0.0]])
        assert matrix[0].tolist() == [0.0, 0.0]
        assert matrix[1, 1] == 1.0
        assert "zero-norm" in caplog.text

    def test_mixed_dimensions_fall_back_to_zero(self, caplog: pytest.LogCaptureFixture):
        embeddings = [[1.0, 0.0], [1.0, 0.0, 0.0], [2.0, 0.0]]
        with caplog.at_level(logging.WARNING, logger="divsel.similarity"):
            matrix = DenseCosineBuilder().build(embeddings)
        assert matrix[0, 1] == 0.0
        assert matrix[1, 2] == 0.0
        assert matrix[0, 2] == pytest.approx(1.0)
        assert matrix[1, 1] == 1.0
        assert "distinct dimensions" in caplog.text

    def test_strict_mode_raises(self):
        with pytest.raises(DimensionMismatchError) as exc:
            DenseCosineBuilder(strict=True).build([[1.0, 0.0], [1.0, 0.0, 0.0]])
        assert exc.value.dimensions == [2, 3]

    def test_accepts_lists_and_arrays(self, two_pairs: list[list[float]]):
        from_list = DenseCosineBuilder().build(two_pairs)
        from_array = DenseCosineBuilder().build(np.array(two_pairs))
        assert np.array_equal(from_list, from_array)
