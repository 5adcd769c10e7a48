"""Tests for item deduplication."""

from __future__ import annotations

import numpy as np
import pytest

from divsel import deduplicate
from divsel.exceptions import (
    EmptyInputError,
    InvalidCardinalityError,
    InvalidThresholdError,
    ItemCountMismatchError,
)
from divsel.selection import DenseCosineBuilder, DiversitySelector


ITEMS = ["apple", "apples", "river", "rivers"]


class TestDeduplicate:
    def test_fixed_k(self, two_pairs: list[list[float]]):
        result = deduplicate(ITEMS, two_pairs, k=2)
        assert result.texts == ["apple", "river"]
        assert [kept.index for kept in result.items] == [0, 2]
        assert result.selection.policy == "fixed"

    def test_automatic_k(self, identical: list[list[float]]):
        result = deduplicate(["a", "a", "a"], identical)
        assert result.texts == ["a"]
        assert result.selection.saturated

    def test_automatic_k_two_clusters(self, two_pairs: list[list[float]]):
        result = deduplicate(ITEMS, two_pairs)
        assert result.texts == ["apple", "river"]
        assert result.selection.objective_trajectory[:2] == pytest.approx([0.5, 1.0])

    def test_keeps_selection_order(self, clustered: np.ndarray):
        items = [f"item-{i}" for i in range(len(clustered))]
        result = deduplicate(items, clustered, k=3)
        assert [kept.item for kept in result.items] == [
            items[i] for i in result.selection.selected_indices
        ]

    def test_threshold(self, two_pairs: list[list[float]]):
        result = deduplicate(ITEMS, two_pairs, threshold=0.6)
        assert result.texts == ["apple"]

    def test_threshold_with_strict_selector(self, two_pairs: list[list[float]]):
        selector = DiversitySelector(DenseCosineBuilder(strict=True))
        result = deduplicate(ITEMS, two_pairs, threshold=0.6, selector=selector)
        assert result.texts == ["apple"]

    def test_invalid_threshold(self, two_pairs: list[list[float]]):
        with pytest.raises(InvalidThresholdError):
            deduplicate(ITEMS, two_pairs, threshold=-1.0)

    def test_fixed_k_equal_n_keeps_trajectory(self, two_pairs: list[list[float]]):
        result = deduplicate(ITEMS, two_pairs, k=4)
        assert result.texts == ITEMS
        assert result.selection.objective_trajectory == pytest.approx([0.5, 0.5, 1.0, 1.0])

    def test_empty_items(self):
        with pytest.raises(EmptyInputError):
            deduplicate([], [])

    def test_count_mismatch(self, two_pairs: list[list[float]]):
        with pytest.raises(ItemCountMismatchError):
            deduplicate(ITEMS[:3], two_pairs)

    @pytest.mark.parametrize("k", [0, 5])
    def test_invalid_k(self, two_pairs: list[list[float]], k: int):
        with pytest.raises(InvalidCardinalityError):
            deduplicate(ITEMS, two_pairs, k=k)
