"""Tests for the Sum/Min/Max trees and the ready-made monoids."""

import random

import numpy as np
import pytest

from segtree import (
    InvalidArgument,
    MaxSegmentTree,
    MinSegmentTree,
    Monoid,
    SegmentTree,
    SumSegmentTree,
    concat_monoid,
    matmul_monoid,
    max_monoid,
    min_monoid,
    product_monoid,
    sum_monoid,
)


def load(tree, values):
    for idx, value in enumerate(values):
        tree[idx] = value
    return tree


class TestSumSegmentTree:
    """Test SumSegmentTree helpers."""

    def test_sum_defaults_to_full_range(self):
        tree = load(SumSegmentTree(5), [1, 2, 0, 3, 4])
        assert tree.sum() == 10
        assert tree.sum(1, 3) == 5
        assert tree.sum(2) == 7

    @pytest.mark.parametrize(
        "prefix, expected",
        [(0, 0), (0.5, 0), (1, 1), (2.5, 1), (3, 3), (5.9, 3), (6, 4), (9.5, 4)],
    )
    def test_find_prefix_index(self, prefix, expected):
        tree = load(SumSegmentTree(5), [1, 2, 0, 3, 4])
        assert tree.find_prefix_index(prefix) == expected

    @pytest.mark.parametrize("prefix", [-1, 10, 11])
    def test_find_prefix_index_bounds(self, prefix):
        tree = load(SumSegmentTree(5), [1, 2, 0, 3, 4])
        with pytest.raises(InvalidArgument):
            tree.find_prefix_index(prefix)

    def test_find_prefix_index_never_lands_in_padding(self):
        rng = random.Random(11)
        tree = load(SumSegmentTree(6), [rng.randint(0, 5) + 1 for _ in range(6)])
        for _ in range(100):
            assert 0 <= tree.find_prefix_index(rng.uniform(0, tree.total - 1e-9)) < 6


    def test_find_prefix_index_clamped_to_last_position(self):
        tree = load(SumSegmentTree(5), [1.0, 1.0, 1.0, 1.0, 1.0])
        # leaf 4 reads slightly low against its parent, as float drift would leave it
        tree.tree[tree.capacity + 4] = 0.5
        assert tree.find_prefix_index(4.7) == 4


class TestMinMaxSegmentTree:
    """Test MinSegmentTree and MaxSegmentTree."""

    def test_fresh_trees_hold_infinities(self):
        assert MinSegmentTree(3).min() == float("inf")
        assert MaxSegmentTree(3).max() == float("-inf")

    def test_min(self):
        tree = load(MinSegmentTree(6), [5, 3, 8, 1, 9, 4])
        assert tree.min() == 1
        assert tree.min(0, 2) == 3
        assert tree.min(4) == 4

    def test_max(self):
        tree = load(MaxSegmentTree(6), [5, 3, 8, 1, 9, 4])
        assert tree.max() == 9
        assert tree.max(0, 3) == 8
        assert tree.max(5, 5) == 4


class TestMonoids:
    """Test Monoid folding and tree construction."""

    def test_tree_uses_operation_and_identity(self):
        monoid = product_monoid()
        tree = monoid.tree(4)
        assert isinstance(tree, SegmentTree)
        assert tree.identity == 1
        load(tree, [2, 3, 4, 5])
        assert tree.range_query(1, 2) == 12

    @pytest.mark.parametrize(
        "factory, values",
        [
            (sum_monoid, [4, -2, 7, 0, 3]),
            (product_monoid, [2, -1, 3, 1, 2]),
            (min_monoid, [4, -2, 7, 0, 3]),
            (max_monoid, [4, -2, 7, 0, 3]),
            (concat_monoid, ["p", "q", "r", "s", "t"]),
        ],
    )
    def test_tree_agrees_with_fold(self, factory, values):
        monoid = factory()
        tree = load(monoid.tree(len(values)), values)
        for lo in range(len(values)):
            for hi in range(lo, len(values)):
                assert tree.range_query(lo, hi) == monoid.fold(values[lo:hi + 1])

    def test_fold_of_nothing_is_identity(self):
        assert sum_monoid().fold([]) == 0
        assert concat_monoid().fold([]) == ""

    def test_matmul_is_order_sensitive(self):
        monoid = matmul_monoid(2)
        a = np.array([[1.0, 1.0], [0.0, 1.0]])
        b = np.array([[1.0, 0.0], [1.0, 1.0]])
        tree = load(monoid.tree(3), [a, b, a])
        np.testing.assert_array_equal(tree.range_query(0, 1), a @ b)
        np.testing.assert_array_equal(tree.range_query(1, 2), b @ a)
        assert not np.array_equal(a @ b, b @ a)
        np.testing.assert_array_equal(tree.range_query(0, 2), monoid.fold([a, b, a]))

    def test_custom_monoid(self):
        monoid = Monoid(lambda x, y: (x[0] + y[0], max(x[1], y[1])), (0, float("-inf")))
        tree = load(monoid.tree(4), [(1, 5), (2, 3), (3, 9), (4, 1)])
        assert tree.range_query(1, 3) == (9, 9)
        assert tree.range_query(3, 3) == (4, 1)
