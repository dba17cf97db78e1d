import functools
import operator
from typing import Any, Callable, Iterable, NamedTuple

import numpy as np

from .segment_tree import SegmentTree


class Monoid(NamedTuple):
    """An associative operation paired with its identity element."""
    operation: Callable[[Any, Any], Any]
    identity: Any

    def fold(self, values: Iterable):
        # Plain left fold, O(n); the reference a tree query must agree with
        return functools.reduce(self.operation, values, self.identity)

    def tree(self, size: int) -> SegmentTree:
        return SegmentTree(size, self.operation, self.identity)


def sum_monoid() -> Monoid:
    return Monoid(operator.add, 0)


def product_monoid() -> Monoid:
    return Monoid(operator.mul, 1)


def min_monoid() -> Monoid:
    return Monoid(min, float("inf"))


def max_monoid() -> Monoid:
    return Monoid(max, float("-inf"))


def concat_monoid() -> Monoid:
    """String concatenation: associative but not commutative."""
    return Monoid(operator.add, "")


def matmul_monoid(dim: int) -> Monoid:
    """Square matrix product with the ``dim`` x ``dim`` identity matrix."""
    return Monoid(np.matmul, np.eye(dim))
