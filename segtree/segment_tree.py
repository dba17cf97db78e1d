import logging
import operator
from typing import Any, Callable, Iterable, Iterator, List, Tuple

import numpy as np

from .errors import IndexOutOfRange, InvalidArgument, InvalidRange

logger = logging.getLogger(__name__)


def next_power_of_two(size: int) -> int:
    """Smallest power of two that is >= size (1 for size <= 1)."""
    capacity = 1
    while capacity < size:
        capacity <<= 1
    return capacity


def _same_value(a, b) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return np.array_equal(a, b)
    if a == b:
        return True
    # nan never equals itself
    return a != a and b != b


class SegmentTree:
    """
    Fixed-size segment tree over an associative ``operation``.

    The store is a flat list addressed like a binary heap:

              1
           /     \\
          2       3
         / \\     / \\
        4   5   6   7

    Node ``v`` has children ``2v`` and ``2v + 1``; leaves live in
    ``[capacity, 2 * capacity)`` and leaf ``capacity + i`` holds position ``i``.
    Slots past the logical size are padding and always hold ``identity``.
    """

    def __init__(self, size: int, operation: Callable[[Any, Any], Any], identity: Any):
        if isinstance(size, bool):
            raise InvalidArgument(f"size must be an integer, got {size!r}")
        try:
            size = operator.index(size)
        except TypeError as exc:
            raise InvalidArgument(f"size must be an integer, got {size!r}") from exc
        if size < 1:
            raise InvalidArgument(f"size must be at least 1, got {size}")
        if not callable(operation):
            raise InvalidArgument(f"operation must be callable, got {operation!r}")
        if identity is None:
            raise InvalidArgument("an identity element is required")

        self.size = size
        self.capacity = next_power_of_two(size)
        self.operation = operation
        self.identity = identity
        # Python list keeps arbitrary values (str, ndarray, ...) as-is
        self.tree = [identity] * (2 * self.capacity)
        logger.debug("SegmentTree created: size=%d capacity=%d", self.size, self.capacity)

    @classmethod
    def from_values(cls, values: Iterable, operation: Callable[[Any, Any], Any], identity: Any):
        """Build a tree holding ``values`` in O(n), bottom-up."""
        values = list(values)
        tree = cls(len(values), operation, identity)
        tree.tree[tree.capacity:tree.capacity + len(values)] = values
        for v in range(tree.capacity - 1, 0, -1):
            tree.tree[v] = operation(tree.tree[2 * v], tree.tree[2 * v + 1])
        return tree

    def _position(self, idx, error):
        if isinstance(idx, bool):
            raise error(f"index must be an integer, got {idx!r}")
        try:
            idx = operator.index(idx)
        except TypeError as exc:
            raise error(f"index must be an integer, got {idx!r}") from exc
        if not 0 <= idx < self.size:
            raise error(f"index {idx} out of range [0, {self.size})")
        return idx

    def assign(self, idx: int, value) -> None:
        """Set position ``idx`` to ``value`` and recompute every ancestor."""
        idx = self._position(idx, IndexOutOfRange)
        idx += self.capacity
        # Recompute the whole path before touching the store, so a failing
        # operation leaves the tree as it was
        path = [(idx, value)]
        while idx > 1:
            if idx & 1:
                combined = self.operation(self.tree[idx - 1], value)
            else:
                combined = self.operation(value, self.tree[idx + 1])
            idx >>= 1
            value = combined
            path.append((idx, value))
        for slot, new_value in path:
            self.tree[slot] = new_value

    def range_query(self, lo: int, hi: int):
        """Returns operation folded left-to-right over positions lo..hi inclusive."""
        lo = self._position(lo, InvalidRange)
        hi = self._position(hi, InvalidRange)
        if lo > hi:
            raise InvalidRange(f"empty range: lo={lo} > hi={hi}")
        return self._query(1, 0, self.capacity - 1, lo, hi)

    def _query(self, v: int, l: int, r: int, lo: int, hi: int):
        # [l, r] is the span of node v and always contains [lo, hi]
        if l == lo and r == hi:
            return self.tree[v]
        m = (l + r) // 2
        if lo <= m:
            left = self._query(2 * v, l, m, lo, min(m, hi))
        else:
            left = self.identity
        if hi > m:
            right = self._query(2 * v + 1, m + 1, r, max(m + 1, lo), hi)
        else:
            right = self.identity
        return self.operation(left, right)

    def __setitem__(self, idx: int, value):
        self.assign(idx, value)

    def __getitem__(self, idx: int):
        return self.tree[self.capacity + self._position(idx, IndexOutOfRange)]

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator:
        return iter(self.tree[self.capacity:self.capacity + self.size])

    def __repr__(self):
        return f"{type(self).__name__}(size={self.size}, capacity={self.capacity})"

    @property
    def total(self):
        return self.tree[1]

    def dump(self) -> List[Tuple[int, Any]]:
        return list(enumerate(self.tree))

    def format_store(self) -> str:
        return "\n".join(f"A[{slot}] = {value}" for slot, value in self.dump())

    def check_invariant(self) -> bool:
        """True when every internal node equals the combination of its children."""
        for v in range(1, self.capacity):
            expected = self.operation(self.tree[2 * v], self.tree[2 * v + 1])
            if not _same_value(self.tree[v], expected):
                return False
        return True


class SumSegmentTree(SegmentTree):
    def __init__(self, size: int):
        super().__init__(size=size, operation=operator.add, identity=0)

    def sum(self, lo: int = 0, hi: int = None):
        """Returns arr[lo] + ... + arr[hi]."""
        if hi is None:
            hi = self.size - 1
        return self.range_query(lo, hi)

    def find_prefix_index(self, prefix) -> int:
        """
        Smallest index i such that arr[0] + ... + arr[i] > prefix.

        Only meaningful while every stored value is non-negative.
        """
        if not 0 <= prefix < self.total:
            raise InvalidArgument(f"prefix {prefix} outside [0, {self.total})")
        idx = 1
        while idx < self.capacity:
            left = idx << 1
            if self.tree[left] > prefix:
                idx = left
            else:
                prefix -= self.tree[left]
                idx = left + 1
        # float rounding in the subtraction can drift past the last real leaf
        return min(idx - self.capacity, self.size - 1)


class MinSegmentTree(SegmentTree):
    def __init__(self, size: int):
        super().__init__(size=size, operation=min, identity=float("inf"))

    def min(self, lo: int = 0, hi: int = None):
        if hi is None:
            hi = self.size - 1
        return self.range_query(lo, hi)


class MaxSegmentTree(SegmentTree):
    def __init__(self, size: int):
        super().__init__(size=size, operation=max, identity=float("-inf"))

    def max(self, lo: int = 0, hi: int = None):
        if hi is None:
            hi = self.size - 1
        return self.range_query(lo, hi)
