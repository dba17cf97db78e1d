from .errors import SegmentTreeError, InvalidArgument, IndexOutOfRange, InvalidRange
from .segment_tree import SegmentTree, SumSegmentTree, MinSegmentTree, MaxSegmentTree, next_power_of_two
from .operations import (
    Monoid,
    sum_monoid,
    product_monoid,
    min_monoid,
    max_monoid,
    concat_monoid,
    matmul_monoid,
)
