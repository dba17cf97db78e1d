class SegmentTreeError(Exception):
    """Base class for every error raised by a segment tree."""


class InvalidArgument(SegmentTreeError, ValueError):
    """Construction (or a helper query) was given an unusable argument."""


class IndexOutOfRange(SegmentTreeError, IndexError):
    """A logical position outside [0, size) was addressed."""


class InvalidRange(SegmentTreeError, ValueError):
    """A query range is reversed or reaches outside [0, size)."""
