import argparse
import logging
import sys

from .errors import SegmentTreeError
from .operations import concat_monoid, max_monoid, min_monoid, product_monoid, sum_monoid

logger = logging.getLogger(__name__)

MONOIDS = {
    "sum": sum_monoid,
    "product": product_monoid,
    "min": min_monoid,
    "max": max_monoid,
    "concat": concat_monoid,
}

DEFAULT_ASSIGNMENTS = ["3=7", "4=1"]
DEFAULT_QUERIES = ["2:7", "0:3", "4:5", "5:5"]


def parse_number(text):
    try:
        return int(text)
    except ValueError:
        return float(text)


def parse_assignment(text):
    idx, sep, value = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected I=X, got {text!r}")
    try:
        return int(idx), value
    except ValueError:
        raise argparse.ArgumentTypeError(f"bad index in {text!r}")


def parse_range(text):
    lo, sep, hi = text.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected LO:HI, got {text!r}")
    try:
        return int(lo), int(hi)
    except ValueError:
        raise argparse.ArgumentTypeError(f"bad bounds in {text!r}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="segtree-demo",
        description="Build a segment tree, assign a few values and run range queries.",
    )
    parser.add_argument("--size", type=int, default=8)
    parser.add_argument("--op", choices=sorted(MONOIDS), default="sum")
    parser.add_argument("--assign", type=parse_assignment, action="append", metavar="I=X")
    parser.add_argument("--query", type=parse_range, action="append", metavar="LO:HI")
    parser.add_argument("--no-dump", action="store_true", help="do not print the backing store")
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    assignments = args.assign or [parse_assignment(a) for a in DEFAULT_ASSIGNMENTS]
    queries = args.query or [parse_range(q) for q in DEFAULT_QUERIES]

    try:
        tree = MONOIDS[args.op]().tree(args.size)
        for idx, raw in assignments:
            tree.assign(idx, raw if args.op == "concat" else parse_number(raw))
    except (SegmentTreeError, ValueError) as exc:
        print(f"error: {exc}")
        return 1
    logger.debug("Applied %d assignments to %r", len(assignments), tree)

    if not args.no_dump:
        print(tree.format_store())

    status = 0
    for lo, hi in queries:
        try:
            print(f"range_query({lo}, {hi}) = {tree.range_query(lo, hi)}")
        except SegmentTreeError as exc:
            print(f"range_query({lo}, {hi}) failed: {exc}")
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
