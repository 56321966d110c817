"""Command line entry point: ``fpmine <min_support> <input_path> <output_path>``."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from .fpgrowth import mine_frequent_patterns
from .io import read_transactions, write_patterns
from .scheduler import DEFAULT_N_WORKERS


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="fpmine",
        description="Mine frequent itemsets from a transaction file with FP-Growth",
    )
    parser.add_argument("min_support", type=float, help="Minimum support as a fraction of transactions")
    parser.add_argument("input_path", help="One transaction per line, integer items")
    parser.add_argument("output_path", help="Where to write `items:support` lines")
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_N_WORKERS,
        help=f"Number of mining threads (default: {DEFAULT_N_WORKERS})",
    )
    parser.add_argument("--max-len", type=int, default=None, help="Maximum itemset length")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Print progress; repeat for debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1 else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    start = time.perf_counter()
    try:
        transactions = read_transactions(args.input_path)
    except OSError as e:
        print(f"fpmine: error: cannot read {args.input_path}: {e.strerror or e}", file=sys.stderr)
        return 1

    try:
        patterns = mine_frequent_patterns(
            transactions,
            min_support=args.min_support,
            max_len=args.max_len,
            n_workers=args.workers,
            verbose=args.verbose,
        )
    except ValueError as e:
        print(f"fpmine: error: {e}", file=sys.stderr)
        return 1

    write_patterns(args.output_path, patterns, len(transactions))
    print(f"elapsed time: {time.perf_counter() - start}s")
    return 0
