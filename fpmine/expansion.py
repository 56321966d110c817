"""Combinatorial expansion of a conditional pattern base into itemsets."""

from __future__ import annotations

from collections import defaultdict
from itertools import combinations

from .projection import ConditionalPatternBase
from .typing import FrequentPatterns, Item


def expand(
    seed: Item,
    base: ConditionalPatternBase,
    max_len: int | None = None,
) -> FrequentPatterns:
    """Every itemset containing *seed* that *base* supports, with its support.

    For each path ``P`` of weight ``w`` and each subset ``S`` of ``P - {seed}``
    (the empty set and ``P - {seed}`` itself included), ``w`` is added to the
    support of ``S | {seed}``. The cost is exponential in the longest path.

    Parameters
    ----------
    seed:
        The item every resulting pattern contains.
    base:
        Conditional pattern base of *seed*.
    max_len:
        Maximum pattern length. ``None`` means no limit.
    """
    supports: defaultdict[frozenset, int] = defaultdict(int)
    for path, weight in base:
        others = sorted(path - {seed})
        longest = len(others) if max_len is None else min(len(others), max_len - 1)
        for k in range(longest + 1):
            for combo in combinations(others, k):
                supports[frozenset(combo).union((seed,))] += weight
    return dict(supports)


def filter_patterns(patterns: FrequentPatterns, min_support_count: float) -> FrequentPatterns:
    """Drop patterns whose support is strictly below *min_support_count*."""
    return {pattern: support for pattern, support in patterns.items() if support >= min_support_count}


def sorted_patterns(patterns: FrequentPatterns) -> list[tuple[tuple[Item, ...], int]]:
    """``(items, support)`` pairs ordered by pattern size, then by ascending items."""
    rows = [(tuple(sorted(pattern)), support) for pattern, support in patterns.items()]
    rows.sort(key=lambda row: (len(row[0]), row[0]))
    return rows
