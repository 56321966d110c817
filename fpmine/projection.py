"""Conditional pattern bases and conditional FP-trees."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any

from .frequency import FrequencyIndex
from .tree import PrefixTree
from .typing import Item

logger = logging.getLogger(__name__)


class ConditionalPatternBase:
    """Weighted root paths through every node of one seed item.

    Each path is the frozenset of labels from a seed-labelled node up to the
    root, seed included. Paths that occur more than once accumulate weight.
    """

    def __init__(self, seed: Item, paths: dict[frozenset, int] | None = None) -> None:
        self.seed = seed
        self.paths: dict[frozenset, int] = paths if paths is not None else {}

    def add(self, path: frozenset, weight: int) -> None:
        self.paths[path] = self.paths.get(path, 0) + weight

    def to_transactions(self) -> list[list[Item]]:
        """The base as a plain database: ``weight`` copies of every path."""
        transactions: list[list[Item]] = []
        for path, weight in self.paths.items():
            transactions.extend([sorted(path)] * weight)
        return transactions

    def total_weight(self) -> int:
        return sum(self.paths.values())

    def __iter__(self) -> Iterator[tuple[frozenset, int]]:
        return iter(self.paths.items())

    def __len__(self) -> int:
        return len(self.paths)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConditionalPatternBase):
            return NotImplemented
        return self.seed == other.seed and self.paths == other.paths

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self.seed!r}, n_paths={len(self)}, weight={self.total_weight()})"


def pattern_base(tree: PrefixTree, seed: Item) -> ConditionalPatternBase:
    """Collect the conditional pattern base of *seed* from *tree*."""
    base = ConditionalPatternBase(seed)
    for node in tree.cross_links(seed):
        path = frozenset(tree.item[n] for n in tree.path_to_root(node))
        base.add(path, tree.count[node])
    return base


def tree_order_key(tree: PrefixTree) -> Callable[[Item], tuple[Any, ...]]:
    """Canonical order of the items in *tree*'s header table."""
    header = tree.header

    def key(item: Item) -> tuple[Any, ...]:
        return (-header[item].count, item)

    return key


def conditional_tree(tree: PrefixTree, seed: Item, min_support_count: float) -> PrefixTree:
    """Conditional FP-tree of *seed*, built from its pattern base in *tree*.

    Items of the base are kept if their weighted count reaches
    *min_support_count*. Paths are inserted in *tree*'s order while the new
    header is ordered by the base's own counts.
    """
    base = pattern_base(tree, seed)
    paths = list(base.paths)
    weights = list(base.paths.values())
    index = FrequencyIndex.from_transactions(paths, min_support_count, weights)
    conditional = PrefixTree.build(paths, index, weights=weights, order_key=tree_order_key(tree))
    logger.debug(
        "projected %r: %d paths (weight %d) -> %d nodes, %d frequent items",
        seed,
        len(base),
        base.total_weight(),
        len(conditional),
        len(conditional.header),
    )
    return conditional


class ConditionalProjector:
    """Builds conditional FP-trees by path reconstruction.

    The absolute *min_support_count* is fixed once for the whole run and
    reused unchanged at every level.

    Paths in a conditional tree keep the parent tree's item order, so the
    seed, which comes last in the parent order among its own ancestors, is
    always a leaf of the conditional tree.
    """

    def __init__(self, min_support_count: float) -> None:
        self.min_support_count = min_support_count

    def project(self, tree: PrefixTree, seed: Item) -> PrefixTree:
        return conditional_tree(tree, seed, self.min_support_count)
