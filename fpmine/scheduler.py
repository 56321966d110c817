"""Fork-join scheduling of per-item mining over a thread pool."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from ._dependencies import import_optional_dependency
from .expansion import expand, filter_patterns
from .projection import ConditionalProjector, pattern_base
from .tree import PrefixTree
from .typing import FrequentPatterns, Item

logger = logging.getLogger(__name__)

DEFAULT_N_WORKERS = 8


class PatternCollisionError(RuntimeError):
    """The same itemset was produced by two different seed items."""


def merge_patterns(target: FrequentPatterns, partial: FrequentPatterns) -> FrequentPatterns:
    """Move *partial* into *target*; a key present in both is a mining bug."""
    collisions = target.keys() & partial.keys()
    if collisions:
        sample = sorted(sorted(p) for p in collisions)[:3]
        raise PatternCollisionError(
            f"{len(collisions)} pattern(s) were mined from more than one seed item, e.g. {sample}."
        )
    target.update(partial)
    return target


def partition(seeds: list[Item], n_workers: int) -> list[list[Item]]:
    """Strided split: worker ``i`` gets positions ``i, i + n, i + 2n, ...``."""
    return [seeds[i::n_workers] for i in range(n_workers)]


class MiningScheduler:
    """Mines every frequent item of a tree, each against its own clone.

    Parameters
    ----------
    tree:
        The FP-tree of the full (filtered) database. It is never modified.
    min_support_count:
        Absolute support threshold shared by every level.
    n_workers:
        Number of worker threads. ``1`` mines inline on the calling thread.
    max_len:
        Maximum pattern length. ``None`` means no limit.
    verbose:
        If > 0, show a progress bar over seed items (requires ``tqdm``).
    """

    def __init__(
        self,
        tree: PrefixTree,
        min_support_count: float,
        n_workers: int = DEFAULT_N_WORKERS,
        max_len: int | None = None,
        verbose: int = 0,
    ) -> None:
        if n_workers < 1:
            raise ValueError(f"`n_workers` must be a positive integer. Got {n_workers}.")
        self.tree = tree
        self.min_support_count = min_support_count
        self.n_workers = n_workers
        self.max_len = max_len
        self.verbose = verbose
        self.projector = ConditionalProjector(min_support_count)

    def seeds(self) -> list[Item]:
        """Frequent items of the tree in canonical order."""
        return list(self.tree.header)

    def mine(self, seed: Item) -> FrequentPatterns:
        """All frequent itemsets whose last member in canonical order is *seed*."""
        # each seed is mined on its own clone
        tree = self.tree.copy()
        conditional = self.projector.project(tree, seed)
        base = pattern_base(conditional, seed)
        patterns = filter_patterns(expand(seed, base, self.max_len), self.min_support_count)
        logger.debug("mined %r: %d paths -> %d patterns", seed, len(base), len(patterns))
        return patterns

    def _mine_partition(self, seeds: list[Item], progress: Any = None) -> FrequentPatterns:
        result: FrequentPatterns = {}
        for seed in seeds:
            merge_patterns(result, self.mine(seed))
            if progress is not None:
                progress.update(1)
        return result

    def mine_all(self) -> FrequentPatterns:
        """Mine every seed item and fold the per-worker results.

        Worker results are merged in partition order, so the output does
        not depend on thread timing. The first failing worker's exception
        propagates to the caller and nothing is returned.
        """
        seeds = self.seeds()
        if not seeds:
            return {}

        t0 = time.perf_counter()
        progress = None
        if self.verbose:
            tqdm_auto = import_optional_dependency("tqdm.auto", errors="ignore")
            if tqdm_auto is not None:
                progress = tqdm_auto.tqdm(total=len(seeds), desc="Seed items")

        try:
            partitions = [part for part in partition(seeds, self.n_workers) if part]
            if len(partitions) == 1:
                result = self._mine_partition(partitions[0], progress)
            else:
                result = {}
                with ThreadPoolExecutor(max_workers=len(partitions)) as pool:
                    futures = [pool.submit(self._mine_partition, part, progress) for part in partitions]
                    for future in futures:
                        merge_patterns(result, future.result())
        finally:
            if progress is not None:
                progress.close()

        logger.debug(
            "mined %d seed items on %d worker(s) in %.3fs: %d patterns",
            len(seeds),
            min(self.n_workers, len(seeds)),
            time.perf_counter() - t0,
            len(result),
        )
        return result

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"n_seeds={len(self.tree.header)}, "
            f"min_support_count={self.min_support_count}, "
            f"n_workers={self.n_workers})"
        )
