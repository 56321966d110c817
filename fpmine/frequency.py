"""Item frequency counting and the canonical item order."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from .typing import Item, TransactionDatabase


def count_items(
    transactions: TransactionDatabase,
    weights: Sequence[int] | None = None,
) -> Counter:
    """Count item occurrences across *transactions*.

    Parameters
    ----------
    transactions:
        Sequence of transactions.
    weights:
        Optional per-transaction multiplicity. A transaction with weight
        ``w`` counts as ``w`` identical transactions.
    """
    counts: Counter = Counter()
    if weights is None:
        for transaction in transactions:
            counts.update(transaction)
    else:
        for transaction, weight in zip(transactions, weights, strict=True):
            for item in transaction:
                counts[item] += weight
    return counts


def frequent_items(counts: Counter, min_support_count: float) -> set[Item]:
    """Items whose count reaches *min_support_count* (inclusive, unrounded)."""
    return {item for item, count in counts.items() if count >= min_support_count}


def canonical_key(counts: Counter) -> Callable[[Item], tuple[Any, ...]]:
    """Sort key for the canonical order: descending count, then ascending item."""

    def key(item: Item) -> tuple[Any, ...]:
        return (-counts[item], item)

    return key


def canonical_order(counts: Counter, items: Iterable[Item] | None = None) -> list[Item]:
    """Return *items* (default: every counted item) in canonical order."""
    if items is None:
        items = counts.keys()
    return sorted(items, key=canonical_key(counts))


class FrequencyIndex:
    """Counts, frequent-item set and ordering of one recursion level.

    Parameters
    ----------
    counts:
        Item occurrence counts of the level's database.
    min_support_count:
        Absolute support threshold. The same value is carried unchanged into
        every conditional level.
    """

    def __init__(self, counts: Counter, min_support_count: float) -> None:
        self.counts = counts
        self.min_support_count = min_support_count
        self.frequent = frequent_items(counts, min_support_count)
        self._key = canonical_key(counts)

    @classmethod
    def from_transactions(
        cls,
        transactions: TransactionDatabase,
        min_support_count: float,
        weights: Sequence[int] | None = None,
    ) -> FrequencyIndex:
        return cls(count_items(transactions, weights), min_support_count)

    def is_frequent(self, item: Item) -> bool:
        return item in self.frequent

    def sort_key(self, item: Item) -> tuple[Any, ...]:
        return self._key(item)

    def order(self, transaction: Iterable[Item]) -> list[Item]:
        """Drop infrequent items of *transaction* and sort the rest canonically."""
        return sorted((item for item in transaction if item in self.frequent), key=self._key)

    def frequent_order(self) -> list[Item]:
        """Frequent items in canonical order."""
        return canonical_order(self.counts, self.frequent)

    def __len__(self) -> int:
        return len(self.frequent)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"n_items={len(self.counts)}, "
            f"n_frequent={len(self.frequent)}, "
            f"min_support_count={self.min_support_count})"
        )
