from __future__ import annotations

from collections.abc import Hashable, Mapping, Sequence
from typing import Any, Protocol

#: An item label. Integers in practice, but anything hashable and mutually
#: comparable works (column names, strings, ...).
Item = Any

Transaction = Sequence[Item]
TransactionDatabase = Sequence[Transaction]

#: An unordered itemset.
Pattern = frozenset

#: Pattern -> absolute support count.
FrequentPatterns = dict[frozenset, int]


class SupportsOrderKey(Protocol):
    """Protocol for objects that rank items in canonical order.

    Used by the tree builder, which needs the ranking, the frequency test
    and the counts of the frequent items to seed its header table.
    """

    counts: Mapping[Hashable, int]

    def sort_key(self, item: Hashable) -> tuple[Any, ...]: ...

    def is_frequent(self, item: Hashable) -> bool: ...

    def frequent_order(self) -> list[Hashable]: ...
