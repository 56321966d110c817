"""FP-tree stored as an arena of nodes addressed by integer index.

Every node relation (parent, first child, next sibling, same-item cross-link)
is an index into parallel lists, so cloning a tree is a plain copy of those
lists and the header table keeps pointing at the right nodes.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any

from .typing import Item, SupportsOrderKey, TransactionDatabase

NIL = -1
ROOT = 0


@dataclasses.dataclass
class HeaderEntry:
    """Support count of an item plus the two ends of its cross-link chain."""

    count: int
    head: int = NIL
    tail: int = NIL


class HeaderTable:
    """Item -> :class:`HeaderEntry`, iterated in canonical order.

    Only items that are frequent at the tree's level have an entry.
    """

    def __init__(self, entries: dict[Item, HeaderEntry] | None = None) -> None:
        self._entries: dict[Item, HeaderEntry] = entries if entries is not None else {}

    @classmethod
    def from_index(cls, index: SupportsOrderKey) -> HeaderTable:
        return cls({item: HeaderEntry(index.counts[item]) for item in index.frequent_order()})

    def key(self, item: Item) -> tuple[Item, int]:
        """The ``(item, count)`` pair the table is ordered by."""
        return (item, self._entries[item].count)

    def keys(self) -> list[tuple[Item, int]]:
        return [(item, entry.count) for item, entry in self._entries.items()]

    def copy(self) -> HeaderTable:
        return HeaderTable({item: dataclasses.replace(entry) for item, entry in self._entries.items()})

    def __getitem__(self, item: Item) -> HeaderEntry:
        return self._entries[item]

    def __contains__(self, item: object) -> bool:
        return item in self._entries

    def __iter__(self) -> Iterator[Item]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.keys()})"


class PrefixTree:
    """Compressed prefix tree (FP-tree) of a transaction database.

    Node ``0`` is the root; its item is ``None`` and its count is unused.
    Use :meth:`build` to construct one; the structure does not change after
    construction, mining works on :meth:`copy` clones.
    """

    def __init__(self, header: HeaderTable | None = None) -> None:
        self.item: list[Item] = [None]
        self.count: list[int] = [0]
        self.parent: list[int] = [NIL]
        self.first_child: list[int] = [NIL]
        self.next_sibling: list[int] = [NIL]
        self.cross_link: list[int] = [NIL]
        # rightmost child per node, so appending a sibling is O(1)
        self._last_child: list[int] = [NIL]
        self._child_of: dict[tuple[int, Item], int] = {}
        self.header = header if header is not None else HeaderTable()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def build(
        cls,
        transactions: TransactionDatabase,
        index: SupportsOrderKey,
        weights: Sequence[int] | None = None,
        order_key: Callable[[Item], Any] | None = None,
    ) -> PrefixTree:
        """Build a tree from *transactions*.

        Parameters
        ----------
        transactions:
            The (possibly empty) transaction database.
        index:
            :class:`~fpmine.frequency.FrequencyIndex` of *transactions*. It
            decides which items are kept and seeds the header table.
        weights:
            Optional multiplicity per transaction. Inserting a transaction
            with weight ``w`` is the same as inserting ``w`` copies of it.
        order_key:
            Sort key used to order items along a path. Defaults to the
            index's own canonical order.
        """
        tree = cls(HeaderTable.from_index(index))
        key = order_key if order_key is not None else index.sort_key
        if weights is None:
            weights = [1] * len(transactions)

        for transaction, weight in zip(transactions, weights, strict=True):
            path = sorted((item for item in transaction if index.is_frequent(item)), key=key)
            if path:
                tree.insert(path, weight)
        return tree

    def insert(self, path: Iterable[Item], weight: int = 1) -> None:
        """Merge an already filtered and ordered *path* into the tree."""
        node = ROOT
        for item in path:
            child = self._child_of.get((node, item))
            if child is None:
                child = self._new_child(node, item, weight)
            else:
                self.count[child] += weight
            node = child

    def _new_child(self, parent: int, item: Item, weight: int) -> int:
        node = len(self.item)
        self.item.append(item)
        self.count.append(weight)
        self.parent.append(parent)
        self.first_child.append(NIL)
        self.next_sibling.append(NIL)
        self.cross_link.append(NIL)
        self._last_child.append(NIL)

        last = self._last_child[parent]
        if last == NIL:
            self.first_child[parent] = node
        else:
            self.next_sibling[last] = node
        self._last_child[parent] = node
        self._child_of[(parent, item)] = node

        entry = self.header[item]
        if entry.head == NIL:
            entry.head = node
        else:
            self.cross_link[entry.tail] = node
        entry.tail = node
        return node

    def copy(self) -> PrefixTree:
        """Independent clone; node indices are preserved."""
        clone = PrefixTree(self.header.copy())
        clone.item = list(self.item)
        clone.count = list(self.count)
        clone.parent = list(self.parent)
        clone.first_child = list(self.first_child)
        clone.next_sibling = list(self.next_sibling)
        clone.cross_link = list(self.cross_link)
        clone._last_child = list(self._last_child)
        clone._child_of = dict(self._child_of)
        return clone

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def children(self, node: int = ROOT) -> Iterator[int]:
        child = self.first_child[node]
        while child != NIL:
            yield child
            child = self.next_sibling[child]

    def cross_links(self, item: Item) -> Iterator[int]:
        """Nodes labelled *item*, in creation order."""
        if item not in self.header:
            return
        node = self.header[item].head
        while node != NIL:
            yield node
            node = self.cross_link[node]

    def path_to_root(self, node: int) -> Iterator[int]:
        """Nodes from *node* up to, but excluding, the root."""
        while node != ROOT:
            yield node
            node = self.parent[node]

    def child(self, node: int, item: Item) -> int:
        return self._child_of.get((node, item), NIL)

    def is_empty(self) -> bool:
        return self.first_child[ROOT] == NIL

    def verify(self) -> None:
        """Check the structural invariants, raising ``RuntimeError`` on the first violation."""
        n_nodes = len(self.item)
        for node in range(1, n_nodes):
            if self.count[node] < 1:
                raise RuntimeError(f"Node {node} has count {self.count[node]} < 1.")
            if self.item[node] not in self.header:
                raise RuntimeError(f"Node {node} is labelled {self.item[node]!r}, which has no header entry.")

        for node in range(n_nodes):
            seen: set[Item] = set()
            for child in self.children(node):
                if self.parent[child] != node:
                    raise RuntimeError(f"Node {child} is a child of {node} but points to parent {self.parent[child]}.")
                if self.item[child] in seen:
                    raise RuntimeError(f"Duplicate sibling {self.item[child]!r} under node {node}.")
                seen.add(self.item[child])

        labelled: dict[Item, list[int]] = {}
        for node in range(1, n_nodes):
            labelled.setdefault(self.item[node], []).append(node)

        for item in self.header:
            entry = self.header[item]
            chain: list[int] = []
            node = entry.head
            while node != NIL:
                if not 0 < node < n_nodes or len(chain) >= n_nodes:
                    raise RuntimeError(f"Cross-link chain of {item!r} references a node outside the tree.")
                chain.append(node)
                node = self.cross_link[node]
            if chain != labelled.get(item, []):
                raise RuntimeError(f"Cross-link chain of {item!r} does not visit its nodes in creation order.")
            if chain and entry.tail != chain[-1]:
                raise RuntimeError(f"Header tail of {item!r} is stale.")
            total = sum(self.count[node] for node in chain)
            if total != entry.count:
                raise RuntimeError(f"Nodes of {item!r} hold {total} occurrences, header expects {entry.count}.")

    def __len__(self) -> int:
        """Number of non-root nodes."""
        return len(self.item) - 1

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_nodes={len(self)}, n_items={len(self.header)})"
