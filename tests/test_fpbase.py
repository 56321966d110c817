"""Shared datasets, brute-force oracle and base test classes."""

from __future__ import annotations

import math
import warnings
from collections import Counter
from collections.abc import Sequence
from itertools import combinations
from typing import Callable

import numpy as np
import pandas as pd

# ---------------------------------------------------------------------------
# Datasets
# ---------------------------------------------------------------------------

TEXTBOOK = [
    [1, 2, 5],
    [2, 4],
    [2, 3],
    [1, 2, 4],
    [1, 3],
    [2, 3],
    [1, 3],
    [1, 2, 3, 5],
    [1, 2, 3],
]

# min_support = 0.22 -> min count 1.98
TEXTBOOK_EXPECTED = {
    (1,): 6,
    (2,): 7,
    (3,): 6,
    (4,): 2,
    (5,): 2,
    (1, 2): 4,
    (1, 3): 4,
    (1, 5): 2,
    (2, 3): 4,
    (2, 4): 2,
    (2, 5): 2,
    (1, 2, 3): 2,
    (1, 2, 5): 2,
}


def random_transactions(
    n_rows: int = 60, n_items: int = 12, max_size: int = 7, seed: int = 0
) -> list[list[int]]:
    rng = np.random.default_rng(seed)
    sizes = rng.integers(1, max_size + 1, size=n_rows)
    return [rng.choice(n_items, size=int(k), replace=False).tolist() for k in sizes]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def brute_force_supports(
    transactions: Sequence[Sequence[int]], min_count: float, max_len: int | None = None
) -> dict[tuple[int, ...], int]:
    """Support of every itemset of frequent items, counted by enumeration."""
    counts = Counter(item for t in transactions for item in t)
    frequent = {item for item, c in counts.items() if c >= min_count}
    supports: Counter = Counter()
    for t in transactions:
        items = sorted(set(t) & frequent)
        top = len(items) if max_len is None else min(len(items), max_len)
        for k in range(1, top + 1):
            supports.update(combinations(items, k))
    return {p: s for p, s in supports.items() if s >= min_count}


def to_count_dict(patterns: dict[frozenset, int]) -> dict[tuple, int]:
    return {tuple(sorted(p)): s for p, s in patterns.items()}


def df_to_count_dict(df: pd.DataFrame, n_rows: int) -> dict[tuple, int]:
    return {tuple(sorted(items)): round(support * n_rows) for items, support in zip(df["itemsets"], df["support"])}


def to_one_hot(transactions: Sequence[Sequence[int]]) -> pd.DataFrame:
    items = sorted({item for t in transactions for item in t})
    data = [{item: (item in t) for item in items} for t in transactions]
    return pd.DataFrame(data, columns=items)


def assert_raises(
    error_type: type, substr: str, func: Callable, *args, **kwargs
) -> None:
    """Assert that *func* raises *error_type* with *substr* in its message."""
    try:
        func(*args, **kwargs)
        raise AssertionError(f"Expected {error_type.__name__} to be raised")
    except error_type as e:
        assert substr in str(e), f"Expected '{substr}' in '{e}'"


# ---------------------------------------------------------------------------
# Edge case tests
# ---------------------------------------------------------------------------


class FPTestEdgeCases:
    def setUp(self, fpalgo: Callable) -> None:
        self.fpalgo = fpalgo

    def test_all_ones(self) -> None:
        df = pd.DataFrame([[1, 1], [1, 1], [1, 1]], columns=["A", "B"]).astype(bool)
        res = self.fpalgo(df, min_support=1.0)
        assert res.shape[0] == 3

    def test_min_support_too_high(self) -> None:
        df = pd.DataFrame([[1, 0], [0, 1]], columns=["A", "B"]).astype(bool)
        res = self.fpalgo(df, min_support=1.0)
        assert res.shape[0] == 0

    def test_min_support_above_one(self) -> None:
        res = self.fpalgo(TEXTBOOK, min_support=1.01)
        assert res.shape[0] == 0
        assert list(res.columns) == ["support", "itemsets"]

    def test_zero_support_keeps_every_occurring_itemset(self) -> None:
        res = self.fpalgo(TEXTBOOK, min_support=0.0)
        assert df_to_count_dict(res, len(TEXTBOOK)) == brute_force_supports(TEXTBOOK, 0)

    def test_negative_support_behaves_like_zero(self) -> None:
        res = self.fpalgo(TEXTBOOK, min_support=-0.5)
        assert df_to_count_dict(res, len(TEXTBOOK)) == brute_force_supports(TEXTBOOK, 0)

    def test_empty_database(self) -> None:
        res = self.fpalgo([], min_support=0.5)
        assert res.shape[0] == 0

    def test_empty_transactions_are_skipped(self) -> None:
        res = self.fpalgo([[], [1, 2], [], [1]], min_support=0.5)
        assert df_to_count_dict(res, 4) == {(1,): 2}


# ---------------------------------------------------------------------------
# Error tests
# ---------------------------------------------------------------------------


class FPTestErrors:
    def setUp(self, fpalgo: Callable) -> None:
        self.df = to_one_hot(TEXTBOOK)
        self.fpalgo = fpalgo

    def test_wrong_values_errors(self) -> None:
        df2 = self.df.astype(int)
        df2.iloc[3, 3] = 2
        assert_raises(
            ValueError,
            "The allowed values for a DataFrame are True, False, 0, 1. Found value 2",
            self.fpalgo,
            df2,
        )

    def test_wrong_input_type(self) -> None:
        assert_raises(TypeError, "Expected a list of transactions", self.fpalgo, {1: [1, 2]})
        assert_raises(TypeError, "Expected a list of transactions", self.fpalgo, "12 13")
        assert_raises(TypeError, "Transaction 1", self.fpalgo, [[1], 2])

    def test_bad_min_support(self) -> None:
        assert_raises(ValueError, "real number", self.fpalgo, TEXTBOOK, min_support="0.5")
        assert_raises(ValueError, "NaN", self.fpalgo, TEXTBOOK, min_support=math.nan)

    def test_bad_max_len(self) -> None:
        assert_raises(ValueError, "`max_len`", self.fpalgo, TEXTBOOK, max_len=0)

    def test_duplicate_items_warn(self) -> None:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            self.fpalgo([[1, 1, 2], [1, 2]], min_support=0.5)
        assert any(issubclass(w.category, UserWarning) and "duplicate" in str(w.message) for w in caught)


# ---------------------------------------------------------------------------
# Textbook dataset
# ---------------------------------------------------------------------------


class FPTestTextbook:
    def setUp(self, fpalgo: Callable) -> None:
        self.transactions = [list(t) for t in TEXTBOOK]
        self.fpalgo = fpalgo

    def test_golden(self) -> None:
        res = self.fpalgo(self.transactions, min_support=0.22)
        assert df_to_count_dict(res, 9) == TEXTBOOK_EXPECTED

    def test_rows_sorted_by_size_then_items(self) -> None:
        res = self.fpalgo(self.transactions, min_support=0.22)
        keys = [tuple(items) for items in res["itemsets"]]
        assert keys == sorted(TEXTBOOK_EXPECTED, key=lambda p: (len(p), p))

    def test_support_fractions(self) -> None:
        res = self.fpalgo(self.transactions, min_support=0.22)
        first = res.iloc[0]
        assert list(first["itemsets"]) == [1]
        np.testing.assert_allclose(first["support"], 6 / 9)

    def test_max_len(self) -> None:
        res = self.fpalgo(self.transactions, min_support=0.22, max_len=2)
        expected = {p: s for p, s in TEXTBOOK_EXPECTED.items() if len(p) <= 2}
        assert df_to_count_dict(res, 9) == expected

    def test_one_hot_dataframe(self) -> None:
        res = self.fpalgo(to_one_hot(self.transactions), min_support=0.22)
        assert df_to_count_dict(res, 9) == TEXTBOOK_EXPECTED

    def test_numpy_array_uses_column_indices(self) -> None:
        ary = to_one_hot(self.transactions).to_numpy()
        res = self.fpalgo(ary, min_support=0.22)
        shifted = {tuple(i - 1 for i in p): s for p, s in TEXTBOOK_EXPECTED.items()}
        assert df_to_count_dict(res, 9) == shifted

    def test_string_items(self) -> None:
        names = {1: "bread", 2: "milk", 3: "eggs", 4: "jam", 5: "tea"}
        named = [[names[i] for i in t] for t in self.transactions]
        res = self.fpalgo(named, min_support=0.22)
        expected = {tuple(sorted(names[i] for i in p)): s for p, s in TEXTBOOK_EXPECTED.items()}
        assert df_to_count_dict(res, 9) == expected
