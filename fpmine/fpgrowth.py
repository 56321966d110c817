from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from ._compat import to_transactions
from ._fpbase import FPBase
from ._validation import check_max_len, check_min_support
from .expansion import sorted_patterns
from .frequency import FrequencyIndex
from .scheduler import DEFAULT_N_WORKERS, MiningScheduler
from .tree import PrefixTree
from .typing import FrequentPatterns, TransactionDatabase

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd

logger = logging.getLogger(__name__)


def mine_frequent_patterns(
    transactions: TransactionDatabase,
    min_support: float = 0.5,
    max_len: int | None = None,
    n_workers: int = DEFAULT_N_WORKERS,
    verbose: int = 0,
) -> FrequentPatterns:
    """Mine frequent itemsets and return their absolute support counts.

    Parameters
    ----------
    transactions:
        Sequence of transactions (sequences of hashable, comparable items).
    min_support:
        Minimum support as a fraction of ``len(transactions)``. The absolute
        threshold ``min_support * len(transactions)`` is not rounded.
    max_len:
        Maximum length of the itemsets. ``None`` means no limit.
    n_workers:
        Number of mining threads.
    verbose:
        If > 0, print progress details to standard output.

    Returns
    -------
    dict
        ``frozenset`` itemset -> number of transactions containing it.
    """
    min_support = check_min_support(min_support)
    check_max_len(max_len)

    n_rows = len(transactions)
    min_count = min_support * n_rows

    t0 = time.perf_counter()
    if verbose:
        print(f"[{time.strftime('%X')}] Counting items of {n_rows:,} transactions (min count {min_count:g})...")
    index = FrequencyIndex.from_transactions(transactions, min_count)

    if verbose:
        print(f"[{time.strftime('%X')}] Building FP-tree over {len(index):,} frequent items...")
    tree = PrefixTree.build(transactions, index)
    logger.debug("built %r in %.3fs", tree, time.perf_counter() - t0)

    scheduler = MiningScheduler(tree, min_count, n_workers=n_workers, max_len=max_len, verbose=verbose)
    patterns = scheduler.mine_all()

    if verbose:
        print(
            f"[{time.strftime('%X')}] Found {len(patterns):,} frequent itemsets "
            f"in {time.perf_counter() - t0:.2f}s."
        )
    return patterns


def fpgrowth(
    df: pd.DataFrame | np.ndarray | TransactionDatabase | Any,
    min_support: float = 0.5,
    max_len: int | None = None,
    n_workers: int = DEFAULT_N_WORKERS,
    verbose: int = 0,
) -> pd.DataFrame:
    """Find frequent itemsets with FP-Growth.

    Parameters
    ----------
    df:
        A list of transactions, a one-hot pandas DataFrame (column labels
        become items), a 2-D 0/1 numpy array (column indices become items)
        or a pyarrow Table.
    min_support:
        Minimum support as a fraction of the number of transactions. Values
        ``<= 0`` keep every itemset that occurs at all; values ``> 1`` keep
        nothing.
    max_len:
        Maximum length of the itemsets. ``None`` means no limit.
    n_workers:
        Number of mining threads.
    verbose:
        If > 0, print progress details to standard output.

    Returns
    -------
    pandas.DataFrame
        Columns ``support`` (fraction of transactions) and ``itemsets``
        (items in ascending order), sorted by itemset length, then items.
        ``attrs["num_itemsets"]`` holds the number of transactions.

    Examples
    --------
    >>> from fpmine import fpgrowth
    >>> freq = fpgrowth([[1, 2, 5], [2, 4], [2, 3], [1, 2, 4]], min_support=0.5)
    """
    transactions = to_transactions(df)
    patterns = mine_frequent_patterns(
        transactions,
        min_support=min_support,
        max_len=max_len,
        n_workers=n_workers,
        verbose=verbose,
    )
    return _build_result(patterns, len(transactions))


def _build_result(patterns: FrequentPatterns, n_rows: int) -> pd.DataFrame:
    import numpy as np
    import pandas as pd
    import pyarrow as pa

    if not patterns:
        empty = pd.DataFrame(columns=["support", "itemsets"])
        empty.attrs["num_itemsets"] = n_rows
        return empty

    rows = sorted_patterns(patterns)
    counts_arr = np.fromiter((support for _, support in rows), dtype=np.int64, count=len(rows))
    lengths = np.fromiter((len(items) for items, _ in rows), dtype=np.int32, count=len(rows))
    offsets_arr = np.concatenate(([0], np.cumsum(lengths))).astype(np.int32)

    items_pa = pa.array([item for items, _ in rows for item in items])
    offsets_pa = pa.array(offsets_arr, type=pa.int32())
    list_arr = pa.ListArray.from_arrays(offsets_pa, items_pa)

    result = pd.DataFrame(
        {
            "support": counts_arr / n_rows,
            "itemsets": pd.Series(list_arr, dtype=pd.ArrowDtype(pa.list_(items_pa.type))),
        }
    )
    result.attrs["num_itemsets"] = n_rows
    return result


class FPGrowth(FPBase):
    """FP-Growth estimator.

    Parameters
    ----------
    min_support:
        Minimum support threshold (fraction of transactions).
    min_confidence:
        Minimum confidence for association rules. Pass ``None`` (default) to
        skip rule generation.
    max_len:
        Maximum length of frequent itemsets to return. ``None`` means no
        limit.
    n_workers:
        Number of mining threads.
    verbose:
        If > 0, print progress details to standard output.

    Examples
    --------
    .. code-block:: python

        from fpmine import FPGrowth

        model = FPGrowth(min_support=0.3, min_confidence=0.6).fit(transactions)
        freq  = model.freq_itemsets
        rules = model.association_rules_
    """

    def _mine(self, transactions: TransactionDatabase) -> pd.DataFrame:
        patterns = mine_frequent_patterns(
            transactions,
            min_support=self.min_support,
            max_len=self.max_len,
            n_workers=self.n_workers,
            verbose=self.verbose,
        )
        return _build_result(patterns, len(transactions))
