"""Shared base class for frequent-pattern estimators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ._compat import to_transactions
from .scheduler import DEFAULT_N_WORKERS

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd

    from .typing import TransactionDatabase


class FPBase(ABC):
    """Abstract base class for frequent-pattern estimators.

    Subclasses implement :meth:`_mine`; input coercion, the transaction
    count and rule generation are shared.

    Parameters
    ----------
    min_support:
        Minimum support threshold (fraction of transactions).
    min_confidence:
        Minimum confidence for association rules.  ``None`` skips rule
        generation.
    max_len:
        Maximum length of frequent itemsets.  ``None`` means no limit.
    n_workers:
        Number of mining threads.
    verbose:
        If > 0, print progress details to standard output.
    """

    def __init__(
        self,
        min_support: float = 0.5,
        min_confidence: float | None = None,
        max_len: int | None = None,
        n_workers: int = DEFAULT_N_WORKERS,
        verbose: int = 0,
    ) -> None:
        self.min_support = min_support
        self.min_confidence = min_confidence
        self.max_len = max_len
        self.n_workers = n_workers
        self.verbose = verbose

        self._freq_itemsets: pd.DataFrame | None = None
        self._association_rules: pd.DataFrame | None = None
        self._n_transactions: int = 0

    # ------------------------------------------------------------------
    # Abstract interface
    # ------------------------------------------------------------------

    @abstractmethod
    def _mine(self, transactions: TransactionDatabase) -> pd.DataFrame:
        """Run the mining algorithm and return a ``support / itemsets`` DataFrame."""
        ...

    # ------------------------------------------------------------------
    # Fit
    # ------------------------------------------------------------------

    def fit(self, data: pd.DataFrame | np.ndarray | TransactionDatabase | Any) -> FPBase:
        """Fit the model on a list of transactions or a one-hot DataFrame / array."""
        transactions = to_transactions(data)
        self._n_transactions = len(transactions)
        self._freq_itemsets = self._mine(transactions)

        if self.min_confidence is not None and not self._freq_itemsets.empty:
            from .association_rules import association_rules as _ar

            self._association_rules = _ar(
                self._freq_itemsets,
                num_itemsets=self._n_transactions,
                metric="confidence",
                min_threshold=self.min_confidence,
            )
        else:
            self._association_rules = None

        return self

    # ------------------------------------------------------------------
    # Model attributes
    # ------------------------------------------------------------------

    @property
    def freq_itemsets(self) -> pd.DataFrame:
        """Frequent itemsets DataFrame."""
        if self._freq_itemsets is None:
            raise RuntimeError("Call fit() before accessing freq_itemsets.")
        return self._freq_itemsets

    @property
    def association_rules_(self) -> pd.DataFrame:
        """Association rules DataFrame (requires *min_confidence* to be set)."""
        if self._association_rules is None:
            if self.min_confidence is None:
                raise RuntimeError(
                    "Set min_confidence in the constructor to generate rules."
                )
            if self._freq_itemsets is None:
                raise RuntimeError("Call fit() before accessing association_rules_.")
            from .association_rules import _empty_rules

            return _empty_rules()
        return self._association_rules

    @property
    def n_transactions(self) -> int:
        return self._n_transactions

    def __repr__(self) -> str:
        fitted = self._freq_itemsets is not None
        return (
            f"{type(self).__name__}("
            f"min_support={self.min_support}, "
            f"min_confidence={self.min_confidence}, "
            f"fitted={fitted})"
        )
