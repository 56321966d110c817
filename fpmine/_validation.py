"""Input validation utilities."""

from __future__ import annotations

import math
import numbers
import warnings
from collections.abc import Iterable
from typing import Any

import numpy as np


def check_min_support(min_support: Any) -> float:
    """Return *min_support* as a float.

    Any real number is accepted: a ratio ``<= 0`` makes every item frequent
    and a ratio ``> 1`` makes none frequent.
    """
    if isinstance(min_support, bool) or not isinstance(min_support, numbers.Real):
        raise ValueError(f"`min_support` must be a real number. Got {min_support!r}.")
    if math.isnan(min_support):
        raise ValueError("`min_support` must not be NaN.")
    return float(min_support)


def check_max_len(max_len: int | None) -> None:
    if max_len is None:
        return
    if isinstance(max_len, bool) or not isinstance(max_len, numbers.Integral) or max_len < 1:
        raise ValueError(f"`max_len` must be a positive integer or None. Got {max_len!r}.")


def check_transactions(transactions: Iterable[Any]) -> list[list[Any]]:
    """Validate a list-of-transactions input and return it as lists.

    Duplicate items inside a transaction are not removed; they only trigger
    a warning because supports involving them are not meaningful.
    """
    if isinstance(transactions, (str, bytes)):
        raise TypeError("Expected a sequence of transactions, got a string.")

    result: list[list[Any]] = []
    n_duplicates = 0
    for i, transaction in enumerate(transactions):
        if isinstance(transaction, (str, bytes)) or not isinstance(transaction, Iterable):
            raise TypeError(
                f"Transaction {i} must be an iterable of items, got {type(transaction).__name__}."
            )
        items = list(transaction)
        if len(set(items)) != len(items):
            n_duplicates += 1
        result.append(items)

    if n_duplicates:
        warnings.warn(
            f"{n_duplicates} transaction(s) contain duplicate items. "
            "Duplicates are not merged and supports involving them are undefined.",
            UserWarning,
            stacklevel=3,
        )
    return result


def valid_input_check(values: np.ndarray) -> None:
    """Validate a one-hot / boolean matrix.

    Parameters
    ----------
    values:
        2-D array of a one-hot DataFrame or ndarray. Allowed values: 0/1 or
        True/False.
    """
    if values.ndim != 2:
        raise ValueError(f"Expected a 2-D one-hot matrix, got {values.ndim} dimension(s).")

    if values.size == 0 or values.dtype == np.bool_:
        return

    idxs = np.where((values != 1) & (values != 0))
    if len(idxs[0]) > 0:
        val = values[tuple(loc[0] for loc in idxs)]
        raise ValueError(
            "The allowed values for a DataFrame are True, False, 0, 1. Found value %s" % (val,)
        )
