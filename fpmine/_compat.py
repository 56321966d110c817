from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ._validation import check_transactions, valid_input_check

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd


def to_transactions(data: Any) -> list[list[Any]]:
    """Coerce any supported input into a list of transactions.

    * list / tuple of transactions – validated and returned as lists
    * ``pandas.DataFrame`` – one-hot matrix; column labels become items
    * ``numpy.ndarray`` – 2-D one-hot matrix; column indices become items
    * ``pyarrow.Table`` – converted to pandas first
    """
    mod = getattr(type(data), "__module__", "") or ""

    if type(data).__name__ == "Table" and mod.startswith("pyarrow"):
        data = data.to_pandas()
        mod = type(data).__module__

    if isinstance(data, (list, tuple)):
        return check_transactions(data)

    if type(data).__name__ == "DataFrame" and mod.startswith("pandas"):
        return _from_pandas(data)

    if type(data).__name__ == "ndarray":
        return _from_matrix(data, None)

    raise TypeError(
        f"Expected a list of transactions, a one-hot pandas DataFrame or a numpy array, got {type(data)}"
    )


def _from_pandas(df: pd.DataFrame) -> list[list[Any]]:
    import numpy as np

    values = np.asarray(df.to_numpy())
    return _from_matrix(values, list(df.columns))


def _from_matrix(values: np.ndarray, columns: list[Any] | None) -> list[list[Any]]:
    import numpy as np

    valid_input_check(values)
    mask = values.astype(bool)
    if columns is None:
        return [np.flatnonzero(row).tolist() for row in mask]
    return [[columns[j] for j in np.flatnonzero(row)] for row in mask]
