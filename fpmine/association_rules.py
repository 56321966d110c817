from __future__ import annotations

from itertools import combinations
from typing import Any

import numpy as np
import pandas as pd

_ALL_METRICS = [
    "antecedent support",
    "consequent support",
    "support",
    "confidence",
    "lift",
    "leverage",
    "conviction",
    "jaccard",
    "kulczynski",
]


def _empty_rules(return_metrics: list[str] = _ALL_METRICS) -> pd.DataFrame:
    return pd.DataFrame(columns=pd.Index(["antecedents", "consequents"] + list(return_metrics)))


def association_rules(
    df: pd.DataFrame | Any,
    metric: str = "confidence",
    min_threshold: float = 0.8,
    return_metrics: list[str] = _ALL_METRICS,
    num_itemsets: int | None = None,
) -> pd.DataFrame:
    """Generate association rules from frequent itemsets.

    Parameters
    ----------
    df:
        Output of :func:`fpmine.fpgrowth`: columns ``support`` (fraction)
        and ``itemsets``. Every subset of a listed itemset must be listed
        too, which holds for any complete frequent-itemset result.
    metric:
        Metric the rules are filtered on, one of the ``return_metrics``
        names.
    min_threshold:
        Minimal value of *metric* for a rule to be kept.
    return_metrics:
        Metric columns of the result.
    num_itemsets:
        Number of transactions the supports were computed on. Only used
        for the ``attrs`` of the result; read from ``df.attrs`` if omitted.

    Returns
    -------
    pandas.DataFrame
        Columns ``antecedents`` and ``consequents`` (tuples of items in
        ascending order) followed by the requested metrics.
    """
    if not isinstance(df, pd.DataFrame):
        raise TypeError(f"Expected a pandas DataFrame, got {type(df)}")
    if "support" not in df.columns:
        raise ValueError("The input DataFrame must contain a 'support' column")
    if "itemsets" not in df.columns:
        raise ValueError("The input DataFrame must contain an 'itemsets' column")
    if metric not in _ALL_METRICS:
        raise ValueError(f"Metric must be one of {_ALL_METRICS}. Got {metric!r}.")
    unknown = [m for m in return_metrics if m not in _ALL_METRICS]
    if unknown:
        raise ValueError(f"Unknown metric(s) in `return_metrics`: {unknown}")

    if num_itemsets is None:
        num_itemsets = df.attrs.get("num_itemsets")

    supports = {frozenset(items): float(support) for items, support in zip(df["itemsets"], df["support"])}

    antecedents: list[tuple[Any, ...]] = []
    consequents: list[tuple[Any, ...]] = []
    s_a: list[float] = []
    s_c: list[float] = []
    s_ac: list[float] = []
    for itemset, support in supports.items():
        if len(itemset) < 2:
            continue
        items = sorted(itemset)
        for r in range(1, len(items)):
            for antecedent in combinations(items, r):
                consequent = tuple(i for i in items if i not in antecedent)
                try:
                    a_support = supports[frozenset(antecedent)]
                    c_support = supports[frozenset(consequent)]
                except KeyError as e:
                    raise ValueError(
                        f"Itemset {sorted(e.args[0])} is missing; association rules need every "
                        "subset of a frequent itemset."
                    ) from e
                antecedents.append(antecedent)
                consequents.append(consequent)
                s_a.append(a_support)
                s_c.append(c_support)
                s_ac.append(support)

    if not antecedents:
        return _empty_rules(return_metrics)

    sA = np.asarray(s_a)
    sC = np.asarray(s_c)
    sAC = np.asarray(s_ac)
    confidence = sAC / sA
    with np.errstate(divide="ignore", invalid="ignore"):
        conviction = np.where(confidence < 1.0, (1.0 - sC) / (1.0 - confidence), np.inf)
    metrics = {
        "antecedent support": sA,
        "consequent support": sC,
        "support": sAC,
        "confidence": confidence,
        "lift": confidence / sC,
        "leverage": sAC - sA * sC,
        "conviction": conviction,
        "jaccard": sAC / (sA + sC - sAC),
        "kulczynski": 0.5 * (sAC / sA + sAC / sC),
    }

    keep = metrics[metric] >= min_threshold
    result = pd.DataFrame(
        {
            "antecedents": [a for a, k in zip(antecedents, keep) if k],
            "consequents": [c for c, k in zip(consequents, keep) if k],
        }
    )
    if result.empty:
        return _empty_rules(return_metrics)
    for col_name in return_metrics:
        result[col_name] = metrics[col_name][keep]
    if num_itemsets is not None:
        result.attrs["num_itemsets"] = int(num_itemsets)
    return result
