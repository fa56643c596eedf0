#!/usr/bin/env python

"""utility functions for the report and filter tools
"""

from typing import Tuple
import numpy as np
import pandas as pd
from numba import njit

# 0%, 5%, ..., 100%
QUANTILE_PROBS = np.linspace(0, 1, 21)
TABLE_HEADER = [
    "Quantile",
    "Threshold",
    "Retained",
    "Percent_retained",
    "Filtered",
    "Percent_filtered",
]


def clone_ids(allele_ids: pd.Series) -> np.ndarray:
    """Return the CloneID (text before the first '|') of each AlleleID.

    AlleleIDs without a '|' return the whole string.
    """
    return allele_ids.astype(str).str.split("|", n=1).str[0].to_numpy()


@njit
def jmark_duplicates(codes: np.ndarray) -> np.ndarray:
    """Return mask that is True for any code seen earlier in the array."""
    seen = np.zeros(codes.max() + 1 if codes.size else 0, dtype=np.bool_)
    dups = np.zeros(codes.size, dtype=np.bool_)
    for idx in range(codes.size):
        if seen[codes[idx]]:
            dups[idx] = True
        else:
            seen[codes[idx]] = True
    return dups


def mark_duplicates(keys: np.ndarray) -> np.ndarray:
    """Return mask True for all but the first occurrence of each key."""
    codes, _ = pd.factorize(keys)
    return jmark_duplicates(codes.astype(np.int64))


def quantile_table(depths: np.ndarray, nloc: int) -> pd.DataFrame:
    """Return loci retained and filtered at 21 quantile thresholds.

    Thresholds are discrete quantiles (inverse of the empirical CDF,
    no interpolation) of the non-missing depths. A locus is retained
    at a threshold if its depth is >= the threshold. Rows are ordered
    from the 100% to the 0% quantile.
    """
    depths = np.asarray(depths, dtype=float)
    depths = depths[~np.isnan(depths)]
    if not depths.size:
        return pd.DataFrame(columns=TABLE_HEADER)

    thresholds = np.quantile(depths, QUANTILE_PROBS, method="inverted_cdf")
    retained = np.array([np.sum(depths >= i) for i in thresholds])
    pc_retained = np.round(retained * 100 / nloc, 1)

    table = pd.DataFrame({
        "Quantile": np.round(QUANTILE_PROBS * 100).astype(int),
        "Threshold": thresholds,
        "Retained": retained,
        "Percent_retained": pc_retained,
        "Filtered": nloc - retained,
        "Percent_filtered": np.round(100 - pc_retained, 1),
    }, columns=TABLE_HEADER)
    table = table.sort_values("Quantile", ascending=False)
    table["Quantile"] = table.Quantile.astype(str) + "%"
    return table.reset_index(drop=True)


def summary_stats(depths: np.ndarray) -> pd.Series:
    """Return min, quartiles, mean and max ignoring missing values."""
    desc = pd.Series(depths, dtype=float).describe()
    return pd.Series(
        [desc["min"], desc["25%"], desc["50%"],
         desc["mean"], desc["75%"], desc["max"]],
        index=["Minimum", "1st quartile", "Median",
               "Mean", "3rd quartile", "Maximum"],
    )


def axis_range(depths: np.ndarray) -> Tuple[float, float]:
    """Return x-axis range (0, max depth rounded up to a multiple of 10)."""
    top = np.nanmax(depths)
    return 0., float(np.ceil(top / 10) * 10)
