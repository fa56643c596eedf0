#!/usr/bin/env python

"""Genlight-like container of genotype calls and locus metrics.

A GenLight holds an (nind, nloc) matrix of calls and a DataFrame of
locus metrics with one row per matrix column. Tools never modify a
GenLight in place; transforms return a new instance, and append a
HistoryEntry to a copy of the provenance history.

Example
-------
>>> import dartqc
>>> gl = dartqc.GenLight(
>>>     genos=[[0, 1, 2], [9, 1, 0]],
>>>     loc_metrics=pd.DataFrame({"AlleleID": ["1|F", "1|F", "2|F"]}),
>>> )
>>> gl.nind, gl.nloc
(2, 3)
"""

from typing import List, Optional, Sequence, Tuple, Union
from dataclasses import dataclass, field, replace
import numpy as np
import pandas as pd
from dartqc.core.schema import DataType, HistoryEntry
from dartqc.core.exceptions import DartQCError

# value used for missing calls in the genos array
MISSING = 9
# all values allowed in the genos array
VALID_CALLS = (0, 1, 2, MISSING)


@dataclass(frozen=True, eq=False)
class GenLight:
    genos: np.ndarray
    """Array of (nind, nloc) uint8 calls, 9=missing."""
    loc_metrics: pd.DataFrame
    """DataFrame of locus metrics, one row per column of genos."""
    ind_names: Optional[List[str]] = None
    """Names of individuals in the row order of genos."""
    datatype: DataType = DataType.SNP
    """SNP (0/1/2 calls) or SilicoDArT (0/1 presence/absence)."""
    history: Tuple[HistoryEntry, ...] = field(default_factory=tuple)
    """Ordered transformations applied to this genlight."""

    def __post_init__(self):
        object.__setattr__(self, "genos", _to_calls(self.genos))
        object.__setattr__(
            self, "loc_metrics", self.loc_metrics.reset_index(drop=True))
        object.__setattr__(self, "datatype", DataType(self.datatype))
        object.__setattr__(self, "history", tuple(self.history))
        if self.ind_names is None:
            names = [f"ind{i}" for i in range(self.genos.shape[0])]
            object.__setattr__(self, "ind_names", names)
        else:
            object.__setattr__(self, "ind_names", list(self.ind_names))

        if self.genos.shape[1] != self.loc_metrics.shape[0]:
            raise DartQCError(
                f"genos has {self.genos.shape[1]} loci but loc_metrics "
                f"has {self.loc_metrics.shape[0]} rows.")
        if self.genos.shape[0] != len(self.ind_names):
            raise DartQCError(
                f"genos has {self.genos.shape[0]} individuals but "
                f"{len(self.ind_names)} names were entered.")

    def __repr__(self):
        return (
            f"GenLight(datatype={self.datatype.value}, nind={self.nind}, "
            f"nloc={self.nloc}, history={len(self.history)})"
        )

    @property
    def nloc(self) -> int:
        """Number of loci (matrix columns)."""
        return self.genos.shape[1]

    @property
    def nind(self) -> int:
        """Number of individuals (matrix rows)."""
        return self.genos.shape[0]

    @property
    def loc_names(self) -> List[str]:
        """AlleleIDs if present else 0-indexed locus names."""
        if "AlleleID" in self.loc_metrics.columns:
            return self.loc_metrics["AlleleID"].astype(str).tolist()
        return [f"loc{i}" for i in range(self.nloc)]

    def missing_rate(self) -> float:
        """Proportion of all cells in genos that are missing calls."""
        if not self.genos.size:
            return 0.
        return float(np.sum(self.genos == MISSING) / self.genos.size)

    def subset_loci(self, idxs: Union[Sequence[int], np.ndarray]) -> "GenLight":
        """Return a new GenLight with loci selected (and ordered) by idxs.

        idxs can be an array of int indices or a boolean mask of
        length nloc. Matrix columns and metadata rows are always
        selected together.
        """
        idxs = np.asarray(idxs)
        if idxs.dtype == bool:
            if idxs.size != self.nloc:
                raise DartQCError(
                    f"boolean mask of size {idxs.size} does not match "
                    f"nloc={self.nloc}.")
            idxs = np.flatnonzero(idxs)
        idxs = idxs.astype(np.int64)
        return replace(
            self,
            genos=self.genos[:, idxs].copy(),
            loc_metrics=self.loc_metrics.iloc[idxs].reset_index(drop=True),
        )

    def with_history(self, entry: HistoryEntry) -> "GenLight":
        """Return a new GenLight with entry appended to its history."""
        return replace(self, history=self.history + (entry,))


def _to_calls(genos) -> np.ndarray:
    """Return genos as a 2-d uint8 array with NaN set to MISSING.

    Raises DartQCError if any call is not 0, 1, 2 or MISSING.
    """
    arr = np.asarray(genos)
    if arr.ndim != 2:
        raise DartQCError(
            f"genos must be 2-dimensional (nind, nloc), not {arr.shape}.")
    if np.issubdtype(arr.dtype, np.floating):
        arr = np.where(np.isnan(arr), MISSING, arr)
    bad = ~np.isin(arr, VALID_CALLS)
    if bad.any():
        raise DartQCError(
            f"genos contains {int(bad.sum())} invalid calls "
            f"(e.g., {arr[bad][0]}); calls must be 0, 1, 2 or {MISSING}.")
    return arr.astype(np.uint8)
