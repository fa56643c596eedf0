#!/usr/bin/env python

"""Filter loci that represent secondary SNPs in a genlight.

SNP datasets generated by DArT include fragments with more than one
SNP and record them separately with the same CloneID (the AlleleID
text before the first '|'). These multiple SNP loci within a fragment
(secondaries) are likely to be linked, and so you may wish to keep
only one SNP per fragment.

Loci are first ordered by repeatability (RepAvg) and polymorphism
information content (AvgPIC), method='best', or at random,
method='random', and then all but the first locus with each CloneID
are removed. The filter has not been designed for presence/absence
(SilicoDArT) data.

Example
-------
>>> import dartqc
>>> dartqc.count_secondaries(gl)
120
>>> gl2 = dartqc.filter_secondaries(gl, method="best")
>>> gl2.history[-1]
HistoryEntry(function='filter_secondaries', ...)
"""

from typing import Optional
import numpy as np
import pandas as pd
from loguru import logger
from dartqc.core.genlight import GenLight
from dartqc.core.schema import DataType, FilterMethod, HistoryEntry
from dartqc.core.exceptions import DartQCError
from dartqc.core.checks import (
    check_datatype, check_loc_metrics, check_method, check_verbosity,
    flag_start, flag_end,
)
from dartqc.analysis.utils import clone_ids, mark_duplicates

logger = logger.bind(name="dartqc")


class SecondariesFilter:
    """Keep one SNP locus per sequenced fragment (CloneID).

    Parameters
    ----------
    gl: GenLight
        A genlight with an AlleleID locus metric, and RepAvg and AvgPIC
        metrics if method='best'.
    method: str
        'best' keeps the locus with highest RepAvg, then AvgPIC, in
        each fragment. 'random' keeps a random locus. Any other value
        logs a warning and uses 'random', unless strict=True.
    random_seed: Optional[int]
        Random number generator seed used by method='random'.
    strict: bool
        If True an invalid method raises a DartQCError.
    verbose: int
        0 silent, 1 begin and end, 2 progress log, 3 progress and
        results summary, 5 full report.

    Notes
    -----
    The best order sorts on CloneID, then RepAvg and AvgPIC descending.
    This differs from dartR, which sorts on the full AlleleID first so
    that the SNP suffix decides which locus of a fragment is kept
    before RepAvg is considered.
    """
    def __init__(
        self,
        gl: GenLight,
        method: str = "random",
        random_seed: Optional[int] = None,
        strict: bool = False,
        verbose: int = 2,
        ):
        self.gl = gl
        self.entered_method = method
        self.random_seed = random_seed
        self.strict = strict
        self.verbose = check_verbosity(verbose)

        # attributes to be filled
        self.method: FilterMethod = None
        """The method used after checking the entered method."""
        self.order: np.ndarray = None
        """Array of locus indices in the order they are considered."""
        self.duplicated: np.ndarray = None
        """Boolean array (in .order) True for secondaries."""

    def run(self) -> GenLight:
        """Order loci, mark secondaries and return a filtered genlight."""
        flag_start("filter_secondaries", self.verbose)
        datatype = check_datatype(self.gl, verbose=self.verbose)
        if datatype == DataType.SILICODART:
            logger.warning(
                "filter_secondaries is not designed for presence/absence "
                "(SilicoDArT) data")
        self._check_method()

        if self.verbose > 2:
            logger.info(f"Total number of SNP loci: {self.gl.nloc}")

        self.order = self._get_order()
        ordered = self.gl.subset_loci(self.order)
        self.duplicated = mark_duplicates(
            clone_ids(ordered.loc_metrics["AlleleID"]))
        filtered = ordered.subset_loci(~self.duplicated)

        if self.verbose > 2:
            logger.info(f"Number of secondaries: {int(self.duplicated.sum())}")
            logger.info(
                f"Number of loci after secondaries removed: {filtered.nloc}")

        entry = HistoryEntry(
            function="filter_secondaries",
            params={
                "method": self.method.value,
                "entered_method": self.entered_method,
                "random_seed": self.random_seed,
                "strict": self.strict,
            },
        )
        flag_end("filter_secondaries", self.verbose)
        return filtered.with_history(entry)

    def _check_method(self) -> None:
        """Set .method, warn (or raise if strict) for invalid entries."""
        check = check_method(self.entered_method)
        if not check.ok:
            if self.strict:
                logger.error(check.warning)
                raise DartQCError(check.warning)
            logger.warning(check.warning)
        self.method = check.method

        required = ["AlleleID"]
        if self.method == FilterMethod.BEST:
            required += ["RepAvg", "AvgPIC"]
        try:
            check_loc_metrics(self.gl, *required)
        except DartQCError as inst:
            logger.error(str(inst))
            raise

    def _get_order(self) -> np.ndarray:
        """Return locus indices ordered by the selection method."""
        metrics = self.gl.loc_metrics
        if self.method == FilterMethod.BEST:
            if self.verbose > 1:
                logger.info(
                    "Selecting one SNP per sequence tag based on best "
                    "RepAvg and AvgPIC")
            # CloneID ascending, RepAvg descending, AvgPIC descending.
            # lexsort is stable and sorts on the last key first.
            clones, _ = pd.factorize(clone_ids(metrics["AlleleID"]), sort=True)
            repavg = pd.to_numeric(metrics["RepAvg"], errors="coerce")
            avgpic = pd.to_numeric(metrics["AvgPIC"], errors="coerce")
            return np.lexsort((
                -avgpic.to_numpy(dtype=float),
                -repavg.to_numpy(dtype=float),
                clones,
            ))

        if self.verbose > 1:
            logger.info("Selecting one SNP per sequence tag at random")
        rng = np.random.default_rng(self.random_seed)
        return rng.permutation(self.gl.nloc)


def filter_secondaries(
    gl: GenLight,
    method: str = "random",
    random_seed: Optional[int] = None,
    strict: bool = False,
    verbose: int = 2,
    ) -> GenLight:
    """Return a new genlight with one SNP locus kept per CloneID.

    The entered genlight is not modified. See `SecondariesFilter` for
    the parameters.
    """
    tool = SecondariesFilter(gl, method, random_seed, strict, verbose)
    return tool.run()


def count_secondaries(gl: GenLight) -> int:
    """Return the number of loci sharing a CloneID with an earlier locus.

    This is the number of loci that filter_secondaries() removes.
    """
    check_loc_metrics(gl, "AlleleID")
    return int(mark_duplicates(clone_ids(gl.loc_metrics["AlleleID"])).sum())
