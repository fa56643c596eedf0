#!/usr/bin/env python

"""Argument and genlight checks shared by the report and filter tools.
"""

from typing import Any, NamedTuple, Optional
from loguru import logger
from dartqc.core.genlight import GenLight
from dartqc.core.schema import DataType, FilterMethod
from dartqc.core.exceptions import DartQCError

logger = logger.bind(name="dartqc")


class MethodCheck(NamedTuple):
    """Result of checking a filter method argument.

    ok is False when the entered value was not a supported method, in
    which case method holds the fallback and warning says why. The
    caller decides whether to proceed or treat it as fatal.
    """
    ok: bool
    method: FilterMethod
    warning: Optional[str] = None


def check_method(method: Any) -> MethodCheck:
    """Return a MethodCheck for a 'best' or 'random' method arg."""
    try:
        return MethodCheck(True, FilterMethod(method))
    except ValueError:
        return MethodCheck(
            False,
            FilterMethod.RANDOM,
            f"method must be 'best' or 'random', not {method!r}; "
            "set to 'random'",
        )


def check_verbosity(verbose: Any) -> int:
    """Return verbose as an int in [0, 5] or raise DartQCError."""
    try:
        verbose = int(verbose)
    except (TypeError, ValueError) as inst:
        raise DartQCError(
            f"verbose must be an int from 0 to 5, not {verbose!r}") from inst
    if not 0 <= verbose <= 5:
        raise DartQCError(f"verbose must be an int from 0 to 5, not {verbose}")
    return verbose


def check_datatype(gl: Any, verbose: int = 2) -> DataType:
    """Check the input is a GenLight and return its datatype."""
    if not isinstance(gl, GenLight):
        raise DartQCError(
            f"input must be a GenLight object, not {type(gl).__name__}")
    if verbose >= 2:
        if gl.datatype == DataType.SNP:
            logger.info("Processing genlight object with SNP data")
        else:
            logger.info(
                "Processing genlight object with presence/absence "
                "(SilicoDArT) data")
    return gl.datatype


def check_loc_metrics(gl: GenLight, *columns: str) -> None:
    """Raise DartQCError if any column is missing from loc_metrics."""
    missing = [i for i in columns if i not in gl.loc_metrics.columns]
    if missing:
        raise DartQCError(
            f"Fatal Error: locus metrics {missing} not included among "
            "the locus metrics")


def flag_start(funcname: str, verbose: int) -> None:
    if verbose >= 1:
        logger.info(f"Starting {funcname}")


def flag_end(funcname: str, verbose: int) -> None:
    if verbose >= 1:
        logger.info(f"Completed: {funcname}")
