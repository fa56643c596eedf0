#!/usr/bin/env python

"""API level functions for dartqc reports and filters.

Examples
--------
>>> import dartqc
>>> gl = dartqc.GenLight(genos, loc_metrics, datatype="SNP")
>>> rep = dartqc.report_rdepth(gl, plot_out=False, save2tmp=True)
>>> dartqc.list_reports()

>>> gl2 = dartqc.filter_secondaries(gl, method="best", verbose=3)
>>> [str(i) for i in gl2.history]
["filter_secondaries(method='best', entered_method='best', random_seed=None, strict=False)"]
"""

# bring nested functions to top for API access
from dartqc.core.genlight import GenLight, MISSING
from dartqc.core.schema import DataType, FilterMethod, PlotConfig, HistoryEntry
from dartqc.core.exceptions import DartQCError
from dartqc.core.checks import check_method, MethodCheck
from dartqc.core.logger_setup import set_log_level
from dartqc.core.tmpstore import list_reports, print_reports, set_tmpdir
from dartqc.analysis.report_rdepth import report_rdepth, SummaryReport
from dartqc.analysis.filter_secondaries import (
    filter_secondaries, count_secondaries,
)

__version__ = "0.1.0"
__author__ = "dartqc developers"

# configure the logger
set_log_level("INFO")
