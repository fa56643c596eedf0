#!/usr/bin/env python

"""Report summary of read depth for each locus.

DArT SNP datasets report AvgCountRef and AvgCountSnp as counts of
sequence tags for the reference and alternate alleles, from which a
read depth `rdepth` is back calculated. Fragment presence/absence
datasets (SilicoDArT) provide `AvgReadDepth` as a standard column. This
tool reports the read depth of loci across quantiles, against the
thresholds that might later be used to filter on read depth.

Example
-------
>>> import dartqc
>>> rep = dartqc.report_rdepth(gl, plot_out=True)
>>> rep.table
   Quantile  Threshold  Retained  Percent_retained  Filtered  Percent_filtered
0      100%       41.2         1               0.1       999              99.9
1       95%       24.8        50               5.0       950              95.0
...
"""

from typing import Optional
from dataclasses import dataclass, field
import numpy as np
import pandas as pd
import toyplot.html
from loguru import logger
from dartqc.core.genlight import GenLight
from dartqc.core.schema import DataType, PlotConfig
from dartqc.core.exceptions import DartQCError
from dartqc.core.checks import (
    check_datatype, check_verbosity, flag_start, flag_end,
)
from dartqc.core.tmpstore import save_to_tmp
from dartqc.analysis.utils import quantile_table, summary_stats
from dartqc.analysis.rdepth_drawing import Drawing

logger = logger.bind(name="dartqc")

# the locus metric holding read depth for each datatype
DEPTH_COLUMNS = {
    DataType.SNP: "rdepth",
    DataType.SILICODART: "AvgReadDepth",
}
TITLES = {
    DataType.SNP: "SNP data (DArTSeq)\nRead Depth by locus",
    DataType.SILICODART: "Fragment P/A data (SilicoDArT)\nRead Depth by locus",
}


@dataclass
class SummaryReport:
    """Read depth statistics and quantile table for a genlight."""
    datatype: DataType
    nloc: int
    nind: int
    stats: pd.Series
    """Minimum, quartiles, mean and maximum of read depth."""
    missing_rate: float
    """Proportion of missing calls in genos, rounded to 2 decimals."""
    table: pd.DataFrame
    """Loci retained and filtered at 21 quantile thresholds."""
    canvas: Optional['toyplot.Canvas'] = None
    call: str = ""
    saved: list = field(default_factory=list)
    """Paths of records written to the session temp store."""

    def __str__(self):
        lines = [
            "  Reporting Read Depth by Locus",
            f"  No. of loci = {self.nloc}",
            f"  No. of individuals = {self.nind}",
            f"    Minimum      :  {self.stats['Minimum']:g}",
            f"    1st quartile :  {self.stats['1st quartile']:g}",
            f"    Median       :  {self.stats['Median']:g}",
            f"    Mean         :  {self.stats['Mean']:g}",
            f"    3rd quartile :  {self.stats['3rd quartile']:g}",
            f"    Maximum      :  {self.stats['Maximum']:g}",
            f"    Missing Rate Overall:  {self.missing_rate:.2f}",
            "",
            self.table.to_string(),
        ]
        return "\n".join(lines)


class ReadDepthReport:
    """Summarize read depth of loci in a genlight.

    Parameters
    ----------
    gl: GenLight
        A genlight with SNP or SilicoDArT data. SNP data must have an
        `rdepth` locus metric, SilicoDArT data `AvgReadDepth`.
    plot_out: bool
        If True a boxplot and histogram of read depth are drawn.
    plot_config: PlotConfig
        Colors, sizes and optional outfile for the drawing.
    save2tmp: bool
        If True the drawing and table are saved to the session temp
        store. See `list_reports()` and `print_reports()`.
    verbose: int
        0 silent, 1 begin and end, 2 progress log, 3 progress and
        results summary, 5 full report.
    """
    def __init__(
        self,
        gl: GenLight,
        plot_out: bool = True,
        plot_config: Optional[PlotConfig] = None,
        save2tmp: bool = False,
        verbose: int = 2,
        ):
        self.gl = gl
        self.plot_out = plot_out
        self.plot_config = plot_config if plot_config else PlotConfig()
        self.save2tmp = save2tmp
        self.verbose = check_verbosity(verbose)
        self.call = (
            f"report_rdepth(plot_out={plot_out!r}, "
            f"save2tmp={save2tmp!r}, verbose={self.verbose!r})"
        )

        # attributes to be filled
        self.datatype: DataType = None
        self.depths: np.ndarray = None

    def run(self) -> SummaryReport:
        """Check inputs, compute stats, draw, print and save."""
        flag_start("report_rdepth", self.verbose)
        self.datatype = check_datatype(self.gl, verbose=self.verbose)
        self.depths = self._get_depths()

        report = SummaryReport(
            datatype=self.datatype,
            nloc=self.gl.nloc,
            nind=self.gl.nind,
            stats=summary_stats(self.depths),
            missing_rate=round(self.gl.missing_rate(), 2),
            table=quantile_table(self.depths, self.gl.nloc),
            call=self.call,
        )

        if self.plot_out:
            if np.isnan(self.depths).all():
                logger.warning("no read depth values to plot")
            else:
                report.canvas = Drawing(
                    self.depths, TITLES[self.datatype], self.plot_config,
                ).run()

        print(report)
        if self.save2tmp:
            self._save(report)
        flag_end("report_rdepth", self.verbose)
        return report

    def _get_depths(self) -> np.ndarray:
        """Return the read depth metric for this datatype.

        Raises DartQCError if the required column is absent.
        """
        column = DEPTH_COLUMNS[self.datatype]
        if column not in self.gl.loc_metrics.columns:
            msg = "Fatal Error: Read depth not included among the locus metrics"
            logger.error(f"{msg} ({column})")
            raise DartQCError(msg)
        return pd.to_numeric(
            self.gl.loc_metrics[column], errors="coerce").to_numpy(dtype=float)

    def _save(self, report: SummaryReport) -> None:
        """Write the rendered drawing and table to the session temp store."""
        if report.canvas is not None:
            markup = toyplot.html.tostring(report.canvas)
            report.saved.append(save_to_tmp("Plot", self.call, markup))
            if self.verbose >= 2:
                logger.info("Saving the plot to session tempfile")
        report.saved.append(save_to_tmp("Table", self.call, report.table))
        if self.verbose >= 2:
            logger.info("Saving tabulation to session tempfile")
            logger.info(
                "NOTE: Retrieve output files from tempdir using "
                "list_reports() and print_reports()")


def report_rdepth(
    gl: GenLight,
    plot_out: bool = True,
    plot_config: Optional[PlotConfig] = None,
    save2tmp: bool = False,
    verbose: int = 2,
    ) -> SummaryReport:
    """Report read depth of loci by quantiles, with optional plots.

    Prints a table of the minimum, maximum, mean and quartiles of read
    depth, the overall missing rate of calls, and the number of loci
    retained and filtered at read depth thresholds set at 5% quantile
    steps. The genlight is not modified. See `ReadDepthReport` for
    the parameters.
    """
    tool = ReadDepthReport(gl, plot_out, plot_config, save2tmp, verbose)
    return tool.run()
