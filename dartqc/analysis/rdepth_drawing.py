#!/usr/bin/env python

"""
Generates read depth plots. This class is not for general use, and is
used internally from report_rdepth() to return a toyplot drawing of a
boxplot stacked above a histogram of the read depths of loci.
"""

from typing import Optional, Tuple
from dataclasses import dataclass, field

import numpy as np
import toyplot
import toyplot.html
import toyplot.svg
import toyplot.pdf
from dartqc.core.schema import PlotConfig
from dartqc.core.exceptions import DartQCError
from dartqc.analysis.utils import axis_range

# relative heights of the boxplot and histogram panels
HEIGHTS = (1, 4)
MARGINS = (60, 30, 70, 50)  # left, right, top, bottom
GAP = 20


@dataclass
class Drawing:
    depths: np.ndarray
    title: str
    config: PlotConfig = field(default_factory=PlotConfig)

    # non param attributes to be filled
    xrange: Tuple[float, float] = field(default=None, init=False)
    canvas: 'toyplot.Canvas' = field(default=None, init=False)
    box_axes: Optional['toyplot.coordinates.Cartesian'] = field(default=None, init=False)
    hist_axes: Optional['toyplot.coordinates.Cartesian'] = field(default=None, init=False)

    def __post_init__(self):
        depths = np.asarray(self.depths, dtype=float)
        self.depths = depths[~np.isnan(depths)]
        if not self.depths.size:
            raise DartQCError("no read depth values to plot.")
        self.xrange = axis_range(self.depths)
        # an all-zero depth vector still gets a visible axis
        if self.xrange[1] <= self.xrange[0]:
            self.xrange = (0., 10.)

    def run(self) -> 'toyplot.Canvas':
        """Run subfunctions to generate drawing."""
        self._get_canvas_and_axes()
        self._draw_boxplot()
        self._draw_histogram()
        self._save_figure()
        return self.canvas

    def _get_canvas_and_axes(self):
        """Setup the Canvas with two Cartesian axes stacked vertically.

        The boxplot panel on top and histogram panel below share the
        same x range, from 0 to the max depth rounded up to the next
        multiple of 10.
        """
        left, right, top, bottom = MARGINS
        avail = self.config.height - top - bottom - GAP
        box_height = avail * HEIGHTS[0] / sum(HEIGHTS)

        self.canvas = toyplot.Canvas(self.config.width, self.config.height)
        self.box_axes = self.canvas.cartesian(
            bounds=(left, -right, top, top + box_height),
            xmin=self.xrange[0],
            xmax=self.xrange[1],
            ymin=-1,
            ymax=1,
            yshow=False,
        )
        self.hist_axes = self.canvas.cartesian(
            bounds=(left, -right, top + box_height + GAP, -bottom),
            xmin=self.xrange[0],
            xmax=self.xrange[1],
            xlabel="Read Depth",
            ylabel="Count",
        )

        # style axes
        fsize = f"{self.config.font_size}px"
        for axes in (self.box_axes, self.hist_axes):
            axes.x.spine.style["stroke-width"] = 1.5
            axes.x.ticks.show = True
            axes.x.ticks.labels.style["font-size"] = fsize
            axes.x.label.style["font-size"] = fsize
        self.hist_axes.y.spine.style["stroke-width"] = 1.5
        self.hist_axes.y.ticks.show = True
        self.hist_axes.y.ticks.labels.style["font-size"] = fsize
        self.hist_axes.y.label.style["font-size"] = fsize

        title = self.config.title if self.config.title else self.title
        self.box_axes.label.text = title.replace("\n", "<br/>")
        self.box_axes.label.style["font-size"] = f"{self.config.font_size + 2}px"
        self.box_axes.label.offset = 25

    def _draw_boxplot(self):
        """Draw a horizontal box with whiskers at 1.5 IQR and outliers."""
        border, fill = self.config.colors
        q1, median, q3 = np.percentile(self.depths, [25, 50, 75])
        iqr = q3 - q1
        inside = self.depths[
            (self.depths >= q1 - 1.5 * iqr) & (self.depths <= q3 + 1.5 * iqr)]
        lower, upper = inside.min(), inside.max()
        outliers = self.depths[(self.depths < lower) | (self.depths > upper)]

        self.box_axes.rectangle(
            q1, q3, -0.5, 0.5,
            color=fill,
            style={"stroke": border, "stroke-width": 1.5},
        )
        for xs, ys in [
            ([median, median], [-0.5, 0.5]),
            ([lower, q1], [0, 0]),
            ([q3, upper], [0, 0]),
        ]:
            self.box_axes.plot(xs, ys, color=border, stroke_width=1.5)
        if outliers.size:
            self.box_axes.scatterplot(
                outliers,
                np.zeros(outliers.size),
                size=5,
                mstyle={"fill": fill, "stroke": border},
            )

    def _draw_histogram(self):
        """Draw bars of the depth counts in config.bins equal bins."""
        border, fill = self.config.colors
        counts, edges = np.histogram(
            self.depths, bins=self.config.bins, range=self.xrange)
        self.hist_axes.bars(
            (counts, edges),
            color=fill,
            style={"stroke": border, "stroke-width": 0.5},
        )

    def _save_figure(self):
        """Write figure to pdf/svg/html."""
        outfile = self.config.outfile
        if outfile:
            if outfile.endswith(".pdf"):
                toyplot.pdf.render(self.canvas, outfile)
            elif outfile.endswith(".svg"):
                toyplot.svg.render(self.canvas, outfile)
            elif outfile.endswith(".html"):
                toyplot.html.render(self.canvas, outfile)
            else:
                raise DartQCError(
                    "outfile arg must end with .svg, .pdf or .html to "
                    "select the output format.")
