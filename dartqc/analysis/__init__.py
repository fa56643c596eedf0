#!/usr/bin/env python

"""
dartqc analysis tools -- reports and filters of DArT SNP and
presence/absence loci.

Each tool has a class object that is upper case, which is called by a
convenience function which is lower case, and has the same name as
the module (file).
"""

from .report_rdepth import ReadDepthReport, report_rdepth
from .filter_secondaries import (
    SecondariesFilter, filter_secondaries, count_secondaries,
)
