#!/usr/bin/env python

"""Logger for dartqc to STDERR and optionally also to a LOGFILE.

logging to STDERR
-----------------
DEBUG: used by developers to examine extra details.
INFO: progress and results reported to users. (DEFAULT)
WARNING: warnings to users, e.g., an invalid filter method.
ERROR: printed along with raised errors.

How much each tool writes at INFO is set per call with its `verbose`
argument (0 silent, 1 start/end, 2 progress, 3 results summary, 5 full
report). There is no session-wide verbosity default.

Examples
--------
>>> import dartqc
>>> dartqc.set_log_level("DEBUG")
>>> dartqc.set_log_level("DEBUG", log_file="/tmp/dartqc-log.txt")
"""

from typing import Optional
import sys
from pathlib import Path
from loguru import logger
import IPython

LOGGERS = [0]


def formatter(record):
    """Custom formatter with short level and file names."""
    end = record["extra"].get("end", "\n")
    lev = record['level'].name[:4]
    fname = record['file'].name[:18]
    fmessage = (
        f"<level>{lev}</level> <white>|</white> "
        f"<magenta>{fname: <18}</magenta> <white>|</white> "
        "{message}"
    ) + end
    return fmessage


def color_support():
    """Check for color support in stderr as a notebook or terminal/tty."""
    # check if we're in IPython/jupyter
    tty1 = bool(IPython.get_ipython())
    # check if we're in a terminal
    tty2 = sys.stderr.isatty()
    return tty1 or tty2


def set_log_level(log_level: str = "INFO", log_file: Optional[Path] = None):
    """Replace the dartqc sink with one at log_level.

    Messages from report_rdepth, filter_secondaries and the checks are
    written to log_file if entered, else to stderr. Only records bound
    with name="dartqc" pass the sink filter.
    """
    # remove any previous loggers created by dartqc
    for idx in LOGGERS:
        try:
            logger.remove(idx)
        except ValueError:
            pass

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(exist_ok=True)
        log_file.touch(exist_ok=True)
        idx = logger.add(
            sink=log_file,
            level=log_level,
            colorize=False,
            format=formatter,
            filter=lambda x: x['extra'].get('name') == "dartqc",
        )
    else:
        idx = logger.add(
            sink=sys.stderr,
            level=log_level,
            colorize=color_support(),
            format=formatter,
            filter=lambda x: x['extra'].get("name") == "dartqc",
        )
    LOGGERS.append(idx)

    # activate
    logger.enable("dartqc")
    logger.bind(name='dartqc').debug(f"dartqc logging enabled: {log_level}")
