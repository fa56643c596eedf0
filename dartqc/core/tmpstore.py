#!/usr/bin/env python

"""Session temp store for plots and tables written by report tools.

Report tools called with `save2tmp=True` write each plot and table as
a separate pickled record `(call, object)` to a temp directory that
lives for the python session. The records can be listed and loaded
back with `list_reports()` and `print_reports()`.

Example
-------
>>> rep = dartqc.report_rdepth(gl, save2tmp=True)
>>> dartqc.list_reports()
   number   kind                               call  path
0       0   Plot  report_rdepth(plot_out=True, ...)  /tmp/dartqc-.../Plot_...
1       1  Table  report_rdepth(plot_out=True, ...)  /tmp/dartqc-.../Table_...
>>> table = dartqc.print_reports(1)
"""

from typing import Any, Optional, Union
import pickle
import tempfile
from pathlib import Path
import pandas as pd
from loguru import logger
from dartqc.core.exceptions import DartQCError

logger = logger.bind(name="dartqc")

KINDS = ("Plot", "Table")
TMPDIR: Optional[Path] = None


def get_tmpdir() -> Path:
    """Return the session temp dir, creating it on first use."""
    global TMPDIR
    if TMPDIR is None:
        TMPDIR = Path(tempfile.mkdtemp(prefix="dartqc-"))
    return TMPDIR


def set_tmpdir(path: Union[str, Path]) -> Path:
    """Use path as the session temp dir for saved reports."""
    global TMPDIR
    TMPDIR = Path(path).expanduser().resolve()
    TMPDIR.mkdir(parents=True, exist_ok=True)
    return TMPDIR


def save_to_tmp(kind: str, call: str, obj: Any) -> Path:
    """Pickle (call, obj) to a new file in the session temp dir."""
    if kind not in KINDS:
        raise DartQCError(f"kind must be one of {KINDS}, not {kind!r}")
    # records are numbered in the order written
    order = len(_record_paths())
    with tempfile.NamedTemporaryFile(
        mode='wb', prefix=f"{kind}_{order:05d}_", dir=get_tmpdir(),
        delete=False,
    ) as out:
        pickle.dump((call, obj), out)
    logger.debug(f"saved {kind.lower()} to {out.name}")
    return Path(out.name)


def list_reports() -> pd.DataFrame:
    """Return a DataFrame listing the saved plots and tables.

    Records are numbered in the order they were written. The number
    is used to select a record in `print_reports()`.
    """
    rows = []
    for num, path in enumerate(_record_paths()):
        with open(path, 'rb') as indata:
            call, _ = pickle.load(indata)
        rows.append((num, path.name.split("_")[0], call, str(path)))
    return pd.DataFrame(rows, columns=["number", "kind", "call", "path"])


def print_reports(number: int) -> Any:
    """Load a saved record by its number in `list_reports()`.

    Tables are printed to stdout. The stored object is returned: a
    DataFrame for tables, or html markup of the canvas for plots.
    """
    reports = list_reports()
    if number not in reports.number.values:
        raise DartQCError(
            f"report number {number} not found; {reports.shape[0]} "
            "reports are saved in this session.")
    record = reports.set_index("number").loc[number]
    with open(record.path, 'rb') as indata:
        call, obj = pickle.load(indata)
    logger.info(f"{record.kind} from {call}")
    if record.kind == "Table":
        print(obj)
    return obj


def _record_paths():
    """Return record paths in the temp dir sorted by write order."""
    paths = []
    for path in get_tmpdir().iterdir():
        fields = path.name.split("_")
        if len(fields) > 2 and fields[0] in KINDS and fields[1].isdigit():
            paths.append(path)
    return sorted(paths, key=lambda x: int(x.name.split("_")[1]))
