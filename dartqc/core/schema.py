#!/usr/bin/env python

"""Schemas for plot options, categorical params and provenance.

Pydantic Models are similar to dataclases but they also include
*type validation*, meaning that if you try to set an attribute to
the wrong type it will raise an error.
"""

# pylint: disable=no-self-argument, no-name-in-module

from typing import Any, Dict, Optional, Tuple
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field


class DataType(str, Enum):
    """supported genlight datatypes"""
    SNP = "SNP"
    SILICODART = "SilicoDArT"


class FilterMethod(str, Enum):
    """methods for selecting one SNP per sequence tag"""
    BEST = "best"
    RANDOM = "random"


class PlotConfig(BaseModel):
    """Style options for the read depth boxplot and histogram."""
    width: int = 500
    height: int = 500
    colors: Tuple[str, str] = Field(
        ("#262626", "#3b9ab2"), description="border and fill colors")
    font_size: int = 12
    title: Optional[str] = None
    bins: int = 100
    outfile: Optional[str] = Field(
        None, description="write canvas to .svg, .pdf or .html")


class HistoryEntry(BaseModel):
    """A record of a transformation applied to a genlight."""
    function: str
    params: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=datetime.now)

    def __str__(self):
        args = ", ".join(f"{key}={val!r}" for key, val in self.params.items())
        return f"{self.function}({args})"
