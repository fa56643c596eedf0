#!/usr/bin/env python

"""
Install dartqc with:
 `pip install .`

Or, for developers, install in editable mode with the test extras:
 `pip install -e .[test]`
"""

import re
from setuptools import setup, find_packages


# Fetch version from the package __init__.
INITFILE = "dartqc/__init__.py"
CUR_VERSION = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                        open(INITFILE, "r").read(),
                        re.M).group(1)

setup(
    name="dartqc",
    version=CUR_VERSION,
    description="Read depth reports and secondary SNP filters for DArT genlight data",
    packages=find_packages(),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.22",
        "numba",
        "pandas",
        "pydantic>=2",
        "toyplot",
        "loguru",
        "ipython",
    ],
    extras_require={
        "test": ["pytest"],
    },
    license='GPL',
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
)
