#!/usr/bin/env python

"""Unittests for argument checks shared by tools."""

import unittest
import numpy as np
import pandas as pd
from dartqc.core.genlight import GenLight
from dartqc.core.schema import DataType, FilterMethod
from dartqc.core.exceptions import DartQCError
from dartqc.core.checks import (
    check_method, check_verbosity, check_datatype, check_loc_metrics,
)


class TestChecks(unittest.TestCase):

    def setUp(self):
        self.gl = GenLight(
            np.zeros((2, 2)),
            pd.DataFrame({"AlleleID": ["1|F", "2|F"]}),
            datatype="SilicoDArT",
        )

    def test_check_method_valid(self):
        check = check_method("best")
        self.assertTrue(check.ok)
        self.assertEqual(check.method, FilterMethod.BEST)
        self.assertIsNone(check.warning)
        self.assertEqual(check_method("random").method, FilterMethod.RANDOM)

    def test_check_method_invalid_falls_back_to_random(self):
        for method in ["worst", "", None, 3]:
            check = check_method(method)
            self.assertFalse(check.ok)
            self.assertEqual(check.method, FilterMethod.RANDOM)
            self.assertIn("set to 'random'", check.warning)

    def test_check_verbosity(self):
        self.assertEqual(check_verbosity(3), 3)
        self.assertEqual(check_verbosity("0"), 0)
        for bad in [-1, 6, "loud", None]:
            with self.assertRaises(DartQCError):
                check_verbosity(bad)

    def test_check_datatype(self):
        self.assertEqual(check_datatype(self.gl, verbose=0), DataType.SILICODART)
        with self.assertRaises(DartQCError):
            check_datatype(pd.DataFrame(), verbose=0)

    def test_check_loc_metrics(self):
        check_loc_metrics(self.gl, "AlleleID")
        with self.assertRaises(DartQCError):
            check_loc_metrics(self.gl, "AlleleID", "RepAvg")


if __name__ == "__main__":
    unittest.main()
