#!/usr/bin/env python

"""Unittests for the GenLight container.

- construction converts NaN to missing and checks shapes
- calls other than 0, 1, 2 or 9 are rejected
- missing rate is exact on a hand-built matrix
- subset_loci moves matrix columns and metrics together
- with_history returns a new object and leaves the original as is
"""

import unittest
import numpy as np
import pandas as pd
from dartqc.core.genlight import GenLight, MISSING
from dartqc.core.schema import DataType, HistoryEntry
from dartqc.core.exceptions import DartQCError


class TestGenLight(unittest.TestCase):

    def setUp(self):
        self.genos = np.array([
            [0, 1, 2, 9],
            [9, 1, 0, 9],
            [2, 2, 0, 1],
        ], dtype=np.uint8)
        self.metrics = pd.DataFrame({
            "AlleleID": ["100|F|0-12:A>G", "100|F|0-30:C>T", "200|F|0-5:G>A", "300"],
            "RepAvg": [0.9, 0.8, 1.0, 0.95],
        })
        self.gl = GenLight(self.genos, self.metrics)

    def test_dimensions_and_defaults(self):
        self.assertEqual(self.gl.nind, 3)
        self.assertEqual(self.gl.nloc, 4)
        self.assertEqual(self.gl.ind_names, ["ind0", "ind1", "ind2"])
        self.assertEqual(self.gl.datatype, DataType.SNP)
        self.assertEqual(self.gl.history, ())
        self.assertEqual(self.gl.loc_names[0], "100|F|0-12:A>G")

    def test_datatype_from_string(self):
        gl = GenLight(self.genos, self.metrics, datatype="SilicoDArT")
        self.assertEqual(gl.datatype, DataType.SILICODART)

    def test_nan_calls_are_missing(self):
        genos = np.array([[0., np.nan], [1., 2.]])
        gl = GenLight(genos, self.metrics.iloc[:2])
        self.assertEqual(gl.genos.dtype, np.uint8)
        self.assertEqual(gl.genos[0, 1], MISSING)

    def test_shape_mismatch_raises(self):
        with self.assertRaises(DartQCError):
            GenLight(self.genos, self.metrics.iloc[:3])
        with self.assertRaises(DartQCError):
            GenLight(self.genos, self.metrics, ind_names=["a", "b"])
        with self.assertRaises(DartQCError):
            GenLight(np.zeros(4), self.metrics)

    def test_invalid_calls_raise(self):
        for bad in (-1, 3, 5, 255):
            genos = self.genos.astype(np.int64)
            genos[1, 2] = bad
            with self.assertRaises(DartQCError):
                GenLight(genos, self.metrics)
        with self.assertRaises(DartQCError):
            GenLight(np.array([[0., 1.5], [1., 2.]]), self.metrics.iloc[:2])

    def test_missing_rate_exact(self):
        # 3 missing cells out of 3 x 4
        rate = self.gl.missing_rate()
        self.assertAlmostEqual(rate, 3 / 12)
        self.assertTrue(0 <= rate <= 1)

    def test_missing_rate_empty(self):
        gl = GenLight(np.zeros((2, 0)), self.metrics.iloc[:0])
        self.assertEqual(gl.missing_rate(), 0.)

    def test_subset_loci_by_index_keeps_columns_and_rows_together(self):
        sub = self.gl.subset_loci([3, 0])
        self.assertEqual(sub.nloc, 2)
        self.assertEqual(sub.loc_metrics.shape[0], sub.genos.shape[1])
        self.assertEqual(sub.loc_names, ["300", "100|F|0-12:A>G"])
        np.testing.assert_array_equal(sub.genos[:, 0], self.genos[:, 3])
        np.testing.assert_array_equal(sub.genos[:, 1], self.genos[:, 0])
        self.assertEqual(list(sub.loc_metrics.index), [0, 1])

    def test_subset_loci_by_mask(self):
        sub = self.gl.subset_loci(np.array([True, False, True, False]))
        self.assertEqual(sub.loc_metrics.RepAvg.tolist(), [0.9, 1.0])
        with self.assertRaises(DartQCError):
            self.gl.subset_loci(np.array([True, False]))

    def test_subset_does_not_modify_original(self):
        sub = self.gl.subset_loci([1])
        sub.genos[0, 0] = 2
        self.assertEqual(self.gl.nloc, 4)
        self.assertEqual(self.gl.genos[0, 1], 1)

    def test_with_history_appends_to_copy(self):
        entry = HistoryEntry(function="filter_secondaries", params={"method": "best"})
        gl2 = self.gl.with_history(entry)
        self.assertEqual(len(gl2.history), 1)
        self.assertEqual(len(self.gl.history), 0)
        self.assertEqual(str(gl2.history[0]), "filter_secondaries(method='best')")

    def test_frozen(self):
        with self.assertRaises(AttributeError):
            self.gl.datatype = DataType.SILICODART


if __name__ == "__main__":
    unittest.main()
