#!/usr/bin/env python

"""Unittests for the dartqc log sink.

- a log_file sink receives records bound with name="dartqc" only
- calling set_log_level again replaces the previous sink
"""

import unittest
import shutil
import tempfile
from pathlib import Path
from loguru import logger
from dartqc.core.logger_setup import set_log_level


class TestLoggerSetup(unittest.TestCase):

    def setUp(self):
        self.tmpdir = Path(tempfile.mkdtemp(prefix="dartqc-tests-"))
        self.log_file = self.tmpdir / "dartqc-log.txt"

    def tearDown(self):
        set_log_level("INFO")
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_file_sink_filters_on_bound_name(self):
        set_log_level("DEBUG", log_file=self.log_file)
        logger.bind(name="dartqc").info("kept message")
        logger.bind(name="other").info("other message")
        logger.info("unbound message")
        # removing the file sink closes and flushes it
        set_log_level("INFO")
        text = self.log_file.read_text()
        self.assertIn("kept message", text)
        self.assertNotIn("other message", text)
        self.assertNotIn("unbound message", text)

    def test_level_is_applied_to_file_sink(self):
        set_log_level("WARNING", log_file=self.log_file)
        logger.bind(name="dartqc").info("below level")
        logger.bind(name="dartqc").warning("at level")
        set_log_level("INFO")
        text = self.log_file.read_text()
        self.assertNotIn("below level", text)
        self.assertIn("at level", text)

    def test_new_sink_replaces_previous(self):
        set_log_level("DEBUG", log_file=self.log_file)
        second = self.tmpdir / "second.txt"
        set_log_level("DEBUG", log_file=second)
        logger.bind(name="dartqc").info("second only")
        set_log_level("INFO")
        self.assertNotIn("second only", self.log_file.read_text())
        self.assertIn("second only", second.read_text())


if __name__ == "__main__":
    unittest.main()
