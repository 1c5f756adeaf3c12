"""
Unit tests for logging utilities.
"""

import logging
import os
import tempfile
import unittest

from log_utils import setup_logging


class TestLogUtils(unittest.TestCase):
    """Test logging utilities."""

    def setUp(self):
        self.root = logging.getLogger()
        self.saved_handlers = list(self.root.handlers)
        self.saved_level = self.root.level

    def tearDown(self):
        for handler in self.root.handlers:
            if handler not in self.saved_handlers:
                handler.close()
        self.root.handlers = self.saved_handlers
        self.root.setLevel(self.saved_level)

    def test_setup_logging_default(self):
        """Test default logging setup."""
        logger = setup_logging()
        self.assertIsInstance(logger, logging.Logger)
        self.assertEqual(self.root.level, logging.INFO)
        self.assertEqual(len(self.root.handlers), 2)

    def test_setup_logging_verbose(self):
        """Test verbose logging setup."""
        setup_logging(verbose=True)
        self.assertEqual(self.root.level, logging.DEBUG)

    def test_errors_go_to_stderr_only(self):
        setup_logging()
        stdout_handler, stderr_handler = self.root.handlers
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)
        info = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)

        self.assertFalse(stdout_handler.filter(record))
        self.assertTrue(stdout_handler.filter(info))
        self.assertEqual(stderr_handler.level, logging.WARNING)

    def test_log_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "deploy.log")
            setup_logging(log_file=path)
            logging.getLogger("test").info("written to file")
            for handler in self.root.handlers:
                handler.flush()
            with open(path) as f:
                self.assertIn("written to file", f.read())
            for handler in self.root.handlers:
                handler.close()


if __name__ == "__main__":
    unittest.main()
