"""
Tests for the process-wide log setup.

Run with:
    python -m pytest tests/test_logging_config.py -v
"""

import logging
import os
import tempfile
import unittest

from logging_config import configure_logging, get_logger


class TestConfigureLogging(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        # Reconfiguring closes the file handler before the directory goes
        self.addCleanup(configure_logging, "INFO")

    def test_reconfigure_with_level_name_and_file(self):
        path = os.path.join(self._tmp.name, "tracker.log")
        configure_logging("WARNING", log_file=path)

        logger = get_logger("orbit_tracker.cache")
        logger.info("Using cached element sets for gps-ops")
        logger.warning("Refetch of weather failed, keeping old data")
        for handler in logging.getLogger().handlers:
            handler.flush()

        self.assertEqual(logging.getLogger().level, logging.WARNING)
        with open(path) as f:
            contents = f.read()
        self.assertIn("orbit_tracker.cache - WARNING - Refetch of weather failed", contents)
        self.assertNotIn("gps-ops", contents)


if __name__ == "__main__":
    unittest.main()
