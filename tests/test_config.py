"""
Tests for runtime configuration.

Run with:
    python -m pytest tests/test_config.py -v
"""

import unittest

from config import CELESTRAK_GP_URL, TrackerConfig


class TestTrackerConfig(unittest.TestCase):

    def test_defaults(self):
        config = TrackerConfig({})
        self.assertEqual(config.celestrak_gp_url, CELESTRAK_GP_URL)
        self.assertEqual(config.cache_dir, "cache")
        self.assertEqual(config.cache_max_age, 7200.0)
        self.assertEqual(config.http_timeout, 30.0)
        self.assertIsNone(config.redis_url)
        self.assertEqual(config.coordinate_policy, "clamp")
        self.assertEqual(config.log_level, "INFO")

    def test_environment_overrides(self):
        config = TrackerConfig({
            "CELESTRAK_GP_URL": "https://mirror.test/gp.php",
            "ELEMENT_CACHE_DIR": "/var/cache/elements",
            "ELEMENT_CACHE_MAX_AGE": "600",
            "HTTP_TIMEOUT": "2.5",
            "REDIS_URL": "redis://cache:6379/1",
            "COORDINATE_POLICY": "ERROR",
            "LOG_LEVEL": "debug",
        })
        self.assertEqual(config.celestrak_gp_url, "https://mirror.test/gp.php")
        self.assertEqual(config.cache_dir, "/var/cache/elements")
        self.assertEqual(config.cache_max_age, 600.0)
        self.assertEqual(config.http_timeout, 2.5)
        self.assertEqual(config.redis_url, "redis://cache:6379/1")
        self.assertEqual(config.coordinate_policy, "error")
        self.assertEqual(config.log_level, "DEBUG")

    def test_empty_redis_url_means_file_store(self):
        self.assertIsNone(TrackerConfig({"REDIS_URL": ""}).redis_url)

    def test_invalid_policy(self):
        with self.assertRaises(ValueError):
            TrackerConfig({"COORDINATE_POLICY": "wrap"})


if __name__ == "__main__":
    unittest.main()
