"""Unit tests for configuration and URL loading"""
import os
import tempfile
import unittest

from buybox_scraper.config import Config
from buybox_scraper.utils.url_loader import DEFAULT_URLS, load_urls


class TestConfig(unittest.TestCase):
    """Test cases for Config"""

    def test_instance_overrides_are_isolated(self):
        first = Config(MAX_RETRIES=5)
        second = Config()
        self.assertEqual(first.MAX_RETRIES, 5)
        self.assertEqual(second.MAX_RETRIES, Config.MAX_RETRIES)
        self.assertNotIn("MAX_RETRIES", vars(second))

    def test_unknown_key_rejected(self):
        with self.assertRaises(AttributeError):
            Config(MAX_RETRY=1)

    def test_with_overrides_ignores_none(self):
        base = Config(TIMEOUT=1000, HEADLESS=True)
        derived = base.with_overrides(TIMEOUT=None, HEADLESS=False, OUTPUT_DIR="reports")
        self.assertEqual(derived.TIMEOUT, 1000)
        self.assertFalse(derived.HEADLESS)
        self.assertEqual(derived.OUTPUT_DIR, "reports")
        self.assertTrue(base.HEADLESS)

    def test_log_dir_is_relative_to_working_directory(self):
        self.assertEqual(Config.LOG_DIR, os.getenv("LOG_DIR", "logs"))
        if "LOG_DIR" not in os.environ:
            self.assertFalse(os.path.isabs(Config().LOG_DIR))

    def test_blocked_resource_types_default(self):
        for resource_type in ("image", "font", "media", "stylesheet"):
            self.assertIn(resource_type, Config().BLOCKED_RESOURCE_TYPES)


class TestLoadUrls(unittest.TestCase):
    """Test cases for load_urls"""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def test_reads_non_blank_lines_in_order(self):
        path = os.path.join(self.tmp.name, "urls.txt")
        with open(path, "w", encoding="utf-8") as f:
            f.write("https://a/dp/B09G9BL5CP\n\n  https://b/dp/B0BDJ6ZMCC  \n   \nhttps://a/dp/B09G9BL5CP\n")

        self.assertEqual(load_urls(path), [
            "https://a/dp/B09G9BL5CP",
            "https://b/dp/B0BDJ6ZMCC",
            "https://a/dp/B09G9BL5CP",
        ])

    def test_missing_file_uses_fallback(self):
        missing = os.path.join(self.tmp.name, "missing.txt")
        self.assertEqual(load_urls(missing, fallback=["u1"]), ["u1"])
        self.assertEqual(load_urls(missing), DEFAULT_URLS)

    def test_empty_file(self):
        path = os.path.join(self.tmp.name, "urls.txt")
        open(path, "w").close()
        self.assertEqual(load_urls(path), [])


if __name__ == "__main__":
    unittest.main()
