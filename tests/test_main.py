"""Unit tests for the command-line entry point"""
import os
import tempfile
import unittest
from unittest.mock import patch

from buybox_scraper.config import Config
from buybox_scraper.main import build_parser, run, settings_from_args
from buybox_scraper.models.crawl_task import RunStatistics


class TestSettingsFromArgs(unittest.TestCase):
    """Test cases for settings_from_args"""

    def test_defaults_keep_base_values(self):
        base = Config(MAX_RETRIES=2, TIMEOUT=30000, HEADLESS=True)
        settings = settings_from_args(build_parser().parse_args([]), base)
        self.assertEqual(settings.MAX_RETRIES, 2)
        self.assertEqual(settings.TIMEOUT, 30000)
        self.assertTrue(settings.HEADLESS)

    def test_flags_override(self):
        args = build_parser().parse_args([
            "-u", "list.txt", "-o", "reports", "--max-retries", "0", "--timeout", "5000", "--headful",
        ])
        settings = settings_from_args(args, Config())
        self.assertEqual(settings.URLS_FILE, "list.txt")
        self.assertEqual(settings.OUTPUT_DIR, "reports")
        self.assertEqual(settings.MAX_RETRIES, 0)
        self.assertEqual(settings.TIMEOUT, 5000)
        self.assertFalse(settings.HEADLESS)

    def test_negative_retries_rejected(self):
        args = build_parser().parse_args(["--max-retries", "-1"])
        with self.assertRaises(ValueError):
            settings_from_args(args, Config())


class TestRun(unittest.TestCase):
    """Test cases for run"""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.settings = Config(OUTPUT_DIR=os.path.join(self.tmp.name, "output"))

    def tearDown(self):
        self.tmp.cleanup()

    @patch("buybox_scraper.main.load_urls", return_value=[])
    def test_nothing_to_scrape(self, mock_load):
        self.assertEqual(run(self.settings), 1)
        self.assertFalse(os.path.exists(self.settings.OUTPUT_DIR))

    @patch("buybox_scraper.main.BatchManager")
    @patch("buybox_scraper.main.load_urls", return_value=["u1", "u2"])
    def test_runs_batch_into_report(self, mock_load, mock_batch_manager):
        mock_batch_manager.return_value.run_batch.return_value = RunStatistics(total=2, success=2)

        self.assertEqual(run(self.settings), 0)

        urls, writer = mock_batch_manager.return_value.run_batch.call_args[0]
        self.assertEqual(urls, ["u1", "u2"])
        self.assertTrue(str(writer.path).startswith(self.settings.OUTPUT_DIR))
        self.assertTrue(os.path.exists(writer.path))


if __name__ == "__main__":
    unittest.main()
