"""Unit tests for the CSV report writer"""
import csv
import os
import tempfile
import unittest
from datetime import datetime, timezone

from buybox_scraper.models.product import ProductRecord, REPORT_FIELDS
from buybox_scraper.services.crawlers.product_data_crawler import build_product_record
from buybox_scraper.services.report_writer import CsvReportWriter, build_report_path

URL = "https://www.amazon.in/dp/B09G9BL5CP"


def read_rows(path):
    with open(path, newline="", encoding="utf-8-sig") as f:
        return list(csv.reader(f))


class TestCsvReportWriter(unittest.TestCase):
    """Test cases for CsvReportWriter"""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "nested", "report.csv")

    def tearDown(self):
        self.tmp.cleanup()

    def test_header_written_before_any_row(self):
        with CsvReportWriter(self.path):
            pass
        self.assertEqual(read_rows(self.path), [REPORT_FIELDS])

    def test_rows_are_flushed_as_written(self):
        record = build_product_record(URL, "B09G9BL5CP", URL, "B09G9BL5CP", {
            "title": 'Phone, 6.1" "Midnight"',
            "price": "₹1,299.00",
            "rating": "4.5",
            "review_count": "12,345 ratings",
            "coupon": "10%",
            "bank_discount": "₹0",
        })
        writer = CsvReportWriter(self.path)
        try:
            writer.write(record)
            # 关闭前即可读到
            rows = read_rows(self.path)
        finally:
            writer.close()

        self.assertEqual(len(rows), 2)
        row = dict(zip(rows[0], rows[1]))
        self.assertEqual(row["originalUrl"], URL)
        self.assertEqual(row["redirected"], "No")
        self.assertEqual(row["title"], 'Phone, 6.1" "Midnight"')
        self.assertEqual(row["buyBoxPrice"], "₹1,299.00")
        self.assertEqual(row["buyBoxPriceNumeric"], "1299")
        self.assertEqual(row["couponAmountNumeric"], "10")
        self.assertEqual(row["netEffectivePrice"], "₹1,289")
        self.assertEqual(row["netEffectivePriceNumeric"], "1289")
        self.assertEqual(writer.rows_written, 1)

    def test_failure_record_row(self):
        with CsvReportWriter(self.path) as writer:
            writer.write(ProductRecord.failed(URL, "B09G9BL5CP"))

        row = dict(zip(*read_rows(self.path)))
        self.assertEqual(row["finalUrl"], "SCRAPING_FAILED")
        self.assertEqual(row["redirected"], "Unknown")
        self.assertEqual(row["maxBankDiscount"], "₹0")
        self.assertEqual(row["netEffectivePriceNumeric"], "0")

    def test_fractional_amounts_kept(self):
        record = build_product_record(URL, "B09G9BL5CP", URL, "B09G9BL5CP", {
            "title": "", "price": "₹199.50", "rating": "", "review_count": "",
            "coupon": "", "bank_discount": "₹0",
        })
        with CsvReportWriter(self.path) as writer:
            writer.write(record)

        row = dict(zip(*read_rows(self.path)))
        self.assertEqual(row["buyBoxPriceNumeric"], "199.5")
        self.assertEqual(row["netEffectivePrice"], "₹199.5")


class TestBuildReportPath(unittest.TestCase):
    """Test cases for build_report_path"""

    def test_timestamped_name(self):
        now = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
        path = build_report_path("output", now=now)
        self.assertEqual(path.parent.name, "output")
        self.assertEqual(path.name, "amazon_products_2024-01-02T03-04-05-678Z.csv")


if __name__ == "__main__":
    unittest.main()
