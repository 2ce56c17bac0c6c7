"""Unit tests for text normalization helpers"""
import unittest

from buybox_scraper.services.extractors.field_normalizer import (
    format_currency,
    net_price,
    to_currency,
    to_number,
    to_percent,
    to_rating,
)


class TestToNumber(unittest.TestCase):
    """Test cases for to_number"""

    def test_empty_and_missing(self):
        self.assertEqual(to_number(""), 0)
        self.assertEqual(to_number(None), 0)

    def test_currency_with_separators(self):
        self.assertEqual(to_number("₹1,299.00"), 1299)
        self.assertEqual(to_number("₹12,34,567"), 1234567)

    def test_percent_digits(self):
        self.assertEqual(to_number("10%"), 10)

    def test_first_numeral_wins(self):
        self.assertEqual(to_number("Save 50 on 2 items"), 50)

    def test_no_digits(self):
        self.assertEqual(to_number("currently unavailable"), 0)

    def test_never_negative(self):
        for text in ["-50", "₹-1,299", "−10", "abc-1.5"]:
            self.assertGreaterEqual(to_number(text), 0)


class TestToCurrency(unittest.TestCase):
    """Test cases for to_currency"""

    def test_marker_and_amount(self):
        self.assertEqual(to_currency("₹1,299.00"), "₹1,299.00")

    def test_whitespace_after_marker_dropped(self):
        self.assertEqual(to_currency("Price: ₹ 1,299"), "₹1,299")

    def test_amount_without_marker(self):
        self.assertEqual(to_currency("1,299."), "")

    def test_empty(self):
        self.assertEqual(to_currency(""), "")
        self.assertEqual(to_currency(None), "")


class TestToRating(unittest.TestCase):
    """Test cases for to_rating and to_percent"""

    def test_rating(self):
        self.assertEqual(to_rating("4.5 out of 5 stars"), "4.5")

    def test_rating_absent(self):
        self.assertEqual(to_rating("No ratings yet"), "")
        self.assertEqual(to_rating(None), "")

    def test_percent(self):
        self.assertEqual(to_percent("Apply 10% coupon"), "10%")
        self.assertEqual(to_percent("Apply coupon"), "")


class TestFormatCurrency(unittest.TestCase):
    """Test cases for format_currency"""

    def test_small_amounts(self):
        self.assertEqual(format_currency(0), "₹0")
        self.assertEqual(format_currency(10), "₹10")
        self.assertEqual(format_currency(1289), "₹1,289")

    def test_indian_grouping(self):
        self.assertEqual(format_currency(123456), "₹1,23,456")
        self.assertEqual(format_currency(1234567), "₹12,34,567")

    def test_fraction_digits(self):
        self.assertEqual(format_currency(1289.5), "₹1,289.5")
        self.assertEqual(format_currency(1199.99), "₹1,199.99")
        self.assertEqual(format_currency(1299.0), "₹1,299")


class TestNetPrice(unittest.TestCase):
    """Test cases for net_price"""

    def test_subtracts_discounts(self):
        self.assertEqual(net_price(1299, 10, 0), 1289)

    def test_clamped_at_zero(self):
        self.assertEqual(net_price(1299, 100, 1300), 0)

    def test_no_price(self):
        self.assertEqual(net_price(0, 100, 0), 0)


if __name__ == "__main__":
    unittest.main()
