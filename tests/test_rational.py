"""
Tests for exact decimal to rational conversion.

Author: xwest
"""

import os
import sys
import unittest
from fractions import Fraction

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from mathval.parser.rational import decimal_to_fraction
from mathval.parser.errors import NumberConversionError, ErrorKind
from mathval.lexer.tokens import SourceLocation


class TestDecimalToFraction(unittest.TestCase):
    """decimal_to_fraction never rounds."""

    def test_integers(self):
        self.assertEqual(decimal_to_fraction("10"), Fraction(10, 1))
        self.assertEqual(decimal_to_fraction("0"), Fraction(0))
        self.assertEqual(decimal_to_fraction("007"), Fraction(7))

    def test_decimals(self):
        self.assertEqual(decimal_to_fraction("0.5"), Fraction(1, 2))
        self.assertEqual(decimal_to_fraction("2.5"), Fraction(5, 2))
        self.assertEqual(decimal_to_fraction("2.50"), Fraction(5, 2))
        self.assertEqual(decimal_to_fraction("0.125"), Fraction(1, 8))

    def test_no_float_rounding(self):
        value = decimal_to_fraction("0.1")
        self.assertEqual(value, Fraction(1, 10))
        # 0.1 as a float is not one tenth
        self.assertNotEqual(value, 0.1)
        self.assertEqual(decimal_to_fraction("0.1") + decimal_to_fraction("0.2"),
                         decimal_to_fraction("0.3"))

    def test_large_values(self):
        text = "123456789012345678901234567890.000000000000000000001"
        value = decimal_to_fraction(text)
        self.assertEqual(value.denominator, 10 ** 21)
        self.assertEqual(value.numerator, 123456789012345678901234567890 * 10 ** 21 + 1)

    def test_unicode_digits(self):
        self.assertEqual(decimal_to_fraction("٣.٥"), Fraction(7, 2))

    def test_result_type(self):
        self.assertIsInstance(decimal_to_fraction("3"), Fraction)

    def test_rejects_malformed_text(self):
        for text in ["", "1.", ".5", "1.2.3", "abc", "1e5", "-1", " 1", "1 ", "1,5"]:
            with self.subTest(text=text):
                with self.assertRaises(NumberConversionError) as ctx:
                    decimal_to_fraction(text)
                self.assertEqual(ctx.exception.kind, ErrorKind.NUMERIC_CONVERSION)
                self.assertEqual(ctx.exception.code, "P013")

    def test_rejects_non_text(self):
        with self.assertRaises(NumberConversionError):
            decimal_to_fraction(10)

    def test_error_location(self):
        location = SourceLocation("<test>", 1, 4, 3)
        with self.assertRaises(NumberConversionError) as ctx:
            decimal_to_fraction("1..2", location)
        self.assertEqual(ctx.exception.location, location)
        self.assertIn("<test>:1:4", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
