"""
Exact conversion of decimal literals to rationals.

A literal "I.F" is the integer IF scaled down by 10**len(F), so the value
is built from integers only and never passes through a float.

Author: xwest
"""

import re
from fractions import Fraction
from typing import Optional

from ..lexer.tokens import SourceLocation
from .errors import create_number_conversion_error

# Digits with an optional fractional part. \d matches any Unicode decimal
# digit, the same class the lexer uses for digit runs.
DECIMAL_LITERAL = re.compile(r'(?P<integral>\d+)(?:\.(?P<fractional>\d+))?')


def decimal_to_fraction(text: str, location: Optional[SourceLocation] = None) -> Fraction:
    """
    Convert decimal literal text to an exact Fraction.

    Args:
        text: Literal such as "10", "0.5" or "2.50"
        location: Where the literal starts, for error reporting

    Returns:
        The exact value, in lowest terms ("2.50" -> Fraction(5, 2))

    Raises:
        NumberConversionError: If text is not digits with an optional
            single '.' followed by digits
    """
    if not isinstance(text, str):
        raise create_number_conversion_error(repr(text), "Numeric literals must be text.", location)

    match = DECIMAL_LITERAL.fullmatch(text)
    if match is None:
        raise create_number_conversion_error(
            text,
            "Expected digits, optionally followed by '.' and more digits.",
            location
        )

    integral = match.group('integral')
    fractional = match.group('fractional') or ''

    try:
        numerator = int(integral + fractional)
    except ValueError:
        raise create_number_conversion_error(text, "Digits could not be read as an integer.", location)

    return Fraction(numerator, 10 ** len(fractional))
