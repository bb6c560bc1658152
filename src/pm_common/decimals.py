"""Exact-decimal helpers for ledger amounts and prices.

DAML Decimal (Numeric 10) values arrive from PQS as JSON strings. They stay
strings on the wire; comparisons go through Decimal. No float anywhere.
"""

import re
from decimal import Decimal

# DAML Numeric 10 text form: ASCII digits, optional sign, at most 10 places.
_DAML_DECIMAL_RE = re.compile(r"-?\d+(\.\d{1,10})?", re.ASCII)


def parse_decimal(value: str) -> Decimal:
    """Parse a DAML decimal string: '100.50' -> Decimal('100.50').

    Rejects exponents, underscores, a leading '+', non-ASCII digits,
    NaN/Infinity, surrounding whitespace and more than 10 decimal places.
    """
    if not isinstance(value, str) or not _DAML_DECIMAL_RE.fullmatch(value):
        raise ValueError(f"Not a DAML decimal string: {value!r}")
    return Decimal(value)


def validate_positive_decimal(value: str) -> str:
    """Return value unchanged if it is a strictly positive decimal string."""
    if parse_decimal(value) <= 0:
        raise ValueError(f"Must be greater than zero, got {value}")
    return value


def price_key(price: str) -> Decimal:
    """Sort key for price strings: numeric, not lexicographic."""
    return parse_decimal(price)
