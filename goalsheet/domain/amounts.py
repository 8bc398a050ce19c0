"""Pure functions for amount entry, parsing and display.

This module contains the functional core for numeric fields:
- No I/O operations
- No failure path: malformed input degrades to "" or 0
- Easy to test

Amounts are kept as canonical decimal strings while being edited and only
turned into floats when aggregated.
"""

import math
import re

from goalsheet.domain.models import DecimalText

_NON_NUMERIC = re.compile(r"[^0-9.]")

# Longest leading decimal literal, the same prefix a lenient parseFloat accepts
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

CURRENCY_SYMBOL = "£"


def normalize_amount(raw: str) -> DecimalText:
    """Sanitize free-text numeric entry into a canonical decimal string.

    Args:
        raw: Text as typed by the user.

    Returns:
        Digits with at most one "." and at most 2 fractional digits. May be
        empty or end with a bare "." (e.g. "12.") while the user is typing.
    """
    cleaned = _NON_NUMERIC.sub("", raw)
    parts = cleaned.split(".")
    if len(parts) == 1:
        return DecimalText(cleaned)

    # Anything from the second "." onwards is dropped, fraction is truncated
    return DecimalText(f"{parts[0]}.{parts[1][:2]}")


def try_parse_amount(text: str) -> float | None:
    """Parse the leading number of a string.

    Args:
        text: Text to parse.

    Returns:
        The parsed value, or None if the text does not start with a number.
    """
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    return float(match.group(1))


def parse_amount(text: str) -> float:
    """Parse an amount leniently, treating anything unparsable as 0.

    Args:
        text: Amount text (normally a canonical decimal string).

    Returns:
        Parsed value, or 0.0 for empty or malformed text.
    """
    value = try_parse_amount(text)
    if value is None or math.isnan(value):
        return 0.0
    return value


def format_currency(value: str | float) -> str:
    """Format an amount for display in pounds sterling.

    Args:
        value: Amount as a number or as text.

    Returns:
        Amount like "£1,234.50" or "-£12.00", or "" if value is not a number.
    """
    number = try_parse_amount(value) if isinstance(value, str) else float(value)
    if number is None or not math.isfinite(number):
        return ""

    text = f"{abs(number):,.2f}"
    if number < 0 and text != "0.00":
        return f"-{CURRENCY_SYMBOL}{text}"
    return f"{CURRENCY_SYMBOL}{text}"
