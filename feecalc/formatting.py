"""
Display formatting and lenient number parsing for form input and exports.
"""

import re

from .config import settings

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")


def format_currency(amount) -> str:
    """Format a number as R X,XXX.XX"""
    try:
        return f"{settings.CURRENCY_SYMBOL} {float(amount):,.2f}"
    except (ValueError, TypeError):
        return f"{settings.CURRENCY_SYMBOL} 0.00"


def format_percent(value) -> str:
    """Up to 2 decimals, trailing zeros dropped: 10 -> '10%', 12.345 -> '12.35%'."""
    try:
        text = f"{float(value):,.2f}"
    except (ValueError, TypeError):
        return "0%"
    text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return f"{text}%"


def format_factor(value) -> str:
    """Adjustment multiplier to 3 decimals."""
    try:
        return f"{float(value):.3f}"
    except (ValueError, TypeError):
        return "1.000"


def parse_number(value, default: float = 0.0) -> float:
    """
    Parse a loosely formatted number from user input.
    Strips currency symbols, spaces and thousands separators: 'R 25 000 000' -> 25000000.0
    """
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value)
    normalized = _NON_NUMERIC.sub("", str(value))
    if not normalized:
        return default
    try:
        return float(normalized)
    except ValueError:
        return default
