"""
Display formatting for dashboard values.

Presentation only: the metrics engine returns raw floats (including infinity)
and these helpers turn them into the strings shown in tables and the CLI.
Currency uses Indian digit grouping (lakh/crore) and no decimals.
"""

import math
from decimal import ROUND_HALF_UP, Decimal

CURRENCY_SYMBOL = "₹"
INFINITY_SYMBOL = "∞"


def _group_indian(whole: int) -> str:
    """Group digits as 12,34,56,789."""
    digits = str(whole)
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(value: float, show_sign: bool = False) -> str:
    """
    Format a rupee amount rounded to whole rupees.

    Example:
        format_currency(1234567)          -> "₹12,34,567"
        format_currency(-500)             -> "-₹500"
        format_currency(250, show_sign=True) -> "+₹250"
    """
    whole = int(Decimal(str(abs(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    formatted = f"{CURRENCY_SYMBOL}{_group_indian(whole)}"
    if show_sign and value != 0:
        return f"+{formatted}" if value > 0 else f"-{formatted}"
    return f"-{formatted}" if value < 0 else formatted


def format_percent(value: float, show_sign: bool = False) -> str:
    """Percentage with two decimals, e.g. "12.50%" or "+12.50%"."""
    formatted = f"{abs(value):.2f}%"
    if show_sign and value != 0:
        return f"+{formatted}" if value > 0 else f"-{formatted}"
    return f"-{formatted}" if value < 0 else formatted


def format_ratio(value: float) -> str:
    """Two-decimal ratio; unbounded ratios render as the infinity symbol."""
    if not math.isfinite(value):
        return INFINITY_SYMBOL
    return f"{value:.2f}"


def format_days(value: int) -> str:
    return f"{value} {'day' if value == 1 else 'days'}"


def format_streak(value: int) -> str:
    """Signed streak: "+3" for three wins, "-2" for two losses, "0" otherwise."""
    if value == 0:
        return "0"
    return f"+{value}" if value > 0 else str(value)
