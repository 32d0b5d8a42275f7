"""Rounding helpers.

Scores and percentages round half away from zero (2.5 -> 3), not with
Python's banker's rounding, so results match the published examples.
"""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """Round ``value`` to ``digits`` decimal places, halves rounding up.

    Example:
        >>> round_half_up(2.5)
        3.0
        >>> round_half_up(33.35, 1)
        33.4
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_number(value: float) -> str:
    """Format a number without a trailing ``.0`` (80.0 -> "80", 33.3 -> "33.3")."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
