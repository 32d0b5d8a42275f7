"""Utility functions for time handling and rounding."""

from .numbers import format_number, round_half_up
from .timestamps import age_in_days, ensure_utc, utc_now

__all__ = [
    # Timestamps
    "utc_now",
    "ensure_utc",
    "age_in_days",
    # Numbers
    "round_half_up",
    "format_number",
]
