"""Numeric rounding and display helpers."""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (2.5 -> 3, 1.25 -> 1.3 at one digit).

    Python's built-in ``round`` uses banker's rounding, which would shift
    projected workout dates for averages like 2.5 days.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def format_number(value: float) -> str:
    """Format with thousands separators and up to three decimals.

    8450 -> "8,450", 1234.5 -> "1,234.5", 0 -> "0".
    """
    rounded = round_half_up(value, 3)
    if rounded == int(rounded):
        return f"{int(rounded):,}"
    return f"{rounded:,.3f}".rstrip("0").rstrip(".")
