"""Rounding helpers shared by the analytics builders."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's round() uses banker's rounding (round(2.5) == 2); dashboard
    figures round 2.5 up to 3.
    """
    return int(math.floor(value + 0.5))


def percentage(part: float, whole: float) -> int:
    """Integer percentage of part over whole, 0 when whole is 0."""
    if not whole:
        return 0
    return round_half_up(part / whole * 100)
