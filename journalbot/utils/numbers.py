"""Numeric helpers shared by the scoring services."""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves away from zero for positives (2.5 → 3, 2.345 → 2.35).

    Python's built-in ``round`` uses banker's rounding, which would turn a
    score of 18.5 into 18.  The decimal is built from ``repr`` so that
    values such as ``2.675`` round the way they read.
    """
    try:
        quantum = Decimal(1).scaleb(-ndigits)
        return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return value


def percentage(part: float, whole: float) -> float:
    """``100 * part / whole``, or 0 when *whole* is zero."""
    if not whole:
        return 0.0
    return part / whole * 100


def coerce_rating(value: Any) -> float:
    """Return *value* as a finite float, or 0.0 for anything non-numeric."""
    if isinstance(value, bool):
        return 0.0
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(rating) or math.isinf(rating):
        return 0.0
    return rating
