"""Clamping for caller-supplied counts (import limit, topK)."""

import math
from typing import Any


def clamp_count(value: Any, default: int, lower: int, upper: int) -> int:
    """
    Coerce ``value`` to an int within ``[lower, upper]``.

    Missing, zero, boolean or non-numeric values fall back to ``default``.
    Fractions are truncated after clamping.
    """
    if value is None or isinstance(value, bool) or value == "" or value == 0:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(max(lower, min(upper, number)))
