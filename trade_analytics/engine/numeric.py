"""Numeric helpers shared by the engine.

Every ratio in the engine goes through ``safe_divide`` so degenerate input
(zero variance, no losses, no drawdown) yields a defined fallback instead
of NaN or Infinity.
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

# Wide enough for any finite float at presentation precision
_ROUNDING_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def safe_divide(numerator: float, denominator: float, fallback: float = 0.0) -> float:
    """Divide, returning ``fallback`` when the result would not be finite.

    Args:
        numerator: Dividend.
        denominator: Divisor.
        fallback: Value returned for a zero/non-finite divisor or non-finite result.

    Example:
        >>> safe_divide(1.0, 0.0)
        0.0
        >>> safe_divide(6.0, 3.0)
        2.0
    """
    if denominator == 0 or not math.isfinite(denominator) or not math.isfinite(numerator):
        return fallback
    result = numerator / denominator
    if not math.isfinite(result):
        return fallback
    return result


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value to [lower, upper]; NaN maps to lower."""
    if math.isnan(value):
        return lower
    return max(lower, min(upper, value))


def map_range(
    value: float,
    in_min: float,
    in_max: float,
    out_min: float = 0.0,
    out_max: float = 100.0,
) -> float:
    """Affine-map value from [in_min, in_max] onto [out_min, out_max], then clamp.

    The input range may be inverted (in_min > in_max) to score "lower is better"
    metrics. Infinite inputs land on the matching end of the output range.

    Example:
        >>> map_range(1.0, -1, 3)
        50.0
        >>> map_range(60, 50, 0)  # inverted: 60% drawdown is worse than 50%
        0.0
    """
    lo, hi = min(out_min, out_max), max(out_min, out_max)
    if math.isnan(value):
        return lo
    if math.isinf(value):
        rising = (in_max > in_min) == (out_max > out_min)
        return hi if (value > 0) == rising else lo

    mapped = out_min + safe_divide(value - in_min, in_max - in_min) * (out_max - out_min)
    return clamp(mapped, lo, hi)


def finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def round_to(value: float, digits: int = 2) -> float:
    """Round half away from zero for presentation; non-finite values become 0.

    Ties are decided on the exact binary value, so ``round_to(2.25, 1)`` is
    2.3 while ``round_to(2.675, 2)`` stays 2.67.
    """
    exact = Decimal(finite_or_zero(value))
    return float(exact.quantize(Decimal(1).scaleb(-digits), context=_ROUNDING_CONTEXT))
