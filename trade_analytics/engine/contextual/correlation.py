"""Condition/outcome correlation."""

import logging

import numpy as np

from trade_analytics.config import ContextualConfig
from trade_analytics.engine.models.enums import CorrelationDirection, CorrelationStrength
from trade_analytics.engine.models.result import CorrelationResult
from trade_analytics.engine.numeric import clamp, safe_divide

logger = logging.getLogger(__name__)


def calc_pearson_correlation(
    xs: list[float],
    ys: list[float],
    min_samples: int = 20,
) -> float | None:
    """Pearson correlation coefficient of paired samples.

    Args:
        xs: Condition values (e.g. Fear & Greed index).
        ys: Outcome values (1/0 win flag, or P&L).
        min_samples: Minimum number of pairs for a meaningful coefficient.

    Returns:
        Coefficient clamped to [-1, 1]; 0 when either side has no variance;
        None when there are fewer than ``min_samples`` pairs.
    """
    n = min(len(xs), len(ys))
    if n < max(2, min_samples):
        return None

    x = np.asarray(xs[:n], dtype=float)
    y = np.asarray(ys[:n], dtype=float)
    dx = x - x.mean()
    dy = y - y.mean()

    numerator = float(np.sum(dx * dy))
    denominator = float(np.sqrt(np.sum(dx**2) * np.sum(dy**2)))
    return clamp(safe_divide(numerator, denominator), -1.0, 1.0)


def classify_correlation(
    value: float | None,
    config: ContextualConfig | None = None,
) -> tuple[CorrelationStrength, CorrelationDirection]:
    """Strength and direction buckets of a coefficient.

    |r| < 0.2 weak, |r| < 0.5 moderate, otherwise strong.
    """
    if value is None:
        return CorrelationStrength.INSUFFICIENT_DATA, CorrelationDirection.NONE

    cfg = config or ContextualConfig()
    magnitude = abs(value)
    if magnitude < cfg.weak_correlation:
        strength = CorrelationStrength.WEAK
    elif magnitude < cfg.moderate_correlation:
        strength = CorrelationStrength.MODERATE
    else:
        strength = CorrelationStrength.STRONG

    if value > 0:
        direction = CorrelationDirection.POSITIVE
    elif value < 0:
        direction = CorrelationDirection.NEGATIVE
    else:
        direction = CorrelationDirection.NONE
    return strength, direction


def build_correlation(
    name: str,
    pairs: list[tuple[float, float]],
    config: ContextualConfig | None = None,
) -> CorrelationResult:
    """Correlate (condition, outcome) pairs into a classified result."""
    cfg = config or ContextualConfig()
    xs = [p[0] for p in pairs]
    ys = [p[1] for p in pairs]

    value = calc_pearson_correlation(xs, ys, cfg.min_trades_for_correlation)
    if value is None:
        logger.debug(
            f"{name}: {len(pairs)} samples, need {cfg.min_trades_for_correlation} for correlation"
        )
    strength, direction = classify_correlation(value, cfg)

    return CorrelationResult(
        name=name,
        value=round(value, 4) if value is not None else None,
        sample_size=len(pairs),
        strength=strength,
        direction=direction,
    )
