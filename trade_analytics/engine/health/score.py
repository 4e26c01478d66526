"""Trading health score.

Aggregates risk metrics and basic trade statistics into a single 0-100
score with a letter grade. Each component is normalized to 0-100 by
affine-mapping its metric over a configured domain and clamping, then the
components are combined with fixed weights:

    Overall = round(Σ(score_i × weight_i))

Components (default weights):
    Risk-Adjusted Returns  20%  sharpe ratio over [-1, 3]
    Drawdown Control       20%  max drawdown % over [50, 0]
    Win Rate               15%  win rate % over [20, 70]
    Profit Factor          15%  profit factor over [0.5, 3]
    Consistency            15%  streak share blended with recovery factor [-1, 5]
    Sample Size            15%  closed trades over [5, 100]
"""

import math

from trade_analytics.config import AnalyticsConfig, GradeBand, HealthScoreConfig
from trade_analytics.engine.models.enums import HealthGrade
from trade_analytics.engine.models.result import (
    AdvancedRiskMetrics,
    HealthBreakdownItem,
    TradingHealthScore,
)
from trade_analytics.engine.numeric import clamp, finite_or_zero, map_range, safe_divide


def calc_consistency_score(
    win_streak_max: int,
    loss_streak_max: int,
    recovery_factor: float,
    recovery_domain: tuple[float, float] = (-1.0, 5.0),
    streak_share: float = 0.5,
) -> float:
    """Blend the win-streak share with the mapped recovery factor.

    Streak share is win_streak / (win_streak + loss_streak), 0.5 when both
    streaks are zero.

    Returns:
        Score in [0, 100].
    """
    total = win_streak_max + loss_streak_max
    streak_ratio = safe_divide(win_streak_max, total, fallback=0.5)
    recovery_score = map_range(recovery_factor, *recovery_domain)
    score = streak_share * streak_ratio * 100 + (1 - streak_share) * recovery_score
    return clamp(score, 0.0, 100.0)


def get_grade_band(overall: float, bands: list[GradeBand]) -> GradeBand:
    """Return the first band (highest first) whose minimum the score reaches."""
    for band in bands:
        if overall >= band.min_score:
            return band
    return bands[-1]


def calculate_trading_health_score(
    metrics: AdvancedRiskMetrics,
    win_rate_percent: float,
    total_trades: int,
    profit_factor: float,
    config: AnalyticsConfig | HealthScoreConfig | None = None,
) -> TradingHealthScore:
    """Compute the composite trading health score.

    Total function: any numeric input, including negative or infinite profit
    factor, is clamped into a valid component score.

    Args:
        metrics: Output of calculate_advanced_risk_metrics.
        win_rate_percent: Win rate in percent (0-100).
        total_trades: Number of closed trades.
        profit_factor: Gross profit / gross loss.
        config: AnalyticsConfig or HealthScoreConfig; defaults when omitted.

    Returns:
        TradingHealthScore with six breakdown items.
    """
    cfg = _resolve_health_config(config)

    breakdown = [
        HealthBreakdownItem(
            name="Risk-Adjusted Returns",
            score=map_range(metrics.sharpe_ratio, *cfg.risk_adjusted.domain),
            weight=cfg.risk_adjusted.weight,
            value=finite_or_zero(metrics.sharpe_ratio),
            description="Sharpe ratio of per-trade returns",
        ),
        HealthBreakdownItem(
            name="Drawdown Control",
            score=map_range(metrics.max_drawdown_percent, *cfg.drawdown.domain),
            weight=cfg.drawdown.weight,
            value=finite_or_zero(metrics.max_drawdown_percent),
            description="Maximum peak-to-trough decline (%)",
        ),
        HealthBreakdownItem(
            name="Win Rate",
            score=map_range(win_rate_percent, *cfg.win_rate.domain),
            weight=cfg.win_rate.weight,
            value=finite_or_zero(win_rate_percent),
            description="Share of winning trades (%)",
        ),
        HealthBreakdownItem(
            name="Profit Factor",
            score=map_range(profit_factor, *cfg.profit_factor.domain),
            weight=cfg.profit_factor.weight,
            # inf is reported as the top of the scoring domain
            value=profit_factor if math.isfinite(profit_factor) else (
                max(cfg.profit_factor.domain) if profit_factor > 0 else 0.0
            ),
            description="Gross profit / gross loss",
        ),
        HealthBreakdownItem(
            name="Consistency",
            score=calc_consistency_score(
                metrics.win_streak_max,
                metrics.loss_streak_max,
                metrics.recovery_factor,
                cfg.consistency.domain,
                cfg.consistency_streak_share,
            ),
            weight=cfg.consistency.weight,
            value=finite_or_zero(metrics.recovery_factor),
            description="Win/loss streak balance and drawdown recovery",
        ),
        HealthBreakdownItem(
            name="Sample Size",
            score=map_range(total_trades, *cfg.sample_size.domain),
            weight=cfg.sample_size.weight,
            value=float(total_trades),
            description="Closed trades behind the statistics",
        ),
    ]

    weighted = math.fsum(item.score * item.weight for item in breakdown)
    # half-up rounding
    overall = int(clamp(math.floor(weighted + 0.5), 0, 100))
    band = get_grade_band(overall, cfg.grade_bands)

    return TradingHealthScore(
        overall=overall,
        grade=HealthGrade(band.grade),
        label=band.label,
        color=band.color,
        breakdown=breakdown,
    )


def _resolve_health_config(
    config: AnalyticsConfig | HealthScoreConfig | None,
) -> HealthScoreConfig:
    if config is None:
        return HealthScoreConfig()
    if isinstance(config, AnalyticsConfig):
        return config.health
    return config
