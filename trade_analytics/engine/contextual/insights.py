"""Rule-based insights from contextual segment aggregates.

Rules:
- Fear vs Greed: combined fear zones against combined greed zones
- Extreme Fear / Extreme Greed: poor win rate warnings
- High vs Low volatility win rate gap
- Event day vs normal day win rate and average P&L
- Best segment per dimension (only when several buckets have trades)
"""

from enum import Enum

from trade_analytics.config import ContextualConfig
from trade_analytics.engine.contextual.classify import SEGMENT_LABELS
from trade_analytics.engine.contextual.segmentation import (
    combine_segments,
    count_active_segments,
    find_best_segment,
)
from trade_analytics.engine.models.enums import (
    EventProximity,
    FearGreedZone,
    InsightType,
    VolatilityLevel,
)
from trade_analytics.engine.models.result import ContextualInsight, PerformanceMetrics

FEAR_ZONES = (FearGreedZone.EXTREME_FEAR, FearGreedZone.FEAR)
GREED_ZONES = (FearGreedZone.GREED, FearGreedZone.EXTREME_GREED)


def generate_insights(
    by_fear_greed: dict[FearGreedZone, PerformanceMetrics],
    by_volatility: dict[VolatilityLevel, PerformanceMetrics],
    by_event_proximity: dict[EventProximity, PerformanceMetrics],
    config: ContextualConfig | None = None,
) -> list[ContextualInsight]:
    """Apply the insight rules to segment aggregates.

    Args:
        by_fear_greed: Every Fear & Greed zone -> metrics.
        by_volatility: Every volatility level -> metrics.
        by_event_proximity: Every event proximity -> metrics.
        config: Thresholds (defaults when None).

    Returns:
        Insights in rule order; empty when no rule fires.
    """
    cfg = config or ContextualConfig()
    insights: list[ContextualInsight] = []

    insights.extend(_fear_greed_insights(by_fear_greed, cfg))
    insights.extend(_volatility_insights(by_volatility, cfg))
    insights.extend(_event_day_insights(by_event_proximity, cfg))
    return insights


def _fear_greed_insights(
    by_fear_greed: dict[FearGreedZone, PerformanceMetrics],
    cfg: ContextualConfig,
) -> list[ContextualInsight]:
    insights = []
    fear = combine_segments(by_fear_greed, FEAR_ZONES)
    greed = combine_segments(by_fear_greed, GREED_ZONES)

    min_zone = cfg.min_trades_for_zone_comparison
    if fear.trades >= min_zone and greed.trades >= min_zone:
        if fear.win_rate > greed.win_rate + cfg.win_rate_diff_significant:
            insights.append(
                ContextualInsight(
                    type=InsightType.OPPORTUNITY,
                    title="Fear Markets Favor You",
                    description=(
                        f"Your win rate in Fear zones ({fear.win_rate:.0f}%) is significantly "
                        f"higher than in Greed zones ({greed.win_rate:.0f}%)."
                    ),
                    evidence=f"{fear.trades} trades in Fear vs {greed.trades} in Greed zones",
                    recommendation="Consider increasing position sizes during market fear periods.",
                )
            )
        elif greed.win_rate > fear.win_rate + cfg.win_rate_diff_significant:
            insights.append(
                ContextualInsight(
                    type=InsightType.OPPORTUNITY,
                    title="Greed Markets Favor You",
                    description=(
                        f"Your win rate in Greed zones ({greed.win_rate:.0f}%) is significantly "
                        f"higher than in Fear zones ({fear.win_rate:.0f}%)."
                    ),
                    evidence=f"{greed.trades} trades in Greed vs {fear.trades} in Fear zones",
                    recommendation="Consider riding momentum during bullish sentiment periods.",
                )
            )

    extremes = [
        (
            FearGreedZone.EXTREME_FEAR,
            "Struggling in Extreme Fear",
            "extreme fear",
            "Reduce position sizes or avoid trading during extreme fear.",
        ),
        (
            FearGreedZone.EXTREME_GREED,
            "Struggling in Extreme Greed",
            "extreme greed",
            "Be cautious of FOMO trades during peak market euphoria.",
        ),
    ]
    for zone, title, phrase, recommendation in extremes:
        m = by_fear_greed[zone]
        if m.trades >= cfg.min_trades_for_ranking and m.win_rate < cfg.poor_win_rate:
            insights.append(
                ContextualInsight(
                    type=InsightType.WARNING,
                    title=title,
                    description=f"Only {m.win_rate:.0f}% win rate during {phrase} periods.",
                    evidence=f"{m.trades} trades with {m.losses} losses",
                    recommendation=recommendation,
                )
            )
    return insights


def _volatility_insights(
    by_volatility: dict[VolatilityLevel, PerformanceMetrics],
    cfg: ContextualConfig,
) -> list[ContextualInsight]:
    high = by_volatility[VolatilityLevel.HIGH]
    low = by_volatility[VolatilityLevel.LOW]
    min_zone = cfg.min_trades_for_zone_comparison
    if high.trades < min_zone or low.trades < min_zone:
        return []

    if high.win_rate < low.win_rate - cfg.high_vs_low_volatility_diff:
        return [
            ContextualInsight(
                type=InsightType.WARNING,
                title="High Volatility Hurts Performance",
                description=(
                    f"Win rate drops from {low.win_rate:.0f}% in calm markets "
                    f"to {high.win_rate:.0f}% in high volatility."
                ),
                evidence=f"{high.trades} high-vol trades vs {low.trades} low-vol trades",
                recommendation="Reduce position sizes or tighten stop losses during high volatility.",
            )
        ]
    if high.win_rate > low.win_rate + cfg.high_vs_low_volatility_diff:
        return [
            ContextualInsight(
                type=InsightType.OPPORTUNITY,
                title="Volatility Trading Edge",
                description=(
                    f"You perform better in volatile markets ({high.win_rate:.0f}%) "
                    f"vs calm ({low.win_rate:.0f}%)."
                ),
                evidence=f"{high.trades} high-vol trades with positive edge",
                recommendation="Consider targeting volatile market conditions for entries.",
            )
        ]
    return []


def _event_day_insights(
    by_event_proximity: dict[EventProximity, PerformanceMetrics],
    cfg: ContextualConfig,
) -> list[ContextualInsight]:
    event = by_event_proximity[EventProximity.EVENT_DAY]
    normal = by_event_proximity[EventProximity.NORMAL_DAY]
    if event.trades < cfg.min_trades_for_ranking or normal.trades < cfg.min_trades_for_insights:
        return []

    if event.win_rate < normal.win_rate - cfg.event_day_diff:
        return [
            ContextualInsight(
                type=InsightType.WARNING,
                title="Event Days Reduce Edge",
                description=(
                    f"Win rate drops from {normal.win_rate:.0f}% on normal days "
                    f"to {event.win_rate:.0f}% on event days."
                ),
                evidence=f"{event.trades} trades on high-impact event days",
                recommendation="Consider avoiding trades on days with major economic events.",
            )
        ]
    if event.avg_pnl > normal.avg_pnl * cfg.event_day_pnl_multiplier:
        return [
            ContextualInsight(
                type=InsightType.PATTERN,
                title="Event Day Profit Potential",
                description=(
                    f"Average P&L on event days (${event.avg_pnl:.2f}) is higher "
                    f"than normal days (${normal.avg_pnl:.2f})."
                ),
                evidence=f"{event.trades} trades captured event volatility",
                recommendation="You may have an edge trading around major announcements.",
            )
        ]
    return []


def best_segment_insight(
    dimension: str,
    segments: dict[Enum, PerformanceMetrics],
    best: Enum | None = None,
) -> ContextualInsight | None:
    """Recommendation for the best bucket of one dimension.

    ``best`` is the bucket already reported in ``best_segments``; it is looked
    up with ``find_best_segment`` when omitted. None unless more than one
    bucket has trades.
    """
    if count_active_segments(segments) <= 1:
        return None

    if best is None:
        best = find_best_segment(segments)
    if best is None:
        return None

    m = segments[best]
    label = SEGMENT_LABELS.get(best, best.value)
    return ContextualInsight(
        type=InsightType.PATTERN,
        title=f"Best {dimension}: {label}",
        description=f"Your highest win rate by {dimension.lower()} is {m.win_rate:.0f}% in {label}.",
        evidence=f"{m.trades} trades, {m.wins} wins, average P&L ${m.avg_pnl:.2f}",
        recommendation=f"Favor setups during {label} conditions.",
    )
