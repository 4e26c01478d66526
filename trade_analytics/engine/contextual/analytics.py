"""
Contextual Analyzer - performance by market conditions

Segments closed trades along the market context captured at entry and
correlates conditions with outcomes:
- by volatility level (LOW / MEDIUM / HIGH)
- by Fear & Greed zone (EXTREME_FEAR .. EXTREME_GREED)
- by event proximity (EVENT_DAY / DAY_BEFORE / DAY_AFTER / NORMAL_DAY)
- by trading session (all closed trades, context not required)

Usage:
    analyzer = ContextualAnalyzer(trades)
    by_zone = analyzer.by_fear_greed()
    result = analyzer.analyze()
"""

from __future__ import annotations

import logging

from trade_analytics.config import AnalyticsConfig, ContextualConfig
from trade_analytics.engine.contextual.classify import (
    get_event_proximity,
    get_fear_greed_zone,
    get_trade_session,
    get_volatility_level,
)
from trade_analytics.engine.contextual.correlation import build_correlation
from trade_analytics.engine.contextual.insights import best_segment_insight, generate_insights
from trade_analytics.engine.contextual.segmentation import find_best_segment, segment_trades
from trade_analytics.engine.models.enums import (
    EventProximity,
    FearGreedZone,
    TradingSession,
    VolatilityLevel,
)
from trade_analytics.engine.models.result import (
    ContextualAnalyticsResult,
    CorrelationResult,
    PerformanceMetrics,
)
from trade_analytics.engine.models.trade import TradeRecord
from trade_analytics.engine.numeric import safe_divide

logger = logging.getLogger(__name__)

VOLATILITY_VS_WIN = "volatility_vs_win_rate"
FEAR_GREED_VS_WIN = "fear_greed_vs_win_rate"
EVENT_DAY_VS_PNL = "event_day_vs_pnl"


class ContextualAnalyzer:
    """Market-context segmentation of a trade history."""

    def __init__(
        self,
        trades: list[TradeRecord],
        config: ContextualConfig | None = None,
    ) -> None:
        self._config = config or ContextualConfig()
        self._closed = [t for t in trades if t.is_closed]
        self._with_context = [t for t in self._closed if t.has_context]

    @property
    def closed_trades(self) -> list[TradeRecord]:
        return list(self._closed)

    @property
    def trades_with_context(self) -> list[TradeRecord]:
        return list(self._with_context)

    def by_volatility(self) -> dict[VolatilityLevel, PerformanceMetrics]:
        """Segment context trades by volatility level (missing level -> MEDIUM)."""
        return segment_trades(
            self._with_context,
            lambda t: get_volatility_level(t.market_context),
            VolatilityLevel,
        )

    def by_fear_greed(self) -> dict[FearGreedZone, PerformanceMetrics]:
        """Segment context trades by Fear & Greed zone.

        Trades without an index value are left out.
        """

        def classify(t: TradeRecord) -> FearGreedZone | None:
            value = t.market_context.fear_greed_value
            if value is None:
                return None
            return get_fear_greed_zone(value, self._config)

        return segment_trades(self._with_context, classify, FearGreedZone)

    def by_event_proximity(self) -> dict[EventProximity, PerformanceMetrics]:
        """Segment context trades by distance from high-impact events."""
        return segment_trades(
            self._with_context,
            lambda t: get_event_proximity(t.market_context),
            EventProximity,
        )

    def by_session(self) -> dict[TradingSession, PerformanceMetrics]:
        """Segment all closed trades by trading session."""
        return segment_trades(self._closed, get_trade_session, TradingSession)

    def correlations(self) -> dict[str, CorrelationResult]:
        """Condition/outcome correlations over context trades.

        - volatility value vs win (1/0)
        - Fear & Greed value vs win (1/0)
        - event-day flag (1/0) vs P&L
        """
        volatility_pairs: list[tuple[float, float]] = []
        fear_greed_pairs: list[tuple[float, float]] = []
        event_pairs: list[tuple[float, float]] = []

        for trade in self._with_context:
            ctx = trade.market_context
            pnl = trade.effective_pnl
            is_win = 1.0 if pnl > 0 else 0.0

            # A zero reading counts as missing
            if ctx.volatility_value:
                volatility_pairs.append((ctx.volatility_value, is_win))
            if ctx.fear_greed_value is not None:
                fear_greed_pairs.append((ctx.fear_greed_value, is_win))
            is_event_day = get_event_proximity(ctx) == EventProximity.EVENT_DAY
            event_pairs.append((1.0 if is_event_day else 0.0, pnl))

        return {
            VOLATILITY_VS_WIN: build_correlation(VOLATILITY_VS_WIN, volatility_pairs, self._config),
            FEAR_GREED_VS_WIN: build_correlation(FEAR_GREED_VS_WIN, fear_greed_pairs, self._config),
            EVENT_DAY_VS_PNL: build_correlation(EVENT_DAY_VS_PNL, event_pairs, self._config),
        }

    def analyze(self) -> ContextualAnalyticsResult:
        """Run every segmentation, correlation and insight rule."""
        cfg = self._config
        closed_count = len(self._closed)
        context_count = len(self._with_context)

        by_volatility = self.by_volatility()
        by_fear_greed = self.by_fear_greed()
        by_event = self.by_event_proximity()
        by_session = self.by_session()

        dimensions = {
            "volatility": by_volatility,
            "fear_greed": by_fear_greed,
            "event_proximity": by_event,
            "session": by_session,
        }
        best_buckets = {name: find_best_segment(segments) for name, segments in dimensions.items()}
        best_segments: dict[str, str | None] = {
            name: best.value if best is not None else None for name, best in best_buckets.items()
        }

        quality_percent = safe_divide(100 * context_count, closed_count)
        has_sufficient_data = closed_count >= cfg.min_trades_for_insights

        insights = []
        if has_sufficient_data:
            insights = generate_insights(by_fear_greed, by_volatility, by_event, cfg)
            for name, segments in dimensions.items():
                insight = best_segment_insight(_dimension_title(name), segments, best_buckets[name])
                if insight is not None:
                    insights.append(insight)
        else:
            logger.debug(
                f"{closed_count} closed trades, need {cfg.min_trades_for_insights} for insights"
            )

        if quality_percent < cfg.quality_warning_percent:
            logger.debug(
                f"Only {quality_percent:.0f}% of closed trades carry market context"
            )

        return ContextualAnalyticsResult(
            by_volatility=by_volatility,
            by_fear_greed=by_fear_greed,
            by_event_proximity=by_event,
            by_session=by_session,
            correlations=self.correlations(),
            best_segments=best_segments,
            insights=insights,
            total_analyzed_trades=closed_count,
            trades_with_context=context_count,
            data_quality_percent=quality_percent,
            data_quality_warning=quality_percent < cfg.quality_warning_percent,
            has_sufficient_data=has_sufficient_data,
        )


def _dimension_title(name: str) -> str:
    return {
        "volatility": "Volatility",
        "fear_greed": "Sentiment",
        "event_proximity": "Event Timing",
        "session": "Session",
    }[name]


def calculate_contextual_analytics(
    trades: list[TradeRecord],
    config: AnalyticsConfig | ContextualConfig | None = None,
) -> ContextualAnalyticsResult:
    """Contextual analytics of a trade history.

    Only closed trades are analysed. Every bucket of every dimension is
    present in the result; empty buckets report zero metrics.

    Args:
        trades: Trade history (not modified).
        config: Analytics or contextual configuration (defaults when None).

    Returns:
        ContextualAnalyticsResult
    """
    if isinstance(config, AnalyticsConfig):
        config = config.contextual
    return ContextualAnalyzer(trades, config).analyze()
