"""Tests for contextual segmentation and correlation."""

from datetime import datetime, timezone

import pytest

from trade_analytics.config import AnalyticsConfig, ContextualConfig
from trade_analytics.engine.contextual import (
    ContextualAnalyzer,
    calc_pearson_correlation,
    calc_performance_metrics,
    calculate_contextual_analytics,
    classify_correlation,
    find_best_segment,
    generate_insights,
    get_event_proximity,
    get_fear_greed_zone,
    get_session_for_time,
    get_trade_session,
    get_volatility_level,
    segment_trades,
)
from trade_analytics.engine.models import (
    CorrelationDirection,
    CorrelationStrength,
    EventProximity,
    FearGreedZone,
    InsightType,
    MarketContext,
    PerformanceMetrics,
    TradingSession,
    VolatilityLevel,
)


class TestClassification:
    """Tests for market-context classification."""

    @pytest.mark.parametrize(
        "value,zone",
        [
            (0, FearGreedZone.EXTREME_FEAR),
            (20, FearGreedZone.EXTREME_FEAR),
            (21, FearGreedZone.FEAR),
            (40, FearGreedZone.FEAR),
            (41, FearGreedZone.NEUTRAL),
            (60, FearGreedZone.NEUTRAL),
            (61, FearGreedZone.GREED),
            (80, FearGreedZone.GREED),
            (81, FearGreedZone.EXTREME_GREED),
            (100, FearGreedZone.EXTREME_GREED),
        ],
    )
    def test_fear_greed_zone(self, value, zone):
        assert get_fear_greed_zone(value) == zone

    def test_fear_greed_zone_custom_bounds(self):
        config = ContextualConfig(extreme_fear_max=10)
        assert get_fear_greed_zone(15, config) == FearGreedZone.FEAR

    def test_volatility_defaults_to_medium(self):
        assert get_volatility_level(MarketContext()) == VolatilityLevel.MEDIUM
        assert get_volatility_level(MarketContext(volatility_level=VolatilityLevel.HIGH)) == VolatilityLevel.HIGH

    def test_event_proximity(self):
        assert get_event_proximity(MarketContext()) == EventProximity.NORMAL_DAY
        assert get_event_proximity(MarketContext(has_high_impact_event=True)) == EventProximity.EVENT_DAY
        explicit = MarketContext(event_proximity=EventProximity.DAY_BEFORE, has_high_impact_event=True)
        assert get_event_proximity(explicit) == EventProximity.DAY_BEFORE

    @pytest.mark.parametrize(
        "hour,session",
        [
            (22, TradingSession.SYDNEY),
            (3, TradingSession.SYDNEY),
            (6, TradingSession.TOKYO),
            (7, TradingSession.TOKYO),
            (9, TradingSession.LONDON),
            (14, TradingSession.LONDON),
            (16, TradingSession.NEW_YORK),
            (20, TradingSession.NEW_YORK),
            (21, TradingSession.SYDNEY),
        ],
    )
    def test_session_for_time(self, hour, session):
        moment = datetime(2024, 3, 4, hour, 30, tzinfo=timezone.utc)
        assert get_session_for_time(moment) == session

    def test_trade_session_precedence(self, trade_factory):
        trade = trade_factory(10, hour=14)
        assert get_trade_session(trade) == TradingSession.LONDON

        with_context = trade_factory(10, hour=14, context=MarketContext(session=TradingSession.TOKYO))
        assert get_trade_session(with_context) == TradingSession.TOKYO


class TestSegmentation:
    """Tests for per-segment aggregation."""

    def test_performance_metrics(self):
        m = calc_performance_metrics([100, -50, 30])
        assert m.trades == 3
        assert m.wins == 2
        assert m.losses == 1
        assert m.win_rate == pytest.approx(66.667, abs=0.001)
        assert m.total_pnl == 80
        assert m.avg_pnl == pytest.approx(26.667, abs=0.001)
        assert m.profit_factor == pytest.approx(2.6)

    def test_empty_segment(self):
        m = calc_performance_metrics([])
        assert m == PerformanceMetrics()
        assert m.win_rate == 0

    def test_profit_factor_without_losses(self):
        assert calc_performance_metrics([10, 20]).profit_factor == 0

    def test_every_bucket_present(self, trade_factory):
        trades = [trade_factory(10, context=MarketContext(volatility_level=VolatilityLevel.HIGH))]
        segments = segment_trades(trades, lambda t: get_volatility_level(t.market_context), VolatilityLevel)
        assert list(segments) == [VolatilityLevel.LOW, VolatilityLevel.MEDIUM, VolatilityLevel.HIGH]
        assert segments[VolatilityLevel.HIGH].trades == 1
        assert segments[VolatilityLevel.LOW].win_rate == 0

    def test_best_segment_ties_to_first(self):
        segments = {
            VolatilityLevel.LOW: calc_performance_metrics([10, -5]),
            VolatilityLevel.MEDIUM: calc_performance_metrics([]),
            VolatilityLevel.HIGH: calc_performance_metrics([20, -1]),
        }
        assert find_best_segment(segments) == VolatilityLevel.LOW
        assert find_best_segment(segments, min_trades=3) is None


class TestCorrelation:
    """Tests for Pearson correlation."""

    def test_perfect_linear(self):
        xs = [float(i) for i in range(10)]
        assert calc_pearson_correlation(xs, [2 * x + 1 for x in xs], min_samples=2) == pytest.approx(1.0)
        assert calc_pearson_correlation(xs, [-x for x in xs], min_samples=2) == pytest.approx(-1.0)

    def test_below_minimum_sample(self):
        assert calc_pearson_correlation([1, 2, 3], [1, 2, 3]) is None

    def test_zero_variance(self):
        assert calc_pearson_correlation([1.0] * 25, list(range(25))) == 0.0

    @pytest.mark.parametrize(
        "value,strength,direction",
        [
            (None, CorrelationStrength.INSUFFICIENT_DATA, CorrelationDirection.NONE),
            (0.0, CorrelationStrength.WEAK, CorrelationDirection.NONE),
            (0.19, CorrelationStrength.WEAK, CorrelationDirection.POSITIVE),
            (-0.3, CorrelationStrength.MODERATE, CorrelationDirection.NEGATIVE),
            (0.5, CorrelationStrength.STRONG, CorrelationDirection.POSITIVE),
        ],
    )
    def test_classify(self, value, strength, direction):
        assert classify_correlation(value) == (strength, direction)


def _context_trades(trade_factory, rows):
    """rows: (pnl, fear_greed_value) pairs, one per day, same hour."""
    return [
        trade_factory(pnl, day=i, context=MarketContext(fear_greed_value=fg))
        for i, (pnl, fg) in enumerate(rows)
    ]


class TestContextualAnalytics:
    """Tests for calculate_contextual_analytics."""

    def test_empty_history(self):
        result = calculate_contextual_analytics([])
        assert result.total_analyzed_trades == 0
        assert result.data_quality_percent == 0
        assert result.data_quality_warning is True
        assert result.has_sufficient_data is False
        assert result.insights == []
        assert set(result.by_fear_greed) == set(FearGreedZone)
        assert set(result.by_session) == set(TradingSession)
        assert all(m.trades == 0 for m in result.by_volatility.values())
        assert all(v is None for v in result.best_segments.values())

    def test_correlation_sentinel_below_twenty(self, trade_factory):
        trades = _context_trades(trade_factory, [(10 if i % 2 else -10, 10 * i) for i in range(10)])
        result = calculate_contextual_analytics(trades)
        for corr in result.correlations.values():
            assert corr.value is None
            assert corr.strength == CorrelationStrength.INSUFFICIENT_DATA

    def test_fear_greed_correlation(self, trade_factory):
        rows = [(50 if i >= 10 else -50, float(i * 5)) for i in range(20)]
        result = calculate_contextual_analytics(_context_trades(trade_factory, rows))
        corr = result.correlations["fear_greed_vs_win_rate"]
        assert corr.sample_size == 20
        assert corr.value > 0.5
        assert corr.strength == CorrelationStrength.STRONG
        assert corr.direction == CorrelationDirection.POSITIVE
        # No volatility readings
        assert result.correlations["volatility_vs_win_rate"].sample_size == 0

    def test_only_closed_trades(self, trade_factory):
        trades = [
            trade_factory(10, day=0, context=MarketContext(fear_greed_value=30)),
            trade_factory(-10, day=1, status="open", context=MarketContext(fear_greed_value=30)),
            trade_factory(20, day=2),
        ]
        result = calculate_contextual_analytics(trades)
        assert result.total_analyzed_trades == 2
        assert result.trades_with_context == 1
        assert result.data_quality_percent == 50.0
        assert result.data_quality_warning is False
        assert result.by_fear_greed[FearGreedZone.FEAR].trades == 1
        assert sum(m.trades for m in result.by_session.values()) == 2

    def test_data_quality_warning(self, trade_factory):
        trades = [trade_factory(10, day=i) for i in range(6)]
        trades += _context_trades(trade_factory, [(10, 50), (-5, 50)])
        result = calculate_contextual_analytics(trades)
        assert result.data_quality_percent == 25.0
        assert result.data_quality_warning is True

    def test_missing_fear_greed_value_not_segmented(self, trade_factory):
        trades = [trade_factory(10, context=MarketContext(volatility_level=VolatilityLevel.LOW))]
        result = calculate_contextual_analytics(trades)
        assert sum(m.trades for m in result.by_fear_greed.values()) == 0
        assert result.by_volatility[VolatilityLevel.LOW].trades == 1
        assert result.by_event_proximity[EventProximity.NORMAL_DAY].trades == 1

    def test_fear_markets_insight(self, trade_factory):
        rows = [(100, 30)] * 5 + [(-100, 70)] * 5
        result = calculate_contextual_analytics(_context_trades(trade_factory, rows))
        assert result.has_sufficient_data
        titles = [i.title for i in result.insights]
        assert titles[0] == "Fear Markets Favor You"
        assert result.insights[0].type == InsightType.OPPORTUNITY
        assert "Best Sentiment: Fear" in titles
        assert result.best_segments["fear_greed"] == "fear"

    def test_no_insights_below_minimum(self, trade_factory):
        rows = [(100, 30)] * 2 + [(-100, 70)] * 2
        result = calculate_contextual_analytics(_context_trades(trade_factory, rows))
        assert result.has_sufficient_data is False
        assert result.insights == []

    def test_best_segment_insight_names_reported_bucket(self, trade_factory):
        low = MarketContext(volatility_level=VolatilityLevel.LOW)
        high = MarketContext(volatility_level=VolatilityLevel.HIGH)
        trades = [
            trade_factory(10, day=0, context=low),
            trade_factory(10, day=1, context=low),
            trade_factory(10, day=2, context=high),
            trade_factory(10, day=3, context=high),
            trade_factory(-10, day=4, context=high),
        ]
        result = calculate_contextual_analytics(trades)
        assert result.best_segments["volatility"] == "low"
        titles = [i.title for i in result.insights]
        assert "Best Volatility: Low Volatility" in titles
        assert "Best Volatility: High Volatility" not in titles

    def test_zero_volatility_reading_not_correlated(self, trade_factory):
        trades = [
            trade_factory(10, day=0, context=MarketContext(volatility_value=0.0)),
            trade_factory(-10, day=1, context=MarketContext(volatility_value=2.5)),
            trade_factory(10, day=2, context=MarketContext(volatility_value=None)),
        ]
        result = calculate_contextual_analytics(trades)
        assert result.correlations["volatility_vs_win_rate"].sample_size == 1

    def test_input_not_mutated(self, trade_factory):
        trades = _context_trades(trade_factory, [(10, 30), (-5, 70), (20, 90)])
        snapshot = list(trades)
        calculate_contextual_analytics(trades)
        assert trades == snapshot

    def test_accepts_analytics_config(self, trade_factory):
        config = AnalyticsConfig.from_dict({"contextual": {"min_trades_for_insights": 1}})
        result = calculate_contextual_analytics([trade_factory(10)], config)
        assert result.has_sufficient_data is True

    def test_analyzer_segments(self, trade_factory):
        trades = [
            trade_factory(10, hour=3),
            trade_factory(-10, day=1, hour=14),
            trade_factory(5, day=2, hour=18),
        ]
        by_session = ContextualAnalyzer(trades).by_session()
        assert by_session[TradingSession.SYDNEY].wins == 1
        assert by_session[TradingSession.LONDON].losses == 1
        assert by_session[TradingSession.NEW_YORK].trades == 1
        assert by_session[TradingSession.OTHER].trades == 0

    def test_to_dict(self, trade_factory):
        data = calculate_contextual_analytics([trade_factory(10)]).to_dict()
        assert set(data["by_fear_greed"]) == {"extremeFear", "fear", "neutral", "greed", "extremeGreed"}
        assert data["correlations"]["event_day_vs_pnl"]["strength"] == "insufficient_data"


class TestInsightRules:
    """Tests for the individual insight rules."""

    @staticmethod
    def _segments(enum_cls, **pnls):
        return {
            bucket: calc_performance_metrics(pnls.get(bucket.name.lower(), []))
            for bucket in enum_cls
        }

    def test_extreme_fear_warning(self):
        by_fg = self._segments(FearGreedZone, extreme_fear=[-10, -10, 5])
        insights = generate_insights(
            by_fg,
            self._segments(VolatilityLevel),
            self._segments(EventProximity),
        )
        assert [i.title for i in insights] == ["Struggling in Extreme Fear"]
        assert insights[0].type == InsightType.WARNING

    def test_high_volatility_hurts(self):
        by_vol = self._segments(VolatilityLevel, high=[-1, -1, -1, -1, 1], low=[1, 1, 1, 1, -1])
        insights = generate_insights(
            self._segments(FearGreedZone),
            by_vol,
            self._segments(EventProximity),
        )
        assert [i.title for i in insights] == ["High Volatility Hurts Performance"]

    def test_event_day_profit_potential(self):
        by_event = self._segments(
            EventProximity,
            event_day=[300, 300, -50],
            normal_day=[20, 20, -10, 20, -10],
        )
        insights = generate_insights(
            self._segments(FearGreedZone),
            self._segments(VolatilityLevel),
            by_event,
        )
        assert [i.title for i in insights] == ["Event Day Profit Potential"]
        assert insights[0].type == InsightType.PATTERN

    def test_event_days_reduce_edge(self):
        by_event = self._segments(
            EventProximity,
            event_day=[-10, -10, 5],
            normal_day=[10, 10, 10, -5, 10],
        )
        insights = generate_insights(
            self._segments(FearGreedZone),
            self._segments(VolatilityLevel),
            by_event,
        )
        assert [i.title for i in insights] == ["Event Days Reduce Edge"]
