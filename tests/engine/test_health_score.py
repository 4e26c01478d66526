"""Tests for the trading health score."""

import math

import pytest

from trade_analytics.config import AnalyticsConfig, HealthScoreConfig
from trade_analytics.engine.health import (
    calc_consistency_score,
    calculate_trading_health_score,
    get_grade_band,
)
from trade_analytics.engine.models import AdvancedRiskMetrics, HealthGrade

GRADE_ORDER = [HealthGrade.F, HealthGrade.D, HealthGrade.C, HealthGrade.B, HealthGrade.A, HealthGrade.A_PLUS]


def _metrics(**overrides) -> AdvancedRiskMetrics:
    """Metrics that map every risk component to 50."""
    values = dict(
        sharpe_ratio=1.0,
        max_drawdown_percent=25.0,
        recovery_factor=2.0,
        win_streak_max=2,
        loss_streak_max=2,
    )
    values.update(overrides)
    return AdvancedRiskMetrics(**values)


class TestBreakdown:
    """Tests for the weighted components."""

    def test_six_components(self):
        score = calculate_trading_health_score(_metrics(), 45.0, 50, 1.75)
        assert len(score.breakdown) == 6
        assert [item.name for item in score.breakdown] == [
            "Risk-Adjusted Returns",
            "Drawdown Control",
            "Win Rate",
            "Profit Factor",
            "Consistency",
            "Sample Size",
        ]

    def test_weights_sum_to_one(self):
        score = calculate_trading_health_score(_metrics(), 45.0, 50, 1.75)
        assert math.fsum(item.weight for item in score.breakdown) == pytest.approx(1.0)

    def test_midpoint_components(self):
        score = calculate_trading_health_score(_metrics(), 45.0, 100, 1.75)
        by_name = {item.name: item.score for item in score.breakdown}
        assert by_name["Risk-Adjusted Returns"] == pytest.approx(50.0)
        assert by_name["Drawdown Control"] == pytest.approx(50.0)
        assert by_name["Win Rate"] == pytest.approx(50.0)
        assert by_name["Profit Factor"] == pytest.approx(50.0)
        assert by_name["Consistency"] == pytest.approx(50.0)
        assert by_name["Sample Size"] == pytest.approx(100.0)

    def test_infinite_profit_factor(self):
        score = calculate_trading_health_score(_metrics(), 45.0, 100, math.inf)
        pf = score.breakdown[3]
        assert pf.score == 100.0
        assert pf.value == 3.0


class TestOverall:
    """Tests for the overall score and grade."""

    def test_midpoint_score(self):
        score = calculate_trading_health_score(_metrics(), 45.0, 100, 1.75)
        # 0.85 * 50 + 0.15 * 100
        assert score.overall == 58
        assert score.grade == HealthGrade.C
        assert score.label == "Average"
        assert score.color == "warning"

    def test_perfect_score(self):
        metrics = _metrics(
            sharpe_ratio=3.0,
            max_drawdown_percent=0.0,
            recovery_factor=5.0,
            win_streak_max=5,
            loss_streak_max=0,
        )
        score = calculate_trading_health_score(metrics, 70.0, 100, 3.0)
        assert score.overall == 100
        assert score.grade == HealthGrade.A_PLUS

    def test_worst_score(self):
        metrics = _metrics(
            sharpe_ratio=-1.0,
            max_drawdown_percent=50.0,
            recovery_factor=-1.0,
            win_streak_max=0,
            loss_streak_max=5,
        )
        score = calculate_trading_health_score(metrics, 20.0, 5, 0.5)
        assert score.overall == 0
        assert score.grade == HealthGrade.F
        assert score.color == "loss"

    def test_sample_size_raises_score(self):
        few = calculate_trading_health_score(_metrics(), 45.0, 3, 1.75)
        many = calculate_trading_health_score(_metrics(), 45.0, 100, 1.75)
        assert many.overall > few.overall
        assert few.overall == 43  # 0.85 * 50, rounded half up

    @pytest.mark.parametrize(
        "metrics,win_rate,trades,profit_factor",
        [
            (_metrics(sharpe_ratio=math.inf, recovery_factor=math.inf), 150.0, 10**9, math.inf),
            (_metrics(sharpe_ratio=-math.inf, max_drawdown_percent=1e6), -20.0, -5, -math.inf),
            (_metrics(sharpe_ratio=math.nan, recovery_factor=math.nan), math.nan, 0, math.nan),
            (_metrics(sharpe_ratio=-100.0, max_drawdown_percent=1000.0), 0.0, 3, 0.0),
            (AdvancedRiskMetrics(), 0.0, 0, 0.0),
        ],
    )
    def test_bounded_for_pathological_input(self, metrics, win_rate, trades, profit_factor):
        score = calculate_trading_health_score(metrics, win_rate, trades, profit_factor)
        assert 0 <= score.overall <= 100
        assert isinstance(score.overall, int)
        assert all(0 <= item.score <= 100 for item in score.breakdown)

    def test_better_inputs_never_lower_grade(self):
        previous = -1
        for sharpe, drawdown, trades in [(-0.5, 40.0, 5), (0.5, 30.0, 20), (1.5, 15.0, 50), (2.5, 5.0, 100)]:
            score = calculate_trading_health_score(
                _metrics(sharpe_ratio=sharpe, max_drawdown_percent=drawdown), 45.0, trades, 1.75
            )
            rank = GRADE_ORDER.index(score.grade)
            assert rank >= previous
            previous = rank

    def test_grade_monotonic(self):
        bands = HealthScoreConfig().grade_bands
        ranks = [GRADE_ORDER.index(HealthGrade(get_grade_band(s, bands).grade)) for s in range(101)]
        assert ranks == sorted(ranks)

    @pytest.mark.parametrize(
        "overall,grade",
        [(90, "A+"), (89, "A"), (75, "A"), (74, "B"), (60, "B"), (59, "C"), (45, "C"), (44, "D"), (30, "D"), (29, "F"), (0, "F")],
    )
    def test_grade_thresholds(self, overall, grade):
        assert get_grade_band(overall, HealthScoreConfig().grade_bands).grade == grade

    def test_to_dict(self):
        data = calculate_trading_health_score(_metrics(), 45.0, 100, 1.75).to_dict()
        assert data["grade"] == "C"
        assert len(data["breakdown"]) == 6


class TestConsistency:
    """Tests for the consistency blend."""

    def test_no_streaks_is_neutral(self):
        # streak share 0.5 -> 50, recovery 2 -> 50
        assert calc_consistency_score(0, 0, 2.0) == pytest.approx(50.0)

    def test_all_wins_and_full_recovery(self):
        assert calc_consistency_score(4, 0, 5.0) == pytest.approx(100.0)

    def test_streak_share_weighting(self):
        assert calc_consistency_score(4, 0, -1.0, streak_share=1.0) == pytest.approx(100.0)
        assert calc_consistency_score(4, 0, -1.0, streak_share=0.0) == pytest.approx(0.0)


class TestConfiguredWeights:
    """Health score with a custom weight table."""

    def test_custom_weights(self):
        config = AnalyticsConfig.from_dict(
            {
                "health": {
                    "risk_adjusted": {"weight": 0.5},
                    "drawdown": {"weight": 0.5},
                    "win_rate": {"weight": 0.0},
                    "profit_factor": {"weight": 0.0},
                    "consistency": {"weight": 0.0},
                    "sample_size": {"weight": 0.0},
                }
            }
        )
        score = calculate_trading_health_score(
            _metrics(sharpe_ratio=3.0, max_drawdown_percent=50.0), 20.0, 5, 0.5, config
        )
        assert score.overall == 50
