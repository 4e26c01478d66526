"""Result models for analytics outputs."""

from dataclasses import asdict, dataclass, field, fields
from typing import Any

from trade_analytics.engine.models.enums import (
    CorrelationDirection,
    CorrelationStrength,
    EventProximity,
    FearGreedZone,
    HealthGrade,
    InsightType,
    TradingSession,
    VolatilityLevel,
)


@dataclass
class AdvancedRiskMetrics:
    """Equity-curve based risk metrics for a trade history.

    All ratios are annualized with the configured trading days per year.
    Monetary values are in the account's quote currency. Every field is a
    finite number; degenerate input yields 0.

    Attributes:
        sharpe_ratio: Mean return / std dev x sqrt(252).
        sortino_ratio: Mean return / downside deviation x sqrt(252).
        calmar_ratio: Annualized return % / max drawdown %.
        value_at_risk_95: Historical single-trade VaR at 95% (absolute).
        value_at_risk_99: Historical single-trade VaR at 99% (absolute).
        max_drawdown: Largest peak-to-trough equity decline (absolute).
        max_drawdown_percent: Max drawdown as % of the peak it fell from.
        current_drawdown: Distance of final equity below the all-time peak.
        current_drawdown_percent: Current drawdown as % of peak.
        avg_drawdown_duration: Mean drawdown run length, in trades.
        max_drawdown_duration: Longest drawdown run length, in trades.
        recovery_factor: Net profit / max drawdown.
        win_streak_max: Longest run of winning trades.
        loss_streak_max: Longest run of losing trades.
        expectancy: Expected P&L per trade.
        kelly_percent: Kelly criterion position size (0-100).
    """

    sharpe_ratio: float = 0.0
    sortino_ratio: float = 0.0
    calmar_ratio: float = 0.0
    value_at_risk_95: float = 0.0
    value_at_risk_99: float = 0.0
    max_drawdown: float = 0.0
    max_drawdown_percent: float = 0.0
    current_drawdown: float = 0.0
    current_drawdown_percent: float = 0.0
    avg_drawdown_duration: float = 0.0
    max_drawdown_duration: int = 0
    recovery_factor: float = 0.0
    win_streak_max: int = 0
    loss_streak_max: int = 0
    expectancy: float = 0.0
    kelly_percent: float = 0.0

    @classmethod
    def empty(cls) -> "AdvancedRiskMetrics":
        """All-zero metrics for an empty trade history."""
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def values(self) -> list[float]:
        return [getattr(self, f.name) for f in fields(self)]


@dataclass
class DrawdownStats:
    """Drawdown analysis of an equity curve."""

    max_drawdown: float = 0.0
    max_drawdown_percent: float = 0.0
    current_drawdown: float = 0.0
    current_drawdown_percent: float = 0.0
    peak: float = 0.0
    durations: list[int] = field(default_factory=list)

    @property
    def max_duration(self) -> int:
        return max(self.durations) if self.durations else 0

    @property
    def avg_duration(self) -> float:
        if not self.durations:
            return 0.0
        return sum(self.durations) / len(self.durations)


@dataclass
class TradeSummary:
    """Basic win/loss statistics of a trade list.

    Attributes:
        total_trades: Number of trades.
        wins: Trades with positive P&L.
        losses: Trades with negative P&L.
        breakeven: Trades with zero P&L.
        win_rate: Win rate in percent (0-100).
        profit_factor: Gross profit / gross loss (inf when there are no losses).
        gross_profit: Sum of winning P&L.
        gross_loss: Sum of losing P&L as a positive number.
        net_pnl: Sum of all P&L.
    """

    total_trades: int = 0
    wins: int = 0
    losses: int = 0
    breakeven: int = 0
    win_rate: float = 0.0
    profit_factor: float = 0.0
    gross_profit: float = 0.0
    gross_loss: float = 0.0
    net_pnl: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class HealthBreakdownItem:
    """One weighted component of the trading health score.

    Attributes:
        name: Component name.
        score: Normalized score (0-100).
        weight: Weight in the overall score.
        value: Raw metric value the score was derived from.
        description: Short explanation of the component.
    """

    name: str
    score: float
    weight: float
    value: float
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class TradingHealthScore:
    """Composite trading health score.

    Attributes:
        overall: Weighted score (0-100).
        grade: Letter grade.
        label: Human readable grade label.
        color: Semantic color token for the grade.
        breakdown: Exactly six weighted components.
    """

    overall: int
    grade: HealthGrade
    label: str
    color: str
    breakdown: list[HealthBreakdownItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall": self.overall,
            "grade": self.grade.value,
            "label": self.label,
            "color": self.color,
            "breakdown": [item.to_dict() for item in self.breakdown],
        }


@dataclass
class PerformanceMetrics:
    """Aggregate performance of one segment."""

    trades: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0  # percent
    total_pnl: float = 0.0
    avg_pnl: float = 0.0
    profit_factor: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class CorrelationResult:
    """Pearson correlation between a market condition and an outcome.

    ``value`` is None when the sample is below the minimum size; in that
    case ``strength`` is INSUFFICIENT_DATA.
    """

    name: str
    value: float | None
    sample_size: int
    strength: CorrelationStrength
    direction: CorrelationDirection

    @property
    def is_sufficient(self) -> bool:
        return self.value is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "sample_size": self.sample_size,
            "strength": self.strength.value,
            "direction": self.direction.value,
        }


@dataclass
class ContextualInsight:
    """Rule-based insight derived from segment aggregates."""

    type: InsightType
    title: str
    description: str
    evidence: str
    recommendation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "evidence": self.evidence,
            "recommendation": self.recommendation,
        }


@dataclass
class ContextualAnalyticsResult:
    """Performance segmented by market conditions and trading session."""

    by_volatility: dict[VolatilityLevel, PerformanceMetrics]
    by_fear_greed: dict[FearGreedZone, PerformanceMetrics]
    by_event_proximity: dict[EventProximity, PerformanceMetrics]
    by_session: dict[TradingSession, PerformanceMetrics]
    correlations: dict[str, CorrelationResult]
    best_segments: dict[str, str | None]
    insights: list[ContextualInsight]
    total_analyzed_trades: int
    trades_with_context: int
    data_quality_percent: float
    data_quality_warning: bool
    has_sufficient_data: bool

    def to_dict(self) -> dict[str, Any]:
        def segments(by: dict) -> dict[str, Any]:
            return {key.value: metrics.to_dict() for key, metrics in by.items()}

        return {
            "by_volatility": segments(self.by_volatility),
            "by_fear_greed": segments(self.by_fear_greed),
            "by_event_proximity": segments(self.by_event_proximity),
            "by_session": segments(self.by_session),
            "correlations": {k: c.to_dict() for k, c in self.correlations.items()},
            "best_segments": dict(self.best_segments),
            "insights": [i.to_dict() for i in self.insights],
            "total_analyzed_trades": self.total_analyzed_trades,
            "trades_with_context": self.trades_with_context,
            "data_quality_percent": self.data_quality_percent,
            "data_quality_warning": self.data_quality_warning,
            "has_sufficient_data": self.has_sufficient_data,
        }
