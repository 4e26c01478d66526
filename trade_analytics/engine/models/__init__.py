"""Engine layer data models.

Models:
    TradeRecord: Journal trade (engine input)
    MarketContext: Market conditions captured at trade entry
    AdvancedRiskMetrics: Equity-curve risk metrics
    DrawdownStats: Drawdown analysis of an equity curve
    TradeSummary: Basic win/loss statistics
    HealthBreakdownItem: One weighted health-score component
    TradingHealthScore: Composite health score with grade
    PerformanceMetrics: Per-segment aggregate
    CorrelationResult: Condition/outcome correlation
    ContextualInsight: Rule-based insight
    ContextualAnalyticsResult: Full contextual segmentation output

Enums:
    TradeResult, FearGreedZone, VolatilityLevel, EventProximity,
    TradingSession, HealthGrade, CorrelationStrength,
    CorrelationDirection, InsightType
"""

from trade_analytics.engine.models.enums import (
    CorrelationDirection,
    CorrelationStrength,
    EventProximity,
    FearGreedZone,
    HealthGrade,
    InsightType,
    TradeResult,
    TradingSession,
    VolatilityLevel,
)
from trade_analytics.engine.models.result import (
    AdvancedRiskMetrics,
    ContextualAnalyticsResult,
    ContextualInsight,
    CorrelationResult,
    DrawdownStats,
    HealthBreakdownItem,
    PerformanceMetrics,
    TradeSummary,
    TradingHealthScore,
)
from trade_analytics.engine.models.trade import (
    MarketContext,
    TradeParseError,
    TradeRecord,
    parse_trade_date,
)

__all__ = [
    # Enums
    "CorrelationDirection",
    "CorrelationStrength",
    "EventProximity",
    "FearGreedZone",
    "HealthGrade",
    "InsightType",
    "TradeResult",
    "TradingSession",
    "VolatilityLevel",
    # Inputs
    "MarketContext",
    "TradeParseError",
    "TradeRecord",
    "parse_trade_date",
    # Results
    "AdvancedRiskMetrics",
    "ContextualAnalyticsResult",
    "ContextualInsight",
    "CorrelationResult",
    "DrawdownStats",
    "HealthBreakdownItem",
    "PerformanceMetrics",
    "TradeSummary",
    "TradingHealthScore",
]
