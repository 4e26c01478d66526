"""Calculation Engine Layer.

Pure calculations over a trade history. Functions are total: degenerate
input (empty lists, zero variance, missing context) yields zero or
sentinel values instead of raising.

Architecture:
- models/: Trade records, enums and result types
- numeric: safe_divide, clamp, map_range
- risk/: Equity-curve risk metrics (Sharpe, Sortino, VaR, drawdown, Kelly)
- health/: Composite trading health score
- contextual/: Performance segmented by market conditions
"""

from trade_analytics.engine.contextual import calculate_contextual_analytics
from trade_analytics.engine.health import calculate_trading_health_score
from trade_analytics.engine.models import (
    AdvancedRiskMetrics,
    ContextualAnalyticsResult,
    MarketContext,
    TradeRecord,
    TradingHealthScore,
)
from trade_analytics.engine.risk import calculate_advanced_risk_metrics

__all__ = [
    "AdvancedRiskMetrics",
    "ContextualAnalyticsResult",
    "MarketContext",
    "TradeRecord",
    "TradingHealthScore",
    "calculate_advanced_risk_metrics",
    "calculate_contextual_analytics",
    "calculate_trading_health_score",
]
