"""Contextual segmentation and correlation.

- classify: Fear & Greed zone, volatility, event proximity, session
- segmentation: Per-bucket performance metrics
- correlation: Pearson correlation of conditions vs outcomes
- insights: Rule-based insights
- analytics: ContextualAnalyzer / calculate_contextual_analytics
"""

from trade_analytics.engine.contextual.analytics import (
    ContextualAnalyzer,
    calculate_contextual_analytics,
)
from trade_analytics.engine.contextual.classify import (
    get_event_proximity,
    get_fear_greed_zone,
    get_session_for_time,
    get_trade_session,
    get_volatility_level,
    segment_label,
)
from trade_analytics.engine.contextual.correlation import (
    build_correlation,
    calc_pearson_correlation,
    classify_correlation,
)
from trade_analytics.engine.contextual.insights import best_segment_insight, generate_insights
from trade_analytics.engine.contextual.segmentation import (
    calc_performance_metrics,
    find_best_segment,
    segment_trades,
)

__all__ = [
    "ContextualAnalyzer",
    "best_segment_insight",
    "build_correlation",
    "calc_pearson_correlation",
    "calc_performance_metrics",
    "calculate_contextual_analytics",
    "classify_correlation",
    "find_best_segment",
    "generate_insights",
    "get_event_proximity",
    "get_fear_greed_zone",
    "get_session_for_time",
    "get_trade_session",
    "get_volatility_level",
    "segment_label",
    "segment_trades",
]
