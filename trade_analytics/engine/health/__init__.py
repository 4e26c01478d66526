"""Trading health score aggregation."""

from trade_analytics.engine.health.score import (
    calc_consistency_score,
    calculate_trading_health_score,
    get_grade_band,
)

__all__ = [
    "calc_consistency_score",
    "calculate_trading_health_score",
    "get_grade_band",
]
