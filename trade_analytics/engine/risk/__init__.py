"""Risk metrics engine.

- returns: Sharpe, Sortino, Calmar, historical VaR, equity curve
- drawdown: Drawdown depth and duration analysis
- trade_stats: Streaks, expectancy, Kelly sizing, trade summary
- metrics: calculate_advanced_risk_metrics (full suite)
"""

from trade_analytics.engine.risk.drawdown import analyze_drawdowns, calc_recovery_factor
from trade_analytics.engine.risk.metrics import (
    calculate_advanced_risk_metrics,
    sort_trades_by_date,
)
from trade_analytics.engine.risk.returns import (
    build_equity_curve,
    calc_calmar_ratio,
    calc_historical_var,
    calc_returns,
    calc_sharpe_ratio,
    calc_sortino_ratio,
)
from trade_analytics.engine.risk.trade_stats import (
    calc_expectancy,
    calc_kelly,
    calc_kelly_percent,
    calc_streaks,
    calc_trade_summary,
    calc_win_loss_averages,
    interpret_kelly,
)

__all__ = [
    "analyze_drawdowns",
    "build_equity_curve",
    "calc_calmar_ratio",
    "calc_expectancy",
    "calc_historical_var",
    "calc_kelly",
    "calc_kelly_percent",
    "calc_recovery_factor",
    "calc_returns",
    "calc_sharpe_ratio",
    "calc_sortino_ratio",
    "calc_streaks",
    "calc_trade_summary",
    "calc_win_loss_averages",
    "calculate_advanced_risk_metrics",
    "interpret_kelly",
    "sort_trades_by_date",
]
