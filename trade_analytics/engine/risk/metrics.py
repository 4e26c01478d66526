"""Advanced risk metrics for a trade history.

Usage:
    from trade_analytics.engine.risk import calculate_advanced_risk_metrics

    metrics = calculate_advanced_risk_metrics(closed_trades, initial_capital=25_000)
    print(f"Sharpe: {metrics.sharpe_ratio}, Kelly: {metrics.kelly_percent}%")

Algorithm:
    1. Copy and stable-sort trades by date (the caller's list is never touched)
    2. Effective P&L per trade -> fractional returns on initial capital
    3. Equity curve from the cumulative P&L
    4. Ratios from the return distribution, drawdowns from the curve
    5. Streaks, expectancy and Kelly from the P&L sequence

Assumptions:
    - Simple returns on initial capital (not compounded, not log)
    - Risk-free rate and annualization periods come from RiskConfig
    - VaR uses historical simulation (non-parametric, index based)
"""

import logging

from trade_analytics.config import AnalyticsConfig, RiskConfig
from trade_analytics.engine.models.result import AdvancedRiskMetrics
from trade_analytics.engine.models.trade import TradeRecord
from trade_analytics.engine.numeric import round_to, safe_divide
from trade_analytics.engine.risk.drawdown import analyze_drawdowns, calc_recovery_factor
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
    calc_kelly_percent,
    calc_streaks,
    calc_win_loss_averages,
)

logger = logging.getLogger(__name__)


def sort_trades_by_date(trades: list[TradeRecord]) -> list[TradeRecord]:
    """Return a new list sorted ascending by trade date; ties keep input order."""
    return sorted(trades, key=lambda t: t.trade_date)


def calculate_advanced_risk_metrics(
    trades: list[TradeRecord],
    initial_capital: float | None = None,
    config: AnalyticsConfig | RiskConfig | None = None,
) -> AdvancedRiskMetrics:
    """Compute the full risk metric suite from a trade history.

    Never raises for numeric reasons: empty input returns all-zero metrics and
    every ratio with a zero denominator falls back to 0.

    Args:
        trades: Closed trades, in any order.
        initial_capital: Starting balance (default from config, 10,000).
        config: AnalyticsConfig or RiskConfig; defaults when omitted.

    Returns:
        AdvancedRiskMetrics rounded to 2 decimals (durations and Kelly to 1).
    """
    risk_config = _resolve_risk_config(config)
    if initial_capital is None:
        initial_capital = risk_config.default_initial_capital

    if not trades:
        logger.debug("No trades supplied, returning empty risk metrics")
        return AdvancedRiskMetrics.empty()

    periods = risk_config.trading_days_per_year
    ordered = sort_trades_by_date(trades)
    pnls = [t.effective_pnl for t in ordered]
    returns = calc_returns(pnls, initial_capital)
    equity_curve = build_equity_curve(pnls, initial_capital)

    sharpe = calc_sharpe_ratio(returns, risk_config.risk_free_rate, periods)
    sortino = calc_sortino_ratio(returns, risk_config.risk_free_rate, periods)

    drawdowns = analyze_drawdowns(equity_curve)
    max_dd_percent = min(drawdowns.max_drawdown_percent, 100.0)

    final_equity = equity_curve[-1]
    net_profit = final_equity - initial_capital
    total_return = safe_divide(net_profit, initial_capital)
    calmar = calc_calmar_ratio(total_return, len(ordered), max_dd_percent, periods)

    var_95 = calc_historical_var(returns, risk_config.var_95_confidence, initial_capital)
    var_99 = calc_historical_var(returns, risk_config.var_99_confidence, initial_capital)

    recovery_factor = calc_recovery_factor(net_profit, drawdowns.max_drawdown)
    win_streak_max, loss_streak_max = calc_streaks(pnls)

    win_rate, avg_win, avg_loss = calc_win_loss_averages(pnls)
    expectancy = calc_expectancy(win_rate, avg_win, avg_loss)
    kelly_percent = calc_kelly_percent(win_rate, avg_win, avg_loss)

    return AdvancedRiskMetrics(
        sharpe_ratio=round_to(sharpe),
        sortino_ratio=round_to(sortino),
        calmar_ratio=round_to(calmar),
        value_at_risk_95=round_to(var_95),
        value_at_risk_99=round_to(var_99),
        max_drawdown=round_to(drawdowns.max_drawdown),
        max_drawdown_percent=round_to(max_dd_percent),
        current_drawdown=round_to(drawdowns.current_drawdown),
        current_drawdown_percent=round_to(drawdowns.current_drawdown_percent),
        avg_drawdown_duration=round_to(drawdowns.avg_duration, 1),
        max_drawdown_duration=drawdowns.max_duration,
        recovery_factor=round_to(recovery_factor),
        win_streak_max=win_streak_max,
        loss_streak_max=loss_streak_max,
        expectancy=round_to(expectancy),
        kelly_percent=round_to(kelly_percent, 1),
    )


def _resolve_risk_config(config: AnalyticsConfig | RiskConfig | None) -> RiskConfig:
    if config is None:
        return RiskConfig()
    if isinstance(config, AnalyticsConfig):
        return config.risk
    return config
