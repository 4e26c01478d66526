"""Return-distribution risk ratios.

All functions take per-trade fractional returns (P&L / initial capital)
and are total: degenerate input gives 0 rather than None, NaN or Infinity.
"""

import math

import numpy as np

from trade_analytics.engine.numeric import safe_divide

# Standard deviations below this are treated as zero volatility
_ZERO_VOL = 1e-12


def build_equity_curve(pnls: list[float], initial_capital: float) -> list[float]:
    """Build the cumulative balance series.

    Returns:
        [initial_capital, initial_capital + pnl_0, ...], length len(pnls) + 1.

    Example:
        >>> build_equity_curve([200, -300, 50], 10000)
        [10000.0, 10200.0, 9900.0, 9950.0]
    """
    curve = [float(initial_capital)]
    equity = float(initial_capital)
    for pnl in pnls:
        equity += pnl
        curve.append(equity)
    return curve


def calc_returns(pnls: list[float], initial_capital: float) -> list[float]:
    """Convert P&L values into fractional returns on initial capital."""
    return [safe_divide(pnl, initial_capital) for pnl in pnls]


def calc_sharpe_ratio(
    returns: list[float],
    risk_free_rate: float = 0.0,
    periods_per_year: int = 252,
) -> float:
    """Calculate annualized Sharpe ratio.

    Formula: Sharpe = (Mean Return - Rf / periods) / Std Dev * sqrt(periods_per_year)

    Mean and standard deviation are population statistics (ddof=0).

    Args:
        returns: Per-trade returns (as decimals).
        risk_free_rate: Annual risk-free rate (as decimal).
        periods_per_year: Annualization periods (252 trading days).

    Returns:
        Annualized Sharpe ratio, 0 for empty input or zero volatility.
    """
    if not returns:
        return 0.0

    returns_array = np.asarray(returns, dtype=float)
    mean_excess = float(np.mean(returns_array)) - safe_divide(risk_free_rate, periods_per_year)
    std_dev = float(np.std(returns_array))

    if std_dev < _ZERO_VOL:
        return 0.0

    return safe_divide(mean_excess, std_dev) * math.sqrt(periods_per_year)


def calc_sortino_ratio(
    returns: list[float],
    risk_free_rate: float = 0.0,
    periods_per_year: int = 252,
) -> float:
    """Calculate annualized Sortino ratio.

    Downside deviation is normalized by the full sample size N, not by the
    number of negative returns:

        downside_dev = sqrt(sum(min(r, 0)^2) / N)


    Returns:
        Annualized Sortino ratio, 0 for empty input or no downside.
    """
    if not returns:
        return 0.0

    returns_array = np.asarray(returns, dtype=float)
    mean_excess = float(np.mean(returns_array)) - safe_divide(risk_free_rate, periods_per_year)
    downside = np.minimum(returns_array, 0.0)
    downside_dev = math.sqrt(float(np.sum(downside**2)) / len(returns_array))

    if downside_dev < _ZERO_VOL:
        return 0.0

    return safe_divide(mean_excess, downside_dev) * math.sqrt(periods_per_year)


def calc_calmar_ratio(
    total_return: float,
    trade_count: int,
    max_drawdown_percent: float,
    periods_per_year: int = 252,
) -> float:
    """Calculate Calmar ratio from a trade-count annualized return.

    Formula: Calmar = (total_return * periods / trade_count * 100) / max_drawdown_percent

    Args:
        total_return: (final equity - initial capital) / initial capital.
        trade_count: Number of trades the return was earned over.
        max_drawdown_percent: Maximum drawdown in percent.
        periods_per_year: Annualization periods.

    Returns:
        Calmar ratio, 0 if there was no drawdown or no trades.
    """
    annualized_return = total_return * safe_divide(periods_per_year, trade_count)
    return safe_divide(annualized_return * 100, max_drawdown_percent)


def calc_historical_var(
    returns: list[float],
    confidence: float,
    initial_capital: float,
) -> float:
    """Calculate Value at Risk with the historical-simulation method.

    Index based, not interpolated: the return at ``floor(N * (1 - confidence))``
    of the ascending-sorted returns, taken as an absolute value and scaled
    back to currency by the initial capital.

    Args:
        returns: Per-trade returns (as decimals).
        confidence: Confidence level (e.g. 0.95).
        initial_capital: Capital the returns are expressed against.

    Returns:
        VaR as a positive currency amount, 0 for empty input.

    Example:
        >>> calc_historical_var([-0.03, 0.01, 0.02], 0.95, 10000)
        300.0
    """
    if not returns:
        return 0.0

    sorted_returns = np.sort(np.asarray(returns, dtype=float))
    index = math.floor(len(sorted_returns) * round(1 - confidence, 10))
    index = min(index, len(sorted_returns) - 1)
    return abs(float(sorted_returns[index])) * initial_capital
