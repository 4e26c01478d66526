"""Trade outcome statistics: streaks, expectancy and Kelly sizing.

Inputs are per-trade P&L values in chronological order. A trade is a win
when P&L > 0, a loss when P&L < 0; zero-P&L trades are neither.
"""

from trade_analytics.engine.models.result import TradeSummary
from trade_analytics.engine.numeric import safe_divide


def calc_streaks(pnls: list[float]) -> tuple[int, int]:
    """Longest consecutive win and loss runs.

    Zero-P&L trades are skipped: they neither extend nor break a run.

    Returns:
        (win_streak_max, loss_streak_max)

    Example:
        >>> calc_streaks([10, 20, -5, -3, -1])
        (2, 3)
    """
    win_streak = loss_streak = 0
    max_win = max_loss = 0

    for pnl in pnls:
        if pnl > 0:
            win_streak += 1
            loss_streak = 0
            max_win = max(max_win, win_streak)
        elif pnl < 0:
            loss_streak += 1
            win_streak = 0
            max_loss = max(max_loss, loss_streak)

    return max_win, max_loss


def calc_win_loss_averages(pnls: list[float]) -> tuple[float, float, float]:
    """Win rate and average win/loss magnitudes.

    Returns:
        (win_rate as 0-1, avg_win, avg_loss as a positive number)
    """
    wins = [p for p in pnls if p > 0]
    losses = [abs(p) for p in pnls if p < 0]

    win_rate = safe_divide(len(wins), len(pnls))
    avg_win = safe_divide(sum(wins), len(wins))
    avg_loss = safe_divide(sum(losses), len(losses))
    return win_rate, avg_win, avg_loss


def calc_expectancy(win_rate: float, avg_win: float, avg_loss: float) -> float:
    """Expected P&L per trade.

    Formula: E = win_rate * avg_win - (1 - win_rate) * avg_loss

    Example:
        >>> calc_expectancy(0.6, 100, 50)
        40.0
    """
    return win_rate * avg_win - (1 - win_rate) * abs(avg_loss)


def calc_kelly(win_rate: float, win_loss_ratio: float) -> float:
    """Calculate Kelly criterion optimal bet fraction.

    Formula: Kelly = W - (1-W)/R
    where W = win rate, R = avg win / avg loss

    Args:
        win_rate: Probability of winning (0-1).
        win_loss_ratio: Ratio of average win to average loss.

    Returns:
        Kelly fraction (0-1). 0 when the edge is negative or R is not positive.

    Example:
        >>> round(calc_kelly(0.6, 1.5), 4)  # 60% win rate, 1.5:1 win/loss ratio
        0.3333
    """
    if win_loss_ratio <= 0:
        return 0.0

    kelly = win_rate - (1 - win_rate) / win_loss_ratio

    # Don't bet if Kelly is negative
    return max(0.0, kelly)


def calc_kelly_percent(win_rate: float, avg_win: float, avg_loss: float) -> float:
    """Kelly criterion as a percentage (0-100).

    Forced to 0 when there are no losing trades yet.
    """
    if avg_loss <= 0:
        return 0.0
    return calc_kelly(win_rate, safe_divide(avg_win, avg_loss)) * 100


def interpret_kelly(kelly_percent: float) -> str:
    """Interpret a Kelly percentage.

    Args:
        kelly_percent: Kelly size in percent (0-100).

    Returns:
        Interpretation string.
    """
    kelly = kelly_percent / 100
    if kelly <= 0:
        return "no_edge"  # No positive edge, don't size up
    elif kelly < 0.05:
        return "marginal"
    elif kelly < 0.15:
        return "small"
    elif kelly < 0.25:
        return "moderate"
    elif kelly < 0.40:
        return "strong"
    else:
        return "very_strong"  # be cautious, may be overfitting


def calc_trade_summary(pnls: list[float]) -> TradeSummary:
    """Basic win/loss statistics used as health-score inputs.

    Profit factor is gross profit / gross loss; infinite when there is profit
    but no loss, 0 when there is neither.

    Example:
        >>> s = calc_trade_summary([100, -50, 200, -30, 150])
        >>> s.win_rate, round(s.profit_factor, 2)
        (60.0, 5.62)
    """
    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p < 0]
    gross_profit = sum(wins)
    gross_loss = abs(sum(losses))

    if gross_loss > 0:
        profit_factor = gross_profit / gross_loss
    elif gross_profit > 0:
        profit_factor = float("inf")
    else:
        profit_factor = 0.0

    return TradeSummary(
        total_trades=len(pnls),
        wins=len(wins),
        losses=len(losses),
        breakeven=len(pnls) - len(wins) - len(losses),
        win_rate=safe_divide(100 * len(wins), len(pnls)),
        profit_factor=profit_factor,
        gross_profit=gross_profit,
        gross_loss=gross_loss,
        net_pnl=sum(pnls),
    )
