"""Drawdown analysis over an equity curve."""

from trade_analytics.engine.models.result import DrawdownStats
from trade_analytics.engine.numeric import safe_divide


def analyze_drawdowns(equity_curve: list[float]) -> DrawdownStats:
    """Single forward pass over the equity curve tracking the running peak.

    A drawdown run starts at the first point that is not a new high and ends
    at the next strictly higher peak; equity merely back at the old peak is
    still under water. A run's length is the number of curve steps from its
    first point to the new high. A run still open at the end of the series
    is counted up to the last point.

    ``max_drawdown_percent`` is the percentage of the deepest absolute
    drawdown relative to the peak it fell from.

    Args:
        equity_curve: Balance series, oldest first, starting with initial capital.

    Returns:
        DrawdownStats (all zero for curves shorter than two points).

    Example:
        >>> stats = analyze_drawdowns([10000, 10200, 9900, 9950, 10300])
        >>> stats.max_drawdown, stats.durations
        (300.0, [2])
    """
    if len(equity_curve) < 2:
        peak = equity_curve[0] if equity_curve else 0.0
        return DrawdownStats(peak=peak)

    peak = equity_curve[0]
    max_dd = 0.0
    max_dd_percent = 0.0
    durations: list[int] = []
    run_start: int | None = None

    for i, value in enumerate(equity_curve[1:], start=1):
        if value > peak:
            peak = value
            if run_start is not None:
                durations.append(i - run_start)
                run_start = None
            continue

        if run_start is None:
            run_start = i
        drawdown = peak - value
        if drawdown > max_dd:
            max_dd = drawdown
            max_dd_percent = safe_divide(drawdown, peak) * 100 if peak > 0 else 0.0

    if run_start is not None:
        durations.append(len(equity_curve) - 1 - run_start)

    final = equity_curve[-1]
    current_dd = max(0.0, peak - final)

    return DrawdownStats(
        max_drawdown=max_dd,
        max_drawdown_percent=max_dd_percent,
        current_drawdown=current_dd,
        current_drawdown_percent=safe_divide(current_dd, peak) * 100 if peak > 0 else 0.0,
        peak=peak,
        durations=durations,
    )


def calc_recovery_factor(net_profit: float, max_drawdown: float) -> float:
    """Recovery factor = net profit / max drawdown (0 when there was no drawdown)."""
    return safe_divide(net_profit, max_drawdown)
