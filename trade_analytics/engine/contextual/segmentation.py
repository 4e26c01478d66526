"""Per-segment performance aggregation."""

from collections import defaultdict
from collections.abc import Callable, Iterable
from enum import Enum
from typing import TypeVar

from trade_analytics.engine.models.result import PerformanceMetrics
from trade_analytics.engine.models.trade import TradeRecord
from trade_analytics.engine.numeric import safe_divide

K = TypeVar("K", bound=Enum)


def calc_performance_metrics(pnls: list[float]) -> PerformanceMetrics:
    """Aggregate a segment's P&L values.

    Win rate is 100 * wins / count; profit factor is gross profit / gross
    loss and 0 when the segment has no losses. An empty segment is all zero.

    Example:
        >>> m = calc_performance_metrics([100, -50, 30])
        >>> m.trades, m.wins, round(m.win_rate, 1), m.total_pnl
        (3, 2, 66.7, 80)
    """
    if not pnls:
        return PerformanceMetrics()

    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p < 0]
    total_pnl = sum(pnls)

    return PerformanceMetrics(
        trades=len(pnls),
        wins=len(wins),
        losses=len(losses),
        win_rate=safe_divide(100 * len(wins), len(pnls)),
        total_pnl=total_pnl,
        avg_pnl=safe_divide(total_pnl, len(pnls)),
        profit_factor=safe_divide(sum(wins), abs(sum(losses))),
    )


def segment_trades(
    trades: Iterable[TradeRecord],
    key_fn: Callable[[TradeRecord], K | None],
    buckets: Iterable[K],
) -> dict[K, PerformanceMetrics]:
    """Group trades by a categorical key and aggregate each group.

    Every bucket is present in the result, in declaration order, including
    buckets without trades. Trades whose key is None are left out.

    Args:
        trades: Trades to segment.
        key_fn: Returns the bucket of a trade, or None to skip it.
        buckets: All buckets of the dimension.

    Returns:
        bucket -> PerformanceMetrics
    """
    groups: dict[K, list[float]] = defaultdict(list)
    for trade in trades:
        key = key_fn(trade)
        if key is not None:
            groups[key].append(trade.effective_pnl)

    return {bucket: calc_performance_metrics(groups.get(bucket, [])) for bucket in buckets}


def find_best_segment(
    segments: dict[K, PerformanceMetrics],
    min_trades: int = 1,
) -> K | None:
    """Bucket with the highest win rate among those with at least ``min_trades``.

    Ties go to the first bucket in iteration order.
    """
    best: K | None = None
    best_rate = -1.0
    for bucket, metrics in segments.items():
        if metrics.trades < max(1, min_trades):
            continue
        if metrics.win_rate > best_rate:
            best, best_rate = bucket, metrics.win_rate
    return best


def count_active_segments(segments: dict[K, PerformanceMetrics]) -> int:
    return sum(1 for m in segments.values() if m.trades > 0)


def combine_segments(
    segments: dict[K, PerformanceMetrics],
    keys: Iterable[K],
) -> PerformanceMetrics:
    """Merge several buckets into one aggregate (e.g. fear + extreme fear)."""
    parts = [segments[k] for k in keys]
    trades = sum(m.trades for m in parts)
    wins = sum(m.wins for m in parts)
    total_pnl = sum(m.total_pnl for m in parts)
    return PerformanceMetrics(
        trades=trades,
        wins=wins,
        losses=sum(m.losses for m in parts),
        win_rate=safe_divide(100 * wins, trades),
        total_pnl=total_pnl,
        avg_pnl=safe_divide(total_pnl, trades),
    )
