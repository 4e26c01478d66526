"""Market-context classification of trades.

Maps raw context readings onto the categorical buckets used for
segmentation:
- Fear & Greed index value -> FearGreedZone (5 zones)
- Volatility level (missing -> MEDIUM)
- Event proximity (explicit, else high-impact-today -> EVENT_DAY)
- Trading session (stored column, then context, then UTC hour)
"""

from datetime import datetime, timezone
from enum import Enum

from trade_analytics.config import ContextualConfig
from trade_analytics.engine.models.enums import (
    EventProximity,
    FearGreedZone,
    TradingSession,
    VolatilityLevel,
)
from trade_analytics.engine.models.trade import MarketContext, TradeRecord

SEGMENT_LABELS: dict[Enum, str] = {
    FearGreedZone.EXTREME_FEAR: "Extreme Fear",
    FearGreedZone.FEAR: "Fear",
    FearGreedZone.NEUTRAL: "Neutral",
    FearGreedZone.GREED: "Greed",
    FearGreedZone.EXTREME_GREED: "Extreme Greed",
    VolatilityLevel.LOW: "Low Volatility",
    VolatilityLevel.MEDIUM: "Medium Volatility",
    VolatilityLevel.HIGH: "High Volatility",
    EventProximity.EVENT_DAY: "Event Day",
    EventProximity.DAY_BEFORE: "Day Before Event",
    EventProximity.DAY_AFTER: "Day After Event",
    EventProximity.NORMAL_DAY: "Normal Day",
    TradingSession.SYDNEY: "Sydney",
    TradingSession.TOKYO: "Tokyo",
    TradingSession.LONDON: "London",
    TradingSession.NEW_YORK: "New York",
    TradingSession.OTHER: "Other",
}

# Session windows in UTC hours (start inclusive, end exclusive).
# Checked in this order; Sydney crosses midnight.
SESSION_UTC_HOURS: list[tuple[TradingSession, int, int]] = [
    (TradingSession.SYDNEY, 21, 6),
    (TradingSession.TOKYO, 0, 9),
    (TradingSession.LONDON, 7, 16),
    (TradingSession.NEW_YORK, 12, 21),
]


def get_fear_greed_zone(value: float, config: ContextualConfig | None = None) -> FearGreedZone:
    """Classify a Fear & Greed index value.

    Zone upper bounds are inclusive: <=20 extreme fear, <=40 fear,
    <=60 neutral, <=80 greed, above that extreme greed.

    Example:
        >>> get_fear_greed_zone(20)
        <FearGreedZone.EXTREME_FEAR: 'extremeFear'>
    """
    cfg = config or ContextualConfig()
    if value <= cfg.extreme_fear_max:
        return FearGreedZone.EXTREME_FEAR
    if value <= cfg.fear_max:
        return FearGreedZone.FEAR
    if value <= cfg.neutral_max:
        return FearGreedZone.NEUTRAL
    if value <= cfg.greed_max:
        return FearGreedZone.GREED
    return FearGreedZone.EXTREME_GREED


def get_volatility_level(context: MarketContext) -> VolatilityLevel:
    """Volatility level of a context; MEDIUM when not captured."""
    return context.volatility_level or VolatilityLevel.MEDIUM


def get_event_proximity(context: MarketContext) -> EventProximity:
    """Event proximity of a context.

    An explicit classification wins; otherwise a high-impact event on the
    trade day means EVENT_DAY and anything else NORMAL_DAY.
    """
    if context.event_proximity is not None:
        return context.event_proximity
    if context.has_high_impact_event:
        return EventProximity.EVENT_DAY
    return EventProximity.NORMAL_DAY


def get_session_for_time(moment: datetime) -> TradingSession:
    """Trading session for a timestamp, by its UTC hour.

    Example:
        >>> get_session_for_time(datetime(2024, 1, 5, 14, tzinfo=timezone.utc))
        <TradingSession.LONDON: 'london'>
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    hour = moment.astimezone(timezone.utc).hour

    for session, start, end in SESSION_UTC_HOURS:
        if start > end:
            if hour >= start or hour < end:
                return session
        elif start <= hour < end:
            return session
    return TradingSession.OTHER


def get_trade_session(trade: TradeRecord) -> TradingSession:
    """Session of a trade: stored column, then context snapshot, then trade time."""
    if trade.session is not None:
        return trade.session
    if trade.market_context is not None and trade.market_context.session is not None:
        return trade.market_context.session
    return get_session_for_time(trade.trade_date)


def segment_label(bucket: Enum) -> str:
    """Display label of a segment bucket."""
    return SEGMENT_LABELS.get(bucket, str(bucket.value))
