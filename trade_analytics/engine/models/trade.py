"""Trade input models.

A trade record is the only input shape the engine consumes. Records are
immutable; the engine never mutates the caller's list or its items.

Records can be built from exported rows with ``TradeRecord.from_dict``,
which accepts both snake_case and camelCase keys and either a nested
``market_context`` object or flattened context columns.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, TypeVar

from trade_analytics.engine.models.enums import (
    EventProximity,
    TradeResult,
    TradingSession,
    VolatilityLevel,
)

E = TypeVar("E", bound=Enum)


class TradeParseError(ValueError):
    """Raised when a raw trade row cannot be converted to a TradeRecord."""


@dataclass(frozen=True)
class MarketContext:
    """Market conditions captured when the trade was opened.

    Attributes:
        fear_greed_value: Fear & Greed index value (0-100).
        volatility_level: Categorical volatility level.
        volatility_value: Numeric volatility reading (e.g. ATR %).
        event_proximity: Explicit event-proximity classification.
        has_high_impact_event: Whether a high-impact event was scheduled that day.
        session: Trading session stored with the context snapshot.
    """

    fear_greed_value: float | None = None
    volatility_level: VolatilityLevel | None = None
    volatility_value: float | None = None
    event_proximity: EventProximity | None = None
    has_high_impact_event: bool = False
    session: TradingSession | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MarketContext":
        """Create a context from a flat or nested mapping.

        Nested form follows the journal export::

            {"fearGreed": {"value": 25}, "volatility": {"level": "high", "value": 3.1},
             "events": {"hasHighImpactToday": true}, "session": {"current": "london"}}
        """
        fear_greed = _first(data, "fear_greed_value", "fearGreedValue")
        fg_obj = _first(data, "fear_greed", "fearGreed")
        if fear_greed is None and fg_obj is not None:
            fear_greed = fg_obj.get("value") if isinstance(fg_obj, dict) else fg_obj

        vol_level = _first(data, "volatility_level", "volatilityLevel")
        vol_value = _first(data, "volatility_value", "volatilityValue")
        vol_obj = data.get("volatility")
        if isinstance(vol_obj, dict):
            vol_level = vol_level if vol_level is not None else vol_obj.get("level")
            vol_value = vol_value if vol_value is not None else vol_obj.get("value")
        elif vol_obj is not None and vol_level is None:
            vol_level = vol_obj

        high_impact = _first(data, "has_high_impact_event", "hasHighImpactEvent")
        events = data.get("events")
        if high_impact is None and isinstance(events, dict):
            high_impact = events.get("hasHighImpactToday")

        session = data.get("session")
        if isinstance(session, dict):
            session = session.get("current")

        return cls(
            fear_greed_value=_parse_float(fear_greed, "fear_greed_value"),
            volatility_level=_parse_enum(VolatilityLevel, vol_level, "volatility_level"),
            volatility_value=_parse_float(vol_value, "volatility_value"),
            event_proximity=_parse_enum(
                EventProximity,
                _first(data, "event_proximity", "eventProximity"),
                "event_proximity",
            ),
            has_high_impact_event=_parse_bool(high_impact),
            session=_parse_enum(TradingSession, session, "session"),
        )


# Flattened context columns that may appear directly on a trade row
_FLAT_CONTEXT_KEYS = (
    "fear_greed_value",
    "fearGreedValue",
    "volatility_level",
    "volatilityLevel",
    "volatility_value",
    "volatilityValue",
    "event_proximity",
    "eventProximity",
    "has_high_impact_event",
    "hasHighImpactEvent",
)


@dataclass(frozen=True)
class TradeRecord:
    """A closed (or open) journal trade.

    Attributes:
        pnl: Estimated P&L (fallback when realized_pnl is absent).
        trade_date: Trade timestamp, timezone-aware (naive input is taken as UTC).
        realized_pnl: Realized P&L reported by the exchange (preferred).
        result: Recorded outcome tag.
        status: Lifecycle status; only "closed" trades are analysed contextually.
        session: Stored trading session column.
        market_context: Market conditions at entry, if captured.
        symbol: Instrument symbol.
    """

    pnl: float
    trade_date: datetime
    realized_pnl: float | None = None
    result: TradeResult | None = None
    status: str = "closed"
    session: TradingSession | None = None
    market_context: MarketContext | None = None
    symbol: str = ""

    def __post_init__(self):
        if not isinstance(self.trade_date, datetime) or self.trade_date.tzinfo is None:
            object.__setattr__(self, "trade_date", parse_trade_date(self.trade_date))

    @property
    def effective_pnl(self) -> float:
        """P&L with the journal-wide fallback: realized_pnl, then pnl, then 0."""
        if self.realized_pnl is not None:
            return self.realized_pnl
        if self.pnl is not None:
            return self.pnl
        return 0.0

    @property
    def is_closed(self) -> bool:
        return self.status == "closed"

    @property
    def has_context(self) -> bool:
        return self.market_context is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TradeRecord":
        """Create a trade from an exported row.

        Raises:
            TradeParseError: If the date is missing/invalid or a field has a bad value.
        """
        raw_date = _first(data, "trade_date", "tradeDate", "date")
        if raw_date is None:
            raise TradeParseError("trade_date is required")

        context_data = _first(data, "market_context", "marketContext")
        if isinstance(context_data, dict):
            market_context = MarketContext.from_dict(context_data)
        elif any(data.get(k) is not None for k in _FLAT_CONTEXT_KEYS):
            market_context = MarketContext.from_dict(data)
        else:
            market_context = None

        pnl = _parse_float(data.get("pnl"), "pnl")
        status = data.get("status") or "closed"

        return cls(
            pnl=pnl if pnl is not None else 0.0,
            trade_date=parse_trade_date(raw_date),
            realized_pnl=_parse_float(_first(data, "realized_pnl", "realizedPnl"), "realized_pnl"),
            result=_parse_enum(TradeResult, data.get("result"), "result"),
            status=str(status).lower(),
            session=_parse_enum(TradingSession, data.get("session"), "session"),
            market_context=market_context,
            symbol=str(data.get("symbol") or data.get("pair") or ""),
        )


def parse_trade_date(value: Any) -> datetime:
    """Convert a date-like value into a timezone-aware datetime.

    Args:
        value: datetime, date, or ISO-8601 string (a trailing "Z" is accepted).

    Returns:
        Aware datetime; naive values are assumed to be UTC.

    Raises:
        TradeParseError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise TradeParseError(f"invalid trade_date: {value!r}") from e
    else:
        raise TradeParseError(f"invalid trade_date: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _first(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _parse_float(value: Any, field_name: str) -> float | None:
    if value is None or value == "":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError) as e:
        raise TradeParseError(f"invalid {field_name}: {value!r}") from e
    if math.isnan(result):
        return None
    return result


def _parse_enum(enum_cls: type[E], value: Any, field_name: str) -> E | None:
    if value is None or value == "":
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip())
    except ValueError:
        # Accept case variants such as "LOW" or "New_York"
        lowered = str(value).strip().lower()
        for member in enum_cls:
            if member.value.lower() == lowered:
                return member
        raise TradeParseError(f"invalid {field_name}: {value!r}") from None


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y")
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)
