"""Engine layer enumerations.

Centralized location for all enums used in the engine layer.
"""

from enum import Enum


class TradeResult(Enum):
    """Recorded trade outcome tag."""

    WIN = "win"
    LOSS = "loss"
    BREAKEVEN = "breakeven"


class FearGreedZone(Enum):
    """Fear & Greed index zones (index value 0-100)."""

    EXTREME_FEAR = "extremeFear"  # <= 20
    FEAR = "fear"  # 21-40
    NEUTRAL = "neutral"  # 41-60
    GREED = "greed"  # 61-80
    EXTREME_GREED = "extremeGreed"  # > 80


class VolatilityLevel(Enum):
    """Market volatility level at trade time."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EventProximity(Enum):
    """Distance of a trade from a high-impact economic event."""

    EVENT_DAY = "eventDay"
    DAY_BEFORE = "dayBefore"
    DAY_AFTER = "dayAfter"
    NORMAL_DAY = "normalDay"


class TradingSession(Enum):
    """Trading session, defined on UTC hours."""

    SYDNEY = "sydney"  # 21:00-06:00 UTC
    TOKYO = "tokyo"  # 00:00-09:00 UTC
    LONDON = "london"  # 07:00-16:00 UTC
    NEW_YORK = "new_york"  # 12:00-21:00 UTC
    OTHER = "other"


class HealthGrade(Enum):
    """Letter grade of the trading health score."""

    A_PLUS = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class CorrelationStrength(Enum):
    """Correlation strength bucket."""

    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"
    INSUFFICIENT_DATA = "insufficient_data"


class CorrelationDirection(Enum):
    """Correlation sign."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NONE = "none"


class InsightType(Enum):
    """Kind of generated contextual insight."""

    OPPORTUNITY = "opportunity"
    WARNING = "warning"
    PATTERN = "pattern"
