"""
Configuration Management

Loads analytics policy (risk assumptions, health score weights, contextual
thresholds) from YAML with dataclass defaults.
"""

from trade_analytics.config.analytics_config import (
    AnalyticsConfig,
    ConfigError,
    ContextualConfig,
    GradeBand,
    HealthComponentConfig,
    HealthScoreConfig,
    RiskConfig,
)

__all__ = [
    "AnalyticsConfig",
    "ConfigError",
    "ContextualConfig",
    "GradeBand",
    "HealthComponentConfig",
    "HealthScoreConfig",
    "RiskConfig",
]
