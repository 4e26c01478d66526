"""
Analytics Configuration

Tunable policy for the analytics engine, loaded from YAML with dataclass
defaults as the fallback.

## Health score component table (defaults)

| Component             | Weight | Source metric        | Domain -> [0, 100]   |
|-----------------------|--------|----------------------|----------------------|
| Risk-Adjusted Returns | 0.20   | sharpe_ratio         | [-1, 3]              |
| Drawdown Control      | 0.20   | max_drawdown_percent | [50, 0] (inverted)   |
| Win Rate              | 0.15   | win rate %           | [20, 70]             |
| Profit Factor         | 0.15   | profit factor        | [0.5, 3]             |
| Consistency           | 0.15   | streak share + recovery factor [-1, 5] |    |
| Sample Size           | 0.15   | total trades         | [5, 100]             |

## Fear & Greed zones (defaults)

| Zone          | Index value |
|---------------|-------------|
| extremeFear   | <= 20       |
| fear          | <= 40       |
| neutral       | <= 60       |
| greed         | <= 80       |
| extremeGreed  | > 80        |
"""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

VALID_GRADES = ("A+", "A", "B", "C", "D", "F")


class ConfigError(Exception):
    """Invalid analytics configuration."""


@dataclass
class RiskConfig:
    """Risk metrics engine assumptions."""

    risk_free_rate: float = 0.0  # annual, simplified to 0 for crypto
    trading_days_per_year: int = 252
    var_95_confidence: float = 0.95
    var_99_confidence: float = 0.99
    default_initial_capital: float = 10_000.0

    def validate(self) -> list[str]:
        errors = []
        if self.trading_days_per_year <= 0:
            errors.append("risk.trading_days_per_year must be positive")
        for name in ("var_95_confidence", "var_99_confidence"):
            value = getattr(self, name)
            if not 0 < value < 1:
                errors.append(f"risk.{name} must be between 0 and 1")
        if self.default_initial_capital <= 0:
            errors.append("risk.default_initial_capital must be positive")
        return errors


@dataclass
class HealthComponentConfig:
    """Weight and input domain of one health-score component.

    Attributes:
        weight: Weight in the overall score.
        domain: (in_min, in_max) mapped onto [0, 100]; in_min > in_max inverts.
    """

    weight: float
    domain: tuple[float, float]


@dataclass
class GradeBand:
    """Minimum overall score for a grade."""

    min_score: float
    grade: str
    label: str
    color: str


def _default_grade_bands() -> list[GradeBand]:
    return [
        GradeBand(90, "A+", "Excellent", "profit"),
        GradeBand(75, "A", "Strong", "chart-2"),
        GradeBand(60, "B", "Good", "primary"),
        GradeBand(45, "C", "Average", "warning"),
        GradeBand(30, "D", "Below Average", "chart-5"),
        GradeBand(0, "F", "Needs Improvement", "loss"),
    ]


@dataclass
class HealthScoreConfig:
    """Health score weight table and grade thresholds."""

    risk_adjusted: HealthComponentConfig = field(
        default_factory=lambda: HealthComponentConfig(0.20, (-1.0, 3.0))
    )
    drawdown: HealthComponentConfig = field(
        default_factory=lambda: HealthComponentConfig(0.20, (50.0, 0.0))
    )
    win_rate: HealthComponentConfig = field(
        default_factory=lambda: HealthComponentConfig(0.15, (20.0, 70.0))
    )
    profit_factor: HealthComponentConfig = field(
        default_factory=lambda: HealthComponentConfig(0.15, (0.5, 3.0))
    )
    # domain applies to the recovery-factor half of the blend
    consistency: HealthComponentConfig = field(
        default_factory=lambda: HealthComponentConfig(0.15, (-1.0, 5.0))
    )
    sample_size: HealthComponentConfig = field(
        default_factory=lambda: HealthComponentConfig(0.15, (5.0, 100.0))
    )
    consistency_streak_share: float = 0.5
    grade_bands: list[GradeBand] = field(default_factory=_default_grade_bands)

    COMPONENTS = (
        "risk_adjusted",
        "drawdown",
        "win_rate",
        "profit_factor",
        "consistency",
        "sample_size",
    )

    def validate(self) -> list[str]:
        errors = []
        total = 0.0
        for name in self.COMPONENTS:
            component: HealthComponentConfig = getattr(self, name)
            if component.weight < 0:
                errors.append(f"health.{name}.weight must be non-negative")
            if component.domain[0] == component.domain[1]:
                errors.append(f"health.{name}.domain must not be empty")
            total += component.weight
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            errors.append(f"health component weights must sum to 1.0 (got {total:.4f})")
        if not 0 <= self.consistency_streak_share <= 1:
            errors.append("health.consistency_streak_share must be between 0 and 1")
        if not self.grade_bands:
            errors.append("health.grade_bands must not be empty")
        for band in self.grade_bands:
            if band.grade not in VALID_GRADES:
                errors.append(f"health.grade_bands: unknown grade '{band.grade}'")
        return errors


@dataclass
class ContextualConfig:
    """Contextual segmentation thresholds."""

    # Fear/Greed zone upper bounds (inclusive)
    extreme_fear_max: float = 20
    fear_max: float = 40
    neutral_max: float = 60
    greed_max: float = 80

    # Data quality
    min_trades_for_insights: int = 5
    min_trades_for_ranking: int = 3
    min_trades_for_zone_comparison: int = 5
    min_trades_for_correlation: int = 20
    quality_warning_percent: float = 50

    # Insight generation (win-rate points)
    win_rate_diff_significant: float = 15
    poor_win_rate: float = 40
    high_vs_low_volatility_diff: float = 15
    event_day_diff: float = 10
    event_day_pnl_multiplier: float = 1.5

    # Correlation strength (absolute r)
    weak_correlation: float = 0.2
    moderate_correlation: float = 0.5

    def validate(self) -> list[str]:
        errors = []
        bounds = [self.extreme_fear_max, self.fear_max, self.neutral_max, self.greed_max]
        if bounds != sorted(bounds) or not 0 <= bounds[0] <= bounds[-1] <= 100:
            errors.append("contextual fear/greed zone bounds must be ascending within 0-100")
        if self.min_trades_for_correlation < 2:
            errors.append("contextual.min_trades_for_correlation must be at least 2")
        if not 0 < self.weak_correlation < self.moderate_correlation < 1:
            errors.append("contextual correlation thresholds must satisfy 0 < weak < moderate < 1")
        return errors


@dataclass
class AnalyticsConfig:
    """Analytics engine configuration."""

    risk: RiskConfig = field(default_factory=RiskConfig)
    health: HealthScoreConfig = field(default_factory=HealthScoreConfig)
    contextual: ContextualConfig = field(default_factory=ContextualConfig)

    def validate(self) -> list[str]:
        """Validate the configuration.

        Returns:
            List of error messages (empty when valid).
        """
        return self.risk.validate() + self.health.validate() + self.contextual.validate()

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AnalyticsConfig":
        """Load configuration from a YAML file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        overrides: dict[str, Any] | None = None,
    ) -> "AnalyticsConfig":
        """Create configuration from a mapping.

        Args:
            data: Config mapping with optional "risk", "health", "contextual" sections.
            overrides: Optional mapping deep-merged over ``data``.

        Raises:
            ConfigError: On unknown keys or failed validation.
        """
        if overrides:
            data = _merge_sections(data, overrides)

        config = cls()
        try:
            if "risk" in data:
                config.risk = RiskConfig(**(data["risk"] or {}))
            if "health" in data:
                config.health = _health_from_dict(data["health"] or {})
            if "contextual" in data:
                config.contextual = ContextualConfig(**(data["contextual"] or {}))
        except TypeError as e:
            raise ConfigError(f"Invalid analytics config: {e}") from e

        errors = config.validate()
        if errors:
            raise ConfigError("; ".join(errors))
        return config

    @classmethod
    def load(cls, profile: str = "default") -> "AnalyticsConfig":
        """Load a named profile from ``config/analytics/<profile>.yaml``.

        Falls back to dataclass defaults when the file does not exist.
        """
        config_dir = Path(__file__).parent.parent.parent / "config" / "analytics"
        config_file = config_dir / f"{profile}.yaml"
        if config_file.exists():
            return cls.from_yaml(config_file)
        logger.debug(f"No config file for profile '{profile}', using defaults")
        return cls()


def _health_from_dict(data: dict[str, Any]) -> HealthScoreConfig:
    config = HealthScoreConfig()
    for name in HealthScoreConfig.COMPONENTS:
        if name in data:
            raw = data[name]
            default: HealthComponentConfig = getattr(config, name)
            domain = raw.get("domain", default.domain)
            if len(domain) != 2:
                raise ConfigError(f"health.{name}.domain must have two values")
            setattr(
                config,
                name,
                HealthComponentConfig(
                    weight=float(raw.get("weight", default.weight)),
                    domain=(float(domain[0]), float(domain[1])),
                ),
            )
    if "consistency_streak_share" in data:
        config.consistency_streak_share = float(data["consistency_streak_share"])
    if "grade_bands" in data:
        bands = [GradeBand(**band) for band in data["grade_bands"]]
        config.grade_bands = sorted(bands, key=lambda b: b.min_score, reverse=True)
    return config


def _merge_sections(data: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Overlay ``overrides`` on a config mapping, section by section.

    Nested mappings (sections, health components) merge key by key; any
    other value replaces the one in ``data``. Neither input is modified.
    """
    merged = dict(data)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge_sections(current, value)
        else:
            merged[key] = value
    return merged
