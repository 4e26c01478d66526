"""Shared CLI plumbing: logging, config and trade file loading, output formatting."""

import json
import logging
import sys
from typing import Any

import click

from trade_analytics.config import AnalyticsConfig, ConfigError
from trade_analytics.data import load_trades
from trade_analytics.engine.contextual.classify import segment_label
from trade_analytics.engine.health import calculate_trading_health_score
from trade_analytics.engine.models import (
    AdvancedRiskMetrics,
    ContextualAnalyticsResult,
    PerformanceMetrics,
    TradeRecord,
    TradingHealthScore,
)
from trade_analytics.engine.risk import calc_trade_summary, calculate_advanced_risk_metrics

logger = logging.getLogger(__name__)


def common_options(func):
    """Options shared by every analytics command."""
    func = click.option(
        "--verbose",
        "-v",
        is_flag=True,
        help="Verbose (DEBUG) logging",
    )(func)
    func = click.option(
        "--json",
        "as_json",
        is_flag=True,
        help="JSON output",
    )(func)
    func = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="Analytics config YAML (default: config/analytics/default.yaml)",
    )(func)
    func = click.argument(
        "trade_file",
        type=click.Path(exists=True, dir_okay=False),
    )(func)
    return func


def capital_option(func):
    return click.option(
        "--capital",
        "-c",
        type=float,
        default=None,
        help="Initial capital (default: risk.default_initial_capital)",
    )(func)


def setup_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def load_inputs(trade_file: str, config_path: str | None) -> tuple[list[TradeRecord], AnalyticsConfig]:
    """Load config and trades, exiting with status 1 on bad input."""
    try:
        if config_path:
            config = AnalyticsConfig.from_yaml(config_path)
        else:
            config = AnalyticsConfig.load()
        trades = load_trades(trade_file)
    except (ConfigError, FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    return trades, config


def compute_risk_and_health(
    trades: list[TradeRecord],
    config: AnalyticsConfig,
    capital: float | None,
) -> tuple[AdvancedRiskMetrics, TradingHealthScore]:
    """Risk metrics and health score over the closed trades."""
    closed = [t for t in trades if t.is_closed]
    metrics = calculate_advanced_risk_metrics(closed, capital, config)
    summary = calc_trade_summary([t.effective_pnl for t in closed])
    health = calculate_trading_health_score(
        metrics,
        win_rate_percent=summary.win_rate,
        total_trades=summary.total_trades,
        profit_factor=summary.profit_factor,
        config=config,
    )
    return metrics, health


def echo_json(data: dict[str, Any]) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def print_header(title: str) -> None:
    click.echo("=" * 60)
    click.echo(title)
    click.echo("=" * 60)


def print_risk_metrics(metrics: AdvancedRiskMetrics) -> None:
    print_header("Risk Metrics")
    click.echo(f"Sharpe Ratio:        {metrics.sharpe_ratio:>10.2f}")
    click.echo(f"Sortino Ratio:       {metrics.sortino_ratio:>10.2f}")
    click.echo(f"Calmar Ratio:        {metrics.calmar_ratio:>10.2f}")
    click.echo(f"VaR 95%:             {metrics.value_at_risk_95:>10,.2f}")
    click.echo(f"VaR 99%:             {metrics.value_at_risk_99:>10,.2f}")
    click.echo(
        f"Max Drawdown:        {metrics.max_drawdown:>10,.2f} ({metrics.max_drawdown_percent:.2f}%)"
    )
    click.echo(
        f"Current Drawdown:    {metrics.current_drawdown:>10,.2f} "
        f"({metrics.current_drawdown_percent:.2f}%)"
    )
    click.echo(
        f"Drawdown Duration:   {metrics.avg_drawdown_duration:>10.1f} avg, "
        f"{metrics.max_drawdown_duration} max (trades)"
    )
    click.echo(f"Recovery Factor:     {metrics.recovery_factor:>10.2f}")
    click.echo(
        f"Streaks:             {metrics.win_streak_max:>4} wins / {metrics.loss_streak_max} losses"
    )
    click.echo(f"Expectancy:          {metrics.expectancy:>10,.2f}")
    click.echo(f"Kelly:               {metrics.kelly_percent:>9.1f}%")


def print_health_score(health: TradingHealthScore) -> None:
    print_header(f"Trading Health: {health.overall}/100  {health.grade.value} ({health.label})")
    click.echo(f"{'Component':<24} {'Score':>7} {'Weight':>7} {'Value':>10}")
    click.echo("-" * 60)
    for item in health.breakdown:
        click.echo(
            f"{item.name:<24} {item.score:>7.1f} {item.weight:>7.2f} {item.value:>10.2f}"
        )


def _print_segments(title: str, segments: dict[Any, PerformanceMetrics]) -> None:
    click.echo()
    click.echo(title)
    click.echo(f"  {'Segment':<20} {'Trades':>6} {'Win %':>7} {'Total P&L':>12} {'Avg P&L':>10}")
    for bucket, m in segments.items():
        click.echo(
            f"  {segment_label(bucket):<20} {m.trades:>6} {m.win_rate:>6.1f}% "
            f"{m.total_pnl:>12,.2f} {m.avg_pnl:>10,.2f}"
        )


def print_contextual(result: ContextualAnalyticsResult) -> None:
    print_header("Contextual Analytics")
    click.echo(
        f"Closed trades: {result.total_analyzed_trades}, with context: "
        f"{result.trades_with_context} ({result.data_quality_percent:.0f}%)"
    )
    if result.data_quality_warning:
        click.echo("Warning: fewer than half of the trades carry market context.")

    _print_segments("By Volatility", result.by_volatility)
    _print_segments("By Fear & Greed", result.by_fear_greed)
    _print_segments("By Event Proximity", result.by_event_proximity)
    _print_segments("By Session", result.by_session)

    click.echo()
    click.echo("Correlations")
    for corr in result.correlations.values():
        value = f"{corr.value:+.2f}" if corr.value is not None else "n/a"
        click.echo(
            f"  {corr.name:<24} {value:>6}  {corr.strength.value} (n={corr.sample_size})"
        )

    if result.insights:
        click.echo()
        click.echo("Insights")
        for insight in result.insights:
            click.echo(f"  [{insight.type.value}] {insight.title}")
            click.echo(f"    {insight.description}")
            click.echo(f"    -> {insight.recommendation}")
    elif not result.has_sufficient_data:
        click.echo()
        click.echo("Not enough closed trades for insights.")
