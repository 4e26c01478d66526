"""
Risk Command - equity-curve risk metrics

Usage:
    trade-analytics risk exports/trades.csv --capital 25000
"""

import click

from trade_analytics.cli.common import (
    capital_option,
    common_options,
    compute_risk_and_health,
    echo_json,
    load_inputs,
    print_risk_metrics,
    setup_logging,
)


@click.command()
@common_options
@capital_option
def risk(
    trade_file: str,
    config_path: str | None,
    as_json: bool,
    verbose: bool,
    capital: float | None,
) -> None:
    """Sharpe, Sortino, Calmar, VaR, drawdown, streaks and Kelly sizing."""
    setup_logging(verbose)
    trades, config = load_inputs(trade_file, config_path)
    metrics, _ = compute_risk_and_health(trades, config, capital)

    if as_json:
        echo_json(metrics.to_dict())
        return
    print_risk_metrics(metrics)
