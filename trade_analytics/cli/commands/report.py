"""
Report Command - risk, health and contextual analytics together

Usage:
    trade-analytics report exports/trades.csv --capital 25000 --json
"""

import click

from trade_analytics.cli.common import (
    capital_option,
    common_options,
    compute_risk_and_health,
    echo_json,
    load_inputs,
    print_contextual,
    print_health_score,
    print_risk_metrics,
    setup_logging,
)
from trade_analytics.engine.contextual import calculate_contextual_analytics


@click.command()
@common_options
@capital_option
def report(
    trade_file: str,
    config_path: str | None,
    as_json: bool,
    verbose: bool,
    capital: float | None,
) -> None:
    """Full analytics report."""
    setup_logging(verbose)
    trades, config = load_inputs(trade_file, config_path)
    metrics, score = compute_risk_and_health(trades, config, capital)
    contextual = calculate_contextual_analytics(trades, config)

    if as_json:
        echo_json(
            {
                "risk_metrics": metrics.to_dict(),
                "health_score": score.to_dict(),
                "contextual": contextual.to_dict(),
            }
        )
        return

    print_risk_metrics(metrics)
    click.echo()
    print_health_score(score)
    click.echo()
    print_contextual(contextual)
