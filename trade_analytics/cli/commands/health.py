"""
Health Command - composite trading health score

Usage:
    trade-analytics health exports/trades.csv
"""

import click

from trade_analytics.cli.common import (
    capital_option,
    common_options,
    compute_risk_and_health,
    echo_json,
    load_inputs,
    print_health_score,
    setup_logging,
)


@click.command()
@common_options
@capital_option
def health(
    trade_file: str,
    config_path: str | None,
    as_json: bool,
    verbose: bool,
    capital: float | None,
) -> None:
    """Overall 0-100 health score, grade and weighted breakdown."""
    setup_logging(verbose)
    trades, config = load_inputs(trade_file, config_path)
    _, score = compute_risk_and_health(trades, config, capital)

    if as_json:
        echo_json(score.to_dict())
        return
    print_health_score(score)
