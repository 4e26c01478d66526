"""
Context Command - performance by market conditions

Usage:
    trade-analytics context exports/trades.json --json
"""

import click

from trade_analytics.cli.common import (
    common_options,
    echo_json,
    load_inputs,
    print_contextual,
    setup_logging,
)
from trade_analytics.engine.contextual import calculate_contextual_analytics


@click.command()
@common_options
def context(
    trade_file: str,
    config_path: str | None,
    as_json: bool,
    verbose: bool,
) -> None:
    """Segment tables, condition correlations and insights."""
    setup_logging(verbose)
    trades, config = load_inputs(trade_file, config_path)
    result = calculate_contextual_analytics(trades, config)

    if as_json:
        echo_json(result.to_dict())
        return
    print_contextual(result)
