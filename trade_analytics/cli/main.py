"""
Trade Analytics CLI Main Entry Point

Usage:
    trade-analytics --help
    trade-analytics report --help
"""

import click

from trade_analytics import __version__
from trade_analytics.cli.commands import context, health, report, risk


@click.group()
@click.version_option(version=__version__, prog_name="trade-analytics")
def cli() -> None:
    """Trading journal analytics.

    Risk metrics, health score and market-context segmentation for a
    trade export (CSV, JSON or Parquet).

    \b
    Examples:
        # Risk metrics with a 25k starting balance
        trade-analytics risk trades.csv --capital 25000

        # Everything, as JSON
        trade-analytics report trades.json --json
    """
    pass


cli.add_command(risk)
cli.add_command(health)
cli.add_command(context)
cli.add_command(report)


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
