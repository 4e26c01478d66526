"""CLI subcommands."""

from trade_analytics.cli.commands.context import context
from trade_analytics.cli.commands.health import health
from trade_analytics.cli.commands.report import report
from trade_analytics.cli.commands.risk import risk

__all__ = ["context", "health", "report", "risk"]
