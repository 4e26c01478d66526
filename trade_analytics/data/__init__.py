"""Trade export loading."""

from trade_analytics.data.loader import SUPPORTED_SUFFIXES, load_trades, parse_trade_rows

__all__ = [
    "SUPPORTED_SUFFIXES",
    "load_trades",
    "parse_trade_rows",
]
