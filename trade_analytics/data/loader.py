"""
Trade Loader - journal export files -> TradeRecord

Supported formats (by file suffix):
- .csv: one trade per row; market context as flat columns or a JSON
  encoded ``market_context`` column
- .json: list of trade objects, or {"trades": [...]}
- .parquet: same columns as CSV

Usage:
    trades = load_trades("exports/trades.csv")
    trades = load_trades("exports/trades.json", strict=True)
"""

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from trade_analytics.engine.models.trade import TradeParseError, TradeRecord

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".json", ".parquet")

_CONTEXT_COLUMNS = ("market_context", "marketContext")


def load_trades(path: str | Path, strict: bool = False) -> list[TradeRecord]:
    """Load a trade export file.

    Args:
        path: CSV, JSON or Parquet file.
        strict: Raise on the first invalid row instead of skipping it.

    Returns:
        Parsed trades in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the format is unsupported or the file is malformed.
        TradeParseError: In strict mode, for the first invalid row.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Trade file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        rows = _read_json_rows(path)
    elif suffix == ".csv":
        rows = _frame_to_rows(pd.read_csv(path))
    elif suffix == ".parquet":
        rows = _frame_to_rows(pd.read_parquet(path))
    else:
        raise ValueError(
            f"Unsupported trade file format '{suffix}' (expected one of {', '.join(SUPPORTED_SUFFIXES)})"
        )

    trades = parse_trade_rows(rows, strict=strict)
    logger.info(f"Loaded {len(trades)} trades from {path}")
    return trades


def parse_trade_rows(rows: list[dict[str, Any]], strict: bool = False) -> list[TradeRecord]:
    """Convert raw rows into trades, skipping invalid rows unless ``strict``."""
    trades: list[TradeRecord] = []
    skipped = 0
    for index, row in enumerate(rows):
        try:
            trades.append(TradeRecord.from_dict(row))
        except TradeParseError as e:
            if strict:
                raise TradeParseError(f"row {index}: {e}") from e
            skipped += 1
            logger.warning(f"Skipping trade row {index}: {e}")

    if skipped:
        logger.warning(f"Skipped {skipped} of {len(rows)} trade rows")
    return trades


def _read_json_rows(path: Path) -> list[dict[str, Any]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("trades", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of trades")
    return [row for row in data if isinstance(row, dict)]


def _frame_to_rows(df: pd.DataFrame) -> list[dict[str, Any]]:
    """DataFrame rows as dicts, with NaN cells as None and JSON context decoded."""
    df = df.astype(object).where(pd.notna(df), None)
    rows = df.to_dict(orient="records")

    for row in rows:
        for column in _CONTEXT_COLUMNS:
            value = row.get(column)
            if isinstance(value, str) and value.strip():
                try:
                    row[column] = json.loads(value)
                except json.JSONDecodeError:
                    logger.debug(f"Ignoring undecodable {column}: {value!r}")
                    row[column] = None
    return rows
