"""
Pytest fixtures shared by the analytics tests.

Provides trade factories and small journal exports written to tmp_path.
"""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pandas as pd
import pytest

from trade_analytics.engine.models import MarketContext, TradeRecord


# ============================================================================
# Trade factories
# ============================================================================

BASE_DATE = datetime(2024, 3, 4, 14, 0, tzinfo=timezone.utc)  # 14:00 UTC -> London


def make_trade(
    pnl: float,
    day: int = 0,
    context: MarketContext | None = None,
    status: str = "closed",
    hour: int | None = None,
) -> TradeRecord:
    """Build a trade ``day`` days after BASE_DATE."""
    trade_date = BASE_DATE + timedelta(days=day)
    if hour is not None:
        trade_date = trade_date.replace(hour=hour)
    return TradeRecord(
        pnl=pnl,
        trade_date=trade_date,
        status=status,
        market_context=context,
    )


def make_trades(pnls: list[float]) -> list[TradeRecord]:
    """One trade per day, in order."""
    return [make_trade(pnl, day=i) for i, pnl in enumerate(pnls)]


@pytest.fixture
def trade_factory():
    return make_trade


@pytest.fixture
def trades_from_pnls():
    return make_trades


@pytest.fixture
def sample_trades() -> list[TradeRecord]:
    """Mixed history: 6 wins, 4 losses, net +550."""
    return make_trades([200, -100, 150, 300, -250, 100, -50, 80, -30, 150])


@pytest.fixture
def sample_rows() -> list[dict]:
    """Raw export rows as they come out of the journal."""
    return [
        {
            "trade_date": "2024-03-04T14:00:00Z",
            "pnl": 120.0,
            "realized_pnl": 118.5,
            "status": "closed",
            "symbol": "BTCUSDT",
            "fear_greed_value": 25,
            "volatility_level": "high",
            "has_high_impact_event": True,
        },
        {
            "trade_date": "2024-03-05T03:30:00Z",
            "pnl": -60.0,
            "status": "closed",
            "symbol": "ETHUSDT",
            "fear_greed_value": 72,
            "volatility_level": "low",
            "has_high_impact_event": False,
        },
        {
            "trade_date": "2024-03-06T18:15:00Z",
            "pnl": 45.0,
            "status": "open",
            "symbol": "SOLUSDT",
        },
    ]


@pytest.fixture
def csv_export(tmp_path: Path, sample_rows: list[dict]) -> Path:
    path = tmp_path / "trades.csv"
    pd.DataFrame(sample_rows).to_csv(path, index=False)
    return path


@pytest.fixture
def json_export(tmp_path: Path, sample_rows: list[dict]) -> Path:
    path = tmp_path / "trades.json"
    path.write_text(json.dumps(sample_rows), encoding="utf-8")
    return path
