"""
Core data types for price bars, exit signals, position states, and trades.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Union


class SignalType(str, Enum):
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"  # reserved, generators never emit it


def iso_date(timestamp_ms: int) -> str:
    """Epoch millis -> 'YYYY-MM-DD' (UTC)."""
    return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=timezone.utc).strftime("%Y-%m-%d")


@dataclass(frozen=True)
class PriceBar:
    """OHLCV bar. timestamp is epoch millis."""
    timestamp: int
    date: str
    open: float
    high: float
    low: float
    close: float
    volume: Optional[float] = None


@dataclass(frozen=True)
class ExitSignal:
    """Directional signal emitted by a strategy at a bar close."""
    timestamp: int
    price: float
    algorithm: str
    signal: SignalType
    confidence: float
    reason: str = ""


@dataclass(frozen=True)
class Flat:
    """No open position."""


@dataclass(frozen=True)
class Long:
    """One open position of fixed size."""
    entry_price: float
    entry_date: str


PositionState = Union[Flat, Long]


@dataclass(frozen=True)
class Trade:
    """Closed round trip: buy while flat, sell while long."""
    entry_date: str
    exit_date: str
    entry_price: float
    exit_price: float
    profit: float
    profit_percent: float


@dataclass
class BacktestResult:
    """Backtest output: trades and aggregate metrics (percent values are 0-100 scale)."""
    algorithm: str
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: float = 0.0
    total_return: float = 0.0
    max_drawdown: float = 0.0
    sharpe_ratio: float = 0.0
    trades: List[Trade] = field(default_factory=list)
    final_capital: float = 0.0
    equity_curve: List[float] = field(default_factory=list)
