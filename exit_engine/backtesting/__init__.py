"""Backtesting engine: signal replay with a single long position."""

from exit_engine.backtesting.engine import (
    BacktestEngine,
    backtest_algorithm,
    backtest_strategy,
    compare_strategies,
    step,
)
from exit_engine.core.types import BacktestResult

__all__ = [
    "BacktestEngine",
    "BacktestResult",
    "backtest_algorithm",
    "backtest_strategy",
    "compare_strategies",
    "step",
]
