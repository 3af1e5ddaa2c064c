"""Exit-signal computation and strategy backtesting."""

from exit_engine.backtesting import backtest_strategy, compare_strategies
from exit_engine.data import generate_synthetic, load
from exit_engine.strategies import compute_exit_points

__all__ = [
    "backtest_strategy",
    "compare_strategies",
    "compute_exit_points",
    "generate_synthetic",
    "load",
]
