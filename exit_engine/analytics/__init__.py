"""Analytics: performance metrics (return, drawdown, win rate, Sharpe)."""

from exit_engine.analytics.metrics import (
    equity_curve,
    max_drawdown,
    sharpe_ratio,
    total_return,
    win_rate,
)

__all__ = [
    "equity_curve",
    "max_drawdown",
    "sharpe_ratio",
    "total_return",
    "win_rate",
]
