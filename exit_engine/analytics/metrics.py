"""
Performance metrics over closed trades: total return, max drawdown, win rate, Sharpe.
Percentages are on a 0-100 scale. Degenerate inputs (no trades, zero variance)
give 0.0 rather than NaN or an exception.
"""

from __future__ import annotations
from typing import List, Sequence

import numpy as np


def equity_curve(initial_capital: float, pnls: Sequence[float]) -> List[float]:
    """Capital after each trade, starting with initial_capital."""
    cum = [initial_capital]
    for p in pnls:
        cum.append(cum[-1] + p)
    return cum


def total_return(initial_capital: float, final_capital: float) -> float:
    """(final - initial) / initial in percent."""
    if initial_capital == 0:
        return 0.0
    return (final_capital - initial_capital) / initial_capital * 100.0


def max_drawdown(equity: Sequence[float]) -> float:
    """Largest peak-to-trough decline in percent, as a positive number (15.0 = 15%)."""
    if len(equity) == 0:
        return 0.0
    arr = np.asarray(equity, dtype=np.float64)
    peak = np.maximum.accumulate(arr)
    dd = (peak - arr) / np.where(peak != 0, peak, 1)
    return max(0.0, float(np.max(dd)) * 100.0)


def win_rate(pnls: Sequence[float]) -> float:
    """Percent of trades with positive PnL."""
    if len(pnls) == 0:
        return 0.0
    return sum(1 for p in pnls if p > 0) / len(pnls) * 100.0


def sharpe_ratio(returns: Sequence[float]) -> float:
    """Mean / population std of per-trade returns. Not annualized."""
    if len(returns) == 0:
        return 0.0
    arr = np.asarray(returns, dtype=np.float64)
    std = arr.std()
    if std <= 1e-12:
        return 0.0
    return float(arr.mean() / std)
