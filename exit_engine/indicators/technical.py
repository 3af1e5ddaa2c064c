"""
Technical indicators over a close series: RSI, SMA, Bollinger Bands.
Every function returns an array the same length as its input, aligned
index-for-index, using only data up to each index (no lookahead).

Warm-up conventions: RSI is 50 until `period` changes exist, SMA is the
bar's own close until the window fills. Crossover strategies rely on both
to avoid spurious crosses at the start of a series.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

RSI_NEUTRAL = 50.0


def _as_array(closes: Sequence[float]) -> np.ndarray:
    return np.asarray(closes, dtype=np.float64)


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")


def rsi(closes: Sequence[float], period: int = 14) -> np.ndarray:
    """Relative strength index with simple (not Wilder-smoothed) average gain/loss."""
    _check_period(period)
    arr = _as_array(closes)
    out = np.full(len(arr), RSI_NEUTRAL)
    if len(arr) < period + 1:
        return out
    delta = np.diff(arr)
    gains = np.where(delta > 0, delta, 0.0)
    losses = np.where(delta < 0, -delta, 0.0)
    # row k covers delta[k : k + period], i.e. the changes ending at bar k + period
    avg_gain = sliding_window_view(gains, period).sum(axis=1) / period
    avg_loss = sliding_window_view(losses, period).sum(axis=1) / period
    with np.errstate(divide="ignore", invalid="ignore"):
        values = np.where(avg_loss == 0, 100.0, 100.0 - 100.0 / (1.0 + avg_gain / avg_loss))
    out[period:] = values
    return out


def sma(closes: Sequence[float], period: int) -> np.ndarray:
    """Simple moving average; warm-up indices carry the close itself."""
    _check_period(period)
    arr = _as_array(closes)
    out = arr.copy()
    if len(arr) >= period:
        out[period - 1:] = sliding_window_view(arr, period).mean(axis=1)
    return out


@dataclass
class BollingerBands:
    middle: np.ndarray
    upper: np.ndarray
    lower: np.ndarray


def bollinger_bands(closes: Sequence[float], period: int = 20, std_dev: float = 2.0) -> BollingerBands:
    """
    middle = sma(period); upper/lower = middle +/- std_dev * population std of the
    trailing window, with deviations taken against middle at the same index.
    Bands collapse onto middle during warm-up.
    """
    arr = _as_array(closes)
    middle = sma(arr, period)
    std = np.zeros(len(arr))
    if len(arr) >= period:
        windows = sliding_window_view(arr, period)
        dev = windows - middle[period - 1:, None]
        std[period - 1:] = np.sqrt((dev ** 2).sum(axis=1) / period)
    return BollingerBands(middle=middle, upper=middle + std_dev * std, lower=middle - std_dev * std)
