"""
RSI threshold cross: buy when RSI climbs back above oversold,
sell when it drops back below overbought.
"""

from __future__ import annotations
from typing import Optional

import pandas as pd

from exit_engine.core.types import ExitSignal, SignalType
from exit_engine.indicators import rsi
from exit_engine.strategies.base import BaseStrategy, clamp_confidence


class RsiStrategy(BaseStrategy):
    name = "RSI"

    def __init__(self, oversold: float = 30, overbought: float = 70, period: int = 14):
        self.oversold = oversold
        self.overbought = overbought
        self.period = period

    def compute_indicators(self, df: pd.DataFrame) -> pd.DataFrame:
        df = df.copy()
        df["rsi"] = rsi(df["close"].to_numpy(dtype=float), self.period)
        return df

    def signal_at(self, df: pd.DataFrame, i: int) -> Optional[ExitSignal]:
        bar, prev_bar = df.iloc[i], df.iloc[i - 1]
        curr, prev = float(bar["rsi"]), float(prev_bar["rsi"])
        if prev <= self.oversold and curr > self.oversold:
            return self._signal(
                bar,
                SignalType.BUY,
                clamp_confidence(self.oversold - prev, self.oversold),
                f"RSI crossed above {self.oversold:g} (oversold)",
            )
        if prev >= self.overbought and curr < self.overbought:
            return self._signal(
                bar,
                SignalType.SELL,
                clamp_confidence(prev - self.overbought, 100 - self.overbought),
                f"RSI crossed below {self.overbought:g} (overbought)",
            )
        return None
