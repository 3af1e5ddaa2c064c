"""Moving-average crossover: golden cross buys, death cross sells."""

from __future__ import annotations
from typing import Optional

import pandas as pd

from exit_engine.core.types import ExitSignal, SignalType
from exit_engine.indicators import sma
from exit_engine.strategies.base import BaseStrategy, clamp_confidence


class MovingAverageStrategy(BaseStrategy):
    name = "Moving Average"

    def __init__(self, short_period: int = 10, long_period: int = 30):
        self.short_period = short_period
        self.long_period = long_period

    def compute_indicators(self, df: pd.DataFrame) -> pd.DataFrame:
        df = df.copy()
        closes = df["close"].to_numpy(dtype=float)
        df["ma_short"] = sma(closes, self.short_period)
        df["ma_long"] = sma(closes, self.long_period)
        return df

    def signal_at(self, df: pd.DataFrame, i: int) -> Optional[ExitSignal]:
        bar, prev_bar = df.iloc[i], df.iloc[i - 1]
        curr_short, curr_long = float(bar["ma_short"]), float(bar["ma_long"])
        prev_short, prev_long = float(prev_bar["ma_short"]), float(prev_bar["ma_long"])
        if prev_short <= prev_long and curr_short > curr_long:
            return self._signal(
                bar,
                SignalType.BUY,
                clamp_confidence(curr_short - curr_long, curr_long),
                f"MA{self.short_period} crossed above MA{self.long_period}",
            )
        if prev_short >= prev_long and curr_short < curr_long:
            return self._signal(
                bar,
                SignalType.SELL,
                clamp_confidence(curr_long - curr_short, curr_long),
                f"MA{self.short_period} crossed below MA{self.long_period}",
            )
        return None
