"""Bollinger band touch: close at/above upper sells, at/below lower buys."""

from __future__ import annotations
from typing import Optional

import pandas as pd

from exit_engine.core.types import ExitSignal, SignalType
from exit_engine.indicators import bollinger_bands
from exit_engine.strategies.base import BaseStrategy, clamp_confidence


class BollingerStrategy(BaseStrategy):
    name = "Bollinger Bands"

    def __init__(self, period: int = 20, std_dev: float = 2.0):
        self.period = period
        self.std_dev = std_dev

    def first_index(self) -> int:
        return self.period

    def compute_indicators(self, df: pd.DataFrame) -> pd.DataFrame:
        df = df.copy()
        bands = bollinger_bands(df["close"].to_numpy(dtype=float), self.period, self.std_dev)
        df["bb_middle"] = bands.middle
        df["bb_upper"] = bands.upper
        df["bb_lower"] = bands.lower
        return df

    def signal_at(self, df: pd.DataFrame, i: int) -> Optional[ExitSignal]:
        bar = df.iloc[i]
        price = float(bar["close"])
        upper, lower = float(bar["bb_upper"]), float(bar["bb_lower"])
        if price >= upper:
            return self._signal(
                bar,
                SignalType.SELL,
                clamp_confidence(price - upper, upper),
                "Price reached upper Bollinger Band",
            )
        if price <= lower:
            return self._signal(
                bar,
                SignalType.BUY,
                clamp_confidence(lower - price, lower),
                "Price reached lower Bollinger Band",
            )
        return None
