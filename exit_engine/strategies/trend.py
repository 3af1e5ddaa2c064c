"""
Trend momentum exit: price change over `lookback` bars beyond +/- threshold.
Both directions emit SELL (take profit on a strong rise, cut loss on a drop).
"""

from __future__ import annotations
import math
from typing import Optional

import pandas as pd

from exit_engine.core.types import ExitSignal, SignalType
from exit_engine.strategies.base import BaseStrategy, clamp_confidence


class TrendStrategy(BaseStrategy):
    name = "Trend"

    def __init__(self, threshold: float = 0.03, lookback: int = 5):
        self.threshold = threshold
        self.lookback = lookback

    def first_index(self) -> int:
        return self.lookback

    def compute_indicators(self, df: pd.DataFrame) -> pd.DataFrame:
        df = df.copy()
        df["past_close"] = df["close"].shift(self.lookback)
        return df

    def signal_at(self, df: pd.DataFrame, i: int) -> Optional[ExitSignal]:
        bar = df.iloc[i]
        price = float(bar["close"])
        past = float(bar["past_close"])
        if past == 0:
            if price == 0:
                return None
            change = math.copysign(math.inf, price)
        else:
            change = (price - past) / past
        if change > self.threshold:
            return self._signal(
                bar,
                SignalType.SELL,
                clamp_confidence(change, self.threshold),
                f"Strong upward trend detected ({change * 100:.2f}% gain)",
            )
        if change < -self.threshold:
            return self._signal(
                bar,
                SignalType.SELL,
                clamp_confidence(abs(change), self.threshold),
                f"Downward trend detected ({change * 100:.2f}% loss)",
            )
        return None
