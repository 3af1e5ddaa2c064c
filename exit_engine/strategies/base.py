"""Abstract strategy: indicators + per-bar signal detection."""

from __future__ import annotations
import math
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import pandas as pd

from exit_engine.core.types import ExitSignal, PriceBar, SignalType
from exit_engine.data.loader import bars_to_frame


def clamp_confidence(numerator: float, denominator: float) -> float:
    """numerator / denominator truncated to [0, 1]; never raises on zero or NaN."""
    if denominator == 0:
        value = math.copysign(math.inf, numerator) if numerator else 0.0
    else:
        value = numerator / denominator
    if math.isnan(value):
        return 0.0
    return max(0.0, min(value, 1.0))


class BaseStrategy(ABC):
    """
    A strategy adds indicator columns to the bar frame, then walks it once in
    order and emits at most one ExitSignal per bar.
    """

    name: str = ""

    @abstractmethod
    def compute_indicators(self, df: pd.DataFrame) -> pd.DataFrame:
        """Add indicator columns to a copy of the bar frame. No lookahead."""
        pass

    @abstractmethod
    def signal_at(self, df: pd.DataFrame, i: int) -> Optional[ExitSignal]:
        """Signal for bar i (may look at bars before i), or None."""
        pass

    def first_index(self) -> int:
        """First bar index signal_at is evaluated on."""
        return 1

    def generate(self, series: Sequence[PriceBar]) -> List[ExitSignal]:
        """Signals in bar order. Empty series gives an empty list."""
        if len(series) == 0:
            return []
        df = self.compute_indicators(bars_to_frame(series))
        signals = []
        for i in range(self.first_index(), len(df)):
            signal = self.signal_at(df, i)
            if signal is not None:
                signals.append(signal)
        return signals

    def _signal(
        self,
        bar: pd.Series,
        side: SignalType,
        confidence: float,
        reason: str,
    ) -> ExitSignal:
        return ExitSignal(
            timestamp=int(bar["timestamp"]),
            price=float(bar["close"]),
            algorithm=self.name,
            signal=side,
            confidence=confidence,
            reason=reason,
        )
