"""
Strategy dispatch: algorithm identifier + parameters -> configured strategy.

Unknown identifiers fall back to RSI with default parameters; this is the
documented behaviour, not an error path.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from exit_engine.core.logger import get_logger
from exit_engine.core.types import ExitSignal, PriceBar
from exit_engine.strategies.base import BaseStrategy
from exit_engine.strategies.bollinger import BollingerStrategy
from exit_engine.strategies.moving_average import MovingAverageStrategy
from exit_engine.strategies.rsi import RsiStrategy
from exit_engine.strategies.trend import TrendStrategy

logger = get_logger("strategies")

# camelCase keys used by the dashboard -> snake_case
PARAMETER_ALIASES = {
    "shortPeriod": "short_period",
    "longPeriod": "long_period",
    "stdDev": "std_dev",
    "rsiPeriod": "rsi_period",
}


class StrategyId(str, Enum):
    RSI = "rsi"
    MOVING_AVERAGE = "movingaverage"
    TREND = "trend"
    BOLLINGER = "bollinger"

    @classmethod
    def parse(cls, text: Union[str, "StrategyId"]) -> Optional["StrategyId"]:
        """Case-insensitive lookup; 'ma' is accepted for movingaverage. None if unknown."""
        if isinstance(text, cls):
            return text
        key = str(text).strip().lower()
        if key == "ma":
            return cls.MOVING_AVERAGE
        try:
            return cls(key)
        except ValueError:
            return None


def _normalize(parameters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return {PARAMETER_ALIASES.get(k, k): v for k, v in (parameters or {}).items()}


def _build_rsi(p: Dict[str, Any]) -> BaseStrategy:
    return RsiStrategy(
        oversold=p.get("oversold") or 30,
        overbought=p.get("overbought") or 70,
        period=int(p.get("rsi_period") or 14),
    )


def _build_moving_average(p: Dict[str, Any]) -> BaseStrategy:
    return MovingAverageStrategy(
        short_period=int(p.get("short_period") or 10),
        long_period=int(p.get("long_period") or 30),
    )


def _build_trend(p: Dict[str, Any]) -> BaseStrategy:
    return TrendStrategy(
        threshold=p.get("threshold") or 0.03,
        lookback=int(p.get("lookback") or 5),
    )


def _build_bollinger(p: Dict[str, Any]) -> BaseStrategy:
    return BollingerStrategy(
        period=int(p.get("period") or 20),
        std_dev=p.get("std_dev") or 2,
    )


STRATEGY_REGISTRY: Dict[StrategyId, Callable[[Dict[str, Any]], BaseStrategy]] = {
    StrategyId.RSI: _build_rsi,
    StrategyId.MOVING_AVERAGE: _build_moving_average,
    StrategyId.TREND: _build_trend,
    StrategyId.BOLLINGER: _build_bollinger,
}


def build_strategy(
    algorithm_id: Union[str, StrategyId],
    parameters: Optional[Mapping[str, Any]] = None,
) -> BaseStrategy:
    """Configured strategy for algorithm_id. Missing or zero parameters take defaults."""
    strategy_id = StrategyId.parse(algorithm_id)
    if strategy_id is None:
        logger.info("Unknown algorithm %r, falling back to RSI defaults", algorithm_id)
        return RsiStrategy()
    return STRATEGY_REGISTRY[strategy_id](_normalize(parameters))


def compute_exit_points(
    series: Sequence[PriceBar],
    algorithm_id: Union[str, StrategyId],
    parameters: Optional[Mapping[str, Any]] = None,
) -> List[ExitSignal]:
    """Run the selected strategy over series. Output is ordered by timestamp."""
    strategy = build_strategy(algorithm_id, parameters)
    signals = strategy.generate(series)
    logger.debug("%s produced %d signals over %d bars", strategy.name, len(signals), len(series))
    return signals
