"""Strategies: base interface, signal generators, dispatcher."""

from exit_engine.strategies.base import BaseStrategy, clamp_confidence
from exit_engine.strategies.bollinger import BollingerStrategy
from exit_engine.strategies.moving_average import MovingAverageStrategy
from exit_engine.strategies.rsi import RsiStrategy
from exit_engine.strategies.trend import TrendStrategy
from exit_engine.strategies.dispatcher import (
    STRATEGY_REGISTRY,
    StrategyId,
    build_strategy,
    compute_exit_points,
)

__all__ = [
    "BaseStrategy",
    "clamp_confidence",
    "BollingerStrategy",
    "MovingAverageStrategy",
    "RsiStrategy",
    "TrendStrategy",
    "STRATEGY_REGISTRY",
    "StrategyId",
    "build_strategy",
    "compute_exit_points",
]
