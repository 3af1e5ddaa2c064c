"""Core: config, types, logging."""

from exit_engine.core.config import load_config, Config
from exit_engine.core.types import (
    BacktestResult,
    ExitSignal,
    Flat,
    Long,
    PositionState,
    PriceBar,
    SignalType,
    Trade,
    iso_date,
)
from exit_engine.core.logger import get_logger, setup_logging

__all__ = [
    "load_config",
    "Config",
    "BacktestResult",
    "ExitSignal",
    "Flat",
    "Long",
    "PositionState",
    "PriceBar",
    "SignalType",
    "Trade",
    "iso_date",
    "get_logger",
    "setup_logging",
]
