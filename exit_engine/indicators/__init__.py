"""Indicators: RSI, SMA, Bollinger Bands."""

from exit_engine.indicators.technical import (
    RSI_NEUTRAL,
    BollingerBands,
    bollinger_bands,
    rsi,
    sma,
)

__all__ = ["RSI_NEUTRAL", "BollingerBands", "bollinger_bands", "rsi", "sma"]
