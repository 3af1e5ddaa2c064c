"""Shared fixtures."""

import pytest

from exit_engine.core.types import ExitSignal, PriceBar, SignalType, iso_date

DAY_MS = 86_400_000
START_MS = 1_704_067_200_000  # 2024-01-01 UTC


def bars_from_closes(closes):
    bars = []
    for i, close in enumerate(closes):
        ts = START_MS + i * DAY_MS
        bars.append(PriceBar(timestamp=ts, date=iso_date(ts), open=close, high=close, low=close, close=close))
    return bars


def signal(side, price, day, algorithm="Test"):
    return ExitSignal(
        timestamp=START_MS + day * DAY_MS,
        price=price,
        algorithm=algorithm,
        signal=SignalType(side),
        confidence=0.5,
        reason="",
    )


@pytest.fixture
def make_bars():
    return bars_from_closes


@pytest.fixture
def make_signal():
    return signal
