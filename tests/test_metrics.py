"""Unit tests for analytics.metrics."""

import pytest
from exit_engine.analytics.metrics import (
    equity_curve,
    max_drawdown,
    sharpe_ratio,
    total_return,
    win_rate,
)


def test_sharpe_ratio_empty():
    assert sharpe_ratio([]) == 0.0


def test_sharpe_ratio_constant():
    assert sharpe_ratio([1.5] * 10) == 0.0  # zero std


def test_sharpe_ratio_population_std():
    # mean 20, population std 30
    assert sharpe_ratio([50.0, -10.0]) == pytest.approx(2 / 3)


def test_win_rate():
    assert win_rate([1, -1, 1, 1]) == 75.0
    assert win_rate([0, 0]) == 0.0
    assert win_rate([]) == 0.0


def test_max_drawdown():
    # equity 1 -> 1.2 -> 1.0 -> 1.1  =>  peak 1.2, dd (1.2-1.0)/1.2 = 16.67%
    cum = [1.0, 1.2, 1.0, 1.1]
    assert max_drawdown(cum) == pytest.approx(16.666, rel=0.01)


def test_max_drawdown_monotonic():
    assert max_drawdown([100.0, 101.0, 102.0]) == 0.0
    assert max_drawdown([]) == 0.0


def test_equity_curve_and_total_return():
    curve = equity_curve(100.0, [10.0, -5.0])
    assert curve == [100.0, 110.0, 105.0]
    assert total_return(100.0, curve[-1]) == pytest.approx(5.0)
    assert total_return(0.0, 10.0) == 0.0
