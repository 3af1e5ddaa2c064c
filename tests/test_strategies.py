"""Unit tests for signal generators and the dispatcher."""

import pytest

from exit_engine.core.types import SignalType
from exit_engine.data import generate_synthetic
from exit_engine.strategies import (
    BollingerStrategy,
    MovingAverageStrategy,
    RsiStrategy,
    StrategyId,
    TrendStrategy,
    build_strategy,
    clamp_confidence,
    compute_exit_points,
)


def rsi_cross_closes():
    # 12 drops of 0.75 then 2 rises of 1.5: RSI(14) = 25 at bar 14.
    # Bar 15 rises 1.5 and the first drop leaves the window: RSI ~35.3.
    closes = [100.0]
    for _ in range(12):
        closes.append(closes[-1] - 0.75)
    for _ in range(3):
        closes.append(closes[-1] + 1.5)
    return closes


def test_rsi_cross_up_emits_single_buy(make_bars):
    bars = make_bars(rsi_cross_closes())
    signals = RsiStrategy().generate(bars)
    assert len(signals) == 1
    s = signals[0]
    assert s.signal == SignalType.BUY
    assert s.timestamp == bars[15].timestamp
    assert s.price == bars[15].close
    assert "30" in s.reason
    assert s.confidence == pytest.approx(5 / 30)
    assert s.algorithm == "RSI"


def test_rsi_cross_down_emits_sell(make_bars):
    # mirror image: RSI 75 at bar 14, ~64.7 at bar 15
    closes = [200.0 - c for c in rsi_cross_closes()]
    signals = RsiStrategy().generate(make_bars(closes))
    assert [s.signal for s in signals] == [SignalType.SELL]
    assert signals[0].confidence == pytest.approx(5 / 30)
    assert "70" in signals[0].reason


def test_golden_cross_single_buy(make_bars):
    closes = [100.0] * 30 + [101.0 + i for i in range(10)]
    bars = make_bars(closes)
    signals = MovingAverageStrategy(10, 30).generate(bars)
    assert len(signals) == 1
    assert signals[0].signal == SignalType.BUY
    assert signals[0].timestamp == bars[30].timestamp
    assert signals[0].reason == "MA10 crossed above MA30"
    assert 0 < signals[0].confidence < 1


def test_death_cross_sell(make_bars):
    closes = [100.0] * 30 + [99.0 - i for i in range(10)]
    signals = MovingAverageStrategy(10, 30).generate(make_bars(closes))
    assert [s.signal for s in signals] == [SignalType.SELL]
    assert signals[0].reason == "MA10 crossed below MA30"


def test_trend_up_and_down_both_sell(make_bars):
    up = TrendStrategy().generate(make_bars([100.0] * 5 + [104.0]))
    down = TrendStrategy().generate(make_bars([100.0] * 5 + [95.0]))
    assert [s.signal for s in up] == [SignalType.SELL]
    assert [s.signal for s in down] == [SignalType.SELL]
    assert up[0].confidence == 1.0
    assert "4.00% gain" in up[0].reason
    assert "-5.00% loss" in down[0].reason


def test_trend_below_threshold_is_silent(make_bars):
    assert TrendStrategy().generate(make_bars([100.0] * 5 + [102.0])) == []


def test_trend_confidence_scales_with_change(make_bars):
    signals = TrendStrategy(threshold=0.1).generate(make_bars([100.0] * 5 + [85.0]))
    assert signals[0].confidence == pytest.approx(1.0)
    signals = TrendStrategy(threshold=0.03, lookback=1).generate(make_bars([100.0, 96.0]))
    assert signals[0].confidence == pytest.approx(1.0)
    signals = TrendStrategy(threshold=0.04, lookback=1).generate(make_bars([100.0, 103.0]))
    assert signals == []


def test_trend_from_zero_price_is_full_confidence_sell(make_bars):
    signals = TrendStrategy(lookback=1).generate(make_bars([0.0, 5.0]))
    assert [s.signal for s in signals] == [SignalType.SELL]
    assert signals[0].confidence == 1.0
    assert signals[0].price == 5.0
    assert TrendStrategy(lookback=1).generate(make_bars([0.0, 0.0])) == []


def test_bollinger_upper_touch_sells(make_bars):
    bars = make_bars([100.0] * 20 + [110.0])
    signals = BollingerStrategy().generate(bars)
    assert len(signals) == 1
    assert signals[0].signal == SignalType.SELL
    assert signals[0].timestamp == bars[20].timestamp
    assert signals[0].reason == "Price reached upper Bollinger Band"
    assert 0 < signals[0].confidence < 1


def test_bollinger_lower_touch_buys(make_bars):
    signals = BollingerStrategy().generate(make_bars([100.0] * 20 + [90.0]))
    assert [s.signal for s in signals] == [SignalType.BUY]


def test_generators_handle_empty_series():
    for sid in StrategyId:
        assert compute_exit_points([], sid) == []


def test_clamp_confidence():
    assert clamp_confidence(5, 2) == 1.0
    assert clamp_confidence(-1, 2) == 0.0
    assert clamp_confidence(1, 0) == 1.0
    assert clamp_confidence(0, 0) == 0.0
    assert clamp_confidence(1, 4) == 0.25


def test_strategy_id_parse():
    assert StrategyId.parse("RSI") is StrategyId.RSI
    assert StrategyId.parse("ma") is StrategyId.MOVING_AVERAGE
    assert StrategyId.parse("MovingAverage") is StrategyId.MOVING_AVERAGE
    assert StrategyId.parse("macd") is None


def test_unknown_algorithm_falls_back_to_rsi_defaults():
    series = generate_synthetic(120, seed=7)
    fallback = compute_exit_points(series, "macd", {"oversold": 45, "overbought": 55})
    assert fallback == compute_exit_points(series, "rsi")
    assert isinstance(build_strategy("nonsense"), RsiStrategy)


def test_camel_case_and_falsy_parameters():
    s = build_strategy("ma", {"shortPeriod": 5, "longPeriod": 20})
    assert (s.short_period, s.long_period) == (5, 20)
    s = build_strategy("bollinger", {"period": 0, "stdDev": 3})
    assert (s.period, s.std_dev) == (20, 3)
    s = build_strategy("rsi", {"oversold": 0})
    assert s.oversold == 30


def test_compute_exit_points_deterministic_and_ordered():
    series = generate_synthetic(250, seed=42)
    for sid in StrategyId:
        first = compute_exit_points(series, sid)
        assert first == compute_exit_points(series, sid)
        stamps = [s.timestamp for s in first]
        assert stamps == sorted(stamps)
        assert all(0.0 <= s.confidence <= 1.0 for s in first)
        assert all(s.signal in (SignalType.BUY, SignalType.SELL) for s in first)
