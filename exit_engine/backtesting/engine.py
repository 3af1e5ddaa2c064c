"""
Backtest engine: replays exit signals against capital with a single long position.

States: Flat -> (buy) -> Long -> (sell) -> Flat. Buy while Long and sell while
Flat are ignored. A position still open after the last signal is left open and
does not count as a trade.
"""

from __future__ import annotations
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from exit_engine.core.logger import get_logger
from exit_engine.analytics.metrics import (
    equity_curve,
    max_drawdown,
    sharpe_ratio,
    total_return,
    win_rate,
)
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
from exit_engine.strategies.dispatcher import StrategyId, compute_exit_points

logger = get_logger("backtest")


def step(
    state: PositionState,
    signal: ExitSignal,
    position_size: float = 1.0,
) -> Tuple[PositionState, Optional[Trade]]:
    """Apply one signal. Returns the next state and the trade it closed, if any."""
    if signal.signal == SignalType.BUY and isinstance(state, Flat):
        return Long(entry_price=signal.price, entry_date=iso_date(signal.timestamp)), None
    if signal.signal == SignalType.SELL and isinstance(state, Long):
        entry, exit_price = state.entry_price, signal.price
        profit_percent = (exit_price - entry) / entry * 100.0 if entry != 0 else 0.0
        trade = Trade(
            entry_date=state.entry_date,
            exit_date=iso_date(signal.timestamp),
            entry_price=entry,
            exit_price=exit_price,
            profit=(exit_price - entry) * position_size,
            profit_percent=profit_percent,
        )
        return Flat(), trade
    return state, None


class BacktestEngine:
    """Signal replay with fixed position size. Holds configuration only, no run state."""

    def __init__(self, initial_capital: float = 10000.0, position_size: float = 1.0):
        self.initial_capital = initial_capital
        self.position_size = position_size

    def run(self, signals: Sequence[ExitSignal], algorithm: Optional[str] = None) -> BacktestResult:
        """
        Replay signals in timestamp order and compute metrics.
        algorithm defaults to the first signal's label ("Unknown" if there are none).
        """
        label = algorithm or (signals[0].algorithm if signals else "Unknown")
        state: PositionState = Flat()
        trades: List[Trade] = []
        for signal in sorted(signals, key=lambda s: s.timestamp):
            state, trade = step(state, signal, self.position_size)
            if trade is not None:
                trades.append(trade)
        if isinstance(state, Long):
            logger.debug("%s: position opened %s left open at end of signals", label, state.entry_date)

        pnls = [t.profit for t in trades]
        equity = equity_curve(self.initial_capital, pnls)
        winners = sum(1 for p in pnls if p > 0)
        result = BacktestResult(
            algorithm=label,
            total_trades=len(trades),
            winning_trades=winners,
            losing_trades=len(trades) - winners,
            win_rate=win_rate(pnls),
            total_return=total_return(self.initial_capital, equity[-1]),
            max_drawdown=max_drawdown(equity),
            sharpe_ratio=sharpe_ratio([t.profit_percent for t in trades]),
            trades=trades,
            final_capital=equity[-1],
            equity_curve=equity,
        )
        logger.debug(
            "%s: %d trades, return %.4f%%, max drawdown %.4f%%",
            label, result.total_trades, result.total_return, result.max_drawdown,
        )
        return result


def backtest_strategy(
    series: Sequence[PriceBar],
    signals: Sequence[ExitSignal],
    initial_capital: float = 10000.0,
    position_size: float = 1.0,
) -> BacktestResult:
    """
    Backtest a signal sequence. series is accepted for interface compatibility;
    prices come from the signals themselves.
    """
    return BacktestEngine(initial_capital, position_size).run(signals)


def compare_strategies(
    series: Sequence[PriceBar],
    strategies: Sequence[Tuple[str, Sequence[ExitSignal]]],
    initial_capital: float = 10000.0,
    position_size: float = 1.0,
) -> List[BacktestResult]:
    """Backtest each (name, signals) pair; results are labelled with name."""
    engine = BacktestEngine(initial_capital, position_size)
    return [engine.run(signals, algorithm=name) for name, signals in strategies]


def backtest_algorithm(
    series: Sequence[PriceBar],
    algorithm_id: Union[str, StrategyId],
    parameters: Optional[Mapping[str, Any]] = None,
    initial_capital: float = 10000.0,
    position_size: float = 1.0,
) -> BacktestResult:
    """compute_exit_points + backtest_strategy in one call."""
    signals = compute_exit_points(series, algorithm_id, parameters)
    return backtest_strategy(series, signals, initial_capital, position_size)
