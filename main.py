#!/usr/bin/env python3
"""
Exit-signal engine CLI: backtest | compare | export
Usage:
  python main.py backtest [--config config.yaml] [--csv prices.csv] [--algorithm rsi]
  python main.py compare [--config config.yaml] [--csv prices.csv]
  python main.py export [--config config.yaml] [--csv prices.csv] [--output signals.csv]
Without --csv (or data.csv_path in config) a synthetic series is used.
"""

from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Project root
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from exit_engine.backtesting import backtest_strategy, compare_strategies
from exit_engine.core.config import Config, load_config
from exit_engine.core.logger import get_logger, setup_logging
from exit_engine.core.types import BacktestResult, PriceBar
from exit_engine.data import EmptySeriesError, generate_synthetic, load_csv, require_bars, write_signals_csv
from exit_engine.strategies import StrategyId, compute_exit_points

logger = get_logger()


def load_series(config: Config, csv_path: Optional[Path]) -> List[PriceBar]:
    """CSV from --csv or config, else a synthetic series. Raises EmptySeriesError if no bars."""
    path = csv_path or config.data_csv
    if path:
        logger.info("Loading price data from %s", path)
        series = load_csv(path)
    else:
        logger.info("No CSV configured, generating %d synthetic bars", config.synthetic_days)
        series = generate_synthetic(config.synthetic_days, seed=config.synthetic_seed)
    return list(require_bars(series))


def print_result(result: BacktestResult) -> None:
    print(f"\n--- {result.algorithm} ---")
    print(f"Total trades: {result.total_trades} (wins: {result.winning_trades}, losses: {result.losing_trades})")
    print(f"Total return: {result.total_return:.2f}%")
    print(f"Win rate: {result.win_rate:.1f}%")
    print(f"Max drawdown: {result.max_drawdown:.2f}%")
    print(f"Sharpe ratio: {result.sharpe_ratio:.2f}")


def run_backtest(config: Config, series: List[PriceBar], algorithm: str) -> int:
    signals = compute_exit_points(series, algorithm, config.strategy_parameters())
    result = backtest_strategy(series, signals, config.initial_capital, config.position_size)
    print_result(result)
    for t in result.trades:
        print(f"  {t.entry_date} @ {t.entry_price:.2f} -> {t.exit_date} @ {t.exit_price:.2f}  "
              f"{t.profit:+.2f} ({t.profit_percent:+.2f}%)")
    return 0


def run_compare(config: Config, series: List[PriceBar]) -> int:
    params = config.strategy_parameters()
    runs = [(sid.value, compute_exit_points(series, sid, params)) for sid in StrategyId]
    for result in compare_strategies(series, runs, config.initial_capital, config.position_size):
        print_result(result)
    return 0


def run_export(config: Config, series: List[PriceBar], algorithm: str, output: Optional[Path]) -> int:
    signals = compute_exit_points(series, algorithm, config.strategy_parameters())
    path = write_signals_csv(signals, output or config.export_path)
    print(f"Wrote {len(signals)} signals to {path}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Exit-signal engine CLI")
    parser.add_argument("mode", choices=["backtest", "compare", "export"], help="What to run")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--csv", type=Path, default=None, help="OHLCV CSV file")
    parser.add_argument("--algorithm", default=None, help="rsi | movingaverage | trend | bollinger")
    parser.add_argument("--output", type=Path, default=None, help="Export path (export mode)")
    args = parser.parse_args()

    config = load_config(args.config, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file, json_logs=config.log_json)
    algorithm = args.algorithm or config.algorithm
    try:
        series = load_series(config, args.csv)
    except EmptySeriesError:
        logger.error("No valid data found in price series")
        return 1
    except OSError as e:
        logger.error("Cannot read price data: %s", e)
        return 1

    if args.mode == "backtest":
        return run_backtest(config, series, algorithm)
    if args.mode == "compare":
        return run_compare(config, series)
    return run_export(config, series, algorithm, args.output)


if __name__ == "__main__":
    exit(main())
