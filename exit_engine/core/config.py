"""
Load configuration from config.yaml and .env. Environment wins over the file.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv


def _env_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path(__file__).resolve().parents[2]
    return root / ".env"


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _env_path(project_root)
    if path.exists():
        load_dotenv(path)


def load_config(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> "Config":
    """Load config.yaml and overlay with env. Returns Config."""
    load_dotenv_if_exists(project_root)
    root = project_root or Path(__file__).resolve().parents[2]
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    def env(key: str, default: str = "") -> str:
        return os.getenv(key, default).strip()

    def env_bool(key: str, default: bool = False) -> bool:
        return os.getenv(key, str(default)).lower() in ("true", "1", "yes")

    def env_int(key: str, default: int = 0) -> int:
        try:
            return int(os.getenv(key, str(default)))
        except ValueError:
            return default

    def env_float(key: str, default: float = 0.0) -> float:
        try:
            return float(os.getenv(key, str(default)))
        except ValueError:
            return default

    strategy = data.get("strategy", {}) or {}
    backtest = data.get("backtest", {}) or {}
    source = data.get("data", {}) or {}
    export = data.get("export", {}) or {}
    logging_cfg = data.get("logging", {}) or {}

    seed_raw = env("SYNTHETIC_SEED", "" if source.get("seed") is None else str(source.get("seed")))
    csv_path = env("DATA_CSV", source.get("csv_path") or "")

    return Config(
        algorithm=env("EXIT_ALGORITHM", strategy.get("algorithm", "rsi")).lower(),
        # Strategy
        rsi_oversold=env_float("RSI_OVERSOLD", strategy.get("rsi_oversold", 30.0)),
        rsi_overbought=env_float("RSI_OVERBOUGHT", strategy.get("rsi_overbought", 70.0)),
        rsi_period=env_int("RSI_PERIOD", strategy.get("rsi_period", 14)),
        ma_short_period=env_int("MA_SHORT_PERIOD", strategy.get("ma_short_period", 10)),
        ma_long_period=env_int("MA_LONG_PERIOD", strategy.get("ma_long_period", 30)),
        trend_threshold=env_float("TREND_THRESHOLD", strategy.get("trend_threshold", 0.03)),
        trend_lookback=env_int("TREND_LOOKBACK", strategy.get("trend_lookback", 5)),
        bb_period=env_int("BB_PERIOD", strategy.get("bb_period", 20)),
        bb_std_dev=env_float("BB_STD_DEV", strategy.get("bb_std_dev", 2.0)),
        # Backtest
        initial_capital=env_float("INITIAL_CAPITAL", backtest.get("initial_capital", 10000.0)),
        position_size=env_float("POSITION_SIZE", backtest.get("position_size", 1.0)),
        # Data
        data_csv=Path(csv_path) if csv_path else None,
        synthetic_days=env_int("SYNTHETIC_DAYS", source.get("synthetic_days", 180)),
        synthetic_seed=int(seed_raw) if seed_raw.lstrip("-").isdigit() else None,
        export_path=Path(export.get("path", "exit-signals.csv")),
        # Logging
        log_level=env("LOG_LEVEL", logging_cfg.get("level", "INFO")),
        log_dir=Path(logging_cfg.get("log_dir", "logs")),
        log_file=logging_cfg.get("log_file", "exit_engine.log"),
        log_json=env_bool("LOG_JSON", logging_cfg.get("json", False)),
    )


class Config:
    """Unified configuration. Immutable after load."""

    __slots__ = (
        "algorithm",
        "rsi_oversold", "rsi_overbought", "rsi_period",
        "ma_short_period", "ma_long_period",
        "trend_threshold", "trend_lookback",
        "bb_period", "bb_std_dev",
        "initial_capital", "position_size",
        "data_csv", "synthetic_days", "synthetic_seed", "export_path",
        "log_level", "log_dir", "log_file", "log_json",
    )

    def __init__(
        self,
        algorithm: str = "rsi",
        rsi_oversold: float = 30.0,
        rsi_overbought: float = 70.0,
        rsi_period: int = 14,
        ma_short_period: int = 10,
        ma_long_period: int = 30,
        trend_threshold: float = 0.03,
        trend_lookback: int = 5,
        bb_period: int = 20,
        bb_std_dev: float = 2.0,
        initial_capital: float = 10000.0,
        position_size: float = 1.0,
        data_csv: Optional[Path] = None,
        synthetic_days: int = 180,
        synthetic_seed: Optional[int] = None,
        export_path: Path = None,
        log_level: str = "INFO",
        log_dir: Path = None,
        log_file: str = "exit_engine.log",
        log_json: bool = False,
    ):
        self.algorithm = algorithm
        self.rsi_oversold = rsi_oversold
        self.rsi_overbought = rsi_overbought
        self.rsi_period = rsi_period
        self.ma_short_period = ma_short_period
        self.ma_long_period = ma_long_period
        self.trend_threshold = trend_threshold
        self.trend_lookback = trend_lookback
        self.bb_period = bb_period
        self.bb_std_dev = bb_std_dev
        self.initial_capital = initial_capital
        self.position_size = position_size
        self.data_csv = Path(data_csv) if data_csv else None
        self.synthetic_days = synthetic_days
        self.synthetic_seed = synthetic_seed
        self.export_path = Path(export_path) if export_path else Path("exit-signals.csv")
        self.log_level = log_level
        self.log_dir = Path(log_dir) if log_dir else Path("logs")
        self.log_file = log_file
        self.log_json = log_json

    def strategy_parameters(self) -> dict[str, float]:
        """Parameter dict understood by strategies.dispatcher for every algorithm."""
        return {
            "oversold": self.rsi_oversold,
            "overbought": self.rsi_overbought,
            "rsi_period": self.rsi_period,
            "short_period": self.ma_short_period,
            "long_period": self.ma_long_period,
            "threshold": self.trend_threshold,
            "lookback": self.trend_lookback,
            "period": self.bb_period,
            "std_dev": self.bb_std_dev,
        }
