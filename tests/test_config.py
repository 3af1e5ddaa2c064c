"""Unit tests for core.config and core.logger."""

import json
import logging

from exit_engine.core.config import Config, load_config
from exit_engine.core.logger import JsonFormatter, get_logger, setup_logging
from exit_engine.strategies import build_strategy

ENV_KEYS = (
    "EXIT_ALGORITHM", "RSI_OVERSOLD", "BB_PERIOD", "INITIAL_CAPITAL",
    "DATA_CSV", "SYNTHETIC_SEED", "SYNTHETIC_DAYS", "LOG_LEVEL", "LOG_JSON",
)


def _clear_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_config_file(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    config = load_config(tmp_path / "missing.yaml", tmp_path)
    assert config.algorithm == "rsi"
    assert config.initial_capital == 10000.0
    assert config.position_size == 1.0
    assert config.data_csv is None
    assert config.synthetic_seed is None


def test_yaml_values_and_env_override(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    path = tmp_path / "config.yaml"
    path.write_text(
        "strategy:\n"
        "  algorithm: Bollinger\n"
        "  bb_period: 15\n"
        "backtest:\n"
        "  initial_capital: 5000\n"
        "data:\n"
        "  csv_path: prices.csv\n"
        "  seed: 9\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("BB_PERIOD", "25")
    config = load_config(path, tmp_path)
    assert config.algorithm == "bollinger"
    assert config.bb_period == 25
    assert config.initial_capital == 5000.0
    assert config.data_csv.name == "prices.csv"
    assert config.synthetic_seed == 9


def test_bad_env_number_falls_back(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("RSI_OVERSOLD", "low")
    assert load_config(tmp_path / "missing.yaml", tmp_path).rsi_oversold == 30.0


def test_strategy_parameters_feed_dispatcher():
    config = Config(ma_short_period=7, ma_long_period=21, bb_std_dev=2.5)
    ma = build_strategy("movingaverage", config.strategy_parameters())
    bb = build_strategy("bollinger", config.strategy_parameters())
    assert (ma.short_period, ma.long_period) == (7, 21)
    assert bb.std_dev == 2.5


def test_setup_logging_with_file(tmp_path):
    logger = setup_logging("debug", tmp_path / "logs", "run.log")
    try:
        assert logger.name == "exit_engine"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        logging.getLogger("exit_engine.data").info("hello")
        for h in logger.handlers:
            h.flush()
        assert "hello" in (tmp_path / "logs" / "run.log").read_text(encoding="utf-8")
    finally:
        for h in list(logger.handlers):
            h.close()
        logger.handlers.clear()


def test_get_logger_names_children_of_engine_logger():
    assert get_logger().name == "exit_engine"
    assert get_logger("data").name == "exit_engine.data"
    assert get_logger("data").parent is get_logger()


def test_json_formatter_one_object_per_record():
    record = logging.LogRecord("exit_engine.backtest", logging.WARNING, __file__, 1, "%d trades", (3,), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "exit_engine.backtest"
    assert payload["message"] == "3 trades"
    assert "exc" not in payload


def test_log_json_from_yaml_and_env(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    path = tmp_path / "config.yaml"
    path.write_text("logging:\n  json: true\n", encoding="utf-8")
    assert load_config(path, tmp_path).log_json is True
    monkeypatch.setenv("LOG_JSON", "no")
    assert load_config(path, tmp_path).log_json is False
    assert load_config(tmp_path / "missing.yaml", tmp_path).log_json is False


def test_setup_logging_json_replaces_handlers(tmp_path):
    setup_logging("info", tmp_path, "first.log")
    logger = setup_logging("info", tmp_path, "run.log", json_logs=True)
    try:
        assert len(logger.handlers) == 2
        assert all(isinstance(h.formatter, JsonFormatter) for h in logger.handlers)
        get_logger("data").info("loaded")
        for h in logger.handlers:
            h.flush()
        line = (tmp_path / "run.log").read_text(encoding="utf-8").strip()
        assert json.loads(line)["message"] == "loaded"
    finally:
        for h in list(logger.handlers):
            h.close()
        logger.handlers.clear()
