"""Data: price series import, synthetic series, signal export."""

from exit_engine.data.loader import (
    EmptySeriesError,
    bars_to_frame,
    generate_synthetic,
    load,
    load_csv,
    parse_csv_data,
    require_bars,
)
from exit_engine.data.export import signals_to_csv, write_signals_csv

__all__ = [
    "EmptySeriesError",
    "bars_to_frame",
    "generate_synthetic",
    "load",
    "load_csv",
    "parse_csv_data",
    "require_bars",
    "signals_to_csv",
    "write_signals_csv",
]
