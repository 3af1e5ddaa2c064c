"""
Price series loading: CSV import and synthetic demo series.

CSV header (case-insensitive, any order): date|timestamp, open, high, low, close[, volume].
Malformed rows are dropped, never fatal. Output is always sorted by timestamp.
"""

from __future__ import annotations
import csv
import math
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from exit_engine.core.logger import get_logger
from exit_engine.core.types import PriceBar

logger = get_logger("data")

FRAME_COLUMNS = ["timestamp", "date", "open", "high", "low", "close", "volume"]

# nanosecond-backed range; PriceBar.timestamp and iso_date() stay valid inside it
_MIN_TS = pd.Timestamp.min.tz_localize("UTC")
_MAX_TS = pd.Timestamp.max.tz_localize("UTC")


class EmptySeriesError(ValueError):
    """No bars available to analyse."""


def require_bars(series: Sequence[PriceBar]) -> Sequence[PriceBar]:
    """Return series unchanged, or raise EmptySeriesError if it has no bars."""
    if len(series) == 0:
        raise EmptySeriesError("No valid price bars in series")
    return series


def _parse_float(value: Optional[str]) -> float:
    if value is None or value == "":
        return float("nan")
    try:
        return float(value)
    except ValueError:
        return float("nan")


def _parse_timestamp(value: Optional[str]) -> Optional[pd.Timestamp]:
    """
    UTC timestamp from epoch millis (numeric string) or a calendar date/time
    (naive = UTC). None when unparseable or outside the representable range.
    """
    if not value:
        return None
    try:
        if value.lstrip("-").isdigit():
            ts = pd.Timestamp(int(value), unit="ms", tz="UTC")
        else:
            ts = pd.to_datetime(value, utc=True)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(ts) or not (_MIN_TS <= ts <= _MAX_TS):
        return None
    return ts


def _split_row(line: str) -> List[str]:
    # one line at a time: an unbalanced quote can only spoil its own row
    return [v.strip() for v in next(csv.reader([line]), [])]


def load(raw: str) -> List[PriceBar]:
    """
    Parse CSV text into PriceBars sorted ascending by timestamp.
    Rows with too few fields, a non-numeric close, or an unparseable date are skipped.
    """
    lines = [line for line in raw.strip().splitlines() if line.strip()]
    if not lines:
        return []
    headers = [h.lower() for h in _split_row(lines[0])]

    bars: List[PriceBar] = []
    for line_no, line in enumerate(lines[1:], start=1):
        values = _split_row(line)
        if len(values) < len(headers):
            logger.debug("Skipping row %d: %d fields, expected %d", line_no, len(values), len(headers))
            continue
        row = dict(zip(headers, values))
        close = _parse_float(row.get("close"))
        if math.isnan(close):
            logger.debug("Skipping row %d: close %r is not a number", line_no, row.get("close"))
            continue
        when = row.get("date") or row.get("timestamp")
        ts = _parse_timestamp(when)
        if ts is None:
            logger.debug("Skipping row %d: unparseable date %r", line_no, when)
            continue
        volume = row.get("volume")
        bars.append(PriceBar(
            timestamp=int(ts.value // 1_000_000),
            date=row.get("date") or ts.strftime("%Y-%m-%d"),
            open=_parse_float(row.get("open")),
            high=_parse_float(row.get("high")),
            low=_parse_float(row.get("low")),
            close=close,
            volume=_parse_float(volume) if volume else None,
        ))

    bars.sort(key=lambda b: b.timestamp)
    logger.info("Loaded %d price bars", len(bars))
    return bars


parse_csv_data = load


def load_csv(path: Union[str, Path]) -> List[PriceBar]:
    """Read a CSV file and parse it with load()."""
    with open(path, "r", encoding="utf-8") as f:
        return load(f.read())


def generate_synthetic(
    num_days: int = 180,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    start: Optional[Union[str, pd.Timestamp]] = None,
) -> List[PriceBar]:
    """
    Random-walk daily bars from a baseline of 100 with a slight upward drift.
    Demo/test data only. Pass seed or rng for a reproducible series.
    """
    if num_days <= 0:
        return []
    rng = rng if rng is not None else np.random.default_rng(seed)
    if start is None:
        start = pd.Timestamp.now(tz="UTC").normalize() - pd.Timedelta(days=num_days)
    start = pd.Timestamp(start)
    if start.tzinfo is None:
        start = start.tz_localize("UTC")
    days = pd.date_range(start, periods=num_days, freq="D")

    bars: List[PriceBar] = []
    price = 100.0
    for day in days:
        change = (rng.random() - 0.48) * 3
        volatility = rng.random() * 2
        open_ = price
        close = price + change
        timestamp = int(day.value // 1_000_000)
        bars.append(PriceBar(
            timestamp=timestamp,
            date=day.strftime("%Y-%m-%d"),
            open=open_,
            high=max(open_, close) + volatility,
            low=min(open_, close) - volatility,
            close=close,
            volume=float(rng.integers(500_000, 1_500_000)),
        ))
        price = close
    return bars


def bars_to_frame(series: Sequence[PriceBar]) -> pd.DataFrame:
    """One row per bar; columns timestamp, date, open, high, low, close, volume."""
    return pd.DataFrame([asdict(b) for b in series], columns=FRAME_COLUMNS)
