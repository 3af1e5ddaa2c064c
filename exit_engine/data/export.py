"""Signal export: Date,Price,Algorithm,Signal,Confidence,Reason rows."""

from __future__ import annotations
from pathlib import Path
from typing import Sequence, Union

from exit_engine.core.logger import get_logger
from exit_engine.core.types import ExitSignal, SignalType, iso_date

logger = get_logger("data.export")

EXPORT_HEADER = "Date,Price,Algorithm,Signal,Confidence,Reason"


def _signal_value(signal) -> str:
    return signal.value if isinstance(signal, SignalType) else str(signal)


def signal_row(s: ExitSignal) -> str:
    """One CSV line. Confidence to 2 decimals, reason always quoted."""
    reason = (s.reason or "").replace('"', '""')
    return f'{iso_date(s.timestamp)},{s.price},{s.algorithm},{_signal_value(s.signal)},{s.confidence:.2f},"{reason}"'


def signals_to_csv(signals: Sequence[ExitSignal]) -> str:
    return "\n".join([EXPORT_HEADER] + [signal_row(s) for s in signals])


def write_signals_csv(signals: Sequence[ExitSignal], path: Union[str, Path]) -> Path:
    """Write signals_to_csv() output to path. Returns the path written."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(signals_to_csv(signals), encoding="utf-8")
    logger.info("Exported %d signals to %s", len(signals), path)
    return path
