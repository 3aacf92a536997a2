"""Lookback windows over the merged history for trend charts."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta

import pandas as pd

from bp_log.models import HistoryEntry, to_local

# Selectable windows: key -> days (0 = since local midnight)
RANGES = {
    "today": 0,
    "5d": 5,
    "10d": 10,
    "30d": 30,
}


@dataclass(frozen=True)
class ChartPoint:
    timestamp: datetime
    systolic: int
    diastolic: int
    pulse: int


def window_cutoff(range_days: int, now: datetime) -> datetime:
    """Start of the window ending at ``now``."""
    if range_days == 0:
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    return now - timedelta(days=range_days)


def windowed_series(
    history: Iterable[HistoryEntry], range_days: int, now: datetime
) -> list[ChartPoint]:
    """Points for entries inside the window, oldest first.

    Args:
        history: Merged history entries
        range_days: Window length in days; 0 means since local midnight
        now: Current local time (window end, inclusive)

    Returns:
        One point per entry with complete, non-zero values
    """
    now = to_local(now)
    cutoff = window_cutoff(range_days, now)

    points = []
    for entry in history:
        ts = to_local(entry.timestamp)
        if not cutoff <= ts <= now:
            continue
        if not (entry.systolic and entry.diastolic and entry.pulse):
            continue
        points.append(ChartPoint(ts, entry.systolic, entry.diastolic, entry.pulse))

    points.sort(key=lambda p: p.timestamp)
    return points


def series_frame(points: list[ChartPoint]) -> pd.DataFrame:
    """Convert chart points to a DataFrame for plotting."""
    return pd.DataFrame(
        [
            {
                "timestamp": p.timestamp,
                "systolic": p.systolic,
                "diastolic": p.diastolic,
                "pulse": p.pulse,
            }
            for p in points
        ],
        columns=["timestamp", "systolic", "diastolic", "pulse"],
    )
