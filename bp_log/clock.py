"""Clock collaborators supplying "now" to time-windowed computations."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from bp_log.models import to_local


class Clock(Protocol):
    """Source of the current local time."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in naive local time."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Clock frozen at a given instant."""

    def __init__(self, instant: datetime | str):
        self.instant = to_local(instant)

    def now(self) -> datetime:
        return self.instant
