"""Data models for BP Log."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from bp_log.categories import Category, classify

SESSION = "session"
SINGLE = "single"


def to_local(value: datetime | str) -> datetime:
    """Normalize a timestamp to a naive local datetime.

    Aware datetimes are converted to the local zone; ISO strings are parsed.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


@dataclass
class Reading:
    """Single blood pressure measurement."""

    systolic: int  # mmHg
    diastolic: int  # mmHg
    pulse: int  # bpm
    taken_at: datetime
    session_id: int | None = None
    photo_ref: str | None = None
    id: int | None = None

    @property
    def category(self) -> Category:
        return classify(self.systolic, self.diastolic)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "systolic": self.systolic,
            "diastolic": self.diastolic,
            "pulse": self.pulse,
            "taken_at": self.taken_at.isoformat(),
            "session_id": self.session_id,
            "photo_ref": self.photo_ref,
            "category": self.category.key,
        }

    def __str__(self) -> str:
        return f"BP: {self.systolic}/{self.diastolic} mmHg, Pulse: {self.pulse} bpm"


@dataclass
class Session:
    """Readings captured together, summarized by one average."""

    session_at: datetime
    reading_count: int
    avg_systolic: int
    avg_diastolic: int
    avg_pulse: int
    photo_ref: str | None = None
    id: int | None = None
    readings: list[Reading] = field(default_factory=list)

    @property
    def category(self) -> Category:
        return classify(self.avg_systolic, self.avg_diastolic)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "session_at": self.session_at.isoformat(),
            "reading_count": self.reading_count,
            "avg_systolic": self.avg_systolic,
            "avg_diastolic": self.avg_diastolic,
            "avg_pulse": self.avg_pulse,
            "photo_ref": self.photo_ref,
            "category": self.category.key,
            "readings": [r.to_dict() for r in self.readings],
        }

    def __str__(self) -> str:
        return (
            f"Session: {self.avg_systolic}/{self.avg_diastolic} mmHg, "
            f"Pulse: {self.avg_pulse} bpm ({self.reading_count} readings)"
        )


@dataclass(frozen=True)
class HistoryEntry:
    """One row of the merged history: a session or a standalone reading.

    Sessions expose their averages and session_at, single readings their own
    values and taken_at.
    """

    kind: str
    record: Session | Reading

    @classmethod
    def from_session(cls, session: Session) -> HistoryEntry:
        return cls(kind=SESSION, record=session)

    @classmethod
    def from_reading(cls, reading: Reading) -> HistoryEntry:
        return cls(kind=SINGLE, record=reading)

    @property
    def is_session(self) -> bool:
        return self.kind == SESSION

    @property
    def systolic(self) -> int | None:
        if isinstance(self.record, Session):
            return self.record.avg_systolic
        return self.record.systolic

    @property
    def diastolic(self) -> int | None:
        if isinstance(self.record, Session):
            return self.record.avg_diastolic
        return self.record.diastolic

    @property
    def pulse(self) -> int | None:
        if isinstance(self.record, Session):
            return self.record.avg_pulse
        return self.record.pulse

    @property
    def timestamp(self) -> datetime:
        if isinstance(self.record, Session):
            return self.record.session_at
        return self.record.taken_at

    @property
    def category(self) -> Category:
        return classify(self.systolic, self.diastolic)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind,
            "timestamp": self.timestamp.isoformat(),
            "systolic": self.systolic,
            "diastolic": self.diastolic,
            "pulse": self.pulse,
            "category": self.category.key,
            "record": self.record.to_dict(),
        }
