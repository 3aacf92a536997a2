"""Shared pytest fixtures for bp-log tests."""

from datetime import datetime

import pytest

from bp_log.models import HistoryEntry, Reading, Session
from bp_log.sessions import SessionAggregator
from bp_log.store import SqliteStore

# 14:00 on a Wednesday
NOW = datetime(2025, 1, 15, 14, 0, 0)


def make_single(ts: datetime, systolic: int = 120, diastolic: int = 80, pulse: int = 70):
    """History entry for a standalone reading."""
    return HistoryEntry.from_reading(
        Reading(systolic=systolic, diastolic=diastolic, pulse=pulse, taken_at=ts)
    )


def make_session(ts: datetime, systolic: int = 120, diastolic: int = 80, pulse: int = 70):
    """History entry for a session summary."""
    return HistoryEntry.from_session(
        Session(
            session_at=ts,
            reading_count=3,
            avg_systolic=systolic,
            avg_diastolic=diastolic,
            avg_pulse=pulse,
        )
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def sample_reading() -> Reading:
    """Create a sample standalone reading for testing."""
    return Reading(
        systolic=120,
        diastolic=80,
        pulse=72,
        taken_at=datetime(2025, 1, 15, 10, 30, 0),
    )


@pytest.fixture
def sample_session() -> Session:
    """Create a sample session summary for testing."""
    return Session(
        session_at=datetime(2025, 1, 15, 8, 0, 0),
        reading_count=3,
        avg_systolic=131,
        avg_diastolic=84,
        avg_pulse=68,
    )


@pytest.fixture
def raw_readings() -> list[dict]:
    """Form input for a three-reading session."""
    return [
        {"systolic": "128", "diastolic": "84", "pulse": "70"},
        {"systolic": "124", "diastolic": "80", "pulse": "68"},
        {"systolic": "122", "diastolic": "79", "pulse": "69"},
    ]


@pytest.fixture
def db_path(tmp_path) -> str:
    """Create a temporary database path for testing."""
    return str(tmp_path / "test_bp_log.db")


@pytest.fixture
def store(db_path) -> SqliteStore:
    return SqliteStore(db_path)


@pytest.fixture
def aggregator(store) -> SessionAggregator:
    return SessionAggregator(store)
