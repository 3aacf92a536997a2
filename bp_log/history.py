"""Merged history of sessions and standalone readings."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bp_log.models import HistoryEntry, Reading, Session
from bp_log.store import ReadingStore

logger = logging.getLogger(__name__)


def merge_history(
    sessions: Iterable[Session], readings: Iterable[Reading]
) -> list[HistoryEntry]:
    """Merge sessions and standalone readings, newest first."""
    entries = [HistoryEntry.from_session(s) for s in sessions]
    entries.extend(HistoryEntry.from_reading(r) for r in readings)
    entries.sort(key=lambda e: e.timestamp, reverse=True)
    return entries


def load_history(
    store: ReadingStore,
    session_limit: int = 100,
    reading_limit: int = 200,
) -> list[HistoryEntry]:
    """Load sessions (with their readings) and standalone readings from the store.

    Args:
        store: Reading/session store
        session_limit: Maximum number of sessions to load
        reading_limit: Maximum number of standalone readings to load

    Returns:
        Merged history, newest first
    """
    sessions = store.list_sessions(limit=session_limit, with_readings=True)
    readings = store.list_standalone_readings(limit=reading_limit)
    logger.debug(f"Loaded {len(sessions)} sessions and {len(readings)} standalone readings")
    return merge_history(sessions, readings)
