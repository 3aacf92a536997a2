"""Saving readings and reading sessions.

A session is written in two steps: the summary row first, then one row per
accepted reading linked to it. If the second step fails the summary row is
deleted again, so a failed save leaves nothing behind.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from bp_log.averaging import (
    Average,
    average,
    is_blank_reading,
    is_valid_reading,
    is_valid_triple,
    parse_triple,
)
from bp_log.errors import (
    EmptySessionError,
    InvalidOverrideError,
    InvalidReadingError,
    StoreWriteError,
    TooManyReadingsError,
)
from bp_log.models import Reading, Session, to_local
from bp_log.store import ReadingStore

logger = logging.getLogger(__name__)

MAX_SESSION_READINGS = 10


def accepted_readings(readings: Sequence[Any]) -> list[tuple[int, int, int]]:
    """Readings a session keeps: complete and within entry ranges."""
    return [parse_triple(r) for r in readings if is_valid_reading(r)]


def _average_of(accepted: list[tuple[int, int, int]]) -> Average | None:
    return average({"systolic": s, "diastolic": d, "pulse": p} for s, d, p in accepted)


def preview_average(readings: Sequence[Any]) -> tuple[Average | None, int]:
    """Average that saving these readings would store.

    Returns:
        Average of the accepted readings (None if there are none), and the
        number of filled-in readings that would be dropped
    """
    accepted = accepted_readings(readings)
    filled = sum(1 for r in readings if not is_blank_reading(r))
    return _average_of(accepted), filled - len(accepted)


@dataclass(frozen=True)
class SessionMeta:
    """Session metadata captured when the user finalizes a session."""

    timestamp: datetime
    photo_ref: str | None = None
    override: Average | None = None


class SessionAggregator:
    """Turn confirmed readings into persisted sessions and readings."""

    def __init__(self, store: ReadingStore):
        self.store = store

    def _effective_average(self, meta: SessionMeta, computed: Average) -> Average:
        override = meta.override
        if override is None:
            return computed

        parsed = parse_triple(override)
        if parsed is None or not is_valid_triple(*parsed):
            raise InvalidOverrideError(
                f"Override {override.systolic}/{override.diastolic}/{override.pulse} "
                "is outside accepted ranges"
            )
        if override.count is not None and override.count != computed.count:
            raise InvalidOverrideError(
                f"Override count {override.count} does not match "
                f"{computed.count} accepted readings"
            )

        systolic, diastolic, pulse = parsed
        return Average(systolic, diastolic, pulse, computed.count)

    def _rollback(self, session_id: int) -> None:
        try:
            self.store.delete_session(session_id)
            logger.warning(f"Rolled back session {session_id}")
        except Exception as e:
            logger.error(f"Rollback of session {session_id} failed: {e}")

    def save_session(self, meta: SessionMeta, readings: Sequence[Any]) -> Session:
        """Persist a session and its readings.

        Args:
            meta: Locked timestamp, optional photo and optional override average
            readings: Raw readings captured in the session

        Returns:
            Persisted session with its store id and linked readings

        Raises:
            TooManyReadingsError: If more than MAX_SESSION_READINGS are given
            EmptySessionError: If no reading passes validation
            InvalidOverrideError: If the override average is rejected
            StoreWriteError: If the store fails; nothing is left behind
        """
        if len(readings) > MAX_SESSION_READINGS:
            raise TooManyReadingsError(
                f"A session holds at most {MAX_SESSION_READINGS} readings, got {len(readings)}"
            )

        accepted = accepted_readings(readings)
        computed = _average_of(accepted)
        if computed is None:
            raise EmptySessionError("No valid readings to save")

        effective = self._effective_average(meta, computed)
        session_at = to_local(meta.timestamp)

        session = Session(
            session_at=session_at,
            reading_count=len(accepted),
            avg_systolic=effective.systolic,
            avg_diastolic=effective.diastolic,
            avg_pulse=effective.pulse,
            photo_ref=meta.photo_ref,
        )

        try:
            session.id = self.store.insert_session(session)
        except Exception as e:
            logger.error(f"Error saving session: {e}")
            raise StoreWriteError("Failed to save session") from e

        # Linked readings carry the session timestamp, not their own capture time
        linked = [
            Reading(
                systolic=s,
                diastolic=d,
                pulse=p,
                taken_at=session_at,
                session_id=session.id,
            )
            for s, d, p in accepted
        ]

        try:
            self.store.insert_readings(linked)
        except Exception as e:
            logger.error(f"Error saving readings for session {session.id}: {e}")
            self._rollback(session.id)
            raise StoreWriteError("Failed to save session readings") from e

        session.readings = linked
        logger.info(
            f"Saved session {session.id}: {session.avg_systolic}/{session.avg_diastolic} mmHg, "
            f"{session.avg_pulse} bpm from {session.reading_count} readings"
        )
        return session

    def save_reading(
        self,
        raw: Any,
        taken_at: datetime,
        photo_ref: str | None = None,
    ) -> Reading:
        """Persist a standalone reading.

        Args:
            raw: Raw reading with systolic, diastolic and pulse
            taken_at: Capture time
            photo_ref: Optional photo reference

        Returns:
            Persisted reading with its store id

        Raises:
            InvalidReadingError: If the reading is incomplete or out of range
            StoreWriteError: If the store fails
        """
        parsed = parse_triple(raw)
        if parsed is None or not is_valid_triple(*parsed):
            raise InvalidReadingError("Reading is incomplete or outside accepted ranges")

        systolic, diastolic, pulse = parsed
        reading = Reading(
            systolic=systolic,
            diastolic=diastolic,
            pulse=pulse,
            taken_at=to_local(taken_at),
            photo_ref=photo_ref,
        )

        try:
            reading.id = self.store.insert_reading(reading)
        except Exception as e:
            logger.error(f"Error saving reading: {e}")
            raise StoreWriteError("Failed to save reading") from e

        logger.info(f"Saved reading {reading.id}: {reading}")
        return reading
