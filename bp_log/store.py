"""Reading/Session store backed by SQLite.

Sessions live in ``bp_sessions``; readings (standalone or linked to a session
through ``session_id``) live in ``bp_logs``. Deleting a session removes its
linked readings.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from bp_log.models import Reading, Session, to_local

logger = logging.getLogger(__name__)


class ReadingStore(Protocol):
    """Persistence operations required by the session aggregator."""

    def insert_session(self, session: Session) -> int: ...

    def insert_readings(self, readings: Sequence[Reading]) -> None: ...

    def insert_reading(self, reading: Reading) -> int: ...

    def delete_session(self, session_id: int) -> None: ...

    def list_sessions(self, limit: int = 100, with_readings: bool = False) -> list[Session]: ...

    def list_standalone_readings(self, limit: int = 200) -> list[Reading]: ...


class SqliteStore:
    """Store sessions and readings in a local SQLite database."""

    def __init__(self, db_path: str = "data/bp_log.db"):
        """Initialize the store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS bp_sessions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    session_at TEXT NOT NULL,
                    reading_count INTEGER NOT NULL,
                    avg_systolic INTEGER NOT NULL,
                    avg_diastolic INTEGER NOT NULL,
                    avg_pulse INTEGER NOT NULL,
                    photo_ref TEXT
                )
            """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS bp_logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    session_id INTEGER REFERENCES bp_sessions(id) ON DELETE CASCADE,
                    reading_at TEXT NOT NULL,
                    systolic INTEGER NOT NULL,
                    diastolic INTEGER NOT NULL,
                    pulse INTEGER NOT NULL,
                    photo_ref TEXT
                )
            """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_sessions_at ON bp_sessions(session_at)"
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_logs_session ON bp_logs(session_id)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_logs_reading_at ON bp_logs(reading_at)")
            conn.commit()
            logger.debug(f"Database initialized at {self.db_path}")

    @staticmethod
    def _row_to_session(row: sqlite3.Row) -> Session:
        return Session(
            id=row["id"],
            session_at=to_local(row["session_at"]),
            reading_count=row["reading_count"],
            avg_systolic=row["avg_systolic"],
            avg_diastolic=row["avg_diastolic"],
            avg_pulse=row["avg_pulse"],
            photo_ref=row["photo_ref"],
        )

    @staticmethod
    def _row_to_reading(row: sqlite3.Row) -> Reading:
        return Reading(
            id=row["id"],
            session_id=row["session_id"],
            taken_at=to_local(row["reading_at"]),
            systolic=row["systolic"],
            diastolic=row["diastolic"],
            pulse=row["pulse"],
            photo_ref=row["photo_ref"],
        )

    @staticmethod
    def _reading_params(reading: Reading) -> tuple:
        return (
            reading.session_id,
            to_local(reading.taken_at).isoformat(),
            reading.systolic,
            reading.diastolic,
            reading.pulse,
            reading.photo_ref,
        )

    def insert_session(self, session: Session) -> int:
        """Insert a session summary.

        Args:
            session: Session to store (its id is ignored)

        Returns:
            Id assigned to the new session
        """
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO bp_sessions
                (session_at, reading_count, avg_systolic, avg_diastolic, avg_pulse, photo_ref)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    to_local(session.session_at).isoformat(),
                    session.reading_count,
                    session.avg_systolic,
                    session.avg_diastolic,
                    session.avg_pulse,
                    session.photo_ref,
                ),
            )
            conn.commit()
            session_id = int(cursor.lastrowid)
        logger.debug(f"Inserted session {session_id}")
        return session_id

    def insert_readings(self, readings: Sequence[Reading]) -> None:
        """Insert readings in a single transaction.

        Args:
            readings: Readings to store

        Raises:
            sqlite3.Error: If any row fails; no row is kept in that case
        """
        with self._connect() as conn:
            conn.executemany(
                """
                INSERT INTO bp_logs
                (session_id, reading_at, systolic, diastolic, pulse, photo_ref)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                [self._reading_params(r) for r in readings],
            )
            conn.commit()
        logger.debug(f"Inserted {len(readings)} readings")

    def insert_reading(self, reading: Reading) -> int:
        """Insert one reading.

        Returns:
            Id assigned to the new reading
        """
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO bp_logs
                (session_id, reading_at, systolic, diastolic, pulse, photo_ref)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                self._reading_params(reading),
            )
            conn.commit()
            return int(cursor.lastrowid)

    def delete_session(self, session_id: int) -> None:
        """Delete a session and its linked readings."""
        with self._connect() as conn:
            conn.execute("DELETE FROM bp_sessions WHERE id = ?", (session_id,))
            conn.commit()
        logger.info(f"Deleted session {session_id}")

    def delete_reading(self, reading_id: int) -> None:
        """Delete a single reading."""
        with self._connect() as conn:
            conn.execute("DELETE FROM bp_logs WHERE id = ?", (reading_id,))
            conn.commit()
        logger.info(f"Deleted reading {reading_id}")

    def get_session(self, session_id: int) -> Session | None:
        """Get a session with its linked readings.

        Returns:
            Session, or None if it does not exist
        """
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM bp_sessions WHERE id = ?", (session_id,)
            ).fetchone()
        if row is None:
            return None
        session = self._row_to_session(row)
        session.readings = self.list_session_readings(session_id)
        return session

    def list_sessions(self, limit: int = 100, with_readings: bool = False) -> list[Session]:
        """List sessions, most recent first.

        Args:
            limit: Maximum number of sessions to return
            with_readings: Also load each session's linked readings

        Returns:
            List of sessions
        """
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM bp_sessions ORDER BY session_at DESC LIMIT ?",
                (limit,),
            ).fetchall()
        sessions = [self._row_to_session(row) for row in rows]
        if with_readings:
            for session in sessions:
                session.readings = self.list_session_readings(session.id)
        return sessions

    def list_session_readings(self, session_id: int) -> list[Reading]:
        """List readings linked to a session, oldest first."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM bp_logs WHERE session_id = ? ORDER BY reading_at ASC, id ASC",
                (session_id,),
            ).fetchall()
        return [self._row_to_reading(row) for row in rows]

    def list_standalone_readings(self, limit: int = 200) -> list[Reading]:
        """List readings not linked to any session, most recent first."""
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT * FROM bp_logs
                WHERE session_id IS NULL
                ORDER BY reading_at DESC
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [self._row_to_reading(row) for row in rows]

    def get_statistics(self) -> dict:
        """Get statistics about stored records.

        Returns:
            Dictionary with statistics
        """
        with self._connect() as conn:
            session_count = conn.execute("SELECT COUNT(*) FROM bp_sessions").fetchone()[0]
            reading_count = conn.execute("SELECT COUNT(*) FROM bp_logs").fetchone()[0]
            standalone_count = conn.execute(
                "SELECT COUNT(*) FROM bp_logs WHERE session_id IS NULL"
            ).fetchone()[0]

            # Sessions and standalone readings together form the history
            row = conn.execute(
                """
                SELECT MIN(ts), MAX(ts) FROM (
                    SELECT session_at AS ts FROM bp_sessions
                    UNION ALL
                    SELECT reading_at AS ts FROM bp_logs WHERE session_id IS NULL
                )
                """
            ).fetchone()

        return {
            "total_sessions": session_count,
            "total_readings": reading_count,
            "standalone_readings": standalone_count,
            "first_entry": row[0],
            "last_entry": row[1],
        }
