"""SQLite-backed snapshot store implementation."""

from __future__ import annotations

import logging
import sqlite3
from datetime import UTC, datetime
from pathlib import Path
from types import TracebackType

from ..core.config import StorageSettings
from ..core.interfaces import SnapshotError, SnapshotStore
from ..core.models import TrackedState
from ..core.snapshot import dumps_state, loads_state

LOGGER = logging.getLogger(__name__)

_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS snapshots (
    key TEXT PRIMARY KEY,
    payload TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""


class SqliteSnapshotStore(SnapshotStore):
    """Persist the tracked-state snapshot in a single SQLite key/value slot."""

    def __init__(self, settings: StorageSettings) -> None:
        """Open the database and ensure the snapshot table exists."""
        self._settings = settings
        self._key = settings.snapshot_key
        db_path = Path(settings.db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = sqlite3.connect(db_path, check_same_thread=False)
        self._connection.row_factory = sqlite3.Row
        with self._connection:
            self._connection.execute(_CREATE_TABLE_SQL)

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> SqliteSnapshotStore:
        """Enter context manager scope."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Ensure the connection is closed when exiting context manager."""
        self.close()

    # SnapshotStore API -------------------------------------------------------
    def load(self) -> TrackedState | None:
        """Return the stored state, or ``None`` when absent or unreadable.

        A corrupted payload is logged and treated as absent so the caller
        starts from empty defaults.
        """
        raw = self.load_raw()
        if raw is None:
            LOGGER.debug("No snapshot stored under %s", self._key)
            return None
        try:
            state = loads_state(raw)
        except SnapshotError as exc:
            LOGGER.error(
                "Discarding unreadable snapshot %s: %s", self._key, exc, exc_info=True
            )
            return None
        LOGGER.debug(
            "Loaded snapshot %s with %d message(s)", self._key, len(state.messages)
        )
        return state

    def save(self, state: TrackedState) -> None:
        """Overwrite the stored snapshot with ``state``."""
        self.save_raw(dumps_state(state))
        LOGGER.debug(
            "Saved snapshot %s with %d message(s)", self._key, len(state.messages)
        )

    def clear(self) -> None:
        """Delete the stored snapshot slot."""
        with self._connection:
            cursor = self._connection.execute(
                "DELETE FROM snapshots WHERE key = ?", (self._key,)
            )
        if cursor.rowcount > 0:
            LOGGER.info("Cleared snapshot %s", self._key)

    # Raw payload access ------------------------------------------------------
    def load_raw(self) -> str | None:
        """Return the stored JSON payload without decoding it."""
        row = self._connection.execute(
            "SELECT payload FROM snapshots WHERE key = ?", (self._key,)
        ).fetchone()
        return row["payload"] if row else None

    def save_raw(self, payload: str) -> None:
        """Store ``payload`` verbatim in the snapshot slot."""
        now = datetime.now(UTC).isoformat()
        with self._connection:
            self._connection.execute(
                """
                INSERT INTO snapshots (key, payload, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    payload = excluded.payload,
                    updated_at = excluded.updated_at
                """,
                (self._key, payload, now),
            )

    def close(self) -> None:
        """Close the underlying SQLite connection."""
        self._connection.close()


__all__ = ["SqliteSnapshotStore"]
