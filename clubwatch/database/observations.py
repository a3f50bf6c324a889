"""Watcher observation storage.

SQLite implementation of ObservationStore over the watcher_stats table.
One row per match_id; saves upsert on that key, so the last write wins.
There is no version check: concurrent editors of the same match overwrite
each other.
"""

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from clubwatch.core.errors import StoreFailure
from clubwatch.core.interfaces import ObservationStore
from clubwatch.core.types import MatchObservation, TeamHalfPair
from clubwatch.database.connection import get_db

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def _row_to_observation(row) -> MatchObservation:
    """Convert a database row to MatchObservation."""
    return MatchObservation(
        id=row["id"],
        match_id=row["match_id"],
        us=TeamHalfPair.from_dict(json.loads(row["us"] or "{}")),
        opposition=TeamHalfPair.from_dict(json.loads(row["opposition"] or "{}")),
        notes=row["notes"],
        created_at=_parse_timestamp(row["created_at"]),
        updated_at=_parse_timestamp(row["updated_at"]),
    )


class SqliteObservationStore(ObservationStore):
    """watcher_stats table accessed through get_db().

    Every sqlite3 error is re-raised as StoreFailure with the driver's
    message. No retries.
    """

    def __init__(self, db_path: Path | str | None = None):
        self._db_path = db_path

    def get_all(self) -> list[MatchObservation]:
        try:
            with get_db(self._db_path) as conn:
                cursor = conn.execute("SELECT * FROM watcher_stats ORDER BY id")
                return [_row_to_observation(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            logger.error("[WATCHER_STORE] Failed to read observations: %s", e)
            raise StoreFailure(str(e)) from e

    def get(self, match_id: str) -> MatchObservation | None:
        try:
            with get_db(self._db_path) as conn:
                cursor = conn.execute(
                    "SELECT * FROM watcher_stats WHERE match_id = ?", (match_id,)
                )
                row = cursor.fetchone()
                return _row_to_observation(row) if row else None
        except sqlite3.Error as e:
            logger.error("[WATCHER_STORE] Failed to read observation %s: %s", match_id, e)
            raise StoreFailure(str(e)) from e

    def upsert(
        self,
        match_id: str,
        us: TeamHalfPair,
        opposition: TeamHalfPair,
        updated_at: datetime,
        notes: str | None = None,
    ) -> MatchObservation:
        """Insert or replace the observation for match_id.

        created_at is kept from the first insert; everything else is replaced.
        """
        timestamp = updated_at.isoformat()
        try:
            with get_db(self._db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO watcher_stats (match_id, us, opposition, notes, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    ON CONFLICT(match_id) DO UPDATE SET
                        us = excluded.us,
                        opposition = excluded.opposition,
                        notes = excluded.notes,
                        updated_at = excluded.updated_at
                    """,
                    (
                        match_id,
                        json.dumps(us.to_dict()),
                        json.dumps(opposition.to_dict()),
                        notes,
                        timestamp,
                        timestamp,
                    ),
                )
                cursor = conn.execute(
                    "SELECT * FROM watcher_stats WHERE match_id = ?", (match_id,)
                )
                observation = _row_to_observation(cursor.fetchone())
        except sqlite3.Error as e:
            logger.error("[WATCHER_STORE] Failed to upsert %s: %s", match_id, e)
            raise StoreFailure(str(e)) from e

        logger.debug("[WATCHER_STORE] Upserted observation for match %s", match_id)
        return observation

    def delete(self, match_id: str) -> bool:
        try:
            with get_db(self._db_path) as conn:
                cursor = conn.execute("DELETE FROM watcher_stats WHERE match_id = ?", (match_id,))
                deleted = cursor.rowcount > 0
        except sqlite3.Error as e:
            logger.error("[WATCHER_STORE] Failed to delete %s: %s", match_id, e)
            raise StoreFailure(str(e)) from e

        if deleted:
            logger.info("[WATCHER_STORE] Deleted observation for match %s", match_id)
        return deleted
