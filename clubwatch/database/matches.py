"""Match queries.

The watcher only reads matches (opponent, venue, scoreline). Inserts exist
for committing operator-reviewed fixtures from the importer.
"""

import logging
import uuid
from datetime import date
from sqlite3 import Connection

from clubwatch.core.types import FixtureCandidate, Match

logger = logging.getLogger(__name__)


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def _row_to_match(row) -> Match:
    """Convert a database row to Match."""
    return Match(
        id=row["id"],
        date=_parse_date(row["date"]),
        time=row["time"] or "15:00",
        opponent=row["opponent"],
        is_home=bool(row["is_home"]),
        competition=row["competition"] or "Premier Division",
        scoreline=row["scoreline"],
        result=row["result"] or "Pending",
    )


# =============================================================================
# READ OPERATIONS
# =============================================================================


def get_all_matches(conn: Connection) -> list[Match]:
    """Get all matches, oldest first."""
    cursor = conn.execute("SELECT * FROM matches ORDER BY date, time")
    return [_row_to_match(row) for row in cursor.fetchall()]


def get_played_matches(conn: Connection) -> list[Match]:
    """Get matches with a result, newest first (the watcher's match picker)."""
    cursor = conn.execute(
        """SELECT * FROM matches
           WHERE result IS NOT NULL AND result != 'Pending'
           ORDER BY date DESC"""
    )
    return [_row_to_match(row) for row in cursor.fetchall()]


# =============================================================================
# CREATE OPERATIONS
# =============================================================================


def insert_fixture(conn: Connection, fixture: FixtureCandidate, notes: str | None = None) -> str:
    """Insert a reviewed fixture as a match.

    Args:
        conn: Database connection
        fixture: Operator-corrected fixture candidate
        notes: Optional note stored with the match

    Returns:
        New match ID
    """
    match_id = uuid.uuid4().hex
    conn.execute(
        """
        INSERT INTO matches (id, date, time, opponent, is_home, competition,
                             scoreline, result, notes)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            match_id,
            fixture.date.isoformat() if fixture.date else None,
            fixture.time,
            fixture.opponent,
            fixture.is_home,
            fixture.competition,
            fixture.scoreline or None,
            fixture.result,
            notes,
        ),
    )
    logger.debug("[MATCHES] Inserted %s: %s (home=%s)", match_id, fixture.opponent, fixture.is_home)
    return match_id
