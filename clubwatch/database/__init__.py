"""Database layer."""

from clubwatch.database.connection import get_connection, get_db, init_db
from clubwatch.database.matches import (
    get_all_matches,
    get_played_matches,
    insert_fixture,
)
from clubwatch.database.observations import SqliteObservationStore
from clubwatch.database.settings import (
    AllSettings,
    ClubSettings,
    FixtureSettings,
    OcrSettings,
    get_all_settings,
    get_club_settings,
    get_ocr_settings,
    update_club_settings,
    update_ocr_settings,
)

__all__ = [
    # Connection
    "get_connection",
    "get_db",
    "init_db",
    # Matches
    "get_all_matches",
    "get_played_matches",
    "insert_fixture",
    # Observations
    "SqliteObservationStore",
    # Settings
    "AllSettings",
    "ClubSettings",
    "FixtureSettings",
    "OcrSettings",
    "get_all_settings",
    "get_club_settings",
    "get_ocr_settings",
    "update_club_settings",
    "update_ocr_settings",
]
