"""Database operations for club settings.

Provides read/update operations for the settings table (singleton row).
Settings are organized into logical groups for easier management.
"""

from dataclasses import dataclass, field
from sqlite3 import Connection


@dataclass
class ClubSettings:
    """Identity of the observed club ("us")."""

    name: str = "Camden United"
    short_name: str | None = None


@dataclass
class OcrSettings:
    """Watcher OCR parsing settings."""

    language: str = "eng"
    min_row_numbers: int = 3
    excerpt_length: int = 100
    require_opposition: bool = False


@dataclass
class FixtureSettings:
    """Fixture importer defaults."""

    match_threshold: float = 85.0
    default_competition: str = "Premier Division"
    default_kickoff: str = "15:00"


@dataclass
class AllSettings:
    """Complete application settings."""

    club: ClubSettings = field(default_factory=ClubSettings)
    ocr: OcrSettings = field(default_factory=OcrSettings)
    fixtures: FixtureSettings = field(default_factory=FixtureSettings)


# =============================================================================
# READ OPERATIONS
# =============================================================================


def get_all_settings(conn: Connection) -> AllSettings:
    """Get all application settings.

    Args:
        conn: Database connection

    Returns:
        AllSettings object with all configuration
    """
    cursor = conn.execute("SELECT * FROM settings WHERE id = 1")
    row = cursor.fetchone()

    if not row:
        return AllSettings()

    return AllSettings(
        club=ClubSettings(
            name=row["club_name"] or "Camden United",
            short_name=row["club_short_name"],
        ),
        ocr=OcrSettings(
            language=row["ocr_language"] or "eng",
            min_row_numbers=row["ocr_min_row_numbers"] or 3,
            excerpt_length=row["ocr_excerpt_length"] or 100,
            require_opposition=bool(row["ocr_require_opposition"]),
        ),
        fixtures=FixtureSettings(
            match_threshold=row["fixture_match_threshold"] or 85.0,
            default_competition=row["default_competition"] or "Premier Division",
            default_kickoff=row["default_kickoff"] or "15:00",
        ),
    )


def get_club_settings(conn: Connection) -> ClubSettings:
    """Get club identity settings."""
    return get_all_settings(conn).club


def get_ocr_settings(conn: Connection) -> OcrSettings:
    """Get OCR parsing settings."""
    return get_all_settings(conn).ocr


# =============================================================================
# UPDATE OPERATIONS
# =============================================================================

# Allowed columns per update call, keyed by dataclass field name
_CLUB_COLUMNS = {"name": "club_name", "short_name": "club_short_name"}
_OCR_COLUMNS = {
    "language": "ocr_language",
    "min_row_numbers": "ocr_min_row_numbers",
    "excerpt_length": "ocr_excerpt_length",
    "require_opposition": "ocr_require_opposition",
}


def _update_columns(conn: Connection, columns: dict[str, str], values: dict) -> bool:
    updates = {columns[k]: v for k, v in values.items() if k in columns and v is not None}
    if not updates:
        return False

    set_clause = ", ".join(f"{col} = ?" for col in updates)
    conn.execute(
        f"UPDATE settings SET {set_clause}, updated_at = CURRENT_TIMESTAMP WHERE id = 1",
        list(updates.values()),
    )
    return True


def update_club_settings(
    conn: Connection, name: str | None = None, short_name: str | None = None
) -> bool:
    """Update club identity. None values are left unchanged.

    Returns:
        True if anything was updated
    """
    return _update_columns(conn, _CLUB_COLUMNS, {"name": name, "short_name": short_name})


def update_ocr_settings(
    conn: Connection,
    language: str | None = None,
    min_row_numbers: int | None = None,
    excerpt_length: int | None = None,
    require_opposition: bool | None = None,
) -> bool:
    """Update OCR settings. None values are left unchanged.

    Returns:
        True if anything was updated
    """
    return _update_columns(
        conn,
        _OCR_COLUMNS,
        {
            "language": language,
            "min_row_numbers": min_row_numbers,
            "excerpt_length": excerpt_length,
            "require_opposition": require_opposition,
        },
    )
