"""Process-level configuration.

Values come from the environment and are read once at import. Per-club
settings (club name, OCR tuning) live in the settings table instead; see
clubwatch.database.settings.
"""

import logging
import os
from pathlib import Path

DB_PATH = Path(os.environ.get("CLUBWATCH_DB_PATH", "./clubwatch.db"))
LOG_LEVEL = os.environ.get("CLUBWATCH_LOG_LEVEL", "INFO").upper()

# Tesseract
OCR_LANG = os.environ.get("CLUBWATCH_OCR_LANG", "eng")
TESSERACT_CMD = os.environ.get("TESSERACT_CMD")  # None = use PATH

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for the application."""
    logging.basicConfig(level=(level or LOG_LEVEL), format=LOG_FORMAT)
