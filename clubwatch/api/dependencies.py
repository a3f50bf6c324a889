"""Shared FastAPI dependencies."""

from clubwatch.core.interfaces import TextRecognizer
from clubwatch.database import get_db, get_ocr_settings


def get_recognizer() -> TextRecognizer:
    """OCR collaborator for screenshot uploads.

    Override in tests via app.dependency_overrides[get_recognizer].
    """
    from clubwatch.ocr import TesseractRecognizer

    with get_db() as conn:
        language = get_ocr_settings(conn).language
    return TesseractRecognizer(lang=language)
