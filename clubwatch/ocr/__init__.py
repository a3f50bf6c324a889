"""OCR collaborators."""

from clubwatch.ocr.tesseract import TesseractRecognizer

__all__ = ["TesseractRecognizer"]
