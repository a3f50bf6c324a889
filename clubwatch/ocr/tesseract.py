"""Tesseract-backed text recognizer.

Wraps pytesseract behind the TextRecognizer interface. The call blocks
until recognition finishes; there is no progress reporting or cancellation.
"""

import io
import logging

import pytesseract
from PIL import Image, ImageOps, UnidentifiedImageError

from clubwatch.config import OCR_LANG, TESSERACT_CMD
from clubwatch.core.errors import RecognitionFailed
from clubwatch.core.interfaces import OcrResult, TextRecognizer

logger = logging.getLogger(__name__)


class TesseractRecognizer(TextRecognizer):
    """Recognize text from screenshot bytes with Tesseract.

    Screenshots are converted to grayscale before recognition, which helps
    with the coloured table cells of stats apps.
    """

    def __init__(self, lang: str | None = None, tesseract_cmd: str | None = None):
        """Initialize recognizer.

        Args:
            lang: Tesseract language code (default: CLUBWATCH_OCR_LANG or 'eng')
            tesseract_cmd: Path to the tesseract binary (default: TESSERACT_CMD or PATH)
        """
        self.lang = lang or OCR_LANG
        cmd = tesseract_cmd or TESSERACT_CMD
        if cmd:
            pytesseract.pytesseract.tesseract_cmd = cmd

    def recognize(self, image: bytes) -> OcrResult:
        """Recognize text in an encoded image.

        Raises:
            RecognitionFailed: The bytes are not a readable image, or Tesseract
                is missing or errored
        """
        try:
            with Image.open(io.BytesIO(image)) as img:
                prepared = ImageOps.grayscale(img)
                text = pytesseract.image_to_string(prepared, lang=self.lang) or ""
        except (
            UnidentifiedImageError,
            pytesseract.TesseractNotFoundError,
            pytesseract.TesseractError,
        ) as e:
            logger.warning("[OCR] Recognition failed: %s", e)
            raise RecognitionFailed(f"Failed to process image: {e}") from e

        logger.debug("[OCR] Recognized %d characters", len(text))
        return OcrResult(text=text)
