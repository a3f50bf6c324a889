"""Collaborator interfaces.

The watcher core talks to persistence and OCR only through these.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from clubwatch.core.types import MatchObservation, TeamHalfPair


@dataclass
class OcrResult:
    """Raw text returned by a recognizer."""

    text: str


class TextRecognizer(ABC):
    """OCR engine: image in, multi-line text out. Single call, no streaming."""

    @abstractmethod
    def recognize(self, image: bytes) -> OcrResult:
        """Recognize text in an encoded image (PNG/JPEG bytes)."""


class ObservationStore(ABC):
    """Row store for MatchObservations keyed by match_id."""

    @abstractmethod
    def get_all(self) -> list[MatchObservation]:
        """Get every stored observation."""

    @abstractmethod
    def get(self, match_id: str) -> MatchObservation | None:
        """Get the observation for a match, or None."""

    @abstractmethod
    def upsert(
        self,
        match_id: str,
        us: TeamHalfPair,
        opposition: TeamHalfPair,
        updated_at: datetime,
    ) -> MatchObservation:
        """Insert or replace the observation for match_id (last write wins)."""

    @abstractmethod
    def delete(self, match_id: str) -> bool:
        """Delete the observation for match_id. Returns True if a row was removed."""
