"""Core types and interfaces."""

from clubwatch.core.errors import (
    NoMatchSelected,
    ParseIncomplete,
    RecognitionFailed,
    StoreFailure,
    WatcherError,
)
from clubwatch.core.interfaces import ObservationStore, OcrResult, TextRecognizer
from clubwatch.core.types import (
    HALF_STAT_KEYS,
    HALF_STAT_LABELS,
    FixtureCandidate,
    HalfStats,
    Match,
    MatchObservation,
    MatchResult,
    TeamHalfPair,
)

__all__ = [
    # Types
    "HALF_STAT_KEYS",
    "HALF_STAT_LABELS",
    "FixtureCandidate",
    "HalfStats",
    "Match",
    "MatchObservation",
    "MatchResult",
    "TeamHalfPair",
    # Interfaces
    "ObservationStore",
    "OcrResult",
    "TextRecognizer",
    # Errors
    "NoMatchSelected",
    "ParseIncomplete",
    "RecognitionFailed",
    "RecognitionFailed",
    "StoreFailure",
    "WatcherError",
]
