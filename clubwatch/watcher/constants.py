"""Constants for the watcher module.

Scoring weights, OCR parsing heuristics and the canned demo dataset.
"""

from clubwatch.core.types import HalfStats, TeamHalfPair

# =============================================================================
# DOMINANCE WEIGHTS
# Ascending threat level. Goals carry no weight: the score measures chance
# creation, not outcome.
# =============================================================================

DOMINANCE_WEIGHTS: dict[str, int] = {
    "deliveries": 1,
    "half_chances": 2,
    "chances": 3,
    "massive_chances_no_shot": 4,
    "massive_chances_shot": 5,
}

# =============================================================================
# OCR PARSING
# =============================================================================

# Header keywords, checked as lowercase substrings. "ist half" and "on half"
# are common Tesseract misreads of "1st half" / "2nd half".
FIRST_HALF_KEYWORDS = ("1st half", "ist half", "1st")
SECOND_HALF_KEYWORDS = ("2nd half", "on half", "2nd")

# A data row must yield at least this many numbers; shorter rows are captions
MIN_ROW_NUMBERS = 3

# OCR table columns, in order. massive_chances_no_shot has no column.
OCR_COLUMNS = (
    "deliveries",
    "half_chances",
    "chances",
    "massive_chances_shot",
    "goals",
)

# Fields the OCR path can never recover
OCR_UNRECOVERABLE_FIELDS = ("massive_chances_no_shot",)

# Raw text shown to the operator on a failed parse
EXCERPT_LENGTH = 100

# =============================================================================
# DEMO IMPORT
# Fixed sample used by the "demo" import mode, ignoring any image.
# =============================================================================

DEMO_US = TeamHalfPair(
    first_half=HalfStats(
        deliveries=2, half_chances=2, chances=2, massive_chances_shot=1, goals=2
    ),
    second_half=HalfStats(
        deliveries=7, half_chances=1, chances=2, massive_chances_shot=5, goals=1
    ),
)

DEMO_OPPOSITION = TeamHalfPair(
    first_half=HalfStats(
        deliveries=10, half_chances=2, chances=2, massive_chances_shot=1, goals=0
    ),
    second_half=HalfStats(
        deliveries=13, half_chances=4, chances=1, massive_chances_shot=0, goals=1
    ),
)
