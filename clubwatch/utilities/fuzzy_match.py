"""Fuzzy location of the club's own name inside fixture lines.

Uses rapidfuzz for OCR-tolerant matching ("Camdem United", "CAMDEN UTD").
Unlike a plain similarity score, the importer needs to know WHERE the name
sits in the line (to strip it and to tell home from away), so matches
return a character span.
"""

import re
from dataclasses import dataclass

from rapidfuzz import fuzz
from unidecode import unidecode

# Suffix words stripped to build a shorter pattern ("Camden United" -> "Camden")
CLUB_SUFFIX_WORDS = {
    "fc",
    "afc",
    "cfc",
    "sc",
    "united",
    "utd",
    "city",
    "town",
    "athletic",
    "rovers",
    "wanderers",
    "albion",
    "county",
    "borough",
}


@dataclass
class NameSpan:
    """Where a club name was found in a line."""

    start: int
    end: int
    score: float
    pattern_used: str


def _fold(text: str) -> str:
    """Lowercase and strip accents, keeping character positions stable.

    unidecode can change string length (ß -> ss); when it would, only
    lowercase is applied so spans still index the original line.
    """
    lowered = text.lower()
    folded = unidecode(lowered)
    return folded if len(folded) == len(lowered) else lowered


def generate_club_patterns(name: str, short_name: str | None = None) -> list[str]:
    """Searchable patterns for a club, most specific first."""
    patterns: list[str] = []

    def add(value: str | None) -> None:
        if value:
            normalized = " ".join(unidecode(value).lower().split())
            if len(normalized) >= 2 and normalized not in patterns:
                patterns.append(normalized)

    add(name)
    add(short_name)
    if name:
        kept = [w for w in name.split() if w.lower().strip(".") not in CLUB_SUFFIX_WORDS]
        if kept:
            add(" ".join(kept))

    return patterns


class ClubNameLocator:
    """Find the observed club's name within a line of fixture text.

    Strategies, in order:
    1. Whole-word exact match of any pattern (longest first)
    2. rapidfuzz partial alignment for patterns long enough to be specific
    """

    # Short patterns ("afc") only match exactly
    MIN_FUZZY_LENGTH = 5

    def __init__(self, club_name: str, short_name: str | None = None, threshold: float = 85.0):
        """Initialize locator.

        Args:
            club_name: Full club name (e.g. "Camden United")
            short_name: Optional abbreviation (e.g. "CUFC")
            threshold: Minimum partial-alignment score for a fuzzy hit (0-100)
        """
        self.club_name = club_name
        self.threshold = threshold
        self.patterns = sorted(generate_club_patterns(club_name, short_name), key=len, reverse=True)

    def locate(self, line: str) -> NameSpan | None:
        """Return the span of the club name in line, or None."""
        if not line:
            return None
        text = _fold(line)

        for pattern in self.patterns:
            match = re.search(r"\b" + re.escape(pattern) + r"\b", text)
            if match:
                return NameSpan(match.start(), match.end(), 100.0, pattern)

        best: NameSpan | None = None
        for pattern in self.patterns:
            if len(pattern) < self.MIN_FUZZY_LENGTH or len(text) < len(pattern):
                continue
            alignment = fuzz.partial_ratio_alignment(pattern, text)
            if alignment is None or alignment.score < self.threshold:
                continue
            if best is None or alignment.score > best.score:
                start, end = self._expand_to_words(text, alignment.dest_start, alignment.dest_end)
                best = NameSpan(start, end, alignment.score, pattern)

        return best

    @staticmethod
    def _expand_to_words(text: str, start: int, end: int) -> tuple[int, int]:
        """Widen a span so it doesn't cut through a word."""
        while start > 0 and text[start - 1].isalnum():
            start -= 1
        while end < len(text) and text[end].isalnum():
            end += 1
        return start, end

    def contains(self, text: str) -> bool:
        return self.locate(text) is not None
