"""Heuristic fixture-list importer.

Turns pasted text or an OCR'd screenshot of a fixture list into fixture
candidates. Each line is scanned independently for:
- a date ("12/10", "12/10/25", "Sat 12 Oct", "2025-10-12")
- a kickoff time ("15:00", "19.45")
- a "v"/"vs" separator
- a score ("3-1", "2 - 2", "1:0")

A line with a date, separator or score is a candidate; anything else is
skipped. Matched tokens are masked with spaces so character positions stay
aligned with the original line, which is what the home/away check relies on.

Nothing here is trusted: candidates are shown to the operator for correction
before commit_fixtures() writes them.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from sqlite3 import Connection

from dateutil import parser as date_parser

from clubwatch.core.interfaces import TextRecognizer
from clubwatch.core.types import FixtureCandidate
from clubwatch.database.matches import insert_fixture
from clubwatch.fixtures.results import SCORE_PATTERN, determine_result
from clubwatch.utilities.fuzzy_match import ClubNameLocator

logger = logging.getLogger(__name__)

UNKNOWN_OPPONENT = "Unknown Opponent"
MIN_LINE_LENGTH = 5
MAX_OPPONENT_LENGTH = 30

# =============================================================================
# TOKEN PATTERNS
# =============================================================================

# Abbreviated or full month names only, so "Marlow" or "Decoy" never read as a month
_MONTHS = (
    r"Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?"
    r"|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?"
)
_WEEKDAYS = r"Mon|Tue|Wed|Thu|Fri|Sat|Sun"

# (pattern, has_year, dayfirst). UK style, except ISO dates. Numeric dates
# without a year only use "/" so "3-1" and "19.45" stay a score and a time.
DATE_PATTERNS = [
    # 2025-10-12
    (re.compile(r"\b(\d{4})-(\d{1,2})-(\d{1,2})\b"), True, False),
    # 12/10/2025, 12.10.25, 12-10-2025
    (re.compile(r"\b(\d{1,2})([/.\-])(\d{1,2})\2(\d{2,4})\b"), True, True),
    # 12/10
    (re.compile(r"\b(\d{1,2})/(\d{1,2})\b"), False, True),
    # Sat 12 Oct, 12th October 2025
    (
        re.compile(
            rf"\b(?:(?:{_WEEKDAYS})[a-z]*\.?,?\s+)?(\d{{1,2}})(?:st|nd|rd|th)?\s+"
            rf"((?:{_MONTHS})\.?)(?![a-z])(\s+\d{{4}}(?!\d))?",
            re.IGNORECASE,
        ),
        None,
        True,
    ),
]

TIME_PATTERN = re.compile(r"\b([01]?\d|2[0-3])[:.]([0-5]\d)\b")

SEPARATOR_PATTERN = re.compile(r"(?<!\w)(?:vs\.?|v)(?!\w)", re.IGNORECASE)

# Left over after masking: dashes, pipes and other table furniture
_RESIDUAL_NOISE = re.compile(r"[\-–—|,;:()\[\]]+")


@dataclass
class _Token:
    start: int
    end: int
    text: str


def _mask(line: str, start: int, end: int) -> str:
    return line[:start] + " " * (end - start) + line[end:]


def _splits_score(line: str, start: int, end: int) -> bool:
    """True if the span [start, end) cuts through a score token in line.

    A full numeric date such as "12-10-2025" contains a score-shaped token
    and is fine; "1 March" taken out of "2-1 March" is not.
    """
    for match in SCORE_PATTERN.finditer(line):
        overlaps = match.start() < end and start < match.end()
        contains = start <= match.start() and match.end() <= end
        if overlaps and not contains:
            return True
    return False


def _infer_year(month: int, day: int, today: date) -> date | None:
    """Pick the year that puts month/day closest to today (within ~6 months)."""
    try:
        candidate = date(today.year, month, day)
    except ValueError:
        return None
    days_ago = (today - candidate).days
    try:
        if days_ago > 180:
            return date(today.year + 1, month, day)
        if days_ago < -180:
            return date(today.year - 1, month, day)
    except ValueError:
        return None
    return candidate


def extract_date(line: str, today: date | None = None) -> tuple[date | None, _Token | None]:
    """Find the first date-like token.

    Returns:
        (parsed date or None if unparsable, token or None if nothing date-like)
    """
    today = today or date.today()
    for pattern, has_year, dayfirst in DATE_PATTERNS:
        match = pattern.search(line)
        if not match:
            continue
        if _splits_score(line, match.start(), match.end()):
            logger.debug("[FIXTURES] Date token %r overlaps a score, skipped", match.group(0))
            continue
        token = _Token(match.start(), match.end(), match.group(0))
        if has_year is None:
            has_year = bool(match.group(3))
        try:
            parsed = date_parser.parse(
                token.text,
                dayfirst=dayfirst,
                fuzzy=True,
                default=datetime(today.year, 1, 1),
            ).date()
        except (ValueError, OverflowError):
            logger.debug("[FIXTURES] Unparsable date token: %r", token.text)
            return None, token
        if not has_year:
            parsed = _infer_year(parsed.month, parsed.day, today)
        return parsed, token
    return None, None


def extract_time(line: str) -> _Token | None:
    match = TIME_PATTERN.search(line)
    if not match:
        return None
    return _Token(match.start(), match.end(), f"{int(match.group(1)):02d}:{match.group(2)}")


def extract_score(line: str) -> _Token | None:
    match = SCORE_PATTERN.search(line)
    if not match:
        return None
    return _Token(match.start(), match.end(), f"{match.group(1)}-{match.group(2)}")


def extract_separator(line: str) -> _Token | None:
    match = SEPARATOR_PATTERN.search(line)
    if not match:
        return None
    return _Token(match.start(), match.end(), match.group(0))


def _clean_opponent(residual: str) -> str:
    text = _RESIDUAL_NOISE.sub(" ", residual)
    text = " ".join(text.split())
    return text[:MAX_OPPONENT_LENGTH].strip()


# =============================================================================
# PARSER
# =============================================================================


class FixtureParser:
    """Line-oriented fixture heuristics for one club.

    Usage:
        parser = FixtureParser("Camden United")
        candidates = parser.parse_text("12/10 Camden United 3-1 Wood Lane")
    """

    def __init__(
        self,
        club_name: str,
        short_name: str | None = None,
        match_threshold: float = 85.0,
        default_kickoff: str = "15:00",
        default_competition: str = "Premier Division",
        today: date | None = None,
    ):
        self.locator = ClubNameLocator(club_name, short_name, threshold=match_threshold)
        self.default_kickoff = default_kickoff
        self.default_competition = default_competition
        self.today = today

    def parse_line(self, line: str) -> FixtureCandidate | None:
        """Parse one line. Returns None for lines with no fixture signal."""
        original = line.strip()
        if len(original) < MIN_LINE_LENGTH:
            return None

        work = original
        fixture_date, date_token = extract_date(work, self.today)
        if date_token:
            work = _mask(work, date_token.start, date_token.end)

        time_token = extract_time(work)
        if time_token:
            work = _mask(work, time_token.start, time_token.end)

        score_token = extract_score(work)
        if score_token:
            work = _mask(work, score_token.start, score_token.end)

        separator = extract_separator(work)

        if not (date_token or separator or score_token):
            return None

        # Our side is home when our name comes before the separator (or score)
        pivot = separator.start if separator else (score_token.start if score_token else None)
        club = self.locator.locate(work)
        is_home = True
        if club:
            if pivot is not None:
                is_home = club.start < pivot
            work = _mask(work, club.start, club.end)

        if separator:
            work = _mask(work, separator.start, separator.end)

        opponent = _clean_opponent(work) or UNKNOWN_OPPONENT
        scoreline = score_token.text if score_token else ""

        candidate = FixtureCandidate(
            opponent=opponent,
            is_home=is_home,
            date=fixture_date,
            time=time_token.text if time_token else self.default_kickoff,
            scoreline=scoreline,
            result=determine_result(scoreline, is_home) or "Pending",
            competition=self.default_competition,
            source_line=original,
        )
        logger.debug(
            "[FIXTURES] %r -> opponent=%r home=%s score=%r date=%s",
            original,
            candidate.opponent,
            candidate.is_home,
            candidate.scoreline,
            candidate.date,
        )
        return candidate

    def parse_text(self, text: str) -> list[FixtureCandidate]:
        """Parse every line of pasted or OCR'd text."""
        candidates = []
        for line in (text or "").splitlines():
            candidate = self.parse_line(line)
            if candidate:
                candidates.append(candidate)
        logger.info("[FIXTURES] Found %d candidate fixtures", len(candidates))
        return candidates

    def parse_image(self, recognizer: TextRecognizer, image: bytes) -> tuple[str, list[FixtureCandidate]]:
        """OCR a fixture screenshot, then parse it.

        Returns:
            (raw OCR text, candidates)
        """
        text = recognizer.recognize(image).text
        return text, self.parse_text(text)


def commit_fixtures(conn: Connection, fixtures: list[FixtureCandidate]) -> list[str]:
    """Insert operator-reviewed fixtures as matches.

    Results are re-derived from the (possibly corrected) scoreline and venue.

    Returns:
        New match IDs, in input order
    """
    ids = []
    for fixture in fixtures:
        result = determine_result(fixture.scoreline, fixture.is_home)
        if result:
            fixture.result = result
        ids.append(insert_fixture(conn, fixture, notes="Imported via fixture importer"))
    logger.info("[FIXTURES] Committed %d fixtures", len(ids))
    return ids
