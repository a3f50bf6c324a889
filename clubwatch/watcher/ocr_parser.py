"""OCR text parsing for watcher stat tables.

Turns raw recognized text from a stats screenshot into first/second half
rows for both sides. The screenshot layout is assumed to be:

    1st Half
    <us row>         10  3  2  1  1
    <opp row>         5  1  1  0  0
    <total row>      ...               (ignored)
    2nd Half
    <us row>
    <opp row>

Parsing is a pure fold over the lines with a small state:
- section: which half header was seen last
- rows_in_section: qualifying data rows seen since that header
"""

import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import reduce

from clubwatch.core.errors import ParseIncomplete
from clubwatch.core.types import HalfStats, TeamHalfPair
from clubwatch.watcher.constants import (
    EXCERPT_LENGTH,
    FIRST_HALF_KEYWORDS,
    MIN_ROW_NUMBERS,
    OCR_COLUMNS,
    OCR_UNRECOVERABLE_FIELDS,
    SECOND_HALF_KEYWORDS,
)

logger = logging.getLogger(__name__)

_DIGIT_RUN = re.compile(r"\d+")


class Section(Enum):
    """Which half of the stats table the parser is in."""

    NONE = "none"
    FIRST_HALF = "first-half"
    SECOND_HALF = "second-half"


@dataclass(frozen=True)
class ParseState:
    """Fold accumulator for parse_ocr_text."""

    section: Section = Section.NONE
    rows_in_section: int = 0
    first_half_us: tuple[int, ...] | None = None
    first_half_opp: tuple[int, ...] | None = None
    second_half_us: tuple[int, ...] | None = None
    second_half_opp: tuple[int, ...] | None = None


@dataclass
class OcrParseResult:
    """Successful parse of a stats screenshot."""

    us: TeamHalfPair
    opposition: TeamHalfPair
    # Fields forced to 0 because the OCR table has no column for them
    unrecovered_fields: tuple[str, ...] = field(default=OCR_UNRECOVERABLE_FIELDS)
    missing_opposition: list[str] = field(default_factory=list)


# =============================================================================
# LINE CLASSIFICATION
# =============================================================================


def split_lines(text: str) -> list[str]:
    """Split raw text into trimmed, non-empty lines."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def detect_section(line: str) -> Section | None:
    """Return the half a header line announces, or None for non-header lines."""
    lower = line.lower()
    if any(keyword in lower for keyword in FIRST_HALF_KEYWORDS):
        return Section.FIRST_HALF
    if any(keyword in lower for keyword in SECOND_HALF_KEYWORDS):
        return Section.SECOND_HALF
    return None


def extract_numbers(line: str) -> tuple[int, ...]:
    """Extract every maximal digit run in order."""
    return tuple(int(run) for run in _DIGIT_RUN.findall(line))


# =============================================================================
# STATE MACHINE
# =============================================================================


def step(state: ParseState, line: str, min_numbers: int = MIN_ROW_NUMBERS) -> ParseState:
    """Advance the parse state by one line.

    Header lines switch section and reset the row counter. Lines with fewer
    than min_numbers numbers are noise. In a section the first data row is
    "us", the second is "opposition"; later rows (totals) are ignored.
    """
    section = detect_section(line)
    if section is not None:
        return replace(state, section=section, rows_in_section=0)

    numbers = extract_numbers(line)
    if len(numbers) < min_numbers:
        return state

    rows = state.rows_in_section + 1
    state = replace(state, rows_in_section=rows)

    if state.section is Section.FIRST_HALF:
        if rows == 1:
            return replace(state, first_half_us=numbers)
        if rows == 2:
            return replace(state, first_half_opp=numbers)
    elif state.section is Section.SECOND_HALF:
        if rows == 1:
            return replace(state, second_half_us=numbers)
        if rows == 2:
            return replace(state, second_half_opp=numbers)

    return state


def fold_lines(lines: list[str], min_numbers: int = MIN_ROW_NUMBERS) -> ParseState:
    """Run the state machine over every line."""
    return reduce(lambda state, line: step(state, line, min_numbers), lines, ParseState())


# =============================================================================
# ROW MAPPING
# =============================================================================


def map_ocr_row(numbers: tuple[int, ...] | None) -> HalfStats:
    """Map an OCR number row onto HalfStats by column position.

    Missing trailing values mean zero (a blank goals cell is read as nothing,
    not as 0). Extra values beyond the known columns are dropped.
    massive_chances_no_shot has no column and is always 0.
    """
    values = list(numbers or ())[: len(OCR_COLUMNS)]
    values += [0] * (len(OCR_COLUMNS) - len(values))
    return HalfStats(**dict(zip(OCR_COLUMNS, values)), massive_chances_no_shot=0)


# =============================================================================
# ENTRY POINT
# =============================================================================


def parse_ocr_text(
    text: str,
    min_numbers: int = MIN_ROW_NUMBERS,
    excerpt_length: int = EXCERPT_LENGTH,
    require_opposition: bool = False,
) -> OcrParseResult:
    """Parse raw OCR text into us/opposition half pairs.

    Args:
        text: Raw multi-line OCR output
        min_numbers: Minimum numbers for a line to count as a data row
        excerpt_length: Characters of raw text to attach to a failure
        require_opposition: Also fail when an opposition row is missing

    Returns:
        OcrParseResult. Missing opposition rows are left as zeros.

    Raises:
        ParseIncomplete: first-half or second-half "us" row not found, or an
            opposition row when require_opposition is set
    """
    logger.debug("[OCR_PARSE] Raw text: %r", text)

    state = fold_lines(split_lines(text), min_numbers)

    missing = []
    if not state.first_half_us:
        missing.append("first_half_us")
    if not state.second_half_us:
        missing.append("second_half_us")
    if missing:
        logger.warning("[OCR_PARSE] Parsing failed, missing rows: %s (state=%s)", missing, state)
        raise ParseIncomplete(excerpt=(text or "")[:excerpt_length], missing=missing)

    missing_opposition = []
    if not state.first_half_opp:
        missing_opposition.append("first_half_opp")
    if not state.second_half_opp:
        missing_opposition.append("second_half_opp")
    if missing_opposition and require_opposition:
        logger.warning("[OCR_PARSE] Parsing failed, missing rows: %s", missing_opposition)
        raise ParseIncomplete(excerpt=(text or "")[:excerpt_length], missing=missing_opposition)
    if missing_opposition:
        logger.info("[OCR_PARSE] Opposition rows defaulted to zero: %s", missing_opposition)

    logger.info(
        "[OCR_PARSE] Parsed rows: us=%s/%s opp=%s/%s (unrecovered: %s)",
        state.first_half_us,
        state.second_half_us,
        state.first_half_opp,
        state.second_half_opp,
        ", ".join(OCR_UNRECOVERABLE_FIELDS),
    )

    return OcrParseResult(
        us=TeamHalfPair(
            first_half=map_ocr_row(state.first_half_us),
            second_half=map_ocr_row(state.second_half_us),
        ),
        opposition=TeamHalfPair(
            first_half=map_ocr_row(state.first_half_opp),
            second_half=map_ocr_row(state.second_half_opp),
        ),
        missing_opposition=missing_opposition,
    )
