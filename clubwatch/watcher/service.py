"""Watcher service.

Orchestrates the watcher flow for the presentation layer:
- imports (OCR text, screenshot, canned demo) that upsert on success
- manual saves and resets
- per-match analysis and season reports computed from the store

Import failures raise before anything is written, so a bad screenshot never
replaces existing stats.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from clubwatch.core.errors import NoMatchSelected
from clubwatch.core.interfaces import ObservationStore, TextRecognizer
from clubwatch.core.types import HalfStats, Match, MatchObservation, TeamHalfPair
from clubwatch.database.settings import OcrSettings
from clubwatch.watcher.aggregate import (
    PerformancePoint,
    SeasonAggregate,
    aggregate_season,
    performance_series,
)
from clubwatch.watcher.constants import DEMO_OPPOSITION, DEMO_US
from clubwatch.watcher.conversion import match_clinicality
from clubwatch.watcher.dominance import (
    MetricComparison,
    Verdict,
    dominance_score,
    dominance_share,
    dominance_verdict,
    metric_breakdown,
)
from clubwatch.watcher.ocr_parser import parse_ocr_text

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Outcome of a successful import."""

    observation: MatchObservation
    source: str  # "text", "image" or "demo"
    unrecovered_fields: tuple[str, ...] = ()
    missing_opposition: list[str] = field(default_factory=list)
    raw_text: str | None = None


@dataclass
class MatchAnalysis:
    """Everything the match analysis view shows for one observation."""

    match_id: str
    us_totals: HalfStats
    opposition_totals: HalfStats
    us_score: int
    opposition_score: int
    verdict: Verdict
    us_share: float
    breakdown: list[MetricComparison]
    us_clinicality: int | None
    opposition_clinicality: int | None
    first_half_goals: tuple[int, int]
    second_half_goals: tuple[int, int]


def analyze_observation(observation: MatchObservation) -> MatchAnalysis:
    """Score one observation: totals, verdict, breakdown and conversion."""
    us_totals = observation.us.totals()
    opp_totals = observation.opposition.totals()
    us_score = dominance_score(us_totals)
    opp_score = dominance_score(opp_totals)

    return MatchAnalysis(
        match_id=observation.match_id,
        us_totals=us_totals,
        opposition_totals=opp_totals,
        us_score=us_score,
        opposition_score=opp_score,
        verdict=dominance_verdict(us_score, opp_score),
        us_share=dominance_share(us_score, opp_score),
        breakdown=metric_breakdown(us_totals, opp_totals),
        us_clinicality=match_clinicality(observation.us),
        opposition_clinicality=match_clinicality(observation.opposition),
        first_half_goals=(observation.us.first_half.goals, observation.opposition.first_half.goals),
        second_half_goals=(
            observation.us.second_half.goals,
            observation.opposition.second_half.goals,
        ),
    )


def _now() -> datetime:
    return datetime.now(UTC)


class WatcherService:
    """Watcher operations over an ObservationStore.

    Store errors surface as StoreFailure unchanged; there is no retry.
    """

    def __init__(
        self,
        store: ObservationStore,
        recognizer: TextRecognizer | None = None,
        ocr_settings: OcrSettings | None = None,
    ):
        self.store = store
        self.recognizer = recognizer
        self.ocr_settings = ocr_settings or OcrSettings()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_observations(self) -> list[MatchObservation]:
        return self.store.get_all()

    def working_copy(self, match_id: str) -> MatchObservation:
        """Stored observation for a match, or a zeroed one to edit."""
        return self.store.get(match_id) or MatchObservation(match_id=match_id)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def save(
        self, match_id: str | None, us: TeamHalfPair, opposition: TeamHalfPair
    ) -> MatchObservation:
        """Manual save. Replaces any existing observation for the match."""
        if not match_id:
            raise NoMatchSelected()
        observation = self.store.upsert(match_id, us, opposition, _now())
        logger.info("[WATCHER] Saved stats for match %s", match_id)
        return observation

    def reset(self, match_id: str | None) -> MatchObservation:
        """Delete stored stats and return a zeroed working copy."""
        if not match_id:
            raise NoMatchSelected()
        self.store.delete(match_id)
        logger.info("[WATCHER] Reset stats for match %s", match_id)
        return MatchObservation(match_id=match_id)

    def import_text(self, match_id: str | None, text: str) -> ImportResult:
        """Parse OCR text and upsert the result.

        Raises:
            NoMatchSelected: no match_id (checked before parsing)
            ParseIncomplete: required rows missing; nothing is saved
        """
        if not match_id:
            raise NoMatchSelected()

        parsed = parse_ocr_text(
            text,
            min_numbers=self.ocr_settings.min_row_numbers,
            excerpt_length=self.ocr_settings.excerpt_length,
            require_opposition=self.ocr_settings.require_opposition,
        )
        observation = self.store.upsert(match_id, parsed.us, parsed.opposition, _now())
        logger.info("[WATCHER] Stats updated from OCR text for match %s", match_id)

        return ImportResult(
            observation=observation,
            source="text",
            unrecovered_fields=parsed.unrecovered_fields,
            missing_opposition=parsed.missing_opposition,
            raw_text=text,
        )

    def import_image(self, match_id: str | None, image: bytes) -> ImportResult:
        """Recognize a stats screenshot, then import its text."""
        if not match_id:
            raise NoMatchSelected()
        if self.recognizer is None:
            raise RuntimeError("No text recognizer configured")

        text = self.recognizer.recognize(image).text
        result = self.import_text(match_id, text)
        result.source = "image"
        return result

    def import_demo(self, match_id: str | None) -> ImportResult:
        """Upsert the fixed demo dataset, ignoring any image."""
        if not match_id:
            raise NoMatchSelected()
        observation = self.store.upsert(match_id, DEMO_US, DEMO_OPPOSITION, _now())
        logger.info("[WATCHER] Demo data imported for match %s", match_id)
        return ImportResult(observation=observation, source="demo")

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def analyze(self, match_id: str) -> MatchAnalysis | None:
        observation = self.store.get(match_id)
        if observation is None:
            return None
        return analyze_observation(observation)

    def season(self) -> SeasonAggregate:
        return aggregate_season(self.store.get_all())

    def performance(self, matches: list[Match]) -> list[PerformancePoint]:
        return performance_series(matches, self.store.get_all())
