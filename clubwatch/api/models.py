"""Pydantic models for API requests and responses."""

from datetime import date as date_type
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from clubwatch.core.types import HalfStats, TeamHalfPair
from clubwatch.watcher.dominance import MetricLeader, Verdict

# =============================================================================
# Watcher stats
# =============================================================================


class HalfStatsModel(BaseModel):
    """Counters for one team in one half."""

    model_config = ConfigDict(from_attributes=True)

    deliveries: int = Field(0, ge=0)
    half_chances: int = Field(0, ge=0)
    chances: int = Field(0, ge=0)
    massive_chances_no_shot: int = Field(0, ge=0)
    massive_chances_shot: int = Field(0, ge=0)
    goals: int = Field(0, ge=0)

    def to_stats(self) -> HalfStats:
        return HalfStats(**self.model_dump())


class TeamHalfPairModel(BaseModel):
    """Both halves for one side."""

    model_config = ConfigDict(from_attributes=True)

    first_half: HalfStatsModel = Field(default_factory=HalfStatsModel)
    second_half: HalfStatsModel = Field(default_factory=HalfStatsModel)

    def to_pair(self) -> TeamHalfPair:
        return TeamHalfPair(
            first_half=self.first_half.to_stats(),
            second_half=self.second_half.to_stats(),
        )


class ObservationSave(BaseModel):
    """Request body for a manual save."""

    us: TeamHalfPairModel = Field(default_factory=TeamHalfPairModel)
    opposition: TeamHalfPairModel = Field(default_factory=TeamHalfPairModel)


class ObservationResponse(BaseModel):
    """Response body for a stored (or zeroed) observation."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    match_id: str
    us: TeamHalfPairModel
    opposition: TeamHalfPairModel
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TextImportRequest(BaseModel):
    """Import stats from already-recognized OCR text."""

    match_id: str | None = None
    text: str = ""


class DemoImportRequest(BaseModel):
    """Import the canned demo dataset."""

    match_id: str | None = None


class ImportResponse(BaseModel):
    """Result of a successful import."""

    model_config = ConfigDict(from_attributes=True)

    source: Literal["text", "image", "demo"]
    observation: ObservationResponse
    unrecovered_fields: list[str] = []
    missing_opposition: list[str] = []


# =============================================================================
# Analysis
# =============================================================================


class MetricComparisonModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str
    us: int
    opposition: int
    leader: MetricLeader


class AnalysisResponse(BaseModel):
    """Per-match dominance analysis."""

    model_config = ConfigDict(from_attributes=True)

    match_id: str
    us_totals: HalfStatsModel
    opposition_totals: HalfStatsModel
    us_score: int
    opposition_score: int
    verdict: Verdict
    us_share: float
    breakdown: list[MetricComparisonModel]
    us_clinicality: int | None
    opposition_clinicality: int | None
    first_half_goals: tuple[int, int]
    second_half_goals: tuple[int, int]


class MetricAggregateModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str
    us_total: int
    opposition_total: int
    us_average: float
    opposition_average: float
    difference: float


class HalfGoalsModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    us_first_half: int
    us_second_half: int
    opposition_first_half: int
    opposition_second_half: int


class SeasonResponse(BaseModel):
    """Season averages over recorded games."""

    model_config = ConfigDict(from_attributes=True)

    games: int
    metrics: list[MetricAggregateModel]
    half_goals: HalfGoalsModel
    us_clinicality: int | None
    opposition_clinicality: int | None


class MatchModel(BaseModel):
    """A played match, as offered in the watcher's match picker."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    date: date_type | None
    time: str
    opponent: str
    is_home: bool
    competition: str
    scoreline: str | None
    result: str | None


class PerformancePointModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    match_id: str
    opponent: str
    date: date_type | None
    result: str | None
    scoreline: str | None
    us_score: int
    opp_score: int
    margin: int
    goal_difference: int


# =============================================================================
# Fixtures
# =============================================================================


class FixtureModel(BaseModel):
    """A fixture candidate, editable by the operator before commit."""

    model_config = ConfigDict(from_attributes=True)

    opponent: str = Field(..., min_length=1)
    is_home: bool = True
    date: date_type | None = None
    time: str = "15:00"
    scoreline: str = ""
    result: Literal["Win", "Draw", "Loss", "Pending"] = "Pending"
    competition: str = "Premier Division"
    source_line: str = ""


class FixtureParseRequest(BaseModel):
    text: str = ""


class FixtureParseResponse(BaseModel):
    raw_text: str
    fixtures: list[FixtureModel]
    total: int


class FixtureCommitRequest(BaseModel):
    fixtures: list[FixtureModel]


class FixtureCommitResponse(BaseModel):
    imported: int
    match_ids: list[str]
