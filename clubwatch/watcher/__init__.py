"""Watcher: match observation parsing, dominance scoring and season aggregation."""

from clubwatch.watcher.aggregate import (
    HalfGoals,
    MetricAggregate,
    PerformancePoint,
    SeasonAggregate,
    aggregate_season,
    performance_series,
)
from clubwatch.watcher.conversion import clinicality, match_clinicality, season_clinicality
from clubwatch.watcher.dominance import (
    MetricComparison,
    MetricLeader,
    Verdict,
    dominance_score,
    dominance_share,
    dominance_verdict,
    metric_breakdown,
)
from clubwatch.watcher.ocr_parser import OcrParseResult, ParseState, Section, parse_ocr_text
from clubwatch.watcher.service import ImportResult, MatchAnalysis, WatcherService, analyze_observation

__all__ = [
    # Aggregation
    "HalfGoals",
    "MetricAggregate",
    "PerformancePoint",
    "SeasonAggregate",
    "aggregate_season",
    "performance_series",
    # Conversion
    "clinicality",
    "match_clinicality",
    "season_clinicality",
    # Dominance
    "MetricComparison",
    "MetricLeader",
    "Verdict",
    "dominance_score",
    "dominance_share",
    "dominance_verdict",
    "metric_breakdown",
    # Parsing
    "OcrParseResult",
    "ParseState",
    "Section",
    "parse_ocr_text",
    # Service
    "ImportResult",
    "MatchAnalysis",
    "WatcherService",
    "analyze_observation",
]
