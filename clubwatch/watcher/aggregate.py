"""Season aggregation over stored observations.

Everything here is a snapshot computed from the full observation list on
each call. Nothing is cached or maintained incrementally.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date as date_type

from clubwatch.core.types import HALF_STAT_KEYS, HALF_STAT_LABELS, Match, MatchObservation
from clubwatch.fixtures.results import goal_difference
from clubwatch.watcher.conversion import season_clinicality
from clubwatch.watcher.dominance import dominance_score

logger = logging.getLogger(__name__)

SIDES = ("us", "opposition")
HALVES = ("first_half", "second_half")


@dataclass
class MetricAggregate:
    """Season total and per-game average for one metric."""

    key: str
    label: str
    us_total: int
    opposition_total: int
    us_average: float
    opposition_average: float

    @property
    def difference(self) -> float:
        """Average difference, positive when we are ahead."""
        return self.us_average - self.opposition_average


@dataclass
class HalfGoals:
    """When goals are scored and conceded, summed over the season."""

    us_first_half: int = 0
    us_second_half: int = 0
    opposition_first_half: int = 0
    opposition_second_half: int = 0


@dataclass
class SeasonAggregate:
    """Season-wide watcher summary. Derived, never stored."""

    games: int
    metrics: dict[str, MetricAggregate]
    half_goals: HalfGoals
    us_clinicality: int | None
    opposition_clinicality: int | None


@dataclass
class PerformancePoint:
    """Dominance margin against actual goal difference for one played match."""

    match_id: str
    opponent: str
    date: date_type | None
    result: str | None
    scoreline: str | None
    us_score: int
    opp_score: int
    goal_difference: int
    margin: int = field(init=False)

    def __post_init__(self) -> None:
        self.margin = self.us_score - self.opp_score


def sum_metric_totals(observations: Iterable[MatchObservation]) -> dict[str, dict[str, int]]:
    """Sum every metric across both halves of every match, per side."""
    totals = {side: {key: 0 for key in HALF_STAT_KEYS} for side in SIDES}
    for observation in observations:
        for side in SIDES:
            pair = observation.side(side)
            for half in HALVES:
                stats = getattr(pair, half)
                for key in HALF_STAT_KEYS:
                    totals[side][key] += stats.get(key)
    return totals


def sum_half_goals(observations: Iterable[MatchObservation]) -> HalfGoals:
    """Separate reduction over first/second half goals for both sides."""
    result = HalfGoals()
    for observation in observations:
        result.us_first_half += observation.us.first_half.goals
        result.us_second_half += observation.us.second_half.goals
        result.opposition_first_half += observation.opposition.first_half.goals
        result.opposition_second_half += observation.opposition.second_half.goals
    return result


def aggregate_season(observations: Iterable[MatchObservation]) -> SeasonAggregate:
    """Fold all observations into season totals and per-game averages.

    Averages divide by the number of observed matches, floored at 1 so an
    empty season reports 0.0 rather than NaN.
    """
    observations = list(observations)
    games = len(observations)
    divisor = max(games, 1)

    totals = sum_metric_totals(observations)
    metrics = {
        key: MetricAggregate(
            key=key,
            label=HALF_STAT_LABELS[key],
            us_total=totals["us"][key],
            opposition_total=totals["opposition"][key],
            us_average=totals["us"][key] / divisor,
            opposition_average=totals["opposition"][key] / divisor,
        )
        for key in HALF_STAT_KEYS
    }

    logger.debug("[AGGREGATE] Season over %d games", games)

    return SeasonAggregate(
        games=games,
        metrics=metrics,
        half_goals=sum_half_goals(observations),
        us_clinicality=season_clinicality(observations, "us"),
        opposition_clinicality=season_clinicality(observations, "opposition"),
    )


def performance_series(
    matches: Iterable[Match], observations: Iterable[MatchObservation]
) -> list[PerformancePoint]:
    """Pair each played, observed match with its dominance margin.

    Matches still Pending or without an observation are skipped. Points are
    ordered by match date (undated matches last).
    """
    by_match = {observation.match_id: observation for observation in observations}
    points = []
    for match in matches:
        if not match.is_played:
            continue
        observation = by_match.get(match.id)
        if observation is None:
            continue
        points.append(
            PerformancePoint(
                match_id=match.id,
                opponent=match.opponent,
                date=match.date,
                result=match.result,
                scoreline=match.scoreline,
                us_score=dominance_score(observation.us.totals()),
                opp_score=dominance_score(observation.opposition.totals()),
                goal_difference=goal_difference(match.scoreline, match.is_home),
            )
        )
    points.sort(key=lambda p: (p.date is None, p.date or date_type.min))
    return points
