"""Dominance scoring.

A weighted sum over chance-quality counters expressing attacking threat.
Goals are excluded: the score describes how good the chances were, not
whether they went in.
"""

from dataclasses import dataclass
from enum import Enum

from clubwatch.core.types import HALF_STAT_LABELS, HalfStats
from clubwatch.watcher.constants import DOMINANCE_WEIGHTS


class Verdict(str, Enum):
    """Who was the better side on chance quality."""

    US_DOMINANT = "us_dominant"
    EVENLY_MATCHED = "evenly_matched"
    OPPOSITION_DOMINANT = "opposition_dominant"


class MetricLeader(str, Enum):
    """Side with the strictly larger raw count for one metric."""

    US = "us"
    OPPOSITION = "opposition"
    EQUAL = "equal"


@dataclass
class MetricComparison:
    """One row of the per-metric breakdown."""

    key: str
    label: str
    us: int
    opposition: int
    leader: MetricLeader


def dominance_score(stats: HalfStats) -> int:
    """Weighted dominance score for a single half or full-match totals."""
    return sum(stats.get(key) * weight for key, weight in DOMINANCE_WEIGHTS.items())


def dominance_verdict(us_score: int, opp_score: int) -> Verdict:
    """Compare two dominance scores. Ties are evenly matched, including 0-0."""
    if us_score > opp_score:
        return Verdict.US_DOMINANT
    if opp_score > us_score:
        return Verdict.OPPOSITION_DOMINANT
    return Verdict.EVENLY_MATCHED


def dominance_share(us_score: int, opp_score: int) -> float:
    """Our share of the combined score as a percentage (50.0 when both are 0)."""
    total = us_score + opp_score
    if total <= 0:
        return 50.0
    return us_score / total * 100


def metric_breakdown(us_totals: HalfStats, opp_totals: HalfStats) -> list[MetricComparison]:
    """Compare each weighted metric independently of the overall score."""
    rows = []
    for key in DOMINANCE_WEIGHTS:
        us_value = us_totals.get(key)
        opp_value = opp_totals.get(key)
        if us_value > opp_value:
            leader = MetricLeader.US
        elif opp_value > us_value:
            leader = MetricLeader.OPPOSITION
        else:
            leader = MetricLeader.EQUAL
        rows.append(
            MetricComparison(
                key=key,
                label=HALF_STAT_LABELS[key],
                us=us_value,
                opposition=opp_value,
                leader=leader,
            )
        )
    return rows
