"""Clinicality: share of massive chances (with a shot) converted into goals.

Every rate here returns None for "no data" when there were no massive
chances, whatever the goal count.
"""

from collections.abc import Iterable

from clubwatch.core.types import MatchObservation, TeamHalfPair


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def clinicality(goals: int, massive_chances_shot: int) -> int | None:
    """Conversion percentage, rounded to a whole number.

    Args:
        goals: Goals scored
        massive_chances_shot: Massive chances that ended in a shot

    Returns:
        round(goals / massive_chances_shot * 100), or None when there are
        no massive chances
    """
    if massive_chances_shot <= 0:
        return None
    return _round_half_up(goals / massive_chances_shot * 100)


def match_clinicality(side: TeamHalfPair) -> int | None:
    """Clinicality for one side over both halves of a match."""
    totals = side.totals()
    return clinicality(totals.goals, totals.massive_chances_shot)


def season_clinicality(observations: Iterable[MatchObservation], side: str = "us") -> int | None:
    """Season clinicality as a ratio of sums.

    Goals and massive chances are summed over every half of every match
    before dividing. This is not the mean of per-match rates.
    """
    goals = 0
    chances = 0
    for observation in observations:
        totals = observation.side(side).totals()
        goals += totals.goals
        chances += totals.massive_chances_shot
    return clinicality(goals, chances)
