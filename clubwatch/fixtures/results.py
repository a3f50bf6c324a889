"""Scoreline and result helpers.

Scorelines are always written home-away ("3-1" means the home side scored
3). Results are from the club's own perspective.
"""

import re

from clubwatch.core.types import MatchResult

SCORE_PATTERN = re.compile(r"(\d+)\s*[-:]\s*(\d+)")


def parse_scoreline(scoreline: str | None) -> tuple[int, int] | None:
    """Parse "H-A" (or "H:A") into (home_goals, away_goals).

    Returns None for empty or unparsable scorelines.
    """
    if not scoreline:
        return None
    parts = re.split(r"[-:]", scoreline.strip())
    if len(parts) != 2:
        return None
    try:
        return int(parts[0].strip()), int(parts[1].strip())
    except ValueError:
        return None


def determine_result(scoreline: str | None, is_home: bool) -> MatchResult | None:
    """Derive Win/Draw/Loss for the club.

    Returns:
        "Pending" when there is no scoreline, None when it can't be parsed,
        otherwise the result from our perspective
    """
    if not scoreline:
        return "Pending"
    score = parse_scoreline(scoreline)
    if score is None:
        return None

    home_goals, away_goals = score
    if home_goals == away_goals:
        return "Draw"
    if is_home:
        return "Win" if home_goals > away_goals else "Loss"
    return "Win" if away_goals > home_goals else "Loss"


def goal_difference(scoreline: str | None, is_home: bool) -> int:
    """Goal difference relative to the club. 0 when the scoreline is unusable."""
    score = parse_scoreline(scoreline)
    if score is None:
        return 0
    home_goals, away_goals = score
    return home_goals - away_goals if is_home else away_goals - home_goals
