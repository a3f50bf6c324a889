"""Fixture importing: heuristic parsing of fixture lists and result helpers."""

from clubwatch.fixtures.importer import FixtureParser, commit_fixtures
from clubwatch.fixtures.results import determine_result, goal_difference, parse_scoreline

__all__ = [
    "FixtureParser",
    "commit_fixtures",
    "determine_result",
    "goal_difference",
    "parse_scoreline",
]
