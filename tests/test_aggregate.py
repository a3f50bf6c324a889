"""Tests for season aggregation and the performance series."""

from datetime import date

import pytest

from clubwatch.core.types import HalfStats, Match, MatchObservation, TeamHalfPair
from clubwatch.watcher.aggregate import aggregate_season, performance_series, sum_half_goals


def _obs(match_id: str, us_first=None, us_second=None, opp_first=None, opp_second=None):
    return MatchObservation(
        match_id=match_id,
        us=TeamHalfPair(first_half=us_first or HalfStats(), second_half=us_second or HalfStats()),
        opposition=TeamHalfPair(
            first_half=opp_first or HalfStats(), second_half=opp_second or HalfStats()
        ),
    )


class TestAggregateSeason:
    """Season totals and per-game averages."""

    def test_no_games(self):
        season = aggregate_season([])

        assert season.games == 0
        assert all(m.us_total == 0 for m in season.metrics.values())
        assert all(m.us_average == 0.0 for m in season.metrics.values())
        assert all(m.opposition_average == 0.0 for m in season.metrics.values())
        assert season.us_clinicality is None
        assert season.opposition_clinicality is None

    def test_totals_and_averages(self):
        observations = [
            _obs("a", us_first=HalfStats(goals=2)),
            _obs("b", us_first=HalfStats(goals=1), us_second=HalfStats(goals=2)),
        ]

        season = aggregate_season(observations)

        goals = season.metrics["goals"]
        assert season.games == 2
        assert goals.us_total == 5
        assert goals.us_average == pytest.approx(2.5)
        assert goals.opposition_total == 0
        assert goals.difference == pytest.approx(2.5)

    def test_every_metric_present(self):
        season = aggregate_season([_obs("a")])
        assert set(season.metrics) == {
            "deliveries",
            "half_chances",
            "chances",
            "massive_chances_no_shot",
            "massive_chances_shot",
            "goals",
        }
        assert season.metrics["massive_chances_no_shot"].label == "Massive Chance (No Shot)"

    def test_negative_difference_when_behind(self):
        season = aggregate_season([_obs("a", opp_first=HalfStats(deliveries=6))])
        assert season.metrics["deliveries"].difference == pytest.approx(-6.0)

    def test_season_clinicality_is_ratio_of_sums(self):
        observations = [
            _obs("a", us_first=HalfStats(goals=1, massive_chances_shot=1)),
            _obs("b", us_second=HalfStats(goals=0, massive_chances_shot=3)),
        ]
        assert aggregate_season(observations).us_clinicality == 25

    def test_accepts_any_iterable(self):
        season = aggregate_season(_obs(str(i), us_first=HalfStats(deliveries=1)) for i in range(3))
        assert season.games == 3
        assert season.metrics["deliveries"].us_total == 3


class TestHalfGoals:
    def test_split_by_half_and_side(self):
        observations = [
            _obs(
                "a",
                us_first=HalfStats(goals=1),
                us_second=HalfStats(goals=2),
                opp_first=HalfStats(goals=3),
            ),
            _obs("b", us_second=HalfStats(goals=1), opp_second=HalfStats(goals=4)),
        ]

        goals = sum_half_goals(observations)

        assert goals.us_first_half == 1
        assert goals.us_second_half == 3
        assert goals.opposition_first_half == 3
        assert goals.opposition_second_half == 4


class TestPerformanceSeries:
    """Dominance margin vs goal difference for played matches."""

    def _match(self, match_id, when, scoreline, is_home=True, result="Win"):
        return Match(
            id=match_id,
            date=when,
            opponent=f"Opponent {match_id}",
            is_home=is_home,
            scoreline=scoreline,
            result=result,
        )

    def test_skips_pending_and_unobserved(self):
        matches = [
            self._match("played", date(2025, 9, 6), "2-0"),
            self._match("pending", date(2025, 9, 13), None, result="Pending"),
            self._match("no-stats", date(2025, 9, 20), "1-1", result="Draw"),
        ]
        observations = [_obs("played"), _obs("pending")]

        points = performance_series(matches, observations)

        assert [p.match_id for p in points] == ["played"]

    def test_margin_and_goal_difference(self):
        matches = [self._match("m", date(2025, 9, 6), "1-3", is_home=False)]
        observations = [
            _obs("m", us_first=HalfStats(deliveries=10), opp_first=HalfStats(chances=2))
        ]

        (point,) = performance_series(matches, observations)

        assert point.us_score == 10
        assert point.opp_score == 6
        assert point.margin == 4
        assert point.goal_difference == 2

    def test_sorted_by_date_undated_last(self):
        matches = [
            self._match("late", date(2025, 10, 4), "1-0"),
            self._match("undated", None, "0-0", result="Draw"),
            self._match("early", date(2025, 8, 30), "0-1", result="Loss"),
        ]
        observations = [_obs("late"), _obs("undated"), _obs("early")]

        points = performance_series(matches, observations)

        assert [p.match_id for p in points] == ["early", "late", "undated"]
