"""Tests for fixture-list parsing, results and commit."""

from datetime import date

import pytest

from clubwatch.core.interfaces import OcrResult, TextRecognizer
from clubwatch.core.types import FixtureCandidate
from clubwatch.database import get_all_matches, get_db
from clubwatch.fixtures import (
    FixtureParser,
    commit_fixtures,
    determine_result,
    goal_difference,
    parse_scoreline,
)
from clubwatch.fixtures.importer import extract_date
from clubwatch.utilities.fuzzy_match import ClubNameLocator, generate_club_patterns

TODAY = date(2025, 10, 1)


@pytest.fixture
def parser():
    return FixtureParser("Camden United", today=TODAY)


# ---------- Results ----------


class TestResults:
    """Scorelines are home-away; results are from our perspective."""

    def test_parse_scoreline(self):
        assert parse_scoreline("3-1") == (3, 1)
        assert parse_scoreline(" 2 : 2 ") == (2, 2)

    @pytest.mark.parametrize("value", [None, "", "abc", "1-2-3"])
    def test_unparsable_scoreline(self, value):
        assert parse_scoreline(value) is None

    @pytest.mark.parametrize(
        "scoreline,is_home,expected",
        [
            ("3-1", True, "Win"),
            ("3-1", False, "Loss"),
            ("0-2", False, "Win"),
            ("0-2", True, "Loss"),
            ("1-1", True, "Draw"),
            ("", True, "Pending"),
        ],
    )
    def test_determine_result(self, scoreline, is_home, expected):
        assert determine_result(scoreline, is_home) == expected

    def test_garbage_scoreline_has_no_result(self):
        assert determine_result("tbc", True) is None

    def test_goal_difference(self):
        assert goal_difference("3-1", True) == 2
        assert goal_difference("3-1", False) == -2
        assert goal_difference(None, True) == 0


# ---------- Club name location ----------


class TestClubNameLocator:
    def test_patterns(self):
        assert generate_club_patterns("Camden United", "CUFC") == [
            "camden united",
            "cufc",
            "camden",
        ]

    def test_exact_span(self):
        span = ClubNameLocator("Camden United").locate("Wood Lane v Camden United")
        assert (span.start, span.end) == (12, 25)
        assert span.score == 100.0

    def test_ocr_misspelling(self):
        span = ClubNameLocator("Camden United").locate("Camdem United v Wood Lane")
        assert span is not None
        assert span.start == 0

    def test_absent(self):
        assert ClubNameLocator("Camden United").contains("Wood Lane v Hackney Wick") is False


# ---------- Line parsing ----------


class TestParseLine:
    """Home/away, opponent, score and date heuristics per line."""

    def test_home_win_with_date(self, parser):
        fixture = parser.parse_line("12/10 Camden United 3-1 Wood Lane")

        assert fixture.is_home is True
        assert fixture.opponent == "Wood Lane"
        assert fixture.scoreline == "3-1"
        assert fixture.result == "Win"
        assert fixture.date == date(2025, 10, 12)

    def test_away_with_separator(self, parser):
        fixture = parser.parse_line("Wood Lane vs Camden United 2-2")

        assert fixture.is_home is False
        assert fixture.opponent == "Wood Lane"
        assert fixture.result == "Draw"
        assert fixture.date is None

    def test_away_win_without_separator(self, parser):
        fixture = parser.parse_line("Hackney Wick 0-2 Camden United")

        assert fixture.is_home is False
        assert fixture.result == "Win"
        assert fixture.opponent == "Hackney Wick"

    def test_upcoming_fixture_with_kickoff(self, parser):
        fixture = parser.parse_line("Sat 18 Oct Camden United v Wood Lane 19:45")

        assert fixture.date == date(2025, 10, 18)
        assert fixture.time == "19:45"
        assert fixture.scoreline == ""
        assert fixture.result == "Pending"
        assert fixture.opponent == "Wood Lane"

    def test_defaults(self):
        parser = FixtureParser(
            "Camden United", default_kickoff="14:00", default_competition="Cup", today=TODAY
        )
        fixture = parser.parse_line("Camden United v Wood Lane")

        assert fixture.time == "14:00"
        assert fixture.competition == "Cup"

    def test_club_not_found_defaults_home(self, parser):
        fixture = parser.parse_line("Wood Lane v Hackney Wick")
        assert fixture.is_home is True

    @pytest.mark.parametrize("line", ["", "Ok", "Fixtures and results", "League table"])
    def test_lines_without_signal_are_skipped(self, parser, line):
        assert parser.parse_line(line) is None

    def test_empty_opponent_is_unknown(self, parser):
        assert parser.parse_line("Camden United 3-1").opponent == "Unknown Opponent"

    def test_source_line_kept(self, parser):
        fixture = parser.parse_line("  Camden United v Wood Lane  ")
        assert fixture.source_line == "Camden United v Wood Lane"

    @pytest.mark.parametrize("opponent", ["Marlow", "Decoy Rovers", "Marine", "Junction FC"])
    def test_opponent_starting_with_month_letters(self, parser, opponent):
        fixture = parser.parse_line(f"Camden United 3-1 {opponent}")

        assert fixture.opponent == opponent
        assert fixture.scoreline == "3-1"
        assert fixture.result == "Win"
        assert fixture.date is None

    def test_score_wins_over_overlapping_date(self, parser):
        fixture = parser.parse_line("Camden United 2-1 March Town")

        assert fixture.scoreline == "2-1"
        assert fixture.result == "Win"
        assert fixture.date is None


class TestExtractDate:
    def test_iso(self):
        parsed, token = extract_date("2025-09-06 Camden United v Wood Lane", TODAY)
        assert parsed == date(2025, 9, 6)
        assert token.start == 0

    def test_day_first_with_year(self):
        parsed, _ = extract_date("06/09/2025 Camden United", TODAY)
        assert parsed == date(2025, 9, 6)

    def test_year_inferred_across_new_year(self):
        parsed, _ = extract_date("Sat 10 Jan", TODAY)
        assert parsed == date(2026, 1, 10)

    def test_no_date(self):
        assert extract_date("Camden United v Wood Lane", TODAY) == (None, None)

    def test_month_name_needs_a_word_boundary(self):
        assert extract_date("Camden United 3-1 Marlow", TODAY) == (None, None)

    def test_date_cutting_through_score_is_skipped(self):
        assert extract_date("Camden United 2-1 March 2025", TODAY) == (None, None)

    def test_full_month_with_weekday_and_year(self):
        parsed, token = extract_date("Sat 12th October 2025 Camden United", TODAY)
        assert parsed == date(2025, 10, 12)
        assert token.text == "Sat 12th October 2025"

    def test_abbreviated_month_with_period(self):
        parsed, _ = extract_date("Sat 18 Oct. Camden United v Wood Lane", TODAY)
        assert parsed == date(2025, 10, 18)


class TestParseText:
    def test_mixed_text(self, parser):
        text = "Fixtures\n12/10 Camden United 3-1 Wood Lane\n\nWood Lane v Camden United\n"
        fixtures = parser.parse_text(text)

        assert len(fixtures) == 2
        assert [f.is_home for f in fixtures] == [True, False]

    def test_parse_image(self, parser):
        class Recognizer(TextRecognizer):
            def recognize(self, image):
                return OcrResult(text="Camden United v Wood Lane")

        raw_text, fixtures = parser.parse_image(Recognizer(), b"img")

        assert raw_text == "Camden United v Wood Lane"
        assert fixtures[0].opponent == "Wood Lane"


# ---------- Commit ----------


class TestCommitFixtures:
    def test_inserts_matches_and_rederives_result(self, db_path):
        fixtures = [
            FixtureCandidate(opponent="Wood Lane", is_home=False, date=date(2025, 9, 6), scoreline="1-3"),
            FixtureCandidate(opponent="Hackney Wick", date=date(2025, 10, 18)),
        ]

        with get_db(db_path) as conn:
            ids = commit_fixtures(conn, fixtures)

        with get_db(db_path) as conn:
            matches = get_all_matches(conn)

        assert len(ids) == 2
        assert [m.id for m in matches] == ids
        assert matches[0].result == "Win"
        assert matches[0].is_played is True
        assert matches[1].result == "Pending"
        assert matches[1].scoreline is None
