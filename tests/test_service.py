"""Tests for WatcherService: imports, saves, resets and reports.

Uses an in-memory ObservationStore so failures can be checked against
what was (not) written.
"""

from datetime import date, datetime
from unittest.mock import MagicMock

import pytest

from clubwatch.core.errors import (
    NoMatchSelected,
    ParseIncomplete,
    RecognitionFailed,
    StoreFailure,
)
from clubwatch.core.interfaces import ObservationStore, OcrResult, TextRecognizer
from clubwatch.core.types import HalfStats, Match, MatchObservation, TeamHalfPair
from clubwatch.database.settings import OcrSettings
from clubwatch.watcher.constants import DEMO_OPPOSITION, DEMO_US
from clubwatch.watcher.dominance import Verdict
from clubwatch.watcher.service import WatcherService

VALID_TEXT = "1st Half\n10 3 2 1 1\n5 1 1 0 0\n2nd Half\n8 2 4 2 2\n6 3 2 1 1"


# ---------- Fakes ----------


class FakeStore(ObservationStore):
    def __init__(self):
        self.rows: dict[str, MatchObservation] = {}
        self.upserts = 0

    def get_all(self):
        return list(self.rows.values())

    def get(self, match_id):
        return self.rows.get(match_id)

    def upsert(self, match_id, us, opposition, updated_at):
        self.upserts += 1
        existing = self.rows.get(match_id)
        observation = MatchObservation(
            match_id=match_id,
            us=us,
            opposition=opposition,
            id=existing.id if existing else len(self.rows) + 1,
            created_at=existing.created_at if existing else updated_at,
            updated_at=updated_at,
        )
        self.rows[match_id] = observation
        return observation

    def delete(self, match_id):
        return self.rows.pop(match_id, None) is not None


class FakeRecognizer(TextRecognizer):
    def __init__(self, text: str):
        self.text = text
        self.calls = []

    def recognize(self, image):
        self.calls.append(image)
        return OcrResult(text=self.text)


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def service(store):
    return WatcherService(store)


# ---------- Imports ----------


class TestImportText:
    """OCR text import upserts only on a successful parse."""

    def test_success(self, service, store):
        result = service.import_text("m1", VALID_TEXT)

        assert result.source == "text"
        assert result.observation.us.first_half.deliveries == 10
        assert result.unrecovered_fields == ("massive_chances_no_shot",)
        assert store.get("m1").opposition.second_half.goals == 1

    def test_no_match_selected_is_checked_before_parsing(self, service, store, monkeypatch):
        parse = MagicMock()
        monkeypatch.setattr("clubwatch.watcher.service.parse_ocr_text", parse)

        with pytest.raises(NoMatchSelected):
            service.import_text(None, "garbage")

        parse.assert_not_called()
        assert store.upserts == 0

    def test_empty_match_id_is_no_match(self, service):
        with pytest.raises(NoMatchSelected) as exc_info:
            service.import_text("", VALID_TEXT)
        assert str(exc_info.value) == "Please select a match first."

    def test_no_match_and_empty_text(self, service):
        with pytest.raises(NoMatchSelected):
            service.import_text(None, "")

    def test_empty_text_is_incomplete(self, service, store):
        with pytest.raises(ParseIncomplete) as exc_info:
            service.import_text("m1", "")

        assert exc_info.value.excerpt == ""
        assert store.upserts == 0

    def test_failed_parse_leaves_existing_stats(self, service, store):
        service.save("m1", DEMO_US, DEMO_OPPOSITION)
        before = store.get("m1")

        with pytest.raises(ParseIncomplete):
            service.import_text("m1", "1st Half\n1 2 3 4 5\n")

        assert store.get("m1") == before
        assert store.upserts == 1

    def test_settings_are_applied(self, store):
        strict = WatcherService(store, ocr_settings=OcrSettings(require_opposition=True))

        with pytest.raises(ParseIncomplete):
            strict.import_text("m1", "1st Half\n1 2 3 4 5\n2nd Half\n5 4 3 2 1")
        assert store.upserts == 0

    def test_missing_opposition_reported(self, service):
        result = service.import_text("m1", "1st Half\n1 2 3 4 5\n2nd Half\n5 4 3 2 1")
        assert result.missing_opposition == ["first_half_opp", "second_half_opp"]
        assert result.observation.opposition.totals() == HalfStats()

    def test_store_failure_propagates(self):
        broken = MagicMock(spec=ObservationStore)
        broken.upsert.side_effect = StoreFailure("disk I/O error")

        with pytest.raises(StoreFailure, match="disk I/O error"):
            WatcherService(broken).import_text("m1", VALID_TEXT)


class TestImportImage:
    def test_recognizes_then_parses(self, store):
        recognizer = FakeRecognizer(VALID_TEXT)
        service = WatcherService(store, recognizer)

        result = service.import_image("m1", b"\x89PNG...")

        assert recognizer.calls == [b"\x89PNG..."]
        assert result.source == "image"
        assert result.raw_text == VALID_TEXT
        assert store.get("m1").us.second_half.goals == 2

    def test_no_match_skips_recognition(self, store):
        recognizer = FakeRecognizer(VALID_TEXT)

        with pytest.raises(NoMatchSelected):
            WatcherService(store, recognizer).import_image(None, b"img")

        assert recognizer.calls == []

    def test_unreadable_screenshot(self, store):
        service = WatcherService(store, FakeRecognizer("blurry nonsense"))

        with pytest.raises(ParseIncomplete) as exc_info:
            service.import_image("m1", b"img")

        assert exc_info.value.excerpt == "blurry nonsense"
        assert store.get("m1") is None

    def test_requires_recognizer(self, service):
        with pytest.raises(RuntimeError):
            service.import_image("m1", b"img")

    def test_recognition_failure_stores_nothing(self, store):
        recognizer = MagicMock(spec=TextRecognizer)
        recognizer.recognize.side_effect = RecognitionFailed("Failed to process image: bad data")

        with pytest.raises(RecognitionFailed):
            WatcherService(store, recognizer).import_image("m1", b"not an image")

        assert store.upserts == 0


class TestImportDemo:
    def test_demo_dataset(self, service, store):
        result = service.import_demo("m1")

        assert result.source == "demo"
        assert store.get("m1").us == DEMO_US
        assert store.get("m1").opposition == DEMO_OPPOSITION

    def test_demo_values(self):
        assert DEMO_US.first_half == HalfStats(
            deliveries=2, half_chances=2, chances=2, massive_chances_shot=1, goals=2
        )
        assert DEMO_OPPOSITION.second_half == HalfStats(
            deliveries=13, half_chances=4, chances=1, goals=1
        )

    def test_demo_requires_match(self, service):
        with pytest.raises(NoMatchSelected):
            service.import_demo(None)


# ---------- Saves and resets ----------


class TestSaveReset:
    def test_save_replaces(self, service, store):
        service.save("m1", DEMO_US, DEMO_OPPOSITION)
        service.save("m1", TeamHalfPair(), TeamHalfPair())

        assert len(store.get_all()) == 1
        assert store.get("m1").us == TeamHalfPair()

    def test_save_sets_timestamp(self, service):
        observation = service.save("m1", DEMO_US, DEMO_OPPOSITION)
        assert isinstance(observation.updated_at, datetime)
        assert observation.updated_at.tzinfo is not None

    def test_reset_returns_zeroed_copy(self, service, store):
        service.save("m1", DEMO_US, DEMO_OPPOSITION)

        zeroed = service.reset("m1")

        assert zeroed.match_id == "m1"
        assert zeroed.us.totals() == HalfStats()
        assert store.get("m1") is None

    def test_working_copy_for_unrecorded_match(self, service):
        copy = service.working_copy("new")
        assert copy.id is None
        assert copy.opposition.totals() == HalfStats()


# ---------- Reports ----------


class TestReports:
    def test_analyze_demo(self, service):
        service.import_demo("m1")

        analysis = service.analyze("m1")

        # us: deliveries 9, half 3, chances 4, mcs 6 -> 9 + 6 + 12 + 30
        assert analysis.us_score == 57
        # opp: deliveries 23, half 6, chances 3, mcs 1 -> 23 + 12 + 9 + 5
        assert analysis.opposition_score == 49
        assert analysis.verdict is Verdict.US_DOMINANT
        assert analysis.us_clinicality == 50
        assert analysis.opposition_clinicality == 100
        assert analysis.first_half_goals == (2, 0)
        assert analysis.second_half_goals == (1, 1)

    def test_analyze_missing(self, service):
        assert service.analyze("nope") is None

    def test_season(self, service):
        service.import_demo("a")
        service.import_demo("b")

        season = service.season()

        assert season.games == 2
        assert season.metrics["goals"].us_average == pytest.approx(3.0)

    def test_performance(self, service):
        service.import_demo("m1")
        matches = [Match(id="m1", date=date(2025, 9, 6), opponent="Wood Lane", scoreline="3-1", result="Win")]

        (point,) = service.performance(matches)

        assert point.margin == 8
        assert point.goal_difference == 2
