"""Core data types for match observations.

HalfStats is the atomic record: one team, one half, six counters.
Stored rows use camelCase JSON keys, so conversion to and from dicts
lives here rather than in the store.
"""

from dataclasses import dataclass, field, fields
from datetime import date as date_type
from datetime import datetime
from typing import Literal

MatchResult = Literal["Win", "Draw", "Loss", "Pending"]

# Snake-case field name -> stored JSON key
HALF_STAT_KEYS: dict[str, str] = {
    "deliveries": "deliveries",
    "half_chances": "halfChances",
    "chances": "chances",
    "massive_chances_no_shot": "massiveChancesNoShot",
    "massive_chances_shot": "massiveChancesShot",
    "goals": "goals",
}

# Display labels used by the analysis breakdown and season table
HALF_STAT_LABELS: dict[str, str] = {
    "deliveries": "Deliveries",
    "half_chances": "1/2 Chances",
    "chances": "Chances",
    "massive_chances_no_shot": "Massive Chance (No Shot)",
    "massive_chances_shot": "Massive Chance (Shot)",
    "goals": "Goals",
}


@dataclass(frozen=True)
class HalfStats:
    """Observed counters for one team in one half."""

    deliveries: int = 0
    half_chances: int = 0
    chances: int = 0
    massive_chances_no_shot: int = 0
    massive_chances_shot: int = 0
    goals: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value < 0:
                raise ValueError(f"{f.name} must be >= 0, got {value}")

    def __add__(self, other: "HalfStats") -> "HalfStats":
        if not isinstance(other, HalfStats):
            return NotImplemented
        return HalfStats(
            **{name: getattr(self, name) + getattr(other, name) for name in HALF_STAT_KEYS}
        )

    def get(self, key: str) -> int:
        """Get a counter by snake-case name."""
        return getattr(self, key)

    def to_dict(self) -> dict[str, int]:
        """Serialize with the stored camelCase keys."""
        return {json_key: getattr(self, name) for name, json_key in HALF_STAT_KEYS.items()}

    @classmethod
    def from_dict(cls, data: dict | None) -> "HalfStats":
        """Build from a stored payload. Missing or null keys read as 0."""
        data = data or {}
        values = {}
        for name, json_key in HALF_STAT_KEYS.items():
            raw = data.get(json_key, data.get(name))
            values[name] = int(raw or 0)
        return cls(**values)


@dataclass(frozen=True)
class TeamHalfPair:
    """Both halves for one side of a match."""

    first_half: HalfStats = field(default_factory=HalfStats)
    second_half: HalfStats = field(default_factory=HalfStats)

    def totals(self) -> HalfStats:
        """Field-wise sum of both halves."""
        return self.first_half + self.second_half

    def to_dict(self) -> dict:
        return {
            "firstHalf": self.first_half.to_dict(),
            "secondHalf": self.second_half.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> "TeamHalfPair":
        data = data or {}
        return cls(
            first_half=HalfStats.from_dict(data.get("firstHalf")),
            second_half=HalfStats.from_dict(data.get("secondHalf")),
        )


@dataclass
class MatchObservation:
    """Persisted watcher record. At most one per match_id."""

    match_id: str
    us: TeamHalfPair = field(default_factory=TeamHalfPair)
    opposition: TeamHalfPair = field(default_factory=TeamHalfPair)
    id: int | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def side(self, name: str) -> TeamHalfPair:
        """Get a side by name ('us' or 'opposition')."""
        if name == "us":
            return self.us
        if name == "opposition":
            return self.opposition
        raise KeyError(name)


@dataclass
class Match:
    """A fixture from the club's match list (read-only for the watcher)."""

    id: str
    date: date_type | None
    opponent: str
    is_home: bool = True
    time: str = "15:00"
    competition: str = "Premier Division"
    scoreline: str | None = None
    result: MatchResult | None = "Pending"

    @property
    def is_played(self) -> bool:
        return bool(self.result) and self.result != "Pending"


@dataclass
class FixtureCandidate:
    """Best-effort fixture parsed from free text or OCR, pending operator review."""

    opponent: str
    is_home: bool = True
    date: date_type | None = None
    time: str = "15:00"
    scoreline: str = ""
    result: MatchResult = "Pending"
    competition: str = "Premier Division"
    source_line: str = ""
