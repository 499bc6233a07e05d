# ligitabl/domain/standings.py
from dataclasses import dataclass
from enum import Enum

from ligitabl.domain.errors import DomainValidationError
from ligitabl.domain.ranking import TEAMS_PER_SEASON


@dataclass(frozen=True)
class TeamStanding:
    position: int
    team_code: str
    team_name: str
    crest_url: str | None
    played: int
    won: int
    drawn: int
    lost: int
    points: int
    goals_for: int
    goals_against: int
    goal_difference: int

    def __post_init__(self):
        if not 1 <= self.position <= TEAMS_PER_SEASON:
            raise DomainValidationError(f"Position must be between 1 and {TEAMS_PER_SEASON}")
        if min(self.played, self.won, self.drawn, self.lost) < 0:
            raise DomainValidationError("Match counts cannot be negative")
        if self.won + self.drawn + self.lost != self.played:
            raise DomainValidationError("Won + drawn + lost must equal played")

    @property
    def in_champions_league(self) -> bool:
        return self.position <= 4

    @property
    def in_europa_league(self) -> bool:
        return 5 <= self.position <= 6

    @property
    def in_relegation_zone(self) -> bool:
        return self.position >= 18


class MatchStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    LIVE = "LIVE"
    FINISHED = "FINISHED"
    POSTPONED = "POSTPONED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, value: str | None) -> "MatchStatus":
        # Cualquier valor desconocido se trata como partido programado
        try:
            return cls((value or "").strip().upper())
        except ValueError:
            return cls.SCHEDULED


@dataclass(frozen=True)
class Match:
    home_team: str
    away_team: str
    home_score: int | None = None
    away_score: int | None = None
    kick_off: str | None = None
    status: MatchStatus = MatchStatus.SCHEDULED
    match_time: str | None = None

    @property
    def is_live(self) -> bool:
        return self.status is MatchStatus.LIVE

    @property
    def is_finished(self) -> bool:
        return self.status is MatchStatus.FINISHED

    @property
    def is_scheduled(self) -> bool:
        return self.status is MatchStatus.SCHEDULED


@dataclass(frozen=True)
class Fixture:
    opponent: str
    is_home: bool

    @property
    def display(self) -> str:
        return f"vs {self.opponent} ({'H' if self.is_home else 'A'})"


class Phase(str, Enum):
    FS = "FS"
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"
    H1 = "H1"
    H2 = "H2"

    @property
    def display_name(self) -> str:
        return _PHASE_NAMES[self]

    @classmethod
    def parse(cls, value: str | None) -> "Phase":
        try:
            return cls((value or "").strip().upper())
        except ValueError:
            return cls.FS


_PHASE_NAMES = {
    Phase.FS: "Full Season",
    Phase.Q1: "Quarter 1",
    Phase.Q2: "Quarter 2",
    Phase.Q3: "Quarter 3",
    Phase.Q4: "Quarter 4",
    Phase.H1: "First Half",
    Phase.H2: "Second Half",
}


@dataclass(frozen=True)
class LeaderboardEntry:
    position: int
    user_id: str
    display_name: str
    total_score: int
    round_score: int
    total_zeroes: int
    total_swaps: int
    total_points: int
    movement: int

    def __post_init__(self):
        if self.position < 1:
            raise DomainValidationError("Position must be at least 1")
        if not self.display_name.strip():
            raise DomainValidationError("Display name cannot be blank")


@dataclass(frozen=True)
class PredictionDetail:
    """Una fila de la predicción de un usuario puntuada contra una jornada."""
    position: int
    team_code: str
    team_name: str
    crest_url: str | None
    hit: int | None
    actual_position: int | None

    @property
    def is_perfect(self) -> bool:
        return self.hit == 0

    @property
    def is_close(self) -> bool:
        return self.hit is not None and 1 <= self.hit <= 2
