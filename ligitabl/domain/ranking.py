# ligitabl/domain/ranking.py
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable

from ligitabl.domain.errors import DomainValidationError
from ligitabl.domain.ids import TeamId

TEAMS_PER_SEASON = 20


class RankingSource(str, Enum):
    """Nivel de la cascada de fallback que ha producido un ranking."""
    USER_PREDICTION = "USER_PREDICTION"
    ROUND_STANDINGS = "ROUND_STANDINGS"
    SEASON_BASELINE = "SEASON_BASELINE"

    @property
    def display_name(self) -> str:
        return _SOURCE_DISPLAY_NAMES[self]


_SOURCE_DISPLAY_NAMES = {
    RankingSource.USER_PREDICTION: "Your Prediction",
    RankingSource.ROUND_STANDINGS: "Current Round Standings",
    RankingSource.SEASON_BASELINE: "Season Baseline",
}


@dataclass(frozen=True)
class TeamRanking:
    team_id: TeamId
    position: int

    def __post_init__(self):
        if not 1 <= self.position <= TEAMS_PER_SEASON:
            raise DomainValidationError(
                f"Position must be between 1 and {TEAMS_PER_SEASON}, got: {self.position}"
            )

    def with_position(self, position: int) -> "TeamRanking":
        return replace(self, position=position)


def validate_rankings(rankings: Iterable[TeamRanking]) -> tuple[TeamRanking, ...]:
    """Comprueba que el ranking es una permutación 1..20 sin equipos repetidos.

    Devuelve una tupla ordenada por posición.
    """
    ranks = tuple(rankings)
    if len(ranks) != TEAMS_PER_SEASON:
        raise DomainValidationError(
            f"Prediction must contain exactly {TEAMS_PER_SEASON} teams, got: {len(ranks)}"
        )

    team_ids = [r.team_id for r in ranks]
    if len(set(team_ids)) != len(team_ids):
        raise DomainValidationError("Prediction contains duplicate teams")

    positions = {r.position for r in ranks}
    if positions != set(range(1, TEAMS_PER_SEASON + 1)):
        raise DomainValidationError(
            f"Positions must be exactly 1 to {TEAMS_PER_SEASON} with no duplicates"
        )

    return tuple(sorted(ranks, key=lambda r: r.position))


def rankings_from_order(team_ids: Iterable) -> tuple[TeamRanking, ...]:
    """Lista ordenada de equipos -> rankings (el primero es la posición 1)."""
    return validate_rankings(
        TeamRanking(team_id=t if isinstance(t, TeamId) else TeamId(t), position=i)
        for i, t in enumerate(team_ids, start=1)
    )


def moved_teams(current: Iterable[TeamRanking], proposed: Iterable[TeamRanking]) -> list[TeamId]:
    """Equipos cuya posición cambia entre dos rankings con los mismos equipos."""
    before = {r.team_id: r.position for r in current}
    after = {r.team_id: r.position for r in proposed}
    if set(before) != set(after):
        raise DomainValidationError("Submitted order must contain the same teams as the prediction")
    return [team_id for team_id, pos in after.items() if before[team_id] != pos]


@dataclass(frozen=True)
class SwapPair:
    team_a: TeamId
    team_b: TeamId

    def __post_init__(self):
        if self.team_a == self.team_b:
            raise DomainValidationError("Cannot swap a team with itself")
