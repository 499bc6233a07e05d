# ligitabl/domain/round_result.py
from dataclasses import dataclass
from datetime import datetime

from ligitabl.domain.errors import DomainValidationError
from ligitabl.domain.ids import RoundNumber, SeasonId, TeamId, UserId
from ligitabl.domain.ranking import TEAMS_PER_SEASON


@dataclass(frozen=True)
class ResultTeamRank:
    team_id: TeamId
    predicted_position: int
    standings_position: int
    hit: int

    def __post_init__(self):
        for position in (self.predicted_position, self.standings_position):
            if not 1 <= position <= TEAMS_PER_SEASON:
                raise DomainValidationError(
                    f"Position must be between 1 and {TEAMS_PER_SEASON}, got: {position}"
                )
        if self.hit != abs(self.predicted_position - self.standings_position):
            raise DomainValidationError("Hit must be the distance between predicted and actual position")

    @property
    def is_perfect(self) -> bool:
        return self.hit == 0


@dataclass(frozen=True)
class RoundResult:
    """Foto de la predicción de un usuario al cerrarse una jornada, ya puntuada."""
    user_id: UserId
    season_id: SeasonId
    round_number: RoundNumber
    rankings: tuple[ResultTeamRank, ...]
    total_score: int
    zeroes_count: int
    swap_count: int
    created_at: datetime

    def __post_init__(self):
        object.__setattr__(
            self, "rankings", tuple(sorted(self.rankings, key=lambda r: r.predicted_position))
        )
        if min(self.total_score, self.zeroes_count, self.swap_count) < 0:
            raise DomainValidationError("Round result scores cannot be negative")

    @property
    def total_hits(self) -> int:
        return sum(r.hit for r in self.rankings)
