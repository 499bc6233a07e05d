# ligitabl/domain/season_prediction.py
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable

from ligitabl.domain.errors import BusinessRuleViolation
from ligitabl.domain.ids import RoundNumber, SeasonId, SeasonPredictionId, TeamId, UserId
from ligitabl.domain.ranking import SwapPair, TeamRanking, rankings_from_order, validate_rankings


@dataclass(frozen=True)
class SeasonPrediction:
    """Predicción de temporada de un usuario (una por usuario y temporada).

    Inmutable: cada cambio de orden devuelve una instancia nueva con el mismo
    id y created_at.
    """
    id: SeasonPredictionId
    user_id: UserId
    season_id: SeasonId
    at_round: RoundNumber
    rankings: tuple[TeamRanking, ...]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        object.__setattr__(self, "rankings", validate_rankings(self.rankings))

    @classmethod
    def create(
        cls,
        user_id: UserId,
        season_id: SeasonId,
        at_round: RoundNumber,
        team_ids: Iterable,
        now: datetime,
    ) -> "SeasonPrediction":
        return cls(
            id=SeasonPredictionId.generate(),
            user_id=user_id,
            season_id=season_id,
            at_round=at_round,
            rankings=rankings_from_order(team_ids),
            created_at=now,
            updated_at=now,
        )

    def position_of(self, team_id: TeamId) -> int | None:
        for r in self.rankings:
            if r.team_id == team_id:
                return r.position
        return None

    def ordered_team_ids(self) -> list[TeamId]:
        return [r.team_id for r in self.rankings]

    def swap_teams(self, pair: SwapPair, at_round: RoundNumber, now: datetime) -> "SeasonPrediction":
        pos_a = self.position_of(pair.team_a)
        if pos_a is None:
            raise BusinessRuleViolation(f"Team not found in prediction: {pair.team_a}")
        pos_b = self.position_of(pair.team_b)
        if pos_b is None:
            raise BusinessRuleViolation(f"Team not found in prediction: {pair.team_b}")

        swapped = []
        for r in self.rankings:
            if r.team_id == pair.team_a:
                swapped.append(r.with_position(pos_b))
            elif r.team_id == pair.team_b:
                swapped.append(r.with_position(pos_a))
            else:
                swapped.append(r)

        return replace(self, rankings=tuple(swapped), at_round=at_round, updated_at=now)

    def reorder(self, team_ids: Iterable, at_round: RoundNumber, now: datetime) -> "SeasonPrediction":
        return replace(
            self, rankings=rankings_from_order(team_ids), at_round=at_round, updated_at=now
        )
