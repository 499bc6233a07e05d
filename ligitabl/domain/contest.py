# ligitabl/domain/contest.py
from dataclasses import dataclass
from datetime import datetime

from ligitabl.domain.ids import ContestEntryId, ContestId, SeasonPredictionId, UserId


@dataclass(frozen=True)
class MainContestEntry:
    """Inscripción de un usuario en el concurso principal (una por usuario y concurso)."""
    id: ContestEntryId
    user_id: UserId
    contest_id: ContestId
    season_prediction_id: SeasonPredictionId
    joined_at: datetime

    @classmethod
    def join(
        cls,
        user_id: UserId,
        contest_id: ContestId,
        season_prediction_id: SeasonPredictionId,
        now: datetime,
    ) -> "MainContestEntry":
        return cls(
            id=ContestEntryId.generate(),
            user_id=user_id,
            contest_id=contest_id,
            season_prediction_id=season_prediction_id,
            joined_at=now,
        )
