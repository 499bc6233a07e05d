# ligitabl/services/rankings.py
import logging
from dataclasses import dataclass

from ligitabl.domain.ids import SeasonId, UserId
from ligitabl.domain.ranking import RankingSource, TeamRanking
from ligitabl.domain.season_prediction import SeasonPrediction
from ligitabl.services.result import Err, Ok, Result, UseCaseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedRankings:
    rankings: tuple[TeamRanking, ...]
    source: RankingSource
    prediction: SeasonPrediction | None = None


class RankingResolver:
    """Decide qué ranking mostrar, en cascada:

    1. La predicción del usuario para la temporada.
    2. La clasificación de la última jornada disputada (si no está vacía).
    3. El ranking base de la temporada.

    Un nivel inferior nunca se consulta si uno superior ya tiene datos.
    Sin ranking base, la temporada activa es un error de invariante; cualquier
    otra temporada simplemente no existe.
    """

    def __init__(self, predictions, round_standings, baselines, active_season_id: SeasonId | None = None):
        self.predictions = predictions
        self.round_standings = round_standings
        self.baselines = baselines
        self.active_season_id = active_season_id

    def resolve(self, user_id: UserId | None, season_id: SeasonId) -> Result[ResolvedRankings]:
        if user_id is not None:
            prediction = self.predictions.find_by_user_and_season(user_id, season_id)
            if prediction is not None:
                return Ok(ResolvedRankings(prediction.rankings, RankingSource.USER_PREDICTION, prediction))

        standings = self.round_standings.find_latest_by_season(season_id)
        if standings:
            return Ok(ResolvedRankings(tuple(standings), RankingSource.ROUND_STANDINGS))

        baseline = self.baselines.find_by_season(season_id)
        if baseline:
            return Ok(ResolvedRankings(tuple(baseline), RankingSource.SEASON_BASELINE))

        if self.active_season_id is not None and season_id != self.active_season_id:
            return Err(UseCaseError.not_found(f"Season not found: {season_id}", season_id=str(season_id)))

        logger.error("Season baseline rankings missing for season %s", season_id)
        return Err(UseCaseError.business_rule(
            f"Season baseline rankings not found for season: {season_id}. "
            "This is a critical system invariant violation.",
            season_id=str(season_id),
        ))
