# ligitabl/api/season_prediction.py
from datetime import datetime

from fastapi import APIRouter, Depends

from ligitabl.core.deps import (
    get_current_user, get_now, get_optional_user, get_prediction_service,
)
from ligitabl.db.models.user import User
from ligitabl.domain.ids import SeasonId, TeamId, UserId
from ligitabl.domain.ranking import RankingSource
from ligitabl.schemas.prediction import (
    CreateSeasonPredictionRequest, RankingOut, SeasonPredictionOut, SwapTeamsRequest,
)
from ligitabl.services.predictions import PredictionService
from ligitabl.services.result import catching, raise_for_error

router = APIRouter(prefix="/seasonprediction", tags=["Season prediction"])


@router.get("", response_model=SeasonPredictionOut)
def get_season_prediction(
    season_id: str | None = None,
    current_user: User | None = Depends(get_optional_user),
    service: PredictionService = Depends(get_prediction_service),
):
    """Ranking a mostrar: predicción propia, clasificación de la jornada o ranking base."""
    season = raise_for_error(catching(lambda: SeasonId(season_id))) if season_id else service.season_id
    user_id = UserId(current_user.id) if current_user else None

    resolved = raise_for_error(service.get_season_prediction(user_id, season))
    prediction = resolved.prediction
    return SeasonPredictionOut(
        id=prediction.id.value if prediction else None,
        user_id=prediction.user_id.value if prediction else None,
        season_id=season.value,
        at_round=prediction.at_round.value if prediction else None,
        source=resolved.source.value,
        source_display_name=resolved.source.display_name,
        rankings=RankingOut.from_rankings(resolved.rankings, service.store.teams.find_by_ids()),
        created_at=prediction.created_at if prediction else None,
        updated_at=prediction.updated_at if prediction else None,
    )


@router.post("", response_model=SeasonPredictionOut, status_code=201)
def create_season_prediction(
    body: CreateSeasonPredictionRequest,
    current_user: User = Depends(get_current_user),
    service: PredictionService = Depends(get_prediction_service),
    now: datetime = Depends(get_now),
):
    team_ids = raise_for_error(catching(lambda: [TeamId(t) for t in body.team_ids]))
    prediction = raise_for_error(
        service.create_season_prediction(UserId(current_user.id), team_ids, now)
    )
    return _prediction_out(prediction, service)


@router.post("/swap", response_model=SeasonPredictionOut)
def swap_teams(
    body: SwapTeamsRequest,
    current_user: User = Depends(get_current_user),
    service: PredictionService = Depends(get_prediction_service),
    now: datetime = Depends(get_now),
):
    team_a, team_b = raise_for_error(catching(lambda: (TeamId(body.team_a_id), TeamId(body.team_b_id))))
    prediction = raise_for_error(service.swap_teams(
        UserId(current_user.id),
        team_a,
        team_b,
        now,
        position_a=body.team_a_position,
        position_b=body.team_b_position,
    ))
    return _prediction_out(prediction, service)


def _prediction_out(prediction, service: PredictionService) -> SeasonPredictionOut:
    return SeasonPredictionOut(
        id=prediction.id.value,
        user_id=prediction.user_id.value,
        season_id=prediction.season_id.value,
        at_round=prediction.at_round.value,
        source=RankingSource.USER_PREDICTION.value,
        source_display_name=RankingSource.USER_PREDICTION.display_name,
        rankings=RankingOut.from_rankings(prediction.rankings, service.store.teams.find_by_ids()),
        created_at=prediction.created_at,
        updated_at=prediction.updated_at,
    )
