# ligitabl/api/predictions.py
from dataclasses import asdict
from datetime import datetime

from fastapi import APIRouter, Depends

from ligitabl.core.deps import (
    get_current_user, get_now, get_optional_user, get_prediction_service,
    get_prediction_view_service,
)
from ligitabl.db.models.user import User
from ligitabl.domain.access import Guest
from ligitabl.domain.ids import UserId
from ligitabl.schemas.prediction import (
    FixtureOut, OrderUpdateOut, PredictionRowOut, RankingOut, ResetOut, SwapByCodeRequest,
    SwapStatusOut, UpdateOrderRequest, UserPredictionOut,
)
from ligitabl.services.prediction_view import PredictionViewService, UserPredictionView
from ligitabl.services.predictions import PredictionService
from ligitabl.services.result import raise_for_error

router = APIRouter(prefix="/predictions", tags=["Predictions"])


def _view_out(view: UserPredictionView) -> UserPredictionOut:
    return UserPredictionOut(
        rankings=[PredictionRowOut.model_validate(r) for r in view.rankings],
        source=view.source.value,
        access_mode=view.access_mode.value,
        can_swap=view.can_swap,
        can_create_entry=view.can_create_entry,
        is_readonly=view.is_readonly,
        message=view.message,
        swap_status=SwapStatusOut.model_validate(view.swap_status) if view.swap_status else None,
        fixtures={
            code: [FixtureOut(opponent=f.opponent, is_home=f.is_home, display=f.display) for f in fixtures]
            for code, fixtures in view.fixtures.items()
        },
        standings=view.standings,
        points=view.points,
        current_round=view.current_round,
        viewing_round=view.viewing_round,
        round_state=view.round_state,
        target_display_name=view.target_display_name,
        round_score=view.round_score,
        total_hits=view.total_hits,
        zeroes_count=view.zeroes_count,
        swap_count=view.swap_count,
    )


# 👀 Vistas de predicción

@router.get("/user/me", response_model=UserPredictionOut)
def get_my_prediction(
    round: int | None = None,
    current_user: User | None = Depends(get_optional_user),
    views: PredictionViewService = Depends(get_prediction_view_service),
    now: datetime = Depends(get_now),
):
    context = views.resolve_viewer(UserId(current_user.id) if current_user else None)
    return _view_out(raise_for_error(views.get_view(context, round, now)))


@router.get("/user/guest", response_model=UserPredictionOut)
def get_guest_prediction(
    round: int | None = None,
    views: PredictionViewService = Depends(get_prediction_view_service),
    now: datetime = Depends(get_now),
):
    return _view_out(raise_for_error(views.get_view(Guest(), round, now)))


@router.get("/user/{user_id}", response_model=UserPredictionOut)
def get_user_prediction(
    user_id: str,
    round: int | None = None,
    current_user: User | None = Depends(get_optional_user),
    views: PredictionViewService = Depends(get_prediction_view_service),
    now: datetime = Depends(get_now),
):
    context = views.resolve_viewer(UserId(current_user.id) if current_user else None, user_id)
    return _view_out(raise_for_error(views.get_view(context, round, now)))


# 🔄 Cambios

@router.get("/me/swap-status", response_model=SwapStatusOut)
def get_swap_status(
    current_user: User = Depends(get_current_user),
    service: PredictionService = Depends(get_prediction_service),
    now: datetime = Depends(get_now),
):
    status = raise_for_error(service.get_swap_status(UserId(current_user.id), now))
    return SwapStatusOut(**asdict(status))


@router.post("/swap", response_model=list[RankingOut])
def swap_teams(
    body: SwapByCodeRequest,
    current_user: User = Depends(get_current_user),
    service: PredictionService = Depends(get_prediction_service),
    now: datetime = Depends(get_now),
):
    prediction = raise_for_error(
        service.swap_teams_by_code(UserId(current_user.id), body.team_a, body.team_b, now)
    )
    return RankingOut.from_rankings(prediction.rankings, service.store.teams.find_by_ids())


@router.post("/order", response_model=OrderUpdateOut)
def update_order(
    body: UpdateOrderRequest,
    current_user: User = Depends(get_current_user),
    service: PredictionService = Depends(get_prediction_service),
    now: datetime = Depends(get_now),
):
    result = raise_for_error(service.update_order(UserId(current_user.id), body.team_codes, now))
    return OrderUpdateOut(
        success=True,
        changed=result.changed,
        message=result.message,
        rankings=RankingOut.from_rankings(result.prediction.rankings, service.store.teams.find_by_ids()),
    )


@router.post("/demo-reset", response_model=ResetOut)
def demo_reset(
    current_user: User = Depends(get_current_user),
    service: PredictionService = Depends(get_prediction_service),
    now: datetime = Depends(get_now),
):
    result = raise_for_error(service.reset_demo(UserId(current_user.id), now))
    return ResetOut(success=result.success, message=result.message)
