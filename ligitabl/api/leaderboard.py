# ligitabl/api/leaderboard.py
from fastapi import APIRouter, Depends

from ligitabl.core.deps import get_leaderboard_service, get_optional_user
from ligitabl.db.models.user import User
from ligitabl.domain.ids import UserId
from ligitabl.schemas.standings import (
    LeaderboardEntryOut, LeaderboardOut, PredictionDetailOut, UserDetailsOut,
)
from ligitabl.services.leaderboard import LeaderboardService
from ligitabl.services.result import raise_for_error

router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


@router.get("", response_model=LeaderboardOut)
def get_leaderboard(
    phase: str | None = None,
    page: int = 1,
    page_size: int = 20,
    current_user: User | None = Depends(get_optional_user),
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    result = raise_for_error(service.get_leaderboard(
        phase=phase,
        page=page,
        page_size=page_size,
        current_user_id=UserId(current_user.id) if current_user else None,
    ))

    return LeaderboardOut(
        phase=result.phase.value,
        phase_display_name=result.phase.display_name,
        entries=[LeaderboardEntryOut.model_validate(e) for e in result.entries],
        page=result.page,
        page_size=result.page_size,
        total_entries=result.total_entries,
        total_pages=result.total_pages,
        has_next=result.has_next,
        has_previous=result.has_previous,
        current_user_entry=(
            LeaderboardEntryOut.model_validate(result.current_user_entry)
            if result.current_user_entry else None
        ),
        current_user_on_page=result.current_user_on_page,
    )


@router.get("/user/{user_id}/details", response_model=UserDetailsOut)
def get_user_details(
    user_id: str,
    round: int | None = None,
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    details = raise_for_error(service.get_user_details(user_id, round))
    return UserDetailsOut(
        entry=LeaderboardEntryOut.model_validate(details.entry),
        round_number=details.round_number,
        round_score=details.round_score,
        predictions=[PredictionDetailOut.model_validate(p) for p in details.predictions],
    )
