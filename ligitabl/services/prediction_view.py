# ligitabl/services/prediction_view.py
import logging
from dataclasses import dataclass, field
from datetime import datetime

from ligitabl.domain.access import (
    Authenticated, Guest, PredictionAccessMode, UserContext, UserNotFound, ViewingOther,
    resolve_access_mode,
)
from ligitabl.domain.errors import DomainValidationError
from ligitabl.domain.ids import RoundNumber, UserId
from ligitabl.domain.ranking import RankingSource
from ligitabl.domain.standings import Fixture
from ligitabl.services.predictions import PredictionService, SwapStatus, build_swap_status
from ligitabl.services.result import Err, Ok, Result
from ligitabl.services import scoring

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankingRow:
    position: int
    team_id: str
    team_code: str
    team_name: str
    crest_url: str | None
    hit: int | None = None
    actual_position: int | None = None


@dataclass(frozen=True)
class UserPredictionView:
    rankings: list[RankingRow]
    source: RankingSource
    access_mode: PredictionAccessMode
    message: str | None
    current_round: int
    viewing_round: int
    round_state: str
    swap_status: SwapStatus | None = None
    fixtures: dict[str, list[Fixture]] = field(default_factory=dict)
    standings: dict[str, int] = field(default_factory=dict)
    points: dict[str, int] = field(default_factory=dict)
    target_display_name: str | None = None
    round_score: int | None = None
    total_hits: int | None = None
    zeroes_count: int | None = None
    swap_count: int | None = None

    @property
    def can_swap(self) -> bool:
        return self.access_mode.can_swap

    @property
    def can_create_entry(self) -> bool:
        return self.access_mode.can_create_entry

    @property
    def is_readonly(self) -> bool:
        return self.access_mode.is_readonly


def resolve_round(requested: int | None, current: RoundNumber) -> RoundNumber:
    # Jornadas fuera de rango o futuras -> jornada actual
    if requested is None or requested < 1 or requested > current.value:
        return current
    try:
        return RoundNumber(requested)
    except DomainValidationError:
        return current


class PredictionViewService:
    """Construye la vista de la predicción de un usuario para una jornada."""

    def __init__(self, predictions: PredictionService):
        self.predictions = predictions
        self.store = predictions.store

    def resolve_viewer(self, viewer_id: UserId | None, requested_user_id: str | None = None) -> UserContext:
        if requested_user_id is None:
            return Authenticated(viewer_id) if viewer_id else Guest()

        try:
            target_id = UserId(requested_user_id)
        except DomainValidationError:
            return UserNotFound(requested_user_id)

        if viewer_id is not None and viewer_id == target_id:
            return Authenticated(viewer_id)

        display_name = self.store.users.find_display_name(target_id)
        if display_name is None:
            return UserNotFound(requested_user_id)
        return ViewingOther(target_id=target_id, display_name=display_name, viewer_id=viewer_id)

    def get_view(self, context: UserContext, requested_round: int | None, now: datetime) -> Result[UserPredictionView]:
        current = self.predictions.current_round
        viewing = resolve_round(requested_round, current)
        is_current = viewing == current

        match context:
            case Authenticated(user_id=user_id):
                owner_id = user_id
            case ViewingOther(target_id=target_id):
                owner_id = target_id
            case _:
                owner_id = None

        season_id = self.predictions.season_id

        # Jornada pasada con resultado guardado: se enseña lo que el usuario tenía entonces
        round_result = None
        if owner_id is not None and not is_current:
            round_result = self.store.round_results.find_by_user_and_round(owner_id, season_id, viewing)

        if round_result is not None:
            source = RankingSource.USER_PREDICTION
            has_prediction = True
            entries = [
                (r.team_id, r.predicted_position, r.hit, r.standings_position)
                for r in round_result.rankings
            ]
        else:
            resolved = self.predictions.get_season_prediction(owner_id)
            if isinstance(resolved, Err):
                return resolved
            resolved = resolved.value
            source = resolved.source
            has_prediction = source is RankingSource.USER_PREDICTION

            # Sin resultado guardado, la predicción actual se puntúa contra esa jornada
            hits = {}
            actual_positions = {}
            if has_prediction and not is_current:
                actual = self.store.round_standings.find_by_season_and_round(season_id, viewing)
                if actual:
                    actual_positions = scoring.build_actual_positions_map(actual)
                    hits = scoring.calculate_hits(resolved.rankings, actual)
            entries = [
                (r.team_id, r.position, hits.get(r.team_id), actual_positions.get(r.team_id))
                for r in resolved.rankings
            ]

        cooldown = None
        swap_status = None
        if isinstance(context, Authenticated):
            cooldown = self.store.cooldowns.get_or_initial(context.user_id)
            swap_status = build_swap_status(cooldown, now, "OPEN" if is_current else "COMPLETED")

        mode = resolve_access_mode(context, has_prediction, cooldown, is_current, now)

        teams = self.store.teams.find_by_ids()
        rows = []
        for team_id, position, hit, actual_position in entries:
            team = teams.get(team_id)
            rows.append(RankingRow(
                position=position,
                team_id=str(team_id),
                team_code=team.code if team else "???",
                team_name=team.name if team else "Unknown",
                crest_url=team.crest_url if team else None,
                hit=hit,
                actual_position=actual_position,
            ))

        if round_result is not None:
            round_score, total_hits = round_result.total_score, round_result.total_hits
            zeroes_count, swap_count = round_result.zeroes_count, round_result.swap_count
        else:
            scored = {team_id: hit for team_id, _, hit, _ in entries if hit is not None}
            round_score = scoring.calculate_round_score(scored) if scored else None
            total_hits = sum(scored.values()) if scored else None
            zeroes_count = scoring.count_zeroes(scored) if scored else None
            swap_count = None

        return Ok(UserPredictionView(
            rankings=rows,
            source=source,
            access_mode=mode,
            message=self._message(context, mode, has_prediction, is_current, viewing),
            current_round=current.value,
            viewing_round=viewing.value,
            round_state="OPEN" if is_current else "COMPLETED",
            swap_status=swap_status,
            fixtures=self.store.fixtures.find_by_round(season_id, viewing),
            standings=self.store.standings.find_position_map(season_id, viewing),
            points=self.store.standings.find_points_map(season_id, viewing),
            target_display_name=context.display_name if isinstance(context, ViewingOther) else None,
            round_score=round_score,
            total_hits=total_hits,
            zeroes_count=zeroes_count,
            swap_count=swap_count,
        ))


    @staticmethod
    def _message(context, mode, has_prediction, is_current, viewing) -> str | None:
        match context:
            case Guest():
                return "Log in to create your prediction" if is_current else f"Viewing Gameweek {viewing} results"
            case Authenticated():
                if not is_current:
                    return f"Viewing Gameweek {viewing} results"
                if not has_prediction:
                    return "Arrange teams and submit to join the competition"
                if mode is PredictionAccessMode.READONLY_COOLDOWN:
                    return "Swap cooldown active"
                return None
            case ViewingOther(display_name=name):
                if not has_prediction:
                    return f"{name} hasn't made a prediction yet"
                if not is_current:
                    return f"Viewing {name}'s Gameweek {viewing} result"
                return f"Viewing {name}'s prediction"
            case UserNotFound():
                return "User not found"
        return None
