# ligitabl/api/standings.py
from fastapi import APIRouter, Depends

from ligitabl.core.deps import get_standings_service
from ligitabl.schemas.prediction import FixtureOut
from ligitabl.schemas.standings import MatchOut, MatchesOut, StandingsOut, TeamStandingOut
from ligitabl.services.standings import MatchesResult, StandingsResult, StandingsService
from ligitabl.services.result import raise_for_error

router = APIRouter(tags=["Standings"])


def _standings_out(result: StandingsResult) -> StandingsOut:
    return StandingsOut(
        season_id=result.season_id,
        round_number=result.round_number,
        standings=[TeamStandingOut.model_validate(s) for s in result.standings],
    )


def _matches_out(result: MatchesResult) -> MatchesOut:
    return MatchesOut(
        season_id=result.season_id,
        round_number=result.round_number,
        matches=[
            MatchOut(
                home_team=m.home_team,
                away_team=m.away_team,
                home_score=m.home_score,
                away_score=m.away_score,
                kick_off=m.kick_off,
                status=m.status.value,
                match_time=m.match_time,
            )
            for m in result.matches
        ],
        live_count=result.live_count,
        finished_count=result.finished_count,
        scheduled_count=result.scheduled_count,
        has_live_matches=result.has_live_matches,
        all_matches_finished=result.all_matches_finished,
    )


# 🏆 Clasificación

@router.get("/standings", response_model=StandingsOut)
def get_current_standings(round: int | None = None, service: StandingsService = Depends(get_standings_service)):
    """Clasificación de la temporada activa (por defecto, jornada actual)."""
    return _standings_out(raise_for_error(service.get_standings(round_number=round)))


@router.get("/seasons/{season_id}/standings", response_model=StandingsOut)
def get_season_standings(
    season_id: str,
    round: int | None = None,
    service: StandingsService = Depends(get_standings_service),
):
    return _standings_out(raise_for_error(service.get_standings(season_id, round)))


# ⚽ Partidos

@router.get("/matches", response_model=MatchesOut)
def get_current_matches(round: int | None = None, service: StandingsService = Depends(get_standings_service)):
    return _matches_out(raise_for_error(service.get_matches(round_number=round)))


@router.get("/seasons/{season_id}/matches", response_model=MatchesOut)
def get_season_matches(
    season_id: str,
    round: int | None = None,
    service: StandingsService = Depends(get_standings_service),
):
    return _matches_out(raise_for_error(service.get_matches(season_id, round)))


@router.get("/fixtures", response_model=dict[str, list[FixtureOut]])
def get_fixtures(round: int | None = None, service: StandingsService = Depends(get_standings_service)):
    """Rivales de cada equipo (por código) en una jornada."""
    fixtures = raise_for_error(service.get_fixtures(round))
    return {
        code: [FixtureOut(opponent=f.opponent, is_home=f.is_home, display=f.display) for f in team_fixtures]
        for code, team_fixtures in fixtures.items()
    }
