# ligitabl/repositories/rankings.py
from sqlalchemy import func

from ligitabl.db.models.baseline_ranking import BaselineRanking
from ligitabl.db.models.round_standing import RoundStanding
from ligitabl.domain.errors import DomainValidationError
from ligitabl.domain.ids import RoundNumber, SeasonId, TeamId
from ligitabl.domain.ranking import TEAMS_PER_SEASON, TeamRanking
from ligitabl.repositories.base import SqlRepository


class BaselineRankingRepository(SqlRepository):
    """Ranking base de cada temporada (último nivel de la cascada de fallback)."""

    def find_by_season(self, season_id: SeasonId) -> list[TeamRanking] | None:
        with self.session() as db:
            rows = db.query(BaselineRanking).filter(
                BaselineRanking.season_id == season_id.value
            ).order_by(BaselineRanking.position).all()
            if not rows:
                return None
            return [TeamRanking(TeamId(r.team_id), r.position) for r in rows]

    def save(self, season_id: SeasonId, rankings: list[TeamRanking]) -> None:
        if len(rankings) != TEAMS_PER_SEASON:
            raise DomainValidationError(f"Baseline rankings must have exactly {TEAMS_PER_SEASON} teams")
        with self.session() as db:
            db.query(BaselineRanking).filter(
                BaselineRanking.season_id == season_id.value
            ).delete(synchronize_session=False)
            db.add_all(
                BaselineRanking(season_id=season_id.value, team_id=r.team_id.value, position=r.position)
                for r in rankings
            )


class RoundStandingsRepository(SqlRepository):
    """Clasificación real de las jornadas ya disputadas."""

    def find_by_season_and_round(self, season_id: SeasonId, round_number: RoundNumber) -> list[TeamRanking] | None:
        with self.session() as db:
            rows = db.query(RoundStanding).filter(
                RoundStanding.season_id == season_id.value,
                RoundStanding.round_number == round_number.value,
            ).order_by(RoundStanding.position).all()
            if not rows:
                return None
            return [TeamRanking(TeamId(r.team_id), r.position) for r in rows]

    def find_latest_round(self, season_id: SeasonId) -> RoundNumber | None:
        with self.session() as db:
            latest = db.query(func.max(RoundStanding.round_number)).filter(
                RoundStanding.season_id == season_id.value
            ).scalar()
            return RoundNumber(latest) if latest is not None else None

    def find_latest_by_season(self, season_id: SeasonId) -> list[TeamRanking] | None:
        latest = self.find_latest_round(season_id)
        if latest is None:
            return None
        return self.find_by_season_and_round(season_id, latest)

    def save(self, season_id: SeasonId, round_number: RoundNumber, rankings: list[TeamRanking]) -> None:
        if len(rankings) != TEAMS_PER_SEASON:
            raise DomainValidationError(f"Round standings must have exactly {TEAMS_PER_SEASON} teams")
        with self.session() as db:
            db.query(RoundStanding).filter(
                RoundStanding.season_id == season_id.value,
                RoundStanding.round_number == round_number.value,
            ).delete(synchronize_session=False)
            db.add_all(
                RoundStanding(
                    season_id=season_id.value,
                    round_number=round_number.value,
                    team_id=r.team_id.value,
                    position=r.position,
                )
                for r in rankings
            )
