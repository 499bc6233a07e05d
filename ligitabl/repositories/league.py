# ligitabl/repositories/league.py
from sqlalchemy.orm import joinedload

from ligitabl.db.models.fixture import FixtureRow
from ligitabl.db.models.leaderboard_entry import LeaderboardEntryRow
from ligitabl.db.models.match import MatchRow
from ligitabl.db.models.team import Team as TeamRow
from ligitabl.db.models.team_standing import TeamStandingRow
from ligitabl.domain.ids import RoundNumber, SeasonId, TeamId
from ligitabl.domain.standings import (
    Fixture, LeaderboardEntry, Match, MatchStatus, Phase, TeamStanding,
)
from ligitabl.domain.team import Team
from ligitabl.repositories.base import SqlRepository


class TeamRepository(SqlRepository):

    def find_all(self) -> list[Team]:
        with self.session() as db:
            rows = db.query(TeamRow).order_by(TeamRow.id).all()
            return [Team(TeamId(r.id), r.code, r.name, r.crest_url) for r in rows]

    def find_by_code(self, code: str) -> Team | None:
        with self.session() as db:
            row = db.query(TeamRow).filter(TeamRow.code == code.strip().upper()).first()
            return Team(TeamId(row.id), row.code, row.name, row.crest_url) if row else None

    def find_by_ids(self) -> dict[TeamId, Team]:
        return {team.id: team for team in self.find_all()}

    def find_by_codes(self) -> dict[str, Team]:
        return {team.code: team for team in self.find_all()}


class StandingRepository(SqlRepository):
    """Tabla de la liga por temporada y jornada."""

    def find_by_season_and_round(self, season_id: SeasonId, round_number: RoundNumber) -> list[TeamStanding]:
        with self.session() as db:
            rows = (
                db.query(TeamStandingRow)
                .options(joinedload(TeamStandingRow.team))
                .filter(
                    TeamStandingRow.season_id == season_id.value,
                    TeamStandingRow.round_number == round_number.value,
                )
                .order_by(TeamStandingRow.position)
                .all()
            )
            return [
                TeamStanding(
                    position=r.position,
                    team_code=r.team.code,
                    team_name=r.team.name,
                    crest_url=r.team.crest_url,
                    played=r.played,
                    won=r.won,
                    drawn=r.drawn,
                    lost=r.lost,
                    points=r.points,
                    goals_for=r.goals_for,
                    goals_against=r.goals_against,
                    goal_difference=r.goal_difference,
                )
                for r in rows
            ]

    def find_position_map(self, season_id: SeasonId, round_number: RoundNumber) -> dict[str, int]:
        return {s.team_code: s.position for s in self.find_by_season_and_round(season_id, round_number)}

    def find_points_map(self, season_id: SeasonId, round_number: RoundNumber) -> dict[str, int]:
        return {s.team_code: s.points for s in self.find_by_season_and_round(season_id, round_number)}


class MatchRepository(SqlRepository):

    def find_by_season_and_round(self, season_id: SeasonId, round_number: RoundNumber) -> list[Match]:
        with self.session() as db:
            rows = (
                db.query(MatchRow)
                .options(joinedload(MatchRow.home_team), joinedload(MatchRow.away_team))
                .filter(
                    MatchRow.season_id == season_id.value,
                    MatchRow.round_number == round_number.value,
                )
                .order_by(MatchRow.id)
                .all()
            )
            return [
                Match(
                    home_team=r.home_team.name,
                    away_team=r.away_team.name,
                    home_score=r.home_score,
                    away_score=r.away_score,
                    kick_off=r.kick_off,
                    status=MatchStatus.parse(r.status),
                    match_time=r.match_time,
                )
                for r in rows
            ]


class FixtureRepository(SqlRepository):

    def find_by_round(self, season_id: SeasonId, round_number: RoundNumber) -> dict[str, list[Fixture]]:
        with self.session() as db:
            rows = db.query(FixtureRow).filter(
                FixtureRow.season_id == season_id.value,
                FixtureRow.round_number == round_number.value,
            ).order_by(FixtureRow.id).all()

        fixtures: dict[str, list[Fixture]] = {}
        for r in rows:
            fixtures.setdefault(r.team_code, []).append(Fixture(r.opponent_code, r.is_home))
        return fixtures


def _to_entry(row: LeaderboardEntryRow) -> LeaderboardEntry:
    return LeaderboardEntry(
        position=row.position,
        user_id=row.user_id,
        display_name=row.display_name,
        total_score=row.total_score,
        round_score=row.round_score,
        total_zeroes=row.total_zeroes,
        total_swaps=row.total_swaps,
        total_points=row.total_points,
        movement=row.movement,
    )


class LeaderboardRepository(SqlRepository):

    def find_by_phase(self, phase: Phase, page: int, page_size: int) -> list[LeaderboardEntry]:
        with self.session() as db:
            rows = (
                db.query(LeaderboardEntryRow)
                .filter(LeaderboardEntryRow.phase == phase.value)
                .order_by(LeaderboardEntryRow.position)
                .offset((page - 1) * page_size)
                .limit(page_size)
                .all()
            )
            return [_to_entry(r) for r in rows]

    def count_by_phase(self, phase: Phase) -> int:
        with self.session() as db:
            return db.query(LeaderboardEntryRow).filter(
                LeaderboardEntryRow.phase == phase.value
            ).count()

    def find_user_position(self, user_id: str, phase: Phase) -> LeaderboardEntry | None:
        with self.session() as db:
            row = db.query(LeaderboardEntryRow).filter(
                LeaderboardEntryRow.phase == phase.value,
                LeaderboardEntryRow.user_id == user_id,
            ).first()
            return _to_entry(row) if row else None
