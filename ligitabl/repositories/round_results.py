from ligitabl.db.models.round_result import RoundResultRank, RoundResultRow
from ligitabl.domain.ids import RoundNumber, SeasonId, TeamId, UserId
from ligitabl.domain.round_result import ResultTeamRank, RoundResult
from ligitabl.repositories.base import SqlRepository, as_utc


def _to_result(row: RoundResultRow) -> RoundResult:
    return RoundResult(
        user_id=UserId(row.user_id),
        season_id=SeasonId(row.season_id),
        round_number=RoundNumber(row.round_number),
        rankings=tuple(
            ResultTeamRank(TeamId(r.team_id), r.predicted_position, r.standings_position, r.hit)
            for r in row.rankings
        ),
        total_score=row.total_score,
        zeroes_count=row.zeroes_count,
        swap_count=row.swap_count,
        created_at=as_utc(row.created_at),
    )


class RoundResultRepository(SqlRepository):
    """Resultados ya puntuados de las jornadas cerradas, uno por usuario y jornada."""

    def find_by_user_and_round(
        self, user_id: UserId, season_id: SeasonId, round_number: RoundNumber
    ) -> RoundResult | None:
        with self.session() as db:
            row = db.query(RoundResultRow).filter(
                RoundResultRow.user_id == user_id.value,
                RoundResultRow.season_id == season_id.value,
                RoundResultRow.round_number == round_number.value,
            ).first()
            return _to_result(row) if row else None

    def save(self, result: RoundResult) -> RoundResult:
        with self.session() as db:
            # Si ya había resultado para esa jornada se sustituye entero (con sus posiciones)
            previous = db.query(RoundResultRow).filter(
                RoundResultRow.user_id == result.user_id.value,
                RoundResultRow.season_id == result.season_id.value,
                RoundResultRow.round_number == result.round_number.value,
            ).first()
            if previous is not None:
                db.delete(previous)
                db.flush()
            db.add(RoundResultRow(
                user_id=result.user_id.value,
                season_id=result.season_id.value,
                round_number=result.round_number.value,
                total_score=result.total_score,
                zeroes_count=result.zeroes_count,
                swap_count=result.swap_count,
                created_at=result.created_at,
                rankings=[
                    RoundResultRank(
                        team_id=r.team_id.value,
                        predicted_position=r.predicted_position,
                        standings_position=r.standings_position,
                        hit=r.hit,
                    )
                    for r in result.rankings
                ],
            ))
        return result
