# ligitabl/repositories/predictions.py
from datetime import timedelta

from ligitabl.db.models.contest_entry import MainContestEntryRow
from ligitabl.db.models.season_prediction import SeasonPredictionRanking, SeasonPredictionRow
from ligitabl.db.models.swap_cooldown import SwapCooldownRow
from ligitabl.domain.contest import MainContestEntry
from ligitabl.domain.cooldown import DEFAULT_COOLDOWN_WINDOW, SwapCooldown
from ligitabl.domain.ids import (
    ContestEntryId, ContestId, RoundNumber, SeasonId, SeasonPredictionId, TeamId, UserId,
)
from ligitabl.domain.ranking import TeamRanking
from ligitabl.domain.season_prediction import SeasonPrediction
from ligitabl.repositories.base import SqlRepository, as_utc


def _to_prediction(row: SeasonPredictionRow) -> SeasonPrediction:
    return SeasonPrediction(
        id=SeasonPredictionId(row.id),
        user_id=UserId(row.user_id),
        season_id=SeasonId(row.season_id),
        at_round=RoundNumber(row.at_round),
        rankings=tuple(TeamRanking(TeamId(r.team_id), r.position) for r in row.rankings),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class SeasonPredictionRepository(SqlRepository):

    def find_by_user_and_season(self, user_id: UserId, season_id: SeasonId) -> SeasonPrediction | None:
        with self.session() as db:
            row = db.query(SeasonPredictionRow).filter(
                SeasonPredictionRow.user_id == user_id.value,
                SeasonPredictionRow.season_id == season_id.value,
            ).first()
            return _to_prediction(row) if row else None

    def exists_by_user_and_season(self, user_id: UserId, season_id: SeasonId) -> bool:
        with self.session() as db:
            return db.query(SeasonPredictionRow.id).filter(
                SeasonPredictionRow.user_id == user_id.value,
                SeasonPredictionRow.season_id == season_id.value,
            ).first() is not None

    def save(self, prediction: SeasonPrediction) -> SeasonPrediction:
        with self.session() as db:
            row = db.get(SeasonPredictionRow, prediction.id.value)
            if row is None:
                row = SeasonPredictionRow(
                    id=prediction.id.value,
                    user_id=prediction.user_id.value,
                    season_id=prediction.season_id.value,
                    created_at=prediction.created_at,
                )
                db.add(row)
            row.at_round = prediction.at_round.value
            row.updated_at = prediction.updated_at
            db.flush()

            # 🔄 Reemplazamos las 20 posiciones
            db.query(SeasonPredictionRanking).filter(
                SeasonPredictionRanking.prediction_id == prediction.id.value
            ).delete(synchronize_session=False)
            db.add_all(
                SeasonPredictionRanking(
                    prediction_id=prediction.id.value,
                    team_id=r.team_id.value,
                    position=r.position,
                )
                for r in prediction.rankings
            )
        return prediction


class SwapCooldownRepository(SqlRepository):

    def __init__(self, session_factory, window: timedelta = DEFAULT_COOLDOWN_WINDOW):
        super().__init__(session_factory)
        self.window = window

    def find_by_user(self, user_id: UserId) -> SwapCooldown | None:
        with self.session() as db:
            row = db.get(SwapCooldownRow, user_id.value)
            if row is None:
                return None
            return SwapCooldown(
                last_swap_at=as_utc(row.last_swap_at),
                initial_prediction_made=row.initial_prediction_made,
                swap_count=row.swap_count,
                window=self.window,
            )

    def get_or_initial(self, user_id: UserId) -> SwapCooldown:
        return self.find_by_user(user_id) or SwapCooldown.initial(self.window)

    def save(self, user_id: UserId, cooldown: SwapCooldown) -> SwapCooldown:
        with self.session() as db:
            row = db.get(SwapCooldownRow, user_id.value)
            if row is None:
                row = SwapCooldownRow(user_id=user_id.value)
                db.add(row)
            row.last_swap_at = cooldown.last_swap_at
            row.initial_prediction_made = cooldown.initial_prediction_made
            row.swap_count = cooldown.swap_count
        return cooldown


class MainContestEntryRepository(SqlRepository):

    def find_by_user_and_contest(self, user_id: UserId, contest_id: ContestId) -> MainContestEntry | None:
        with self.session() as db:
            row = db.query(MainContestEntryRow).filter(
                MainContestEntryRow.user_id == user_id.value,
                MainContestEntryRow.contest_id == contest_id.value,
            ).first()
            if row is None:
                return None
            return MainContestEntry(
                id=ContestEntryId(row.id),
                user_id=UserId(row.user_id),
                contest_id=ContestId(row.contest_id),
                season_prediction_id=SeasonPredictionId(row.season_prediction_id),
                joined_at=as_utc(row.joined_at),
            )

    def exists_by_user_and_contest(self, user_id: UserId, contest_id: ContestId) -> bool:
        return self.find_by_user_and_contest(user_id, contest_id) is not None

    def save(self, entry: MainContestEntry) -> MainContestEntry:
        with self.session() as db:
            db.add(MainContestEntryRow(
                id=entry.id.value,
                user_id=entry.user_id.value,
                contest_id=entry.contest_id.value,
                season_prediction_id=entry.season_prediction_id.value,
                joined_at=entry.joined_at,
            ))
        return entry
