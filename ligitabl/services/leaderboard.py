# ligitabl/services/leaderboard.py
import math
from dataclasses import dataclass

from ligitabl.domain.errors import DomainValidationError, NotFoundError
from ligitabl.domain.ids import RoundNumber, SeasonId, UserId
from ligitabl.domain.standings import LeaderboardEntry, Phase, PredictionDetail
from ligitabl.repositories.store import Store
from ligitabl.services import scoring
from ligitabl.services.result import Result, catching

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class LeaderboardPage:
    phase: Phase
    entries: list[LeaderboardEntry]
    page: int
    page_size: int
    total_entries: int
    current_user_entry: LeaderboardEntry | None

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_entries / self.page_size))

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def current_user_on_page(self) -> bool:
        if self.current_user_entry is None:
            return False
        return any(e.user_id == self.current_user_entry.user_id for e in self.entries)


@dataclass(frozen=True)
class UserDetails:
    entry: LeaderboardEntry
    round_number: int
    predictions: list[PredictionDetail]
    round_score: int | None


class LeaderboardService:

    def __init__(self, store: Store, season_id: SeasonId, current_round: RoundNumber):
        self.store = store
        self.season_id = season_id
        self.current_round = current_round

    def get_leaderboard(
        self,
        phase: str | None = None,
        page: int = 1,
        page_size: int = 20,
        current_user_id: UserId | None = None,
    ) -> Result[LeaderboardPage]:
        def load() -> LeaderboardPage:
            if page < 1:
                raise DomainValidationError("Page must be at least 1")
            if not 1 <= page_size <= MAX_PAGE_SIZE:
                raise DomainValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")

            parsed = Phase.parse(phase)
            current_entry = None
            if current_user_id is not None:
                current_entry = self.store.leaderboard.find_user_position(current_user_id.value, parsed)

            return LeaderboardPage(
                phase=parsed,
                entries=self.store.leaderboard.find_by_phase(parsed, page, page_size),
                page=page,
                page_size=page_size,
                total_entries=self.store.leaderboard.count_by_phase(parsed),
                current_user_entry=current_entry,
            )

        return catching(load)

    def get_user_details(self, user_id: str, round_number: int | None = None) -> Result[UserDetails]:
        def load() -> UserDetails:
            rnd = RoundNumber(round_number) if round_number is not None else self.current_round
            entry = self.store.leaderboard.find_user_position(UserId(user_id).value, Phase.FS)
            if entry is None:
                raise NotFoundError(f"User not found in leaderboard: {user_id}", {"user_id": user_id})

            teams = self.store.teams.find_by_ids()
            stored = self.store.round_results.find_by_user_and_round(UserId(user_id), self.season_id, rnd)
            if stored is not None:
                details = [
                    PredictionDetail(
                        position=r.predicted_position,
                        team_code=teams[r.team_id].code,
                        team_name=teams[r.team_id].name,
                        crest_url=teams[r.team_id].crest_url,
                        hit=r.hit,
                        actual_position=r.standings_position,
                    )
                    for r in stored.rankings
                ]
                return UserDetails(entry, rnd.value, details, stored.total_score)

            # Sin resultado guardado se puntúa la predicción actual; sin predicción, solo su fila
            prediction = self.store.predictions.find_by_user_and_season(UserId(user_id), self.season_id)
            actual = self.store.round_standings.find_by_season_and_round(self.season_id, rnd)
            if prediction is None:
                return UserDetails(entry, rnd.value, [], None)

            hits = scoring.calculate_hits(prediction.rankings, actual or [])
            actual_map = scoring.build_actual_positions_map(actual or [])
            details = [
                PredictionDetail(
                    position=r.position,
                    team_code=teams[r.team_id].code,
                    team_name=teams[r.team_id].name,
                    crest_url=teams[r.team_id].crest_url,
                    hit=hits.get(r.team_id),
                    actual_position=actual_map.get(r.team_id),
                )
                for r in prediction.rankings
            ]
            return UserDetails(entry, rnd.value, details, scoring.calculate_round_score(hits) if hits else None)

        return catching(load)
