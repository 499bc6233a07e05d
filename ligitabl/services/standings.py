# ligitabl/services/standings.py
from dataclasses import dataclass

from ligitabl.domain.ids import RoundNumber, SeasonId
from ligitabl.domain.standings import Fixture, Match, TeamStanding
from ligitabl.repositories.store import Store
from ligitabl.services.result import Result, catching


@dataclass(frozen=True)
class StandingsResult:
    season_id: str
    round_number: int
    standings: list[TeamStanding]


@dataclass(frozen=True)
class MatchesResult:
    season_id: str
    round_number: int
    matches: list[Match]

    @property
    def live_count(self) -> int:
        return sum(1 for m in self.matches if m.is_live)

    @property
    def finished_count(self) -> int:
        return sum(1 for m in self.matches if m.is_finished)

    @property
    def scheduled_count(self) -> int:
        return sum(1 for m in self.matches if m.is_scheduled)

    @property
    def has_live_matches(self) -> bool:
        return self.live_count > 0

    @property
    def all_matches_finished(self) -> bool:
        return bool(self.matches) and self.finished_count == len(self.matches)


class StandingsService:

    def __init__(self, store: Store, season_id: SeasonId, current_round: RoundNumber):
        self.store = store
        self.season_id = season_id
        self.current_round = current_round

    def _round(self, round_number: int | None) -> RoundNumber:
        if round_number is None:
            return self.current_round
        return RoundNumber(round_number)

    def _season(self, season_id: str | None) -> SeasonId:
        return SeasonId(season_id) if season_id is not None else self.season_id

    def get_standings(self, season_id: str | None = None, round_number: int | None = None) -> Result[StandingsResult]:
        def load() -> StandingsResult:
            season, rnd = self._season(season_id), self._round(round_number)
            return StandingsResult(season.value, rnd.value, self.store.standings.find_by_season_and_round(season, rnd))

        return catching(load)

    def get_matches(self, season_id: str | None = None, round_number: int | None = None) -> Result[MatchesResult]:
        def load() -> MatchesResult:
            season, rnd = self._season(season_id), self._round(round_number)
            return MatchesResult(season.value, rnd.value, self.store.matches.find_by_season_and_round(season, rnd))

        return catching(load)

    def get_fixtures(self, round_number: int | None = None) -> Result[dict[str, list[Fixture]]]:
        return catching(lambda: self.store.fixtures.find_by_round(self.season_id, self._round(round_number)))
