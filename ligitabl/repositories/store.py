# ligitabl/repositories/store.py
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.orm import sessionmaker

from ligitabl.repositories.league import (
    FixtureRepository, LeaderboardRepository, MatchRepository, StandingRepository, TeamRepository,
)
from ligitabl.repositories.predictions import (
    MainContestEntryRepository, SeasonPredictionRepository, SwapCooldownRepository,
)
from ligitabl.repositories.rankings import BaselineRankingRepository, RoundStandingsRepository
from ligitabl.repositories.round_results import RoundResultRepository
from ligitabl.repositories.users import UserRepository


@dataclass
class Store:
    """Todos los repositorios sobre una misma base de datos.

    Se construye una vez al arrancar (ver main.py) y se inyecta en los endpoints.
    """
    predictions: SeasonPredictionRepository
    cooldowns: SwapCooldownRepository
    contest_entries: MainContestEntryRepository
    baselines: BaselineRankingRepository
    round_standings: RoundStandingsRepository
    round_results: RoundResultRepository
    teams: TeamRepository
    standings: StandingRepository
    matches: MatchRepository
    fixtures: FixtureRepository
    leaderboard: LeaderboardRepository
    users: UserRepository

    @classmethod
    def build(cls, session_factory: sessionmaker, cooldown_window: timedelta) -> "Store":
        return cls(
            predictions=SeasonPredictionRepository(session_factory),
            cooldowns=SwapCooldownRepository(session_factory, cooldown_window),
            contest_entries=MainContestEntryRepository(session_factory),
            baselines=BaselineRankingRepository(session_factory),
            round_standings=RoundStandingsRepository(session_factory),
            round_results=RoundResultRepository(session_factory),
            teams=TeamRepository(session_factory),
            standings=StandingRepository(session_factory),
            matches=MatchRepository(session_factory),
            fixtures=FixtureRepository(session_factory),
            leaderboard=LeaderboardRepository(session_factory),
            users=UserRepository(session_factory),
        )
