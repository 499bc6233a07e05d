# ligitabl/db/models/_all.py
# Importa todos los modelos para que Base.metadata los conozca antes de create_all
from ligitabl.db.models.user import User  # noqa: F401
from ligitabl.db.models.team import Team  # noqa: F401
from ligitabl.db.models.season_prediction import SeasonPredictionRow, SeasonPredictionRanking  # noqa: F401
from ligitabl.db.models.swap_cooldown import SwapCooldownRow  # noqa: F401
from ligitabl.db.models.contest_entry import MainContestEntryRow  # noqa: F401
from ligitabl.db.models.baseline_ranking import BaselineRanking  # noqa: F401
from ligitabl.db.models.round_standing import RoundStanding  # noqa: F401
from ligitabl.db.models.team_standing import TeamStandingRow  # noqa: F401
from ligitabl.db.models.match import MatchRow  # noqa: F401
from ligitabl.db.models.fixture import FixtureRow  # noqa: F401
from ligitabl.db.models.leaderboard_entry import LeaderboardEntryRow  # noqa: F401
from ligitabl.db.models.round_result import RoundResultRow, RoundResultRank  # noqa: F401
