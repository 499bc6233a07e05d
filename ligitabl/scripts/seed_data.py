# ligitabl/scripts/seed_data.py
"""Datos fijos de la demo: equipos, ranking base, jornadas, tabla, partidos y clasificación.

`seed_invariants()` se ejecuta al arrancar la app y es idempotente.
Ejecutado como script (`python -m ligitabl.scripts.seed_data`) borra y vuelve a crear todo.
"""
import logging
from datetime import datetime, timezone

from ligitabl.core.config import ACTIVE_SEASON_ID, CURRENT_ROUND
from ligitabl.core.security import hash_password
from ligitabl.db.session import SessionLocal, engine, Base
from ligitabl.db.models import _all  # noqa: F401
from ligitabl.db.models.baseline_ranking import BaselineRanking
from ligitabl.db.models.fixture import FixtureRow
from ligitabl.db.models.leaderboard_entry import LeaderboardEntryRow
from ligitabl.db.models.match import MatchRow
from ligitabl.db.models.round_result import RoundResultRank, RoundResultRow
from ligitabl.db.models.round_standing import RoundStanding
from ligitabl.db.models.team import Team
from ligitabl.db.models.team_standing import TeamStandingRow
from ligitabl.db.models.user import User
from ligitabl.domain.ids import RoundNumber, SeasonId, TeamId, UserId
from ligitabl.domain.ranking import TeamRanking
from ligitabl.domain.standings import Phase
from ligitabl.services import scoring

logger = logging.getLogger(__name__)

DEMO_USER_ID = "00000000-0000-0000-0000-000000000000"
DEMO_USER_EMAIL = "demo@ligitabl.com"
DEMO_USER_PASSWORD = "demo1234"
DEMO_USER_NAME = "Deejay Wagz"

# (código, nombre) en el orden del ranking base
TEAMS = [
    ("MCI", "Manchester City"),
    ("ARS", "Arsenal"),
    ("LIV", "Liverpool"),
    ("AVL", "Aston Villa"),
    ("TOT", "Tottenham"),
    ("CHE", "Chelsea"),
    ("NEW", "Newcastle"),
    ("MUN", "Man United"),
    ("WHU", "West Ham"),
    ("BHA", "Brighton"),
    ("WOL", "Wolves"),
    ("FUL", "Fulham"),
    ("BOU", "Bournemouth"),
    ("CRY", "Crystal Palace"),
    ("BRE", "Brentford"),
    ("EVE", "Everton"),
    ("NFO", "Nottingham Forest"),
    ("LEE", "Leeds United"),
    ("BUR", "Burnley"),
    ("SUN", "Sunderland"),
]

# code: (played, won, drawn, lost, points, goals_for, goals_against, goal_difference)
TABLE = {
    "MCI": (19, 14, 3, 2, 45, 42, 15, 27),
    "ARS": (19, 13, 4, 2, 43, 39, 16, 23),
    "LIV": (19, 13, 3, 3, 42, 41, 18, 23),
    "AVL": (19, 12, 4, 3, 40, 38, 21, 17),
    "TOT": (19, 11, 3, 5, 36, 40, 28, 12),
    "CHE": (19, 10, 4, 5, 34, 35, 24, 11),
    "NEW": (19, 10, 3, 6, 33, 34, 26, 8),
    "MUN": (19, 9, 4, 6, 31, 30, 25, 5),
    "WHU": (19, 8, 5, 6, 29, 32, 31, 1),
    "BHA": (19, 7, 7, 5, 28, 31, 30, 1),
    "WOL": (19, 7, 5, 7, 26, 25, 28, -3),
    "FUL": (19, 6, 6, 7, 24, 24, 29, -5),
    "BOU": (19, 6, 5, 8, 23, 26, 32, -6),
    "CRY": (19, 5, 6, 8, 21, 22, 30, -8),
    "BRE": (19, 5, 5, 9, 20, 24, 33, -9),
    "EVE": (19, 4, 6, 9, 18, 20, 31, -11),
    "NFO": (19, 4, 5, 10, 17, 21, 35, -14),
    "LEE": (19, 3, 4, 12, 13, 19, 39, -20),
    "BUR": (19, 2, 4, 13, 10, 17, 42, -25),
    "SUN": (19, 1, 3, 15, 6, 14, 48, -34),
}

# (local, visitante, goles local, goles visitante, hora, estado, minuto)
MATCHES = [
    ("MCI", "ARS", 2, 1, "Sat, Dec 28, 12:30", "FINISHED", None),
    ("LIV", "AVL", 3, 3, "Sat, Dec 28, 15:00", "FINISHED", None),
    ("CHE", "TOT", 2, 1, "Sat, Dec 28, 17:30", "LIVE", "67'"),
    ("NEW", "MUN", None, None, "Sun, Dec 29, 14:00", "SCHEDULED", None),
    ("WHU", "BHA", None, None, "Sun, Dec 29, 16:30", "SCHEDULED", None),
]

# equipo: [(rival, en casa)]. LIV y CHE tienen jornada doble
FIXTURES = {
    "MCI": [("ARS", True)],
    "ARS": [("MCI", False)],
    "LIV": [("TOT", True), ("CHE", False)],
    "TOT": [("LIV", False)],
    "CHE": [("NEW", True), ("LIV", True)],
    "NEW": [("CHE", False)],
    "AVL": [("MUN", True)],
    "MUN": [("AVL", False)],
    "WHU": [("BHA", True)],
    "BHA": [("WHU", False)],
    "WOL": [("FUL", False)],
    "FUL": [("WOL", True)],
    "BOU": [("CRY", True)],
    "CRY": [("BOU", False)],
    "BRE": [("EVE", False)],
    "EVE": [("BRE", True)],
    "NFO": [("LEE", True)],
    "LEE": [("NFO", False)],
    "BUR": [("SUN", False)],
    "SUN": [("BUR", True)],
}

# (posición, user_id, nombre, total, jornada, ceros, swaps, puntos, movimiento)
LEADERBOARD = [
    (1, "123e4567-e89b-12d3-a456-426614174001", "Alice Wonder", 1850, 45, 198, 23, 52, 0),
    (2, "123e4567-e89b-12d3-a456-426614174002", "Bob Smith", 1850, 45, 195, 28, 52, -1),
    (3, "123e4567-e89b-12d3-a456-426614174003", "Carol Jones", 1845, 44, 200, 20, 52, 2),
    (4, "123e4567-e89b-12d3-a456-426614174004", "Dave Brown", 1840, 50, 190, 15, 50, -1),
    (5, "123e4567-e89b-12d3-a456-426614174005", "Eve Davis", 1825, 42, 185, 31, 48, 1),
    (6, "123e4567-e89b-12d3-a456-426614174006", "Frank Miller", 1810, 38, 180, 29, 46, -2),
    (7, "123e4567-e89b-12d3-a456-426614174007", "Grace Wilson", 1805, 41, 178, 25, 45, 3),
    (8, "123e4567-e89b-12d3-a456-426614174008", "Henry Moore", 1795, 37, 175, 33, 44, 0),
    (9, "123e4567-e89b-12d3-a456-426614174009", "Ivy Taylor", 1780, 35, 172, 27, 42, -3),
    (10, "123e4567-e89b-12d3-a456-42661417400a", "Jack Anderson", 1775, 40, 170, 22, 42, 1),
    (45, DEMO_USER_ID, DEMO_USER_NAME, 1702, 156, 175, 15, 168, 3),
]


def team_uuid(number: int) -> str:
    return f"00000000-0000-0000-0000-{number:012d}"


TEAM_IDS = {code: team_uuid(i) for i, (code, _) in enumerate(TEAMS, start=1)}


def round_order(round_number: int) -> list[str]:
    """Clasificación (códigos) al final de una jornada: el orden base con un cambio."""
    order = [code for code, _ in TEAMS]
    k = (round_number - 1) % (len(order) - 1)
    order[k], order[k + 1] = order[k + 1], order[k]
    return order


def reset_db():
    logger.info("🗑️ Dropping and recreating all tables")
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def seed_teams(db):
    if db.query(Team).count() > 0:
        return
    for code, name in TEAMS:
        db.add(Team(id=TEAM_IDS[code], code=code, name=name, crest_url=f"/images/crests/{code.lower()}.png"))
    db.commit()
    logger.info("Created %d teams", len(TEAMS))


def seed_baseline(db, season_id: str):
    if db.query(BaselineRanking).filter(BaselineRanking.season_id == season_id).first():
        logger.info("Season baseline rankings already exist, skipping initialization")
        return
    for position, (code, _) in enumerate(TEAMS, start=1):
        db.add(BaselineRanking(season_id=season_id, team_id=TEAM_IDS[code], position=position))
    db.commit()
    logger.info("Created baseline rankings for season %s", season_id)


def seed_round_standings(db, season_id: str, current_round: int):
    if db.query(RoundStanding).filter(RoundStanding.season_id == season_id).first():
        return
    # Solo las jornadas ya disputadas
    for round_number in range(1, current_round):
        for position, code in enumerate(round_order(round_number), start=1):
            db.add(RoundStanding(
                season_id=season_id, round_number=round_number, team_id=TEAM_IDS[code], position=position,
            ))
    db.commit()
    logger.info("Created round standings for rounds 1-%d", current_round - 1)


def seed_table(db, season_id: str, current_round: int):
    if db.query(TeamStandingRow).filter(TeamStandingRow.season_id == season_id).first():
        return
    # Jornada actual: la tabla real. Jornadas anteriores: el orden de esa jornada
    # con las cifras escaladas a los partidos jugados hasta entonces
    for round_number in range(1, current_round + 1):
        if round_number == current_round:
            order = [code for code, _ in TEAMS]
        else:
            order = round_order(round_number)
        for position, code in enumerate(order, start=1):
            played, won, drawn, lost, points, gf, ga, gd = TABLE[TEAMS[position - 1][0]]
            if round_number != current_round:
                won, drawn = won * round_number // played, drawn * round_number // played
                gf, ga = gf * round_number // played, ga * round_number // played
                played = round_number
                lost = played - won - drawn
                points, gd = 3 * won + drawn, gf - ga
            db.add(TeamStandingRow(
                season_id=season_id, round_number=round_number, position=position, team_id=TEAM_IDS[code],
                played=played, won=won, drawn=drawn, lost=lost, points=points,
                goals_for=gf, goals_against=ga, goal_difference=gd,
            ))
    db.commit()


def seed_matches(db, season_id: str, current_round: int):
    if db.query(MatchRow).filter(MatchRow.season_id == season_id).first():
        return
    for home, away, home_score, away_score, kick_off, status, match_time in MATCHES:
        db.add(MatchRow(
            season_id=season_id, round_number=current_round,
            home_team_id=TEAM_IDS[home], away_team_id=TEAM_IDS[away],
            home_score=home_score, away_score=away_score,
            kick_off=kick_off, status=status, match_time=match_time,
        ))
    db.commit()


def seed_fixtures(db, season_id: str, current_round: int):
    if db.query(FixtureRow).filter(FixtureRow.season_id == season_id).first():
        return
    for code, fixtures in FIXTURES.items():
        for opponent, is_home in fixtures:
            db.add(FixtureRow(
                season_id=season_id, round_number=current_round,
                team_code=code, opponent_code=opponent, is_home=is_home,
            ))
    db.commit()


def seed_leaderboard(db):
    if db.query(LeaderboardEntryRow).count() > 0:
        return
    # Demo: misma clasificación en todas las fases
    for phase in Phase:
        for position, user_id, name, total, rnd, zeroes, swaps, points, movement in LEADERBOARD:
            db.add(LeaderboardEntryRow(
                phase=phase.value, position=position, user_id=user_id, display_name=name,
                total_score=total, round_score=rnd, total_zeroes=zeroes, total_swaps=swaps,
                total_points=points, movement=movement,
            ))
    db.commit()


def seed_demo_user(db):
    if db.get(User, DEMO_USER_ID):
        return
    db.add(User(
        id=DEMO_USER_ID,
        email=DEMO_USER_EMAIL,
        display_name=DEMO_USER_NAME,
        hashed_password=hash_password(DEMO_USER_PASSWORD),
    ))
    db.commit()


def demo_predicted_order(round_number: int) -> list[str]:
    """Lo que el usuario demo tenía predicho al cerrarse cada jornada."""
    if round_number == 1:
        return [code for code, _ in TEAMS]
    return round_order(round_number - 1)


def seed_round_results(db, season_id: str, current_round: int):
    if db.query(RoundResultRow).filter(RoundResultRow.user_id == DEMO_USER_ID).first():
        return
    now = datetime.now(timezone.utc)
    for round_number in range(1, current_round):
        predicted = [TeamRanking(TeamId(TEAM_IDS[c]), p) for p, c in enumerate(demo_predicted_order(round_number), 1)]
        actual = [TeamRanking(TeamId(TEAM_IDS[c]), p) for p, c in enumerate(round_order(round_number), 1)]
        result = scoring.build_round_result(
            UserId(DEMO_USER_ID), SeasonId(season_id), RoundNumber(round_number),
            predicted, actual, round_number % 3, now,
        )
        db.add(RoundResultRow(
            user_id=DEMO_USER_ID, season_id=season_id, round_number=round_number,
            total_score=result.total_score, zeroes_count=result.zeroes_count,
            swap_count=result.swap_count, created_at=now,
            rankings=[
                RoundResultRank(
                    team_id=r.team_id.value, predicted_position=r.predicted_position,
                    standings_position=r.standings_position, hit=r.hit,
                )
                for r in result.rankings
            ],
        ))
    db.commit()
    logger.info("Created demo round results for rounds 1-%d", current_round - 1)


def seed_invariants(season_id: str = ACTIVE_SEASON_ID, current_round: int = CURRENT_ROUND):
    logger.info("Initializing game invariants...")
    db = SessionLocal()
    try:
        seed_teams(db)
        seed_baseline(db, season_id)
        seed_round_standings(db, season_id, current_round)
        seed_table(db, season_id, current_round)
        seed_matches(db, season_id, current_round)
        seed_fixtures(db, season_id, current_round)
        seed_leaderboard(db)
        seed_demo_user(db)
        seed_round_results(db, season_id, current_round)
    except Exception:
        db.rollback()
        logger.exception("❌ Error seeding game invariants")
        raise
    finally:
        db.close()
    logger.info("Game invariants initialized successfully")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    reset_db()
    seed_invariants()
