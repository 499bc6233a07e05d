import logging
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ligitabl.core import config

# IMPORTANTE: Importar Base y Engine para que funcione la creación de tablas
from ligitabl.db.session import SessionLocal, engine, Base

# Importar modelos para que SQLAlchemy los "vea" antes de crear las tablas
from ligitabl.db.models import _all  # noqa: F401

from ligitabl.domain.ids import ContestId, RoundNumber, SeasonId
from ligitabl.repositories.store import Store
from ligitabl.scripts.seed_data import seed_invariants
from ligitabl.services.leaderboard import LeaderboardService
from ligitabl.services.prediction_view import PredictionViewService
from ligitabl.services.predictions import PredictionService
from ligitabl.services.standings import StandingsService

# Importar las rutas (los routers)
from ligitabl.api.auth import router as auth_router
from ligitabl.api.season_prediction import router as season_prediction_router
from ligitabl.api.predictions import router as predictions_router
from ligitabl.api.standings import router as standings_router
from ligitabl.api.leaderboard import router as leaderboard_router

logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def cooldown_window() -> timedelta:
    if config.DEMO_MODE:
        return timedelta(minutes=config.DEMO_COOLDOWN_MINUTES)
    return timedelta(hours=config.SWAP_COOLDOWN_HOURS)


def build_services(app: FastAPI) -> None:
    """Construye el store y los casos de uso una sola vez y los deja en app.state."""
    season_id = SeasonId(config.ACTIVE_SEASON_ID)
    current_round = RoundNumber(config.CURRENT_ROUND)
    store = Store.build(SessionLocal, cooldown_window())

    app.state.store = store
    app.state.prediction_service = PredictionService(
        store, season_id, ContestId(config.MAIN_CONTEST_ID), current_round
    )
    app.state.prediction_view_service = PredictionViewService(app.state.prediction_service)
    app.state.standings_service = StandingsService(store, season_id, current_round)
    app.state.leaderboard_service = LeaderboardService(store, season_id, current_round)


app = FastAPI(
    title="Ligitabl",
    version="1.0.0"
)

# Creamos las tablas y sembramos los datos fijos (ranking base, equipos...)
Base.metadata.create_all(bind=engine)
seed_invariants()
build_services(app)

# Conectamos las piezas (routers)
app.include_router(auth_router)
app.include_router(season_prediction_router)
app.include_router(predictions_router)
app.include_router(standings_router)
app.include_router(leaderboard_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info(
    "Ligitabl started: season=%s round=%s cooldown=%s",
    config.ACTIVE_SEASON_ID, config.CURRENT_ROUND, cooldown_window(),
)


@app.get("/")
def read_root():
    return {"message": "Ligitabl API funcionando ⚽"}
