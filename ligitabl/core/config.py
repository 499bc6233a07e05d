# ligitabl/core/config.py
import os
from dotenv import load_dotenv

load_dotenv()


def get_bool_env(key: str, default: bool = False) -> bool:
    value = os.getenv(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


# Base de datos. Por defecto SQLite en memoria (se siembra al arrancar)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")

# JWT
SECRET_KEY = os.getenv("SECRET_KEY", "ligitabl-demo-secret-change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

# Temporada y concurso activos (UUIDs fijos para que sobrevivan reinicios)
ACTIVE_SEASON_ID = os.getenv("ACTIVE_SEASON_ID", "550e8400-e29b-41d4-a716-446655440000")
MAIN_CONTEST_ID = os.getenv("MAIN_CONTEST_ID", "550e8400-e29b-41d4-a716-446655440001")

CURRENT_ROUND = int(os.getenv("CURRENT_ROUND", "19"))
MAX_ROUNDS = 38

# Cooldown entre cambios de predicción
SWAP_COOLDOWN_HOURS = float(os.getenv("SWAP_COOLDOWN_HOURS", "24"))
DEMO_MODE = get_bool_env("DEMO_MODE", False)
DEMO_COOLDOWN_MINUTES = 2

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
    ).split(",")
    if origin.strip()
]
