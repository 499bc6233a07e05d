import os

# Antes de importar la app: base en memoria y valores de producción del cooldown
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DEMO_MODE"] = "false"
os.environ["SWAP_COOLDOWN_HOURS"] = "24"
os.environ["CURRENT_ROUND"] = "19"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from main import app
from ligitabl.db.session import Base, engine
from ligitabl.scripts.seed_data import TEAMS, TEAM_IDS, seed_invariants


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    seed_invariants()
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def store():
    return app.state.store


@pytest.fixture
def prediction_service():
    return app.state.prediction_service


@pytest.fixture
def now():
    return datetime(2025, 12, 28, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def baseline_team_ids():
    return [TEAM_IDS[code] for code, _ in TEAMS]


@pytest.fixture
def baseline_codes():
    return [code for code, _ in TEAMS]


def register(client, email="player@example.com", display_name="Player One", password="secret123"):
    res = client.post("/auth/register", json={
        "email": email,
        "display_name": display_name,
        "password": password,
    })
    assert res.status_code == 201, res.text
    body = res.json()
    return {"Authorization": f"Bearer {body['access_token']}"}, body["user"]["id"]


@pytest.fixture
def auth(client):
    """Cabeceras y user_id de un usuario recién registrado."""
    return register(client)
