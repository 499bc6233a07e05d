from ligitabl.core.config import ACTIVE_SEASON_ID
from ligitabl.domain.ids import RoundNumber, TeamId, UserId
from ligitabl.scripts.seed_data import DEMO_USER_EMAIL, DEMO_USER_ID, DEMO_USER_PASSWORD


def login_demo(client):
    res = client.post("/auth/login", json={"email": DEMO_USER_EMAIL, "password": DEMO_USER_PASSWORD})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


# --- Auth ---

def test_register_login_and_me(client, auth):
    headers, user_id = auth

    me = client.get("/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["id"] == user_id
    assert me.json()["display_name"] == "Player One"

    res = client.post("/auth/login", json={"email": "PLAYER@example.com", "password": "secret123"})
    assert res.status_code == 200
    assert res.json()["user"]["id"] == user_id


def test_register_duplicate_email(client, auth):
    res = client.post("/auth/register", json={
        "email": "player@example.com", "display_name": "Copy", "password": "secret123",
    })
    assert res.status_code == 400


def test_login_with_wrong_password(client, auth):
    res = client.post("/auth/login", json={"email": "player@example.com", "password": "nope"})
    assert res.status_code == 401


def test_invalid_token_is_rejected(client):
    res = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401


def test_demo_user_is_seeded(client):
    me = client.get("/auth/me", headers=login_demo(client)).json()
    assert me["id"] == DEMO_USER_ID
    assert me["display_name"] == "Deejay Wagz"


# --- Clasificación, partidos y rivales ---

def test_current_standings(client):
    body = client.get("/standings").json()
    assert body["round_number"] == 19
    assert body["season_id"] == ACTIVE_SEASON_ID
    assert len(body["standings"]) == 20
    top = body["standings"][0]
    assert top["team_code"] == "MCI"
    assert top["points"] == 45
    assert [s["position"] for s in body["standings"]] == list(range(1, 21))


def test_season_standings_for_past_round(client):
    body = client.get(f"/seasons/{ACTIVE_SEASON_ID}/standings", params={"round": 3}).json()
    assert body["round_number"] == 3
    assert len(body["standings"]) == 20
    assert all(s["played"] == 3 for s in body["standings"])
    # En la jornada 3 AVL y LIV intercambian puesto respecto al orden base
    assert body["standings"][2]["team_code"] == "AVL"
    assert body["standings"][3]["team_code"] == "LIV"


def test_season_standings_for_future_round_are_empty(client):
    body = client.get(f"/seasons/{ACTIVE_SEASON_ID}/standings", params={"round": 25}).json()
    assert body["standings"] == []


def test_standings_with_invalid_input(client):
    assert client.get("/seasons/not-a-season/standings").status_code == 400
    assert client.get("/standings", params={"round": 39}).status_code == 400


def test_current_matches(client):
    body = client.get("/matches").json()
    assert len(body["matches"]) == 5
    assert body["live_count"] == 1
    assert body["finished_count"] == 2
    assert body["scheduled_count"] == 2
    assert body["has_live_matches"] is True
    assert body["all_matches_finished"] is False
    live = [m for m in body["matches"] if m["status"] == "LIVE"][0]
    assert live["home_team"] == "CHE"
    assert live["match_time"] == "67'"


def test_scheduled_matches_have_no_score(client):
    body = client.get(f"/seasons/{ACTIVE_SEASON_ID}/matches").json()
    scheduled = [m for m in body["matches"] if m["status"] == "SCHEDULED"]
    assert all(m["home_score"] is None and m["away_score"] is None for m in scheduled)


def test_fixtures(client):
    body = client.get("/fixtures").json()
    assert len(body["LIV"]) == 2
    assert body["MCI"] == [{"opponent": "ARS", "is_home": True, "display": "vs ARS (H)"}]
    assert client.get("/fixtures", params={"round": 4}).json() == {}


# --- Leaderboard ---

def test_leaderboard_first_page(client):
    body = client.get("/leaderboard").json()
    assert body["phase"] == "FS"
    assert body["total_entries"] == 11
    assert body["total_pages"] == 1
    assert body["entries"][0]["display_name"] == "Alice Wonder"
    assert body["current_user_entry"] is None
    assert body["current_user_on_page"] is False


def test_leaderboard_pagination(client):
    body = client.get("/leaderboard", params={"page": 2, "page_size": 5}).json()
    assert [e["position"] for e in body["entries"]] == [6, 7, 8, 9, 10]
    assert body["total_pages"] == 3
    assert body["has_next"] is True
    assert body["has_previous"] is True


def test_leaderboard_marks_current_user(client):
    headers = login_demo(client)

    body = client.get("/leaderboard", headers=headers).json()
    assert body["current_user_entry"]["position"] == 45
    assert body["current_user_on_page"] is True

    small = client.get("/leaderboard", params={"page_size": 5}, headers=headers).json()
    assert small["current_user_entry"]["position"] == 45
    assert small["current_user_on_page"] is False


def test_leaderboard_unknown_phase_defaults_to_full_season(client):
    body = client.get("/leaderboard", params={"phase": "nope"}).json()
    assert body["phase"] == "FS"


def test_leaderboard_rejects_bad_paging(client):
    assert client.get("/leaderboard", params={"page": 0}).status_code == 400
    assert client.get("/leaderboard", params={"page_size": 101}).status_code == 400


def test_user_details(client):
    res = client.get(f"/leaderboard/user/{DEMO_USER_ID}/details")
    assert res.status_code == 200
    body = res.json()
    assert body["entry"]["display_name"] == "Deejay Wagz"
    assert body["round_number"] == 19
    assert body["predictions"] == []


def test_user_details_for_past_round_use_stored_result(client, prediction_service, now, baseline_team_ids):
    # Aunque ahora tenga otra predicción, la jornada 5 muestra lo que tenía entonces
    prediction_service.create_season_prediction(
        UserId(DEMO_USER_ID), [TeamId(t) for t in baseline_team_ids], now
    )

    body = client.get(f"/leaderboard/user/{DEMO_USER_ID}/details", params={"round": 5}).json()

    assert body["round_number"] == 5
    assert body["round_score"] == 196
    assert body["predictions"][3]["team_code"] == "TOT"
    assert body["predictions"][3]["hit"] == 2
    assert body["predictions"][3]["actual_position"] == 6
    assert len([p for p in body["predictions"] if p["is_perfect"]]) == 17


def test_user_details_score_current_prediction_without_stored_result(client, store, prediction_service, now, baseline_team_ids):
    demo = UserId(DEMO_USER_ID)
    prediction_service.create_season_prediction(demo, [TeamId(t) for t in list(reversed(baseline_team_ids))], now)
    season = prediction_service.season_id
    standings = store.round_standings.find_by_season_and_round(season, RoundNumber(18))
    store.round_standings.save(season, RoundNumber(19), standings)

    body = client.get(f"/leaderboard/user/{DEMO_USER_ID}/details").json()

    assert body["round_number"] == 19
    assert body["predictions"][0]["team_code"] == "SUN"
    assert body["round_score"] is not None


def test_user_details_not_found(client):
    assert client.get("/leaderboard/user/123e4567-e89b-12d3-a456-999999999999/details").status_code == 404
    assert client.get("/leaderboard/user/bad-id/details").status_code == 400
