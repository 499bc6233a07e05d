from conftest import register
from ligitabl.scripts.seed_data import DEMO_USER_EMAIL, DEMO_USER_ID, DEMO_USER_PASSWORD, TEAM_IDS


def create_prediction(client, headers, team_ids):
    res = client.post("/seasonprediction", json={"team_ids": team_ids}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


def test_guest_sees_latest_round_standings(client):
    res = client.get("/seasonprediction")
    assert res.status_code == 200
    body = res.json()
    assert body["source"] == "ROUND_STANDINGS"
    assert body["id"] is None
    assert len(body["rankings"]) == 20


def test_create_prediction_then_view_is_editable(client, auth, baseline_team_ids):
    headers, user_id = auth

    body = create_prediction(client, headers, baseline_team_ids)
    assert body["user_id"] == user_id
    assert body["source"] == "USER_PREDICTION"
    assert body["rankings"][0]["team_code"] == "MCI"

    view = client.get("/predictions/user/me", headers=headers).json()
    assert view["source"] == "USER_PREDICTION"
    assert view["access_mode"] == "EDITABLE"
    assert view["can_swap"] is True
    assert view["is_readonly"] is False
    assert view["swap_status"]["message"] == "You can make your first swap without waiting 24 hours"
    assert view["fixtures"]["LIV"][0]["display"] == "vs TOT (H)"
    assert view["standings"]["MCI"] == 1


def test_new_user_can_create_entry(client, auth):
    headers, _ = auth
    view = client.get("/predictions/user/me", headers=headers).json()
    assert view["access_mode"] == "CAN_CREATE_ENTRY"
    assert view["can_create_entry"] is True
    assert view["message"] == "Arrange teams and submit to join the competition"


def test_create_twice_returns_409(client, auth, baseline_team_ids):
    headers, _ = auth
    create_prediction(client, headers, baseline_team_ids)

    res = client.post("/seasonprediction", json={"team_ids": baseline_team_ids}, headers=headers)

    assert res.status_code == 409
    assert res.json()["detail"]["type"] == "CONFLICT"


def test_create_with_wrong_team_count_returns_400(client, auth, baseline_team_ids):
    headers, _ = auth
    res = client.post("/seasonprediction", json={"team_ids": baseline_team_ids[:19]}, headers=headers)
    assert res.status_code == 400
    assert res.json()["detail"]["type"] == "VALIDATION"


def test_create_requires_token(client, baseline_team_ids):
    res = client.post("/seasonprediction", json={"team_ids": baseline_team_ids})
    assert res.status_code == 401


def test_swap_uses_bonus_then_cooldown(client, auth, baseline_team_ids):
    headers, _ = auth
    create_prediction(client, headers, baseline_team_ids)

    res = client.post("/seasonprediction/swap", json={
        "team_a_id": baseline_team_ids[4],
        "team_b_id": baseline_team_ids[8],
        "team_a_position": 5,
        "team_b_position": 9,
    }, headers=headers)
    assert res.status_code == 200, res.text
    positions = {r["team_code"]: r["position"] for r in res.json()["rankings"]}
    assert positions["TOT"] == 9
    assert positions["WHU"] == 5

    status = client.get("/predictions/me/swap-status", headers=headers).json()
    assert status["can_swap"] is False
    assert status["message"].startswith("Cooldown active.")
    assert status["hours_remaining"] > 23

    view = client.get("/predictions/user/me", headers=headers).json()
    assert view["access_mode"] == "READONLY_COOLDOWN"

    again = client.post("/predictions/swap", json={"team_a": "MCI", "team_b": "ARS"}, headers=headers)
    assert again.status_code == 422
    assert again.json()["detail"]["type"] == "BUSINESS_RULE"


def test_swap_with_stale_positions_returns_422(client, auth, baseline_team_ids):
    headers, _ = auth
    create_prediction(client, headers, baseline_team_ids)

    res = client.post("/seasonprediction/swap", json={
        "team_a_id": baseline_team_ids[0],
        "team_b_id": baseline_team_ids[1],
        "team_a_position": 2,
    }, headers=headers)

    assert res.status_code == 422
    assert "position mismatch" in res.json()["detail"]["message"]


def test_swap_without_prediction_returns_404(client, auth):
    headers, _ = auth
    res = client.post("/predictions/swap", json={"team_a": "MCI", "team_b": "ARS"}, headers=headers)
    assert res.status_code == 404


def test_swap_by_code_returns_rankings(client, auth, baseline_team_ids):
    headers, _ = auth
    create_prediction(client, headers, baseline_team_ids)

    res = client.post("/predictions/swap", json={"team_a": "mci", "team_b": "SUN"}, headers=headers)

    assert res.status_code == 200
    rankings = res.json()
    assert rankings[0]["team_code"] == "SUN"
    assert rankings[19]["team_code"] == "MCI"


def test_guest_view_is_readonly(client):
    view = client.get("/predictions/user/guest").json()
    assert view["access_mode"] == "READONLY_GUEST"
    assert view["source"] == "ROUND_STANDINGS"
    assert view["swap_status"] is None
    assert view["message"] == "Log in to create your prediction"


def test_me_without_token_is_guest(client):
    view = client.get("/predictions/user/me").json()
    assert view["access_mode"] == "READONLY_GUEST"


def test_unknown_and_malformed_users_are_not_found(client):
    for user_id in ("123e4567-e89b-12d3-a456-999999999999", "not-a-uuid"):
        res = client.get(f"/predictions/user/{user_id}")
        assert res.status_code == 200
        view = res.json()
        assert view["access_mode"] == "READONLY_USER_NOT_FOUND"
        assert view["message"] == "User not found"
        assert view["source"] == "ROUND_STANDINGS"


def test_viewing_another_user(client, auth, baseline_team_ids):
    headers, user_id = auth
    create_prediction(client, headers, list(reversed(baseline_team_ids)))
    other_headers, _ = register(client, email="other@example.com", display_name="Other Player")

    view = client.get(f"/predictions/user/{user_id}", headers=other_headers).json()

    assert view["access_mode"] == "READONLY_VIEWING_OTHER"
    assert view["source"] == "USER_PREDICTION"
    assert view["target_display_name"] == "Player One"
    assert view["message"] == "Viewing Player One's prediction"
    assert view["rankings"][0]["team_code"] == "SUN"


def test_viewing_own_id_is_authenticated(client, auth):
    headers, user_id = auth
    view = client.get(f"/predictions/user/{user_id}", headers=headers).json()
    assert view["access_mode"] == "CAN_CREATE_ENTRY"


def test_past_round_is_scored_against_that_round(client, auth, baseline_team_ids):
    headers, _ = auth
    create_prediction(client, headers, baseline_team_ids)

    view = client.get("/predictions/user/me", params={"round": 5}, headers=headers).json()

    assert view["viewing_round"] == 5
    assert view["current_round"] == 19
    assert view["round_state"] == "COMPLETED"
    assert view["access_mode"] == "READONLY_COOLDOWN"
    assert view["total_hits"] == 2
    assert view["round_score"] == 198
    rows = {r["team_code"]: r for r in view["rankings"]}
    assert rows["TOT"]["hit"] == 1
    assert rows["TOT"]["actual_position"] == 6
    assert rows["MCI"]["hit"] == 0


def test_out_of_range_round_falls_back_to_current(client):
    for requested in (0, 25, 99):
        view = client.get("/predictions/user/guest", params={"round": requested}).json()
        assert view["viewing_round"] == 19


def test_order_creates_then_limits_changes(client, auth, baseline_codes):
    headers, _ = auth

    created = client.post("/predictions/order", json={"team_codes": baseline_codes}, headers=headers)
    assert created.status_code == 200
    assert created.json()["message"] == "Prediction created successfully"

    order = list(baseline_codes)
    order[0], order[1] = order[1], order[0]
    updated = client.post("/predictions/order", json={"team_codes": order}, headers=headers).json()
    assert updated["changed"] is True
    assert updated["rankings"][0]["team_code"] == "ARS"

    blocked = client.post("/predictions/order", json={"team_codes": baseline_codes}, headers=headers)
    assert blocked.status_code == 422


def test_order_with_duplicate_codes_returns_400(client, auth, baseline_codes):
    headers, _ = auth
    codes = baseline_codes[:19] + ["MCI"]
    res = client.post("/predictions/order", json={"team_codes": codes}, headers=headers)
    assert res.status_code == 400


def test_demo_reset_restores_baseline(client, auth, baseline_team_ids):
    headers, _ = auth
    create_prediction(client, headers, list(reversed(baseline_team_ids)))

    res = client.post("/predictions/demo-reset", headers=headers)

    assert res.status_code == 200
    assert res.json()["message"] == "Demo reset! Start from initial prediction again."
    body = client.get("/seasonprediction", headers=headers).json()
    assert [r["team_id"] for r in body["rankings"]] == baseline_team_ids
    status = client.get("/predictions/me/swap-status", headers=headers).json()
    assert status["can_swap"] is True
    assert status["last_swap_at"] == "Never"


def test_team_ids_are_seeded_uuids():
    assert TEAM_IDS["MCI"] == "00000000-0000-0000-0000-000000000001"
    assert TEAM_IDS["SUN"] == "00000000-0000-0000-0000-000000000020"


def login_demo(client):
    res = client.post("/auth/login", json={"email": DEMO_USER_EMAIL, "password": DEMO_USER_PASSWORD})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


def test_past_round_shows_stored_round_result(client):
    view = client.get("/predictions/user/me", params={"round": 5}, headers=login_demo(client)).json()

    assert view["source"] == "USER_PREDICTION"
    assert view["access_mode"] == "READONLY_COOLDOWN"
    assert view["message"] == "Viewing Gameweek 5 results"
    assert view["round_score"] == 196
    assert view["total_hits"] == 4
    assert view["zeroes_count"] == 17
    assert view["swap_count"] == 2
    tot = view["rankings"][3]
    assert (tot["team_code"], tot["hit"], tot["actual_position"]) == ("TOT", 2, 6)
    # Tabla de esa jornada, no de la actual
    assert view["standings"]["CHE"] == 5
    assert view["points"]["MCI"] == 9


def test_stored_round_result_is_shown_when_viewing_other_user(client):
    view = client.get(f"/predictions/user/{DEMO_USER_ID}", params={"round": 1}).json()

    assert view["access_mode"] == "READONLY_VIEWING_OTHER"
    assert view["source"] == "USER_PREDICTION"
    assert view["message"] == "Viewing Deejay Wagz's Gameweek 1 result"
    assert view["round_score"] == 198
    assert view["rankings"][0]["team_code"] == "MCI"
    assert view["rankings"][0]["actual_position"] == 2


def test_unknown_season_is_not_found(client):
    res = client.get("/seasonprediction", params={"season_id": "123e4567-e89b-12d3-a456-999999999999"})
    assert res.status_code == 404
    assert res.json()["detail"]["type"] == "NOT_FOUND"


def test_resubmitting_baseline_after_reset_marks_initial_prediction(client, auth, baseline_team_ids, baseline_codes):
    headers, _ = auth
    create_prediction(client, headers, list(reversed(baseline_team_ids)))
    client.post("/predictions/demo-reset", headers=headers)

    res = client.post("/predictions/order", json={"team_codes": baseline_codes}, headers=headers)

    assert res.status_code == 200
    status = client.get("/predictions/me/swap-status", headers=headers).json()
    assert status["last_swap_at"] != "Never"
    assert status["message"] == "You can make your first swap without waiting 24 hours"
