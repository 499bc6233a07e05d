from datetime import datetime, timezone

import pytest

from ligitabl.domain.access import (
    Authenticated, Guest, PredictionAccessMode, UserNotFound, ViewingOther, resolve_access_mode,
)
from ligitabl.domain.cooldown import SwapCooldown
from ligitabl.domain.errors import BusinessRuleViolation, DomainValidationError
from ligitabl.domain.ids import RoundNumber, SeasonId, TeamId, UserId
from ligitabl.domain.ranking import (
    RankingSource, SwapPair, TeamRanking, moved_teams, rankings_from_order, validate_rankings,
)
from ligitabl.domain.season_prediction import SeasonPrediction
from ligitabl.domain.standings import Fixture, MatchStatus, Phase, TeamStanding

NOW = datetime(2025, 12, 28, 12, 0, tzinfo=timezone.utc)
TEAM_IDS = [TeamId(f"00000000-0000-0000-0000-{n:012d}") for n in range(1, 21)]
SEASON = SeasonId("550e8400-e29b-41d4-a716-446655440000")


def make_prediction():
    return SeasonPrediction.create(UserId.generate(), SEASON, RoundNumber(19), TEAM_IDS, NOW)


# --- Identificadores ---

def test_ids_have_value_equality_and_normalise_case():
    assert UserId("550E8400-E29B-41D4-A716-446655440000") == UserId("550e8400-e29b-41d4-a716-446655440000")


def test_ids_of_different_kinds_are_not_equal():
    value = "550e8400-e29b-41d4-a716-446655440000"
    assert UserId(value) != TeamId(value)


@pytest.mark.parametrize("raw", ["", "   ", "not-a-uuid", None])
def test_invalid_ids_are_rejected(raw):
    with pytest.raises(DomainValidationError):
        UserId(raw)


def test_round_number_bounds_and_navigation():
    assert RoundNumber(1).next() == RoundNumber(2)
    assert RoundNumber(38).previous() == RoundNumber(37)
    with pytest.raises(DomainValidationError):
        RoundNumber(0)
    with pytest.raises(DomainValidationError):
        RoundNumber(39)
    with pytest.raises(DomainValidationError):
        RoundNumber(38).next()
    with pytest.raises(DomainValidationError):
        RoundNumber(1).previous()


# --- Rankings ---

def test_rankings_from_order_assigns_positions_one_to_twenty():
    rankings = rankings_from_order(TEAM_IDS)
    assert [r.position for r in rankings] == list(range(1, 21))
    assert rankings[0].team_id == TEAM_IDS[0]


def test_ranking_with_wrong_size_is_rejected():
    with pytest.raises(DomainValidationError):
        rankings_from_order(TEAM_IDS[:19])


def test_ranking_with_duplicate_team_is_rejected():
    with pytest.raises(DomainValidationError):
        rankings_from_order(TEAM_IDS[:19] + [TEAM_IDS[0]])


def test_ranking_with_duplicate_position_is_rejected():
    rankings = [TeamRanking(t, i) for i, t in enumerate(TEAM_IDS, start=1)]
    rankings[-1] = TeamRanking(TEAM_IDS[-1], 1)
    with pytest.raises(DomainValidationError):
        validate_rankings(rankings)


def test_team_ranking_with_position_returns_new_value():
    ranking = TeamRanking(TEAM_IDS[0], 3)
    moved = ranking.with_position(7)
    assert moved.position == 7
    assert ranking.position == 3


def test_team_ranking_position_out_of_range():
    with pytest.raises(DomainValidationError):
        TeamRanking(TEAM_IDS[0], 21)


def test_swap_pair_rejects_same_team():
    with pytest.raises(DomainValidationError):
        SwapPair(TEAM_IDS[0], TEAM_IDS[0])


def test_moved_teams_counts_changed_positions():
    order = list(TEAM_IDS)
    order[0], order[1] = order[1], order[0]
    assert set(moved_teams(rankings_from_order(TEAM_IDS), rankings_from_order(order))) == {TEAM_IDS[0], TEAM_IDS[1]}


def test_ranking_source_display_names():
    assert RankingSource.USER_PREDICTION.display_name == "Your Prediction"
    assert RankingSource.ROUND_STANDINGS.display_name == "Current Round Standings"
    assert RankingSource.SEASON_BASELINE.display_name == "Season Baseline"


# --- SeasonPrediction ---

def test_swap_exchanges_two_positions_and_keeps_the_rest():
    prediction = make_prediction()
    team_a, team_b = TEAM_IDS[2], TEAM_IDS[6]  # posiciones 3 y 7
    later = datetime(2025, 12, 29, tzinfo=timezone.utc)

    swapped = prediction.swap_teams(SwapPair(team_a, team_b), RoundNumber(19), later)

    assert swapped.position_of(team_a) == 7
    assert swapped.position_of(team_b) == 3
    for team in TEAM_IDS:
        if team not in (team_a, team_b):
            assert swapped.position_of(team) == prediction.position_of(team)
    assert swapped.id == prediction.id
    assert swapped.created_at == prediction.created_at
    assert swapped.updated_at == later


def test_swap_does_not_mutate_original_prediction():
    prediction = make_prediction()
    before = prediction.rankings
    prediction.swap_teams(SwapPair(TEAM_IDS[2], TEAM_IDS[6]), RoundNumber(19), NOW)
    assert prediction.rankings == before
    assert prediction.position_of(TEAM_IDS[2]) == 3


def test_swap_with_unknown_team_is_business_rule_error():
    prediction = make_prediction()
    with pytest.raises(BusinessRuleViolation):
        prediction.swap_teams(SwapPair(TEAM_IDS[0], TeamId.generate()), RoundNumber(19), NOW)


# --- Modo de acceso ---

@pytest.mark.parametrize("has_prediction", [True, False])
@pytest.mark.parametrize("is_current_round", [True, False])
def test_guest_is_always_readonly_guest(has_prediction, is_current_round):
    mode = resolve_access_mode(Guest(), has_prediction, SwapCooldown.initial(), is_current_round, NOW)
    assert mode is PredictionAccessMode.READONLY_GUEST


def test_authenticated_with_prediction_in_historical_round_is_readonly():
    cooldown = SwapCooldown.initial()  # permitiría cambiar
    mode = resolve_access_mode(Authenticated(UserId.generate()), True, cooldown, False, NOW)
    assert mode is PredictionAccessMode.READONLY_COOLDOWN


def test_authenticated_with_prediction_current_round_follows_cooldown():
    user = Authenticated(UserId.generate())
    bonus = SwapCooldown.initial().record_swap(NOW)
    used = bonus.record_swap(NOW)
    assert resolve_access_mode(user, True, bonus, True, NOW) is PredictionAccessMode.EDITABLE
    assert resolve_access_mode(user, True, used, True, NOW) is PredictionAccessMode.READONLY_COOLDOWN


def test_authenticated_without_prediction():
    user = Authenticated(UserId.generate())
    assert resolve_access_mode(user, False, None, True, NOW) is PredictionAccessMode.CAN_CREATE_ENTRY
    assert resolve_access_mode(user, False, None, False, NOW) is PredictionAccessMode.READONLY_COOLDOWN


def test_viewing_other_and_user_not_found():
    other = ViewingOther(target_id=UserId.generate(), display_name="Alice")
    assert resolve_access_mode(other, True, SwapCooldown.initial(), True, NOW) is PredictionAccessMode.READONLY_VIEWING_OTHER
    assert resolve_access_mode(UserNotFound("nope"), False, None, True, NOW) is PredictionAccessMode.READONLY_USER_NOT_FOUND


def test_only_editable_and_can_create_entry_are_writable():
    writable = {m for m in PredictionAccessMode if not m.is_readonly}
    assert writable == {PredictionAccessMode.EDITABLE, PredictionAccessMode.CAN_CREATE_ENTRY}
    assert [m for m in PredictionAccessMode if m.can_swap] == [PredictionAccessMode.EDITABLE]


# --- Clasificación y partidos ---

def test_team_standing_requires_consistent_results():
    with pytest.raises(DomainValidationError):
        TeamStanding(1, "MCI", "Manchester City", None, 19, 14, 3, 1, 45, 42, 15, 27)


def test_unknown_match_status_and_phase_fall_back():
    assert MatchStatus.parse("abandoned") is MatchStatus.SCHEDULED
    assert MatchStatus.parse("live") is MatchStatus.LIVE
    assert Phase.parse("q2") is Phase.Q2
    assert Phase.parse(None) is Phase.FS
    assert Phase.parse("XX") is Phase.FS


def test_fixture_display():
    assert Fixture("ARS", True).display == "vs ARS (H)"
    assert Fixture("MCI", False).display == "vs MCI (A)"
