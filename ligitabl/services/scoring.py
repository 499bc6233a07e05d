# ligitabl/services/scoring.py
# Puntuación de una predicción contra la clasificación real de una jornada.
# Un "hit" es la distancia entre la posición predicha y la real (0 = clavado).

from ligitabl.domain.round_result import ResultTeamRank, RoundResult

MAX_ROUND_SCORE = 200


def build_actual_positions_map(round_standings):
    """
    Devuelve: {team_id: position}
    """
    return {
        r.team_id: r.position
        for r in round_standings
    }


def calculate_hits(prediction_rankings, round_standings):
    """
    Devuelve: {team_id: hit}. Los equipos sin posición real se ignoran.
    """
    actual_map = build_actual_positions_map(round_standings)
    hits = {}

    for pr in prediction_rankings:
        actual = actual_map.get(pr.team_id)
        if actual is None:
            continue
        hits[pr.team_id] = abs(pr.position - actual)

    return hits


def calculate_round_score(hits):
    # 200 menos la suma de hits; 20 equipos clavados dan la puntuación máxima
    return MAX_ROUND_SCORE - sum(hits.values())


def count_zeroes(hits):
    return sum(1 for h in hits.values() if h == 0)


def build_round_result(user_id, season_id, round_number, prediction_rankings, round_standings, swap_count, now):
    """
    Puntúa la predicción contra la clasificación de la jornada y la congela en un RoundResult.
    """
    actual_map = build_actual_positions_map(round_standings)
    hits = calculate_hits(prediction_rankings, round_standings)

    rankings = [
        ResultTeamRank(
            team_id=pr.team_id,
            predicted_position=pr.position,
            standings_position=actual_map[pr.team_id],
            hit=hits[pr.team_id],
        )
        for pr in prediction_rankings
        if pr.team_id in hits
    ]

    return RoundResult(
        user_id=user_id,
        season_id=season_id,
        round_number=round_number,
        rankings=tuple(rankings),
        total_score=calculate_round_score(hits),
        zeroes_count=count_zeroes(hits),
        swap_count=swap_count,
        created_at=now,
    )
