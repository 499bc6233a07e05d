# ligitabl/services/predictions.py
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable

from ligitabl.domain.contest import MainContestEntry
from ligitabl.domain.cooldown import SwapCooldown
from ligitabl.domain.errors import (
    BusinessRuleViolation, ConflictError, DomainValidationError, NotFoundError,
)
from ligitabl.domain.ids import ContestId, RoundNumber, SeasonId, TeamId, UserId
from ligitabl.domain.ranking import SwapPair, moved_teams, rankings_from_order
from ligitabl.domain.season_prediction import SeasonPrediction
from ligitabl.repositories.store import Store
from ligitabl.services.locks import user_lock
from ligitabl.services.rankings import RankingResolver, ResolvedRankings
from ligitabl.services.result import Err, Ok, Result, T, catching

logger = logging.getLogger(__name__)

RESET_MESSAGE = "Demo reset! Start from initial prediction again."


@dataclass(frozen=True)
class SwapStatus:
    round_status: str
    can_swap: bool
    last_swap_at: str
    next_swap_at: str
    hours_remaining: float
    message: str


@dataclass(frozen=True)
class OrderUpdateResult:
    prediction: SeasonPrediction
    changed: bool
    message: str


@dataclass(frozen=True)
class ResetResult:
    success: bool
    message: str


def build_swap_status(cooldown: SwapCooldown, now: datetime, round_status: str = "OPEN") -> SwapStatus:
    can_swap = cooldown.can_swap(now)
    remaining = cooldown.remaining(now)
    hours, rest = divmod(int(remaining.total_seconds()), 3600)
    next_at = cooldown.next_swap_at()

    return SwapStatus(
        round_status=round_status,
        can_swap=can_swap,
        last_swap_at=cooldown.last_swap_at.strftime("%b %d, %Y %H:%M") if cooldown.last_swap_at else "Never",
        next_swap_at="Now" if can_swap or next_at is None else next_at.strftime("%b %d, %Y %H:%M"),
        hours_remaining=round(hours + (rest // 60) / 60.0, 2),
        message=cooldown.status_message(now),
    )


class PredictionService:
    """Casos de uso sobre la predicción de temporada.

    Todos devuelven Ok/Err. Las secuencias leer-comprobar-escribir van
    dentro del lock del usuario.
    """

    def __init__(
        self,
        store: Store,
        season_id: SeasonId,
        contest_id: ContestId,
        current_round: RoundNumber,
    ):
        self.store = store
        self.season_id = season_id
        self.contest_id = contest_id
        self.current_round = current_round
        self.resolver = RankingResolver(store.predictions, store.round_standings, store.baselines, season_id)

    # --- Helpers ---

    def _run(self, action: str, user_id: UserId, operation: Callable[[], T]) -> Result[T]:
        result = catching(operation)
        if isinstance(result, Err):
            logger.warning(
                "%s rejected for user %s: %s (%s)",
                action, user_id, result.error.message, result.error.type.value,
            )
        return result

    def _known_team_ids(self) -> set[TeamId]:
        return {team.id for team in self.store.teams.find_all()}

    def _team_ids_from_codes(self, team_codes: Iterable[str]) -> list[TeamId]:
        teams = self.store.teams.find_by_codes()
        team_ids = []
        for code in team_codes:
            team = teams.get(str(code).strip().upper())
            if team is None:
                raise DomainValidationError(f"Unknown team code: {code}")
            team_ids.append(team.id)
        return team_ids

    def _advance_cooldown(self, prediction: SeasonPrediction, cooldown: SwapCooldown, now: datetime) -> SwapCooldown:
        # El primer envío (también tras un reset de la demo) inscribe al usuario en el concurso
        was_initial = not cooldown.initial_prediction_made
        updated = self.store.cooldowns.save(prediction.user_id, cooldown.record_swap(now))
        if was_initial:
            self._ensure_contest_entry(prediction, now)
        return updated

    def _ensure_contest_entry(self, prediction: SeasonPrediction, now: datetime) -> None:
        if self.store.contest_entries.exists_by_user_and_contest(prediction.user_id, self.contest_id):
            return
        entry = MainContestEntry.join(prediction.user_id, self.contest_id, prediction.id, now)
        self.store.contest_entries.save(entry)
        logger.info("User %s joined contest %s", prediction.user_id, self.contest_id)

    def _require_prediction(self, user_id: UserId, season_id: SeasonId) -> SeasonPrediction:
        prediction = self.store.predictions.find_by_user_and_season(user_id, season_id)
        if prediction is None:
            raise NotFoundError(
                f"Season prediction not found for user: {user_id}",
                {"user_id": str(user_id), "season_id": str(season_id)},
            )
        return prediction

    def _require_cooldown_open(self, user_id: UserId, now: datetime) -> SwapCooldown:
        cooldown = self.store.cooldowns.get_or_initial(user_id)
        if not cooldown.can_swap(now):
            raise BusinessRuleViolation(
                cooldown.status_message(now),
                {"next_swap_at": cooldown.next_swap_at().isoformat()},
            )
        return cooldown

    # --- Consultas ---

    def get_season_prediction(self, user_id: UserId | None, season_id: SeasonId | None = None) -> Result[ResolvedRankings]:
        return self.resolver.resolve(user_id, season_id or self.season_id)

    def get_swap_status(self, user_id: UserId, now: datetime) -> Result[SwapStatus]:
        return Ok(build_swap_status(self.store.cooldowns.get_or_initial(user_id), now))

    # --- Comandos ---

    def create_season_prediction(
        self,
        user_id: UserId,
        team_ids: Iterable,
        now: datetime,
        season_id: SeasonId | None = None,
    ) -> Result[SeasonPrediction]:
        season_id = season_id or self.season_id

        def create() -> SeasonPrediction:
            with user_lock(user_id.value):
                return self._create(user_id, season_id, list(team_ids), now)

        return self._run("Create prediction", user_id, create)

    def _create(self, user_id: UserId, season_id: SeasonId, team_ids: list, now: datetime) -> SeasonPrediction:
        if self.store.predictions.exists_by_user_and_season(user_id, season_id):
            raise ConflictError(
                "Season prediction already exists",
                {"user_id": str(user_id), "season_id": str(season_id)},
            )

        prediction = SeasonPrediction.create(user_id, season_id, self.current_round, team_ids, now)
        known = self._known_team_ids()
        unknown = [str(r.team_id) for r in prediction.rankings if r.team_id not in known]
        if unknown:
            raise DomainValidationError(f"Unknown teams: {', '.join(unknown)}", {"team_ids": unknown})

        self.store.predictions.save(prediction)
        self._advance_cooldown(prediction, SwapCooldown.initial(self.store.cooldowns.window), now)
        logger.info("Season prediction %s created for user %s", prediction.id, user_id)
        return prediction

    def swap_teams(
        self,
        user_id: UserId,
        team_a: TeamId,
        team_b: TeamId,
        now: datetime,
        position_a: int | None = None,
        position_b: int | None = None,
        season_id: SeasonId | None = None,
    ) -> Result[SeasonPrediction]:
        season_id = season_id or self.season_id
        return self._run(
            "Swap", user_id,
            lambda: self._swap(user_id, season_id, SwapPair(team_a, team_b), now, position_a, position_b),
        )

    def swap_teams_by_code(self, user_id: UserId, code_a: str, code_b: str, now: datetime) -> Result[SeasonPrediction]:
        def swap() -> SeasonPrediction:
            teams = self.store.teams.find_by_codes()
            team_ids = []
            for code in (code_a, code_b):
                team = teams.get(code.strip().upper())
                if team is None:
                    raise BusinessRuleViolation(f"Team not found: {code}", {"team_code": code})
                team_ids.append(team.id)
            return self._swap(user_id, self.season_id, SwapPair(*team_ids), now)

        return self._run("Swap", user_id, swap)

    def _swap(
        self,
        user_id: UserId,
        season_id: SeasonId,
        pair: SwapPair,
        now: datetime,
        position_a: int | None = None,
        position_b: int | None = None,
    ) -> SeasonPrediction:
        with user_lock(user_id.value):
            prediction = self._require_prediction(user_id, season_id)
            cooldown = self._require_cooldown_open(user_id, now)

            # Comprobación optimista: las posiciones que cree el cliente deben coincidir
            for label, team_id, claimed in (("A", pair.team_a, position_a), ("B", pair.team_b, position_b)):
                actual = prediction.position_of(team_id)
                if actual is None:
                    raise BusinessRuleViolation(
                        f"Team {label} not found in prediction: {team_id}",
                        {"team_id": str(team_id)},
                    )
                if claimed is not None and claimed != actual:
                    raise BusinessRuleViolation(
                        f"Team {label} position mismatch. Expected: {claimed}, Actual: {actual}. "
                        "Another update may have occurred.",
                        {"team_id": str(team_id), "expected": claimed, "actual": actual},
                    )

            updated = prediction.swap_teams(pair, self.current_round, now)
            self.store.predictions.save(updated)
            self._advance_cooldown(updated, cooldown, now)

        logger.info("User %s swapped %s and %s", user_id, pair.team_a, pair.team_b)
        return updated

    def update_order(
        self,
        user_id: UserId,
        team_codes: Iterable[str],
        now: datetime,
        season_id: SeasonId | None = None,
    ) -> Result[OrderUpdateResult]:
        season_id = season_id or self.season_id

        def update() -> OrderUpdateResult:
            team_ids = self._team_ids_from_codes(team_codes)
            with user_lock(user_id.value):
                prediction = self.store.predictions.find_by_user_and_season(user_id, season_id)
                if prediction is None:
                    created = self._create(user_id, season_id, team_ids, now)
                    return OrderUpdateResult(created, True, "Prediction created successfully")

                cooldown = self._require_cooldown_open(user_id, now)
                proposed = rankings_from_order(team_ids)
                moved = moved_teams(prediction.rankings, proposed)

                if cooldown.initial_prediction_made and len(moved) > 2:
                    swaps_attempted = (len(moved) + 1) // 2
                    raise BusinessRuleViolation(
                        f"Only 1 swap allowed per period. You tried {swaps_attempted} swaps.",
                        {"moved_teams": len(moved)},
                    )
                # Tras un reset, enviar el mismo orden cuenta como la predicción inicial
                if not moved and cooldown.initial_prediction_made:
                    return OrderUpdateResult(prediction, False, "No changes to save")

                updated = prediction.reorder(team_ids, self.current_round, now)
                self.store.predictions.save(updated)
                self._advance_cooldown(updated, cooldown, now)

            logger.info("User %s updated prediction order (%d teams moved)", user_id, len(moved))
            return OrderUpdateResult(updated, True, "Prediction updated successfully")

        return self._run("Order update", user_id, update)

    def reset_demo(self, user_id: UserId, now: datetime, season_id: SeasonId | None = None) -> Result[ResetResult]:
        season_id = season_id or self.season_id

        def reset() -> ResetResult:
            with user_lock(user_id.value):
                prediction = self.store.predictions.find_by_user_and_season(user_id, season_id)
                if prediction is not None:
                    baseline = self.store.baselines.find_by_season(season_id)
                    if not baseline:
                        logger.error("Season baseline rankings missing for season %s", season_id)
                        raise BusinessRuleViolation(
                            f"Season baseline rankings not found for season: {season_id}. "
                            "This is a critical system invariant violation."
                        )
                    restored = prediction.reorder([r.team_id for r in baseline], self.current_round, now)
                    self.store.predictions.save(restored)

                cooldown = self.store.cooldowns.get_or_initial(user_id)
                self.store.cooldowns.save(user_id, cooldown.reset())

            logger.info("Demo state reset for user %s", user_id)
            return ResetResult(True, RESET_MESSAGE)

        return self._run("Demo reset", user_id, reset)
