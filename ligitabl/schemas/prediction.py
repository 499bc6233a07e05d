# ligitabl/schemas/prediction.py
from datetime import datetime

from pydantic import BaseModel, Field


# --- Peticiones ---

class CreateSeasonPredictionRequest(BaseModel):
    team_ids: list[str] = Field(description="20 team ids, first one is predicted champion")


class SwapTeamsRequest(BaseModel):
    team_a_id: str
    team_b_id: str
    team_a_position: int | None = None
    team_b_position: int | None = None


class SwapByCodeRequest(BaseModel):
    team_a: str
    team_b: str


class UpdateOrderRequest(BaseModel):
    team_codes: list[str]


# --- Respuestas ---

class RankingOut(BaseModel):
    team_id: str
    position: int
    team_code: str | None = None
    team_name: str | None = None
    crest_url: str | None = None

    @classmethod
    def from_rankings(cls, rankings, teams) -> list["RankingOut"]:
        """rankings de dominio + {TeamId: Team} -> filas con código, nombre y escudo."""
        out = []
        for r in rankings:
            team = teams.get(r.team_id)
            out.append(cls(
                team_id=str(r.team_id),
                position=r.position,
                team_code=team.code if team else None,
                team_name=team.name if team else None,
                crest_url=team.crest_url if team else None,
            ))
        return out


class SeasonPredictionOut(BaseModel):
    id: str | None = None
    user_id: str | None = None
    season_id: str
    at_round: int | None = None
    source: str
    source_display_name: str
    rankings: list[RankingOut]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SwapStatusOut(BaseModel):
    round_status: str
    can_swap: bool
    last_swap_at: str
    next_swap_at: str
    hours_remaining: float
    message: str

    class Config:
        from_attributes = True


class FixtureOut(BaseModel):
    opponent: str
    is_home: bool
    display: str


class PredictionRowOut(BaseModel):
    position: int
    team_id: str
    team_code: str
    team_name: str
    crest_url: str | None = None
    hit: int | None = None
    actual_position: int | None = None

    class Config:
        from_attributes = True


class UserPredictionOut(BaseModel):
    rankings: list[PredictionRowOut]
    source: str
    access_mode: str
    can_swap: bool
    can_create_entry: bool
    is_readonly: bool
    message: str | None = None
    swap_status: SwapStatusOut | None = None
    fixtures: dict[str, list[FixtureOut]]
    standings: dict[str, int]
    points: dict[str, int]
    current_round: int
    viewing_round: int
    round_state: str
    target_display_name: str | None = None
    round_score: int | None = None
    total_hits: int | None = None
    zeroes_count: int | None = None
    swap_count: int | None = None


class OrderUpdateOut(BaseModel):
    success: bool
    changed: bool
    message: str
    rankings: list[RankingOut]


class ResetOut(BaseModel):
    success: bool
    message: str
