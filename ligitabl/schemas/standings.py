# ligitabl/schemas/standings.py
from pydantic import BaseModel


class TeamStandingOut(BaseModel):
    position: int
    team_code: str
    team_name: str
    crest_url: str | None = None
    played: int
    won: int
    drawn: int
    lost: int
    points: int
    goals_for: int
    goals_against: int
    goal_difference: int

    class Config:
        from_attributes = True


class StandingsOut(BaseModel):
    season_id: str
    round_number: int
    standings: list[TeamStandingOut]


class MatchOut(BaseModel):
    home_team: str
    away_team: str
    home_score: int | None = None
    away_score: int | None = None
    kick_off: str | None = None
    status: str
    match_time: str | None = None


class MatchesOut(BaseModel):
    season_id: str
    round_number: int
    matches: list[MatchOut]
    live_count: int
    finished_count: int
    scheduled_count: int
    has_live_matches: bool
    all_matches_finished: bool


class LeaderboardEntryOut(BaseModel):
    position: int
    user_id: str
    display_name: str
    total_score: int
    round_score: int
    total_zeroes: int
    total_swaps: int
    total_points: int
    movement: int

    class Config:
        from_attributes = True


class LeaderboardOut(BaseModel):
    phase: str
    phase_display_name: str
    entries: list[LeaderboardEntryOut]
    page: int
    page_size: int
    total_entries: int
    total_pages: int
    has_next: bool
    has_previous: bool
    current_user_entry: LeaderboardEntryOut | None = None
    current_user_on_page: bool


class PredictionDetailOut(BaseModel):
    position: int
    team_code: str
    team_name: str
    crest_url: str | None = None
    hit: int | None = None
    actual_position: int | None = None
    is_perfect: bool
    is_close: bool

    class Config:
        from_attributes = True


class UserDetailsOut(BaseModel):
    entry: LeaderboardEntryOut
    round_number: int
    round_score: int | None = None
    predictions: list[PredictionDetailOut]
