# ligitabl/db/models/match.py
from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ligitabl.db.models.team import Team
from ligitabl.db.session import Base


class MatchRow(Base):
    __tablename__ = "matches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    season_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    round_number: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    home_team_id: Mapped[str] = mapped_column(String(36), ForeignKey("teams.id"), nullable=False)
    away_team_id: Mapped[str] = mapped_column(String(36), ForeignKey("teams.id"), nullable=False)
    home_score: Mapped[int] = mapped_column(Integer, nullable=True)
    away_score: Mapped[int] = mapped_column(Integer, nullable=True)
    kick_off: Mapped[str] = mapped_column(String, nullable=True)  # "Sat, Dec 28, 12:30"
    status: Mapped[str] = mapped_column(String, default="SCHEDULED")
    match_time: Mapped[str] = mapped_column(String, nullable=True)  # minuto si está en juego

    home_team: Mapped["Team"] = relationship("Team", foreign_keys=[home_team_id])
    away_team: Mapped["Team"] = relationship("Team", foreign_keys=[away_team_id])
