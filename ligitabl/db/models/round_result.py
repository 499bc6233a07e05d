from datetime import datetime
from typing import List

from sqlalchemy import String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ligitabl.db.session import Base


class RoundResultRow(Base):
    """Resultado puntuado de la predicción de un usuario en una jornada cerrada."""
    __tablename__ = "round_results"
    __table_args__ = (
        UniqueConstraint("user_id", "season_id", "round_number", name="uq_user_season_round"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    season_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    round_number: Mapped[int] = mapped_column(Integer, nullable=False)
    total_score: Mapped[int] = mapped_column(Integer, default=0)
    zeroes_count: Mapped[int] = mapped_column(Integer, default=0)
    swap_count: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    rankings: Mapped[List["RoundResultRank"]] = relationship(
        "RoundResultRank",
        back_populates="result",
        cascade="all, delete-orphan",
        order_by="RoundResultRank.predicted_position",
    )


class RoundResultRank(Base):
    __tablename__ = "round_result_ranks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    result_id: Mapped[int] = mapped_column(Integer, ForeignKey("round_results.id"), index=True, nullable=False)
    team_id: Mapped[str] = mapped_column(String(36), ForeignKey("teams.id"), nullable=False)
    predicted_position: Mapped[int] = mapped_column(Integer, nullable=False)
    standings_position: Mapped[int] = mapped_column(Integer, nullable=False)
    hit: Mapped[int] = mapped_column(Integer, nullable=False)

    result: Mapped["RoundResultRow"] = relationship("RoundResultRow", back_populates="rankings")
