# ligitabl/db/models/season_prediction.py
from datetime import datetime
from typing import List, TYPE_CHECKING

from sqlalchemy import String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ligitabl.db.session import Base

if TYPE_CHECKING:
    from ligitabl.db.models.user import User


class SeasonPredictionRow(Base):
    __tablename__ = "season_predictions"
    __table_args__ = (
        # Un usuario solo puede tener 1 predicción por temporada
        UniqueConstraint("user_id", "season_id", name="uq_user_season"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    season_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    at_round: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="season_predictions")
    rankings: Mapped[List["SeasonPredictionRanking"]] = relationship(
        "SeasonPredictionRanking",
        back_populates="prediction",
        cascade="all, delete-orphan",
        order_by="SeasonPredictionRanking.position",
    )


class SeasonPredictionRanking(Base):
    __tablename__ = "season_prediction_rankings"
    __table_args__ = (
        UniqueConstraint("prediction_id", "team_id", name="uq_prediction_team"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    prediction_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("season_predictions.id"), index=True, nullable=False
    )
    team_id: Mapped[str] = mapped_column(String(36), ForeignKey("teams.id"), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    prediction: Mapped["SeasonPredictionRow"] = relationship("SeasonPredictionRow", back_populates="rankings")
