# ligitabl/db/models/user.py
from datetime import datetime
from typing import List, TYPE_CHECKING

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from ligitabl.db.session import Base

if TYPE_CHECKING:
    from ligitabl.db.models.season_prediction import SeasonPredictionRow


class User(Base):
    __tablename__ = "users"

    # UUID en texto: es el UserId del dominio
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    season_predictions: Mapped[List["SeasonPredictionRow"]] = relationship(
        "SeasonPredictionRow", back_populates="user"
    )
