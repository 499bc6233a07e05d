# ligitabl/db/models/swap_cooldown.py
from datetime import datetime

from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from ligitabl.db.session import Base


class SwapCooldownRow(Base):
    __tablename__ = "swap_cooldowns"

    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), primary_key=True)
    last_swap_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)
    initial_prediction_made: Mapped[bool] = mapped_column(Boolean, default=False)
    swap_count: Mapped[int] = mapped_column(Integer, default=0)
