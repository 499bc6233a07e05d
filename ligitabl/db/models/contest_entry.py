# ligitabl/db/models/contest_entry.py
from datetime import datetime

from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ligitabl.db.session import Base


class MainContestEntryRow(Base):
    __tablename__ = "main_contest_entries"
    __table_args__ = (
        UniqueConstraint("user_id", "contest_id", name="uq_user_contest"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    contest_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    season_prediction_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("season_predictions.id"), nullable=False
    )
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
