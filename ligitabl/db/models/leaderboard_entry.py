# ligitabl/db/models/leaderboard_entry.py
from sqlalchemy import String, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ligitabl.db.session import Base


class LeaderboardEntryRow(Base):
    __tablename__ = "leaderboard_entries"
    __table_args__ = (
        UniqueConstraint("phase", "user_id", name="uq_phase_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    phase: Mapped[str] = mapped_column(String(2), index=True, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    # Sin FK: la clasificación incluye jugadores que no tienen cuenta en esta demo
    user_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String, nullable=False)
    total_score: Mapped[int] = mapped_column(Integer, default=0)
    round_score: Mapped[int] = mapped_column(Integer, default=0)
    total_zeroes: Mapped[int] = mapped_column(Integer, default=0)
    total_swaps: Mapped[int] = mapped_column(Integer, default=0)
    total_points: Mapped[int] = mapped_column(Integer, default=0)
    movement: Mapped[int] = mapped_column(Integer, default=0)
