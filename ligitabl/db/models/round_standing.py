# ligitabl/db/models/round_standing.py
from sqlalchemy import String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ligitabl.db.session import Base


class RoundStanding(Base):
    """Clasificación real al terminar una jornada (solo posición por equipo)."""
    __tablename__ = "round_standings"
    __table_args__ = (
        UniqueConstraint("season_id", "round_number", "team_id", name="uq_round_team"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    season_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    round_number: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    team_id: Mapped[str] = mapped_column(String(36), ForeignKey("teams.id"), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
