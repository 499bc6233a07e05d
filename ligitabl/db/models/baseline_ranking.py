# ligitabl/db/models/baseline_ranking.py
from sqlalchemy import String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ligitabl.db.session import Base


class BaselineRanking(Base):
    """Orden por defecto de la temporada. Debe existir siempre para la temporada activa."""
    __tablename__ = "baseline_rankings"
    __table_args__ = (
        UniqueConstraint("season_id", "team_id", name="uq_baseline_season_team"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    season_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    team_id: Mapped[str] = mapped_column(String(36), ForeignKey("teams.id"), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
