# ligitabl/db/models/fixture.py
from sqlalchemy import String, Integer, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from ligitabl.db.session import Base


class FixtureRow(Base):
    __tablename__ = "fixtures"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    season_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    round_number: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    team_code: Mapped[str] = mapped_column(String(3), index=True, nullable=False)
    opponent_code: Mapped[str] = mapped_column(String(3), nullable=False)
    is_home: Mapped[bool] = mapped_column(Boolean, default=True)
