# ligitabl/db/models/team.py
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ligitabl.db.session import Base


class Team(Base):
    __tablename__ = "teams"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    code: Mapped[str] = mapped_column(String(3), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    crest_url: Mapped[str] = mapped_column(String, nullable=True)
