# ligitabl/domain/team.py
from dataclasses import dataclass

from ligitabl.domain.ids import TeamId


@dataclass(frozen=True)
class Team:
    id: TeamId
    code: str
    name: str
    crest_url: str | None = None
