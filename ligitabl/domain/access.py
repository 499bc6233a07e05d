# ligitabl/domain/access.py
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union

from ligitabl.domain.cooldown import SwapCooldown
from ligitabl.domain.ids import UserId


class PredictionAccessMode(str, Enum):
    """Permisos del visitante sobre la predicción mostrada. Se calcula, no se guarda."""
    EDITABLE = "EDITABLE"
    READONLY_COOLDOWN = "READONLY_COOLDOWN"
    CAN_CREATE_ENTRY = "CAN_CREATE_ENTRY"
    READONLY_GUEST = "READONLY_GUEST"
    READONLY_VIEWING_OTHER = "READONLY_VIEWING_OTHER"
    READONLY_USER_NOT_FOUND = "READONLY_USER_NOT_FOUND"

    @property
    def can_swap(self) -> bool:
        return self is PredictionAccessMode.EDITABLE

    @property
    def can_create_entry(self) -> bool:
        return self is PredictionAccessMode.CAN_CREATE_ENTRY

    @property
    def is_readonly(self) -> bool:
        return self not in (PredictionAccessMode.EDITABLE, PredictionAccessMode.CAN_CREATE_ENTRY)


# --- Quién está mirando la predicción ---

@dataclass(frozen=True)
class Guest:
    pass


@dataclass(frozen=True)
class Authenticated:
    user_id: UserId


@dataclass(frozen=True)
class ViewingOther:
    target_id: UserId
    display_name: str
    viewer_id: UserId | None = None


@dataclass(frozen=True)
class UserNotFound:
    requested_id: str


UserContext = Union[Guest, Authenticated, ViewingOther, UserNotFound]


def resolve_access_mode(
    context: UserContext,
    has_prediction: bool,
    cooldown: SwapCooldown | None,
    is_current_round: bool,
    now: datetime,
) -> PredictionAccessMode:
    match context:
        case Guest():
            return PredictionAccessMode.READONLY_GUEST
        case Authenticated():
            if not is_current_round:
                # Las jornadas pasadas nunca son editables
                return PredictionAccessMode.READONLY_COOLDOWN
            if not has_prediction:
                return PredictionAccessMode.CAN_CREATE_ENTRY
            if cooldown is None or cooldown.can_swap(now):
                return PredictionAccessMode.EDITABLE
            return PredictionAccessMode.READONLY_COOLDOWN
        case ViewingOther():
            return PredictionAccessMode.READONLY_VIEWING_OTHER
        case UserNotFound():
            return PredictionAccessMode.READONLY_USER_NOT_FOUND
    raise TypeError(f"Unknown user context: {context!r}")
