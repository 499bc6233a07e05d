# ligitabl/domain/ids.py
import uuid
from dataclasses import dataclass

from ligitabl.core.config import MAX_ROUNDS
from ligitabl.domain.errors import DomainValidationError


def parse_uuid(value, label: str = "id") -> str:
    """Normaliza un UUID (str o uuid.UUID) a su forma canónica en minúsculas."""
    if isinstance(value, uuid.UUID):
        return str(value)
    if value is None or not str(value).strip():
        raise DomainValidationError(f"{label} cannot be empty")
    try:
        return str(uuid.UUID(str(value).strip()))
    except ValueError as exc:
        raise DomainValidationError(f"Invalid {label}: {value}") from exc


@dataclass(frozen=True)
class _UuidId:
    value: str

    label = "id"

    def __post_init__(self):
        object.__setattr__(self, "value", parse_uuid(self.value, self.label))

    @classmethod
    def generate(cls):
        return cls(str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.value


class UserId(_UuidId):
    label = "user id"


class TeamId(_UuidId):
    label = "team id"


class SeasonId(_UuidId):
    label = "season id"


class ContestId(_UuidId):
    label = "contest id"


class SeasonPredictionId(_UuidId):
    label = "season prediction id"


class ContestEntryId(_UuidId):
    label = "contest entry id"


@dataclass(frozen=True, order=True)
class RoundNumber:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise DomainValidationError(f"Round number must be an integer, got: {self.value!r}")
        if not 1 <= self.value <= MAX_ROUNDS:
            raise DomainValidationError(
                f"Round number must be between 1 and {MAX_ROUNDS}, got: {self.value}"
            )

    def is_first(self) -> bool:
        return self.value == 1

    def is_last(self) -> bool:
        return self.value == MAX_ROUNDS

    def next(self) -> "RoundNumber":
        if self.is_last():
            raise DomainValidationError(f"Round {self.value} is the last round of the season")
        return RoundNumber(self.value + 1)

    def previous(self) -> "RoundNumber":
        if self.is_first():
            raise DomainValidationError("Round 1 has no previous round")
        return RoundNumber(self.value - 1)

    def __str__(self) -> str:
        return str(self.value)
