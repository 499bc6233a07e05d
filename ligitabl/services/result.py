# ligitabl/services/result.py
"""Resultado explícito de los casos de uso: Ok(valor) o Err(UseCaseError).

Los routers nunca ven excepciones de dominio: usan `raise_for_error` para
convertir un Err en HTTPException con un código fijo por tipo de error.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, TypeVar, Union

from fastapi import HTTPException

from ligitabl.domain.errors import (
    BusinessRuleViolation, ConflictError, DomainError, DomainValidationError, NotFoundError,
)

T = TypeVar("T")


class ErrorType(str, Enum):
    VALIDATION = "VALIDATION"
    BUSINESS_RULE = "BUSINESS_RULE"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


STATUS_BY_ERROR_TYPE = {
    ErrorType.VALIDATION: 400,
    ErrorType.NOT_FOUND: 404,
    ErrorType.CONFLICT: 409,
    ErrorType.BUSINESS_RULE: 422,
}


@dataclass(frozen=True)
class UseCaseError:
    type: ErrorType
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def validation(cls, message: str, **details) -> "UseCaseError":
        return cls(ErrorType.VALIDATION, message, details)

    @classmethod
    def business_rule(cls, message: str, **details) -> "UseCaseError":
        return cls(ErrorType.BUSINESS_RULE, message, details)

    @classmethod
    def not_found(cls, message: str, **details) -> "UseCaseError":
        return cls(ErrorType.NOT_FOUND, message, details)

    @classmethod
    def conflict(cls, message: str, **details) -> "UseCaseError":
        return cls(ErrorType.CONFLICT, message, details)

    @property
    def status_code(self) -> int:
        return STATUS_BY_ERROR_TYPE[self.type]

    def to_dict(self) -> dict:
        return {"type": self.type.value, "message": self.message, "details": self.details}


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: UseCaseError

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


_ERROR_TYPE_BY_EXCEPTION = (
    (DomainValidationError, ErrorType.VALIDATION),
    (BusinessRuleViolation, ErrorType.BUSINESS_RULE),
    (NotFoundError, ErrorType.NOT_FOUND),
    (ConflictError, ErrorType.CONFLICT),
)


def to_use_case_error(exc: DomainError) -> UseCaseError:
    """Único punto de traducción excepción de dominio -> UseCaseError."""
    for exc_type, error_type in _ERROR_TYPE_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return UseCaseError(error_type, exc.message, dict(exc.details))
    return UseCaseError(ErrorType.BUSINESS_RULE, exc.message, dict(exc.details))


def raise_for_error(result: Result) -> Any:
    """Devuelve el valor de un Ok o lanza la HTTPException que corresponde al Err."""
    if isinstance(result, Err):
        raise HTTPException(status_code=result.error.status_code, detail=result.error.to_dict())
    return result.value


def catching(operation: Callable[[], T]) -> Result[T]:
    """Ejecuta la operación y captura las excepciones de dominio como Err."""
    try:
        return Ok(operation())
    except DomainError as exc:
        return Err(to_use_case_error(exc))
