# ligitabl/domain/errors.py
# Excepciones de dominio. Los casos de uso las convierten en UseCaseError
# (ver ligitabl/services/result.py); nunca llegan tal cual a la capa HTTP.


class DomainError(Exception):
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DomainValidationError(DomainError):
    """Entrada mal formada: tamaño de ranking, equipos duplicados, ids inválidos..."""


class BusinessRuleViolation(DomainError):
    """Regla de negocio incumplida: cooldown, varios swaps, posición desfasada..."""


class NotFoundError(DomainError):
    pass


class ConflictError(DomainError):
    pass
