# ligitabl/core/deps.py
from datetime import datetime, timezone

from fastapi import Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from ligitabl.core.security import decode_access_token
from ligitabl.db.session import SessionLocal
from ligitabl.db.models.user import User
from ligitabl.domain.errors import DomainValidationError
from ligitabl.domain.ids import UserId

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def _user_from_token(token: str) -> User:
    try:
        payload = decode_access_token(token)
        user_id = UserId(payload.get("sub")).value
    except (JWTError, DomainValidationError):
        raise HTTPException(status_code=401, detail="Invalid token")

    db = SessionLocal()
    user = db.get(User, user_id)
    db.close()

    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    return user


def get_current_user(token: str = Depends(oauth2_scheme)) -> User:
    return _user_from_token(token)


def get_optional_user(token: str | None = Depends(optional_oauth2_scheme)) -> User | None:
    """Como get_current_user, pero sin token devuelve None (visitante)."""
    if not token:
        return None
    return _user_from_token(token)


def get_now() -> datetime:
    return datetime.now(timezone.utc)


# --- Servicios construidos en main.py y guardados en app.state ---

def get_prediction_service(request: Request):
    return request.app.state.prediction_service


def get_prediction_view_service(request: Request):
    return request.app.state.prediction_view_service


def get_standings_service(request: Request):
    return request.app.state.standings_service


def get_leaderboard_service(request: Request):
    return request.app.state.leaderboard_service
