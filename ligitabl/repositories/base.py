# ligitabl/repositories/base.py
from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy.orm import Session, sessionmaker


def as_utc(value: datetime | None) -> datetime | None:
    # SQLite devuelve datetimes sin zona horaria: los guardamos siempre en UTC
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SqlRepository:
    """Base de los repositorios: cada operación abre y cierra su propia sesión."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def session(self):
        db: Session = self.session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
