"""Locks por usuario, locales al proceso.

Las operaciones leer-comprobar-escribir sobre la predicción de un usuario
(crear, swap, reordenar, reset) no pueden intercalarse entre dos peticiones
del mismo usuario. Con varios workers de uvicorn esto no sirve: cada proceso
tiene sus propios locks.
"""
from contextlib import contextmanager
from threading import Lock, RLock
from typing import Iterator

_registry_lock = Lock()
_user_locks: dict[str, RLock] = {}


def _lock_for(user_id: str) -> RLock:
    with _registry_lock:
        lock = _user_locks.get(user_id)
        if lock is None:
            lock = RLock()
            _user_locks[user_id] = lock
        return lock


@contextmanager
def user_lock(user_id: str) -> Iterator[None]:
    with _lock_for(user_id):
        yield
