"""
auth/connection.py -- Process-wide handle to the user store.

The store (and the SQLAlchemy engine pool behind it) is expensive to build and
cheap to reuse, so one instance is created lazily on first use and shared by
every request in the process. The handle is owned by the application lifespan:
api/main.py acquires it on startup, publishes the store on app.state, and
closes it on shutdown. Tests construct their own handle or bypass it entirely.

Concurrency: two threads racing through the first get() may each build a
store. Only one is kept; the other is disposed. Reacquiring the store is
idempotent, so the race costs a duplicate engine setup and nothing else.

Layer rule: no imports from api/.
"""

from __future__ import annotations

import logging

from auth.store import UserStore
from core.config import get_settings

logger = logging.getLogger("authgate.auth.connection")


class StoreHandle:
    """Lazily-initialized, explicitly-closed holder for a UserStore.

    Usage:
        handle = StoreHandle()
        store = handle.get()   # builds on first call
        store = handle.get()   # same instance
        handle.close()         # disposes the engine; next get() rebuilds
    """

    def __init__(self, db_url: str | None = None) -> None:
        self._db_url = db_url
        self._store: UserStore | None = None

    def get(self) -> UserStore:
        if self._store is not None:
            return self._store
        db_url = self._db_url or get_settings().database_url
        store = UserStore(db_url=db_url)
        if self._store is None:
            self._store = store
            logger.info("User store connected")
        else:
            store.close()
        return self._store

    @property
    def is_open(self) -> bool:
        return self._store is not None

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None
            logger.info("User store closed")
