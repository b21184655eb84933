from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Callable, Mapping, Optional

from fastapi import Request
from loguru import logger

from app.core.firebase import (
    get_or_init_firebase_app,
    resolve_credentials,
    resolve_database_url,
)
from app.realtime.store import FirebaseRealtimeStore, MemoryRealtimeStore, RealtimeStore


class RealtimeContext:
    """
    Owns the one realtime store handle of the process.

    `ensure_ready()` attempts the connection once. A failed attempt is
    remembered, so later calls return None straight away and the
    "not available" warning is logged only once.
    """

    def __init__(
        self,
        backend: str = "firebase",
        environ: Mapping[str, str] = os.environ,
        base_dir: Optional[Path] = None,
        app_factory: Callable = get_or_init_firebase_app,
    ):
        self.backend = backend
        self._environ = environ
        self._base_dir = base_dir
        self._app_factory = app_factory

        self._store: Optional[RealtimeStore] = None
        self._attempted = False
        self._unavailable_logged = False
        self._lock = threading.Lock()

    @property
    def connected(self) -> bool:
        return self._store is not None

    def _connect(self) -> Optional[RealtimeStore]:
        if self.backend == "memory":
            logger.info("Realtime store: in-memory backend")
            return MemoryRealtimeStore()

        if self.backend != "firebase":
            logger.warning(f"Realtime store not initialized. Unknown backend: {self.backend}")
            return None

        creds = resolve_credentials(self._environ, self._base_dir)
        if not creds:
            logger.warning("Firebase Realtime Database not initialized. Missing Firebase Admin credentials.")
            return None

        database_url = resolve_database_url(creds, self._environ)
        if not database_url:
            logger.warning("Firebase Realtime Database not initialized. Set FIREBASE_DATABASE_URL.")
            return None

        try:
            firebase_app = self._app_factory(creds, database_url)
        except (ValueError, OSError) as e:
            logger.error(f"Firebase Realtime Database initialization failed: {e}")
            return None

        logger.info(f"Firebase Realtime Database initialized | url={database_url}")
        return FirebaseRealtimeStore(firebase_app)

    def ensure_ready(self) -> Optional[RealtimeStore]:
        if self._store is not None:
            return self._store

        # request threads arriving mid-connect wait for the one attempt
        with self._lock:
            if not self._attempted:
                self._attempted = True
                self._store = self._connect()
            if self._store is not None:
                return self._store

            if not self._unavailable_logged:
                logger.warning("Realtime store not available")
                self._unavailable_logged = True
        return None


# --- FastAPI dependency ---
def get_realtime_store(request: Request) -> Optional[RealtimeStore]:
    return request.app.state.realtime.ensure_ready()
