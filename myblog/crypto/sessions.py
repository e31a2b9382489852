"""In-memory store of per-session ECC managers."""

import logging
import secrets
import threading
from datetime import timedelta
from typing import Optional

from myblog.core.errors import GoneError, NotFoundError

from .ecc import SESSION_TTL, ECCManager

logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    return "session_" + secrets.token_hex(16)


class ECCSessionStore:
    """
    Maps key-exchange session ids to their :class:`ECCManager`.

    Shared by all requests; every access goes through one lock.
    """

    def __init__(self, ttl: timedelta = SESSION_TTL):
        self.ttl = ttl
        self._sessions: dict[str, ECCManager] = {}
        self._lock = threading.Lock()

    def get_or_create(self, session_id: Optional[str] = None) -> ECCManager:
        """
        Return the live manager for ``session_id``, creating one when the id is
        unknown or its manager has expired. A new id is generated when none is
        given.
        """
        session_id = session_id or generate_session_id()
        with self._lock:
            manager = self._sessions.get(session_id)
            if manager is None or manager.is_expired():
                manager = ECCManager(session_id, ttl=self.ttl)
                self._sessions[session_id] = manager
                logger.debug(f"Created ECC session {session_id}")
            return manager

    def get(self, session_id: str) -> ECCManager:
        """
        Raises:
            NotFoundError: unknown session
            GoneError: the session has expired
        """
        with self._lock:
            manager = self._sessions.get(session_id)
        if manager is None:
            raise NotFoundError("session not found")
        if manager.is_expired():
            raise GoneError("session expired")
        return manager

    def cleanup_expired(self) -> int:
        """Drop expired managers; returns how many were removed."""
        with self._lock:
            expired = [sid for sid, m in self._sessions.items() if m.is_expired()]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info(f"Removed {len(expired)} expired ECC sessions")
        return len(expired)

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)
