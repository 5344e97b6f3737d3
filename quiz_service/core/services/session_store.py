"""Service mapping login session tokens to usernames."""

from __future__ import annotations

import logging
import secrets
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from quiz_service.constants.network_constants import SESSION_MAX_AGE_SECONDS

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LoginSession:
    username: str
    expires_at: float


class SessionStore:
    """Issues opaque tokens after login and resolves them per request."""

    def __init__(
        self,
        max_age_seconds: float = SESSION_MAX_AGE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_age_seconds = max_age_seconds
        self._clock = clock
        self._sessions: dict[str, LoginSession] = {}
        self._lock = Lock()

    @property
    def max_age_seconds(self) -> float:
        return self._max_age_seconds

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, username: str) -> str:
        token = secrets.token_hex(32)
        with self._lock:
            self._purge_expired()
            self._sessions[token] = LoginSession(
                username=username,
                expires_at=self._clock() + self._max_age_seconds,
            )
        logger.debug("Login session created for %s", username)
        return token

    def resolve(self, token: str | None) -> str | None:
        """Return the username for ``token``, or None if unknown or expired."""
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.expires_at <= self._clock():
                del self._sessions[token]
                logger.info("Login session expired for %s", session.username)
                return None
            return session.username

    def revoke(self, token: str | None) -> bool:
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [token for token, session in self._sessions.items() if session.expires_at <= now]
        for token in expired:
            del self._sessions[token]
