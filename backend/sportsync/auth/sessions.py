"""Process-local session store.

Maps opaque cookie tokens to user ids with a fixed expiry measured from
creation. Sessions do not survive a restart and are not shared between
worker processes, which is why the server runs a single worker.
"""

import logging
import secrets
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    """A live session entry."""

    user_id: int
    expires_at: float


class SessionStore:
    """In-memory token -> session map with TTL expiry.

    Usage:
        store = SessionStore(max_age=7 * 24 * 3600)
        token = store.create(user_id=1)
        store.resolve(token)  # -> 1
        store.destroy(token)
    """

    def __init__(self, max_age: int, clock: Callable[[], float] = time.monotonic) -> None:
        self.max_age = max_age
        self._clock = clock
        self._sessions: dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, user_id: int) -> str:
        """Start a session for a user and return its token."""
        self.prune()
        token = secrets.token_urlsafe(32)
        self._sessions[token] = Session(user_id=user_id, expires_at=self._clock() + self.max_age)
        return token

    def resolve(self, token: str | None) -> int | None:
        """Return the user id for a live token, or None."""
        if not token:
            return None
        session = self._sessions.get(token)
        if session is None:
            return None
        if session.expires_at <= self._clock():
            del self._sessions[token]
            return None
        return session.user_id

    def destroy(self, token: str | None) -> bool:
        """End one session. Unknown tokens are ignored."""
        if not token:
            return False
        return self._sessions.pop(token, None) is not None

    def destroy_user(self, user_id: int) -> int:
        """End every session belonging to a user."""
        tokens = [t for t, s in self._sessions.items() if s.user_id == user_id]
        for token in tokens:
            del self._sessions[token]
        return len(tokens)

    def prune(self) -> int:
        """Drop expired sessions."""
        now = self._clock()
        expired = [t for t, s in self._sessions.items() if s.expires_at <= now]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.debug(f"Pruned {len(expired)} expired sessions")
        return len(expired)
