"""
Guest sessions.

A guest session owns one ephemeral ledger for as long as it lives; ending
the session discards the ledger. Sessions are process-local and are lost on
restart, like the ledgers themselves.

Anyone can start a session, so the registry is bounded: a session idle for
longer than the TTL is dropped, and when the registry is full the least
recently used session makes room for a new one.
"""

import secrets
import time
from dataclasses import dataclass
from datetime import date
from typing import Callable

import structlog

from messmate.config import settings
from messmate.core.exceptions import NotFoundException
from messmate.ledger.ephemeral import EphemeralLedgerStore
from messmate.repositories.record_repository import RecordRepository

logger = structlog.get_logger(__name__)


@dataclass
class GuestSession:
    repository: RecordRepository
    last_seen: float


class GuestSessionRegistry:
    """In-process registry of guest session id -> Record Repository"""

    def __init__(
        self,
        tenant_id: str,
        seed: bool = True,
        ttl_seconds: int = 7200,
        max_sessions: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.tenant_id = tenant_id
        self.seed = seed
        self.ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions
        self.clock = clock
        self._sessions: dict[str, GuestSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    async def start(self, today: date | None = None) -> tuple[str, RecordRepository]:
        """
        Open a new guest session with its own ephemeral ledger.

        Expired sessions are evicted first; if the registry is still full,
        the least recently used session is dropped.

        Returns:
            (session id, loaded repository)
        """
        self.evict_expired()
        while self._sessions and len(self._sessions) >= self.max_sessions:
            oldest = min(self._sessions, key=lambda key: self._sessions[key].last_seen)
            self._drop(oldest, reason="capacity")

        session_id = secrets.token_urlsafe(16)
        store = EphemeralLedgerStore(self.tenant_id, seed=self.seed, today=today)
        repository = RecordRepository(store)
        await repository.load()
        self._sessions[session_id] = GuestSession(repository, last_seen=self.clock())
        logger.info("guest_session_started", session_count=len(self._sessions))
        return session_id, repository

    def get(self, session_id: str) -> RecordRepository:
        """
        Look up a live session and mark it as used.

        Raises:
            NotFoundException: If the session does not exist, has ended or expired
        """
        session = self._sessions.get(session_id)
        now = self.clock()
        if session is not None and now - session.last_seen > self.ttl_seconds:
            self._drop(session_id, reason="expired")
            session = None
        if session is None:
            raise NotFoundException("Guest session not found or already ended")
        session.last_seen = now
        return session.repository

    def end(self, session_id: str) -> None:
        """
        Raises:
            NotFoundException: If the session does not exist or has ended
        """
        if self._sessions.pop(session_id, None) is None:
            raise NotFoundException("Guest session not found or already ended")
        logger.info("guest_session_ended", session_count=len(self._sessions))

    def evict_expired(self) -> int:
        """Drop sessions idle for longer than the TTL; returns how many went"""
        cutoff = self.clock() - self.ttl_seconds
        expired = [key for key, session in self._sessions.items() if session.last_seen < cutoff]
        for session_id in expired:
            self._drop(session_id, reason="expired")
        return len(expired)

    def clear(self) -> None:
        self._sessions.clear()

    def _drop(self, session_id: str, reason: str) -> None:
        del self._sessions[session_id]
        logger.info("guest_session_evicted", reason=reason, session_count=len(self._sessions))


# Global registry instance
guest_sessions = GuestSessionRegistry(
    tenant_id=settings.GUEST_TENANT_ID,
    seed=settings.GUEST_SAMPLE_DATA,
    ttl_seconds=settings.GUEST_SESSION_TTL,
    max_sessions=settings.GUEST_SESSION_LIMIT,
)
