"""In-memory registry of workflow sessions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from headshot_studio.domain.workflow import Session
from headshot_studio.services.workflow import WorkflowController

logger = logging.getLogger(__name__)


@dataclass
class _SessionEntry:
    controller: WorkflowController
    last_seen: datetime


class SessionStore:
    """Keeps one workflow controller per browser session.

    Sessions idle for longer than the TTL expire, and the oldest session is
    evicted once the store is full. Dropped sessions are reset so they
    release any background edit resources.
    """

    def __init__(
        self,
        factory: Callable[[], WorkflowController],
        ttl_seconds: int = 3600,
        max_sessions: int = 500,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._factory = factory
        self._ttl = timedelta(seconds=ttl_seconds)
        self._max_sessions = max_sessions
        self._entries: dict[UUID, _SessionEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def create(self) -> tuple[UUID, WorkflowController]:
        """Create a session and return its id and controller."""
        self.purge_expired()
        while len(self._entries) >= self._max_sessions:
            oldest = min(self._entries, key=lambda key: self._entries[key].last_seen)
            logger.info("Evicting session %s", oldest)
            self.discard(oldest)

        session_id = uuid4()
        controller = self._factory()
        controller.subscribe(_screen_logger(session_id))
        self._entries[session_id] = _SessionEntry(
            controller=controller, last_seen=datetime.now(tz=UTC)
        )
        return session_id, controller

    def get(self, session_id: UUID) -> WorkflowController | None:
        """Return the controller for a session if it has not expired."""
        entry = self._entries.get(session_id)
        if entry is None:
            return None
        now = datetime.now(tz=UTC)
        if now - entry.last_seen >= self._ttl:
            self.discard(session_id)
            return None
        entry.last_seen = now
        return entry.controller

    def discard(self, session_id: UUID) -> bool:
        """Drop a session and release its resources."""
        entry = self._entries.pop(session_id, None)
        if entry is None:
            return False
        entry.controller.reset()
        return True

    def purge_expired(self) -> int:
        """Drop all sessions idle for longer than the TTL."""
        cutoff = datetime.now(tz=UTC) - self._ttl
        expired = [
            session_id
            for session_id, entry in self._entries.items()
            if entry.last_seen <= cutoff
        ]
        for session_id in expired:
            self.discard(session_id)
        return len(expired)

    def close(self) -> None:
        """Drop every session."""
        for session_id in list(self._entries):
            self.discard(session_id)


def _screen_logger(session_id: UUID) -> Callable[[Session], None]:
    last_screen: list[str] = []

    def listener(session: Session) -> None:
        if last_screen and last_screen[-1] == session.screen:
            return
        last_screen[:] = [session.screen]
        logger.info("Session %s moved to %s", session_id, session.screen)

    return listener
