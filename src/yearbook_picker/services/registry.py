"""In-memory registry of open selection sessions."""

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from yearbook_picker.services.selection import RecordStore, SelectionController

logger = logging.getLogger(__name__)


@dataclass
class _RegistryEntry:
    controller: SelectionController
    expires_at: datetime


@dataclass
class SessionRegistry:
    """Holds one controller per browser visit, expiring idle ones."""

    store: RecordStore
    ttl_seconds: int
    _entries: dict[str, _RegistryEntry]

    def __init__(self, store: RecordStore, ttl_seconds: int = 3600) -> None:
        self.store = store
        self.ttl_seconds = ttl_seconds
        self._entries = {}

    def open(self) -> tuple[str, SelectionController]:
        """Create a session and return its id and controller."""
        self.purge_expired()
        session_id = secrets.token_urlsafe(16)
        controller = SelectionController(self.store)
        self._entries[session_id] = _RegistryEntry(
            controller=controller, expires_at=self._next_expiry()
        )
        logger.info("Opened selection session (%d active)", len(self._entries))
        return session_id, controller

    def get(self, session_id: str) -> SelectionController | None:
        """Return the controller for a session and extend its lifetime."""
        entry = self._entries.get(session_id)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(session_id, None)
            return None
        entry.expires_at = self._next_expiry()
        return entry.controller

    def discard(self, session_id: str) -> None:
        """Forget a session."""
        self._entries.pop(session_id, None)

    def clear(self) -> None:
        """Forget every session."""
        self._entries.clear()

    def purge_expired(self) -> int:
        """Drop expired sessions and return how many were removed."""
        now = datetime.now(tz=UTC)
        expired = [
            session_id
            for session_id, entry in self._entries.items()
            if now >= entry.expires_at
        ]
        for session_id in expired:
            del self._entries[session_id]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)

    def _next_expiry(self) -> datetime:
        return datetime.now(tz=UTC) + timedelta(seconds=self.ttl_seconds)
