from __future__ import annotations

import time
import uuid

from salon_booking.application.ports.session_store import SessionStorePort
from salon_booking.domain.entities.session import BookingSession


class MemorySessionStore(SessionStorePort):
    def __init__(self) -> None:
        self._sessions: dict[str, BookingSession] = {}

    def get_or_create(self, session_id: str | None) -> BookingSession:
        if session_id and session_id in self._sessions:
            return self._sessions[session_id]
        session = BookingSession(session_id=session_id or str(uuid.uuid4()), updated_at=time.time())
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> BookingSession | None:
        return self._sessions.get(session_id)

    def save(self, session: BookingSession) -> None:
        self._sessions[session.session_id] = session
