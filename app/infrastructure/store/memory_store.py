from __future__ import annotations

import time
import uuid

from app.application.ports.session_store import SelectionSessionStorePort
from app.domain.entities.selection_session import SelectionSession


class MemorySessionStore(SelectionSessionStorePort):
    def __init__(self) -> None:
        self._sessions: dict[str, SelectionSession] = {}

    def create(self) -> SelectionSession:
        now = time.time()
        session = SelectionSession(session_id=uuid.uuid4().hex, created_at=now, updated_at=now)
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> SelectionSession | None:
        return self._sessions.get(session_id)

    def save(self, session: SelectionSession) -> None:
        self._sessions[session.session_id] = session

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)
