"""In-memory registry of calculator sessions."""

from __future__ import annotations

import logging
import threading
import uuid

from sectioncalc import CalculatorSession, ShapeKind

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    pass


class SessionRegistry:
    """Sessions keyed by id; lost when the process exits."""

    def __init__(self) -> None:
        self._sessions: dict[str, CalculatorSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, shape: ShapeKind = ShapeKind.SOLID_CIRCLE) -> tuple[str, CalculatorSession]:
        session_id = uuid.uuid4().hex
        session = CalculatorSession(shape)
        with self._lock:
            self._sessions[session_id] = session
        logger.info("Created session %s", session_id)
        return session_id, session

    def get(self, session_id: str) -> CalculatorSession:
        with self._lock:
            try:
                return self._sessions[session_id]
            except KeyError:
                raise SessionNotFound(session_id) from None

    def remove(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFound(session_id)
        logger.info("Removed session %s", session_id)
