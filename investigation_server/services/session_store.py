"""
Session Store abstraction.

Keyed session records with atomic read-modify-write per session id.
Implementations: in-memory (default, single process) and Firestore
(transactions). Swap via SESSION_STORE.
"""

import threading
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from investigation.errors import NotFound
from investigation.models import InvestigationSession


class SessionStore(Protocol):
    """Protocol for session persistence. update() is the only mutation path."""

    def create(self, session: InvestigationSession) -> None:
        """Insert a new session. Raises ValueError if the id is taken."""
        ...

    def get(self, session_id: str) -> Optional[InvestigationSession]:
        """Return a snapshot copy of the session, or None."""
        ...

    def update(
        self,
        session_id: str,
        fn: Callable[[InvestigationSession], Any],
    ) -> Tuple[InvestigationSession, Any]:
        """
        Atomically apply fn to a private copy of the session.

        fn mutates the copy in place; if it raises, nothing is written and the
        exception propagates. Returns (committed session, fn's return value).
        Raises NotFound if the session does not exist.
        """
        ...


class InMemorySessionStore:
    """
    Session store held in process memory.

    One lock per session id serializes update() on that record; sessions
    never contend with each other. Not shared across processes.
    """

    def __init__(self):
        self._sessions: Dict[str, InvestigationSession] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, session_id: str) -> Optional[threading.Lock]:
        with self._registry_lock:
            return self._locks.get(session_id)

    def create(self, session: InvestigationSession) -> None:
        with self._registry_lock:
            if session.session_id in self._sessions:
                raise ValueError(f"Session already exists: {session.session_id}")
            self._sessions[session.session_id] = session.model_copy(deep=True)
            self._locks[session.session_id] = threading.Lock()

    def get(self, session_id: str) -> Optional[InvestigationSession]:
        lock = self._lock_for(session_id)
        if lock is None:
            return None
        with lock:
            session = self._sessions.get(session_id)
            return session.model_copy(deep=True) if session is not None else None

    def update(
        self,
        session_id: str,
        fn: Callable[[InvestigationSession], Any],
    ) -> Tuple[InvestigationSession, Any]:
        lock = self._lock_for(session_id)
        if lock is None:
            raise NotFound("Session", session_id)
        with lock:
            if session_id not in self._sessions:
                raise NotFound("Session", session_id)
            working = self._sessions[session_id].model_copy(deep=True)
            result = fn(working)
            self._sessions[session_id] = working
            return working.model_copy(deep=True), result

    def delete(self, session_id: str) -> bool:
        with self._registry_lock:
            self._locks.pop(session_id, None)
            return self._sessions.pop(session_id, None) is not None

    def count_by_state(self) -> Dict[str, int]:
        with self._registry_lock:
            sessions = list(self._sessions.values())
        counts: Dict[str, int] = {}
        for s in sessions:
            counts[s.state.value] = counts.get(s.state.value, 0) + 1
        return counts

    def __len__(self) -> int:
        return len(self._sessions)
