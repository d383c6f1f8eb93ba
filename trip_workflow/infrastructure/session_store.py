"""In-memory store for live editor sessions."""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from trip_workflow.application.editor import WorkflowEditor
from trip_workflow.infrastructure.config import get_env

_logger = logging.getLogger("trip-workflow.session")

_DEFAULT_TTL = 1800.0
_MAX_SESSIONS = 1000


class EditorSessionStore:
    """Thread-safe TTL store; edits and history die with the session."""

    backend = "memory"

    def __init__(self, ttl: float = _DEFAULT_TTL, max_sessions: int = _MAX_SESSIONS):
        self._store: dict[str, tuple[WorkflowEditor, float]] = {}
        self._ttl = ttl
        self._max_sessions = max_sessions
        self._lock = threading.Lock()
        self._session_locks: dict[str, threading.RLock] = {}

    def get(self, session_id: str) -> Optional[WorkflowEditor]:
        with self._lock:
            entry = self._store.get(session_id)
            if entry is None:
                return None
            editor, expire_at = entry
            if time.time() > expire_at:
                del self._store[session_id]
                self._session_locks.pop(session_id, None)
                return None
            self._store[session_id] = (editor, time.time() + self._ttl)
            return editor

    def save(self, session_id: str, editor: WorkflowEditor) -> None:
        with self._lock:
            if session_id not in self._store and len(self._store) >= self._max_sessions:
                self._cleanup_expired()
            if session_id not in self._store and len(self._store) >= self._max_sessions:
                oldest = min(self._store, key=lambda k: self._store[k][1])
                del self._store[oldest]
                self._session_locks.pop(oldest, None)
                _logger.warning("Session store full; evicted session %s", oldest)
            self._store[session_id] = (editor, time.time() + self._ttl)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._store.pop(session_id, None)
            self._session_locks.pop(session_id, None)

    def session_lock(self, session_id: str) -> threading.RLock:
        """Per-session lock; callers hold it for the whole read-modify-respond cycle."""
        with self._lock:
            lock = self._session_locks.get(session_id)
            if lock is None:
                lock = self._session_locks[session_id] = threading.RLock()
            return lock

    def exists(self, session_id: str) -> bool:
        with self._lock:
            entry = self._store.get(session_id)
            if entry is None:
                return False
            _, expire_at = entry
            return time.time() <= expire_at

    def _cleanup_expired(self) -> None:
        now = time.time()
        expired = [k for k, (_, exp) in self._store.items() if now > exp]
        for key in expired:
            del self._store[key]
            self._session_locks.pop(key, None)

    @property
    def active_count(self) -> int:
        now = time.time()
        with self._lock:
            return sum(1 for _, (_, exp) in self._store.items() if now <= exp)


def _build_store() -> EditorSessionStore:
    try:
        ttl = float(get_env("SESSION_TTL_SECONDS", str(_DEFAULT_TTL)))
        max_sessions = int(get_env("SESSION_MAX_SESSIONS", str(_MAX_SESSIONS)))
    except ValueError:
        _logger.warning("Invalid session store settings; using defaults")
        ttl, max_sessions = _DEFAULT_TTL, _MAX_SESSIONS
    return EditorSessionStore(ttl=ttl, max_sessions=max(1, max_sessions))


_global_lock = threading.Lock()
_global_store: Optional[EditorSessionStore] = None


def get_session_store() -> EditorSessionStore:
    global _global_store
    with _global_lock:
        if _global_store is None:
            _global_store = _build_store()
        return _global_store
