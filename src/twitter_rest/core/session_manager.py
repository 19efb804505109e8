# src/twitter_rest/core/session_manager.py
"""
Thread-local requests.Session для транспортного адаптера.

Каждый поток получает собственную сессию; close_all() закрывает
сессии всех потоков.
"""
import threading
import weakref
from typing import Callable, Set

import requests


class ThreadSafeSessionManager:
    """
    Manages thread-local requests.Session instances.

    Example:
        >>> manager = ThreadSafeSessionManager(requests.Session)
        >>> session = manager.get_session()  # Gets thread-local session
        >>> manager.close_all()  # Closes all sessions from all threads
    """

    def __init__(self, session_factory: Callable[[], requests.Session]):
        self._session_factory = session_factory
        self._local = threading.local()

        # Weak references: закрытые и собранные GC сессии выпадают сами
        self._all_sessions: Set[weakref.ref] = set()
        self._sessions_lock = threading.Lock()

    def get_session(self) -> requests.Session:
        """Сессия текущего потока (создается лениво)."""
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._session_factory()
            self._local.session = session

            with self._sessions_lock:
                self._all_sessions.add(weakref.ref(session, self._discard))

        return session

    def _discard(self, ref: weakref.ref):
        with self._sessions_lock:
            self._all_sessions.discard(ref)

    def get_active_sessions_count(self) -> int:
        with self._sessions_lock:
            return sum(1 for ref in self._all_sessions if ref() is not None)

    def close_all(self):
        """
        Close all sessions from all threads.

        Safe to call multiple times.
        """
        self._local.session = None

        with self._sessions_lock:
            sessions = [ref() for ref in self._all_sessions]
            self._all_sessions.clear()

        for session in sessions:
            if session is not None:
                session.close()
