# src/twitter_rest/core/adapter.py
"""Транспортный адаптер на requests: единственное место, где выполняется I/O."""

from typing import Callable, Optional

import requests
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict

from ..utils.params import flatten_params, to_text
from .exceptions import classify_requests_exception
from .messages import Request, Response
from .session_manager import ThreadSafeSessionManager


def _create_session() -> requests.Session:
    """Create configured session."""
    session = requests.Session()

    # Ретраи - ответственность вызывающего кода, не транспорта
    adapter = HTTPAdapter(max_retries=0)
    session.mount('http://', adapter)
    session.mount('https://', adapter)

    return session


class RequestsAdapter:
    """
    Выполняет закодированный Request через requests.Session.

    Thread-safe: каждый поток получает собственную сессию.

    Args:
        session_factory: Фабрика сессий (для тестов и тонкой настройки пула)
    """

    def __init__(self, session_factory: Optional[Callable[[], requests.Session]] = None):
        self._session_manager = ThreadSafeSessionManager(session_factory or _create_session)

    @property
    def session(self) -> requests.Session:
        """Сессия текущего потока."""
        return self._session_manager.get_session()

    def send(self, request: Request) -> Response:
        """
        Отправить запрос.

        Raises:
            TransportError: таймаут, ошибка соединения или прокси
                (исходное исключение requests доступно как __cause__)
        """
        query = None
        if request.params:
            query = [(name, to_text(value)) for name, value in flatten_params(request.params)]

        try:
            raw = self.session.request(
                method=request.method,
                url=request.url,
                params=query,
                data=request.body,
                headers=request.headers,
                timeout=request.options.as_timeout(),
                verify=request.options.verify_ssl,
            )
        except requests.exceptions.RequestException as e:
            raise classify_requests_exception(e, request.url, request.options.timeout) from e

        return Response(
            status_code=raw.status_code,
            headers=CaseInsensitiveDict(raw.headers),
            body=raw.content or b'',
            url=str(raw.url or request.url),
        )

    def close(self):
        """Закрыть сессии всех потоков."""
        self._session_manager.close_all()

    def active_sessions(self) -> int:
        return self._session_manager.get_active_sessions_count()
