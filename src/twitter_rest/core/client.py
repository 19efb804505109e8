# src/twitter_rest/core/client.py
import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional

from ..middleware.base import Adapter, Pipeline
from ..middleware.rate_limit import RateLimitTracker
from .adapter import RequestsAdapter
from .config import Configuration, EnvLookup
from .exceptions import TwitterError
from .logging import LoggingConfig, TwitterLogger
from .logging.filters import set_correlation_id, set_transaction_id, clear_correlation_id
from .messages import Request, Response
from .rate_limit import RATE_LIMIT, RateLimitStatus

_log = logging.getLogger(__name__)


class Client:
    """
    Twitter REST клиент: владеет одной Configuration и прогоняет каждый
    запрос через её стек middleware.

    Features:
        - configure/reset/snapshot поверх собственной Configuration
        - Middleware стек: multipart загрузка, JSON, классификация ошибок, rate limit
        - Thread-safe транспорт: каждый поток получает собственную сессию
        - Контекстный менеджер для освобождения ресурсов

    Example:
        >>> with Client(consumer_key="key", consumer_secret="secret") as client:
        ...     response = client.get("/1.1/statuses/home_timeline.json", {"count": 5})
        ...     tweets = response.parsed
    """

    def __init__(
        self,
        config: Optional[Configuration] = None,
        *,
        adapter: Optional[Adapter] = None,
        logging_config: Optional[LoggingConfig] = None,
        getenv: Optional[EnvLookup] = None,
        **options: Any
    ):
        """
        Initialize client.

        Args:
            config: Готовая Configuration (по умолчанию - defaults из окружения)
            adapter: Транспорт (по умолчанию RequestsAdapter)
            logging_config: Конфигурация логирования (None = только module logger)
            getenv: Функция чтения окружения для defaults и reset()
            **options: Переопределения ключей конфигурации

        Raises:
            ConfigurationError: неизвестный ключ в options
        """
        self._getenv = getenv
        self._config = config if config is not None else Configuration().reset(getenv)
        if options:
            self._config.update(options)

        self._adapter: Adapter = adapter if adapter is not None else RequestsAdapter()
        self._logger: Optional[TwitterLogger] = (
            TwitterLogger(config=logging_config, name="twitter_rest.client")
            if logging_config else None
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """
        Закрывает логгер и сессии транспорта.

        Cleanup order:
            1. Logger handlers (flush and close file descriptors)
            2. Adapter sessions
        """
        if self._logger is not None:
            self._logger.close()

        close = getattr(self._adapter, 'close', None)
        if callable(close):
            close()

    # ==================== Конфигурация ====================

    @property
    def config(self) -> Configuration:
        return self._config

    def configure(self, mutator: Callable[[Configuration], Any]) -> Configuration:
        """
        Настройка в стиле блока.

        Example:
            >>> def setup(config):
            ...     config.oauth_token = "token"
            ...     config.oauth_token_secret = "secret"
            >>> client.configure(setup)
        """
        return self._config.configure(mutator)

    def reset(self) -> Configuration:
        """Сбросить конфигурацию в defaults (окружение читается заново)."""
        return self._config.reset(self._getenv)

    def snapshot(self) -> Mapping[str, Any]:
        return self._config.snapshot()

    def credentials(self) -> Dict[str, str]:
        """OAuth значения текущей конфигурации."""
        return {
            'consumer_key': self._config.consumer_key,
            'consumer_secret': self._config.consumer_secret,
            'token': self._config.oauth_token,
            'token_secret': self._config.oauth_token_secret,
        }

    def has_credentials(self) -> bool:
        """True если заданы все четыре OAuth значения."""
        return all(self.credentials().values())

    def has_user_token(self) -> bool:
        return bool(self._config.oauth_token and self._config.oauth_token_secret)

    # ==================== Запросы ====================

    def connection(self) -> Pipeline:
        """Pipeline из текущего списка middleware и адаптера."""
        return Pipeline(self._config.middleware, self._adapter)

    @property
    def rate_limit(self) -> RateLimitStatus:
        """Последний наблюдавшийся rate limit."""
        for middleware in self._config.middleware:
            if isinstance(middleware, RateLimitTracker):
                return middleware.rate_limit.status
        return RATE_LIMIT.status

    @staticmethod
    def _build_url(base: str, path: str) -> str:
        """
        Строит полный URL из endpoint и пути.

        Абсолютный path используется как есть.
        """
        if path.startswith(("http://", "https://")):
            return path
        return f"{base.rstrip('/')}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        endpoint: Optional[str] = None,
    ) -> Response:
        """
        Выполнить запрос через стек middleware.

        Args:
            method: HTTP метод
            path: Путь API ('/1.1/statuses/update.json') или полный URL
            params: Параметры (query для GET/DELETE, тело для POST/PUT/PATCH)
            headers: Дополнительные заголовки
            endpoint: Базовый URL (по умолчанию config.endpoint)

        Returns:
            Response с заполненным parsed

        Raises:
            ClientError: 4xx
            ServerError: 5xx
            ParseError: битый JSON в успешном ответе
            TransportError: таймаут / ошибка соединения
        """
        options = self._config.connection_options
        merged_headers = dict(options.headers)
        merged_headers.update(headers or {})

        request = Request(
            method=method,
            url=self._build_url(endpoint or self._config.endpoint, path),
            params=dict(params or {}),
            headers=merged_headers,
            options=options,
        )

        set_correlation_id(request.request_id)
        start_time = time.time()
        try:
            self._log_info("Request started", method=request.method, url=request.url)

            try:
                response = self.connection().handle(request)
            except TwitterError as e:
                set_transaction_id(e.headers)
                self._log_error(
                    "Request failed",
                    method=request.method,
                    url=request.url,
                    error=e.message,
                    error_type=type(e).__name__,
                    status_code=e.status_code,
                    duration_ms=round((time.time() - start_time) * 1000, 2),
                )
                raise

            set_transaction_id(response.headers)
            self._log_info(
                "Request completed",
                method=request.method,
                url=request.url,
                status_code=response.status_code,
                duration_ms=round((time.time() - start_time) * 1000, 2),
                response_size=len(response.body),
            )
            return response
        finally:
            # Correlation id живет до последней записи лога запроса
            clear_correlation_id()

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Response:
        """Выполняет GET запрос."""
        return self.request("GET", path, params, **kwargs)

    def post(self, path: str, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Response:
        """Выполняет POST запрос (params уходят в тело)."""
        return self.request("POST", path, params, **kwargs)

    def put(self, path: str, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Response:
        return self.request("PUT", path, params, **kwargs)

    def delete(self, path: str, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Response:
        return self.request("DELETE", path, params, **kwargs)

    def upload(self, path: str, params: Mapping[str, Any], **kwargs: Any) -> Response:
        """
        POST на media endpoint.

        Example:
            >>> with open("photo.png", "rb") as f:
            ...     client.upload("/1.1/media/upload.json", {"media": f})
        """
        kwargs.setdefault('endpoint', self._config.media_endpoint)
        return self.request("POST", path, params, **kwargs)

    # ==================== Логирование ====================

    def _log_info(self, message: str, **fields: Any) -> None:
        if self._logger:
            self._logger.info(message, **fields)
        else:
            _log.debug(message, extra=fields)

    def _log_error(self, message: str, **fields: Any) -> None:
        if self._logger:
            self._logger.error(message, **fields)
        else:
            _log.debug(message, extra=fields)
