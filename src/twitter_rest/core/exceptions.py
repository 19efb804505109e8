"""
Иерархия исключений Twitter REST клиента.

Классификация:
- TemporaryError (retryable=True) - можно ретраить (сеть, 5xx, 429)
- FatalError (fatal=True) - НЕ ретраить (4xx, битый JSON, конфигурация)
"""

from http import HTTPStatus
from typing import Any, Dict, Mapping, Optional, Type, TYPE_CHECKING

import requests

if TYPE_CHECKING:
    from .messages import Response
    from .rate_limit import RateLimitStatus

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TwitterError(Exception):
    """
    Базовое исключение клиента.

    Args:
        message: Сообщение об ошибке
        status_code: HTTP статус (если ошибка связана с ответом)
        headers: Заголовки ответа
        body: Распарсенное тело ответа (payload ошибки)
    """

    retryable: bool = False
    fatal: bool = False

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Any = None,
    ):
        self.message = message
        self.status_code = status_code
        self.headers = headers if headers is not None else {}
        self.body = body
        super().__init__(message)

    @property
    def rate_limit(self) -> 'RateLimitStatus':
        """Rate limit, прочитанный из заголовков ответа с ошибкой."""
        from .rate_limit import RateLimitStatus
        return RateLimitStatus.from_headers(self.headers)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ВРЕМЕННЫЕ ОШИБКИ (retryable=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TemporaryError(TwitterError):
    """
    Временная ошибка - можно ретраить.

    Примеры: таймауты, сетевые ошибки, 5xx.
    """
    retryable = True


class TransportError(TemporaryError):
    """Ошибка транспорта (requests не смог выполнить запрос)."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = message
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)


class TimeoutError(TransportError):
    """
    Таймаут запроса.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        timeout: Значение таймаута
        timeout_type: Тип таймаута ('open' или 'read')
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        timeout_type: Optional[str] = None
    ):
        self.timeout = timeout
        self.timeout_type = timeout_type

        msg = message
        if timeout_type:
            msg += f" ({timeout_type} timeout"
            if timeout:
                msg += f": {timeout}s"
            msg += ")"

        super().__init__(msg, url)


class ConnectionError(TransportError):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - Connection reset
    - Network unreachable
    """
    pass


class ProxyError(TransportError):
    """Ошибка прокси."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HTTP ОШИБКИ (классифицируются middleware)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _generic_message(status_code: int) -> str:
    """'404 Not Found' для известных статусов, иначе 'HTTP 499'."""
    try:
        return f"{status_code} {HTTPStatus(status_code).phrase}"
    except ValueError:
        return f"HTTP {status_code}"


def error_message(body: Any, status_code: int) -> str:
    """
    Извлекает сообщение об ошибке из payload ответа.

    Поддерживаемые формы:
        {"error": "Not Found"}
        {"errors": [{"message": "Rate limit exceeded", "code": 88}]}
        {"errors": "Something went wrong"}

    Если ничего не найдено - генерируется сообщение по статусу.
    """
    if isinstance(body, Mapping):
        error = body.get('error')
        if isinstance(error, str) and error:
            return error

        errors = body.get('errors')
        if isinstance(errors, (list, tuple)):
            errors = errors[0] if errors else None
        if isinstance(errors, Mapping):
            errors = errors.get('message')
        if isinstance(errors, str) and errors:
            return errors.strip()

    return _generic_message(status_code)


class _HTTPStatusError(TwitterError):
    """Общая часть Client/Server ошибок: реестр классов по статусу."""

    status: Optional[int] = None
    errors: Dict[int, Type['_HTTPStatusError']] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.status is not None:
            cls.errors[cls.status] = cls

    @classmethod
    def from_response(cls, response: 'Response') -> '_HTTPStatusError':
        """
        Создает исключение нужного подкласса по ответу.

        Args:
            response: Ответ (parsed уже заполнен ParseJson middleware)

        Returns:
            Экземпляр зарегистрированного подкласса или самого cls
        """
        error_class = cls.errors.get(response.status_code, cls)
        return error_class(
            error_message(response.parsed, response.status_code),
            status_code=response.status_code,
            headers=response.headers,
            body=response.parsed,
        )

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ФАТАЛЬНЫЕ ОШИБКИ (fatal=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class FatalError(TwitterError):
    """
    Фатальная ошибка - НЕ ретраить.

    Примеры: 4xx ошибки клиента, невалидный ответ.
    """
    fatal = True


class ClientError(_HTTPStatusError, FatalError):
    """4xx ошибка клиента."""
    errors: Dict[int, Type[_HTTPStatusError]] = {}


class BadRequest(ClientError):
    """400 Bad Request."""
    status = 400


class Unauthorized(ClientError):
    """401 Unauthorized."""
    status = 401


class Forbidden(ClientError):
    """403 Forbidden."""
    status = 403


class NotFound(ClientError):
    """404 Not Found."""
    status = 404


class NotAcceptable(ClientError):
    """406 Not Acceptable."""
    status = 406


class EnhanceYourCalm(ClientError):
    """420 Enhance Your Calm (устаревший rate limit Search API)."""
    status = 420
    retryable = True
    fatal = False


class UnprocessableEntity(ClientError):
    """422 Unprocessable Entity."""
    status = 422


class TooManyRequests(ClientError):
    """429 Too Many Requests."""
    status = 429
    retryable = True
    fatal = False


class ParseError(FatalError):
    """
    Невалидный JSON в теле ответа.

    Args:
        message: Сообщение
        status_code: HTTP статус ответа
        body: Сырое тело (обрезанное до 200 символов)
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        if isinstance(body, str) and len(body) > 200:
            body = body[:200]
        super().__init__(message, status_code=status_code, body=body)


class ConfigurationError(FatalError):
    """Ошибка конфигурации."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 5xx (temporary)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ServerError(_HTTPStatusError, TemporaryError):
    """
    5xx ошибка сервера.

    Только классифицируется; ретраи - ответственность вызывающего кода.
    """
    errors: Dict[int, Type[_HTTPStatusError]] = {}


class InternalServerError(ServerError):
    """500 Internal Server Error."""
    status = 500


class BadGateway(ServerError):
    """502 Bad Gateway."""
    status = 502


class ServiceUnavailable(ServerError):
    """503 Service Unavailable."""
    status = 503


class GatewayTimeout(ServerError):
    """504 Gateway Timeout."""
    status = 504

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def classify_requests_exception(
    exc: Exception,
    url: str,
    timeout: Optional[float] = None
) -> TwitterError:
    """
    Конвертировать requests.exceptions в наши исключения.

    Args:
        exc: Исключение из requests
        url: URL запроса
        timeout: Полный таймаут запроса (для сообщения)

    Returns:
        Наше исключение с правильной классификацией

    Examples:
        >>> exc = requests.exceptions.ConnectTimeout()
        >>> our_exc = classify_requests_exception(exc, "https://api.twitter.com")
        >>> assert isinstance(our_exc, TimeoutError)
        >>> assert our_exc.retryable == True
    """

    if isinstance(exc, requests.exceptions.ConnectTimeout):
        return TimeoutError("Request timeout", url, timeout, "open")

    elif isinstance(exc, requests.exceptions.Timeout):
        return TimeoutError("Request timeout", url, timeout, "read")

    elif isinstance(exc, requests.exceptions.ProxyError):
        return ProxyError("Proxy error", url)

    elif isinstance(exc, requests.exceptions.ConnectionError):
        return ConnectionError("Connection error", url)

    else:
        return TransportError(f"Request failed: {exc}", url)
