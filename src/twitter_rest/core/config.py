"""
Конфигурация Twitter REST клиента.

ConnectionOptions - immutable (frozen dataclass), Configuration - mutable
запись, которой владеет один Client.
"""

import os
from dataclasses import dataclass, field, fields, replace
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, TYPE_CHECKING

from ..version import USER_AGENT

if TYPE_CHECKING:
    from ..middleware.base import Middleware

# Функция чтения окружения: имя переменной -> значение или None
EnvLookup = Callable[[str], Optional[str]]

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CONNECTION OPTIONS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _freeze_dict(d: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    """
    Convert dict to immutable MappingProxyType.

    Example:
        >>> frozen = _freeze_dict({"Accept": "application/json"})
        >>> frozen["X-New"] = "value"  # Raises TypeError
    """
    if d is None:
        return MappingProxyType({})
    return MappingProxyType(dict(d))


@dataclass(frozen=True)
class ConnectionOptions:
    """
    Параметры соединения, передаваемые транспорту.

    Args:
        headers: Заголовки для каждого запроса
        open_timeout: Таймаут установки соединения (сек)
        timeout: Таймаут ответа (сек)
        verify_ssl: Проверять TLS сертификаты
        raw: Парсить тело как JSON независимо от Content-Type

    Examples:
        >>> ConnectionOptions(open_timeout=2, timeout=30)
        >>> DEFAULT_CONNECTION_OPTIONS.with_headers({"X-Debug": "1"})
    """
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    open_timeout: float = 5
    timeout: float = 10
    verify_ssl: bool = False
    raw: bool = True

    def __post_init__(self):
        """Freeze headers."""
        if not isinstance(self.headers, MappingProxyType):
            object.__setattr__(self, 'headers', _freeze_dict(self.headers))

    def as_timeout(self) -> Tuple[float, float]:
        """Вернуть как (connect, read) для requests."""
        return (self.open_timeout, self.timeout)

    def with_headers(self, headers: Mapping[str, str]) -> 'ConnectionOptions':
        """
        Новые опции с дополнительными заголовками.

        Example:
            >>> options = options.with_headers({"X-Debug": "1"})
        """
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=merged)

    def with_timeouts(
        self,
        open_timeout: Optional[float] = None,
        timeout: Optional[float] = None
    ) -> 'ConnectionOptions':
        """Новые опции с изменёнными таймаутами."""
        return replace(
            self,
            open_timeout=self.open_timeout if open_timeout is None else open_timeout,
            timeout=self.timeout if timeout is None else timeout,
        )


DEFAULT_CONNECTION_OPTIONS = ConnectionOptions(
    headers={
        'Accept': 'application/json',
        'User-Agent': USER_AGENT,
    },
    open_timeout=5,
    timeout=10,
    verify_ssl=False,
    raw=True,
)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# DEFAULTS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

# Можно заменить на Twitter-совместимый endpoint
DEFAULT_ENDPOINT = 'https://api.twitter.com'

# Используется для загрузки медиа
DEFAULT_MEDIA_ENDPOINT = 'https://upload.twitter.com'

# Поле конфигурации -> переменная окружения
CREDENTIAL_ENV_VARS = {
    'consumer_key': 'TWITTER_CONSUMER_KEY',
    'consumer_secret': 'TWITTER_CONSUMER_SECRET',
    'oauth_token': 'TWITTER_OAUTH_TOKEN',
    'oauth_token_secret': 'TWITTER_OAUTH_TOKEN_SECRET',
}

# Фиксированный набор ключей конфигурации
VALID_OPTIONS_KEYS = (
    'connection_options',
    'consumer_key',
    'consumer_secret',
    'endpoint',
    'media_endpoint',
    'middleware',
    'oauth_token',
    'oauth_token_secret',
)


@lru_cache(maxsize=None)
def default_middleware() -> Tuple['Middleware', ...]:
    """
    Канонический стек middleware (первый оборачивает все остальные).

    Исходящий запрос проходит список сверху вниз, ответ - снизу вверх:
    RateLimitTracker и ParseJson видят ответ раньше классификаторов ошибок.
    """
    # Lazy import to avoid circular dependency
    from ..middleware import (
        MultipartWithFile,
        Multipart,
        UrlEncoded,
        RaiseClientError,
        RaiseServerError,
        ParseJson,
        RateLimitTracker,
    )

    return (
        MultipartWithFile(),   # Файлы -> UploadPart
        Multipart(),           # Есть UploadPart -> multipart/form-data
        UrlEncoded(),          # Остальные params -> x-www-form-urlencoded
        RaiseClientError(),    # 4xx
        RaiseServerError(),    # 5xx
        ParseJson(),           # JSON тело -> parsed
        RateLimitTracker(),    # x-rate-limit-* -> RATE_LIMIT
    )


def resolve_defaults(getenv: Optional[EnvLookup] = None) -> Dict[str, Any]:
    """
    Значения по умолчанию для всех ключей конфигурации.

    Args:
        getenv: Функция чтения окружения (по умолчанию os.environ.get).
                Отсутствующая переменная -> пустая строка, не ошибка.

    Returns:
        Словарь ключ -> значение в порядке VALID_OPTIONS_KEYS

    Example:
        >>> defaults = resolve_defaults({"TWITTER_CONSUMER_KEY": "abc"}.get)
        >>> defaults["consumer_key"]
        'abc'
        >>> defaults["oauth_token"]
        ''
    """
    lookup = getenv or os.environ.get

    values: Dict[str, Any] = {
        'connection_options': DEFAULT_CONNECTION_OPTIONS,
        'endpoint': DEFAULT_ENDPOINT,
        'media_endpoint': DEFAULT_MEDIA_ENDPOINT,
        'middleware': default_middleware(),
    }
    for key, env_name in CREDENTIAL_ENV_VARS.items():
        values[key] = lookup(env_name) or ''

    return {key: values[key] for key in VALID_OPTIONS_KEYS}

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CONFIGURATION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass
class Configuration:
    """
    Активная конфигурация одного клиента.

    Mutable: изменяется через configure()/reset() или прямым присваиванием.
    Между клиентами не разделяется - используйте copy().

    Examples:
        >>> config = Configuration().reset()
        >>> config.configure(lambda c: setattr(c, 'endpoint', 'https://example.com'))
        >>> config.snapshot()['endpoint']
        'https://example.com'
    """
    connection_options: ConnectionOptions = DEFAULT_CONNECTION_OPTIONS
    consumer_key: str = ''
    consumer_secret: str = ''
    endpoint: str = DEFAULT_ENDPOINT
    media_endpoint: str = DEFAULT_MEDIA_ENDPOINT
    middleware: Tuple['Middleware', ...] = field(default_factory=default_middleware)
    oauth_token: str = ''
    oauth_token_secret: str = ''

    def reset(self, getenv: Optional[EnvLookup] = None) -> 'Configuration':
        """
        Сбросить все поля в значения по умолчанию (in place).

        Returns:
            self (для chaining)
        """
        for key, value in resolve_defaults(getenv).items():
            setattr(self, key, value)
        return self

    def configure(self, mutator: Callable[['Configuration'], Any]) -> 'Configuration':
        """
        Применить mutator к живой конфигурации.

        Валидации нет: невалидные значения проявятся при запросе.

        Example:
            >>> def setup(config):
            ...     config.consumer_key = "key"
            ...     config.consumer_secret = "secret"
            >>> config.configure(setup)
        """
        mutator(self)
        return self

    def snapshot(self) -> Mapping[str, Any]:
        """Immutable mapping всех ключей VALID_OPTIONS_KEYS."""
        return MappingProxyType({key: getattr(self, key) for key in VALID_OPTIONS_KEYS})

    def copy(self) -> 'Configuration':
        """Независимая копия (поля-значения immutable, копирование поверхностное)."""
        return Configuration(**dict(self.snapshot()))

    def update(self, options: Mapping[str, Any]) -> 'Configuration':
        """
        Установить несколько ключей сразу.

        connection_options можно передать mapping'ом - он накладывается на
        DEFAULT_CONNECTION_OPTIONS (headers сливаются с заголовками по умолчанию).

        Example:
            >>> config.update({'connection_options': {'timeout': 30}})

        Raises:
            ConfigurationError: неизвестный ключ или невалидные connection_options
        """
        from .exceptions import ConfigurationError

        unknown = sorted(set(options) - set(VALID_OPTIONS_KEYS))
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration option(s): {', '.join(unknown)}. "
                f"Valid options: {', '.join(VALID_OPTIONS_KEYS)}"
            )
        for key, value in options.items():
            if key == 'middleware':
                value = tuple(value)
            elif key == 'connection_options':
                value = _coerce_connection_options(value)
            setattr(self, key, value)
        return self


def _coerce_connection_options(value: Any) -> ConnectionOptions:
    """ConnectionOptions как есть, mapping -> ConnectionOptions поверх defaults."""
    from .exceptions import ConfigurationError

    if isinstance(value, ConnectionOptions):
        return value
    if not isinstance(value, Mapping):
        raise ConfigurationError(
            f"connection_options must be ConnectionOptions or a mapping, got {type(value).__name__}"
        )

    allowed = {f.name for f in fields(ConnectionOptions)}
    unknown = sorted(set(value) - allowed)
    if unknown:
        raise ConfigurationError(
            f"Unknown connection option(s): {', '.join(unknown)}. "
            f"Valid options: {', '.join(sorted(allowed))}"
        )

    overrides = dict(value)
    headers = overrides.pop('headers', None) or {}
    return replace(DEFAULT_CONNECTION_OPTIONS, **overrides).with_headers(headers)
