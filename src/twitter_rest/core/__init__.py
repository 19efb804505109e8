"""Core модули Twitter REST клиента."""

from .config import (
    ConnectionOptions,
    Configuration,
    DEFAULT_CONNECTION_OPTIONS,
    DEFAULT_ENDPOINT,
    DEFAULT_MEDIA_ENDPOINT,
    VALID_OPTIONS_KEYS,
    default_middleware,
    resolve_defaults,
)
from .exceptions import (
    TwitterError,
    TemporaryError,
    FatalError,
    TransportError,
    TimeoutError,
    ConnectionError,
    ProxyError,
    ClientError,
    BadRequest,
    Unauthorized,
    Forbidden,
    NotFound,
    NotAcceptable,
    EnhanceYourCalm,
    UnprocessableEntity,
    TooManyRequests,
    ServerError,
    InternalServerError,
    BadGateway,
    ServiceUnavailable,
    GatewayTimeout,
    ParseError,
    ConfigurationError,
    classify_requests_exception,
)
from .rate_limit import RateLimit, RateLimitStatus, RATE_LIMIT
from .messages import Request, Response, UploadPart
from .adapter import RequestsAdapter
from .client import Client

__all__ = [
    # Config
    "ConnectionOptions",
    "Configuration",
    "DEFAULT_CONNECTION_OPTIONS",
    "DEFAULT_ENDPOINT",
    "DEFAULT_MEDIA_ENDPOINT",
    "VALID_OPTIONS_KEYS",
    "default_middleware",
    "resolve_defaults",
    # Messages
    "Request",
    "Response",
    "UploadPart",
    # Rate limit
    "RateLimit",
    "RateLimitStatus",
    "RATE_LIMIT",
    # Core
    "Client",
    "RequestsAdapter",
    # Exceptions
    "TwitterError",
    "TemporaryError",
    "FatalError",
    "TransportError",
    "TimeoutError",
    "ConnectionError",
    "ProxyError",
    "ClientError",
    "BadRequest",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "NotAcceptable",
    "EnhanceYourCalm",
    "UnprocessableEntity",
    "TooManyRequests",
    "ServerError",
    "InternalServerError",
    "BadGateway",
    "ServiceUnavailable",
    "GatewayTimeout",
    "ParseError",
    "ConfigurationError",
    "classify_requests_exception",
]
