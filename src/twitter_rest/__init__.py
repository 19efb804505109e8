"""Twitter REST client core - configuration and request/response middleware."""

import logging

from .version import __version__
from .core.client import Client
from .core.config import (
    Configuration,
    ConnectionOptions,
    VALID_OPTIONS_KEYS,
    resolve_defaults,
)
from .core.env_config import load_from_env
from .core.exceptions import (
    TwitterError,
    TransportError,
    TimeoutError,
    ConnectionError,
    ClientError,
    BadRequest,
    Unauthorized,
    Forbidden,
    NotFound,
    TooManyRequests,
    ServerError,
    ServiceUnavailable,
    ParseError,
    ConfigurationError,
)
from .core.logging import LoggingConfig
from .core.messages import Request, Response, UploadPart
from .core.rate_limit import RATE_LIMIT, RateLimit, RateLimitStatus
from .middleware import (
    Middleware,
    Pipeline,
    MultipartWithFile,
    Multipart,
    UrlEncoded,
    RaiseClientError,
    RaiseServerError,
    ParseJson,
    RateLimitTracker,
)

# Set up logging - add NullHandler to prevent "No handler found" warnings
# Users can configure logging themselves using logging.getLogger('twitter_rest')
logging.getLogger('twitter_rest').addHandler(logging.NullHandler())

__author__ = "Twitter REST Core Contributors"
__license__ = "MIT"

__all__ = [
    # Core
    "Client",
    "Configuration",
    "ConnectionOptions",
    "VALID_OPTIONS_KEYS",
    "resolve_defaults",
    "load_from_env",
    "LoggingConfig",

    # Messages
    "Request",
    "Response",
    "UploadPart",

    # Rate limit
    "RATE_LIMIT",
    "RateLimit",
    "RateLimitStatus",

    # Middleware
    "Middleware",
    "Pipeline",
    "MultipartWithFile",
    "Multipart",
    "UrlEncoded",
    "RaiseClientError",
    "RaiseServerError",
    "ParseJson",
    "RateLimitTracker",

    # Exceptions
    "TwitterError",
    "TransportError",
    "TimeoutError",
    "ConnectionError",
    "ClientError",
    "BadRequest",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "TooManyRequests",
    "ServerError",
    "ServiceUnavailable",
    "ParseError",
    "ConfigurationError",

    # Version
    "__version__",
]
