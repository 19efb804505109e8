"""
Logging system for the Twitter REST client.

Example:
    >>> from twitter_rest.core.logging import LoggingConfig
    >>> from twitter_rest import Client
    >>>
    >>> client = Client(logging_config=LoggingConfig.create(level="DEBUG", format="json"))
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import TwitterLogger
from .formatters import JSONFormatter, TextFormatter, get_formatter
from .filters import (
    RequestContextFilter,
    SecretMaskingFilter,
    set_correlation_id,
    get_correlation_id,
    set_transaction_id,
    get_transaction_id,
    clear_correlation_id,
)

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "TwitterLogger",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",
    # Filters
    "RequestContextFilter",
    "SecretMaskingFilter",
    "set_correlation_id",
    "get_correlation_id",
    "set_transaction_id",
    "get_transaction_id",
    "clear_correlation_id",
]
