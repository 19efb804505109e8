"""
Configuration loader from environment variables and .env files.
"""

from dataclasses import replace
from typing import Any, Optional

from pydantic import ValidationError

from ..config import Configuration, DEFAULT_CONNECTION_OPTIONS, default_middleware
from ..exceptions import ConfigurationError
from .settings import TwitterSettings


def load_from_env(env_file: Optional[str] = None, **overrides: Any) -> Configuration:
    """
    Load Configuration from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters (любые поля TwitterSettings)
    2. Environment variables (TWITTER_*)
    3. .env file
    4. Defaults

    Args:
        env_file: Путь к .env файлу
        **overrides: Явные значения

    Returns:
        Configuration instance

    Raises:
        ConfigurationError: значения не прошли валидацию

    Example:
        >>> config = load_from_env(env_file=".env", timeout=30)
    """
    try:
        settings = TwitterSettings(_env_file=env_file, **overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid environment configuration: {e}") from e

    options = replace(
        DEFAULT_CONNECTION_OPTIONS,
        open_timeout=settings.open_timeout,
        timeout=settings.timeout,
        verify_ssl=settings.verify_ssl,
        raw=settings.raw,
    )
    if settings.user_agent:
        options = options.with_headers({'User-Agent': settings.user_agent})

    return Configuration(
        connection_options=options,
        consumer_key=settings.consumer_key,
        consumer_secret=settings.consumer_secret,
        endpoint=settings.endpoint,
        media_endpoint=settings.media_endpoint,
        middleware=default_middleware(),
        oauth_token=settings.oauth_token,
        oauth_token_secret=settings.oauth_token_secret,
    )
