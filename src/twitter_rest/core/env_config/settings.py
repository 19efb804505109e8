"""
Pydantic settings for loading client configuration from the environment.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..config import DEFAULT_ENDPOINT, DEFAULT_MEDIA_ENDPOINT


class TwitterSettings(BaseSettings):
    """
    Конфигурация клиента из переменных окружения.

    Reads from:
    1. Environment variables (TWITTER_*)
    2. .env file (если передан _env_file)
    3. Defaults

    Example .env file:
        TWITTER_CONSUMER_KEY=abc
        TWITTER_CONSUMER_SECRET=def
        TWITTER_OAUTH_TOKEN=123-ghi
        TWITTER_OAUTH_TOKEN_SECRET=jkl
        TWITTER_ENDPOINT=https://api.twitter.com
        TWITTER_OPEN_TIMEOUT=5
        TWITTER_TIMEOUT=10
    """

    model_config = SettingsConfigDict(
        env_prefix='TWITTER_',
        env_file=None,
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # Credentials
    consumer_key: str = Field(default="")
    consumer_secret: str = Field(default="")
    oauth_token: str = Field(default="")
    oauth_token_secret: str = Field(default="")

    # Endpoints
    endpoint: str = Field(default=DEFAULT_ENDPOINT)
    media_endpoint: str = Field(default=DEFAULT_MEDIA_ENDPOINT)

    # Connection
    open_timeout: float = Field(default=5.0, gt=0, description="Connect timeout in seconds")
    timeout: float = Field(default=10.0, gt=0, description="Response timeout in seconds")
    verify_ssl: bool = Field(default=False)
    raw: bool = Field(default=True)
    user_agent: Optional[str] = None

    @field_validator('endpoint', 'media_endpoint')
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Endpoint должен быть абсолютным http(s) URL."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"endpoint must start with http:// or https://, got: {v!r}")
        return v.rstrip('/')
