"""
Environment Configuration and Logging Examples

Shows load_from_env(), configure()/reset()/snapshot() and structured logging.
"""

from twitter_rest import Client, LoggingConfig, load_from_env
from twitter_rest.core.rate_limit import RateLimit
from twitter_rest.middleware import (
    MultipartWithFile,
    Multipart,
    UrlEncoded,
    RaiseClientError,
    RaiseServerError,
    ParseJson,
    RateLimitTracker,
)
from twitter_rest.utils import mask_sensitive_data


def from_env_file():
    """
    Load configuration from .env file.

    Example .env:
        TWITTER_CONSUMER_KEY=abc
        TWITTER_CONSUMER_SECRET=def
        TWITTER_TIMEOUT=30
    """
    print("\n=== Load from .env ===")

    config = load_from_env(env_file=".env", open_timeout=2)
    print(mask_sensitive_data(dict(config.snapshot(), middleware=len(config.middleware))))


def configure_and_reset():
    """configure() меняет живую конфигурацию, reset() возвращает defaults."""
    print("\n=== configure / reset ===")

    client = Client()

    def setup(config):
        config.endpoint = "https://twitter.example.com"
        config.connection_options = config.connection_options.with_timeouts(timeout=60)

    client.configure(setup)
    print(f"After configure: {client.snapshot()['endpoint']}")

    client.reset()
    print(f"After reset: {client.snapshot()['endpoint']}")
    client.close()


def isolated_rate_limit():
    """Собственный RateLimit вместо процессного."""
    print("\n=== Isolated rate limit ===")

    rate_limit = RateLimit()
    client = Client(middleware=[
        MultipartWithFile(),
        Multipart(),
        UrlEncoded(),
        RaiseClientError(),
        RaiseServerError(),
        ParseJson(),
        RateLimitTracker(rate_limit),
    ])
    print(f"Pipeline: {list(client.connection().middleware)}")
    client.close()


def json_logging():
    """Структурированные логи с correlation id; OAuth значения маскируются."""
    print("\n=== JSON logging ===")

    logging_config = LoggingConfig.create(
        level="INFO",
        format="json",
        extra_fields={"service": "timeline-sync"},
    )
    with Client(logging_config=logging_config) as client:
        client.get("/1.1/help/configuration.json")


if __name__ == "__main__":
    print("Twitter REST Client - Configuration")
    print("=" * 50)

    from_env_file()
    configure_and_reset()
    isolated_rate_limit()
    json_logging()
