"""
Pytest configuration and fixtures for twitter-rest-core tests.
"""

import pytest
import responses as responses_lib

from twitter_rest.core.client import Client
from twitter_rest.core.logging.config import LoggingConfig
from twitter_rest.core.logging.filters import clear_correlation_id
from twitter_rest.core.messages import Response
from twitter_rest.core.rate_limit import RATE_LIMIT, RateLimit
from twitter_rest.middleware import (
    MultipartWithFile,
    Multipart,
    UrlEncoded,
    RaiseClientError,
    RaiseServerError,
    ParseJson,
    RateLimitTracker,
)


class StubAdapter:
    """Adapter без I/O: отдает заранее подготовленные ответы по очереди."""

    def __init__(self):
        self.requests = []
        self.responses = []
        self.closed = False

    def add(self, status_code=200, body=b'', headers=None):
        if isinstance(body, str):
            body = body.encode('utf-8')
        self.responses.append(Response(status_code=status_code, headers=headers or {}, body=body))
        return self

    def send(self, request):
        self.requests.append(request)
        return self.responses.pop(0)

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def reset_global_state():
    """Процессный RATE_LIMIT и correlation id не должны протекать между тестами."""
    RATE_LIMIT.reset()
    clear_correlation_id()
    yield
    RATE_LIMIT.reset()
    clear_correlation_id()


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.twitter.com"


@pytest.fixture
def media_url():
    return "https://upload.twitter.com"


@pytest.fixture
def fake_env():
    """Фейковое окружение с OAuth кредами."""
    env = {
        "TWITTER_CONSUMER_KEY": "ck",
        "TWITTER_CONSUMER_SECRET": "cs",
        "TWITTER_OAUTH_TOKEN": "ot",
        "TWITTER_OAUTH_TOKEN_SECRET": "ots",
    }
    return env.get


@pytest.fixture
def empty_env():
    return {}.get


@pytest.fixture
def rate_limit():
    """Изолированное хранилище rate limit."""
    return RateLimit()


@pytest.fixture
def middleware_stack(rate_limit):
    """Канонический стек с изолированным RateLimitTracker."""
    return (
        MultipartWithFile(),
        Multipart(),
        UrlEncoded(),
        RaiseClientError(),
        RaiseServerError(),
        ParseJson(),
        RateLimitTracker(rate_limit),
    )


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def stub_adapter():
    return StubAdapter()


@pytest.fixture
def client(fake_env, middleware_stack):
    """Client поверх реального RequestsAdapter (мокается через mock_responses)."""
    client = Client(getenv=fake_env, middleware=middleware_stack)
    yield client
    client.close()


@pytest.fixture
def stub_client(fake_env, middleware_stack, stub_adapter):
    """Client поверх StubAdapter."""
    client = Client(getenv=fake_env, adapter=stub_adapter, middleware=middleware_stack)
    yield client
    client.close()


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig fixture with JSON file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "twitter.log"
    return LoggingConfig.create(
        level="DEBUG",
        format="json",
        enable_console=False,
        enable_file=True,
        file_path=str(log_file)
    )
