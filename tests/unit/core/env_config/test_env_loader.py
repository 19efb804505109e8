"""
Tests for configuration loading from the environment.
"""

import pytest

from twitter_rest.core.config import Configuration, DEFAULT_CONNECTION_OPTIONS, default_middleware
from twitter_rest.core.env_config import TwitterSettings, load_from_env
from twitter_rest.core.exceptions import ConfigurationError


TWITTER_VARS = (
    "TWITTER_CONSUMER_KEY",
    "TWITTER_CONSUMER_SECRET",
    "TWITTER_OAUTH_TOKEN",
    "TWITTER_OAUTH_TOKEN_SECRET",
    "TWITTER_ENDPOINT",
    "TWITTER_MEDIA_ENDPOINT",
    "TWITTER_OPEN_TIMEOUT",
    "TWITTER_TIMEOUT",
    "TWITTER_VERIFY_SSL",
    "TWITTER_RAW",
    "TWITTER_USER_AGENT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Изолируем тесты от реальных TWITTER_* переменных."""
    for name in TWITTER_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadFromEnv:
    """Test load_from_env function."""

    def test_load_with_defaults(self):
        config = load_from_env()

        assert isinstance(config, Configuration)
        assert config.consumer_key == ''
        assert config.endpoint == 'https://api.twitter.com'
        assert config.media_endpoint == 'https://upload.twitter.com'
        assert config.connection_options == DEFAULT_CONNECTION_OPTIONS
        assert config.middleware == default_middleware()

    def test_load_from_environment(self, monkeypatch):
        monkeypatch.setenv("TWITTER_CONSUMER_KEY", "ck")
        monkeypatch.setenv("TWITTER_OAUTH_TOKEN_SECRET", "ots")
        monkeypatch.setenv("TWITTER_TIMEOUT", "30")
        monkeypatch.setenv("TWITTER_VERIFY_SSL", "true")

        config = load_from_env()

        assert config.consumer_key == 'ck'
        assert config.oauth_token_secret == 'ots'
        assert config.connection_options.timeout == 30
        assert config.connection_options.verify_ssl is True

    def test_load_from_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "TWITTER_CONSUMER_SECRET=from-file\n"
            "TWITTER_OPEN_TIMEOUT=2.5\n"
            "TWITTER_ENDPOINT=https://twitter.example.com/\n"
        )

        config = load_from_env(env_file=str(env_file))

        assert config.consumer_secret == 'from-file'
        assert config.connection_options.open_timeout == 2.5
        assert config.endpoint == 'https://twitter.example.com'

    def test_environment_wins_over_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("TWITTER_CONSUMER_KEY=from-file\n")
        monkeypatch.setenv("TWITTER_CONSUMER_KEY", "from-env")

        assert load_from_env(env_file=str(env_file)).consumer_key == 'from-env'

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("TWITTER_CONSUMER_KEY", "from-env")

        config = load_from_env(consumer_key="explicit", timeout=45)

        assert config.consumer_key == 'explicit'
        assert config.connection_options.timeout == 45

    def test_user_agent_header(self):
        config = load_from_env(user_agent="TimelineSync/1.0")

        headers = config.connection_options.headers
        assert headers['User-Agent'] == 'TimelineSync/1.0'
        assert headers['Accept'] == 'application/json'

    def test_invalid_timeout(self):
        with pytest.raises(ConfigurationError, match="Invalid environment configuration"):
            load_from_env(timeout=0)

    def test_invalid_endpoint(self, monkeypatch):
        monkeypatch.setenv("TWITTER_ENDPOINT", "api.twitter.com")

        with pytest.raises(ConfigurationError):
            load_from_env()

    def test_configurations_are_independent(self):
        first = load_from_env()
        second = load_from_env()

        first.consumer_key = 'changed'

        assert first is not second
        assert second.consumer_key == ''


class TestTwitterSettings:

    def test_unknown_variables_ignored(self, monkeypatch):
        monkeypatch.setenv("TWITTER_SOMETHING_ELSE", "x")
        settings = TwitterSettings()
        assert settings.consumer_key == ''

    def test_media_endpoint_validated(self):
        with pytest.raises(ValueError):
            TwitterSettings(media_endpoint="ftp://upload.twitter.com")
