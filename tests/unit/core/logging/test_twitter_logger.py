"""
Tests for TwitterLogger.
"""

import json
import logging
from logging.handlers import RotatingFileHandler

from twitter_rest.core.logging.config import LoggingConfig, LogLevel
from twitter_rest.core.logging.filters import (
    RequestContextFilter,
    SecretMaskingFilter,
    clear_correlation_id,
    set_correlation_id,
    set_transaction_id,
)
from twitter_rest.core.logging.logger import TwitterLogger


def _read_records(path):
    with open(path, encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


class TestTwitterLogger:
    """Tests for TwitterLogger class."""

    def setup_method(self):
        clear_correlation_id()

    def test_creation_with_defaults(self):
        logger = TwitterLogger(name="twitter_rest.test_defaults")

        assert logger.config.level == LogLevel.INFO
        assert len(logger.handlers) == 1
        logger.close()

    def test_does_not_propagate(self):
        logger = TwitterLogger(name="twitter_rest.test_propagate")
        assert logging.getLogger("twitter_rest.test_propagate").propagate is False
        logger.close()

    def test_reinitialization_replaces_handlers(self):
        first = TwitterLogger(name="twitter_rest.test_reinit")
        second = TwitterLogger(name="twitter_rest.test_reinit")

        assert len(second.handlers) == 1
        first.close()
        second.close()

    def test_writes_json_with_masked_fields(self, logging_config_with_file):
        logger = TwitterLogger(config=logging_config_with_file, name="twitter_rest.test_json")
        set_correlation_id("req-42")

        logger.info(
            "Request started",
            method="POST",
            params={"status": "hi", "oauth_token_secret": "shh"},
            authorization='OAuth oauth_signature="sig"',
        )
        logger.close()

        records = _read_records(logging_config_with_file.file_path)
        assert len(records) == 1
        record = records[0]
        assert record["message"] == "Request started"
        assert record["method"] == "POST"
        assert record["correlation_id"] == "req-42"
        assert record["params"] == {"status": "hi", "oauth_token_secret": "***REDACTED***"}
        assert "sig" not in json.dumps(record)

    def test_level_filtering(self, tmp_path):
        config = LoggingConfig.create(
            level="WARNING",
            format="json",
            enable_console=False,
            enable_file=True,
            file_path=str(tmp_path / "warn.log"),
        )
        logger = TwitterLogger(config=config, name="twitter_rest.test_level")

        logger.debug("hidden")
        logger.info("hidden")
        logger.warning("shown")
        logger.error("shown too")
        logger.close()

        messages = [r["message"] for r in _read_records(config.file_path)]
        assert messages == ["shown", "shown too"]

    def test_extra_fields(self, tmp_path):
        config = LoggingConfig.create(
            format="json",
            enable_console=False,
            enable_file=True,
            file_path=str(tmp_path / "extra.log"),
            extra_fields={"service": "timeline-sync"},
        )
        with TwitterLogger(config=config, name="twitter_rest.test_extra") as logger:
            logger.info("hello")

        assert _read_records(config.file_path)[0]["service"] == "timeline-sync"

    def test_close_is_idempotent(self):
        logger = TwitterLogger(name="twitter_rest.test_close")

        logger.close()
        logger.close()

        assert logger.handlers == []

    def test_handlers_carry_context_and_masking(self, logging_config_with_file):
        logger = TwitterLogger(config=logging_config_with_file, name="twitter_rest.test_filters")

        (handler,) = logger.handlers
        assert isinstance(handler, RotatingFileHandler)
        assert [type(f) for f in handler.filters] == [RequestContextFilter, SecretMaskingFilter]
        logger.close()

    def test_file_directory_is_created(self, tmp_path):
        config = LoggingConfig.create(
            enable_console=False,
            enable_file=True,
            file_path=str(tmp_path / "nested" / "dir" / "twitter.log"),
            backup_count=2,
        )
        logger = TwitterLogger(config=config, name="twitter_rest.test_nested")

        assert (tmp_path / "nested" / "dir").is_dir()
        assert logger.handlers[0].backupCount == 2
        logger.close()

    def test_transaction_id_in_records(self, logging_config_with_file):
        logger = TwitterLogger(config=logging_config_with_file, name="twitter_rest.test_tx")
        set_correlation_id("req-7")
        set_transaction_id({"x-transaction-id": "00a1b2"})

        logger.info("Request completed", status_code=200)
        logger.close()

        record = _read_records(logging_config_with_file.file_path)[0]
        assert record["correlation_id"] == "req-7"
        assert record["transaction_id"] == "00a1b2"

    def test_masking_can_be_disabled(self, tmp_path):
        config = LoggingConfig.create(
            format="json",
            enable_console=False,
            enable_file=True,
            file_path=str(tmp_path / "raw.log"),
            mask_secrets=False,
        )
        with TwitterLogger(config=config, name="twitter_rest.test_raw") as logger:
            logger.info("debug dump", oauth_token="ot")

        assert _read_records(config.file_path)[0]["oauth_token"] == "ot"
