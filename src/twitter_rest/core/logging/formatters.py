"""
Log formatters: JSON for log shipping, text for humans.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from .filters import record_extras


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Example output:
        {"timestamp": "2024-01-15T10:30:45.123000+00:00", "level": "INFO",
         "logger": "twitter_rest", "message": "Request completed",
         "method": "GET", "status_code": 200}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(record_extras(record))

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """
    Plain text formatter.

    Example output:
        [2024-01-15 10:30:45] [INFO] [twitter_rest] Request started method=GET url=https://api.twitter.com/...
    """

    def __init__(self):
        super().__init__(
            fmt='[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def format(self, record: logging.LogRecord) -> str:
        base_msg = super().format(record)

        extra = " ".join(f"{key}={value}" for key, value in record_extras(record).items())
        if extra:
            base_msg += " " + extra

        return base_msg


def get_formatter(format_type: str) -> logging.Formatter:
    """
    Formatter by name.

    Raises:
        ValueError: unknown format
    """
    formatters = {
        'json': JSONFormatter,
        'text': TextFormatter,
    }
    if format_type not in formatters:
        raise ValueError(f"Unknown log format: {format_type}. Use one of: {', '.join(formatters)}")
    return formatters[format_type]()
