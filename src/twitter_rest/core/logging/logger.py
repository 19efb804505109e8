"""
Structured logger for the Twitter REST client.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, List, Optional

from .config import LoggingConfig
from .filters import RequestContextFilter, SecretMaskingFilter
from .formatters import get_formatter


class TwitterLogger:
    """
    Обертка над logging.Logger: keyword поля становятся extra записи.

    Каждый handler получает фильтры контекста запроса и маскирования,
    поэтому секреты не попадают ни в консоль, ни в файл.

    Example:
        >>> logger = TwitterLogger(LoggingConfig.create(level="DEBUG"))
        >>> logger.info("Request started", method="GET", url="https://api.twitter.com/1.1/...")
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "twitter_rest"):
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        level = getattr(logging, self.config.level.value)

        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Повторная инициализация с тем же name заменяет handlers
        for handler in self._logger.handlers[:]:
            handler.close()
            self._logger.removeHandler(handler)

        for handler in self._build_handlers():
            handler.setLevel(level)
            handler.setFormatter(get_formatter(self.config.format.value))
            for log_filter in self._build_filters():
                handler.addFilter(log_filter)
            self._logger.addHandler(handler)

    def _build_filters(self) -> List[logging.Filter]:
        filters: List[logging.Filter] = []
        if self.config.request_context or self.config.extra_fields:
            filters.append(RequestContextFilter(
                self.config.extra_fields,
                request_ids=self.config.request_context,
            ))
        if self.config.mask_secrets:
            filters.append(SecretMaskingFilter())
        return filters

    def _build_handlers(self) -> List[logging.Handler]:
        handlers: List[logging.Handler] = []
        if self.config.enable_console:
            handlers.append(logging.StreamHandler(sys.stdout))

        if self.config.enable_file and self.config.file_path:
            Path(self.config.file_path).parent.mkdir(parents=True, exist_ok=True)
            handlers.append(RotatingFileHandler(
                filename=self.config.file_path,
                maxBytes=self.config.max_bytes,
                backupCount=self.config.backup_count,
                encoding='utf-8',
            ))
        return handlers

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        self._logger.log(level, message, extra=kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """
        Example:
            >>> logger.info("Request completed", status_code=200, duration_ms=150)
        """
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)

    @property
    def handlers(self):
        return list(self._logger.handlers)

    def close(self) -> None:
        """Flush and close all handlers. Idempotent."""
        if self._closed:
            return

        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
