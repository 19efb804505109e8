"""
Настройки структурированного лога клиента.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..config import EnvLookup


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Куда и как TwitterLogger пишет записи о запросах.

    Attributes:
        level: Минимальный уровень записи
        format: json (для доставки в лог-хранилище) или text
        enable_console: Писать в stdout
        enable_file: Писать в ротируемый файл file_path
        file_path: Путь к файлу лога
        max_bytes: Размер файла до ротации
        backup_count: Сколько ротированных файлов хранить
        request_context: Добавлять correlation_id и transaction_id запроса
        mask_secrets: Маскировать OAuth ключи, токены и подписи
        extra_fields: Статические поля каждой записи (service, environment)

    Example:
        >>> LoggingConfig.create(level="DEBUG", format="json", extra_fields={"service": "timeline-sync"})
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5
    request_context: bool = True
    mask_secrets: bool = True
    extra_fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.enable_file and not self.file_path:
            raise ValueError("file_path is required when enable_file=True")

    @classmethod
    def create(
        cls,
        level: str = "INFO",
        format: str = "text",
        enable_console: bool = True,
        enable_file: bool = False,
        file_path: Optional[str] = None,
        extra_fields: Optional[Dict[str, Any]] = None,
        **kwargs: Any
    ) -> "LoggingConfig":
        """
        LoggingConfig из строковых значений.

        Raises:
            ValueError: неизвестный уровень или формат
        """
        return cls(
            level=LogLevel(level.upper()),
            format=LogFormat(format.lower()),
            enable_console=enable_console,
            enable_file=enable_file,
            file_path=file_path,
            extra_fields=dict(extra_fields or {}),
            **kwargs
        )

    @classmethod
    def from_env(cls, getenv: Optional[EnvLookup] = None, **kwargs: Any) -> "LoggingConfig":
        """
        Читает TWITTER_LOG_LEVEL, TWITTER_LOG_FORMAT и TWITTER_LOG_FILE.

        Заданный TWITTER_LOG_FILE включает файловый лог.

        Example:
            >>> client = Client(logging_config=LoggingConfig.from_env())
        """
        lookup = getenv or os.environ.get
        file_path = lookup('TWITTER_LOG_FILE') or None
        kwargs.setdefault('enable_file', file_path is not None)
        return cls.create(
            level=lookup('TWITTER_LOG_LEVEL') or "INFO",
            format=lookup('TWITTER_LOG_FORMAT') or "text",
            file_path=file_path,
            **kwargs
        )
