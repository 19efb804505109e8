"""
Фильтры записей клиента: контекст текущего запроса и маскирование OAuth.

Контекст запроса хранится per-thread: correlation id выставляет Client
перед отправкой, transaction id приходит от Twitter в заголовке
``x-transaction-id`` и нужен для обращений в поддержку API.
"""

import logging
import threading
from typing import Any, Dict, Mapping, Optional

from ...utils.sanitizer import mask_sensitive_data

TRANSACTION_HEADER = 'x-transaction-id'

# Стандартные атрибуты LogRecord; все остальное пришло через extra
RECORD_ATTRIBUTES = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'message', 'pathname', 'process', 'processName', 'relativeCreated',
    'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
    'asctime', 'taskName',
})

_context = threading.local()


def set_correlation_id(correlation_id: str) -> None:
    """Начинает контекст запроса в текущем потоке."""
    _context.correlation_id = correlation_id
    _context.transaction_id = None


def get_correlation_id() -> Optional[str]:
    """
    Correlation id текущего запроса (None вне запроса).

    Example:
        >>> set_correlation_id("3f2b9c...")
        >>> get_correlation_id()
        '3f2b9c...'
    """
    return getattr(_context, 'correlation_id', None)


def set_transaction_id(headers: Optional[Mapping[str, str]]) -> Optional[str]:
    """Запоминает x-transaction-id из заголовков ответа Twitter."""
    transaction_id = None
    for key, value in (headers or {}).items():
        if key.lower() == TRANSACTION_HEADER:
            transaction_id = value
            break
    _context.transaction_id = transaction_id
    return transaction_id


def get_transaction_id() -> Optional[str]:
    return getattr(_context, 'transaction_id', None)


def clear_correlation_id() -> None:
    """Закрывает контекст запроса текущего потока."""
    _context.__dict__.clear()


def record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    """Поля, добавленные в запись через extra или фильтрами."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in RECORD_ATTRIBUTES and not key.startswith('_')
    }


class RequestContextFilter(logging.Filter):
    """
    Добавляет в запись статические поля клиента и ids текущего запроса.

    Явно переданные в extra значения не перезаписываются.

    Example:
        >>> handler.addFilter(RequestContextFilter({"service": "timeline-sync"}))
    """

    def __init__(self, static_fields: Optional[Mapping[str, Any]] = None, request_ids: bool = True):
        super().__init__()
        self.static_fields = dict(static_fields or {})
        self.request_ids = request_ids

    def filter(self, record: logging.LogRecord) -> bool:
        fields = dict(self.static_fields)
        if self.request_ids:
            if get_correlation_id():
                fields['correlation_id'] = get_correlation_id()
            if get_transaction_id():
                fields['transaction_id'] = get_transaction_id()

        for key, value in fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class SecretMaskingFilter(logging.Filter):
    """
    Маскирует OAuth секреты в extra полях и в тексте сообщения.

    Ключи вида consumer_secret/oauth_token заменяются целиком, строки
    (Authorization заголовок, URL с query) чистятся по шаблонам.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in record_extras(record).items():
            setattr(record, key, mask_sensitive_data({key: value})[key])

        if isinstance(record.msg, str):
            record.msg = mask_sensitive_data(record.msg)
        if record.args:
            record.args = mask_sensitive_data(record.args)
        return True
