# src/twitter_rest/utils/sanitizer.py
"""
Утилита для маскирования чувствительных данных в логах.

Защищает OAuth ключи, токены и подписи от попадания в логи.
"""

import re
from typing import Any, Dict, Mapping


# Чувствительные поля (case-insensitive, частичное совпадение)
SENSITIVE_KEYS = {
    # OAuth 1.0a
    'consumer_key', 'consumer_secret', 'oauth_token', 'oauth_token_secret',
    'oauth_signature', 'oauth_verifier',
    # OAuth 2.0
    'bearer_token', 'access_token', 'refresh_token',
    # Общие
    'secret', 'password', 'authorization', 'cookie',
}

# Регулярные выражения для строк (заголовки, URL)
SENSITIVE_PATTERNS = [
    # Bearer tokens в заголовках
    (re.compile(r'(Bearer\s+)([A-Za-z0-9\-._~+/%]+=*)', re.IGNORECASE), r'\1***REDACTED***'),
    # OAuth заголовок: oauth_signature="...", oauth_token="..."
    (re.compile(r'(oauth_(?:signature|token|consumer_key)=")([^"]*)(")', re.IGNORECASE), r'\1***REDACTED***\3'),
    # Query параметры: oauth_token=value
    (re.compile(
        r'((?:oauth_(?:signature|token|consumer_key|verifier)|access_token|bearer_token)=)([^\s&,;"]+)',
        re.IGNORECASE
    ), r'\1***REDACTED***'),
]


def mask_sensitive_data(data: Any, mask: str = "***REDACTED***") -> Any:
    """
    Рекурсивно маскирует чувствительные данные в словарях, списках, строках.

    Args:
        data: Данные для маскирования (dict, list, str, или любой другой тип)
        mask: Строка-заменитель для sensitive данных

    Returns:
        Копия данных с замаскированными чувствительными полями

    Examples:
        >>> mask_sensitive_data({"consumer_key": "abc", "status": "hi"})
        {'consumer_key': '***REDACTED***', 'status': 'hi'}

        >>> mask_sensitive_data('OAuth oauth_token="12345", oauth_nonce="n"')
        'OAuth oauth_token="***REDACTED***", oauth_nonce="n"'
    """
    # None, числа, булевы значения возвращаем как есть
    if data is None or isinstance(data, (bool, int, float)):
        return data

    if isinstance(data, str):
        result = data
        for pattern, replacement in SENSITIVE_PATTERNS:
            result = pattern.sub(replacement, result)
        return result

    if isinstance(data, Mapping):
        return _mask_dict(data, mask)

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    # Для других типов (объекты, etc) возвращаем как есть
    return data


def _mask_dict(data: Mapping[str, Any], mask: str) -> Dict[str, Any]:
    result = {}
    for key, value in data.items():
        if is_sensitive_key(str(key)):
            # Пустые значения не маскируем - видно, что креды не заданы
            result[key] = mask if value else value
        else:
            result[key] = mask_sensitive_data(value, mask)
    return result


def is_sensitive_key(key: str) -> bool:
    """
    Проверяет, является ли ключ чувствительным.

    Examples:
        >>> is_sensitive_key("X-Consumer_Key")
        True
        >>> is_sensitive_key("endpoint")
        False
    """
    key_lower = key.lower()
    return any(sensitive in key_lower for sensitive in SENSITIVE_KEYS)
