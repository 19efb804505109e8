"""
Rate limit state, прочитанный из заголовков ответов API.

Хранится только последнее наблюдение (overwrite, не merge).
"""

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping, Optional

# Имена заголовков Twitter API v1.1 (регистр не важен)
LIMIT_HEADER = 'x-rate-limit-limit'
REMAINING_HEADER = 'x-rate-limit-remaining'
RESET_HEADER = 'x-rate-limit-reset'

RATE_LIMIT_HEADERS = (LIMIT_HEADER, REMAINING_HEADER, RESET_HEADER)


def _lookup(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive поиск заголовка в произвольном Mapping."""
    value = headers.get(name)
    if value is not None:
        return value
    for key, candidate in headers.items():
        if key.lower() == name:
            return candidate
    return None


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


@dataclass(frozen=True)
class RateLimitStatus:
    """
    Снимок rate limit.

    Attributes:
        limit: Потолок запросов в окне
        remaining: Сколько запросов осталось
        reset: Unix timestamp сброса окна

    Любое поле может быть None, если заголовок отсутствовал.
    """

    limit: Optional[int] = None
    remaining: Optional[int] = None
    reset: Optional[int] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> 'RateLimitStatus':
        """Собрать статус из заголовков (отсутствующие -> None)."""
        return cls(
            limit=_to_int(_lookup(headers, LIMIT_HEADER)),
            remaining=_to_int(_lookup(headers, REMAINING_HEADER)),
            reset=_to_int(_lookup(headers, RESET_HEADER)),
        )

    @property
    def is_empty(self) -> bool:
        return self.limit is None and self.remaining is None and self.reset is None

    @property
    def reset_at(self) -> Optional[datetime]:
        """Время сброса в UTC."""
        if self.reset is None:
            return None
        return datetime.fromtimestamp(self.reset, tz=timezone.utc)

    def reset_in(self, now: Optional[float] = None) -> Optional[int]:
        """
        Секунд до сброса окна (не меньше 0).

        Args:
            now: Текущее время (unix), по умолчанию time.time()
        """
        if self.reset is None:
            return None
        current = time.time() if now is None else now
        return max(int(self.reset - current), 0)


def has_rate_limit_headers(headers: Mapping[str, str]) -> bool:
    """True если присутствует хотя бы один rate limit заголовок."""
    return any(_lookup(headers, name) is not None for name in RATE_LIMIT_HEADERS)


class RateLimit:
    """
    Thread-safe хранилище последнего RateLimitStatus.

    Обновления сериализуются через lock, побеждает последнее
    завершившееся обновление.

    Example:
        >>> rate_limit = RateLimit()
        >>> rate_limit.update({"x-rate-limit-limit": "150", "x-rate-limit-remaining": "149"})
        True
        >>> rate_limit.remaining
        149
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._status = RateLimitStatus()

    def update(self, headers: Mapping[str, str]) -> bool:
        """
        Перезаписать состояние из заголовков ответа.

        Returns:
            True если состояние обновлено, False если заголовков нет
        """
        if not has_rate_limit_headers(headers):
            return False

        status = RateLimitStatus.from_headers(headers)
        with self._lock:
            self._status = status
        return True

    def reset(self) -> None:
        """Вернуть состояние в 'неизвестно'."""
        with self._lock:
            self._status = RateLimitStatus()

    @property
    def status(self) -> RateLimitStatus:
        with self._lock:
            return self._status

    @property
    def limit(self) -> Optional[int]:
        return self.status.limit

    @property
    def remaining(self) -> Optional[int]:
        return self.status.remaining

    @property
    def reset_at(self) -> Optional[datetime]:
        return self.status.reset_at

    def reset_in(self, now: Optional[float] = None) -> Optional[int]:
        return self.status.reset_in(now)

    def __repr__(self) -> str:
        status = self.status
        return (
            f"RateLimit(limit={status.limit}, remaining={status.remaining}, "
            f"reset={status.reset})"
        )


# Процессный экземпляр, который обновляет RateLimitTracker по умолчанию
RATE_LIMIT = RateLimit()
