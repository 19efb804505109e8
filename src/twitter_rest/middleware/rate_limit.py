# src/twitter_rest/middleware/rate_limit.py

import logging
from typing import Optional

from ..core.messages import Request, Response
from ..core.rate_limit import RATE_LIMIT, RateLimit
from .base import Middleware

logger = logging.getLogger(__name__)


class RateLimitTracker(Middleware):
    """
    Обновляет RateLimit из заголовков каждого ответа.

    Стоит ближе к транспорту, чем классификаторы ошибок, поэтому
    состояние обновляется и для 4xx/5xx. Никогда не выбрасывает исключений.

    Args:
        rate_limit: Хранилище состояния (по умолчанию процессный RATE_LIMIT)
    """

    def __init__(self, rate_limit: Optional[RateLimit] = None):
        self.rate_limit = rate_limit if rate_limit is not None else RATE_LIMIT

    def on_response(self, request: Request, response: Response) -> Response:
        try:
            updated = self.rate_limit.update(response.headers)
        except Exception as e:
            # Трекинг не должен ломать запрос
            logger.warning("Failed to update rate limit", extra={'url': response.url, 'error': str(e)})
            return response

        if updated:
            status = self.rate_limit.status
            logger.debug(
                "Rate limit updated",
                extra={
                    'url': response.url,
                    'limit': status.limit,
                    'remaining': status.remaining,
                    'reset': status.reset,
                }
            )
        return response
