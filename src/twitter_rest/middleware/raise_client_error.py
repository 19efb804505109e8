# src/twitter_rest/middleware/raise_client_error.py

import logging

from ..core.exceptions import ClientError
from ..core.messages import Request, Response
from .base import Middleware

logger = logging.getLogger(__name__)


class RaiseClientError(Middleware):
    """Выбрасывает ClientError (или зарегистрированный подкласс) на 4xx ответы"""

    def on_response(self, request: Request, response: Response) -> Response:
        if 400 <= response.status_code <= 499:
            error = ClientError.from_response(response)
            logger.debug(
                "Client error response",
                extra={
                    'url': response.url,
                    'status_code': response.status_code,
                    'error_type': type(error).__name__,
                }
            )
            raise error
        return response
