# src/twitter_rest/middleware/raise_server_error.py

import logging

from ..core.exceptions import ServerError
from ..core.messages import Request, Response
from .base import Middleware

logger = logging.getLogger(__name__)


class RaiseServerError(Middleware):
    """
    Выбрасывает ServerError на 5xx ответы.

    Только классификация: retry остается на вызывающем коде
    (ServerError.retryable == True).
    """

    def on_response(self, request: Request, response: Response) -> Response:
        if 500 <= response.status_code <= 599:
            error = ServerError.from_response(response)
            logger.debug(
                "Server error response",
                extra={
                    'url': response.url,
                    'status_code': response.status_code,
                    'error_type': type(error).__name__,
                }
            )
            raise error
        return response
