# src/twitter_rest/middleware/parse_json.py

import json
import logging

from ..core.exceptions import ParseError
from ..core.messages import Request, Response
from .base import Middleware

logger = logging.getLogger(__name__)


def signals_json(content_type: str) -> bool:
    """application/json, application/problem+json, text/json..."""
    media_type = content_type.split(';', 1)[0].strip().lower()
    return media_type.endswith('/json') or media_type.endswith('+json')


class ParseJson(Middleware):
    """
    Парсит JSON тело ответа в response.parsed.

    Парсит если Content-Type указывает на JSON или у запроса включен
    options.raw. Пустое тело -> parsed=None без ошибки.

    Битый JSON (включая невалидный UTF-8) -> ParseError. Исключение одно:
    парсинг запущен только флагом raw, Content-Type не JSON и статус
    4xx/5xx (HTML страница 502) - тогда parsed=None, и классификаторы
    выбросят ошибку с сообщением по статусу.
    """

    def on_response(self, request: Request, response: Response) -> Response:
        declared_json = signals_json(response.content_type)
        if not (declared_json or request.options.raw):
            return response

        if not response.body.strip():
            response.parsed = None
            response.is_parsed = True
            return response

        try:
            response.parsed = json.loads(response.body)
        except ValueError as e:
            if not declared_json and response.status_code >= 400:
                logger.debug(
                    "Error response body is not JSON",
                    extra={'url': response.url, 'status_code': response.status_code}
                )
                response.parsed = None
                response.is_parsed = True
                return response
            raise ParseError(
                f"Invalid JSON in response body: {e}",
                status_code=response.status_code,
                body=response.text.strip(),
            ) from e

        response.is_parsed = True
        return response
