# src/twitter_rest/middleware/url_encoded.py

from urllib.parse import urlencode

from ..core.messages import Request
from ..utils.params import flatten_params, to_text
from .base import Middleware

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'


class UrlEncoded(Middleware):
    """Кодирует оставшиеся params тела как application/x-www-form-urlencoded"""

    def on_request(self, request: Request) -> Request:
        if not request.needs_encoding:
            return request

        pairs = [(name, to_text(value)) for name, value in flatten_params(request.params)]
        request.body = urlencode(pairs).encode('ascii')
        request.params = {}

        if not any(name.lower() == 'content-type' for name in request.headers):
            request.headers['Content-Type'] = FORM_CONTENT_TYPE
        return request
