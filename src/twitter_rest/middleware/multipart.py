# src/twitter_rest/middleware/multipart.py

import logging
from typing import Any, List, Optional, Tuple, Union

from urllib3.fields import RequestField
from urllib3.filepost import encode_multipart_formdata

from ..core.messages import Request, UploadPart
from ..utils.params import contains_upload, flatten_params, to_text
from .base import Middleware

logger = logging.getLogger(__name__)


def _has_content_type(request: Request) -> bool:
    return any(name.lower() == 'content-type' for name in request.headers)


class Multipart(Middleware):
    """
    Кодирует тело как multipart/form-data, если среди params есть UploadPart.

    Args:
        boundary: Фиксированный boundary (по умолчанию генерирует urllib3)
    """

    def __init__(self, boundary: Optional[str] = None):
        self.boundary = boundary

    def on_request(self, request: Request) -> Request:
        if not request.needs_encoding or not contains_upload(request.params):
            return request

        fields = self._build_fields(flatten_params(request.params))
        body, content_type = encode_multipart_formdata(fields, boundary=self.boundary)

        request.body = body
        request.params = {}
        if not _has_content_type(request):
            request.headers['Content-Type'] = content_type

        logger.debug(
            "Encoded multipart body",
            extra={'url': request.url, 'parts': len(fields), 'body_size': len(body)}
        )
        return request

    @staticmethod
    def _build_fields(pairs: List[Tuple[str, Any]]) -> List[Union[RequestField, Tuple[str, Union[str, bytes]]]]:
        fields: List[Union[RequestField, Tuple[str, Union[str, bytes]]]] = []
        for name, value in pairs:
            if isinstance(value, UploadPart):
                field = RequestField(name=name, data=value.read(), filename=value.filename)
                field.make_multipart(content_type=value.content_type)
                fields.append(field)
            else:
                fields.append((name, to_text(value)))
        return fields
