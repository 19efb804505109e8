# src/twitter_rest/middleware/multipart_with_file.py

import logging
import mimetypes
import os
from typing import Any, Mapping

from ..core.messages import Request, UploadPart, is_file_like
from .base import Middleware

logger = logging.getLogger(__name__)

# Типы медиа, которые принимает upload API
_MEDIA_TYPES = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.gif': 'image/gif',
    '.png': 'image/png',
}


def mime_type(path: str) -> str:
    """
    MIME тип по имени файла.

    Examples:
        >>> mime_type("photo.JPG")
        'image/jpeg'
        >>> mime_type("archive.bin")
        'application/octet-stream'
    """
    extension = os.path.splitext(path)[1].lower()
    if extension in _MEDIA_TYPES:
        return _MEDIA_TYPES[extension]
    guessed, _ = mimetypes.guess_type(path)
    return guessed or 'application/octet-stream'


def _is_io_mapping(value: Any) -> bool:
    """{'io': <поток>, 'type': 'png'} - поток без имени файла."""
    if not isinstance(value, Mapping) or 'io' not in value:
        return False
    stream = value['io']
    return isinstance(stream, (bytes, bytearray)) or callable(getattr(stream, 'read', None))


class MultipartWithFile(Middleware):
    """
    Заменяет файловые значения params на UploadPart.

    Должен быть самым внешним: Multipart и UrlEncoded ниже по цепочке
    видят уже нормализованные части.
    """

    def on_request(self, request: Request) -> Request:
        """Оборачивает файлы в UploadPart (params вызывающего не мутируются)"""
        if not request.has_body or not request.params:
            return request

        converted, changed = self._convert(request.params)
        if changed:
            logger.debug("Converted file parameters to upload parts", extra={'url': request.url})
            request.params = converted
        return request

    def _convert(self, value: Any):
        """Возвращает (новое значение, были ли изменения)."""
        if isinstance(value, UploadPart):
            return value, False

        if is_file_like(value):
            return UploadPart(
                io=value,
                content_type=mime_type(value.name),
                filename=os.path.basename(value.name),
            ), True

        if _is_io_mapping(value):
            extension = str(value.get('type') or '').lstrip('.')
            return UploadPart(
                io=value['io'],
                content_type=mime_type(f"upload.{extension}") if extension else 'application/octet-stream',
                filename=str(value.get('filename') or ''),
            ), True

        if isinstance(value, Mapping):
            result = {}
            changed = False
            for key, item in value.items():
                result[key], item_changed = self._convert(item)
                changed = changed or item_changed
            return (result if changed else value), changed

        if isinstance(value, (list, tuple)):
            items = []
            changed = False
            for item in value:
                converted, item_changed = self._convert(item)
                items.append(converted)
                changed = changed or item_changed
            if not changed:
                return value, False
            return type(value)(items), True

        return value, False
