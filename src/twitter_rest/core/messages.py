"""Request/Response values passed through the middleware pipeline."""

import io
import uuid
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, Optional, Union

from requests.structures import CaseInsensitiveDict

from .config import ConnectionOptions

# Методы, у которых params кодируются в тело запроса
BODY_METHODS = frozenset({'POST', 'PUT', 'PATCH'})


@dataclass
class UploadPart:
    """
    Файл, подготовленный к multipart загрузке.

    Attributes:
        io: Бинарный поток или готовые байты
        content_type: MIME тип части
        filename: Имя файла в Content-Disposition ('' допустимо)
    """

    io: Union[BinaryIO, bytes]
    content_type: str = 'application/octet-stream'
    filename: str = ''

    def read(self) -> bytes:
        """Прочитать содержимое целиком."""
        if isinstance(self.io, (bytes, bytearray)):
            return bytes(self.io)
        return self.io.read()


@dataclass
class Request:
    """Исходящий запрос.

    Attributes:
        method: HTTP метод (GET, POST, ...)
        url: Полный URL
        params: Параметры (query для GET, тело для POST/PUT/PATCH)
        headers: Заголовки
        body: Закодированное тело (заполняется encoder middleware)
        options: ConnectionOptions, действующие для запроса
        request_id: Correlation ID

    Example:
        >>> req = Request('POST', 'https://api.twitter.com/1.1/statuses/update.json',
        ...               params={'status': 'hello'})
        >>> req.has_body
        True
    """

    method: str
    url: str
    params: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    options: ConnectionOptions = field(default_factory=ConnectionOptions)
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        self.method = self.method.upper()

    @property
    def has_body(self) -> bool:
        """True если params этого метода уходят в тело."""
        return self.method in BODY_METHODS

    @property
    def needs_encoding(self) -> bool:
        """Тело еще не закодировано и есть что кодировать."""
        return self.has_body and self.body is None and bool(self.params)


@dataclass
class Response:
    """Входящий ответ.

    parsed заполняется ParseJson middleware; до этого is_parsed=False.
    """

    status_code: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: bytes = b''
    url: str = ''
    parsed: Any = None
    is_parsed: bool = False

    def __post_init__(self):
        if not isinstance(self.headers, CaseInsensitiveDict):
            self.headers = CaseInsensitiveDict(self.headers or {})

    @property
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')

    @property
    def content_type(self) -> str:
        return self.headers.get('Content-Type', '')

    @property
    def ok(self) -> bool:
        return self.status_code < 400


def is_file_like(value: Any) -> bool:
    """
    Бинарный файловый объект с именем (open(path, 'rb')).

    io.BytesIO без name файлом не считается - у него нет имени для
    Content-Disposition; такие потоки передаются через {'io': ..., 'type': ...}.
    """
    if isinstance(value, (str, bytes, bytearray, UploadPart)):
        return False
    if isinstance(value, io.TextIOBase):
        return False
    return callable(getattr(value, 'read', None)) and isinstance(getattr(value, 'name', None), str)
