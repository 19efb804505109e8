# src/twitter_rest/middleware/base.py

from abc import ABC
from typing import Callable, Iterable, Optional, Protocol, Sequence, Tuple

from ..core.messages import Request, Response

# Любой обработчик запроса: request -> response
Handler = Callable[[Request], Response]


class Adapter(Protocol):
    """Транспорт: единственное место, где выполняется I/O."""

    def send(self, request: Request) -> Response:
        ...


class Middleware(ABC):
    """
    Базовый класс для всех middleware.

    Порядок в списке важен: первый middleware оборачивает все остальные,
    последний - самый внутренний (ближе всего к транспорту).

    Подклассы переопределяют on_request / on_response или call целиком.
    """

    def on_request(self, request: Request) -> Request:
        """Вызывается перед передачей запроса дальше по цепочке"""
        return request

    def on_response(self, request: Request, response: Response) -> Response:
        """Вызывается после получения ответа от внутренней части цепочки"""
        return response

    def call(self, request: Request, next_handler: Handler) -> Response:
        """
        Обработать запрос.

        Args:
            request: Исходящий запрос
            next_handler: Следующий обработчик (middleware или адаптер)

        Returns:
            Ответ (возможно преобразованный)

        Raises:
            TwitterError: middleware может прервать цепочку исключением
        """
        request = self.on_request(request)
        response = next_handler(request)
        return self.on_response(request, response)

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def _wrap(middleware: Middleware, next_handler: Handler) -> Handler:
    def handler(request: Request) -> Response:
        return middleware.call(request, next_handler)
    return handler


class Pipeline:
    """
    Упорядоченный стек middleware вокруг адаптера.

    Example:
        >>> pipeline = Pipeline([ParseJson(), RateLimitTracker()], adapter)
        >>> response = pipeline.handle(Request('GET', url))
    """

    def __init__(self, middleware: Iterable[Middleware], adapter: Adapter):
        self._middleware: Tuple[Middleware, ...] = tuple(middleware)
        self._adapter = adapter
        self._handler = self._build()

    def _build(self) -> Handler:
        handler: Handler = self._adapter.send
        # Собираем изнутри наружу: последний в списке ближе всего к адаптеру
        for middleware in reversed(self._middleware):
            handler = _wrap(middleware, handler)
        return handler

    @property
    def middleware(self) -> Sequence[Middleware]:
        return self._middleware

    @property
    def adapter(self) -> Adapter:
        return self._adapter

    def handle(self, request: Request) -> Response:
        """Прогнать запрос через весь стек."""
        return self._handler(request)

    def index(self, middleware_class: type) -> Optional[int]:
        """Позиция первого middleware данного класса или None."""
        for position, middleware in enumerate(self._middleware):
            if isinstance(middleware, middleware_class):
                return position
        return None
