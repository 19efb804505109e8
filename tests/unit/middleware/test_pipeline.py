"""
Tests for Middleware base class and Pipeline composition.
"""

import pytest

from twitter_rest.core.exceptions import NotFound, ParseError
from twitter_rest.core.messages import Request, Response
from twitter_rest.middleware import (
    Middleware,
    Pipeline,
    ParseJson,
    RaiseClientError,
    RateLimitTracker,
)


class RecordingMiddleware(Middleware):
    """Записывает порядок вызовов хуков."""

    def __init__(self, name, log):
        self.name = name
        self.log = log

    def on_request(self, request):
        self.log.append(f"request:{self.name}")
        return request

    def on_response(self, request, response):
        self.log.append(f"response:{self.name}")
        return response


class ShortCircuitMiddleware(Middleware):
    """Отвечает сам, не вызывая внутреннюю часть цепочки."""

    def call(self, request, next_handler):
        return Response(status_code=204)


class RecordingAdapter:

    def __init__(self, log, response=None):
        self.log = log
        self.response = response or Response(status_code=200)
        self.requests = []

    def send(self, request):
        self.log.append("send")
        self.requests.append(request)
        return self.response


class TestPipeline:
    """Ordering contract of the middleware stack."""

    def test_outbound_in_order_inbound_reversed(self):
        log = []
        pipeline = Pipeline(
            [RecordingMiddleware("outer", log), RecordingMiddleware("inner", log)],
            RecordingAdapter(log),
        )

        pipeline.handle(Request('GET', 'https://api.twitter.com/1.1/x.json'))

        assert log == [
            "request:outer",
            "request:inner",
            "send",
            "response:inner",
            "response:outer",
        ]

    def test_empty_stack_calls_adapter(self):
        log = []
        adapter = RecordingAdapter(log)

        response = Pipeline([], adapter).handle(Request('GET', 'https://api.twitter.com'))

        assert response is adapter.response
        assert log == ["send"]

    def test_middleware_can_short_circuit(self):
        log = []
        pipeline = Pipeline(
            [RecordingMiddleware("outer", log), ShortCircuitMiddleware(), RecordingMiddleware("inner", log)],
            RecordingAdapter(log),
        )

        response = pipeline.handle(Request('GET', 'https://api.twitter.com'))

        assert response.status_code == 204
        assert log == ["request:outer", "response:outer"]

    def test_exception_skips_outer_on_response(self):
        """Исключение внутреннего слоя пробрасывается мимо внешних on_response."""
        log = []
        adapter = RecordingAdapter(log, Response(status_code=404, body=b'{"error": "Not Found"}'))
        pipeline = Pipeline(
            [RecordingMiddleware("outer", log), RaiseClientError(), ParseJson()],
            adapter,
        )

        with pytest.raises(NotFound):
            pipeline.handle(Request('GET', 'https://api.twitter.com'))

        assert log == ["request:outer", "send"]

    def test_malformed_json_error_is_parse_error(self):
        """ParseJson ближе к адаптеру, чем классификатор: битый JSON 400 -> ParseError."""
        adapter = RecordingAdapter([], Response(
            status_code=400,
            headers={'Content-Type': 'application/json'},
            body=b'{"error": ',
        ))
        pipeline = Pipeline([RaiseClientError(), ParseJson()], adapter)

        with pytest.raises(ParseError) as exc_info:
            pipeline.handle(Request('GET', 'https://api.twitter.com'))

        assert exc_info.value.status_code == 400

    def test_pipeline_is_reusable(self):
        log = []
        pipeline = Pipeline([RecordingMiddleware("only", log)], RecordingAdapter(log))

        pipeline.handle(Request('GET', 'https://api.twitter.com'))
        pipeline.handle(Request('GET', 'https://api.twitter.com'))

        assert log.count("send") == 2

    def test_index(self):
        pipeline = Pipeline([RaiseClientError(), ParseJson()], RecordingAdapter([]))

        assert pipeline.index(RaiseClientError) == 0
        assert pipeline.index(ParseJson) == 1
        assert pipeline.index(RateLimitTracker) is None

    def test_middleware_and_adapter_exposed(self):
        adapter = RecordingAdapter([])
        pipeline = Pipeline(iter([ParseJson()]), adapter)

        assert tuple(pipeline.middleware) == (ParseJson(),)
        assert pipeline.adapter is adapter


class TestMiddlewareBase:

    def test_default_hooks_pass_through(self):
        request = Request('GET', 'https://api.twitter.com')
        response = Response(status_code=200)
        middleware = Middleware()

        assert middleware.on_request(request) is request
        assert middleware.on_response(request, response) is response

    def test_equality_by_type_and_state(self, rate_limit):
        assert ParseJson() == ParseJson()
        assert ParseJson() != RaiseClientError()
        assert RateLimitTracker(rate_limit) == RateLimitTracker(rate_limit)
        assert RateLimitTracker(rate_limit) != RateLimitTracker()

    def test_repr(self):
        assert repr(ParseJson()) == "ParseJson()"
