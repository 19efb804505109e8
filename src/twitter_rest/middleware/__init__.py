# src/twitter_rest/middleware/__init__.py
from .base import Adapter, Handler, Middleware, Pipeline
from .multipart_with_file import MultipartWithFile, mime_type
from .multipart import Multipart
from .url_encoded import UrlEncoded
from .raise_client_error import RaiseClientError
from .raise_server_error import RaiseServerError
from .parse_json import ParseJson
from .rate_limit import RateLimitTracker

__all__ = [
    "Adapter",
    "Handler",
    "Middleware",
    "Pipeline",
    # Request
    "MultipartWithFile",
    "Multipart",
    "UrlEncoded",
    # Response
    "RaiseClientError",
    "RaiseServerError",
    "ParseJson",
    "RateLimitTracker",
    "mime_type",
]
