"""
plainhttp - a minimal, blocking HTTP/1.1 client over raw TCP sockets.

Example::

    from plainhttp import URL, Request, StatusCode

    response = Request(URL("http://example.com/")).get()
    if response.status == StatusCode.OK:
        print(response.raw.decode("latin-1"))
"""

from .config import TransportConfig
from .errors import (
    PlainHttpError,
    TransportError,
    HttpClientError,
    HttpParseError,
    InvalidRequestError,
)
from .http_protocol import NO_BODY, FormBody, HttpMethod, JsonBody, NoBody, Response
from .plainhttp import Request, to_request
from .status import StatusCode
from .url import URL, ParseFailure, parse_url

__version__ = "0.1.0"

__all__ = [
    "URL",
    "ParseFailure",
    "parse_url",
    "Request",
    "to_request",
    "Response",
    "StatusCode",
    "HttpMethod",
    "NoBody",
    "FormBody",
    "JsonBody",
    "NO_BODY",
    "TransportConfig",
    "PlainHttpError",
    "TransportError",
    "HttpClientError",
    "HttpParseError",
    "InvalidRequestError",
]
