"""
=============================================================================
HTTP PROTOCOL IMPLEMENTATION
=============================================================================

The core of the server: bytes in, bytes out, no sockets involved.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST PARSER (request.py)                                         │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Input:   b"GET /echo/abc HTTP/1.1\r\n\r\n"                          │
    │ Output:  HTTPRequest(method="GET", target="/echo/abc", ...)         │
    │                                                                      │
    │   • Splits once on the blank line, body stays raw bytes             │
    │   • Headers kept in order, names as sent                            │
    │   • Never raises                                                     │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ ROUTER (router.py)                                                  │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Ordered (method, pattern, kind) → handler table, first match wins   │
    │ Unmatched requests get a bare 404                                   │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ RESPONSE BUILDER (response.py) + STATUS CODES (status_codes.py)     │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Input:   ResponseBuilder().text("abc").build()                      │
    │ Output:  b"HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\n"         │
    │          b"Content-Length: 3\r\n\r\nabc"                            │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import HTTPRequest, RequestParser, parse_request
from .response import (
    HTTPResponse,
    ResponseBuilder,
    ok,              # 200 OK
    created,         # 201 Created
    not_found,       # 404 Not Found
    internal_error,  # 500 Internal Server Error
)
from .router import Router, Route, MatchKind
from .status_codes import HTTPStatus

__all__ = [
    # Request parsing
    "HTTPRequest",
    "RequestParser",
    "parse_request",

    # Response building
    "HTTPResponse",
    "ResponseBuilder",
    "ok",
    "created",
    "not_found",
    "internal_error",

    # Routing
    "Router",
    "Route",
    "MatchKind",

    # Status codes
    "HTTPStatus",
]
