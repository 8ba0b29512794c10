"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Builds HTTP/1.1 responses and serializes them to the exact wire bytes.

=============================================================================
HTTP RESPONSE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    HTTP/1.1 200 OK\r\n                     ← status line (literal)   │
    │    Content-Type: text/plain\r\n            ← headers, in the order   │
    │    Content-Length: 3\r\n                     they were added         │
    │    \r\n                                    ← blank line              │
    │    abc                                     ← body, nothing after it  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
NOTHING IMPLICIT
=============================================================================

to_bytes() writes exactly what the handler put in the response. It does NOT
add Date, Server, Connection or Content-Length on its own. The root route,
for instance, must produce the 19 bytes "HTTP/1.1 200 OK\\r\\n\\r\\n" and
nothing more. Handlers that send a body add Content-Length themselves,
always right after Content-Type.
=============================================================================
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .status_codes import HTTPStatus


CRLF = "\r\n"

TEXT_PLAIN = "text/plain"
OCTET_STREAM = "application/octet-stream"


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    Headers are an ordered list of (name, value) pairs rather than a dict:
    the order handlers add them is the order they go on the wire.

    =========================================================================
    RESPONSE LIFECYCLE
    =========================================================================

        Handler returns          to_bytes()              Socket sends
        HTTPResponse    ─────►   serializes    ─────►    raw bytes
            │                       │                        │
        HTTPResponse(            b"HTTP/1.1 200 OK\\r\\n   conn.send_response(
          status=200,              Content-Type: ...\\r\\n     response_bytes
          headers=[...],           \\r\\n                    )
          body=b"abc"              abc"
        )

    =========================================================================
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: bytes = b""

    @property
    def status_line(self) -> str:
        """The status line literal, e.g. "HTTP/1.1 404 Not Found"."""
        return self.status.status_line

    def get_header(self, name: str, default: str = "") -> str:
        """Get the first value set for header `name` (exact match)."""
        for header_name, value in self.headers:
            if header_name == name:
                return value
        return default

    def add_header(self, name: str, value: str) -> "HTTPResponse":
        """
        Append a response header.

        Returns self for method chaining:
            response.add_header("X-One", "1").add_header("X-Two", "2")
        """
        self.headers.append((name, value))
        return self

    def to_bytes(self) -> bytes:
        """
        Serialize the response to bytes for sending over the socket.

        =====================================================================
        SERIALIZATION FORMAT
        =====================================================================

            <status line>\\r\\n
            <name>: <value>\\r\\n      ← once per header, in order
            \\r\\n
            <body>

        =====================================================================

        Returns:
            Complete HTTP response as bytes ready for socket.sendall()
        """
        lines = [self.status_line]
        lines.extend(f"{name}: {value}" for name, value in self.headers)

        # Trailing "" gives the blank line that ends the head
        head = CRLF.join(lines) + CRLF + CRLF
        return head.encode("utf-8") + self.body


class ResponseBuilder:
    """
    Fluent builder for constructing HTTP responses.

    ==========================================================================
    USAGE
    ==========================================================================

        # Plain text (echo, user-agent)
        response = ResponseBuilder().text("abc").build()

        # Raw file contents
        response = ResponseBuilder().octet_stream(data).build()

        # Status only
        response = ResponseBuilder().status(HTTPStatus.CREATED).build()

    Every method except build() and to_bytes() returns self.
    ==========================================================================
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._headers: List[Tuple[str, str]] = []
        self._body: bytes = b""

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        """Set the HTTP status code."""
        self._status = status
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        """Append a single response header."""
        self._headers.append((name, value))
        return self

    def body(self, body: Union[str, bytes]) -> "ResponseBuilder":
        """
        Set the response body without touching headers.

        Strings are encoded to UTF-8.
        """
        if isinstance(body, str):
            self._body = body.encode("utf-8")
        else:
            self._body = body
        return self

    def text(self, text: str) -> "ResponseBuilder":
        """
        Set a plain text body with its Content-Type and Content-Length.

        Content-Length counts encoded BYTES, not characters: "é" is one
        character but two bytes in UTF-8, so its Content-Length is 2.
        """
        return self._with_content(text.encode("utf-8"), TEXT_PLAIN)

    def octet_stream(self, data: bytes) -> "ResponseBuilder":
        """Set a binary body with application/octet-stream headers."""
        return self._with_content(data, OCTET_STREAM)

    def _with_content(self, data: bytes, content_type: str) -> "ResponseBuilder":
        self._body = data
        # Order matters on the wire: Content-Type first, then Content-Length
        self._headers.append(("Content-Type", content_type))
        self._headers.append(("Content-Length", str(len(data))))
        return self

    def build(self) -> HTTPResponse:
        """Build and return the HTTPResponse object."""
        return HTTPResponse(
            status=self._status,
            headers=list(self._headers),
            body=self._body,
        )

    def to_bytes(self) -> bytes:
        """Build and serialize the response in one step."""
        return self.build().to_bytes()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
#
# One-liners for the responses handlers return most often.
#
#     return ok()
#     return created()
#     return not_found()
#
# =============================================================================

def ok() -> HTTPResponse:
    """
    Create a bare 200 OK response: no headers, no body.

    For a 200 with content use ResponseBuilder().text(...) or
    ResponseBuilder().octet_stream(...), which set the length headers.
    """
    return HTTPResponse(status=HTTPStatus.OK)


def created() -> HTTPResponse:
    """Create a bare 201 Created response."""
    return HTTPResponse(status=HTTPStatus.CREATED)


def not_found() -> HTTPResponse:
    """Create a bare 404 Not Found response."""
    return HTTPResponse(status=HTTPStatus.NOT_FOUND)


def internal_error() -> HTTPResponse:
    """Create a bare 500 Internal Server Error response."""
    return HTTPResponse(status=HTTPStatus.INTERNAL_SERVER_ERROR)
