"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The server only ever answers with four statuses:

    ┌──────┬───────────────────────┬──────────────────────────────────────┐
    │ Code │ Phrase                │ When                                 │
    ├──────┼───────────────────────┼──────────────────────────────────────┤
    │ 200  │ OK                    │ /, /echo/..., /user-agent, file read │
    │ 201  │ Created               │ POST /files/... succeeded            │
    │ 404  │ Not Found             │ no route, or file does not exist     │
    │ 500  │ Internal Server Error │ file write failed, handler crashed   │
    └──────┴───────────────────────┴──────────────────────────────────────┘

Status lines are fixed literals, not assembled from the code and phrase at
runtime. Clients compare them byte for byte.
=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes understood by the server.

    Extends IntEnum, so members compare equal to their numeric code:

        >>> HTTPStatus.OK == 200
        True
        >>> HTTPStatus.NOT_FOUND.status_line
        'HTTP/1.1 404 Not Found'
    """

    OK = 200                        # Request handled, body (maybe) attached
    CREATED = 201                   # File written
    NOT_FOUND = 404                 # No route matched or no such file
    INTERNAL_SERVER_ERROR = 500     # Write failed or handler raised

    @property
    def phrase(self) -> str:
        """Reason phrase for this status (the text after the code)."""
        return _STATUS_PHRASES[self]

    @property
    def status_line(self) -> str:
        """
        The complete status line, without the trailing CRLF.

            HTTP/1.1 201 Created
            ──┬───── ─┬─ ───┬───
              │       │     │
           Version  Code  Phrase
        """
        return _STATUS_LINES[self]

    @property
    def is_success(self) -> bool:
        """Check if this is a 2xx status code."""
        return 200 <= self < 300

    @property
    def is_error(self) -> bool:
        """Check if this is a 4xx or 5xx status code."""
        return self >= 400


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.CREATED: "Created",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}

_STATUS_LINES = {
    HTTPStatus.OK: "HTTP/1.1 200 OK",
    HTTPStatus.CREATED: "HTTP/1.1 201 Created",
    HTTPStatus.NOT_FOUND: "HTTP/1.1 404 Not Found",
    HTTPStatus.INTERNAL_SERVER_ERROR: "HTTP/1.1 500 Internal Server Error",
}
