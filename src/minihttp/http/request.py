"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Turns the raw bytes of one connection into a structured HTTPRequest.

=============================================================================
HTTP REQUEST ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP REQUEST STRUCTURE                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    POST /files/notes.txt HTTP/1.1\r\n          ← start line          │
    │    ─┬── ────────┬─────── ────┬───                                    │
    │   method      target      version                                    │
    │                                                                      │
    │    Host: localhost:4221\r\n                    ← header lines        │
    │    User-Agent: curl/8.4.0\r\n                                        │
    │    Content-Length: 5\r\n                                             │
    │    \r\n                                        ← blank line          │
    │    hello                                       ← body (raw bytes)    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
A TOTAL PARSER
=============================================================================

This parser never raises. Whatever bytes arrive, it splits them the same
way and hands back a request:

    - no blank line        → the whole input is the head, body is b""
    - short start line     → missing method/target/version become ""
    - header without ": "  → kept as a one-element tuple ("garbage",)

A garbled request simply fails to match any route and gets a 404. That is
the whole error story for malformed input: garbage in, garbage out.

Header names are NOT lowercased and duplicates are NOT merged. Lookup is by
exact name and returns the first occurrence.
=============================================================================
"""

from dataclasses import dataclass, field
from typing import Tuple


# One parsed header line: ("Name", "Value"), or ("line-without-separator",)
Header = Tuple[str, ...]

HEAD_BODY_SEPARATOR = b"\r\n\r\n"
LINE_SEPARATOR = "\r\n"
HEADER_SEPARATOR = ": "


@dataclass(frozen=True)
class HTTPRequest:
    """
    Represents a parsed HTTP request.

    Created once per connection and never modified afterwards.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:   "GET", "POST", or whatever token the client sent.
                  Unknown methods are not rejected here, they just never
                  match a route.

        target:   The request target exactly as sent, e.g. "/echo/a%20b".
                  Percent-decoding is left to the handler that needs it.

        version:  "HTTP/1.1" usually. Kept for logging, never consulted.

        headers:  Ordered tuple of (name, value) pairs, as sent.

        body:     Every byte after the first blank line. Binary-safe.

    =========================================================================
    """

    method: str
    target: str
    version: str = "HTTP/1.1"
    headers: Tuple[Header, ...] = field(default_factory=tuple)
    body: bytes = b""

    def get_header(self, name: str, default: str = "") -> str:
        """
        Get the value of the first header called exactly `name`.

        The comparison is case-sensitive: "user-agent" does not find
        "User-Agent". A malformed header line has no value and never
        satisfies a lookup.

        Args:
            name: Header name, matched exactly.
            default: Returned when no header with a value matches.

        Returns:
            The header value or `default`.
        """
        for header in self.headers:
            if header[0] == name:
                return header[1] if len(header) > 1 else default
        return default

    def get_all_headers(self, name: str) -> list[str]:
        """Get every value sent for header `name`, in order."""
        return [header[1] for header in self.headers if header[0] == name and len(header) > 1]

    @property
    def user_agent(self) -> str:
        """The User-Agent header value, or "" when the client sent none."""
        return self.get_header("User-Agent")


class RequestParser:
    """
    Parses raw HTTP request bytes into HTTPRequest objects.

    ==========================================================================
    PARSING STEPS
    ==========================================================================

        Raw bytes
            │
            ▼
        1. Split ONCE on the first b"\\r\\n\\r\\n"  →  head bytes | body bytes
            │
            ▼
        2. Decode head as UTF-8 (body stays bytes)
            │
            ▼
        3. Split head on "\\r\\n"  →  start line + header lines
            │
            ▼
        4. Start line split on " "  →  method, target, version
            │
            ▼
        5. Each header line split on the first ": "  →  (name, value)
            │
            ▼
        HTTPRequest

    Splitting the raw bytes before decoding keeps uploaded file contents
    exactly as the client sent them.
    ==========================================================================
    """

    def __init__(self, encoding: str = "utf-8"):
        """
        Initialize the request parser.

        Args:
            encoding: Codec used for the head (start line and headers).
                      Undecodable bytes are replaced, never raised.
        """
        self.encoding = encoding

    def parse(self, data: bytes) -> HTTPRequest:
        """
        Parse raw HTTP request data into an HTTPRequest object.

        Args:
            data: Raw request bytes as delivered by the connection.

        Returns:
            Parsed HTTPRequest. Never raises for malformed input.
        """
        # =====================================================================
        # STEP 1: Split head and body at the first blank line
        # =====================================================================
        # partition() leaves body as b"" when there is no blank line at all
        head_bytes, _, body = data.partition(HEAD_BODY_SEPARATOR)

        # =====================================================================
        # STEP 2-3: Decode the head and split it into lines
        # =====================================================================
        head = head_bytes.decode(self.encoding, errors="replace")
        start_line, *header_lines = head.split(LINE_SEPARATOR)

        # =====================================================================
        # STEP 4: Start line
        # =====================================================================
        method, target, version = self._parse_start_line(start_line)

        # =====================================================================
        # STEP 5: Header lines
        # =====================================================================
        headers = tuple(self._parse_header(line) for line in header_lines)

        return HTTPRequest(
            method=method,
            target=target,
            version=version,
            headers=headers,
            body=body,
        )

    def _parse_start_line(self, line: str) -> tuple[str, str, str]:
        """
        Split "METHOD SP TARGET SP VERSION" into its three tokens.

        Only single spaces separate tokens. Tokens past the third are
        ignored; missing ones come back as "".
        """
        tokens = line.split(" ")
        tokens += [""] * (3 - len(tokens))
        return tokens[0], tokens[1], tokens[2]

    def _parse_header(self, line: str) -> Header:
        """
        Split one header line on the first ": ".

            "Host: localhost:4221"  →  ("Host", "localhost:4221")
            "X-Broken"              →  ("X-Broken",)
        """
        name, separator, value = line.partition(HEADER_SEPARATOR)
        if not separator:
            return (line,)
        return (name, value)


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def parse_request(data: bytes) -> HTTPRequest:
    """
    Parse an HTTP request in one call.

    Args:
        data: Raw HTTP request bytes.

    Returns:
        Parsed HTTPRequest object.
    """
    return RequestParser().parse(data)
