"""
Handlers for the routes that answer from the request alone.

    GET /               → 200, nothing else
    GET /echo/<text>    → 200, <text> percent-decoded as text/plain
    GET /user-agent     → 200, the User-Agent header as text/plain
"""

from urllib.parse import unquote

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, ResponseBuilder, ok


ECHO_PREFIX = "/echo/"
USER_AGENT_HEADER = "User-Agent"


def root(request: HTTPRequest) -> HTTPResponse:
    """Answer GET / with a bare 200 OK."""
    return ok()


def echo(request: HTTPRequest) -> HTTPResponse:
    """
    Send back whatever follows "/echo/" in the target.

    The remainder is percent-decoded first, so "/echo/hello%20world"
    answers "hello world". Content-Length is the UTF-8 byte length of the
    decoded text: "/echo/%C3%A9" answers "é" with Content-Length: 2.
    """
    message = unquote(request.target[len(ECHO_PREFIX):])
    return ResponseBuilder().text(message).build()


def user_agent(request: HTTPRequest) -> HTTPResponse:
    """
    Send back the client's User-Agent header.

    The lookup is case-sensitive and takes the first occurrence. A request
    without the header gets an empty body (and Content-Length: 0), not an
    error.
    """
    return ResponseBuilder().text(request.get_header(USER_AGENT_HEADER)).build()
