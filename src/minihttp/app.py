"""
=============================================================================
APPLICATION: THE ROUTE TABLE
=============================================================================

Wires the handlers into a Router in their fixed priority order, and offers
the whole core as one bytes-to-bytes call:

    raw request bytes
          │
          ▼
    RequestParser.parse ──► Router.handle ──► HTTPResponse.to_bytes
                                                     │
                                                     ▼
                                            raw response bytes

    ┌───────┬────────┬─────────────────────┬───────────────────────┐
    │ Order │ Method │ Target              │ Handler               │
    ├───────┼────────┼─────────────────────┼───────────────────────┤
    │   1   │ GET    │ exactly /           │ text.root             │
    │   2   │ GET    │ prefix  /echo/      │ text.echo             │
    │   3   │ GET    │ exactly /user-agent │ text.user_agent       │
    │   4   │ GET    │ prefix  /files/     │ FileHandler.read      │
    │   5   │ POST   │ prefix  /files/     │ FileHandler.write     │
    │   -   │ any    │ anything else       │ 404 Not Found         │
    └───────┴────────┴─────────────────────┴───────────────────────┘
=============================================================================
"""

from pathlib import Path
from typing import Optional, Union

from .handlers import root, echo, user_agent, FileHandler, ECHO_PREFIX, FILES_PREFIX
from .handlers.files import FileReader, FileWriter
from .http.request import RequestParser
from .http.router import Router, MatchKind
from . import storage


def create_router(
    directory: Optional[Union[str, Path]] = None,
    reader: FileReader = storage.read_file_or_none,
    writer: FileWriter = storage.write_file,
) -> Router:
    """
    Build the router with every route registered in priority order.

    Args:
        directory: Storage directory for the /files/ routes.
        reader: File read primitive.
        writer: File write primitive.

    Returns:
        A ready Router.
    """
    files = FileHandler(directory, reader=reader, writer=writer)

    router = Router()
    router.add_route("GET", "/", root, MatchKind.EXACT)
    router.add_route("GET", ECHO_PREFIX, echo, MatchKind.PREFIX)
    router.add_route("GET", "/user-agent", user_agent, MatchKind.EXACT)
    router.add_route("GET", FILES_PREFIX, files.read, MatchKind.PREFIX)
    router.add_route("POST", FILES_PREFIX, files.write, MatchKind.PREFIX)
    return router


def handle_request(data: bytes, router: Router) -> bytes:
    """
    Run one raw request through the core and return the response bytes.

    Args:
        data: Raw request bytes for one connection.
        router: Router built by create_router().

    Returns:
        The serialized response.
    """
    request = RequestParser().parse(data)
    return router.dispatch(request)
