"""
=============================================================================
MINIHTTP - A Small HTTP/1.1 Server With a Fixed Route Table
=============================================================================

Answers a handful of routes over raw sockets:

    GET  /                 200, empty
    GET  /echo/<text>      200, the decoded <text> as text/plain
    GET  /user-agent       200, the User-Agent header as text/plain
    GET  /files/<name>     200, file bytes as application/octet-stream, or 404
    POST /files/<name>     201 after writing the body, or 500
    anything else          404

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    minihttp/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m minihttp)
    ├── server.py            # HTTPServer: transport + core
    ├── app.py               # Route table, bytes-to-bytes core
    ├── config.py            # ServerConfig dataclass
    ├── storage.py           # File read/write inside the storage directory
    ├── core/                # Sockets, connections, worker threads
    ├── http/                # Parser, response, router, status codes
    ├── middleware/          # Middleware pipeline, access log
    └── handlers/            # Text and file route handlers

=============================================================================
QUICK START
=============================================================================

    from minihttp import HTTPServer, ServerConfig

    server = HTTPServer(ServerConfig(port=4221, directory="/tmp/files"))
    server.run()

Or without sockets:

    from minihttp import create_router, handle_request

    handle_request(b"GET /echo/abc HTTP/1.1\\r\\n\\r\\n", create_router())
    # b"HTTP/1.1 200 OK\\r\\nContent-Type: text/plain\\r\\nContent-Length: 3\\r\\n\\r\\nabc"

=============================================================================
"""

__version__ = "1.0.0"

from .server import HTTPServer, create_app
from .config import ServerConfig
from .app import create_router, handle_request

__all__ = [
    "HTTPServer",
    "ServerConfig",
    "create_app",
    "create_router",
    "handle_request",
    "__version__",
]
