"""
=============================================================================
HTTP SERVER
=============================================================================

Ties the pieces together: socket server, thread pool, parser, middleware
and the route table.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        Request Lifecycle                             │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   SocketServer.accept()                                              │
    │        │                                                             │
    │        ▼                                                             │
    │   ThreadPool.submit(_process_connection, conn)                       │
    │        │                                                             │
    │        ▼  (worker thread)                                            │
    │   conn.read_request()           raw bytes                            │
    │        │                                                             │
    │        ▼                                                             │
    │   handle_bytes(raw)                                                  │
    │        ├── RequestParser.parse   never fails                         │
    │        ├── middleware → router   exception → bare 500                │
    │        └── HTTPResponse.to_bytes                                     │
    │        │                                                             │
    │        ▼                                                             │
    │   conn.send_response(bytes), conn.close()                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

One request per connection. There is no keep-alive loop.
=============================================================================
"""

import logging
from typing import Optional, Callable, Tuple

from .config import ServerConfig
from .core import SocketServer, Connection, ConnectionState, ThreadPool
from .http import HTTPRequest, HTTPResponse, RequestParser, Router, internal_error
from .middleware import MiddlewarePipeline, Middleware, LoggingMiddleware
from .app import create_router


logger = logging.getLogger(__name__)


class HTTPServer:
    """
    Multi-threaded HTTP/1.1 server for the fixed route table.

        server = HTTPServer(ServerConfig(directory="/tmp/files"))
        server.run()  # Blocks until SIGINT/SIGTERM or shutdown()

    handle_bytes() runs the request core without any sockets, which is
    what the unit tests use.
    """

    def __init__(self, config: Optional[ServerConfig] = None, router: Optional[Router] = None):
        """
        Initialize the HTTP server.

        Args:
            config: Server configuration. Defaults if not provided.
            router: Route table. Built from config.directory if not provided.

        Raises:
            ValueError: If the configuration is invalid.
        """
        self.config = config or ServerConfig()
        self.config.validate()

        self._socket_server = SocketServer(self.config)
        self._thread_pool = ThreadPool(
            min_workers=self.config.min_workers,
            max_workers=self.config.max_workers,
        )
        self._parser = RequestParser()
        self._router = router or create_router(self.config.directory)

        self._middleware = MiddlewarePipeline()
        if self.config.access_log:
            self._middleware.add(LoggingMiddleware(log_format=self.config.log_format))

        self._handler: Optional[Callable[[HTTPRequest], HTTPResponse]] = None

    def use(self, middleware: Middleware) -> "HTTPServer":
        """
        Add middleware to the server.

        Must be called before the first request; the chain is built once.

        Returns:
            Self for method chaining.
        """
        self._middleware.add(middleware)
        self._handler = None
        return self

    @property
    def router(self) -> Router:
        """The route table."""
        return self._router

    @property
    def address(self) -> Tuple[str, int]:
        """The bound (host, port); the real port once listening on port 0."""
        return self._socket_server.address

    # =========================================================================
    # REQUEST CORE
    # =========================================================================

    def handle_bytes(self, raw: bytes) -> bytes:
        """
        Turn one raw request into raw response bytes.

        Args:
            raw: Everything the client sent for this request.

        Returns:
            The serialized response. Never raises for a handler failure:
            that becomes a bare "500 Internal Server Error".
        """
        if self._handler is None:
            self._handler = self._middleware.wrap(self._router.handle)

        request = self._parser.parse(raw)

        try:
            response = self._handler(request)
        except Exception as e:
            logger.exception(f"Handler error for {request.method} {request.target}: {e}")
            response = internal_error()

        return response.to_bytes()

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def run(self, host: Optional[str] = None, port: Optional[int] = None):
        """
        Start the server (blocking).

        Args:
            host: Override config host.
            port: Override config port.
        """
        if host:
            self.config.host = host
        if port is not None:
            self.config.port = port

        self._setup_logging()
        self._handler = self._middleware.wrap(self._router.handle)
        self._thread_pool.start()

        logger.info(f"Starting HTTP server on {self.config.host}:{self.config.port}")
        if self.config.directory:
            logger.info(f"Serving files from {self.config.directory}")

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._shutdown()

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.getLogger("minihttp").setLevel(level)

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the listening socket is up. False on timeout."""
        return self._socket_server.wait_until_ready(timeout)

    def shutdown(self):
        """
        Stop accepting connections. run() returns once in-flight
        connections finish.
        """
        self._socket_server.shutdown()

    def _shutdown(self):
        """Drain the pool after the accept loop has ended."""
        logger.info("Shutting down server...")
        self._thread_pool.shutdown(wait=True, timeout=self.config.timeout)
        logger.info("Server stopped")

    # =========================================================================
    # CONNECTIONS
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """Queue an accepted connection for a worker thread."""
        submitted = self._thread_pool.submit(
            self._process_connection,
            args=(conn,),
        )

        if not submitted:
            logger.warning(f"[{conn.id}] Thread pool full, dropping connection from {conn.client_ip}")
            conn.close()

    def _process_connection(self, conn: Connection):
        """
        Serve one connection (runs in a worker thread).

        Read one request, answer it, close. The context manager closes the
        socket whatever happens, including when the connection waited in
        the queue longer than config.timeout and is dropped unanswered.
        """
        with conn:
            if self.config.timeout and conn.age > self.config.timeout:
                logger.warning(
                    f"[{conn.id}] Waited {conn.age:.2f}s in queue, closing connection from {conn.client_ip}"
                )
                return

            raw_request = conn.read_request()
            if raw_request is None:
                logger.debug(f"[{conn.id}] Client {conn.client_ip} sent nothing")
                return

            conn.state = ConnectionState.PROCESSING
            response_bytes = self.handle_bytes(raw_request)

            if conn.send_response(response_bytes):
                logger.debug(f"[{conn.id}] Sent {len(response_bytes)} bytes to {conn.client_ip}")


def create_app(directory: Optional[str] = None, **config_kwargs) -> HTTPServer:
    """
    Build a server with the standard routes.

        server = create_app(directory="/tmp/files", port=8080)
        server.run()
    """
    return HTTPServer(ServerConfig(directory=directory, **config_kwargs))
