"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

All process-wide settings in one dataclass. Nothing in the server reads
global state: the HTTPServer receives a ServerConfig and passes the pieces
each component needs (the storage directory goes to the file handler, the
socket settings to the socket server, and so on).

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m minihttp --directory /tmp/files                  │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTP_DIRECTORY=/tmp/files python -m minihttp               │
    │                                                                      │
    │   3. Defaults                                                       │
    │      └── ServerConfig()  → localhost:4221, no storage              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘
=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class ServerConfig:
    """
    Configuration for the HTTP server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, buffer_size, timeout, max_request_size

    STORAGE
    - directory

    THREADING SETTINGS
    - min_workers, max_workers

    LOGGING
    - log_level, log_format, access_log

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "localhost"
    """The address to bind to."""

    port: int = 4221
    """
    The port to listen on.
    0 lets the OS pick a free port (useful in tests).
    """

    backlog: int = 128
    """Maximum number of queued connections."""

    buffer_size: int = 8192
    """Size of each recv() call in bytes."""

    timeout: Optional[float] = 30.0
    """
    Per-connection socket timeout in seconds.
    None = blocking (a silent client holds a worker forever).
    """

    max_request_size: int = 10 * 1024 * 1024  # 10 MB
    """
    Upper bound on the bytes read for one request.
    Uploads to /files/ larger than this are cut off.
    """

    # ─────────────────────────────────────────────────────────────────────
    # STORAGE
    # ─────────────────────────────────────────────────────────────────────

    directory: Optional[str] = None
    """
    Directory served and written by the /files/ routes.
    None = no storage: reads answer 404, writes answer 500.
    """

    # ─────────────────────────────────────────────────────────────────────
    # THREAD POOL SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    min_workers: int = 4
    """Worker threads created at startup."""

    max_workers: int = 16
    """Upper bound on worker threads under load."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    log_format: str = "text"
    """Access log format: 'text' or 'json'."""

    access_log: bool = True
    """Emit one access log line per request."""

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTP_HOST       Server host (default: localhost)
        HTTP_PORT       Server port (default: 4221)
        HTTP_DIRECTORY  Storage directory (default: None)
        HTTP_WORKERS    Max worker threads (default: 16)
        HTTP_TIMEOUT    Connection timeout in seconds (default: 30)
        HTTP_LOG_LEVEL  Logging level (default: INFO)

        =====================================================================
        """
        return cls(
            host=os.getenv("HTTP_HOST", "localhost"),
            port=int(os.getenv("HTTP_PORT", "4221")),
            directory=os.getenv("HTTP_DIRECTORY"),
            max_workers=int(os.getenv("HTTP_WORKERS", "16")),
            timeout=float(os.getenv("HTTP_TIMEOUT", "30")),
            log_level=os.getenv("HTTP_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called by HTTPServer at construction so a bad port or a missing
        storage directory fails at startup, not on the first request.

        Raises:
            ValueError: On the first invalid value found.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.min_workers < 1:
            raise ValueError("min_workers must be >= 1")

        if self.max_workers < self.min_workers:
            raise ValueError("max_workers must be >= min_workers")

        if self.buffer_size < 1024:
            raise ValueError("buffer_size must be >= 1024")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.log_format not in ("text", "json"):
            raise ValueError(f"Invalid log_format: {self.log_format}. Must be 'text' or 'json'.")

        if self.directory is not None and not os.path.isdir(self.directory):
            raise ValueError(f"Storage directory does not exist: {self.directory}")
