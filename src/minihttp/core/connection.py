"""
=============================================================================
CLIENT CONNECTION
=============================================================================

Wraps one accepted socket. The server reads exactly one request from it,
writes exactly one response, and closes it.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      Connection Lifecycle                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   NEW ──► READING ──► PROCESSING ──► WRITING ──► CLOSING ──► CLOSED  │
    │                                                                      │
    │   No KEEP_ALIVE state: the connection never goes back to READING.    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘
=============================================================================
"""

import socket
import time
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional
import uuid


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states, used in logs."""
    NEW = "new"                # Just accepted, nothing read yet
    READING = "reading"        # Receiving request bytes
    PROCESSING = "processing"  # Core is building the response
    WRITING = "writing"        # Sending response bytes
    CLOSING = "closing"        # Shutdown sequence in progress
    CLOSED = "closed"          # Socket released


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short unique identifier for log lines.
        state: Current connection state.
        created_at: Timestamp when the connection was accepted.
    """

    # Required parameters
    socket: socket.socket
    address: tuple[str, int]

    # Generated/default parameters
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    # Configuration (passed from ServerConfig)
    buffer_size: int = 8192
    timeout: Optional[float] = 30.0
    max_request_size: int = 10 * 1024 * 1024

    def __post_init__(self):
        """Put the socket in blocking mode with the configured timeout."""
        self.socket.setblocking(True)
        if self.timeout:
            self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        """Get the client IP address."""
        return self.address[0]

    @property
    def age(self) -> float:
        """Get connection age in seconds."""
        return time.time() - self.created_at

    # =========================================================================
    # READING
    # =========================================================================

    def read_request(self) -> Optional[bytes]:
        """
        Read one request's worth of bytes from the socket.

        ┌─────────────────────────────────────────────────────────────────┐
        │                    read_request() Flow                           │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │   1. recv() until b"\\r\\n\\r\\n" appears                            │
        │   2. If the head announces Content-Length: N,                    │
        │      recv() until N body bytes are buffered                     │
        │   3. Hand the whole buffer to the caller                        │
        │                                                                  │
        │   EOF or timeout at any point → hand over what we have          │
        │   Nothing at all              → None                             │
        │                                                                  │
        └─────────────────────────────────────────────────────────────────┘

        Content-Length only decides how long to keep READING. The bytes
        are passed on unchanged and the parser never checks them against
        it.

        Returns:
            The buffered request bytes, or None if the client sent nothing.
        """
        self.state = ConnectionState.READING
        buffer = b""

        try:
            # ─────────────────────────────────────────────────────────────
            # STEP 1: Read until the blank line
            # ─────────────────────────────────────────────────────────────
            while b"\r\n\r\n" not in buffer:
                chunk = self._recv()
                if not chunk:
                    return buffer or None
                buffer += chunk
                if len(buffer) >= self.max_request_size:
                    logger.warning(f"[{self.id}] Request hit size limit, truncating")
                    return buffer[:self.max_request_size]

            # ─────────────────────────────────────────────────────────────
            # STEP 2: Read the announced body, if any
            # ─────────────────────────────────────────────────────────────
            header_end = buffer.find(b"\r\n\r\n")
            body_start = header_end + 4
            content_length = self._parse_content_length(buffer[:header_end])
            announced = body_start + content_length
            if announced > self.max_request_size:
                logger.warning(
                    f"[{self.id}] Announced body of {content_length} bytes exceeds size limit, "
                    f"truncating request to {self.max_request_size} bytes"
                )
            wanted = min(announced, self.max_request_size)

            while len(buffer) < wanted:
                chunk = self._recv()
                if not chunk:
                    break  # Client stopped sending, use what arrived
                buffer += chunk

            return buffer[:self.max_request_size]

        except socket.timeout:
            logger.debug(f"[{self.id}] Read timed out with {len(buffer)} bytes buffered")
            return buffer or None

    def _recv(self) -> bytes:
        """Receive one chunk. Returns b"" when the peer has gone away."""
        try:
            return self.socket.recv(self.buffer_size)
        except (ConnectionResetError, BrokenPipeError):
            return b""

    def _parse_content_length(self, head: bytes) -> int:
        """
        Find a Content-Length value in the raw head.

        Only used to decide how many bytes to wait for, so a missing or
        garbled header just means "no body expected".
        """
        try:
            for line in head.decode("utf-8", errors="replace").lower().split("\r\n"):
                if line.startswith("content-length:"):
                    return max(0, int(line.split(":", 1)[1].strip()))
        except ValueError:
            pass
        return 0

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        Send the response bytes.

        Uses sendall() so the whole response goes out or an error is seen.

        Returns:
            True if send succeeded, False if the connection was lost.
        """
        self.state = ConnectionState.WRITING

        try:
            self.socket.sendall(data)
            return True
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection gracefully.

        1. shutdown(SHUT_WR) - send FIN, the client sees end-of-response
        2. drain             - discard anything the client still sends
        3. close()           - release the file descriptor
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Peer already gone

        try:
            self.socket.settimeout(0.5)
            while self.socket.recv(1024):
                pass
        except OSError:
            pass  # socket.timeout is an OSError too

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Always close, never suppress the exception."""
        self.close()
        return False
