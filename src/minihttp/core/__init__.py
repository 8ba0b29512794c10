"""
Transport: sockets, connections, worker threads.

    - socket_server: Bind, listen, accept loop
    - connection:    One client socket, one request, one response
    - thread_pool:   Workers that run connections concurrently
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState
from .thread_pool import ThreadPool

__all__ = ["SocketServer", "Connection", "ConnectionState", "ThreadPool"]
