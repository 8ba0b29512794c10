"""
=============================================================================
REQUEST HANDLERS
=============================================================================

One function (or bound method) per route. Each takes an HTTPRequest and
returns an HTTPResponse; none of them touch sockets.

    text.py   - root, echo, user_agent
    files.py  - FileHandler.read, FileHandler.write

=============================================================================
"""

from .text import root, echo, user_agent, ECHO_PREFIX
from .files import FileHandler, FILES_PREFIX

__all__ = [
    "root",
    "echo",
    "user_agent",
    "FileHandler",
    "ECHO_PREFIX",
    "FILES_PREFIX",
]
