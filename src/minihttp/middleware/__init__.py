"""
Middleware around the router.

    - base:    Middleware protocol and MiddlewarePipeline
    - logging: Access log lines (text or JSON)
"""

from .base import Middleware, MiddlewarePipeline, NextHandler
from .logging import LoggingMiddleware, RequestLog

__all__ = [
    "Middleware",
    "MiddlewarePipeline",
    "NextHandler",
    "LoggingMiddleware",
    "RequestLog",
]
