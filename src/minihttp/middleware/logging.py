"""
=============================================================================
ACCESS LOGGING MIDDLEWARE
=============================================================================

One log line per request on the "minihttp.access" logger, in text or JSON
form:

    text:  - - [18/Oct/2026:10:15:32 +0000] "GET /echo/abc" 200 3 0.21ms "curl/8.4.0"
    json:  {"method": "GET", "target": "/echo/abc", "status_code": 200, ...}

The response passes through untouched: no request-ID header, no timing
header. What the client receives is exactly what the handler built.
=============================================================================
"""

import time
import json
import logging
from dataclasses import dataclass, asdict

from .base import Middleware, NextHandler
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


# Separate from the module loggers so operators can route it on its own:
#   logging.getLogger("minihttp.access").addHandler(file_handler)
logger = logging.getLogger("minihttp.access")


@dataclass
class RequestLog:
    """
    Structured log entry for a request.

    Attributes:
        method: Request method as sent.
        target: Request target as sent, not decoded.
        user_agent: User-Agent value, "" when absent.
        status_code: Numeric response status.
        content_length: Response body size in bytes.
        duration_ms: Time spent in the handler chain.
        timestamp: When the response was produced.
    """
    method: str
    target: str
    user_agent: str
    status_code: int
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        """Convert to a dictionary for JSON output."""
        data = asdict(self)
        data["duration_ms"] = round(self.duration_ms, 2)
        return data

    def to_text(self) -> str:
        """Format in the style of Apache's combined log."""
        return (
            f'- - [{self.timestamp}] '
            f'"{self.method} {self.target}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms "{self.user_agent}"'
        )


class LoggingMiddleware(Middleware):
    """
    Request logging middleware.

    Should be FIRST in the pipeline so its timing covers everything else.

        pipeline.add(LoggingMiddleware(log_format="json"))
    """

    def __init__(self, log_format: str = "text", log_level: int = logging.INFO):
        """
        Initialize logging middleware.

        Args:
            log_format: "text" (human readable) or "json" (one object per line).
            log_level: Level the access lines are emitted at.
        """
        self.log_format = log_format
        self.log_level = log_level

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        start_time = time.time()

        try:
            response = next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Request failed: {request.method} {request.target} "
                f"- {type(e).__name__}: {e} ({duration_ms:.2f}ms)"
            )
            raise

        duration_ms = (time.time() - start_time) * 1000

        log_entry = RequestLog(
            method=request.method,
            target=request.target,
            user_agent=request.user_agent,
            status_code=int(response.status),
            content_length=len(response.body),
            duration_ms=duration_ms,
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

        if self.log_format == "json":
            logger.log(self.log_level, json.dumps(log_entry.to_dict()))
        else:
            logger.log(self.log_level, log_entry.to_text())

        return response
