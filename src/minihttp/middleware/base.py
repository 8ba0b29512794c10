"""
=============================================================================
BASE MIDDLEWARE INTERFACE
=============================================================================

The middleware protocol and the pipeline that chains middleware around the
router.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         REQUEST FLOW                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Request ─────────────────────────────────────────►                 │
    │                                                                      │
    │   ┌──────────┐    ┌──────────┐    ┌──────────────┐                   │
    │   │  Logging │───►│   ...    │───►│ router.handle│                   │
    │   └────┬─────┘    └────┬─────┘    └──────┬───────┘                   │
    │        ▼               ▼                 ▼                           │
    │   [before]        [before]            [exec]                         │
    │   start timer                         pick route                     │
    │        ▲               ▲                 │                           │
    │   [after]         [after]                │                           │
    │   log line                               │                           │
    │                                                                      │
    │   ◄──────────────────────────────────────── Response                 │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Middleware here observes; it must not change the response. The bytes a
client receives are fully decided by the handlers.
=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Callable, List
import logging

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


logger = logging.getLogger(__name__)


# A handler in the chain: takes a request, returns a response.
NextHandler = Callable[[HTTPRequest], HTTPResponse]


class Middleware(ABC):
    """
    Abstract base class for middleware.

    Every middleware implements:

        def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse

    and calls next(request) to continue the chain.
    """

    @abstractmethod
    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        """
        Process the request.

        Args:
            request: The parsed request.
            next: The next handler in the chain.

        Returns:
            The response from next().
        """
        pass

    @property
    def name(self) -> str:
        """Get the middleware name for logging."""
        return self.__class__.__name__


class MiddlewarePipeline:
    """
    Chains middleware together with a final handler.

    First added = outermost:

        pipeline = MiddlewarePipeline()
        pipeline.add(LoggingMiddleware())
        handler = pipeline.wrap(router.handle)
        response = handler(request)
    """

    def __init__(self):
        """Initialize an empty middleware pipeline."""
        self._middleware: List[Middleware] = []

    def add(self, middleware: Middleware) -> "MiddlewarePipeline":
        """
        Add middleware to the pipeline.

        Returns:
            Self for method chaining
        """
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {middleware.name}")
        return self

    def use(self, *middleware: Middleware) -> "MiddlewarePipeline":
        """Add several middleware in one call."""
        for mw in middleware:
            self.add(mw)
        return self

    def wrap(self, handler: NextHandler) -> NextHandler:
        """
        Wrap a handler with all middleware in the pipeline.

        Given [MW1, MW2] and handler, wraps in reverse so the result runs
        MW1 → MW2 → handler.

        Args:
            handler: The final request handler (usually router.handle).

        Returns:
            A single callable running the whole chain.
        """
        current = handler
        for middleware in reversed(self._middleware):
            current = self._create_wrapped_handler(middleware, current)
        return current

    def _create_wrapped_handler(
        self,
        middleware: Middleware,
        next_handler: NextHandler,
    ) -> NextHandler:
        """
        Bind one middleware to its successor.

        A separate function so each closure captures its own
        middleware/next_handler pair, not the loop variables.
        """
        def wrapped(request: HTTPRequest) -> HTTPResponse:
            return middleware(request, next_handler)

        return wrapped

    def __len__(self) -> int:
        """Number of middleware in the pipeline."""
        return len(self._middleware)

    def __iter__(self):
        """Iterate over middleware in order."""
        return iter(self._middleware)
