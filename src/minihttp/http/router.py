"""
=============================================================================
URL ROUTER
=============================================================================

Matches a request against an ORDERED list of routes and runs the first one
that fits. Two kinds of pattern exist:

- Exact paths:   "/"            matches only "/"
- Prefix paths:  "/echo/"       matches "/echo/", "/echo/abc", "/echo/a/b"

=============================================================================
ROUTING FLOW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        ROUTING FLOW                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Incoming Request                                                   │
    │   GET /files/report.pdf                                              │
    │        │                                                             │
    │        ▼                                                             │
    │   ┌─────────────────────────────────────────────────────────────┐   │
    │   │  ROUTER (checked top to bottom, first match wins)            │   │
    │   │                                                              │   │
    │   │   1. GET  exact  /             → root          ✗            │   │
    │   │   2. GET  prefix /echo/        → echo          ✗            │   │
    │   │   3. GET  exact  /user-agent   → user_agent    ✗            │   │
    │   │   4. GET  prefix /files/       → read_file     ← MATCH!     │   │
    │   │   5. POST prefix /files/       → write_file                 │   │
    │   │                                                              │   │
    │   │   nothing matched              → 404 Not Found               │   │
    │   └─────────────────────────────────────────────────────────────┘   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Order is part of the contract. Registering the same routes in a different
order can change which handler answers.

Targets are matched RAW: "/echo/a%20b" is compared as is, decoding is the
handler's job. Query strings are not split off either.
=============================================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from .request import HTTPRequest
from .response import HTTPResponse, not_found


# =============================================================================
# TYPE ALIASES
# =============================================================================

# Handler: A function that takes a request and returns a response
Handler = Callable[[HTTPRequest], HTTPResponse]


class MatchKind(Enum):
    """How a route pattern is compared with the request target."""
    EXACT = "exact"     # target == pattern
    PREFIX = "prefix"   # target.startswith(pattern)


@dataclass(frozen=True)
class Route:
    """
    A route predicate bound to a handler.

    =========================================================================
    ANATOMY OF A ROUTE
    =========================================================================

        Route(
            method="GET",               # exact, case-sensitive
            pattern="/echo/",           # compared with the raw target
            kind=MatchKind.PREFIX,      # EXACT or PREFIX
            handler=echo,               # called with the HTTPRequest
        )

    =========================================================================
    """

    method: str
    pattern: str
    kind: MatchKind
    handler: Handler

    def matches(self, method: str, target: str) -> bool:
        """Check whether this route applies to `method` and `target`."""
        if method != self.method:
            return False
        if self.kind is MatchKind.EXACT:
            return target == self.pattern
        return target.startswith(self.pattern)


class Router:
    """
    HTTP request router with a fixed, ordered route table.

    ==========================================================================
    USAGE
    ==========================================================================

        router = Router()

        @router.get("/")
        def root(request):
            return ok()

        @router.get("/echo/", prefix=True)
        def echo(request):
            ...

        response_bytes = router.dispatch(request)

    ==========================================================================
    """

    def __init__(self):
        self._routes: List[Route] = []

    # =========================================================================
    # ROUTE REGISTRATION
    # =========================================================================

    def add_route(
        self,
        method: str,
        pattern: str,
        handler: Handler,
        kind: MatchKind = MatchKind.EXACT,
    ) -> Route:
        """
        Append a route to the end of the table.

        Args:
            method: HTTP method the route answers ("GET", "POST").
            pattern: Exact path or path prefix.
            handler: Function that takes the request and returns a response.
            kind: MatchKind.EXACT or MatchKind.PREFIX.

        Returns:
            The registered Route object.
        """
        route = Route(method=method, pattern=pattern, kind=kind, handler=handler)
        self._routes.append(route)
        return route

    def route(
        self,
        method: str,
        pattern: str,
        prefix: bool = False,
    ) -> Callable[[Handler], Handler]:
        """
        Decorator for registering routes.

        Usage:
            @router.route("GET", "/files/", prefix=True)
            def read_file(request):
                ...
        """
        kind = MatchKind.PREFIX if prefix else MatchKind.EXACT

        def decorator(handler: Handler) -> Handler:
            self.add_route(method, pattern, handler, kind)
            return handler  # Unchanged, so decorators can be stacked
        return decorator

    def get(self, pattern: str, prefix: bool = False) -> Callable[[Handler], Handler]:
        """Register a GET route."""
        return self.route("GET", pattern, prefix)

    def post(self, pattern: str, prefix: bool = False) -> Callable[[Handler], Handler]:
        """Register a POST route."""
        return self.route("POST", pattern, prefix)

    # =========================================================================
    # ROUTE MATCHING
    # =========================================================================

    def match(self, method: str, target: str) -> Optional[Route]:
        """
        Find the first route that applies.

        Args:
            method: Request method, compared exactly.
            target: Raw request target.

        Returns:
            The first matching Route, or None.
        """
        for route in self._routes:
            if route.matches(method, target):
                return route
        return None

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """
        Route a request to its handler.

        Falls through to a bare 404 when no route matches. Any method
        other than the one a route was registered with is treated the same
        as an unknown path: 404, never 405.
        """
        route = self.match(request.method, request.target)
        if route is None:
            return not_found()
        return route.handler(request)

    def dispatch(self, request: HTTPRequest) -> bytes:
        """Route a request and serialize the response to wire bytes."""
        return self.handle(request).to_bytes()

    def routes(self) -> List[Route]:
        """Get the registered routes, in priority order."""
        return list(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
