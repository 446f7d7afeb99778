"""Request routing by HTTP method and path pattern with ``:name`` parameters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, NamedTuple

from miniweb.logger import Logger, LogLevel, log_message

MAX_ROUTES = 100
MAX_PARAMS = 10

NOT_FOUND_BODY = '{"error":"Not Found"}'


class HttpMethod(Enum):
    """Request methods known to the router."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


def parse_method(method_str: str) -> HttpMethod:
    """Map a method token to ``HttpMethod``; unknown tokens count as GET."""
    try:
        return HttpMethod(method_str)
    except ValueError:
        return HttpMethod.GET


@dataclass
class Request:
    """A parsed request as seen by route handlers."""

    method: HttpMethod = HttpMethod.GET
    path: str = ""
    body: str = ""
    query_string: str | None = None
    headers: str = ""
    params: list[tuple[str, str]] = field(default_factory=list)

    @property
    def body_length(self) -> int:
        return len(self.body.encode("utf-8"))

    def parse_query(self, query: str | None) -> None:
        """Add ``name=value`` pairs from a query string, up to ``MAX_PARAMS`` in all."""
        if not query:
            return
        for token in filter(None, query.split("&")):
            if len(self.params) >= MAX_PARAMS:
                break
            name, equals, value = token.partition("=")
            if equals:
                self.params.append((name, value))

    def get_param(self, name: str) -> str | None:
        """Return the first path or query parameter called ``name``, or ``None``."""
        return next((value for key, value in self.params if key == name), None)


@dataclass
class Response:
    """What a handler answers with."""

    status_code: int = 0
    content_type: str = ""
    body: str = ""
    headers: str = ""

    @property
    def body_length(self) -> int:
        return len(self.body.encode("utf-8"))

    def set(self, status: int, content_type: str, body: str) -> None:
        """Set status, content type and body together."""
        self.status_code = status
        self.content_type = content_type
        self.body = body

    def set_json(self, status: int, json_text: str) -> None:
        """Set a JSON body with the given status."""
        self.set(status, "application/json", json_text)


RouteHandler = Callable[[Request, Response], None]


class Route(NamedTuple):
    method: HttpMethod
    pattern: str
    handler: RouteHandler


def match_route(pattern: str, path: str, req: Request) -> bool:
    """Tell whether ``path`` fits ``pattern``, filling ``req.params`` from ``:name`` segments.

    An exact match leaves the parameters alone; otherwise they are replaced by
    the ones taken from the path.
    """
    if pattern == path:
        return True
    pattern_parts = [part for part in pattern.split("/") if part]
    path_parts = [part for part in path.split("/") if part]
    req.params = []
    for expected, actual in zip(pattern_parts, path_parts):
        if expected.startswith(":"):
            req.params.append((expected[1:], actual))
        elif expected != actual:
            return False
    return len(pattern_parts) == len(path_parts)


class Router:
    """Dispatches requests to the first route matching method and path."""

    def __init__(self, logger: Logger | None = None) -> None:
        self._logger = logger
        self._routes: list[Route] = []

    def _log(self, level: LogLevel, message: str) -> None:
        if self._logger is not None:
            self._logger.log(level, message)
        else:
            log_message(level, message)

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def add(self, method: HttpMethod, pattern: str, handler: RouteHandler) -> None:
        """Register ``handler`` for ``method`` and ``pattern``."""
        if len(self._routes) >= MAX_ROUTES:
            self._log(LogLevel.ERROR, "Maximum routes reached")
            raise RuntimeError("Maximum routes reached")
        self._routes.append(Route(method, pattern, handler))
        self._log(LogLevel.INFO, f"Added route: {method.value} {pattern}")

    def handle(self, req: Request, res: Response) -> None:
        """Run the first matching handler, or answer 404 with a JSON error."""
        self._log(
            LogLevel.DEBUG,
            f"Router handling path: {req.path}, method: {req.method.value}",
        )
        for route in self._routes:
            if route.method == req.method and match_route(route.pattern, req.path, req):
                self._log(LogLevel.INFO, f"Matched route: {route.pattern}")
                route.handler(req, res)
                return
        self._log(LogLevel.WARNING, f"No route matched for: {req.path}")
        res.set(404, "application/json", NOT_FOUND_BODY)

    def clear(self) -> None:
        """Remove every route."""
        self._routes.clear()