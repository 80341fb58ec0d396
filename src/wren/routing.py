"""Exact-path dispatch table.

Routes are matched by literal path and HTTP method. There are no path
parameters; request data that varies per call travels in the query
string and is read through ``wren.extract``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from wren.errors import MethodNotAllowed, NotFound


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created during app setup, compiled into the table at freeze time.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]


def _normalize(path: str) -> str:
    if path != "/" and path.endswith("/"):
        return path.rstrip("/") or "/"
    return path


class RouteTable:
    """Maps ``(path, method)`` to a route handler."""

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: dict[str, dict[str, Route]] = {}

    def add(self, route: Route) -> None:
        """Register *route* for each of its methods.

        Raises:
            ValueError: If a method on that path is already taken.
        """
        by_method = self._routes.setdefault(_normalize(route.path), {})
        for method in route.methods:
            if method in by_method:
                msg = f"Duplicate route: {method} {route.path!r}"
                raise ValueError(msg)
            by_method[method] = route

    def match(self, method: str, path: str) -> Route:
        """Return the route for *method* and *path*.

        Raises ``NotFound`` if no route has the path.
        Raises ``MethodNotAllowed`` if the path exists but the method doesn't.
        """
        by_method = self._routes.get(_normalize(path))
        if not by_method:
            raise NotFound(f"No route matches {method} {path!r}")
        if method in by_method:
            return by_method[method]
        if method == "HEAD" and "GET" in by_method:
            return by_method["GET"]
        raise MethodNotAllowed(frozenset(by_method))

    def __len__(self) -> int:
        return sum(len(by_method) for by_method in self._routes.values())
