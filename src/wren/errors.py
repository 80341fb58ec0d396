"""Wren exception hierarchy.

Shared across the pipeline, middleware, and accessors so every module
raises and catches the same types.
"""

from dataclasses import dataclass
from typing import Any


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when the pipeline is wired incorrectly.

    Never turned into an HTTP response. The ASGI handler logs it and
    re-raises so the mistake surfaces during development.
    """


class QueryNotBoundError(ConfigurationError):
    """The query accessor was used on a request the binder never saw.

    Distinct from a missing parameter, which is an ordinary ``None``.
    """

    def __init__(self, path: str | None = None) -> None:
        self.path = path
        where = f" for {path!r}" if path is not None else ""
        super().__init__(
            f"No parsed query attached to the request{where}. "
            "Make sure the QueryParser middleware is installed and runs "
            "before any handler reads query values."
        )


class QueryParseError(WrenError):
    """A query value is present but not valid text for the requested type.

    Returned inside ``ParseResult`` rather than raised. Only
    ``ParseResult.unwrap()`` raises it.
    """

    def __init__(self, name: str, value: str, kind: Any, cause: Exception) -> None:
        self.name = name
        self.value = value
        self.kind = kind
        self.cause = cause
        self.kind_name = getattr(kind, "__name__", repr(kind))
        super().__init__(
            f"Query parameter {name!r}={value!r} is not a valid {self.kind_name}: {cause}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryParseError):
            return NotImplemented
        return (self.name, self.value, self.kind) == (other.name, other.value, other.kind)

    def __hash__(self) -> int:
        return hash((self.name, self.value, self.kind))


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code.

    Raised by dispatch, middleware, or handlers. The ASGI handler
    catches these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route registered for the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — path is registered but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
