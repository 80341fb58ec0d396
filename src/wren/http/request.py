"""Immutable HTTP request.

Frozen metadata plus a per-request ``Extensions`` store. The target URI
cannot change after the request is built, so anything derived from it
and stored in ``extensions`` stays valid for the life of the request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from wren.http.extensions import Extensions

if TYPE_CHECKING:
    from wren._internal.types import TextParser
    from wren.http.query import ParseResult, QueryMap

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``query_string`` is the raw text after ``?`` (``None`` when the
    target has none). Decoded values are read through ``queries()``,
    ``query()`` and ``query_parsed()``, which require the
    ``QueryParser`` middleware to have run.
    """

    method: str
    path: str
    query_string: str | None
    headers: tuple[tuple[str, str], ...] = ()
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    # Typed per-request storage. The field reference is frozen; the
    # store itself is written by middleware.
    extensions: Extensions = field(default_factory=Extensions, repr=False, compare=False)

    # -- Computed properties --

    @property
    def url(self) -> str:
        """Request target (path + query string)."""
        if self.query_string is not None:
            return f"{self.path}?{self.query_string}"
        return self.path

    def header(self, name: str) -> str | None:
        """Return the first value of header *name* (case-insensitive)."""
        lowered = name.lower()
        for hname, hvalue in self.headers:
            if hname == lowered:
                return hvalue
        return None

    # -- Query access (requires QueryParser) --

    def queries(self) -> QueryMap:
        """All decoded query parameters.

        Raises:
            QueryNotBoundError: If ``QueryParser`` never ran on this request.
        """
        from wren.extract import queries

        return queries(self)

    def query(self, name: str) -> str | None:
        """The decoded value of query parameter *name*, or ``None``."""
        from wren.extract import query

        return query(name, self)

    def query_parsed(self, name: str, kind: type[T] | TextParser) -> ParseResult[T] | None:
        """Query parameter *name* converted by *kind*, or ``None`` if absent."""
        from wren.extract import query_parsed

        return query_parsed(name, kind, self)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        server = scope.get("server")
        client = scope.get("client")
        raw_query: bytes = scope.get("query_string", b"")
        return cls(
            method=scope["method"],
            path=scope["path"],
            # ASGI cannot tell "no ?" from "empty ?"; both decode to nothing
            query_string=raw_query.decode("utf-8", "replace") if raw_query else None,
            headers=tuple(
                (name.decode("latin-1").lower(), value.decode("latin-1"))
                for name, value in scope.get("headers", ())
            ),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )
