"""Query accessors for handlers.

Read the query map ``QueryParser`` attached to the request::

    from wren.extract import query, query_parsed

    @app.route("/search")
    def search():
        term = query("q") or ""
        page = query_parsed("page", int)
        ...

Each function takes an optional ``request``; without one it uses the
current request from ``wren.context``.

Two failure modes stay separate:

- the parameter is missing → ``None``
- the binder never ran → ``QueryNotBoundError`` (a wiring mistake, not
  something handlers should catch)
"""

from typing import Any, TypeVar, overload

from wren._internal.types import TextParser
from wren.context import get_request
from wren.errors import QueryNotBoundError
from wren.http.query import ParseResult, QueryMap
from wren.http.request import Request
from wren.middleware.query import lookup_bound_query

T = TypeVar("T")


def queries(request: Request | None = None) -> QueryMap:
    """Return every decoded query parameter of the request.

    Raises:
        QueryNotBoundError: If ``QueryParser`` did not run on the request.
    """
    req = request if request is not None else get_request()
    params = lookup_bound_query(req)
    if params is None:
        raise QueryNotBoundError(req.path)
    return params


def query(name: str, request: Request | None = None) -> str | None:
    """Return the decoded value of *name*, or ``None`` if it was not sent."""
    return queries(request).get(name)


@overload
def query_parsed(
    name: str, kind: type[T], request: Request | None = None
) -> ParseResult[T] | None: ...


@overload
def query_parsed(
    name: str, kind: TextParser, request: Request | None = None
) -> ParseResult[Any] | None: ...


def query_parsed(name: str, kind: Any, request: Request | None = None) -> ParseResult[Any] | None:
    """Return *name* converted by *kind*.

    ``None`` when the parameter is absent. Otherwise a ``ParseResult``:
    truthy with ``.value`` on success, falsy with ``.error``
    (a ``QueryParseError``) when the text is not valid for *kind*.
    Conversion failures are returned, never raised.
    """
    return queries(request).get_parsed(name, kind)
