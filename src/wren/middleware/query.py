"""Query binder middleware.

Decodes the request's query string once and stores the result in the
request's ``extensions`` under a private slot. Handlers read it back
through ``wren.extract`` (or the matching ``Request`` methods) without
re-parsing the URI.

Usage::

    app.add_middleware(QueryParser())

    @app.route("/books")
    def books(request: Request):
        page = request.query_parsed("page", int)
        ...

``App`` installs a ``QueryParser`` automatically unless
``AppConfig.parse_query`` is ``False``.
"""

import logging
from dataclasses import dataclass

from wren.config import QueryConfig
from wren.http.query import QueryMap, decode_query
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next

logger = logging.getLogger("wren.query")


@dataclass(frozen=True, slots=True)
class _BoundQuery:
    """Extension slot holding the decoded query for one request."""

    params: QueryMap


def bind_query(request: Request, config: QueryConfig | None = None) -> Request:
    """Decode *request*'s query string and attach it to the request.

    Binding twice replaces the slot with an equivalent map. Returns the
    same request so the call can sit inline in a pipeline.
    """
    cfg = config or QueryConfig()
    params = decode_query(
        request.query_string,
        encoding=cfg.encoding,
        errors=cfg.errors,
        separator=cfg.separator,
    )
    request.extensions.insert(_BoundQuery(params))
    logger.debug("bound %d query parameter(s) for %s", len(params), request.path)
    return request


def lookup_bound_query(request: Request) -> QueryMap | None:
    """Return the map ``bind_query`` attached, or ``None`` if it never ran."""
    bound = request.extensions.get(_BoundQuery)
    if bound is None:
        return None
    return bound.params


class QueryParser:
    """Middleware that decodes the query string before dispatch.

    Never rejects or short-circuits a request; decoding cannot fail.
    """

    __slots__ = ("config",)

    def __init__(self, config: QueryConfig | None = None) -> None:
        self.config = config or QueryConfig()

    async def __call__(self, request: Request, next: Next) -> Response:
        """Bind the query, then hand the request on."""
        return await next(bind_query(request, self.config))
