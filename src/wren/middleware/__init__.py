"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    QueryParser -- Decode the query string into the request's extensions
"""

from wren.middleware.protocol import Middleware, Next
from wren.middleware.query import QueryParser, bind_query

__all__ = [
    "Middleware",
    "Next",
    "QueryParser",
    "bind_query",
]
