"""Wren — a small ASGI request pipeline with query-string binding.

The ``QueryParser`` middleware decodes the query string of every request
once and attaches it to the request. Handlers read single values, or
values parsed to a type, without touching the URI again.

Basic usage::

    from wren import App, Request, Response

    app = App()

    @app.route("/books")
    def books(request: Request):
        title = request.query("title")
        page = request.query_parsed("page", int)
        if page is not None and not page:
            return Response(str(page.error), status=400)
        ...

Accessors that use the current request::

    from wren import query, query_parsed

    @app.route("/search")
    def search():
        return {"q": query("q")}
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "ParseResult",
    "QueryConfig",
    "QueryMap",
    "QueryNotBoundError",
    "QueryParseError",
    "QueryParser",
    "Request",
    "Response",
    "WrenError",
    "bind_query",
    "decode_query",
    "get_request",
    "queries",
    "query",
    "query_parsed",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wren.app import App

        return App

    if name in ("AppConfig", "QueryConfig"):
        from wren import config as _config

        return getattr(_config, name)

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name == "Response":
        from wren.http.response import Response

        return Response

    if name in ("QueryMap", "ParseResult", "decode_query"):
        from wren.http import query as _query

        return getattr(_query, name)

    if name in ("Middleware", "Next"):
        from wren.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("QueryParser", "bind_query"):
        from wren.middleware import query as _binder

        return getattr(_binder, name)

    if name in ("queries", "query", "query_parsed"):
        from wren import extract as _extract

        return getattr(_extract, name)

    if name == "get_request":
        from wren.context import get_request

        return get_request

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "QueryNotBoundError",
        "QueryParseError",
        "WrenError",
    ):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
