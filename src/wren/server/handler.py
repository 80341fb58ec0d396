"""ASGI handler — translates ASGI scope/messages to wren types.

The only component that touches raw ASGI directly. Converts scope dicts
to typed Request objects, dispatches through middleware and the route
table, and sends the Response back through ASGI send().
"""

import inspect
import logging
from collections.abc import Callable
from contextvars import Token
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren.context import request_var
from wren.errors import ConfigurationError, HTTPError
from wren.http.request import Request
from wren.http.response import Response, to_response
from wren.middleware.protocol import Next
from wren.routing import RouteTable
from wren.server.errors import handle_http_error, handle_internal_error
from wren.server.sender import send_response

logger = logging.getLogger("wren.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    routes: RouteTable,
    middleware: tuple[Callable[..., Any], ...],
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline.

    ``ConfigurationError`` is logged and re-raised rather than turned
    into a response: it means the pipeline itself is wired wrong.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    # Set request context var (reset after dispatch)
    token: Token[Request] = request_var.set(request)

    try:

        async def dispatch(req: Request) -> Response:
            route = routes.match(req.method, req.path)
            return await _invoke_handler(route.handler, req)

        # Wrap middleware around the dispatch
        handler = dispatch
        for mw in reversed(middleware):
            outer = handler

            async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> Response:
                return await _mw(req, _next)

            handler = make_next

        response = await handler(request)

    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, debug)
    except ConfigurationError:
        logger.critical(
            "Pipeline misconfigured while serving %s %s",
            request.method,
            request.path,
            exc_info=True,
        )
        raise
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)
    finally:
        request_var.reset(token)

    await send_response(response, send)


async def _invoke_handler(handler: Callable[..., Any], request: Request) -> Response:
    """Call the route handler and convert its return value."""
    kwargs: dict[str, Any] = {}
    for name, param in inspect.signature(handler, eval_str=True).parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request

    result = await invoke(handler, **kwargs)
    return to_response(result)
