"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Immutable by convention,
built incrementally by design.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set
    status and headers. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    # -- Body access --

    @property
    def body_bytes(self) -> bytes:
        """The body encoded to bytes."""
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")

    @property
    def text(self) -> str:
        """The body decoded as UTF-8."""
        if isinstance(self.body, str):
            return self.body
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body_bytes)

    def header(self, name: str) -> str | None:
        """Return the first header value matching *name* (case-insensitive)."""
        lowered = name.lower()
        for hname, hvalue in self.headers:
            if hname.lower() == lowered:
                return hvalue
        return None


def to_response(value: Any) -> Response:
    """Convert a handler return value into a Response.

    - ``Response`` passes through unchanged
    - ``str`` / ``bytes`` become a ``text/plain`` body
    - ``dict`` / ``list`` become ``application/json``
    - ``None`` becomes an empty 204
    """
    if isinstance(value, Response):
        return value
    if value is None:
        return Response(status=204)
    if isinstance(value, str | bytes):
        return Response(body=value)
    if isinstance(value, dict | list):
        return Response(
            body=json_module.dumps(value),
            content_type="application/json",
        )
    msg = (
        f"Cannot convert {type(value).__name__} to a response. "
        "Return a Response, str, bytes, dict, list, or None."
    )
    raise TypeError(msg)
