"""Query string decoding.

``decode_query`` turns the raw query string of a request target into an
immutable ``QueryMap``. Decoding is lenient: malformed escapes pass
through and undecodable bytes are replaced, so it never raises.

Repeated names keep the last value::

    >>> decode_query("a=1&a=2")["a"]
    '2'
"""

from __future__ import annotations

import datetime
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast, overload
from urllib.parse import parse_qsl

from wren._internal.types import TextParser
from wren.errors import QueryParseError

T = TypeVar("T")

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    msg = f"expected one of {sorted(_TRUE | _FALSE)}"
    raise ValueError(msg)


# Types whose constructor is not their text parser.
_PARSERS: dict[type, TextParser] = {
    bool: _parse_bool,
    datetime.date: datetime.date.fromisoformat,
    datetime.time: datetime.time.fromisoformat,
    datetime.datetime: datetime.datetime.fromisoformat,
}


def iter_query_pairs(
    raw: str | bytes | None,
    *,
    encoding: str = "utf-8",
    errors: str = "replace",
    separator: str = "&",
) -> Iterator[tuple[str, str]]:
    """Yield decoded ``(name, value)`` pairs in the order they appear.

    Segments without ``=`` yield an empty value. Empty segments are skipped.
    """
    if not raw:
        return
    if isinstance(raw, bytes):
        # unescaped non-ASCII bytes are in the same charset as escaped ones
        raw = raw.decode(encoding, errors)
    yield from parse_qsl(
        raw,
        keep_blank_values=True,
        encoding=encoding,
        errors=errors,
        separator=separator,
    )


def decode_query(
    raw: str | bytes | None,
    *,
    encoding: str = "utf-8",
    errors: str = "replace",
    separator: str = "&",
) -> QueryMap:
    """Decode a raw query string into a ``QueryMap``.

    Args:
        raw: The text after ``?`` in the request target, without the ``?``.
            ``None`` means the target had no query string.
        encoding: Charset of percent-encoded bytes.
        errors: Codec error handler for bytes invalid in *encoding*.
        separator: Pair separator.
    """
    data: dict[str, str] = {}
    for name, value in iter_query_pairs(raw, encoding=encoding, errors=errors, separator=separator):
        data[name] = value
    if isinstance(raw, bytes):
        raw = raw.decode(encoding, errors)
    return QueryMap(data, raw=raw)


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[T]):
    """Outcome of converting one query value to a typed value.

    Exactly one of ``value`` / ``error`` is meaningful. The result is
    falsy on failure::

        page = request.query_parsed("page", int)
        if page is None:
            ...  # not sent
        elif not page:
            raise HTTPError(400, str(page.error))
        else:
            offset = page.value * 20
    """

    value: T | None = None
    error: QueryParseError | None = None

    @property
    def ok(self) -> bool:
        """True if the value was converted."""
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> T:
        """Return the converted value, or raise the stored ``QueryParseError``."""
        if self.error is not None:
            raise self.error
        return cast(T, self.value)

    def value_or(self, default: T) -> T:
        """Return the converted value, or *default* on failure."""
        if self.error is not None:
            return default
        return cast(T, self.value)


def parse_value(name: str, text: str, kind: type[T] | TextParser) -> ParseResult[T]:
    """Convert *text* with *kind*'s text parser, capturing failures.

    Only malformed text is captured. A *kind* that is not callable, or a
    parser that raises anything but ``ValueError`` or ``ArithmeticError``,
    is a programming error and propagates.
    """
    if not callable(kind):
        msg = f"kind must be a type or a callable taking one str, got {kind!r}"
        raise TypeError(msg)
    parser = _PARSERS.get(kind, kind) if isinstance(kind, type) else kind
    try:
        return ParseResult(value=parser(text))
    except (ValueError, ArithmeticError) as exc:
        # decimal.InvalidOperation is an ArithmeticError, not a ValueError
        return ParseResult(error=QueryParseError(name, text, kind, exc))


class QueryMap(Mapping[str, str]):
    """Immutable decoded query string, one value per name.

    Attributes:
        _data: Decoded name -> value (last occurrence wins).
        _raw: Raw query string, or ``None`` if the target had none.
    """

    _data: dict[str, str]
    _raw: str | None

    __slots__ = ("_data", "_raw")

    def __init__(self, data: Mapping[str, str] | None = None, raw: str | None = None) -> None:
        object.__setattr__(self, "_data", dict(data or {}))
        object.__setattr__(self, "_raw", raw)

    def __setattr__(self, name: str, value: Any) -> None:
        msg = "QueryMap is immutable"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        msg = "QueryMap is immutable"
        raise AttributeError(msg)

    def __reduce__(self) -> tuple[Any, ...]:
        # rebuild through __init__; slot state cannot be set on an immutable map
        return (type(self), (self._data, self._raw))

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QueryMap):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self._data.items())
        return f"QueryMap({{{items}}})"

    @property
    def raw(self) -> str | None:
        """The undecoded query string this map was built from."""
        return self._raw

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the value for *key*, or *default* if missing."""
        return self._data.get(key, default)

    @overload
    def get_parsed(self, key: str, kind: type[T]) -> ParseResult[T] | None: ...

    @overload
    def get_parsed(self, key: str, kind: TextParser) -> ParseResult[Any] | None: ...

    def get_parsed(self, key: str, kind: Any) -> ParseResult[Any] | None:
        """Return the value for *key* converted by *kind*.

        ``None`` if *key* is absent; otherwise a ``ParseResult`` holding
        either the converted value or the ``QueryParseError``.

        *kind* is a type (``int``, ``float``, ``Decimal``, ``UUID``, an
        ``Enum`` subclass, ...) or any callable taking the text and raising
        ``ValueError`` on bad input.
        """
        text = self._data.get(key)
        if text is None:
            return None
        return parse_value(key, text, kind)
