"""Per-request typed storage.

Values are keyed by their type, so each component owns a slot by owning
a class. A private class gives a private slot that nothing else can
read or overwrite by accident::

    class _Session:
        ...

    request.extensions.insert(_Session(...))
    session = request.extensions.get(_Session)
"""

from typing import Any, TypeVar, overload

T = TypeVar("T")


class Extensions:
    """A mapping from type to one value of that type.

    Lives as long as its ``Request``. Not shared between requests.
    """

    __slots__ = ("_map",)

    def __init__(self) -> None:
        self._map: dict[type, Any] = {}

    def insert(self, value: T) -> T | None:
        """Store *value* under ``type(value)``, returning the value it replaced."""
        kind = type(value)
        previous = self._map.get(kind)
        self._map[kind] = value
        return previous

    @overload
    def get(self, kind: type[T]) -> T | None: ...

    @overload
    def get(self, kind: type[T], default: T) -> T: ...

    def get(self, kind: type[T], default: T | None = None) -> T | None:
        """Return the value stored under *kind*, or *default*."""
        return self._map.get(kind, default)

    def remove(self, kind: type[T]) -> T | None:
        """Remove and return the value stored under *kind*."""
        return self._map.pop(kind, None)

    def clear(self) -> None:
        self._map.clear()

    def __contains__(self, kind: object) -> bool:
        return kind in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __repr__(self) -> str:
        names = ", ".join(kind.__qualname__ for kind in self._map)
        return f"Extensions({names})"
