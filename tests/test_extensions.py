"""Tests for wren.http.extensions — per-request typed storage."""

from dataclasses import dataclass

from wren.http.extensions import Extensions


@dataclass
class _User:
    name: str


@dataclass
class _Locale:
    code: str


class TestExtensions:
    def test_insert_and_get(self) -> None:
        ext = Extensions()
        ext.insert(_User("ann"))
        assert ext.get(_User) == _User("ann")

    def test_get_missing(self) -> None:
        ext = Extensions()
        assert ext.get(_User) is None
        fallback = _User("anon")
        assert ext.get(_User, fallback) is fallback

    def test_insert_replaces_and_returns_previous(self) -> None:
        ext = Extensions()
        assert ext.insert(_User("ann")) is None
        previous = ext.insert(_User("bob"))
        assert previous == _User("ann")
        assert ext.get(_User) == _User("bob")
        assert len(ext) == 1

    def test_slots_are_per_type(self) -> None:
        ext = Extensions()
        ext.insert(_User("ann"))
        ext.insert(_Locale("de"))
        assert ext.get(_User) == _User("ann")
        assert ext.get(_Locale) == _Locale("de")
        assert len(ext) == 2

    def test_subclass_is_separate_slot(self) -> None:
        class _Admin(_User):
            pass

        ext = Extensions()
        ext.insert(_Admin("root"))
        assert ext.get(_User) is None
        assert _Admin in ext

    def test_remove(self) -> None:
        ext = Extensions()
        ext.insert(_User("ann"))
        assert ext.remove(_User) == _User("ann")
        assert _User not in ext
        assert ext.remove(_User) is None

    def test_clear(self) -> None:
        ext = Extensions()
        ext.insert(_User("ann"))
        ext.clear()
        assert len(ext) == 0

    def test_repr_names_types(self) -> None:
        ext = Extensions()
        ext.insert(_User("ann"))
        assert "_User" in repr(ext)
