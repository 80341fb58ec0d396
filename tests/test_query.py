"""Tests for wren.http.query — decoding into QueryMap and typed parsing."""

import copy
import datetime
import pickle
import enum
import uuid
from decimal import Decimal
from urllib.parse import quote_plus

import pytest

from wren.errors import QueryParseError
from wren.http.query import ParseResult, QueryMap, decode_query, iter_query_pairs


class Color(enum.Enum):
    RED = "red"
    BLUE = "blue"


class TestDecodeQuery:
    def test_pairs(self) -> None:
        q = decode_query("a=1&b=2")
        assert q.get("a") == "1"
        assert q.get("b") == "2"
        assert q.get("c") is None

    def test_absent_query_is_empty(self) -> None:
        q = decode_query(None)
        assert len(q) == 0
        assert q.get("x") is None
        assert q.raw is None

    def test_empty_string_is_empty(self) -> None:
        q = decode_query("")
        assert len(q) == 0
        assert q.raw == ""

    def test_last_occurrence_wins(self) -> None:
        q = decode_query("a=1&a=2")
        assert q["a"] == "2"
        assert len(q) == 1

    def test_plus_is_space(self) -> None:
        assert decode_query("name=John+Doe")["name"] == "John Doe"

    def test_percent_escapes(self) -> None:
        assert decode_query("name=A%26B")["name"] == "A&B"

    def test_names_are_decoded(self) -> None:
        q = decode_query("first+name=Ann&a%5Bb%5D=1")
        assert q["first name"] == "Ann"
        assert q["a[b]"] == "1"

    def test_utf8_escapes(self) -> None:
        assert decode_query("city=M%C3%BCnchen")["city"] == "München"

    def test_missing_equals_gives_empty_value(self) -> None:
        q = decode_query("flag&x=1")
        assert q["flag"] == ""
        assert q["x"] == "1"

    def test_blank_value_preserved(self) -> None:
        assert decode_query("flag=")["flag"] == ""

    def test_split_on_first_equals_only(self) -> None:
        assert decode_query("expr=a=b")["expr"] == "a=b"

    def test_empty_segments_skipped(self) -> None:
        q = decode_query("&&a=1&&")
        assert dict(q) == {"a": "1"}

    def test_malformed_escape_passes_through(self) -> None:
        q = decode_query("bad=%zz&short=%4")
        assert q["bad"] == "%zz"
        assert q["short"] == "%4"

    def test_invalid_utf8_is_replaced(self) -> None:
        assert decode_query("v=%FF")["v"] == "\ufffd"

    def test_bytes_input(self) -> None:
        q = decode_query(b"q=hello+world")
        assert q["q"] == "hello world"
        assert q.raw == "q=hello+world"

    def test_bytes_input_decodes_unescaped_utf8(self) -> None:
        q = decode_query(b"n=\xc3\xa9&m=%C3%A9")
        assert q["n"] == "\u00e9"
        assert q["m"] == "\u00e9"
        assert q.raw == "n=\u00e9&m=%C3%A9"

    def test_bytes_input_uses_configured_encoding(self) -> None:
        assert decode_query(b"c=\xe9", encoding="latin-1")["c"] == "\u00e9"

    def test_custom_separator(self) -> None:
        q = decode_query("a=1;b=2", separator=";")
        assert dict(q) == {"a": "1", "b": "2"}

    def test_latin1_encoding(self) -> None:
        assert decode_query("c=%E9", encoding="latin-1")["c"] == "é"

    def test_idempotent(self) -> None:
        raw = "a=1&b=x+y&a=3&c=%2F"
        assert decode_query(raw) == decode_query(raw)

    def test_decode_then_lookup(self) -> None:
        pairs = {"user name": "Ann & Bob", "path": "/a/b?c", "sym": "100%+"}
        raw = "&".join(f"{quote_plus(k)}={quote_plus(v)}" for k, v in pairs.items())
        q = decode_query(raw)
        for name, value in pairs.items():
            assert q.get(name) == value


class TestIterQueryPairs:
    def test_keeps_order_and_duplicates(self) -> None:
        assert list(iter_query_pairs("a=1&b=2&a=3")) == [("a", "1"), ("b", "2"), ("a", "3")]

    def test_none_yields_nothing(self) -> None:
        assert list(iter_query_pairs(None)) == []


class TestQueryMap:
    def test_mapping_protocol(self) -> None:
        q = decode_query("a=1&b=2")
        assert "a" in q
        assert "z" not in q
        assert set(q) == {"a", "b"}
        assert len(q) == 2

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyError):
            decode_query("a=1")["missing"]

    def test_get_with_default(self) -> None:
        q = decode_query("a=1")
        assert q.get("missing", "fallback") == "fallback"

    def test_equals_plain_dict(self) -> None:
        assert decode_query("a=1&b=2") == {"a": "1", "b": "2"}

    def test_immutable(self) -> None:
        q = QueryMap({"a": "1"})
        with pytest.raises(AttributeError):
            q.extra = "x"  # type: ignore[attr-defined]
        with pytest.raises(TypeError):
            q["a"] = "2"  # type: ignore[index]

    def test_copies_input(self) -> None:
        data = {"a": "1"}
        q = QueryMap(data)
        data["a"] = "2"
        assert q["a"] == "1"

    def test_delete_attribute_refused(self) -> None:
        q = QueryMap({"a": "1"})
        with pytest.raises(AttributeError):
            del q._data
        assert q["a"] == "1"

    def test_copy_and_pickle(self) -> None:
        q = decode_query("a=1&b=x+y")
        for clone in (copy.copy(q), copy.deepcopy(q), pickle.loads(pickle.dumps(q))):
            assert isinstance(clone, QueryMap)
            assert clone == q
            assert clone.raw == "a=1&b=x+y"

    def test_repr(self) -> None:
        assert "hello" in repr(decode_query("q=hello"))


class TestGetParsed:
    def test_int_success(self) -> None:
        result = decode_query("page=7").get_parsed("page", int)
        assert result is not None
        assert result.ok
        assert result.value == 7

    def test_int_failure(self) -> None:
        result = decode_query("page=seven").get_parsed("page", int)
        assert result is not None
        assert not result
        assert isinstance(result.error, QueryParseError)
        assert result.error.name == "page"
        assert result.error.value == "seven"
        assert result.error.kind is int
        assert isinstance(result.error.cause, ValueError)

    def test_absent_is_none(self) -> None:
        assert decode_query("other=1").get_parsed("page", int) is None

    def test_absent_distinct_from_failure(self) -> None:
        q = decode_query("page=")
        result = q.get_parsed("page", int)
        assert result is not None
        assert not result.ok

    def test_float_and_decimal(self) -> None:
        q = decode_query("f=1.5&d=2.25&bad=x")
        assert q.get_parsed("f", float) == ParseResult(value=1.5)
        assert q.get_parsed("d", Decimal) == ParseResult(value=Decimal("2.25"))
        bad = q.get_parsed("bad", Decimal)
        assert bad is not None
        assert not bad.ok

    def test_bool(self) -> None:
        q = decode_query("a=true&b=0&c=Yes&d=off&e=maybe")
        assert q.get_parsed("a", bool) == ParseResult(value=True)
        assert q.get_parsed("b", bool) == ParseResult(value=False)
        assert q.get_parsed("c", bool) == ParseResult(value=True)
        assert q.get_parsed("d", bool) == ParseResult(value=False)
        e = q.get_parsed("e", bool)
        assert e is not None
        assert not e.ok

    def test_uuid(self) -> None:
        ident = uuid.uuid4()
        result = decode_query(f"id={ident}").get_parsed("id", uuid.UUID)
        assert result is not None
        assert result.value == ident

    def test_enum(self) -> None:
        q = decode_query("color=red&other=green")
        assert q.get_parsed("color", Color) == ParseResult(value=Color.RED)
        other = q.get_parsed("other", Color)
        assert other is not None
        assert not other.ok

    def test_dates(self) -> None:
        q = decode_query("d=2024-05-01&t=2024-05-01T10%3A30%3A00")
        assert q.get_parsed("d", datetime.date) == ParseResult(value=datetime.date(2024, 5, 1))
        assert q.get_parsed("t", datetime.datetime) == ParseResult(
            value=datetime.datetime(2024, 5, 1, 10, 30)
        )

    def test_custom_parser(self) -> None:
        def csv(text: str) -> list[str]:
            if not text:
                msg = "empty list"
                raise ValueError(msg)
            return text.split(",")

        q = decode_query("tags=a,b,c&none=")
        assert q.get_parsed("tags", csv) == ParseResult(value=["a", "b", "c"])
        none = q.get_parsed("none", csv)
        assert none is not None
        assert none.error is not None
        assert none.error.kind_name == "csv"

    def test_non_callable_kind_raises(self) -> None:
        with pytest.raises(TypeError, match="kind must be"):
            decode_query("p=1").get_parsed("p", 5)  # type: ignore[call-overload]

    def test_parser_signature_error_propagates(self) -> None:
        def pair(left: str, right: str) -> str:
            return left + right

        with pytest.raises(TypeError):
            decode_query("p=1").get_parsed("p", pair)  # type: ignore[arg-type]


class TestParseResult:
    def test_unwrap_success(self) -> None:
        assert ParseResult(value=3).unwrap() == 3

    def test_unwrap_failure_raises(self) -> None:
        result = decode_query("n=x").get_parsed("n", int)
        assert result is not None
        with pytest.raises(QueryParseError, match="'n'='x' is not a valid int"):
            result.unwrap()

    def test_value_or(self) -> None:
        q = decode_query("n=x&m=4")
        bad = q.get_parsed("n", int)
        good = q.get_parsed("m", int)
        assert bad is not None and good is not None
        assert bad.value_or(1) == 1
        assert good.value_or(1) == 4
