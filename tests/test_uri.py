"""Tests for the URI builder (uri/mutable.py, uri/model.py, uri/codec.py)."""

from __future__ import annotations

import dataclasses

import httpx
import pytest

from crux.errors import CruxError, UriFormatError
from crux.uri import MutableUri, Uri
from crux.uri.codec import encode_query, split_query, split_uri

# === Building ================================================================


class TestBuild:
    def test_fluent_build_with_repeated_query(self):
        uri = (
            MutableUri()
            .scheme("http")
            .host("example.com")
            .port(80)
            .path("/a")
            .query("x", "1")
            .query("x", "2")
        )
        assert str(uri) == "http://example.com:80/a?x=1&x=2"

    def test_empty_builder_is_empty_string(self):
        assert str(MutableUri()) == ""

    def test_set_query_replaces_all_values(self):
        uri = MutableUri("http://h/").query("x", "1").query("x", "2").set_query("x", "3")
        assert str(uri) == "http://h/?x=3"
        assert uri.query_all("x") == ("3",)

    def test_set_query_on_new_name_appends(self):
        uri = MutableUri("http://h/?a=1").set_query("b", "2")
        assert str(uri) == "http://h/?a=1&b=2"

    def test_names_keep_first_insertion_order(self):
        uri = MutableUri("http://h/").query("b", "1").query("a", "2").query("b", "3")
        assert str(uri) == "http://h/?b=1&b=3&a=2"

    def test_none_value_emits_bare_name(self):
        uri = MutableUri("http://h/").query("flag", None).query("x", "1")
        assert str(uri) == "http://h/?flag&x=1"

    def test_query_values_are_encoded(self):
        uri = MutableUri("http://h/").query("q", "a b&c=d")
        assert str(uri) == "http://h/?q=a+b%26c%3Dd"

    def test_query_names_are_encoded(self):
        uri = MutableUri("http://h/").query("a b", "1")
        assert str(uri) == "http://h/?a+b=1"

    def test_user_info_is_encoded(self):
        uri = MutableUri().scheme("ftp").user_info("joe smith:p@ss").host("h")
        assert str(uri) == "ftp://joe+smith:p%40ss@h"

    def test_encoded_colon_in_user_info_is_written_as_separator(self):
        uri = MutableUri("ftp://us%3Aer:pw@h")
        assert uri.get_user_info() == "us:er:pw"
        assert str(uri) == "ftp://us:er:pw@h"

    def test_fragment_is_encoded(self):
        uri = MutableUri("http://h/").fragment("sec 1")
        assert str(uri) == "http://h/#sec+1"

    def test_path_is_not_encoded_again(self):
        uri = MutableUri().scheme("http").host("h").path("/a%20b/c")
        assert str(uri) == "http://h/a%20b/c"

    def test_user_info_and_port_need_a_host(self):
        uri = MutableUri().scheme("mailto").path("joe@example.com")
        assert str(uri) == "mailto:joe@example.com"

    def test_remove_query(self):
        uri = MutableUri("http://h/?a=1&b=2&a=3").remove_query("a")
        assert str(uri) == "http://h/?b=2"

    def test_remove_last_query_drops_question_mark(self):
        uri = MutableUri("http://h/p?a=1").remove_query("a")
        assert str(uri) == "http://h/p"

    def test_none_name_rejected(self):
        with pytest.raises(ValueError, match="name cannot be None"):
            MutableUri().query(None, "x")  # type: ignore[arg-type]


# === Parsing =================================================================


class TestParse:
    def test_parses_all_components(self):
        uri = MutableUri.parse(
            "http://user%20name@Example.com:8080/a%2Fb/c?x=1&x=2&y=hello+world#frag%20ment"
        )
        assert uri.get_scheme() == "http"
        assert uri.get_user_info() == "user name"
        assert uri.get_host() == "Example.com"
        assert uri.get_port() == 8080
        assert uri.get_path() == "/a%2Fb/c"
        assert uri.get_query() == {"x": ("1", "2"), "y": ("hello world",)}
        assert uri.get_fragment() == "frag ment"

    def test_missing_components_are_none(self):
        uri = MutableUri.parse("http://example.com")
        assert uri.get_user_info() is None
        assert uri.get_port() is None
        assert uri.get_path() is None
        assert uri.get_query() == {}
        assert uri.get_fragment() is None

    def test_repeated_names_collect_values_in_order(self):
        uri = MutableUri.parse("http://h/?a=1&b=2&a=3")
        assert uri.query_all("a") == ("1", "3")
        assert uri.query_first("a") == "1"
        assert uri.query_first("missing") is None

    def test_bare_name_has_none_value(self):
        uri = MutableUri.parse("http://h/?flag&x=1")
        assert uri.query_all("flag") == (None,)

    def test_trailing_equals_is_empty_value(self):
        uri = MutableUri.parse("http://h/?a=")
        assert uri.query_all("a") == ("",)
        assert str(uri) == "http://h/?a="

    def test_more_than_one_equals_is_format_error(self):
        with pytest.raises(UriFormatError, match=r"\[a=b=c\]"):
            MutableUri.parse("http://h/?a=b=c")

    def test_format_error_is_value_error_and_crux_error(self):
        with pytest.raises(ValueError):
            MutableUri.parse("http://h/?a=b=c")
        with pytest.raises(CruxError):
            MutableUri.parse("http://h/?a=b=c")

    def test_invalid_port_is_format_error(self):
        with pytest.raises(UriFormatError, match="Invalid port"):
            MutableUri.parse("http://h:abc/")

    def test_ipv6_host_keeps_brackets(self):
        uri = MutableUri.parse("http://[::1]:8080/x")
        assert uri.get_host() == "[::1]"
        assert uri.get_port() == 8080
        assert str(uri) == "http://[::1]:8080/x"

    def test_parse_from_httpx_url(self):
        uri = MutableUri(httpx.URL("http://example.com/a?x=1"))
        assert str(uri) == "http://example.com/a?x=1"


# === Round trips =============================================================


class TestRoundTrip:
    @pytest.mark.parametrize(
        "text",
        [
            "http://example.com/a?x=1&x=2&y=3#top",
            "https://joe@example.com:8443/p/q?a=b%26c&d=e#f",
            "http://h/?flag&x=1",
            "mailto:joe@example.com",
        ],
    )
    def test_parse_then_serialize_is_identity(self, text):
        assert str(MutableUri(text)) == text

    def test_encoding_is_normalized(self):
        uri = MutableUri("http://h/?q=a%20b")
        assert str(uri) == "http://h/?q=a+b"
        assert MutableUri(str(uri)).query_all("q") == ("a b",)


# === Immutable value =========================================================


class TestUri:
    def test_to_immutable_equals_constructed_value(self):
        value = MutableUri("http://h/a?x=1#f").to_immutable()
        assert value == Uri(scheme="http", host="h", path="/a", query={"x": ("1",)}, fragment="f")
        assert str(value) == "http://h/a?x=1#f"

    def test_to_immutable_is_detached_from_builder(self):
        builder = MutableUri("http://h/?a=1")
        value = builder.to_immutable()
        builder.query("a", "2").host("other")
        assert value.query_all("a") == ("1",)
        assert value.host == "h"

    def test_copy_constructor_is_independent(self):
        original = MutableUri("http://h/?a=1")
        copy = MutableUri(original)
        copy.query("a", "2")
        assert original.query_all("a") == ("1",)
        assert copy.query_all("a") == ("1", "2")

    def test_to_mutable_round_trip(self):
        value = Uri(scheme="https", host="h", path="/p", query={"k": ("v",)})
        builder = value.to_mutable().query("k", "w")
        assert str(builder) == "https://h/p?k=v&k=w"
        assert value.query_all("k") == ("v",)

    def test_frozen(self):
        value = Uri(host="h")
        with pytest.raises(dataclasses.FrozenInstanceError):
            value.host = "x"  # type: ignore[misc]

    def test_query_is_read_only(self):
        value = MutableUri("http://h/?a=1").to_immutable()
        with pytest.raises(TypeError):
            value.query["a"] = ("2",)  # type: ignore[index]
        assert str(value) == "http://h/?a=1"

    def test_query_lists_are_frozen_to_tuples(self):
        values = ["1"]
        value = Uri(host="h", query={"a": values})  # type: ignore[dict-item]
        values.append("2")
        assert value.query_all("a") == ("1",)

    def test_hashable_by_value(self):
        first = Uri(host="h", query={"a": ("1",), "b": (None,)})
        second = Uri(host="h", query={"b": (None,), "a": ("1",)})
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, MutableUri("//h?a=1&b").to_immutable()}) == 1

    def test_to_url(self):
        url = MutableUri("http://example.com/a?x=1&x=2").to_immutable().to_url()
        assert isinstance(url, httpx.URL)
        assert url.host == "example.com"
        assert url.params.get_list("x") == ["1", "2"]

    def test_to_dict(self):
        d = MutableUri("http://h:81/p?x=1&x=2").to_immutable().to_dict()
        assert d == {
            "uri": "http://h:81/p?x=1&x=2",
            "scheme": "http",
            "user_info": None,
            "host": "h",
            "port": 81,
            "path": "/p",
            "query": {"x": ["1", "2"]},
            "fragment": None,
        }

    def test_builders_compare_by_value(self):
        built = MutableUri().scheme("http").host("h").path("/").query("a", "1")
        assert MutableUri("http://h/?a=1") == built


# === Codec helpers ===========================================================


class TestCodec:
    def test_split_query_skips_empty_segments(self):
        assert split_query("a=1&&b") == [("a", "1"), ("b", None)]

    def test_split_query_decodes_both_sides(self):
        assert split_query("a%20b=c+d") == [("a b", "c d")]

    def test_encode_query_empty(self):
        assert encode_query({}) == ""
        assert encode_query(None) == ""

    def test_split_uri_without_scheme(self):
        parts = split_uri("/just/a/path?x=1")
        assert parts.scheme is None
        assert parts.host is None
        assert parts.path == "/just/a/path"
        assert parts.query == (("x", "1"),)
