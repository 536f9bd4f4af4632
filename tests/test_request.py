import pytest
import yarl

import shuttle


def test_method_is_uppercased() -> None:
    request = shuttle.Request("get", "http://example.com")
    assert request.method == "GET"
    assert request.with_method("patch").method == "PATCH"


def test_url_is_parsed() -> None:
    request = shuttle.Request("GET", "http://example.com/path?a=b")
    assert request.url == yarl.URL("http://example.com/path?a=b")
    assert request.with_url("http://example.org").url.host == "example.org"


def test_default_version() -> None:
    assert shuttle.Request("GET", "http://example.com").version == shuttle.HttpVersion.HTTP_11


@pytest.mark.parametrize(
    "value, version",
    [
        (1, shuttle.HttpVersion.HTTP_10),
        (1.0, shuttle.HttpVersion.HTTP_10),
        ("1.0", shuttle.HttpVersion.HTTP_10),
        (1.1, shuttle.HttpVersion.HTTP_11),
        ("HTTP/1.1", shuttle.HttpVersion.HTTP_11),
        (2, shuttle.HttpVersion.HTTP_2),
        ("2.0", shuttle.HttpVersion.HTTP_2),
        (shuttle.HttpVersion.HTTP_2, shuttle.HttpVersion.HTTP_2),
    ],
)
def test_with_version(value: str | float, version: shuttle.HttpVersion) -> None:
    assert shuttle.Request("GET", "http://example.com").with_version(value).version == version


@pytest.mark.parametrize("value", ["3", 0.9, "1.2", "", True])
def test_unknown_version(value: str | float) -> None:
    with pytest.raises(shuttle.UnknownVersionError):
        shuttle.Request("GET", "http://example.com", version=value)


def test_empty_method() -> None:
    with pytest.raises(ValueError):
        shuttle.Request("", "http://example.com")


def test_with_header_is_immutable() -> None:
    request = shuttle.Request("GET", "http://example.com")
    updated = request.with_header("X-Foo", "Bar")

    assert not request.has_header("X-Foo")
    assert updated.get_header("X-Foo") == ["Bar"]
    assert updated is not request


def test_headers_are_case_insensitive_and_keep_casing() -> None:
    request = shuttle.Request("GET", "http://example.com", headers={"X-CamelCase": "1"})

    assert request.has_header("x-camelcase")
    assert request.get_header_line("X-CAMELCASE") == "1"
    assert list(request.headers.items()) == [("X-CamelCase", "1")]


def test_with_added_header_keeps_order() -> None:
    request = (
        shuttle.Request("GET", "http://example.com")
        .with_header("Accept", "text/html")
        .with_added_header("accept", "application/json")
        .with_added_header("X-Many", ["a", "b"])
    )

    assert request.get_header("Accept") == ["text/html", "application/json"]
    assert request.get_header_line("Accept") == "text/html, application/json"
    assert request.get_header("x-many") == ["a", "b"]


def test_with_header_replaces_all_values() -> None:
    request = shuttle.Request("GET", "http://example.com").with_added_header("Accept", ["a", "b"])
    assert request.with_header("ACCEPT", "c").get_header("Accept") == ["c"]


def test_without_header() -> None:
    request = shuttle.Request("GET", "http://example.com", headers={"X-Foo": "Bar", "X-Bar": "Foo"})
    updated = request.without_header("x-foo")

    assert list(updated.headers.items()) == [("X-Bar", "Foo")]
    assert request.has_header("X-Foo")
    assert updated.without_header("X-Missing") is updated


def test_update_headers() -> None:
    request = shuttle.Request("GET", "http://example.com", headers={"a": "b", "x": "y"})
    request = request.update_headers({"c": "d", "X": "z"})

    assert sorted(request.headers.items()) == [("X", "z"), ("a", "b"), ("c", "d")]


def test_extend_headers() -> None:
    request = shuttle.Request("GET", "http://example.com", headers={"a": "b", "x": "y"})
    request = request.extend_headers({"c": "d", "x": "z"})

    assert list(request.headers.items()) == [("a", "b"), ("x", "y"), ("c", "d"), ("x", "z")]


def test_with_body() -> None:
    body = shuttle.BufferBody("foo")
    request = shuttle.Request("POST", "http://example.com")

    assert request.body is None
    assert request.with_body(body).body is body
    assert request.body is None


def test_repr() -> None:
    assert repr(shuttle.Request("get", "http://example.com/a")) == "<Request [GET http://example.com/a]>"
