import pytest

from atlaskit.rpc.resource import Identifier, build_string, is_nil, parse_string


@pytest.mark.parametrize(
    "text, expected",
    [
        ("/a/b/c/", ("a", "b", "c")),
        ("/a/b/c/d", ("a", "b", "c/d")),
        ("a/b/", ("", "a", "b")),
        ("/c", ("", "", "c")),
        ("", ("", "", "")),
    ],
)
def test_parse_string(text, expected):
    assert parse_string(text) == expected


@pytest.mark.parametrize(
    "aname, rtype, rid, expected",
    [
        ("a", "b", "c", "a/b/c"),
        ("", "b", "c", "b/c"),
        ("", "", "c", "c"),
        (" a ", "  ", "c", "a/c"),
    ],
)
def test_build_string(aname, rtype, rid, expected):
    assert build_string(aname, rtype, rid) == expected


@pytest.mark.parametrize(
    "identifier, expected",
    [
        (Identifier(resource_type="res", resource_id="uuid"), "res/uuid"),
        (Identifier("app", "res", "uuid"), "app/res/uuid"),
        (Identifier(resource_id="uuid"), "uuid"),
        (Identifier(), ""),
    ],
)
def test_string_form(identifier, expected):
    assert str(identifier) == expected
    assert identifier.marshal_text() == expected.encode()


@pytest.mark.parametrize(
    "identifier, expected",
    [
        (Identifier("app", "resource", "res1"), '"app/resource/res1"'),
        (Identifier("", "", ""), '"null"'),
        (Identifier("app1", "resource/A", "1234/5678"), '"app1/resource/A/1234/5678"'),
    ],
)
def test_to_json(identifier, expected):
    assert identifier.to_json() == expected


def test_from_json_valid():
    ident = Identifier.from_json('"app/resource/res2"')
    assert ident == Identifier("app", "resource", "res2")


def test_from_json_null():
    ident = Identifier.from_json(b'"null"')
    assert ident == Identifier("", "", "")


def test_from_json_extra_delimiters():
    ident = Identifier.from_json('"app1/resource/A/1234/5678"')
    assert str(ident) == str(Identifier("app1", "resource/A", "1234/5678"))
    assert ident == Identifier("app1", "resource", "A/1234/5678")


def test_json_round_trip():
    original = Identifier("app", "res", "uuid")
    assert Identifier.from_json(original.to_json()) == original


@pytest.mark.parametrize(
    "identifier, expected",
    [
        (None, True),
        (Identifier(), True),
        (Identifier(resource_id="uuid"), False),
    ],
)
def test_is_nil(identifier, expected):
    assert is_nil(identifier) is expected