import pytest

from atlaskit.query.pagination import (
    DEFAULT_LIMIT,
    PageInfo,
    Pagination,
    PaginationError,
    parse_pagination,
)


@pytest.mark.parametrize(
    "limit, offset, message",
    [
        ("1s", "0", "pagination: limit - invalid syntax"),
        ("-1", "0", "pagination: limit must be a positive value"),
        ("0", "0", "pagination: limit must be a positive value"),
        ("", "0w", "pagination: offset - invalid syntax"),
        ("", "-1", "pagination: offset - negative value"),
        ("99999999999", "0", "pagination: limit - value out of range"),
        ("", "99999999999", "pagination: offset - value out of range"),
    ],
)
def test_parse_pagination_errors(limit, offset, message):
    with pytest.raises(PaginationError) as info:
        parse_pagination(limit, offset, "ptoken")
    assert str(info.value) == message


def test_null_offset():
    page = parse_pagination("", "null", "ptoken")
    assert page.offset == 0


def test_first_page_by_offset():
    page = parse_pagination("", "0", "ptoken")
    assert page.first_page() is True


def test_first_page_by_token():
    page = parse_pagination("", "100", "null")
    assert page.first_page() is True
    assert page.default_limit(1000) == 1000


def test_not_first_page():
    page = parse_pagination("", "100", "ptoken")
    assert page.first_page() is False


def test_valid_pagination():
    page = parse_pagination("1000", "100", "ptoken")
    assert page.limit == 1000
    assert page.offset == 100
    assert page.page_token == "ptoken"


def test_default_limit_rules():
    assert Pagination().default_limit() == DEFAULT_LIMIT
    assert Pagination().default_limit(0) == DEFAULT_LIMIT
    assert Pagination().default_limit(25) == 25
    assert Pagination(limit=7).default_limit(25) == 7


def test_page_info_last_offset():
    info = PageInfo()
    assert info.no_more() is False
    info.set_last_offset()
    assert info.no_more() is True


def test_page_info_last_token():
    info = PageInfo()
    assert info.no_more() is False
    info.set_last_token()
    assert info.no_more() is True
    assert info.page_token == "null"