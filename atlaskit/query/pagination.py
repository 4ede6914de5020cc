"""Pagination parameters and page information."""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_LIMIT = 1000
"""Limit used when a request does not give one."""

LAST_OFFSET = 1 << 30
"""Offset that marks the last page."""

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")


class PaginationError(ValueError):
    """Invalid pagination parameters."""


def _parse_int32(text: str) -> int:
    """Parse a base-10 32-bit integer; raise ValueError with the reason."""
    if not _INTEGER.fullmatch(text):
        raise ValueError("invalid syntax")
    value = int(text)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError("value out of range")
    return value


@dataclass
class Pagination:
    """Requested limit, offset and page token."""

    limit: int = 0
    offset: int = 0
    page_token: str = ""

    def first_page(self) -> bool:
        """Return whether the first page is requested."""
        return self.page_token == "null" or self.offset == 0

    def default_limit(self, dl: int | None = None) -> int:
        """Return the requested limit, else ``dl`` if positive, else DEFAULT_LIMIT."""
        if self.limit != 0:
            return self.limit
        if dl is not None and dl > 0:
            return dl
        return DEFAULT_LIMIT


@dataclass
class PageInfo:
    """Information about the page returned to a client."""

    page_token: str = ""
    offset: int = 0

    def set_last_token(self) -> None:
        """Mark that no more pages are available, by token."""
        self.page_token = "null"

    def set_last_offset(self) -> None:
        """Mark that no more pages are available, by offset."""
        self.offset = LAST_OFFSET

    def no_more(self) -> bool:
        """Return whether no more pages are available."""
        return self.offset == LAST_OFFSET or self.page_token == "null"


def parse_pagination(limit: str, offset: str, ptoken: str) -> Pagination:
    """Parse string limit, offset and page token into a Pagination.

    Raises PaginationError when limit or offset is malformed or out of range.
    """
    page = Pagination()

    if limit:
        try:
            value = _parse_int32(limit)
        except ValueError as exc:
            raise PaginationError(f"pagination: limit - {exc}") from None
        if value <= 0:
            raise PaginationError("pagination: limit must be a positive value")
        page.limit = value

    if offset == "null":
        page.offset = 0
    elif offset:
        try:
            value = _parse_int32(offset)
        except ValueError as exc:
            raise PaginationError(f"pagination: offset - {exc}") from None
        if value < 0:
            raise PaginationError("pagination: offset - negative value")
        page.offset = value

    if ptoken:
        page.page_token = ptoken

    return page