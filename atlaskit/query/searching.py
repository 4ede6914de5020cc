"""Free-text search criteria."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Searching:
    """A raw search query."""

    query: str = ""

    def __str__(self) -> str:
        return self.query


def parse_searching(s: str) -> Searching:
    """Wrap a raw search string in a Searching."""
    return Searching(s)