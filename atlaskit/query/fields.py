"""Field selection: a tree of requested fields parsed from a comma list."""

from __future__ import annotations

from dataclasses import dataclass, field as dc_field
from typing import Iterator

COMMON_DELIMITER = ","
INNER_DELIMITER = "."


def _to_parts(text: str, delimiter: str) -> list[str]:
    if delimiter == "":
        return list(text)
    return text.split(delimiter)


@dataclass
class Field:
    """A selected field, optionally with nested sub-fields."""

    name: str
    subs: dict[str, Field] | None = None


@dataclass
class FieldSelection:
    """A set of selected fields keyed by their top-level name."""

    fields: dict[str, Field] | None = dc_field(default_factory=dict)

    def add(self, field: str, delimiter: str = INNER_DELIMITER) -> None:
        """Add a (possibly nested) field given in delimited notation."""
        if not field:
            return
        if self.fields is None:
            self.fields = {}
        first, *rest = _to_parts(field, delimiter)
        parent = self.fields.setdefault(first, Field(first))
        for name in rest:
            if parent.subs is None:
                parent.subs = {}
            parent = parent.subs.setdefault(name, Field(name))

    def _locate(self, field: str, delimiter: str) -> tuple[dict[str, Field], str] | None:
        if not field or self.fields is None:
            return None
        *path, last = _to_parts(field, delimiter)
        level = self.fields
        for name in path:
            node = level.get(name)
            if node is None or node.subs is None:
                return None
            level = node.subs
        if last not in level:
            return None
        return level, last

    def delete(self, field: str, delimiter: str = INNER_DELIMITER) -> bool:
        """Remove a field; return whether it was present."""
        found = self._locate(field, delimiter)
        if found is None:
            return False
        level, name = found
        del level[name]
        return True

    def get(self, field: str, delimiter: str = INNER_DELIMITER) -> Field | None:
        """Return the named field, or None when it is not selected."""
        found = self._locate(field, delimiter)
        if found is None:
            return None
        level, name = found
        return level[name]

    def all_field_strings(self) -> list[str]:
        """Return every leaf field in dot notation."""
        return [path for top in (self.fields or {}).values() for path in _leaf_paths("", top)]

    def __str__(self) -> str:
        return COMMON_DELIMITER.join(self.all_field_strings())


def _leaf_paths(parent: str, node: Field) -> Iterator[str]:
    if not node.subs:
        yield parent + node.name
        return
    prefix = parent + node.name + INNER_DELIMITER
    for sub in node.subs.values():
        yield from _leaf_paths(prefix, sub)


def parse_field_selection(input: str, delimiter: str = INNER_DELIMITER) -> FieldSelection | None:
    """Parse comma-separated fields; nested parts are split by ``delimiter``.

    Returns None for empty input.
    """
    if not input:
        return None
    result = FieldSelection({})
    for item in input.split(COMMON_DELIMITER):
        result.add(item, delimiter)
    return result