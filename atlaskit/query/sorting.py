"""Sort criteria parsed from the sorting collection operator."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class SortOrder(enum.IntEnum):
    """Direction of a sort criterion."""

    ASC = 0
    DESC = 1


@dataclass
class SortCriteria:
    """A single sort key with its order."""

    tag: str
    order: SortOrder = SortOrder.ASC

    def is_asc(self) -> bool:
        """Return whether the order is ascending."""
        return self.order == SortOrder.ASC

    def is_desc(self) -> bool:
        """Return whether the order is descending."""
        return self.order == SortOrder.DESC

    def __str__(self) -> str:
        return f"{self.tag} {SortOrder(self.order).name}"


@dataclass
class Sorting:
    """An ordered list of sort criteria."""

    criterias: list[SortCriteria] = field(default_factory=list)

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.criterias)


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def parse_sorting(s: str) -> Sorting:
    """Parse ``"<tag> [asc|desc], ..."`` into a Sorting.

    Raises ValueError on an unknown order or a malformed criterion.
    """
    sorting = Sorting()
    for raw in s.split(","):
        parts = raw.split()
        if len(parts) == 1:
            criteria = SortCriteria(parts[0], SortOrder.ASC)
        elif len(parts) == 2:
            tag, order = parts
            try:
                criteria = SortCriteria(tag, SortOrder[order.upper()])
            except KeyError:
                raise ValueError(
                    f"invalid sort order - {_quote(order)} in {_quote(raw)}"
                ) from None
        else:
            raise ValueError(f"invalid sort criteria: {raw}")
        sorting.criterias.append(criteria)
    return sorting