"""Filtering expression tree and its evaluation against objects.

A condition names a field by the first element of its field path. The field
is looked up on the object like this:

* mappings are looked up by key;
* dataclass fields answer to the names given in their ``metadata`` under
  ``"json"`` and ``"name"``, or to their attribute name when neither is given;
* any other object is looked up by attribute.
"""

from __future__ import annotations

import abc
import dataclasses
import enum
import numbers
import operator
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Union

_MISSING = object()


class TypeMismatchError(TypeError):
    """The value under a field path is not of the type a condition needs."""

    def __init__(self, req_type: str, field_path: list[str]) -> None:
        super().__init__(f"{'.'.join(field_path)} is not a {req_type} type")
        self.req_type = req_type
        self.field_path = list(field_path)


class UnsupportedOperatorError(ValueError):
    """An operator that a field type does not support."""

    def __init__(self, type_name: str, op: str) -> None:
        super().__init__(f"{op} is not supported for {type_name} type")
        self.type_name = type_name
        self.op = op


class LogicalType(enum.IntEnum):
    """Kinds of logical operators."""

    AND = 0
    OR = 1


class StringConditionType(enum.IntEnum):
    """Operators of a string condition."""

    EQ = 0
    MATCH = 1
    GT = 2
    GE = 3
    LT = 4
    LE = 5
    IEQ = 6


class NumberConditionType(enum.IntEnum):
    """Operators of a number condition."""

    EQ = 0
    GT = 1
    GE = 2
    LT = 3
    LE = 4


class StringArrayConditionType(enum.IntEnum):
    """Operators of a string array condition."""

    IN = 0


class NumberArrayConditionType(enum.IntEnum):
    """Operators of a number array condition."""

    IN = 0


def _op_name(kind: Any) -> str:
    return getattr(kind, "name", str(kind))


def _field_names(f: dataclasses.Field) -> set[str]:
    names = {f.metadata[key] for key in ("json", "name") if key in f.metadata}
    return names or {f.name}


def _field_value(obj: Any, field_path: list[str]) -> Any:
    if not field_path:
        return _MISSING
    name = field_path[0]
    if isinstance(obj, Mapping):
        return obj.get(name, _MISSING)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        for f in dataclasses.fields(obj):
            if name in _field_names(f):
                return getattr(obj, f.name)
        return _MISSING
    if name.startswith("_"):
        return _MISSING
    return getattr(obj, name, _MISSING)


def _string_value(obj: Any, field_path: list[str]) -> str:
    value = _field_value(obj, field_path)
    if not isinstance(value, str):
        raise TypeMismatchError("string", field_path)
    return value


def _number_value(obj: Any, field_path: list[str]) -> float:
    value = _field_value(obj, field_path)
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeMismatchError("number", field_path)
    return float(value)


_NOT_NULLABLE = (str, bytes, numbers.Number, list, tuple, set, frozenset, Mapping)


def _match(value: str, pattern: str) -> bool:
    return re.search(pattern, value) is not None


def _ieq(value: str, other: str) -> bool:
    return value.lower() == other.lower()


_STRING_OPS: dict[Any, Callable[[str, str], bool]] = {
    StringConditionType.EQ: operator.eq,
    StringConditionType.IEQ: _ieq,
    StringConditionType.MATCH: _match,
    StringConditionType.GT: operator.gt,
    StringConditionType.GE: operator.ge,
    StringConditionType.LT: operator.lt,
    StringConditionType.LE: operator.le,
}

_NUMBER_OPS: dict[Any, Callable[[float, float], bool]] = {
    NumberConditionType.EQ: operator.eq,
    NumberConditionType.GT: operator.gt,
    NumberConditionType.GE: operator.ge,
    NumberConditionType.LT: operator.lt,
    NumberConditionType.LE: operator.le,
}


def _evaluate(node: Any, obj: Any) -> bool:
    evaluate = getattr(node, "filter", None)
    if evaluate is None:
        raise TypeError(f"{type(node).__name__} is not a filtering expression")
    return evaluate(obj)


@dataclass
class StringCondition:
    """Compares a string field with a string value."""

    field_path: list[str]
    value: str
    type: StringConditionType = StringConditionType.EQ
    is_negative: bool = False

    def filter(self, obj: Any) -> bool:
        """Evaluate the condition against ``obj``."""
        value = _string_value(obj, self.field_path)
        compare = _STRING_OPS.get(self.type)
        if compare is None:
            raise UnsupportedOperatorError("string", _op_name(self.type))
        return compare(value, self.value) != self.is_negative


@dataclass
class NumberCondition:
    """Compares a numeric field with a number."""

    field_path: list[str]
    value: float
    type: NumberConditionType = NumberConditionType.EQ
    is_negative: bool = False

    def filter(self, obj: Any) -> bool:
        """Evaluate the condition against ``obj``."""
        value = _number_value(obj, self.field_path)
        compare = _NUMBER_OPS.get(self.type)
        if compare is None:
            raise UnsupportedOperatorError("number", _op_name(self.type))
        return compare(value, self.value) != self.is_negative


@dataclass
class NullCondition:
    """Checks whether a nullable field holds None."""

    field_path: list[str]
    is_negative: bool = False

    def filter(self, obj: Any) -> bool:
        """Evaluate the condition against ``obj``.

        Scalars, sequences and mappings are not nullable.
        """
        value = _field_value(obj, self.field_path)
        if value is _MISSING or (value is not None and isinstance(value, _NOT_NULLABLE)):
            raise TypeMismatchError("nullable", self.field_path)
        return (value is None) != self.is_negative


@dataclass
class StringArrayCondition:
    """Checks whether a string field is one of the given strings."""

    field_path: list[str]
    values: list[str]
    type: StringArrayConditionType = StringArrayConditionType.IN
    is_negative: bool = False

    def filter(self, obj: Any) -> bool:
        """Evaluate the condition against ``obj``."""
        value = _string_value(obj, self.field_path)
        if self.type != StringArrayConditionType.IN:
            raise UnsupportedOperatorError("[]string", _op_name(self.type))
        return (value in self.values) != self.is_negative


@dataclass
class NumberArrayCondition:
    """Checks whether a numeric field is one of the given numbers."""

    field_path: list[str]
    values: list[float]
    type: NumberArrayConditionType = NumberArrayConditionType.IN
    is_negative: bool = False

    def filter(self, obj: Any) -> bool:
        """Evaluate the condition against ``obj``."""
        value = _number_value(obj, self.field_path)
        if self.type != NumberArrayConditionType.IN:
            raise UnsupportedOperatorError("number", _op_name(self.type))
        return any(value == v for v in self.values) != self.is_negative


@dataclass
class LogicalOperator:
    """Combines two expressions with AND or OR."""

    left: Expression | None = None
    right: Expression | None = None
    type: LogicalType = LogicalType.AND
    is_negative: bool = False

    def filter(self, obj: Any) -> bool:
        """Evaluate both sides, short-circuiting as AND and OR do."""
        if self.left is None:
            raise TypeError("left operand of a logical operator is not set")
        result = _evaluate(self.left, obj)
        if self.type == LogicalType.AND and not result:
            return self.is_negative
        if self.type == LogicalType.OR and result:
            return not self.is_negative
        if self.right is None:
            raise TypeError("right operand of a logical operator is not set")
        return _evaluate(self.right, obj) != self.is_negative


Expression = Union[
    LogicalOperator,
    StringCondition,
    NumberCondition,
    NullCondition,
    StringArrayCondition,
    NumberArrayCondition,
]


class Matcher(abc.ABC):
    """Implemented by objects that evaluate a filtering themselves."""

    @abc.abstractmethod
    def match(self, filtering: Filtering) -> bool:
        """Return whether this object satisfies ``filtering``."""


@dataclass
class Filtering:
    """A filtering expression with its root node."""

    root: Expression | None = field(default=None)

    def filter(self, obj: Any) -> bool:
        """Evaluate the expression against ``obj``.

        Objects that are a ``Matcher`` decide for themselves.
        """
        if isinstance(obj, Matcher):
            return obj.match(self)
        if self.root is None:
            raise TypeError("filtering root is not set")
        return _evaluate(self.root, obj)