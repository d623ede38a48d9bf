"""Value kinds used by the generic leaf validators.

``Nonzero`` and ``Len`` work across many concrete value shapes. Rather than
inspecting types ad hoc in every rule, a value is first classified into a
closed set of kinds and the rules dispatch on that classification:

- SCALAR: ``bool``, ``int``, ``float``, ``str`` or ``datetime``
- OPTIONAL: a nullable scalar (``Optional[int]``, ``str | None``, ...)
- SEQUENCE: a homogeneous ``list``/``tuple`` of one scalar type
- UNRECOGNIZED: anything else

When the declared type of the slot is known (e.g. from dataclass
annotations) it decides the kind, and a value that does not fit its
declaration is UNRECOGNIZED; otherwise the runtime value decides.
"""

from __future__ import annotations

import collections.abc
import types
import typing
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Kind(Enum):
    """Dispatch-relevant classification of a value."""

    SCALAR = "scalar"
    OPTIONAL = "optional"
    SEQUENCE = "sequence"
    UNRECOGNIZED = "unrecognized"


class ScalarType(Enum):
    """Recognized scalar types."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STR = "str"
    DATETIME = "datetime"

    @property
    def python_type(self) -> type:
        return _PYTHON_TYPES[self.value]

    def is_zero(self, value: Any) -> bool:
        """Whether ``value`` is this type's zero value."""
        if self is ScalarType.DATETIME:
            return _is_zero_time(value)
        return value == self.python_type()

    @classmethod
    def of_type(cls, tp: Any) -> ScalarType | None:
        # bool before int: bool is an int subclass
        if tp is bool:
            return cls.BOOL
        for scalar in (cls.INT, cls.FLOAT, cls.STR):
            if tp is scalar.python_type:
                return scalar
        if isinstance(tp, type) and issubclass(tp, datetime):
            return cls.DATETIME
        return None

    @classmethod
    def of_value(cls, value: Any) -> ScalarType | None:
        if isinstance(value, bool):
            return cls.BOOL
        if isinstance(value, datetime):
            return cls.DATETIME
        for scalar in (cls.INT, cls.FLOAT, cls.STR):
            if isinstance(value, scalar.python_type):
                return scalar
        return None


_PYTHON_TYPES: dict[str, type] = {
    "bool": bool,
    "int": int,
    "float": float,
    "str": str,
    "datetime": datetime,
}


def _is_zero_time(value: datetime) -> bool:
    if value.tzinfo is None or value.utcoffset() is None:
        return value == datetime.min
    return value == datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class ValueKind:
    """Result of classifying a value.

    Attributes:
        kind: The dispatch family
        scalar: The scalar (or element) type, when known
        absent: True for an OPTIONAL slot holding ``None``
    """

    kind: Kind
    scalar: ScalarType | None = None
    absent: bool = False


UNRECOGNIZED = ValueKind(Kind.UNRECOGNIZED)

_SEQUENCE_ORIGINS = (list, tuple, collections.abc.Sequence, collections.abc.MutableSequence)


def kind_of_hint(hint: Any) -> ValueKind:
    """Classify a declared type annotation."""
    scalar = ScalarType.of_type(hint)
    if scalar is not None:
        return ValueKind(Kind.SCALAR, scalar)

    origin = typing.get_origin(hint)
    args = typing.get_args(hint)

    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1 and len(args) == 2:
            inner = ScalarType.of_type(members[0])
            if inner is not None:
                return ValueKind(Kind.OPTIONAL, inner)
        return UNRECOGNIZED

    if origin in _SEQUENCE_ORIGINS:
        if origin is tuple:
            # only the homogeneous form tuple[X, ...]
            if len(args) != 2 or args[1] is not Ellipsis:
                return UNRECOGNIZED
            args = args[:1]
        if len(args) == 1:
            element = ScalarType.of_type(args[0])
            if element is not None:
                return ValueKind(Kind.SEQUENCE, element)

    return UNRECOGNIZED


def kind_of_value(value: Any) -> ValueKind:
    """Classify a runtime value with no declared type."""
    if value is None:
        return ValueKind(Kind.OPTIONAL, absent=True)

    scalar = ScalarType.of_value(value)
    if scalar is not None:
        return ValueKind(Kind.SCALAR, scalar)

    if isinstance(value, (list, tuple)):
        element_types = {ScalarType.of_value(element) for element in value}
        if not element_types:
            return ValueKind(Kind.SEQUENCE)
        if len(element_types) == 1 and None not in element_types:
            return ValueKind(Kind.SEQUENCE, element_types.pop())

    return UNRECOGNIZED


def resolve_kind(value: Any, hint: Any = None) -> ValueKind:
    """Classify ``value``, preferring the declared ``hint`` when given.

    Args:
        value: The current value of the slot
        hint: The declared type of the slot, or None if unknown

    Returns:
        The ValueKind used for dispatch
    """
    if hint is None:
        return kind_of_value(value)

    value_kind = kind_of_hint(hint)
    if value is None:
        # a scalar slot left unset reads as an absent optional
        if value_kind.kind in (Kind.OPTIONAL, Kind.SCALAR):
            return ValueKind(Kind.OPTIONAL, value_kind.scalar, absent=True)
        return value_kind

    # the value must have the shape its declaration promises
    if value_kind.kind in (Kind.SCALAR, Kind.OPTIONAL):
        if not _matches(value_kind.scalar, value):
            return UNRECOGNIZED
    elif value_kind.kind is Kind.SEQUENCE:
        if not isinstance(value, (list, tuple)):
            return UNRECOGNIZED
        if not all(_matches(value_kind.scalar, element) for element in value):
            return UNRECOGNIZED
    return value_kind


def _matches(scalar: ScalarType, value: Any) -> bool:
    actual = ScalarType.of_value(value)
    if actual is scalar:
        return True
    # an int is a valid float
    return scalar is ScalarType.FLOAT and actual is ScalarType.INT
