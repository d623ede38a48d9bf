"""Fields and the value references they hold.

A ``Field`` pairs a name with a reference to where the value lives. The
reference is read at validation time, so a schema can be built once and
validated after the underlying object changes.
"""

from __future__ import annotations

import logging
import typing
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


class Ref(ABC):
    """Reference to a value slot."""

    hint: Any = None

    @abstractmethod
    def get(self) -> Any:
        """Read the current value of the slot."""
        pass


class AttrRef(Ref):
    """Reference to an attribute of an object.

    When no hint is given, the declared type is looked up from the owning
    class's annotations (dataclass fields, annotated attributes).
    """

    def __init__(self, obj: Any, attr: str, hint: Any = None):
        self.obj = obj
        self.attr = attr
        self.hint = hint if hint is not None else _annotation_of(type(obj), attr)

    def get(self) -> Any:
        return getattr(self.obj, self.attr)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttrRef):
            return NotImplemented
        return self.obj is other.obj and self.attr == other.attr

    def __hash__(self) -> int:
        return hash((id(self.obj), self.attr))

    def __repr__(self) -> str:
        return f"AttrRef({type(self.obj).__name__}.{self.attr})"


class ItemRef(Ref):
    """Reference to a key of a mapping; a missing key reads as None."""

    def __init__(self, mapping: Mapping[Any, Any], key: Any, hint: Any = None):
        self.mapping = mapping
        self.key = key
        self.hint = hint

    def get(self) -> Any:
        return self.mapping.get(self.key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemRef):
            return NotImplemented
        return self.mapping is other.mapping and self.key == other.key

    def __hash__(self) -> int:
        return hash((id(self.mapping), self.key))

    def __repr__(self) -> str:
        return f"ItemRef({self.key!r})"


class Value(Ref):
    """A boxed constant value."""

    def __init__(self, value: Any, hint: Any = None):
        self.value = value
        self.hint = hint

    def get(self) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"Value({self.value!r})"


def _annotation_of(cls: type, attr: str) -> Any:
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError) as e:
        logger.debug(f"Could not resolve type hints of {cls.__name__}: {e}")
        return None
    return hints.get(attr)


@dataclass(frozen=True)
class Field:
    """A named reference to the value being validated."""

    name: str
    ref: Ref

    @property
    def value(self) -> Any:
        """The current value behind the reference."""
        return self.ref.get()

    @property
    def hint(self) -> Any:
        """The declared type of the referenced slot, if known."""
        return self.ref.hint


def F(name: str, ref: Any, hint: Any = None) -> Field:
    """Create a field.

    Args:
        name: Field name used in error records
        ref: A Ref, or a plain value to be boxed in a Value
        hint: Declared type for a plain value (ignored for Ref instances)

    Returns:
        Field instance
    """
    if not isinstance(ref, Ref):
        ref = Value(ref, hint)
    return Field(name, ref)


def attr(obj: Any, name: str, hint: Any = None) -> AttrRef:
    """Reference ``obj.name``."""
    return AttrRef(obj, name, hint)


def item(mapping: Mapping[Any, Any], key: Any, hint: Any = None) -> ItemRef:
    """Reference ``mapping[key]``."""
    return ItemRef(mapping, key, hint)
