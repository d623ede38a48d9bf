"""Comparison validators: equality, ordering, membership and patterns.
"""

from __future__ import annotations

import re
from abc import abstractmethod
from re import Pattern as RegexPattern
from typing import Any

from .errors import Errors, InvalidBoundsError
from .fields import Field
from .kinds import Kind, resolve_kind
from .validators import AN_UNRECOGNIZED_TYPE_MSG, Validator, cannot_use, get_msg


class Comparison(Validator):
    """Base class for validators comparing the field's value to given values.

    Ordering comparisons only apply to scalars (or present optionals);
    equality-based ones accept any value.
    """

    name: str = "Comparison"
    default_msg: str = "is invalid"
    ordered: bool = True

    def __init__(self, *msgs: str):
        self.msg = get_msg(self.name, self.default_msg, msgs)

    @abstractmethod
    def accepts(self, value: Any) -> bool:
        """Whether ``value`` satisfies the comparison."""
        pass

    def validate(self, field: Field) -> Errors | None:
        value = field.value
        if self.ordered:
            value_kind = resolve_kind(value, field.hint)
            if value_kind.kind is Kind.UNRECOGNIZED:
                return Errors.new(field.name, AN_UNRECOGNIZED_TYPE_MSG)
            if value_kind.kind is Kind.SEQUENCE:
                return Errors.new(field.name, cannot_use(self.name))
            if value_kind.absent:
                return Errors.new(field.name, self.msg)

        try:
            valid = self.accepts(value)
        except TypeError:
            # e.g. comparing a str field against an int bound
            return Errors.new(field.name, cannot_use(self.name))

        if not valid:
            return Errors.new(field.name, self.msg)
        return None


class Eq(Comparison):
    """Value equals the given value."""

    name = "Eq"
    default_msg = "does not equal the given value"
    ordered = False

    def __init__(self, value: Any, *msgs: str):
        super().__init__(*msgs)
        self.value = value

    def accepts(self, value: Any) -> bool:
        return value == self.value


class Ne(Eq):
    """Value differs from the given value."""

    name = "Ne"
    default_msg = "equals the given value"

    def accepts(self, value: Any) -> bool:
        return value != self.value


class Gt(Eq):
    name = "Gt"
    default_msg = "is lower than or equal to the given value"
    ordered = True

    def accepts(self, value: Any) -> bool:
        return value > self.value


class Gte(Gt):
    name = "Gte"
    default_msg = "is lower than the given value"

    def accepts(self, value: Any) -> bool:
        return value >= self.value


class Lt(Gt):
    name = "Lt"
    default_msg = "is greater than or equal to the given value"

    def accepts(self, value: Any) -> bool:
        return value < self.value


class Lte(Gt):
    name = "Lte"
    default_msg = "is greater than the given value"

    def accepts(self, value: Any) -> bool:
        return value <= self.value


class Range(Comparison):
    """Value lies within ``[min, max]``."""

    name = "Range"
    default_msg = "is not between the given range"

    def __init__(self, min: Any, max: Any, *msgs: str):
        try:
            inverted = min > max
        except TypeError as e:
            raise InvalidBoundsError(
                self.name, min, max, f"min ({min!r}) and max ({max!r}) are not comparable"
            ) from e
        if inverted:
            raise InvalidBoundsError(self.name, min, max)
        super().__init__(*msgs)
        self.min = min
        self.max = max

    def accepts(self, value: Any) -> bool:
        return self.min <= value <= self.max


class In(Comparison):
    """Value is one of the given values."""

    name = "In"
    default_msg = "is not one of the given values"
    ordered = False

    def __init__(self, *values: Any, msg: str | None = None):
        super().__init__(*([msg] if msg is not None else []))
        self.values = tuple(values)

    def accepts(self, value: Any) -> bool:
        return value in self.values


class Nin(In):
    """Value is none of the given values."""

    name = "Nin"
    default_msg = "is one of the given values"

    def accepts(self, value: Any) -> bool:
        return value not in self.values


class Match(Comparison):
    """String value matches the given regular expression."""

    name = "Match"
    default_msg = "does not match the given regular expression"
    ordered = False

    def __init__(self, pattern: str | RegexPattern, *msgs: str):
        super().__init__(*msgs)
        if isinstance(pattern, str):
            self.regex = re.compile(pattern)
        else:
            self.regex = pattern

    def validate(self, field: Field) -> Errors | None:
        if not isinstance(field.value, str):
            return Errors.new(field.name, cannot_use(self.name))
        return super().validate(field)

    def accepts(self, value: Any) -> bool:
        return self.regex.match(value) is not None
