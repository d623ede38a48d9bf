"""Validator implementations with a consistent, composable API.

Every rule, leaf or composite, implements ``Validator.validate(field)`` and
returns either ``None`` (success) or an ``Errors`` collection. Composite
validators combine children with short-circuit (``All``) or collect-all
(``Any`` when every child fails, ``NestedMulti``) semantics.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any as AnyType, TYPE_CHECKING

from .errors import Errors, InvalidBoundsError, MultipleMessagesError
from .fields import F, Field
from .kinds import Kind, ScalarType, ValueKind, resolve_kind
from .schema import Schema, validate

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = logging.getLogger(__name__)

UNRECOGNIZED_TYPE_MSG = "of unrecognized type"
AN_UNRECOGNIZED_TYPE_MSG = "of an unrecognized type"


def get_msg(validator_name: str, default_msg: str, msgs: Sequence[str]) -> str:
    """Select the message for a validator from its optional custom messages.

    Args:
        validator_name: Name used in the configuration error
        default_msg: Message used when no custom message is given
        msgs: The custom messages passed by the caller

    Returns:
        The single custom message, or the default

    Raises:
        MultipleMessagesError: If more than one message is given
    """
    if len(msgs) == 0:
        return default_msg
    if len(msgs) == 1:
        return msgs[0]
    raise MultipleMessagesError(validator_name, len(msgs))


def cannot_use(validator_name: str) -> str:
    return f"cannot use validator `{validator_name}`"


def sequence_length(value: AnyType) -> int:
    # an unset sequence slot counts as empty
    return 0 if value is None else len(value)


class Validator(ABC):
    """Base class for all validators with composable operators."""

    @abstractmethod
    def validate(self, field: Field) -> Errors | None:
        """Validate the value behind ``field``.

        Args:
            field: The field to validate

        Returns:
            None on success, otherwise the errors for the field
        """
        pass

    def __and__(self, other: Validator) -> All:
        """Combine with AND: both validators must pass."""
        if isinstance(self, All):
            return All(*self.validators, other)
        elif isinstance(other, All):
            return All(self, *other.validators)
        return All(self, other)

    def __or__(self, other: Validator) -> Any:
        """Combine with OR: at least one validator must pass."""
        if isinstance(self, Any):
            return Any(*self.validators, other)
        elif isinstance(other, Any):
            return Any(self, *other.validators)
        return Any(self, other)

    def __invert__(self) -> Not:
        """Negate this validator."""
        return Not(self)


class FuncValidator(Validator):
    """A leaf validator made from a plain function."""

    def __init__(self, func: Callable[[Field], Errors | None]):
        self.func = func

    def validate(self, field: Field) -> Errors | None:
        return self.func(field)

    def __repr__(self) -> str:
        return f"FuncValidator({getattr(self.func, '__name__', self.func)!r})"


def from_func(func: Callable[[Field], Errors | None]) -> Validator:
    """Create a leaf validator from a function."""
    return FuncValidator(func)


class All(Validator):
    """Succeeds only when every sub-validator succeeds (AND logic).

    Sub-validators run in order and the first failure is returned as is;
    later sub-validators are not evaluated.
    """

    def __init__(self, *validators: Validator):
        self.validators = tuple(validators)

    def validate(self, field: Field) -> Errors | None:
        for validator in self.validators:
            errors = validator.validate(field)
            if errors:
                return errors
        return None

    def __repr__(self) -> str:
        return f"All{self.validators!r}"


And = All


class Any(Validator):
    """Succeeds as soon as any sub-validator succeeds (OR logic).

    When every sub-validator fails, the errors of all of them are returned in
    evaluation order. With no sub-validators there is nothing to fail, so the
    result is success.
    """

    def __init__(self, *validators: Validator):
        self.validators = tuple(validators)

    def validate(self, field: Field) -> Errors | None:
        all_errors = Errors()
        for validator in self.validators:
            errors = validator.validate(field)
            if not errors:
                return None
            all_errors.extend(errors)
        return all_errors or None

    def __repr__(self) -> str:
        return f"Any{self.validators!r}"


Or = Any


class Not(Validator):
    """Succeeds only when the wrapped validator fails."""

    def __init__(self, validator: Validator, *msgs: str):
        self.validator = validator
        self.msg = get_msg("Not", "is invalid", msgs)

    def validate(self, field: Field) -> Errors | None:
        if self.validator.validate(field):
            return None
        return Errors.new(field.name, self.msg)


class Assert(Validator):
    """Outcome fixed by a boolean evaluated when the validator is built.

    The field's value is ignored; only its name is used in the error.
    """

    def __init__(self, condition: bool, *msgs: str):
        self.condition = bool(condition)
        self.msg = get_msg("Assert", "is invalid", msgs)

    def validate(self, field: Field) -> Errors | None:
        if not self.condition:
            return Errors.new(field.name, self.msg)
        return None


class Lazy(Validator):
    """Delegates to a validator produced by ``factory`` on every call.

    The factory is never memoized, so it can close over state that is only
    available (or changes) at validation time.
    """

    def __init__(self, factory: Callable[[], Validator]):
        self.factory = factory

    def validate(self, field: Field) -> Errors | None:
        return self.factory().validate(field)


class Nested(Validator):
    """Delegates to an inner schema, qualifying field names with the outer name.

    An inner field ``city`` under an outer field ``address`` is reported as
    ``address.city``.
    """

    def __init__(self, schema: Schema):
        self.schema = schema

    def validate(self, field: Field) -> Errors | None:
        nested_schema = Schema()
        for inner, validator in self.schema.items():
            nested_schema[F(f"{field.name}.{inner.name}", inner.ref)] = validator
        return validate(nested_schema)


class NestedMulti(Validator):
    """Validates one field against several independent nested schemas.

    ``factory`` is called once, when the validator is built. Every schema is
    always evaluated and all errors are collected in order.
    """

    def __init__(self, factory: Callable[[], Sequence[Schema]]):
        self.validators = tuple(Nested(schema) for schema in factory())
        logger.debug(f"Built NestedMulti over {len(self.validators)} schemas")

    def validate(self, field: Field) -> Errors | None:
        all_errors = Errors()
        for validator in self.validators:
            all_errors.extend(validator.validate(field))
        return all_errors or None


class KindValidator(Validator):
    """Base for leaf validators that dispatch on the kind of the value.

    Subclasses provide one handler per ``Kind``; a handler returns True when
    the value is valid, or a string holding a fixed diagnostic that replaces
    the validator's message.
    """

    msg: str
    _handlers: dict[Kind, Callable[[AnyType, ValueKind], bool | str]]

    def validate(self, field: Field) -> Errors | None:
        value = field.value
        value_kind = resolve_kind(value, field.hint)
        outcome = self._handlers[value_kind.kind](value, value_kind)
        if isinstance(outcome, str):
            return Errors.new(field.name, outcome)
        if not outcome:
            return Errors.new(field.name, self.msg)
        return None


class Nonzero(KindValidator):
    """Succeeds when the field's value is not its kind's zero value.

    - scalars differ from their zero value (``datetime.min`` for datetimes)
    - optionals are present, whatever they hold
    - sequences are non-empty
    """

    def __init__(self, *msgs: str):
        self.msg = get_msg("Nonzero", "is zero valued", msgs)
        self._handlers = {
            Kind.SCALAR: self._scalar,
            Kind.OPTIONAL: self._optional,
            Kind.SEQUENCE: self._sequence,
            Kind.UNRECOGNIZED: self._unrecognized,
        }

    @staticmethod
    def _scalar(value: AnyType, value_kind: ValueKind) -> bool:
        return not value_kind.scalar.is_zero(value)

    @staticmethod
    def _optional(value: AnyType, value_kind: ValueKind) -> bool:
        return not value_kind.absent

    @staticmethod
    def _sequence(value: AnyType, value_kind: ValueKind) -> bool:
        return sequence_length(value) != 0

    @staticmethod
    def _unrecognized(value: AnyType, value_kind: ValueKind) -> str:
        return UNRECOGNIZED_TYPE_MSG


class Len(KindValidator):
    """Succeeds when the length of a string or sequence is in ``[min, max]``.

    Non-string scalars and every optional kind have no length; validating
    them is reported as a field error rather than raised.
    """

    def __init__(self, min: int, max: int, *msgs: str):
        if min > max:
            raise InvalidBoundsError("Len", min, max)
        self.min = min
        self.max = max
        self.msg = get_msg("Len", "with an invalid length", msgs)
        self._handlers = {
            Kind.SCALAR: self._scalar,
            Kind.OPTIONAL: self._optional,
            Kind.SEQUENCE: self._sequence,
            Kind.UNRECOGNIZED: self._unrecognized,
        }

    def _in_range(self, length: int) -> bool:
        return self.min <= length <= self.max

    def _scalar(self, value: AnyType, value_kind: ValueKind) -> bool | str:
        if value_kind.scalar is ScalarType.STR:
            return self._in_range(len(value))
        return cannot_use("Len")

    def _optional(self, value: AnyType, value_kind: ValueKind) -> str:
        return cannot_use("Len")

    def _sequence(self, value: AnyType, value_kind: ValueKind) -> bool:
        return self._in_range(sequence_length(value))

    def _unrecognized(self, value: AnyType, value_kind: ValueKind) -> str:
        return AN_UNRECOGNIZED_TYPE_MSG
