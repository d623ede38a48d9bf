"""Declarative, composable field validation.

This package provides:
- Leaf validators that dispatch on the kind of value (Nonzero, Len)
- Combinators with defined short-circuit semantics (All, Any, Nested, ...)
- Comparison validators (Eq, Gte, Range, In, Match, ...)
- Schemas mapping fields to validators, validated with ``validate``
- Factories for building validators and schemas from configuration

Example:
    ```python
    from dataknobs_validating import F, Len, Nested, Nonzero, Schema, attr, validate

    errors = validate(Schema({
        F("name", attr(person, "name")): Len(1, 5),
        F("address", attr(person, "address")): Nested(Schema({
            F("city", attr(person.address, "city")): Nonzero(),
        })),
    }))
    if errors:
        print(errors)  # e.g. "address.city: is zero valued"
    ```
"""

from .comparisons import Comparison, Eq, Gt, Gte, In, Lt, Lte, Match, Ne, Nin, Range
from .errors import (
    Error,
    Errors,
    FieldValidationError,
    InvalidBoundsError,
    MultipleMessagesError,
    ValidatingError,
    new_errors,
)
from .factory import SchemaFactory, ValidatorFactory, schema_factory, validator_factory
from .fields import AttrRef, F, Field, ItemRef, Ref, Value, attr, item
from .kinds import Kind, ScalarType, ValueKind, resolve_kind
from .schema import Schema, validate, validate_or_raise
from .validators import (
    All,
    And,
    Any,
    Assert,
    FuncValidator,
    KindValidator,
    Lazy,
    Len,
    Nested,
    NestedMulti,
    Nonzero,
    Not,
    Or,
    Validator,
    from_func,
    get_msg,
)

__version__ = "0.1.0"

__all__ = [
    # Fields
    "Field",
    "F",
    "Ref",
    "AttrRef",
    "ItemRef",
    "Value",
    "attr",
    "item",
    # Errors
    "Error",
    "Errors",
    "new_errors",
    "ValidatingError",
    "MultipleMessagesError",
    "InvalidBoundsError",
    "FieldValidationError",
    # Kinds
    "Kind",
    "ScalarType",
    "ValueKind",
    "resolve_kind",
    # Schema
    "Schema",
    "validate",
    "validate_or_raise",
    # Validators
    "Validator",
    "FuncValidator",
    "KindValidator",
    "from_func",
    "get_msg",
    "All",
    "And",
    "Any",
    "Or",
    "Not",
    "Assert",
    "Lazy",
    "Nested",
    "NestedMulti",
    "Nonzero",
    "Len",
    # Comparisons
    "Comparison",
    "Eq",
    "Ne",
    "Gt",
    "Gte",
    "Lt",
    "Lte",
    "Range",
    "In",
    "Nin",
    "Match",
    # Factories
    "ValidatorFactory",
    "SchemaFactory",
    "validator_factory",
    "schema_factory",
    "__version__",
]
