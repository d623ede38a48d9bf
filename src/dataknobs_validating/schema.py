"""Schemas and the top-level validation entry points.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TYPE_CHECKING

from .errors import Errors, FieldValidationError
from .fields import F, Field, ItemRef, attr

if TYPE_CHECKING:
    from .validators import Validator

logger = logging.getLogger(__name__)


class Schema(dict):
    """Mapping from ``Field`` to the ``Validator`` that checks it.

    Keys are unique by field identity (name plus reference). Entries are
    validated in insertion order.
    """

    @classmethod
    def of(cls, target: Any, **validators: Validator) -> Schema:
        """Build a schema over attributes (or keys, for a mapping) of ``target``.

        Field names equal the attribute names.

        Args:
            target: Object or mapping holding the values
            **validators: Validator per attribute name

        Returns:
            Schema instance
        """
        schema = cls()
        for name, validator in validators.items():
            if isinstance(target, Mapping):
                ref = ItemRef(target, name)
            else:
                ref = attr(target, name)
            schema[F(name, ref)] = validator
        return schema

    def names(self) -> list[str]:
        """Field names in insertion order."""
        return [field.name for field in self]


def validate(schema: Mapping[Field, Validator]) -> Errors | None:
    """Validate every entry of ``schema``.

    All entries are evaluated; the errors of every failing field are
    concatenated in schema order.

    Args:
        schema: Mapping from fields to validators

    Returns:
        None if every field is valid, otherwise the collected errors
    """
    all_errors = Errors()
    for field, validator in schema.items():
        all_errors.extend(validator.validate(field))
    return all_errors or None


def validate_or_raise(schema: Mapping[Field, Validator]) -> None:
    """Validate ``schema`` and raise if any field is invalid.

    Raises:
        FieldValidationError: Carrying the collected errors
    """
    errors = validate(schema)
    if errors:
        logger.debug(f"Validation failed for fields: {', '.join(errors.fields())}")
        raise FieldValidationError(errors)
