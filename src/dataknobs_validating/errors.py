"""Error records, error collections and the package exception hierarchy.

Validation failures are data, not exceptions: validators return an
``Errors`` collection (or ``None`` for success). Exceptions are reserved for
misconfigured validators and for callers that opt into raising through
``validate_or_raise``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from dataknobs_common.exceptions import ConfigurationError, DataknobsError, ValidationError


@dataclass(frozen=True)
class Error:
    """A single failure attached to a field name."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class Errors(list):
    """Ordered, append-only collection of ``Error`` records.

    ``None`` means "no errors" throughout the package; an ``Errors`` instance
    returned from a validator always holds at least one entry.
    """

    def __init__(self, errors: Iterable[Error] = ()):
        super().__init__(errors)

    @classmethod
    def new(cls, field: str, message: str) -> Errors:
        """Create a collection holding a single error."""
        return cls([Error(field, message)])

    def extend(self, other: Iterable[Error] | None) -> None:  # type: ignore[override]
        """Append ``other`` in order; ``None`` is a no-op."""
        if other:
            super().extend(other)

    def fields(self) -> list[str]:
        """Names of the failing fields, in first-seen order."""
        seen: dict[str, None] = {}
        for error in self:
            seen.setdefault(error.field, None)
        return list(seen)

    def to_dict(self) -> dict[str, list[str]]:
        """Group messages by field name, preserving order."""
        grouped: dict[str, list[str]] = {}
        for error in self:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped

    def __str__(self) -> str:
        return "; ".join(str(error) for error in self)

    def __repr__(self) -> str:
        return f"Errors({list.__repr__(self)})"


def new_errors(field: str, message: str) -> Errors:
    """Create an ``Errors`` collection holding a single error."""
    return Errors.new(field, message)


class ValidatingError(DataknobsError):
    """Base exception for dataknobs_validating."""

    pass


class MultipleMessagesError(ConfigurationError, ValidatingError):
    """Raised when a validator is built with more than one custom message."""

    def __init__(self, validator_name: str, count: int):
        super().__init__(
            f"{validator_name} only accepts at most one `msg`!",
            context={"validator": validator_name, "messages": count},
        )
        self.validator_name = validator_name


class InvalidBoundsError(ConfigurationError, ValidatingError):
    """Raised when a bounded validator is built with inverted or incomparable bounds."""

    def __init__(self, validator_name: str, min: Any, max: Any, reason: str | None = None):
        reason = reason or f"min ({min}) cannot be greater than max ({max})"
        super().__init__(
            f"{validator_name}: {reason}",
            context={"validator": validator_name, "min": min, "max": max},
        )


class FieldValidationError(ValidationError, ValidatingError):
    """Raised by ``validate_or_raise`` when a schema does not validate.

    Attributes:
        errors: The ``Errors`` collection produced by validation
    """

    def __init__(self, errors: Errors):
        super().__init__(
            str(errors),
            context={"errors": errors.to_dict(), "fields": errors.fields()},
        )
        self.errors = errors
