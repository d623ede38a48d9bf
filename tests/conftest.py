"""Pytest configuration for dataknobs_validating tests."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_validating import Errors, Field, Validator  # noqa: E402


class CountingValidator(Validator):
    """Stub validator that records how often it runs."""

    def __init__(self, errors: Errors | None = None):
        self.errors = errors
        self.calls = 0

    def validate(self, field: Field) -> Errors | None:
        self.calls += 1
        return self.errors


@pytest.fixture
def passing() -> Callable[[], CountingValidator]:
    """Factory for stub validators that always succeed."""
    return lambda: CountingValidator()


@pytest.fixture
def failing() -> Callable[[str, str], CountingValidator]:
    """Factory for stub validators that always fail with the given error."""
    return lambda name, message: CountingValidator(Errors.new(name, message))
