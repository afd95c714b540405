"""Input validation utilities for diagram declarations and router options.

Provides validation for the value types a diagram document carries:
- Coordinates (finite floats)
- Dimensions (non-negative or strictly positive floats)
- Angles (floats in degrees)
- Counts (non-negative integers)
- Identifiers (component ids, port names, template ids)
- Choices (route modes, port directions)
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    valid: bool
    value: Any = None
    error: str | None = None

    @classmethod
    def success(cls, value: Any = None) -> ValidationResult:
        return cls(valid=True, value=value)

    @classmethod
    def failure(cls, error: str) -> ValidationResult:
        return cls(valid=False, error=error)


def _to_float(value: Any, name: str) -> ValidationResult:
    # bool is an int subclass but never a sensible coordinate
    if isinstance(value, bool):
        return ValidationResult.failure(f"{name} must be a number, got bool")
    try:
        number = float(value)
    except (TypeError, ValueError):
        return ValidationResult.failure(f"{name} must be a number, got {type(value).__name__}")
    if not math.isfinite(number):
        return ValidationResult.failure(f"{name} must be finite, got {number}")
    return ValidationResult.success(number)


def validate_coordinate(value: Any, name: str = "coordinate") -> ValidationResult:
    """Validate a coordinate value.

    Args:
        value: The coordinate value to validate.
        name: The parameter name for error messages.

    Returns:
        ValidationResult with the validated value or error.
    """
    result = _to_float(value, name)
    if not result.valid:
        return result

    # Diagram view boxes are a few thousand units across at most
    if abs(result.value) > 1_000_000:
        return ValidationResult.failure(
            f"{name} value {result.value} is outside reasonable bounds (-1e6 to 1e6)"
        )

    return result


def validate_dimension(
    value: Any,
    name: str = "dimension",
    min_value: float = 0.0,
    max_value: float = 1_000_000.0,
    exclusive_min: bool = False,
) -> ValidationResult:
    """Validate a dimension value.

    Args:
        value: The dimension value to validate.
        name: The parameter name for error messages.
        min_value: Minimum allowed value.
        max_value: Maximum allowed value.
        exclusive_min: Reject ``min_value`` itself (for sizes that must be > 0).

    Returns:
        ValidationResult with the validated value or error.
    """
    result = _to_float(value, name)
    if not result.valid:
        return result
    dim = result.value

    if exclusive_min and dim <= min_value:
        return ValidationResult.failure(f"{name} must be > {min_value}, got {dim}")

    if dim < min_value:
        return ValidationResult.failure(f"{name} must be >= {min_value}, got {dim}")

    if dim > max_value:
        return ValidationResult.failure(f"{name} must be <= {max_value}, got {dim}")

    return ValidationResult.success(dim)


def validate_angle(value: Any, name: str = "angle") -> ValidationResult:
    """Validate an angle value (degrees). Any finite rotation is allowed."""
    return _to_float(value, name)


def validate_count(value: Any, name: str = "count") -> ValidationResult:
    """Validate a non-negative integer (e.g. an iteration budget)."""
    if isinstance(value, bool):
        return ValidationResult.failure(f"{name} must be an integer, got bool")
    if isinstance(value, float):
        if not value.is_integer():
            return ValidationResult.failure(f"{name} must be an integer, got {value}")
        value = int(value)
    if not isinstance(value, int):
        return ValidationResult.failure(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        return ValidationResult.failure(f"{name} must be >= 0, got {value}")
    return ValidationResult.success(value)


_IDENTIFIER = re.compile(r"^[A-Za-z0-9_.\-]+$")


def validate_identifier(value: Any, name: str = "identifier") -> ValidationResult:
    """Validate a component id, port name or template id.

    Identifiers end up in ``"comp:PORT->comp:PORT"`` keys, so the separator
    characters are not allowed inside them.
    """
    if not isinstance(value, str):
        return ValidationResult.failure(f"{name} must be a string, got {type(value).__name__}")

    if not value:
        return ValidationResult.failure(f"{name} cannot be empty")

    if not _IDENTIFIER.match(value):
        return ValidationResult.failure(
            f"{name} '{value}' contains invalid characters. "
            "Only letters, numbers, underscores, dots and dashes are allowed."
        )

    return ValidationResult.success(value)


def validate_choice(value: Any, choices: tuple[str, ...], name: str = "value") -> ValidationResult:
    """Validate that a string is one of a fixed set of choices."""
    if value not in choices:
        return ValidationResult.failure(
            f"{name} must be one of {', '.join(choices)}; got {value!r}"
        )
    return ValidationResult.success(value)
