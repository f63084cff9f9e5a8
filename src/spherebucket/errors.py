"""Error handling utilities for spherebucket.

Provides exception classes and validation helpers for the
sphere bucket packing engine.
"""

from typing import Any


class SphereBucketError(Exception):
    """Base exception for spherebucket errors."""

    pass


class ValidationError(SphereBucketError):
    """Exception raised when input validation fails."""

    def __init__(self, field: str, value: object, expected: str) -> None:
        """Initialize validation error.

        Args:
            field: Field name that failed validation
            value: Invalid value
            expected: Expected type/description
        """
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(f"Validation failed for '{field}': expected {expected}, got {value!r}")


class NotInBucketError(SphereBucketError):
    """Exception raised when removing a sphere that is not in the bucket."""

    def __init__(self, sphere: Any) -> None:
        """Initialize not-in-bucket error.

        Args:
            sphere: Sphere that was not a member
        """
        self.sphere = sphere
        super().__init__(f"Attempt made to remove sphere that is not in bucket: {sphere!r}")


class AlreadyInBucketError(SphereBucketError):
    """Exception raised when adding a sphere that is already in the bucket."""

    def __init__(self, sphere: Any) -> None:
        self.sphere = sphere
        super().__init__(f"Sphere is already in bucket: {sphere!r}")


class BookkeepingError(SphereBucketError):
    """Exception raised when the bucket's internal bookkeeping is inconsistent."""

    def __init__(self, reason: str) -> None:
        """Initialize bookkeeping error.

        Args:
            reason: Description of the inconsistency
        """
        self.reason = reason
        super().__init__(f"Bucket bookkeeping error: {reason}")


def validate_range(value: int | float, min_val: int | float, max_val: int | float, name: str = "value") -> None:
    """Validate that a value is within range.

    Args:
        value: Value to validate
        min_val: Minimum allowed value
        max_val: Maximum allowed value
        name: Name of the value for error messages

    Raises:
        ValidationError: If value is out of range
    """
    if not (min_val <= value <= max_val):
        raise ValidationError(name, value, f"value between {min_val} and {max_val}")


def validate_positive(value: int | float, name: str = "value") -> None:
    """Validate that a value is strictly greater than zero.

    Raises:
        ValidationError: If value is zero or negative
    """
    if not value > 0:
        raise ValidationError(name, value, "positive value")
