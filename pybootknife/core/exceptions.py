"""
Exception hierarchy for pybootknife.

All exceptions inherit from PyBootknifeError to allow catching any
library-specific error. Resampling requests that fail validation raise
one of the ValidationError subclasses below before any random draw is
made, so no partial matrix is ever returned.

Design principles:
    - Exceptions carry the offending value as an attribute
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

from typing import Any


class PyBootknifeError(Exception):
    """Base exception for all pybootknife errors."""
    pass


class ValidationError(PyBootknifeError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.

    Attributes:
        value: The offending input, if recorded
    """

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class InvalidPopulationError(ValidationError):
    """
    The population is neither a positive count nor a data vector.

    Raised for matrices, empty sequences, and counts that are
    non-positive, non-integral, or non-finite.
    """
    pass


class InvalidResampleCountError(ValidationError):
    """nboot is not a finite positive integer scalar."""
    pass


class InvalidModeError(ValidationError):
    """Resampling mode is not 'plain' or 'bootknife'."""
    pass


class InvalidWeightsError(ValidationError):
    """
    Weight vector has the wrong length or invalid entries.

    Weights are per-item target counts, so every entry must be a
    non-negative integer and there must be exactly one per item.
    """
    pass


class WeightSumMismatchError(InvalidWeightsError):
    """
    Weights do not add up to n * nboot.

    Attributes:
        expected: Required total (n * nboot)
        actual: Sum of the supplied weights
    """

    def __init__(
        self,
        message: str,
        value: Any = None,
        expected: int | None = None,
        actual: int | None = None,
    ):
        super().__init__(message, value)
        self.expected = expected
        self.actual = actual


class InvalidSeedError(ValidationError):
    """Seed is not a finite real scalar."""
    pass
