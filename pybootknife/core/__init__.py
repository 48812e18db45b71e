"""
Core infrastructure for pybootknife.

Shared abstractions used by the resampling domain.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Section timing
"""

from pybootknife.core.protocols import Backend
from pybootknife.core.result import Result
from pybootknife.core.exceptions import (
    PyBootknifeError,
    ValidationError,
    DimensionError,
    InvalidPopulationError,
    InvalidResampleCountError,
    InvalidModeError,
    InvalidWeightsError,
    WeightSumMismatchError,
    InvalidSeedError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyBootknifeError",
    "ValidationError",
    "DimensionError",
    "InvalidPopulationError",
    "InvalidResampleCountError",
    "InvalidModeError",
    "InvalidWeightsError",
    "WeightSumMismatchError",
    "InvalidSeedError",
]
