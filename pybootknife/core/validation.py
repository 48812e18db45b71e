"""
Input validation utilities for pybootknife.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
    - Callers choose the ValidationError subclass to raise
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pybootknife.core.exceptions import ValidationError, DimensionError


def is_scalar(value: Any) -> bool:
    """True for Python/NumPy scalars and 0-d arrays."""
    return np.ndim(value) == 0 and not isinstance(value, (str, bytes))


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a floating numpy array.

    Rejects inputs that result in object dtype (mixed types) or in a
    non-numeric dtype (strings, datetimes).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(
            f"{name}: cannot convert to array: {e}", value=array
        ) from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types "
            f"or non-numeric data",
            value=array,
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data",
            value=array,
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)",
            value=array,
        )


def check_vector(
    array: NDArray,
    name: str,
    error: type[ValidationError] = DimensionError,
) -> NDArray:
    """
    Verify array is a vector and return it flattened to 1D.

    Row and column vectors (shape (1, n) or (n, 1)) are accepted; any
    array with more than one non-singleton dimension is a matrix and
    is rejected.

    Args:
        array: Array to check
        name: Parameter name for error messages
        error: Exception class to raise

    Raises:
        error: If array is 0-d or has more than one non-singleton axis
    """
    if array.ndim == 0:
        raise error(f"{name}: expected a vector, got a scalar", value=array)
    if sum(1 for s in array.shape if s > 1) > 1:
        raise error(
            f"{name}: expected a vector, got array with shape {array.shape}",
            value=array,
        )
    return array.reshape(-1)


def check_min_samples(
    array: NDArray,
    min_samples: int,
    name: str,
    error: type[ValidationError] = ValidationError,
) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        error: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise error(
            f"{name}: requires at least {min_samples} samples, got {n}",
            value=array,
        )


def check_finite_scalar(
    value: Any,
    name: str,
    error: type[ValidationError] = ValidationError,
) -> int | float:
    """
    Verify value is a single finite real number.

    Returns:
        The value as a Python int (integral inputs) or float

    Raises:
        error: If value is not a real scalar, is boolean, or is NaN/Inf
    """
    if np.ndim(value) != 0:
        raise error(
            f"{name}: expected a scalar, got shape {np.shape(value)}",
            value=value,
        )
    scalar = np.asarray(value).item()
    if isinstance(scalar, bool) or not isinstance(scalar, numbers.Real):
        raise error(
            f"{name}: expected a real number, got {type(scalar).__name__}",
            value=value,
        )
    if isinstance(scalar, numbers.Integral):
        return int(scalar)
    if not np.isfinite(scalar):
        raise error(f"{name}: must be finite, got {scalar}", value=value)
    return float(scalar)


def check_positive_int(
    value: Any,
    name: str,
    error: type[ValidationError] = ValidationError,
) -> int:
    """
    Verify value is a finite positive integer scalar.

    Integral floats (e.g. 20.0) are accepted and converted to int.

    Raises:
        error: If value is not a positive integer
    """
    scalar = check_finite_scalar(value, name, error)
    if scalar != int(scalar):
        raise error(f"{name}: must be an integer, got {scalar}", value=value)
    if scalar <= 0:
        raise error(f"{name}: must be positive, got {scalar}", value=value)
    return int(scalar)


def check_count_vector(
    array: ArrayLike,
    n: int,
    name: str,
    error: type[ValidationError] = ValidationError,
) -> NDArray[np.int64]:
    """
    Verify array is a length-n vector of non-negative integers.

    Args:
        array: Input counts
        n: Required length
        name: Parameter name for error messages
        error: Exception class to raise

    Returns:
        int64 array of shape (n,)

    Raises:
        error: On non-numeric input, wrong length, or entries that are
            negative, fractional, or non-finite
    """
    arr = np.asarray(array)
    if arr.dtype == object or arr.dtype == bool or not np.issubdtype(
        arr.dtype, np.number
    ):
        raise error(
            f"{name}: expected numeric counts, got dtype {arr.dtype}",
            value=array,
        )
    arr = check_vector(arr, name, error)
    if arr.shape[0] != n:
        raise error(
            f"{name}: expected length {n}, got {arr.shape[0]}",
            value=array,
        )
    if not np.all(np.isfinite(arr)):
        raise error(f"{name}: contains non-finite values", value=array)
    if np.any(arr < 0):
        bad = np.flatnonzero(arr < 0).tolist()
        raise error(
            f"{name}: entries must be non-negative, negative at {bad}",
            value=array,
        )
    if np.any(arr != np.floor(arr)):
        bad = np.flatnonzero(arr != np.floor(arr)).tolist()
        raise error(
            f"{name}: entries must be integers, fractional at {bad}",
            value=array,
        )
    return arr.astype(np.int64)
