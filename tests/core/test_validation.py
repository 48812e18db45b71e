"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, object rejection
    - check_finite: NaN/Inf detection
    - check_vector: row/column vectors accepted, matrices rejected
    - check_min_samples: minimum sample count
    - check_finite_scalar / check_positive_int: scalar checks
    - check_count_vector: non-negative integer counts of a given length
"""

import numpy as np
import pytest

from pybootknife.core.exceptions import (
    DimensionError,
    InvalidWeightsError,
    ValidationError,
)
from pybootknife.core.validation import (
    check_array,
    check_count_vector,
    check_finite,
    check_finite_scalar,
    check_min_samples,
    check_positive_int,
    check_vector,
    is_scalar,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array / check_finite
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "data")
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([None, 1, 2.0], "data")

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_array(["a", "b"], "data")


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "data")

    def test_nan_and_inf_counted(self):
        with pytest.raises(ValidationError, match="1 NaN, 1 Inf"):
            check_finite(np.array([np.nan, np.inf, 1.0]), "data")


# ═══════════════════════════════════════════════════════════════════════
# check_vector / check_min_samples
# ═══════════════════════════════════════════════════════════════════════


class TestCheckVector:

    def test_1d_passthrough(self):
        out = check_vector(np.array([1, 2, 3]), "x")
        assert out.shape == (3,)

    def test_column_vector_flattened(self):
        out = check_vector(np.array([[1], [2], [3]]), "x")
        np.testing.assert_array_equal(out, [1, 2, 3])

    def test_row_vector_flattened(self):
        out = check_vector(np.array([[1, 2, 3]]), "x")
        np.testing.assert_array_equal(out, [1, 2, 3])

    def test_matrix_rejected(self):
        with pytest.raises(DimensionError, match="shape \\(2, 3\\)"):
            check_vector(np.ones((2, 3)), "x")

    def test_scalar_rejected(self):
        with pytest.raises(DimensionError, match="scalar"):
            check_vector(np.array(5.0), "x")

    def test_custom_error_class(self):
        with pytest.raises(InvalidWeightsError):
            check_vector(np.ones((2, 2)), "weights", InvalidWeightsError)


class TestCheckMinSamples:

    def test_enough(self):
        check_min_samples(np.array([1.0]), 1, "x")

    def test_empty(self):
        with pytest.raises(ValidationError, match="at least 1 samples, got 0"):
            check_min_samples(np.array([]), 1, "x")


# ═══════════════════════════════════════════════════════════════════════
# Scalars
# ═══════════════════════════════════════════════════════════════════════


class TestScalars:

    def test_is_scalar(self):
        assert is_scalar(3)
        assert is_scalar(np.float64(2.5))
        assert is_scalar(np.array(4))
        assert not is_scalar([1, 2])
        assert not is_scalar("abc")

    def test_finite_scalar_int(self):
        assert check_finite_scalar(np.int64(7), "s") == 7
        assert isinstance(check_finite_scalar(np.int64(7), "s"), int)

    def test_finite_scalar_float(self):
        assert check_finite_scalar(2.5, "s") == 2.5

    @pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
    def test_finite_scalar_rejects_non_finite(self, bad):
        with pytest.raises(ValidationError, match="finite"):
            check_finite_scalar(bad, "s")

    @pytest.mark.parametrize("bad", [[1, 2], np.ones(3)])
    def test_finite_scalar_rejects_arrays(self, bad):
        with pytest.raises(ValidationError, match="scalar"):
            check_finite_scalar(bad, "s")

    @pytest.mark.parametrize("bad", [True, "3", None, 1 + 2j])
    def test_finite_scalar_rejects_non_real(self, bad):
        with pytest.raises(ValidationError, match="real number"):
            check_finite_scalar(bad, "s")

    def test_positive_int_accepts_integral_float(self):
        assert check_positive_int(20.0, "nboot") == 20

    @pytest.mark.parametrize("bad", [0, -1, 2.5])
    def test_positive_int_rejects(self, bad):
        with pytest.raises(ValidationError, match="nboot"):
            check_positive_int(bad, "nboot")


# ═══════════════════════════════════════════════════════════════════════
# check_count_vector
# ═══════════════════════════════════════════════════════════════════════


class TestCheckCountVector:

    def test_valid_counts(self):
        out = check_count_vector([20, 0, 10], 3, "weights")
        assert out.dtype == np.int64
        np.testing.assert_array_equal(out, [20, 0, 10])

    def test_integral_floats_accepted(self):
        out = check_count_vector(np.array([2.0, 3.0]), 2, "weights")
        np.testing.assert_array_equal(out, [2, 3])

    def test_column_vector_accepted(self):
        out = check_count_vector([[20], [0], [10]], 3, "weights")
        assert out.shape == (3,)

    def test_wrong_length(self):
        with pytest.raises(ValidationError, match="expected length 3, got 2"):
            check_count_vector([1, 2], 3, "weights")

    def test_negative(self):
        with pytest.raises(ValidationError, match="negative at \\[1\\]"):
            check_count_vector([3, -1, 4], 3, "weights")

    def test_fractional(self):
        with pytest.raises(ValidationError, match="fractional at \\[0\\]"):
            check_count_vector([1.5, 2, 3], 3, "weights")

    def test_nan(self):
        with pytest.raises(ValidationError, match="non-finite"):
            check_count_vector([np.nan, 2, 3], 3, "weights")

    def test_boolean_rejected(self):
        with pytest.raises(ValidationError, match="numeric counts"):
            check_count_vector([True, False], 2, "weights")

    def test_custom_error_class(self):
        with pytest.raises(InvalidWeightsError):
            check_count_vector([1, 2], 3, "weights", InvalidWeightsError)
