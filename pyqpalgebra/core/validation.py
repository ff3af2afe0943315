"""
Input validation utilities for PyQPAlgebra.

These validators follow the "fail fast, fail loud" principle. They run only
at construction boundaries (CSCStore, vectors, value updates), never inside
the numerical kernels.

Design principles:
    - No silent type coercion beyond np.asarray and the requested dtype
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyqpalgebra.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
    dtype: np.dtype | type = np.float64,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a contiguous numeric array of `dtype`.

    Args:
        array: Input to validate
        name: Parameter name for error messages
        dtype: Target floating dtype

    Returns:
        numpy.ndarray with the requested dtype (a fresh copy if conversion
        was needed, otherwise the input itself)

    Raises:
        ValidationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return np.ascontiguousarray(result, dtype=dtype)


def check_index_array(array: ArrayLike, name: str) -> NDArray[np.int64]:
    """
    Validate and convert input to an int64 index array.

    Floating inputs are accepted only if every entry is integral.

    Raises:
        ValidationError: If input is non-numeric or has non-integral entries
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.size == 0:
        return np.zeros(result.shape, dtype=np.int64)

    if np.issubdtype(result.dtype, np.integer):
        return np.ascontiguousarray(result, dtype=np.int64)

    if np.issubdtype(result.dtype, np.floating):
        if not np.all(np.isfinite(result)) or np.any(result != np.round(result)):
            raise ValidationError(f"{name}: index array has non-integral entries")
        return np.ascontiguousarray(result, dtype=np.int64)

    raise ValidationError(
        f"{name}: expected integer indices, got dtype {result.dtype}"
    )


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
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_1d(array: NDArray[Any], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}",
            name=name,
        )


def check_length(array: NDArray[Any], length: int, name: str) -> None:
    """
    Verify a 1D array has exactly `length` entries.

    Raises:
        DimensionError: If the length differs
    """
    if array.shape[0] != length:
        raise DimensionError(
            f"{name}: expected length {length}, got {array.shape[0]}",
            name=name,
            expected=length,
            actual=int(array.shape[0]),
        )


def check_nonnegative_int(value: Any, name: str) -> int:
    """
    Verify value is a non-negative integer and return it as int.

    Raises:
        ValidationError: If value is negative or not integral
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise ValidationError(f"{name}: expected int, got {type(value).__name__}")
    if value < 0:
        raise ValidationError(f"{name}: must be non-negative, got {value}")
    return int(value)


def check_column_pointers(p: NDArray[np.int64], n: int, nzmax: int) -> None:
    """
    Verify a CSC column pointer array.

    Requires len(p) == n + 1, p[0] == 0, p non-decreasing and p[n] <= nzmax.

    Raises:
        DimensionError: If p has the wrong length
        ValidationError: If p violates the pointer invariants
    """
    check_1d(p, 'p')
    check_length(p, n + 1, 'p')
    if p[0] != 0:
        raise ValidationError(f"p: first column pointer must be 0, got {p[0]}")
    if n > 0 and np.any(np.diff(p) < 0):
        bad = int(np.flatnonzero(np.diff(p) < 0)[0])
        raise ValidationError(
            f"p: column pointers must be non-decreasing (p[{bad}]={p[bad]} > p[{bad + 1}]={p[bad + 1]})"
        )
    if p[n] > nzmax:
        raise ValidationError(
            f"p: stored entry count p[n]={p[n]} exceeds capacity nzmax={nzmax}"
        )


def check_row_indices(i: NDArray[np.int64], m: int, nnz: int) -> None:
    """
    Verify the live row indices i[:nnz] lie in [0, m).

    Raises:
        ValidationError: If any live row index is out of range
    """
    live = i[:nnz]
    if live.size and (live.min() < 0 or live.max() >= m):
        raise ValidationError(
            f"i: row indices must lie in [0, {m}), got range [{live.min()}, {live.max()}]"
        )
