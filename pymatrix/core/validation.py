"""
Input validation utilities for PyMatrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers
from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.exceptions import (
    ConstructionError,
    DimensionError,
    ValidationError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).
    The result is always a fresh copy, never a view of the caller's data.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with dtype float64

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.array(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Complex values are a non-goal; reject along with strings, datetimes, ...
    if not (np.issubdtype(result.dtype, np.floating)
            or np.issubdtype(result.dtype, np.integer)
            or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-real dtype {result.dtype}, expected real numeric data"
        )

    return result.astype(np.float64, copy=False)


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_dimensions(m: int, n: int) -> None:
    """
    Verify a requested matrix shape is a pair of non-negative integers.

    Raises:
        ValidationError: If either dimension is negative or not an integer
    """
    for value, label in ((m, 'm'), (n, 'n')):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ValidationError(
                f"{label}: expected an integer dimension, got {type(value).__name__}"
            )
        if value < 0:
            raise ValidationError(f"{label}: dimension must be >= 0, got {value}")


def check_scalar(value: Any, name: str) -> None:
    """
    Verify a fill value is a real, non-boolean scalar.

    Raises:
        ValidationError: If value is not a real number
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise ValidationError(
            f"{name}: expected a real scalar, got {type(value).__name__}"
        )


def check_equal_row_lengths(rows: Sequence[Sequence[float]], name: str) -> None:
    """
    Verify every row of a nested sequence has the same length.

    Args:
        rows: Sequence of row sequences
        name: Parameter name for error messages

    Raises:
        ConstructionError: If any row differs in length from the first
    """
    if isinstance(rows, (str, bytes)) or not isinstance(rows, (Sequence, np.ndarray)):
        raise ConstructionError(
            f"{name}: expected a sequence of rows, got {type(rows).__name__}"
        )
    if len(rows) == 0:
        return
    for i, row in enumerate(rows):
        if isinstance(row, (str, bytes)) or not isinstance(row, (Sequence, np.ndarray)):
            raise ConstructionError(
                f"{name}: row {i} is not a sequence, got {type(row).__name__}"
            )
    expected = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != expected:
            raise ConstructionError(
                f"{name}: all rows must have the same length; "
                f"row 0 has {expected} entries, row {i} has {len(row)}"
            )


def check_packed_length(length: int, m: int, name: str) -> None:
    """
    Verify a packed array can be split into m rows.

    Raises:
        ConstructionError: If length is not a multiple of m
    """
    if m == 0:
        if length != 0:
            raise ConstructionError(
                f"{name}: cannot pack {length} values into 0 rows"
            )
        return
    if length % m != 0:
        raise ConstructionError(
            f"{name}: array length must be a multiple of m; got length {length}, m={m}"
        )


def check_same_shape(
    left: tuple[int, int],
    right: tuple[int, int],
    operation: str,
) -> None:
    """
    Verify two operands of an elementwise operation have the same shape.

    Raises:
        DimensionError: If the shapes differ
    """
    if left != right:
        raise DimensionError(
            f"{operation}: matrix dimensions must agree, got {left} and {right}"
        )


def check_inner_dimensions(
    left: tuple[int, int],
    right: tuple[int, int],
) -> None:
    """
    Verify the inner dimensions of a matrix product agree.

    Raises:
        DimensionError: If left columns != right rows
    """
    if left[1] != right[0]:
        raise DimensionError(
            f"matrix product: inner dimensions must agree, "
            f"got {left} @ {right} ({left[1]} != {right[0]})"
        )


def check_square(shape: tuple[int, int], name: str) -> None:
    """
    Verify a matrix is square.

    Raises:
        DimensionError: If rows != columns
    """
    if shape[0] != shape[1]:
        raise DimensionError(f"{name}: matrix must be square, got shape {shape}")


def check_row_count(rows: int, expected: int, name: str) -> None:
    """
    Verify a right-hand side has the expected number of rows.

    Raises:
        DimensionError: If the row counts differ
    """
    if rows != expected:
        raise DimensionError(
            f"{name}: row dimensions must agree, expected {expected} rows, got {rows}"
        )
