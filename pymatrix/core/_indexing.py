"""
Row/column addressing for Matrix access.

Each axis of a submatrix request is addressed independently by one of:
    - a contiguous range: slice with unit step, or range with unit step
    - a discrete index list: any sequence / 1-D integer array
    - a single int, treated as a one-element range

Everything is bounds-checked against [0, size). Negative indices are
out of range; there is no wrap-around.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import BoundsError, ValidationError

AxisKey = Union[int, slice, range, Sequence[int], NDArray[np.integer]]


@dataclass(frozen=True)
class AxisIndex:
    """
    A resolved, bounds-checked axis address.

    Attributes:
        key: numpy-ready index (a slice for ranges, an intp array for lists)
        length: Number of addressed rows/columns
        contiguous: True when key is a slice (view-compatible)
    """
    key: Union[slice, NDArray[np.intp]]
    length: int
    contiguous: bool


def check_index(index: int, size: int, axis: str) -> int:
    """
    Verify a single element index lies in [0, size).

    Returns:
        The index as a plain int

    Raises:
        BoundsError: If the index is out of range
        ValidationError: If the index is not an integer
    """
    if isinstance(index, (bool, np.bool_)) or not isinstance(index, (int, np.integer)):
        raise ValidationError(
            f"{axis} index must be an integer, got {type(index).__name__}"
        )
    if index < 0 or index >= size:
        raise BoundsError(
            f"{axis} index {index} out of range [0, {size})",
            index=int(index),
            size=size,
            axis=axis,
        )
    return int(index)


def _resolve_range(start: int | None, stop: int | None, size: int, axis: str) -> AxisIndex:
    start = 0 if start is None else start
    stop = size if stop is None else stop
    for bound in (start, stop):
        if bound < 0 or bound > size:
            raise BoundsError(
                f"{axis} range bound {bound} out of range [0, {size}]",
                index=bound,
                size=size,
                axis=axis,
            )
    if stop < start:
        raise BoundsError(
            f"{axis} range is reversed: start={start}, stop={stop}",
            index=stop,
            size=size,
            axis=axis,
        )
    return AxisIndex(key=slice(start, stop), length=stop - start, contiguous=True)


def resolve_axis(key: AxisKey, size: int, axis: str) -> AxisIndex:
    """
    Resolve one axis of a submatrix address.

    Args:
        key: int, unit-step slice/range, or sequence of ints
        size: Extent of the axis
        axis: 'row' or 'column', for error messages

    Returns:
        AxisIndex ready to index a numpy buffer

    Raises:
        BoundsError: If any addressed position falls outside [0, size)
        ValidationError: For non-unit steps, boolean masks or non-integers
    """
    if isinstance(key, (int, np.integer)) and not isinstance(key, (bool, np.bool_)):
        i = check_index(key, size, axis)
        return AxisIndex(key=slice(i, i + 1), length=1, contiguous=True)

    if isinstance(key, slice):
        if key.step not in (None, 1):
            raise ValidationError(
                f"{axis} range must have unit step, got step={key.step}"
            )
        return _resolve_range(key.start, key.stop, size, axis)

    if isinstance(key, range):
        if key.step != 1:
            raise ValidationError(
                f"{axis} range must have unit step, got step={key.step}"
            )
        return _resolve_range(key.start, key.stop, size, axis)

    indices = np.asarray(key)
    if indices.ndim != 1:
        raise ValidationError(
            f"{axis} index list must be one-dimensional, got shape {indices.shape}"
        )
    if indices.size == 0:
        return AxisIndex(key=np.empty(0, dtype=np.intp), length=0, contiguous=False)
    if indices.dtype == np.bool_ or not np.issubdtype(indices.dtype, np.integer):
        raise ValidationError(
            f"{axis} index list must contain integers, got dtype {indices.dtype}"
        )

    bad = (indices < 0) | (indices >= size)
    if np.any(bad):
        first = int(indices[np.argmax(bad)])
        raise BoundsError(
            f"{axis} index {first} out of range [0, {size})",
            index=first,
            size=size,
            axis=axis,
        )
    return AxisIndex(
        key=indices.astype(np.intp),
        length=int(indices.size),
        contiguous=False,
    )
