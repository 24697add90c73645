"""
Dense real matrix.

Matrix owns one contiguous, row-major float64 buffer of exactly m*n
values. It has value semantics: every constructor copies its input,
every operation returns a new Matrix with its own buffer, and no two
Matrix values ever share storage. The only non-owning access is the
explicit, read-only view().

Element and submatrix access is always bounds-checked. Rows and columns
are addressed independently by a unit-step range (slice or range), an
index list, or a single int:

    >>> A = Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 10]])
    >>> A[0, 2]
    3.0
    >>> A[0:2, [0, 2]].to_list()
    [[1.0, 3.0], [4.0, 6.0]]

Operator conventions follow NumPy: `*` and `/` are elementwise (or
scalar), `@` is the matrix product.
"""

from __future__ import annotations

import numbers
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core._indexing import AxisIndex, AxisKey, check_index, resolve_axis
from pymatrix.core.compute.precision import hypot_norm
from pymatrix.core.exceptions import ValidationError
from pymatrix.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_dimensions,
    check_equal_row_lengths,
    check_inner_dimensions,
    check_packed_length,
    check_scalar,
    check_same_shape,
    check_square,
)

if TYPE_CHECKING:
    from pymatrix.lu.solution import LUDecomposition
    from pymatrix.svd.solution import SVDDecomposition


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


class Matrix:
    """
    Dense m x n matrix of float64 values.

    Construction:
        Matrix(m, n)                    # zeros
        Matrix(m, n, s)                 # constant s
        Matrix.from_rows(rows)          # nested sequences, equal lengths
        Matrix.from_packed(values, m)   # column-packed 1-D data
        Matrix.from_array(array)        # any 2-D array-like
        Matrix.random(m, n, rng=None)   # uniform [0, 1)
        Matrix.identity(m, n=None)
    """

    __slots__ = ('_data',)

    # Make NumPy defer to our reflected operators (np.float64(2) * A).
    __array_ufunc__ = None

    def __init__(self, m: int, n: int, s: float = 0.0):
        check_dimensions(m, n)
        check_scalar(s, 's')
        self._data = np.full((m, n), float(s), dtype=np.float64)

    @classmethod
    def _wrap(cls, data: NDArray[np.float64]) -> Matrix:
        """Adopt a freshly allocated buffer without copying it again."""
        obj = cls.__new__(cls)
        obj._data = np.ascontiguousarray(data, dtype=np.float64)
        return obj

    # === Construction ===

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> Matrix:
        """
        Build a matrix from a sequence of equal-length row sequences.

        Raises:
            ConstructionError: If the rows differ in length
        """
        check_equal_row_lengths(rows, 'rows')
        if len(rows) == 0:
            return cls(0, 0)
        data = check_array(rows, 'rows')
        check_2d(data, 'rows')
        return cls._wrap(data)

    @classmethod
    def from_packed(cls, values: ArrayLike, m: int) -> Matrix:
        """
        Build a matrix from a one-dimensional array packed by columns.

        Args:
            values: m*n values, column after column (Fortran order)
            m: Number of rows

        Raises:
            ConstructionError: If len(values) is not a multiple of m
        """
        data = check_array(values, 'values')
        check_1d(data, 'values')
        check_dimensions(m, 0)
        check_packed_length(data.size, m, 'values')
        n = data.size // m if m != 0 else 0
        return cls._wrap(data.reshape((m, n), order='F'))

    @classmethod
    def from_array(cls, array: ArrayLike) -> Matrix:
        """Build a matrix from a copy of any 2-D real array-like."""
        data = check_array(array, 'array')
        check_2d(data, 'array')
        return cls._wrap(data)

    @classmethod
    def random(
        cls,
        m: int,
        n: int,
        rng: np.random.Generator | int | None = None,
    ) -> Matrix:
        """
        Matrix with independent entries drawn uniformly from [0, 1).

        Args:
            m, n: Dimensions
            rng: Generator or seed; None draws fresh OS entropy
        """
        check_dimensions(m, n)
        generator = np.random.default_rng(rng)
        return cls._wrap(generator.random((m, n)))

    @classmethod
    def identity(cls, m: int, n: int | None = None) -> Matrix:
        """m x n matrix (square when n is omitted) with ones on the diagonal."""
        n = m if n is None else n
        check_dimensions(m, n)
        return cls._wrap(np.eye(m, n, dtype=np.float64))

    # === Dimensions ===

    @property
    def m(self) -> int:
        """Row dimension."""
        return self._data.shape[0]

    @property
    def n(self) -> int:
        """Column dimension."""
        return self._data.shape[1]

    @property
    def row_dimension(self) -> int:
        return self._data.shape[0]

    @property
    def column_dimension(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return (self._data.shape[0], self._data.shape[1])

    # === Export (always copies) ===

    def copy(self) -> Matrix:
        """Independent copy with its own buffer."""
        return Matrix._wrap(self._data.copy())

    def __copy__(self) -> Matrix:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Matrix:
        return self.copy()

    def to_array(self) -> NDArray[np.float64]:
        """Copy of the elements as a 2-D numpy array."""
        return self._data.copy()

    def to_list(self) -> list[list[float]]:
        """Copy of the elements as nested Python lists, one per row."""
        return self._data.tolist()

    def row_packed(self) -> NDArray[np.float64]:
        """One-dimensional copy, packed row after row."""
        return self._data.ravel(order='C').copy()

    def column_packed(self) -> NDArray[np.float64]:
        """One-dimensional copy, packed column after column."""
        return self._data.ravel(order='F').copy()

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> NDArray[Any]:
        if copy is False:
            raise ValueError("Matrix can only be exported to numpy as a copy")
        return self._data.astype(np.float64 if dtype is None else dtype, copy=True)

    def view(self, rows: slice | range = slice(None), cols: slice | range = slice(None)) -> NDArray[np.float64]:
        """
        Read-only, non-owning numpy view of a contiguous block.

        The view reflects later in-place changes to this matrix. Use
        get_matrix() for an owned copy.

        Raises:
            ValidationError: If either axis is an index list
            BoundsError: If the block extends past the matrix
        """
        r = resolve_axis(rows, self.m, 'row')
        c = resolve_axis(cols, self.n, 'column')
        if not (r.contiguous and c.contiguous):
            raise ValidationError(
                "view: rows and columns must be contiguous ranges; "
                "use get_matrix() for index lists"
            )
        block = self._data[r.key, c.key].view()
        block.flags.writeable = False
        return block

    # === Element access ===

    def get(self, i: int, j: int) -> float:
        """
        Get a single element.

        Raises:
            BoundsError: If (i, j) is outside [0, m) x [0, n)
        """
        i = check_index(i, self.m, 'row')
        j = check_index(j, self.n, 'column')
        return float(self._data[i, j])

    def set(self, i: int, j: int, value: float) -> None:
        """
        Set a single element.

        Raises:
            BoundsError: If (i, j) is outside [0, m) x [0, n)
        """
        i = check_index(i, self.m, 'row')
        j = check_index(j, self.n, 'column')
        self._data[i, j] = float(value)

    # === Submatrix access ===

    def _block(self, r: AxisIndex, c: AxisIndex) -> tuple[Any, Any]:
        # Two index lists must be combined as an outer product, not zipped.
        if not r.contiguous and not c.contiguous:
            return np.ix_(r.key, c.key)
        return (r.key, c.key)

    def get_matrix(self, rows: AxisKey, cols: AxisKey) -> Matrix:
        """
        Owned copy of a submatrix.

        Args:
            rows: Unit-step slice/range, index list, or single int
            cols: Unit-step slice/range, index list, or single int

        Raises:
            BoundsError: If any addressed row or column is out of range
        """
        r = resolve_axis(rows, self.m, 'row')
        c = resolve_axis(cols, self.n, 'column')
        return Matrix._wrap(self._data[self._block(r, c)].copy())

    def set_matrix(self, rows: AxisKey, cols: AxisKey, other: Matrix) -> None:
        """
        Overwrite a submatrix.

        Raises:
            BoundsError: If any addressed row or column is out of range
            DimensionError: If other's shape differs from the addressed region
        """
        if not isinstance(other, Matrix):
            raise ValidationError(
                f"set_matrix: right-hand side must be a Matrix, got {type(other).__name__}"
            )
        r = resolve_axis(rows, self.m, 'row')
        c = resolve_axis(cols, self.n, 'column')
        check_same_shape((r.length, c.length), other.shape, 'submatrix assignment')
        # Copy first so A[r, c] = A[...] never reads half-written data.
        self._data[self._block(r, c)] = other._data.copy()

    def __getitem__(self, key: tuple[AxisKey, AxisKey]) -> float | Matrix:
        rows, cols = self._split_key(key)
        if _is_index(rows) and _is_index(cols):
            return self.get(rows, cols)
        return self.get_matrix(rows, cols)

    def __setitem__(self, key: tuple[AxisKey, AxisKey], value: float | Matrix) -> None:
        rows, cols = self._split_key(key)
        if _is_index(rows) and _is_index(cols):
            if not _is_scalar(value):
                raise ValidationError(
                    f"element assignment needs a real scalar, got {type(value).__name__}"
                )
            self.set(rows, cols, value)
        else:
            self.set_matrix(rows, cols, value)

    @staticmethod
    def _split_key(key: Any) -> tuple[AxisKey, AxisKey]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise ValidationError(
                "Matrix indexing needs a (rows, cols) pair, e.g. A[i, j] or A[0:2, [1, 3]]"
            )
        return key

    # === Elementwise algebra ===

    def _check_operand(self, other: Matrix, operation: str) -> NDArray[np.float64]:
        check_same_shape(self.shape, other.shape, operation)
        return other._data

    def __neg__(self) -> Matrix:
        return Matrix._wrap(-self._data)

    def __add__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix._wrap(self._data + self._check_operand(other, 'add'))

    def __iadd__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._data += self._check_operand(other, 'add')
        return self

    def __sub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix._wrap(self._data - self._check_operand(other, 'subtract'))

    def __isub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._data -= self._check_operand(other, 'subtract')
        return self

    def __mul__(self, other: Matrix | float) -> Matrix:
        """Elementwise product with a Matrix, or scaling by a scalar."""
        if isinstance(other, Matrix):
            return Matrix._wrap(self._data * self._check_operand(other, 'elementwise multiply'))
        if _is_scalar(other):
            return Matrix._wrap(float(other) * self._data)
        return NotImplemented

    def __rmul__(self, other: float) -> Matrix:
        if _is_scalar(other):
            return Matrix._wrap(float(other) * self._data)
        return NotImplemented

    def __imul__(self, other: Matrix | float) -> Matrix:
        if isinstance(other, Matrix):
            self._data *= self._check_operand(other, 'elementwise multiply')
            return self
        if _is_scalar(other):
            self._data *= float(other)
            return self
        return NotImplemented

    def __truediv__(self, other: Matrix | float) -> Matrix:
        """Elementwise right division A ./ B, or division by a scalar."""
        if isinstance(other, Matrix):
            divisor = self._check_operand(other, 'elementwise divide')
        elif _is_scalar(other):
            divisor = float(other)
        else:
            return NotImplemented
        with np.errstate(divide='ignore', invalid='ignore'):
            return Matrix._wrap(self._data / divisor)

    def __itruediv__(self, other: Matrix | float) -> Matrix:
        if isinstance(other, Matrix):
            divisor = self._check_operand(other, 'elementwise divide')
        elif _is_scalar(other):
            divisor = float(other)
        else:
            return NotImplemented
        with np.errstate(divide='ignore', invalid='ignore'):
            self._data /= divisor
        return self

    def left_divide(self, other: Matrix) -> Matrix:
        """Elementwise left division A .\\ B, i.e. B[i, j] / A[i, j]."""
        divisor = self._check_operand(other, 'elementwise left divide')
        with np.errstate(divide='ignore', invalid='ignore'):
            return Matrix._wrap(divisor / self._data)

    def left_divide_inplace(self, other: Matrix) -> Matrix:
        """In-place A = A .\\ B. Returns self."""
        numerator = self._check_operand(other, 'elementwise left divide')
        with np.errstate(divide='ignore', invalid='ignore'):
            np.divide(numerator, self._data, out=self._data)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # mutable

    # === Linear algebra ===

    def matmul(self, other: Matrix) -> Matrix:
        """
        Linear algebraic product A @ B.

        One column of B is staged into a contiguous buffer at a time and
        multiplied against the rows of A; cost O(m * inner * cols).

        Raises:
            DimensionError: If A.n != B.m
        """
        check_inner_dimensions(self.shape, other.shape)
        a = self._data
        b = other._data
        result = np.zeros((a.shape[0], b.shape[1]), dtype=np.float64)
        b_colj = np.empty(b.shape[0], dtype=np.float64)
        for j in range(b.shape[1]):
            b_colj[:] = b[:, j]
            result[:, j] = a @ b_colj
        return Matrix._wrap(result)

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.matmul(other)

    def transpose(self) -> Matrix:
        return Matrix._wrap(self._data.T.copy())

    @property
    def T(self) -> Matrix:
        return self.transpose()

    # === Norms and reductions ===

    def norm1(self) -> float:
        """One norm: maximum column sum of absolute values."""
        return float(np.abs(self._data).sum(axis=0).max(initial=0.0))

    def norm_inf(self) -> float:
        """Infinity norm: maximum row sum of absolute values."""
        return float(np.abs(self._data).sum(axis=1).max(initial=0.0))

    def norm_fro(self) -> float:
        """Frobenius norm, accumulated with hypot to avoid over/underflow."""
        return hypot_norm(self._data)

    def trace(self) -> float:
        """Sum of the diagonal elements over min(m, n)."""
        return float(np.trace(self._data))

    # === Decomposition shortcuts ===

    def lu(self) -> LUDecomposition:
        from pymatrix.lu import lu
        return lu(self)

    def svd(self) -> SVDDecomposition:
        from pymatrix.svd import svd
        return svd(self)

    def det(self) -> float:
        """Determinant via LU. Raises DimensionError unless square."""
        return self.lu().det()

    def solve(self, b: Matrix) -> Matrix:
        """
        Solve A @ X = B for square A via LU.

        Raises:
            DimensionError: If A is not square or B.m != A.m
            SingularMatrixError: If A is singular
        """
        check_square(self.shape, 'solve')
        return self.lu().solve(b)

    def inverse(self) -> Matrix:
        """Inverse of a square nonsingular matrix, solve(identity)."""
        check_square(self.shape, 'inverse')
        return self.solve(Matrix.identity(self.m))

    def norm2(self) -> float:
        """Two norm, the largest singular value."""
        return self.svd().norm2()

    def cond(self) -> float:
        """Two-norm condition number, ratio of extreme singular values."""
        return self.svd().cond()

    def rank(self) -> int:
        """Effective numerical rank from the SVD."""
        return self.svd().rank()

    def __repr__(self) -> str:
        return f"<Matrix {self.m}x{self.n}>"


def _is_index(key: Any) -> bool:
    return isinstance(key, (int, np.integer)) and not isinstance(key, (bool, np.bool_))
