"""Dense real matrices stored row-major.

:class:`Matrix` wraps a private ``(rows, cols)`` ``float64`` NumPy buffer in
C (row-major) order.  As with :class:`~lsisvd.vector.Vector`, every algebraic
operation (transpose, products, column extension, stacking) returns a newly
allocated matrix, and indexed assignment ``m[i, j] = x`` is the only
mutating operation.

Besides the algebra needed by the Jacobi solver and Brand's update, the
class offers the constructors used when assembling a term-document matrix
(:meth:`Matrix.from_rows`, :meth:`Matrix.from_columns`) and the nested-list
conversion used by :mod:`lsisvd.serialization`.
"""

from __future__ import annotations

import numbers
import operator
from typing import Iterable, Sequence

import numpy as np

from .errors import DimensionMismatch, IndexOutOfBounds, InvalidArgument
from .vector import COLUMN, ROW, Vector


class Matrix:
    """Dense ``rows × cols`` matrix of real numbers.

    Parameters
    ----------
    rows, cols : int
        Shape of the zero-filled matrix to allocate.
    """

    __slots__ = ("_data",)

    def __init__(self, rows: int = 0, cols: int = 0) -> None:
        rows = operator.index(rows)
        cols = operator.index(cols)
        if rows < 0 or cols < 0:
            raise InvalidArgument(f"matrix shape must be non-negative, got {rows}x{cols}")
        self._data = np.zeros((rows, cols), dtype=np.float64)

    @classmethod
    def _wrap(cls, data: np.ndarray) -> Matrix:
        mat = cls.__new__(cls)
        mat._data = np.ascontiguousarray(data, dtype=np.float64)
        return mat

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        return cls(rows, cols)

    @classmethod
    def identity(cls, n: int) -> Matrix:
        return cls._wrap(np.eye(n, dtype=np.float64))

    @classmethod
    def from_rows(cls, rows: Sequence[Iterable[float]]) -> Matrix:
        """Build a matrix from nested row sequences.

        Raises
        ------
        InvalidArgument
            If no rows are given.
        DimensionMismatch
            If the rows do not all have the same length.
        """
        materialised = [list(row) for row in rows]
        if not materialised:
            raise InvalidArgument("matrix requires at least one row")
        width = len(materialised[0])
        for i, row in enumerate(materialised):
            if len(row) != width:
                raise DimensionMismatch(
                    f"all rows must have the same length: row 0 has {width}, "
                    f"row {i} has {len(row)}")
        return cls._wrap(np.array(materialised, dtype=np.float64).reshape(len(materialised), width))

    alloc = from_rows

    @classmethod
    def from_sequence(cls, sequence: Sequence[Sequence[float]]) -> Matrix:
        """Rebuild a matrix from the output of :meth:`to_sequence`.

        The last item is the ``[rows, cols]`` shape; the items before it are
        the rows.  Keeping the shape lets ``0 × n`` matrices survive.
        """
        items = [list(item) for item in sequence]
        if not items or len(items[-1]) != 2:
            raise InvalidArgument("matrix sequence must end with a [rows, cols] shape")
        rows, cols = (int(x) for x in items.pop())
        if len(items) != rows:
            raise DimensionMismatch(f"expected {rows} rows, got {len(items)}")
        for i, row in enumerate(items):
            if len(row) != cols:
                raise DimensionMismatch(f"row {i} has {len(row)} entries, expected {cols}")
        return cls._wrap(np.array(items, dtype=np.float64).reshape(rows, cols))

    @classmethod
    def from_columns(cls, columns: Sequence[Vector]) -> Matrix:
        """Build a matrix whose columns are the given vectors."""
        if not columns:
            raise InvalidArgument("matrix requires at least one column")
        height = columns[0].size
        for j, col in enumerate(columns):
            if col.size != height:
                raise DimensionMismatch(
                    f"all columns must have the same size: column 0 has {height}, "
                    f"column {j} has {col.size}")
        return cls._wrap(np.column_stack([col.to_numpy() for col in columns]))

    @classmethod
    def diagonal(cls, values: Vector | Iterable[float]) -> Matrix:
        """Square matrix with ``values`` on the diagonal and zeros elsewhere."""
        if isinstance(values, Vector):
            diag = values.to_numpy()
        else:
            diag = np.array(list(values), dtype=np.float64)
        return cls._wrap(np.diag(diag))

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def copy(self) -> Matrix:
        return Matrix._wrap(self._data.copy())

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------
    def _resolve(self, index: tuple[int, int]) -> tuple[int, int]:
        try:
            i, j = index
        except (TypeError, ValueError):
            raise TypeError("matrix indices must be a (row, col) pair") from None
        i = operator.index(i)
        j = operator.index(j)
        ri = i + self.rows if i < 0 else i
        rj = j + self.cols if j < 0 else j
        if not (0 <= ri < self.rows and 0 <= rj < self.cols):
            raise IndexOutOfBounds(
                f"index ({i}, {j}) out of bounds for {self.rows}x{self.cols} matrix")
        return ri, rj

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self._data[self._resolve(index)])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        self._data[self._resolve(index)] = float(value)

    def row(self, i: int) -> Vector:
        ri = operator.index(i)
        if ri < 0:
            ri += self.rows
        if not 0 <= ri < self.rows:
            raise IndexOutOfBounds(f"row index {i} out of bounds for {self.rows} rows")
        return Vector._wrap(self._data[ri, :].copy(), ROW)

    def column(self, j: int) -> Vector:
        return Vector._wrap(self._data[:, self.column_index(j)].copy(), COLUMN)

    def columns(self, count: int) -> Matrix:
        """Return a new matrix made of the first ``count`` columns."""
        if count < 0 or count > self.cols:
            raise IndexOutOfBounds(
                f"cannot take {count} columns from a matrix with {self.cols} columns")
        return Matrix._wrap(self._data[:, :count].copy())

    def select_columns(self, indices: Sequence[int]) -> Matrix:
        """Return a new matrix made of the given columns, in the given order."""
        idx = [self.column_index(j) for j in indices]
        return Matrix._wrap(self._data[:, idx].reshape(self.rows, len(idx)))

    def column_index(self, j: int) -> int:
        rj = operator.index(j)
        if rj < 0:
            rj += self.cols
        if not 0 <= rj < self.cols:
            raise IndexOutOfBounds(f"column index {j} out of bounds for {self.cols} columns")
        return rj

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------
    def transpose(self) -> Matrix:
        return Matrix._wrap(self._data.T.copy())

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def matmul(self, other: Matrix) -> Matrix:
        """Matrix-matrix product ``self @ other``."""
        if self.cols != other.rows:
            raise DimensionMismatch(
                "matrix dimensions don't match for multiplication: "
                f"{self.rows}x{self.cols} * {other.rows}x{other.cols}")
        return Matrix._wrap(self._data @ other._data)

    def matvec(self, vector: Vector) -> Vector:
        """Matrix-vector product ``self @ vector``."""
        if self.cols != vector.size:
            raise DimensionMismatch(
                f"matrix columns ({self.cols}) must match vector size ({vector.size})")
        return Vector._wrap(self._data @ vector._data, ROW)

    def scale(self, scalar: float) -> Matrix:
        return Matrix._wrap(self._data * float(scalar))

    def multiply(self, other: Matrix | Vector | float):
        """Multiply by a matrix, a vector or a scalar."""
        if isinstance(other, Matrix):
            return self.matmul(other)
        if isinstance(other, Vector):
            return self.matvec(other)
        if isinstance(other, numbers.Real):
            return self.scale(other)
        raise TypeError(f"cannot multiply Matrix with {type(other).__name__}")

    def __mul__(self, other):
        if isinstance(other, (Matrix, Vector, numbers.Real)):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Real):
            return self.scale(other)
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, Matrix):
            return self.matmul(other)
        if isinstance(other, Vector):
            return self.matvec(other)
        return NotImplemented

    def extend_column(self, vector: Vector) -> Matrix:
        """Return ``[self | vector]`` with one extra column on the right."""
        if vector.size != self.rows:
            raise DimensionMismatch(
                f"matrix rows ({self.rows}) must match vector size ({vector.size})")
        return Matrix._wrap(np.hstack((self._data, vector._data[:, None])))

    def vstack(self, other: Matrix) -> Matrix:
        """Return ``[self; other]`` with the rows of ``other`` below ``self``."""
        if self.cols != other.cols:
            raise DimensionMismatch(
                f"matrices must have same column count: {self.cols} vs {other.cols}")
        return Matrix._wrap(np.vstack((self._data, other._data)))

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------
    def to_list(self) -> list[list[float]]:
        return self._data.tolist()

    def to_sequence(self) -> list[list[float]]:
        """Rows followed by the shape, e.g. ``[[1.0, 2.0], [1, 2]]``."""
        return self.to_list() + [[self.rows, self.cols]]

    def to_numpy(self) -> np.ndarray:
        """Return a copy of the entries as a ``(rows, cols)`` NumPy array."""
        return self._data.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Matrix.from_rows({self.to_list()!r})"
