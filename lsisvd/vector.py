"""Dense real vectors with an orientation tag.

A :class:`Vector` owns a private, contiguous ``float64`` NumPy buffer.  Every
operation that produces a vector allocates a new buffer; the only in-place
mutation is indexed assignment (``v[i] = x``).  The orientation (``"row"`` or
``"column"``) is carried for readability of the calling code and is never
checked by arithmetic.

Example
-------

```python
from lsisvd.vector import Vector

v = Vector([3.0, 4.0])
v.magnitude()          # 5.0
v.normalize().to_list()  # [0.6, 0.8]
```
"""

from __future__ import annotations

import numbers
import operator
from typing import Callable, Iterable, Iterator

import numpy as np

from .errors import DimensionMismatch, IndexOutOfBounds, InvalidArgument

# Numerical threshold shared by normalisation and the SVD routines
EPSILON = 1e-10

ROW = "row"
COLUMN = "column"
ORIENTATIONS = (ROW, COLUMN)


def _check_orientation(orientation: str) -> str:
    if orientation not in ORIENTATIONS:
        raise InvalidArgument(
            f"orientation must be one of {ORIENTATIONS}, got {orientation!r}")
    return orientation


class Vector:
    """Fixed-length dense vector of real numbers.

    Parameters
    ----------
    size_or_values : int or iterable of float, optional
        Either the length of a zero-filled vector or the literal values.
    orientation : {"row", "column"}, optional
        Semantic orientation tag.  Defaults to ``"row"``.
    """

    __slots__ = ("_data", "_orientation")

    def __init__(self,
                 size_or_values: int | Iterable[float] = 0,
                 orientation: str = ROW) -> None:
        self._orientation = _check_orientation(orientation)
        if isinstance(size_or_values, numbers.Integral):
            size = int(size_or_values)
            if size < 0:
                raise InvalidArgument(f"vector size must be non-negative, got {size}")
            self._data = np.zeros(size, dtype=np.float64)
        else:
            if not isinstance(size_or_values, np.ndarray):
                size_or_values = list(size_or_values)
            data = np.array(size_or_values, dtype=np.float64)
            if data.ndim != 1:
                raise InvalidArgument(
                    f"vector values must be one-dimensional, got shape {data.shape}")
            self._data = data

    @classmethod
    def alloc(cls, size_or_values: int | Iterable[float], orientation: str = ROW) -> Vector:
        """Allocate a zero vector of a given size or a vector of literal values."""
        return cls(size_or_values, orientation)

    @classmethod
    def from_sequence(cls, sequence: Iterable[float | bool]) -> Vector:
        """Rebuild a vector from the output of :meth:`to_sequence`.

        The last item is the column flag; the items before it are the values.
        """
        items = list(sequence)
        if not items:
            raise InvalidArgument("vector sequence must end with a column flag")
        is_column = items.pop()
        return cls(items, COLUMN if is_column else ROW)

    @classmethod
    def _wrap(cls, data: np.ndarray, orientation: str = ROW) -> Vector:
        # Takes ownership of a freshly allocated buffer without copying
        vec = cls.__new__(cls)
        vec._data = np.ascontiguousarray(data, dtype=np.float64)
        vec._orientation = orientation
        return vec

    # ------------------------------------------------------------------
    # Shape and orientation
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return int(self._data.shape[0])

    @property
    def orientation(self) -> str:
        return self._orientation

    @property
    def is_column(self) -> bool:
        return self._orientation == COLUMN

    def row(self) -> Vector:
        """Return a row-oriented copy."""
        return Vector._wrap(self._data.copy(), ROW)

    def col(self) -> Vector:
        """Return a column-oriented copy."""
        return Vector._wrap(self._data.copy(), COLUMN)

    def copy(self) -> Vector:
        return Vector._wrap(self._data.copy(), self._orientation)

    def __len__(self) -> int:
        return self.size

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------
    def _resolve(self, index: int) -> int:
        i = operator.index(index)
        if i < 0:
            i += self.size
        if i < 0 or i >= self.size:
            raise IndexOutOfBounds(
                f"index {operator.index(index)} out of bounds for vector of size {self.size}")
        return i

    def __getitem__(self, index: int) -> float:
        return float(self._data[self._resolve(index)])

    def __setitem__(self, index: int, value: float) -> None:
        self._data[self._resolve(index)] = float(value)

    def __iter__(self) -> Iterator[float]:
        for value in self._data.tolist():
            yield value

    def head(self, count: int) -> Vector:
        """Return a new vector with the first ``count`` entries."""
        if count < 0 or count > self.size:
            raise IndexOutOfBounds(
                f"cannot take {count} entries from vector of size {self.size}")
        return Vector._wrap(self._data[:count].copy(), self._orientation)

    # ------------------------------------------------------------------
    # Reductions
    # ------------------------------------------------------------------
    def magnitude(self) -> float:
        """Euclidean norm."""
        return float(np.sqrt(np.dot(self._data, self._data)))

    def normalize(self) -> Vector:
        """Return a unit vector in the same direction.

        Vectors with magnitude at or below :data:`EPSILON` are returned as an
        unchanged copy instead of being divided by a near-zero norm.
        """
        mag = self.magnitude()
        if mag <= EPSILON:
            return self.copy()
        return Vector._wrap(self._data / mag, self._orientation)

    def sum(self) -> float:
        return float(np.sum(self._data))

    def dot(self, other: Vector) -> float:
        self._check_same_size(other, "dot product")
        return float(np.dot(self._data, other._data))

    # ------------------------------------------------------------------
    # Element-wise arithmetic
    # ------------------------------------------------------------------
    def subtract(self, other: Vector) -> Vector:
        self._check_same_size(other, "subtraction")
        return Vector._wrap(self._data - other._data, self._orientation)

    def scale(self, scalar: float) -> Vector:
        return Vector._wrap(self._data * float(scalar), self._orientation)

    def map(self, func: Callable[[float], float]) -> Vector:
        """Apply ``func`` to every element, returning a new vector."""
        return Vector._wrap(np.array([func(x) for x in self], dtype=np.float64),
                            self._orientation)

    def each(self, func: Callable[[float], object]) -> None:
        """Call ``func`` on every element in order."""
        for value in self:
            func(value)

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other):
        if isinstance(other, Vector):
            return self.dot(other)
        if isinstance(other, numbers.Real):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Real):
            return self.scale(other)
        return NotImplemented

    def _check_same_size(self, other: Vector, what: str) -> None:
        if not isinstance(other, Vector):
            raise TypeError(f"expected Vector, got {type(other).__name__}")
        if self.size != other.size:
            raise DimensionMismatch(
                f"vector sizes must match for {what}: {self.size} vs {other.size}")

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------
    def to_list(self) -> list[float]:
        return self._data.tolist()

    def to_sequence(self) -> list[float | bool]:
        """Values followed by the column flag, e.g. ``[1.0, 2.0, True]``."""
        return self.to_list() + [self.is_column]

    def to_numpy(self) -> np.ndarray:
        """Return a copy of the values as a NumPy array."""
        return self._data.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Vector({self.to_list()!r}, orientation={self._orientation!r})"
