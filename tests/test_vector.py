"""Tests for the dense Vector type."""

from __future__ import annotations

import numpy as np
import pytest

from lsisvd.errors import DimensionMismatch, IndexOutOfBounds, InvalidArgument
from lsisvd.vector import COLUMN, ROW, Vector


def test_alloc_with_size_is_zero_filled() -> None:
    """Checks allocation by size yields zeros."""
    v = Vector.alloc(5)
    assert v.size == 5
    assert len(v) == 5
    assert v.to_list() == [0.0] * 5
    assert v.orientation == ROW


def test_alloc_with_values() -> None:
    """Checks allocation from a literal sequence."""
    v = Vector([1.0, 2.0, 3.0])
    assert v.size == 3
    assert v.to_list() == [1.0, 2.0, 3.0]


def test_negative_size_rejected() -> None:
    with pytest.raises(InvalidArgument):
        Vector(-1)


def test_unknown_orientation_rejected() -> None:
    with pytest.raises(InvalidArgument):
        Vector([1.0], orientation="diagonal")


def test_element_access_with_negative_indices() -> None:
    """Checks indexed get/set and wraparound from the end."""
    v = Vector(3)
    v[0] = 1.0
    v[1] = 2.0
    v[-1] = 3.0
    assert v[2] == 3.0
    assert v[-3] == 1.0
    assert v.to_list() == [1.0, 2.0, 3.0]


@pytest.mark.parametrize("index", [3, -4, 100])
def test_out_of_bounds_index(index: int) -> None:
    v = Vector([1.0, 2.0, 3.0])
    with pytest.raises(IndexOutOfBounds):
        v[index]
    with pytest.raises(IndexOutOfBounds):
        v[index] = 0.0


def test_out_of_bounds_is_an_index_error() -> None:
    with pytest.raises(IndexError):
        Vector(2)[2]


def test_magnitude_and_sum() -> None:
    v = Vector([3.0, 4.0])
    assert v.magnitude() == pytest.approx(5.0)
    assert Vector([1.0, 2.0, 3.0, 4.0]).sum() == pytest.approx(10.0)


def test_normalize() -> None:
    n = Vector([3.0, 4.0]).normalize()
    assert n[0] == pytest.approx(0.6)
    assert n[1] == pytest.approx(0.8)


def test_normalize_random_vectors_have_unit_length() -> None:
    """Checks ||normalize(v)|| == 1 for non-degenerate vectors."""
    rng = np.random.default_rng(0)
    for _ in range(20):
        v = Vector(rng.normal(size=7))
        assert v.normalize().magnitude() == pytest.approx(1.0, abs=1e-9)


def test_normalize_zero_and_tiny_vectors_unchanged() -> None:
    """Checks vectors at or below the epsilon magnitude are returned as-is."""
    zero = Vector([0.0, 0.0, 0.0])
    assert zero.normalize().to_list() == [0.0, 0.0, 0.0]

    tiny = Vector([1e-12, 0.0], orientation=COLUMN)
    out = tiny.normalize()
    assert out.to_list() == [1e-12, 0.0]
    assert out.orientation == COLUMN
    assert out is not tiny


def test_dot_product() -> None:
    v1 = Vector([1.0, 2.0, 3.0])
    v2 = Vector([4.0, 5.0, 6.0])
    assert v1.dot(v2) == pytest.approx(32.0)
    assert v1 * v2 == pytest.approx(32.0)


def test_dot_size_mismatch_names_both_sizes() -> None:
    """Checks DimensionMismatch for sizes 3 and 4."""
    with pytest.raises(DimensionMismatch) as excinfo:
        Vector([1.0, 2.0, 3.0]).dot(Vector([1.0, 2.0, 3.0, 4.0]))
    assert "3" in str(excinfo.value)
    assert "4" in str(excinfo.value)


def test_subtract() -> None:
    a = Vector([5.0, 7.0, 9.0])
    b = Vector([1.0, 2.0, 3.0])
    assert (a - b).to_list() == [4.0, 5.0, 6.0]
    assert a.subtract(b).to_list() == [4.0, 5.0, 6.0]
    # inputs untouched
    assert a.to_list() == [5.0, 7.0, 9.0]
    with pytest.raises(DimensionMismatch):
        a - Vector([1.0])


def test_scale() -> None:
    v = Vector([1.0, -2.0], orientation=COLUMN)
    assert v.scale(2.0).to_list() == [2.0, -4.0]
    assert (v * 3).to_list() == [3.0, -6.0]
    assert (0.5 * v).to_list() == [0.5, -1.0]
    assert v.scale(2.0).orientation == COLUMN


def test_map_preserves_orientation() -> None:
    v = Vector([1.0, 2.0, 3.0], orientation=COLUMN)
    doubled = v.map(lambda x: x * 2)
    assert doubled.to_list() == [2.0, 4.0, 6.0]
    assert doubled.orientation == COLUMN
    assert v.to_list() == [1.0, 2.0, 3.0]


def test_each_and_iteration() -> None:
    v = Vector([1.0, 2.0, 3.0])
    seen: list[float] = []
    v.each(seen.append)
    assert seen == [1.0, 2.0, 3.0]
    assert list(v) == [1.0, 2.0, 3.0]


def test_row_and_col_copies() -> None:
    v = Vector([1.0, 2.0])
    col = v.col()
    row = col.row()
    assert col.is_column
    assert not row.is_column
    assert row.to_list() == [1.0, 2.0]
    col[0] = 9.0
    assert v[0] == 1.0


def test_head() -> None:
    v = Vector([1.0, 2.0, 3.0])
    assert v.head(2).to_list() == [1.0, 2.0]
    with pytest.raises(IndexOutOfBounds):
        v.head(4)


def test_sequence_form_ends_with_column_flag() -> None:
    assert Vector([1.0, 2.0], orientation=COLUMN).to_sequence() == [1.0, 2.0, True]
    assert Vector([1.0, 2.0]).to_sequence() == [1.0, 2.0, False]


@pytest.mark.parametrize("orientation", [ROW, COLUMN])
def test_sequence_round_trip_keeps_orientation(orientation: str) -> None:
    """Checks from_sequence(to_sequence(v)) restores values and orientation."""
    v = Vector([0.1, 0.2, 0.3], orientation=orientation)
    restored = Vector.from_sequence(v.to_sequence())
    assert restored == v
    assert restored.orientation == orientation


def test_empty_vector_sequence_round_trip() -> None:
    restored = Vector.from_sequence(Vector(0, orientation=COLUMN).to_sequence())
    assert restored.size == 0
    assert restored.is_column


def test_from_sequence_requires_column_flag() -> None:
    with pytest.raises(InvalidArgument):
        Vector.from_sequence([])


def test_numpy_export_is_a_copy() -> None:
    v = Vector([1.0, 2.0])
    arr = v.to_numpy()
    arr[0] = 42.0
    assert v[0] == 1.0


def test_values_are_copied_on_construction() -> None:
    source = np.array([1.0, 2.0])
    v = Vector(source)
    source[0] = 99.0
    assert v[0] == 1.0
