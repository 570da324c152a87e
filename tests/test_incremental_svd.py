"""Tests for Brand's incremental update and document projection."""

from __future__ import annotations

import numpy as np
import pytest

from lsisvd.errors import DimensionMismatch, InvalidArgument
from lsisvd.incremental_svd import (
    batch_project,
    build_k_matrix,
    incremental_update,
    project,
    update_details,
)
from lsisvd.matrix import Matrix
from lsisvd.metrics import orth_error
from lsisvd.vector import COLUMN, ROW, Vector


def _col(values: list[float]) -> Vector:
    return Vector(values, orientation=COLUMN)


def test_rank_grows_with_orthogonal_vector() -> None:
    """Checks U = [e1], S = [1] plus c = e2 gives two components."""
    U = Matrix.from_rows([[1.0], [0.0], [0.0]])
    S = Vector([1.0])
    c = _col([0.0, 1.0, 0.0])

    U_new, S_new = incremental_update(U, S, c, max_rank=5, epsilon=1e-6)

    assert U_new.shape == (3, 2)
    assert S_new.size == 2
    assert np.allclose(S_new.to_list(), [1.0, 1.0])
    assert orth_error(U_new) < 1e-9
    # c now lies in the span of the new basis
    u = U_new.to_numpy()
    assert np.allclose(u @ (u.T @ c.to_numpy()), c.to_numpy())


def test_rank_capped_at_max_rank() -> None:
    U = Matrix.from_rows([[1.0], [0.0], [0.0]])
    S = Vector([1.0])
    c = _col([0.0, 1.0, 0.0])

    result = update_details(U, S, c, max_rank=1, epsilon=1e-6)

    assert result.U.cols == 1
    assert result.S.size == 1
    assert result.rank == 1
    assert result.grew
    assert result.truncated


def test_vector_in_span_leaves_factors_unchanged() -> None:
    """Checks that c = U U^T x returns copies of U and S."""
    U = Matrix.from_rows([[1.0, 0.0], [0.0, 1.0], [0.0, 0.0]])
    S = Vector([2.0, 1.0])
    c = _col([0.6, 0.8, 0.0])

    result = update_details(U, S, c, max_rank=5, epsilon=1e-6)

    assert result.U == U
    assert result.S == S
    assert result.U is not U
    assert result.S is not S
    assert not result.grew
    assert not result.truncated
    assert result.residual_norm == pytest.approx(0.0)
    assert result.projection.to_list() == pytest.approx([0.6, 0.8])
    assert result.projection.orientation == ROW


def test_update_does_not_modify_inputs() -> None:
    U = Matrix.from_rows([[1.0], [0.0], [0.0]])
    S = Vector([1.0])
    c = _col([0.0, 1.0, 1.0])

    incremental_update(U, S, c, max_rank=5)

    assert U.to_list() == [[1.0], [0.0], [0.0]]
    assert S.to_list() == [1.0]
    assert c.to_list() == [0.0, 1.0, 1.0]


def test_truncation_keeps_leading_columns_unsorted() -> None:
    """Checks a large new value in the last position is dropped by the cap."""
    U = Matrix.from_rows([[1.0, 0.0], [0.0, 1.0], [0.0, 0.0]])
    S = Vector([1.0, 0.5])
    c = _col([0.0, 0.0, 3.0])

    U_full, S_full = incremental_update(U, S, c, max_rank=3)
    assert np.allclose(S_full.to_list(), [1.0, 0.5, 3.0])
    assert np.allclose(U_full.to_numpy(), np.eye(3))

    U_cut, S_cut = incremental_update(U, S, c, max_rank=2)
    assert np.allclose(S_cut.to_list(), [1.0, 0.5])
    assert np.allclose(U_cut.to_numpy(), [[1.0, 0.0], [0.0, 1.0], [0.0, 0.0]])


def test_singular_values_match_full_factorization() -> None:
    """Checks the updated spectrum equals the SVD of [A | c]."""
    rng = np.random.default_rng(7)
    A = rng.normal(size=(8, 3))
    c = rng.normal(size=8)
    u0, s0, _ = np.linalg.svd(A, full_matrices=False)

    U0 = Matrix.from_rows(u0.tolist())
    U_new, S_new = incremental_update(U0, Vector(s0), _col(c.tolist()), max_rank=10)

    expected = np.linalg.svd(np.column_stack([A, c]), compute_uv=False)
    assert U_new.shape == (8, 4)
    assert np.allclose(sorted(S_new.to_list(), reverse=True), expected, atol=1e-3)
    assert orth_error(U_new) < 1e-2


def test_first_update_from_empty_basis() -> None:
    U = Matrix(2, 0)
    S = Vector(0)
    c = _col([3.0, 4.0])

    U_new, S_new = incremental_update(U, S, c, max_rank=3)

    assert U_new.shape == (2, 1)
    assert S_new.to_list() == pytest.approx([5.0])
    assert np.allclose(U_new.to_numpy().ravel(), [0.6, 0.8])


def test_non_positive_epsilon_always_grows() -> None:
    U = Matrix.from_rows([[1.0], [0.0]])
    S = Vector([2.0])
    c = _col([1.0, 0.0])

    result = update_details(U, S, c, max_rank=5, epsilon=-1.0)

    assert result.grew
    assert result.U.cols == 2
    assert result.S.size == 2


def test_update_dimension_errors() -> None:
    U = Matrix.from_rows([[1.0], [0.0], [0.0]])
    S = Vector([1.0])
    with pytest.raises(DimensionMismatch):
        incremental_update(U, S, _col([1.0, 0.0]), max_rank=2)
    with pytest.raises(DimensionMismatch):
        incremental_update(U, Vector([1.0, 2.0]), _col([1.0, 0.0, 0.0]), max_rank=2)


@pytest.mark.parametrize("max_rank", [0, -3])
def test_update_rejects_non_positive_max_rank(max_rank: int) -> None:
    U = Matrix.from_rows([[1.0], [0.0], [0.0]])
    with pytest.raises(InvalidArgument):
        incremental_update(U, Vector([1.0]), _col([0.0, 1.0, 0.0]), max_rank=max_rank)


def test_build_k_matrix() -> None:
    K = build_k_matrix(Vector([3.0, 2.0]), Vector([0.5, -1.0]), 4.0)
    assert K.to_list() == [[3.0, 0.0, 0.5],
                           [0.0, 2.0, -1.0],
                           [0.0, 0.0, 4.0]]


def test_project() -> None:
    U = Matrix.from_rows([[1.0, 0.0], [0.0, 1.0], [0.0, 0.0]])
    out = project(U, _col([2.0, 3.0, 4.0]))
    assert out.to_list() == [2.0, 3.0]
    assert out.orientation == ROW
    with pytest.raises(DimensionMismatch):
        project(U, _col([1.0, 2.0]))


def test_batch_project_with_identity_returns_inputs() -> None:
    U = Matrix.identity(3)
    docs = [_col([1.0, 2.0, 3.0]), _col([-1.0, 0.0, 0.5])]
    out = batch_project(U, docs)
    assert len(out) == 2
    assert [v.to_list() for v in out] == [d.to_list() for d in docs]
    assert all(v.orientation == ROW for v in out)


def test_batch_project_empty_input() -> None:
    assert batch_project(Matrix.identity(2), []) == []


def test_batch_project_mismatch_anywhere_fails_whole_batch() -> None:
    U = Matrix.identity(3)
    docs = [_col([1.0, 2.0, 3.0]), _col([1.0, 2.0])]
    with pytest.raises(DimensionMismatch) as excinfo:
        batch_project(U, docs)
    assert "vector 1" in str(excinfo.value)
