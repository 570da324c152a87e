"""Incremental SVD updates for a growing term-document matrix.

This module implements Brand's rank-adaptive update of a thin left
factorisation.  Given the current approximation of the term-document matrix

    A ≈ U @ diag(S) @ V.T,

where ``U`` is ``m × k`` with orthonormal columns, and a new document column
``c`` of size ``m``, :func:`incremental_update` computes the factors of
``[A | c]`` in the subspace spanned by ``U`` and (optionally) one new
orthogonal direction.  The update works on a ``(k+1) × (k+1)`` matrix only,
so the cost is ``O(m k^2)`` when ``m >> k``.  The right factor ``V`` is not
tracked; callers keep per-document coordinates through :func:`project` and
:func:`batch_project` instead.

All functions are pure: ``U`` and ``S`` are owned by the caller and passed in
on every call, and fresh matrices are returned.

Example
-------

```python
from lsisvd import Matrix, Vector
from lsisvd.incremental_svd import incremental_update, batch_project

U = Matrix.from_rows([[1.0], [0.0], [0.0]])
S = Vector([1.0])
c = Vector([0.0, 1.0, 0.0], orientation="column")

U_new, S_new = incremental_update(U, S, c, max_rank=5, epsilon=1e-6)
lsi_vectors = batch_project(U_new, [c])
```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .errors import DimensionMismatch, InvalidArgument
from .jacobi import decompose
from .matrix import Matrix
from .vector import EPSILON, Vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of one incremental update.

    Attributes
    ----------
    U : Matrix
        Updated left singular vectors.
    S : Vector
        Updated singular values (Jacobi order, not sorted).
    projection : Vector
        ``U_old.T @ c``, the LSI coordinates of the new document in the old
        basis.
    residual_norm : float
        Norm of the component of ``c`` orthogonal to ``U_old``.
    grew : bool
        Whether a new direction was appended (before any truncation).
    truncated : bool
        Whether columns were dropped to honour ``max_rank``.
    """

    U: Matrix
    S: Vector
    projection: Vector
    residual_norm: float
    grew: bool
    truncated: bool

    @property
    def rank(self) -> int:
        return self.U.cols


def project(U: Matrix, raw_vector: Vector) -> Vector:
    """Project a term-space vector onto the semantic space, ``U.T @ raw_vector``.

    Parameters
    ----------
    U : Matrix of shape (m, k)
        Left singular vectors.
    raw_vector : Vector of shape (m,)
        Document vector in term space.

    Returns
    -------
    lsi_vector : Vector of shape (k,)
        Row-oriented LSI coordinates.
    """
    if raw_vector.size != U.rows:
        raise DimensionMismatch(
            f"vector size ({raw_vector.size}) must match matrix rows ({U.rows})")
    return U.transpose().matvec(raw_vector).row()


def batch_project(U: Matrix, raw_vectors: Sequence[Vector]) -> list[Vector]:
    """Project many term-space vectors at once.

    Parameters
    ----------
    U : Matrix of shape (m, k)
        Left singular vectors.
    raw_vectors : sequence of Vector
        Document vectors of size ``m``.

    Returns
    -------
    lsi_vectors : list of Vector
        ``U.T @ r`` for every ``r``, in input order.

    Raises
    ------
    DimensionMismatch
        If any vector's size differs from ``U.rows``; nothing is returned in
        that case.
    """
    m = U.rows
    for i, raw in enumerate(raw_vectors):
        if raw.size != m:
            raise DimensionMismatch(
                f"vector {i} size ({raw.size}) must match matrix rows ({m})")
    if not raw_vectors:
        return []
    Ut = U.transpose()
    return [Ut.matvec(raw).row() for raw in raw_vectors]


def build_k_matrix(S: Vector, m_vec: Vector, p_norm: float) -> Matrix:
    """Bordered matrix used when the rank grows by one.

    ::

        K = | diag(S)  m_vec  |
            |   0      p_norm |
    """
    k = S.size
    K = Matrix(k + 1, k + 1)
    for i in range(k):
        K[i, i] = S[i]
        K[i, k] = m_vec[i]
    K[k, k] = p_norm
    return K


def _validate(U: Matrix, S: Vector, c: Vector, max_rank: int) -> None:
    if c.size != U.rows:
        raise DimensionMismatch(
            f"new vector size ({c.size}) must match matrix rows ({U.rows})")
    if S.size != U.cols:
        raise DimensionMismatch(
            f"singular value count ({S.size}) must match matrix columns ({U.cols})")
    if max_rank < 1:
        raise InvalidArgument(f"max_rank must be at least 1, got {max_rank}")


def update_details(U: Matrix,
                   S: Vector,
                   c: Vector,
                   max_rank: int,
                   epsilon: float = EPSILON) -> UpdateResult:
    """Brand update of ``(U, S)`` with a new column, with diagnostics.

    See :func:`incremental_update` for the algorithm; this variant also
    reports the projection of ``c`` and whether the rank changed.
    """
    _validate(U, S, c, max_rank)
    k = U.cols

    # Project c onto the column space of U
    m_vec = U.transpose().matvec(c)

    # Component orthogonal to U
    p = c.subtract(U.matvec(m_vec))
    p_norm = p.magnitude()

    # Case B: c lies (numerically) in span(U); its contribution is fully
    # captured by m_vec, which the caller stores as the document's coordinates
    if p_norm <= epsilon:
        return UpdateResult(U=U.copy(), S=S.copy(), projection=m_vec.row(),
                            residual_norm=p_norm, grew=False, truncated=False)

    # Case A: a genuinely new direction is present
    p_hat = p.scale(1.0 / p_norm) if p_norm > 0.0 else p.copy()
    K = build_k_matrix(S, m_vec, p_norm)

    # SVD of the small K gives the rotation of the extended basis
    U_k, _, S_k = decompose(K)

    U_new = U.extend_column(p_hat).matmul(U_k)  # shape (m, k+1)
    S_new = S_k

    # Keep the leading columns as produced by the solve, without re-sorting
    truncated = False
    if S_new.size > max_rank:
        U_new = U_new.columns(max_rank)
        S_new = S_new.head(max_rank)
        truncated = True
        logger.debug("truncated rank %d -> %d", k + 1, max_rank)

    return UpdateResult(U=U_new, S=S_new,
                        projection=m_vec.row(), residual_norm=p_norm,
                        grew=True, truncated=truncated)


def incremental_update(U: Matrix,
                       S: Vector,
                       c: Vector,
                       max_rank: int,
                       epsilon: float = EPSILON) -> tuple[Matrix, Vector]:
    """Add one document column to a thin SVD using Brand's algorithm.

    Parameters
    ----------
    U : Matrix of shape (m, k)
        Current left singular vectors (orthonormal columns).
    S : Vector of shape (k,)
        Current singular values.
    c : Vector of shape (m,)
        New document vector.
    max_rank : int
        Maximum number of components to keep.
    epsilon : float, optional
        Residual norms at or below this value mean ``c`` already lies in the
        span of ``U``.  Negative values always take the growth path.

    Returns
    -------
    U_new : Matrix of shape (m, k')
        Updated left singular vectors, ``k' = min(k+1, max_rank)`` when a new
        direction was found, otherwise ``k``.
    S_new : Vector of shape (k',)
        Updated singular values in the order the Jacobi solve produced them.

    Notes
    -----
    Truncation keeps the first ``max_rank`` columns of the solve rather than
    the largest singular values, so a large new value can be dropped when it
    lands in the last position.

    Raises
    ------
    DimensionMismatch
        If ``c.size != U.rows`` or ``S.size != U.cols``.
    InvalidArgument
        If ``max_rank < 1``.
    """
    result = update_details(U, S, c, max_rank, epsilon)
    return result.U, result.S
