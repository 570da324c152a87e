"""One-sided Jacobi singular value decomposition.

The solver factorises a dense matrix ``A`` (``m × n``) as

    A ≈ U @ diag(S) @ V.T

by diagonalising the smaller Gram matrix (``A.T @ A`` when ``m >= n``,
otherwise ``A @ A.T``) with cyclic sweeps of 2×2 plane rotations.  The
accumulated rotations form ``V``, the square roots of the resulting diagonal
are the singular values, and ``U`` is recovered as ``source @ V @ diag(1/S)``
where ``source`` is ``A`` (or ``A.T`` on the wide branch).

The routine is meant for the small ``(k+1) × (k+1)`` matrices that appear in
Brand's incremental update and for moderate term-document matrices; it is
not a general-purpose eigen-solver.  Singular values are returned in the
order the sweeps leave them on the diagonal, which is generally *not*
sorted.

Numerical degeneracy never raises: negative diagonal drift is clamped to
zero, and singular values at or below ``EPSILON`` yield zero columns in
``U``.

Example
-------

```python
from lsisvd.jacobi import decompose
from lsisvd.matrix import Matrix

A = Matrix.from_rows([[3.0, 1.0], [1.0, 3.0], [0.0, 1.0]])
U, V, S = decompose(A)
```
"""

from __future__ import annotations

import logging
import math

import numpy as np

from .errors import InvalidArgument
from .matrix import Matrix
from .vector import EPSILON, Vector

logger = logging.getLogger(__name__)

MAX_SWEEPS = 20
CONVERGENCE_THRESHOLD = 0.001


def rotation_angle(q_pp: float, q_rr: float, q_pr: float) -> float:
    """Angle of the plane rotation that zeroes ``Q[p, r]``.

    Falls back to ``±π/4`` (sign of the off-diagonal entry) when the two
    diagonal entries are within :data:`EPSILON` of each other.
    """
    numerator = 2.0 * q_pr
    denominator = q_pp - q_rr
    if abs(denominator) < EPSILON:
        return math.pi / 4.0 if numerator >= 0 else -math.pi / 4.0
    return math.atan(numerator / denominator) / 2.0


def _rotate(Q: np.ndarray, V: np.ndarray, p: int, r: int, cosine: float, sine: float) -> None:
    # Q <- R^T Q R and V <- V R, R = [[c, -s], [s, c]] on the (p, r) plane
    col_p = Q[:, p].copy()
    col_r = Q[:, r].copy()
    Q[:, p] = cosine * col_p + sine * col_r
    Q[:, r] = -sine * col_p + cosine * col_r

    row_p = Q[p, :].copy()
    row_r = Q[r, :].copy()
    Q[p, :] = cosine * row_p + sine * row_r
    Q[r, :] = -sine * row_p + cosine * row_r

    v_p = V[:, p].copy()
    v_r = V[:, r].copy()
    V[:, p] = cosine * v_p + sine * v_r
    V[:, r] = -sine * v_p + cosine * v_r


def decompose(A: Matrix,
              max_sweeps: int = MAX_SWEEPS,
              convergence_threshold: float = CONVERGENCE_THRESHOLD) -> tuple[Matrix, Matrix, Vector]:
    """Compute ``A ≈ U @ diag(S) @ V.T`` with the one-sided Jacobi method.

    Parameters
    ----------
    A : Matrix of shape (m, n)
        Matrix to factorise.  It is not modified.
    max_sweeps : int, optional
        Upper bound on the number of cyclic sweeps (default 20).
    convergence_threshold : float, optional
        Sweeps stop once the summed change of the Gram diagonal between two
        consecutive sweeps (ignoring per-entry changes at or below the same
        threshold) falls to this value or below.

    Returns
    -------
    U : Matrix
        ``m × n`` when ``m >= n``; on the wide branch (``m < n``) it is
        ``n × m`` and ``U @ diag(S) @ V.T`` reconstructs ``A.T``.
    V : Matrix
        Orthogonal ``g × g`` accumulation of the rotations, with
        ``g = min(m, n)``.
    S : Vector of shape (g,)
        Non-negative singular values in diagonal order (not sorted).

    Raises
    ------
    InvalidArgument
        If ``A`` has no rows or no columns, or ``max_sweeps < 1``.
    """
    m, n = A.shape
    if m == 0 or n == 0:
        raise InvalidArgument(f"cannot decompose an empty {m}x{n} matrix")
    if max_sweeps < 1:
        raise InvalidArgument(f"max_sweeps must be at least 1, got {max_sweeps}")

    a = A.to_numpy()
    transposed = m < n
    # Factorise the smaller Gram matrix
    G = a @ a.T if transposed else a.T @ a
    size = G.shape[0]

    Q = G.copy()
    V = np.eye(size, dtype=np.float64)
    prev_diag: np.ndarray | None = None
    sweeps = 0

    for sweep in range(max_sweeps):
        sweeps = sweep + 1
        for p in range(size - 1):
            for r in range(p + 1, size):
                angle = rotation_angle(Q[p, p], Q[r, r], Q[p, r])
                _rotate(Q, V, p, r, math.cos(angle), math.sin(angle))

        diag = np.diag(Q).copy()
        if prev_diag is None:
            prev_diag = diag
            continue
        diff = np.abs(diag - prev_diag)
        # Per-entry filter and global stop share the threshold
        sum_diff = float(np.sum(diff[diff > convergence_threshold]))
        prev_diag = diag
        if sum_diff <= convergence_threshold:
            break

    logger.debug("jacobi svd of %dx%d matrix finished after %d sweep(s)", m, n, sweeps)

    s = np.sqrt(np.maximum(np.diag(Q), 0.0))
    s_inv = np.where(s > EPSILON, 1.0 / np.where(s > EPSILON, s, 1.0), 0.0)

    source = a.T if transposed else a
    U = (source @ V) * s_inv

    return Matrix._wrap(U), Matrix._wrap(V), Vector._wrap(s)


def reconstruct(U: Matrix, S: Vector, V: Matrix) -> Matrix:
    """Return ``U @ diag(S) @ V.T``."""
    return U.matmul(Matrix.diagonal(S)).matmul(V.transpose())
