"""Full (non-incremental) low-rank factorizations.

These routines recompute a Jacobi SVD of the whole term-document matrix.
They provide

* the initial build that seeds incremental updates
  (:func:`truncated_decompose`, :func:`full_rebuild`), and
* the classic LSI rank reduction with a fractional cutoff
  (:func:`reduce_rank`).

Because they factor the entire corpus they are much more expensive than
:func:`lsisvd.incremental_svd.incremental_update`, and serve as the oracle
when comparing the two.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from .errors import InvalidArgument
from .jacobi import CONVERGENCE_THRESHOLD, MAX_SWEEPS, decompose
from .matrix import Matrix
from .vector import EPSILON, Vector

logger = logging.getLogger(__name__)


def left_factors(A: Matrix,
                 max_sweeps: int = MAX_SWEEPS,
                 convergence_threshold: float = CONVERGENCE_THRESHOLD) -> tuple[Matrix, Vector]:
    """Term-space singular vectors and singular values of ``A``.

    On the wide branch of :func:`~lsisvd.jacobi.decompose` (fewer terms than
    documents) the term-space vectors are the accumulated rotations ``V``
    rather than ``U``.
    """
    U, V, S = decompose(A, max_sweeps, convergence_threshold)
    if A.rows >= A.cols:
        return U, S
    return V, S


def truncated_decompose(A: Matrix,
                        rank: int,
                        max_sweeps: int = MAX_SWEEPS,
                        convergence_threshold: float = CONVERGENCE_THRESHOLD) -> tuple[Matrix, Vector]:
    """Thin factorization of ``A`` with at most ``rank`` components.

    Parameters
    ----------
    A : Matrix of shape (m, n)
        Term-document matrix (one column per document).
    rank : int
        Maximum number of components to keep.

    Returns
    -------
    U : Matrix of shape (m, r)
        Orthonormal term-space basis, ``r <= min(rank, m, n)``.
    S : Vector of shape (r,)
        Singular values in descending order.  Values at or below
        ``EPSILON`` and their columns are dropped.
    """
    if rank < 1:
        raise InvalidArgument(f"rank must be at least 1, got {rank}")
    left, S = left_factors(A, max_sweeps, convergence_threshold)
    values = S.to_numpy()
    order = [int(i) for i in np.argsort(-values, kind="stable") if values[i] > EPSILON]
    order = order[:rank]
    logger.debug("truncated %dx%d decomposition to rank %d", A.rows, A.cols, len(order))
    return left.select_columns(order), Vector._wrap(values[order])


def full_rebuild(columns: Sequence[Vector],
                 max_rank: int,
                 max_sweeps: int = MAX_SWEEPS,
                 convergence_threshold: float = CONVERGENCE_THRESHOLD) -> tuple[Matrix, Vector]:
    """Factor the matrix whose columns are ``columns`` from scratch."""
    if not columns:
        raise InvalidArgument("full rebuild requires at least one document")
    return truncated_decompose(Matrix.from_columns(columns), max_rank,
                               max_sweeps, convergence_threshold)


def validate_cutoff(cutoff: float) -> float:
    """Check that ``cutoff`` lies strictly between 0 and 1."""
    if not 0.0 < cutoff < 1.0:
        raise InvalidArgument(f"cutoff must be between 0 and 1 (exclusive), got {cutoff}")
    return float(cutoff)


def reduce_rank(A: Matrix, cutoff: float = 0.75) -> tuple[Matrix, Vector]:
    """Rebuild ``A`` keeping only its largest singular values.

    The singular values are sorted in descending order and the value at
    position ``max(round(size * cutoff) - 1, 0)`` becomes the threshold;
    every singular value below it is zeroed before reconstructing.

    Parameters
    ----------
    A : Matrix of shape (m, n)
        Term-document matrix.
    cutoff : float, optional
        Fraction of dimensions to keep, strictly between 0 and 1.

    Returns
    -------
    reduced : Matrix of shape (m, n)
        Reduced-rank reconstruction of ``A``.
    singular_values : Vector
        All singular values of ``A`` in descending order.
    """
    validate_cutoff(cutoff)
    U, V, S = decompose(A)
    values = S.to_numpy()
    descending = np.sort(values)[::-1]

    # round half up
    index = max(int(math.floor(values.size * cutoff + 0.5)) - 1, 0)
    threshold = descending[index]
    kept = np.where(values < threshold, 0.0, values)

    reduced = U.matmul(Matrix.diagonal(kept)).matmul(V.transpose())
    # The wide branch reconstructs A.T
    if reduced.rows != A.rows:
        reduced = reduced.transpose()
    return reduced, Vector._wrap(descending.copy())
