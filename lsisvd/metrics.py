"""Metric functions for evaluating low-rank factorizations."""

from __future__ import annotations

import numpy as np
from numpy.linalg import norm

from .matrix import Matrix
from .vector import Vector


def relative_error(A: Matrix, U: Matrix, S: Vector, V: Matrix) -> float:
    """Compute the relative Frobenius error of a factorization.

    Parameters
    ----------
    A : Matrix of shape (m, n)
        Reference matrix.
    U : Matrix of shape (m, r)
        Left singular vectors.
    S : Vector of shape (r,)
        Singular values.
    V : Matrix of shape (n, r)
        Right singular vectors.

    Returns
    -------
    rel_err : float
        ``||A - U diag(S) V^T||_F / max(1, ||A||_F)``.
    """
    a = A.to_numpy()
    approx = (U.to_numpy() * S.to_numpy()) @ V.to_numpy().T
    return float(norm(a - approx, 'fro') / max(1.0, norm(a, 'fro')))


def reconstruction_error(A: Matrix, U: Matrix, S: Vector, V: Matrix) -> float:
    """``||A - U diag(S) V^T||_F / ||A||_F``, or ``0.0`` for a zero ``A``."""
    a = A.to_numpy()
    approx = (U.to_numpy() * S.to_numpy()) @ V.to_numpy().T
    ref = norm(a, 'fro')
    if ref == 0.0:
        return 0.0
    return float(norm(a - approx, 'fro') / ref)


def orth_error(U: Matrix) -> float:
    """Compute the orthogonality error ``||I - U^T U||_F``.

    Parameters
    ----------
    U : Matrix of shape (m, r)
        Left singular vectors.

    Returns
    -------
    error : float
        Frobenius norm of the deviation of ``U`` from orthonormality.
    """
    u = U.to_numpy()
    r = u.shape[1]
    return float(norm(np.eye(r) - u.T @ u, 'fro'))


def singular_value_spectrum(S: Vector) -> list[dict[str, float]] | None:
    """Describe how much of the total each singular value captures.

    Entries are listed by descending value; each holds ``dimension`` (rank
    position), ``value``, ``percentage`` and ``cumulative_percentage``, the
    last two as fractions of the sum of all singular values.  Useful for
    picking a cutoff: the first entry whose cumulative share reaches e.g.
    ``0.9`` gives the number of dimensions needed.

    Returns ``None`` when ``S`` is empty or sums to zero.
    """
    values = sorted(S.to_list(), reverse=True)
    total = float(sum(values))
    if not values or total == 0.0:
        return None

    spectrum = []
    cumulative = 0.0
    for i, value in enumerate(values):
        cumulative += value
        spectrum.append({
            'dimension': i,
            'value': value,
            'percentage': value / total,
            'cumulative_percentage': cumulative / total,
        })
    return spectrum
