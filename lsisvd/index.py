"""Caller-side owner of an incrementally maintained LSI factorization.

The functions in :mod:`lsisvd.incremental_svd` are stateless: they take the
current ``(U, S)`` and return new factors.  :class:`LSIIndex` is the thin
stateful layer an application keeps around them.  It holds

* the current left singular vectors ``U`` and singular values ``S``,
* the raw term-space vector of every document added so far, and
* each document's LSI coordinates ``U.T @ raw``,

and keeps the coordinates consistent with ``U``: whenever an update rotates
the basis, all stored documents are re-projected with
:func:`~lsisvd.incremental_svd.batch_project`.

The index is not thread-safe; concurrent callers must serialize access.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .baselines import truncated_decompose
from .config import EngineConfig
from .errors import DimensionMismatch, InvalidArgument
from .incremental_svd import UpdateResult, batch_project, project, update_details
from .matrix import Matrix
from .metrics import orth_error, singular_value_spectrum
from .vector import COLUMN, Vector

logger = logging.getLogger(__name__)


class LSIIndex:
    """Incremental LSI index over dense term-space document vectors.

    Parameters
    ----------
    config : EngineConfig, optional
        Rank limit, residual threshold and solver settings.  Defaults to
        :class:`EngineConfig` defaults.

    Notes
    -----
    All documents must have the same term-space size ``m``, fixed by the
    first call to :meth:`build` or :meth:`add`.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config if config is not None else EngineConfig()
        self._U: Matrix | None = None
        self._S: Vector | None = None
        self._documents: list[Vector] = []
        self._lsi_vectors: list[Vector] = []

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def built(self) -> bool:
        return self._U is not None

    @property
    def rank(self) -> int:
        return 0 if self._U is None else self._U.cols

    @property
    def terms(self) -> int | None:
        return None if self._U is None else self._U.rows

    @property
    def u_matrix(self) -> Matrix | None:
        return None if self._U is None else self._U.copy()

    @property
    def singular_values(self) -> Vector | None:
        return None if self._S is None else self._S.copy()

    @property
    def documents(self) -> list[Vector]:
        return [doc.copy() for doc in self._documents]

    @property
    def lsi_vectors(self) -> list[Vector]:
        return [vec.copy() for vec in self._lsi_vectors]

    def __len__(self) -> int:
        return len(self._documents)

    # ------------------------------------------------------------------
    # Building and updating
    # ------------------------------------------------------------------
    def build(self, vectors: Sequence[Vector]) -> None:
        """Factor ``vectors`` from scratch, replacing any existing state.

        The term-document matrix has one column per vector.  At most
        ``min(config.max_rank, len(vectors))`` components are kept, sorted by
        descending singular value.
        """
        if not vectors:
            raise InvalidArgument("build requires at least one document")
        A = Matrix.from_columns(list(vectors))
        rank = min(self.config.max_rank, len(vectors))
        U, S = truncated_decompose(A, rank,
                                   self.config.max_sweeps,
                                   self.config.convergence_threshold)
        self._U = U
        self._S = S
        self._documents = [vec.col() for vec in vectors]
        self._lsi_vectors = batch_project(U, self._documents)
        logger.info("built LSI index: %d terms, %d documents, rank %d",
                    A.rows, len(vectors), U.cols)

    def add(self, vector: Vector) -> UpdateResult:
        """Add one document with Brand's incremental update.

        Returns
        -------
        result : UpdateResult
            The update outcome.  When the basis changed, every stored
            document (including the new one) was re-projected; otherwise the
            new document's coordinates are ``result.projection``.
        """
        if self._U is None:
            # Seed an empty basis so the first document grows it to rank 1
            self._U = Matrix(vector.size, 0)
            self._S = Vector(0)
        elif vector.size != self._U.rows:
            raise DimensionMismatch(
                f"document size ({vector.size}) must match index terms ({self._U.rows})")

        previous_rank = self.rank
        doc = vector.col()
        result = update_details(self._U, self._S, doc,
                                self.config.max_rank, self.config.epsilon)
        self._U = result.U
        self._S = result.S
        self._documents.append(doc)

        if result.grew:
            self._lsi_vectors = batch_project(self._U, self._documents)
            if result.truncated:
                logger.info("rank capped at %d after document %d",
                            self.rank, len(self._documents) - 1)
            elif self.rank != previous_rank:
                logger.info("rank grew %d -> %d after document %d",
                            previous_rank, self.rank, len(self._documents) - 1)
        else:
            self._lsi_vectors.append(result.projection)
            logger.debug("document %d lies in the current span (residual %.3g)",
                         len(self._documents) - 1, result.residual_norm)
        return result

    def extend(self, vectors: Sequence[Vector]) -> list[UpdateResult]:
        return [self.add(vec) for vec in vectors]

    def reproject(self) -> list[Vector]:
        """Recompute every document's LSI coordinates from the current ``U``."""
        if self._U is None:
            return []
        self._lsi_vectors = batch_project(self._U, self._documents)
        return self.lsi_vectors

    def project(self, vector: Vector) -> Vector:
        """LSI coordinates of a vector that is not added to the index."""
        if self._U is None:
            raise InvalidArgument("index has not been built")
        return project(self._U, vector)

    def rebuild(self) -> None:
        """Discard the incremental state and refactor all stored documents."""
        if not self._documents:
            raise InvalidArgument("index has no documents to rebuild")
        self.build(self._documents)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def spectrum(self) -> list[dict[str, float]] | None:
        if self._S is None:
            return None
        return singular_value_spectrum(self._S)

    def orthogonality(self) -> float:
        """``||I - U^T U||_F`` of the current basis (0 before building)."""
        if self._U is None:
            return 0.0
        return orth_error(self._U)

    def state(self) -> dict[str, object]:
        """Summary of the current factorization for logging."""
        return {
            'rank': self.rank,
            'terms': self.terms,
            'documents': len(self._documents),
            's': [] if self._S is None else self._S.to_list(),
            'orthogonality': self.orthogonality(),
        }


def column_vector(values: Sequence[float]) -> Vector:
    """Convenience constructor for a column-oriented document vector."""
    return Vector(list(values), orientation=COLUMN)
