"""Incremental SVD engine for latent semantic indexing (lsisvd).

This package maintains a low-rank factorization ``A ≈ U diag(S) V^T`` of a
growing term-document matrix.  The main components include:

* :mod:`vector` and :mod:`matrix` – dense value types with copy-on-produce
  semantics;
* :mod:`jacobi` – the one-sided Jacobi SVD solver;
* :mod:`incremental_svd` – Brand's rank-adaptive update of ``(U, S)`` with a
  new document column, plus batch projection of documents through ``U^T``;
* :mod:`baselines` – full (non-incremental) factorizations and LSI rank
  reduction;
* :mod:`index` – :class:`LSIIndex`, a caller-side owner of the factors and
  of the stored document vectors;
* :mod:`serialization` – versioned encode/decode of vectors and matrices;
* :mod:`metrics`, :mod:`plotting`, :mod:`benchmark` – evaluation helpers;
* :mod:`config` and :mod:`utils` – configuration and miscellaneous helpers.

The top-level API re-exports the types and the stateless engine functions.

"""

from .config import EngineConfig  # noqa: F401
from .errors import (  # noqa: F401
    DimensionMismatch,
    IndexOutOfBounds,
    InvalidArgument,
    LinalgError,
    SerializationError,
)
from .incremental_svd import (  # noqa: F401
    UpdateResult,
    batch_project,
    incremental_update,
    project,
    update_details,
)
from .index import LSIIndex  # noqa: F401
from .jacobi import decompose  # noqa: F401
from .matrix import Matrix  # noqa: F401
from .serialization import decode, encode  # noqa: F401
from .vector import COLUMN, EPSILON, ROW, Vector  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "COLUMN",
    "DimensionMismatch",
    "EPSILON",
    "EngineConfig",
    "IndexOutOfBounds",
    "InvalidArgument",
    "LSIIndex",
    "LinalgError",
    "Matrix",
    "ROW",
    "SerializationError",
    "UpdateResult",
    "Vector",
    "batch_project",
    "decode",
    "decompose",
    "encode",
    "incremental_update",
    "project",
    "update_details",
]
