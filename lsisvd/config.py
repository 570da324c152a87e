"""Engine configuration.

Example YAML file::

    max_rank: 50
    epsilon: 1.0e-10
    max_sweeps: 20
    convergence_threshold: 0.001
    cutoff: 0.75
"""

from __future__ import annotations

import math
import numbers
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping

from .errors import InvalidArgument
from .jacobi import CONVERGENCE_THRESHOLD, MAX_SWEEPS
from .utils import load_config
from .vector import EPSILON


@dataclass
class EngineConfig:
    """Parameters of the incremental LSI engine.

    Attributes
    ----------
    max_rank : int
        Maximum number of components kept by incremental updates.
    epsilon : float
        Residual norm below which a new document adds no direction.
    max_sweeps : int
        Jacobi sweep limit used by full rebuilds.
    convergence_threshold : float
        Jacobi diagonal-change threshold used by full rebuilds.
    cutoff : float
        Fraction of dimensions kept by :func:`lsisvd.baselines.reduce_rank`.
    """

    max_rank: int = 100
    epsilon: float = EPSILON
    max_sweeps: int = MAX_SWEEPS
    convergence_threshold: float = CONVERGENCE_THRESHOLD
    cutoff: float = 0.75

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for name in ("max_rank", "max_sweeps"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
                raise InvalidArgument(f"{name} must be a positive integer, got {value!r}")
        for name in ("epsilon", "convergence_threshold", "cutoff"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real) or math.isnan(value):
                raise InvalidArgument(f"{name} must be a real number, got {value!r}")
        if self.convergence_threshold <= 0:
            raise InvalidArgument(
                f"convergence_threshold must be positive, got {self.convergence_threshold!r}")
        if not 0.0 < self.cutoff < 1.0:
            raise InvalidArgument(f"cutoff must be between 0 and 1 (exclusive), got {self.cutoff!r}")
        self.max_rank = int(self.max_rank)
        self.max_sweeps = int(self.max_sweeps)
        self.epsilon = float(self.epsilon)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> EngineConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise InvalidArgument(f"unknown configuration keys: {', '.join(unknown)}")
        return cls(**dict(values))

    @classmethod
    def from_yaml(cls, path: str) -> EngineConfig:
        return cls.from_mapping(load_config(path))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
