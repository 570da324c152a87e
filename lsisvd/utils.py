"""Helpers shared by the benchmark and configuration code.

Seeding for reproducible synthetic corpora, wall-clock timing of build and
update phases, and reading/writing the YAML files used for engine settings
and benchmark results.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager

import numpy as np
import yaml

logger = logging.getLogger(__name__)


def set_seed(seed: int | None) -> np.random.Generator:
    """Return a generator for synthetic corpora and seed NumPy's global state.

    Parameters
    ----------
    seed : int or None
        Corpus seed.  ``None`` draws fresh OS entropy, so repeated runs
        produce different corpora.

    Returns
    -------
    rng : numpy.random.Generator
        Generator to pass to :func:`lsisvd.benchmark.synthetic_corpus`.
    """
    if seed is None:
        seed = np.random.SeedSequence().entropy
    np.random.seed(seed % 2**32)  # for legacy APIs
    return np.random.default_rng(seed)


@contextmanager
def timer(message: str | None = None, level: int = logging.INFO):
    """Time the enclosed block and optionally log the duration.

    Yields a one-element list whose item is set to the elapsed seconds when
    the block exits, even if it raised.

    Parameters
    ----------
    message : str, optional
        Label for the log record; nothing is logged without it.
    level : int, optional
        Logging level of the record.
    """
    elapsed = [0.0]
    t0 = time.perf_counter()
    try:
        yield elapsed
    finally:
        elapsed[0] = time.perf_counter() - t0
        if message:
            logger.log(level, "%s: %.3f s", message, elapsed[0])


def load_config(config_path: str) -> dict:
    """Read a YAML mapping such as an engine configuration file.

    An empty file yields an empty dict, so every setting keeps its default.
    """
    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    return data or {}


def save_results(path: str, results: dict) -> None:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(results, f)
