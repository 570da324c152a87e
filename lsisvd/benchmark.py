"""Benchmark incremental updates against full recomputation.

Run from the command line::

    python -m lsisvd.benchmark --terms 200 --documents 60 --max-rank 20

A synthetic term-document matrix with a few latent topics is generated.
The first ``--initial`` documents seed an :class:`~lsisvd.index.LSIIndex`,
the remaining ones are added one at a time with Brand's update, and the
result is compared with a full Jacobi rebuild of the whole corpus.
"""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

import numpy as np
from numpy.linalg import norm

from .baselines import full_rebuild
from .config import EngineConfig
from .errors import InvalidArgument
from .index import LSIIndex, column_vector
from .matrix import Matrix
from .utils import save_results, set_seed, timer

logger = logging.getLogger(__name__)


def synthetic_corpus(terms: int,
                     documents: int,
                     topics: int,
                     rng: np.random.Generator) -> np.ndarray:
    """Non-negative ``terms × documents`` matrix mixing a few topics."""
    topic_terms = rng.gamma(shape=0.3, scale=1.0, size=(terms, topics))
    weights = rng.dirichlet(np.ones(topics), size=documents).T  # (topics, documents)
    noise = 0.01 * rng.random((terms, documents))
    return topic_terms @ weights + noise


def subspace_error(A: np.ndarray, U: Matrix) -> float:
    """``||A - U U^T A||_F / ||A||_F``: how much of ``A`` the basis misses."""
    u = U.to_numpy()
    ref = norm(A, 'fro')
    if ref == 0.0:
        return 0.0
    return float(norm(A - u @ (u.T @ A), 'fro') / ref)


def run_benchmark(terms: int = 200,
                  documents: int = 60,
                  initial: int = 10,
                  topics: int = 5,
                  config: EngineConfig | None = None,
                  seed: int | None = 0) -> dict:
    """Compare the incremental and full-rebuild factorizations.

    Returns
    -------
    results : dict
        Runtimes (seconds), final ranks, subspace errors of both bases and
        the per-update ``ranks``/``leading_values`` history.
    """
    if not 0 < initial <= documents:
        raise InvalidArgument(f"initial must be in [1, {documents}], got {initial}")
    config = config if config is not None else EngineConfig()
    rng = set_seed(seed)
    A = synthetic_corpus(terms, documents, topics, rng)
    columns = [column_vector(A[:, j]) for j in range(documents)]

    index = LSIIndex(config)
    ranks: list[int] = []
    leading: list[float] = []
    with timer("incremental build") as incremental_time:
        index.build(columns[:initial])
        for vec in columns[initial:]:
            index.add(vec)
            ranks.append(index.rank)
            leading.append(max(index.singular_values.to_list(), default=0.0))

    with timer("full rebuild") as full_time:
        U_full, _ = full_rebuild(columns, config.max_rank,
                                 config.max_sweeps, config.convergence_threshold)

    results = {
        'terms': terms,
        'documents': documents,
        'initial': initial,
        'max_rank': config.max_rank,
        'incremental_seconds': incremental_time[0],
        'full_seconds': full_time[0],
        'incremental_rank': index.rank,
        'full_rank': U_full.cols,
        'incremental_error': subspace_error(A, index.u_matrix),
        'full_error': subspace_error(A, U_full),
        'incremental_orthogonality': index.orthogonality(),
        'ranks': ranks,
        'leading_values': leading,
    }
    logger.info("incremental: rank %d, error %.4g, %.3f s",
                results['incremental_rank'], results['incremental_error'],
                results['incremental_seconds'])
    logger.info("full rebuild: rank %d, error %.4g, %.3f s",
                results['full_rank'], results['full_error'], results['full_seconds'])
    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lsisvd-benchmark",
        description="Compare incremental SVD updates with a full Jacobi rebuild.")
    parser.add_argument("--terms", type=int, default=200, help="vocabulary size")
    parser.add_argument("--documents", type=int, default=60, help="number of documents")
    parser.add_argument("--initial", type=int, default=10,
                        help="documents used for the initial full build")
    parser.add_argument("--topics", type=int, default=5, help="latent topics in the corpus")
    parser.add_argument("--max-rank", type=int, default=None, help="maximum rank")
    parser.add_argument("--config", default=None, help="YAML engine configuration")
    parser.add_argument("--seed", type=int, default=0, help="random seed")
    parser.add_argument("--output", default=None, help="write results to this YAML file")
    parser.add_argument("--plot", default=None, help="save a rank history plot here")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = EngineConfig.from_yaml(args.config) if args.config else EngineConfig()
    if args.max_rank is not None:
        config.max_rank = args.max_rank
        config.validate()

    results = run_benchmark(args.terms, args.documents, args.initial, args.topics,
                            config=config, seed=args.seed)

    if args.output:
        save_results(args.output, results)
        logger.info("results written to %s", args.output)
    if args.plot and results['ranks']:
        from .plotting import plot_rank_history

        steps = np.arange(args.initial + 1, args.documents + 1)
        plot_rank_history(steps, results['ranks'], results['leading_values'],
                          outfile=args.plot)
        logger.info("plot written to %s", args.plot)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
