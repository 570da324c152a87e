"""Plotting utilities for incremental LSI runs."""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np


def plot_rank_history(steps: np.ndarray,
                      ranks: list[int],
                      leading_values: list[float],
                      title: str = "Rank and Leading Singular Value",
                      outfile: str | None = None) -> None:
    """Plot the retained rank and the largest singular value per update.

    Parameters
    ----------
    steps : ndarray of shape (T,)
        Update indices (documents added).
    ranks : list of int
        Rank after each update.
    leading_values : list of float
        Largest singular value after each update.
    title : str, optional
        Title of the plot.
    outfile : str, optional
        If provided, the figure is saved to this path instead of shown.
    """
    fig, ax1 = plt.subplots(figsize=(10, 5))
    ax1.plot(steps, leading_values, label="max singular value")
    ax1.set_xlabel("Documents added")
    ax1.set_ylabel("Singular value")
    ax1.grid(True, which='both', linestyle='--', linewidth=0.5)

    # Rank on the right axis
    ax2 = ax1.twinx()
    ax2.step(steps, ranks, where='post', linestyle=':', linewidth=1.0, color='tab:orange',
             label="rank")
    ax2.set_ylabel("Rank")

    lines, labels = [], []
    for ax in [ax1, ax2]:
        line, label = ax.get_legend_handles_labels()
        lines += line
        labels += label
    ax1.legend(lines, labels, loc='best')

    plt.title(title)
    plt.tight_layout()
    if outfile:
        plt.savefig(outfile)
        plt.close(fig)
    else:
        plt.show()


def plot_spectrum(spectrum: list[dict[str, float]],
                  title: str = "Singular Value Spectrum",
                  outfile: str | None = None) -> None:
    """Bar chart of singular values with their cumulative share.

    Parameters
    ----------
    spectrum : list of dict
        Output of :func:`lsisvd.metrics.singular_value_spectrum`.
    title : str, optional
        Title of the plot.
    outfile : str, optional
        If provided, save the figure instead of displaying it.
    """
    dims = [entry['dimension'] for entry in spectrum]
    values = [entry['value'] for entry in spectrum]
    cumulative = [entry['cumulative_percentage'] for entry in spectrum]

    fig, ax1 = plt.subplots(figsize=(6, 5))
    ax1.bar(dims, values)
    ax1.set_xlabel("Dimension")
    ax1.set_ylabel("Singular value")

    ax2 = ax1.twinx()
    ax2.plot(dims, cumulative, marker='o', color='tab:red')
    ax2.set_ylim(0.0, 1.05)
    ax2.set_ylabel("Cumulative share")

    ax1.set_title(title)
    ax1.grid(True, linestyle='--', linewidth=0.5)
    plt.tight_layout()
    if outfile:
        plt.savefig(outfile)
        plt.close(fig)
    else:
        plt.show()
