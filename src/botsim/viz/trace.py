"""
Plots of factory runs.

Shows when each bot fired and which chips it compared, and what ended up
in the output bins.
"""

from __future__ import annotations
from pathlib import Path
from typing import Mapping, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from botsim.analysis.trace import summarize_trace
from botsim.core.factory import Firing


def plot_firing_trace(
    firings: Sequence[Firing],
    title: str = "Firing Trace",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 6),
    cmap: str = "viridis",
    highlight_unit: int | None = None,
) -> tuple[Figure, Axes]:
    """
    Scatter of firing step against bot id.

    Each firing is drawn twice: a lower marker for the low chip and an
    upper marker for the high chip, both colored by chip value.

    Args:
        firings: Firing trace from a factory
        title: Plot title
        ax: Existing axes (creates new if None)
        cmap: Colormap for chip values
        highlight_unit: Optional bot to ring (e.g. the observed unit)

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    summary = summarize_trace(firings)

    if summary.n_firings > 0:
        # Plot coordinates only; unbounded ints become floats here
        units = summary.units.astype(np.float64)
        lows = summary.lows.astype(np.float64)
        highs = summary.highs.astype(np.float64)
        vmin = min(lows.min(), highs.min())
        vmax = max(lows.max(), highs.max())

        ax.scatter(
            summary.steps, units,
            c=lows, cmap=cmap, vmin=vmin, vmax=vmax,
            marker="v", s=40, label="low chip",
        )
        sc = ax.scatter(
            summary.steps, units,
            c=highs, cmap=cmap, vmin=vmin, vmax=vmax,
            marker="^", s=40, label="high chip",
        )
        plt.colorbar(sc, ax=ax, label="chip value")

        if highlight_unit is not None:
            mask = np.array([u == highlight_unit for u in summary.units], dtype=bool)
            if np.any(mask):
                ax.scatter(
                    summary.steps[mask], units[mask],
                    facecolors="none", edgecolors="red", s=160, linewidths=1.5,
                    label=f"bot {highlight_unit}",
                )

        ax.legend(loc="upper left")

    ax.set_title(title)
    ax.set_xlabel("firing step")
    ax.set_ylabel("bot")

    return fig, ax


def plot_sink_values(
    sinks: Mapping[int, int],
    title: str = "Output Bins",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 4),
    color: str = "steelblue",
) -> tuple[Figure, Axes]:
    """Bar chart of the chip value held in each output bin."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    order = sorted(sinks)
    ids = np.array(order, dtype=object).astype(np.float64)
    values = np.array([sinks[i] for i in order], dtype=object).astype(np.float64)
    ax.bar(ids, values, color=color)

    ax.set_title(title)
    ax.set_xlabel("output")
    ax.set_ylabel("chip value")

    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
