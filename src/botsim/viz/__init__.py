"""
Visualization utilities.

- Firing trace scatter (step vs. bot, colored by chip value)
- Output bin bar chart
"""

from botsim.viz.trace import (
    plot_firing_trace,
    plot_sink_values,
    save_figure,
)

__all__ = [
    "plot_firing_trace",
    "plot_sink_values",
    "save_figure",
]
