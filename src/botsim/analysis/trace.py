"""
Firing-trace statistics.

A trace is the ordered list of Firing records a factory keeps when
`record_trace` is on. These helpers turn it into arrays for analysis
and check the per-firing guarantees of the engine.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from botsim.core.factory import Firing


@dataclass
class TraceSummary:
    """
    Column view of a firing trace.

    Unit IDs and chip values are unbounded, so those columns keep Python
    ints (object dtype). Steps and depths are counters and fit int64.
    """

    steps: np.ndarray
    units: np.ndarray
    lows: np.ndarray
    highs: np.ndarray
    depths: np.ndarray

    @property
    def n_firings(self) -> int:
        return len(self.steps)

    @property
    def max_depth(self) -> int:
        """Longest cascade seen (0 if nothing cascaded)."""
        return int(self.depths.max()) if self.n_firings else 0

    def firing_counts(self) -> dict[int, int]:
        """How many times each unit fired."""
        ids, counts = np.unique(self.units, return_counts=True)
        return {int(u): int(c) for u, c in zip(ids, counts)}

    def units_fired_more_than_once(self) -> list[int]:
        return sorted(u for u, c in self.firing_counts().items() if c > 1)


def summarize_trace(firings: Sequence[Firing]) -> TraceSummary:
    """Convert a list of Firing records into a TraceSummary."""
    def column(name: str, dtype) -> np.ndarray:
        return np.array([getattr(f, name) for f in firings], dtype=dtype)

    return TraceSummary(
        steps=column("step", np.int64),
        units=column("unit", object),
        lows=column("low", object),
        highs=column("high", object),
        depths=column("depth", np.int64),
    )


def check_trace(firings: Sequence[Firing]) -> None:
    """
    Verify per-firing guarantees.

    - Steps are numbered 0, 1, 2, ... in order
    - The chip sent low is never larger than the chip sent high

    Raises:
        ValueError: On the first violation found
    """
    for expected_step, firing in enumerate(firings):
        if firing.step != expected_step:
            raise ValueError(
                f"Firing steps not contiguous: expected {expected_step}, got {firing.step}"
            )
        if firing.low > firing.high:
            raise ValueError(
                f"bot {firing.unit} sent {firing.low} low and {firing.high} high at step {firing.step}"
            )
